"""
Построитель шаблонов.

Накапливает фрагменты шаблонов в одном тексте, отслеживая смещения вхождений
переменных и маркеров при каждой вставке. Используется раскрывателем дерева
аббревиатур для слияния независимо сгенерированных подшаблонов.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional, Set

from .model import END, INTERNAL_VARS, Template, Variable, escape_text

logger = logging.getLogger(__name__)


@dataclass
class _VarOccurrence:
    name: str
    offset: int


class Marker:
    """
    Точка в тексте построителя, переживающая последующие вставки.

    Вставка в позицию маркера или левее сдвигает его конец вправо.
    """

    def __init__(self, start: int, end: int):
        self._start = start
        self._end = end

    @property
    def start_offset(self) -> int:
        return self._start

    @property
    def end_offset(self) -> int:
        return self._end

    def _on_insert(self, offset: int, length: int) -> None:
        if offset < self._start:
            self._start += length
            self._end += length
        elif offset <= self._end:
            self._end += length

    def __repr__(self) -> str:
        return f"Marker({self._start}, {self._end})"


class TemplateBuilder:
    """
    Построитель итогового шаблона со смещениями сегментов.

    Args:
        segments_limit: Максимальное число объявленных переменных;
            отрицательное значение снимает ограничение.
    """

    def __init__(self, segments_limit: int = -1):
        self._text: List[str] = []
        self._cached_text: Optional[str] = ""
        self._occurrences: List[_VarOccurrence] = []
        self._variables: List[Variable] = []
        self._declared: Set[str] = set()
        self._markers: List[Marker] = []
        self._is_to_reformat = False
        self._segments_limit = segments_limit
        self._limit_warned = False

    # ------------------------------------------------------------ #
    @property
    def text(self) -> str:
        if self._cached_text is None:
            self._cached_text = "".join(self._text)
            self._text = [self._cached_text]
        return self._cached_text

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def is_to_reformat(self) -> bool:
        return self._is_to_reformat

    def set_is_to_reformat(self, value: bool) -> None:
        self._is_to_reformat = value

    def create_marker(self, offset: int) -> Marker:
        marker = Marker(offset, offset)
        self._markers.append(marker)
        return marker

    # ------------------------------------------------------------ #
    def insert_text(self, offset: int, text: str, disable_end_variable: bool = False) -> None:
        """
        Вставляет литеральный текст в позицию `offset`.

        Вхождения правее `offset` сдвигаются. Вхождения ровно в `offset`
        тоже уезжают за вставленный текст, если не задан `disable_end_variable`;
        в этом случае стоп-точка END в этой позиции снимается.
        """
        if not 0 <= offset <= self.length:
            raise ValueError(f"Offset {offset} is out of range 0..{self.length}")
        if disable_end_variable:
            self._remove_end_at(offset)
        delta = len(text)
        for occ in self._occurrences:
            if occ.offset > offset or (not disable_end_variable and occ.offset == offset):
                occ.offset += delta
        current = self.text
        self._text = [current[:offset], text, current[offset:]]
        self._cached_text = None
        for marker in self._markers:
            marker._on_insert(offset, delta)

    def insert_template(self, offset: int, template: Template,
                        predefined_values: Optional[Mapping[str, str]] = None) -> int:
        """
        Вставляет шаблон в позицию `offset`.

        Сегменты с предопределёнными значениями превращаются в литеральный текст.
        Стоп-точка END родителя в позиции вставки снимается: её место занимает
        вставляемый шаблон.

        Returns:
            Смещение END вставленного шаблона или конец вставленного текста.
        """
        self._is_to_reformat = self.length > 0 or template.to_reformat
        self._remove_end_at(offset)

        skipped = self._declare_variables(template, predefined_values)

        text = template.text
        # Сегменты вставляются после текста, поэтому вставка идёт без сдвига
        # вхождений в позиции offset: они остаются левее нового фрагмента.
        self._insert_raw(offset, text)

        end_offset = -1
        shift = 0
        for segment in template.segments:
            pos = offset + segment.offset + shift
            if predefined_values is not None and segment.name in predefined_values:
                value = predefined_values[segment.name]
                self._insert_raw(pos, value)
                shift += len(value)
                continue
            if segment.name == END:
                end_offset = pos
            elif segment.name in skipped:
                continue
            self._occurrences.append(_VarOccurrence(segment.name, pos))

        if end_offset < 0:
            return offset + len(text) + shift
        return end_offset

    def build(self) -> Template:
        """Собирает итоговый шаблон: текст с плейсхолдерами и объявления переменных."""
        text = self.text
        parts: List[str] = []
        pos = 0
        for occ in sorted(self._occurrences, key=lambda o: o.offset):
            parts.append(escape_text(text[pos:occ.offset]))
            parts.append(f"${occ.name}$")
            pos = occ.offset
        parts.append(escape_text(text[pos:]))
        return Template(
            string="".join(parts),
            variables=tuple(self._variables),
            to_reformat=self._is_to_reformat,
        )

    # ------------------------------------------------------------ #
    # INNER HELPERS
    # ------------------------------------------------------------ #
    def _insert_raw(self, offset: int, text: str) -> None:
        """Вставка, при которой вхождения ровно в `offset` остаются левее."""
        if not text:
            return
        delta = len(text)
        for occ in self._occurrences:
            if occ.offset > offset:
                occ.offset += delta
        current = self.text
        self._text = [current[:offset], text, current[offset:]]
        self._cached_text = None
        for marker in self._markers:
            marker._on_insert(offset, delta)

    def _remove_end_at(self, offset: int) -> None:
        self._occurrences = [
            occ for occ in self._occurrences
            if not (occ.name == END and occ.offset == offset)
        ]

    def _declare_variables(self, template: Template,
                           predefined_values: Optional[Mapping[str, str]]) -> Set[str]:
        """
        Объявляет переменные шаблона в построителе.

        Returns:
            Имена переменных, не объявленных из-за лимита сегментов.
        """
        skipped: Set[str] = set()
        for var in template.variables:
            if var.name in INTERNAL_VARS or var.name in self._declared:
                continue
            if predefined_values is not None and var.name in predefined_values:
                continue
            if 0 <= self._segments_limit <= len(self._variables):
                if not self._limit_warned:
                    self._limit_warned = True
                    logger.warning(
                        "Template was expanded partially: segments limit %d reached",
                        self._segments_limit,
                    )
                skipped.add(var.name)
                continue
            self._variables.append(var)
            self._declared.add(var.name)
        return skipped


__all__ = ["Marker", "TemplateBuilder"]
