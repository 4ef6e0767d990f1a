"""
Модель редактируемого шаблона.

Шаблон — это строка с плейсхолдерами `$name$` (сегментами) и упорядоченный
список объявлений переменных. Литеральный символ `$` записывается как `$$`.
Все операции возвращают новый шаблон, исходный не меняется.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from functools import cached_property
from typing import Iterable, List, Optional, Tuple

END = "END"
SELECTION = "SELECTION"
ATTRS = "ATTRS"

# Служебные имена сегментов: не объявляются как переменные
INTERNAL_VARS = frozenset({END, SELECTION})

_SEGMENT_RE = re.compile(r"\$\$|\$([A-Za-z_][A-Za-z_0-9]*)\$")


@dataclass(frozen=True)
class Variable:
    """Объявление переменной шаблона."""
    name: str
    expression: str = ""
    default_value: str = ""
    always_stop_at: bool = True


@dataclass(frozen=True)
class Segment:
    """Вхождение переменной: имя и смещение в литеральном тексте шаблона."""
    name: str
    offset: int


def parse_segments(string: str) -> Tuple[str, Tuple[Segment, ...]]:
    """
    Разбирает строку шаблона на литеральный текст и список сегментов.

    Returns:
        (текст без плейсхолдеров, сегменты со смещениями в этом тексте)
    """
    parts: List[str] = []
    segments: List[Segment] = []
    length = 0
    pos = 0
    for m in _SEGMENT_RE.finditer(string):
        chunk = string[pos:m.start()]
        parts.append(chunk)
        length += len(chunk)
        if m.group(1) is None:
            parts.append("$")
            length += 1
        else:
            segments.append(Segment(m.group(1), length))
        pos = m.end()
    parts.append(string[pos:])
    return "".join(parts), tuple(segments)


def escape_text(text: str) -> str:
    """Экранирует литеральный текст для вставки в строку шаблона."""
    return text.replace("$", "$$")


@dataclass(frozen=True)
class Template:
    """
    Неизменяемый шаблон: строка с сегментами плюс объявления переменных.
    """
    string: str = ""
    variables: Tuple[Variable, ...] = field(default_factory=tuple)
    to_reformat: bool = False

    @cached_property
    def _parsed(self) -> Tuple[str, Tuple[Segment, ...]]:
        return parse_segments(self.string)

    @property
    def text(self) -> str:
        """Литеральный текст без плейсхолдеров."""
        return self._parsed[0]

    @property
    def segments(self) -> Tuple[Segment, ...]:
        return self._parsed[1]

    @property
    def segment_names(self) -> List[str]:
        return [s.name for s in self.segments]

    @property
    def variable_names(self) -> List[str]:
        return [v.name for v in self.variables]

    def find_variable(self, name: str) -> Optional[Variable]:
        for var in self.variables:
            if var.name == name:
                return var
        return None

    def with_string(self, string: str) -> Template:
        return replace(self, string=string)

    def with_variables(self, variables: Iterable[Variable]) -> Template:
        return replace(self, variables=tuple(variables))

    def with_reformat(self, to_reformat: bool) -> Template:
        return replace(self, to_reformat=to_reformat)

    def add_variable(self, name: str, expression: str = "", default_value: str = "",
                     always_stop_at: bool = True) -> Template:
        return self.with_variables(
            self.variables + (Variable(name, expression, default_value, always_stop_at),)
        )

    def remove_variable_at(self, index: int) -> Template:
        variables = list(self.variables)
        del variables[index]
        return self.with_variables(variables)


def remove_variables_without_segment(template: Template) -> Template:
    """
    Удаляет переменные, на которые не ссылается ни один сегмент шаблона.

    Имена сегментов расходуются по одному на объявление, поэтому повторные
    объявления одной и той же переменной тоже отбрасываются (кроме последнего).
    """
    segments = set(template.segment_names)
    kept: List[Variable] = []
    for var in reversed(template.variables):
        if var.name in segments:
            segments.discard(var.name)
            kept.append(var)
    kept.reverse()
    if len(kept) == len(template.variables):
        return template
    return template.with_variables(kept)


__all__ = [
    "END",
    "SELECTION",
    "ATTRS",
    "INTERNAL_VARS",
    "Variable",
    "Segment",
    "Template",
    "parse_segments",
    "escape_text",
    "remove_variables_without_segment",
]
