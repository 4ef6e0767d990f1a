"""
Итоговый документ раскрытия.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .template.model import END, INTERNAL_VARS, Template, Variable


@dataclass(frozen=True)
class DocumentSegment:
    """Редактируемая область документа: имя переменной и диапазон [start, end)."""
    name: str
    start: int
    end: int


@dataclass(frozen=True)
class Document:
    """
    Результат раскрытия дерева.

    Attributes:
        text: Текст, в котором переменные заменены значениями по умолчанию
        segments: Редактируемые области в порядке следования
        end_offset: Позиция стоп-точки END (None, если её нет)
        variables: Объявленные переменные
        to_reformat: Нужно ли переформатировать вставленный текст
        content_end: Позиция, где перестало расти содержимое корня (диагностика)
        template: Исходный шаблон с плейсхолдерами
    """
    text: str
    segments: Tuple[DocumentSegment, ...] = field(default_factory=tuple)
    end_offset: Optional[int] = None
    variables: Tuple[Variable, ...] = field(default_factory=tuple)
    to_reformat: bool = False
    content_end: Optional[int] = None
    template: Template = field(default_factory=Template)

    @staticmethod
    def from_template(template: Template, content_end: Optional[int] = None) -> Document:
        """Подставляет значения по умолчанию и вычисляет диапазоны сегментов."""
        defaults: Dict[str, str] = {v.name: v.default_value for v in template.variables}
        literal = template.text
        parts: List[str] = []
        segments: List[DocumentSegment] = []
        end_offset: Optional[int] = None
        length = 0
        pos = 0
        for segment in template.segments:
            chunk = literal[pos:segment.offset]
            parts.append(chunk)
            length += len(chunk)
            pos = segment.offset
            if segment.name in INTERNAL_VARS:
                if segment.name == END and end_offset is None:
                    end_offset = length
                continue
            value = defaults.get(segment.name, "")
            parts.append(value)
            segments.append(DocumentSegment(segment.name, length, length + len(value)))
            length += len(value)
        parts.append(literal[pos:])
        return Document(
            text="".join(parts),
            segments=tuple(segments),
            end_offset=end_offset,
            variables=template.variables,
            to_reformat=template.to_reformat,
            content_end=content_end,
            template=template,
        )

    def segment_names(self) -> List[str]:
        return [s.name for s in self.segments]


__all__ = ["Document", "DocumentSegment"]
