"""
Контекст раскрытия: где и в каком стиле будет вставлен результат.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Protocol, runtime_checkable

from .markup.dialect import MarkupDialect


@runtime_checkable
class CodeStyleProvider(Protocol):
    """Источник настроек отступов для типа файла."""

    def uses_tabs(self, file_type: str) -> bool: ...

    def tab_size(self, file_type: str) -> int: ...


class _DefaultCodeStyle:
    def uses_tabs(self, file_type: str) -> bool:
        return False

    def tab_size(self, file_type: str) -> int:
        return 4


@dataclass(frozen=True)
class ExpansionContext:
    """
    Параметры раскрытия.

    Attributes:
        editor_is_single_line_host: Документ-приёмник принимает только одну строку
        in_injected_fragment: Раскрытие идёт внутри внедрённого фрагмента
        dialect: Диалект разметки
        code_style: Настройки отступов
        file_type: Тип файла для выбора настроек отступов
        short_boolean_notation: Краткая запись булевых атрибутов
        block_tags: Переопределение набора блочных тегов диалекта
    """
    editor_is_single_line_host: bool = False
    in_injected_fragment: bool = False
    dialect: MarkupDialect = MarkupDialect.HTML
    code_style: CodeStyleProvider = field(default_factory=_DefaultCodeStyle)
    file_type: str = "html"
    short_boolean_notation: bool = True
    block_tags: Optional[FrozenSet[str]] = None

    def indent(self) -> str:
        """Строка одного уровня отступа."""
        if self.editor_is_single_line_host or self.in_injected_fragment:
            return ""
        if self.code_style.uses_tabs(self.file_type):
            return "\t"
        return " " * self.code_style.tab_size(self.file_type)


__all__ = ["CodeStyleProvider", "ExpansionContext"]
