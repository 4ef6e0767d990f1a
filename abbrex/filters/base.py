from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Optional

if TYPE_CHECKING:
    from ..nodes import AbbreviationNode, TemplateToken

__all__ = ["Filter"]


class Filter:
    """
    Базовый фильтр раскрытия.

    Фильтр может заменить узел до генерации (`filter_node`) и преобразовать
    строку сгенерированного шаблона (`filter_text`). По умолчанию ничего не делает.
    """
    #: Суффикс фильтра в записи аббревиатуры (`|s`, `|e`, ...)
    suffix: ClassVar[str] = ""
    #: Фильтр однострочного вывода
    single_line: ClassVar[bool] = False

    def filter_node(self, node: AbbreviationNode) -> AbbreviationNode:
        return node

    def filter_text(self, text: str, token: Optional[TemplateToken]) -> str:
        return text

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
