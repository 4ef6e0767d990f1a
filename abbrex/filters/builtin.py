"""
Встроенные фильтры раскрытия.
"""

from __future__ import annotations

import re
from typing import Optional

from ..nodes import AbbreviationNode, MarkupToken, TemplateToken
from .base import Filter

__all__ = ["SingleLineFilter", "EscapeFilter", "TrimFilter", "CommentFilter"]

_LINE_BREAK_RE = re.compile(r"\s*\n\s*")
_LIST_MARKER_RE = re.compile(r"^[\s\u00a0]?[\d#\-*•]+\.?\s*", re.MULTILINE)


class SingleLineFilter(Filter):
    """Склеивает результат в одну строку и отключает переформатирование."""
    suffix = "s"
    single_line = True

    def filter_text(self, text: str, token: Optional[TemplateToken]) -> str:
        return _LINE_BREAK_RE.sub("", text)


class EscapeFilter(Filter):
    """Экранирует `&`, `<` и `>` в сгенерированном тексте."""
    suffix = "e"

    def filter_text(self, text: str, token: Optional[TemplateToken]) -> str:
        return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


class TrimFilter(Filter):
    """
    Убирает маркеры списков (`1.`, `*`, `-`, `#`, `•`) из окружаемого текста узла.

    Раскрыватель применяет фильтр к каждому узлу поддерева, поэтому текст
    каждого узла обрезается один раз. Исходное дерево не меняется.
    """
    suffix = "t"

    def filter_node(self, node: AbbreviationNode) -> AbbreviationNode:
        if node.surrounded_text is None:
            return node
        return node.with_surrounded_text(_LIST_MARKER_RE.sub("", node.surrounded_text))


class CommentFilter(Filter):
    """Добавляет комментарий `<!-- /#id.class -->` после тегов с id или class."""
    suffix = "c"

    def filter_text(self, text: str, token: Optional[TemplateToken]) -> str:
        if not isinstance(token, MarkupToken):
            return text
        tag = token.scratch_tag
        if tag is None:
            return text

        def _value(name: str) -> str:
            raw = token.attributes.get(name)
            return raw if raw is not None else (tag.get_value(name) or "")

        id_value = _value("id")
        class_value = _value("class")
        if not id_value and not class_value:
            return text
        comment = "\n<!-- /"
        if id_value:
            comment += f"#{id_value}"
        if class_value:
            comment += f".{class_value}"
        return f"{text}{comment} -->"
