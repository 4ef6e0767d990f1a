"""
Markup dialects: block-level tag names and boolean attribute knowledge.
"""

from __future__ import annotations

import enum
from typing import FrozenSet, Mapping

# Теги, вызывающие перенос строки в отформатированном выводе
HTML_BLOCK_TAGS: FrozenSet[str] = frozenset({
    "address", "article", "aside", "blockquote", "body", "canvas", "caption",
    "center", "col", "colgroup", "dd", "details", "dialog", "dir", "div", "dl",
    "dt", "fieldset", "figcaption", "figure", "footer", "form", "frame",
    "frameset", "h1", "h2", "h3", "h4", "h5", "h6", "head", "header", "hgroup",
    "hr", "html", "isindex", "li", "main", "map", "menu", "nav", "noframes",
    "noscript", "ol", "optgroup", "option", "p", "pre", "section", "summary",
    "table", "tbody", "td", "tfoot", "th", "thead", "title", "tr", "ul",
})

# Булевы атрибуты, допустимые на любом элементе
HTML_GLOBAL_BOOLEAN_ATTRIBUTES: FrozenSet[str] = frozenset({
    "autofocus", "hidden", "inert", "itemscope",
})

# Булевы атрибуты по элементам
HTML_ELEMENT_BOOLEAN_ATTRIBUTES: Mapping[str, FrozenSet[str]] = {
    "area": frozenset({"nohref"}),
    "audio": frozenset({"autoplay", "controls", "loop", "muted"}),
    "button": frozenset({"disabled", "formnovalidate"}),
    "details": frozenset({"open"}),
    "dialog": frozenset({"open"}),
    "dir": frozenset({"compact"}),
    "dl": frozenset({"compact"}),
    "fieldset": frozenset({"disabled"}),
    "form": frozenset({"novalidate"}),
    "frame": frozenset({"noresize"}),
    "hr": frozenset({"noshade"}),
    "iframe": frozenset({"allowfullscreen", "seamless"}),
    "img": frozenset({"ismap"}),
    "input": frozenset({"checked", "disabled", "formnovalidate", "multiple", "readonly", "required"}),
    "link": frozenset({"disabled"}),
    "marquee": frozenset({"truespeed"}),
    "menu": frozenset({"compact"}),
    "object": frozenset({"declare", "typemustmatch"}),
    "ol": frozenset({"compact", "reversed"}),
    "optgroup": frozenset({"disabled"}),
    "option": frozenset({"disabled", "selected"}),
    "script": frozenset({"async", "defer", "nomodule"}),
    "select": frozenset({"disabled", "multiple", "required"}),
    "style": frozenset({"scoped"}),
    "table": frozenset({"sortable"}),
    "td": frozenset({"nowrap"}),
    "textarea": frozenset({"disabled", "readonly", "required"}),
    "th": frozenset({"nowrap"}),
    "track": frozenset({"default"}),
    "ul": frozenset({"compact"}),
    "video": frozenset({"autoplay", "controls", "loop", "muted", "playsinline"}),
}


class MarkupDialect(str, enum.Enum):
    """Markup dialect in scope of an expansion."""
    HTML = "html"
    XHTML = "xhtml"
    XML = "xml"

    @property
    def block_tags(self) -> FrozenSet[str]:
        if self is MarkupDialect.XML:
            return frozenset()
        return HTML_BLOCK_TAGS

    @property
    def boolean_aware(self) -> bool:
        """Only plain HTML knows attributes that are boolean by definition."""
        return self is MarkupDialect.HTML

    def boolean_attributes(self, tag_name: str) -> FrozenSet[str]:
        """Булевы атрибуты элемента: глобальные плюс собственные."""
        if not self.boolean_aware:
            return frozenset()
        own = HTML_ELEMENT_BOOLEAN_ATTRIBUTES.get(tag_name.lower(), frozenset())
        return HTML_GLOBAL_BOOLEAN_ATTRIBUTES | own

    def is_block_tag(self, name: str) -> bool:
        return name.lower() in self.block_tags

    def is_boolean_attribute(self, tag_name: str, name: str) -> bool:
        return name.lower() in self.boolean_attributes(tag_name)

    @classmethod
    def from_name(cls, name: str) -> MarkupDialect:
        try:
            return cls(name.strip().lower())
        except ValueError:
            allowed = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown markup dialect '{name}' (expected one of: {allowed})")


__all__ = [
    "MarkupDialect",
    "HTML_BLOCK_TAGS",
    "HTML_GLOBAL_BOOLEAN_ATTRIBUTES",
    "HTML_ELEMENT_BOOLEAN_ATTRIBUTES",
]
