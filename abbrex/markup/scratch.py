"""
Scratch markup fragments.

A ScratchTag is the parsed view of a token's markup fragment (one root tag).
Every edit returns a new ScratchTag re-parsed from the edited text; the
original value is never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from tree_sitter import Node

from .tree_sitter_support import HtmlDocument

_OPEN_TAG_TYPES = ("start_tag", "self_closing_tag")


@dataclass(frozen=True)
class MarkupAttribute:
    """Attribute of a scratch tag with its character span in the fragment."""
    name: str
    value: Optional[str]  # None: attribute written without "=value"
    start: int
    end: int

    @property
    def local_name(self) -> str:
        return self.name.rsplit(":", 1)[-1]

    @property
    def has_value(self) -> bool:
        return self.value is not None


def render_attribute(name: str, value: Optional[str]) -> str:
    if value is None:
        return name
    if '"' in value:
        if "'" not in value:
            return f"{name}='{value}'"
        value = value.replace('"', "&quot;")
    return f'{name}="{value}"'


@dataclass(frozen=True)
class ScratchTag:
    """
    Parsed root tag of a markup fragment.

    Attributes:
        text: Whole fragment text
        name: Root tag name
        attributes: Attributes in document order
        start, end: Character span of the root element
        open_tag_close: Offset of the '>' or '/>' closing the opening tag
        is_empty_element: True for self-closing tags ('<x/>')
    """
    text: str
    name: str
    attributes: Tuple[MarkupAttribute, ...]
    start: int
    end: int
    open_tag_close: int
    is_empty_element: bool

    # ------------------------------------------------------------ #
    @staticmethod
    def parse(text: str) -> Optional[ScratchTag]:
        """Parse `text`; returns None when it has no root tag."""
        doc = HtmlDocument(text)
        element = doc.root_element()
        if element is None or not element.children:
            return None
        open_tag = element.children[0]
        if open_tag.type not in _OPEN_TAG_TYPES:
            return None

        name = ""
        attributes = []
        close_offset = doc.node_end(open_tag)
        for child in open_tag.children:
            if child.type == "tag_name":
                name = doc.get_node_text(child)
            elif child.type == "attribute":
                attributes.append(_read_attribute(doc, child))
            elif child.type in (">", "/>"):
                close_offset = doc.node_start(child)
        if not name:
            return None

        return ScratchTag(
            text=text,
            name=name,
            attributes=tuple(attributes),
            start=doc.node_start(element),
            end=doc.node_end(element),
            open_tag_close=close_offset,
            is_empty_element=open_tag.type == "self_closing_tag",
        )

    # ------------------------------------------------------------ #
    def find(self, name: str) -> Optional[int]:
        """Index of the attribute with the given name, or None."""
        for i, attr in enumerate(self.attributes):
            if attr.name == name:
                return i
        return None

    def get_value(self, name: str) -> Optional[str]:
        index = self.find(name)
        return None if index is None else self.attributes[index].value

    def replace_attribute(self, index: int, name: str, value: Optional[str]) -> ScratchTag:
        """Rewrite attribute `index` in place as `name` or `name="value"`."""
        attr = self.attributes[index]
        return self._splice(attr.start, attr.end, render_attribute(name, value))

    def remove_attribute(self, index: int) -> ScratchTag:
        """Drop attribute `index` together with the whitespace before it."""
        attr = self.attributes[index]
        start = attr.start
        while start > 0 and self.text[start - 1].isspace():
            start -= 1
        return self._splice(start, attr.end, "")

    def append_attribute(self, name: str, value: Optional[str]) -> ScratchTag:
        """Add an attribute at the end of the opening tag."""
        pos = self.open_tag_close
        prefix = self.text[:pos].rstrip()
        return self._reparse(f"{prefix} {render_attribute(name, value)}{self.text[pos:]}")

    def expand_empty_element(self) -> ScratchTag:
        """Turn '<x .../>' into '<x ...></x>'; other tags are returned as is."""
        if not self.is_empty_element:
            return self
        head = self.text[self.start:self.open_tag_close].rstrip()
        new_text = self.text[:self.start] + f"{head}></{self.name}>" + self.text[self.end:]
        return self._reparse(new_text)

    # ------------------------------------------------------------ #
    def _splice(self, start: int, end: int, replacement: str) -> ScratchTag:
        return self._reparse(self.text[:start] + replacement + self.text[end:])

    @staticmethod
    def _reparse(text: str) -> ScratchTag:
        tag = ScratchTag.parse(text)
        if tag is None:
            raise ValueError(f"Edited fragment is no longer a tag: {text!r}")
        return tag


def _read_attribute(doc: HtmlDocument, node: Node) -> MarkupAttribute:
    name = ""
    value: Optional[str] = None
    for child in node.children:
        if child.type == "attribute_name":
            name = doc.get_node_text(child)
        elif child.type == "attribute_value":
            value = doc.get_node_text(child)
        elif child.type == "quoted_attribute_value":
            value = ""
            for part in child.children:
                if part.type == "attribute_value":
                    value = doc.get_node_text(part)
    return MarkupAttribute(name, value, doc.node_start(node), doc.node_end(node))


__all__ = ["MarkupAttribute", "ScratchTag", "render_attribute"]
