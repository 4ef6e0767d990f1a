"""
Tree-sitter infrastructure for markup fragments.
Provides grammar loading, parsing and char/byte offset mapping.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator, Optional

from tree_sitter import Tree, Node, Parser, Language

ELEMENT_TYPES = frozenset({"element", "script_element", "style_element"})


class TreeSitterDocument(ABC):
    """
    Wrapper for Tree-sitter parsed document.

    Tree-sitter works with UTF-8 byte offsets; the rest of abbrex works with
    character offsets, so the document converts between the two.
    """

    def __init__(self, text: str):
        self.text = text
        self.tree: Optional[Tree] = None
        self._text_bytes = text.encode("utf-8")
        self._ascii = len(self._text_bytes) == len(text)
        self._parse()

    @abstractmethod
    def get_language(self) -> Language:
        """
        Get Language instance for parsing.

        Returns:
            Language instance
        """
        pass

    def get_parser(self) -> Parser:
        """
        Get parser for the language.

        Returns:
            Parser instance
        """
        return Parser(self.get_language())

    def _parse(self):
        """Parse the document with Tree-sitter."""
        parser = self.get_parser()
        self.tree = parser.parse(self._text_bytes)

    @property
    def root_node(self) -> Node:
        """Get the root node of the parsed tree."""
        if not self.tree:
            raise RuntimeError("Document not parsed")
        return self.tree.root_node

    def char_offset(self, byte_offset: int) -> int:
        """Convert a byte offset into a character offset."""
        if self._ascii:
            return byte_offset
        return len(self._text_bytes[:byte_offset].decode("utf-8", errors="replace"))

    def byte_offset(self, char_offset: int) -> int:
        """Convert a character offset into a byte offset."""
        if self._ascii:
            return char_offset
        return len(self.text[:char_offset].encode("utf-8"))

    def node_start(self, node: Node) -> int:
        return self.char_offset(node.start_byte)

    def node_end(self, node: Node) -> int:
        return self.char_offset(node.end_byte)

    def get_node_text(self, node: Node) -> str:
        return self._text_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    def walk(self, node: Optional[Node] = None) -> Iterator[Node]:
        """Pre-order traversal of the tree (outer nodes first)."""
        stack = [node if node is not None else self.root_node]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))


class HtmlDocument(TreeSitterDocument):

    def get_language(self) -> Language:
        import tree_sitter_html as tsh
        return Language(tsh.language())

    def root_element(self) -> Optional[Node]:
        """First top-level element of the document."""
        for child in self.root_node.children:
            if child.type in ELEMENT_TYPES:
                return child
        return None


__all__ = ["TreeSitterDocument", "HtmlDocument", "ELEMENT_TYPES"]
