import gc

import pytest

from abbrex.markup import MarkupDialect
from abbrex.nodes import AbbreviationNode, GenericToken, MarkupToken, TokenKind
from abbrex.template import Template


class TestTreeLinks:
    def test_add_child_sets_parent(self):
        root = AbbreviationNode()
        a, b = AbbreviationNode(), AbbreviationNode()
        root.add_child(a)
        root.add_children([b])
        assert root.children == [a, b]
        assert all(child.parent is root for child in root.children)
        assert not root.is_leaf and a.is_leaf

    def test_parent_argument_attaches(self):
        root = AbbreviationNode()
        child = AbbreviationNode(parent=root)
        assert root.children == [child]
        assert child.parent is root

    def test_reattach_moves_child(self):
        first, second = AbbreviationNode(), AbbreviationNode()
        child = AbbreviationNode(parent=first)
        second.add_child(child)
        assert first.children == []
        assert second.children == [child]
        assert child.parent is second

    def test_parent_reference_is_weak(self):
        """Дочерний узел не удерживает родителя."""
        root = AbbreviationNode()
        child = AbbreviationNode(parent=root)
        del root
        gc.collect()
        assert child.parent is None

    def test_negative_iteration_rejected(self):
        with pytest.raises(ValueError):
            AbbreviationNode(iteration_index=-1)


class TestTokens:
    def test_markup_token_defaults(self):
        token = MarkupToken(fragment='<a href=""></a>')
        assert token.kind is TokenKind.MARKUP
        assert token.template == Template('<a href=""></a>')
        assert token.tag_name == "a"

    def test_generic_token(self):
        token = GenericToken(Template("x"))
        assert token.kind is TokenKind.GENERIC

    def test_block_tag_detection(self):
        div = AbbreviationNode(MarkupToken(fragment="<div></div>"))
        span = AbbreviationNode(MarkupToken(fragment="<span></span>"))
        generic = AbbreviationNode(GenericToken(Template("<div></div>")))
        assert div.is_block_tag(MarkupDialect.HTML)
        assert not span.is_block_tag(MarkupDialect.HTML)
        assert span.is_block_tag(MarkupDialect.HTML, frozenset({"span"}))
        assert not generic.is_block_tag(MarkupDialect.HTML)
        assert not AbbreviationNode().is_block_tag(MarkupDialect.HTML)
        assert not div.is_block_tag(MarkupDialect.XML)
