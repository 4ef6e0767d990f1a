"""
Разрешение атрибутов: значение по умолчанию, префиксы @ и !, булевы атрибуты,
плейсхолдеры для пустых значений и нумерация повторений.
"""

import pytest

from abbrex.attributes import AttributeResolver, is_empty_value, prepare_variable_name
from abbrex.iteration import Iteration
from abbrex.markup import MarkupDialect, ScratchTag


def resolve(fragment, attributes, dialect=MarkupDialect.HTML, short=True, iteration=Iteration()):
    tag = ScratchTag.parse(fragment)
    assert tag is not None
    return AttributeResolver(dialect, short).resolve(tag, attributes, iteration)


class TestDefaultValue:
    def test_default_attribute_receives_value(self):
        """`@href` получает значение по умолчанию, префикс снимается, class не трогается."""
        result = resolve('<a @href="" class="foo"></a>', {"%default": "bar"})
        assert result.tag.text == '<a href="bar" class="foo"></a>'
        assert all(not a.name.startswith(("@", "!")) for a in result.tag.attributes)
        assert "%default" not in result.attributes

    def test_implied_attribute_receives_value(self):
        result = resolve('<input !checked="">', {"%default": "1"})
        assert result.tag.text == '<input checked="1">'

    def test_default_wins_over_implied(self):
        result = resolve('<a !title="" @href=""></a>', {"%default": "x"})
        assert result.tag.text == '<a href="x"></a>'

    def test_first_empty_attribute_is_the_fallback(self):
        result = resolve('<a class="c" href="" title=""></a>', {"%default": "v"})
        assert result.tag.text == '<a class="c" href="v" title=""></a>'

    def test_variable_value_counts_as_empty(self):
        assert is_empty_value("$url$")
        assert not is_empty_value("$url")
        result = resolve('<a href="$url$"></a>', {"%default": "v"})
        assert result.tag.text == '<a href="v"></a>'

    def test_separator_replaced_by_default_value(self):
        result = resolve('<a @href="http://|/|"></a>', {"%default": "x"})
        assert result.tag.text == '<a href="http://x/x"></a>'

    def test_explicit_attributes_are_not_receivers(self):
        result = resolve('<a title="" href=""></a>', {"%default": "v", "title": "t"})
        assert result.tag.text == '<a title="t" href="v"></a>'

    def test_no_receiver_drops_value(self):
        result = resolve('<a class="c"></a>', {"%default": "v"})
        assert result.tag.text == '<a class="c"></a>'

    def test_raw_map_is_not_mutated(self):
        raw = {"%default": "v"}
        resolve('<a href=""></a>', raw)
        assert raw == {"%default": "v"}


class TestAttributeValues:
    def test_raw_attributes_are_added(self):
        result = resolve("<div></div>", {"id": "main", "class": "box"})
        assert result.tag.text == '<div id="main" class="box"></div>'

    def test_explicit_fragment_value_passes_through(self):
        result = resolve('<a href="$x$"></a>', {})
        assert result.tag.text == '<a href="$x$"></a>'

    def test_empty_value_becomes_placeholder(self):
        result = resolve("<a></a>", {"data-id": ""})
        assert result.tag.text == '<a data-id="$data_id$"></a>'
        assert prepare_variable_name("data-id") == "data_id"

    def test_numbering_in_raw_values(self):
        result = resolve("<li></li>", {"class": "item$$"}, iteration=Iteration(1, 3))
        assert result.tag.text == '<li class="item02"></li>'

    def test_prefixed_attributes_never_survive(self):
        result = resolve('<a @x="1" !y class="c"></a>', {})
        assert result.tag.text == '<a class="c"></a>'


class TestBooleanAttributes:
    @pytest.mark.parametrize("short, expected", [
        (True, "<input disabled>"),
        (False, '<input disabled="disabled">'),
    ])
    def test_sentinel_value(self, short, expected):
        result = resolve("<input>", {"disabled": "true_"}, short=short)
        assert result.tag.text == expected

    def test_sentinel_works_outside_html(self):
        result = resolve("<x></x>", {"flag": "true_"}, dialect=MarkupDialect.XML, short=False)
        assert result.tag.text == '<x flag="flag"></x>'

    def test_html_known_boolean_attribute(self):
        assert resolve("<input disabled>", {}, short=False).tag.text == '<input disabled="disabled">'
        assert resolve("<input>", {"checked": ""}).tag.text == "<input checked>"

    def test_boolean_depends_on_element(self):
        """`open` булев только у details и dialog, у других тегов значение сохраняется."""
        assert resolve("<details></details>", {"open": "x"}).tag.text == "<details open></details>"
        assert resolve("<a></a>", {"open": "x"}).tag.text == '<a open="x"></a>'
        assert resolve("<audio></audio>", {"loop": ""}).tag.text == "<audio loop></audio>"
        assert resolve("<p></p>", {"loop": ""}).tag.text == '<p loop="$loop$"></p>'

    def test_global_boolean_on_any_element(self):
        assert resolve("<span></span>", {"hidden": "1"}).tag.text == "<span hidden></span>"

    def test_xml_has_no_known_booleans(self):
        result = resolve("<x disabled></x>", {}, dialect=MarkupDialect.XML)
        assert result.tag.text == '<x disabled="$disabled$"></x>'


class TestSurroundedMarker:
    def test_marker_in_value_is_reported(self):
        result = resolve("<a></a>", {"title": "$#"}, iteration=Iteration(0, 1, "Hi"))
        assert result.contains_surrounded_marker
        assert result.tag.text == '<a title="Hi"></a>'

    def test_no_marker(self):
        assert not resolve("<a></a>", {"title": "x"}).contains_surrounded_marker
