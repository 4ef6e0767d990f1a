"""
Модель шаблона: разбор сегментов, экранирование `$`, чистка переменных.
"""

from abbrex.template.model import (
    Segment,
    Template,
    Variable,
    escape_text,
    parse_segments,
    remove_variables_without_segment,
)


class TestParseSegments:
    def test_segments_and_escaped_dollar(self):
        text, segments = parse_segments("a$x$b$$c")
        assert text == "ab$c"
        assert segments == (Segment("x", 1),)

    def test_plain_text(self):
        assert parse_segments("<div></div>") == ("<div></div>", ())

    def test_lone_dollar_is_literal(self):
        """Одиночный `$` без пары не образует сегмент."""
        text, segments = parse_segments("price $5")
        assert text == "price $5"
        assert segments == ()

    def test_escape_text(self):
        assert escape_text("$a$") == "$$a$$"
        assert parse_segments(escape_text("$a$"))[0] == "$a$"


class TestTemplate:
    def test_properties(self):
        t = Template("<a href=\"$href$\">$END$</a>", variables=(Variable("href"),))
        assert t.text == '<a href=""></a>'
        assert t.segment_names == ["href", "END"]
        assert t.variable_names == ["href"]
        assert t.find_variable("href") == Variable("href")
        assert t.find_variable("nope") is None

    def test_operations_return_new_template(self):
        t = Template("$a$")
        t2 = t.add_variable("a", default_value="x")
        assert t.variables == ()
        assert t2.variables == (Variable("a", "", "x"),)
        assert t2.remove_variable_at(0).variables == ()
        assert t2.with_string("$b$").segment_names == ["b"]
        assert t2.with_reformat(True).to_reformat is True


class TestRemoveVariablesWithoutSegment:
    def test_drops_unreferenced(self):
        t = Template("$a$", variables=(Variable("a"), Variable("b")))
        assert remove_variables_without_segment(t).variable_names == ["a"]

    def test_duplicates_consumed_one_for_one(self):
        """Повторное объявление одной переменной оставляет только последнее."""
        first = Variable("a", default_value="1")
        last = Variable("a", default_value="2")
        t = Template("$a$", variables=(first, Variable("b"), last))
        assert remove_variables_without_segment(t).variables == (last,)

    def test_unchanged_template_is_returned_as_is(self):
        t = Template("$a$ $b$", variables=(Variable("a"), Variable("b")))
        assert remove_variables_without_segment(t) is t
