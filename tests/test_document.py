from abbrex.document import Document, DocumentSegment
from abbrex.report import build_report
from abbrex.template import Template, Variable


def test_defaults_fill_segments():
    template = Template(
        '<a href="$url$" title="$t$">$END$</a>$$',
        variables=(Variable("url", default_value="http://x"), Variable("t")),
    )
    doc = Document.from_template(template, content_end=5)
    assert doc.text == '<a href="http://x" title=""></a>$'
    assert doc.segments == (DocumentSegment("url", 9, 17), DocumentSegment("t", 26, 26))
    assert doc.end_offset == 28
    assert doc.content_end == 5
    assert doc.template is template


def test_first_end_stop_wins():
    doc = Document.from_template(Template("a$END$b$END$c"))
    assert doc.text == "abc"
    assert doc.end_offset == 1
    assert doc.segments == ()


def test_report_uses_camel_case_aliases():
    doc = Document.from_template(Template("$x$", variables=(Variable("x", default_value="v"),)))
    data = build_report(doc, "1.2.3", ["s"]).model_dump(mode="json", by_alias=True)
    assert data["formatVersion"] == 1
    assert data["toolVersion"] == "1.2.3"
    assert data["text"] == "v"
    assert data["segments"] == [{"name": "x", "start": 0, "end": 1}]
    assert data["variables"] == [{"name": "x", "defaultValue": "v", "alwaysStopAt": True}]
    assert data["endOffset"] is None
    assert data["filters"] == ["s"]
