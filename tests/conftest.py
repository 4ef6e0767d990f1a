import pytest

from abbrex.context import ExpansionContext
from abbrex.markup.dialect import MarkupDialect


@pytest.fixture
def html_context() -> ExpansionContext:
    """HTML, отступ 4 пробела, краткие булевы атрибуты."""
    return ExpansionContext(dialect=MarkupDialect.HTML)


@pytest.fixture
def xml_context() -> ExpansionContext:
    return ExpansionContext(dialect=MarkupDialect.XML)


@pytest.fixture(autouse=True)
def _no_debug_env(monkeypatch):
    monkeypatch.delenv("ABBREX_DEBUG", raising=False)
