"""
Проверяем YAML-загрузчик `abbrex.config.load_config` и настройки отступов.
"""

from pathlib import Path

import pytest

from abbrex.config import CodeStyleSettings, ConfigError, ExpansionConfig, find_config, load_config
from abbrex.context import ExpansionContext
from abbrex.markup import MarkupDialect
from tests.helpers import write


def test_load_valid_yaml(tmp_path: Path) -> None:
    """Все поля конфигурации подхватываются."""
    cfg_path = write(tmp_path / "abbrex.yaml", """
dialect: xml
short_boolean_notation: false
segments_limit: 5
filters: [s, e]
file_type: xml
code_style:
  use_tab_character: false
  tab_size: 2
  overrides:
    XML: {use_tab_character: true}
block_tags: [Item]
""")
    cfg = load_config(cfg_path)

    assert cfg.dialect is MarkupDialect.XML
    assert cfg.short_boolean_notation is False
    assert cfg.segments_limit == 5
    assert cfg.filters == ["s", "e"]
    assert cfg.block_tags == frozenset({"item"})
    assert cfg.code_style.uses_tabs("xml") is True
    assert cfg.code_style.tab_size("xml") == 2          # переопределение наследует базу
    assert cfg.code_style.uses_tabs("html") is False


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "abbrex.yaml")
    assert cfg == ExpansionConfig()


def test_filters_as_pipe_string() -> None:
    assert ExpansionConfig.from_dict({"filters": "s|e"}).filters == ["s", "e"]


@pytest.mark.parametrize("text, message", [
    ("- a\n- b\n", "must be a mapping"),
    ("dialect: svg\n", "Unknown markup dialect"),
    ("code_style: {tab_size: -1}\n", "non-negative"),
    ("a: [\n", "Invalid YAML"),
])
def test_invalid_config(tmp_path: Path, text: str, message: str) -> None:
    """Некорректный конфиг даёт понятную ConfigError."""
    cfg_path = write(tmp_path / "abbrex.yaml", text)
    with pytest.raises(ConfigError) as exc:
        load_config(cfg_path)
    assert message in str(exc.value)


def test_find_config_walks_up(tmp_path: Path) -> None:
    cfg_path = write(tmp_path / "abbrex.yaml", "dialect: html\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    assert find_config(nested) == cfg_path


class TestIndent:
    def test_spaces_by_default(self):
        assert ExpansionContext().indent() == "    "

    def test_tabs_and_sizes(self):
        style = CodeStyleSettings.from_dict({"tab_size": 2, "overrides": {"py": {"tab_size": 8}}})
        assert ExpansionContext(code_style=style).indent() == "  "
        assert ExpansionContext(code_style=style, file_type="py").indent() == " " * 8
        tabs = CodeStyleSettings.from_dict({"use_tab_character": True})
        assert ExpansionContext(code_style=tabs).indent() == "\t"

    def test_no_indent_in_injected_fragment(self):
        assert ExpansionContext(in_injected_fragment=True).indent() == ""
        assert ExpansionContext(editor_is_single_line_host=True).indent() == ""
