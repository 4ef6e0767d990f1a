"""
CLI: раскрытие дерева из YAML, JSON-отчёт, конфигурация и ошибки.
"""

import json
from pathlib import Path

from tests.helpers import run_cli, write

TREE = """
tag: <ul></ul>
attributes: {"%default": nav}
children:
  - tag: <li></li>
    attributes: {class: "item$"}
    index: 0
    total: 2
  - tag: <li></li>
    attributes: {class: "item$"}
    index: 1
    total: 2
"""


def test_expand_text(tmp_path: Path):
    write(tmp_path / "tree.yaml", 'tag: <a class=""></a>\nattributes: {"%default": nav}\n')
    cp = run_cli(tmp_path, "expand", "tree.yaml")
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout == '<a class="nav"></a>'


def test_expand_block_children(tmp_path: Path):
    write(tmp_path / "tree.yaml", TREE)
    cp = run_cli(tmp_path, "expand", "tree.yaml")
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout == '<ul>\n    <li class="item1"></li>\n    <li class="item2"></li>\n    </ul>'


def test_single_line_filter_flag(tmp_path: Path):
    write(tmp_path / "tree.yaml", TREE)
    cp = run_cli(tmp_path, "expand", "tree.yaml", "--filter", "s", "--json")
    assert cp.returncode == 0, cp.stderr
    data = json.loads(cp.stdout)
    assert data["text"] == '<ul><li class="item1"></li><li class="item2"></li></ul>'
    assert data["toReformat"] is False
    assert data["filters"] == ["s"]


def test_config_is_picked_up(tmp_path: Path):
    write(tmp_path / "abbrex.yaml", "code_style: {use_tab_character: true}\nfilters: [e]\n")
    write(tmp_path / "tree.yaml", "tag: <div></div>\nchildren:\n  - tag: <p></p>\n")
    cp = run_cli(tmp_path, "expand", "tree.yaml", "--filter", "c")
    assert cp.returncode == 0, cp.stderr
    # --filter заменяет фильтры из конфига
    assert cp.stdout == "<div>\n\t<p></p>\n\t</div>"


def test_explicit_config(tmp_path: Path):
    cfg = write(tmp_path / "cfg" / "xml.yaml", "dialect: xml\n")
    write(tmp_path / "tree.yaml", "tag: <div></div>\nchildren:\n  - tag: <p></p>\n")
    cp = run_cli(tmp_path, "expand", "tree.yaml", "--config", str(cfg))
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout == "<div><p></p></div>"


def test_surrounded_and_single_line_host(tmp_path: Path):
    write(tmp_path / "tree.yaml", """
tag: <div></div>
surrounded_text: hello
insert_surrounded_at_end: true
children:
  - tag: <p></p>
""")
    cp = run_cli(tmp_path, "expand", "tree.yaml", "--insert-surrounded", "--single-line-host")
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout == "<div><p>hello</p></div>"


def test_segments_in_json(tmp_path: Path):
    write(tmp_path / "tree.yaml", "tag: <a></a>\nattributes: {href: ''}\n")
    cp = run_cli(tmp_path, "expand", "tree.yaml", "--json", "--segments-limit", "5")
    assert cp.returncode == 0, cp.stderr
    data = json.loads(cp.stdout)
    assert data["segments"] == [{"name": "href", "start": 9, "end": 9}]
    assert data["endOffset"] == 11
    assert data["template"] == '<a href="$href$">$END$</a>'


def test_user_errors_exit_with_2(tmp_path: Path):
    cp = run_cli(tmp_path, "expand", "missing.yaml")
    assert cp.returncode == 2
    assert "Tree file not found" in cp.stderr

    write(tmp_path / "tree.yaml", "tag: <a></a>\n")
    cp = run_cli(tmp_path, "expand", "tree.yaml", "--filter", "zz")
    assert cp.returncode == 2
    assert "Unknown filter 'zz'" in cp.stderr

    write(tmp_path / "bad.yaml", "- 1\n")
    cp = run_cli(tmp_path, "expand", "tree.yaml", "--config", "bad.yaml")
    assert cp.returncode == 2
    assert "must be a mapping" in cp.stderr


def test_list_filters(tmp_path: Path):
    cp = run_cli(tmp_path, "filters")
    assert cp.returncode == 0
    assert json.loads(cp.stdout) == {"filters": ["c", "e", "s", "t"]}


def test_version(tmp_path: Path):
    cp = run_cli(tmp_path, "--version")
    assert cp.returncode == 0
    assert cp.stdout.startswith("abbrex ")
