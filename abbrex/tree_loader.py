"""
Загрузка дерева аббревиатур из декларативного описания (YAML или dict).

Пример:

    tag: <ul class=""></ul>
    attributes: {class: nav}
    children:
      - tag: <li>item $</li>
        index: 0
        total: 2
      - template: "$name$ text"
        variables: [{name: name, default: hello}]

Список на верхнем уровне превращается в структурный корень без токена.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import AbbrexUserError
from .nodes import AbbreviationNode, GenericToken, MarkupToken, TemplateToken
from .template.model import Template, Variable

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")

_NODE_KEYS = frozenset({
    "tag", "attributes", "template", "variables", "surrounded_text",
    "insert_surrounded_at_end", "newline_between_children", "index", "total", "children",
})


class TreeLoadError(AbbrexUserError):
    """Некорректное описание дерева аббревиатур."""
    pass


def load_tree(path: Path) -> AbbreviationNode:
    """
    Читает описание дерева из YAML файла.

    Raises:
        TreeLoadError: Файл не найден, не разбирается или описание некорректно
    """
    if not path.is_file():
        raise TreeLoadError(f"Tree file not found: {path}")
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8"))
    except YAMLError as e:
        raise TreeLoadError(f"Invalid YAML in {path}: {e}") from e
    return tree_from_data(raw, source=str(path))


def tree_from_data(data: Any, source: str = "<tree>") -> AbbreviationNode:
    if isinstance(data, list):
        root = AbbreviationNode()
        for i, item in enumerate(data):
            root.add_child(_node_from_data(item, f"{source}[{i}]"))
        return root
    if isinstance(data, dict):
        return _node_from_data(data, source)
    raise TreeLoadError(f"{source}: tree must be a mapping or a list of nodes")


# ------------------------------------------------------------ #
# INNER HELPERS
# ------------------------------------------------------------ #
def _node_from_data(data: Any, path: str) -> AbbreviationNode:
    if not isinstance(data, dict):
        raise TreeLoadError(f"{path}: node must be a mapping")
    unknown = set(data) - _NODE_KEYS
    if unknown:
        raise TreeLoadError(f"{path}: unknown keys: {', '.join(sorted(map(str, unknown)))}")

    try:
        node = AbbreviationNode(
            token=_token_from_data(data, path),
            iteration_index=int(data.get("index", 0)),
            iteration_total=int(data.get("total", 1)),
            surrounded_text=_optional_str(data.get("surrounded_text")),
            insert_surrounded_at_end=bool(data.get("insert_surrounded_at_end", False)),
            insert_newline_between_children=bool(data.get("newline_between_children", False)),
        )
    except (TypeError, ValueError) as e:
        raise TreeLoadError(f"{path}: {e}") from e

    children = data.get("children") or []
    if not isinstance(children, list):
        raise TreeLoadError(f"{path}.children: must be a list")
    for i, child in enumerate(children):
        node.add_child(_node_from_data(child, f"{path}.children[{i}]"))
    return node


def _token_from_data(data: Dict[str, Any], path: str):
    tag = data.get("tag")
    template = data.get("template")
    if tag is not None and template is not None:
        raise TreeLoadError(f"{path}: 'tag' and 'template' are mutually exclusive")

    variables = tuple(_variables_from_data(data.get("variables") or [], path))
    token: TemplateToken
    if tag is not None:
        attributes = data.get("attributes") or {}
        if not isinstance(attributes, Mapping):
            raise TreeLoadError(f"{path}.attributes: must be a mapping")
        fragment = str(tag)
        token = MarkupToken(
            fragment=fragment,
            attributes={str(k): "" if v is None else str(v) for k, v in attributes.items()},
            template=Template(string=fragment, variables=variables),
        )
        if token.scratch_tag is None:
            logger.debug("%s: fragment %r has no root tag", path, fragment)
        return token
    if template is not None:
        return GenericToken(template=Template(string=str(template), variables=variables))
    if "attributes" in data:
        raise TreeLoadError(f"{path}: 'attributes' requires 'tag'")
    return None


def _variables_from_data(items: Any, path: str) -> List[Variable]:
    if not isinstance(items, list):
        raise TreeLoadError(f"{path}.variables: must be a list")
    result: List[Variable] = []
    for i, item in enumerate(items):
        if isinstance(item, str):
            result.append(Variable(item))
        elif isinstance(item, dict) and "name" in item:
            result.append(Variable(
                name=str(item["name"]),
                expression=str(item.get("expression", "")),
                default_value=str(item.get("default", "")),
                always_stop_at=bool(item.get("always_stop_at", True)),
            ))
        else:
            raise TreeLoadError(f"{path}.variables[{i}]: expected a name or a mapping with 'name'")
    return result


def _optional_str(value: Any):
    return None if value is None else str(value)


__all__ = ["TreeLoadError", "load_tree", "tree_from_data"]
