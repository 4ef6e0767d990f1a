"""
Общие утилиты тестов: файлы, узлы с разметочными токенами, запуск CLI.
"""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path
from typing import Optional

from abbrex.nodes import AbbreviationNode, MarkupToken


def write(p: Path, text: str) -> Path:
    """Записывает текст в файл, создавая родительские директории."""
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


def markup(fragment: str, parent: Optional[AbbreviationNode] = None, **kwargs) -> AbbreviationNode:
    """
    Узел с разметочным токеном.

    Args:
        fragment: Текст корневого тега
        parent: Родитель, к которому узел сразу присоединяется
        **kwargs: attributes= для токена, остальное идёт в параметры узла
    """
    attributes = kwargs.pop("attributes", {})
    return AbbreviationNode(MarkupToken(fragment=fragment, attributes=attributes), parent=parent, **kwargs)


def run_cli(root: Path, *args: str) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    env.pop("ABBREX_DEBUG", None)
    return subprocess.run(
        [sys.executable, "-m", "abbrex.cli", *args],
        cwd=root, env=env, capture_output=True, text=True, encoding="utf-8"
    )
