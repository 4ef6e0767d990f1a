"""
Подстановка номера повторения и окружаемого текста.

Правила для значений атрибутов и текстов узлов:
- серия `$` заменяется номером повторения (с 1), дополненным нулями до длины серии;
- `$@-` нумерует в обратном порядке, `$@N` начинает отсчёт с N;
- `$#` заменяется окружаемым текстом, если он есть (иначе остаётся как есть).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional

from .template.model import escape_text

SURROUNDED_TEXT_MARKER = "$#"

_NUMBERING_RE = re.compile(r"(\$+)(?:@(-)?(\d+)?)?(?!#)|\$#")


@dataclass(frozen=True)
class Iteration:
    """Позиция узла в серии повторений и окружаемый текст."""
    index: int = 0
    total: int = 1
    surrounded_text: Optional[str] = None


def contains_surrounded_text_marker(value: str) -> bool:
    return SURROUNDED_TEXT_MARKER in value


def replace_markers(value: str, iteration: Iteration,
                    escape: Optional[Callable[[str], str]] = None) -> str:
    """
    Заменяет маркеры нумерации и окружаемого текста в строке.

    `escape` применяется к подставляемому окружаемому тексту.
    """
    def _sub(m: re.Match) -> str:
        if m.group(0) == SURROUNDED_TEXT_MARKER:
            if iteration.surrounded_text is None:
                return m.group(0)
            text = iteration.surrounded_text
            return escape(text) if escape is not None else text
        dollars, reverse, base = m.group(1), m.group(2), m.group(3)
        start = int(base) if base else 1
        if reverse:
            number = start + max(iteration.total, 1) - 1 - iteration.index
        else:
            number = start + iteration.index
        return str(number).zfill(len(dollars))

    return _NUMBERING_RE.sub(_sub, value)


def get_value(value: str, iteration: Iteration) -> str:
    """
    Значение атрибута после подстановки маркеров, кавычки экранируются.

    Значение попадает в строку шаблона, поэтому `$` окружаемого текста
    удваивается и не читается как сегмент.
    """
    return replace_markers(value, iteration, escape_text).replace('"', "&quot;")


__all__ = [
    "SURROUNDED_TEXT_MARKER",
    "Iteration",
    "contains_surrounded_text_marker",
    "replace_markers",
    "get_value",
]
