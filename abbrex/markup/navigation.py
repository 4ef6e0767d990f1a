"""
Поиск позиции вставки дочерних узлов в уже слитом тексте.

Слитый текст заново разбирается как разметка; дочерние узлы вставляются
перед началом закрывающего тега корневого элемента фрагмента.
"""

from __future__ import annotations

import logging
from typing import Optional

from tree_sitter import Node

from .tree_sitter_support import ELEMENT_TYPES, HtmlDocument

logger = logging.getLogger(__name__)

END_TAG_START = "</"


def find_children_offset(text: str, offset: int, start: int, end: int) -> int:
    """
    Возвращает смещение, куда следует вставлять дочерние узлы.

    Правила:
    1. Если в `offset` уже стоит начало закрывающего тега — это и есть ответ.
    2. Иначе ищется самый внешний элемент, начинающийся в `start`
       и целиком лежащий в [start, end]; ответ — начало его закрывающего тега.
    3. Если ничего не найдено (или разбор не удался), возвращается `offset`.

    Args:
        text: Слитый текст построителя
        offset: Позиция, которую вернула вставка шаблона
        start, end: Диапазон только что вставленного фрагмента
    """
    try:
        doc = HtmlDocument(text)
    except Exception as e:
        logger.warning("Failed to re-parse merged text, keeping offset %d: %s", offset, e)
        return offset

    if offset < end and _starts_end_tag(doc, offset):
        return offset

    element = _find_element_at_range(doc, start, end)
    if element is not None:
        new_offset = -1
        for child in element.children:
            if child.type == "end_tag":
                for part in child.children:
                    if part.type == END_TAG_START:
                        new_offset = doc.node_start(part)
        if new_offset >= 0:
            return new_offset

    logger.debug("No closing tag in range %d..%d, children go to offset %d", start, end, offset)
    return offset


def _starts_end_tag(doc: HtmlDocument, offset: int) -> bool:
    target = doc.byte_offset(offset)
    for node in doc.walk():
        if node.type == END_TAG_START and node.start_byte == target:
            return True
    return False


def _find_element_at_range(doc: HtmlDocument, start: int, end: int) -> Optional[Node]:
    start_byte = doc.byte_offset(start)
    end_byte = doc.byte_offset(end)
    for node in doc.walk():
        if node.type not in ELEMENT_TYPES:
            continue
        if node.start_byte == start_byte and node.end_byte <= end_byte:
            return node
    return None


__all__ = ["find_children_offset"]
