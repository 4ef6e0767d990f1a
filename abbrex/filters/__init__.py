"""
Цепочка фильтров раскрытия.
"""

from __future__ import annotations

from .base import Filter
from .builtin import CommentFilter, EscapeFilter, SingleLineFilter, TrimFilter
from .registry import UnknownFilterError, get_filter_class, list_filters, register_filter, resolve_filters

__all__ = [
    "Filter",
    "SingleLineFilter",
    "EscapeFilter",
    "TrimFilter",
    "CommentFilter",
    "UnknownFilterError",
    "get_filter_class",
    "list_filters",
    "register_filter",
    "resolve_filters",
]
