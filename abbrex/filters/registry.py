from __future__ import annotations

from typing import Dict, Iterable, List, Type

from ..errors import AbbrexUserError
from .base import Filter
from .builtin import CommentFilter, EscapeFilter, SingleLineFilter, TrimFilter

__all__ = [
    "UnknownFilterError",
    "register_filter",
    "get_filter_class",
    "resolve_filters",
    "list_filters",
]

# Зарегистрированные классы фильтров: суффикс → класс
_CLASS_BY_SUFFIX: Dict[str, Type[Filter]] = {}


class UnknownFilterError(AbbrexUserError):
    """Запрошен фильтр с неизвестным суффиксом."""
    pass


def register_filter(cls: Type[Filter]) -> Type[Filter]:
    """
    Зарегистрировать класс фильтра по его суффиксу.
    Можно использовать как декоратор.
    """
    if not cls.suffix:
        raise ValueError(f"Filter {cls.__name__} has no suffix")
    _CLASS_BY_SUFFIX[cls.suffix.lower()] = cls
    return cls


for _cls in (SingleLineFilter, EscapeFilter, TrimFilter, CommentFilter):
    register_filter(_cls)


def get_filter_class(suffix: str) -> Type[Filter]:
    cls = _CLASS_BY_SUFFIX.get(suffix.strip().lower())
    if cls is None:
        known = ", ".join(sorted(_CLASS_BY_SUFFIX))
        raise UnknownFilterError(f"Unknown filter '{suffix}' (known: {known})")
    return cls


def resolve_filters(names: Iterable[str]) -> List[Filter]:
    """Строит цепочку фильтров по списку суффиксов, сохраняя порядок."""
    return [get_filter_class(name)() for name in names]


def list_filters() -> List[str]:
    return sorted(_CLASS_BY_SUFFIX)
