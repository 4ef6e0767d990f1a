"""
Разрешение атрибутов разметочного токена.

Берёт тег-заготовку (ScratchTag) и сырые атрибуты аббревиатуры и возвращает
новый тег с итоговыми именами и значениями атрибутов. Исходный тег не меняется.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from .iteration import Iteration, contains_surrounded_text_marker, get_value
from .markup.dialect import MarkupDialect
from .markup.scratch import MarkupAttribute, ScratchTag
from .nodes import BOOLEAN_ATTRIBUTE_VALUE, DEFAULT_ATTRIBUTE_NAME

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "@"
IMPLIED_PREFIX = "!"

_VARIABLE_VALUE_RE = re.compile(r"\$[A-Za-z_0-9]+\$")
_QNAME_RE = re.compile(r"[A-Za-z_][\w.\-]*(?::[A-Za-z_][\w.\-]*)?")


def prepare_variable_name(attribute_name: str) -> str:
    return attribute_name.replace("-", "_")


def is_default_attribute(name: str) -> bool:
    return name.startswith(DEFAULT_PREFIX)


def is_implied_attribute(name: str) -> bool:
    return name.startswith(IMPLIED_PREFIX)


def is_empty_value(value: Optional[str]) -> bool:
    return not value or _VARIABLE_VALUE_RE.fullmatch(value) is not None


@dataclass(frozen=True)
class ResolvedAttributes:
    """
    Результат разрешения атрибутов.

    Attributes:
        tag: Новый тег с итоговыми атрибутами
        attributes: Сырые атрибуты без ключа значения по умолчанию
        contains_surrounded_marker: Какое-то значение содержит маркер `$#`
    """
    tag: ScratchTag
    attributes: Mapping[str, str]
    contains_surrounded_marker: bool = False


class AttributeResolver:
    """
    Вычисляет итоговые атрибуты тега.

    Args:
        dialect: Диалект разметки (нужен для распознавания булевых атрибутов)
        short_boolean_notation: Писать булевы атрибуты без значения (`disabled`)
            вместо полной формы (`disabled="disabled"`)
    """

    def __init__(self, dialect: MarkupDialect = MarkupDialect.HTML, short_boolean_notation: bool = True):
        self.dialect = dialect
        self.short_boolean_notation = short_boolean_notation

    def resolve(self, tag: ScratchTag, attributes: Mapping[str, str], iteration: Iteration) -> ResolvedAttributes:
        raw: Dict[str, str] = dict(attributes)

        for name in raw:
            if name != DEFAULT_ATTRIBUTE_NAME and tag.find(name) is None:
                tag = tag.append_attribute(name, "")

        default_value = raw.pop(DEFAULT_ATTRIBUTE_NAME, None)
        if default_value is not None:
            tag = self._inject_default_value(tag, raw, default_value)

        contains_marker = False
        for index in range(len(tag.attributes)):
            attr = tag.attributes[index]
            if attr.has_value and attr.name not in raw:
                continue
            if not _QNAME_RE.fullmatch(attr.name):
                continue

            value = raw.get(attr.name)
            if value is None:
                value = attr.value or ""
            if contains_surrounded_text_marker(value):
                contains_marker = True

            if self._is_boolean(value, tag, attr):
                if self.short_boolean_notation:
                    tag = tag.replace_attribute(index, attr.name, None)
                else:
                    tag = tag.replace_attribute(index, attr.name, attr.name)
            elif not value:
                tag = tag.replace_attribute(index, attr.name, f"${prepare_variable_name(attr.name)}$")
            else:
                tag = tag.replace_attribute(index, attr.name, get_value(value, iteration))

        # Маркеры @ и ! в результат не попадают
        for index in reversed(range(len(tag.attributes))):
            local_name = tag.attributes[index].local_name
            if is_default_attribute(local_name) or is_implied_attribute(local_name):
                tag = tag.remove_attribute(index)

        return ResolvedAttributes(tag=tag, attributes=raw, contains_surrounded_marker=contains_marker)

    # ------------------------------------------------------------ #
    def _inject_default_value(self, tag: ScratchTag, raw: Mapping[str, str], default_value: str) -> ScratchTag:
        index = self._find_receiver(tag, raw)
        if index is None:
            logger.debug("No attribute of <%s> can receive default value %r, dropped", tag.name, default_value)
            return tag

        attr = tag.attributes[index]
        name = attr.name
        if len(name) > 1 and (is_default_attribute(name) or is_implied_attribute(name)):
            name = name[1:]
        old_value = attr.value
        if old_value is not None and "|" in old_value:
            new_value = old_value.replace("|", default_value)
        else:
            new_value = default_value
        return tag.replace_attribute(index, name, new_value)

    @staticmethod
    def _find_receiver(tag: ScratchTag, raw: Mapping[str, str]) -> Optional[int]:
        """
        Ищет атрибут-получатель значения по умолчанию.

        Приоритет: `@имя`, затем `!имя`, затем первый атрибут с пустым
        значением или значением-переменной. Атрибуты, заданные в аббревиатуре
        явно, не рассматриваются.
        """
        candidates = [(i, a) for i, a in enumerate(tag.attributes) if a.local_name not in raw]
        for predicate in (
                lambda a: is_default_attribute(a.local_name),
                lambda a: is_implied_attribute(a.local_name),
                lambda a: is_empty_value(a.value),
        ):
            for index, attr in candidates:
                if predicate(attr):
                    return index
        return None

    def _is_boolean(self, value: str, tag: ScratchTag, attr: MarkupAttribute) -> bool:
        if value == BOOLEAN_ATTRIBUTE_VALUE:
            return True
        return self.dialect.is_boolean_attribute(tag.name, attr.local_name)


__all__ = [
    "AttributeResolver",
    "ResolvedAttributes",
    "prepare_variable_name",
    "is_empty_value",
]
