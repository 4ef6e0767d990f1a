"""
Узлы дерева аббревиатур и токены шаблонов.

Дерево строится внешним парсером (или загрузчиком описаний деревьев)
и потребляется раскрывателем один раз. Дочерние узлы принадлежат родителю,
обратная ссылка на родителя — слабая.
"""

from __future__ import annotations

import copy
import enum
import weakref
from dataclasses import dataclass, field
from functools import cached_property
from typing import ClassVar, Iterable, List, Mapping, Optional

from .iteration import Iteration
from .markup.dialect import MarkupDialect
from .markup.scratch import ScratchTag
from .template.model import Template

# Зарезервированный ключ анонимного значения по умолчанию
DEFAULT_ATTRIBUTE_NAME = "%default"
# Зарезервированное значение булева атрибута
BOOLEAN_ATTRIBUTE_VALUE = "true_"


class TokenKind(enum.Enum):
    GENERIC = "generic"
    MARKUP = "markup"


@dataclass(frozen=True)
class TemplateToken:
    """Базовый класс токенов. Токены неизменяемы: их заменяют, а не правят."""
    kind: ClassVar[TokenKind]
    template: Optional[Template] = None


@dataclass(frozen=True)
class GenericToken(TemplateToken):
    """Токен с готовым шаблоном (сниппет, текст)."""
    kind: ClassVar[TokenKind] = TokenKind.GENERIC


@dataclass(frozen=True)
class MarkupToken(TemplateToken):
    """
    Разметочный токен.

    Attributes:
        fragment: Текст корневого тега токена, например `<a href=""></a>`
        attributes: Сырые атрибуты аббревиатуры (имя -> значение)
        template: Шаблон по умолчанию; если не задан, строится из фрагмента
    """
    kind: ClassVar[TokenKind] = TokenKind.MARKUP
    fragment: str = ""
    attributes: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.template is None:
            object.__setattr__(self, "template", Template(string=self.fragment))

    @cached_property
    def scratch_tag(self) -> Optional[ScratchTag]:
        return ScratchTag.parse(self.fragment)

    @property
    def tag_name(self) -> Optional[str]:
        tag = self.scratch_tag
        return tag.name if tag is not None else None


class AbbreviationNode:
    """
    Узел дерева аббревиатур.

    Args:
        token: Токен узла; None означает чисто структурный узел
        iteration_index: Номер повторения (с 0)
        iteration_total: Всего повторений
        surrounded_text: Текст, выделенный при вызове аббревиатуры
        insert_surrounded_at_end: Передать окружаемый текст глубже по дереву
        parent: Родитель; узел сразу присоединяется к нему
        insert_newline_between_children: Переносить строку после каждого ребёнка
    """

    def __init__(
            self,
            token: Optional[TemplateToken] = None,
            iteration_index: int = 0,
            iteration_total: int = 1,
            surrounded_text: Optional[str] = None,
            insert_surrounded_at_end: bool = False,
            parent: Optional[AbbreviationNode] = None,
            insert_newline_between_children: bool = False,
    ):
        if iteration_index < 0 or iteration_total < 0:
            raise ValueError("Iteration index and total must be non-negative")
        self.token = token
        self.iteration_index = iteration_index
        self.iteration_total = iteration_total
        self.surrounded_text = surrounded_text
        self.insert_surrounded_at_end = insert_surrounded_at_end
        self.insert_newline_between_children = insert_newline_between_children
        self._children: List[AbbreviationNode] = []
        self._parent: Optional[weakref.ReferenceType[AbbreviationNode]] = None
        if parent is not None:
            parent.add_child(self)

    # ------------------------------------------------------------ #
    @property
    def children(self) -> List[AbbreviationNode]:
        return self._children

    @property
    def parent(self) -> Optional[AbbreviationNode]:
        return self._parent() if self._parent is not None else None

    def add_child(self, child: AbbreviationNode) -> None:
        old_parent = child.parent
        if old_parent is not None and old_parent is not self:
            old_parent._children.remove(child)
        child._parent = weakref.ref(self)
        if child not in self._children:
            self._children.append(child)

    def add_children(self, children: Iterable[AbbreviationNode]) -> None:
        for child in children:
            self.add_child(child)

    @property
    def is_leaf(self) -> bool:
        return not self._children

    @property
    def iteration(self) -> Iteration:
        return Iteration(self.iteration_index, self.iteration_total, self.surrounded_text)

    def with_surrounded_text(self, text: Optional[str]) -> AbbreviationNode:
        """
        Копия узла с другим окружаемым текстом.

        Дети и родитель общие с исходным узлом; исходный узел не меняется.
        """
        clone = copy.copy(self)
        clone.surrounded_text = text
        return clone

    def is_block_tag(self, dialect: MarkupDialect, block_tags: Optional[frozenset] = None) -> bool:
        """Узел блочный, если имя корневого тега его токена входит в набор блочных тегов."""
        if self.token is None or self.token.kind is not TokenKind.MARKUP:
            return False
        name = self.token.tag_name  # type: ignore[attr-defined]
        if not name:
            return False
        if block_tags is not None:
            return name.lower() in block_tags
        return dialect.is_block_tag(name)

    def __repr__(self) -> str:
        return f"AbbreviationNode({self.token!r}, children={len(self._children)})"


__all__ = [
    "DEFAULT_ATTRIBUTE_NAME",
    "BOOLEAN_ATTRIBUTE_VALUE",
    "TokenKind",
    "TemplateToken",
    "GenericToken",
    "MarkupToken",
    "AbbreviationNode",
]
