"""
Раскрытие дерева аббревиатур в один документ.

Каждый узел генерирует свой шаблон независимо, затем в него вставляются
шаблоны детей. Позиция вставки отслеживается маркером построителя, поэтому
вставки переносов строк и дочерних шаблонов не сбивают смещения.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Sequence, Tuple

from .context import ExpansionContext
from .document import Document
from .filters.base import Filter
from .filters.builtin import SingleLineFilter
from .generators import GeneratedTemplate, TemplateGenerator, create_token_generators
from .iteration import Iteration
from .markup.navigation import find_children_offset
from .nodes import AbbreviationNode
from .template.builder import TemplateBuilder
from .template.model import Template

logger = logging.getLogger(__name__)


def is_newline_before(text: str, offset: int) -> bool:
    """Перед `offset` (через пробельные символы) стоит перевод строки или начало текста."""
    i = offset - 1
    while i >= 0 and text[i].isspace():
        if text[i] == "\n":
            return True
        i -= 1
    return i < 0


def is_newline_after(text: str, offset: int) -> bool:
    """После `offset` (через пробельные символы) стоит перевод строки или конец текста."""
    i = offset
    while i < len(text) and text[i].isspace():
        if text[i] == "\n":
            return True
        i += 1
    return i >= len(text)


def expand_template(template: Template, predefined_values: Optional[Mapping[str, str]],
                    surrounded_text: Optional[str], segments_limit: int = -1) -> Template:
    """
    Подставляет предопределённые значения и окружаемый текст в шаблон узла.

    Окружаемый текст вставляется в позицию END (или в конец шаблона).
    """
    if predefined_values is None and surrounded_text is None:
        return template
    builder = TemplateBuilder(segments_limit)
    offset = builder.insert_template(0, template, predefined_values)
    if surrounded_text is not None:
        builder.insert_text(offset, surrounded_text, disable_end_variable=True)
        builder.set_is_to_reformat(True)
    return builder.build()


class Expander:
    """
    Рекурсивный обход дерева аббревиатур.

    Args:
        context: Параметры раскрытия
        filters: Цепочка фильтров (применяется слева направо)
        segments_limit: Ограничение числа переменных; отрицательное значение снимает ограничение
        generator: Внешний генератор шаблонов (None: шаблоны токенов по умолчанию)
    """

    def __init__(
            self,
            context: Optional[ExpansionContext] = None,
            filters: Sequence[Filter] = (),
            segments_limit: int = -1,
            generator: Optional[TemplateGenerator] = None,
    ):
        self.context = context or ExpansionContext()
        self.filters = list(filters)
        self.segments_limit = segments_limit
        self._strategies = create_token_generators(generator)

    def expand(self, root: AbbreviationNode, insert_surrounded_text: bool = False) -> Document:
        logger.debug("Expanding %r with filters %s", root, self.filters)
        template, end = self._generate(root, self.filters, insert_surrounded_text, None)
        document = Document.from_template(template, content_end=end if end >= 0 else None)
        logger.debug("Expanded to %d chars, %d segments", len(document.text), len(document.segments))
        return document

    # ------------------------------------------------------------ #
    # INNER HELPERS
    # ------------------------------------------------------------ #
    def _generate(
            self,
            node: AbbreviationNode,
            filters: Sequence[Filter],
            insert_surrounded_text: bool,
            inherited_text: Optional[str],
    ) -> Tuple[Template, int]:
        """
        Генерирует шаблон поддерева.

        Returns:
            (шаблон поддерева, смещение, где перестало расти содержимое, или -1)
        """
        owns_marker = not (insert_surrounded_text and node.insert_surrounded_at_end and not node.is_leaf)

        local_filters: List[Filter] = list(filters)
        single_line = False
        for f in local_filters:
            node = f.filter_node(node)
            if f.single_line:
                single_line = True

        # Однострочный приёмник: фильтр действует на этот узел и его поддерево
        if self.context.editor_is_single_line_host and not single_line:
            local_filters.append(SingleLineFilter())
            single_line = True

        indent = self.context.indent()
        has_children = not node.is_leaf
        text = node.surrounded_text if node.surrounded_text is not None else inherited_text

        iteration = Iteration(node.iteration_index, node.iteration_total, text)
        token = node.token
        if token is None:
            generated = GeneratedTemplate(Template())
        else:
            generated = self._strategies[token.kind].generate(token, has_children, iteration, self.context)
        if generated.contains_surrounded_marker:
            owns_marker = True

        template = generated.template
        string = template.string
        for f in local_filters:
            string = f.filter_text(string, token)
        template = template.with_string(string)

        literal = text if (not has_children and owns_marker and not generated.contains_surrounded_marker) else None
        template = expand_template(template, generated.predefined_values, literal, self.segments_limit)

        builder = TemplateBuilder(self.segments_limit)
        end = -1
        offset = builder.insert_template(0, template)
        new_offset = find_children_offset(builder.text, offset, 0, builder.length)
        if offset < builder.length and new_offset != offset:
            end = offset
        offset = new_offset
        if end == -1 and offset < builder.length and not has_children:
            end = offset
        marker = builder.create_marker(offset) if offset < builder.length else None

        dialect = self.context.dialect
        block_tags = self.context.block_tags
        for child in node.children:
            child_template, _ = self._generate(
                child, local_filters, not owns_marker, None if owns_marker else text,
            )
            block_tag = child.is_block_tag(dialect, block_tags)

            if not single_line and block_tag and not is_newline_before(builder.text, offset):
                builder.insert_text(offset, "\n" + indent)
                offset += len(indent) + 1

            e = builder.insert_template(offset, child_template)
            offset = marker.end_offset if marker is not None else builder.length

            if not single_line and ((block_tag and not is_newline_after(builder.text, offset))
                                    or node.insert_newline_between_children):
                builder.insert_text(offset, "\n" + indent)
                offset += len(indent) + 1

            if end == -1 and e < offset:
                end = e

        if single_line:
            builder.set_is_to_reformat(False)
        return builder.build(), end


def expand(
        root: AbbreviationNode,
        context: Optional[ExpansionContext] = None,
        filters: Sequence[Filter] = (),
        insert_surrounded_text: bool = False,
        segments_limit: int = -1,
        generator: Optional[TemplateGenerator] = None,
) -> Document:
    """
    Раскрывает дерево аббревиатур в документ.

    Raises:
        GenerationContractError: Токен без шаблона и генератора или
            генератор без поддержки разметки для разметочного токена
    """
    expander = Expander(context, filters, segments_limit, generator)
    return expander.expand(root, insert_surrounded_text)


__all__ = ["Expander", "expand", "expand_template", "is_newline_before", "is_newline_after"]
