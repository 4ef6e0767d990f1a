"""
Генерация шаблонов для токенов.

Две стратегии, выбираемые по виду токена (`TokenKind`):
- GenericTokenGenerator: готовый шаблон токена или результат генератора;
- MarkupTokenGenerator: то же плюс разрешение атрибутов на теге-заготовке.

TemplateGenerator — внешний генератор шаблонов, который может подставить
вызывающий код. Для разметки по умолчанию используется MarkupTemplateGenerator.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import ClassVar, Dict, Mapping, Optional

from .attributes import AttributeResolver, prepare_variable_name
from .context import ExpansionContext
from .errors import GenerationContractError
from .iteration import Iteration, contains_surrounded_text_marker
from .nodes import DEFAULT_ATTRIBUTE_NAME, MarkupToken, TemplateToken, TokenKind
from .template.model import ATTRS, END, Template, remove_variables_without_segment

logger = logging.getLogger(__name__)


class TemplateGenerator(ABC):
    """Внешний генератор шаблона по токену."""
    #: Умеет ли генератор работать с разметочными токенами
    supports_markup: ClassVar[bool] = False

    @abstractmethod
    def generate_template(self, token: TemplateToken, has_children: bool, context: ExpansionContext) -> Template:
        pass

    def build_attributes_string(self, attributes: Mapping[str, str], has_children: bool,
                                iteration: Iteration) -> str:
        """Строка атрибутов для сегмента ATTRS; по умолчанию пустая."""
        return ""


class MarkupTemplateGenerator(TemplateGenerator):
    """
    Генератор шаблонов разметки по умолчанию.

    Шаблон — это текст фрагмента токена. Пустой элемент без детей получает
    стоп-точку END между открывающим и закрывающим тегами.
    """
    supports_markup = True

    def generate_template(self, token: TemplateToken, has_children: bool, context: ExpansionContext) -> Template:
        if not isinstance(token, MarkupToken):
            raise GenerationContractError(f"Markup generator got a non-markup token: {token!r}")
        base = token.template if token.template is not None else Template()
        string = token.fragment
        tag = token.scratch_tag
        if tag is not None and not has_children and not tag.is_empty_element:
            body_start = tag.open_tag_close + 1
            if string.startswith("</", body_start):
                string = f"{string[:body_start]}${END}${string[body_start:]}"
        return Template(string=string, variables=base.variables, to_reformat=True)


@dataclass(frozen=True)
class GeneratedTemplate:
    """
    Шаблон узла после генерации.

    Attributes:
        template: Шаблон с переменными, на которые есть сегменты
        predefined_values: Предопределённые значения сегментов (ATTRS)
        contains_surrounded_marker: Окружаемый текст подставится через `$#`
    """
    template: Template
    predefined_values: Optional[Dict[str, str]] = None
    contains_surrounded_marker: bool = False


class TokenGenerator(ABC):
    """Стратегия генерации шаблона для одного вида токенов."""

    def __init__(self, generator: Optional[TemplateGenerator] = None):
        self.generator = generator

    @abstractmethod
    def generate(self, token: TemplateToken, has_children: bool, iteration: Iteration,
                 context: ExpansionContext) -> GeneratedTemplate:
        pass


class GenericTokenGenerator(TokenGenerator):

    def generate(self, token: TemplateToken, has_children: bool, iteration: Iteration,
                 context: ExpansionContext) -> GeneratedTemplate:
        if self.generator is None:
            if token.template is None:
                raise GenerationContractError(f"Token has neither a template nor a generator: {token!r}")
            return GeneratedTemplate(token.template)
        template = self.generator.generate_template(token, has_children, context)
        return GeneratedTemplate(remove_variables_without_segment(template))


class MarkupTokenGenerator(TokenGenerator):
    """
    Стратегия для разметочных токенов.

    Порядок работы:
    1. Для каждого сырого атрибута с пустым значением объявляется переменная.
    2. Фрагмент разбирается в тег-заготовку; если у узла есть дети,
       пустой элемент `<x/>` разворачивается в `<x></x>`.
    3. Атрибуты разрешаются (AttributeResolver), фрагмент пересобирается
       в новый токен (исходный не меняется).
    4. Генератор строит шаблон, переменные без сегментов отбрасываются.
    """

    _default_generator: ClassVar[MarkupTemplateGenerator] = MarkupTemplateGenerator()

    def generate(self, token: TemplateToken, has_children: bool, iteration: Iteration,
                 context: ExpansionContext) -> GeneratedTemplate:
        if not isinstance(token, MarkupToken):
            raise GenerationContractError(f"Markup strategy got a non-markup token: {token!r}")
        generator = self.generator if self.generator is not None else self._default_generator
        if not generator.supports_markup:
            raise GenerationContractError(
                f"Generator {type(generator).__name__} cannot process markup token <{token.tag_name}>"
            )
        if token.template is None:
            raise GenerationContractError(f"Markup token has no template: {token!r}")

        template = token.template
        contains_marker = False
        attributes: Mapping[str, str] = {
            k: v for k, v in token.attributes.items() if k != DEFAULT_ATTRIBUTE_NAME
        }
        tag = token.scratch_tag
        if tag is not None:
            for name, value in token.attributes.items():
                if not value and name != DEFAULT_ATTRIBUTE_NAME:
                    template = template.add_variable(prepare_variable_name(name))
            if has_children:
                tag = tag.expand_empty_element()
            resolver = AttributeResolver(context.dialect, context.short_boolean_notation)
            resolved = resolver.resolve(tag, token.attributes, iteration)
            contains_marker = resolved.contains_surrounded_marker
            attributes = resolved.attributes
            token = replace(token, fragment=resolved.tag.text, template=template.with_string(resolved.tag.text))
        else:
            logger.debug("Fragment %r has no root tag, attributes left as is", token.fragment)

        generated = remove_variables_without_segment(
            generator.generate_template(token, has_children, context)
        )
        predefined = self._predefined_values(generator, attributes, has_children, iteration)
        if any(contains_surrounded_text_marker(v) for v in attributes.values()):
            contains_marker = True
        return GeneratedTemplate(generated, predefined, contains_marker)

    @staticmethod
    def _predefined_values(generator: TemplateGenerator, attributes: Mapping[str, str],
                           has_children: bool, iteration: Iteration) -> Optional[Dict[str, str]]:
        attributes_string = generator.build_attributes_string(attributes, has_children, iteration)
        if not attributes_string:
            return None
        return {ATTRS: " " + attributes_string}


def create_token_generators(generator: Optional[TemplateGenerator] = None) -> Dict[TokenKind, TokenGenerator]:
    """Стратегии генерации по видам токенов."""
    return {
        TokenKind.GENERIC: GenericTokenGenerator(generator),
        TokenKind.MARKUP: MarkupTokenGenerator(generator),
    }


__all__ = [
    "TemplateGenerator",
    "MarkupTemplateGenerator",
    "GeneratedTemplate",
    "TokenGenerator",
    "GenericTokenGenerator",
    "MarkupTokenGenerator",
    "create_token_generators",
]
