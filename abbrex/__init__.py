"""
abbrex — раскрытие деревьев аббревиатур в шаблоны с редактируемыми сегментами.
"""

from __future__ import annotations

from .context import CodeStyleProvider, ExpansionContext
from .document import Document, DocumentSegment
from .errors import AbbrexUserError, GenerationContractError
from .expander import Expander, expand
from .generators import MarkupTemplateGenerator, TemplateGenerator
from .markup.dialect import MarkupDialect
from .nodes import AbbreviationNode, GenericToken, MarkupToken, TemplateToken, TokenKind
from .template.model import Template, Variable

__all__ = [
    "AbbreviationNode",
    "AbbrexUserError",
    "CodeStyleProvider",
    "Document",
    "DocumentSegment",
    "Expander",
    "ExpansionContext",
    "GenerationContractError",
    "GenericToken",
    "MarkupDialect",
    "MarkupTemplateGenerator",
    "MarkupToken",
    "Template",
    "TemplateGenerator",
    "TemplateToken",
    "TokenKind",
    "Variable",
    "expand",
]
