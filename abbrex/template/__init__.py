"""
Модель шаблонов и построитель для слияния подшаблонов.
"""

from __future__ import annotations

from .builder import Marker, TemplateBuilder
from .model import (
    ATTRS,
    END,
    SELECTION,
    Segment,
    Template,
    Variable,
    parse_segments,
    remove_variables_without_segment,
)

__all__ = [
    "ATTRS",
    "END",
    "SELECTION",
    "Marker",
    "Segment",
    "Template",
    "TemplateBuilder",
    "Variable",
    "parse_segments",
    "remove_variables_without_segment",
]
