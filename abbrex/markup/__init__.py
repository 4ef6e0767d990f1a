"""
Markup dialect services: scratch tag parsing, attribute edits,
block/boolean knowledge and children-insertion lookup.
"""

from __future__ import annotations

from .dialect import MarkupDialect
from .navigation import find_children_offset
from .scratch import MarkupAttribute, ScratchTag

__all__ = ["MarkupDialect", "MarkupAttribute", "ScratchTag", "find_children_offset"]
