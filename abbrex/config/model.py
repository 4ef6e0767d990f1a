from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional

from ..markup.dialect import MarkupDialect


@dataclass
class IndentOptions:
    """Отступы для одного типа файлов."""
    use_tab_character: bool = False
    tab_size: int = 4

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]], base: Optional[IndentOptions] = None) -> IndentOptions:
        base = base or IndentOptions()
        if not d:
            return IndentOptions(base.use_tab_character, base.tab_size)
        tab_size = int(d.get("tab_size", base.tab_size))
        if tab_size < 0:
            raise ValueError(f"tab_size must be non-negative, got {tab_size}")
        return IndentOptions(
            use_tab_character=bool(d.get("use_tab_character", base.use_tab_character)),
            tab_size=tab_size,
        )


@dataclass
class CodeStyleSettings:
    """
    Настройки стиля кода: отступы по умолчанию и переопределения по типам файлов.

    Реализует протокол CodeStyleProvider.
    """
    default: IndentOptions = field(default_factory=IndentOptions)
    overrides: Dict[str, IndentOptions] = field(default_factory=dict)

    def _options(self, file_type: str) -> IndentOptions:
        return self.overrides.get(file_type.lower(), self.default)

    def uses_tabs(self, file_type: str) -> bool:
        return self._options(file_type).use_tab_character

    def tab_size(self, file_type: str) -> int:
        return self._options(file_type).tab_size

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]]) -> CodeStyleSettings:
        if not d:
            return CodeStyleSettings()
        default = IndentOptions.from_dict(d)
        overrides: Dict[str, IndentOptions] = {}
        raw_overrides = d.get("overrides") or {}
        if not isinstance(raw_overrides, dict):
            raise ValueError("code_style.overrides must be a mapping")
        for file_type, node in raw_overrides.items():
            if node is not None and not isinstance(node, dict):
                raise ValueError(f"code_style.overrides.{file_type} must be a mapping")
            overrides[str(file_type).lower()] = IndentOptions.from_dict(node, default)
        return CodeStyleSettings(default=default, overrides=overrides)


@dataclass
class ExpansionConfig:
    """Конфигурация раскрытия (файл abbrex.yaml)."""
    dialect: MarkupDialect = MarkupDialect.HTML
    short_boolean_notation: bool = True
    segments_limit: int = -1
    filters: List[str] = field(default_factory=list)
    file_type: str = "html"
    code_style: CodeStyleSettings = field(default_factory=CodeStyleSettings)
    block_tags: Optional[FrozenSet[str]] = None

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]]) -> ExpansionConfig:
        if not d:
            return ExpansionConfig()
        filters = d.get("filters") or []
        if isinstance(filters, str):
            filters = [f for f in filters.split("|") if f]
        block_tags = d.get("block_tags")
        return ExpansionConfig(
            dialect=MarkupDialect.from_name(str(d.get("dialect", "html"))),
            short_boolean_notation=bool(d.get("short_boolean_notation", True)),
            segments_limit=int(d.get("segments_limit", -1)),
            filters=[str(f) for f in filters],
            file_type=str(d.get("file_type", "html")),
            code_style=CodeStyleSettings.from_dict(d.get("code_style")),
            block_tags=frozenset(str(t).lower() for t in block_tags) if block_tags is not None else None,
        )


__all__ = ["IndentOptions", "CodeStyleSettings", "ExpansionConfig"]
