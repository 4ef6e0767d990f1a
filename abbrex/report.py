"""
JSON-отчёт о раскрытии (формат вывода `abbrex expand --json`).
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .document import Document

FORMAT_VERSION = 1


class SegmentReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    start: int
    end: int


class VariableReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    default_value: str = Field("", alias="defaultValue")
    always_stop_at: bool = Field(True, alias="alwaysStopAt")


class ExpansionReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    format_version: int = Field(FORMAT_VERSION, alias="formatVersion")
    tool_version: str = Field(alias="toolVersion")
    text: str
    template: str
    segments: List[SegmentReport] = Field(default_factory=list)
    variables: List[VariableReport] = Field(default_factory=list)
    end_offset: Optional[int] = Field(None, alias="endOffset")
    content_end: Optional[int] = Field(None, alias="contentEnd")
    to_reformat: bool = Field(False, alias="toReformat")
    filters: List[str] = Field(default_factory=list)


def build_report(document: Document, tool_version: str, filters: List[str]) -> ExpansionReport:
    return ExpansionReport(
        tool_version=tool_version,
        text=document.text,
        template=document.template.string,
        segments=[SegmentReport(name=s.name, start=s.start, end=s.end) for s in document.segments],
        variables=[
            VariableReport(name=v.name, default_value=v.default_value, always_stop_at=v.always_stop_at)
            for v in document.variables
        ],
        end_offset=document.end_offset,
        content_end=document.content_end,
        to_reformat=document.to_reformat,
        filters=list(filters),
    )


__all__ = ["FORMAT_VERSION", "ExpansionReport", "SegmentReport", "VariableReport", "build_report"]
