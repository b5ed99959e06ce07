"""Notebook document model: cells and their recorded outputs.

Tag fields stay open strings so that notebook producers can introduce new
cell and output types. The ``kind`` properties map them onto a closed set
with an ``OTHER`` arm for matching.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

PLAIN_TEXT_MIME = "text/plain"


class CellKind(StrEnum):
    CODE = "code"
    MARKDOWN = "markdown"
    RAW = "raw"
    OTHER = "other"


class OutputKind(StrEnum):
    EXECUTE_RESULT = "execute_result"
    DISPLAY_DATA = "display_data"
    STREAM = "stream"
    OTHER = "other"


# A literal "other" tag is still an unknown producer type, so it is not listed.
_KNOWN_CELL_KINDS = {k.value: k for k in CellKind if k != CellKind.OTHER}
_KNOWN_OUTPUT_KINDS = {k.value: k for k in OutputKind if k != OutputKind.OTHER}


class Output(BaseModel):
    model_config = ConfigDict(frozen=True)

    output_type: str = ""
    data: dict[str, Any] | None = None
    text: list[str] | None = None

    @property
    def kind(self) -> OutputKind:
        return _KNOWN_OUTPUT_KINDS.get(self.output_type, OutputKind.OTHER)


class Cell(BaseModel):
    model_config = ConfigDict(frozen=True)

    cell_type: str = CellKind.CODE.value
    source: list[str] = Field(default_factory=list)
    outputs: list[Output] = Field(default_factory=list)

    @property
    def kind(self) -> CellKind:
        return _KNOWN_CELL_KINDS.get(self.cell_type, CellKind.OTHER)

    @property
    def is_code(self) -> bool:
        return self.kind == CellKind.CODE


class Notebook(BaseModel):
    model_config = ConfigDict(frozen=True)

    cells: list[Cell] = Field(default_factory=list)
