"""Shared test fixtures for nbview tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from nbview.notebook.model import Cell, Notebook, Output

TITLE_NOTEBOOK: dict[str, Any] = {
    "cells": [
        {"cell_type": "markdown", "source": ["# Title"]},
        {
            "cell_type": "code",
            "source": ["x = 1"],
            "outputs": [{"output_type": "execute_result", "data": {"text/plain": "1"}}],
        },
    ],
}

TITLE_LINES = [
    "─── markdown cell ───",
    "│ # Title",
    "",
    "─── code cell ───",
    "│ x = 1",
    "│ Output:",
    "│ 1",
    "",
]


def make_payload(cells: list[Any], **extra: Any) -> bytes:
    return json.dumps({"cells": cells, **extra}).encode()


def write_notebook(directory: Path, document: Any, name: str = "demo.ipynb") -> Path:
    path = directory / name
    text = document if isinstance(document, str) else json.dumps(document)
    path.write_text(text, encoding="utf-8")
    return path


def make_code_cell(source: list[str] | None = None, outputs: list[Output] | None = None) -> Cell:
    return Cell(cell_type="code", source=source or [], outputs=outputs or [])


def make_notebook(*cells: Cell) -> Notebook:
    return Notebook(cells=list(cells))
