"""Lay a parsed notebook out as plain display lines.

Each cell becomes a header rule, its source lines in a gutter, the text of
its outputs (code cells only) and one blank separator. Rendering is a
generator: lines come out in document order as they are produced.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from nbview.notebook.model import PLAIN_TEXT_MIME, Cell, Notebook, Output, OutputKind

RULE = "───"
GUTTER = "│ "
OUTPUT_LABEL = GUTTER + "Output:"
SEPARATOR = ""
LINE_BREAK_MARK = "↵"

_RICH_OUTPUT_KINDS = frozenset({OutputKind.EXECUTE_RESULT, OutputKind.DISPLAY_DATA})


def render(notebook: Notebook) -> Iterator[str]:
    """Yield every display line of the notebook, cell by cell."""
    for cell in notebook.cells:
        yield from render_cell(cell)


def render_cell(cell: Cell) -> Iterator[str]:
    """Yield the lines of one cell: header, source, outputs, separator."""
    yield cell_header(cell.cell_type)

    for line in cell.source:
        yield _gutter(line)

    if cell.is_code:
        for output in cell.outputs:
            yield from render_output(output)

    yield SEPARATOR


def render_output(output: Output) -> Iterator[str]:
    """Yield the lines of one output. Kinds without a text rendering yield nothing."""
    kind = output.kind
    if kind in _RICH_OUTPUT_KINDS:
        if output.data is None or PLAIN_TEXT_MIME not in output.data:
            return
        yield OUTPUT_LABEL
        yield _gutter(plain_text(output.data))
    elif kind == OutputKind.STREAM:
        if output.text is None:
            return
        yield OUTPUT_LABEL
        for line in output.text:
            yield _gutter(line)


def cell_header(cell_type: str) -> str:
    return f"{RULE} {cell_type} cell {RULE}"


def plain_text(data: dict[str, Any]) -> str:
    """Pick the text/plain representation of a MIME bundle.

    Only string values count as text; anything else (including the
    list-of-lines shape some writers emit) comes back as "".
    """
    value = data.get(PLAIN_TEXT_MIME)
    if isinstance(value, str):
        return value
    return ""


def _gutter(line: str) -> str:
    return GUTTER + _fold_breaks(_strip_terminator(line))


def _fold_breaks(line: str) -> str:
    # One value stays one display line; inner breaks become a visible marker.
    return line.replace("\r\n", LINE_BREAK_MARK).replace("\r", LINE_BREAK_MARK).replace("\n", LINE_BREAK_MARK)


def _strip_terminator(line: str) -> str:
    # Notebook JSON keeps the newline on each stored line; sinks take bare lines.
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith(("\n", "\r")):
        return line[:-1]
    return line
