"""Decode notebook JSON into the document model.

Only the document boundary can fail: the payload must be a JSON object with a
``cells`` array. Everything inside a cell is decoded leniently, each optional
field by its own helper that falls back to a default, so one bad cell never
hides the rest of the notebook.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from nbview.core import ErrorKind, Result
from nbview.notebook.model import Cell, CellKind, Notebook, Output

logger = logging.getLogger("nbview.parser")


def load_notebook(path: str | Path) -> Result[Notebook]:
    """Read a notebook file from disk and parse it."""
    result: Result[Notebook] = Result()
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        result.fail(ErrorKind.IO_UNAVAILABLE, f"cannot read {path}: {e.strerror or e}")
        return result
    return parse(raw)


def parse(raw: bytes | str) -> Result[Notebook]:
    """Parse a raw notebook payload into a Notebook."""
    result: Result[Notebook] = Result()

    try:
        doc = json.loads(raw)
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError both land here.
        result.fail(ErrorKind.MALFORMED_DOCUMENT, f"not valid JSON: {e}")
        return result
    except RecursionError:
        result.fail(ErrorKind.MALFORMED_DOCUMENT, "JSON nested too deeply to decode")
        return result

    if not isinstance(doc, dict):
        result.fail(ErrorKind.MALFORMED_DOCUMENT, f"expected a JSON object, got {type(doc).__name__}")
        return result

    if "cells" not in doc:
        result.fail(ErrorKind.MALFORMED_DOCUMENT, "missing 'cells' field", hint="Is this a notebook file?")
        return result

    raw_cells = doc["cells"]
    if not isinstance(raw_cells, list):
        result.fail(ErrorKind.MALFORMED_DOCUMENT, f"'cells' must be an array, got {type(raw_cells).__name__}")
        return result

    cells = [decode_cell(raw_cell, index) for index, raw_cell in enumerate(raw_cells)]
    result.data = Notebook(cells=cells)
    logger.info("Parsed notebook (%d cells)", len(cells))
    return result


def decode_cell(raw: Any, index: int = 0) -> Cell:
    """Decode one cell, substituting defaults for anything malformed."""
    if not isinstance(raw, dict):
        logger.debug("Cell %d is not an object, using an empty code cell", index)
        return Cell()

    return Cell(
        cell_type=_cell_type(raw, index),
        source=_string_lines(raw.get("source"), f"cell {index} source"),
        outputs=_outputs(raw.get("outputs"), index),
    )


def decode_output(raw: Any, where: str = "output") -> Output:
    """Decode one output entry. Unknown shapes become an output that renders nothing."""
    if not isinstance(raw, dict):
        logger.debug("%s is not an object, skipping its content", where)
        return Output()

    output_type = raw.get("output_type")
    if not isinstance(output_type, str):
        logger.debug("%s has no string output_type", where)
        output_type = ""

    return Output(
        output_type=output_type,
        data=_mime_bundle(raw.get("data"), where),
        text=_optional_lines(raw.get("text"), f"{where} text"),
    )


def _cell_type(raw: dict[str, Any], index: int) -> str:
    value = raw.get("cell_type")
    if isinstance(value, str):
        return value
    if value is not None:
        logger.debug("Cell %d has a non-string cell_type, treating it as code", index)
    return CellKind.CODE.value


def _outputs(value: Any, index: int) -> list[Output]:
    if not isinstance(value, list):
        if value is not None:
            logger.debug("Cell %d outputs is not an array, ignoring it", index)
        return []
    return [decode_output(item, f"cell {index} output {n}") for n, item in enumerate(value)]


def _mime_bundle(value: Any, where: str) -> dict[str, Any] | None:
    if isinstance(value, dict):
        return value
    if value is not None:
        logger.debug("%s data is not an object, ignoring it", where)
    return None


def _optional_lines(value: Any, where: str) -> list[str] | None:
    if value is None:
        return None
    if not isinstance(value, list):
        logger.debug("%s is not an array, ignoring it", where)
        return None
    return _string_lines(value, where)


def _string_lines(value: Any, where: str) -> list[str]:
    """Decode a JSON array of strings. Non-array values give [], non-string entries give ""."""
    if not isinstance(value, list):
        if value is not None:
            logger.debug("%s is not an array, treating it as empty", where)
        return []
    lines: list[str] = []
    for item in value:
        if isinstance(item, str):
            lines.append(item)
        else:
            logger.debug("%s has a non-string entry, using an empty line", where)
            lines.append("")
    return lines
