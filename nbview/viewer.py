"""One parse-then-render pass from a notebook path onto a surface."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from nbview.config import DisplayConfig
from nbview.core import Result
from nbview.notebook.parser import load_notebook
from nbview.render.engine import render
from nbview.render.sink import DEFAULT_BATCH_SIZE, Surface, deliver

logger = logging.getLogger("nbview.viewer")


def show_notebook(
    path: str | Path,
    open_surface: Callable[[], Surface],
    *,
    display: DisplayConfig | None = None,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> Result[int]:
    """Render the notebook at ``path`` onto a freshly opened surface.

    The surface is only opened once the notebook has parsed, so a load
    failure never leaves a partial rendering behind. Returns the number of
    lines delivered.
    """
    result: Result[int] = Result()

    loaded = load_notebook(path)
    if not loaded.ok or loaded.data is None:
        result.diagnostics = loaded.diagnostics
        logger.warning("Cannot open %s: %s", path, loaded.first_error.message if loaded.first_error else "unknown")
        return result

    surface = open_surface()
    count = deliver(render(loaded.data), surface, batch_size)
    surface.set_options((display or DisplayConfig()).options())

    logger.info("Rendered %s (%d cells, %d lines)", path, len(loaded.data.cells), count)
    result.data = count
    return result
