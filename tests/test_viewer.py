"""Tests for the parse-then-render pass onto a surface."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from conftest import TITLE_LINES, TITLE_NOTEBOOK, write_notebook

from nbview.config import DisplayConfig
from nbview.render.sink import BufferSink
from nbview.viewer import show_notebook


def test_show_notebook_renders_and_sets_options(tmp_path: Path) -> None:
    path = write_notebook(tmp_path, TITLE_NOTEBOOK)
    sink = BufferSink()
    result = show_notebook(path, lambda: sink)
    assert result.ok
    assert result.data == len(TITLE_LINES)
    assert sink.lines == TITLE_LINES
    assert sink.options == {"buftype": "nofile", "filetype": "jupyter"}


def test_show_notebook_custom_display_and_batches(tmp_path: Path) -> None:
    path = write_notebook(tmp_path, TITLE_NOTEBOOK)
    sink = BufferSink()
    result = show_notebook(path, lambda: sink, display=DisplayConfig(filetype="ipynb-text"), batch_size=3)
    assert result.ok
    assert sink.lines == TITLE_LINES
    assert sink.appends == 3
    assert sink.options["filetype"] == "ipynb-text"


def _tracking_factory(opened: list[BufferSink]) -> Callable[[], BufferSink]:
    def open_surface() -> BufferSink:
        sink = BufferSink()
        opened.append(sink)
        return sink

    return open_surface


def test_missing_file_never_opens_surface(tmp_path: Path) -> None:
    opened: list[BufferSink] = []
    result = show_notebook(tmp_path / "missing.ipynb", _tracking_factory(opened))
    assert not result.ok
    assert result.first_error is not None
    assert result.first_error.code == "IOUnavailable"
    assert opened == []


def test_malformed_file_never_opens_surface(tmp_path: Path) -> None:
    path = write_notebook(tmp_path, {"nbformat": 4})
    opened: list[BufferSink] = []
    result = show_notebook(path, _tracking_factory(opened))
    assert result.first_error is not None
    assert result.first_error.code == "MalformedDocument"
    assert opened == []


def test_bad_cell_does_not_hide_others(tmp_path: Path) -> None:
    document = {
        "cells": [
            {"cell_type": "code", "source": 12, "outputs": "nope"},
            {"cell_type": "markdown", "source": ["still here"]},
        ]
    }
    path = write_notebook(tmp_path, document)
    sink = BufferSink()
    assert show_notebook(path, lambda: sink).ok
    assert sink.lines == ["─── code cell ───", "", "─── markdown cell ───", "│ still here", ""]
