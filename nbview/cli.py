"""CLI entry points: `nbview open` and `nbview serve`."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console

from nbview.config import load_config
from nbview.render.sink import ConsoleSink
from nbview.viewer import show_notebook

app = typer.Typer(name="nbview", help="Read-only plain-text view of Jupyter notebooks.")
console = Console()
err_console = Console(stderr=True)

_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


@app.command("open")
def open_notebook(
    path: Path = typer.Argument(help="Path to a notebook (.ipynb) file"),
    batch_size: int | None = typer.Option(None, "--batch-size", "-b", min=1, help="Lines per append"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log parser and render details"),
) -> None:
    """Render a notebook as text in the terminal."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=_LOG_FORMAT)

    config = load_config()
    result = show_notebook(
        path,
        lambda: ConsoleSink(console),
        display=config.display,
        batch_size=batch_size or config.render.batch_size,
    )

    if not result.ok:
        d = result.first_error
        message = d.message if d else "unknown error"
        if d and d.hint:
            message = f"{message} ({d.hint})"
        err_console.print(f"Error: {message}", markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(1)


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Interface to bind"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to serve on"),
) -> None:
    """Start the nbview HTTP server for editor integrations."""
    import uvicorn

    logging.basicConfig(level=logging.INFO, format=_LOG_FORMAT)

    config = load_config()
    bind_host = host or config.server.host
    bind_port = port or config.server.port
    console.print(f"[bold]Starting nbview on {bind_host}:{bind_port}...[/bold]")

    uvicorn.run("nbview.server:app", host=bind_host, port=bind_port, reload=False)


def main() -> None:
    app()
