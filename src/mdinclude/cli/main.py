#!/usr/bin/env python3
"""Command-line entry point for refreshing include blocks in a document."""

import sys
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from mdinclude.sync.errors import IncludeSyncError
from mdinclude.sync.rewriter import sync_document

app = typer.Typer(
    name="mdinclude",
    help="Refresh ```rust blocks that follow <!-- INCLUDE-RUST: path --> markers.",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def configure_logging() -> None:
    """Send log records to stderr as plain messages."""
    logger.remove()
    logger.add(sys.stderr, format="{message}", level="INFO")


@app.command()
def update(
    document: Path = typer.Argument(..., help="Markdown document to update in place"),
):
    """Replace each include block's contents with the file its marker names."""
    try:
        result = sync_document(document)
    except IncludeSyncError as e:
        logger.error(str(e))
        err_console.print(f"[red]❌ {escape(str(document))} was not updated[/red]", emoji=False)
        raise typer.Exit(code=1)

    if result.changed:
        console.print(f"[green]✅ Updated {escape(str(result.path))}[/green]", emoji=False)
    else:
        console.print(f"[green]✅ {escape(str(result.path))} is already up to date[/green]", emoji=False)


def main():
    """Main entry point for the mdinclude CLI."""
    configure_logging()
    app()


if __name__ == "__main__":
    main()
