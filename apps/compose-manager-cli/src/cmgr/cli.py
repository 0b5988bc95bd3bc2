"""Root Typer application for the Compose Manager CLI."""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from cmgr.commands import stack

app = typer.Typer(
    name="cmgr",
    help="Compose Manager — manage Docker Compose stacks on a NAS host.",
    no_args_is_help=True,
)

app.add_typer(stack.app, name="stack", help="Docker Compose stack status and lifecycle.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


if __name__ == "__main__":
    app()
