"""Command-line interface for anki-deck."""

from __future__ import annotations

import typer

from .cli_commands import deck_commands

app = typer.Typer(
    name="anki-deck",
    help="Query AnkiConnect decks and copy the Anki collection into projects.",
    no_args_is_help=True,
)

deck_commands.register(app)


def cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
