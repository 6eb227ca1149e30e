"""Deck-related CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .deck_handler import (
    run_add_field,
    run_check,
    run_copy,
    run_dump_cards,
    run_find_card,
    run_list_decks,
    run_list_fields,
)
from .shared import get_config_and_logger

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to config.yaml", exists=True),
]
LogLevelOption = Annotated[
    str | None,
    typer.Option("--log-level", help="Log level (DEBUG, INFO, WARN, ERROR)"),
]
DeckArgument = Annotated[str, typer.Argument(help="Exact (case-sensitive) deck name")]


def register(app: typer.Typer) -> None:
    """Register deck-related commands on the given Typer app."""

    @app.command(name="check")
    def check(config_path: ConfigOption = None, log_level: LogLevelOption = None) -> None:
        """Check that AnkiConnect is reachable.

        The profile folder must still be configured (APPDATA and ANKI_PROFILE,
        or ANKI_DATA_DIR) even though this command does not read it.
        """
        settings, logger = get_config_and_logger(config_path, log_level)
        run_check(settings, logger)

    @app.command(name="decks")
    def list_decks(
        config_path: ConfigOption = None, log_level: LogLevelOption = None
    ) -> None:
        """List deck names available via AnkiConnect.

        Requires the profile folder settings, like every other command.
        """
        settings, logger = get_config_and_logger(config_path, log_level)
        run_list_decks(settings, logger)

    @app.command(name="fields")
    def list_fields(
        deck_name: DeckArgument,
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
    ) -> None:
        """Show the field names of a deck (sampled from its first card)."""
        settings, logger = get_config_and_logger(config_path, log_level)
        run_list_fields(settings, logger, deck_name)

    @app.command(name="cards")
    def dump_cards(
        deck_name: DeckArgument,
        output: Annotated[
            Path | None,
            typer.Option("--output", "-o", help="Write JSON to this file instead of stdout"),
        ] = None,
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
    ) -> None:
        """Dump every card in a deck as JSON."""
        settings, logger = get_config_and_logger(config_path, log_level)
        run_dump_cards(settings, logger, deck_name, output)

    @app.command(name="find")
    def find_card(
        deck_name: DeckArgument,
        field_name: Annotated[str, typer.Option("--field", help="Field to match on")],
        value: Annotated[str, typer.Option("--value", help="Exact value to match")],
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
    ) -> None:
        """Find the first card whose field value matches exactly."""
        settings, logger = get_config_and_logger(config_path, log_level)
        run_find_card(settings, logger, deck_name, field_name, value)

    @app.command(name="add-field")
    def add_field(
        deck_name: DeckArgument,
        field_name: Annotated[str, typer.Argument(help="Name of the field to add")],
        project_folder: Annotated[
            Path | None,
            typer.Option(
                "--project", "-p", help="Copy the collection and media here afterwards"
            ),
        ] = None,
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
    ) -> None:
        """Add a field to a deck, optionally copying the deck into a project."""
        settings, logger = get_config_and_logger(config_path, log_level)
        run_add_field(settings, logger, deck_name, field_name, project_folder)

    @app.command(name="copy")
    def copy(
        project_folder: Annotated[
            Path, typer.Argument(help="Destination project folder")
        ],
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
    ) -> None:
        """Copy collection.anki2 and the media folder into a project folder."""
        settings, logger = get_config_and_logger(config_path, log_level)
        run_copy(settings, logger, project_folder)
