"""Shared utilities for CLI commands."""

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, TypeVar

import typer
from rich.console import Console

from anki_deck.anki.deck_client import DeckClient
from anki_deck.config import Settings, load_config, set_config
from anki_deck.exceptions import ConfigurationError
from anki_deck.utils.logging import configure_logging, get_logger

T = TypeVar("T")

# Shared console for all commands
console = Console()


def get_config_and_logger(
    config_path: Path | None = None,
    log_level: str | None = None,
) -> tuple[Settings, Any]:
    """Load settings and configure logging for a command.

    Args:
        config_path: Optional path to config.yaml
        log_level: Console log level (falls back to LOG_LEVEL / settings)

    Returns:
        Tuple of (Settings, Logger)
    """
    try:
        settings = load_config(config_path)
    except ConfigurationError as e:
        console.print(f"[bold red]Configuration error:[/bold red] {e}")
        raise typer.Exit(code=2)

    set_config(settings)
    configure_logging(log_level or settings.log_level, log_file=settings.log_file)
    return settings, get_logger("cli")


def run_with_client(
    settings: Settings, operation: Callable[[DeckClient], Awaitable[T]]
) -> T:
    """Build a DeckClient from settings and run one operation on it.

    Raises:
        typer.Exit: If the profile directory cannot be resolved
    """
    try:
        deck_config = settings.to_deck_config()
    except ConfigurationError as e:
        console.print(f"[bold red]Configuration error:[/bold red] {e}")
        raise typer.Exit(code=2)

    async def _run() -> T:
        async with DeckClient(deck_config) as client:
            return await operation(client)

    return asyncio.run(_run())
