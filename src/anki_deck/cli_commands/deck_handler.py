"""Deck command implementations."""

import json
from pathlib import Path
from typing import Any

import typer

from anki_deck.anki.deck_client import CardSearch
from anki_deck.anki.results import CopyResult, DeckResult
from anki_deck.config import Settings
from anki_deck.error_codes import ErrorCode, get_error_severity, is_retriable_error

from .shared import console, run_with_client


def _print_error_hint(error_code: str | None) -> None:
    if error_code is None:
        return
    code = ErrorCode(error_code)
    console.print(f"[dim]{code.value} ({get_error_severity(code)})[/dim]")
    if is_retriable_error(code):
        console.print("[dim]This looks transient; check Anki is running and try again.[/dim]")


def _exit_on_failure(result: DeckResult[Any], logger: Any, event: str) -> None:
    if result.failed:
        logger.error(
            event,
            status=result.status.value,
            error=result.error,
            error_code=result.error_code,
        )
        console.print(f"\n[bold red]Error:[/bold red] {result.error}")
        _print_error_hint(result.error_code)
        raise typer.Exit(code=1)


def _print_copy_result(result: CopyResult) -> None:
    if result.ok:
        console.print(f"[green]Collection and media copied to {result.destination}[/green]")
    elif result.partial:
        console.print(
            f"[yellow]Collection copied to {result.destination}, "
            f"media copy failed:[/yellow] {result.error}"
        )
    else:
        console.print(f"[bold red]Copy failed:[/bold red] {result.error}")


def run_check(settings: Settings, logger: Any) -> None:
    """Check the AnkiConnect connection and print its version."""
    logger.info("check_connection_started", url=settings.anki_connect_url)
    result = run_with_client(settings, lambda client: client.check_connection())
    if result.failed:
        console.print(f"[bold red]{result.value}[/bold red]")
        _print_error_hint(result.error_code)
        raise typer.Exit(code=1)
    console.print(f"[green]{result.value}[/green]")


def run_list_decks(settings: Settings, logger: Any) -> None:
    """Print deck names in service order."""
    logger.info("list_decks_started")
    result = run_with_client(settings, lambda client: client.get_all_deck_names())
    _exit_on_failure(result, logger, "list_decks_failed")

    if not result.value:
        console.print("[yellow]No decks available.[/yellow]")
        return

    console.print("\n[bold]Decks:[/bold]")
    for deck in result.value:
        console.print(f"  [cyan]• {deck}[/cyan]")
    logger.info("list_decks_completed", count=len(result.value))


def run_list_fields(settings: Settings, logger: Any, deck_name: str) -> None:
    """Print the field names of a deck."""
    result = run_with_client(settings, lambda client: client.get_field_names(deck_name))
    _exit_on_failure(result, logger, "list_fields_failed")

    if not result.value:
        console.print(f"[yellow]No cards in deck '{deck_name}'.[/yellow]")
        return

    console.print(f"\n[bold]Fields in '{deck_name}':[/bold]")
    for field_name in result.value:
        console.print(f"  [cyan]• {field_name}[/cyan]")


def run_dump_cards(
    settings: Settings, logger: Any, deck_name: str, output: Path | None
) -> None:
    """Dump every card in a deck as JSON, to stdout or a file."""
    result = run_with_client(settings, lambda client: client.get_all_card_data(deck_name))
    _exit_on_failure(result, logger, "dump_cards_failed")

    payload = json.dumps(result.value, indent=2, ensure_ascii=False)
    if output is None:
        console.print_json(payload)
        return

    output.write_text(payload, encoding="utf-8")
    logger.info("cards_dumped", deck=deck_name, count=len(result.value), output=str(output))
    console.print(f"[green]Wrote {len(result.value)} cards to {output}[/green]")


def run_find_card(
    settings: Settings, logger: Any, deck_name: str, field_name: str, value: str
) -> None:
    """Print the first card whose field matches exactly."""
    criteria = CardSearch(field_name=field_name, search_val=value)
    result = run_with_client(
        settings, lambda client: client.get_specific_card_data(deck_name, criteria)
    )
    _exit_on_failure(result, logger, "find_card_failed")

    if result.value is None:
        console.print(f"[yellow]No card with {field_name} == {value!r}.[/yellow]")
        raise typer.Exit(code=1)
    console.print_json(json.dumps(result.value, ensure_ascii=False))


def run_add_field(
    settings: Settings,
    logger: Any,
    deck_name: str,
    field_name: str,
    project_folder: Path | None,
) -> None:
    """Add a field to a deck and optionally copy the deck into a project."""
    result = run_with_client(
        settings, lambda client: client.add_field(deck_name, field_name, project_folder)
    )
    _exit_on_failure(result.field_result, logger, "add_field_command_failed")
    console.print(f"[green]Field '{field_name}' added to '{deck_name}'.[/green]")

    if result.copy_result is not None:
        _print_copy_result(result.copy_result)
        if not result.copy_result.ok:
            raise typer.Exit(code=1)


def run_copy(settings: Settings, logger: Any, project_folder: Path) -> None:
    """Copy the collection and media into a project folder."""
    result = run_with_client(
        settings, lambda client: client.copy_deck_to_project(project_folder)
    )
    _print_copy_result(result)
    if not result.ok:
        logger.error("copy_command_failed", destination=str(project_folder))
        raise typer.Exit(code=1)
