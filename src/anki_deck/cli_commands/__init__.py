"""CLI command modules for anki-deck.

- shared.py: Common utilities (settings/logger loading, console, async bridge)
- deck_handler.py: Command implementations on top of DeckClient
- deck_commands.py: Typer registration for deck/card/field/copy commands
"""
