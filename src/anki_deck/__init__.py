"""Thin client for AnkiConnect decks and the Anki profile folder."""

from .anki import (
    AddFieldResult,
    CardSearch,
    CopyResult,
    DeckClient,
    DeckResult,
    OperationStatus,
)
from .config import DeckConfig, Settings, load_config
from .exceptions import AnkiConnectError, AnkiDeckError, ConfigurationError

__version__ = "0.1.0"

__all__ = [
    "AddFieldResult",
    "AnkiConnectError",
    "AnkiDeckError",
    "CardSearch",
    "ConfigurationError",
    "CopyResult",
    "DeckClient",
    "DeckConfig",
    "DeckResult",
    "OperationStatus",
    "Settings",
    "load_config",
]
