"""AnkiConnect deck client, transport and collection copier."""

from .deck_client import CONNECTION_FAILED_MESSAGE, CardSearch, DeckClient, deck_query
from .http_client import AnkiHttpClient
from .results import AddFieldResult, CopyResult, DeckResult, OperationStatus

__all__ = [
    "CONNECTION_FAILED_MESSAGE",
    "AddFieldResult",
    "AnkiHttpClient",
    "CardSearch",
    "CopyResult",
    "DeckClient",
    "DeckResult",
    "OperationStatus",
    "deck_query",
]
