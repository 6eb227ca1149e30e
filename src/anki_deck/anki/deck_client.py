"""Deck-level wrapper around AnkiConnect and the Anki profile folder."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import Any, Literal

from anki_deck.anki.collection_copier import copy_collection, copy_media
from anki_deck.anki.http_client import AnkiHttpClient
from anki_deck.anki.results import (
    AddFieldResult,
    CopyResult,
    DeckResult,
    OperationStatus,
)
from anki_deck.config_models import DeckConfig
from anki_deck.error_codes import ErrorCode
from anki_deck.exceptions import AnkiConnectError, AnkiDeckError, AnkiError, CardDataError
from anki_deck.utils.logging import get_logger
from anki_deck.utils.pacing import RequestPacer

logger = get_logger(__name__)

CONNECTION_FAILED_MESSAGE = (
    "Failed to connect to Anki Connect. "
    "Please ensure Anki is open and Anki Connect is installed."
)

Card = dict[str, Any]


@dataclass(frozen=True)
class CardSearch:
    """Exact, case-sensitive match on one field's value."""

    field_name: str
    search_val: str


def deck_query(deck_name: str) -> str:
    """Build the findCards query for a deck.

    The name is quoted but not escaped; a deck name containing a double
    quote produces a broken query.
    """
    return f'deck:"{deck_name}"'


def _fields_of(card: Any) -> Mapping[str, Any]:
    fields = card.get("fields") if isinstance(card, Mapping) else None
    if not isinstance(fields, Mapping):
        raise CardDataError(
            "Card has no fields mapping",
            error_code=ErrorCode.ANK_CARD_MALFORMED.value,
            context={"card_id": card.get("cardId") if isinstance(card, Mapping) else None},
        )
    return fields


def _log_failure(event: str, exc: Exception, **context: Any) -> None:
    if isinstance(exc, AnkiDeckError):
        logger.error(event, **exc.to_dict(), **context)
    else:
        logger.error(
            event,
            error=str(exc),
            error_type=type(exc).__name__,
            exc_info=True,
            **context,
        )


class DeckClient:
    """Query decks, cards and fields, add fields, and copy the collection.

    Every public operation waits on the request pacer, then runs its requests
    or copies strictly in sequence. Errors never escape: they are logged and
    reported through the returned result, whose ``value`` falls back to an
    empty list, ``None`` or a fixed message.
    """

    def __init__(
        self,
        config: DeckConfig,
        *,
        http_client: AnkiHttpClient | None = None,
        pacer: RequestPacer | None = None,
    ):
        """
        Initialize the client.

        Args:
            config: Immutable client configuration
            http_client: Optional AnkiConnect transport (created from config if omitted)
            pacer: Optional pacer (created from config if omitted)
        """
        self.config = config
        self._owns_http_client = http_client is None
        self._http_client = http_client or AnkiHttpClient(
            config.anki_connect_url, timeout=config.timeout
        )
        self._pacer = pacer or RequestPacer(config.request_delay, config.pacing_policy)
        logger.debug(
            "deck_client_initialized",
            url=config.anki_connect_url,
            data_dir=str(config.data_dir),
            request_delay=config.request_delay,
        )

    # Internal helpers: these raise, the public operations catch.

    async def _find_cards(self, deck_name: str) -> list[int]:
        card_ids = await self._http_client.invoke("findCards", {"query": deck_query(deck_name)})
        return list(card_ids or [])

    async def _fetch_card_details(self, card_ids: list[int]) -> list[Card]:
        cards = await self._http_client.invoke("cardsInfo", {"cards": card_ids})
        return list(cards or [])

    async def _cards_in_deck(self, deck_name: str) -> list[Card]:
        card_ids = await self._find_cards(deck_name)
        if not card_ids:
            logger.info("no_cards_found", deck=deck_name)
            return []
        return await self._fetch_card_details(card_ids)

    async def _add_field_to_deck(self, deck_name: str, field_name: str) -> Any:
        try:
            return await self._http_client.invoke(
                "addFieldToDeck", {"deckName": deck_name, "fieldName": field_name}
            )
        except AnkiConnectError as e:
            if e.error_code != ErrorCode.ANK_API_ERROR.value:
                raise
            # AnkiConnect answered but refused the change
            raise AnkiError(
                f"Could not add field {field_name!r} to deck {deck_name!r}: {e.message}",
                suggestion="Check the deck exists and the note type has no field with that name",
                error_code=ErrorCode.ANK_FIELD_ADD_FAILED.value,
                context={"deck": deck_name, "field": field_name},
            ) from e

    # Public operations

    async def check_connection(self) -> DeckResult[str]:
        """Check AnkiConnect is reachable by requesting its version."""
        await self._pacer.wait()
        try:
            version = await self._http_client.invoke("version")
        except Exception as e:
            _log_failure("anki_connection_failed", e, url=self.config.anki_connect_url)
            return DeckResult.failure(CONNECTION_FAILED_MESSAGE, e)

        logger.info("anki_connected", anki_connect_version=version)
        return DeckResult.success(f"Anki Connect Version: {version}")

    async def get_all_deck_names(self) -> DeckResult[list[str]]:
        """List all deck names, in the order AnkiConnect returns them."""
        await self._pacer.wait()
        try:
            deck_names = list(await self._http_client.invoke("deckNames") or [])
        except Exception as e:
            _log_failure("deck_names_fetch_failed", e)
            return DeckResult.failure([], e)

        logger.debug("deck_names_fetched", count=len(deck_names))
        if not deck_names:
            return DeckResult.empty(deck_names)
        return DeckResult.success(deck_names)

    async def get_all_card_data(self, deck_name: str) -> DeckResult[list[Card]]:
        """Fetch every card in a deck.

        One findCards request, then a single cardsInfo request for all ids.
        cardsInfo is skipped when the deck has no cards.
        """
        await self._pacer.wait()
        try:
            cards = await self._cards_in_deck(deck_name)
        except Exception as e:
            _log_failure("card_data_fetch_failed", e, deck=deck_name)
            return DeckResult.failure([], e)

        if not cards:
            return DeckResult.empty(cards)
        logger.debug("card_data_fetched", deck=deck_name, count=len(cards))
        return DeckResult.success(cards)

    async def get_field_names(self, deck_name: str) -> DeckResult[list[str]]:
        """List field names of a deck, sampled from its first card."""
        await self._pacer.wait()
        try:
            cards = await self._cards_in_deck(deck_name)
            if not cards:
                return DeckResult.empty([])
            field_names = list(_fields_of(cards[0]))
        except CardDataError as e:
            _log_failure("field_names_malformed_card", e, deck=deck_name)
            return DeckResult.failure([], e, OperationStatus.MALFORMED)
        except Exception as e:
            _log_failure("field_names_fetch_failed", e, deck=deck_name)
            return DeckResult.failure([], e)

        return DeckResult.success(field_names)

    async def get_specific_card_data(
        self, deck_name: str, criteria: CardSearch
    ) -> DeckResult[Card | None]:
        """Return the first card whose ``criteria.field_name`` value equals ``criteria.search_val``.

        Linear scan over the whole deck in service order; cards without the
        field are skipped.
        """
        await self._pacer.wait()
        cards_result = await self.get_all_card_data(deck_name)
        if cards_result.failed:
            return DeckResult(
                cards_result.status,
                None,
                error=cards_result.error,
                error_code=cards_result.error_code,
            )

        try:
            for card in cards_result.value:
                entry = _fields_of(card).get(criteria.field_name)
                if isinstance(entry, Mapping) and entry.get("value") == criteria.search_val:
                    return DeckResult.success(card)
        except CardDataError as e:
            _log_failure("specific_card_malformed", e, deck=deck_name)
            return DeckResult.failure(None, e, OperationStatus.MALFORMED)

        logger.info(
            "specific_card_not_found",
            deck=deck_name,
            field=criteria.field_name,
            scanned=len(cards_result.value),
        )
        return DeckResult.empty(None)

    async def add_field(
        self,
        deck_name: str,
        field_name: str,
        project_folder: str | Path | None = None,
    ) -> AddFieldResult:
        """Add a field to a deck's note type, then optionally copy the deck.

        The copy only runs when the field was added. Each stage is reported
        separately on the returned result.
        """
        await self._pacer.wait()
        try:
            acknowledgement = await self._add_field_to_deck(deck_name, field_name)
        except Exception as e:
            _log_failure("add_field_failed", e, deck=deck_name, field=field_name)
            return AddFieldResult(field_result=DeckResult.failure(None, e))

        logger.info("field_added", deck=deck_name, field=field_name)
        field_result: DeckResult[Any] = DeckResult.success(acknowledgement)
        if project_folder is None:
            return AddFieldResult(field_result=field_result)

        copy_result = await self.copy_deck_to_project(project_folder)
        if not copy_result.ok:
            logger.warning(
                "field_added_but_copy_failed",
                deck=deck_name,
                field=field_name,
                destination=str(copy_result.destination),
            )
        return AddFieldResult(field_result=field_result, copy_result=copy_result)

    async def copy_deck_to_project(self, project_folder: str | Path) -> CopyResult:
        """Copy collection.anki2 and the media folder into ``project_folder``.

        The collection file is overwritten; media is merged into any existing
        media folder. Not atomic: a failed media copy leaves the collection
        copied, which ``CopyResult.partial`` reports.
        """
        await self._pacer.wait()
        destination = Path(project_folder)
        collection_copied = False
        try:
            await asyncio.to_thread(copy_collection, self.config.data_dir, destination)
            collection_copied = True
            logger.info("deck_copied", destination=str(destination))

            await asyncio.to_thread(copy_media, self.config.data_dir, destination)
            logger.info("media_copied", destination=str(destination))
        except Exception as e:
            _log_failure(
                "deck_copy_failed",
                e,
                destination=str(destination),
                collection_copied=collection_copied,
            )
            return CopyResult(
                destination=destination,
                collection_copied=collection_copied,
                error=e.message if isinstance(e, AnkiDeckError) else str(e),
                error_code=e.error_code if isinstance(e, AnkiDeckError) else None,
            )

        return CopyResult(destination=destination, collection_copied=True, media_copied=True)

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> DeckClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> Literal[False]:
        await self.aclose()
        return False
