"""Result types returned by DeckClient operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Generic, TypeVar

from anki_deck.exceptions import AnkiDeckError

T = TypeVar("T")


class OperationStatus(str, Enum):
    """Outcome of a DeckClient operation."""

    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class DeckResult(Generic[T]):
    """Tagged outcome of a network-bearing operation.

    ``value`` always holds something usable: the payload on success, the
    documented fallback (``[]``, ``None`` or a fixed message) otherwise.
    """

    status: OperationStatus
    value: T
    error: str | None = None
    error_code: str | None = None

    @property
    def ok(self) -> bool:
        """True for OK and EMPTY outcomes."""
        return self.status in (OperationStatus.OK, OperationStatus.EMPTY)

    @property
    def failed(self) -> bool:
        return not self.ok

    @classmethod
    def success(cls, value: T) -> DeckResult[T]:
        return cls(OperationStatus.OK, value)

    @classmethod
    def empty(cls, value: T) -> DeckResult[T]:
        return cls(OperationStatus.EMPTY, value)

    @classmethod
    def failure(
        cls,
        value: T,
        exc: BaseException,
        status: OperationStatus = OperationStatus.FAILED,
    ) -> DeckResult[T]:
        error_code = exc.error_code if isinstance(exc, AnkiDeckError) else None
        message = exc.message if isinstance(exc, AnkiDeckError) else str(exc)
        return cls(status, value, error=message, error_code=error_code)


@dataclass(frozen=True)
class CopyResult:
    """Outcome of copying the collection and media into a project folder."""

    destination: Path
    collection_copied: bool = False
    media_copied: bool = False
    error: str | None = None
    error_code: str | None = None

    @property
    def status(self) -> OperationStatus:
        if self.collection_copied and self.media_copied:
            return OperationStatus.OK
        return OperationStatus.FAILED

    @property
    def ok(self) -> bool:
        return self.status is OperationStatus.OK

    @property
    def partial(self) -> bool:
        """True when the collection was copied but the media copy failed."""
        return self.collection_copied and not self.media_copied


@dataclass(frozen=True)
class AddFieldResult:
    """Two-stage outcome of add_field: the field request, then the optional copy."""

    field_result: DeckResult[Any]
    copy_result: CopyResult | None = None

    @property
    def ok(self) -> bool:
        return self.field_result.ok and (
            self.copy_result is None or self.copy_result.ok
        )


__all__ = ["AddFieldResult", "CopyResult", "DeckResult", "OperationStatus"]
