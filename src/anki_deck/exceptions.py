"""Exception hierarchy for anki-deck.

All custom exceptions inherit from AnkiDeckError. They are raised by the
low-level helpers (HTTP transport, collection copier, config loader) and
caught at the DeckClient boundary, where they are logged and turned into
results.

Exception Hierarchy:
    AnkiDeckError (base)
     ConfigurationError - Settings loading/validation errors
     AnkiError - Anki-related errors
        AnkiConnectError - AnkiConnect communication errors
        CardDataError - Card payloads missing expected structure
        DeckCopyError - Collection/media copy failures

Usage Examples:
    try:
        config = load_config().to_deck_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        print(f"Suggestion: {e.suggestion}")

    raise DeckCopyError(
        "Failed to copy media directory",
        error_code=ErrorCode.FS_COPY_FAILED.value,
        context={"source": str(source), "destination": str(destination)},
    )
"""

from typing import Any


class AnkiDeckError(Exception):
    """Base exception for all anki-deck errors.

    Attributes:
        message: Human-readable error message
        suggestion: Optional suggestion for resolving the error
        error_code: Structured error code for machine-readable handling
        context: Additional context for debugging (e.g., paths, deck names)
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            suggestion: Optional suggestion for resolving the error
            error_code: Structured error code (e.g., "ANK-CONN-001")
            context: Additional context for debugging
        """
        self.message = message
        self.suggestion = suggestion
        self.error_code = error_code
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with error code and suggestion if available."""
        parts = []
        if self.error_code:
            parts.append(f"[{self.error_code}] {self.message}")
        else:
            parts.append(self.message)
        if self.suggestion:
            parts.append(f"\nSuggestion: {self.suggestion}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "message": self.message,
            "error_code": self.error_code,
            "suggestion": self.suggestion,
            "context": self.context,
            "type": type(self).__name__,
        }


# Configuration Errors


class ConfigurationError(AnkiDeckError):
    """Configuration loading or validation errors.

    Raised when:
    - Config file is malformed
    - APPDATA or ANKI_PROFILE is missing and no data directory is given
    """


# Anki Errors


class AnkiError(AnkiDeckError):
    """Base class for Anki-related errors."""


class AnkiConnectError(AnkiError):
    """AnkiConnect communication errors.

    Raised when:
    - Cannot connect to AnkiConnect
    - AnkiConnect answers with a non-2xx status or a malformed body
    - AnkiConnect API returns an error
    """


class CardDataError(AnkiError):
    """Card payload is missing structure the client relies on.

    Raised when a card returned by cardsInfo has no ``fields`` mapping.
    """


class DeckCopyError(AnkiError):
    """Collection or media copy errors.

    Raised when:
    - The source collection file or media directory is missing
    - The destination is not writable
    """


__all__ = [
    "AnkiConnectError",
    "AnkiDeckError",
    "AnkiError",
    "CardDataError",
    "ConfigurationError",
    "DeckCopyError",
]
