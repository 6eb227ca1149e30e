"""Structured error codes for machine-readable error handling.

Error codes follow the format: {DOMAIN}-{CATEGORY}-{NUMBER}

Error Domains:
    ANK - AnkiConnect errors (connection, API, card payloads)
    FS  - Filesystem errors (collection and media copies)
    CFG - Configuration errors

Usage:
    from anki_deck.error_codes import ErrorCode

    logger.error(
        "deck_copy_failed",
        error_code=ErrorCode.FS_COPY_FAILED.value,
        destination=str(destination),
    )
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Structured error codes for machine-readable handling.

    All error codes inherit from str for JSON serialization compatibility.
    """

    # =========================================================================
    # AnkiConnect Errors (ANK-xxx-xxx)
    # =========================================================================
    ANK_CONNECTION_FAILED = "ANK-CONN-001"
    """Cannot reach AnkiConnect (refused, timed out, network error)."""

    ANK_HTTP_STATUS = "ANK-HTTP-001"
    """AnkiConnect answered with a non-2xx status."""

    ANK_API_ERROR = "ANK-API-001"
    """AnkiConnect returned a non-null error in its envelope."""

    ANK_MALFORMED_RESPONSE = "ANK-RESP-001"
    """Response body was not JSON or lacked the result/error envelope."""

    ANK_CARD_MALFORMED = "ANK-CARD-001"
    """A card payload has no fields mapping."""

    ANK_FIELD_ADD_FAILED = "ANK-FIELD-001"
    """Adding a field to a deck failed."""

    # =========================================================================
    # Filesystem Errors (FS-xxx-xxx)
    # =========================================================================
    FS_SOURCE_MISSING = "FS-SRC-001"
    """Collection file or media directory does not exist in the data dir."""

    FS_COPY_FAILED = "FS-COPY-001"
    """Copying the collection file or media directory failed."""

    # =========================================================================
    # Configuration Errors (CFG-xxx-xxx)
    # =========================================================================
    CFG_INVALID = "CFG-INVALID-001"
    """Configuration file is invalid or failed validation."""

    CFG_MISSING_KEY = "CFG-KEY-001"
    """A required environment input is missing."""


def is_retriable_error(code: ErrorCode) -> bool:
    """Check if an error code represents a transient failure.

    The client never retries on its own; callers may use this to decide
    whether re-running an operation is worthwhile.
    """
    return code in {ErrorCode.ANK_CONNECTION_FAILED, ErrorCode.ANK_HTTP_STATUS}


def get_error_severity(code: ErrorCode) -> str:
    """Get the severity level for an error code.

    Returns:
        Severity level: "critical", "error", "warning"
    """
    if code in {ErrorCode.CFG_INVALID, ErrorCode.CFG_MISSING_KEY}:
        return "critical"
    if code is ErrorCode.ANK_CARD_MALFORMED:
        return "warning"
    return "error"
