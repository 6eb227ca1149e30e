"""Immutable client configuration handed to DeckClient."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .utils.pacing import PacingPolicy


class DeckConfig(BaseModel):
    """Configuration fixed at DeckClient construction.

    The client never reads the environment itself; build this from
    ``Settings.to_deck_config()`` or directly in code and tests.
    """

    model_config = ConfigDict(frozen=True)

    anki_connect_url: str = Field(
        default="http://localhost:8765", description="AnkiConnect URL"
    )
    data_dir: Path = Field(
        description="Anki profile directory holding collection.anki2 and media/"
    )
    request_delay: float = Field(
        default=0.1,
        ge=0.0,
        description="Seconds to wait before each operation (0 disables pacing)",
    )
    pacing_policy: PacingPolicy = PacingPolicy.FIXED_DELAY
    timeout: float = Field(default=30.0, gt=0.0, description="HTTP timeout in seconds")

    @property
    def collection_path(self) -> Path:
        return self.data_dir / "collection.anki2"

    @property
    def media_path(self) -> Path:
        return self.data_dir / "media"


__all__ = ["DeckConfig"]
