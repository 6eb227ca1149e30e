"""Environment-backed settings (pydantic-settings)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .config_models import DeckConfig
from .error_codes import ErrorCode
from .exceptions import ConfigurationError
from .utils.pacing import PacingPolicy

ANKI_DATA_FOLDER = "Anki2"


class Settings(BaseSettings):
    """Settings resolved from the environment and an optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )

    anki_connect_url: str = Field(
        default="http://localhost:8765", description="AnkiConnect URL"
    )

    # Profile location: <APPDATA>/Anki2/<ANKI_PROFILE>, unless ANKI_DATA_DIR is set
    appdata: Path | None = Field(default=None, description="Application data root")
    anki_profile: str | None = Field(default=None, description="Anki profile name")
    anki_data_dir: Path | None = Field(
        default=None, description="Explicit profile directory (overrides APPDATA)"
    )

    # Read only from the ANKI_-prefixed names; a bare TIMEOUT in the shell is ignored
    request_delay: float = Field(
        default=0.1, ge=0.0, validation_alias=AliasChoices("ANKI_REQUEST_DELAY")
    )
    pacing_policy: PacingPolicy = Field(
        default=PacingPolicy.FIXED_DELAY,
        validation_alias=AliasChoices("ANKI_PACING_POLICY"),
    )
    timeout: float = Field(
        default=30.0, gt=0.0, validation_alias=AliasChoices("ANKI_TIMEOUT")
    )

    log_level: str = Field(default="INFO")
    log_file: Path | None = Field(default=None)

    @field_validator("appdata", "anki_data_dir", "log_file", mode="before")
    @classmethod
    def parse_path(cls, v: Any) -> Path | None:
        """Convert string to Path, expanding the user home."""
        if v is None or v == "":
            return None
        if isinstance(v, (str, Path)):
            return Path(v).expanduser()
        msg = f"Path field must be string or Path, got {type(v).__name__}"
        raise ValueError(msg)

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @classmethod
    def input_name(cls, field_name: str) -> str:
        """Name under which a field is accepted from env vars and overlays."""
        alias = cls.model_fields[field_name].validation_alias
        if isinstance(alias, AliasChoices):
            return str(alias.choices[0])
        return field_name

    def resolve_data_dir(self) -> Path:
        """Resolve the Anki profile directory.

        Raises:
            ConfigurationError: If neither ANKI_DATA_DIR nor both APPDATA and
                ANKI_PROFILE are set
        """
        if self.anki_data_dir is not None:
            return self.anki_data_dir

        missing = [
            name
            for name, value in (("APPDATA", self.appdata), ("ANKI_PROFILE", self.anki_profile))
            if not value
        ]
        if missing:
            msg = f"Cannot locate Anki profile directory: {', '.join(missing)} not set"
            raise ConfigurationError(
                msg,
                suggestion=(
                    "Set APPDATA and ANKI_PROFILE, or point ANKI_DATA_DIR at the "
                    "profile folder containing collection.anki2"
                ),
                error_code=ErrorCode.CFG_MISSING_KEY.value,
                context={"missing": missing},
            )

        assert self.appdata is not None
        assert self.anki_profile is not None
        return self.appdata / ANKI_DATA_FOLDER / self.anki_profile

    def to_deck_config(self) -> DeckConfig:
        """Build the immutable client configuration."""
        return DeckConfig(
            anki_connect_url=self.anki_connect_url,
            data_dir=self.resolve_data_dir(),
            request_delay=self.request_delay,
            pacing_policy=self.pacing_policy,
            timeout=self.timeout,
        )


__all__ = ["ANKI_DATA_FOLDER", "Settings"]
