"""Config loader utilities."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from .config_settings import Settings
from .error_codes import ErrorCode
from .exceptions import ConfigurationError
from .utils.logging import get_logger

_config: Settings | None = None


def _candidate_paths(config_path: Path | None) -> list[Path]:
    if config_path:
        return [config_path.expanduser()]

    candidates: list[Path] = []
    env_path = os.getenv("ANKI_DECK_CONFIG")
    if env_path:
        candidates.append(Path(env_path).expanduser())
    candidates.append(Path.cwd() / "config.yaml")
    return candidates


def load_config(
    config_path: Path | None = None, *, strict_config: bool = True
) -> Settings:
    """Load settings from the environment, .env and an optional config.yaml.

    Values found in the YAML file take precedence over environment variables.

    Args:
        config_path: Explicit YAML path (otherwise ANKI_DECK_CONFIG, then ./config.yaml)
        strict_config: Raise on unreadable YAML instead of logging a warning

    Raises:
        ConfigurationError: If the YAML file cannot be parsed in strict mode
    """
    logger = get_logger(__name__)

    candidates = _candidate_paths(config_path)
    resolved_config_path = next((p for p in candidates if p.exists()), None)
    if resolved_config_path is None:
        logger.debug("config_file_not_found", searched_paths=[str(p) for p in candidates])

    yaml_data: dict[str, Any] = {}
    if resolved_config_path:
        try:
            with open(resolved_config_path, encoding="utf-8") as f:
                yaml_data = yaml.safe_load(f) or {}
            if not isinstance(yaml_data, dict):
                msg = "top-level YAML value must be a mapping"
                raise TypeError(msg)
            logger.debug(
                "config_yaml_loaded",
                config_path=str(resolved_config_path),
                keys_count=len(yaml_data),
            )
        except (OSError, yaml.YAMLError, TypeError) as e:
            logger.error(
                "config_yaml_load_error",
                config_path=str(resolved_config_path),
                error=str(e),
                error_type=type(e).__name__,
            )
            if strict_config:
                msg = f"Failed to parse config file: {resolved_config_path}"
                raise ConfigurationError(
                    msg,
                    suggestion=(
                        "Check YAML syntax (indentation, colons, quotes). "
                        f"Original error: {e}"
                    ),
                    error_code=ErrorCode.CFG_INVALID.value,
                ) from e
            yaml_data = {}

    known_fields = set(Settings.model_fields)
    overrides = {
        Settings.input_name(k): v for k, v in yaml_data.items() if k in known_fields
    }
    unknown = sorted(set(yaml_data) - known_fields)
    if unknown:
        logger.warning("config_unknown_keys", keys=unknown)

    settings = Settings(**overrides)
    logger.debug(
        "config_loaded",
        anki_connect_url=settings.anki_connect_url,
        config_path=str(resolved_config_path) if resolved_config_path else None,
    )
    return settings


def get_config() -> Settings:
    """Get singleton settings instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Settings) -> None:
    """Set singleton settings instance (for testing)."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset global settings instance (for testing only)."""
    global _config
    _config = None


__all__ = ["get_config", "load_config", "reset_config", "set_config"]
