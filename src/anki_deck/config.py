"""Configuration entrypoint (re-exported from split modules)."""

from .config_loader import get_config, load_config, reset_config, set_config
from .config_models import DeckConfig
from .config_settings import Settings

__all__ = [
    "DeckConfig",
    "Settings",
    "get_config",
    "load_config",
    "reset_config",
    "set_config",
]
