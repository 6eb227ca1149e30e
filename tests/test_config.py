"""Tests for settings loading and DeckConfig resolution."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from anki_deck.config import DeckConfig, Settings, get_config, load_config, set_config
from anki_deck.error_codes import ErrorCode
from anki_deck.exceptions import ConfigurationError
from anki_deck.utils.pacing import PacingPolicy

ENV_VARS = (
    "ANKI_CONNECT_URL",
    "APPDATA",
    "ANKI_PROFILE",
    "ANKI_DATA_DIR",
    "ANKI_REQUEST_DELAY",
    "ANKI_PACING_POLICY",
    "ANKI_TIMEOUT",
    "ANKI_DECK_CONFIG",
    "LOG_LEVEL",
    "LOG_FILE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from the host environment and any .env/config.yaml."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_data_dir_derived_from_appdata_and_profile(monkeypatch, tmp_path):
    monkeypatch.setenv("APPDATA", str(tmp_path / "Roaming"))
    monkeypatch.setenv("ANKI_PROFILE", "User 1")

    config = Settings().to_deck_config()

    assert config.data_dir == tmp_path / "Roaming" / "Anki2" / "User 1"
    assert config.collection_path == config.data_dir / "collection.anki2"
    assert config.media_path == config.data_dir / "media"


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("ANKI_DATA_DIR", str(tmp_path))

    config = Settings().to_deck_config()

    assert config.anki_connect_url == "http://localhost:8765"
    assert config.request_delay == 0.1
    assert config.pacing_policy is PacingPolicy.FIXED_DELAY
    assert config.timeout == 30.0


def test_explicit_data_dir_wins(monkeypatch, tmp_path):
    monkeypatch.setenv("APPDATA", str(tmp_path / "Roaming"))
    monkeypatch.setenv("ANKI_PROFILE", "User 1")
    monkeypatch.setenv("ANKI_DATA_DIR", str(tmp_path / "profile"))

    assert Settings().resolve_data_dir() == tmp_path / "profile"


def test_missing_profile_inputs_raise(monkeypatch, tmp_path):
    monkeypatch.setenv("APPDATA", str(tmp_path))

    with pytest.raises(ConfigurationError, match="ANKI_PROFILE") as exc_info:
        Settings().to_deck_config()

    assert exc_info.value.error_code == ErrorCode.CFG_MISSING_KEY.value
    assert exc_info.value.context == {"missing": ["ANKI_PROFILE"]}


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("ANKI_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("ANKI_CONNECT_URL", "http://127.0.0.1:9999")
    monkeypatch.setenv("ANKI_REQUEST_DELAY", "0")
    monkeypatch.setenv("ANKI_PACING_POLICY", "min_interval")
    monkeypatch.setenv("ANKI_TIMEOUT", "5")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings()
    config = settings.to_deck_config()

    assert config.anki_connect_url == "http://127.0.0.1:9999"
    assert config.request_delay == 0
    assert config.pacing_policy is PacingPolicy.MIN_INTERVAL
    assert config.timeout == 5.0
    assert settings.log_level == "DEBUG"


def test_unprefixed_env_names_are_ignored(monkeypatch, tmp_path):
    """Test that generic TIMEOUT-style variables do not leak into the client."""
    monkeypatch.setenv("ANKI_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TIMEOUT", "7")
    monkeypatch.setenv("REQUEST_DELAY", "3")
    monkeypatch.setenv("PACING_POLICY", "min_interval")

    config = Settings().to_deck_config()

    assert config.timeout == 30.0
    assert config.request_delay == 0.1
    assert config.pacing_policy is PacingPolicy.FIXED_DELAY


def test_input_name_maps_fields_to_env_names(tmp_path):
    assert Settings.input_name("timeout") == "ANKI_TIMEOUT"
    assert Settings.input_name("anki_profile") == "anki_profile"

    settings = Settings(
        anki_data_dir=tmp_path,
        **{Settings.input_name("request_delay"): 0, Settings.input_name("timeout"): 2.5},
    )

    assert settings.request_delay == 0
    assert settings.timeout == 2.5


def test_deck_config_is_immutable(tmp_path):
    config = DeckConfig(data_dir=tmp_path)

    with pytest.raises(ValidationError):
        config.request_delay = 1.0


def test_deck_config_rejects_negative_delay(tmp_path):
    with pytest.raises(ValidationError):
        DeckConfig(data_dir=tmp_path, request_delay=-1)


def test_load_config_reads_yaml(tmp_path):
    config_file = tmp_path / "anki.yaml"
    config_file.write_text(
        "anki_connect_url: http://anki.local:8765\n"
        f"anki_data_dir: {tmp_path / 'profile'}\n"
        "request_delay: 0.25\n",
        encoding="utf-8",
    )

    settings = load_config(config_file)

    assert settings.anki_connect_url == "http://anki.local:8765"
    assert settings.resolve_data_dir() == tmp_path / "profile"
    assert settings.request_delay == 0.25


def test_yaml_values_win_over_env(monkeypatch, tmp_path):
    monkeypatch.setenv("ANKI_TIMEOUT", "5")
    config_file = tmp_path / "anki.yaml"
    config_file.write_text("timeout: 12\npacing_policy: min_interval\n", encoding="utf-8")

    settings = load_config(config_file)

    assert settings.timeout == 12.0
    assert settings.pacing_policy is PacingPolicy.MIN_INTERVAL


def test_load_config_picks_up_cwd_config_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("anki_profile: Work\n", encoding="utf-8")

    assert load_config().anki_profile == "Work"


def test_load_config_invalid_yaml_strict(tmp_path):
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("anki_connect_url: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Failed to parse config file"):
        load_config(config_file)


def test_load_config_invalid_yaml_lenient(tmp_path):
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("anki_connect_url: [unclosed\n", encoding="utf-8")

    settings = load_config(config_file, strict_config=False)

    assert settings.anki_connect_url == "http://localhost:8765"


def test_set_and_get_config(tmp_path):
    settings = Settings(anki_data_dir=Path(tmp_path))
    set_config(settings)

    assert get_config() is settings
