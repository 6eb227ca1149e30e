"""Pytest configuration and fixtures for the test suite."""

from pathlib import Path

import pytest
import respx

from anki_deck.anki.deck_client import DeckClient
from anki_deck.config import DeckConfig, reset_config
from anki_deck.utils.pacing import RequestPacer
from tests.fixtures import AnkiConnectStub

ANKI_URL = "http://localhost:8765"


@pytest.fixture
def anki_url() -> str:
    """Mock AnkiConnect URL."""
    return ANKI_URL


@pytest.fixture
def anki_data_dir(tmp_path: Path) -> Path:
    """Provide a fake Anki profile folder with a collection and media."""
    data_dir = tmp_path / "Anki2" / "User 1"
    media = data_dir / "media"
    (media / "sub").mkdir(parents=True)
    (data_dir / "collection.anki2").write_bytes(b"SQLite format 3\x00collection")
    (media / "ec2.png").write_bytes(b"\x89PNG ec2")
    (media / "sub" / "s3.mp3").write_bytes(b"ID3 s3")
    return data_dir


@pytest.fixture
def deck_config(anki_url: str, anki_data_dir: Path) -> DeckConfig:
    """Provide a client configuration pointing at the fake profile."""
    return DeckConfig(anki_connect_url=anki_url, data_dir=anki_data_dir, request_delay=0)


@pytest.fixture
def anki_connect(anki_url: str):
    """Route all AnkiConnect traffic to an AnkiConnectStub."""
    stub = AnkiConnectStub()
    with respx.mock(assert_all_called=False) as router:
        router.post(anki_url).mock(side_effect=stub)
        yield stub


@pytest.fixture
def deck_client(deck_config: DeckConfig) -> DeckClient:
    """Provide a DeckClient with pacing disabled."""
    return DeckClient(deck_config, pacer=RequestPacer(0))


@pytest.fixture(autouse=True)
def _reset_global_config():
    yield
    reset_config()
