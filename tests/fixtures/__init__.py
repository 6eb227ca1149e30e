"""Test fixtures package."""

from .anki_connect_stub import AnkiConnectStub, make_card

__all__ = ["AnkiConnectStub", "make_card"]
