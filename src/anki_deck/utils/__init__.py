"""Utility modules for anki-deck."""
