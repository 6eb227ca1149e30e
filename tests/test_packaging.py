"""Tests for project metadata."""

import tomllib
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


def test_readme_is_a_real_file():
    project = tomllib.loads((ROOT / "pyproject.toml").read_text(encoding="utf-8"))["project"]

    readme = ROOT / project["readme"]
    assert readme.name == "README.md"
    assert readme.is_file()
    assert "anki-deck" in readme.read_text(encoding="utf-8")
