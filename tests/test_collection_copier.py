"""Tests for copying the collection file and media folder."""

import pytest

from anki_deck.anki.collection_copier import copy_collection, copy_media
from anki_deck.error_codes import ErrorCode
from anki_deck.exceptions import DeckCopyError


def test_copy_collection_creates_destination(anki_data_dir, tmp_path):
    """Test that the destination folder is created when missing."""
    project = tmp_path / "new" / "project"

    target = copy_collection(anki_data_dir, project)

    assert target == project / "collection.anki2"
    assert target.read_bytes() == (anki_data_dir / "collection.anki2").read_bytes()


def test_copy_collection_overwrites_existing_file(anki_data_dir, tmp_path):
    """Test that an existing collection is replaced byte for byte."""
    project = tmp_path / "project"
    project.mkdir()
    (project / "collection.anki2").write_bytes(b"stale collection with more bytes")

    copy_collection(anki_data_dir, project)

    assert (project / "collection.anki2").read_bytes() == (
        anki_data_dir / "collection.anki2"
    ).read_bytes()


def test_copy_media_merges_into_existing_folder(anki_data_dir, tmp_path):
    """Test that unrelated media files survive the copy."""
    project = tmp_path / "project"
    (project / "media").mkdir(parents=True)
    (project / "media" / "keep.txt").write_text("mine", encoding="utf-8")

    copy_media(anki_data_dir, project)

    assert (project / "media" / "keep.txt").read_text(encoding="utf-8") == "mine"
    assert (project / "media" / "ec2.png").read_bytes() == b"\x89PNG ec2"
    assert (project / "media" / "sub" / "s3.mp3").read_bytes() == b"ID3 s3"


def test_copy_collection_missing_source(tmp_path):
    """Test that a missing collection raises DeckCopyError."""
    with pytest.raises(DeckCopyError) as exc_info:
        copy_collection(tmp_path / "nowhere", tmp_path / "project")

    assert exc_info.value.error_code == ErrorCode.FS_SOURCE_MISSING.value
    assert not (tmp_path / "project").exists()


def test_copy_media_missing_source(anki_data_dir, tmp_path):
    """Test that a missing media directory raises DeckCopyError."""
    (anki_data_dir / "media" / "ec2.png").unlink()
    (anki_data_dir / "media" / "sub" / "s3.mp3").unlink()
    (anki_data_dir / "media" / "sub").rmdir()
    (anki_data_dir / "media").rmdir()

    with pytest.raises(DeckCopyError, match="media directory"):
        copy_media(anki_data_dir, tmp_path / "project")
