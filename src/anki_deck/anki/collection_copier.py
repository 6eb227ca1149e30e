"""Copy an Anki profile's collection file and media folder into a project."""

import shutil
from pathlib import Path

from anki_deck.error_codes import ErrorCode
from anki_deck.exceptions import DeckCopyError
from anki_deck.utils.logging import get_logger

logger = get_logger(__name__)

COLLECTION_FILENAME = "collection.anki2"
MEDIA_DIRNAME = "media"


def _missing_source(source: Path, destination: Path, what: str) -> DeckCopyError:
    return DeckCopyError(
        f"Source {what} does not exist: {source}",
        suggestion="Check APPDATA/ANKI_PROFILE (or ANKI_DATA_DIR) point at the Anki profile",
        error_code=ErrorCode.FS_SOURCE_MISSING.value,
        context={"source": str(source), "destination": str(destination)},
    )


def copy_collection(data_dir: Path, destination: Path) -> Path:
    """Copy ``collection.anki2`` into ``destination``, overwriting any existing file.

    Returns:
        Path of the copied file

    Raises:
        DeckCopyError: If the source is missing or the copy fails
    """
    source = data_dir / COLLECTION_FILENAME
    target = destination / COLLECTION_FILENAME
    if not source.is_file():
        raise _missing_source(source, destination, "collection file")

    try:
        destination.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
    except OSError as e:
        raise DeckCopyError(
            f"Failed to copy collection file: {e}",
            error_code=ErrorCode.FS_COPY_FAILED.value,
            context={"source": str(source), "destination": str(target)},
        ) from e

    logger.debug("collection_file_copied", source=str(source), destination=str(target))
    return target


def copy_media(data_dir: Path, destination: Path) -> Path:
    """Copy the media tree into ``destination/media``.

    Existing files in the destination media folder are kept; files with the
    same relative path are overwritten.

    Returns:
        Path of the destination media directory

    Raises:
        DeckCopyError: If the source is missing or the copy fails
    """
    source = data_dir / MEDIA_DIRNAME
    target = destination / MEDIA_DIRNAME
    if not source.is_dir():
        raise _missing_source(source, destination, "media directory")

    try:
        shutil.copytree(source, target, dirs_exist_ok=True)
    except OSError as e:
        raise DeckCopyError(
            f"Failed to copy media directory: {e}",
            error_code=ErrorCode.FS_COPY_FAILED.value,
            context={"source": str(source), "destination": str(target)},
        ) from e

    logger.debug("media_directory_copied", source=str(source), destination=str(target))
    return target
