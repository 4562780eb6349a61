"""Filesystem traversal and mutation for archive directories."""

import logging
import os
import shutil
import subprocess
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from fcarch.timestamp import CanonicalTimestamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MediaFile:
    path: Path
    extension: str
    name: str


class Filesystem(Protocol):
    """Filesystem operations the archive pipeline depends on."""

    def list_files(self, root: Path) -> list[Path]:
        """Return every regular file below root, recursively, sorted by path."""

    def exists(self, path: Path) -> bool:
        """Return True when something already exists at path."""

    def rename(self, source: Path, target: Path) -> None:
        """Rename source to target."""

    def set_mtime(self, path: Path, timestamp: CanonicalTimestamp) -> None:
        """Set the modification time of path."""

    def hide_extension(self, path: Path) -> None:
        """Mark path so Finder does not display its extension."""


def parse_extension(filename: str) -> str | None:
    dot_index = filename.rfind(".")

    if dot_index <= 0 or dot_index == len(filename) - 1:
        return None

    return filename[dot_index + 1 :].lower()


def discover_media(
    paths: Iterable[Path],
    extensions: frozenset[str],
    exclude: frozenset[str] = frozenset(),
) -> list[MediaFile]:
    """Build MediaFile records for paths with a supported extension."""
    media: list[MediaFile] = []
    for path in paths:
        if path.name in exclude:
            continue
        extension = parse_extension(path.name)
        if extension is None or extension not in extensions:
            logger.debug("Skipping unsupported file: %s", path)
            continue
        media.append(MediaFile(path=path.resolve(), extension=extension, name=path.name))
    return media


class LocalFilesystem:
    """Filesystem adapter backed by the local OS."""

    SETFILE = "SetFile"

    def list_files(self, root: Path) -> list[Path]:
        return sorted(_walk_files(root))

    def exists(self, path: Path) -> bool:
        return os.path.lexists(path)

    def rename(self, source: Path, target: Path) -> None:
        os.rename(source, target)

    def set_mtime(self, path: Path, timestamp: CanonicalTimestamp) -> None:
        seconds = timestamp.timestamp()
        os.utime(path, (seconds, seconds))

    def hide_extension(self, path: Path) -> None:
        if not shutil.which(self.SETFILE):
            logger.warning(
                "%s not found (Xcode command line tools); extension of %s stays visible",
                self.SETFILE,
                path,
            )
            return

        result = subprocess.run(
            [self.SETFILE, "-a", "E", str(path)],
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            raise OSError(f"{self.SETFILE} failed for {path}: {result.stderr.strip()}")


def _walk_files(directory: Path) -> Iterator[Path]:
    try:
        with os.scandir(directory) as entries:
            for entry in sorted(entries, key=lambda e: e.name):
                if entry.is_symlink():
                    continue
                if entry.is_dir(follow_symlinks=False):
                    yield from _walk_files(Path(entry.path))
                elif entry.is_file(follow_symlinks=False):
                    yield Path(entry.path)
    except PermissionError:
        logger.warning("Permission denied scanning directory: %s", directory)
    except OSError as e:
        logger.error("Error scanning directory %s: %s", directory, e)
