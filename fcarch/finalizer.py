"""Marks a directory as a Final Cut Pro archive bundle."""

import logging
from pathlib import Path

from fcarch.scanner.filesystem import Filesystem
from fcarch.timestamp import CanonicalTimestamp

logger = logging.getLogger(__name__)


class FinalizeError(Exception):
    """Raised when the archive directory cannot be renamed or retagged."""


def archive_path(directory: Path, suffix: str) -> Path:
    """Return the bundle path for directory, appending suffix at most once."""
    if directory.name.endswith(suffix):
        return directory
    return directory.with_name(directory.name + suffix)


class ArchiveFinalizer:
    """Renames, touches and tags the archive directory."""

    def __init__(self, filesystem: Filesystem, suffix: str = ".fcarch") -> None:
        self.filesystem = filesystem
        self.suffix = suffix

    def finalize(self, directory: Path, archive_date: CanonicalTimestamp) -> Path:
        target = archive_path(directory, self.suffix)

        try:
            if target != directory:
                if self.filesystem.exists(target):
                    raise FinalizeError(f"Cannot rename {directory}: {target} already exists")
                self.filesystem.rename(directory, target)
                logger.info("Renamed %s -> %s", directory, target)

            self.filesystem.set_mtime(target, archive_date)
            self.filesystem.hide_extension(target)
        except OSError as e:
            raise FinalizeError(f"Failed to finalize archive {directory}: {e}") from e

        return target
