"""fcarch - Bundle a directory of media files as a Final Cut Pro archive."""

__version__ = "0.1.0"

from fcarch.pipeline import ArchiveBuilder, ArchiveRun

__all__ = ["ArchiveBuilder", "ArchiveRun"]
