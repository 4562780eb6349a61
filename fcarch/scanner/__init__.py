"""Scanner module for media discovery and filesystem access."""

from .filesystem import Filesystem, LocalFilesystem, MediaFile, discover_media, parse_extension

__all__ = [
    "Filesystem",
    "LocalFilesystem",
    "MediaFile",
    "discover_media",
    "parse_extension",
]
