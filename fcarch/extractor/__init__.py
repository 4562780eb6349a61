"""Metadata probing of media files."""

from fcarch.extractor.exiftool import ExiftoolRunner, MetadataSource

__all__ = [
    "ExiftoolRunner",
    "MetadataSource",
]
