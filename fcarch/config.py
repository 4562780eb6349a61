"""Configuration module for fcarch."""

from dataclasses import dataclass, field

MEDIA_EXTENSIONS: frozenset[str] = frozenset(
    {
        # Video
        "mov",
        "mp4",
        "avi",
        "m4v",
        "mxf",
        "mts",
        "m2t",
        # Audio
        "wav",
        "mp3",
        "aac",
        "m4a",
        "aiff",
        "aif",
        # Stills
        "jpeg",
        "jpg",
        "png",
        "tiff",
        "bmp",
        "gif",
        "tif",
    }
)


@dataclass
class ArchiveConfig:
    descriptor_name: str = "FCArchMetadata.plist"
    archive_suffix: str = ".fcarch"
    format_version: int = 1
    supported_extensions: frozenset[str] = MEDIA_EXTENSIONS
    exiftool_tag: str = "FileModifyDate"
    probe_timeout: float | None = None


@dataclass
class Config:
    archive: ArchiveConfig = field(default_factory=ArchiveConfig)
