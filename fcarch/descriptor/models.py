"""Data models for the archive descriptor."""

from dataclasses import dataclass

from fcarch.timestamp import CanonicalTimestamp


@dataclass(frozen=True)
class ArchiveDescriptor:
    """Contents of FCArchMetadata.plist."""

    archive_id: str
    archive_date: CanonicalTimestamp | None
    clip_ids: tuple[str, ...]
    device_name: str
    is_capture: bool = True
    version: int = 1
