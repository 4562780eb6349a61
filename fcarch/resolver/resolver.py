"""Per-file date resolution and archive date aggregation."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from fcarch.extractor.exiftool import MetadataSource
from fcarch.resolver import TIMESTAMP_PATTERN, extract_filename_timestamp
from fcarch.scanner.filesystem import MediaFile
from fcarch.timestamp import EPOCH, SEPARATOR, CanonicalTimestamp


logger = logging.getLogger(__name__)


class DateSource(Enum):
    """Where a clip's timestamp came from."""

    FILENAME = "filename"
    METADATA = "metadata"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class DateResolution:
    timestamp: CanonicalTimestamp
    source: DateSource


@dataclass
class ResolverStats:
    """Statistics from a date resolution run."""

    total_files: int = 0
    filename_dates: int = 0
    metadata_dates: int = 0
    fallback_dates: int = 0

    def record(self, source: DateSource) -> None:
        self.total_files += 1
        if source is DateSource.FILENAME:
            self.filename_dates += 1
        elif source is DateSource.METADATA:
            self.metadata_dates += 1
        else:
            self.fallback_dates += 1


class MetadataDateProbe:
    """Reads a file date from container metadata, falling back to the epoch.

    A file whose metadata cannot be read gets 1970_01_01_00_00_00. Because the
    archive date is the earliest clip date, every such file drags the archive
    date to the epoch. Fallbacks are logged so the operator can spot them.
    """

    def __init__(self, source: MetadataSource) -> None:
        self.source = source

    def probe(self, path: Path) -> str:
        return self.probe_with_source(path)[0]

    def probe_with_source(self, path: Path) -> tuple[str, DateSource]:
        output = self.source.file_modify_date(path)
        match = TIMESTAMP_PATTERN.search(output) if output else None
        if match is None:
            logger.warning("No metadata date for %s, using %s", path, EPOCH)
            return str(EPOCH), DateSource.FALLBACK
        return SEPARATOR.join(match.groups()), DateSource.METADATA


class DateResolver:
    """Resolves a timestamp per media file: file name first, metadata second."""

    def __init__(self, probe: MetadataDateProbe) -> None:
        self.probe = probe
        self.stats = ResolverStats()

    def resolve(self, media_file: MediaFile) -> DateResolution:
        """
        Resolve the timestamp of a single file.

        The metadata probe only runs when the name has no timestamp.

        Raises:
            TimestampError: The resolved date is not a valid date/time.
        """
        text = extract_filename_timestamp(media_file.name)
        if text is not None:
            source = DateSource.FILENAME
        else:
            text, source = self.probe.probe_with_source(media_file.path)

        resolution = DateResolution(CanonicalTimestamp.parse(text), source)
        self.stats.record(source)
        logger.debug("%s -> %s (%s)", media_file.name, resolution.timestamp, source.value)
        return resolution

    def resolve_all(self, media_files: Iterable[MediaFile]) -> list[DateResolution]:
        resolutions = [self.resolve(media_file) for media_file in media_files]
        logger.info(
            "Resolved %d files: %d from names, %d from metadata, %d fallbacks",
            self.stats.total_files,
            self.stats.filename_dates,
            self.stats.metadata_dates,
            self.stats.fallback_dates,
        )
        return resolutions


def earliest_timestamp(timestamps: Iterable[CanonicalTimestamp]) -> CanonicalTimestamp:
    """Return the chronologically earliest timestamp.

    Raises:
        ValueError: timestamps is empty.
    """
    values = list(timestamps)
    if not values:
        raise ValueError("Cannot aggregate an empty set of timestamps")
    return min(values)
