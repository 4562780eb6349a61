"""Archive pipeline: discovery, date resolution, identity, descriptor, finalize."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from fcarch.config import ArchiveConfig
from fcarch.descriptor import ArchiveDescriptor, DescriptorBuilder
from fcarch.extractor.exiftool import ExiftoolRunner, MetadataSource
from fcarch.finalizer import ArchiveFinalizer
from fcarch.identity import IdentifierGenerator, IdentityAssigner, UuidGenerator
from fcarch.resolver.resolver import (
    DateResolver,
    DateSource,
    MetadataDateProbe,
    ResolverStats,
    earliest_timestamp,
)
from fcarch.scanner.filesystem import Filesystem, LocalFilesystem, MediaFile, discover_media
from fcarch.timestamp import CanonicalTimestamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedClip:
    media_file: MediaFile
    clip_id: str
    timestamp: CanonicalTimestamp | None = None
    date_source: DateSource | None = None


@dataclass
class ArchiveRun:
    """State owned by a single archive run."""

    directory: Path
    touch: bool
    device_name: str
    media_files: list[MediaFile] = field(default_factory=list)
    clips: list[ResolvedClip] = field(default_factory=list)
    archive_id: str | None = None
    archive_date: CanonicalTimestamp | None = None
    descriptor: ArchiveDescriptor | None = None
    descriptor_path: Path | None = None
    final_directory: Path | None = None
    stats: ResolverStats = field(default_factory=ResolverStats)


class ArchiveBuilder:
    """Turns a directory of media files into a Final Cut Pro archive."""

    def __init__(
        self,
        config: ArchiveConfig | None = None,
        metadata: MetadataSource | None = None,
        identifiers: IdentifierGenerator | None = None,
        filesystem: Filesystem | None = None,
    ) -> None:
        self.config = config or ArchiveConfig()
        self.metadata = metadata or ExiftoolRunner(
            tag=self.config.exiftool_tag, timeout=self.config.probe_timeout
        )
        self.identity = IdentityAssigner(identifiers or UuidGenerator())
        self.filesystem = filesystem or LocalFilesystem()
        self.descriptor_builder = DescriptorBuilder(self.config.format_version)
        self.finalizer = ArchiveFinalizer(self.filesystem, self.config.archive_suffix)

    def descriptor_path(self, directory: Path) -> Path:
        return directory / self.config.descriptor_name

    def build(self, directory: Path, device_name: str, touch: bool = True) -> ArchiveRun:
        """
        Run the whole pipeline on directory.

        With touch disabled, no dates are resolved and the directory is left
        unrenamed and untouched; the archive date is the current time.

        Raises:
            TimestampError: A resolved clip date is not a valid date/time.
            IdentityError: The identifier generator returned an empty value.
            FinalizeError: The directory could not be renamed or retagged.
        """
        run = ArchiveRun(directory=directory.resolve(), touch=touch, device_name=device_name)

        self._discover(run)
        archive_id, archive_date = self._resolve(run)
        self._write_descriptor(run, archive_id, archive_date)

        if run.touch:
            run.final_directory = self.finalizer.finalize(run.directory, archive_date)
        else:
            run.final_directory = run.directory

        return run

    def _discover(self, run: ArchiveRun) -> None:
        paths = self.filesystem.list_files(run.directory)
        run.media_files = discover_media(
            paths,
            self.config.supported_extensions,
            exclude=frozenset({self.config.descriptor_name}),
        )
        logger.info("Found %d media files in %s", len(run.media_files), run.directory)

    def _resolve(self, run: ArchiveRun) -> tuple[str, CanonicalTimestamp]:
        if run.touch:
            resolver = DateResolver(MetadataDateProbe(self.metadata))
            resolutions = resolver.resolve_all(run.media_files)
            run.stats = resolver.stats
        else:
            resolutions = [None] * len(run.media_files)

        archive_id = self.identity.archive_id()
        clip_ids = self.identity.assign(run.media_files)

        run.clips = [
            ResolvedClip(
                media_file=media_file,
                clip_id=clip_id,
                timestamp=resolution.timestamp if resolution else None,
                date_source=resolution.source if resolution else None,
            )
            for media_file, clip_id, resolution in zip(run.media_files, clip_ids, resolutions)
        ]

        if run.touch and run.clips:
            archive_date = earliest_timestamp(
                clip.timestamp for clip in run.clips if clip.timestamp is not None
            )
        else:
            if run.touch:
                logger.warning(
                    "No media files in %s; using current time as archive date", run.directory
                )
            archive_date = CanonicalTimestamp.now()

        run.archive_id = archive_id
        run.archive_date = archive_date
        return archive_id, archive_date

    def _write_descriptor(
        self, run: ArchiveRun, archive_id: str, archive_date: CanonicalTimestamp
    ) -> None:
        run.descriptor = self.descriptor_builder.build(
            archive_id=archive_id,
            archive_date=archive_date,
            clip_ids=[clip.clip_id for clip in run.clips],
            device_name=run.device_name,
        )
        run.descriptor_path = self.descriptor_path(run.directory)
        self.descriptor_builder.write(run.descriptor, run.descriptor_path)
