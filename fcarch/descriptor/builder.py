"""Builds and writes the FCArchMetadata.plist descriptor."""

import logging
import plistlib
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from fcarch.descriptor.models import ArchiveDescriptor
from fcarch.timestamp import CanonicalTimestamp

logger = logging.getLogger(__name__)

# Property list keys
ARCHIVE_ID_KEY = "archiveID"
ARCHIVE_DATE_KEY = "archiveDate"
ARCHIVE_VERSION_KEY = "archiveVersion"
CLIPS_KEY = "clips"
CLIP_ID_KEY = "clipID"
DEVICE_NAME_KEY = "deviceName"
IS_CAPTURE_KEY = "isCapture"


class DescriptorBuilder:
    """Assembles archive identity and dates into the descriptor document.

    Only clip identifiers are written per clip. Clip paths and resolved
    clip dates stay out of the document.
    """

    def __init__(self, format_version: int = 1) -> None:
        self.format_version = format_version

    def build(
        self,
        archive_id: str,
        archive_date: CanonicalTimestamp | None,
        clip_ids: Sequence[str],
        device_name: str,
    ) -> ArchiveDescriptor:
        return ArchiveDescriptor(
            archive_id=archive_id,
            archive_date=archive_date,
            clip_ids=tuple(clip_ids),
            device_name=device_name,
            is_capture=True,
            version=self.format_version,
        )

    def to_plist(self, descriptor: ArchiveDescriptor) -> dict[str, Any]:
        document: dict[str, Any] = {ARCHIVE_ID_KEY: descriptor.archive_id}
        if descriptor.archive_date is not None:
            document[ARCHIVE_DATE_KEY] = descriptor.archive_date.descriptor_format()
        document[ARCHIVE_VERSION_KEY] = descriptor.version
        document[CLIPS_KEY] = [{CLIP_ID_KEY: clip_id} for clip_id in descriptor.clip_ids]
        document[DEVICE_NAME_KEY] = descriptor.device_name
        document[IS_CAPTURE_KEY] = descriptor.is_capture
        return document

    def write(self, descriptor: ArchiveDescriptor, path: Path) -> None:
        """Serialize the descriptor as an XML property list.

        plistlib escapes XML reserved characters, so free-text fields such as
        the device name cannot break the document structure.
        """
        with open(path, "wb") as handle:
            plistlib.dump(self.to_plist(descriptor), handle, fmt=plistlib.FMT_XML, sort_keys=False)
        logger.info("Wrote descriptor with %d clips to %s", len(descriptor.clip_ids), path)
