"""Unique identifiers for archives and clips."""

import uuid
from collections.abc import Iterable
from typing import Protocol

from fcarch.scanner.filesystem import MediaFile


class IdentityError(Exception):
    """Raised when the identifier generator returns an unusable value."""


class IdentifierGenerator(Protocol):
    def new_id(self) -> str:
        """Return a fresh identifier, unique for the lifetime of the archive."""


class UuidGenerator:
    """Random UUIDs in the upper-case form printed by uuidgen."""

    def new_id(self) -> str:
        return str(uuid.uuid4()).upper()


class IdentityAssigner:
    """Requests identifiers for the archive and each of its clips."""

    def __init__(self, generator: IdentifierGenerator) -> None:
        self.generator = generator

    def archive_id(self) -> str:
        return self._next()

    def assign(self, media_files: Iterable[MediaFile]) -> list[str]:
        return [self._next() for _ in media_files]

    def _next(self) -> str:
        identifier = self.generator.new_id().strip()
        if not identifier:
            raise IdentityError("Identifier generator returned an empty identifier")
        return identifier
