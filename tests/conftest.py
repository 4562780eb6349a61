"""Shared fakes for the archive pipeline."""

# pylint: disable=redefined-outer-name

from pathlib import Path

import pytest

from fcarch.scanner.filesystem import LocalFilesystem
from fcarch.timestamp import CanonicalTimestamp


class FakeMetadata:
    """Metadata source returning canned dates by file name."""

    def __init__(self, dates: dict[str, str] | None = None) -> None:
        self.dates = dates or {}
        self.calls: list[Path] = []

    def file_modify_date(self, path: Path) -> str:
        self.calls.append(path)
        return self.dates.get(path.name, "")


class SequentialIds:
    """Deterministic identifier generator."""

    def __init__(self, prefix: str = "ID") -> None:
        self.prefix = prefix
        self.count = 0

    def new_id(self) -> str:
        self.count += 1
        return f"{self.prefix}-{self.count:04d}"


class RecordingFilesystem(LocalFilesystem):
    """Lists and renames for real, records timestamp and attribute changes."""

    def __init__(self) -> None:
        self.renames: list[tuple[Path, Path]] = []
        self.mtimes: list[tuple[Path, CanonicalTimestamp]] = []
        self.hidden: list[Path] = []

    def rename(self, source: Path, target: Path) -> None:
        self.renames.append((source, target))
        super().rename(source, target)

    def set_mtime(self, path: Path, timestamp: CanonicalTimestamp) -> None:
        self.mtimes.append((path, timestamp))

    def hide_extension(self, path: Path) -> None:
        self.hidden.append(path)

    @property
    def mutated(self) -> bool:
        return bool(self.renames or self.mtimes or self.hidden)


@pytest.fixture
def metadata() -> FakeMetadata:
    return FakeMetadata()


@pytest.fixture
def identifiers() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def filesystem() -> RecordingFilesystem:
    return RecordingFilesystem()


@pytest.fixture
def media_dir(tmp_path: Path) -> Path:
    """Directory with one dated clip and one undated still."""
    source = tmp_path / "Shoot"
    source.mkdir()
    (source / "clip_2021.03.15_14.30.00.mov").write_bytes(b"mov")
    (source / "IMG_001.jpg").write_bytes(b"jpg")
    return source
