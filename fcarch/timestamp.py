"""Canonical second-resolution timestamp used for clip and archive dates."""

from dataclasses import dataclass
from datetime import datetime
from typing import Self

SEPARATOR = "_"


class TimestampError(ValueError):
    """Raised when a date string does not form a valid calendar date/time."""


@dataclass(frozen=True, order=True)
class CanonicalTimestamp:
    """Local wall-clock time as (year, month, day, hour, minute, second)."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int

    def __post_init__(self) -> None:
        try:
            self.to_datetime()
        except ValueError as e:
            raise TimestampError(f"Invalid timestamp {self.fields}: {e}") from e

    @classmethod
    def parse(cls, text: str) -> Self:
        """Parse the canonical YYYY_MM_DD_HH_MM_SS form."""
        parts = text.split(SEPARATOR)
        widths = (4, 2, 2, 2, 2, 2)
        if len(parts) != len(widths) or any(
            len(part) != width or not part.isdigit() for part, width in zip(parts, widths)
        ):
            raise TimestampError(f"Malformed timestamp string: {text!r}")
        return cls(*(int(part) for part in parts))

    @classmethod
    def from_datetime(cls, value: datetime) -> Self:
        return cls(value.year, value.month, value.day, value.hour, value.minute, value.second)

    @classmethod
    def now(cls) -> Self:
        return cls.from_datetime(datetime.now())

    @property
    def fields(self) -> tuple[int, int, int, int, int, int]:
        return (self.year, self.month, self.day, self.hour, self.minute, self.second)

    def to_datetime(self) -> datetime:
        return datetime(*self.fields)

    def timestamp(self) -> float:
        """POSIX seconds, interpreting the value as local time."""
        return self.to_datetime().timestamp()

    def descriptor_format(self) -> str:
        return " ".join(self._padded())

    def _padded(self) -> list[str]:
        return [f"{self.year:04d}"] + [f"{value:02d}" for value in self.fields[1:]]

    def __str__(self) -> str:
        return SEPARATOR.join(self._padded())


# Probe fallback; sorts before any real capture date.
EPOCH = CanonicalTimestamp(1970, 1, 1, 0, 0, 0)
