"""Tests for filename date extraction, metadata probing and aggregation."""

# pylint: disable=redefined-outer-name

import itertools
import random
from pathlib import Path

import pytest

from fcarch.resolver import extract_filename_timestamp
from fcarch.resolver.resolver import (
    DateResolver,
    DateSource,
    MetadataDateProbe,
    ResolverStats,
    earliest_timestamp,
)
from fcarch.scanner.filesystem import MediaFile
from fcarch.timestamp import EPOCH, CanonicalTimestamp, TimestampError

from .conftest import FakeMetadata


def _media(name: str) -> MediaFile:
    return MediaFile(path=Path("/archive") / name, extension=name.rsplit(".", 1)[-1], name=name)


class TestExtractFilenameTimestamp:
    """Tests for extract_filename_timestamp."""

    def test_dotted_groups(self) -> None:
        assert extract_filename_timestamp("clip_2021.03.15_14.30.00.mov") == "2021_03_15_14_30_00"

    def test_no_separators(self) -> None:
        assert extract_filename_timestamp("VID20210315143000.mp4") == "2021_03_15_14_30_00"

    def test_spaces_and_dashes(self) -> None:
        assert extract_filename_timestamp("2021-03-15 14-30-00.wav") == "2021_03_15_14_30_00"

    def test_every_separator_mix_normalizes(self) -> None:
        separators = [".", "_", " ", "-", ""]
        groups = ["2021", "03", "15", "14", "30", "00"]
        for seps in itertools.product(separators, repeat=5):
            name = "x" + groups[0] + "".join(s + g for s, g in zip(seps, groups[1:])) + ".mov"
            assert extract_filename_timestamp(name) == "2021_03_15_14_30_00", name

    def test_first_match_wins(self) -> None:
        name = "2020_01_02_03_04_05 copy of 2021_03_15_14_30_00.mov"
        assert extract_filename_timestamp(name) == "2020_01_02_03_04_05"

    def test_no_range_validation(self) -> None:
        assert extract_filename_timestamp("2021_13_45_99_99_99.mov") == "2021_13_45_99_99_99"

    def test_no_digits(self) -> None:
        assert extract_filename_timestamp("holiday.mov") is None

    def test_short_digit_run(self) -> None:
        assert extract_filename_timestamp("IMG_001.jpg") is None

    def test_date_only(self) -> None:
        assert extract_filename_timestamp("2021-03-15.jpg") is None

    def test_double_separator_breaks_pattern(self) -> None:
        assert extract_filename_timestamp("2021__03_15_14_30_00.mov") is None

    def test_unsupported_separator(self) -> None:
        assert extract_filename_timestamp("2021:03:15 14:30:00.mov") is None

    def test_trailing_milliseconds(self) -> None:
        assert extract_filename_timestamp("PXL_20210315_143000123.jpg") == "2021_03_15_14_30_00"

    def test_trailing_digit_after_seconds(self) -> None:
        assert extract_filename_timestamp("2021-03-15 14-30-001.mov") == "2021_03_15_14_30_00"

    def test_match_inside_longer_digit_run(self) -> None:
        assert extract_filename_timestamp("20210315143000123.mov") == "2021_03_15_14_30_00"

    def test_empty_name(self) -> None:
        assert extract_filename_timestamp("") is None


class TestMetadataDateProbe:
    """Tests for MetadataDateProbe."""

    def test_normalizes_probe_output(self) -> None:
        probe = MetadataDateProbe(FakeMetadata({"a.jpg": "2019_07_04_12_00_01"}))
        assert probe.probe(Path("/x/a.jpg")) == "2019_07_04_12_00_01"

    def test_normalizes_other_separators(self) -> None:
        probe = MetadataDateProbe(FakeMetadata({"a.jpg": "2019-07-04 12.00.01"}))
        assert probe.probe(Path("/x/a.jpg")) == "2019_07_04_12_00_01"

    def test_empty_output_falls_back_to_epoch(self) -> None:
        probe = MetadataDateProbe(FakeMetadata())
        assert probe.probe(Path("/x/a.jpg")) == "1970_01_01_00_00_00"

    def test_garbage_output_falls_back_to_epoch(self) -> None:
        probe = MetadataDateProbe(FakeMetadata({"a.jpg": "Warning: no such tag"}))
        text, source = probe.probe_with_source(Path("/x/a.jpg"))
        assert text == str(EPOCH)
        assert source is DateSource.FALLBACK


class TestDateResolver:
    """Tests for DateResolver."""

    def test_filename_date_skips_probe(self) -> None:
        metadata = FakeMetadata({"clip_2021.03.15_14.30.00.mov": "2000_01_01_00_00_00"})
        resolver = DateResolver(MetadataDateProbe(metadata))

        result = resolver.resolve(_media("clip_2021.03.15_14.30.00.mov"))

        assert result.timestamp == CanonicalTimestamp(2021, 3, 15, 14, 30, 0)
        assert result.source is DateSource.FILENAME
        assert metadata.calls == []

    def test_probe_used_when_name_has_no_date(self) -> None:
        metadata = FakeMetadata({"IMG_001.jpg": "2018_05_06_07_08_09"})
        resolver = DateResolver(MetadataDateProbe(metadata))

        result = resolver.resolve(_media("IMG_001.jpg"))

        assert result.timestamp == CanonicalTimestamp(2018, 5, 6, 7, 8, 9)
        assert result.source is DateSource.METADATA
        assert metadata.calls == [Path("/archive/IMG_001.jpg")]

    def test_probe_failure_yields_epoch(self) -> None:
        resolver = DateResolver(MetadataDateProbe(FakeMetadata()))
        result = resolver.resolve(_media("IMG_001.jpg"))
        assert result.timestamp == EPOCH
        assert result.source is DateSource.FALLBACK

    def test_invalid_filename_date_raises(self) -> None:
        resolver = DateResolver(MetadataDateProbe(FakeMetadata()))
        with pytest.raises(TimestampError):
            resolver.resolve(_media("2021_13_45_10_00_00.mov"))

    def test_stats(self) -> None:
        metadata = FakeMetadata({"b.jpg": "2018_05_06_07_08_09"})
        resolver = DateResolver(MetadataDateProbe(metadata))

        resolver.resolve_all(
            [_media("2021_03_15_14_30_00.mov"), _media("b.jpg"), _media("c.png")]
        )

        assert resolver.stats == ResolverStats(
            total_files=3, filename_dates=1, metadata_dates=1, fallback_dates=1
        )

    def test_scenario_mixed_directory(self) -> None:
        resolver = DateResolver(MetadataDateProbe(FakeMetadata()))
        results = resolver.resolve_all(
            [_media("clip_2021.03.15_14.30.00.mov"), _media("IMG_001.jpg")]
        )

        assert [str(r.timestamp) for r in results] == [
            "2021_03_15_14_30_00",
            "1970_01_01_00_00_00",
        ]
        assert str(earliest_timestamp(r.timestamp for r in results)) == "1970_01_01_00_00_00"


class TestEarliestTimestamp:
    """Tests for earliest_timestamp."""

    def test_single_value(self) -> None:
        ts = CanonicalTimestamp(2021, 3, 15, 14, 30, 0)
        assert earliest_timestamp([ts]) == ts

    def test_picks_earliest(self) -> None:
        values = [
            CanonicalTimestamp(2021, 3, 15, 14, 30, 0),
            CanonicalTimestamp(2021, 3, 15, 9, 59, 59),
            CanonicalTimestamp(2022, 1, 1, 0, 0, 0),
        ]
        assert earliest_timestamp(values) == CanonicalTimestamp(2021, 3, 15, 9, 59, 59)

    def test_order_independent(self) -> None:
        values = [CanonicalTimestamp(2000 + i, (i % 12) + 1, 1, i % 24, 0, 0) for i in range(20)]
        expected = earliest_timestamp(values)
        rng = random.Random(7)
        for _ in range(10):
            rng.shuffle(values)
            assert earliest_timestamp(values) == expected

    def test_matches_lexicographic_minimum(self) -> None:
        values = [
            CanonicalTimestamp(2021, 10, 1, 0, 0, 0),
            CanonicalTimestamp(2021, 9, 30, 23, 0, 0),
        ]
        assert str(earliest_timestamp(values)) == min(str(v) for v in values)

    def test_epoch_fallback_wins(self) -> None:
        values = [CanonicalTimestamp(2021, 3, 15, 14, 30, 0), EPOCH]
        assert earliest_timestamp(values) == EPOCH

    def test_empty_raises(self) -> None:
        with pytest.raises(ValueError):
            earliest_timestamp([])
