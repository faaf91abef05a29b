"""Tests for size and duration formatting."""

import re

import pytest

from s3_tester.units import (
    GIB,
    KIB,
    MIB,
    TIB,
    format_duration,
    human_readable_size,
)

UNIT_FACTORS = {"B": 1, "KiB": KIB, "MiB": MIB, "GiB": GIB, "TiB": TIB}


def parse_size(text: str) -> float:
    """Turn formatted output back into a byte count."""
    match = re.fullmatch(r"([0-9.]+) (B|KiB|MiB|GiB|TiB)", text)
    assert match, f"Unexpected format: {text}"
    return float(match.group(1)) * UNIT_FACTORS[match.group(2)]


class TestHumanReadableSize:
    """Tests for human_readable_size function."""

    @pytest.mark.parametrize(
        "size, expected",
        [
            (0, "0 B"),
            (1, "1 B"),
            (1023, "1023 B"),
            (1024, "1.00 KiB"),
            (1536, "1.50 KiB"),
            (1048575, "1024.00 KiB"),
            (1048576, "1.00 MiB"),
            (5 * MIB, "5.00 MiB"),
            (GIB - 1, "1024.00 MiB"),
            (GIB, "1.00 GiB"),
            (TIB, "1.00 TiB"),
            (2048 * TIB, "2048.00 TiB"),
        ],
    )
    def test_unit_boundaries(self, size: int, expected: str):
        """Thresholds are strict less-than for every unit."""
        assert human_readable_size(size) == expected

    def test_bytes_are_exact(self):
        """Values below 1 KiB come back exactly."""
        for size in (0, 7, 512, 1023):
            assert parse_size(human_readable_size(size)) == size

    @pytest.mark.parametrize(
        "size",
        [1024, 1500, 99_999, 1_234_567, 3 * GIB + 17, 7 * TIB + 123_456_789, 2**63 - 1],
    )
    def test_large_values_within_half_percent(self, size: int):
        """Formatted values stay within 0.5% of the input."""
        parsed = parse_size(human_readable_size(size))
        assert abs(parsed - size) <= size * 0.005

    def test_negative_raises(self):
        """Negative sizes are rejected."""
        with pytest.raises(ValueError, match="non-negative"):
            human_readable_size(-1)


class TestFormatDuration:
    """Tests for format_duration function."""

    def test_milliseconds(self):
        assert format_duration(0.25) == "250.000ms"

    def test_seconds(self):
        assert format_duration(2.5) == "2.500s"

    def test_minutes(self):
        assert format_duration(65.0) == "1m5.000s"

    def test_zero(self):
        assert format_duration(0.0) == "0.000ms"
