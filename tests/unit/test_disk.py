"""Tests for disk size parsing."""

import pytest

from clustergate.exceptions import DiskSizeFormatError, DiskSizeRangeError, ValidationError
from clustergate.validation.disk import parse_disk_size_to_gibibytes


class TestParseDiskSizeToGibibytes:
    """Tests for parse_disk_size_to_gibibytes."""

    @pytest.mark.parametrize(
        "size,expected",
        [
            ("100 G", 93),
            ("100GB", 93),
            ("100Gb", 93),
            ("100g", 93),
            ("100 TB", 93132),
            ("100 T ", 93132),
            ("1 T", 931),
        ],
    )
    def test_decimal_units_truncate_to_gibibytes(self, size: str, expected: int) -> None:
        """Test decimal units are converted and truncated toward zero."""
        assert parse_disk_size_to_gibibytes(size) == expected

    @pytest.mark.parametrize(
        "size,expected",
        [
            ("100GiB", 100),
            ("100gib", 100),
            ("100 gib", 100),
            ("100Gi", 100),
            ("0 GiB", 0),
            ("1000 Ti", 1024000),
            ("2TiB", 2048),
        ],
    )
    def test_binary_units_convert_exactly(self, size: str, expected: int) -> None:
        """Test binary units convert without rounding."""
        assert parse_disk_size_to_gibibytes(size) == expected

    def test_decimal_gigabytes_match_ratio(self) -> None:
        """Test G results follow floor(N * 1000**3 / 1024**3)."""
        for magnitude in (1, 7, 128, 300, 1000, 16384):
            expected = magnitude * 1000**3 // 1024**3
            assert parse_disk_size_to_gibibytes(f"{magnitude}G") == expected

    def test_empty_string_returns_zero(self) -> None:
        """Test empty size means unspecified."""
        assert parse_disk_size_to_gibibytes("") == 0

    @pytest.mark.parametrize("size", ["0", "1", "500", "  42  ", "99999999999999999999999"])
    def test_bare_integer_returns_zero(self, size: str) -> None:
        """Test a magnitude without a unit is treated as unspecified."""
        assert parse_disk_size_to_gibibytes(size) == 0

    @pytest.mark.parametrize("size", ["1foo", "1K", "1KiB", "1 MiB", "1 mib", "1.5G", "G", "abc"])
    def test_invalid_format_raises(self, size: str) -> None:
        """Test unknown units and malformed magnitudes are format errors."""
        with pytest.raises(DiskSizeFormatError):
            parse_disk_size_to_gibibytes(size)

    @pytest.mark.parametrize("size", ["١٠٠ G", "١٠٠", "１００GiB", "1٠ G"])
    def test_non_ascii_digits_raise(self, size: str) -> None:
        """Test only ASCII digits are accepted as a magnitude."""
        with pytest.raises(DiskSizeFormatError):
            parse_disk_size_to_gibibytes(size)

    def test_negative_magnitude_raises(self) -> None:
        """Test a leading minus sign is rejected."""
        with pytest.raises(DiskSizeFormatError, match="cannot be negative"):
            parse_disk_size_to_gibibytes("-1")

    @pytest.mark.parametrize(
        "size",
        [
            "200000000000000 Ti",
            "200000000000000000000Ti",
            "-200000000000000000000Ti",
            "-99999999999999999999999",
        ],
    )
    def test_overflow_raises(self, size: str) -> None:
        """Test sizes beyond a signed 64-bit integer are range errors."""
        with pytest.raises(DiskSizeRangeError):
            parse_disk_size_to_gibibytes(size)

    def test_errors_are_value_errors(self) -> None:
        """Test parse failures can be handled as ValueError."""
        with pytest.raises(ValueError):
            parse_disk_size_to_gibibytes("1foo")

        assert issubclass(DiskSizeRangeError, ValidationError)
