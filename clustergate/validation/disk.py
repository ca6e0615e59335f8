"""Disk size parsing for worker and machine pool root volumes."""

from __future__ import annotations

import logging
import re

from clustergate.constants import BYTES_PER_GIBIBYTE, DISK_SIZE_UNITS, MAX_INT64
from clustergate.exceptions import DiskSizeFormatError, DiskSizeRangeError

logger = logging.getLogger(__name__)

_DISK_SIZE_PATTERN = re.compile(r"^(-?[0-9]+)\s*([a-z]*)$")


def parse_disk_size_to_gibibytes(size: str) -> int:
    """Parse a human-written disk size into a whole number of gibibytes.

    Units are case-insensitive and may be separated from the magnitude by
    whitespace. Decimal units (``G``, ``GB``, ``T``, ``TB``) are powers of
    1000 and are truncated toward zero once converted, so a request never
    grows beyond what the user typed. Binary units (``Gi``, ``GiB``, ``Ti``,
    ``TiB``) convert exactly.

    A magnitude without a unit means the size was left unspecified and
    yields 0, as does the empty string.

    Parameters
    ----------
    size : str
        Disk size such as "100 GiB", "1TB" or "500g"

    Returns
    -------
    int
        Size in gibibytes

    Raises
    ------
    DiskSizeFormatError
        If the unit is unknown or the magnitude is negative or not an integer
    DiskSizeRangeError
        If the magnitude or its byte count exceeds a signed 64-bit integer
    """
    normalized = size.strip().lower()
    if not normalized:
        return 0

    match = _DISK_SIZE_PATTERN.match(normalized)
    if not match:
        raise DiskSizeFormatError(f"Invalid disk size format: '{size}'")

    magnitude = int(match.group(1))
    unit = match.group(2)

    if magnitude < 0:
        if -magnitude > MAX_INT64:
            raise DiskSizeRangeError(f"Disk size '{size}' is out of range")
        raise DiskSizeFormatError(f"Invalid disk size '{size}': size cannot be negative")

    if not unit:
        logger.debug("Disk size '%s' has no unit, treating as unspecified", size)
        return 0

    if unit not in DISK_SIZE_UNITS:
        raise DiskSizeFormatError(
            f"Invalid disk size unit '{match.group(2)}' in '{size}'. "
            f"Supported units: G, GB, GiB, T, TB, TiB"
        )

    if magnitude > MAX_INT64:
        raise DiskSizeRangeError(f"Disk size '{size}' is out of range")

    size_in_bytes = magnitude * DISK_SIZE_UNITS[unit]
    if size_in_bytes > MAX_INT64:
        raise DiskSizeRangeError(f"Disk size '{size}' is out of range")

    return size_in_bytes // BYTES_PER_GIBIBYTE
