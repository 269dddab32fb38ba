from __future__ import annotations

import logging
from collections.abc import Iterable

from result import Err

from sizecheck.models.report import DirectoryMeasurement
from sizecheck.models.scan import ProgressCallback, ScanOptions, ScanResult
from sizecheck.scan._base import Scanner

logger = logging.getLogger(__name__)


def measurement_from_result(label: str, path: str, description: str, result: ScanResult) -> DirectoryMeasurement:
    """Turn a scan result into a measurement, mapping any scan error to the unavailable sentinel."""
    if isinstance(result, Err):
        error = result.unwrap_err()
        logger.debug("%s unavailable (%s): %s", label, error.code.value, error.message)
        return DirectoryMeasurement(label=label, path=path, description=description, size_bytes=None)
    return DirectoryMeasurement(
        label=label,
        path=path,
        description=description,
        size_bytes=result.unwrap().root.size_bytes,
    )


def measure_directory(
    scanner: Scanner,
    label: str,
    path: str,
    description: str = "",
    exclude: Iterable[str] = (),
    progress_callback: ProgressCallback | None = None,
) -> DirectoryMeasurement:
    """Measure the recursive size of *path*; never raises for a missing directory."""
    result = scanner.scan(path, ScanOptions(collapse_depth=0, exclude=frozenset(exclude)), progress_callback)
    return measurement_from_result(label, path, description, result)


def dependency_percentage(part: int | None, total: int | None) -> int | None:
    """Share of *total* taken by *part*, floored to a whole percent.

    Returns None when either side is unavailable or *total* is zero.
    """
    if part is None or total is None or total <= 0:
        return None
    return part * 100 // total
