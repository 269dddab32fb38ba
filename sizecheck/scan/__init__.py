from __future__ import annotations

from sizecheck.scan._base import Scanner, resolve_root
from sizecheck.scan.measure import dependency_percentage, measure_directory, measurement_from_result

__all__ = [
    "Scanner",
    "dependency_percentage",
    "measure_directory",
    "measurement_from_result",
    "resolve_root",
]
