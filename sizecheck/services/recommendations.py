from __future__ import annotations

from collections.abc import Iterable, Mapping

from sizecheck.config.schema import RecommendationRule
from sizecheck.models.enums import Priority
from sizecheck.models.report import HeavyPackage, ManifestSummary, Recommendation

NONE_AT_THIS_TIME = "None at this time"

_NO_ACTION: tuple[Recommendation, ...] = (
    Recommendation(Priority.LOW, "Current project size is reasonable for a Node.js web application"),
    Recommendation(Priority.LOW, "Dependencies are mostly lightweight and necessary"),
    Recommendation(Priority.MEDIUM, "No immediate optimizations needed"),
)


def build_recommendations(
    installed: Mapping[str, int],
    rules: Iterable[RecommendationRule],
) -> tuple[dict[Priority, list[Recommendation]], list[str]]:
    """Fire every rule whose package is installed.

    Returns recommendations grouped by priority (every priority present, in
    High/Medium/Low order) and the improvement notes of the fired rules.
    """
    grouped: dict[Priority, list[Recommendation]] = {priority: [] for priority in Priority}
    improvements: list[str] = []
    for rule in rules:
        size = installed.get(rule.package)
        if size is None:
            continue
        grouped[rule.priority].append(
            Recommendation(
                priority=rule.priority,
                title=rule.title,
                details=tuple(rule.details),
                size_bytes=size,
            )
        )
        if rule.improvement:
            improvements.append(rule.improvement)

    if not any(grouped.values()):
        for item in _NO_ACTION:
            grouped[item.priority].append(item)
    if not grouped[Priority.HIGH]:
        grouped[Priority.HIGH].append(Recommendation(Priority.HIGH, NONE_AT_THIS_TIME))
    return grouped, improvements


def heavy_packages(
    manifest: ManifestSummary | None,
    installed: Mapping[str, int],
    names: Iterable[str],
) -> list[HeavyPackage]:
    """Known heavy packages declared in the manifest, with their installed size if present."""
    if manifest is None:
        return []
    return [HeavyPackage(name=name, size_bytes=installed.get(name)) for name in names if name in manifest.names]
