from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sizecheck.models.enums import Priority

# (json_key, attr_name, minimum), clamped by from_dict.
_INT_FIELDS: tuple[tuple[str, str, int], ...] = (
    ("topCount", "top_count", 1),
    ("trendHistory", "trend_history", 0),
)

_STR_FIELDS: tuple[tuple[str, str], ...] = (
    ("outputFile", "output_file"),
    ("dependencyDir", "dependency_dir"),
    ("manifestFile", "manifest_file"),
    ("defaultDescription", "default_description"),
    ("fallbackPercentage", "fallback_percentage"),
)

ROOT_PATH = "."


def _get_int(data: dict[str, Any], json_key: str, default: int, minimum: int) -> int:
    return max(minimum, int(data.get(json_key, default)))


@dataclass(slots=True)
class DirectoryRule:
    label: str
    path: str
    # May contain a ``{percentage}`` placeholder, filled in for the dependency directory.
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "path": self.path, "description": self.description}

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> DirectoryRule:
        return cls(
            label=str(payload["label"]),
            path=str(payload["path"]),
            description=str(payload.get("description", "")),
        )


@dataclass(slots=True)
class RecommendationRule:
    package: str
    priority: Priority
    title: str
    details: list[str] = field(default_factory=list)
    improvement: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "package": self.package,
            "priority": self.priority.value,
            "title": self.title,
            "details": list(self.details),
            "improvement": self.improvement,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> RecommendationRule:
        return cls(
            package=str(payload["package"]),
            priority=Priority(str(payload.get("priority", Priority.MEDIUM.value))),
            title=str(payload["title"]),
            details=[str(x) for x in payload.get("details", [])],
            improvement=str(payload.get("improvement", "")),
        )


@dataclass(slots=True)
class AppConfig:
    output_file: str = "CHECKSIZE.md"
    dependency_dir: str = "node_modules"
    manifest_file: str = "package.json"
    directories: list[DirectoryRule] = field(default_factory=list)
    package_descriptions: dict[str, str] = field(default_factory=dict)
    default_description: str = "Package dependency"
    heavy_packages: list[str] = field(default_factory=list)
    recommendations: list[RecommendationRule] = field(default_factory=list)
    fallback_percentage: str = "~92%"
    top_count: int = 10
    trend_history: int = 4

    @property
    def backup_file(self) -> str:
        return f"{self.output_file}.bak"

    def to_dict(self) -> dict[str, Any]:
        return {
            "outputFile": self.output_file,
            "dependencyDir": self.dependency_dir,
            "manifestFile": self.manifest_file,
            "defaultDescription": self.default_description,
            "fallbackPercentage": self.fallback_percentage,
            "topCount": self.top_count,
            "trendHistory": self.trend_history,
            "directories": [rule.to_dict() for rule in self.directories],
            "packageDescriptions": dict(self.package_descriptions),
            "heavyPackages": list(self.heavy_packages),
            "recommendations": [rule.to_dict() for rule in self.recommendations],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], defaults: AppConfig) -> AppConfig:
        directories_raw = data.get("directories")
        if directories_raw is not None:
            directories = [DirectoryRule.from_dict(x) for x in directories_raw]
        else:
            directories = list(defaults.directories)

        # Descriptions extend the defaults rather than replacing them.
        package_descriptions = dict(defaults.package_descriptions)
        package_descriptions.update({str(k): str(v) for k, v in data.get("packageDescriptions", {}).items()})

        heavy_raw = data.get("heavyPackages")
        heavy_packages = [str(x) for x in heavy_raw] if heavy_raw is not None else list(defaults.heavy_packages)

        recommendations_raw = data.get("recommendations")
        if recommendations_raw is not None:
            recommendations = [RecommendationRule.from_dict(x) for x in recommendations_raw]
        else:
            recommendations = list(defaults.recommendations)

        str_kwargs: dict[str, str] = {}
        for json_key, attr in _STR_FIELDS:
            str_kwargs[attr] = str(data.get(json_key, getattr(defaults, attr)))

        int_kwargs: dict[str, int] = {}
        for json_key, attr, minimum in _INT_FIELDS:
            int_kwargs[attr] = _get_int(data, json_key, getattr(defaults, attr), minimum)

        return cls(
            directories=directories,
            package_descriptions=package_descriptions,
            heavy_packages=heavy_packages,
            recommendations=recommendations,
            **str_kwargs,
            **int_kwargs,
        )
