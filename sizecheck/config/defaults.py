from __future__ import annotations

from sizecheck.config.schema import ROOT_PATH, AppConfig, DirectoryRule, RecommendationRule
from sizecheck.models.enums import Priority

DEFAULT_DIRECTORIES: tuple[tuple[str, str, str], ...] = (
    ("Project Root", ROOT_PATH, "Total project size including all files"),
    ("node_modules", "node_modules", "NPM dependencies ({percentage} of project size)"),
    (".git", ".git", "Git repository metadata"),
    ("logs", "logs", "Application logs directory"),
    ("src", "src", "Source code directory"),
    ("dist", "dist", "Distribution/build directory"),
    ("build", "build", "Build output directory"),
    ("coverage", "coverage", "Test coverage reports"),
)

PACKAGE_DESCRIPTIONS: dict[str, str] = {
    "moment": "Date/time manipulation library",
    "lodash": "Utility library with helpful functions",
    "express": "Web framework for Node.js",
    "react": "JavaScript library for building UIs",
    "webpack": "Module bundler for JavaScript",
    "typescript": "TypeScript compiler and tools",
    "eslint": "JavaScript linter for code quality",
    "jest": "JavaScript testing framework",
    "babel": "JavaScript compiler/transpiler",
    "nodemon": "Development tool for auto-restarting server",
    "async": "Utility functions for async operations",
    "iconv-lite": "Character encoding conversion",
    "qs": "Query string parsing and formatting",
    "jake": "Build tool (JavaScript make)",
    "semver": "Semantic versioning utility",
    "mime-db": "Media type database",
    "object-inspect": "Object inspection utility",
}

HEAVY_PACKAGES: tuple[str, ...] = (
    "typescript",
    "webpack",
    "babel",
    "eslint",
    "jest",
    "electron",
    "react",
    "angular",
    "vue",
)


def _default_recommendations() -> list[RecommendationRule]:
    return [
        RecommendationRule(
            package="moment",
            priority=Priority.MEDIUM,
            title="Consider replacing Moment.js",
            details=[
                "Use native `Date` objects or lighter alternatives like `date-fns` or `dayjs`",
                "Moment.js is in maintenance mode and quite heavy",
            ],
            improvement="Consider modernizing date handling (replace Moment.js)",
        ),
        RecommendationRule(
            package="async",
            priority=Priority.MEDIUM,
            title="Review async dependency",
            details=[
                "Modern Node.js has built-in Promise support",
                "Consider using native async/await patterns",
            ],
            improvement="Evaluate if all async utilities are still needed",
        ),
    ]


def default_config() -> AppConfig:
    return AppConfig(
        directories=[DirectoryRule(label, path, description) for label, path, description in DEFAULT_DIRECTORIES],
        package_descriptions=dict(PACKAGE_DESCRIPTIONS),
        heavy_packages=list(HEAVY_PACKAGES),
        recommendations=_default_recommendations(),
    )
