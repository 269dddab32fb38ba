from __future__ import annotations

import json
import logging
import re

from sizecheck.models.report import ManifestSummary
from sizecheck.services.fs import DEFAULT_FS, FileSystem

logger = logging.getLogger(__name__)

_RUNTIME_SECTIONS = ("dependencies", "optionalDependencies", "peerDependencies")
_DEV_SECTIONS = ("devDependencies",)

# Any line holding a quoted key.  Only used when the manifest is not valid JSON;
# it overcounts because it also matches keys outside the dependency sections.
_QUOTED_KEY_LINE = re.compile(r'".*":')
_QUOTED_KEY = re.compile(r'"([^"]+)"\s*:')


def _section_names(payload: dict[str, object], sections: tuple[str, ...]) -> set[str]:
    names: set[str] = set()
    for section in sections:
        value = payload.get(section)
        if isinstance(value, dict):
            names.update(str(name) for name in value)
    return names


def parse_manifest(text: str) -> ManifestSummary:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Manifest is not valid JSON (%s); counting quoted keys instead", exc)
        return approximate_manifest(text)
    if not isinstance(payload, dict):
        return ManifestSummary(dependencies=0, dev_dependencies=0)

    runtime = _section_names(payload, _RUNTIME_SECTIONS)
    dev = _section_names(payload, _DEV_SECTIONS) - runtime
    return ManifestSummary(
        dependencies=len(runtime),
        dev_dependencies=len(dev),
        names=frozenset(runtime | dev),
    )


def approximate_manifest(text: str) -> ManifestSummary:
    count = sum(1 for line in text.splitlines() if _QUOTED_KEY_LINE.search(line))
    return ManifestSummary(
        dependencies=count,
        dev_dependencies=0,
        names=frozenset(_QUOTED_KEY.findall(text)),
        exact=False,
    )


def read_manifest(path: str, fs: FileSystem = DEFAULT_FS) -> ManifestSummary | None:
    """Summarize the manifest at *path*; None when it does not exist or cannot be read."""
    if not fs.exists(path):
        logger.info("No manifest at %s", path)
        return None
    try:
        text = fs.read_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Cannot read manifest %s: %s", path, exc)
        return None
    return parse_manifest(text)
