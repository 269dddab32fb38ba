from __future__ import annotations

import json
import os

from result import Err, Ok, Result

from sizecheck.config.defaults import default_config
from sizecheck.config.schema import AppConfig
from sizecheck.services.fs import DEFAULT_FS, FileSystem

CONFIG_PATH = "~/.config/sizecheck/config.json"
PROJECT_CONFIG = ".sizecheck.json"


def config_candidates(path: str | None, root: str) -> list[str]:
    """Explicit path first; otherwise the project-local file, then the user-wide one."""
    if path:
        return [path]
    return [os.path.join(root, PROJECT_CONFIG), CONFIG_PATH]


def load_config(
    path: str | None = None,
    root: str = ".",
    fs: FileSystem = DEFAULT_FS,
) -> Result[AppConfig, str]:
    for candidate in config_candidates(path, root):
        resolved = fs.expanduser(candidate)
        if not fs.exists(resolved):
            continue
        try:
            payload = json.loads(fs.read_text(resolved))
            if not isinstance(payload, dict):
                return Err(f"Config at {resolved} must be a JSON object.")
            return Ok(AppConfig.from_dict(payload, default_config()))
        except Exception as exc:  # noqa: BLE001
            return Err(f"Failed reading config at {resolved}: {exc}.")
    return Ok(default_config())


def sample_config_json() -> str:
    return json.dumps(default_config().to_dict(), indent=2)
