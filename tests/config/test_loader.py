from __future__ import annotations

import json
from pathlib import Path

from result import Err, Ok

from sizecheck.config.loader import PROJECT_CONFIG, load_config, sample_config_json


def test_load_config_missing_uses_defaults(tmp_path: Path) -> None:
    result = load_config(str(tmp_path / "missing.json"))
    assert isinstance(result, Ok)
    cfg = result.unwrap()
    assert cfg.dependency_dir == "node_modules"
    assert cfg.package_descriptions


def test_load_config_invalid_returns_error(tmp_path: Path) -> None:
    p = tmp_path / "config.json"
    p.write_text("not-json", encoding="utf-8")

    result = load_config(str(p))
    assert isinstance(result, Err)
    assert "failed reading config" in result.unwrap_err().lower()


def test_load_config_non_object(tmp_path: Path) -> None:
    p = tmp_path / "config.json"
    p.write_text("[]", encoding="utf-8")

    result = load_config(str(p))
    assert isinstance(result, Err)
    assert "must be a json object" in result.unwrap_err().lower()


def test_project_config_picked_up_from_root(tmp_path: Path) -> None:
    (tmp_path / PROJECT_CONFIG).write_text(json.dumps({"topCount": 3}), encoding="utf-8")

    result = load_config(root=str(tmp_path))
    assert isinstance(result, Ok)
    assert result.unwrap().top_count == 3


def test_sample_config_is_valid_json() -> None:
    payload = json.loads(sample_config_json())
    assert payload["outputFile"] == "CHECKSIZE.md"
    assert payload["packageDescriptions"]["moment"] == "Date/time manipulation library"
