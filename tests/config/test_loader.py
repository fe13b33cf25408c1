from __future__ import annotations

import json
from pathlib import Path

from result import Err, Ok

from bedrock_workspace.config.defaults import default_config
from bedrock_workspace.config.loader import load_config


def test_load_config_missing_uses_defaults(tmp_path: Path) -> None:
    result = load_config(tmp_path / "missing.json")
    assert isinstance(result, Ok)
    assert result.unwrap() == default_config()


def test_load_config_invalid_returns_warning(tmp_path: Path) -> None:
    p = tmp_path / "config.json"
    p.write_text("not-json", encoding="utf-8")

    result = load_config(p)
    assert isinstance(result, Err)
    assert "failed reading config" in result.unwrap_err().lower()


def test_load_config_non_object_is_rejected(tmp_path: Path) -> None:
    p = tmp_path / "config.json"
    p.write_text("[1, 2, 3]", encoding="utf-8")

    result = load_config(p)
    assert isinstance(result, Err)
    assert "must be a JSON object" in result.unwrap_err()


def test_load_config_partial_override(tmp_path: Path) -> None:
    p = tmp_path / "config.json"
    p.write_text(json.dumps({"workspaceDir": "addons", "branch": "develop"}), encoding="utf-8")

    cfg = load_config(p).unwrap()
    assert cfg.workspace_dir == "addons"
    assert cfg.branch == "develop"
    assert cfg.template_repo == default_config().template_repo


def test_load_config_wrong_list_type(tmp_path: Path) -> None:
    p = tmp_path / "config.json"
    p.write_text(json.dumps({"installCommand": "npm install"}), encoding="utf-8")

    result = load_config(p)
    assert isinstance(result, Err)
    assert "installCommand" in result.unwrap_err()
