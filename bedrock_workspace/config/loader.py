from __future__ import annotations

import json
from pathlib import Path

from result import Err, Ok, Result

from bedrock_workspace.config.defaults import default_config
from bedrock_workspace.config.schema import AppConfig

CONFIG_PATH = "~/.config/bedrock-workspace/config.json"


def load_config(path: str | Path | None = None) -> Result[AppConfig, str]:
    resolved = Path(path or CONFIG_PATH).expanduser()
    if not resolved.exists():
        return Ok(default_config())

    try:
        payload = json.loads(resolved.read_text(encoding="utf-8"))
        if not isinstance(payload, dict):
            return Err(f"Config at {resolved} must be a JSON object.")
        return Ok(AppConfig.from_dict(payload, default_config()))
    except Exception as exc:  # noqa: BLE001
        return Err(f"Failed reading config at {resolved}: {exc}.")
