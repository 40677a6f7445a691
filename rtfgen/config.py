"""Runtime configuration loader."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from .models.config import Config

CONFIG_FILE_NAME = "rtfgen.json"


def _read_overrides(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        return {}
    with open(config_path, "r", encoding="utf-8") as f:
        overrides = json.load(f)
    if not isinstance(overrides, dict):
        raise ValueError(f"{config_path} must contain a JSON object")
    return overrides


def load_config(project_root: Optional[Path] = None) -> Config:
    """Load configuration with canonical defaults and optional ``rtfgen.json`` overrides."""
    root = project_root or Path.cwd()
    values: Dict[str, Any] = {
        "project_root": str(root),
        "inputs_dir": str(root / "inputs"),
        "runs_dir": str(root / "runs"),
    }
    values.update(_read_overrides(root / CONFIG_FILE_NAME))
    return Config.model_validate(values)
