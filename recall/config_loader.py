from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any, Dict

import yaml

from recall.server.settings import Settings


def _load_structured_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    ext = path.suffix.lower()
    text = path.read_text(encoding="utf-8")

    if ext in {".yaml", ".yml"}:
        data = yaml.safe_load(text)
    elif ext == ".toml":
        data = tomllib.loads(text)
    elif ext == ".json":
        data = json.loads(text)
    else:
        raise ValueError(f"Unsupported config format '{ext}' for {path}")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")
    return data


def load_settings(path: Path, base: Settings | None = None) -> Settings:
    """Overlay a YAML/TOML/JSON file on top of environment-derived settings.

    A relative ``content_root`` is resolved against the config file's directory.
    """

    raw = _load_structured_file(path)
    values = (base or Settings()).model_dump()
    values.update(raw)
    if "content_root" in raw:
        root = Path(raw["content_root"])
        values["content_root"] = root if root.is_absolute() else (path.parent / root).resolve()
    return Settings.model_validate(values)


__all__ = ["load_settings"]
