"""Config loading helpers."""
from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from config import CONFIG


def load_config(path: str | Path) -> Dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as fh:
        if path.suffix.lower() in {".yaml", ".yml"}:
            return yaml.safe_load(fh) or {}
        return json.load(fh)


def merge_config(overrides: Mapping[str, Any], base: Mapping[str, Any] | None = None) -> Dict[str, Any]:
    """Return *base* (default ``CONFIG``) with *overrides* applied.

    Nested dicts are merged key by key; lists and scalars are replaced.
    """

    merged = copy.deepcopy(dict(base if base is not None else CONFIG))
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(value, merged[key])
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def resolve_config(path: str | Path | None) -> Dict[str, Any]:
    if not path:
        return copy.deepcopy(CONFIG)
    return merge_config(load_config(path))
