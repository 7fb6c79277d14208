"""Scan configuration loading (JSON/YAML).

Example ``scan.yaml``::

    root: data
    extensions: [.rsb]
    fail_fast: false
    max_file_size: 67108864
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional, Tuple

import yaml

from .utils.io import DEFAULT_MAX_FILE_SIZE
from .utils.paths import normalize_extensions

__all__ = ["ConfigError", "ScanConfig", "load_scan_config"]


class ConfigError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class ScanConfig:
    root: Path = Path("data")
    extensions: Tuple[str, ...] = field(default=(".rsb",))
    fail_fast: bool = False
    max_file_size: int = DEFAULT_MAX_FILE_SIZE

    def with_overrides(
        self,
        *,
        root: Optional[Path] = None,
        extensions: Optional[Tuple[str, ...]] = None,
        fail_fast: Optional[bool] = None,
    ) -> "ScanConfig":
        """Copy with CLI values applied where they were given."""
        changes: dict[str, Any] = {}
        if root is not None:
            changes["root"] = root
        if extensions:
            changes["extensions"] = tuple(sorted(normalize_extensions(extensions)))
        if fail_fast:
            changes["fail_fast"] = True
        return replace(self, **changes)


def load_scan_config(path: str | Path) -> ScanConfig:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)
    text = p.read_text(encoding="utf-8")
    try:
        if p.suffix.lower() in {".yaml", ".yml"}:
            data: Any = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not parse {p}: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Root of scan configuration must be an object")
    return _parse_config_dict(data, base_dir=p.parent)


def _parse_config_dict(data: dict[str, Any], base_dir: Path) -> ScanConfig:
    unknown = set(data) - {"root", "extensions", "fail_fast", "max_file_size"}
    if unknown:
        raise ConfigError(f"Unknown scan configuration keys: {sorted(unknown)}")
    cfg = ScanConfig()
    root = data.get("root")
    if root is not None:
        if not isinstance(root, str):
            raise ConfigError("'root' must be a string")
        # Relative roots are resolved against the config file location.
        cfg = replace(cfg, root=base_dir / root)
    exts = data.get("extensions")
    if exts is not None:
        if isinstance(exts, str):
            exts = [exts]
        if not isinstance(exts, list) or not all(isinstance(e, str) for e in exts):
            raise ConfigError("'extensions' must be a string or list of strings")
        cfg = replace(cfg, extensions=tuple(sorted(normalize_extensions(exts))))
    if "fail_fast" in data:
        cfg = replace(cfg, fail_fast=bool(data["fail_fast"]))
    if "max_file_size" in data:
        size = data["max_file_size"]
        if not isinstance(size, int) or size <= 0:
            raise ConfigError("'max_file_size' must be a positive integer")
        cfg = replace(cfg, max_file_size=size)
    return cfg
