from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)


def _default_data_dir() -> Path:
    return Path.home() / ".borderland"


@dataclass(frozen=True)
class GameConfig:
    """Timings (seconds) and where player data lives."""

    resolution_delay: float = 2.0
    countdown_interval: float = 1.0
    hint_interval: float = 10.0
    data_dir: Path = field(default_factory=_default_data_dir)

    @property
    def progress_file(self) -> Path:
        return self.data_dir / "progress.json"


_TIMING_KEYS = ("resolution_delay", "countdown_interval", "hint_interval")


def load_config(path: Optional[Path] = None) -> GameConfig:
    """Read optional overrides from ``~/.borderland/config.yaml``.

    A missing file gives the defaults. Unknown keys and non-positive timings
    are rejected.
    """
    config = GameConfig()
    path = path or config.data_dir / "config.yaml"
    if not path.exists():
        return config

    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw is None:
        return config
    if not isinstance(raw, dict):
        raise ValueError(f"{path.name}: expected a mapping of settings")

    known = {f.name for f in fields(GameConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"{path.name}: unknown settings {', '.join(map(str, unknown))}")

    overrides = {}
    for key in _TIMING_KEYS:
        if key not in raw:
            continue
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ValueError(f"{path.name}: '{key}' must be a positive number")
        overrides[key] = float(value)
    if "data_dir" in raw:
        overrides["data_dir"] = Path(str(raw["data_dir"])).expanduser()

    logger.info("Loaded settings from %s", path)
    return replace(config, **overrides)
