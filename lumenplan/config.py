"""
Runtime settings: defaults, then an optional JSON settings file, then
LUMENPLAN_* environment variables.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

logger = logging.getLogger(__name__)


ENV_PREFIX = "LUMENPLAN_"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = Path.home() / ".lumenplan"
    log_level: str = "WARNING"
    grid_size: int = 20
    mount_clearance_m: float = 0.1
    fallback_efficacy_lm_per_w: float = 100.0

    @property
    def calculations_path(self) -> Path:
        return self.data_dir / "calculations.json"


def _coerce(name: str, value: Any) -> Any:
    try:
        if name == "data_dir":
            return Path(str(value)).expanduser()
        if name == "log_level":
            level = str(value).upper()
            if not isinstance(logging.getLevelName(level), int):
                raise ValueError(level)
            return level
        if name == "grid_size":
            size = int(value)
            if size < 2:
                raise ValueError(size)
            return size
        number = float(value)
        if number <= 0.0 and name == "fallback_efficacy_lm_per_w":
            raise ValueError(number)
        if number < 0.0:
            raise ValueError(number)
        return number
    except (TypeError, ValueError):
        raise ValueError(f"Invalid setting {name}={value!r}") from None


def _apply(settings: Settings, values: Mapping[str, Any]) -> Settings:
    known = {f.name for f in fields(Settings)}
    updates: Dict[str, Any] = {}
    for name, value in values.items():
        if name not in known:
            logger.debug("Ignoring unknown setting %s", name)
            continue
        updates[name] = _coerce(name, value)
    return replace(settings, **updates)


def load_settings(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    settings = Settings()

    if path is not None:
        settings_path = Path(path).expanduser()
        if settings_path.exists():
            data = json.loads(settings_path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError(f"Settings file must hold a JSON object: {settings_path}")
            settings = _apply(settings, data)
        else:
            logger.info("Settings file %s not found; using defaults", settings_path)

    env = os.environ if environ is None else environ
    overrides = {
        key[len(ENV_PREFIX):].lower(): value
        for key, value in env.items()
        if key.startswith(ENV_PREFIX)
    }
    return _apply(settings, overrides)
