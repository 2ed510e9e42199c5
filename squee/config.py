"""Configuration loading for squee emitters."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

ENV_PREFIX = "SQUEE_EMITTER_"


@dataclass
class EmitterConfig:
    # Raise InvalidArgumentError when off() is asked to remove a listener that is not registered.
    strict_off: bool = True
    # Log and continue past a failing listener instead of propagating out of emit().
    isolate_errors: bool = False
    log_emissions: bool = False


def _to_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _coerce_value(raw: str, current: Any) -> Any:
    if isinstance(current, bool):
        return _to_bool(raw)
    if isinstance(current, int):
        return int(raw)
    if isinstance(current, float):
        return float(raw)
    return raw


def _apply_env_overrides(section: EmitterConfig) -> None:
    for key, value in vars(section).items():
        env_key = f"{ENV_PREFIX}{key.upper()}"
        if env_key in os.environ:
            setattr(section, key, _coerce_value(os.environ[env_key], value))


def load_config(config_path: Optional[str] = None) -> EmitterConfig:
    """Load emitter config from an optional YAML file and environment variables.

    The YAML file may hold an ``emitter:`` mapping whose keys match
    :class:`EmitterConfig` fields. Unknown keys are rejected by the dataclass.
    ``SQUEE_EMITTER_<FIELD>`` variables override file values.
    """
    data: Dict[str, Any] = {}
    if config_path:
        path = Path(config_path).expanduser().resolve()
        if path.exists():
            with path.open("r", encoding="utf-8") as handle:
                loaded = yaml.safe_load(handle) or {}
                if isinstance(loaded, dict):
                    data = loaded

    config = EmitterConfig(**(data.get("emitter") or {}))
    _apply_env_overrides(config)
    return config


def config_to_dict(config: EmitterConfig) -> Dict[str, Any]:
    """Convert the config dataclass to a plain dict."""
    return asdict(config)
