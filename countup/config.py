"""Counter definitions and YAML configuration for countup."""

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

Number = Union[int, float]

_log = logging.getLogger(__name__)

DEFAULT_DURATION = 2.0
DEFAULT_FPS = 30


class CounterConfigError(ValueError):
    """A counter definition is missing a field or has a malformed value."""


@dataclass(frozen=True)
class CounterConfig:
    """Immutable definition of one named counter.

    ``name`` identifies the counter for the whole session: two counters with
    the same name share their settled value when ``persist`` is on.
    """

    name: str
    end: Number
    start: Number = 0
    duration: float = DEFAULT_DURATION
    persist: bool = True
    label: str = ""

    @property
    def caption(self) -> str:
        return self.label or self.name


def _parse_number(field_name: str, value: Any) -> Number:
    if isinstance(value, bool):
        raise CounterConfigError(f"{field_name} must be a number, got {value!r}")
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            pass
    raise CounterConfigError(f"{field_name} must be a number, got {value!r}")


def _to_number(field_name: str, value: Any) -> Number:
    number = _parse_number(field_name, value)
    if isinstance(number, float) and not math.isfinite(number):
        raise CounterConfigError(f"{field_name} must be a finite number, got {value!r}")
    return number


def _to_bool(field_name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "yes", "on", "1"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("false", "no", "off", "0"):
        return False
    raise CounterConfigError(f"{field_name} must be a boolean, got {value!r}")


def counter_from_dict(
    entry: Mapping[str, Any],
    defaults: Optional[Mapping[str, Any]] = None,
) -> CounterConfig:
    """Build a CounterConfig from a plain mapping.

    ``defaults`` supplies ``start``, ``duration`` and ``persist`` when the
    entry leaves them out. Raises CounterConfigError when ``name`` or ``end``
    is missing or a value has the wrong type.
    """
    merged: Dict[str, Any] = dict(defaults or {})
    merged.update(entry)

    name = merged.get("name")
    if not isinstance(name, str) or not name.strip():
        raise CounterConfigError(f"counter name must be a non-empty string, got {name!r}")
    if merged.get("end") is None:
        raise CounterConfigError(f"counter {name!r} has no end value")

    return CounterConfig(
        name=name.strip(),
        end=_to_number("end", merged["end"]),
        start=_to_number("start", merged.get("start", 0)),
        duration=float(_to_number("duration", merged.get("duration", DEFAULT_DURATION))),
        persist=_to_bool("persist", merged.get("persist", True)),
        label=str(merged.get("label", "") or ""),
    )


def load_counters_from_dict(
    entries: List[Any],
    defaults: Optional[Mapping[str, Any]] = None,
) -> List[CounterConfig]:
    """Parse counter definitions from a YAML-loaded list.

    Expected format::

        - name: tokens
          label: tokens used
          end: 128400
        - name: sessions
          end: 42
          persist: false

    Invalid entries are skipped with a warning.
    """
    counters: List[CounterConfig] = []
    for index, entry in enumerate(entries or []):
        if not isinstance(entry, dict):
            _log.warning("skipping counter #%d: expected a mapping, got %r", index, entry)
            continue
        try:
            counters.append(counter_from_dict(entry, defaults))
        except CounterConfigError as exc:
            _log.warning("skipping counter #%d: %s", index, exc)
    return counters


class ConfigManager:
    """Manage countup configuration from YAML."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = Path(config_path or "~/.config/countup/config.yaml").expanduser()
        self.data = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            self._create_default_config()
        return self._read_yaml()

    def _read_yaml(self) -> Dict[str, Any]:
        """Read and parse YAML file."""
        try:
            with open(self.config_path, "r") as f:
                content = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            _log.warning("error reading config %s: %s", self.config_path, exc)
            return {}
        if not isinstance(content, dict):
            return {}
        return content

    def _create_default_config(self) -> None:
        """Create default configuration file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        default_config = {
            "defaults": {
                "duration": DEFAULT_DURATION,
                "persist": True,
                "fps": DEFAULT_FPS,
            },
            "counters": [
                {"name": "tokens", "label": "tokens used", "end": 128400},
                {"name": "sessions", "label": "sessions", "end": 42},
                {"name": "uptime", "label": "uptime %", "end": 99.95, "duration": 3},
            ],
        }

        with open(self.config_path, "w") as f:
            yaml.dump(default_config, f, default_flow_style=False, sort_keys=False)

    def _resolve_env_var(self, value: Any) -> Any:
        """Resolve environment variable references like ${VAR_NAME}."""
        if not isinstance(value, str):
            return value
        if not value.startswith("${") or not value.endswith("}"):
            return value

        var_name = value[2:-1]
        return os.getenv(var_name, "")

    def get_defaults(self) -> Dict[str, Any]:
        """Get counter defaults (duration, persist, fps)."""
        defaults = {
            "duration": DEFAULT_DURATION,
            "persist": True,
            "fps": DEFAULT_FPS,
        }
        config = self.data.get("defaults") or {}
        resolved = {key: self._resolve_env_var(value) for key, value in config.items()}
        return {**defaults, **resolved}

    def get_fps(self) -> int:
        """Frames per second for counter animations."""
        fps = self.get_defaults().get("fps", DEFAULT_FPS)
        try:
            fps = int(fps)
        except (TypeError, ValueError):
            _log.warning("invalid fps %r, using %d", fps, DEFAULT_FPS)
            return DEFAULT_FPS
        return fps if fps > 0 else DEFAULT_FPS

    def get_counters(self) -> List[CounterConfig]:
        """Get the configured counters with defaults applied."""
        defaults = self.get_defaults()
        defaults.pop("fps", None)
        entries = []
        for entry in self.data.get("counters") or []:
            if isinstance(entry, dict):
                entry = {key: self._resolve_env_var(value) for key, value in entry.items()}
            entries.append(entry)
        return load_counters_from_dict(entries, defaults)

    def save(self) -> None:
        """Save configuration to file."""
        with open(self.config_path, "w") as f:
            yaml.dump(self.data, f, default_flow_style=False, sort_keys=False)
