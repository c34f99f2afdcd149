"""Configuration management for greptap.

Handles default settings from greptap.toml.

PUBLIC API:
  - Settings: Resolved session settings
  - ConfigError: Raised for a malformed settings file
  - load_settings: Read settings from a file (or the discovered one)
  - get_settings: Cached settings for the current directory
"""

import logging
import signal
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .loop import DrainPolicy
from .selection import LEAD_PADDING
from .ticker import TICK_INTERVAL

__all__ = ["Settings", "ConfigError", "load_settings", "get_settings"]

CONFIG_NAME = "greptap.toml"
POLL_INTERVAL = 0.1

_SIGNALS = {"SIGTERM": signal.SIGTERM, "SIGINT": signal.SIGINT}


class ConfigError(ValueError):
    """Settings file can't be used."""


@dataclass(frozen=True)
class Settings:
    """Session settings.

    Attributes:
        tick_interval: Seconds between redraw ticks.
        poll_interval: Seconds between consumer iterations.
        lead_padding: Context rows kept above the selected line.
        drain: Background events applied per frame.
        shutdown_signal: Signal sent to the child on quit.
        log_level: Minimum level kept in the diagnostic log.
    """

    tick_interval: float = TICK_INTERVAL
    poll_interval: float = POLL_INTERVAL
    lead_padding: int = LEAD_PADDING
    drain: DrainPolicy = DrainPolicy.ALL
    shutdown_signal: int = signal.SIGTERM
    log_level: str = "INFO"


def _find_config_file() -> Optional[Path]:
    """Find greptap.toml in current or parent directories."""
    current = Path.cwd()

    for parent in [current] + list(current.parents):
        config_file = parent / CONFIG_NAME
        if config_file.exists():
            return config_file

    return None


def _load_config(path: Optional[Path] = None) -> dict:
    """Load raw configuration from file."""
    if path is None:
        path = _find_config_file()

    if path is None or not path.exists():
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: {e}") from e


def _positive_number(data: dict, key: str, default: float) -> float:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"{key} must be a positive number, got {value!r}")
    return float(value)


def _parse_settings(data: dict) -> Settings:
    """Build Settings from the [default] table. Unknown keys are ignored."""
    default = data.get("default", {})
    if not isinstance(default, dict):
        raise ConfigError("[default] must be a table")

    lead_padding = default.get("lead_padding", LEAD_PADDING)
    if isinstance(lead_padding, bool) or not isinstance(lead_padding, int) or lead_padding < 0:
        raise ConfigError(f"lead_padding must be a non-negative integer, got {lead_padding!r}")

    drain = default.get("drain", DrainPolicy.ALL.value)
    try:
        drain_policy = DrainPolicy(drain)
    except ValueError:
        raise ConfigError(f"drain must be 'all' or 'one', got {drain!r}") from None

    signal_name = str(default.get("shutdown_signal", "SIGTERM")).upper()
    if signal_name not in _SIGNALS:
        raise ConfigError(f"shutdown_signal must be one of {sorted(_SIGNALS)}, got {signal_name!r}")

    log_level = str(default.get("log_level", "INFO")).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"Unknown log_level {log_level!r}")

    return Settings(
        tick_interval=_positive_number(default, "tick_interval", TICK_INTERVAL),
        poll_interval=_positive_number(default, "poll_interval", POLL_INTERVAL),
        lead_padding=lead_padding,
        drain=drain_policy,
        shutdown_signal=_SIGNALS[signal_name],
        log_level=log_level,
    )


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from path, or from the nearest greptap.toml.

    Raises:
        ConfigError: If the file can't be parsed or holds invalid values.
    """
    return _parse_settings(_load_config(path))


# Global instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or load the global settings."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings
