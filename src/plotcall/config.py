# src/plotcall/config.py
"""
User configuration for plotcall.

Config file location (first match wins):
    1. $PLOTCALL_CONFIG
    2. Linux:   $XDG_CONFIG_HOME/plotcall/config.toml or ~/.config/plotcall/config.toml
       macOS:   ~/Library/Application Support/plotcall/config.toml
       Windows: %APPDATA%/plotcall/config.toml

Example::

    [plot]
    max_curves = 500
    many_curves_warning = 50
    default_style = "linespoints"
    timeout = 5.0
    jit = true

$PLOTCALL_MAX_CURVES overrides ``max_curves`` from the file.
"""
from __future__ import annotations

import os
import sys
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

from plotcall.errors import ConfigError

__all__ = ["PlotcallConfig", "load_config"]


@dataclass(frozen=True)
class PlotcallConfig:
    max_curves: int = 1000
    many_curves_warning: Optional[int] = 100
    default_style: str = "lines"
    timeout: Optional[float] = 10.0
    jit: bool = False


def _get_config_path() -> Path:
    env = os.environ.get("PLOTCALL_CONFIG")
    if env:
        return Path(env).expanduser().resolve()

    if sys.platform == "win32":
        base = os.environ.get("APPDATA")
        root = Path(base) if base else Path.home() / "AppData" / "Roaming"
    elif sys.platform == "darwin":
        root = Path.home() / "Library" / "Application Support"
    else:
        xdg = os.environ.get("XDG_CONFIG_HOME")
        root = Path(xdg) if xdg else Path.home() / ".config"
    return (root / "plotcall" / "config.toml").resolve()


def _check_int(key: str, value: Any, *, allow_none: bool = False) -> Optional[int]:
    if value is None and allow_none:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"[plot].{key} must be a positive integer, got {value!r}")
    return value


def _check_timeout(value: Any) -> Optional[float]:
    # TOML has no null; a non-positive timeout disables the bounded wait
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"[plot].timeout must be a number, got {value!r}")
    return float(value) if value > 0 else None


def _check_str(key: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"[plot].{key} must be a non-empty string, got {value!r}")
    return value


def _check_bool(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"[plot].{key} must be true or false, got {value!r}")
    return value


_CHECKS = {
    "max_curves": lambda v: _check_int("max_curves", v),
    "many_curves_warning": lambda v: _check_int("many_curves_warning", v),
    "default_style": lambda v: _check_str("default_style", v),
    "timeout": _check_timeout,
    "jit": lambda v: _check_bool("jit", v),
}


def _parse_plot_table(table: Any) -> Dict[str, Any]:
    if not isinstance(table, dict):
        raise ConfigError("[plot] must be a table")
    unknown = sorted(set(table) - set(_CHECKS))
    if unknown:
        known = ", ".join(f.name for f in fields(PlotcallConfig))
        raise ConfigError(f"Unknown key(s) in [plot]: {', '.join(unknown)} (known: {known})")
    return {key: _CHECKS[key](value) for key, value in table.items()}


def _env_max_curves() -> Optional[int]:
    raw = os.environ.get("PLOTCALL_MAX_CURVES")
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"PLOTCALL_MAX_CURVES must be an integer, got {raw!r}") from None
    return _check_int("max_curves", value)


def load_config() -> PlotcallConfig:
    """Load the user config; a missing file yields the defaults."""
    config = PlotcallConfig()
    path = _get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as fh:
                data = tomllib.load(fh)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Failed to load config from {path}: {e}") from e
        if "plot" in data:
            config = replace(config, **_parse_plot_table(data["plot"]))

    env_max = _env_max_curves()
    if env_max is not None:
        config = replace(config, max_curves=env_max)
    return config
