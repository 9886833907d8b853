# src/plotcall/__init__.py
from __future__ import annotations

from .errors import (
    PlotcallError,
    PlotArgumentError,
    UnknownOptionError,
    DanglingOptionKey,
    OptionValueError,
    ArityMismatch,
    TupleSizeConflict,
    UnsupportedStyleError,
    BroadcastError,
    TooManyOptionsError,
    LegendCountMismatch,
    MaxCurvesExceeded,
    ConfigError,
    TransportTimeout,
)
from .config import PlotcallConfig, load_config
from .options import OptionState, classify_args
from .pipeline import PlotPlan, resolve_call, render_command, render_plan, serialize_plan
from .transport import Transport, RecordingTransport, TextTransport
from .window import PlotWindow

__all__ = [
    # errors
    "PlotcallError", "PlotArgumentError", "UnknownOptionError", "DanglingOptionKey",
    "OptionValueError", "ArityMismatch", "TupleSizeConflict", "UnsupportedStyleError",
    "BroadcastError", "TooManyOptionsError", "LegendCountMismatch", "MaxCurvesExceeded",
    "ConfigError", "TransportTimeout",
    # config
    "PlotcallConfig", "load_config",
    # pipeline
    "OptionState", "classify_args", "PlotPlan", "resolve_call",
    "render_command", "render_plan", "serialize_plan",
    # front end
    "Transport", "RecordingTransport", "TextTransport", "PlotWindow",
]

__version__ = "0.1.0"
