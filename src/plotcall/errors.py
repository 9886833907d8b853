# src/plotcall/errors.py
from __future__ import annotations
from typing import Any, Sequence, Tuple

__all__ = [
    "PlotcallError",
    "PlotArgumentError",
    "UnknownOptionError",
    "DanglingOptionKey",
    "OptionValueError",
    "ArityMismatch",
    "TupleSizeConflict",
    "UnsupportedStyleError",
    "BroadcastError",
    "TooManyOptionsError",
    "LegendCountMismatch",
    "MaxCurvesExceeded",
    "ConfigError",
    "TransportTimeout",
]


def _fmt_shapes(shapes: Sequence[Tuple[int, ...]]) -> str:
    return ", ".join("(" + ",".join(str(d) for d in s) + ")" for s in shapes)


class PlotcallError(Exception):
    """Base error for the plotcall package."""


class PlotArgumentError(PlotcallError):
    """Base for every error raised while interpreting plot arguments.

    These are raised before anything reaches the transport.
    """


class UnknownOptionError(PlotArgumentError):
    """Raised when option names are not in the recognized vocabulary."""
    def __init__(self, names: Sequence[Any], *, universe: str = "plot or curve", detail: str | None = None):
        self.names = [str(n) for n in names]
        self.universe = universe
        msg = f"Unknown {universe} option(s): {', '.join(repr(n) for n in self.names)}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


class DanglingOptionKey(PlotArgumentError):
    """Raised when an inline key/value run ends with a key and no value."""
    def __init__(self, key: Any):
        self.key = key
        super().__init__(f"Dangling option key {key!r}: no value follows it")


class OptionValueError(PlotArgumentError):
    """Raised when a recognized option is given a value it cannot accept."""
    def __init__(self, name: str, value: Any, reason: str):
        self.name = name
        self.value = value
        super().__init__(f"Bad value for option '{name}': {value!r} ({reason})")


class ArityMismatch(PlotArgumentError):
    """Raised when a chunk supplies the wrong number of data arrays."""
    def __init__(self, expected: int, actual: int, *, mode: str = "2D", detail: str | None = None):
        self.expected = expected
        self.actual = actual
        self.mode = mode
        msg = f"Arity mismatch in {mode} plot: expected {expected} data array(s), got {actual}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


class TupleSizeConflict(PlotArgumentError):
    """Raised when the curve options of one chunk imply different tuple sizes."""
    def __init__(self, first: int, second: int):
        self.sizes = (first, second)
        super().__init__(f"Tuple size conflict within one chunk: {first} != {second}")


class UnsupportedStyleError(PlotArgumentError):
    """Raised when a style (or axis routing) is unknown or not representable in this mode."""
    def __init__(self, style: str, *, mode: str | None = None, detail: str | None = None):
        self.style = style
        self.mode = mode
        if mode is None:
            msg = f"Unsupported plot style '{style}'"
        else:
            msg = f"Plot style '{style}' is not supported in {mode} plots"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


class BroadcastError(PlotArgumentError):
    """Raised when array shapes cannot be reconciled along one axis."""
    def __init__(self, axis: int, shapes: Sequence[Tuple[int, ...]]):
        self.axis = axis
        self.shapes = [tuple(s) for s in shapes]
        super().__init__(
            f"Broadcast mismatch on axis {axis}: incompatible shapes {_fmt_shapes(self.shapes)}"
        )


class TooManyOptionsError(PlotArgumentError):
    """Raised when a chunk has more curve-option snapshots than curves."""
    def __init__(self, n_options: int, n_curves: int):
        self.n_options = n_options
        self.n_curves = n_curves
        super().__init__(f"Too many curve option sets: {n_options} for {n_curves} curve(s)")


class LegendCountMismatch(PlotArgumentError):
    """Raised when a legend list has neither 1 nor curve-count entries."""
    def __init__(self, n_legends: int, n_curves: int):
        self.n_legends = n_legends
        self.n_curves = n_curves
        super().__init__(f"Legend has {n_legends} entries but {n_curves} curve(s) supplied")


class MaxCurvesExceeded(PlotArgumentError):
    """Raised when one call would plot more curves than the configured ceiling."""
    def __init__(self, total: int, ceiling: int):
        self.total = total
        self.ceiling = ceiling
        super().__init__(
            f"Plot requests {total} curves, above the maximum of {ceiling} "
            f"(raise max_curves in the configuration to allow it)"
        )


class ConfigError(PlotcallError):
    """Raised when configuration file is malformed or invalid."""
    def __init__(self, message: str):
        super().__init__(message)


class TransportTimeout(PlotcallError):
    """Raised when the transport stalls while a command or its data is being sent."""
    def __init__(self, timeout: float, stage: str):
        self.timeout = timeout
        self.stage = stage
        super().__init__(f"Transport timed out after {timeout:g}s while sending {stage}")
