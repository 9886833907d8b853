# src/plotcall/transport.py
"""
Transports: where rendered commands and data rows go.

A transport only moves text; it never validates. ``PlotWindow`` hands it
a fully validated command followed by every curve's rows, each curve
closed by ``end_curve()``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import IO, List, Protocol, Sequence, runtime_checkable

__all__ = ["Transport", "RecordingTransport", "TextTransport", "CURVE_SENTINEL"]

# gnuplot's end-of-inline-data marker
CURVE_SENTINEL = "e"


@runtime_checkable
class Transport(Protocol):
    def send(self, command: str) -> None: ...

    def send_row(self, values: Sequence[float]) -> None: ...

    def end_curve(self) -> None: ...


@dataclass
class RecordingTransport:
    """In-memory transport for tests and dry runs.

    ``curves`` holds one list of rows per finished curve; rows of an
    unfinished curve wait in ``pending``.
    """
    commands: List[str] = field(default_factory=list)
    curves: List[List[List[float]]] = field(default_factory=list)
    pending: List[List[float]] = field(default_factory=list)
    closed: bool = False
    restarts: int = 0

    def send(self, command: str) -> None:
        self.commands.append(command)

    def send_row(self, values: Sequence[float]) -> None:
        self.pending.append([float(v) for v in values])

    def end_curve(self) -> None:
        self.curves.append(self.pending)
        self.pending = []

    def restart(self) -> None:
        self.restarts += 1
        self.pending = []

    def close(self) -> None:
        self.closed = True

    @property
    def rows(self) -> List[List[float]]:
        return [row for curve in self.curves for row in curve]


def _fmt(value: float) -> str:
    return "%.17g" % value


class TextTransport:
    """Writes gnuplot inline-data text to a stream (a pipe, a file, stdout)."""

    def __init__(self, stream: IO[str], *, flush: bool = True):
        self.stream = stream
        self.flush = flush

    def _write(self, text: str) -> None:
        self.stream.write(text)
        if self.flush:
            self.stream.flush()

    def send(self, command: str) -> None:
        self._write(command if command.endswith("\n") else command + "\n")

    def send_row(self, values: Sequence[float]) -> None:
        self.stream.write(" ".join(_fmt(v) for v in values) + "\n")

    def end_curve(self) -> None:
        self._write(CURVE_SENTINEL + "\n")
