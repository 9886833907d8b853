# src/plotcall/pipeline/serialize.py
from __future__ import annotations

from typing import List, Sequence, TYPE_CHECKING

import numpy as np
from numba import njit

from .broadcast import curve_index
from .chunks import Chunk

if TYPE_CHECKING:
    from plotcall.transport import Transport
    from .plan import PlotPlan

__all__ = ["curve_columns", "pack_rows", "write_rows", "serialize_chunks", "serialize_plan"]


def _pack_rows_impl(stacked: np.ndarray, out: np.ndarray) -> None:
    # stacked: (n_cols, n_points) -> out: (n_points, n_cols)
    n_cols = stacked.shape[0]
    n_points = stacked.shape[1]
    for i in range(n_points):
        for j in range(n_cols):
            out[i, j] = stacked[j, i]


_pack_rows_py = _pack_rows_impl
_pack_rows_jit = njit(cache=False)(_pack_rows_impl)


def pack_rows(columns: Sequence[np.ndarray], count: int, *, jit: bool = False) -> np.ndarray:
    """Interleave ``columns`` into a (count, len(columns)) float64 row matrix.

    One kernel serves every tuple size; ``jit`` selects the numba version.
    """
    stacked = np.empty((len(columns), count), dtype=np.float64)
    for j, col in enumerate(columns):
        stacked[j, :] = np.asarray(col, dtype=np.float64)[:count]
    out = np.empty((count, len(columns)), dtype=np.float64)
    kernel = _pack_rows_jit if jit else _pack_rows_py
    kernel(stacked, out)
    return out


def write_rows(transport: "Transport", columns: Sequence[np.ndarray], count: int, *, jit: bool = False) -> None:
    """Send one row per point, then the end-of-curve sentinel."""
    for row in pack_rows(columns, count, jit=jit):
        transport.send_row(row.tolist())
    transport.end_curve()


def curve_columns(chunk: Chunk, curve: int) -> List[np.ndarray]:
    """1-D point-axis slices of every array for the chunk's ``curve``-th curve.

    Axes where an array is degenerate (extent 1) are pinned to index 0.
    """
    idx = curve_index(chunk, curve)
    cols: List[np.ndarray] = []
    for arr in chunk.data:
        sel: list = [slice(None)]
        for axis, i in enumerate(idx, start=1):
            if arr.ndim > axis:
                sel.append(i if arr.shape[axis] > 1 else 0)
        cols.append(arr[tuple(sel)])
    return cols


def serialize_chunks(chunks: Sequence[Chunk], transport: "Transport", *, jit: bool = False) -> int:
    """Write every curve's rows in command-clause order; returns rows sent."""
    sent = 0
    for chunk in chunks:
        for curve in range(chunk.curve_count):
            write_rows(transport, curve_columns(chunk, curve), chunk.n_points, jit=jit)
            sent += chunk.n_points
    return sent


def serialize_plan(plan: "PlotPlan", transport: "Transport", *, jit: bool = False) -> int:
    return serialize_chunks(plan.chunks, transport, jit=jit)
