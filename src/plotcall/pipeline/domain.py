# src/plotcall/pipeline/domain.py
from __future__ import annotations

import numpy as np

from plotcall.errors import ArityMismatch, BroadcastError
from .chunks import Chunk

__all__ = ["complete_domain", "index_domain", "grid_domain"]


def index_domain(n_points: int) -> np.ndarray:
    return np.arange(n_points, dtype=np.float64)


def grid_domain(width: int, height: int) -> tuple[np.ndarray, np.ndarray]:
    """Flattened (x, y) coordinates of a width x height grid, x varying slowest."""
    xs, ys = np.meshgrid(
        np.arange(width, dtype=np.float64),
        np.arange(height, dtype=np.float64),
        indexing="ij",
    )
    return xs.reshape(width * height), ys.reshape(width * height)


def _grid_mismatch_axis(shape: tuple, width: int, height: int) -> int:
    if len(shape) < 1 or shape[0] != width:
        return 0
    return 1


def complete_domain(chunk: Chunk, *, is_3d: bool) -> None:
    """Check the chunk's array count against its tuple size and synthesize
    missing leading domain columns.

    2-D: one missing column -> sequential index 0..N-1.
    3-D: two missing columns -> x/y grid over the leading two axes of the
         first array; every array is flattened over those axes.
    """
    mode = "3D" if is_3d else "2D"
    n_have = len(chunk.data)
    n_want = chunk.tuple_size

    if n_have == n_want:
        return
    if n_have > n_want:
        raise ArityMismatch(
            n_want, n_have, mode=mode,
            detail="surplus data arrays; start a new curve with a curve-option fragment",
        )

    shortfall = n_want - n_have
    if not is_3d and shortfall == 1:
        chunk.data.insert(0, index_domain(chunk.n_points))
        chunk.domain = "index"
        return

    if is_3d and shortfall == 2:
        first = chunk.data[0]
        if first.ndim < 2:
            raise ArityMismatch(
                n_want, n_have, mode=mode,
                detail=f"an implicit x/y grid needs a 2-D first array, got shape {tuple(first.shape)}",
            )
        width, height = int(first.shape[0]), int(first.shape[1])
        for arr in chunk.data:
            if arr.ndim < 2 or tuple(arr.shape[:2]) != (width, height):
                raise BroadcastError(_grid_mismatch_axis(tuple(arr.shape), width, height), chunk.shapes)
        xs, ys = grid_domain(width, height)
        flat = [arr.reshape((width * height,) + tuple(arr.shape[2:])) for arr in chunk.data]
        chunk.data = [xs, ys] + flat
        chunk.domain = "grid"
        return

    raise ArityMismatch(n_want, n_have, mode=mode)
