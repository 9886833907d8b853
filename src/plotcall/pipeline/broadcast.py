# src/plotcall/pipeline/broadcast.py
from __future__ import annotations

import copy
import math
from typing import List, Sequence, Tuple
import warnings

import numpy as np

from plotcall.errors import (
    BroadcastError,
    LegendCountMismatch,
    MaxCurvesExceeded,
    TooManyOptionsError,
)
from .chunks import Chunk

__all__ = [
    "shared_extents",
    "count_curves",
    "reconcile_options",
    "check_curve_budget",
    "curve_index",
]


def shared_extents(arrays: Sequence[np.ndarray]) -> Tuple[int, ...]:
    """
    Per-axis broadcast extents beyond the point axis.

    Axis 0 must match exactly. For every later axis (missing axes count as 1)
    at most one distinct non-1 extent may appear across *all* arrays; two
    arrays with different non-1 extents on the same axis are rejected even
    where pairwise broadcasting could pair them up.
    """
    shapes = [tuple(a.shape) for a in arrays]
    if len({s[0] for s in shapes}) > 1:
        raise BroadcastError(0, shapes)

    ndim = max(len(s) for s in shapes)
    extents: List[int] = []
    for axis in range(1, ndim):
        seen = {s[axis] for s in shapes if len(s) > axis and s[axis] != 1}
        if len(seen) > 1:
            raise BroadcastError(axis, shapes)
        extents.append(seen.pop() if seen else 1)
    return tuple(extents)


def count_curves(chunk: Chunk) -> int:
    extents = shared_extents(chunk.data)
    chunk.shared_extents = extents
    chunk.curve_count = int(math.prod(extents))
    return chunk.curve_count


def reconcile_options(chunk: Chunk) -> None:
    """Make ``len(chunk.options) == chunk.curve_count``.

    Short option lists are padded with copies of the last snapshot without
    its legend. A legend list with one entry per curve is spread so that
    curve ``i`` carries entry ``i``.
    """
    n_curves = chunk.curve_count
    options = chunk.options

    for snap in options:
        legend = snap.get("legend")
        if legend is not None and len(legend) not in (1, n_curves):
            raise LegendCountMismatch(len(legend), n_curves)

    if len(options) > n_curves:
        raise TooManyOptionsError(len(options), n_curves)

    last = options[-1]
    spread = last.get("legend") if n_curves > 1 and len(last.get("legend") or ()) == n_curves else None
    while len(options) < n_curves:
        pad = copy.deepcopy(last)
        pad.pop("legend", None)
        if spread is not None:
            pad["legend"] = [spread[len(options)]]
        options.append(pad)

    for i, snap in enumerate(options):
        legend = snap.get("legend")
        if legend is not None and n_curves > 1 and len(legend) == n_curves:
            snap["legend"] = [legend[i]]


def check_curve_budget(chunks: Sequence[Chunk], max_curves: int, *, warn_at: int | None = None) -> int:
    """Total curve count across chunks; raises when above ``max_curves``."""
    total = 0
    for chunk in chunks:
        if warn_at is not None and chunk.curve_count >= warn_at:
            warnings.warn(
                f"plotting {chunk.curve_count} curves from a single broadcast chunk "
                f"(shapes {chunk.shapes}); flatten the data if you meant one curve.",
                RuntimeWarning,
                stacklevel=3,
            )
        total += chunk.curve_count
    if total > max_curves:
        raise MaxCurvesExceeded(total, max_curves)
    return total


def curve_index(chunk: Chunk, curve: int) -> Tuple[int, ...]:
    """Multi-index (over axes 1..D-1) of the chunk's ``curve``-th curve, C order."""
    if not chunk.shared_extents:
        return ()
    return tuple(int(i) for i in np.unravel_index(curve, chunk.shared_extents))
