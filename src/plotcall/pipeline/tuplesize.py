# src/plotcall/pipeline/tuplesize.py
from __future__ import annotations

from typing import Any, List, Mapping, Sequence

from plotcall.errors import TupleSizeConflict, UnsupportedStyleError
from plotcall.options.vocabulary import style_increment
from .chunks import Chunk

__all__ = [
    "BASE_TUPLE_SIZE",
    "uses_secondary_axis",
    "snapshot_tuple_size",
    "resolve_tuple_size",
]

# geometric minimum: (x, y) in 2-D, (x, y, z) in 3-D
BASE_TUPLE_SIZE = {False: 2, True: 3}


def uses_secondary_axis(snapshot: Mapping[str, Any]) -> bool:
    if snapshot.get("y2"):
        return True
    axes = snapshot.get("axes")
    return isinstance(axes, str) and axes.endswith("y2")


def snapshot_tuple_size(snapshot: Mapping[str, Any], *, is_3d: bool) -> int:
    """Columns per point for one curve-option snapshot (``with`` must be set)."""
    with_words: List[str] = snapshot["with"]
    # style availability is checked even when tuplesize is explicit
    inc = style_increment(with_words, is_3d=is_3d)
    if "tuplesize" in snapshot:
        return int(snapshot["tuplesize"])
    return BASE_TUPLE_SIZE[is_3d] + inc


def resolve_tuple_size(chunk: Chunk, *, is_3d: bool, default_with: Sequence[str]) -> int:
    """Fill in default styles and resolve the chunk's single tuple size.

    All snapshots of a chunk share one column layout, so they must agree.
    """
    sizes: List[int] = []
    for snap in chunk.options:
        if "with" not in snap:
            snap["with"] = list(default_with)
        if is_3d and uses_secondary_axis(snap):
            raise UnsupportedStyleError(
                snap["with"][0], mode="3D", detail="secondary y axis (y2) is undefined in 3D plots"
            )
        sizes.append(snapshot_tuple_size(snap, is_3d=is_3d))
        if sizes[-1] != sizes[0]:
            raise TupleSizeConflict(sizes[0], sizes[-1])
    chunk.tuple_size = sizes[0]
    return chunk.tuple_size
