# src/plotcall/pipeline/chunks.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from plotcall.errors import UnknownOptionError
from plotcall.options.classify import OptionFragment, OptionRun, Run
from plotcall.options.state import OptionState

__all__ = ["Chunk", "build_chunks"]


@dataclass
class Chunk:
    """
    Curve-option snapshots plus the contiguous arrays they style.

    ``tuple_size``, ``curve_count``, ``shared_extents`` and ``domain`` are
    filled in during resolution; a chunk lives for one plot call only.
    """
    options: List[Dict[str, Any]]
    data: List[np.ndarray]
    tuple_size: int = 0
    curve_count: int = 0
    shared_extents: Tuple[int, ...] = ()
    domain: Optional[str] = None    # None | "index" | "grid"

    @property
    def n_points(self) -> int:
        return int(self.data[0].shape[0])

    @property
    def shapes(self) -> List[Tuple[int, ...]]:
        return [tuple(a.shape) for a in self.data]


def _merge_curve_fragment(state: OptionState, frag: OptionFragment) -> None:
    if frag.plot:
        raise UnknownOptionError(
            list(frag.plot),
            universe="curve",
            detail="plot options are only accepted at the start or end of a plot call",
        )
    state.merge(frag.curve)


def build_chunks(runs: Sequence[Run], state: OptionState) -> List[Chunk]:
    """Group classified runs into chunks, layering curve options cumulatively.

    ``state`` is the caller-owned curve accumulator; it is mutated in place.
    Every merged fragment yields one snapshot; a data run with no fragments
    before it gets one snapshot of the current state. ``legend`` never
    carries over from one snapshot to the next.
    """
    chunks: List[Chunk] = []
    pending: List[OptionFragment] = []

    for run in runs:
        if isinstance(run, OptionRun):
            pending.extend(run.fragments)
            continue

        state.drop_legend()
        snapshots: List[Dict[str, Any]] = []
        for frag in pending:
            _merge_curve_fragment(state, frag)
            snapshots.append(state.snapshot())
            state.drop_legend()
        if not snapshots:
            snapshots.append(state.snapshot())
        pending = []
        chunks.append(Chunk(options=snapshots, data=list(run.arrays)))

    # Curve options after the last data run style the window's next call.
    for frag in pending:
        _merge_curve_fragment(state, frag)
    return chunks
