# src/plotcall/pipeline/plan.py
"""
Resolve one plot call into a validated ``PlotPlan``.

    args -> classify -> split plot options -> chunks -> tuple size
         -> implicit domain -> curve count -> option reconciliation
         -> curve budget

Nothing here talks to a transport. Every check runs before the caller
emits anything, so a raised error leaves the engine untouched.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from plotcall.config import PlotcallConfig
from plotcall.errors import ArityMismatch
from plotcall.options.classify import DataRun, OptionFragment, OptionRun, Run, classify_args
from plotcall.options.state import OptionState
from plotcall.options.vocabulary import lookup_option
from .broadcast import check_curve_budget, count_curves, reconcile_options
from .chunks import Chunk, build_chunks
from .domain import complete_domain
from .tuplesize import BASE_TUPLE_SIZE, resolve_tuple_size

__all__ = ["PlotPlan", "split_plot_options", "resolve_call"]


@dataclass
class PlotPlan:
    plot_options: Dict[str, Any]
    is_3d: bool
    chunks: List[Chunk]
    total_curves: int
    curve_state: OptionState = field(repr=False, default_factory=lambda: OptionState("curve"))
    # replayable form of the call: curve runs with plot options stripped,
    # and the plot options the call itself set (None = removed for the call)
    runs: List[Run] = field(repr=False, default_factory=list)
    call_options: Dict[str, Any] = field(repr=False, default_factory=dict)

    @property
    def snapshots(self) -> List[Dict[str, Any]]:
        """Per-curve options in emission order."""
        return [snap for chunk in self.chunks for snap in chunk.options]


def _take_plot(frag: OptionFragment, plot_state: OptionState) -> bool:
    """Move the fragment's global names into ``plot_state``.

    Returns True when the fragment held only global names and can be dropped.
    """
    if not frag.plot:
        return False
    plot_state.merge(frag.plot)
    frag.plot = {}
    return not frag.curve


def split_plot_options(runs: List[Run], plot_state: OptionState) -> List[Run]:
    """Pull per-call plot options out of the leading run and an all-global
    trailing run. Global names left anywhere else are rejected later."""
    runs = list(runs)
    if runs and isinstance(runs[0], OptionRun):
        kept = [f for f in runs[0].fragments if not _take_plot(f, plot_state)]
        if kept:
            runs[0] = OptionRun(kept)
        else:
            runs.pop(0)

    if len(runs) > 1 and isinstance(runs[-1], OptionRun):
        tail = runs[-1]
        if all(f.is_global_only for f in tail.fragments):
            for f in tail.fragments:
                _take_plot(f, plot_state)
            runs.pop()
    return runs


def _default_with(plot_state: OptionState, config: PlotcallConfig) -> List[str]:
    if "globalwith" in plot_state:
        return list(plot_state["globalwith"])
    spec = lookup_option("globalwith", "global")
    return spec.parse("globalwith", config.default_style)


def _call_options(base: Dict[str, Any], plot: OptionState) -> Dict[str, Any]:
    """Plot options that differ from ``base``, the window's persistent ones."""
    out: Dict[str, Any] = {k: v for k, v in plot.snapshot().items() if k not in base or base[k] != v}
    out.update({k: None for k in base if k not in plot})
    return out


def _append_runs(previous: Sequence[Run], runs: Sequence[Run]) -> List[Run]:
    """Continue a previous call's runs with new ones.

    New data that would otherwise extend the previous call's last data run
    gets an empty fragment in front, so it starts its own chunk.
    """
    joined = list(previous)
    if joined and runs and isinstance(joined[-1], DataRun) and isinstance(runs[0], DataRun):
        joined.append(OptionRun([OptionFragment()]))
    joined.extend(runs)
    return joined


def resolve_call(
    args: Sequence[Any],
    *,
    curve_state: OptionState | None = None,
    plot_state: OptionState | None = None,
    config: PlotcallConfig | None = None,
    replay: PlotPlan | None = None,
) -> PlotPlan:
    """Interpret ``args`` into a ``PlotPlan``.

    ``curve_state`` and ``plot_state`` are copied, never mutated; the curve
    accumulator as it stands after the call is returned as
    ``plan.curve_state`` for the caller to keep.

    With ``replay``, ``args`` extend that earlier plan: its curve runs come
    first and its per-call plot options apply under any new ones.
    """
    config = config or PlotcallConfig()
    curves = curve_state.copy() if curve_state is not None else OptionState("curve")

    base = plot_state.snapshot() if plot_state is not None else {}
    plot = OptionState("global").merge_parsed(base)
    if replay is not None:
        plot.merge_parsed(replay.call_options)
    runs = split_plot_options(classify_args(args), plot)
    if replay is not None:
        runs = _append_runs(replay.runs, runs)
    is_3d = bool(plot.get("3d", False))

    if not any(isinstance(r, DataRun) for r in runs):
        raise ArityMismatch(
            BASE_TUPLE_SIZE[is_3d], 0,
            mode="3D" if is_3d else "2D",
            detail="plot call contains no data arrays",
        )

    chunks = build_chunks(runs, curves)
    default_with = _default_with(plot, config)
    for chunk in chunks:
        resolve_tuple_size(chunk, is_3d=is_3d, default_with=default_with)
        complete_domain(chunk, is_3d=is_3d)
        count_curves(chunk)
        reconcile_options(chunk)

    total = check_curve_budget(chunks, config.max_curves, warn_at=config.many_curves_warning)
    return PlotPlan(
        plot_options=plot.snapshot(),
        is_3d=is_3d,
        chunks=chunks,
        total_curves=total,
        curve_state=curves,
        runs=runs,
        call_options=_call_options(base, plot),
    )
