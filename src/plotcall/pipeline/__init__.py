# src/plotcall/pipeline/__init__.py
from __future__ import annotations

from .chunks import Chunk, build_chunks
from .tuplesize import resolve_tuple_size
from .domain import complete_domain
from .broadcast import count_curves, reconcile_options, check_curve_budget
from .command import render_command, render_plan
from .serialize import write_rows, serialize_chunks, serialize_plan
from .plan import PlotPlan, resolve_call

__all__ = [
    "Chunk", "build_chunks",
    "resolve_tuple_size",
    "complete_domain",
    "count_curves", "reconcile_options", "check_curve_budget",
    "render_command", "render_plan",
    "write_rows", "serialize_chunks", "serialize_plan",
    "PlotPlan", "resolve_call",
]
