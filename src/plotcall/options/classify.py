# src/plotcall/options/classify.py
"""
Option classifier: partition raw plot-call arguments into alternating
runs of option fragments and array data, preserving order.

An element is array data iff it is a numeric ``numpy.ndarray``. Everything
else takes part in option parsing, either as a mapping fragment (merged
wholesale) or as an inline ``key, value, key, value ...`` run.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence, Union

import numpy as np

from plotcall.errors import DanglingOptionKey, UnknownOptionError
from .vocabulary import lookup_option

__all__ = [
    "OptionFragment",
    "OptionRun",
    "DataRun",
    "Run",
    "is_array_data",
    "as_array_data",
    "classify_args",
]


@dataclass
class OptionFragment:
    """One mapping literal or one inline key/value run, split by universe.

    Keys are canonical option names; values are raw (unparsed).
    """
    curve: Dict[str, Any] = field(default_factory=dict)
    plot: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_global_only(self) -> bool:
        return bool(self.plot) and not self.curve


@dataclass
class OptionRun:
    fragments: List[OptionFragment]


@dataclass
class DataRun:
    arrays: List[np.ndarray]


Run = Union[OptionRun, DataRun]


def is_array_data(obj: Any) -> bool:
    return isinstance(obj, np.ndarray) and obj.dtype.kind in {"b", "i", "u", "f"}


def as_array_data(obj: np.ndarray) -> np.ndarray:
    # 0-d arrays still carry one point
    return np.atleast_1d(obj)


def _fragment_from_pairs(pairs: Sequence[tuple]) -> OptionFragment:
    frag = OptionFragment()
    unknown = []
    for key, value in pairs:
        spec = lookup_option(key)
        if spec is None:
            unknown.append(key)
            continue
        target = frag.curve if spec.universe == "curve" else frag.plot
        target[spec.name] = value
    if unknown:
        raise UnknownOptionError(unknown)
    return frag


def _inline_pairs(args: Sequence[Any], start: int) -> tuple[List[tuple], int]:
    """Consume key/value tokens from ``start``; stop at array data, a mapping
    in key position, or the end. Returns (pairs, next_index)."""
    pairs: List[tuple] = []
    i = start
    n = len(args)
    while i < n and not is_array_data(args[i]) and not isinstance(args[i], Mapping):
        key = args[i]
        if i + 1 >= n or is_array_data(args[i + 1]):
            raise DanglingOptionKey(key)
        pairs.append((key, args[i + 1]))
        i += 2
    return pairs, i


def classify_args(args: Sequence[Any]) -> List[Run]:
    """Partition ``args`` into alternating ``OptionRun`` / ``DataRun`` items."""
    runs: List[Run] = []
    i = 0
    n = len(args)
    while i < n:
        item = args[i]
        if is_array_data(item):
            arrays = []
            while i < n and is_array_data(args[i]):
                arrays.append(as_array_data(args[i]))
                i += 1
            runs.append(DataRun(arrays))
            continue

        if isinstance(item, Mapping):
            frag = _fragment_from_pairs(list(item.items()))
            i += 1
        else:
            pairs, i = _inline_pairs(args, i)
            frag = _fragment_from_pairs(pairs)

        if runs and isinstance(runs[-1], OptionRun):
            runs[-1].fragments.append(frag)
        else:
            runs.append(OptionRun([frag]))
    return runs
