# src/plotcall/options/state.py
from __future__ import annotations

import copy
from typing import Any, Dict, Iterator, Mapping, MutableMapping

from plotcall.errors import UnknownOptionError
from .vocabulary import Universe, lookup_option

__all__ = ["OptionState"]


class OptionState(MutableMapping):
    """
    Cumulative option accumulator for one universe ("global" or "curve").

    Keys are canonical option names; values are already parsed. Merging is
    left-biased: later fragments override earlier ones, and a ``None`` value
    deletes the option. Snapshots are deep copies, so a snapshot never shares
    mutable values (legend lists, ranges) with the accumulator.
    """

    def __init__(self, universe: Universe, values: Mapping[str, Any] | None = None):
        self.universe: Universe = universe
        self._values: Dict[str, Any] = {}
        if values:
            self.merge(values)

    # -- mapping protocol -----------------------------------------------------
    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.merge({key: value})

    def __delitem__(self, key: str) -> None:
        del self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"OptionState({self.universe!r}, {self._values!r})"

    # -- accumulation ---------------------------------------------------------
    def merge(self, fragment: Mapping[str, Any]) -> "OptionState":
        """Parse and merge a raw fragment into this state; returns self."""
        unknown = []
        parsed: Dict[str, Any] = {}
        deleted = []
        for raw_key, raw_value in fragment.items():
            spec = lookup_option(raw_key, self.universe)
            if spec is None:
                unknown.append(raw_key)
                continue
            if raw_value is None:
                deleted.append(spec.name)
                parsed.pop(spec.name, None)
                continue
            parsed[spec.name] = spec.parse(spec.name, raw_value)
        if unknown:
            raise UnknownOptionError(unknown, universe=self.universe)
        for name in deleted:
            self._values.pop(name, None)
        self._values.update(parsed)
        return self

    def merge_parsed(self, values: Mapping[str, Any]) -> "OptionState":
        """Merge values that are already canonical and parsed."""
        for k, v in values.items():
            if v is None:
                self._values.pop(k, None)
            else:
                self._values[k] = copy.deepcopy(v)
        return self

    def snapshot(self) -> Dict[str, Any]:
        return copy.deepcopy(self._values)

    def copy(self) -> "OptionState":
        out = OptionState(self.universe)
        out._values = self.snapshot()
        return out

    def drop_legend(self) -> None:
        self._values.pop("legend", None)

    def clear(self) -> None:
        self._values.clear()
