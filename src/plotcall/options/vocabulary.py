# src/plotcall/options/vocabulary.py
"""
Static option vocabulary.

Two universes are recognized:
  - "global": plot-level settings that apply to the whole plot call
  - "curve":  per-curve settings, accumulated across chunks

Every option name maps to an ``OptionSpec`` carrying a value parser.
Names are case-insensitive and may be abbreviated to any unique prefix;
exact names always win over prefixes, ambiguous prefixes are rejected.
"""
from __future__ import annotations

import numbers
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, Tuple

from plotcall.errors import OptionValueError, UnknownOptionError, UnsupportedStyleError

__all__ = [
    "Universe",
    "OptionSpec",
    "CURVE_OPTIONS",
    "GLOBAL_OPTIONS",
    "STYLE_TABLE",
    "lookup_option",
    "canonical_style",
    "style_increment",
]

Universe = Literal["global", "curve"]


@dataclass(frozen=True)
class OptionSpec:
    name: str
    universe: Universe
    parse: Callable[[str, Any], Any]
    doc: str = ""


# ---- value parsers -----------------------------------------------------------
# Each parser gets (name, raw_value) and returns the stored value.
# ``None`` is handled by the caller (it deletes the option).

def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, (bool, numbers.Integral)):
        return bool(value)
    raise OptionValueError(name, value, "expected a boolean")


def _parse_str(name: str, value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, numbers.Number):
        return str(value)
    raise OptionValueError(name, value, "expected a string")


def _parse_str_list(name: str, value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        if not value:
            raise OptionValueError(name, value, "expected at least one entry")
        out: List[str] = []
        for item in value:
            if not isinstance(item, (str, numbers.Number)):
                raise OptionValueError(name, value, "entries must be strings")
            out.append(str(item))
        return out
    raise OptionValueError(name, value, "expected a string or a list of strings")


def _parse_with(name: str, value: Any) -> List[str]:
    if isinstance(value, str):
        words = value.split()
    elif isinstance(value, (list, tuple)) and all(isinstance(w, str) for w in value):
        words = [part for w in value for part in w.split()]
    else:
        raise OptionValueError(name, value, "expected a style string or a list of style words")
    if not words:
        raise OptionValueError(name, value, "empty plot style")
    words[0] = canonical_style(words[0])
    return words


def _parse_tuplesize(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise OptionValueError(name, value, "expected a positive integer")
    if int(value) < 1:
        raise OptionValueError(name, value, "expected a positive integer")
    return int(value)


_AXES_RE = re.compile(r"^x[12]y[12]$")


def _parse_axes(name: str, value: Any) -> str:
    if isinstance(value, str) and _AXES_RE.match(value.strip().lower()):
        return value.strip().lower()
    raise OptionValueError(name, value, "must match x[12]y[12]")


def _parse_range(name: str, value: Any) -> Tuple[Optional[float], Optional[float]]:
    if isinstance(value, (list, tuple)) and len(value) == 2:
        lo, hi = value
        ends: List[Optional[float]] = []
        for end in (lo, hi):
            if end is None:
                ends.append(None)
            elif isinstance(end, numbers.Real) and not isinstance(end, bool):
                ends.append(float(end))
            else:
                raise OptionValueError(name, value, "range ends must be numbers or None")
        return (ends[0], ends[1])
    raise OptionValueError(name, value, "expected [min, max]")


def _parse_key(name: str, value: Any) -> Any:
    if isinstance(value, str):
        return value
    return _parse_bool(name, value)


# ---- tables ------------------------------------------------------------------

def _table(universe: Universe, rows: List[Tuple[str, Callable[[str, Any], Any], str]]) -> Dict[str, OptionSpec]:
    return {name: OptionSpec(name, universe, parse, doc) for name, parse, doc in rows}


CURVE_OPTIONS: Dict[str, OptionSpec] = _table("curve", [
    ("legend", _parse_str_list, "curve title; a list gives one title per broadcast curve"),
    ("with", _parse_with, "plot style followed by style modifiers"),
    ("tuplesize", _parse_tuplesize, "explicit number of columns per point"),
    ("axes", _parse_axes, "axis routing, e.g. x1y2"),
    ("y2", _parse_bool, "shorthand for axes x1y2"),
    ("smooth", _parse_str, "smoothing/interpolation keyword"),
])

GLOBAL_OPTIONS: Dict[str, OptionSpec] = _table("global", [
    ("3d", _parse_bool, "make the plot 3-D (splot)"),
    ("title", _parse_str, "plot title"),
    ("xlabel", _parse_str, "X axis label"),
    ("ylabel", _parse_str, "Y axis label"),
    ("y2label", _parse_str, "secondary Y axis label"),
    ("zlabel", _parse_str, "Z axis label"),
    ("xrange", _parse_range, "X axis range [min, max]"),
    ("yrange", _parse_range, "Y axis range [min, max]"),
    ("y2range", _parse_range, "secondary Y axis range [min, max]"),
    ("zrange", _parse_range, "Z axis range [min, max]"),
    ("logscale", _parse_str, "axes to draw in log scale, e.g. 'xy'"),
    ("grid", _parse_bool, "draw a grid"),
    ("key", _parse_key, "legend box: False hides it, a string positions it"),
    ("globalwith", _parse_with, "default plot style for curves without 'with'"),
])

# Exact-name synonyms; checked before prefix expansion.
_ALIASES: Dict[str, Tuple[Universe, str]] = {
    "trid": ("global", "3d"),
}


def _tables(universe: Universe) -> Mapping[str, OptionSpec]:
    return CURVE_OPTIONS if universe == "curve" else GLOBAL_OPTIONS


def _expand_in(key: str, universe: Universe) -> Optional[OptionSpec]:
    table = _tables(universe)
    if key in table:
        return table[key]
    candidates = sorted(n for n in table if n.startswith(key))
    if len(candidates) == 1:
        return table[candidates[0]]
    if len(candidates) > 1:
        raise UnknownOptionError(
            [key], universe=universe, detail=f"ambiguous; could be one of {{ {', '.join(candidates)} }}"
        )
    return None


def lookup_option(name: Any, universe: Optional[Universe] = None) -> Optional[OptionSpec]:
    """Resolve an option name (or unique prefix) to its spec.

    With ``universe=None`` the curve vocabulary is consulted first, then the
    global one. Returns None when the name matches nothing; raises
    ``UnknownOptionError`` when a prefix is ambiguous.
    """
    if not isinstance(name, str) or not name:
        return None
    key = name.strip().lower()
    order: Tuple[Universe, ...] = ("curve", "global") if universe is None else (universe,)

    # exact names (and aliases) beat prefixes in either universe
    for u in order:
        if key in _tables(u):
            return _tables(u)[key]
    if key in _ALIASES:
        u, canon = _ALIASES[key]
        if u in order:
            return _tables(u)[canon]

    for u in order:
        spec = _expand_in(key, u)
        if spec is not None:
            return spec
    return None


# ---- plot styles -------------------------------------------------------------
# style -> (extra columns in 2-D, extra columns in 3-D); None = not representable.

STYLE_TABLE: Dict[str, Tuple[Optional[int], Optional[int]]] = {
    "lines":        (0, 0),
    "points":       (0, 0),
    "linespoints":  (0, 0),
    "dots":         (0, 0),
    "impulses":     (0, 0),
    "steps":        (0, None),
    "fsteps":       (0, None),
    "histeps":      (0, None),
    "boxes":        (0, None),
    "filledcurves": (0, None),
    "circles":      (1, None),
    "yerrorbars":   (1, None),
    "xerrorbars":   (1, None),
    "yerrorlines":  (1, None),
    "xerrorlines":  (1, None),
    "boxerrorbars": (1, None),
    "xyerrorbars":  (2, None),
    "xyerrorlines": (2, None),
    "vectors":      (2, 3),
    "candlesticks": (3, None),
    "financebars":  (3, None),
    "pm3d":         (None, 0),
}

_STYLE_ALIASES: Dict[str, str] = {
    "li": "lines",
    "lin": "lines",
    "line": "lines",
    "lp": "linespoints",
    "box": "boxes",
    "hs": "histeps",
    "his": "histeps",
    "hist": "histeps",
}

# Style modifiers that each consume one more data column.
_EXTRA_COLUMN_WORDS = ("palette", "variable")


def canonical_style(word: str) -> str:
    """Normalize a style word: lowercase, aliases, missing plural 's'."""
    w = word.strip().lower()
    if w in STYLE_TABLE:
        return w
    if w in _STYLE_ALIASES:
        return _STYLE_ALIASES[w]
    if not w.endswith("s") and w + "s" in STYLE_TABLE:
        return w + "s"
    raise UnsupportedStyleError(word)


def style_increment(with_words: List[str], *, is_3d: bool) -> int:
    """Extra columns beyond the geometric minimum for a 'with' word list."""
    style = with_words[0]
    mode = "3D" if is_3d else "2D"
    inc = STYLE_TABLE[style][1 if is_3d else 0]
    if inc is None:
        raise UnsupportedStyleError(style, mode=mode)
    extra = sum(1 for w in with_words[1:] if w.lower() in _EXTRA_COLUMN_WORDS)
    return inc + extra
