# src/plotcall/options/__init__.py
from __future__ import annotations

from .vocabulary import (
    OptionSpec, CURVE_OPTIONS, GLOBAL_OPTIONS, STYLE_TABLE,
    lookup_option, canonical_style, style_increment,
)
from .state import OptionState
from .classify import (
    OptionFragment, OptionRun, DataRun, is_array_data, classify_args,
)

__all__ = [
    "OptionSpec", "CURVE_OPTIONS", "GLOBAL_OPTIONS", "STYLE_TABLE",
    "lookup_option", "canonical_style", "style_increment",
    "OptionState",
    "OptionFragment", "OptionRun", "DataRun", "is_array_data", "classify_args",
]
