# tests/unit/test_vocabulary.py
from __future__ import annotations

import pytest

from plotcall.errors import OptionValueError, UnknownOptionError, UnsupportedStyleError
from plotcall.options.vocabulary import (
    CURVE_OPTIONS,
    GLOBAL_OPTIONS,
    canonical_style,
    lookup_option,
    style_increment,
)


# ---- lookup -----------------------------------------------------------------

def test_exact_names_resolve_to_their_universe():
    assert lookup_option("legend").universe == "curve"
    assert lookup_option("title").universe == "global"


def test_lookup_is_case_insensitive():
    assert lookup_option("LeGeNd").name == "legend"


def test_unique_prefix_expands():
    assert lookup_option("leg").name == "legend"
    assert lookup_option("ti").name == "title"


def test_exact_name_beats_prefix():
    # "y2" is both a curve option and a prefix of y2label/y2range
    assert lookup_option("y2").name == "y2"


def test_trid_alias_for_3d():
    spec = lookup_option("trid")
    assert spec.name == "3d"
    assert spec.universe == "global"


def test_ambiguous_prefix_lists_candidates():
    with pytest.raises(UnknownOptionError, match="xlabel, xrange"):
        lookup_option("x")


def test_unknown_and_non_string_names_return_none():
    assert lookup_option("colour") is None
    assert lookup_option(42) is None
    assert lookup_option("") is None


def test_universe_restricts_lookup():
    assert lookup_option("title", "curve") is None
    assert lookup_option("legend", "global") is None


def test_tables_are_disjoint():
    assert not set(CURVE_OPTIONS) & set(GLOBAL_OPTIONS)


# ---- value parsing ----------------------------------------------------------

def test_legend_is_stored_as_list():
    parse = CURVE_OPTIONS["legend"].parse
    assert parse("legend", "a") == ["a"]
    assert parse("legend", ("a", "b")) == ["a", "b"]


def test_with_is_split_and_canonicalized():
    parse = CURVE_OPTIONS["with"].parse
    assert parse("with", "LP pt 7") == ["linespoints", "pt", "7"]
    assert parse("with", ["line", "lw 2"]) == ["lines", "lw", "2"]


def test_bad_values_raise_option_value_error():
    with pytest.raises(OptionValueError, match="tuplesize"):
        CURVE_OPTIONS["tuplesize"].parse("tuplesize", 0)
    with pytest.raises(OptionValueError, match="x\\[12\\]y\\[12\\]"):
        CURVE_OPTIONS["axes"].parse("axes", "x3y1")
    with pytest.raises(OptionValueError, match="expected \\[min, max\\]"):
        GLOBAL_OPTIONS["xrange"].parse("xrange", [1, 2, 3])


def test_range_allows_open_ends():
    assert GLOBAL_OPTIONS["yrange"].parse("yrange", [None, 5]) == (None, 5.0)


# ---- styles -----------------------------------------------------------------

@pytest.mark.parametrize(
    "word, canon",
    [("lines", "lines"), ("line", "lines"), ("li", "lines"), ("lp", "linespoints"),
     ("Points", "points"), ("box", "boxes"), ("hist", "histeps"), ("vector", "vectors")],
)
def test_canonical_style(word, canon):
    assert canonical_style(word) == canon


def test_unknown_style_raises():
    with pytest.raises(UnsupportedStyleError, match="sparkles"):
        canonical_style("sparkles")


def test_style_increments():
    assert style_increment(["lines"], is_3d=False) == 0
    assert style_increment(["yerrorbars"], is_3d=False) == 1
    assert style_increment(["xyerrorbars"], is_3d=False) == 2
    assert style_increment(["candlesticks"], is_3d=False) == 3
    assert style_increment(["vectors"], is_3d=True) == 3
    assert style_increment(["points", "palette"], is_3d=False) == 1
    assert style_increment(["points", "ps", "variable", "lc", "palette"], is_3d=True) == 2


def test_style_unavailable_in_mode():
    with pytest.raises(UnsupportedStyleError, match="not supported in 3D"):
        style_increment(["boxes"], is_3d=True)
    with pytest.raises(UnsupportedStyleError, match="not supported in 2D"):
        style_increment(["pm3d"], is_3d=False)
