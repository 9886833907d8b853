# tests/unit/test_command.py
from __future__ import annotations

import numpy as np
import pytest

from plotcall.errors import UnsupportedStyleError
from plotcall.pipeline.chunks import Chunk
from plotcall.pipeline.command import quote, render_clause, render_command, render_plot_directives


def _chunk(*options):
    return Chunk(options=[dict(o) for o in options], data=[np.arange(3)])


def test_quote_escapes():
    assert quote('say "hi"') == '"say \\"hi\\""'
    assert quote("a\\b") == '"a\\\\b"'


def test_clause_with_and_without_legend():
    assert render_clause({"with": ["lines"], "legend": ["sin"]}) == "'-' title \"sin\" with lines"
    assert render_clause({"with": ["points", "pt", "7"]}) == "'-' notitle with points pt 7"


def test_clause_smooth_and_axes():
    assert render_clause({"with": ["lines"], "smooth": "csplines", "axes": "x1y2"}) == (
        "'-' notitle with lines smooth csplines axes x1y2"
    )
    assert render_clause({"with": ["lines"], "y2": True}) == "'-' notitle with lines axes x1y2"


def test_plot_directives_fixed_order():
    lines = render_plot_directives({
        "key": False,
        "xrange": (None, 5.0),
        "title": "T",
        "grid": True,
        "3d": False,
    })
    assert lines == ['set title "T"', "set xrange [*:5.0]", "set grid", "unset key"]


def test_command_orders_clauses_by_chunk_then_curve():
    chunks = [
        _chunk({"with": ["lines"], "legend": ["a"]}, {"with": ["lines"]}),
        _chunk({"with": ["points"], "legend": ["b"]}),
    ]
    assert render_command(chunks, is_3d=False) == (
        "plot '-' title \"a\" with lines, '-' notitle with lines, '-' title \"b\" with points"
    )


def test_command_3d_verb():
    assert render_command([_chunk({"with": ["pm3d"]})], is_3d=True) == "splot '-' notitle with pm3d"


def test_secondary_axis_adds_tics_directives():
    text = render_command([_chunk({"with": ["lines"], "y2": True})], is_3d=False, plot_options={"title": "T"})
    assert text.splitlines() == [
        'set title "T"',
        "set ytics nomirror",
        "set y2tics",
        "plot '-' notitle with lines axes x1y2",
    ]


def test_secondary_axis_in_3d_rejected():
    with pytest.raises(UnsupportedStyleError, match="3D"):
        render_command([_chunk({"with": ["lines"], "axes": "x1y2"})], is_3d=True)


def test_rendering_is_deterministic():
    chunks = [_chunk({"with": ["lines"], "legend": ["a"]})]
    assert render_command(chunks, is_3d=False) == render_command(chunks, is_3d=False)
