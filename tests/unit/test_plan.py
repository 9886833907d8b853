# tests/unit/test_plan.py
from __future__ import annotations

import numpy as np
import pytest

from plotcall.config import PlotcallConfig
from plotcall.errors import ArityMismatch, MaxCurvesExceeded, UnknownOptionError
from plotcall.options.state import OptionState
from plotcall.pipeline.plan import resolve_call

N = 6
x = np.arange(N, dtype=float)


def test_cumulative_options_except_legend():
    plan = resolve_call([{"with": "points"}, x, {"legend": "x"}, x])
    assert plan.snapshots == [
        {"with": ["points"]},
        {"with": ["points"], "legend": ["x"]},
    ]


def test_single_array_gets_index_domain():
    plan = resolve_call([x ** 2])
    chunk = plan.chunks[0]
    assert chunk.tuple_size == 2
    assert chunk.domain == "index"
    np.testing.assert_array_equal(chunk.data[0], np.arange(N))


def test_leading_plot_options_are_split_out():
    plan = resolve_call([{"title": "T", "with": "lines"}, "xlabel", "t", x, x])
    assert plan.plot_options == {"title": "T", "xlabel": "t"}
    assert plan.snapshots == [{"with": ["lines"]}]


def test_global_only_fragment_makes_no_snapshot():
    plan = resolve_call([{"title": "T"}, x, np.stack([x, x], axis=1)])
    assert plan.total_curves == 2
    assert plan.snapshots == [{"with": ["lines"]}, {"with": ["lines"]}]


def test_trailing_plot_options_apply_to_call():
    plan = resolve_call([x, x, {"grid": True}])
    assert plan.plot_options == {"grid": True}


def test_mixed_trailing_run_with_plot_option_rejected():
    with pytest.raises(UnknownOptionError, match="'title'"):
        resolve_call([x, x, {"title": "T", "with": "lines"}])


def test_no_data_is_arity_mismatch():
    with pytest.raises(ArityMismatch, match="no data arrays"):
        resolve_call([{"title": "empty"}])


def test_default_style_from_globalwith_then_config():
    assert resolve_call([{"globalwith": "points"}, x]).snapshots == [{"with": ["points"]}]
    plan = resolve_call([x], config=PlotcallConfig(default_style="impulses"))
    assert plan.snapshots == [{"with": ["impulses"]}]


def test_trid_alias_switches_to_3d():
    plan = resolve_call([{"trid": True}, np.zeros((3, 4))])
    assert plan.is_3d
    assert plan.chunks[0].tuple_size == 3
    assert plan.chunks[0].domain == "grid"


def test_input_states_are_not_mutated():
    curves = OptionState("curve", {"with": "lines"})
    plot = OptionState("global", {"title": "kept"})
    plan = resolve_call([{"xlabel": "t"}, x, {"with": "steps"}], curve_state=curves, plot_state=plot)
    assert dict(curves) == {"with": ["lines"]}
    assert dict(plot) == {"title": "kept"}
    assert plan.plot_options == {"title": "kept", "xlabel": "t"}
    assert plan.curve_state["with"] == ["steps"]


def test_curve_ceiling():
    with pytest.raises(MaxCurvesExceeded):
        resolve_call([x, np.zeros((N, 5))], config=PlotcallConfig(max_curves=4))


def test_replay_keeps_new_data_in_its_own_chunk():
    first = resolve_call([x, x])
    plan = resolve_call([x, x ** 2], replay=first)
    assert len(plan.chunks) == 2
    assert plan.total_curves == 2


def test_replay_carries_call_options_under_new_ones():
    first = resolve_call([{"title": "T", "grid": True}, x])
    assert first.call_options == {"title": "T", "grid": True}
    plan = resolve_call([x, {"title": "U"}], replay=first)
    assert plan.plot_options == {"title": "U", "grid": True}


def test_call_options_record_removed_persistent_options():
    plot = OptionState("global", {"title": "P", "grid": True})
    plan = resolve_call([x, {"title": None}], plot_state=plot)
    assert plan.plot_options == {"grid": True}
    assert plan.call_options == {"title": None}
    # persistent options are untouched
    assert dict(plot) == {"title": "P", "grid": True}
