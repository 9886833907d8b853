# tests/unit/test_tuplesize.py
from __future__ import annotations

import numpy as np
import pytest

from plotcall.errors import TupleSizeConflict, UnsupportedStyleError
from plotcall.pipeline.chunks import Chunk
from plotcall.pipeline.tuplesize import resolve_tuple_size, snapshot_tuple_size, uses_secondary_axis


def _chunk(*options):
    return Chunk(options=[dict(o) for o in options], data=[np.arange(4)])


def test_default_style_is_filled_in():
    chunk = _chunk({})
    assert resolve_tuple_size(chunk, is_3d=False, default_with=["lines"]) == 2
    assert chunk.options[0]["with"] == ["lines"]
    assert chunk.tuple_size == 2


def test_base_size_in_3d():
    assert resolve_tuple_size(_chunk({}), is_3d=True, default_with=["points"]) == 3


def test_style_increment_applies():
    chunk = _chunk({"with": ["yerrorbars"]})
    assert resolve_tuple_size(chunk, is_3d=False, default_with=["lines"]) == 3


def test_explicit_tuplesize_is_authoritative():
    assert snapshot_tuple_size({"with": ["points"], "tuplesize": 5}, is_3d=False) == 5


def test_explicit_tuplesize_still_checks_style_mode():
    with pytest.raises(UnsupportedStyleError):
        snapshot_tuple_size({"with": ["circles"], "tuplesize": 4}, is_3d=True)


def test_conflicting_sizes_in_one_chunk():
    chunk = _chunk({"with": ["lines"]}, {"with": ["xyerrorbars"]})
    with pytest.raises(TupleSizeConflict, match="2 != 4"):
        resolve_tuple_size(chunk, is_3d=False, default_with=["lines"])


def test_secondary_axis_detection():
    assert uses_secondary_axis({"y2": True})
    assert uses_secondary_axis({"axes": "x2y2"})
    assert not uses_secondary_axis({"axes": "x2y1"})
    assert not uses_secondary_axis({"y2": False})


def test_secondary_axis_rejected_in_3d():
    with pytest.raises(UnsupportedStyleError, match="3D"):
        resolve_tuple_size(_chunk({"y2": True}), is_3d=True, default_with=["lines"])
