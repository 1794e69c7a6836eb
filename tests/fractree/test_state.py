from __future__ import annotations

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from fractree.config import make_rng
from fractree.state import (
    DEFAULT_ANGLE,
    apply_jitter,
    clamp_angle,
    clamp_depth,
    initial_state,
    rebuild,
    tick,
    toggle_jitter,
    toggle_randomize,
)


def test_clamp_depth():
    assert clamp_depth(0) == 1
    assert clamp_depth(-3) == 1
    assert clamp_depth(5.4) == 5
    assert clamp_depth(5.6) == 6
    assert clamp_depth(20) == 12
    assert clamp_depth(9, max_depth=8) == 8


def test_clamp_angle():
    assert clamp_angle(-1.0) == 0.0
    assert clamp_angle(4.0) == pytest.approx(math.pi)
    assert clamp_angle(0.786) == pytest.approx(0.79)
    assert clamp_angle(DEFAULT_ANGLE) == clamp_angle(DEFAULT_ANGLE + 1e-6)


def test_initial_state(params):
    state = initial_state(params)
    assert state.rebuilds == 1
    assert state.depth == 12
    assert state.angle == pytest.approx(0.79)
    assert state.previous_angle is None and state.previous_depth is None
    assert state.randomize is False and state.jitter is False
    assert len(state.segments) == 2**13 - 1


def test_first_tick_rebuilds_then_idle(params):
    state = initial_state(params, depth=3)
    assert tick(state, DEFAULT_ANGLE, 3) is True
    assert state.rebuilds == 2
    assert tick(state, DEFAULT_ANGLE, 3) is False
    assert state.rebuilds == 2


def test_angle_or_depth_change_rebuilds(params):
    state = initial_state(params, depth=3)
    tick(state, 0.5, 3)
    n = state.rebuilds

    assert tick(state, 0.6, 3) is True
    assert state.rebuilds == n + 1
    assert state.previous_angle == pytest.approx(0.6)

    assert tick(state, 0.6, 4) is True
    assert state.rebuilds == n + 2
    assert state.previous_depth == 4
    assert len(state.segments) == 2**5 - 1

    # Both change in one tick: one rebuild.
    assert tick(state, 0.7, 2) is True
    assert state.rebuilds == n + 3
    assert len(state.segments) == 2**3 - 1


def test_tick_clamps_inputs(params):
    state = initial_state(params, depth=3)
    tick(state, 10.0, 99)
    assert state.angle == pytest.approx(math.pi)
    assert state.depth == 12


def test_toggles_flip_and_rebuild(params):
    state = initial_state(params, make_rng(1), depth=3)
    n = state.rebuilds

    assert toggle_randomize(state) is True
    assert state.rebuilds == n + 1
    assert toggle_jitter(state) is True
    assert state.rebuilds == n + 2
    assert toggle_randomize(state) is False
    assert toggle_jitter(state) is False
    assert state.rebuilds == n + 4


def test_randomize_changes_tree(params):
    state = initial_state(params, make_rng(1), depth=3)
    plain = [s.end.copy() for s in state.segments]
    toggle_randomize(state)
    assert not np.allclose(np.array(plain), np.array([s.end for s in state.segments]))


def test_apply_jitter_only_when_enabled(params):
    state = initial_state(params, make_rng(2), depth=2)
    end = state.segments[0].end.copy()

    assert apply_jitter(state) is False
    assert_allclose(state.segments[0].end, end)

    toggle_jitter(state)
    assert apply_jitter(state) is True
    assert not np.allclose(state.segments[0].end, end)


def test_rebuild_discards_jitter_drift(params):
    state = initial_state(params, make_rng(2), depth=2)
    toggle_jitter(state)
    for _ in range(5):
        apply_jitter(state)

    rebuild(state)

    assert_allclose(state.segments[0].end, [400.0, 420.0])
