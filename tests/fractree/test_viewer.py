"""Unit tests for FractalTreeViewer.

The plotter is mocked, so no window is opened. The meshes handed to it are
real pyvista objects.
"""
from __future__ import annotations

import numpy as np
import pytest
import pyvista as pv

from fractree.config import make_rng
from fractree.fractal_tree_parameters import FractalTreeParameters
from fractree.viewer import FractalTreeViewer, default_parameters


@pytest.fixture
def viewer(params, mock_plotter) -> FractalTreeViewer:
    v = FractalTreeViewer(params=params, rng=make_rng(0), plotter=mock_plotter)
    v.depth_value = 3.0
    return v


def test_setup_creates_widgets_and_meshes(viewer, mock_plotter):
    viewer.setup()

    assert mock_plotter.add_slider_widget.call_count == 2
    titles = [c.kwargs["title"] for c in mock_plotter.add_slider_widget.call_args_list]
    assert titles == ["Rotation Angle", "Tree Depth"]
    assert mock_plotter.add_checkbox_button_widget.call_count == 2

    # Initial tree has the full default depth: one mesh per level 0..12.
    assert mock_plotter.add_mesh.call_count == 13
    first = mock_plotter.add_mesh.call_args_list[0]
    assert isinstance(first.args[0], pv.PolyData)
    assert first.kwargs["line_width"] == pytest.approx(10.0)
    assert first.kwargs["name"] == "depth-0"
    mock_plotter.enable_parallel_projection.assert_called_once()


def test_tick_applies_slider_values(viewer, mock_plotter):
    viewer.setup()
    mock_plotter.add_mesh.reset_mock()

    viewer.on_tick(0)

    assert viewer.state.depth == 3
    assert len(viewer.state.segments) == 15
    assert mock_plotter.add_mesh.call_count == 4
    assert mock_plotter.remove_actor.call_count == 13

    mock_plotter.add_mesh.reset_mock()
    viewer.on_tick(1)
    assert mock_plotter.add_mesh.call_count == 0

    viewer._on_angle(1.2)
    viewer.on_tick(2)
    assert viewer.state.angle == pytest.approx(1.2)
    assert mock_plotter.add_mesh.call_count == 4


def test_buttons_toggle_state(viewer, mock_plotter):
    viewer.setup()
    viewer.on_tick(0)
    n = viewer.state.rebuilds

    viewer._on_randomness(True)
    assert viewer.state.randomize is True
    assert viewer.state.rebuilds == n + 1

    # Same value again does not toggle.
    viewer._on_randomness(True)
    assert viewer.state.rebuilds == n + 1

    viewer._on_jitter(True)
    assert viewer.state.jitter is True
    assert viewer.state.rebuilds == n + 2


def test_jitter_moves_drawn_points(viewer, mock_plotter):
    viewer.setup()
    viewer.on_tick(0)
    viewer._on_jitter(True)
    mesh = viewer._meshes[0]
    start = np.array(mesh.points)

    viewer.on_tick(1)  # draws, then jitters
    viewer.on_tick(2)  # draws the jittered tree

    assert not np.allclose(np.array(viewer._meshes[0].points), start)
    assert viewer.frames == 3


def test_show_starts_timer_loop(viewer, mock_plotter, monkeypatch):
    monkeypatch.setenv("FRACTREE_FRAME_MS", "20")
    viewer.show()

    mock_plotter.add_timer_event.assert_called_once()
    kwargs = mock_plotter.add_timer_event.call_args.kwargs
    assert kwargs["duration"] == 20
    assert kwargs["callback"] == viewer.on_tick
    mock_plotter.show.assert_called_once()


def test_default_parameters_from_env(monkeypatch):
    monkeypatch.setenv("FRACTREE_CANVAS_WIDTH", "500")
    monkeypatch.setenv("FRACTREE_CANVAS_HEIGHT", "400")

    params = default_parameters()

    assert isinstance(params, FractalTreeParameters)
    assert (params.canvas_width, params.canvas_height) == (500.0, 400.0)
