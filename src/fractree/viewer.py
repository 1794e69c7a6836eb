"""Interactive pyvista window for the fractal tree.

The window holds two sliders (rotation angle, tree depth), two checkbox
buttons (Randomness, Jitter) and one line mesh per depth level. A repeating
interactor timer drives the render loop: each tick reads the sliders, rebuilds
the tree when they changed, redraws it and applies jitter.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional, Tuple

import pyvista as pv
import vtk

from .config import canvas_override, frame_interval_ms
from .fractal_tree_parameters import FractalTreeParameters
from .render import branch_style, group_by_depth, segment_points, segments_to_polydata
from .state import (
    DEFAULT_ANGLE,
    AppState,
    apply_jitter,
    initial_state,
    tick,
    toggle_jitter,
    toggle_randomize,
)

_LOGGER = logging.getLogger(__name__)

CANVAS_SCALE = 0.8
FALLBACK_SCREEN = (1280, 800)
BACKGROUND = (51 / 255, 51 / 255, 51 / 255)
BUTTON_ON = "orange"
BUTTON_OFF = "grey"
TIMER_MAX_STEPS = 2**31 - 1


def screen_size() -> Tuple[int, int]:
    """Return the screen size reported by VTK, or a fallback if unavailable."""
    try:
        win = vtk.vtkRenderWindow()
        win.SetOffScreenRendering(True)
        width, height = win.GetScreenSize()
        win.Finalize()
    except Exception as exc:
        _LOGGER.warning("Screen size query failed (%r); using fallback.", exc)
        return FALLBACK_SCREEN
    if width <= 0 or height <= 0:
        _LOGGER.warning("No screen size reported; using %s.", FALLBACK_SCREEN)
        return FALLBACK_SCREEN
    return int(width), int(height)


def default_parameters() -> FractalTreeParameters:
    """Parameters for a canvas covering 80% of the screen (env overrides win)."""
    env_w, env_h = canvas_override()
    if env_w is None or env_h is None:
        sw, sh = screen_size()
        env_w = env_w if env_w is not None else sw * CANVAS_SCALE
        env_h = env_h if env_h is not None else sh * CANVAS_SCALE
    return FractalTreeParameters(canvas_width=env_w, canvas_height=env_h)


class FractalTreeViewer:
    """Interactive fractal tree window.

    Args:
        params: Tree geometry; defaults to a canvas sized from the screen.
        rng: Random generator for randomized angles and jitter.
        plotter: Plotter to draw into; a new window-backed plotter is created
            when omitted.
    """

    def __init__(
        self,
        params: Optional[FractalTreeParameters] = None,
        rng: Any = None,
        plotter: Optional[pv.Plotter] = None,
    ) -> None:
        self.params = params if params is not None else default_parameters()
        self.state: AppState = initial_state(self.params, rng)
        self.plotter = plotter if plotter is not None else pv.Plotter(
            window_size=(int(self.params.canvas_width), int(self.params.canvas_height)),
            title="Fractal Tree",
        )
        self.angle_value = DEFAULT_ANGLE
        self.depth_value = float(self.params.max_depth)
        self._meshes: Dict[int, pv.PolyData] = {}
        self._groups: Dict[int, List[int]] = {}
        self._buttons: Dict[str, Any] = {}
        self._drawn_rebuild = -1
        self.frames = 0

    # ------------------------------------------------------------------
    # Widgets
    # ------------------------------------------------------------------
    def setup(self) -> None:
        """Create background, title, sliders, buttons and the first drawing."""
        p = self.plotter
        p.set_background(BACKGROUND)
        p.add_text("FRACTAL TREE", position="upper_edge", font_size=18, name="title")

        p.add_slider_widget(
            self._on_angle,
            rng=[0.0, self.params.max_angle],
            value=self.angle_value,
            title="Rotation Angle",
            pointa=(0.03, 0.12),
            pointb=(0.33, 0.12),
            fmt="%.2f",
            style="modern",
            interaction_event="always",
        )
        p.add_slider_widget(
            self._on_depth,
            rng=[1, self.params.max_depth],
            value=self.depth_value,
            title="Tree Depth",
            pointa=(0.38, 0.12),
            pointb=(0.68, 0.12),
            fmt="%.0f",
            style="modern",
            interaction_event="always",
        )

        self._buttons["randomness"] = p.add_checkbox_button_widget(
            self._on_randomness,
            value=self.state.randomize,
            position=(20.0, 20.0),
            size=30,
            color_on=BUTTON_ON,
            color_off=BUTTON_OFF,
        )
        p.add_text("Randomness", position=(60, 24), font_size=10, name="randomness")
        self._buttons["jitter"] = p.add_checkbox_button_widget(
            self._on_jitter,
            value=self.state.jitter,
            position=(200.0, 20.0),
            size=30,
            color_on=BUTTON_ON,
            color_off=BUTTON_OFF,
        )
        p.add_text("Jitter", position=(240, 24), font_size=10, name="jitter")

        self._setup_camera()
        self.draw()
        _LOGGER.info(
            "Viewer ready: canvas=%gx%g",
            self.params.canvas_width,
            self.params.canvas_height,
        )

    def _setup_camera(self) -> None:
        """Fit a parallel-projection camera to the canvas rectangle."""
        w = float(self.params.canvas_width)
        h = float(self.params.canvas_height)
        p = self.plotter
        p.enable_parallel_projection()
        p.camera.focal_point = (w / 2.0, h / 2.0, 0.0)
        p.camera.position = (w / 2.0, h / 2.0, max(w, h))
        p.camera.up = (0.0, 1.0, 0.0)
        p.camera.parallel_scale = h / 2.0

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------
    def _on_angle(self, value: float) -> None:
        self.angle_value = float(value)

    def _on_depth(self, value: float) -> None:
        self.depth_value = float(value)

    def _on_randomness(self, flag: bool) -> None:
        if bool(flag) != self.state.randomize:
            toggle_randomize(self.state)
        self.draw()

    def _on_jitter(self, flag: bool) -> None:
        if bool(flag) != self.state.jitter:
            toggle_jitter(self.state)
        self.draw()

    def on_tick(self, step: int = 0) -> None:
        """One frame: apply slider values, draw, then jitter."""
        tick(self.state, self.angle_value, self.depth_value)
        self.draw()
        apply_jitter(self.state)
        self.frames += 1

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------
    def draw(self) -> None:
        """Draw the current tree, rebuilding the meshes after a regeneration."""
        if self._drawn_rebuild != self.state.rebuilds:
            self._rebuild_meshes()
            self._drawn_rebuild = self.state.rebuilds
        elif self.state.jitter:
            self._update_points()
        self.plotter.render()

    def _rebuild_meshes(self) -> None:
        for depth in list(self._meshes):
            self.plotter.remove_actor(f"depth-{depth}")
        self._meshes.clear()

        segments = self.state.segments
        h = self.params.canvas_height
        self._groups = group_by_depth(segments)
        for depth, indices in sorted(self._groups.items()):
            style = branch_style(depth, self.state.depth)
            mesh = segments_to_polydata(segments, indices, h)
            self.plotter.add_mesh(
                mesh,
                color=style.rgb,
                line_width=style.width,
                name=f"depth-{depth}",
                reset_camera=False,
            )
            self._meshes[depth] = mesh
        _LOGGER.debug("Drew %d depth levels", len(self._meshes))

    def _update_points(self) -> None:
        segments = self.state.segments
        h = self.params.canvas_height
        for depth, mesh in self._meshes.items():
            mesh.points = segment_points(segments, self._groups[depth], h)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def show(self) -> None:
        """Open the window and run the render loop until it is closed."""
        self.setup()
        interval = frame_interval_ms()
        self.plotter.add_timer_event(
            max_steps=TIMER_MAX_STEPS, duration=interval, callback=self.on_tick
        )
        _LOGGER.info("Render loop started (every %d ms)", interval)
        self.plotter.show()


def main() -> None:
    """Launch the interactive fractal tree."""
    logging.basicConfig(format="%(asctime)s %(name)s %(levelname)s %(message)s")
    viewer = FractalTreeViewer()
    _LOGGER.info("Starting viewer (angle=%.1f deg)", math.degrees(DEFAULT_ANGLE))
    viewer.show()
