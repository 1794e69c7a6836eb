"""Application state and regeneration rules of the interactive tree.

The viewer owns one AppState. The render loop calls `tick` with the current
slider values; the toggle buttons call `toggle_randomize` / `toggle_jitter`.
Any change rebuilds the whole tree.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .fractal_tree import FractalTree
from .fractal_tree_parameters import FractalTreeParameters
from .segment import Segment

_LOGGER = logging.getLogger(__name__)

ANGLE_STEP = 0.01
DEFAULT_ANGLE = math.pi / 4


def clamp_angle(angle: float, max_angle: float = math.pi) -> float:
    """Clamp `angle` to [0, max_angle] and snap it to the slider step."""
    a = min(max(float(angle), 0.0), max_angle)
    if a < max_angle:
        a = min(round(a / ANGLE_STEP) * ANGLE_STEP, max_angle)
    return a


def clamp_depth(depth: float, max_depth: int = 12) -> int:
    """Round `depth` to an integer and clamp it to [1, max_depth]."""
    return int(min(max(int(round(depth)), 1), max_depth))


@dataclass
class AppState:
    """Everything the interactive tree needs between frames.

    Attributes:
        tree: The generator; `tree.segments` is the tree currently displayed.
        angle: Current rotation angle (radians).
        depth: Current tree depth.
        previous_angle: Angle seen at the last tick, None before the first one.
        previous_depth: Depth seen at the last tick, None before the first one.
        randomize: Whether child angles get a random offset.
        jitter: Whether end points drift every frame.
        rebuilds: Number of rebuilds so far.
    """

    tree: FractalTree
    angle: float = DEFAULT_ANGLE
    depth: int = 12
    previous_angle: Optional[float] = None
    previous_depth: Optional[int] = None
    randomize: bool = False
    jitter: bool = False
    rebuilds: int = field(default=0)

    @property
    def params(self) -> FractalTreeParameters:
        return self.tree.params

    @property
    def segments(self) -> List[Segment]:
        return self.tree.segments


def initial_state(
    params: Optional[FractalTreeParameters] = None,
    rng: Any = None,
    *,
    angle: float = DEFAULT_ANGLE,
    depth: Optional[int] = None,
) -> AppState:
    """Create the start-up state and grow the first tree."""
    tree = FractalTree(params, rng=rng)
    p = tree.params
    state = AppState(
        tree=tree,
        angle=clamp_angle(angle, p.max_angle),
        depth=clamp_depth(p.max_depth if depth is None else depth, p.max_depth),
    )
    rebuild(state)
    return state


def rebuild(state: AppState) -> List[Segment]:
    """Regenerate the tree from scratch, dropping any jitter drift."""
    segments = state.tree.grow_tree(state.depth, state.angle, state.randomize)
    state.rebuilds += 1
    _LOGGER.debug(
        "Rebuild #%d: angle=%.2f depth=%d segments=%d",
        state.rebuilds,
        state.angle,
        state.depth,
        len(segments),
    )
    return segments


def tick(state: AppState, angle: float, depth: float) -> bool:
    """Read the control values of one frame and rebuild if they changed.

    Returns:
        True if the tree was rebuilt.
    """
    state.angle = clamp_angle(angle, state.params.max_angle)
    state.depth = clamp_depth(depth, state.params.max_depth)

    rebuilt = False
    if state.angle != state.previous_angle:
        rebuild(state)
        state.previous_angle = state.angle
        rebuilt = True
    if state.depth != state.previous_depth:
        if not rebuilt:
            rebuild(state)
        state.previous_depth = state.depth
        rebuilt = True
    return rebuilt


def toggle_randomize(state: AppState) -> bool:
    """Flip the randomize flag and rebuild. Returns the new flag."""
    state.randomize = not state.randomize
    _LOGGER.info("Randomness: %s", state.randomize)
    rebuild(state)
    return state.randomize


def toggle_jitter(state: AppState) -> bool:
    """Flip the jitter flag and rebuild. Returns the new flag."""
    state.jitter = not state.jitter
    _LOGGER.info("Jitter: %s", state.jitter)
    rebuild(state)
    return state.jitter


def apply_jitter(state: AppState) -> bool:
    """Perturb the end points if jitter is on. Returns True if anything moved."""
    if not state.jitter:
        return False
    state.tree.jitter()
    return True
