"""Module defining the FractalTree class to generate 2D fractal trees.

This module implements breadth-first tree growth: a vertical trunk is expanded
round by round, every unfinished segment producing a left and a right child
rotated by the branch angle, until the requested depth is reached or the
branches become too short.
"""

from __future__ import annotations

import logging
import math
from typing import Any, List, Optional

import numpy as np
from numpy.typing import NDArray

from .config import current_rng
from .fractal_tree_parameters import FractalTreeParameters
from .segment import Segment

_LOGGER = logging.getLogger(__name__)


class FractalTree:
    """Fractal-tree generator on a flat canvas.

    The tree is a flat list of segments in generation order. Each call to
    `grow_tree` rebuilds the list from scratch.
    """

    def __init__(
        self,
        params: Optional[FractalTreeParameters] = None,
        rng: Any = None,
    ) -> None:
        """Initialize the fractal tree generator.

        Args:
            params: Tree geometry; defaults to `FractalTreeParameters()`.
            rng: Random generator used for randomized angles and jitter.
                Defaults to the package generator (see `fractree.config`).
        """
        self.params = params if params is not None else FractalTreeParameters()
        self.rng = rng
        self.segments: List[Segment] = []
        _LOGGER.debug(
            "FractalTree: canvas=%gx%g trunk=%g",
            self.params.canvas_width,
            self.params.canvas_height,
            self.params.trunk_length,
        )

    def _rng(self) -> Any:
        return self.rng if self.rng is not None else current_rng()

    def _init_root(self) -> Segment:
        """Build the trunk: bottom-center of the canvas, pointing straight up."""
        w = float(self.params.canvas_width)
        h = float(self.params.canvas_height)
        begin = np.array([w / 2.0, h], dtype=float)
        end = np.array([w / 2.0, h - self.params.trunk_length], dtype=float)
        return Segment(begin, end, depth=0)

    def _branch_generation(
        self,
        segments: List[Segment],
        angle: float,
        rng: Any,
    ) -> List[Segment]:
        """Expand every unfinished segment once and return the new children.

        Children are collected in a batch so that segments created in this
        round are not expanded again before the next one.
        """
        new_segments: List[Segment] = []
        for index, seg in enumerate(segments):
            if seg.finished:
                continue
            seg.finished = True
            new_segments.extend(
                seg.branch(
                    angle,
                    self.params.shrink_factor,
                    self.params.min_length,
                    index=index,
                    rng=rng,
                    spread=self.params.random_spread,
                )
            )
        return new_segments

    def grow_tree(
        self, depth: int, angle: float, randomize: bool = False
    ) -> List[Segment]:
        """Generate the tree.

        Args:
            depth: Number of expansion rounds; 0 yields just the trunk.
            angle: Branch rotation angle in radians.
            randomize: Add an independent random offset to every child angle.

        Returns:
            The full list of segments (trunk first, then each generation).

        Raises:
            ValueError: If `depth` is negative or `angle` is not finite.
        """
        if depth < 0:
            _LOGGER.error("grow_tree: negative depth %d", depth)
            raise ValueError(f"Tree depth must be non-negative; got {depth}")
        if not math.isfinite(angle):
            _LOGGER.error("grow_tree: non-finite angle %r", angle)
            raise ValueError(f"Branch angle must be finite; got {angle!r}")

        rng = self._rng() if randomize else None
        segments: List[Segment] = [self._init_root()]

        for gen in range(int(depth)):
            children = self._branch_generation(segments, float(angle), rng)
            _LOGGER.debug("Generation %d: %d new segments", gen, len(children))
            if not children:
                # Every tip is degenerate; further rounds would add nothing.
                break
            segments.extend(children)

        self.segments = segments
        _LOGGER.info(
            "Tree grown: depth=%d angle=%.4f randomize=%s segments=%d",
            depth,
            angle,
            randomize,
            len(segments),
        )
        return segments

    def jitter(self, scale: float = 1.0) -> None:
        """Move every end point by a uniform offset in [-scale, scale] per axis.

        Each segment's offset also moves the `begin` of its children, so
        connected segments stay connected. Drift accumulates across calls.
        """
        if not self.segments:
            return
        offsets = self._rng().uniform(-scale, scale, size=(len(self.segments), 2))
        for seg, off in zip(self.segments, offsets):
            seg.jitter(off)
            if seg.parent is not None:
                seg.begin += offsets[seg.parent]

    @property
    def points(self) -> NDArray[np.float64]:
        """Segment endpoints as an array of shape (n_segments, 2, 2)."""
        if not self.segments:
            return np.empty((0, 2, 2), dtype=float)
        return np.array([[s.begin, s.end] for s in self.segments], dtype=float)

    @property
    def depths(self) -> NDArray[np.int_]:
        """Depth of every segment, in sequence order."""
        return np.array([s.depth for s in self.segments], dtype=int)

    @property
    def connectivity(self) -> List[List[int]]:
        """Parent/child index pairs of the tree (root excluded)."""
        return [
            [s.parent, i] for i, s in enumerate(self.segments) if s.parent is not None
        ]


def generate(
    depth: int,
    angle: float,
    randomize: bool = False,
    *,
    params: Optional[FractalTreeParameters] = None,
    rng: Any = None,
) -> List[Segment]:
    """Generate a fractal tree and return its segments (module-level)."""
    return FractalTree(params, rng=rng).grow_tree(depth, angle, randomize)
