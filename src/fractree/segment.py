"""Module defining the Segment class, one straight branch of the fractal tree.

A Segment connects a `begin` point to an `end` point in canvas space and knows
how to derive its two children by rotating its own (shrunken) direction.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import numpy as np
from numpy.typing import ArrayLike, NDArray

_LOGGER = logging.getLogger(__name__)


def rotation_matrix(theta: float) -> NDArray[np.float64]:
    """Return the 2x2 matrix rotating a vector by `theta` radians."""
    c = float(np.cos(theta))
    s = float(np.sin(theta))
    return np.array([[c, -s], [s, c]], dtype=float)


class Segment:
    """Represents a single branch of the fractal tree.

    Attributes:
        begin (NDArray[np.float64]): Start point (x, y).
        end (NDArray[np.float64]): End point (x, y).
        depth (int): Number of expansions between the root and this segment.
        finished (bool): True once the segment has been expanded.
        parent (Optional[int]): Index of the parent segment in the tree, or
            None for the root.
    """

    def __init__(
        self,
        begin: ArrayLike,
        end: ArrayLike,
        depth: int = 0,
        parent: Optional[int] = None,
    ) -> None:
        """Initialize a Segment.

        Points are copied, so a segment never shares coordinates with another.

        Args:
            begin (ArrayLike): Start point (x, y).
            end (ArrayLike): End point (x, y).
            depth (int): Generation index; 0 for the root.
            parent (Optional[int]): Index of the parent segment, if any.
        """
        self.begin: NDArray[np.float64] = np.array(begin, dtype=float).reshape(2)
        self.end: NDArray[np.float64] = np.array(end, dtype=float).reshape(2)
        if depth < 0:
            raise ValueError(f"Segment depth must be non-negative; got {depth}")
        self.depth = int(depth)
        self.parent = parent
        self.finished = False

    @property
    def dir(self) -> NDArray[np.float64]:
        """Direction vector `end - begin` (not normalized)."""
        return self.end - self.begin

    @property
    def length(self) -> float:
        """Euclidean length of the segment."""
        return float(np.linalg.norm(self.dir))

    def branch(
        self,
        angle: float,
        shrink_factor: float,
        min_length: float = 1.0,
        *,
        index: Optional[int] = None,
        rng: Any = None,
        spread: float = 0.0,
    ) -> list[Segment]:
        """Derive the two children of this segment.

        The direction is scaled by `shrink_factor` and rotated by `+angle`
        (right child) and `-angle` (left child). When `rng` is given, each
        rotation also gets an independent uniform offset in [-spread, spread].

        Args:
            angle (float): Rotation angle in radians.
            shrink_factor (float): Scale applied to the direction vector.
            min_length (float): Threshold below which no children are made.
            index (Optional[int]): Index of this segment in its tree; stored as
                the children's `parent`.
            rng: Optional random generator with a `uniform(low, high)` method.
            spread (float): Half-width of the random angular offset.

        Returns:
            list[Segment]: `[left, right]`, or an empty list when the scaled
            direction is shorter than `min_length`.
        """
        scaled = self.dir * shrink_factor
        mag = float(np.linalg.norm(scaled))
        if mag < min_length:
            _LOGGER.debug(
                "Segment at depth %d is degenerate (|dir|=%.3g < %.3g); leaf.",
                self.depth,
                mag,
                min_length,
            )
            return []

        right_angle = angle
        left_angle = -angle
        if rng is not None:
            right_angle += float(rng.uniform(-spread, spread))
            left_angle += float(rng.uniform(-spread, spread))

        right = Segment(
            self.end,
            self.end + rotation_matrix(right_angle) @ scaled,
            self.depth + 1,
            parent=index,
        )
        left = Segment(
            self.end,
            self.end + rotation_matrix(left_angle) @ scaled,
            self.depth + 1,
            parent=index,
        )
        return [left, right]

    def jitter(self, offset: ArrayLike) -> None:
        """Move the end point by `offset` in place."""
        self.end += np.asarray(offset, dtype=float)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Segment):
            return NotImplemented
        return (
            self.depth == other.depth
            and self.parent == other.parent
            and self.finished == other.finished
            and np.array_equal(self.begin, other.begin)
            and np.array_equal(self.end, other.end)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        """Return a string representation of the segment."""
        return (
            f"Segment(begin={self.begin.tolist()}, end={self.end.tolist()}, "
            f"depth={self.depth}, finished={self.finished})"
        )
