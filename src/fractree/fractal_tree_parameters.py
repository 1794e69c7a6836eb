"""Module defining the parameters used to generate a fractal tree.

This module provides FractalTreeParameters, which holds the fixed geometry
of the tree (canvas size, trunk length, shrink factor) and the bounds of the
user controls.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

_LOGGER = logging.getLogger(__name__)


@dataclass
class FractalTreeParameters:
    """Holds settings for generating a fractal tree.

    Attributes:
        canvas_width (float): Width of the drawing canvas.
        canvas_height (float): Height of the drawing canvas. The trunk starts
            at the bottom edge, centered horizontally.
        trunk_fraction (float): Trunk length as a fraction of the canvas height.
        shrink_factor (float): Multiplier applied to a branch's direction vector
            when deriving its children.
        min_length (float): Children whose scaled direction is shorter than this
            are not created; the parent becomes a leaf.
        random_spread (float): Half-width (radians) of the uniform angular
            offset added to each child when randomization is on.
        max_depth (int): Upper bound of the depth control.
        max_angle (float): Upper bound of the rotation-angle control (radians).

    Notes:
        - Coordinates follow canvas conventions: origin at the top-left corner,
          y growing downward.
    """

    canvas_width: float = 800.0
    canvas_height: float = 600.0
    trunk_fraction: float = 0.3
    shrink_factor: float = 0.67
    min_length: float = 1.0
    random_spread: float = math.pi / 8
    max_depth: int = 12
    max_angle: float = math.pi

    def __post_init__(self) -> None:
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            _LOGGER.error(
                "Invalid canvas size %sx%s", self.canvas_width, self.canvas_height
            )
            raise ValueError(
                f"Canvas size must be positive; got "
                f"{self.canvas_width}x{self.canvas_height}"
            )
        if not 0.0 < self.shrink_factor < 1.0:
            _LOGGER.error("Invalid shrink factor %s", self.shrink_factor)
            raise ValueError(
                f"shrink_factor must lie in (0, 1); got {self.shrink_factor}"
            )
        if self.trunk_fraction <= 0:
            raise ValueError(
                f"trunk_fraction must be positive; got {self.trunk_fraction}"
            )
        if self.min_length < 0 or self.random_spread < 0:
            raise ValueError("min_length and random_spread must be non-negative")
        if int(self.max_depth) < 1:
            raise ValueError(f"max_depth must be at least 1; got {self.max_depth}")
        self.max_depth = int(self.max_depth)

    @property
    def trunk_length(self) -> float:
        """Length of the root segment."""
        return self.canvas_height * self.trunk_fraction
