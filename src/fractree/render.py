"""Styling and mesh conversion for drawing a fractal tree.

Depth drives every visual attribute: shallow segments are thick and warm,
deep segments thin. Segments of equal depth share a style, so they are batched
into one line mesh per depth.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import DefaultDict, Dict, List, Sequence, Tuple

import numpy as np
import pyvista as pv
from matplotlib.colors import hsv_to_rgb

from .segment import Segment

_LOGGER = logging.getLogger(__name__)

HUE_RANGE = (0.0, 360.0)
SATURATION_RANGE = (100.0, 255.0)
BRIGHTNESS_RANGE = (50.0, 200.0)
WIDTH_RANGE = (10.0, 1.0)


def map_range(
    value: float, start: float, stop: float, target_start: float, target_stop: float
) -> float:
    """Linearly re-map `value` from [start, stop] onto [target_start, target_stop].

    Values outside the source range extrapolate. A zero-width source range maps
    everything to `target_start`.
    """
    if stop == start:
        return float(target_start)
    t = (value - start) / (stop - start)
    return float(target_start + t * (target_stop - target_start))


@dataclass(frozen=True)
class BranchStyle:
    """Color and stroke of one depth level.

    Attributes:
        hue (float): Hue in degrees [0, 360].
        saturation (float): Saturation on a 0-255 scale.
        brightness (float): Brightness on a 0-255 scale.
        width (float): Line width in pixels.
    """

    hue: float
    saturation: float
    brightness: float
    width: float

    @property
    def rgb(self) -> Tuple[float, float, float]:
        """The color as an RGB triple in [0, 1]."""
        hsv = np.clip(
            [self.hue / 360.0, self.saturation / 255.0, self.brightness / 255.0],
            0.0,
            1.0,
        )
        r, g, b = hsv_to_rgb(hsv)
        return float(r), float(g), float(b)


def branch_style(depth: int, max_depth: int) -> BranchStyle:
    """Map a segment depth onto its display style."""
    return BranchStyle(
        hue=map_range(depth, 0, max_depth, *HUE_RANGE),
        saturation=map_range(depth, 0, max_depth, *SATURATION_RANGE),
        brightness=map_range(depth, 0, max_depth, *BRIGHTNESS_RANGE),
        width=map_range(depth, 0, max_depth, *WIDTH_RANGE),
    )


def group_by_depth(segments: Sequence[Segment]) -> Dict[int, List[int]]:
    """Return segment indices keyed by depth, preserving sequence order."""
    groups: DefaultDict[int, List[int]] = defaultdict(list)
    for i, seg in enumerate(segments):
        groups[seg.depth].append(i)
    return dict(groups)


def segment_points(
    segments: Sequence[Segment], indices: Sequence[int], canvas_height: float
) -> np.ndarray:
    """Return the 3D points of the selected segments for display.

    Canvas y grows downward while the view's y grows upward, so y is flipped
    against `canvas_height`. Points are laid out as begin/end pairs.
    """
    pts = np.zeros((2 * len(indices), 3), dtype=float)
    for k, i in enumerate(indices):
        seg = segments[i]
        pts[2 * k, :2] = seg.begin
        pts[2 * k + 1, :2] = seg.end
    pts[:, 1] = canvas_height - pts[:, 1]
    return pts


def segments_to_polydata(
    segments: Sequence[Segment], indices: Sequence[int], canvas_height: float
) -> pv.PolyData:
    """Build a line mesh with one two-point line cell per selected segment."""
    pts = segment_points(segments, indices, canvas_height)
    n = len(indices)
    lines = np.empty((n, 3), dtype=np.int64)
    lines[:, 0] = 2
    lines[:, 1] = np.arange(0, 2 * n, 2)
    lines[:, 2] = np.arange(1, 2 * n, 2)
    poly = pv.PolyData(pts, lines=lines.ravel())
    _LOGGER.debug("Built line mesh: %d segments", n)
    return poly
