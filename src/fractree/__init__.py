"""The fractree package renders an interactive 2D fractal tree.

This package offers:
  - Breadth-first fractal tree generation from an angle and a depth.
  - Depth-based styling and line meshes for display.
  - An interactive pyvista window with sliders and toggle buttons.

Submodules:
  - segment: Segment, one straight branch of the tree.
  - fractal_tree: FractalTree generation.
  - fractal_tree_parameters: Parameter container for tree generation.
  - render: Depth styling and conversion to line meshes.
  - state: Application state and regeneration rules.
  - viewer: Interactive window.

Classes:
  Segment, FractalTree, FractalTreeParameters, AppState, FractalTreeViewer
"""

from .config import (
    config,
    configure,
    use,
    seed,
    rng,
    set_log_level,
)

from fractree.segment import Segment
from fractree.fractal_tree import FractalTree, generate
from fractree.fractal_tree_parameters import FractalTreeParameters
from fractree.render import BranchStyle, branch_style
from fractree.state import (
    AppState,
    clamp_angle,
    clamp_depth,
    initial_state,
    tick,
    toggle_jitter,
    toggle_randomize,
)
from fractree.viewer import FractalTreeViewer

__all__ = [
    # Core classes
    "Segment",
    "FractalTree",
    "FractalTreeParameters",
    "generate",
    # Rendering
    "BranchStyle",
    "branch_style",
    "FractalTreeViewer",
    # Controls
    "AppState",
    "clamp_angle",
    "clamp_depth",
    "initial_state",
    "tick",
    "toggle_jitter",
    "toggle_randomize",
    # Configuration
    "config",
    "configure",
    "use",
    "seed",
    "rng",
    "set_log_level",
]
