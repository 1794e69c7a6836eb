import math
from dataclasses import dataclass

from fractree.fractal_tree_parameters import FractalTreeParameters as BaseParameters
from fractree.viewer import FractalTreeViewer


@dataclass
class Parameters(BaseParameters):
    """Class to specify the parameters of the fractal tree.

    Attributes:
        canvas_width (float): width of the window in pixels.
        canvas_height (float): height of the window in pixels.
        trunk_fraction (float): length of the trunk relative to the canvas height.
        shrink_factor (float): how much shorter each generation is than its parent.
        min_length (float): branches shorter than this stop growing.
        random_spread (float): maximum random deviation (rad) of each branch when randomness is on.
        max_depth (int): largest value of the depth slider.
    """

    canvas_width: float = 1000.0
    canvas_height: float = 800.0
    trunk_fraction: float = 0.25
    shrink_factor: float = 0.72
    random_spread: float = math.pi / 6
    max_depth: int = 10


if __name__ == "__main__":
    FractalTreeViewer(Parameters()).show()
