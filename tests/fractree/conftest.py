from __future__ import annotations

from unittest.mock import Mock

import numpy as np
import pytest

from fractree.config import make_rng
from fractree.fractal_tree_parameters import FractalTreeParameters


@pytest.fixture()
def ft_seeded():
    import fractree as ft

    with ft.use(seed=0):
        yield ft


@pytest.fixture
def params() -> FractalTreeParameters:
    """The 800x600 canvas used throughout: trunk from (400, 600) to (400, 420)."""
    return FractalTreeParameters(canvas_width=800.0, canvas_height=600.0)


@pytest.fixture
def tiny_params() -> FractalTreeParameters:
    """A 10x10 canvas whose trunk (length 3) shrinks below 1 after two rounds."""
    return FractalTreeParameters(canvas_width=10.0, canvas_height=10.0)


@pytest.fixture
def seeded_rng() -> np.random.Generator:
    return make_rng(0)


@pytest.fixture
def mock_plotter() -> Mock:
    """A stand-in for pyvista.Plotter that never opens a window."""
    plotter = Mock()
    plotter.add_mesh.side_effect = lambda mesh, **kwargs: Mock(name=kwargs.get("name"))
    return plotter
