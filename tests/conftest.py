# tests/conftest.py
import numpy as np
import pytest

from nineblock.core.renderer import NineBlockRenderer


@pytest.fixture
def renderer():
    return NineBlockRenderer()


@pytest.fixture
def full_res(renderer):
    """Render at source resolution (3 * cell_size), so no resampling blurs pixels."""

    def _render(code, r=None):
        r = r or renderer
        return np.asarray(r.render(code, r.cell_size * 3), dtype=np.uint8)

    return _render