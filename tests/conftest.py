import numpy as np
import pytest
from PIL import Image

from src.services.bitplane_lsb.core.pixel_grid import PixelGrid


def random_pixels(width: int, height: int, seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)


@pytest.fixture
def make_grid():
    def _make(width: int, height: int, seed: int = 0) -> PixelGrid:
        return PixelGrid(random_pixels(width, height, seed))
    return _make


@pytest.fixture
def cover_image():
    return Image.fromarray(random_pixels(16, 12, seed=7))


@pytest.fixture
def cover_path(tmp_path, cover_image):
    path = tmp_path / "cover.bmp"
    cover_image.save(path, format="BMP")
    return path
