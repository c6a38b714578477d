import numpy as np
import pytest
from PIL import Image

from asciiframe.charmaps import CHARS1, Braille, Lookup, Mosaic, TeletextMosaic

ALL_CHAR_MAPS = [Lookup(CHARS1), Braille(), Mosaic(), TeletextMosaic()]


def block_from_mask(bits, width: int, height: int) -> np.ndarray:
    """Build a (height, width) luminance block, 255 where (x, y) is in bits."""
    block = np.zeros((height, width), dtype=np.uint8)
    for x, y in bits:
        block[y, x] = 255
    return block


@pytest.fixture(params=ALL_CHAR_MAPS, ids=lambda m: type(m).__name__)
def char_map(request):
    return request.param


@pytest.fixture
def gradient_image():
    """Horizontal black-to-white gradient, 64x32 RGB."""
    row = np.linspace(0, 255, 64).astype(np.uint8)
    arr = np.repeat(np.tile(row, (32, 1))[:, :, None], 3, axis=2)
    return Image.fromarray(arr)
