import logging

import numpy as np
from PIL import Image

from asciiframe.errors import ERROR_DATA, ERROR_RESIZE, PipelineError

logger = logging.getLogger(__name__)


def _check_size(width: int, height: int, what: str) -> None:
    if width <= 0 or height <= 0:
        raise PipelineError(f"{ERROR_DATA}: {what} is {width}x{height}")


def _resize_single(image: Image.Image, width: int, height: int, resample: int) -> Image.Image:
    _check_size(image.width, image.height, "source")
    _check_size(width, height, "target")
    try:
        return image.resize((width, height), resample)
    except (ValueError, OSError, MemoryError) as err:
        raise PipelineError(f"{ERROR_RESIZE}: {err}") from err


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


def resize(
    image: Image.Image,
    target_resolution: tuple[int, int],
    subpixels: tuple[int, int],
) -> tuple[np.ndarray, np.ndarray]:
    """Resize an image into the two buffers a render pass needs.

    The luminance buffer is sampled with nearest neighbour at
    ``target_resolution * subpixels`` so every sample is a real pixel value
    the char map can threshold. The colour buffer is box filtered from that
    intermediate down to ``target_resolution`` so each cell gets its average
    colour.

    Returns:
        luminance: uint8 array of shape (height * sub_h, width * sub_w)
        colours: uint8 array of shape (height, width, 3)
    """
    width, height = target_resolution
    sub_w, sub_h = subpixels
    _check_size(image.width, image.height, "source")
    _check_size(width, height, "target")

    try:
        rgb = image.convert("RGB")
    except (ValueError, OSError) as err:
        raise PipelineError(f"{ERROR_RESIZE}: {err}") from err

    logger.debug("Resizing %dx%d image to %dx%d subpixels", rgb.width, rgb.height, width * sub_w, height * sub_h)
    subpixel_img = _resize_single(rgb, width * sub_w, height * sub_h, Image.NEAREST)
    colour_img = _resize_single(subpixel_img, width, height, Image.BOX)

    luminance = _readonly(np.array(subpixel_img.convert("L"), dtype=np.uint8))
    colours = _readonly(np.array(colour_img, dtype=np.uint8))

    assert luminance.shape == (height * sub_h, width * sub_w), f"luminance buffer is {luminance.shape}"
    assert colours.shape == (height, width, 3), f"colour buffer is {colours.shape}"
    return luminance, colours
