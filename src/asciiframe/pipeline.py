from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from PIL import Image

from asciiframe.charmaps import GlyphEncoder
from asciiframe.renderer import render
from asciiframe.resize import resize

logger = logging.getLogger(__name__)


@dataclass
class Frame:
    lines: list[str]  # one string per row
    colours: np.ndarray  # (rows, cols, 3) uint8


@dataclass
class ImagePipeline:
    """Resize images and encode them as text for a fixed cell grid."""

    target_resolution: tuple[int, int]
    char_map: GlyphEncoder
    new_lines: bool = False

    @property
    def subpixels(self) -> tuple[int, int]:
        return self.char_map.subpixel_dimensions()

    def set_target_resolution(self, width: int, height: int) -> ImagePipeline:
        self.target_resolution = (width, height)
        return self

    def resize(self, image: Image.Image) -> tuple[np.ndarray, np.ndarray]:
        return resize(image, self.target_resolution, self.subpixels)

    def to_ascii(self, luminance: np.ndarray) -> list[str]:
        return render(luminance, self.target_resolution, self.char_map, new_lines=self.new_lines)

    def render(self, image: Image.Image) -> Frame:
        luminance, colours = self.resize(image)
        lines = self.to_ascii(luminance)
        logger.debug("Rendered %dx%d cells with %s", *self.target_resolution, type(self.char_map).__name__)
        return Frame(lines=lines, colours=colours)
