import os
from pathlib import Path

import numpy as np
from PIL import Image

from asciiframe.charmaps import CHARS1, GlyphEncoder, Lookup
from asciiframe.pipeline import ImagePipeline
from asciiframe.terminal import fit_resolution

DEFAULT_COLUMNS = 80
RESET = "\033[0m"


def _format_colour(lines: list[str], colours: np.ndarray, prefix: str = "") -> list[str]:
    """Wrap each glyph in an ANSI truecolor foreground escape, leaving the prefix bare."""
    out = []
    for r, line in enumerate(lines):
        parts = [prefix]
        for c, char in enumerate(line[len(prefix) :]):
            red, green, blue = (int(v) for v in colours[r, c])
            parts.append(f"\033[38;2;{red};{green};{blue}m{char}")
        parts.append(RESET)
        out.append("".join(parts))
    return out


def _render(
    image: Image.Image,
    char_map: GlyphEncoder,
    width: int | None,
    height: int | None,
    colour: bool,
    new_lines: bool,
) -> str:
    if width is None or height is None:
        width, height = fit_resolution(image.size, DEFAULT_COLUMNS if width is None else width, height)

    if not colour:
        pipeline = ImagePipeline((width, height), char_map, new_lines=new_lines)
        return "".join(pipeline.render(image).lines)

    # Escapes go between glyphs, so render bare rows and add the breaks afterwards
    frame = ImagePipeline((width, height), char_map).render(image)
    lines = _format_colour(frame.lines, frame.colours, char_map.line_prefix())
    return (os.linesep if new_lines else "").join(lines)


def image_to_ascii(
    image: Image.Image | str | Path,
    char_map: GlyphEncoder | None = None,
    width: int | None = None,
    height: int | None = None,
    colour: bool = False,
    new_lines: bool = True,
) -> str:
    if char_map is None:
        char_map = Lookup(CHARS1)
    if isinstance(image, Image.Image):
        return _render(image, char_map, width, height, colour, new_lines)
    with Image.open(image) as opened:
        return _render(opened, char_map, width, height, colour, new_lines)
