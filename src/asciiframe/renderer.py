import os

import numpy as np

from asciiframe.charmaps import GlyphEncoder


def render(
    luminance: np.ndarray,
    target_resolution: tuple[int, int],
    char_map: GlyphEncoder,
    new_lines: bool = False,
    line_break: str = os.linesep,
) -> list[str]:
    """Encode a luminance buffer one cell at a time, returning one string per row.

    Rows start with the char map's line prefix. When ``new_lines`` is set every
    row except the last ends with ``line_break``.
    """
    width, height = target_resolution
    sub_w, sub_h = char_map.subpixel_dimensions()
    assert luminance.shape[:2] == (height * sub_h, width * sub_w), (
        f"luminance buffer {luminance.shape[1]}x{luminance.shape[0]} does not match "
        f"{width}x{height} cells of {sub_w}x{sub_h}"
    )

    prefix = char_map.line_prefix()
    lines = []
    for y in range(height):
        top = y * sub_h
        glyphs = [
            char_map.encode(luminance[top : top + sub_h, x * sub_w : (x + 1) * sub_w]) for x in range(width)
        ]
        line = prefix + "".join(glyphs)
        if new_lines and y < height - 1:
            line += line_break
        lines.append(line)
    return lines
