import os
import sys

# Terminal cells are roughly twice as tall as they are wide
CELL_ASPECT = 2.0


def get_terminal_size() -> tuple[int, int]:
    """Return (columns, rows) of the terminal, or (80, 24) if not a tty."""
    if not sys.stdout.isatty():
        return (80, 24)
    size = os.get_terminal_size()
    return (size.columns, size.lines)


def fit_resolution(
    image_size: tuple[int, int],
    columns: int,
    rows: int | None = None,
    cell_aspect: float = CELL_ASPECT,
) -> tuple[int, int]:
    """Largest (columns, rows) grid that keeps the image's aspect ratio.

    With ``rows`` left as None only the width constrains the result.
    Both components are at least 1.
    """
    image_w, image_h = image_size
    if image_w <= 0 or image_h <= 0:
        raise ValueError(f"Image has no pixels: {image_w}x{image_h}")
    if columns <= 0 or (rows is not None and rows <= 0):
        raise ValueError(f"Cannot fit an image into {columns}x{rows} cells")

    scale = columns / image_w
    if rows is not None:
        scale = min(scale, rows * cell_aspect / image_h)

    cols = max(1, min(columns, round(image_w * scale)))
    fitted_rows = max(1, round(image_h * scale / cell_aspect))
    if rows is not None:
        fitted_rows = min(rows, fitted_rows)
    return (cols, fitted_rows)
