"""Glyph encoders: map a block of luminance samples to a single character.

Each char map declares the subpixel block it samples (``subpixel_dimensions``),
encodes one block into one character (``encode``) and may require a prefix
at the start of every output line (``line_prefix``).
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Protocol

import numpy as np

# ASCII-127 ramps, sparse to dense
CHARS1 = " .:-=+*#%@"
CHARS2 = " .'`^\",:;Il!i~+_-?][}{1)(|/tfjrxnuvczXYUJCLQ0OZmwqpdbkhao*#MW&8%B@$"
CHARS3 = " `.-':_,^=;><+!rc*/z?sLTv)J7(|Fi{C}fI31tlu[neoZ5Yxjya]2ESwqkP6h9d4VpOGbUAKXHm8RD#$Bg0MNWQ%&@"

# Block presets
SOLID = "█"
DOTTED = "⣿"
GRADIENT = " ░▒▓█"
BLACKWHITE = " █"
BW_DOTTED = " ⣿"

THRESHOLD = 127

BRAILLE_BLANK = 0x2800
# ((x, y), bit): dots 1-3 and 7 in the left column, 4-6 and 8 in the right
BRAILLE_DOTS = (
    ((0, 0), 0x01),
    ((1, 0), 0x08),
    ((0, 1), 0x02),
    ((1, 1), 0x10),
    ((0, 2), 0x04),
    ((1, 2), 0x20),
    ((0, 3), 0x40),
    ((1, 3), 0x80),
)

MOSAIC_BLOCKS = (
    ((0, 0), 0x01),
    ((1, 0), 0x02),
    ((0, 1), 0x04),
    ((1, 1), 0x08),
    ((0, 2), 0x10),
    ((1, 2), 0x20),
)

# Symbols for Legacy Computing, U+1FB00-U+1FB3B
SEXTANT_BASE = 0x1FB00
LEFT_HALF = "▌"
RIGHT_HALF = "▐"
FULL_BLOCK = "█"

TELETEXT_BASE = 0xE020
TELETEXT_RANGE = range(0xE000, 0xE100)
# Teletext mosaic white (0x17), selects contiguous graphics for the rest of the line
TELETEXT_PREFIX = "\ue017"


class GlyphEncoder(Protocol):
    def subpixel_dimensions(self) -> tuple[int, int]:
        """Return the (width, height) of the block this encoder samples."""
        ...

    def encode(self, block: np.ndarray) -> str:
        """Return the character for a (height, width) block of luminance samples."""
        ...

    def line_prefix(self) -> str:
        ...


def _check_block(block: np.ndarray, width: int, height: int) -> None:
    assert block.shape[0] >= height and block.shape[1] >= width, (
        f"block of shape {block.shape} is smaller than {width}x{height}"
    )


def _bitmask(block: np.ndarray, bits) -> int:
    mask = 0
    for (x, y), bit in bits:
        if block[y, x] > THRESHOLD:
            mask |= bit
    return mask


def _sextant_char(bitmask: int) -> str:
    # The Unicode block skips the patterns that already exist as half and full blocks
    if bitmask == 0:
        return " "
    if 0x01 <= bitmask <= 0x14:
        return chr(SEXTANT_BASE + bitmask - 0x01)
    if bitmask == 0x15:
        return LEFT_HALF
    if 0x16 <= bitmask <= 0x29:
        return chr(SEXTANT_BASE + bitmask - 0x02)
    if bitmask == 0x2A:
        return RIGHT_HALF
    if 0x2B <= bitmask <= 0x3E:
        return chr(SEXTANT_BASE + bitmask - 0x03)
    if bitmask == 0x3F:
        return FULL_BLOCK
    raise AssertionError(f"Mosaic bitmask out of bounds: {bitmask:#x} > 0x3f")


SEXTANTS = tuple(_sextant_char(mask) for mask in range(0x40))


def mosaic_char(bitmask: int) -> str:
    assert 0 <= bitmask < len(SEXTANTS), f"Mosaic bitmask out of bounds: {bitmask:#x} > 0x3f"
    return SEXTANTS[bitmask]


def teletext_mosaic_char(bitmask: int) -> str:
    """Map a 6-bit sextant mask onto the legacy teletext private-use range.

    Teletext G1 mosaics leave a gap of 0x20 code points between the patterns
    with and without the bottom-right cell, so bit 5 is shifted up by one.
    """
    assert 0 <= bitmask < 0x40, f"Mosaic bitmask out of bounds: {bitmask:#x} > 0x3f"
    codepoint = TELETEXT_BASE + (bitmask & 0x1F) + ((bitmask & 0x20) << 1)
    assert codepoint in TELETEXT_RANGE, f"Teletext code point out of range: {codepoint:#x}"
    return chr(codepoint)


@dataclass(frozen=True)
class Lookup:
    """Pick a character from a ramp ordered from sparse to dense by luminance."""

    chars: str

    def __post_init__(self):
        if not self.chars:
            raise ValueError("Character ramp must not be empty")

    def subpixel_dimensions(self) -> tuple[int, int]:
        return (1, 1)

    def encode(self, block: np.ndarray) -> str:
        _check_block(block, 1, 1)
        lum = int(block[0, 0])
        return self.chars[len(self.chars) * lum // 256]

    def line_prefix(self) -> str:
        return ""


@dataclass(frozen=True)
class Braille:
    """Eight dots per cell, lit where the sample is bright."""

    def subpixel_dimensions(self) -> tuple[int, int]:
        return (2, 4)

    def encode(self, block: np.ndarray) -> str:
        _check_block(block, 2, 4)
        return chr(BRAILLE_BLANK | _bitmask(block, BRAILLE_DOTS))

    def line_prefix(self) -> str:
        return ""


@dataclass(frozen=True)
class Mosaic:
    """2x3 sextant block characters."""

    def subpixel_dimensions(self) -> tuple[int, int]:
        return (2, 3)

    def encode(self, block: np.ndarray) -> str:
        _check_block(block, 2, 3)
        return mosaic_char(_bitmask(block, MOSAIC_BLOCKS))

    def line_prefix(self) -> str:
        return ""


@dataclass(frozen=True)
class TeletextMosaic:
    """2x3 mosaics from the legacy teletext character set.

    Every line has to start with ``TELETEXT_PREFIX`` for the glyphs to show
    up as graphics rather than text.
    """

    def subpixel_dimensions(self) -> tuple[int, int]:
        return (2, 3)

    def encode(self, block: np.ndarray) -> str:
        _check_block(block, 2, 3)
        return teletext_mosaic_char(_bitmask(block, MOSAIC_BLOCKS))

    def line_prefix(self) -> str:
        return TELETEXT_PREFIX


CharMap = Lookup | Braille | Mosaic | TeletextMosaic

PRESETS: Mapping[str, CharMap] = MappingProxyType(
    {
        "chars1": Lookup(CHARS1),
        "chars2": Lookup(CHARS2),
        "chars3": Lookup(CHARS3),
        "solid": Lookup(SOLID),
        "dotted": Lookup(DOTTED),
        "gradient": Lookup(GRADIENT),
        "blackwhite": Lookup(BLACKWHITE),
        "bw_dotted": Lookup(BW_DOTTED),
        "braille": Braille(),
        "mosaic": Mosaic(),
        "teletext": TeletextMosaic(),
    }
)


def char_map_from_name(name: str) -> CharMap:
    try:
        return PRESETS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown character map: {name!r} (expected one of {', '.join(PRESETS)})") from None
