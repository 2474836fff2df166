#!/usr/bin/env python3
"""
Image to ASCII Grid Converter - Grid Assembly
=============================================
Builds the read-only grid of glyph levels that every renderer consumes.
"""

from dataclasses import dataclass
from typing import Iterator, List, Tuple

import numpy as np
from PIL import Image

from ascii_grid.constants import BandingPolicy, GlyphLevel, GLYPH_PALETTE, LEVEL_COUNT
from ascii_grid.exceptions import InvariantError
from ascii_grid.quantize import level_table

_PALETTE_ARRAY = np.array(GLYPH_PALETTE)


@dataclass(frozen=True, eq=False)
class Grid:
    """Row-major grid of glyph level ordinals, shape (height, width)."""
    levels: np.ndarray

    def __post_init__(self):
        levels = np.array(self.levels, copy=True)
        if levels.ndim != 2:
            raise InvariantError(f"grid must be 2-D, got shape {levels.shape}")
        if not np.issubdtype(levels.dtype, np.integer):
            raise InvariantError(f"glyph levels must be integers, got {levels.dtype}")
        if levels.size and (int(levels.min()) < 0 or int(levels.max()) >= LEVEL_COUNT):
            raise InvariantError("grid contains an unknown glyph level")
        levels.setflags(write=False)
        object.__setattr__(self, 'levels', levels)

    @property
    def width(self) -> int:
        return self.levels.shape[1]

    @property
    def height(self) -> int:
        return self.levels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        """Grid (width, height), matching PIL's size order."""
        return self.width, self.height

    def __getitem__(self, index: Tuple[int, int]) -> GlyphLevel:
        row, col = index
        return GlyphLevel(int(self.levels[row, col]))

    def rows(self) -> Iterator[str]:
        """Yield each row as a string of glyph characters, top to bottom."""
        for row in self.levels:
            yield ''.join(_PALETTE_ARRAY[row])

    @property
    def lines(self) -> List[str]:
        return list(self.rows())

    @property
    def text(self) -> str:
        """Rows joined with newlines, no trailing newline."""
        return '\n'.join(self.rows())


def assemble(image: Image.Image,
             policy: BandingPolicy = BandingPolicy.UNIFORM) -> Grid:
    """
    Quantize every pixel of a resized luminance image into a Grid.

    Args:
        image: Grayscale ('L') image at final grid size
        policy: Banding policy

    Returns:
        Read-only Grid with the image's exact dimensions

    Raises:
        InvariantError: If the samples are not 8-bit luminance values
    """
    if image.mode != 'L':
        raise InvariantError(f"grid assembly expects 'L' samples, got mode {image.mode!r}")
    return assemble_array(np.asarray(image), policy)


def assemble_array(samples: np.ndarray,
                   policy: BandingPolicy = BandingPolicy.UNIFORM) -> Grid:
    """
    Quantize a (height, width) array of luminance samples into a Grid.

    Raises:
        InvariantError: If the array is not 2-D or holds values outside 0-255
    """
    samples = np.asarray(samples)
    if samples.ndim != 2:
        raise InvariantError(f"expected a 2-D sample array, got shape {samples.shape}")
    if samples.dtype != np.uint8:
        if not np.issubdtype(samples.dtype, np.integer):
            raise InvariantError(f"luminance samples must be integers, got {samples.dtype}")
        if samples.size and (samples.min() < 0 or samples.max() > 255):
            raise InvariantError("luminance sample outside 0-255")
        samples = samples.astype(np.uint8)

    levels = np.empty(samples.shape, dtype=np.uint8)
    np.take(level_table(policy), samples, out=levels)
    return Grid(levels)
