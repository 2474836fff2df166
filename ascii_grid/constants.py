#!/usr/bin/env python3
"""
Image to ASCII Grid Converter - Constants
=========================================
Glyph palette, enumerations and default values shared by the pipeline.
"""

from enum import Enum, IntEnum, auto
from typing import Tuple

from PIL import Image


# =============================================================================
# GLYPH PALETTE
# =============================================================================

class GlyphLevel(IntEnum):
    """Ordered glyph density levels, lowest density first."""
    EMPTY = 0
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8

    @property
    def char(self) -> str:
        """Display character for this level."""
        return GLYPH_PALETTE[self]


# Indexed by GlyphLevel ordinal
GLYPH_PALETTE: Tuple[str, ...] = (' ', '.', ':', '-', '=', '*', '#', '%', '@')

LEVEL_COUNT = len(GLYPH_PALETTE)
MAX_SAMPLE = 255


# =============================================================================
# ENUMS
# =============================================================================

class BandingPolicy(Enum):
    """How the 0-255 luminance range is split into glyph bands."""
    UNIFORM = auto()          # Equal-width bands, last band takes the remainder
    BLANK_ON_BLACK = auto()   # 0 alone is blank, 1-255 split over the rest


class OutputMode(Enum):
    """Where the rendered grid goes."""
    TERMINAL = 'terminal'
    TEXT = 'text'
    IMAGE = 'image'

    @classmethod
    def parse(cls, name: str) -> 'OutputMode':
        """Parse a mode name or one of its short aliases."""
        key = name.strip().lower()
        if key in OUTPUT_MODE_ALIASES:
            return OUTPUT_MODE_ALIASES[key]
        raise ValueError(f"Unknown output mode: {name!r}")


OUTPUT_MODE_ALIASES = {
    'terminal': OutputMode.TERMINAL,
    'ter': OutputMode.TERMINAL,
    'text': OutputMode.TEXT,
    'txt': OutputMode.TEXT,
    'image': OutputMode.IMAGE,
    'img': OutputMode.IMAGE,
}


class ResampleFilter(Enum):
    """Downsampling filters offered by the resizer."""
    BOX = Image.Resampling.BOX
    LANCZOS = Image.Resampling.LANCZOS
    BICUBIC = Image.Resampling.BICUBIC
    HAMMING = Image.Resampling.HAMMING


# =============================================================================
# DEFAULTS
# =============================================================================

# Columns are reduced by this divisor; height follows from the aspect ratio
DEFAULT_COLUMN_DIVISOR = 7
DEFAULT_FALLBACK_SIZE: Tuple[int, int] = (300, 320)
DEFAULT_CHAR_ASPECT_RATIO = 1.0

DEFAULT_FONT_SIZE = 10
DEFAULT_GLYPH_COLOR: Tuple[int, int, int] = (0, 0, 0)

DEFAULT_TEXT_NAME = 'ascii.txt'
DEFAULT_IMAGE_NAME = 'ascii.png'
COLLISION_SUFFIX = '-ascii'

OUTPUT_EXTENSIONS = {
    OutputMode.TEXT: '.txt',
    OutputMode.IMAGE: '.png',
}
