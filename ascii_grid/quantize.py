#!/usr/bin/env python3
"""
Image to ASCII Grid Converter - Quantizer
=========================================
Maps one luminance byte to one glyph level.

Two banding policies are supported. Both are total over 0-255, the bands
never overlap, and a brighter sample never maps to a sparser level.

UNIFORM splits 0-255 into LEVEL_COUNT bands of width 256 // LEVEL_COUNT;
the last band absorbs the remainder::

    0-27 ' '   28-55 '.'   56-83 ':'   84-111 '-'   112-139 '='
    140-167 '*'   168-195 '#'   196-223 '%'   224-255 '@'

BLANK_ON_BLACK reserves the blank glyph for true black (0) and splits
1-255 over the remaining levels in bands of width 255 // (LEVEL_COUNT - 1)::

    0 ' '   1-31 '.'   32-62 ':'   63-93 '-'   94-124 '='
    125-155 '*'   156-186 '#'   187-217 '%'   218-255 '@'
"""

import numbers
from functools import lru_cache

import numpy as np

from ascii_grid.constants import BandingPolicy, GlyphLevel, LEVEL_COUNT, MAX_SAMPLE
from ascii_grid.exceptions import InvariantError


def band_edges(policy: BandingPolicy = BandingPolicy.UNIFORM) -> tuple:
    """
    Return the inclusive lower bound of every band, lowest level first.

    Args:
        policy: Banding policy

    Returns:
        Tuple of LEVEL_COUNT increasing sample values starting at 0
    """
    if policy == BandingPolicy.UNIFORM:
        width = (MAX_SAMPLE + 1) // LEVEL_COUNT
        return tuple(level * width for level in range(LEVEL_COUNT))
    elif policy == BandingPolicy.BLANK_ON_BLACK:
        width = MAX_SAMPLE // (LEVEL_COUNT - 1)
        return (0,) + tuple(1 + level * width for level in range(LEVEL_COUNT - 1))
    else:
        raise ValueError(f"Unknown banding policy: {policy}")


def _check_sample(sample) -> int:
    if isinstance(sample, (bool, np.bool_)) or not isinstance(sample, numbers.Integral):
        raise InvariantError(f"luminance sample must be an integer, got {sample!r}")
    if not 0 <= sample <= MAX_SAMPLE:
        raise InvariantError(f"luminance sample {sample} outside 0-{MAX_SAMPLE}")
    return int(sample)


def quantize(sample: int, policy: BandingPolicy = BandingPolicy.UNIFORM) -> GlyphLevel:
    """
    Map a luminance sample to its glyph level.

    Args:
        sample: Luminance in 0-255
        policy: Banding policy

    Returns:
        GlyphLevel of the band containing the sample

    Raises:
        InvariantError: If the sample is not an integer in 0-255
    """
    value = _check_sample(sample)
    level = 0
    for index, lower in enumerate(band_edges(policy)):
        if value >= lower:
            level = index
        else:
            break
    return GlyphLevel(level)


@lru_cache(maxsize=None)
def level_table(policy: BandingPolicy = BandingPolicy.UNIFORM) -> np.ndarray:
    """
    Lookup table of glyph ordinals for every sample value.

    Built by calling quantize() on each of the 256 values, so table lookups
    and scalar calls always agree.
    """
    table = np.array([quantize(value, policy) for value in range(MAX_SAMPLE + 1)],
                     dtype=np.uint8)
    table.setflags(write=False)
    return table
