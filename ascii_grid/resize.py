#!/usr/bin/env python3
"""
Image to ASCII Grid Converter - Resizer
=======================================
Chooses the character grid size for an image and downsamples the
luminance image to it. Every output pixel becomes one character.
"""

import math
from typing import Optional, Tuple

from PIL import Image

from ascii_grid.config import ConverterConfig
from ascii_grid.constants import (
    ResampleFilter,
    DEFAULT_CHAR_ASPECT_RATIO,
    DEFAULT_COLUMN_DIVISOR,
    DEFAULT_FALLBACK_SIZE,
)
from ascii_grid.logger import get_logger

logger = get_logger(__name__)


def compute_target_size(source_size: Tuple[int, int],
                        column_divisor: float = DEFAULT_COLUMN_DIVISOR,
                        width: Optional[int] = None,
                        height: Optional[int] = None,
                        char_aspect_ratio: float = DEFAULT_CHAR_ASPECT_RATIO,
                        fallback_size: Tuple[int, int] = DEFAULT_FALLBACK_SIZE) -> Tuple[int, int]:
    """
    Calculate grid dimensions for a source image.

    The column count is the source width divided by ``column_divisor``
    (or ``width`` when given). Rows follow from the source aspect ratio,
    scaled by ``char_aspect_ratio``. When both ``width`` and ``height``
    are given they are used as-is.

    Args:
        source_size: Source (width, height) in pixels
        column_divisor: Source pixels per output column
        width: Explicit column count
        height: Explicit row count
        char_aspect_ratio: Character cell width/height compensation
        fallback_size: Size used when the source aspect ratio is degenerate

    Returns:
        Target (width, height), both at least 1
    """
    src_width, src_height = source_size

    if src_width <= 0 or src_height <= 0:
        logger.debug("Degenerate source size %s, using fallback %s", source_size, fallback_size)
        return fallback_size

    aspect_ratio = src_width / src_height
    if not math.isfinite(aspect_ratio) or aspect_ratio <= 0:
        logger.debug("Degenerate aspect ratio %r, using fallback %s", aspect_ratio, fallback_size)
        return fallback_size

    if width is not None and height is not None:
        return width, height

    if height is not None:
        target_height = height
        target_width = max(1, round(target_height * aspect_ratio / char_aspect_ratio))
        return target_width, target_height

    if width is not None:
        target_width = width
    else:
        target_width = max(1, round(src_width / column_divisor))

    target_height = max(1, round(target_width / aspect_ratio * char_aspect_ratio))
    return target_width, target_height


def resize(image: Image.Image,
           target_size: Tuple[int, int],
           resample_filter: ResampleFilter = ResampleFilter.BOX) -> Image.Image:
    """
    Resize a luminance image to exactly ``target_size``.

    Args:
        image: Grayscale ('L') image
        target_size: Target (width, height)
        resample_filter: Downsampling filter

    Returns:
        Resized 'L' image
    """
    if image.mode != 'L':
        raise ValueError(f"resize expects a grayscale 'L' image, got mode {image.mode!r}")

    if image.size == tuple(target_size):
        return image.copy()

    if image.width == 0 or image.height == 0:
        # Nothing to sample from
        return Image.new('L', tuple(target_size), 0)

    return image.resize(tuple(target_size), resample_filter.value)


class Resizer:
    """Applies the configured resize policy to luminance images."""

    def __init__(self, config: Optional[ConverterConfig] = None):
        """Initialize with optional configuration."""
        self.config = config or ConverterConfig()

    def target_size(self, source_size: Tuple[int, int]) -> Tuple[int, int]:
        """Calculate the grid size for a source of ``source_size``."""
        return compute_target_size(
            source_size,
            column_divisor=self.config.column_divisor,
            width=self.config.width,
            height=self.config.height,
            char_aspect_ratio=self.config.char_aspect_ratio,
            fallback_size=self.config.fallback_size,
        )

    def resize(self, image: Image.Image) -> Image.Image:
        """Resize a luminance image under the configured policy."""
        target = self.target_size(image.size)
        logger.debug("Resizing %s -> %s with %s", image.size, target,
                     self.config.resample_filter.name)
        return resize(image, target, self.config.resample_filter)
