#!/usr/bin/env python3
"""
Image to ASCII Grid Converter - Configuration
=============================================
Every tunable of the pipeline lives on one dataclass.
"""

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from ascii_grid.constants import (
    BandingPolicy,
    OutputMode,
    ResampleFilter,
    DEFAULT_CHAR_ASPECT_RATIO,
    DEFAULT_COLUMN_DIVISOR,
    DEFAULT_FALLBACK_SIZE,
    DEFAULT_FONT_SIZE,
    DEFAULT_GLYPH_COLOR,
)


@dataclass
class ConverterConfig:
    """Configuration for grid conversion and rendering."""

    # Size parameters
    column_divisor: float = DEFAULT_COLUMN_DIVISOR        # Source width / divisor = columns
    width: Optional[int] = None                           # Explicit columns (derived if None)
    height: Optional[int] = None                          # Explicit rows (derived if None)
    char_aspect_ratio: float = DEFAULT_CHAR_ASPECT_RATIO  # 0.5 compensates tall terminal cells
    fallback_size: Tuple[int, int] = DEFAULT_FALLBACK_SIZE
    resample_filter: ResampleFilter = ResampleFilter.BOX

    # Quantization
    banding: BandingPolicy = BandingPolicy.UNIFORM

    # Output selection
    mode: OutputMode = OutputMode.TERMINAL
    output_path: Optional[Path] = None                    # Overrides the derived name
    output_dir: Optional[Path] = None                     # Directory for derived names

    # Terminal output
    line_spacing: int = 1                                 # Line terminators after each row

    # Image output
    font_path: Optional[str] = None                       # TrueType font (bundled default if None)
    font_size: int = DEFAULT_FONT_SIZE
    cell_size: Optional[Tuple[int, int]] = None           # (w, h) per glyph, measured if None
    glyph_color: Tuple[int, int, int] = DEFAULT_GLYPH_COLOR

    def __post_init__(self):
        if not math.isfinite(self.column_divisor) or self.column_divisor <= 0:
            raise ValueError(f"column_divisor must be a positive finite number, got {self.column_divisor}")
        if self.width is not None and self.width < 1:
            raise ValueError(f"width must be at least 1, got {self.width}")
        if self.height is not None and self.height < 1:
            raise ValueError(f"height must be at least 1, got {self.height}")
        if not math.isfinite(self.char_aspect_ratio) or self.char_aspect_ratio <= 0:
            raise ValueError(f"char_aspect_ratio must be a positive finite number, got {self.char_aspect_ratio}")
        if self.line_spacing < 1:
            raise ValueError(f"line_spacing must be at least 1, got {self.line_spacing}")
        if self.font_size < 1:
            raise ValueError(f"font_size must be at least 1, got {self.font_size}")
        if self.output_path is not None:
            self.output_path = Path(self.output_path)
        if self.output_dir is not None:
            self.output_dir = Path(self.output_dir)
