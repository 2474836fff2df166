"""
ascii-grid
==========
Convert raster images into character-density text art for the terminal,
plain-text files or rasterized PNG images.
"""

from ascii_grid.config import ConverterConfig
from ascii_grid.constants import (
    BandingPolicy,
    GlyphLevel,
    OutputMode,
    ResampleFilter,
    GLYPH_PALETTE,
)
from ascii_grid.converter import AsciiConverter, convert_file, image_to_grid
from ascii_grid.exceptions import AsciiGridError, InputError, InvariantError, OutputError
from ascii_grid.grid import Grid, assemble, assemble_array
from ascii_grid.quantize import band_edges, quantize
from ascii_grid.renderers import (
    ImageRenderer,
    TerminalRenderer,
    TextFileRenderer,
    output_path_for,
)
from ascii_grid.resize import Resizer, compute_target_size, resize

__version__ = "0.1.0"

__all__ = [
    # Main classes
    'AsciiConverter',
    'ConverterConfig',
    'Grid',

    # Enums
    'BandingPolicy',
    'GlyphLevel',
    'OutputMode',
    'ResampleFilter',
    'GLYPH_PALETTE',

    # Pipeline steps
    'quantize',
    'band_edges',
    'assemble',
    'assemble_array',
    'compute_target_size',
    'resize',
    'Resizer',

    # Renderers
    'TerminalRenderer',
    'TextFileRenderer',
    'ImageRenderer',
    'output_path_for',

    # Convenience functions
    'image_to_grid',
    'convert_file',

    # Errors
    'AsciiGridError',
    'InputError',
    'OutputError',
    'InvariantError',
]
