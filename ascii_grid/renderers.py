#!/usr/bin/env python3
"""
Image to ASCII Grid Converter - Renderers
=========================================
Terminal, text-file and rasterized-image output for an assembled Grid.

Renderers only read the grid. Output file names are decided by
``output_path_for`` and handed to the renderer, never hard-coded in it.
"""

import math
import sys
from pathlib import Path
from typing import Optional, TextIO, Tuple, Union

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from ascii_grid.config import ConverterConfig
from ascii_grid.constants import (
    OutputMode,
    COLLISION_SUFFIX,
    DEFAULT_IMAGE_NAME,
    DEFAULT_TEXT_NAME,
    OUTPUT_EXTENSIONS,
)
from ascii_grid.exceptions import InputError, OutputError
from ascii_grid.grid import Grid
from ascii_grid.logger import get_logger

logger = get_logger(__name__)

# Glyphs used to measure the cell of fonts without metrics
CELL_PROBE = '@#%|gjpqy'


# =============================================================================
# OUTPUT NAMING
# =============================================================================

def output_path_for(source: Optional[Union[str, Path]],
                    mode: OutputMode,
                    output_dir: Optional[Union[str, Path]] = None) -> Path:
    """
    Derive the output file path for a source image.

    The source's base name gets the mode's extension (``photo.jpg`` ->
    ``photo.txt``). Without a usable base name the fixed default is used.
    A derived path equal to the source gets a suffix so the source is never
    overwritten.

    Args:
        source: Source image path (may be None)
        mode: TEXT or IMAGE
        output_dir: Directory for the output (current directory if None)

    Returns:
        Output file path
    """
    if mode not in OUTPUT_EXTENSIONS:
        raise ValueError(f"{mode} does not write a file")

    extension = OUTPUT_EXTENSIONS[mode]
    default_name = DEFAULT_TEXT_NAME if mode == OutputMode.TEXT else DEFAULT_IMAGE_NAME
    directory = Path(output_dir) if output_dir is not None else Path('.')

    stem = Path(source).stem if source is not None else ''
    if not stem or stem in ('.', '..'):
        return directory / default_name

    candidate = directory / f"{stem}{extension}"
    if source is not None and _same_file(candidate, Path(source)):
        candidate = directory / f"{stem}{COLLISION_SUFFIX}{extension}"
    return candidate


def _same_file(a: Path, b: Path) -> bool:
    try:
        return a.resolve() == b.resolve()
    except OSError:
        return False


def _remove_partial(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Could not remove partial output %s: %s", path, e)


# =============================================================================
# TERMINAL
# =============================================================================

class TerminalRenderer:
    """Print the grid to a text stream, one row per line."""

    def __init__(self, config: Optional[ConverterConfig] = None):
        """Initialize with optional configuration."""
        self.config = config or ConverterConfig()

    def render(self, grid: Grid, stream: Optional[TextIO] = None) -> None:
        """
        Write every row followed by ``line_spacing`` line terminators.

        Args:
            grid: Assembled grid
            stream: Target stream (stdout if None)
        """
        stream = stream if stream is not None else sys.stdout
        terminator = '\n' * self.config.line_spacing
        for row in grid.rows():
            stream.write(row)
            stream.write(terminator)
        stream.flush()


# =============================================================================
# TEXT FILE
# =============================================================================

class TextFileRenderer:
    """Write the grid to a UTF-8 text file."""

    def __init__(self, config: Optional[ConverterConfig] = None):
        """Initialize with optional configuration."""
        self.config = config or ConverterConfig()

    def render(self, grid: Grid, path: Union[str, Path]) -> Path:
        """
        Write rows separated by newlines, truncating any existing file.

        Args:
            grid: Assembled grid
            path: Output file path

        Returns:
            The written path

        Raises:
            OutputError: If the file cannot be created or written
        """
        path = Path(path)
        opened = False
        try:
            with open(path, 'w', encoding='utf-8', newline='\n') as f:
                opened = True
                for row in grid.rows():
                    f.write(row)
                    f.write('\n')
        except OSError as e:
            if opened:
                _remove_partial(path)
            raise OutputError(path, e.strerror or str(e)) from e

        logger.info("Saved text to %s", path)
        return path


# =============================================================================
# RASTERIZED IMAGE
# =============================================================================

def load_font(font_path: Optional[str], font_size: int) -> ImageFont.ImageFont:
    """
    Load a TrueType font, or Pillow's bundled default, at ``font_size``.

    Raises:
        InputError: If ``font_path`` cannot be loaded
    """
    if font_path is None:
        return ImageFont.load_default(size=font_size)
    try:
        return ImageFont.truetype(font_path, font_size)
    except OSError as e:
        raise InputError(font_path, f"cannot load font: {e}") from e


def measure_cell(font: ImageFont.ImageFont) -> Tuple[int, int]:
    """Return the (width, height) of one glyph cell in pixels."""
    width = max(1, math.ceil(font.getlength('@')))
    if hasattr(font, 'getmetrics'):
        ascent, descent = font.getmetrics()
        height = ascent + descent
    else:
        height = font.getbbox(CELL_PROBE)[3]
    return width, max(1, height)


class ImageRenderer:
    """Draw the grid's rows as glyphs on a transparent bitmap."""

    def __init__(self, config: Optional[ConverterConfig] = None):
        """Initialize with optional configuration."""
        self.config = config or ConverterConfig()
        self._font = None

    @property
    def font(self) -> ImageFont.ImageFont:
        if self._font is None:
            self._font = load_font(self.config.font_path, self.config.font_size)
        return self._font

    def cell_size(self) -> Tuple[int, int]:
        """Configured glyph cell size, measured from the font if unset."""
        if self.config.cell_size is not None:
            return tuple(self.config.cell_size)
        return measure_cell(self.font)

    def compose(self, grid: Grid) -> Image.Image:
        """
        Rasterize the grid into an RGBA image.

        Each row is drawn as one string at (0, row * cell height). Pixels the
        font covers become opaque glyph color, the rest stays transparent.
        Coverage outside the bitmap is clipped.

        Args:
            grid: Assembled grid

        Returns:
            RGBA image of size (width * cell width, height * cell height)
        """
        cell_width, cell_height = self.cell_size()
        size = (grid.width * cell_width, grid.height * cell_height)

        coverage = Image.new('L', size, 0)
        draw = ImageDraw.Draw(coverage)
        for i, line in enumerate(grid.rows()):
            draw.text((0, i * cell_height), line, fill=255, font=self.font)

        mask = np.asarray(coverage) > 0
        pixels = np.zeros((size[1], size[0], 4), dtype=np.uint8)
        pixels[mask] = (*self.config.glyph_color, 255)
        return Image.fromarray(pixels)

    def render(self, grid: Grid, path: Union[str, Path]) -> Path:
        """
        Compose the bitmap and save it as PNG.

        Raises:
            OutputError: If the file cannot be created or written
        """
        path = Path(path)
        bitmap = self.compose(grid)

        opened = False
        try:
            with open(path, 'wb') as f:
                opened = True
                bitmap.save(f, format='PNG')
        except OSError as e:
            if opened:
                _remove_partial(path)
            raise OutputError(path, e.strerror or str(e)) from e

        logger.info("Saved image to %s (%dx%d)", path, bitmap.width, bitmap.height)
        return path


def get_renderer(mode: OutputMode, config: Optional[ConverterConfig] = None):
    """Return the renderer for an output mode."""
    renderers = {
        OutputMode.TERMINAL: TerminalRenderer,
        OutputMode.TEXT: TextFileRenderer,
        OutputMode.IMAGE: ImageRenderer,
    }
    return renderers[mode](config)
