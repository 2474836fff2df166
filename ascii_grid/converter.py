#!/usr/bin/env python3
"""
Image to ASCII Grid Converter - Pipeline
========================================
decode -> normalize -> resize -> assemble -> render, run sequentially.
"""

from pathlib import Path
from typing import Optional, Union

from PIL import Image

from ascii_grid.config import ConverterConfig
from ascii_grid.constants import OutputMode
from ascii_grid.grid import Grid, assemble
from ascii_grid.logger import get_logger
from ascii_grid.normalize import load_image, to_luminance
from ascii_grid.renderers import get_renderer, output_path_for
from ascii_grid.resize import Resizer

logger = get_logger(__name__)


class AsciiConverter:
    """Main class for converting images to glyph grids and rendering them."""

    def __init__(self, config: Optional[ConverterConfig] = None):
        """Initialize with optional configuration."""
        self.config = config or ConverterConfig()
        self.resizer = Resizer(self.config)

    def grid_from_image(self, image: Image.Image) -> Grid:
        """
        Build the grid for an already decoded image.

        Args:
            image: PIL Image in any mode

        Returns:
            Grid sized by the resize policy
        """
        gray = to_luminance(image)
        resized = self.resizer.resize(gray)
        grid = assemble(resized, self.config.banding)
        logger.debug("Assembled %dx%d grid from %s image", grid.width, grid.height, image.size)
        return grid

    def convert(self, path: Union[str, Path]) -> Grid:
        """
        Decode an image file and build its grid.

        Raises:
            InputError: If the file cannot be opened or decoded
        """
        return self.grid_from_image(load_image(path))

    def output_path(self, source: Optional[Union[str, Path]] = None) -> Optional[Path]:
        """File the configured mode writes to, or None for terminal output."""
        if self.config.mode == OutputMode.TERMINAL:
            return None
        if self.config.output_path is not None:
            return self.config.output_path
        return output_path_for(source, self.config.mode, self.config.output_dir)

    def render(self, grid: Grid, source: Optional[Union[str, Path]] = None) -> Optional[Path]:
        """
        Render a grid with the configured output mode.

        Args:
            grid: Assembled grid
            source: Source image path, used to name output files

        Returns:
            Path of the written file, or None for terminal output

        Raises:
            OutputError: If the output file cannot be created
        """
        renderer = get_renderer(self.config.mode, self.config)
        target = self.output_path(source)
        if target is None:
            renderer.render(grid)
            return None
        return renderer.render(grid, target)

    def run(self, path: Union[str, Path]) -> Optional[Path]:
        """Convert an image file and render it in one go."""
        grid = self.convert(path)
        return self.render(grid, source=path)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def image_to_grid(image: Image.Image,
                  width: Optional[int] = None,
                  height: Optional[int] = None,
                  **kwargs) -> Grid:
    """
    Convenience function to convert an in-memory image to a Grid.

    Args:
        image: PIL Image
        width: Output columns (derived if None)
        height: Output rows (derived if None)
        **kwargs: Additional config options

    Returns:
        Grid
    """
    config = ConverterConfig(width=width, height=height, **kwargs)
    return AsciiConverter(config).grid_from_image(image)


def convert_file(path: Union[str, Path],
                 mode: Union[str, OutputMode] = OutputMode.TERMINAL,
                 **kwargs) -> Optional[Path]:
    """
    Convenience function to convert an image file and render it.

    Args:
        path: Image file path
        mode: 'terminal', 'text' or 'image' (or an OutputMode)
        **kwargs: Additional config options

    Returns:
        Path of the written file, or None for terminal output
    """
    if isinstance(mode, str):
        mode = OutputMode.parse(mode)
    config = ConverterConfig(mode=mode, **kwargs)
    return AsciiConverter(config).run(path)
