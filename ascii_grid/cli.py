#!/usr/bin/env python3
"""
Image to ASCII Grid Converter - Command Line Interface
======================================================
"""

import argparse
import sys
from typing import List, Optional

from ascii_grid import __version__
from ascii_grid.config import ConverterConfig
from ascii_grid.constants import (
    BandingPolicy,
    OutputMode,
    ResampleFilter,
    OUTPUT_MODE_ALIASES,
)
from ascii_grid.converter import AsciiConverter
from ascii_grid.exceptions import InputError, OutputError
from ascii_grid.logger import setup_logger


def create_argument_parser():
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog='ascii-grid',
        description='Convert images to character-density text art',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s image.png                         # Print to the terminal
  %(prog)s image.png text                    # Save image.txt
  %(prog)s image.jpg image -o art.png        # Save glyphs as a transparent PNG
  %(prog)s image.png -w 80 --char-ratio 0.5  # 80 columns, terminal-corrected
        """
    )

    # Input/Output
    parser.add_argument('input', help='Input image file')
    parser.add_argument('mode', nargs='?', default='terminal',
                        choices=sorted(OUTPUT_MODE_ALIASES),
                        help='Output mode: terminal (default), text or image')
    parser.add_argument('-o', '--output', help='Output file (derived from the input name if omitted)')
    parser.add_argument('--output-dir', help='Directory for derived output files')

    # Size options
    parser.add_argument('-w', '--width', type=int, help='Output width in characters')
    parser.add_argument('-H', '--height', type=int, help='Output height in characters')
    parser.add_argument('--divisor', type=float, default=7,
                        help='Source pixels per output column (default: 7)')
    parser.add_argument('--char-ratio', type=float, default=1.0,
                        help='Character aspect ratio (width/height), 0.5 for terminals')
    parser.add_argument('--filter', choices=[f.name.lower() for f in ResampleFilter],
                        default='box', help='Downsampling filter')

    # Quantization
    parser.add_argument('--banding', choices=['uniform', 'blank-on-black'],
                        default='uniform', help='Luminance banding policy')

    # Rendering options
    parser.add_argument('--line-spacing', type=int, default=1,
                        help='Line breaks after each terminal row (default: 1; '
                             '2 = double spaced, the legacy terminal layout)')
    parser.add_argument('--font', help='TrueType font for image output')
    parser.add_argument('--font-size', type=int, default=10,
                        help='Font size for image output')

    # Other options
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')
    parser.add_argument('--log-file', help='Also write log messages to this file (rotated at 1 MB)')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    return parser


def build_config(args) -> ConverterConfig:
    """Build a ConverterConfig from parsed arguments."""
    return ConverterConfig(
        column_divisor=args.divisor,
        width=args.width,
        height=args.height,
        char_aspect_ratio=args.char_ratio,
        resample_filter=ResampleFilter[args.filter.upper()],
        banding=BandingPolicy[args.banding.upper().replace('-', '_')],
        mode=OutputMode.parse(args.mode),
        output_path=args.output,
        output_dir=args.output_dir,
        line_spacing=args.line_spacing,
        font_path=args.font,
        font_size=args.font_size,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for command line usage."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        logger = setup_logger(level='DEBUG' if args.verbose else 'INFO', log_file=args.log_file)
    except OSError as e:
        print(f"Error: cannot open log file {args.log_file}: {e}", file=sys.stderr)
        return 1

    try:
        config = build_config(args)
    except ValueError as e:
        parser.error(str(e))

    converter = AsciiConverter(config)
    try:
        grid = converter.convert(args.input)
        logger.debug("Output size: %dx%d", grid.width, grid.height)
        converter.render(grid, source=args.input)
    except (InputError, OutputError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
