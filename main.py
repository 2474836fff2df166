#!/usr/bin/env python3
"""
Image to ASCII Grid Converter
=============================
Converts an image into a grid of density glyphs and prints it, saves it as
text, or draws it onto a transparent PNG.

Usage:
  python main.py image.png [terminal|text|image] [options]
"""

import sys

from ascii_grid.cli import main


if __name__ == '__main__':
    sys.exit(main())
