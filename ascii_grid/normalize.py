#!/usr/bin/env python3
"""
Image to ASCII Grid Converter - Decoding and Grayscale Normalization
====================================================================
Turns a path into a decoded Pillow image and a decoded image into a
single-channel luminance image.
"""

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from ascii_grid.exceptions import InputError
from ascii_grid.logger import get_logger

logger = get_logger(__name__)


def load_image(path: Union[str, Path]) -> Image.Image:
    """
    Open and fully decode an image file.

    The file handle is closed before returning; the returned image owns its
    pixel data.

    Args:
        path: Path to the image file

    Returns:
        Decoded PIL Image

    Raises:
        InputError: If the path is missing, unreadable or not a decodable image
    """
    path = Path(path)
    try:
        with Image.open(path) as img:
            img.load()
            image = img.copy()
    except FileNotFoundError:
        raise InputError(path, "no such file") from None
    except IsADirectoryError:
        raise InputError(path, "is a directory") from None
    except PermissionError:
        raise InputError(path, "permission denied") from None
    except UnidentifiedImageError:
        raise InputError(path, "unsupported or corrupt image data") from None
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise InputError(path, str(e)) from e

    logger.debug("Loaded %s: size=%s mode=%s", path, image.size, image.mode)
    return image


def to_luminance(image: Image.Image) -> Image.Image:
    """
    Convert any decoded image to 8-bit luminance ('L' mode).

    Alpha is dropped, as Pillow's conversion does; transparent pixels keep
    the luminance of their color channels.

    16-bit ('I;16*') and 32-bit integer ('I') samples are scaled from
    0-65535 down to 0-255. Float ('F') samples are taken to be on the 0-255
    scale Pillow produces when converting 'L' to 'F'. Both are rounded and
    clipped into range.
    """
    if image.mode == 'L':
        return image.copy()
    if image.mode == 'I' or image.mode.startswith('I;16'):
        return _scaled_to_bytes(np.asarray(image), 257.0)
    if image.mode == 'F':
        return _scaled_to_bytes(np.asarray(image), 1.0)
    if image.mode == 'PA':
        image = image.convert('RGBA')
    return image.convert('L')


def _scaled_to_bytes(samples: np.ndarray, divisor: float) -> Image.Image:
    scaled = np.round(samples.astype(np.float64) / divisor)
    scaled = np.nan_to_num(scaled, nan=0.0)
    return Image.fromarray(np.clip(scaled, 0, 255).astype(np.uint8))
