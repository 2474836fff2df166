"""
Pytest configuration for ascii-grid tests.

Adds the project root to sys.path so 'import ascii_grid' works without an
install, and provides image fixtures.
"""
import logging
import sys
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ascii_grid.logger import ROOT_LOGGER  # noqa: E402


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture(autouse=True)
def isolate_cwd(tmp_path, monkeypatch):
    """Run every test inside its own temporary directory."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def black_square() -> Image.Image:
    """7x7 image of luminance 0."""
    return Image.new('L', (7, 7), 0)


@pytest.fixture
def split_image() -> Image.Image:
    """14x7 image, left half luminance 255, right half luminance 0."""
    arr = np.zeros((7, 14), dtype=np.uint8)
    arr[:, :7] = 255
    return Image.fromarray(arr)


@pytest.fixture
def gradient_image() -> Image.Image:
    """RGB horizontal gradient, 140x70."""
    row = np.linspace(0, 255, 140).astype(np.uint8)
    arr = np.repeat(row[np.newaxis, :], 70, axis=0)
    return Image.fromarray(np.stack([arr, arr, arr], axis=-1))


@pytest.fixture
def image_file(tmp_path):
    """Save an image under tmp_path and return its path."""
    def _save(image: Image.Image, name: str = 'source.png') -> Path:
        path = tmp_path / name
        image.save(path)
        return path
    return _save


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers bound to a previous test's captured streams."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
