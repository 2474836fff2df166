"""Tests for terminal, text-file and image renderers."""

import io
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from ascii_grid.config import ConverterConfig
from ascii_grid.constants import OutputMode
from ascii_grid.exceptions import OutputError
from ascii_grid.grid import assemble_array
from ascii_grid.renderers import (
    ImageRenderer,
    TerminalRenderer,
    TextFileRenderer,
    get_renderer,
    measure_cell,
    load_font,
    output_path_for,
)


@pytest.fixture
def grid():
    return assemble_array(np.array([[0, 128, 255],
                                    [255, 128, 0]], dtype=np.uint8))


# =============================================================================
# TERMINAL
# =============================================================================

class TestTerminalRenderer:

    def test_rows_with_terminators(self, grid):
        out = io.StringIO()
        TerminalRenderer().render(grid, out)
        assert out.getvalue() == ' =@\n@= \n'

    def test_double_spacing(self, grid):
        out = io.StringIO()
        TerminalRenderer(ConverterConfig(line_spacing=2)).render(grid, out)
        assert out.getvalue() == ' =@\n\n@= \n\n'

    def test_defaults_to_stdout(self, grid, capsys):
        TerminalRenderer().render(grid)
        assert capsys.readouterr().out == ' =@\n@= \n'


# =============================================================================
# TEXT FILE
# =============================================================================

class TestTextFileRenderer:

    def test_writes_rows(self, grid, tmp_path):
        path = TextFileRenderer().render(grid, tmp_path / 'out.txt')
        assert path.read_text(encoding='utf-8') == ' =@\n@= \n'

    def test_truncates_existing_file(self, grid, tmp_path):
        path = tmp_path / 'out.txt'
        path.write_text('x' * 1000)
        TextFileRenderer().render(grid, path)
        assert path.read_text(encoding='utf-8') == ' =@\n@= \n'

    def test_rendering_twice_is_byte_identical(self, grid, tmp_path):
        renderer = TextFileRenderer()
        first = renderer.render(grid, tmp_path / 'a.txt').read_bytes()
        second = renderer.render(grid, tmp_path / 'b.txt').read_bytes()
        assert first == second

    def test_grid_untouched(self, grid, tmp_path):
        before = grid.levels.copy()
        TextFileRenderer().render(grid, tmp_path / 'out.txt')
        assert np.array_equal(grid.levels, before)

    def test_missing_directory_is_output_error(self, grid, tmp_path):
        target = tmp_path / 'missing' / 'out.txt'
        with pytest.raises(OutputError):
            TextFileRenderer().render(grid, target)
        assert not target.exists()

    def test_directory_target_is_output_error(self, grid, tmp_path):
        with pytest.raises(OutputError):
            TextFileRenderer().render(grid, tmp_path)


# =============================================================================
# IMAGE
# =============================================================================

class TestImageRenderer:

    def test_bitmap_size_follows_cell_size(self, grid):
        renderer = ImageRenderer(ConverterConfig(cell_size=(6, 11)))
        bitmap = renderer.compose(grid)
        assert bitmap.mode == 'RGBA'
        assert bitmap.size == (3 * 6, 2 * 11)

    def test_transparent_background_opaque_glyphs(self, grid):
        bitmap = ImageRenderer().compose(grid)
        alpha = np.asarray(bitmap)[:, :, 3]
        assert set(np.unique(alpha)) <= {0, 255}
        assert (alpha == 0).any()
        assert (alpha == 255).any()

    def test_rows_drawn_at_row_offset(self):
        cell_width, cell_height = 10, 13
        two_rows = assemble_array(np.array([[0, 0, 0],
                                            [255, 255, 255]], dtype=np.uint8))
        bitmap = ImageRenderer(ConverterConfig(cell_size=(cell_width, cell_height))).compose(two_rows)
        alpha = np.asarray(bitmap)[:, :, 3]

        assert alpha[:cell_height].max() == 0
        opaque_rows = np.nonzero(alpha.any(axis=1))[0]
        assert opaque_rows.size
        assert opaque_rows.min() >= cell_height
        assert opaque_rows.max() < 2 * cell_height

    def test_glyph_color(self, grid):
        bitmap = ImageRenderer(ConverterConfig(glyph_color=(200, 10, 20))).compose(grid)
        pixels = np.asarray(bitmap)
        opaque = pixels[pixels[:, :, 3] == 255]
        assert (opaque[:, :3] == (200, 10, 20)).all()

    def test_blank_grid_is_fully_transparent(self):
        blank = assemble_array(np.zeros((3, 4), dtype=np.uint8))
        bitmap = ImageRenderer().compose(blank)
        assert np.asarray(bitmap)[:, :, 3].max() == 0

    def test_tiny_cells_clip_without_error(self, grid):
        bitmap = ImageRenderer(ConverterConfig(cell_size=(1, 1), font_size=30)).compose(grid)
        assert bitmap.size == (3, 2)

    def test_render_writes_png(self, grid, tmp_path):
        path = ImageRenderer().render(grid, tmp_path / 'out.png')
        with Image.open(path) as img:
            assert img.format == 'PNG'
            assert img.mode == 'RGBA'

    def test_unwritable_path_is_output_error(self, grid, tmp_path):
        with pytest.raises(OutputError):
            ImageRenderer().render(grid, tmp_path / 'missing' / 'out.png')

    def test_measure_cell_positive(self):
        width, height = measure_cell(load_font(None, 10))
        assert width >= 1
        assert height >= 1


# =============================================================================
# OUTPUT NAMING
# =============================================================================

class TestOutputPathFor:

    def test_replaces_extension(self):
        assert output_path_for('photos/cat.jpg', OutputMode.TEXT) == Path('cat.txt')
        assert output_path_for('photos/cat.jpg', OutputMode.IMAGE) == Path('cat.png')

    def test_output_dir(self, tmp_path):
        assert output_path_for('cat.jpg', OutputMode.TEXT, tmp_path) == tmp_path / 'cat.txt'

    def test_default_names(self):
        assert output_path_for(None, OutputMode.TEXT) == Path('ascii.txt')
        assert output_path_for('', OutputMode.IMAGE) == Path('ascii.png')

    def test_collision_with_source_gets_suffix(self, tmp_path):
        source = tmp_path / 'cat.png'
        source.write_bytes(b'')
        assert output_path_for(source, OutputMode.IMAGE, tmp_path) == tmp_path / 'cat-ascii.png'

    def test_terminal_has_no_file(self):
        with pytest.raises(ValueError):
            output_path_for('cat.jpg', OutputMode.TERMINAL)


def test_get_renderer():
    assert isinstance(get_renderer(OutputMode.TERMINAL), TerminalRenderer)
    assert isinstance(get_renderer(OutputMode.TEXT), TextFileRenderer)
    assert isinstance(get_renderer(OutputMode.IMAGE), ImageRenderer)
