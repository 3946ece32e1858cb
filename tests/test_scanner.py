import sys

import numpy as np
import pytest

from img2text.glyphsets import GLYPH_SET_MS_2X3, GLYPH_SET_SLC, GLYPH_SETS, IndexedGlyphSet
from img2text.image import SPAN_BITS, BinaryImageRead
from img2text.scanner import (
    Bmp2text,
    Bmp2textOpts,
    max_output_len_for_image_dims,
    num_glyphs_for_image_width,
    num_lines_for_image_height,
)


def hex_glyph_set(mask_dims, mask_overlap=(0, 0)):
    """A glyph set that prints each fragment as a hex digit."""
    n = 1 << (mask_dims[0] * mask_dims[1])
    glyphs = [format(i, "x") for i in range(n)]
    return IndexedGlyphSet(mask_dims, mask_overlap, max(map(len, glyphs)), glyphs)


def reference_transform(mask, glyph_set):
    """Naive per-pixel conversion to compare the scanner against."""
    mask_w, mask_h = glyph_set.mask_dims()
    overlap_w, overlap_h = glyph_set.mask_overlap()
    opts = Bmp2textOpts(glyph_set=glyph_set)
    height, width = mask.shape
    lines = []
    for out_y in range(num_lines_for_image_height(height, opts)):
        line = []
        for out_x in range(num_glyphs_for_image_width(width, opts)):
            fragment = 0
            for j in range(mask_h):
                for i in range(mask_w):
                    y = out_y * (mask_h - overlap_h) + j
                    x = out_x * (mask_w - overlap_w) + i
                    if mask[y, x]:
                        fragment |= 1 << (j * mask_w + i)
            line.append(glyph_set.fragment_to_glyph(fragment))
        lines.append(''.join(line) + '\n')
    return ''.join(lines)


def test_solid_block():
    glyph_set = IndexedGlyphSet.from_catalog([("█", 0b111_111_111)], (3, 3))
    image = BinaryImageRead(np.ones((3, 3), dtype=bool))
    assert Bmp2text().transform(image, Bmp2textOpts(glyph_set=glyph_set)) == "█\n"


def test_default_glyph_set_is_slc():
    assert Bmp2textOpts().glyph_set is GLYPH_SET_SLC
    image = BinaryImageRead(np.ones((3, 6), dtype=bool))
    assert Bmp2text().transform(image) == "██\n"


def test_horizontal_overlap_shares_columns():
    opts = Bmp2textOpts(glyph_set=hex_glyph_set((2, 1), (1, 0)))
    image = BinaryImageRead(np.array([[1, 0, 1, 1, 0]]))
    assert Bmp2text().transform(image, opts) == "1231\n"


def test_vertical_overlap_shares_rows():
    opts = Bmp2textOpts(glyph_set=hex_glyph_set((1, 2), (0, 1)))
    image = BinaryImageRead(np.array([[1], [0], [1]]))
    assert Bmp2text().transform(image, opts) == "1\n2\n"


def test_ms2x3_block_counts():
    opts = Bmp2textOpts(glyph_set=GLYPH_SET_MS_2X3)
    for width in range(1, 40):
        assert num_glyphs_for_image_width(width, opts) == (width - 1) // (2 - 1)
    for height in range(1, 40):
        assert num_lines_for_image_height(height, opts) == (height - 1) // (3 - 1)
    assert num_glyphs_for_image_width(0, opts) == 0


def test_block_counts_without_overlap():
    opts = Bmp2textOpts(glyph_set=GLYPH_SET_SLC)
    assert num_glyphs_for_image_width(10, opts) == 3
    assert num_lines_for_image_height(8, opts) == 2


@pytest.mark.parametrize("name", sorted(GLYPH_SETS))
def test_matches_reference_transform(name):
    glyph_set = GLYPH_SETS[name]
    rng = np.random.default_rng(1234)
    mask = rng.random((23, 53)) < 0.4
    text = Bmp2text().transform(BinaryImageRead(mask), Bmp2textOpts(glyph_set=glyph_set))
    assert text == reference_transform(mask, glyph_set)


@pytest.mark.parametrize("mask_dims, mask_overlap", [
    ((2, 3), (1, 1)),
    ((3, 2), (2, 1)),
    ((3, 3), (0, 0)),
])
def test_matches_reference_transform_across_spans(mask_dims, mask_overlap):
    glyph_set = hex_glyph_set(mask_dims, mask_overlap)
    rng = np.random.default_rng(7)
    mask = rng.random((11, 70)) < 0.5
    text = Bmp2text().transform(BinaryImageRead(mask), Bmp2textOpts(glyph_set=glyph_set))
    assert text == reference_transform(mask, glyph_set)


class NoisyPaddingImageRead(BinaryImageRead):
    """Sets every bit past the row width, including the spare span."""

    def copy_line_as_spans_to(self, y, out):
        width = self.dims()[0]
        out[:] = 0xffff
        super().copy_line_as_spans_to(y, out)
        if width % SPAN_BITS:
            out[width // SPAN_BITS] |= (0xffff << (width % SPAN_BITS)) & 0xffff


@pytest.mark.parametrize("mask_dims, mask_overlap", [
    ((1, 1), (0, 0)),
    ((2, 3), (1, 1)),
    ((3, 3), (0, 0)),
])
@pytest.mark.parametrize("width", [5, 16, 37])
def test_bits_past_row_width_never_reach_fragments(mask_dims, mask_overlap, width):
    glyph_set = hex_glyph_set(mask_dims, mask_overlap)
    opts = Bmp2textOpts(glyph_set=glyph_set)
    rng = np.random.default_rng(width)
    mask = rng.random((6, width)) < 0.5
    assert Bmp2text().transform(NoisyPaddingImageRead(mask), opts) == \
        reference_transform(mask, glyph_set)


def test_buffers_are_reused_across_sizes():
    opts = Bmp2textOpts(glyph_set=GLYPH_SETS['2x2'])
    rng = np.random.default_rng(5)
    wide = rng.random((8, 100)) < 0.5
    narrow = rng.random((6, 20)) < 0.5

    converter = Bmp2text()
    converter.transform(BinaryImageRead(wide), opts)
    assert converter.transform(BinaryImageRead(narrow), opts) == \
        Bmp2text().transform(BinaryImageRead(narrow), opts)


def test_image_smaller_than_mask():
    opts = Bmp2textOpts(glyph_set=GLYPH_SET_SLC)
    assert Bmp2text().transform(BinaryImageRead(np.ones((2, 2))), opts) == ""
    assert Bmp2text().transform(BinaryImageRead(np.ones((3, 2))), opts) == "\n"


def test_sink_errors_propagate():
    class FailingSink:
        def write(self, s):
            raise OSError("disk full")

    image = BinaryImageRead(np.ones((3, 3)))
    with pytest.raises(OSError, match="disk full"):
        Bmp2text().transform_and_write(image, Bmp2textOpts(), FailingSink())


def test_max_output_len():
    opts = Bmp2textOpts(glyph_set=GLYPH_SET_SLC)
    max_glyph_len = GLYPH_SET_SLC.max_glyph_len()
    assert max_output_len_for_image_dims((9, 6), opts) == (3 * max_glyph_len + 1) * 2
    assert max_output_len_for_image_dims((0, 0), opts) == 0


def test_max_output_len_is_an_upper_bound():
    opts = Bmp2textOpts(glyph_set=GLYPH_SET_SLC)
    rng = np.random.default_rng(3)
    mask = rng.random((12, 30)) < 0.5
    text = Bmp2text().transform(BinaryImageRead(mask), opts)
    assert len(text.encode('utf-8')) <= max_output_len_for_image_dims((30, 12), opts)


def test_max_output_len_overflow():
    opts = Bmp2textOpts(glyph_set=GLYPH_SET_SLC)
    assert max_output_len_for_image_dims((sys.maxsize, 3), opts) is None
    assert max_output_len_for_image_dims((3, sys.maxsize), opts) is None
    assert max_output_len_for_image_dims((30, 30), opts, limit=50) is None
