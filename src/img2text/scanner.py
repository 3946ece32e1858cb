"""Bitmap-to-text conversion."""
import io
import sys
from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from .glyphsets import GLYPH_SET_SLC, GlyphSet
from .image import SPAN_BITS, SPAN_DTYPE, ImageRead, num_spans_for_width

# Largest length of a Python string, in characters or bytes
MAX_OUTPUT_LEN = sys.maxsize


@dataclass
class Bmp2textOpts:
    glyph_set: GlyphSet = field(default=GLYPH_SET_SLC)


class Bmp2text:
    """The working area for bitmap-to-text conversion.

    The span buffers are reused across calls and only ever grow. An instance
    must not be used by more than one thread at a time.
    """

    def __init__(self):
        self._row_group = np.zeros(0, dtype=SPAN_DTYPE)

    def _row_group_view(self, num_spans_per_row, num_rows):
        size = num_spans_per_row * num_rows
        if self._row_group.shape[0] < size:
            self._row_group = np.zeros(size, dtype=SPAN_DTYPE)
        return self._row_group[:size].reshape(num_rows, num_spans_per_row)

    def transform_and_write(self, image: ImageRead, opts: Bmp2textOpts, out) -> None:
        """Convert ``image`` and write the text to ``out``.

        ``out`` is any object with a ``write(str)`` method. Errors raised by it
        are propagated as they are.
        """
        glyph_set = opts.glyph_set
        mask_w, mask_h = glyph_set.mask_dims()
        overlap_w, overlap_h = glyph_set.mask_overlap()
        step_x = mask_w - overlap_w
        step_y = mask_h - overlap_h
        fragment_limit = 1 << (mask_w * mask_h)
        column_mask = (1 << mask_w) - 1

        img_w, img_h = image.dims()
        out_w = num_glyphs_for_image_width(img_w, opts)
        out_h = num_lines_for_image_height(img_h, opts)

        # One extra span per row so that the scan may run past the last
        # pixel without bounds checks
        num_spans_per_row = num_spans_for_width(img_w) + 1
        row_group = self._row_group_view(num_spans_per_row, mask_h)

        for out_y in range(out_h):
            # Read a row group from the input image
            for y in range(mask_h):
                row_group[y, -1] = 0
                image.copy_line_as_spans_to(out_y * step_y + y, row_group[y])
            rows = row_group.tolist()

            # Scanning state of each row in the row group
            row_bits = [0] * mask_h
            num_valid_bits = 0  # .. in each of `row_bits`
            span_i = 0

            for _ in range(out_w):
                if num_valid_bits < mask_w:
                    for i in range(mask_h):
                        row_bits[i] |= rows[i][span_i] << num_valid_bits
                    span_i += 1
                    num_valid_bits += SPAN_BITS

                # Collect an input fragment of dimensions `mask_dims`
                fragment = 0
                for i in range(mask_h):
                    fragment |= (row_bits[i] & column_mask) << (i * mask_w)
                    row_bits[i] >>= step_x
                num_valid_bits -= step_x

                assert fragment < fragment_limit, fragment

                out.write(glyph_set.fragment_to_glyph(fragment))
            out.write('\n')

    def transform(self, image: ImageRead, opts: Optional[Bmp2textOpts] = None) -> str:
        buf = io.StringIO()
        self.transform_and_write(image, opts or Bmp2textOpts(), buf)
        return buf.getvalue()


def num_glyphs_for_image_width(width: int, opts: Bmp2textOpts) -> int:
    mask_w = opts.glyph_set.mask_dims()[0]
    overlap_w = opts.glyph_set.mask_overlap()[0]
    return max(width - overlap_w, 0) // (mask_w - overlap_w)


def num_lines_for_image_height(height: int, opts: Bmp2textOpts) -> int:
    mask_h = opts.glyph_set.mask_dims()[1]
    overlap_h = opts.glyph_set.mask_overlap()[1]
    return max(height - overlap_h, 0) // (mask_h - overlap_h)


def max_output_len_for_image_dims(dims: Sequence[int], opts: Bmp2textOpts,
                                  limit: int = MAX_OUTPUT_LEN) -> Optional[int]:
    """Calculate the maximum number of UTF-8 bytes written by
    ``Bmp2text.transform_and_write``.

    Returns ``None`` if any intermediate value exceeds ``limit``.
    """
    width, height = dims
    len_ = num_glyphs_for_image_width(width, opts) * opts.glyph_set.max_glyph_len()
    if len_ > limit:
        return None
    len_ += 1  # line termination
    if len_ > limit:
        return None
    len_ *= num_lines_for_image_height(height, opts)
    if len_ > limit:
        return None
    return len_
