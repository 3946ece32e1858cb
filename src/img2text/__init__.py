"""Convert binary images to Unicode text art.

``Bmp2text`` scans an ``ImageRead`` with a ``GlyphSet``. ``worker_kernel``
wraps a whole conversion of a plain grayscale buffer so that it can be
handed off to a thread or process pool.
"""
from .glyphsets import (
    GLYPH_SET_1X1,
    GLYPH_SET_1X2,
    GLYPH_SET_2X2,
    GLYPH_SET_2X3,
    GLYPH_SET_BRAILLE8,
    GLYPH_SET_MS_2X3,
    GLYPH_SET_SLC,
    GLYPH_SETS,
    Braille8GlyphSet,
    GlyphSet,
    IndexedGlyphSet,
    get_glyph_set,
)
from .image import SPAN_BITS, BinaryImageRead, GrayImageRead, ImageRead, set_spans_by_fn
from .scanner import (
    Bmp2text,
    Bmp2textOpts,
    max_output_len_for_image_dims,
    num_glyphs_for_image_width,
    num_lines_for_image_height,
)
from .worker import OUTPUT_TOO_LARGE, WorkerRequest, WorkerResponse, rgba_to_gray, worker_kernel

__version__ = "0.1.0"
