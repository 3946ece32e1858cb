"""Glyph sets: output glyphs associated with expected input image patterns."""
import logging
from abc import ABC, abstractmethod
from typing import Dict, Sequence, Tuple

from .charsets import DEFAULT_GLYPH_SET, GLYPH_CATALOGS
from .index_builder import MAX_FRAGMENT_BITS, build_index

logger = logging.getLogger(__name__)


class GlyphSet(ABC):
    """Maps fragments of ``mask_dims`` pixels to glyphs.

    Horizontally and vertically adjacent fragments share ``mask_overlap``
    columns and rows of pixels.
    """

    @abstractmethod
    def mask_dims(self) -> Tuple[int, int]:
        ...

    @abstractmethod
    def mask_overlap(self) -> Tuple[int, int]:
        ...

    @abstractmethod
    def fragment_to_glyph(self, fragment: int) -> str:
        ...

    @abstractmethod
    def max_glyph_len(self) -> int:
        """Maximum length of a glyph in UTF-8 bytes."""


def _check_geometry(mask_dims, mask_overlap):
    if len(mask_dims) != 2 or len(mask_overlap) != 2:
        raise ValueError("mask_dims and mask_overlap must have two elements")
    if min(mask_dims) < 1 or mask_dims[0] * mask_dims[1] > MAX_FRAGMENT_BITS:
        raise ValueError(f"unsupported mask dimensions: {tuple(mask_dims)}")
    for dim, overlap in zip(mask_dims, mask_overlap):
        if not 0 <= overlap < dim:
            raise ValueError(
                f"mask overlap {tuple(mask_overlap)} must be smaller than "
                f"mask dimensions {tuple(mask_dims)}"
            )


class IndexedGlyphSet(GlyphSet):
    """A glyph set backed by a dense table covering every fragment."""

    def __init__(self, mask_dims, mask_overlap, max_glyph_len, index):
        _check_geometry(mask_dims, mask_overlap)
        if len(index) != 1 << (mask_dims[0] * mask_dims[1]):
            raise ValueError("index must have an entry for every fragment")
        self._mask_dims = tuple(mask_dims)
        self._mask_overlap = tuple(mask_overlap)
        self._max_glyph_len = max_glyph_len
        self._index = tuple(index)

    @classmethod
    def from_catalog(cls, glyphs: Sequence[Tuple[str, int]], mask_dims,
                     mask_overlap=(0, 0)) -> 'IndexedGlyphSet':
        _check_geometry(mask_dims, mask_overlap)
        index = build_index(glyphs, mask_dims)
        return cls(mask_dims, mask_overlap, index.max_glyph_len, index.glyphs)

    def mask_dims(self):
        return self._mask_dims

    def mask_overlap(self):
        return self._mask_overlap

    def fragment_to_glyph(self, fragment):
        return self._index[fragment]

    def max_glyph_len(self):
        return self._max_glyph_len

    def __repr__(self):
        return (f"IndexedGlyphSet(mask_dims={self._mask_dims}, "
                f"mask_overlap={self._mask_overlap})")


def _braille_nibble(n: int) -> int:
    # Fragment bits 1..4 are pixels (1,0), (0,1), (1,1), (0,2), which are
    # braille dots 4, 2, 5, 3 (code point bits 3, 1, 4, 2).
    return (n >> 1 & 1) | (n >> 3 & 1) << 1 | (n & 1) << 2 | (n >> 2 & 1) << 3


# 16 nibbles of 4 bits each
_BRAILLE_NIBBLE_LUT = sum(_braille_nibble(n) << (n * 4) for n in range(16))

# All 256 braille patterns, in code point order
_BRAILLE_GLYPHS = ''.join(chr(0x2800 + i) for i in range(256))
_BRAILLE_GLYPH_WIDTH = 1


class Braille8GlyphSet(GlyphSet):
    """Braille patterns over 2x4 blocks, computed without a lookup table.

    The fragment order (row major) and the braille dot numbering (column
    major for the upper six dots) only disagree on bits 1 to 4. Those are
    remapped through ``_BRAILLE_NIBBLE_LUT``; the others pass through.
    """

    def mask_dims(self):
        return (2, 4)

    def mask_overlap(self):
        return (0, 0)

    def fragment_to_glyph(self, fragment):
        nibble = fragment >> 1 & 0xf
        value = (fragment & 0b1110_0001) | (_BRAILLE_NIBBLE_LUT >> (nibble * 4) & 0xf) << 1
        start = value * _BRAILLE_GLYPH_WIDTH
        return _BRAILLE_GLYPHS[start:start + _BRAILLE_GLYPH_WIDTH]

    def max_glyph_len(self):
        # U+2800..U+28FF are three bytes in UTF-8
        return 3

    def __repr__(self):
        return "Braille8GlyphSet()"


def _glyph_set_from_catalog(name):
    catalog = GLYPH_CATALOGS[name]
    glyph_set = IndexedGlyphSet.from_catalog(
        catalog['glyphs'], catalog['mask_dims'], catalog['mask_overlap'])
    logger.debug("Built glyph set '%s' (%s)", name, catalog['name'])
    return glyph_set


GLYPH_SET_SLC = _glyph_set_from_catalog('slc')
GLYPH_SET_MS_2X3 = _glyph_set_from_catalog('ms2x3')
GLYPH_SET_1X1 = _glyph_set_from_catalog('1x1')
GLYPH_SET_1X2 = _glyph_set_from_catalog('1x2')
GLYPH_SET_2X2 = _glyph_set_from_catalog('2x2')
GLYPH_SET_2X3 = _glyph_set_from_catalog('2x3')
GLYPH_SET_BRAILLE8 = Braille8GlyphSet()

GLYPH_SETS: Dict[str, GlyphSet] = {
    'slc': GLYPH_SET_SLC,
    'ms2x3': GLYPH_SET_MS_2X3,
    '1x1': GLYPH_SET_1X1,
    '1x2': GLYPH_SET_1X2,
    '2x2': GLYPH_SET_2X2,
    '2x3': GLYPH_SET_2X3,
    'braille': GLYPH_SET_BRAILLE8,
}


def get_glyph_set(name=DEFAULT_GLYPH_SET) -> GlyphSet:
    try:
        return GLYPH_SETS[name]
    except KeyError:
        raise KeyError(
            f"unknown glyph set '{name}'; choose from: {', '.join(GLYPH_SETS)}"
        ) from None
