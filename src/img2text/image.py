"""Input image representation.

Image sources hand out binary rows packed into spans: each span holds
``SPAN_BITS`` consecutive pixels, the leftmost pixel in the least significant
bit, 1 for foreground.
"""
from abc import ABC, abstractmethod
from typing import Callable, Tuple

import numpy as np

SPAN_DTYPE = np.uint16
SPAN_BITS = 16


def num_spans_for_width(width: int) -> int:
    return (width + SPAN_BITS - 1) // SPAN_BITS


class ImageRead(ABC):
    @abstractmethod
    def dims(self) -> Tuple[int, int]:
        """Get the image's dimensions as ``(width, height)``."""

    @abstractmethod
    def copy_line_as_spans_to(self, y: int, out: np.ndarray) -> None:
        """Convert row ``y`` to spans.

        ``out`` holds at least ``num_spans_for_width(width)`` elements.
        ``set_spans_by_fn`` may be useful to implement this method.
        """


def set_spans_by_fn(out: np.ndarray, num_pixels: int, f: Callable[[int], bool]) -> None:
    """Fill spans using a function that returns the value of each pixel."""
    i = 0
    for span_i in range(num_pixels // SPAN_BITS):
        b = 0
        for k in range(SPAN_BITS):
            b |= bool(f(i)) << k
            i += 1
        out[span_i] = b

    if num_pixels % SPAN_BITS != 0:
        b = 0
        for k in range(num_pixels % SPAN_BITS):
            b |= bool(f(i)) << k
            i += 1
        out[num_pixels // SPAN_BITS] = b


def pack_row(row: np.ndarray, out: np.ndarray) -> None:
    """Pack a 1-D boolean row into ``out`` as little-endian spans."""
    num_spans = num_spans_for_width(row.shape[0])
    packed = np.zeros(num_spans * 2, dtype=np.uint8)
    bits = np.packbits(row, bitorder='little')
    packed[:bits.shape[0]] = bits
    out[:num_spans] = packed.view('<u2')


class BinaryImageRead(ImageRead):
    """An image source over a 2-D array of truth values (nonzero = foreground)."""

    def __init__(self, mask):
        mask = np.asarray(mask)
        if mask.ndim != 2:
            raise ValueError(f"expected a 2-D array, got shape {mask.shape}")
        self.mask = mask.astype(bool, copy=False)

    def dims(self):
        h, w = self.mask.shape
        return (w, h)

    def copy_line_as_spans_to(self, y, out):
        pack_row(self.mask[y], out)


class GrayImageRead(ImageRead):
    """Binarizes an 8-bit grayscale image row by row.

    A pixel is foreground when its luma is at least ``threshold``, flipped
    when ``invert`` is set.
    """

    def __init__(self, image, threshold=128, invert=False):
        image = np.asarray(image)
        if image.ndim != 2:
            raise ValueError(f"expected a grayscale image, got shape {image.shape}")
        self.image = image
        self.threshold = threshold
        self.invert = invert

    def dims(self):
        h, w = self.image.shape
        return (w, h)

    def copy_line_as_spans_to(self, y, out):
        row = self.image[y] >= self.threshold
        if self.invert:
            row = ~row
        pack_row(row, out)
