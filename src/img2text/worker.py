"""The part of a conversion that can run away from the caller, e.g. in a
worker thread or process.

Requests carry a plain grayscale buffer so that they can be pickled or sent
as JSON without any image library on the receiving side.
"""
import json
from dataclasses import asdict, dataclass

import numpy as np

from .glyphsets import get_glyph_set
from .image import GrayImageRead
from .scanner import Bmp2text, Bmp2textOpts, max_output_len_for_image_dims

OUTPUT_TOO_LARGE = '(output is too large)'


@dataclass
class WorkerRequest:
    gray_image: bytes
    width: int
    glyph_set: str = 'braille'
    threshold: int = 128
    invert: bool = False

    def to_json(self):
        d = asdict(self)
        d['gray_image'] = self.gray_image.hex()
        return json.dumps(d)

    @classmethod
    def from_json(cls, s):
        d = json.loads(s)
        d['gray_image'] = bytes.fromhex(d['gray_image'])
        return cls(**d)


@dataclass
class WorkerResponse:
    text: str


def rgba_to_gray(pixels_rgba) -> np.ndarray:
    """Convert interleaved RGBA bytes to 8-bit luma (alpha is ignored)."""
    rgba = np.frombuffer(bytes(pixels_rgba), dtype=np.uint8).reshape(-1, 4).astype(np.uint32)
    gray = (rgba[:, 0] * 5 + rgba[:, 1] * 6 + rgba[:, 2] * 5 + 8) // 16
    return gray.astype(np.uint8)


def worker_kernel(request: WorkerRequest) -> WorkerResponse:
    if request.width <= 0:
        raise ValueError(f"invalid image width: {request.width}")
    gray = np.frombuffer(request.gray_image, dtype=np.uint8)
    height = gray.shape[0] // request.width
    image = gray[:height * request.width].reshape(height, request.width)

    opts = Bmp2textOpts(glyph_set=get_glyph_set(request.glyph_set))
    img_proxy = GrayImageRead(image, threshold=request.threshold, invert=request.invert)
    if max_output_len_for_image_dims(img_proxy.dims(), opts) is None:
        return WorkerResponse(text=OUTPUT_TOO_LARGE)

    return WorkerResponse(text=Bmp2text().transform(img_proxy, opts))
