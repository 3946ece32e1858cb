import argparse
import logging
import os
import shutil
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import cv2
import numpy as np

from .charsets import DEFAULT_GLYPH_SET
from .glyphsets import GLYPH_SETS, get_glyph_set
from .image import GrayImageRead
from .otsu import accumulate_histogram, equalization_map, find_threshold, median
from .scanner import (
    Bmp2text,
    Bmp2textOpts,
    max_output_len_for_image_dims,
    num_glyphs_for_image_width,
    num_lines_for_image_height,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

DEFAULT_CELL_WIDTH = 0.45
DEFAULT_THRESHOLD = 128
DEFAULT_CANNY_LOW_THRESHOLD = 10.0
DEFAULT_CANNY_HIGH_THRESHOLD = 20.0
MAX_CANNY_THRESHOLD = 1150.0
INPUT_TYPES = ('auto', 'wob', 'bow', 'edge-canny')
MAX_IMAGE_DIM = 2 ** 31 - 1


@dataclass(frozen=True)
class AbsoluteSize:
    """Output size in character cells.

    ``mode`` is ``'contain'`` (fit, upscaling as necessary), ``'fill'`` (exact,
    ignoring the aspect ratio) or ``'scale_down'`` (fit, only downscaling).
    """
    dims: Tuple[int, int]
    mode: str = 'contain'


@dataclass(frozen=True)
class RelativeSize:
    ratio: float


SizeSpec = Union[AbsoluteSize, RelativeSize]


def parse_size_spec(s: str) -> SizeSpec:
    """Parse ``80``, ``80x40``, ``-80x40``, ``80x40!`` or ``150%``."""
    if s.endswith('%'):
        rest = s[:-1]
        try:
            ratio = float(rest) / 100.0
        except ValueError:
            raise argparse.ArgumentTypeError(f"bad ratio: '{rest}'")
        if not np.isfinite(ratio) or ratio < 0.0:
            raise argparse.ArgumentTypeError(f"ratio out of range: '{rest}'")
        return RelativeSize(ratio)

    force = s.endswith('!')
    if force:
        s = s[:-1]
    scale_down = s.startswith('-')
    if scale_down:
        s = s[1:]
    if force and scale_down:
        raise argparse.ArgumentTypeError("cannot specify both `!` and `-`")

    if 'x' in s:
        width, height = s.split('x', 1)
        dims = (_parse_cells(width, 'width'), _parse_cells(height, 'height'))
    else:
        size = _parse_cells(s, 'size')
        dims = (size, size)

    if force:
        mode = 'fill'
    elif scale_down:
        mode = 'scale_down'
    else:
        mode = 'contain'
    return AbsoluteSize(dims, mode)


def _parse_cells(s, what):
    if not s.isdigit():
        raise argparse.ArgumentTypeError(f"bad {what}: '{s}'")
    return int(s)


def parse_threshold(s: str):
    if s in ('otsu', 'median'):
        return s
    try:
        value = int(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"bad threshold: '{s}'")
    if not 0 <= value <= 256:
        raise argparse.ArgumentTypeError(f"threshold out of range: '{s}'")
    return value


@dataclass
class ConvertOptions:
    glyph_set: str = DEFAULT_GLYPH_SET
    cell_width: float = DEFAULT_CELL_WIDTH
    out_size: Optional[SizeSpec] = None
    input_type: str = 'auto'
    canny_low_threshold: float = DEFAULT_CANNY_LOW_THRESHOLD
    canny_high_threshold: float = DEFAULT_CANNY_HIGH_THRESHOLD
    threshold: Union[str, int] = 'otsu'
    equalize: bool = False

    def validate(self):
        get_glyph_set(self.glyph_set)
        if self.input_type not in INPUT_TYPES:
            raise ValueError(f"unknown input type: '{self.input_type}'")
        if not np.isfinite(self.cell_width) or self.cell_width <= 0.1 or self.cell_width > 10.0:
            raise ValueError("cell_width is out of range")
        for name in ('canny_low_threshold', 'canny_high_threshold'):
            value = getattr(self, name)
            if not np.isfinite(value) or value <= 0.0 or value > MAX_CANNY_THRESHOLD:
                raise ValueError(f"{name} is out of range")
        if self.canny_low_threshold > self.canny_high_threshold:
            raise ValueError("canny_low_threshold mustn't be greater than canny_high_threshold")


def get_input_dims(size_spec: SizeSpec, img_w, img_h, b2t_opts, cell_width=DEFAULT_CELL_WIDTH):
    """Calculate the image size that makes the output match ``size_spec``."""
    if isinstance(size_spec, RelativeSize):
        w = img_w * size_spec.ratio
        h = img_h * size_spec.ratio
        if w > MAX_IMAGE_DIM or h > MAX_IMAGE_DIM:
            raise ValueError("requested size is too large")
        return int(w), int(h)

    mask_dims = b2t_opts.glyph_set.mask_dims()
    mask_overlap = b2t_opts.glyph_set.mask_overlap()
    step_x = mask_dims[0] - mask_overlap[0]
    step_y = mask_dims[1] - mask_overlap[1]

    if size_spec.mode == 'fill':
        out_dims = size_spec.dims
    else:
        # Calculate the "natural" size
        nat_out_w = num_glyphs_for_image_width(img_w, b2t_opts)
        nat_out_h = num_lines_for_image_height(img_h, b2t_opts)
        aspect = step_y / step_x * cell_width
        nat_w = nat_out_w / max(aspect, 1.0)
        nat_h = nat_out_h * min(aspect, 1.0)
        logger.debug("'natural' output size = %s", (nat_w, nat_h))

        scale_x = size_spec.dims[0] / nat_w if nat_w > 0 else float('inf')
        scale_y = size_spec.dims[1] / nat_h if nat_h > 0 else float('inf')
        scale = min(scale_x, scale_y)
        if size_spec.mode == 'scale_down':
            scale = min(scale, 1.0)
        if not np.isfinite(scale):
            scale = 1.0
        logger.debug("scaling the 'natural' output size by %s...", scale)
        out_dims = (round(nat_w * scale), round(nat_h * scale))

    logger.debug("output size goal = %s", out_dims)
    in_dims = (out_dims[0] * step_x + mask_overlap[0], out_dims[1] * step_y + mask_overlap[1])
    if max(in_dims) > MAX_IMAGE_DIM:
        raise ValueError("requested size is too large")
    return in_dims


def get_terminal_size_spec() -> Optional[AbsoluteSize]:
    """Downscale to the terminal if stdout is one."""
    if not sys.stdout.isatty():
        return None
    term_width, term_height = shutil.get_terminal_size()
    if term_width <= 0 or term_height <= 0:
        return None
    term_height = max(term_height - 3, 0)
    logger.info("downscaling to `%dx%d` (tty size minus some) because stdout is tty, "
                "and `-s` is unspecified", term_width, term_height)
    return AbsoluteSize((term_width, term_height), 'scale_down')


def load_gray_image(path) -> np.ndarray:
    gray = cv2.imread(os.fspath(path), cv2.IMREAD_GRAYSCALE)
    if gray is None:
        raise ValueError(f"Cannot open image file '{path}'")
    return gray


def choose_threshold(histogram, mode) -> int:
    if mode == 'median':
        return median(histogram)
    if mode != 'otsu':
        return mode
    threshold = find_threshold(histogram)
    if threshold is None:
        logger.debug("couldn't find the threshold, using the default value %d", DEFAULT_THRESHOLD)
        return DEFAULT_THRESHOLD
    logger.debug("threshold = %d", threshold)
    return threshold


def convert_gray(gray: np.ndarray, options: ConvertOptions, converter: Optional[Bmp2text] = None) -> str:
    """Convert an 8-bit grayscale image to text art."""
    b2t_opts = Bmp2textOpts(glyph_set=get_glyph_set(options.glyph_set))

    if options.out_size is not None:
        img_h, img_w = gray.shape
        in_w, in_h = get_input_dims(options.out_size, img_w, img_h, b2t_opts, options.cell_width)
        in_w, in_h = max(in_w, 1), max(in_h, 1)
        logger.debug("resampling the image from %s to %s", (img_w, img_h), (in_w, in_h))
        gray = cv2.resize(gray, (in_w, in_h), interpolation=cv2.INTER_CUBIC)

    logger.debug(
        "expected output size for image of size %s is %s",
        (gray.shape[1], gray.shape[0]),
        (num_glyphs_for_image_width(gray.shape[1], b2t_opts),
         num_lines_for_image_height(gray.shape[0], b2t_opts)),
    )

    if options.equalize:
        lut = equalization_map(accumulate_histogram(gray))
        gray = cv2.LUT(gray, lut)

    histogram = accumulate_histogram(gray)
    threshold = choose_threshold(histogram, options.threshold)

    # black-on-white/white-on-black detection
    if options.input_type == 'bow':
        invert = True
    elif options.input_type == 'wob':
        invert = False
    elif options.input_type == 'auto':
        invert = int(histogram[threshold:].sum()) > int(histogram[:threshold].sum())
    else:
        gray = cv2.Canny(gray, options.canny_low_threshold, options.canny_high_threshold)
        invert = False

    img_proxy = GrayImageRead(gray, threshold=threshold, invert=invert)
    if max_output_len_for_image_dims(img_proxy.dims(), b2t_opts) is None:
        raise ValueError("image is too large")

    return (converter or Bmp2text()).transform(img_proxy, b2t_opts)


def convert_image(path, options: ConvertOptions) -> str:
    return convert_gray(load_gray_image(path), options)


def convert_many(paths, options: ConvertOptions, max_workers=4):
    """Convert several images concurrently. Results are in input order."""
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(lambda path: convert_image(path, options), paths))


def setup_logging(verbose=False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def build_parser():
    parser = argparse.ArgumentParser(description='Convert images to Unicode text art')
    parser.add_argument('input_files', nargs='+', metavar='FILE', help='The image(s) to process')
    parser.add_argument('-o', '--output', help='Output text file path (default: standard output)')
    parser.add_argument('-g', '--glyph-set', choices=GLYPH_SETS.keys(), default=DEFAULT_GLYPH_SET,
                        help=f'The glyph set to use (default: {DEFAULT_GLYPH_SET})')
    parser.add_argument('-w', '--cell-width', type=float, default=DEFAULT_CELL_WIDTH,
                        help='The width of output characters, only used when -s is given '
                             f'without ! (default: {DEFAULT_CELL_WIDTH})')
    parser.add_argument('-s', '--size', type=parse_size_spec, dest='out_size',
                        help='The output size, measured in character cells or percents '
                             '(e.g., 80, 80x40, 80x40!, -80x40, 100%%) '
                             '(default: downscale to terminal size if the output is a '
                             'terminal, 100%% otherwise)')
    parser.add_argument('-i', '--input-type', choices=INPUT_TYPES, default='auto',
                        help='How to interpret the input image: automatic detection, '
                             'white-on-black, black-on-white or Canny edge detection '
                             '(default: auto)')
    parser.add_argument('--canny-low-threshold', type=float, default=DEFAULT_CANNY_LOW_THRESHOLD,
                        help='Edges stronger than this appear if there are strong edges nearby '
                             f'(default: {DEFAULT_CANNY_LOW_THRESHOLD})')
    parser.add_argument('--canny-high-threshold', type=float, default=DEFAULT_CANNY_HIGH_THRESHOLD,
                        help='Edges stronger than this always appear '
                             f'(default: {DEFAULT_CANNY_HIGH_THRESHOLD})')
    parser.add_argument('-t', '--threshold', type=parse_threshold, default='otsu',
                        help='Binarization threshold: otsu, median or a luma value (default: otsu)')
    parser.add_argument('--equalize', action='store_true',
                        help='Equalize the histogram before binarization')
    parser.add_argument('-j', '--jobs', type=int, default=4,
                        help='Number of images converted in parallel (default: 4)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    logger.debug("args = %s", args)

    for input_file in args.input_files:
        if not os.path.exists(input_file):
            print(f"Error: File '{input_file}' not found", file=sys.stderr)
            sys.exit(1)

    out_size = args.out_size
    if out_size is None and args.output is None:
        out_size = get_terminal_size_spec()

    options = ConvertOptions(
        glyph_set=args.glyph_set,
        cell_width=args.cell_width,
        out_size=out_size,
        input_type=args.input_type,
        canny_low_threshold=args.canny_low_threshold,
        canny_high_threshold=args.canny_high_threshold,
        threshold=args.threshold,
        equalize=args.equalize,
    )
    try:
        options.validate()
        texts = convert_many(args.input_files, options, max_workers=max(args.jobs, 1))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if len(texts) > 1:
        width = max(len(line) for text in texts for line in text.split('\n'))
        separator = "=" * width + "\n"
        output = separator.join(texts)
    else:
        output = texts[0]

    if args.output:
        with open(args.output, "w", encoding='utf-8') as f:
            f.write(output)
        logger.info("Text saved to %s", args.output)
    else:
        sys.stdout.write(output)
        sys.stdout.flush()


if __name__ == "__main__":
    main()
