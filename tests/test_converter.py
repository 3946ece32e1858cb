import argparse

import cv2
import numpy as np
import pytest

from img2text.converter import (
    AbsoluteSize,
    ConvertOptions,
    RelativeSize,
    convert_gray,
    convert_many,
    get_input_dims,
    main,
    parse_size_spec,
    parse_threshold,
)
from img2text.glyphsets import get_glyph_set
from img2text.scanner import Bmp2textOpts


@pytest.mark.parametrize("s, expected", [
    ("80", AbsoluteSize((80, 80), 'contain')),
    ("80x40", AbsoluteSize((80, 40), 'contain')),
    ("-80x40", AbsoluteSize((80, 40), 'scale_down')),
    ("80x40!", AbsoluteSize((80, 40), 'fill')),
    ("150%", RelativeSize(1.5)),
])
def test_parse_size_spec(s, expected):
    assert parse_size_spec(s) == expected


@pytest.mark.parametrize("s", ["-80x40!", "abc", "80xq", "x%", "-5%", ""])
def test_parse_size_spec_errors(s):
    with pytest.raises(argparse.ArgumentTypeError):
        parse_size_spec(s)


def test_parse_threshold():
    assert parse_threshold('otsu') == 'otsu'
    assert parse_threshold('median') == 'median'
    assert parse_threshold('100') == 100
    with pytest.raises(argparse.ArgumentTypeError):
        parse_threshold('300')
    with pytest.raises(argparse.ArgumentTypeError):
        parse_threshold('dark')


def test_get_input_dims_fill():
    slc = Bmp2textOpts(glyph_set=get_glyph_set('slc'))
    ms = Bmp2textOpts(glyph_set=get_glyph_set('ms2x3'))
    assert get_input_dims(AbsoluteSize((10, 5), 'fill'), 100, 100, slc) == (30, 15)
    assert get_input_dims(AbsoluteSize((10, 5), 'fill'), 100, 100, ms) == (11, 11)


def test_get_input_dims_relative():
    opts = Bmp2textOpts()
    assert get_input_dims(RelativeSize(0.5), 100, 40, opts) == (50, 20)
    with pytest.raises(ValueError):
        get_input_dims(RelativeSize(1e12), 100, 40, opts)


def test_get_input_dims_scale_down_never_upscales():
    opts = Bmp2textOpts(glyph_set=get_glyph_set('2x2'))
    # 2x2 cells with a cell width of 1.0 keep the natural size square
    dims = get_input_dims(AbsoluteSize((1000, 1000), 'scale_down'), 40, 20, opts, cell_width=1.0)
    assert dims == (40, 20)
    dims = get_input_dims(AbsoluteSize((10, 10), 'scale_down'), 40, 20, opts, cell_width=1.0)
    assert dims == (20, 10)


def test_get_input_dims_too_large():
    with pytest.raises(ValueError):
        get_input_dims(AbsoluteSize((2 ** 40, 1), 'fill'), 10, 10, Bmp2textOpts())


def test_convert_white_on_black():
    gray = np.zeros((4, 4), dtype=np.uint8)
    gray[:, :2] = 255
    options = ConvertOptions(glyph_set='2x2', input_type='wob', threshold=128)
    assert convert_gray(gray, options) == "█ \n█ \n"


def test_convert_detects_black_on_white():
    gray = np.full((4, 4), 255, dtype=np.uint8)
    gray[:2, :2] = 0
    options = ConvertOptions(glyph_set='2x2')
    assert convert_gray(gray, options) == "█ \n  \n"


def test_convert_forced_black_on_white():
    gray = np.zeros((2, 2), dtype=np.uint8)
    options = ConvertOptions(glyph_set='2x2', input_type='bow', threshold=128)
    assert convert_gray(gray, options) == "█\n"


def test_convert_uniform_image_falls_back_to_default_threshold():
    gray = np.full((2, 4), 200, dtype=np.uint8)
    options = ConvertOptions(glyph_set='2x2', input_type='wob')
    assert convert_gray(gray, options) == "██\n"


def test_convert_edge_canny():
    gray = np.zeros((20, 20), dtype=np.uint8)
    gray[5:15, 5:15] = 255
    options = ConvertOptions(glyph_set='1x1', input_type='edge-canny')
    lines = convert_gray(gray, options).splitlines()
    assert len(lines) == 20
    # Only the square's outline survives, its interior is blank
    assert lines[10][10] == " "
    assert "█" in ''.join(lines)


def test_convert_resizes_to_requested_size():
    gray = np.zeros((30, 60), dtype=np.uint8)
    options = ConvertOptions(glyph_set='slc', out_size=AbsoluteSize((7, 3), 'fill'))
    lines = convert_gray(gray, options).splitlines()
    assert len(lines) == 3
    assert all(len(line) == 7 for line in lines)


def test_convert_with_equalization():
    gray = np.full((4, 4), 100, dtype=np.uint8)
    gray[:, 2:] = 101
    options = ConvertOptions(glyph_set='2x2', input_type='wob', threshold=128, equalize=True)
    assert convert_gray(gray, options) == " █\n █\n"


@pytest.mark.parametrize("kwargs", [
    {'cell_width': 0.05},
    {'cell_width': 11.0},
    {'canny_low_threshold': 0.0},
    {'canny_high_threshold': 2000.0},
    {'canny_low_threshold': 30.0, 'canny_high_threshold': 20.0},
    {'input_type': 'sideways'},
])
def test_invalid_options(kwargs):
    with pytest.raises(ValueError):
        ConvertOptions(**kwargs).validate()


def test_convert_many_keeps_order(tmp_path):
    paths = []
    for i, value in enumerate((0, 255)):
        path = tmp_path / f"img{i}.png"
        cv2.imwrite(str(path), np.full((2, 2), value, dtype=np.uint8))
        paths.append(str(path))
    options = ConvertOptions(glyph_set='2x2', input_type='wob', threshold=128)
    assert convert_many(paths, options, max_workers=2) == [" \n", "█\n"]


def test_main_writes_output_file(tmp_path):
    gray = np.zeros((4, 4), dtype=np.uint8)
    gray[:, :2] = 255
    image_path = tmp_path / "in.png"
    cv2.imwrite(str(image_path), gray)
    out_path = tmp_path / "out.txt"

    main([str(image_path), '-g', '2x2', '-i', 'wob', '-t', '128', '-s', '100%',
          '-o', str(out_path)])

    assert out_path.read_text(encoding='utf-8') == "█ \n█ \n"


def test_main_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "missing.png"), '-o', str(tmp_path / "out.txt")])
    assert excinfo.value.code == 1
    assert "not found" in capsys.readouterr().err


def test_main_unreadable_image(tmp_path, capsys):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not an image")
    with pytest.raises(SystemExit) as excinfo:
        main([str(path), '-o', str(tmp_path / "out.txt")])
    assert excinfo.value.code == 1
    assert "Cannot open image file" in capsys.readouterr().err
