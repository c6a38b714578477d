import os

import pytest
from PIL import Image

from asciiframe.charmaps import CHARS1, TELETEXT_PREFIX, Braille, Lookup, TeletextMosaic
from asciiframe.converter import image_to_ascii
from asciiframe.errors import PipelineError


def test_solid_white_maps_to_densest():
    img = Image.new("L", (30, 40), 255)
    result = image_to_ascii(img, width=3, height=2)
    assert result == "@@@" + os.linesep + "@@@"


def test_solid_black_maps_to_space():
    img = Image.new("L", (30, 40), 0)
    result = image_to_ascii(img, width=3, height=2)
    assert result == "   " + os.linesep + "   "


def test_output_dimensions():
    img = Image.new("L", (50, 60), 128)
    result = image_to_ascii(img, width=5, height=3)
    lines = result.split(os.linesep)
    assert len(lines) == 3
    assert all(len(line) == 5 for line in lines)


def test_default_width_keeps_aspect():
    img = Image.new("RGB", (160, 80), (255, 255, 255))
    lines = image_to_ascii(img).split(os.linesep)
    assert len(lines) == 20
    assert all(len(line) == 80 for line in lines)


def test_width_parameter():
    img = Image.new("L", (100, 200), 128)
    lines = image_to_ascii(img, width=5).split(os.linesep)
    assert all(len(line) == 5 for line in lines)
    assert len(lines) == 5


def test_without_new_lines():
    img = Image.new("L", (20, 20), 255)
    result = image_to_ascii(img, width=4, height=3, new_lines=False)
    assert result == "@" * 12


def test_accepts_file_path(tmp_path):
    img = Image.new("L", (20, 20), 255)
    path = tmp_path / "test.png"
    img.save(path)
    result = image_to_ascii(path, width=2, height=2)
    assert result == "@@" + os.linesep + "@@"


def test_accepts_rgb_image():
    img = Image.new("RGB", (20, 20), (255, 255, 255))
    result = image_to_ascii(img, Lookup(" #"), width=2, height=2)
    assert "#" in result


def test_braille_char_map():
    img = Image.new("L", (20, 20), 255)
    result = image_to_ascii(img, Braille(), width=2, height=1)
    assert result == chr(0x28FF) * 2


def test_gradient_produces_varying_characters():
    img = Image.new("L", (20, 10))
    pixels = img.load()
    # Left cell: black, right cell: white
    for y in range(10):
        for x in range(10):
            pixels[x, y] = 0
        for x in range(10, 20):
            pixels[x, y] = 255
    result = image_to_ascii(img, Lookup(" #"), width=2, height=1)
    assert result == " #"


def test_colour_output_contains_ansi_escapes():
    img = Image.new("RGB", (20, 20), (255, 0, 0))
    result = image_to_ascii(img, width=2, height=2, colour=True)
    assert "\033[38;2;255;0;0m" in result
    assert result.count("\033[0m") == 2
    assert result.count(os.linesep) == 1


def test_colour_false_has_no_escapes():
    img = Image.new("RGB", (20, 20), (255, 0, 0))
    result = image_to_ascii(img, width=2, height=2, colour=False)
    assert "\033" not in result


def test_colour_leaves_line_prefix_uncoloured():
    img = Image.new("RGB", (20, 20), (0, 0, 255))
    result = image_to_ascii(img, TeletextMosaic(), width=2, height=2, colour=True, new_lines=False)
    assert result.startswith(TELETEXT_PREFIX + "\033[38;2;0;0;255m")
    assert result.count(TELETEXT_PREFIX) == 2


def test_mid_gray_uses_ramp_middle():
    img = Image.new("RGB", (4, 4), (128, 128, 128))
    assert image_to_ascii(img, Lookup(CHARS1), width=1, height=1) == "+"


def test_zero_width_is_rejected():
    img = Image.new("L", (20, 20), 255)
    with pytest.raises(ValueError, match="Cannot fit"):
        image_to_ascii(img, width=0)


def test_zero_width_with_height_is_rejected():
    img = Image.new("L", (20, 20), 255)
    with pytest.raises(PipelineError):
        image_to_ascii(img, width=0, height=2)


def test_zero_height_with_width_is_rejected():
    img = Image.new("L", (20, 20), 255)
    with pytest.raises(PipelineError):
        image_to_ascii(img, width=2, height=0)


def test_file_path_input_is_closed(tmp_path, monkeypatch):
    path = tmp_path / "test.png"
    Image.new("L", (20, 20), 255).save(path)

    with Image.open(path) as opened:
        image_cls = type(opened)
    exited = []
    original_exit = image_cls.__exit__

    def recording_exit(self, *args):
        exited.append(self)
        return original_exit(self, *args)

    monkeypatch.setattr(image_cls, "__exit__", recording_exit)
    assert image_to_ascii(path, width=2, height=1) == "@@"
    assert len(exited) == 1
