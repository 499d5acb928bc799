import pytest

from cub3d.image import Image


def test_new_image_is_zeroed():
    image = Image(3, 2)
    assert image.to_bytes() == bytes(image.size_line * image.height)
    assert image.get_pixel(2, 1) == 0


def test_size_line_matches_width():
    image = Image(5, 4)
    assert image.size_line == image.width * image.bpp // 8
    assert len(image.to_bytes()) == image.size_line * image.height


@pytest.mark.parametrize("color", [0, 0xFF0000, 0x00FF00, 0x0000FF, 0xFF000000, 0xFFFFFFFF])
def test_put_get_round_trip(color):
    image = Image(4, 4)
    image.put_pixel(3, 2, color)
    assert image.get_pixel(3, 2) == color


def test_pixels_are_little_endian():
    image = Image(2, 1)
    image.put_pixel(0, 0, 0x11223344)
    assert image.to_bytes()[:4] == b"\x44\x33\x22\x11"


def test_pixel_position_in_buffer():
    image = Image(3, 3)
    image.put_pixel(1, 2, 0xFFFFFFFF)
    data = image.to_bytes()
    offset = 2 * image.size_line + 1 * 4
    assert data[offset:offset + 4] == b"\xff" * 4
    assert data.count(0xFF) == 4


def test_negative_color_is_masked():
    image = Image(1, 1)
    image.put_pixel(0, 0, -1)
    assert image.get_pixel(0, 0) == 0xFFFFFFFF


def test_to_bytes_is_a_copy():
    image = Image(1, 1)
    snapshot = image.to_bytes()
    image.put_pixel(0, 0, 0xFF)
    assert snapshot == bytes(4)
    assert image.to_bytes() != snapshot


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (2, 0), (0, 2)])
def test_out_of_range_raises(x, y):
    image = Image(2, 2)
    with pytest.raises(IndexError):
        image.get_pixel(x, y)
    with pytest.raises(IndexError):
        image.put_pixel(x, y, 0)


@pytest.mark.parametrize("width, height", [(0, 1), (1, 0), (-3, 2)])
def test_invalid_size_raises(width, height):
    with pytest.raises(ValueError):
        Image(width, height)