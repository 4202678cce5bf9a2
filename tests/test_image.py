import pytest

from berquest.image import Image, convert_color

RGB565 = (11, 5, 5, 6, 0, 5)


def _color_map(x, y, w, h, kind):
    if kind == 2:
        return (y * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)
    return (x * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)


@pytest.mark.parametrize("size,kind", [((42, 42), 1), ((242, 242), 1), ((242, 242), 2)])
def test_fill_and_read_back(size, kind):
    w, h = size
    img = Image(w, h)
    expected = {}
    for y in range(h):
        for x in range(w):
            color = convert_color(_color_map(x, y, w, h, kind), 24, RGB565)
            img.set_pixel(x, y, color)
            expected[(x, y)] = color
    for (x, y), color in expected.items():
        assert img.get_pixel(x, y) == color


def test_new_image_is_black():
    img = Image(42, 42)
    assert all(all(p == 0 for p in row) for row in img.rows())


def test_rows_shape():
    img = Image(3, 2)
    img.set_pixel(2, 1, 0xFF0000)
    rows = list(img.rows())
    assert len(rows) == 2
    assert all(len(r) == 3 for r in rows)
    assert rows[1][2] == 0xFF0000


def test_data_layout():
    img = Image(42, 42)
    assert img.bits_per_pixel == 32
    assert img.size_line == 42 * 4


def test_set_pixel_truncates_to_32_bits():
    img = Image(1, 1)
    img.set_pixel(0, 0, -1)
    assert img.get_pixel(0, 0) == 0xFFFFFFFF


@pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (42, 0), (0, 42)])
def test_out_of_bounds(x, y):
    img = Image(42, 42)
    with pytest.raises(IndexError):
        img.get_pixel(x, y)
    with pytest.raises(IndexError):
        img.set_pixel(x, y, 0)


@pytest.mark.parametrize("w,h", [(0, 5), (5, 0), (-1, 3)])
def test_bad_size(w, h):
    with pytest.raises(ValueError):
        Image(w, h)


def test_convert_true_colour_unchanged():
    assert convert_color(0xFF99FF, 24, RGB565) == 0xFF99FF
    assert convert_color(0x00FFFF, 32, RGB565) == 0x00FFFF


def test_convert_rgb565():
    assert convert_color(0xFFFFFF, 16, RGB565) == 0xFFFF
    assert convert_color(0x000000, 16, RGB565) == 0
    assert convert_color(0xFF0000, 16, RGB565) == 0xF800


def test_convert_bad_shifts():
    with pytest.raises(ValueError):
        convert_color(0xFFFFFF, 16, (1, 2, 3))