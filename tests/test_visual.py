import pytest

from solong.visual import VisualFormat, mask_shifts

RGB565 = VisualFormat(red_mask=0xF800, green_mask=0x07E0, blue_mask=0x001F, depth=16)
RGB555 = VisualFormat(red_mask=0x7C00, green_mask=0x03E0, blue_mask=0x001F, depth=15)
TRUECOLOR = VisualFormat()

WIN1_SX = 242
WIN1_SY = 242


def _color_map_1(x, y, w, h):
    return (x * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)


@pytest.mark.parametrize("color", [0xFF99FF, 0x00FFFF, 0x11223344, 0])
def test_deep_visual_keeps_colour(color):
    assert TRUECOLOR.convert(color) == color


def test_deep_visual_keeps_colour_map():
    for x, y in [(0, 0), (10, 200), (241, 241), (120, 7)]:
        color = _color_map_1(x, y, WIN1_SX, WIN1_SY)
        assert TRUECOLOR.convert(color) == color


def test_mask_shifts_of_565_red():
    assert mask_shifts(0xF800) == (11, 5)


def test_mask_shifts_of_low_mask():
    assert mask_shifts(0xFF) == (0, 8)


def test_mask_shifts_rejects_zero():
    with pytest.raises(ValueError):
        mask_shifts(0)


def test_shifts_565():
    assert RGB565.shifts() == (11, 5, 5, 6, 0, 5)


def test_shifts_truecolor():
    assert TRUECOLOR.shifts() == (16, 8, 8, 8, 0, 8)


def test_565_white_and_black():
    assert RGB565.convert(0xFFFFFF) == 0xFFFF
    assert RGB565.convert(0x000000) == 0


def test_555_white():
    assert RGB555.convert(0xFFFFFF) == 0x7FFF


@pytest.mark.parametrize(
    "color, mask",
    [(0xFF0000, 0xF800), (0x00FF00, 0x07E0), (0x0000FF, 0x001F)],
)
def test_565_pure_channels_fill_their_mask(color, mask):
    assert RGB565.convert(color) == mask


def test_565_string_colour_from_test_program():
    assert RGB565.convert(0xFF99FF) == 0xFCDF


def test_565_colour_map_stays_within_masks():
    allowed = RGB565.red_mask | RGB565.green_mask | RGB565.blue_mask
    for x in range(0, WIN1_SX, 17):
        for y in range(0, WIN1_SY, 23):
            pixel = RGB565.convert(_color_map_1(x, y, WIN1_SX, WIN1_SY))
            assert pixel & ~allowed == 0