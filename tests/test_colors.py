import pytest

from solong.colors import NAMED_COLORS, lookup_color, text_to_rgb


@pytest.mark.parametrize(
    "name, expected",
    [
        ("snow", 0xfffafa),
        ("red", 0xff0000),
        ("black", 0x0),
        ("navy", 0x80),
        ("lightgoldenrodyellow", 0xfafad2),
        ("none", -1),
    ],
)
def test_lookup_known_names(name, expected):
    assert lookup_color(name) == expected


def test_lookup_is_case_insensitive():
    assert lookup_color("SNOW") == lookup_color("snow")
    assert lookup_color("Ghost White") == 0xf8f8ff


def test_lookup_unknown_name_is_none():
    assert lookup_color("no such colour") is None


def test_duplicate_names_use_first_entry():
    assert lookup_color("dark slate") == 0x2f4f4f
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xfafad2


def test_every_table_name_resolves_to_some_entry_value():
    for name, _ in NAMED_COLORS:
        value = lookup_color(name)
        candidates = {v for n, v in NAMED_COLORS if n.lower() == name.lower()}
        assert value in candidates


def test_gray_and_grey_levels_agree():
    for level in range(101):
        assert lookup_color(f"gray{level}") == lookup_color(f"grey{level}")


def test_text_hex_spec():
    assert text_to_rgb("#ff0000", None) == 0xff0000
    assert text_to_rgb("#FFFFFF", None) == 0xffffff


def test_text_hex_spec_ignores_following_word():
    assert text_to_rgb("#0000ff", "blue") == 0xff


def test_text_hex_spec_stops_at_invalid_digit():
    assert text_to_rgb("#ffzz", None) == 0xff
    assert text_to_rgb("#zz", None) == 0


def test_text_named_color():
    assert text_to_rgb("white", None) == 0xffffff
    assert text_to_rgb("None", None) == -1


def test_text_joins_two_words():
    assert text_to_rgb("navy", "blue") == 0x80
    assert text_to_rgb("ghost", "white") == 0xf8f8ff


def test_text_unknown_name_is_zero():
    assert text_to_rgb("unknowncolour", None) == 0
    assert text_to_rgb("red", "extra") == 0


def test_text_combined_name_is_truncated():
    long_word = "x" * 100
    assert text_to_rgb("snow", long_word) == 0