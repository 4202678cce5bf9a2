import pytest

from berquest.colors import color_names, lookup_color


@pytest.mark.parametrize(
    "name, expected",
    [
        ("snow", 0xFFFAFA),
        ("ghost white", 0xF8F8FF),
        ("red", 0xFF0000),
        ("blue", 0xFF),
        ("black", 0x0),
        ("white", 0xFFFFFF),
        ("gray50", 0x7F7F7F),
        ("lightgreen", 0x90EE90),
    ],
)
def test_known_colors(name, expected):
    assert lookup_color(name) == expected


def test_none_is_transparent():
    assert lookup_color("none") == -1


@pytest.mark.parametrize("name", ["RED", "Red", "Ghost White", "NONE", "GrAy50"])
def test_lookup_ignores_case(name):
    assert lookup_color(name) == lookup_color(name.lower())


def test_first_duplicate_entry_wins():
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xFAFAD2


@pytest.mark.parametrize("name", ["", "not a colour", "gray101", "#ff0000", "red "])
def test_unknown_name_raises(name):
    with pytest.raises(KeyError):
        lookup_color(name)


def test_names_are_distinct_and_ordered():
    names = color_names()
    assert len(names) == len(set(names))
    assert names[0] == "snow"
    assert names[-1] == "none"


def test_every_listed_name_resolves():
    for name in color_names():
        value = lookup_color(name)
        assert value == -1 or 0 <= value <= 0xFFFFFF


def test_only_none_is_transparent():
    transparent = [name for name in color_names() if lookup_color(name) == -1]
    assert transparent == ["none"]


def test_gray_and_grey_spellings_agree():
    names = set(color_names())
    for level in range(101):
        assert f"gray{level}" in names
        assert lookup_color(f"gray{level}") == lookup_color(f"grey{level}")