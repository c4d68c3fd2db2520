import pytest

from cubcaster.colors import lookup_color


@pytest.mark.parametrize(
    "name, expected",
    [
        ("red", 0xFF0000),
        ("snow", 0xFFFAFA),
        ("ghost white", 0xF8F8FF),
        ("navy", 0x80),
        ("white", 0xFFFFFF),
        ("black", 0x0),
        ("lightgreen", 0x90EE90),
    ],
)
def test_known_colours(name, expected):
    assert lookup_color(name) == expected


def test_none_is_transparent_marker():
    assert lookup_color("none") == -1


def test_lookup_ignores_case():
    assert lookup_color("RED") == lookup_color("red")
    assert lookup_color("Ghost White") == lookup_color("ghost white")
    assert lookup_color("NoNe") == -1


def test_first_duplicate_entry_wins():
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("light goldenrod") == 0xFAFAD2
    assert lookup_color("light slate") == 0x778899


def test_unknown_name_raises():
    with pytest.raises(KeyError):
        lookup_color("not a colour")


def test_surrounding_whitespace_is_not_ignored():
    with pytest.raises(KeyError):
        lookup_color("red ")


@pytest.mark.parametrize("level", range(101))
def test_gray_and_grey_spellings_agree(level):
    assert lookup_color(f"gray{level}") == lookup_color(f"grey{level}")


def test_gray_ramp_is_monotonic_and_neutral():
    values = [lookup_color(f"gray{level}") for level in range(101)]
    assert values == sorted(values)
    assert values[0] == lookup_color("black")
    assert values[-1] == lookup_color("white")
    for value in values:
        r, g, b = (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF
        assert r == g == b


@pytest.mark.parametrize("base", ["red", "green", "blue", "yellow", "magenta", "cyan"])
def test_numbered_variant_one_matches_base(base):
    assert lookup_color(f"{base}1") == lookup_color(base)


@pytest.mark.parametrize("base", ["snow", "orange", "gold", "tomato", "orchid"])
def test_numbered_variants_fit_in_24_bits(base):
    for suffix in "1234":
        value = lookup_color(f"{base}{suffix}")
        assert 0 <= value <= 0xFFFFFF


def test_spaced_and_joined_names_agree():
    assert lookup_color("alice blue") == lookup_color("aliceblue")
    assert lookup_color("dark orange") == lookup_color("darkorange")
    assert lookup_color("medium purple") == lookup_color("mediumpurple")