import pytest

from cubcaster.mapfile import (
    EMPTY,
    VOID,
    WALL,
    CubMap,
    MapError,
    is_map_line,
    load_cub,
    parse_color,
    parse_cub,
    validate_enclosed,
)

HEADER = (
    "NO ./north.xpm\n"
    "SO ./south.xpm\n"
    "WE ./west.xpm\n"
    "EA ./east.xpm\n"
    "F 220,100,0\n"
    "C 225,30,0\n"
)

SIMPLE_MAP = "111111\n100001\n10N001\n111111\n"


def scene(body, header=HEADER):
    return header + "\n" + body


def test_parse_simple_scene():
    cub = parse_cub(scene(SIMPLE_MAP))
    assert cub.north == "./north.xpm"
    assert cub.south == "./south.xpm"
    assert cub.west == "./west.xpm"
    assert cub.east == "./east.xpm"
    assert cub.floor == parse_color("220,100,0")
    assert cub.ceiling == parse_color("225,30,0")
    assert (cub.width, cub.height) == (6, 4)
    assert (cub.player_x, cub.player_y, cub.player_dir) == (2, 2, "N")
    assert cub.grid[0] == (WALL,) * 6
    assert cub.grid[2][2] == EMPTY


def test_leading_spaces_in_map_become_void():
    cub = parse_cub(scene(" 111\n11S1\n1111"))
    assert cub.grid[0] == (VOID, WALL, WALL, WALL)
    assert (cub.player_x, cub.player_y, cub.player_dir) == (2, 1, "S")


def test_short_rows_padded_with_void():
    cub = parse_cub(scene("1111\n1E01\n111"))
    assert cub.width == 4
    assert cub.grid[2] == (WALL, WALL, WALL, VOID)


def test_header_lines_may_be_indented_and_in_any_order():
    header = "  C 1,2,3\nF 4,5,6  \n\nEA e\n  WE w\nSO s\nNO n\n"
    cub = parse_cub(scene("111\n1W1\n111", header))
    assert cub.ceiling == parse_color("1,2,3")
    assert cub.floor == parse_color("4,5,6")
    assert cub.west == "w"


def test_trailing_blank_lines_allowed():
    cub = parse_cub(scene(SIMPLE_MAP + "\n\n   \n"))
    assert cub.height == 4


def test_blank_line_inside_map_rejected():
    with pytest.raises(MapError, match="Invalid map"):
        parse_cub(scene("111\n1N1\n\n111"))


def test_map_line_before_header_complete_rejected():
    header = HEADER.replace("C 225,30,0\n", "")
    with pytest.raises(MapError, match="Invalid parameter"):
        parse_cub(scene(SIMPLE_MAP, header))


def test_black_colour_counts_as_unset():
    header = HEADER.replace("F 220,100,0", "F 0,0,0")
    with pytest.raises(MapError, match="Invalid parameter"):
        parse_cub(scene(SIMPLE_MAP, header))


def test_duplicate_parameter_rejected():
    with pytest.raises(MapError, match="Invalid parameter"):
        parse_cub("NO a\nNO b\n")


def test_parameter_with_wrong_word_count_rejected():
    with pytest.raises(MapError, match="Invalid parameter"):
        parse_cub("NO a b\n")


def test_unknown_line_rejected():
    with pytest.raises(MapError, match="Invalid parameter"):
        parse_cub(scene("111\n1X1\n111"))


def test_missing_map_rejected():
    with pytest.raises(MapError, match="Invalid map"):
        parse_cub(HEADER)


def test_missing_player_rejected():
    with pytest.raises(MapError, match="Invalid map"):
        parse_cub(scene("111\n101\n111"))


def test_two_players_rejected():
    with pytest.raises(MapError, match="Invalid map"):
        parse_cub(scene("1111\n1NS1\n1111"))


def test_open_map_rejected():
    with pytest.raises(MapError, match="Invalid map"):
        parse_cub(scene("1111\n1N01\n1101"))


def test_open_cell_next_to_void_rejected():
    with pytest.raises(MapError, match="Invalid map"):
        parse_cub(scene("1111\n1N 1\n1111"))


@pytest.mark.parametrize("rgb", [(0, 0, 0), (255, 255, 255), (12, 200, 7)])
def test_parse_color_components(rgb):
    red, green, blue = rgb
    value = parse_color(f"{red},{green},{blue}")
    assert (value >> 16 & 0xFF, value >> 8 & 0xFF, value & 0xFF) == rgb


def test_parse_color_skips_empty_parts_and_leading_zeros():
    assert parse_color("1,,2,3") == parse_color("1,2,3")
    assert parse_color("000255,0,0") == parse_color("255,0,0")


@pytest.mark.parametrize("text", ["256,0,0", "1,2", "1,2,3,4", "a,b,c", "-1,0,0", "1, 2,3"])
def test_parse_color_rejects(text):
    with pytest.raises(MapError, match="Invalid color"):
        parse_color(text)


@pytest.mark.parametrize(
    "line, expected",
    [("1 0 N", True), ("10SWE", True), ("", True), ("1x1", False), ("1\t1", False)],
)
def test_is_map_line(line, expected):
    assert is_map_line(line) is expected


def test_validate_enclosed_returns_open_cells():
    grid = ((1, 1, 1, 1), (1, 0, 0, 1), (1, 1, 1, 1))
    assert validate_enclosed(grid, 4, 3) == frozenset({(1, 1), (2, 1)})


def test_validate_enclosed_rejects_edge_cell():
    grid = ((1, 1, 1), (1, 0, 0), (1, 1, 1))
    with pytest.raises(MapError, match="Invalid map"):
        validate_enclosed(grid, 3, 3)


def test_validate_enclosed_rejects_void_neighbour():
    grid = ((1, 1, 1, 1), (1, 0, 2, 1), (1, 1, 1, 1))
    with pytest.raises(MapError, match="Invalid map"):
        validate_enclosed(grid, 4, 3)


def test_is_inside():
    cub = parse_cub(scene(SIMPLE_MAP))
    assert cub.is_inside(0, 0)
    assert cub.is_inside(5, 3)
    assert not cub.is_inside(6, 0)
    assert not cub.is_inside(0, 4)
    assert not cub.is_inside(-1, 2)


def test_load_cub_reads_file(tmp_path):
    path = tmp_path / "level.cub"
    path.write_text(scene(SIMPLE_MAP))
    cub = load_cub(path)
    assert isinstance(cub, CubMap)
    assert cub == parse_cub(scene(SIMPLE_MAP))


def test_load_cub_wrong_extension(tmp_path):
    path = tmp_path / "level.txt"
    path.write_text(scene(SIMPLE_MAP))
    with pytest.raises(MapError, match="Invalid file extension"):
        load_cub(path)


def test_load_cub_missing_file(tmp_path):
    with pytest.raises(MapError, match="Failed to open file"):
        load_cub(tmp_path / "absent.cub")