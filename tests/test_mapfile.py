from pathlib import Path

import pytest

from berquest.mapfile import (
    GameMap,
    MapError,
    check_characters,
    check_extension,
    check_reachable,
    check_rectangular,
    check_walls,
    count_items,
    flood_fill,
    load_map,
    locate,
    read_map,
)

VALID = "1111111\n1P0C0E1\n1111111\n"


def write(tmp_path: Path, content: str, name: str = "map.ber") -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="latin-1", newline="")
    return path


def test_load_valid_map(tmp_path):
    game_map = load_map(write(tmp_path, VALID))
    assert isinstance(game_map, GameMap)
    assert game_map.rows == tuple(VALID.splitlines())
    assert game_map.rows[game_map.player[0]][game_map.player[1]] == "P"
    assert game_map.rows[game_map.exit[0]][game_map.exit[1]] == "E"
    assert game_map.collectibles == VALID.count("C")
    assert game_map.height == len(VALID.splitlines())
    assert game_map.width == len(VALID.splitlines()[0])


def test_load_map_with_several_collectibles(tmp_path):
    content = "111111\n1PCC01\n10C0E1\n111111\n"
    game_map = load_map(write(tmp_path, content))
    assert game_map.collectibles == content.count("C")


def test_missing_file_is_wrong_file(tmp_path):
    with pytest.raises(MapError, match="Wrong file"):
        load_map(tmp_path / "absent.ber")


def test_directory_is_wrong_file(tmp_path):
    folder = tmp_path / "maps.ber"
    folder.mkdir()
    with pytest.raises(MapError, match="Wrong file"):
        load_map(folder)


def test_wrong_extension(tmp_path):
    with pytest.raises(MapError, match="extension '.ber'"):
        load_map(write(tmp_path, VALID, "map.txt"))


def test_open_checked_before_extension(tmp_path):
    with pytest.raises(MapError, match="Wrong file"):
        load_map(tmp_path / "absent.txt")


def test_extension_checked_before_emptiness(tmp_path):
    with pytest.raises(MapError, match="extension"):
        load_map(write(tmp_path, "", "empty.txt"))


def test_empty_map(tmp_path):
    with pytest.raises(MapError, match="the map is empty"):
        load_map(write(tmp_path, ""))


def test_not_rectangular(tmp_path):
    with pytest.raises(MapError, match="isn't rectangular"):
        load_map(write(tmp_path, "1111111\n1P0C0E1\n11111\n"))


def test_last_line_without_newline_is_not_rectangular(tmp_path):
    with pytest.raises(MapError, match="isn't rectangular"):
        load_map(write(tmp_path, VALID.rstrip("\n")))


def test_open_wall(tmp_path):
    with pytest.raises(MapError, match="must be enclosed"):
        load_map(write(tmp_path, "1111111\n0P0C0E1\n1111111\n"))


def test_open_top(tmp_path):
    with pytest.raises(MapError, match="must be enclosed"):
        load_map(write(tmp_path, "1110111\n1P0C0E1\n1111111\n"))


def test_wrong_character(tmp_path):
    with pytest.raises(MapError, match="wrong Characters"):
        load_map(write(tmp_path, "1111111\n1P0X0E1\n1C00001\n1111111\n"))


def test_two_players(tmp_path):
    with pytest.raises(MapError, match="not the only one"):
        load_map(write(tmp_path, "1111111\n1PPC0E1\n1111111\n"))


def test_no_exit(tmp_path):
    with pytest.raises(MapError, match="not the only one"):
        load_map(write(tmp_path, "1111111\n1P0C001\n1111111\n"))


def test_no_collectible(tmp_path):
    with pytest.raises(MapError, match="at least 1 collection item"):
        load_map(write(tmp_path, "1111111\n1P000E1\n1111111\n"))


def test_unreachable_collectible(tmp_path):
    with pytest.raises(MapError, match="unreachable Items"):
        load_map(write(tmp_path, "11111\n1P1C1\n1E111\n11111\n"))


def test_unreachable_exit(tmp_path):
    with pytest.raises(MapError, match="unreachable Items"):
        load_map(write(tmp_path, "11111\n1PC11\n11101\n111E1\n11111\n"))


def test_read_map_keeps_line_terminators(tmp_path):
    lines = read_map(write(tmp_path, VALID))
    assert "".join(lines) == VALID
    assert all(line.endswith("\n") for line in lines)


def test_read_map_keeps_carriage_returns(tmp_path):
    content = VALID.replace("\n", "\r\n")
    assert "".join(read_map(write(tmp_path, content))) == content


def test_carriage_returns_are_wrong_characters(tmp_path):
    with pytest.raises(MapError, match="wrong Characters"):
        load_map(write(tmp_path, VALID.replace("\n", "\r\n")))


@pytest.mark.parametrize("name", ["map.txt", "map.be", "mapber", "map.ber.bak"])
def test_check_extension_rejects(name):
    with pytest.raises(MapError, match="extension"):
        check_extension(name)


def test_check_extension_returns_path():
    assert check_extension("maps/level.ber") == Path("maps/level.ber")


def test_check_rectangular_rejects_ragged():
    with pytest.raises(MapError, match="rectangular"):
        check_rectangular(["111\n", "11\n"])


def test_check_walls_rejects_missing_side():
    with pytest.raises(MapError, match="enclosed"):
        check_walls(["111", "10P", "111"])


def test_check_characters_rejects_space():
    with pytest.raises(MapError, match="wrong Characters"):
        check_characters(["111", "1 1", "111"])


def test_count_items_counts():
    rows = ["11111", "1PCC1", "1CE01", "11111"]
    counts = count_items(rows)
    assert counts.players == 1
    assert counts.exits == 1
    assert counts.collectibles == sum(row.count("C") for row in rows)


def test_locate_returns_last_occurrence():
    assert locate(["P0P"], "P") == (0, 2)


def test_locate_missing_raises():
    with pytest.raises(ValueError):
        locate(["111"], "E")


def test_flood_fill_marks_reachable_area():
    rows = ("11111", "1P0C1", "11111")
    filled = flood_fill(rows, (1, 1))
    assert all(set(row) == {"1"} for row in filled)
    assert rows == ("11111", "1P0C1", "11111")


def test_flood_fill_leaves_separate_area():
    rows = ("11111", "1P1C1", "11111")
    filled = flood_fill(rows, (1, 1))
    assert filled[1][3] == "C"
    assert filled[1][1] == "1"


def test_flood_fill_from_wall_changes_nothing():
    rows = ("111", "1P1", "111")
    assert flood_fill(rows, (0, 0)) == rows


def test_flood_fill_is_idempotent():
    rows = ("111111", "1P0101", "10C1E1", "111111")
    once = flood_fill(rows, (1, 1))
    assert flood_fill(once, (1, 1)) == once


def test_check_reachable_rejects_blocked_exit():
    with pytest.raises(MapError, match="unreachable"):
        check_reachable(("11111", "1PC11", "111E1", "11111"), (1, 1))


def test_map_error_is_value_error():
    with pytest.raises(ValueError):
        check_characters(["1Z1"])