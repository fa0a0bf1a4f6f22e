import pytest

from solong.app import Textures, bonus_main, load_textures, main, run, tile_sprite
from solong.xpm import XpmError, load_xpm

_XPM = """/* XPM */
static char *img[] = {
"2 1 2 1",
"a c #FF0000",
"b c None",
"ab"
};
"""

_NAMES = (
    "wall.xpm",
    "floor.xpm",
    "player_right.xpm",
    "player_left.xpm",
    "collectible.xpm",
    "exit.xpm",
    "exit1.xpm",
)


def _write_textures(directory, skip=()):
    for name in _NAMES:
        if name not in skip:
            (directory / name).write_text(_XPM)


@pytest.mark.parametrize(
    "tile, facing_right, expected",
    [
        ("1", True, "wall"),
        ("0", True, "floor"),
        ("C", True, "collectible"),
        ("E", True, "exit"),
        ("P", True, "player_right"),
        ("P", False, "player_left"),
        ("X", True, None),
        ("\n", True, None),
    ],
)
def test_tile_sprite(tile, facing_right, expected):
    assert tile_sprite(tile, facing_right) == expected


def test_load_textures_standard(tmp_path):
    _write_textures(tmp_path)
    textures = load_textures(tmp_path, False)
    expected = load_xpm(tmp_path / "wall.xpm")
    assert textures.wall == expected
    assert textures.exit == expected
    assert textures.player_left is None
    assert textures.exit_open is None


def test_load_textures_bonus(tmp_path):
    _write_textures(tmp_path)
    textures = load_textures(tmp_path, True)
    assert textures.player_left == load_xpm(tmp_path / "player_left.xpm")
    assert textures.exit_open == load_xpm(tmp_path / "exit1.xpm")
    assert set(textures.by_name()) == {
        "wall", "floor", "player_right", "player_left",
        "collectible", "exit", "exit_open",
    }


def test_missing_required_texture_raises(tmp_path):
    _write_textures(tmp_path, skip=("wall.xpm",))
    with pytest.raises(XpmError):
        load_textures(tmp_path, False)


def test_missing_left_player_fails_only_in_bonus(tmp_path):
    _write_textures(tmp_path, skip=("player_left.xpm",))
    assert load_textures(tmp_path, False).player_left is None
    with pytest.raises(XpmError):
        load_textures(tmp_path, True)


def test_missing_optional_texture_is_none(tmp_path):
    _write_textures(tmp_path, skip=("collectible.xpm",))
    textures = load_textures(tmp_path, False)
    assert textures.collectible is None
    assert "collectible" not in textures.by_name()


def test_textures_by_name_roundtrip(tmp_path):
    _write_textures(tmp_path)
    textures = load_textures(tmp_path, True)
    assert Textures(**textures.by_name()) == textures


@pytest.mark.parametrize("argv", [[], ["a.ber", "b.ber"]])
def test_main_wrong_argument_count(argv, capsys):
    assert main(argv) == 1
    assert capsys.readouterr().out == "ERROR:Error\nInvalid Number of Arguments"


def test_bonus_main_wrong_argument_count(capsys):
    assert bonus_main([]) == 1
    assert capsys.readouterr().out == "ERROR:Error\nInvalid Number of Arguments"


@pytest.mark.parametrize("name", ["map.txt", "map.ber.txt", "map"])
def test_main_bad_extension(name, capsys):
    assert main([name]) == 1
    assert capsys.readouterr().out == "ERROR:Error\nInvalid file extension"


def test_main_missing_map_file(tmp_path, capsys):
    assert main([str(tmp_path / "absent.ber")]) == 0
    assert capsys.readouterr().out == "Error\nInvalid map\n"


def test_main_invalid_object(tmp_path, capsys):
    path = tmp_path / "bad.ber"
    path.write_text("11111\n1PXE1\n1C001\n11111")
    assert main([str(path)]) == 0
    assert capsys.readouterr().out == "Error\nInvalid object in map\n"


def test_run_reports_unreachable_collectible(tmp_path, capsys):
    path = tmp_path / "blocked.ber"
    path.write_text("111111\n1P0E11\n111011\n1C1001\n111111")
    assert run(path, False) == 0
    assert capsys.readouterr().out.endswith("Error\nInvalid Path\n")


def test_bonus_main_no_collectibles(tmp_path, capsys):
    path = tmp_path / "empty.ber"
    path.write_text("11111\n1P0E1\n11111")
    assert bonus_main([str(path)]) == 0
    assert capsys.readouterr().out == "Error\nNo collectibles\n"