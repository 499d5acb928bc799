import pytest

from cub3d.scene import (
    Color,
    Ident,
    SceneError,
    parse_color,
    parse_scene,
    validate_grid,
)

HEADER = (
    "NO ./north.xpm\n"
    "SO ./south.xpm\n"
    "WE ./west.xpm\n"
    "EA ./east.xpm\n"
    "\n"
    "F 220,100,0\n"
    "C 225,30,0\n"
    "\n"
)

MAP = "111111\n100001\n10N001\n111111\n"


def _write(tmp_path, text, name="scene.cub"):
    path = tmp_path / name
    path.write_text(text)
    return path


def test_parse_valid_scene(tmp_path):
    scene = parse_scene(_write(tmp_path, HEADER + MAP))
    assert scene.textures == {
        Ident.NO: "./north.xpm",
        Ident.SO: "./south.xpm",
        Ident.WE: "./west.xpm",
        Ident.EA: "./east.xpm",
    }
    assert scene.floor == Color(220, 100, 0)
    assert scene.ceiling == Color(225, 30, 0)
    assert scene.grid == ["111111 ", "100001 ", "10N001 ", "111111 "]
    assert scene.rows == len(scene.grid)
    assert all(len(row) == scene.cols for row in scene.grid)
    assert scene.play_cols == scene.cols - 1


def test_player_position(tmp_path):
    scene = parse_scene(_write(tmp_path, HEADER + MAP))
    player = scene.player
    assert (player.pos_x, player.pos_y) == (2, 2)
    assert player.angle == 90.0
    assert (player.pixel_x, player.pixel_y) == (32, 32)


@pytest.mark.parametrize(
    "mark, angle", [("N", 90.0), ("S", 270.0), ("E", 0.0), ("W", 180.0)]
)
def test_start_angles(tmp_path, mark, angle):
    scene = parse_scene(_write(tmp_path, HEADER + f"1111\n1{mark}01\n1111\n"))
    assert scene.player.angle == angle
    assert scene.grid[1][1] == mark


def test_blank_line_inside_map_becomes_space_row(tmp_path):
    text = HEADER + "111111\n1N0001\n111111\n\n111111\n"
    scene = parse_scene(_write(tmp_path, text))
    assert scene.rows == 5
    assert scene.grid[3] == " " * scene.cols


def test_path_is_kept(tmp_path):
    path = _write(tmp_path, HEADER + MAP)
    assert parse_scene(path).path == str(path)


def test_color_rgb_packing():
    assert Color(255, 255, 255).rgb() == 0xFFFFFF
    assert Color(255, 0, 0).rgb() == 0xFF0000
    assert Color(0, 0, 255).rgb() == 255


def test_parse_color_reads_components():
    assert parse_color("220,100,0\n") == Color(220, 100, 0)
    assert parse_color("0,0,0") == Color(0, 0, 0)


@pytest.mark.parametrize("text", ["256,0,0", "-1,0,0", "1,2", "1,2,3,4", ""])
def test_parse_color_rejects(text):
    with pytest.raises(SceneError):
        parse_color(text)


def test_missing_file(tmp_path):
    with pytest.raises(SceneError):
        parse_scene(tmp_path / "absent.cub")


def test_duplicate_texture(tmp_path):
    with pytest.raises(SceneError):
        parse_scene(_write(tmp_path, "NO ./a.xpm\n" + HEADER + MAP))


def test_duplicate_color(tmp_path):
    text = "F 1,2,3\nF 1,2,3\n" + HEADER + MAP
    with pytest.raises(SceneError):
        parse_scene(_write(tmp_path, text))


def test_unknown_identifier(tmp_path):
    with pytest.raises(SceneError):
        parse_scene(_write(tmp_path, "XX ./a.xpm\n" + HEADER + MAP))


def test_extra_words_on_header_line(tmp_path):
    text = HEADER.replace("NO ./north.xpm\n", "NO ./north.xpm extra\n")
    with pytest.raises(SceneError):
        parse_scene(_write(tmp_path, text + MAP))


def test_color_with_spaces_rejected(tmp_path):
    text = HEADER.replace("F 220,100,0", "F 220, 100, 0")
    with pytest.raises(SceneError):
        parse_scene(_write(tmp_path, text + MAP))


def test_missing_identifiers(tmp_path):
    text = "NO ./north.xpm\nSO ./south.xpm\n" + MAP
    with pytest.raises(SceneError):
        parse_scene(_write(tmp_path, text))


def test_no_map(tmp_path):
    with pytest.raises(SceneError):
        parse_scene(_write(tmp_path, HEADER.rstrip("\n") + "\n"))


def test_invalid_map_character(tmp_path):
    with pytest.raises(SceneError):
        parse_scene(_write(tmp_path, HEADER + "1111\n1N21\n1111\n"))


def test_two_players(tmp_path):
    with pytest.raises(SceneError):
        parse_scene(_write(tmp_path, HEADER + "11111\n1NS01\n11111\n"))


def test_player_on_first_row(tmp_path):
    with pytest.raises(SceneError):
        parse_scene(_write(tmp_path, HEADER + "1N11\n1001\n1111\n"))


def test_open_border(tmp_path):
    with pytest.raises(SceneError):
        parse_scene(_write(tmp_path, HEADER + "101111\n1N0001\n111111\n"))


def test_space_next_to_floor(tmp_path):
    with pytest.raises(SceneError):
        parse_scene(_write(tmp_path, HEADER + "111111\n1N 001\n111111\n"))


def test_validate_grid_shape_mismatch():
    with pytest.raises(SceneError):
        validate_grid(["111", "11"], 2, 3)


def test_validate_grid_open_space():
    with pytest.raises(SceneError):
        validate_grid(["111", "1 0", "111"], 3, 3)


def test_validate_grid_zero_on_edge():
    with pytest.raises(SceneError):
        validate_grid(["111", "011", "111"], 3, 3)