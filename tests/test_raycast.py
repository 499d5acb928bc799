import pytest

from cub3d.raycast import (
    FAR,
    KEY_A,
    KEY_D,
    KEY_ESCAPE,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_S,
    KEY_W,
    WIDTH,
    Cell,
    cast_ray,
    probe,
    ray_angle,
    step,
    turn,
)
from cub3d.scene import Color, Ident, Player, Scene

ROOM = ["11111", "10001", "10001", "10001", "11111"]
WIDTHS = {Ident.NO: 64, Ident.SO: 64, Ident.WE: 64, Ident.EA: 64}


def make_scene(rows, pos=(2, 2), angle=0.0, pixel=(32, 32)):
    grid = [row + " " for row in rows]
    player = Player(pos_x=pos[0], pos_y=pos[1], pixel_x=pixel[0], pixel_y=pixel[1], angle=angle)
    return Scene(
        path="room.cub",
        textures={ident: f"{ident.name}.xpm" for ident in WIDTHS},
        floor=Color(1, 2, 3),
        ceiling=Color(4, 5, 6),
        grid=grid,
        rows=len(grid),
        cols=len(grid[0]),
        player=player,
    )


def test_probe_classifies_cells():
    scene = make_scene(ROOM)
    assert probe(scene, 0, 0) is Cell.WALL
    assert probe(scene, 2, 2) is Cell.OPEN
    assert probe(scene, -1, 2) is Cell.OUTSIDE
    assert probe(scene, 2, -1) is Cell.OUTSIDE
    assert probe(scene, 2, scene.rows) is Cell.OUTSIDE
    assert probe(scene, scene.play_cols, 2) is Cell.OUTSIDE


def test_ray_angle_centre_column_is_view_angle():
    player = Player(angle=123.0)
    assert ray_angle(player, WIDTH // 2) == pytest.approx(123.0)


def test_ray_angle_spans_field_of_view():
    player = Player(angle=180.0)
    assert ray_angle(player, 0) - ray_angle(player, WIDTH) == pytest.approx(90.0)


@pytest.mark.parametrize("angle", [0.0, 10.0, 350.0, 359.0, 45.0, 315.0])
@pytest.mark.parametrize("column", [0, 1, 640, 1279, 1280])
def test_ray_angle_stays_in_range(angle, column):
    assert 0 <= ray_angle(Player(angle=angle), column) < 360


def test_turn_left_then_right_restores_angle():
    player = Player(angle=100.0)
    turn(player, KEY_LEFT)
    assert player.angle > 100.0
    turn(player, KEY_RIGHT)
    assert player.angle == 100.0


def test_turn_right_from_zero_wraps():
    player = Player(angle=0.0)
    turn(player, KEY_RIGHT)
    assert player.angle == 355.0


def test_turn_keeps_full_circle():
    player = Player(angle=355.0)
    turn(player, KEY_LEFT)
    assert player.angle == 360.0


def test_turn_rejects_other_keys():
    with pytest.raises(ValueError):
        turn(Player(), KEY_ESCAPE)


@pytest.mark.parametrize(
    "angle, texture",
    [(0.0, Ident.EA), (90.0, Ident.NO), (180.0, Ident.WE), (270.0, Ident.SO)],
)
def test_cast_ray_axis_textures(angle, texture):
    hit = cast_ray(make_scene(ROOM), angle, WIDTHS)
    assert hit is not None
    assert hit.texture is texture


def test_cast_ray_axis_distances_are_symmetric():
    scene = make_scene(ROOM)
    distances = {cast_ray(scene, a, WIDTHS).distance for a in (0.0, 90.0, 180.0, 270.0)}
    assert len(distances) == 1


def test_cast_ray_east_distance():
    hit = cast_ray(make_scene(ROOM), 0.0, WIDTHS)
    assert hit.distance == 96.0


def test_cast_ray_closer_wall_is_nearer():
    far = cast_ray(make_scene(ROOM, pos=(1, 2)), 0.0, WIDTHS)
    near = cast_ray(make_scene(ROOM, pos=(3, 2)), 0.0, WIDTHS)
    assert near.distance < far.distance


@pytest.mark.parametrize("angle", [10.0, 30.0, 60.0, 100.0, 150.0, 200.0, 250.0, 290.0, 340.0])
def test_cast_ray_texture_column_in_range(angle):
    widths = {ident: 128 for ident in WIDTHS}
    hit = cast_ray(make_scene(ROOM), angle, widths)
    assert hit is not None
    assert 0 <= hit.tex_x < 128
    assert 0 < hit.distance < FAR


def test_cast_ray_without_wall_returns_none():
    scene = make_scene(["00000"] * 5)
    assert cast_ray(scene, 0.0, WIDTHS) is None


@pytest.mark.parametrize("angle", [360.0, -1.0])
def test_cast_ray_rejects_bad_angle(angle):
    with pytest.raises(ValueError):
        cast_ray(make_scene(ROOM), angle, WIDTHS)


def test_step_forward_then_back_round_trip():
    scene = make_scene(ROOM, angle=0.0)
    step(scene, KEY_W)
    assert scene.player.pixel_x > 32
    step(scene, KEY_S)
    assert (scene.player.pixel_x, scene.player.pixel_y) == (32, 32)
    assert (scene.player.pos_x, scene.player.pos_y) == (2, 2)


def test_step_strafe_round_trip():
    scene = make_scene(ROOM, angle=0.0)
    step(scene, KEY_A)
    assert scene.player.pixel_y < 32
    step(scene, KEY_D)
    assert (scene.player.pixel_x, scene.player.pixel_y) == (32, 32)


def test_step_north_decreases_pixel_y():
    scene = make_scene(ROOM, angle=90.0)
    step(scene, KEY_W)
    assert scene.player.pixel_y < 32
    assert scene.player.pixel_x == 32


def test_step_crosses_into_next_cell():
    scene = make_scene(ROOM, pos=(2, 2), angle=0.0, pixel=(60, 32))
    step(scene, KEY_W)
    assert scene.player.pos_x == 3
    assert scene.player.pixel_x == 16


def test_step_clamps_at_right_edge():
    scene = make_scene(ROOM, pos=(scene_cols := 4, 2), angle=0.0, pixel=(60, 32))
    step(scene, KEY_W)
    assert scene.player.pos_x == scene_cols
    assert scene.player.pixel_x == 63


def test_step_clamps_at_left_edge():
    scene = make_scene(ROOM, pos=(0, 2), angle=180.0, pixel=(4, 32))
    step(scene, KEY_W)
    assert scene.player.pos_x == 0
    assert scene.player.pixel_x == 1


def test_step_rejects_other_keys():
    with pytest.raises(ValueError):
        step(make_scene(ROOM), KEY_LEFT)