"""The game: loading a scene and its textures, handling keys and drawing."""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence

from .image import Image
from .raycast import (
    HEIGHT,
    KEY_A,
    KEY_D,
    KEY_ESCAPE,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_S,
    KEY_W,
    WIDTH,
    step,
    turn,
)
from .render import render_frame
from .scene import Ident, Scene, SceneError, parse_scene
from .textutil import has_suffix
from .window import DESTROY_NOTIFY, KEY_PRESS, Window
from .xpm import XpmError, load_xpm

_WALLS = (Ident.NO, Ident.SO, Ident.EA, Ident.WE)
_TURN_KEYS = frozenset({KEY_LEFT, KEY_RIGHT})
_MOVE_KEYS = frozenset({KEY_W, KEY_S, KEY_A, KEY_D})


class Game:
    """A running game: the scene, its wall textures and an optional window."""

    def __init__(self, scene: Scene, textures: Mapping[Ident, Image]) -> None:
        self.scene = scene
        self.textures = dict(textures)
        self.window: Window | None = None
        self.running = True

    def on_key(self, keycode: int) -> None:
        """React to a key press given as an X keysym."""
        if keycode == KEY_ESCAPE:
            self.running = False
            if self.window is not None:
                self.window.close()
        elif keycode in _TURN_KEYS:
            turn(self.scene.player, keycode)
            self.frame()
        elif keycode in _MOVE_KEYS:
            step(self.scene, keycode)
            self.frame()

    def frame(self) -> Image:
        """Render the current view, show it in the window if any, and return it."""
        image = render_frame(self.scene, self.textures)
        if self.window is not None and self.window.is_open:
            self.window.show(image)
        return image


def check_texture_files(scene: Scene) -> None:
    """Check that every wall texture is a readable ``.xpm`` file."""
    for ident in _WALLS:
        path = scene.textures[ident]
        try:
            with open(path, "rb"):
                pass
        except OSError as exc:
            raise SceneError(f"cannot open texture {path!r}") from exc
        if not has_suffix(path, ".xpm"):
            raise SceneError(f"texture is not an .xpm file: {path!r}")


def load_textures(scene: Scene) -> dict[Ident, Image]:
    """Load the four wall textures of ``scene``."""
    return {ident: load_xpm(scene.textures[ident]) for ident in _WALLS}


def _fail() -> int:
    print("Error")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game on the scene file named on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1 or not has_suffix(args[0], ".cub"):
        return _fail()
    try:
        scene = parse_scene(args[0])
        check_texture_files(scene)
        textures = load_textures(scene)
    except (SceneError, XpmError):
        return _fail()

    try:
        window = Window(WIDTH, HEIGHT, "Cub3D")
    except RuntimeError:
        print("Error creating window", file=sys.stderr)
        return 0

    game = Game(scene, textures)
    game.window = window
    game.frame()
    window.hook(KEY_PRESS, game.on_key)
    window.hook(DESTROY_NOTIFY, window.close)
    window.loop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())