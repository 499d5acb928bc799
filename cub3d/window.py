"""An on-screen window that shows images and reports input to callbacks."""

from __future__ import annotations

from collections.abc import Callable

import pygame

from .image import Image

KEY_PRESS = 2
KEY_RELEASE = 3
BUTTON_PRESS = 4
BUTTON_RELEASE = 5
MOTION_NOTIFY = 6
EXPOSE = 12
DESTROY_NOTIFY = 17

_EVENTS = frozenset(
    {KEY_PRESS, KEY_RELEASE, BUTTON_PRESS, BUTTON_RELEASE, MOTION_NOTIFY, EXPOSE, DESTROY_NOTIFY}
)

_KEYSYMS = {
    pygame.K_ESCAPE: 0xFF1B,
    pygame.K_LEFT: 0xFF51,
    pygame.K_UP: 0xFF52,
    pygame.K_RIGHT: 0xFF53,
    pygame.K_DOWN: 0xFF54,
    pygame.K_HOME: 0xFF50,
    pygame.K_END: 0xFF57,
    pygame.K_RETURN: 0xFF0D,
    pygame.K_BACKSPACE: 0xFF08,
    pygame.K_TAB: 0xFF09,
    pygame.K_DELETE: 0xFFFF,
    pygame.K_LSHIFT: 0xFFE1,
    pygame.K_RSHIFT: 0xFFE2,
    pygame.K_LCTRL: 0xFFE3,
    pygame.K_RCTRL: 0xFFE4,
    pygame.K_LALT: 0xFFE9,
    pygame.K_RALT: 0xFFEA,
}

_EXPOSE_TYPES = frozenset({pygame.VIDEOEXPOSE, pygame.WINDOWEXPOSED})


def _keysym(key: int) -> int:
    """Translate a pygame key code to the matching X keysym."""
    return _KEYSYMS.get(key, key)


class Window:
    """A fixed-size window; input events go to the callbacks set with ``hook``.

    Key callbacks get the X keysym, button callbacks ``(button, x, y)``,
    motion callbacks ``(x, y)``; expose and destroy callbacks get nothing.
    """

    def __init__(self, width: int, height: int, title: str) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid window size {width}x{height}")
        try:
            pygame.display.init()
            self._surface = pygame.display.set_mode((width, height))
        except pygame.error as exc:
            raise RuntimeError(f"cannot create window: {exc}") from exc
        pygame.display.set_caption(title)
        self.width = width
        self.height = height
        self.title = title
        self._hooks: dict[int, Callable[..., object]] = {}
        self._open = True

    @property
    def is_open(self) -> bool:
        """Whether the window has not been closed yet."""
        return self._open

    def show(self, image: Image) -> None:
        """Draw ``image`` at the top-left corner of the window."""
        if not self._open:
            raise RuntimeError("window is closed")
        data = image.to_bytes()
        rgb = bytearray(len(data) // 4 * 3)
        rgb[0::3] = data[2::4]
        rgb[1::3] = data[1::4]
        rgb[2::3] = data[0::4]
        picture = pygame.image.frombuffer(bytes(rgb), (image.width, image.height), "RGB")
        self._surface.blit(picture, (0, 0))
        pygame.display.flip()

    def hook(self, event: int, callback: Callable[..., object]) -> None:
        """Call ``callback`` whenever ``event`` happens in this window."""
        if event not in _EVENTS:
            raise ValueError(f"unsupported event: {event}")
        self._hooks[event] = callback

    def loop(self) -> None:
        """Wait for events and dispatch them until the window is closed."""
        while self._open:
            self._dispatch(pygame.event.wait())

    def close(self) -> None:
        """Close the window; a running loop stops after the current event."""
        if self._open:
            self._open = False
            pygame.display.quit()

    def _dispatch(self, event: pygame.event.Event) -> None:
        kind = event.type
        if kind == pygame.QUIT:
            self._call(DESTROY_NOTIFY)
        elif kind == pygame.KEYDOWN:
            self._call(KEY_PRESS, _keysym(event.key))
        elif kind == pygame.KEYUP:
            self._call(KEY_RELEASE, _keysym(event.key))
        elif kind == pygame.MOUSEBUTTONDOWN:
            self._call(BUTTON_PRESS, event.button, *event.pos)
        elif kind == pygame.MOUSEBUTTONUP:
            self._call(BUTTON_RELEASE, event.button, *event.pos)
        elif kind == pygame.MOUSEMOTION:
            self._call(MOTION_NOTIFY, *event.pos)
        elif kind in _EXPOSE_TYPES:
            self._call(EXPOSE)

    def _call(self, event: int, *args: int) -> None:
        callback = self._hooks.get(event)
        if callback is not None:
            callback(*args)