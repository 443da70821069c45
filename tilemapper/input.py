"""Keyboard and mouse-wheel input mapped to editor actions."""

from __future__ import annotations

from enum import Enum, auto

import pygame


class InputAction(Enum):
    """Actions the editor reacts to."""

    MOVE_RIGHT = auto()
    MOVE_LEFT = auto()
    MOVE_DOWN = auto()
    MOVE_UP = auto()
    SCROLL_DOWN = auto()
    SCROLL_UP = auto()


_DEFAULT_BINDINGS = {
    pygame.K_d: InputAction.MOVE_RIGHT,
    pygame.K_a: InputAction.MOVE_LEFT,
    pygame.K_s: InputAction.MOVE_DOWN,
    pygame.K_w: InputAction.MOVE_UP,
}


class InputManager:
    """Tracks which actions are active from the events fed to it."""

    def __init__(self) -> None:
        self.bindings: dict[int, InputAction] = {}
        self._states: dict[InputAction, bool] = {}

    def load_default_key_bindings(self) -> None:
        """Bind W, A, S and D to the four movement actions."""
        self.bindings.update(_DEFAULT_BINDINGS)

    def key_binding(self, action: InputAction) -> int | None:
        """The lowest key code bound to an action, or None if it has none."""
        return min((key for key, bound in self.bindings.items() if bound is action), default=None)

    def reset(self) -> None:
        """Mark every known action as inactive."""
        for action in self._states:
            self._states[action] = False

    def handle_input(self, event) -> None:
        """Update action states from one event; scroll actions last a single event."""
        self._states[InputAction.SCROLL_DOWN] = False
        self._states[InputAction.SCROLL_UP] = False
        if event.type == pygame.KEYDOWN:
            self._set_key(event.key, True)
        elif event.type == pygame.KEYUP:
            self._set_key(event.key, False)
        elif event.type == pygame.MOUSEWHEEL:
            action = InputAction.SCROLL_UP if getattr(event, "y", 0) == 1 else InputAction.SCROLL_DOWN
            self._states[action] = True

    def _set_key(self, key: int, pressed: bool) -> None:
        action = self.bindings.get(key)
        if action is not None:
            self._states[action] = pressed

    def is_active(self, action: InputAction) -> bool:
        return self._states.get(action, False)