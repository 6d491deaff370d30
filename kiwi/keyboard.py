"""Per-frame keyboard state tracking."""

from __future__ import annotations

import enum
from typing import Dict, Hashable, Optional


class KeyState(enum.Enum):
    """The state of a key within the current frame."""

    UP = "up"
    PRESSED = "pressed"
    RELEASED = "released"
    HELD = "held"


class Keyboard:
    """Tracks key states across frames."""

    def __init__(self) -> None:
        self._states: Dict[Hashable, KeyState] = {}

    def set_key_state(self, key: Hashable, state: KeyState) -> None:
        self._states[key] = state

    def get_key_state(self, key: Hashable) -> Optional[KeyState]:
        """Return the key's state, or ``None`` if it was never seen."""
        return self._states.get(key)

    def is_key_pressed(self, key: Hashable) -> bool:
        """Whether the key was pressed this frame."""
        return self._states.get(key) is KeyState.PRESSED

    def is_key_held(self, key: Hashable) -> bool:
        """Whether the key has been held since an earlier frame."""
        return self._states.get(key) is KeyState.HELD

    def press_key(self, key: Hashable) -> None:
        self._states[key] = KeyState.PRESSED

    def release_key(self, key: Hashable) -> None:
        self._states[key] = KeyState.RELEASED

    def update_keys(self) -> None:
        """Advance to the next frame: pressed keys become held, released keys up."""
        for key, state in self._states.items():
            if state is KeyState.PRESSED:
                self._states[key] = KeyState.HELD
            elif state is KeyState.RELEASED:
                self._states[key] = KeyState.UP

    def __repr__(self) -> str:
        return f"Keyboard({self._states!r})"