"""Key action dispatch.

Turns a decoded key token and a note status into calls against a
keyboard emulator. Modifiers follow the string: they go down on press
and up on release. Every other mapped key is clicked once on press and
ignores the release.
"""

from __future__ import annotations

import threading
from abc import ABCMeta, abstractmethod

from kitara.base import MatchException
from kitara.keys import Character, KeyToken, Modifier, Unmapped, Whitespace
from kitara.midi import NoteStatus


class KeyboardEmulator(metaclass=ABCMeta):
    """Abstract base class for synthetic keyboard input."""

    @abstractmethod
    def key_down(self, key: KeyToken) -> None:
        """Press and hold a key."""
        raise NotImplementedError()

    @abstractmethod
    def key_up(self, key: KeyToken) -> None:
        """Release a held key."""
        raise NotImplementedError()

    @abstractmethod
    def key_click(self, key: KeyToken) -> None:
        """Press and immediately release a key."""
        raise NotImplementedError()


class SerialKeyboard(KeyboardEmulator):
    """Keyboard emulator wrapper that serializes calls with a lock.

    Keeps press and release ordering intact when events are dispatched
    from more than one thread.
    """

    def __init__(self, inner: KeyboardEmulator) -> None:
        self._inner = inner
        self._lock = threading.Lock()

    def key_down(self, key: KeyToken) -> None:
        with self._lock:
            self._inner.key_down(key)

    def key_up(self, key: KeyToken) -> None:
        with self._lock:
            self._inner.key_up(key)

    def key_click(self, key: KeyToken) -> None:
        with self._lock:
            self._inner.key_click(key)


def dispatch_key(keyboard: KeyboardEmulator, key: KeyToken, status: NoteStatus) -> None:
    """Perform the keyboard action for a key token.

    Args:
        keyboard: The emulator receiving the calls.
        key: The key assigned to the played position.
        status: Whether the note was pressed or released.
    """
    if isinstance(key, Modifier):
        if status == NoteStatus.Press:
            keyboard.key_down(key)
        else:
            keyboard.key_up(key)
    elif isinstance(key, (Whitespace, Character)):
        if status == NoteStatus.Press:
            keyboard.key_click(key)
    elif isinstance(key, Unmapped):
        pass
    else:
        raise MatchException(key)
