"""Keyboard emulation through pynput.

One controller is held for the lifetime of the process. Closing it
releases any modifier keys this process still holds down.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Set, Union

from pynput.keyboard import Controller, Key, KeyCode

from kitara.base import Closeable, KeyboardError, MatchException
from kitara.keyboard import KeyboardEmulator
from kitara.keys import (
    Character,
    KeyToken,
    Modifier,
    ModifierKind,
    Whitespace,
    WhitespaceKind,
)

PynputKey = Union[Key, KeyCode, str]

UNTYPEABLE_ERRORS = (
    Controller.InvalidKeyException,
    Controller.InvalidCharacterException,
)
"""Errors pynput raises for keys the host backend cannot produce."""

MODIFIER_KEYS: Dict[ModifierKind, Key] = {
    ModifierKind.Shift: Key.shift,
    ModifierKind.Control: Key.ctrl,
    ModifierKind.Alt: Key.alt,
    ModifierKind.Meta: Key.cmd,
}

WHITESPACE_KEYS: Dict[WhitespaceKind, Key] = {
    WhitespaceKind.Space: Key.space,
    WhitespaceKind.Tab: Key.tab,
    WhitespaceKind.Backspace: Key.backspace,
    WhitespaceKind.Enter: Key.enter,
    WhitespaceKind.Escape: Key.esc,
    WhitespaceKind.ArrowLeft: Key.left,
    WhitespaceKind.ArrowUp: Key.up,
    WhitespaceKind.ArrowRight: Key.right,
    WhitespaceKind.ArrowDown: Key.down,
}


def to_pynput_key(key: KeyToken) -> PynputKey:
    """Translate a key token into the key pynput expects.

    Raises:
        MatchException: If the token has no physical key (it is unmapped).
    """
    if isinstance(key, Modifier):
        return MODIFIER_KEYS[key.kind]
    elif isinstance(key, Whitespace):
        return WHITESPACE_KEYS[key.kind]
    elif isinstance(key, Character):
        return key.char
    else:
        raise MatchException(key)


class PynputKeyboard(KeyboardEmulator, Closeable):
    """Keyboard emulator injecting events into the host through pynput."""

    def __init__(self) -> None:
        self._controller = Controller()
        self._held: Set[KeyToken] = set()

    def _send(self, action: Callable[[PynputKey], None], key: KeyToken) -> None:
        try:
            action(to_pynput_key(key))
        except UNTYPEABLE_ERRORS as e:
            raise KeyboardError(key, e)

    def key_down(self, key: KeyToken) -> None:
        logging.debug("key down %s", key)
        self._send(self._controller.press, key)
        self._held.add(key)

    def key_up(self, key: KeyToken) -> None:
        logging.debug("key up %s", key)
        self._send(self._controller.release, key)
        self._held.discard(key)

    def key_click(self, key: KeyToken) -> None:
        logging.debug("key click %s", key)
        self._send(self._controller.tap, key)

    def close(self) -> None:
        """Release every key still held down."""
        for key in list(self._held):
            logging.info("releasing held key %s", key)
            self.key_up(key)
