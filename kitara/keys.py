"""Key token taxonomy.

Mapping files name keys with short string tokens. This module decodes
those tokens once into a closed set of variants so that dispatch never
needs to compare strings again.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Dict, Union

from kitara import constants


@unique
class ModifierKind(Enum):
    """Modifier keys, which are held down and released with the string."""

    Shift = constants.SHIFT
    Control = constants.CTRL
    Alt = constants.ALT
    Meta = constants.CMD


@unique
class WhitespaceKind(Enum):
    """Whitespace, control and navigation keys, which are clicked on press."""

    Space = constants.SPACE
    Tab = constants.TAB
    Backspace = constants.BACKSPACE
    Enter = constants.ENTER
    Escape = constants.ESCAPE
    ArrowLeft = constants.ARROW_LEFT
    ArrowUp = constants.ARROW_UP
    ArrowRight = constants.ARROW_RIGHT
    ArrowDown = constants.ARROW_DOWN


MODIFIER_LOOKUP: Dict[str, ModifierKind] = constants.make_enum_value_lookup(
    ModifierKind
)
"""Reverse lookup from token code to modifier kind."""

WHITESPACE_LOOKUP: Dict[str, WhitespaceKind] = constants.make_enum_value_lookup(
    WhitespaceKind
)
"""Reverse lookup from token code to whitespace kind."""


@dataclass(frozen=True)
class Modifier:
    """A modifier key token."""

    kind: ModifierKind


@dataclass(frozen=True)
class Whitespace:
    """A whitespace, control or navigation key token."""

    kind: WhitespaceKind


@dataclass(frozen=True)
class Character:
    """A printable character key token."""

    char: str
    """A single character."""


@dataclass(frozen=True)
class Unmapped:
    """Token for a fretboard position that has no key assigned."""


KeyToken = Union[Modifier, Whitespace, Character, Unmapped]
"""The closed set of key token variants."""


def parse_token(token: str) -> KeyToken:
    """Decode a configured token into its key variant.

    Codes are matched exactly. Any other non-empty token is a character
    key, and only its first character counts.

    Args:
        token: The raw token from the mapping file.

    Returns:
        The decoded key token.
    """
    if not token:
        return Unmapped()
    modifier = MODIFIER_LOOKUP.get(token)
    if modifier is not None:
        return Modifier(modifier)
    whitespace = WHITESPACE_LOOKUP.get(token)
    if whitespace is not None:
        return Whitespace(whitespace)
    return Character(token[0])
