"""Constants for the guitar fretboard, the MIDI protocol and key tokens.

This module defines the fixed fretboard dimensions, the standard tuning,
the note status nibbles and the two-letter codes used in mapping files
for special keys.
"""

from enum import Enum
from typing import Any, Dict, Tuple, Type, TypeVar

E = TypeVar("E", bound=Enum)
"""Type variable for enum types."""


def make_enum_value_lookup(enum_type: Type[E]) -> Dict[Any, E]:
    """Create a reverse lookup dictionary from enum values to enum instances.

    Args:
        enum_type: The enum class to create a lookup for.

    Returns:
        A dictionary mapping enum values to enum instances.
    """
    lookup: Dict[Any, E] = {}
    for enum_val in enum_type.__members__.values():
        lookup[enum_val.value] = enum_val
    return lookup


NUM_STRINGS = 6
"""Number of guitar strings."""

NUM_FRETS = 23
"""Number of positions on each string: 22 frets plus the open string."""

NUM_CONFIG_COLUMNS = NUM_FRETS + 1
"""Columns in a mapping row: the MIDI channel followed by one cell per fret."""

TUNING_NOTES_HIGH_TO_LOW: Tuple[int, ...] = (64, 59, 55, 50, 45, 40)
"""Standard guitar tuning (E B G D A E) as open-string MIDI notes, high string first."""

MIN_CHANNEL = 1
"""Lowest MIDI channel number (channels are 1-based in configuration)."""

MAX_CHANNEL = 16
"""Highest MIDI channel number."""

STATUS_PRESS = 9
"""Status nibble of a note-on message."""

STATUS_RELEASE = 8
"""Status nibble of a note-off message."""

MIN_MESSAGE_LEN = 2
"""Shortest raw message that carries a note number."""

UNMAPPED_MARKER = "<unmapped>"
"""Text shown in diagnostics for a coordinate with no key assigned."""

# Modifier key codes
SHIFT = "SH"
CTRL = "CT"
CMD = "CM"
ALT = "AL"

# Whitespace and navigation key codes
SPACE = "SP"
TAB = "TA"
BACKSPACE = "BA"
ENTER = "EN"
ESCAPE = "ES"
ARROW_LEFT = "LE"
ARROW_UP = "UP"
ARROW_RIGHT = "RI"
ARROW_DOWN = "DO"
