"""Fretboard coordinates.

Converts an absolute MIDI note played on a string into a fret position
using the string's open tuning note.
"""

from __future__ import annotations

from dataclasses import dataclass

from kitara import constants
from kitara.base import OutOfRangeFret


@dataclass(frozen=True)
class StringPos:
    """Represents a position on the fretboard as a string and fret combination."""

    str_index: int
    """The string number (0-based index into the tuning table, high string first)."""
    fret: int
    """The fret position (semitone offset from the open string)."""


def resolve_fret(str_index: int, note: int) -> StringPos:
    """Find the fret at which a note sounds on a string.

    Args:
        str_index: The string the note was played on.
        note: The MIDI note number.

    Returns:
        The fretboard position of the note.

    Raises:
        OutOfRangeFret: If the note is below the open string or above the
            highest fret.
    """
    fret = note - constants.TUNING_NOTES_HIGH_TO_LOW[str_index]
    if fret < 0 or fret >= constants.NUM_FRETS:
        raise OutOfRangeFret(str_index, note, fret)
    return StringPos(str_index=str_index, fret=fret)
