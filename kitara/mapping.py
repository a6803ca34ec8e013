"""The fretboard mapping table.

A Mapping is built once at startup from tabular configuration data and
then only read. It answers which string a MIDI channel belongs to and
which key sits at a given string and fret.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from kitara import constants
from kitara.base import ConfigError
from kitara.keys import KeyToken, parse_token


def parse_channel(row_index: int, cell: str) -> int:
    """Parse the channel cell of a mapping row.

    Args:
        row_index: Index of the row, for error messages.
        cell: The raw cell contents.

    Returns:
        The 1-based MIDI channel.

    Raises:
        ConfigError: If the cell is not an integer in the MIDI channel range.
    """
    try:
        channel = int(cell.strip())
    except ValueError:
        raise ConfigError(f"Row {row_index}: channel {cell!r} is not an integer")
    if channel < constants.MIN_CHANNEL or channel > constants.MAX_CHANNEL:
        raise ConfigError(
            f"Row {row_index}: channel {channel} is outside "
            f"{constants.MIN_CHANNEL}-{constants.MAX_CHANNEL}"
        )
    return channel


@dataclass(frozen=True)
class Mapping:
    """Immutable mapping from fretboard positions to key tokens.

    Strings are indexed high string first, matching the tuning table.
    Every cell of the grid is present; an empty token means the position
    is explicitly unmapped.
    """

    channel_to_string: Tuple[int, ...]
    """MIDI channel of each string; the position in the tuple is the string index."""
    keymap: Tuple[Tuple[str, ...], ...]
    """Raw configured tokens, indexed by string and then fret."""
    keys: Tuple[Tuple[KeyToken, ...], ...] = field(init=False, repr=False)
    """Decoded key tokens, parallel to keymap."""
    _strings_by_channel: Dict[int, int] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        keys = tuple(tuple(parse_token(t) for t in row) for row in self.keymap)
        object.__setattr__(self, "keys", keys)
        strings_by_channel: Dict[int, int] = {}
        for str_index, channel in enumerate(self.channel_to_string):
            # First string wins for a duplicated channel
            strings_by_channel.setdefault(channel, str_index)
        object.__setattr__(self, "_strings_by_channel", strings_by_channel)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[str]]) -> Mapping:
        """Build a mapping from configuration rows.

        Each row holds the string's MIDI channel followed by one token per
        fret, open string first.

        Args:
            rows: Exactly one row per string.

        Returns:
            The validated mapping.

        Raises:
            ConfigError: If the shape of the table or a channel is invalid.
        """
        if len(rows) != constants.NUM_STRINGS:
            raise ConfigError(
                f"Expected {constants.NUM_STRINGS} rows but found {len(rows)}"
            )
        channels: List[int] = []
        tokens: List[Tuple[str, ...]] = []
        for row_index, row in enumerate(rows):
            if len(row) != constants.NUM_CONFIG_COLUMNS:
                raise ConfigError(
                    f"Row {row_index}: expected {constants.NUM_CONFIG_COLUMNS} "
                    f"columns but found {len(row)}"
                )
            channels.append(parse_channel(row_index, row[0]))
            tokens.append(tuple(row[1:]))
        return cls(channel_to_string=tuple(channels), keymap=tuple(tokens))

    def string_for_channel(self, channel: int) -> Optional[int]:
        """Find the string assigned to a MIDI channel.

        Args:
            channel: The 1-based MIDI channel.

        Returns:
            The string index, or None if no string uses this channel.
        """
        return self._strings_by_channel.get(channel)

    def token_at(self, str_index: int, fret: int) -> str:
        """Get the raw configured token at a position.

        Raises:
            IndexError: If the position is off the fretboard.
        """
        self._check_bounds(str_index, fret)
        return self.keymap[str_index][fret]

    def key_at(self, str_index: int, fret: int) -> KeyToken:
        """Get the decoded key token at a position.

        Raises:
            IndexError: If the position is off the fretboard.
        """
        self._check_bounds(str_index, fret)
        return self.keys[str_index][fret]

    def _check_bounds(self, str_index: int, fret: int) -> None:
        # Negative indices would otherwise wrap around
        if not 0 <= str_index < constants.NUM_STRINGS:
            raise IndexError(f"String index out of range: {str_index}")
        if not 0 <= fret < constants.NUM_FRETS:
            raise IndexError(f"Fret index out of range: {fret}")


def format_mapping(mapping: Mapping) -> str:
    """Render a mapping as a text table.

    The header lists fret numbers, and each following line shows one
    string's channel and its tokens.

    Args:
        mapping: The mapping to render.

    Returns:
        The table, one line per string, without a trailing newline.
    """
    lines = ["Keyboard Mapping:"]
    lines.append("".join(f"{fret}\t" for fret in range(constants.NUM_FRETS)))
    lines.append("----" * constants.NUM_FRETS)
    for channel, row in zip(mapping.channel_to_string, mapping.keymap):
        lines.append(f"{channel}|" + "".join(f"{token}\t" for token in row))
    return "\n".join(lines)
