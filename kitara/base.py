"""Base classes, utilities and exceptions for the Kitara application.

This module provides the abstract resource base class and the error
hierarchy shared by the mapping engine, the listener loop and the CLI.
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from typing import Any


class Closeable(metaclass=ABCMeta):
    """Abstract base class for objects that need explicit resource cleanup."""

    @abstractmethod
    def close(self) -> None:
        """Close this to free resources and deny further use."""
        raise NotImplementedError()


class MatchException(Exception):
    """Exception raised when pattern matching fails."""

    def __init__(self, value: Any) -> None:
        """Initialize a MatchException with the unmatched value.

        Args:
            value: The value that failed to match any pattern.
        """
        super().__init__(f"Failed to match value: {value}")


class KitaraError(Exception):
    """Base class for all expected runtime errors."""


class ConfigError(KitaraError):
    """Raised when mapping configuration data is malformed or unreadable."""


class DeviceNotFound(KitaraError):
    """Raised when no MIDI input port matches the requested device name."""

    def __init__(self, device_name: str) -> None:
        super().__init__(f"No input port found matching {device_name}")
        self.device_name = device_name


class UnknownChannel(KitaraError):
    """Raised when a message arrives on a channel with no configured string."""

    def __init__(self, channel: int) -> None:
        super().__init__(f"Failed mapping channel {channel}")
        self.channel = channel


class OutOfRangeFret(KitaraError):
    """Raised when a note is outside the playable range of its string."""

    def __init__(self, str_index: int, note: int, fret: int) -> None:
        super().__init__(
            f"Note {note} on string {str_index} resolves to fret {fret}, "
            "outside the fretboard"
        )
        self.str_index = str_index
        self.note = note
        self.fret = fret


class KeyboardError(KitaraError):
    """Raised when the host keyboard cannot produce a key."""

    def __init__(self, key: Any, cause: Exception) -> None:
        super().__init__(f"Failed to type {key}: {cause!r}")
        self.key = key


class UnrecognizedStatus(KitaraError):
    """Status nibble other than note-on or note-off.

    The decoder filters these out silently, so this is never raised in
    normal operation.
    """

    def __init__(self, nibble: int) -> None:
        super().__init__(f"Unrecognized MIDI status nibble: {nibble}")
        self.nibble = nibble
