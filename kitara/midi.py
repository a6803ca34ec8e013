"""MIDI input handling for the Kitara application.

This module decodes raw note messages into structured events and provides
a queue-backed MIDI input so that messages delivered on the backend's
thread are processed in order by a single consumer.
"""

from __future__ import annotations

import logging
from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from enum import Enum, unique
from queue import SimpleQueue
from typing import Dict, List, Optional, Sequence

import mido
from mido import Message
from mido.ports import BaseInput

from kitara import constants
from kitara.base import Closeable, DeviceNotFound

RawMessage = Sequence[int]
"""Raw MIDI bytes as delivered by the backend."""


@unique
class NoteStatus(Enum):
    """Note status, keyed by the high nibble of the status byte."""

    Press = constants.STATUS_PRESS
    Release = constants.STATUS_RELEASE

    @property
    def action(self) -> str:
        """Name of the action for diagnostics."""
        return "press" if self == NoteStatus.Press else "release"


STATUS_LOOKUP: Dict[int, NoteStatus] = constants.make_enum_value_lookup(NoteStatus)
"""Reverse lookup from status nibble to note status."""


@dataclass(frozen=True)
class NoteEvent:
    """A decoded note message."""

    channel: int
    """The 1-based MIDI channel (1-16)."""
    status: NoteStatus
    """Whether the note was pressed or released."""
    note: int
    """The MIDI note number (0-127)."""


def decode_message(raw: RawMessage) -> Optional[NoteEvent]:
    """Decode a raw MIDI message into a note event.

    The channel lives in the low nibble of the first byte and the status in
    the high nibble; the note is the second byte. Velocity is ignored.

    Args:
        raw: The raw message bytes.

    Returns:
        The note event, or None for short messages and anything other
        than note-on or note-off.
    """
    if len(raw) < constants.MIN_MESSAGE_LEN:
        return None
    status = STATUS_LOOKUP.get(raw[0] >> 4)
    if status is None:
        return None
    # Wire channels are zero-based
    channel = (raw[0] & 0x0F) + 1
    return NoteEvent(channel=channel, status=status, note=int(raw[1]))


class MidiSource(metaclass=ABCMeta):
    """Abstract base class for raw MIDI input sources."""

    @abstractmethod
    def recv_raw(self) -> Optional[RawMessage]:
        """Receive the next raw MIDI message.

        Returns:
            The next message, or None once the source has been interrupted.
        """
        raise NotImplementedError()

    @abstractmethod
    def interrupt(self) -> None:
        """Wake the consumer and make it stop receiving."""
        raise NotImplementedError()


class MidiInput(MidiSource, Closeable):
    """MIDI input connection with message queuing.

    This class manages a MIDI input port and provides a queue-based
    interface for receiving messages. Messages are queued as they
    arrive and can be retrieved synchronously.
    """

    @classmethod
    def open(cls, in_port_name: str) -> MidiInput:
        """Open a MIDI input port.

        Args:
            in_port_name: The name of the MIDI port to open.

        Returns:
            A new MidiInput instance connected to the specified port.
        """
        queue: SimpleQueue[Optional[Message]] = SimpleQueue()
        in_port = mido.open_input(in_port_name, callback=queue.put_nowait)
        return cls(in_port_name=in_port_name, in_port=in_port, queue=queue)

    def __init__(
        self,
        in_port_name: str,
        in_port: BaseInput,
        queue: "SimpleQueue[Optional[Message]]",
    ) -> None:
        """Initialize the MIDI input.

        Args:
            in_port_name: The name of the input port.
            in_port: The mido input port object.
            queue: The message queue for incoming messages.
        """
        self._in_port_name = in_port_name
        self._in_port = in_port
        self._queue = queue

    @property
    def name(self) -> str:
        """The full name of the connected port."""
        return self._in_port_name

    def close(self) -> None:
        """Close the MIDI input port."""
        self._in_port.close()

    def interrupt(self) -> None:
        """Enqueue the shutdown sentinel behind any pending messages."""
        self._queue.put_nowait(None)

    def recv_raw(self) -> Optional[RawMessage]:
        """Receive the next message from the queue.

        This method blocks until a message is available.

        Returns:
            The raw bytes of the next message, or None after an interrupt.
        """
        msg = self._queue.get()
        if msg is None:
            return None
        logging.debug("Received message from %s: %s", self._in_port_name, msg)
        raw: List[int] = msg.bytes()
        return raw


def list_input_ports() -> List[str]:
    """List the names of the available MIDI input ports in backend order."""
    return [str(name) for name in mido.get_input_names()]


def select_port(port_names: Sequence[str], device_name: str) -> str:
    """Select the first port whose name contains the device name.

    Matching ignores case.

    Args:
        port_names: Available port names in enumeration order.
        device_name: The substring to look for.

    Returns:
        The full name of the first matching port.

    Raises:
        DeviceNotFound: If no port matches.
    """
    needle = device_name.lower()
    matches = [name for name in port_names if needle in name.lower()]
    if not matches:
        raise DeviceNotFound(device_name)
    if len(matches) > 1:
        logging.info("multiple ports match %s, using %s", device_name, matches[0])
    return matches[0]
