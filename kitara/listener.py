"""The listener loop.

Receives raw MIDI messages from a source, turns each into a fretboard
position, looks up the mapped key and dispatches the keyboard action.
Messages are handled one at a time in arrival order until the source
is interrupted.
"""

from __future__ import annotations

import logging
import sys
import threading
from dataclasses import dataclass
from enum import Enum, auto, unique
from typing import Callable, Optional, TextIO

from kitara import constants
from kitara.base import Closeable, KitaraError, UnknownChannel
from kitara.fretboard import StringPos, resolve_fret
from kitara.keyboard import KeyboardEmulator, dispatch_key
from kitara.mapping import Mapping
from kitara.midi import MidiSource, NoteEvent, NoteStatus, RawMessage, decode_message


@unique
class ListenerState(Enum):
    """Connection state of the listener."""

    Disconnected = auto()
    Listening = auto()


@dataclass(frozen=True)
class EventReport:
    """Diagnostic record for one processed note event."""

    str_pos: StringPos
    channel: int
    note: int
    token: str
    """The configured token, empty if the position is unmapped."""
    status: NoteStatus

    @property
    def key(self) -> str:
        """The token, or a marker for unmapped positions."""
        return self.token if self.token else constants.UNMAPPED_MARKER

    def format(self) -> str:
        """Render the report as a single diagnostic line."""
        return (
            f"string={self.str_pos.str_index}, fret={self.str_pos.fret}, "
            f"channel={self.channel}, note={self.note}, "
            f"key={self.key}, action={self.status.action}"
        )


def print_report(report: EventReport) -> None:
    """Print a report line to stdout."""
    print(report.format(), flush=True)


class Listener:
    """Processes MIDI messages against a mapping and drives the keyboard."""

    def __init__(
        self,
        mapping: Mapping,
        keyboard: KeyboardEmulator,
        report: Callable[[EventReport], None] = print_report,
    ) -> None:
        """Initialize the listener.

        Args:
            mapping: The fretboard mapping to look keys up in.
            keyboard: The emulator receiving key actions.
            report: Called with a report for every resolved event.
        """
        self._mapping = mapping
        self._keyboard = keyboard
        self._report = report
        self._state = ListenerState.Disconnected

    @property
    def state(self) -> ListenerState:
        return self._state

    def resolve(self, event: NoteEvent) -> StringPos:
        """Find the fretboard position of a note event.

        Raises:
            UnknownChannel: If no string is assigned to the event's channel.
            OutOfRangeFret: If the note is off the string's fretboard.
        """
        str_index = self._mapping.string_for_channel(event.channel)
        if str_index is None:
            raise UnknownChannel(event.channel)
        return resolve_fret(str_index, event.note)

    def handle_event(self, event: NoteEvent) -> EventReport:
        """Dispatch the key for a decoded event and report it.

        Raises:
            UnknownChannel: If no string is assigned to the event's channel.
            OutOfRangeFret: If the note is off the string's fretboard.
        """
        str_pos = self.resolve(event)
        token = self._mapping.token_at(str_pos.str_index, str_pos.fret)
        key = self._mapping.key_at(str_pos.str_index, str_pos.fret)
        report = EventReport(
            str_pos=str_pos,
            channel=event.channel,
            note=event.note,
            token=token,
            status=event.status,
        )
        dispatch_key(self._keyboard, key, event.status)
        self._report(report)
        return report

    def handle_message(self, raw: RawMessage) -> Optional[EventReport]:
        """Process one raw MIDI message.

        Non-note messages are ignored. Events that cannot be placed on the
        fretboard are logged and dropped.

        Args:
            raw: The raw message bytes.

        Returns:
            The report for the event, or None if nothing was dispatched.
        """
        event = decode_message(raw)
        if event is None:
            return None
        try:
            return self.handle_event(event)
        except KitaraError as e:
            logging.warning("%s", e)
            return None

    def run(self, source: MidiSource) -> None:
        """Process messages from a source until it is interrupted.

        The source is closed on the way out if it is closeable.

        Args:
            source: The source to receive messages from.
        """
        self._state = ListenerState.Listening
        logging.info("listening")
        try:
            while True:
                raw = source.recv_raw()
                if raw is None:
                    logging.info("shutdown requested")
                    break
                self.handle_message(raw)
        except KeyboardInterrupt:
            logging.info("interrupted")
        finally:
            if isinstance(source, Closeable):
                source.close()
            self._state = ListenerState.Disconnected
            logging.info("disconnected")


def wait_for_shutdown(source: MidiSource, stream: TextIO = sys.stdin) -> threading.Thread:
    """Interrupt a source once a line or end of input is read from a stream.

    Args:
        source: The source to interrupt.
        stream: The control stream, stdin by default.

    Returns:
        The started daemon thread doing the waiting.
    """

    def wait() -> None:
        stream.readline()
        source.interrupt()

    thread = threading.Thread(target=wait, name="kitara-shutdown", daemon=True)
    thread.start()
    return thread
