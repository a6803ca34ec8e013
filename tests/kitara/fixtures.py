"""Shared builders and fakes for the kitara tests."""

from typing import List, Optional, Sequence, Tuple

from kitara import constants
from kitara.keyboard import KeyboardEmulator
from kitara.keys import KeyToken
from kitara.midi import MidiSource, RawMessage

DEFAULT_CHANNELS = [1, 2, 3, 4, 5, 6]

Call = Tuple[str, KeyToken]


def make_rows(
    channels: Sequence[int] = DEFAULT_CHANNELS, fill: str = ""
) -> List[List[str]]:
    """Build config rows with the given channels and every fret set to fill."""
    return [
        [str(channel)] + [fill] * constants.NUM_FRETS for channel in channels
    ]


def make_csv(rows: Sequence[Sequence[str]]) -> str:
    header = ",".join(["channel"] + [str(f) for f in range(constants.NUM_FRETS)])
    return "\n".join([header] + [",".join(row) for row in rows]) + "\n"


class RecordingKeyboard(KeyboardEmulator):
    """Keyboard emulator that records calls instead of typing."""

    def __init__(self) -> None:
        self.calls: List[Call] = []

    def key_down(self, key: KeyToken) -> None:
        self.calls.append(("down", key))

    def key_up(self, key: KeyToken) -> None:
        self.calls.append(("up", key))

    def key_click(self, key: KeyToken) -> None:
        self.calls.append(("click", key))


class ListSource(MidiSource):
    """MIDI source replaying a fixed list of messages, then shutting down."""

    def __init__(self, messages: Sequence[RawMessage]) -> None:
        self._messages = list(messages)
        self.interrupted = False

    def recv_raw(self) -> Optional[RawMessage]:
        if self.interrupted or not self._messages:
            return None
        return self._messages.pop(0)

    def interrupt(self) -> None:
        self.interrupted = True
