from kitara.base import (
    ConfigError,
    DeviceNotFound,
    KitaraError,
    OutOfRangeFret,
    UnknownChannel,
)
from kitara.fretboard import StringPos, resolve_fret
from kitara.keyboard import KeyboardEmulator, dispatch_key
from kitara.keys import KeyToken, parse_token
from kitara.listener import EventReport, Listener, ListenerState
from kitara.mapping import Mapping
from kitara.midi import NoteEvent, NoteStatus, decode_message, select_port

__all__ = [
    "ConfigError",
    "DeviceNotFound",
    "EventReport",
    "KeyToken",
    "KeyboardEmulator",
    "KitaraError",
    "Listener",
    "ListenerState",
    "Mapping",
    "NoteEvent",
    "NoteStatus",
    "OutOfRangeFret",
    "StringPos",
    "UnknownChannel",
    "decode_message",
    "dispatch_key",
    "parse_token",
    "resolve_fret",
    "select_port",
]
