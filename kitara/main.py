"""Main entry point for the Kitara application.

This module contains the main function and command-line argument handling
for turning a MIDI guitar into a keyboard. It sets up logging, loads the
fretboard mapping, connects to the MIDI input and runs the listener loop.
"""

from __future__ import annotations

import logging
import sys
from argparse import ArgumentParser
from typing import TYPE_CHECKING, List, Optional

from kitara.base import ConfigError, DeviceNotFound
from kitara.config import load_mapping
from kitara.keyboard import KeyboardEmulator, SerialKeyboard
from kitara.listener import Listener, wait_for_shutdown
from kitara.mapping import Mapping, format_mapping
from kitara.midi import MidiInput, list_input_ports, select_port

if TYPE_CHECKING:
    from kitara.emulator import PynputKeyboard


def open_keyboard() -> PynputKeyboard:
    """Acquire the process-wide keyboard emulator."""
    # pynput connects to the display server on import
    from kitara.emulator import PynputKeyboard

    return PynputKeyboard()


def main_with_input(
    mapping: Mapping, midi_in: MidiInput, keyboard: KeyboardEmulator
) -> None:
    """Run the listener loop on an open MIDI input.

    Blocks until a line or end of input arrives on stdin, or Ctrl+C.

    Args:
        mapping: The fretboard mapping to apply.
        midi_in: The connected MIDI input.
        keyboard: The emulator receiving key actions.
    """
    listener = Listener(mapping, SerialKeyboard(keyboard))
    wait_for_shutdown(midi_in)
    listener.run(midi_in)


def make_parser() -> ArgumentParser:
    """Create the command-line argument parser.

    Returns:
        An ArgumentParser configured with all the command-line options
        for the Kitara application.
    """
    parser = ArgumentParser(
        prog="kitara", description="Type on your computer with a MIDI guitar."
    )
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument(
        "--list-ports",
        action="store_true",
        help="list MIDI input ports and exit",
    )
    parser.add_argument("device_name", nargs="?", help="part of the MIDI port name")
    parser.add_argument("config_path", nargs="?", help="path to the CSV mapping")
    return parser


def configure_logging(log_level: str) -> None:
    """Configure the logging system with the specified log level.

    Args:
        log_level: The logging level (e.g., 'DEBUG', 'INFO', 'WARNING').
    """
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(filename)s:%(lineno)d -- %(message)s",
        level=log_level,
    )


def list_ports(port_names: List[str]) -> None:
    """Print MIDI input port names to stderr."""
    print("\nAvailable MIDI input ports:", file=sys.stderr)
    for i, name in enumerate(port_names):
        print(f"  {i:2d}: {name}", file=sys.stderr)
    print(file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the Kitara application.

    Parses command-line arguments, configures logging, loads the mapping,
    opens the MIDI input and starts the listener loop. Exits with a
    non-zero status if the mapping cannot be loaded or the device is
    missing or cannot be opened.
    """
    parser = make_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    if args.list_ports:
        list_ports(list_input_ports())
        return
    if args.device_name is None or args.config_path is None:
        parser.error("Usage: kitara <device-name> <path/to/config/csv>")
    try:
        mapping = load_mapping(args.config_path)
    except ConfigError as e:
        logging.error("Failed to load config - %s", e)
        sys.exit(1)
    print(f"\n{format_mapping(mapping)}\n")
    port_names = list_input_ports()
    try:
        port_name = select_port(port_names, args.device_name)
    except DeviceNotFound as e:
        logging.error("%s", e)
        list_ports(port_names)
        sys.exit(1)
    keyboard = open_keyboard()
    try:
        try:
            midi_in = MidiInput.open(port_name)
        except OSError as e:
            logging.error("Failed to open MIDI port %s: %s", port_name, e)
            sys.exit(1)
        print(f"Successfully connected to MIDI Device: {midi_in.name}", flush=True)
        main_with_input(mapping, midi_in, keyboard)
    finally:
        # Leave no modifier stuck down
        keyboard.close()
    logging.info("done")


if __name__ == "__main__":
    main()
