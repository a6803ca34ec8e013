"""Loading of fretboard mappings from CSV files.

The file starts with a header row, which is ignored, followed by one
row per string, high string first. Each row holds the string's MIDI
channel and then the key token for every fret from the open string up.
"""

import csv
import io
import logging
from pathlib import Path
from typing import Iterable, List, Union

from kitara.base import ConfigError
from kitara.mapping import Mapping


def read_rows(lines: Iterable[str]) -> List[List[str]]:
    """Read data rows from CSV text, skipping the header and blank lines.

    Args:
        lines: The lines of the CSV document.

    Returns:
        The data rows as lists of cells.

    Raises:
        ConfigError: If the CSV is malformed or empty.
    """
    try:
        rows = [row for row in csv.reader(lines) if row]
    except csv.Error as e:
        raise ConfigError(f"Malformed CSV: {e}")
    if not rows:
        raise ConfigError("Config is empty")
    return rows[1:]


def parse_mapping(text: str) -> Mapping:
    """Parse a mapping from the contents of a CSV file.

    Args:
        text: The CSV document including its header row.

    Returns:
        The validated mapping.

    Raises:
        ConfigError: If the document does not describe a valid mapping.
    """
    return Mapping.from_rows(read_rows(io.StringIO(text)))


def load_mapping(path: Union[str, Path]) -> Mapping:
    """Load a mapping from a CSV file.

    Args:
        path: Location of the CSV file.

    Returns:
        The validated mapping.

    Raises:
        ConfigError: If the file cannot be read or is not a valid mapping.
    """
    logging.info("loading mapping from %s", path)
    try:
        with open(path, newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to read file with path {path}: {e}")
    return parse_mapping(text)
