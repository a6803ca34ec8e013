from pathlib import Path

import pytest

from kitara.base import ConfigError
from kitara.config import load_mapping, parse_mapping, read_rows
from kitara.keys import Modifier, ModifierKind, Whitespace, WhitespaceKind
from tests.kitara.fixtures import make_csv, make_rows


def test_parse_mapping_skips_header():
    rows = make_rows(channels=[1, 2, 3, 4, 5, 6], fill="x")
    rows[0][1] = "SP"
    mapping = parse_mapping(make_csv(rows))
    assert mapping.channel_to_string == (1, 2, 3, 4, 5, 6)
    assert mapping.token_at(0, 0) == "SP"
    assert mapping.key_at(0, 0) == Whitespace(WhitespaceKind.Space)
    assert mapping.token_at(3, 22) == "x"


def test_parse_mapping_keeps_empty_cells():
    mapping = parse_mapping(make_csv(make_rows()))
    assert mapping.token_at(2, 5) == ""


def test_blank_lines_are_skipped():
    text = make_csv(make_rows(fill="a")).replace("\n", "\n\n")
    mapping = parse_mapping(text)
    assert mapping.token_at(5, 0) == "a"


def test_quoted_comma_token():
    rows = make_rows()
    rows[1][2] = '","'
    mapping = parse_mapping(make_csv(rows))
    assert mapping.token_at(1, 1) == ","


def test_header_only_has_no_rows():
    with pytest.raises(ConfigError, match="Expected 6 rows but found 0"):
        parse_mapping("channel,0,1\n")


def test_empty_document():
    with pytest.raises(ConfigError, match="empty"):
        parse_mapping("")


def test_missing_header_loses_first_row():
    text = make_csv(make_rows()).split("\n", 1)[1]
    with pytest.raises(ConfigError, match="Expected 6 rows but found 5"):
        parse_mapping(text)


def test_read_rows():
    assert read_rows(["h1,h2", "1,a", "", "2,b"]) == [["1", "a"], ["2", "b"]]


def test_load_mapping(tmp_path):
    path = tmp_path / "mapping.csv"
    path.write_text(make_csv(make_rows(fill="z")))
    mapping = load_mapping(path)
    assert mapping.token_at(0, 0) == "z"
    assert load_mapping(str(path)) == mapping


def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="Failed to read file"):
        load_mapping(tmp_path / "missing.csv")


def test_example_config():
    path = Path(__file__).parents[2] / "config" / "example.csv"
    mapping = load_mapping(path)
    assert mapping.channel_to_string == (1, 2, 3, 4, 5, 6)
    assert mapping.token_at(0, 0) == "SP"
    assert mapping.token_at(1, 6) == ","
    assert mapping.token_at(2, 19) == "|"
    assert mapping.key_at(5, 0) == Modifier(ModifierKind.Shift)
    assert mapping.token_at(4, 1) == ""
