from typing import List

import pytest
from hypothesis import given
from hypothesis import strategies as st

from kitara import constants
from kitara.base import ConfigError
from kitara.keys import (
    Character,
    Modifier,
    ModifierKind,
    Unmapped,
    Whitespace,
    WhitespaceKind,
)
from kitara.mapping import Mapping, format_mapping
from tests.kitara.fixtures import make_rows
from tests.kitara.hypo import configure_hypo

configure_hypo()

token_strategy = st.one_of(
    st.sampled_from(["", "SH", "SP", "UP", "a", "Z", "hello"]),
    st.text(min_size=0, max_size=3),
)


@st.composite
def table_strategy(draw) -> List[List[str]]:
    channels = draw(
        st.lists(
            st.integers(min_value=1, max_value=16),
            min_size=constants.NUM_STRINGS,
            max_size=constants.NUM_STRINGS,
            unique=True,
        )
    )
    rows = []
    for channel in channels:
        tokens = draw(
            st.lists(
                token_strategy,
                min_size=constants.NUM_FRETS,
                max_size=constants.NUM_FRETS,
            )
        )
        rows.append([str(channel)] + tokens)
    return rows


@given(table_strategy())
def test_mapping_reproduces_table(rows):
    mapping = Mapping.from_rows(rows)
    for s, row in enumerate(rows):
        assert mapping.string_for_channel(int(row[0])) == s
        for f in range(constants.NUM_FRETS):
            assert mapping.token_at(s, f) == row[f + 1]


@pytest.mark.parametrize("num_rows", [0, 1, 5, 7])
def test_wrong_row_count(num_rows):
    rows = make_rows(channels=list(range(1, num_rows + 1)))
    with pytest.raises(ConfigError, match="rows"):
        Mapping.from_rows(rows)


@pytest.mark.parametrize("delta", [-1, 1, -23])
def test_wrong_column_count(delta):
    rows = make_rows()
    row = rows[3]
    if delta > 0:
        row.extend(["x"] * delta)
    else:
        del row[delta:]
    with pytest.raises(ConfigError, match="Row 3"):
        Mapping.from_rows(rows)


@pytest.mark.parametrize("cell", ["", "one", "1.5", "0", "17", "-1"])
def test_bad_channel(cell):
    rows = make_rows()
    rows[0][0] = cell
    with pytest.raises(ConfigError, match="Row 0"):
        Mapping.from_rows(rows)


def test_channel_whitespace_tolerated():
    rows = make_rows()
    rows[2][0] = " 11 "
    mapping = Mapping.from_rows(rows)
    assert mapping.channel_to_string[2] == 11
    assert mapping.string_for_channel(11) == 2


def test_unknown_channel_lookup():
    mapping = Mapping.from_rows(make_rows())
    assert mapping.string_for_channel(16) is None


def test_duplicate_channel_first_wins():
    mapping = Mapping.from_rows(make_rows(channels=[3, 2, 3, 4, 5, 6]))
    assert mapping.string_for_channel(3) == 0


def test_unsorted_channels():
    mapping = Mapping.from_rows(make_rows(channels=[16, 9, 1, 12, 2, 7]))
    assert mapping.string_for_channel(1) == 2
    assert mapping.string_for_channel(7) == 5


def test_keys_decoded_at_construction():
    rows = make_rows()
    rows[0][1] = "SP"
    rows[0][2] = "CT"
    rows[1][1] = "abc"
    mapping = Mapping.from_rows(rows)
    assert mapping.key_at(0, 0) == Whitespace(WhitespaceKind.Space)
    assert mapping.key_at(0, 1) == Modifier(ModifierKind.Control)
    assert mapping.key_at(1, 0) == Character("a")
    assert mapping.token_at(1, 0) == "abc"
    assert mapping.key_at(5, 22) == Unmapped()


@pytest.mark.parametrize(
    "str_index, fret", [(-1, 0), (6, 0), (0, -1), (0, 23), (2, 100)]
)
def test_lookup_out_of_bounds(str_index, fret):
    mapping = Mapping.from_rows(make_rows())
    with pytest.raises(IndexError):
        mapping.token_at(str_index, fret)
    with pytest.raises(IndexError):
        mapping.key_at(str_index, fret)


def test_mapping_is_hashable_and_comparable():
    first = Mapping.from_rows(make_rows(fill="q"))
    second = Mapping.from_rows(make_rows(fill="q"))
    assert first == second
    assert hash(first) == hash(second)


def test_format_mapping():
    rows = make_rows(channels=[6, 5, 4, 3, 2, 1])
    rows[0][1] = "SP"
    text = format_mapping(Mapping.from_rows(rows))
    lines = text.split("\n")
    assert lines[0] == "Keyboard Mapping:"
    assert lines[1].startswith("0\t1\t2\t")
    assert lines[2] == "----" * constants.NUM_FRETS
    assert len(lines) == 3 + constants.NUM_STRINGS
    assert lines[3].startswith("6|SP\t\t")
    assert lines[8].startswith("1|")
