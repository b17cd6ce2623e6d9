import logging

import pandas as pd
import pytest

from naming.person_name import PersonName, Possessive
from services.export import digest_by_last_name, to_csv_bytes
from services.roster import (
    FormatOptions,
    format_name,
    format_roster,
    load_roster,
    name_from_record,
)


def test_load_roster_maps_header_aliases():
    content = b"ID,Full Name\n7,Will St. Clair\n"
    df = load_roster(content)
    assert list(df.columns) == ['person_id', 'name']
    assert df.loc[0, 'name'] == 'Will St. Clair'


def test_load_roster_accepts_first_last_columns():
    df = load_roster(b"First Name,Surname\nFoo,Bar\n")
    assert list(df.columns) == ['first', 'last']


def test_load_roster_requires_name_column():
    with pytest.raises(ValueError):
        load_roster(b"email\nfoo@example.com\n")


def test_name_from_record():
    assert name_from_record({'first': 'Foo', 'last': 'Bar'}) == PersonName('Foo', 'Bar')
    assert name_from_record({'first': 'Foo', 'last': float('nan')}) == PersonName('Foo')
    assert name_from_record({'name': '  Will  St. Clair '}) == PersonName('Will', 'St. Clair')
    assert name_from_record({'first': float('nan'), 'name': 'Baz'}) == PersonName('Baz')
    assert name_from_record({'name': float('nan')}) is None


def test_format_name_with_options():
    row = format_name(PersonName('NORM', 'MACDONALD'), FormatOptions(possessive=Possessive.LAST, proper=True))
    assert row['full'] == 'Norm MacDonald'
    assert row['possessive'] == "MacDonald's"
    assert row['mentionable'] == 'normm'
    assert row['proper'] == 'Norm MacDonald'


def test_format_name_ascii_handles():
    row = format_name(PersonName('José', 'Éclair'), FormatOptions(ascii_handles=True))
    assert row['mentionable'] == 'josee'
    assert row['full'] == 'José Éclair'


def test_format_roster_skips_blank_names(caplog):
    roster = pd.DataFrame({'person_id': [1, 2, 3], 'name': ['Foo Bar', '   ', 'Baz']})
    with caplog.at_level(logging.WARNING):
        out = format_roster(roster)
    assert list(out['person_id']) == [1, 3]
    assert list(out['full']) == ['Foo Bar', 'Baz']
    assert list(out['possessive']) == ["Foo Bar's", "Baz's"]
    assert 'Skipped 1 roster rows' in caplog.text


def test_format_roster_empty():
    out = format_roster(pd.DataFrame({'name': []}))
    assert out.empty
    assert 'initials' in out.columns


def test_digest_sorts_by_last_name():
    roster = pd.DataFrame({'name': ['Will St. Clair', 'foo adams', 'David Heinemeier Hansson']})
    digest = digest_by_last_name(format_roster(roster))
    assert list(digest['sorted']) == ['adams, foo', 'Heinemeier Hansson, David', 'St. Clair, Will']
    assert 'familiar' not in digest.columns


def test_to_csv_bytes():
    df = pd.DataFrame({'full': ['Foo Bar'], 'initials': ['FB']})
    assert to_csv_bytes(df) == b"full,initials\nFoo Bar,FB\n"
