from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Dict, Optional

import pandas as pd

from naming.normalise import squish, strip_diacritics
from naming.person_name import PersonName, Possessive

logger = logging.getLogger(__name__)

ALIAS_MAP = {
    "full_name": "name",
    "fullname": "name",
    "donor_name": "name",
    "person": "name",
    "first_name": "first",
    "given_name": "first",
    "last_name": "last",
    "surname": "last",
    "family_name": "last",
    "id": "person_id",
}

COLUMNS = ['first', 'last', 'full', 'familiar', 'abbreviated', 'sorted',
           'initials', 'mentionable', 'possessive', 'proper']

@dataclass
class FormatOptions:
    possessive: Possessive = Possessive.FULL
    proper: bool = False
    ascii_handles: bool = False

def load_roster(content: bytes) -> pd.DataFrame:
    """Read a CSV (or, failing that, XLSX) roster and normalise its headers.

    Requires a ``name`` column or a ``first`` column (after alias mapping).
    """
    try:
        df = pd.read_csv(io.BytesIO(content))
    except (UnicodeDecodeError, pd.errors.ParserError):
        logger.debug("Roster is not CSV, trying Excel")
        df = pd.read_excel(io.BytesIO(content))

    df.columns = [str(c).strip().lower().replace(" ", "_") for c in df.columns]
    df = df.rename(columns={k: v for k, v in ALIAS_MAP.items() if k in df.columns})

    if "name" not in df.columns and "first" not in df.columns:
        raise ValueError("Roster is missing a 'name' column. Required: name (or first). Optional: last, person_id")
    logger.info("Loaded roster with %d rows", len(df))
    return df

def _cell(value) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ''
    return squish(str(value))

def name_from_record(rec: Dict) -> Optional[PersonName]:
    first = _cell(rec.get('first'))
    if first:
        return PersonName(first, _cell(rec.get('last')))
    return PersonName.make(_cell(rec.get('name')))

def format_name(name: PersonName, options: FormatOptions) -> Dict[str, Optional[str]]:
    if options.proper:
        name = PersonName(name.proper('first'), name.proper('last'))
    handle = name.mentionable
    if options.ascii_handles:
        handle = strip_diacritics(handle)
    return {
        'first': name.first,
        'last': name.last,
        'full': name.full,
        'familiar': name.familiar,
        'abbreviated': name.abbreviated,
        'sorted': name.sorted,
        'initials': name.initials,
        'mentionable': handle,
        'possessive': name.possessive(options.possessive),
        'proper': name.proper(),
    }

def format_roster(roster: pd.DataFrame, options: Optional[FormatOptions] = None) -> pd.DataFrame:
    options = options or FormatOptions()
    has_id = 'person_id' in roster.columns

    rows = []
    skipped = 0
    for rec in roster.to_dict('records'):
        name = name_from_record(rec)
        if name is None:
            skipped += 1
            continue
        row = format_name(name, options)
        if has_id:
            row = {'person_id': rec.get('person_id'), **row}
        rows.append(row)

    if skipped:
        logger.warning("Skipped %d roster rows without a usable name", skipped)
    columns = ['person_id', *COLUMNS] if has_id else COLUMNS
    return pd.DataFrame(rows, columns=columns)
