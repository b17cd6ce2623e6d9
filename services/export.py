from __future__ import annotations
import pandas as pd

DIGEST_COLS = ['person_id', 'sorted', 'full', 'initials', 'mentionable', 'possessive']

def digest_by_last_name(formatted: pd.DataFrame) -> pd.DataFrame:
    cols = [c for c in DIGEST_COLS if c in formatted.columns]
    df = formatted[cols].copy()
    if 'sorted' in df.columns:
        df = df.sort_values('sorted', key=lambda s: s.str.lower())
    return df.reset_index(drop=True)

def to_csv_bytes(df: pd.DataFrame) -> bytes:
    return df.to_csv(index=False).encode('utf-8')
