from __future__ import annotations
import re
import unicodedata
from typing import Optional, Tuple

BRACKETED_RE = re.compile(r"[(\[].*[)\]]")
LETTER_RE = re.compile(r"[^\W\d_]")
SEPARATOR_RE = re.compile(r"(['-])")
MAC_RE = re.compile(r"^(mac|mc)([^\W\d_])(.*)$", re.IGNORECASE)

SEPARATORS = {"'", "-"}

def strip_diacritics(s: str) -> str:
    return ''.join(c for c in unicodedata.normalize('NFKD', s) if not unicodedata.combining(c))

def squish(s: Optional[str]) -> str:
    if not s:
        return ''
    return re.sub(r"\s+", ' ', s).strip()

def split_first_last(n: str) -> Tuple[str, Optional[str]]:
    """Split on the first space; everything after it is the last name."""
    first, _, last = n.partition(' ')
    return first, last or None

def initials(s: str) -> str:
    # "(Basecamp)" and "[Basecamp]" never contribute
    s = BRACKETED_RE.sub('', s)
    letters = (LETTER_RE.search(tok) for tok in s.split())
    return ''.join(m.group(0) for m in letters if m).upper()

def _proper_segment(seg: str) -> str:
    m = MAC_RE.match(seg)
    if m:
        prefix, letter, rest = m.groups()
        return prefix.capitalize() + letter.upper() + rest.lower()
    return seg.capitalize()

def proper_word(word: str) -> str:
    """Title-case a single name word.

    Segments joined by an apostrophe or hyphen are capitalised on their own
    (``o'dell`` -> ``O'Dell``) and a ``mac``/``mc`` prefix upper-cases the
    letter that follows it (``macdonald`` -> ``MacDonald``).
    """
    parts = SEPARATOR_RE.split(word)
    return ''.join(p if p in SEPARATORS else _proper_segment(p) for p in parts)

def proper_case(s: str) -> str:
    return ' '.join(proper_word(w) for w in s.split(' '))
