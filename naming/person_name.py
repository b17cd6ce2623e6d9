from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .normalise import squish, split_first_last, initials, proper_case

class Possessive(str, Enum):
    """Which rendering of the name receives the possessive suffix."""
    FULL = 'full'
    FIRST = 'first'
    LAST = 'last'
    SORTED = 'sorted'
    INITIALS = 'initials'
    ABBREVIATED = 'abbreviated'

@dataclass(frozen=True)
class PersonName:
    """A person's name split into first and (optional) last parts.

    ``last`` is never stored as an empty string: ``PersonName('Baz', '')``
    is the same value as ``PersonName('Baz')``.
    """
    first: str
    last: Optional[str] = None

    def __post_init__(self) -> None:
        if self.last == '':
            object.__setattr__(self, 'last', None)

    @classmethod
    def make(cls, text: Optional[str] = None) -> Optional[PersonName]:
        """Parse a free-form full name such as ``"Will St. Clair"``.

        Returns None for missing or blank input.
        """
        s = squish(text)
        if not s:
            return None
        first, last = split_first_last(s)
        return cls(first, last)

    def __str__(self) -> str:
        return self.full

    @property
    def full(self) -> str:
        return f"{self.first} {self.last}" if self.last else self.first

    @property
    def familiar(self) -> str:
        return f"{self.first} {self.last[0]}." if self.last else self.first

    @property
    def abbreviated(self) -> str:
        return f"{self.first[:1]}. {self.last}" if self.last else self.first

    @property
    def sorted(self) -> str:
        return f"{self.last}, {self.first}" if self.last else self.first

    @property
    def initials(self) -> str:
        return initials(self.full)

    @property
    def mentionable(self) -> str:
        if self.last:
            return (self.first + self.last[0]).lower()
        return self.first[:3].lower()

    def possessive(self, mode: Union[Possessive, str] = Possessive.FULL) -> str:
        mode = Possessive(mode)
        if mode is Possessive.LAST:
            whose = self.last or self.first
        else:
            whose = getattr(self, mode.value)
        return whose + ("'" if whose.lower().endswith('s') else "'s")

    def proper(self, part: str = 'full') -> Optional[str]:
        """Name-aware title case of ``'first'``, ``'last'`` or the full name.

        Any other ``part`` is treated as ``'full'``; ``proper('last')`` is None
        when there is no last name.
        """
        first = proper_case(self.first)
        if part == 'first':
            return first
        last = proper_case(self.last) if self.last else None
        if part == 'last':
            return last
        return f"{first} {last}" if last else first
