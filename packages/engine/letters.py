"""
LetterField: a set of letters packed into an int (bit i set <=> letter i).

Used both as a per-position "forbidden letters" set and as a whole-word
"letters known present" set. Immutable; every operation returns a new field.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from .codec import ALPHABET_SIZE


@dataclass(frozen=True)
class LetterField:
    bits: int = 0

    @classmethod
    def from_letters(cls, letters: Iterable[int]) -> "LetterField":
        bits = 0
        for c in letters:
            bits |= 1 << c
        return cls(bits)

    def __or__(self, other: "LetterField") -> "LetterField":
        return LetterField(self.bits | other.bits)

    def __contains__(self, letter: int) -> bool:
        return bool(self.bits >> letter & 1)

    def __bool__(self) -> bool:
        return self.bits != 0

    def __len__(self) -> int:
        return bin(self.bits).count("1")

    def issubset(self, other: "LetterField") -> bool:
        return self.bits & other.bits == self.bits

    def letters(self) -> List[int]:
        return [c for c in range(ALPHABET_SIZE) if c in self]

    def __str__(self) -> str:
        return "".join(chr(ord("a") + c) for c in self.letters()) or "{}"


EMPTY = LetterField()
