"""
Word codec: letters <-> compact integer codes.

A Letter is an int in [0, ALPHABET_SIZE); a Word is a tuple of exactly
WORD_LENGTH letters. UNKNOWN (-1) is the "no letter" sentinel used by the
constraint set and is never part of a valid Word.

Examples:
  encode("roate") -> (17, 14, 0, 19, 4)
  decode((17, 14, 0, 19, 4)) -> "roate"
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

import numpy as np

from .errors import MalformedWordError

WORD_LENGTH = 5
ALPHABET_SIZE = 26
UNKNOWN = -1

Letter = int
Word = Tuple[int, ...]

_BASE = ord("a")


def encode(text: str) -> Word:
    """
    Convert a string such as "crane" into a Word.

    Surrounding whitespace is ignored and case is normalised; anything other
    than exactly WORD_LENGTH letters a–z raises MalformedWordError.
    """
    if not isinstance(text, str):
        raise MalformedWordError(f"expected a string, got {type(text).__name__}")
    w = text.strip().lower()
    if len(w) != WORD_LENGTH:
        raise MalformedWordError(f"{text!r}: expected {WORD_LENGTH} letters, got {len(w)}")
    letters = tuple(ord(ch) - _BASE for ch in w)
    if any(not (0 <= c < ALPHABET_SIZE) for c in letters):
        raise MalformedWordError(f"{text!r}: only letters a-z are allowed")
    return letters


def decode(word: Word) -> str:
    return "".join(chr(_BASE + c) for c in word)


def encode_many(texts: Iterable[str]) -> List[Word]:
    return [encode(t) for t in texts]


def as_array(words: Iterable[Word]) -> np.ndarray:
    """Stack Words into an (n, WORD_LENGTH) int8 array for the vectorised paths."""
    arr = np.array(list(words), dtype=np.int8)
    return arr.reshape(-1, WORD_LENGTH)
