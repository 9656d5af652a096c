"""
ConstraintSet ("clues"): everything learned so far about the hidden answer.

State:
  - position_match[i]     : exact letter known at position i, or UNKNOWN
  - position_forbidden[i] : letters known NOT to be at position i
  - required_present      : letters known to occur somewhere in the answer

All three only ever grow: a position match is never cleared, and the
forbidden/required fields only gain bits. Constraints from successive
guesses are conjunctive.

The set exposes no public mutators. GameSession is the only writer; it uses
the underscore methods below.
"""

from __future__ import annotations

from typing import List

import numpy as np

from .codec import UNKNOWN, WORD_LENGTH, Word, decode
from .letters import EMPTY, LetterField


def letter_bits(words: np.ndarray) -> np.ndarray:
    """(n, L) letter codes -> (n, L) one-hot bitmasks (1 << letter)."""
    return np.left_shift(np.int64(1), words.astype(np.int64))


class ConstraintSet:
    def __init__(self):
        self.position_match: List[int] = [UNKNOWN] * WORD_LENGTH
        self.position_forbidden: List[LetterField] = [EMPTY] * WORD_LENGTH
        self.required_present: LetterField = EMPTY

    # ---- queries ----

    def matches(self, word: Word) -> bool:
        """True if `word` is consistent with every clue recorded so far."""
        in_word = 0
        for i, letter in enumerate(word):
            correct = self.position_match[i]
            if correct != UNKNOWN and correct != letter:
                return False
            if letter in self.position_forbidden[i]:
                return False
            in_word |= 1 << letter
        return self.required_present.issubset(LetterField(in_word))

    def mask(self, words: np.ndarray) -> np.ndarray:
        """
        Vectorised `matches` over an (n, WORD_LENGTH) array of letter codes.
        Returns a boolean array of length n.
        """
        ok = np.ones(len(words), dtype=bool)
        if len(words) == 0:
            return ok
        bits = letter_bits(words)
        for i in range(WORD_LENGTH):
            if self.position_match[i] != UNKNOWN:
                ok &= words[:, i] == self.position_match[i]
            if self.position_forbidden[i]:
                ok &= (bits[:, i] & self.position_forbidden[i].bits) == 0
        req = self.required_present.bits
        if req:
            present = np.bitwise_or.reduce(bits, axis=1)
            ok &= (present & req) == req
        return ok

    def copy(self) -> "ConstraintSet":
        # Fields are immutable values inside fresh lists, so this is a deep copy.
        out = ConstraintSet.__new__(ConstraintSet)
        out.position_match = list(self.position_match)
        out.position_forbidden = list(self.position_forbidden)
        out.required_present = self.required_present
        return out

    def __eq__(self, other) -> bool:
        if not isinstance(other, ConstraintSet):
            return NotImplemented
        return (self.position_match == other.position_match
                and self.position_forbidden == other.position_forbidden
                and self.required_present == other.required_present)

    def describe(self) -> str:
        """Multi-line dump, used in error messages and debug traces."""
        known = "".join("." if c == UNKNOWN else decode((c,)) for c in self.position_match)
        lines = [f"match={known} required={self.required_present}"]
        for i, f in enumerate(self.position_forbidden):
            lines.append(f"  not[{i}]={f}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"ConstraintSet({self.describe()!r})"

    # ---- writers (GameSession only) ----

    def _set_match(self, i: int, letter: int) -> None:
        self.position_match[i] = letter

    def _forbid(self, i: int, field: LetterField) -> None:
        self.position_forbidden[i] = self.position_forbidden[i] | field

    def _forbid_everywhere(self, field: LetterField) -> None:
        for i in range(WORD_LENGTH):
            self._forbid(i, field)

    def _require(self, field: LetterField) -> None:
        self.required_present = self.required_present | field
