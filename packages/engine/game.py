"""
GameSession: one hidden answer plus the clues gathered against it.

apply_guess() plays a guess against the answer and folds the resulting
feedback into the session's ConstraintSet:

  - exact letter           -> position_match[i] = letter
  - present, wrong place   -> forbidden at position i only
  - absent from the answer -> forbidden at every position

Every guess letter that occurs in the answer (exact matches included) is
added to required_present.

Duplicate letters are NOT counted: a letter is either in the answer or not.
Guessing "eerie" against "sweet" forbids 'e' at positions 0, 1 and 4 and
requires 'e', but never learns that the answer holds exactly two of them.
"""

from __future__ import annotations

from typing import Iterable

from .clues import ConstraintSet
from .codec import Word
from .letters import LetterField


class GameSession:
    def __init__(self, answer: Word):
        self._answer = tuple(answer)
        self._presence = LetterField.from_letters(self._answer)
        self.clues = ConstraintSet()

    @property
    def answer(self) -> Word:
        return self._answer

    @property
    def answer_presence(self) -> LetterField:
        return self._presence

    def apply_guess(self, guess: Word) -> None:
        clues = self.clues
        for i, (g, a) in enumerate(zip(guess, self._answer)):
            bit = LetterField.from_letters((g,))
            if g in self._presence:
                clues._require(bit)
                if g == a:
                    clues._set_match(i, g)
                else:
                    clues._forbid(i, bit)
            else:
                clues._forbid_everywhere(bit)

    def apply_guesses(self, guesses: Iterable[Word]) -> None:
        for g in guesses:
            self.apply_guess(g)

    def branch(self, guess: Word) -> "GameSession":
        """Independent copy of this session with `guess` applied."""
        out = GameSession.__new__(GameSession)
        out._answer = self._answer
        out._presence = self._presence
        out.clues = self.clues.copy()
        out.apply_guess(guess)
        return out

    def matches(self, word: Word) -> bool:
        return self.clues.matches(word)
