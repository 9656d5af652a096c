"""
Feedback patterns under the session model (see game.py).

Conventions:
  - 'G'  : guess letter is at this position in the answer
  - 'Y'  : guess letter is in the answer, at another position
  - '-'  : guess letter does not occur in the answer

Unlike canonical Wordle there is no multiplicity accounting: a repeated
guess letter is 'Y' at every non-exact position as long as the answer
contains it at all. This is exactly the information GameSession.apply_guess
folds into its ConstraintSet, which gives the property the solver relies on:

  a word w satisfies the clues that guess g produced against answer a
  iff feedback(g, w) == feedback(g, a).

feedback_codes() computes the same pattern, base-3 encoded
('-'=0, 'Y'=1, 'G'=2, position i weighted by 3**i), for every
(guess, answer) pair at once.
"""

from __future__ import annotations

from typing import Literal

import numpy as np

from .clues import letter_bits
from .codec import WORD_LENGTH

PatternChar = Literal["G", "Y", "-"]

ALL_GREEN_CODE = sum(2 * 3 ** i for i in range(WORD_LENGTH))

_WEIGHTS = np.array([3 ** i for i in range(WORD_LENGTH)], dtype=np.int32)

# Upper bound on guesses*answers*WORD_LENGTH cells materialised per chunk.
_CHUNK_CELLS = 1 << 23


def feedback(guess: str, answer: str) -> str:
    """
    Examples:
      feedback("roate", "roate") -> "GGGGG"
      feedback("eerie", "sweet") -> "YY--Y"
    """
    guess = guess.strip().lower()
    answer = answer.strip().lower()
    assert len(guess) == len(answer), "Guess and answer must be the same length"
    present = set(answer)
    out = []
    for g, a in zip(guess, answer):
        if g == a:
            out.append("G")
        elif g in present:
            out.append("Y")
        else:
            out.append("-")
    return "".join(out)


def decode_pattern(code: int) -> str:
    chars = []
    for _ in range(WORD_LENGTH):
        code, label = divmod(int(code), 3)
        chars.append("-YG"[label])
    return "".join(chars)


def feedback_codes(guesses: np.ndarray, answers: np.ndarray) -> np.ndarray:
    """
    Pattern codes for every pair.

    Args:
      guesses : (nG, L) letter codes
      answers : (nA, L) letter codes

    Returns:
      (nG, nA) int32 matrix; row g, column a holds the code of feedback(g, a).
    """
    n_g, n_a = len(guesses), len(answers)
    out = np.empty((n_g, n_a), dtype=np.int32)
    if n_g == 0 or n_a == 0:
        return out

    present = np.bitwise_or.reduce(letter_bits(answers), axis=1)  # (nA,)
    g_bits = letter_bits(guesses)                                  # (nG, L)

    step = max(1, _CHUNK_CELLS // (n_a * WORD_LENGTH))
    for lo in range(0, n_g, step):
        hi = min(n_g, lo + step)
        green = guesses[lo:hi, None, :] == answers[None, :, :]
        in_word = (g_bits[lo:hi, None, :] & present[None, :, None]) != 0
        # green implies in_word, so '-'=0, 'Y'=1, 'G'=2 is a plain sum
        labels = in_word.astype(np.int32) + green
        out[lo:hi] = labels @ _WEIGHTS
    return out
