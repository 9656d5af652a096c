"""
Greedy solver: always play the guess that leaves the fewest answers.

For one hidden answer the trial runs as a small state machine:

  SEEDED     feasible set = every candidate answer
  NARROWING  while more than one answer is feasible:
               1) score every word g in the guess dictionary by
                    sum over a in feasible of
                      |{w in feasible : session(a) + history + g matches w}|
               2) take the lowest score (first dictionary index wins ties)
               3) play it against the real answer and refilter
  SOLVED     exactly one feasible answer left, and it is the hidden one

Step 1 is the expensive part. Because the clues from (g, a) are satisfied by
w exactly when feedback(g, w) == feedback(g, a) (see engine/scoring.py), and
every feasible a shares the real session's history, the inner count is the
size of a's feedback bucket. The score is therefore the sum of squared bucket
sizes, which score_guesses() computes with numpy. score_guesses_by_session()
is the direct branch-and-match version and returns identical numbers.

The first guess is a fixed opener (default "roate", a precomputed strong
first guess). Pass opener=None to compute round 1 like every other round.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence

import numpy as np

from packages.datasets.io import unique_preserve_order
from packages.engine import (GameSession, InternalConsistencyError, Word, as_array, decode,
                             encode, encode_many, feedback, feedback_codes)
from packages.engine.scoring import ALL_GREEN_CODE

DEFAULT_OPENER = "roate"

# Pattern codes are < 3**5, so a row's buckets fit in this many bins.
_NUM_PATTERNS = ALL_GREEN_CODE + 1

# Upper bound on guess*answer pairs scored per numpy chunk.
_CHUNK_PAIRS = 1 << 21


class TrialState(Enum):
    SEEDED = "seeded"
    NARROWING = "narrowing"
    SOLVED = "solved"


class GuessScore(NamedTuple):
    index: int   # position in the guess dictionary
    score: int   # lower is better


@dataclass
class TrialResult:
    answer: str
    rounds: int
    guesses: List[str] = field(default_factory=list)
    patterns: List[str] = field(default_factory=list)
    remaining: List[int] = field(default_factory=list)  # feasible-set size after each guess
    time_ms: float = 0.0

    @property
    def history(self):
        return list(zip(self.guesses, self.patterns))


def build_dictionary(answers: Sequence[str], allowed: Sequence[str]) -> List[str]:
    """Answers first, then the remaining allowed guesses; duplicates dropped."""
    return unique_preserve_order([*answers, *allowed])


def bucket_square_sums(codes: np.ndarray) -> np.ndarray:
    """
    Per row of pattern codes, the sum of squared bucket sizes.

    A row with buckets of sizes {c_i} sums to sum_i c_i^2: every answer is
    counted once for each member of its own bucket.
    """
    n_rows = len(codes)
    if n_rows == 0 or codes.shape[1] == 0:
        return np.zeros(n_rows, dtype=np.int64)
    offsets = np.arange(n_rows, dtype=np.int64)[:, None] * _NUM_PATTERNS
    counts = np.bincount((codes + offsets).ravel(), minlength=n_rows * _NUM_PATTERNS)
    counts = counts.reshape(n_rows, _NUM_PATTERNS).astype(np.int64)
    return (counts * counts).sum(axis=1)


def pick_best(scores: Sequence[int]) -> GuessScore:
    """Lowest score; np.argmin returns the first index on ties."""
    idx = int(np.argmin(scores))
    return GuessScore(idx, int(scores[idx]))


class GreedySolver:
    """
    Args:
      dictionary : every word that may be guessed. The answers are always
                   guessable too; they are placed first and duplicates dropped.
      answers    : the candidate answer pool, in caller order.
      opener     : fixed first guess, or None to compute it.
    """

    def __init__(self, dictionary: Sequence[str], answers: Sequence[str], *,
                 opener: Optional[str] = DEFAULT_OPENER):
        self.answer_words: List[str] = list(answers)
        self.answers: List[Word] = encode_many(unique_preserve_order(self.answer_words))
        self.dictionary: List[Word] = encode_many(build_dictionary(self.answer_words, dictionary))
        self.opener: Optional[Word] = encode(opener) if opener else None
        self._dictionary_arr = as_array(self.dictionary)
        self.state = TrialState.SEEDED

    # ---- scoring ----

    def score_guesses(self, feasible: np.ndarray, lo: int = 0, hi: Optional[int] = None) -> np.ndarray:
        """
        Scores for dictionary[lo:hi] against the feasible answers (an
        (n, L) array). Slices can be scored independently and concatenated.
        """
        guesses = self._dictionary_arr[lo:hi]
        out = np.empty(len(guesses), dtype=np.int64)
        step = max(1, _CHUNK_PAIRS // max(1, len(feasible)))
        for start in range(0, len(guesses), step):
            stop = start + step
            out[start:stop] = bucket_square_sums(feedback_codes(guesses[start:stop], feasible))
        return out

    def score_guesses_by_session(self, feasible: Sequence[Word], history: Sequence[Word]) -> List[int]:
        """Reference scorer: branch a session per (answer, guess) and count matches."""
        scores = [0] * len(self.dictionary)
        for hypothetical in feasible:
            session = GameSession(hypothetical)
            session.apply_guesses(history)
            for i, g in enumerate(self.dictionary):
                branched = session.branch(g)
                scores[i] += sum(1 for w in feasible if branched.matches(w))
        return scores

    # ---- trial ----

    def solve(self, answer_index: int, debug: bool = False) -> TrialResult:
        """
        Play the greedy strategy against answers[answer_index] until only
        that answer remains feasible. Returns the round count and history.
        """
        if not 0 <= answer_index < len(self.answer_words):
            raise IndexError(f"answer_index {answer_index} out of range 0..{len(self.answer_words) - 1}")

        answer_text = self.answer_words[answer_index]
        answer = encode(answer_text)
        trial = GameSession(answer)
        feasible = list(self.answers)
        feasible_arr = as_array(feasible)
        result = TrialResult(answer=decode(answer), rounds=0)
        self.state = TrialState.SEEDED

        def commit(guess: Word, must_shrink: bool) -> None:
            nonlocal feasible, feasible_arr
            trial.apply_guess(guess)
            keep = trial.clues.mask(feasible_arr)
            narrowed = [w for w, k in zip(feasible, keep) if k]

            word = decode(guess)
            result.guesses.append(word)
            result.patterns.append(feedback(word, result.answer))
            result.remaining.append(len(narrowed))
            result.rounds += 1

            if not narrowed or answer not in narrowed:
                raise InternalConsistencyError(
                    "feasible set lost the true answer",
                    answer=result.answer, guesses=result.guesses,
                    constraints=trial.clues.describe())
            if must_shrink and len(narrowed) == len(feasible):
                raise InternalConsistencyError(
                    f"guess {word!r} did not narrow {len(feasible)} feasible answers",
                    answer=result.answer, guesses=result.guesses,
                    constraints=trial.clues.describe())

            feasible = narrowed
            feasible_arr = feasible_arr[keep]
            if debug:
                print(f"best_guess: {word} {result.patterns[-1]}")
                print("new valid answers: ")
                for w in feasible:
                    print(decode(w))

        t0 = time.perf_counter_ns()
        if self.opener is not None:
            commit(self.opener, must_shrink=False)

        while len(feasible) > 1:
            self.state = TrialState.NARROWING
            best = pick_best(self.score_guesses(feasible_arr))
            commit(self.dictionary[best.index], must_shrink=True)

        self.state = TrialState.SOLVED
        result.time_ms = (time.perf_counter_ns() - t0) / 1_000_000.0

        if debug:
            print("Guesses:")
            for w in result.guesses:
                print(f"  {w}")
        return result


def solve(dictionary: Sequence[str], answers: Sequence[str], answer_index: int,
          debug: bool = False, opener: Optional[str] = DEFAULT_OPENER) -> int:
    """Number of greedy guesses needed to pin down answers[answer_index]."""
    return GreedySolver(dictionary, answers, opener=opener).solve(answer_index, debug=debug).rounds
