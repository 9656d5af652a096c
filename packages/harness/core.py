"""
Batch evaluation on top of the greedy solver.

- rank_opening_guesses: offline ranking of first guesses by how far they cut
                        a sample of answers (slow; not a hot path).
- iter_trials / run_trials: run GreedySolver.solve for many answers.
- run_trials_and_average: mean round count over a sample.

Both loops are embarrassingly parallel. With workers > 1 they fan out over a
multiprocessing.Pool whose workers get read-only copies of the word lists
through the pool initializer. Results come back in input order, so
averages, rankings and tie-breaks do not depend on how work was split.
"""

from __future__ import annotations

from multiprocessing import Pool
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np
from tqdm import tqdm

from packages.datasets.io import unique_preserve_order
from packages.engine import as_array, encode_many
from packages.engine.scoring import feedback_codes
from packages.solvers.greedy import (DEFAULT_OPENER, GreedySolver, TrialResult,
                                     bucket_square_sums)

# Evenly spaced answers per batch run.
DEFAULT_NUM_TRIALS = 50

# Guesses per ranking task handed to a worker.
RANK_CHUNK = 256


def evenly_spaced_indices(num_answers: int, num_trials: int = DEFAULT_NUM_TRIALS) -> List[int]:
    """
    Indices i * (num_answers // num_trials) for i < num_trials.
    num_trials is capped at num_answers so every index is distinct.
    """
    if num_answers <= 0 or num_trials <= 0:
        return []
    num_trials = min(num_trials, num_answers)
    step = num_answers // num_trials
    return [i * step for i in range(num_trials)]


# -----------------------------
# Opening-guess ranking
# -----------------------------

_RANK_SAMPLE: Optional[np.ndarray] = None


def _init_rank_worker(sample: np.ndarray) -> None:
    global _RANK_SAMPLE
    _RANK_SAMPLE = sample


def _rank_chunk(guesses: np.ndarray) -> np.ndarray:
    return bucket_square_sums(feedback_codes(guesses, _RANK_SAMPLE))


def rank_opening_guesses(
        dictionary: Sequence[str],
        answer_sample: Sequence[str],
        *,
        top: Optional[int] = None,
        workers: int = 1,
        progress: bool = False,
) -> List[Tuple[str, int]]:
    """
    Rank every dictionary word as a first guess.

    A guess scores, summed over each sampled answer, the number of sampled
    answers still feasible after playing that guess against it. Lower is
    better. The result is sorted ascending; equal scores keep dictionary
    order.

    Args:
      dictionary    : candidate first guesses (duplicates dropped)
      answer_sample : the answers to evaluate against; repeats count every time
      top           : keep only the best `top` entries
      workers       : >1 scores dictionary chunks in a process pool
      progress      : show a tqdm bar over chunks
    """
    words = unique_preserve_order(dictionary)
    guesses = as_array(encode_many(words))
    sample = as_array(encode_many(answer_sample))

    chunks = [guesses[lo:lo + RANK_CHUNK] for lo in range(0, len(guesses), RANK_CHUNK)]
    bar = dict(total=len(chunks), ncols=80, desc="Ranking", unit="chunk", disable=not progress)

    if workers > 1 and len(chunks) > 1:
        with Pool(workers, initializer=_init_rank_worker, initargs=(sample,)) as pool:
            parts = list(tqdm(pool.imap(_rank_chunk, chunks), **bar))
    else:
        _init_rank_worker(sample)
        parts = [_rank_chunk(c) for c in tqdm(chunks, **bar)]

    scores = np.concatenate(parts) if parts else np.zeros(0, dtype=np.int64)
    order = np.argsort(scores, kind="stable")
    if top is not None:
        order = order[:top]
    return [(words[i], int(scores[i])) for i in order]


# -----------------------------
# Greedy trials
# -----------------------------

_TRIAL_SOLVER: Optional[GreedySolver] = None


def _init_trial_worker(dictionary: List[str], answers: List[str], opener: Optional[str]) -> None:
    global _TRIAL_SOLVER
    _TRIAL_SOLVER = GreedySolver(dictionary, answers, opener=opener)


def _solve_one(answer_index: int) -> Tuple[int, TrialResult]:
    return answer_index, _TRIAL_SOLVER.solve(answer_index)


def iter_trials(
        dictionary: Sequence[str],
        answers: Sequence[str],
        sample_indices: Sequence[int],
        *,
        opener: Optional[str] = DEFAULT_OPENER,
        workers: int = 1,
) -> Iterator[Tuple[int, TrialResult]]:
    """
    Yield (answer_index, TrialResult) for each sampled answer, in the order
    of `sample_indices`.
    """
    dictionary, answers, indices = list(dictionary), list(answers), list(sample_indices)
    if workers > 1 and len(indices) > 1:
        with Pool(workers, initializer=_init_trial_worker,
                  initargs=(dictionary, answers, opener)) as pool:
            yield from pool.imap(_solve_one, indices)
    else:
        solver = GreedySolver(dictionary, answers, opener=opener)
        for idx in indices:
            yield idx, solver.solve(idx)


def run_trials(
        dictionary: Sequence[str],
        answers: Sequence[str],
        sample_indices: Sequence[int],
        *,
        opener: Optional[str] = DEFAULT_OPENER,
        workers: int = 1,
        progress: bool = False,
) -> List[TrialResult]:
    it = iter_trials(dictionary, answers, sample_indices, opener=opener, workers=workers)
    it = tqdm(it, total=len(sample_indices), ncols=80, desc="Trials", unit="game",
              disable=not progress)
    return [r for _, r in it]


def run_trials_and_average(
        dictionary: Sequence[str],
        answers: Sequence[str],
        sample_indices: Sequence[int],
        *,
        opener: Optional[str] = DEFAULT_OPENER,
        workers: int = 1,
        progress: bool = False,
) -> float:
    """Mean greedy round count over answers[i] for i in sample_indices."""
    if len(sample_indices) == 0:
        raise ValueError("sample_indices is empty")
    results = run_trials(dictionary, answers, sample_indices,
                         opener=opener, workers=workers, progress=progress)
    return sum(r.rounds for r in results) / len(results)
