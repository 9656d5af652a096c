from .core import (DEFAULT_NUM_TRIALS, evenly_spaced_indices, iter_trials, rank_opening_guesses,
                   run_trials, run_trials_and_average)
from .io import write_csv, write_manifest, write_rankings

__all__ = [
    "DEFAULT_NUM_TRIALS", "evenly_spaced_indices", "iter_trials", "rank_opening_guesses",
    "run_trials", "run_trials_and_average", "write_csv", "write_manifest", "write_rankings",
]
