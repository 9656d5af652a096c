from .greedy import (DEFAULT_OPENER, GreedySolver, GuessScore, TrialResult, TrialState,
                     build_dictionary, pick_best, solve)

__all__ = [
    "DEFAULT_OPENER", "GreedySolver", "GuessScore", "TrialResult", "TrialState",
    "build_dictionary", "pick_best", "solve",
]
