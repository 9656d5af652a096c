import numpy as np
import pytest
from packages.engine import ConstraintSet, GameSession, InternalConsistencyError, as_array, encode
from packages.solvers import (GreedySolver, GuessScore, TrialState, build_dictionary, pick_best,
                              solve)

ANSWERS = ["crane", "raise", "stare", "trace", "cared", "adieu", "alone", "roate",
           "slate", "sweet", "level", "lemon", "scoop"]
ALLOWED = ["salet", "tares", "fjord", "fuzzy", "eerie", "crane"]


def test_build_dictionary_puts_answers_first_and_dedupes():
    d = build_dictionary(["crane", "stare"], ["tares", "crane", "salet"])
    assert d == ["crane", "stare", "tares", "salet"]


def test_solve_answer_equal_to_opener_takes_one_round():
    assert solve(ALLOWED, ANSWERS, ANSWERS.index("roate")) == 1


@pytest.mark.parametrize("opener", ["roate", None])
def test_every_answer_is_solved(opener):
    solver = GreedySolver(ALLOWED, ANSWERS, opener=opener)
    for idx, answer in enumerate(ANSWERS):
        r = solver.solve(idx)
        assert solver.state is TrialState.SOLVED
        assert r.answer == answer
        assert r.rounds == len(r.guesses) == len(r.patterns) >= 1
        assert r.remaining[-1] == 1
        assert r.remaining == sorted(r.remaining, reverse=True)
        # replaying the chosen guesses leaves only the answer
        s = GameSession(encode(answer))
        s.apply_guesses([encode(g) for g in r.guesses])
        assert [a for a in ANSWERS if s.matches(encode(a))] == [answer]


def test_opener_is_played_first():
    r = GreedySolver(ALLOWED, ANSWERS, opener="salet").solve(ANSWERS.index("crane"))
    assert r.guesses[0] == "salet"


def test_solve_is_deterministic():
    a = GreedySolver(ALLOWED, ANSWERS, opener=None).solve(3)
    b = GreedySolver(ALLOWED, ANSWERS, opener=None).solve(3)
    assert a.guesses == b.guesses and a.rounds == b.rounds


def test_single_answer_pool():
    assert GreedySolver([], ["crane"], opener=None).solve(0).rounds == 0
    assert GreedySolver([], ["crane"]).solve(0).rounds == 1


def test_vectorised_scores_match_session_scores():
    solver = GreedySolver(ALLOWED, ANSWERS, opener=None)
    feasible = solver.answers
    fast = solver.score_guesses(as_array(feasible))
    assert list(fast) == solver.score_guesses_by_session(feasible, [])


def test_vectorised_scores_match_session_scores_with_history():
    solver = GreedySolver(ALLOWED, ANSWERS, opener=None)
    history = [encode("lemon")]
    trial = GameSession(encode("stare"))
    trial.apply_guesses(history)
    feasible = [w for w in solver.answers if trial.matches(w)]
    assert len(feasible) > 1
    fast = solver.score_guesses(as_array(feasible))
    assert list(fast) == solver.score_guesses_by_session(feasible, history)


def test_score_slices_concatenate():
    solver = GreedySolver(ALLOWED, ANSWERS, opener=None)
    feasible = as_array(solver.answers)
    whole = solver.score_guesses(feasible)
    parts = np.concatenate([solver.score_guesses(feasible, 0, 5),
                            solver.score_guesses(feasible, 5, None)])
    assert list(whole) == list(parts)


def test_pick_best_first_index_wins_ties():
    assert pick_best([3, 1, 2, 1]) == GuessScore(1, 1)


def test_debug_trace(capsys):
    r = GreedySolver(ALLOWED, ANSWERS).solve(ANSWERS.index("trace"), debug=True)
    out = capsys.readouterr().out
    assert "best_guess: roate" in out
    assert "Guesses:" in out
    assert out.rstrip().endswith(r.guesses[-1])


def test_bad_index():
    with pytest.raises(IndexError):
        GreedySolver(ALLOWED, ANSWERS).solve(len(ANSWERS))


def test_lost_answer_is_fatal(monkeypatch):
    monkeypatch.setattr(ConstraintSet, "mask", lambda self, words: np.zeros(len(words), dtype=bool))
    with pytest.raises(InternalConsistencyError) as e:
        GreedySolver(ALLOWED, ANSWERS).solve(0)
    assert e.value.answer == "crane"
    assert e.value.guesses == ["roate"]
    assert "match=" in e.value.constraints


def test_non_narrowing_pick_is_fatal(monkeypatch):
    # "fuzzy" shares no letters with either answer, so playing it splits nothing
    solver = GreedySolver(["fuzzy"], ["crane", "trace"], opener=None)
    fuzzy = solver.dictionary.index(encode("fuzzy"))
    monkeypatch.setattr(GreedySolver, "score_guesses",
                        lambda self, feasible, lo=0, hi=None:
                        np.array([0 if i == fuzzy else 9 for i in range(len(self.dictionary))]))
    with pytest.raises(InternalConsistencyError, match="did not narrow 2") as e:
        solver.solve(0)
    assert e.value.answer == "crane"
    assert e.value.guesses == ["fuzzy"]
    assert "required=" in e.value.constraints


def test_history_pairs_guesses_with_patterns():
    r = GreedySolver(ALLOWED, ANSWERS).solve(ANSWERS.index("trace"))
    assert r.history[0] == ("roate", "Y-GYG")
    assert [g for g, _ in r.history] == r.guesses
