"""
Exceptions raised by the engine and the solvers built on top of it.
"""

from __future__ import annotations


class MalformedWordError(ValueError):
    """A string does not decode to exactly WORD_LENGTH letters a–z."""


class InternalConsistencyError(RuntimeError):
    """
    The feasible-answer set lost the true answer (or became empty) during a
    solve. This is a bug in the constraint logic, never a data problem, so it
    is not meant to be caught and retried.

    Carries the context needed to reproduce the failure.
    """

    def __init__(self, message: str, *, answer: str = "", guesses=(), constraints: str = ""):
        self.answer = answer
        self.guesses = list(guesses)
        self.constraints = constraints
        detail = f"{message} (answer={answer!r}, guesses={self.guesses})"
        if constraints:
            detail += f"\n{constraints}"
        super().__init__(detail)
