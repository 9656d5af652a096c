from .codec import (ALPHABET_SIZE, UNKNOWN, WORD_LENGTH, Word, as_array, decode, encode,
                    encode_many)
from .errors import InternalConsistencyError, MalformedWordError
from .letters import LetterField
from .clues import ConstraintSet
from .game import GameSession
from .scoring import feedback, feedback_codes, decode_pattern

__all__ = [
    "WORD_LENGTH", "ALPHABET_SIZE", "UNKNOWN", "Word",
    "encode", "decode", "encode_many", "as_array",
    "MalformedWordError", "InternalConsistencyError",
    "LetterField", "ConstraintSet", "GameSession",
    "feedback", "feedback_codes", "decode_pattern",
]
