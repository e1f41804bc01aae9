"""
Game Configuration Constants Module

This module defines the game rule constants: scoring weights, attempt limits
per difficulty and the supported word lengths. All game parameters are
centralized here so the engine never carries magic numbers.
"""

from typing import Dict, Final, List

# Scoring weights
SCORE_PER_CORRECT_LETTER: Final[float] = 1.0
SCORE_PER_PRESENT_LETTER: Final[float] = 0.5
SCORE_PER_REMAINING_ATTEMPT: Final[float] = 3.0
HINT_PENALTY: Final[float] = 0.5
"""
Points deducted per hint taken. Subtracted before the score is floored.
"""

# Attempts allowed per difficulty, keyed by Difficulty.value
MAX_ATTEMPTS_BY_DIFFICULTY: Final[Dict[str, int]] = {
    "easy": 7,
    "medium": 5,
    "hard": 3,
}

# Word length options offered to the player
WORD_LENGTH_OPTIONS: Final[List[int]] = list(range(3, 15))

DEFAULT_WORD_LENGTH: Final[int] = 5
DEFAULT_DIFFICULTY: Final[str] = "medium"

ALPHABET: Final[str] = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Version written into every persisted record
SCHEMA_VERSION: Final[int] = 1


def is_valid_word_length(length: int) -> bool:
    """Check whether a word length is one the game offers."""
    return length in WORD_LENGTH_OPTIONS
