"""
Scoring Engine

Score of a game from its accumulated letter outcomes, remaining attempts and
hints taken.
"""

import math
from typing import Sequence

from ..config.game_settings import (
    HINT_PENALTY, MAX_ATTEMPTS_BY_DIFFICULTY, SCORE_PER_CORRECT_LETTER,
    SCORE_PER_PRESENT_LETTER, SCORE_PER_REMAINING_ATTEMPT
)
from ..models.game import Difficulty, Guess, LetterOutcome


def max_attempts(difficulty: Difficulty) -> int:
    """Number of guesses a game of this difficulty allows."""
    return MAX_ATTEMPTS_BY_DIFFICULTY[difficulty.value]


def calculate_score(guesses: Sequence[Guess], attempts_left: int, hints_used: int = 0) -> int:
    """
    Calculate the game score.

    Every CORRECT outcome across all guesses is worth one point, every
    PRESENT outcome half a point and every remaining attempt three points.
    Each hint costs half a point. The penalty is subtracted first and the
    result is then clamped at zero and floored.

    Args:
        guesses: All guesses submitted so far
        attempts_left: Attempts still available
        hints_used: Hints taken so far

    Returns:
        int: Non-negative score
    """
    correct = 0
    present = 0
    for guess in guesses:
        for outcome in guess.outcomes:
            if outcome == LetterOutcome.CORRECT:
                correct += 1
            elif outcome == LetterOutcome.PRESENT:
                present += 1

    raw = (correct * SCORE_PER_CORRECT_LETTER
           + present * SCORE_PER_PRESENT_LETTER
           + attempts_left * SCORE_PER_REMAINING_ATTEMPT
           - hints_used * HINT_PENALTY)

    return math.floor(max(0.0, raw))
