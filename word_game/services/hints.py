"""
Hint Engine

Picks a letter of the target word the player has not uncovered yet.
"""

import random
from typing import List, Optional, Sequence, Set

from ..models.game import Guess, HintResult, LetterOutcome


def _guessed_letters(guesses: Sequence[Guess]) -> Set[str]:
    return {letter for guess in guesses for letter in guess.word}


def _revealed_positions(guesses: Sequence[Guess]) -> Set[int]:
    return {
        index
        for guess in guesses
        for index, outcome in enumerate(guess.outcomes)
        if outcome == LetterOutcome.CORRECT
    }


def available_hint_letters(target: str, guesses: Sequence[Guess]) -> List[str]:
    """
    Letters of *target* that were never typed in a guess and whose position
    was never revealed as CORRECT.

    Returns:
        List of distinct uppercase letters, in the order they first occur in
        the target
    """
    guessed = _guessed_letters(guesses)
    revealed = _revealed_positions(guesses)

    hints: List[str] = []
    for index, char in enumerate(target.upper()):
        if char in guessed or index in revealed:
            continue
        if char not in hints:
            hints.append(char)
    return hints


def get_hint(target: str, guesses: Sequence[Guess],
             rng: Optional[random.Random] = None) -> Optional[HintResult]:
    """
    Choose a random hint letter and one of its unrevealed positions.

    Returns:
        HintResult, or None when no hint is left
    """
    rng = rng or random.Random()
    letters = available_hint_letters(target, guesses)
    if not letters:
        return None

    letter = rng.choice(letters)
    revealed = _revealed_positions(guesses)
    positions = [
        index for index, char in enumerate(target.upper())
        if char == letter and index not in revealed
    ]
    return HintResult(letter=letter, position=rng.choice(positions) if positions else None)
