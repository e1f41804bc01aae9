"""
Match Engine

Implements the authentic Wordle letter evaluation algorithm.
"""

from collections import Counter
from typing import List

from ..models.game import Guess, LetterOutcome


def check(guess: str, target: str) -> List[LetterOutcome]:
    """
    Evaluate *guess* against *target*, position by position.

    Exact matches consume their letter from the target before any partial
    match is considered, so a repeated guess letter is only marked PRESENT
    while unmatched copies remain in the target.

    Args:
        guess: The guessed word
        target: The hidden word, same length as the guess

    Returns:
        List of LetterOutcome, one per letter of the guess

    Raises:
        ValueError: If the two words differ in length
    """
    if len(guess) != len(target):
        raise ValueError(
            f"guess length ({len(guess)}) != target length ({len(target)})"
        )

    guess = guess.upper()
    target = target.upper()

    result = [LetterOutcome.ABSENT] * len(guess)
    remaining = Counter(target)

    # First pass: exact position matches
    for i, (g, t) in enumerate(zip(guess, target)):
        if g == t:
            result[i] = LetterOutcome.CORRECT
            remaining[g] -= 1

    # Second pass: right letter, wrong position
    for i, g in enumerate(guess):
        if result[i] == LetterOutcome.CORRECT:
            continue
        if remaining[g] > 0:
            result[i] = LetterOutcome.PRESENT
            remaining[g] -= 1

    return result


def create_guess(word: str, target: str) -> Guess:
    """Create a Guess for *word* with its outcomes against *target*."""
    return Guess(word=word.upper(), outcomes=tuple(check(word, target)))


def is_winning_guess(guess: Guess) -> bool:
    return guess.is_winning
