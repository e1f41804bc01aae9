"""
Keyboard State Aggregator

Folds every guess into the best outcome seen per letter, for keyboard
coloring.
"""

from typing import Dict, Sequence

from ..models.game import Guess, LetterOutcome

_PRIORITY = {
    LetterOutcome.EMPTY: 0,
    LetterOutcome.ABSENT: 1,
    LetterOutcome.PRESENT: 2,
    LetterOutcome.CORRECT: 3,
}


def aggregate(guesses: Sequence[Guess]) -> Dict[str, LetterOutcome]:
    """
    Best outcome per letter across all guesses.

    Status can only progress in priority order CORRECT > PRESENT > ABSENT,
    so the result does not depend on the order of the guesses.
    """
    keyboard_state: Dict[str, LetterOutcome] = {}
    for guess in guesses:
        for letter, outcome in zip(guess.word, guess.outcomes):
            current = keyboard_state.get(letter)
            if current is None or _PRIORITY[outcome] > _PRIORITY[current]:
                keyboard_state[letter] = outcome
    return keyboard_state
