"""Unit tests for the letter matching algorithm."""
import itertools

import pytest

from conftest import DICTIONARY
from word_game.models.game import LetterOutcome
from word_game.services.match_engine import check, create_guess, is_winning_guess

C = LetterOutcome.CORRECT
P = LetterOutcome.PRESENT
A = LetterOutcome.ABSENT


def test_exact_match_is_all_correct():
    assert check("ALLOY", "ALLOY") == [C, C, C, C, C]


def test_repeated_letters_do_not_overcount_present():
    # ALLOY has two L's: one is consumed by the exact match at index 1,
    # leaving one for the L at index 0. Only one A is available.
    assert check("LLAMA", "ALLOY") == [P, C, P, A, A]


def test_exact_match_consumes_before_partial_match():
    # The E at index 4 is an exact match, so only one E is left for index 0
    assert check("EERIE", "THERE") == [P, A, P, A, C]


def test_trace_against_crane():
    assert check("TRACE", "CRANE") == [A, C, C, P, C]


def test_case_insensitive():
    assert check("trace", "CRANE") == check("TRACE", "crane")


def test_length_mismatch_raises():
    with pytest.raises(ValueError):
        check("CRANES", "CRANE")


def test_outcome_count_invariant():
    five_letter = [w for w in DICTIONARY if len(w) == 5]
    for guess, target in itertools.product(five_letter, repeat=2):
        outcomes = check(guess, target)
        assert outcomes.count(C) + outcomes.count(P) + outcomes.count(A) == len(target)
        assert LetterOutcome.EMPTY not in outcomes


def test_check_is_idempotent():
    assert check("LLAMA", "ALLOY") == check("LLAMA", "ALLOY")


def test_create_guess_normalizes_word():
    guess = create_guess("crane", "CRANE")
    assert guess.word == "CRANE"
    assert guess.outcomes == (C, C, C, C, C)
    assert is_winning_guess(guess)
    assert not is_winning_guess(create_guess("trace", "crane"))
