import os
import random
import sys
import tempfile
from typing import Iterable, Optional

import pytest

# Keep test logs out of the working tree; must happen before word_game is imported
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "word_game_test_logs"))

# Ensure the project root is on the python path for all tests
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from word_game.models.game import Difficulty  # noqa: E402
from word_game.services.game_session import GameSession  # noqa: E402
from word_game.services.game_store import InMemoryGameStore  # noqa: E402
from word_game.services.word_provider import StaticWordProvider  # noqa: E402

DICTIONARY = [
    "crane", "trace", "nacre", "slate", "plant", "table", "alloy", "llama",
    "ghost", "mouse", "house", "eerie", "there", "cat", "dog",
]


class FixedWordProvider(StaticWordProvider):
    """Always picks the same target; accepts a fixed dictionary."""

    def __init__(self, target: Optional[str], valid_words: Iterable[str] = DICTIONARY):
        super().__init__([target] if target else [], valid_words)
        self.target = target


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        self.now += 1.0
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_session(clock):
    """Factory for a started session with a known target."""
    def _make(target: str = "CRANE", difficulty: Difficulty = Difficulty.MEDIUM,
              valid_words: Iterable[str] = DICTIONARY) -> GameSession:
        session = GameSession(FixedWordProvider(target, valid_words), rng=random.Random(7), clock=clock)
        result = session.restart(difficulty, len(target))
        assert result.success
        return session
    return _make


@pytest.fixture
def store():
    return InMemoryGameStore()


def type_word(session: GameSession, word: str) -> None:
    for letter in word:
        session.add_letter(letter)


def play(session: GameSession, word: str):
    type_word(session, word)
    return session.submit_guess()
