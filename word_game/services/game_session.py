"""
Game Session

State machine for a single game: buffers typed letters, validates and
evaluates submitted guesses, hands out hints and decides when the game is won
or lost. Persistence and statistics are left to the caller; a session only
exposes its finished GameState.
"""

import logging
import random
import time
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from ..config.game_settings import ALPHABET
from ..models.game import (
    ActionResult, Difficulty, GameError, GameState, GameStatus, LetterOutcome
)
from ..models.progress import GameSummary
from . import hints, keyboard, match_engine, scoring, statistics
from .word_provider import WordProvider

logger = logging.getLogger(__name__)


class SessionEvent(Enum):
    """Events published to session listeners."""
    GAME_STARTED = "game_started"
    GUESS_ACCEPTED = "guess_accepted"
    INVALID_GUESS = "invalid_guess"
    HINT_USED = "hint_used"
    GAME_WON = "game_won"
    GAME_LOST = "game_lost"


SessionListener = Callable[[SessionEvent, Dict[str, Any]], None]


class GameSession:
    """
    Owns the GameState of one game at a time.

    Not thread-safe: callers must serialize access to a session.

    Args:
        word_provider: Source of target words and dictionary membership
        rng: Random source for hints
        clock: Returns the current time in epoch seconds
    """

    def __init__(self, word_provider: WordProvider, rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = time.time):
        self.word_provider = word_provider
        self._rng = rng or random.Random()
        self._clock = clock
        self._state: Optional[GameState] = None
        self._keyboard_state: Dict[str, LetterOutcome] = {}
        self._listeners: List[SessionListener] = []

    @property
    def state(self) -> Optional[GameState]:
        return self._state

    @property
    def keyboard_state(self) -> Dict[str, LetterOutcome]:
        return dict(self._keyboard_state)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: SessionEvent, **payload) -> None:
        for listener in list(self._listeners):
            listener(event, payload)

    def _is_playing(self) -> bool:
        return self._state is not None and self._state.status == GameStatus.PLAYING

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def restart(self, difficulty: Difficulty, word_length: int) -> ActionResult:
        """
        Start a fresh game, discarding the current one.

        The previous game is kept when no target word of *word_length* exists.
        """
        target = self.word_provider.random_word(word_length)
        if target is None:
            return ActionResult.failure(GameError.NO_WORDS_OF_LENGTH)

        target = target.upper()
        self._state = GameState(
            target_word=target,
            word_length=len(target),
            difficulty=difficulty,
            score=0,
            start_time=self._clock(),
        )
        self._keyboard_state = {}
        logger.debug("Started %s game with a %d-letter word", difficulty.value, len(target))
        self._emit(SessionEvent.GAME_STARTED, difficulty=difficulty, word_length=len(target))
        return ActionResult(success=True)

    def resume(self, state: GameState) -> None:
        """Adopt a previously saved game state."""
        self._state = state
        self._keyboard_state = keyboard.aggregate(state.guesses)

    # ------------------------------------------------------------------
    # Input buffer
    # ------------------------------------------------------------------

    def add_letter(self, letter: str) -> bool:
        """Append a letter to the current guess. Ignored unless it fits."""
        if not self._is_playing() or not isinstance(letter, str):
            return False
        # Uppercasing may expand a character (U+FB06 becomes "ST")
        upper = letter.upper()
        if len(upper) != 1 or upper not in ALPHABET:
            return False
        if len(self._state.current_guess) >= self._state.word_length:
            return False
        self._state.current_guess += upper
        return True

    def delete_letter(self) -> bool:
        """Remove the last letter of the current guess, if any."""
        if not self._is_playing() or not self._state.current_guess:
            return False
        self._state.current_guess = self._state.current_guess[:-1]
        return True

    def set_guess(self, word: str) -> bool:
        """Replace the whole current guess. Ignored unless every letter fits."""
        if not self._is_playing():
            return False
        upper = word.upper()
        if len(upper) > self._state.word_length or any(c not in ALPHABET for c in upper):
            return False
        self._state.current_guess = upper
        return True

    # ------------------------------------------------------------------
    # Guessing
    # ------------------------------------------------------------------

    def submit_guess(self) -> ActionResult:
        """
        Validate and evaluate the current guess.

        Invalid submissions leave guesses, buffer, score and hints untouched.
        """
        if self._state is None:
            return ActionResult.failure(GameError.NO_ACTIVE_GAME)
        state = self._state
        if state.status != GameStatus.PLAYING:
            return ActionResult.failure(GameError.GAME_OVER)

        word = state.current_guess
        if len(word) != state.word_length:
            self._emit(SessionEvent.INVALID_GUESS, error=GameError.INVALID_LENGTH, word=word)
            return ActionResult.failure(GameError.INVALID_LENGTH)
        if not self.word_provider.is_valid_word(word.lower()):
            self._emit(SessionEvent.INVALID_GUESS, error=GameError.NOT_A_WORD, word=word)
            return ActionResult.failure(GameError.NOT_A_WORD)

        guess = match_engine.create_guess(word, state.target_word)
        state.guesses.append(guess)
        state.current_guess = ""
        self._keyboard_state = keyboard.aggregate(state.guesses)
        state.score = scoring.calculate_score(state.guesses, state.attempts_left, state.hints_used)
        self._emit(SessionEvent.GUESS_ACCEPTED, guess=guess, attempts_left=state.attempts_left)

        if guess.is_winning:
            self._finish(GameStatus.WON)
        elif len(state.guesses) >= state.max_attempts:
            self._finish(GameStatus.LOST)

        return ActionResult(success=True, guess=guess, game_completed=state.is_over)

    def _finish(self, status: GameStatus) -> None:
        self._state.status = status
        self._state.end_time = self._clock()
        logger.info(
            "Game %s after %d guesses with score %d",
            status.value.lower(), len(self._state.guesses), self._state.score
        )
        event = SessionEvent.GAME_WON if status == GameStatus.WON else SessionEvent.GAME_LOST
        self._emit(event, state=self._state)

    # ------------------------------------------------------------------
    # Hints
    # ------------------------------------------------------------------

    def available_hint_letters(self) -> List[str]:
        if self._state is None:
            return []
        return hints.available_hint_letters(self._state.target_word, self._state.guesses)

    def request_hint(self) -> ActionResult:
        """Reveal a letter of the target at a score penalty."""
        if self._state is None:
            return ActionResult.failure(GameError.NO_ACTIVE_GAME)
        state = self._state
        if state.status != GameStatus.PLAYING:
            return ActionResult.failure(GameError.GAME_OVER)

        hint = hints.get_hint(state.target_word, state.guesses, self._rng)
        if hint is None:
            return ActionResult.failure(GameError.NO_HINTS_AVAILABLE)

        state.hints_used += 1
        state.score = scoring.calculate_score(state.guesses, state.attempts_left, state.hints_used)
        self._emit(SessionEvent.HINT_USED, hint=hint)
        return ActionResult(success=True, hint=hint)

    # ------------------------------------------------------------------
    # Summaries
    # ------------------------------------------------------------------

    def summary(self) -> Optional[GameSummary]:
        """Shareable summary, available once the game is over."""
        if self._state is None or not self._state.is_over:
            return None
        return statistics.game_summary(self._state)
