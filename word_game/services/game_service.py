"""
Game Service

Manages live game sessions and connects them to the word provider and the
persistence store.
"""

import random
import uuid
from typing import Callable, Dict, List, Optional, Tuple

from ..config import Config
from ..models.game import (
    ActionResult, Difficulty, GameError, GameState, GameStateView, GameStatus
)
from ..models.progress import GameHistoryEntry, GameSettings, GameStatistics
from ..utils.game_logger import game_logger
from .game_session import GameSession
from .game_store import GameStore, InMemoryGameStore, PersistenceError
from .statistics import update_statistics
from .word_provider import WordProvider


def _default_settings() -> GameSettings:
    """Settings used before the player saved any, from the environment config."""
    return GameSettings(
        difficulty=Difficulty.from_string(Config.DEFAULT_DIFFICULTY),
        word_length=Config.DEFAULT_WORD_LENGTH
    )


class GameService:
    """
    Core game service managing multiple game sessions.

    This class handles:
    - Game session management with unique game IDs
    - Saving the in-progress game so it can be resumed
    - Folding finished games into statistics and history, exactly once
    - Falling back to defaults when the store fails
    """

    def __init__(self, word_provider: WordProvider, store: Optional[GameStore] = None,
                 rng: Optional[random.Random] = None, clock: Optional[Callable[[], float]] = None):
        self.word_provider = word_provider
        self.store = store or InMemoryGameStore()
        self.sessions: Dict[str, GameSession] = {}
        self._rng = rng
        self._clock = clock

    def _new_session(self) -> GameSession:
        kwargs = {"rng": self._rng}
        if self._clock is not None:
            kwargs["clock"] = self._clock
        return GameSession(self.word_provider, **kwargs)

    def _register(self, session: GameSession) -> str:
        game_id = str(uuid.uuid4())
        session.subscribe(game_logger.session_listener(game_id))
        self.sessions[game_id] = session
        return game_id

    def get_session(self, game_id: str) -> Optional[GameSession]:
        return self.sessions.get(game_id)

    # ------------------------------------------------------------------
    # Game lifecycle
    # ------------------------------------------------------------------

    def create_new_game(self, difficulty: Optional[Difficulty] = None,
                        word_length: Optional[int] = None) -> Tuple[Optional[str], Optional[GameError]]:
        """
        Creates a new game session with a randomly selected word.

        Missing parameters are taken from the stored settings.

        Returns:
            Tuple of (game_id, error); game_id is None on failure
        """
        settings = self.get_settings()
        session = self._new_session()
        result = session.restart(
            difficulty or settings.difficulty,
            word_length or settings.word_length
        )
        if not result.success:
            return None, result.error

        game_id = self._register(session)
        self._save_snapshot(session)
        return game_id, None

    def resume_game(self) -> Optional[str]:
        """
        Restore the saved in-progress game, reusing the live session that holds it.

        Returns:
            Game ID, or None when there is nothing to resume
        """
        try:
            state = self.store.load_current_game()
        except (PersistenceError, ValueError) as e:
            game_logger.logger.error(f"Failed to load saved game: {e}")
            return None
        if state is None or state.is_over:
            return None

        # A live session already playing this game must stay the only one
        for game_id, session in self.sessions.items():
            current = session.state
            if (current is not None and not current.is_over
                    and current.target_word == state.target_word
                    and current.start_time == state.start_time):
                return game_id

        session = self._new_session()
        session.resume(state)
        return self._register(session)

    def restart_game(self, game_id: str, difficulty: Optional[Difficulty] = None,
                     word_length: Optional[int] = None) -> Optional[ActionResult]:
        session = self.get_session(game_id)
        if session is None:
            return None
        current = session.state
        result = session.restart(
            difficulty or current.difficulty,
            word_length or current.word_length
        )
        if result.success:
            self._save_snapshot(session)
        return result

    def delete_game(self, game_id: str) -> bool:
        """
        Removes a game session from memory.

        Returns:
            bool: True if game was deleted, False if not found
        """
        if game_id in self.sessions:
            del self.sessions[game_id]
            return True
        return False

    # ------------------------------------------------------------------
    # Game actions
    # ------------------------------------------------------------------

    def add_letter(self, game_id: str, letter: str) -> Optional[bool]:
        session = self.get_session(game_id)
        if session is None:
            return None
        changed = session.add_letter(letter)
        if changed:
            self._save_snapshot(session)
        return changed

    def delete_letter(self, game_id: str) -> Optional[bool]:
        session = self.get_session(game_id)
        if session is None:
            return None
        changed = session.delete_letter()
        if changed:
            self._save_snapshot(session)
        return changed

    def submit_guess(self, game_id: str, word: Optional[str] = None) -> Optional[ActionResult]:
        """
        Submit the session's current guess, or *word* when given.

        A word that fails validation leaves the typed buffer as it was.

        Returns:
            ActionResult, or None if the game was not found
        """
        session = self.get_session(game_id)
        if session is None:
            return None

        if word is not None and session.state is not None and not session.state.is_over:
            previous = session.state.current_guess
            word = word.strip()
            if len(word) != session.state.word_length:
                return ActionResult.failure(GameError.INVALID_LENGTH)
            if not session.set_guess(word):
                return ActionResult.failure(GameError.NOT_A_WORD)
            result = session.submit_guess()
            if not result.success:
                session.set_guess(previous)
        else:
            result = session.submit_guess()

        if result.success:
            if result.game_completed:
                self._record_completion(session.state)
            else:
                self._save_snapshot(session)
        return result

    def request_hint(self, game_id: str) -> Optional[ActionResult]:
        session = self.get_session(game_id)
        if session is None:
            return None
        result = session.request_hint()
        if result.success:
            self._save_snapshot(session)
        return result

    def get_game_state(self, game_id: str) -> Optional[GameStateView]:
        """
        Returns the current game state for a session (without revealing the answer).

        Returns:
            GameStateView object or None if game not found
        """
        session = self.get_session(game_id)
        if session is None or session.state is None:
            return None
        state = session.state

        return GameStateView(
            game_id=game_id,
            word_length=state.word_length,
            difficulty=state.difficulty.value,
            max_attempts=state.max_attempts,
            attempts_left=state.attempts_left,
            status=state.status.value,
            game_over=state.is_over,
            won=state.status == GameStatus.WON,
            guesses=[guess.word for guess in state.guesses],
            guess_results=[
                [(letter, outcome.value) for letter, outcome in zip(guess.word, guess.outcomes)]
                for guess in state.guesses
            ],
            current_guess=state.current_guess,
            keyboard_state={letter: outcome.value for letter, outcome in session.keyboard_state.items()},
            hints_used=state.hints_used,
            score=state.score,
            answer=state.target_word if state.is_over else None
        )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _save_snapshot(self, session: GameSession) -> None:
        try:
            self.store.save_current_game(session.state)
        except PersistenceError as e:
            game_logger.logger.error(f"Failed to save current game: {e}")

    def _record_completion(self, state: GameState) -> GameStatistics:
        """Fold a finished game into statistics and history."""
        won = state.status == GameStatus.WON
        stats = update_statistics(self.get_statistics(), state, won)
        entry = GameHistoryEntry(
            target_word=state.target_word,
            word_length=state.word_length,
            difficulty=state.difficulty,
            guesses=[guess.word for guess in state.guesses],
            won=won,
            score=state.score,
            attempts_used=len(state.guesses),
            hints_used=state.hints_used,
            start_time=state.start_time,
            end_time=state.end_time,
        )
        try:
            self.store.save_statistics(stats)
            self.store.add_history(entry)
            self.store.clear_current_game()
        except PersistenceError as e:
            game_logger.logger.error(f"Failed to record finished game: {e}")
        return stats

    def get_statistics(self) -> GameStatistics:
        """Stored statistics, or fresh ones if none exist or loading fails."""
        try:
            return self.store.load_statistics() or GameStatistics()
        except (PersistenceError, ValueError) as e:
            game_logger.logger.error(f"Failed to load statistics: {e}")
            return GameStatistics()

    def reset_statistics(self) -> Tuple[bool, str]:
        try:
            self.store.reset_statistics()
        except PersistenceError as e:
            return False, str(e)
        return True, ""

    def get_history(self, difficulty: Optional[Difficulty] = None) -> List[GameHistoryEntry]:
        try:
            return self.store.get_history(difficulty)
        except (PersistenceError, ValueError) as e:
            game_logger.logger.error(f"Failed to load history: {e}")
            return []

    def get_settings(self) -> GameSettings:
        """Stored settings, or defaults if none exist or loading fails."""
        try:
            return self.store.load_settings() or _default_settings()
        except (PersistenceError, ValueError) as e:
            game_logger.logger.error(f"Failed to load settings: {e}")
            return _default_settings()

    def reset_settings(self) -> Tuple[bool, str]:
        """Forget saved settings so the defaults apply again."""
        try:
            self.store.reset_settings()
        except PersistenceError as e:
            return False, str(e)
        return True, ""

    def get_word_analysis(self) -> Dict[str, Dict]:
        """Word list statistics and letter/length frequencies of the common words."""
        return {
            'statistics': self.word_provider.word_statistics(),
            'frequency': self.word_provider.analyze_word_frequency()
        }

    def update_settings(self, settings: GameSettings) -> Tuple[bool, str]:
        """
        Persist new settings.

        Returns:
            Tuple of (success, error_message)
        """
        try:
            self.store.save_settings(settings)
        except PersistenceError as e:
            return False, str(e)
        return True, ""


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(word_provider: WordProvider, store: Optional[GameStore] = None) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(word_provider, store)
    return _game_service
