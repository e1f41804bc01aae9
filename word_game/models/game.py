"""
Game Data Models

Contains all game-related data structures and enums, together with their
explicit record schema used for persistence.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..config.game_settings import (
    DEFAULT_DIFFICULTY, MAX_ATTEMPTS_BY_DIFFICULTY, SCHEMA_VERSION
)


class LetterOutcome(Enum):
    """Per-letter evaluation of a guess against the target word."""
    CORRECT = "CORRECT"
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    EMPTY = "EMPTY"


class Difficulty(Enum):
    """Game difficulty; decides how many attempts a game allows."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_string(cls, value: Optional[str]) -> "Difficulty":
        """Parse a difficulty name, falling back to the default for unknown names."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls(DEFAULT_DIFFICULTY)


class GameStatus(Enum):
    """Lifecycle of a game. WON and LOST are terminal."""
    PLAYING = "PLAYING"
    WON = "WON"
    LOST = "LOST"


class GameError(Enum):
    """Expected, recoverable failures reported back to the caller."""
    INVALID_LENGTH = "INVALID_LENGTH"
    NOT_A_WORD = "NOT_A_WORD"
    GAME_OVER = "GAME_OVER"
    NO_ACTIVE_GAME = "NO_ACTIVE_GAME"
    NO_WORDS_OF_LENGTH = "NO_WORDS_OF_LENGTH"
    NO_HINTS_AVAILABLE = "NO_HINTS_AVAILABLE"

    @property
    def message(self) -> str:
        return _ERROR_MESSAGES[self]


_ERROR_MESSAGES = {
    GameError.INVALID_LENGTH: "Guess does not have the required number of letters",
    GameError.NOT_A_WORD: "Word not in word list",
    GameError.GAME_OVER: "Game is already over",
    GameError.NO_ACTIVE_GAME: "No game in progress",
    GameError.NO_WORDS_OF_LENGTH: "No words available for that length",
    GameError.NO_HINTS_AVAILABLE: "No more hints available",
}


def _check_schema(record: Dict[str, Any], kind: str) -> None:
    version = record.get("schema_version", SCHEMA_VERSION)
    if version != SCHEMA_VERSION:
        raise ValueError(f"Unsupported {kind} schema version: {version}")


@dataclass(frozen=True)
class Guess:
    """A submitted, validated word with its per-letter outcomes."""
    word: str
    outcomes: Tuple[LetterOutcome, ...]

    def __post_init__(self):
        if len(self.word) != len(self.outcomes):
            raise ValueError(
                f"Guess '{self.word}' has {len(self.outcomes)} outcomes, expected {len(self.word)}"
            )

    @property
    def is_winning(self) -> bool:
        return all(outcome == LetterOutcome.CORRECT for outcome in self.outcomes)

    def to_record(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "outcomes": [outcome.value for outcome in self.outcomes],
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Guess":
        return cls(
            word=record["word"],
            outcomes=tuple(LetterOutcome(value) for value in record["outcomes"]),
        )


@dataclass(frozen=True)
class HintResult:
    """A revealed letter and, where known, one index it occupies in the target."""
    letter: str
    position: Optional[int] = None


@dataclass
class GameState:
    """Complete state of a single game, owned by one GameSession."""
    target_word: str
    word_length: int
    difficulty: Difficulty
    guesses: List[Guess] = field(default_factory=list)
    current_guess: str = ""
    status: GameStatus = GameStatus.PLAYING
    hints_used: int = 0
    score: int = 0
    start_time: float = 0.0
    end_time: Optional[float] = None

    @property
    def max_attempts(self) -> int:
        return MAX_ATTEMPTS_BY_DIFFICULTY[self.difficulty.value]

    @property
    def attempts_left(self) -> int:
        return self.max_attempts - len(self.guesses)

    @property
    def is_over(self) -> bool:
        return self.status != GameStatus.PLAYING

    def to_record(self) -> Dict[str, Any]:
        """Serialize to a JSON/BSON-safe record with no loss of fields."""
        return {
            "schema_version": SCHEMA_VERSION,
            "target_word": self.target_word,
            "word_length": self.word_length,
            "difficulty": self.difficulty.value,
            "guesses": [guess.to_record() for guess in self.guesses],
            "current_guess": self.current_guess,
            "status": self.status.value,
            "hints_used": self.hints_used,
            "score": self.score,
            "start_time": self.start_time,
            "end_time": self.end_time,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "GameState":
        _check_schema(record, "game state")
        state = cls(
            target_word=record["target_word"],
            word_length=int(record["word_length"]),
            difficulty=Difficulty(record["difficulty"]),
            guesses=[Guess.from_record(guess) for guess in record.get("guesses", [])],
            current_guess=record.get("current_guess", ""),
            status=GameStatus(record.get("status", GameStatus.PLAYING.value)),
            hints_used=int(record.get("hints_used", 0)),
            score=int(record.get("score", 0)),
            start_time=record.get("start_time", 0.0),
            end_time=record.get("end_time"),
        )
        if len(state.target_word) != state.word_length:
            raise ValueError("Target word does not match the recorded word length")
        if len(state.guesses) > state.max_attempts:
            raise ValueError("Record holds more guesses than the difficulty allows")
        if len(state.current_guess) > state.word_length:
            raise ValueError("Record holds an overlong guess buffer")
        return state


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a GameSession operation."""
    success: bool
    error: Optional[GameError] = None
    guess: Optional[Guess] = None
    hint: Optional[HintResult] = None
    game_completed: bool = False

    @classmethod
    def failure(cls, error: GameError) -> "ActionResult":
        return cls(success=False, error=error)


@dataclass
class GameStateView:
    """Client-facing game state representation."""
    game_id: str
    word_length: int
    difficulty: str
    max_attempts: int
    attempts_left: int
    status: str
    game_over: bool
    won: bool
    guesses: List[str]
    guess_results: List[List[Tuple[str, str]]]  # Letter status as string for JSON serialization
    current_guess: str
    keyboard_state: Dict[str, str]
    hints_used: int
    score: int
    answer: Optional[str] = None  # Only included when game is over
