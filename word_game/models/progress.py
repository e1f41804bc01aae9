"""
Player Progress Models

Settings, cumulative statistics and finished-game history records.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..config.game_settings import DEFAULT_DIFFICULTY, DEFAULT_WORD_LENGTH, SCHEMA_VERSION
from .game import Difficulty, _check_schema


@dataclass(frozen=True)
class GameSettings:
    """User game settings. Only difficulty and word_length matter to the engine."""
    difficulty: Difficulty = Difficulty(DEFAULT_DIFFICULTY)
    word_length: int = DEFAULT_WORD_LENGTH
    haptic_enabled: bool = True
    dark_mode: bool = False
    sound_enabled: bool = True

    def to_record(self) -> Dict[str, Any]:
        return {
            "schema_version": SCHEMA_VERSION,
            "difficulty": self.difficulty.value,
            "word_length": self.word_length,
            "haptic_enabled": self.haptic_enabled,
            "dark_mode": self.dark_mode,
            "sound_enabled": self.sound_enabled,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "GameSettings":
        _check_schema(record, "settings")
        defaults = cls()
        return cls(
            difficulty=Difficulty.from_string(record.get("difficulty")),
            word_length=int(record.get("word_length", defaults.word_length)),
            haptic_enabled=bool(record.get("haptic_enabled", defaults.haptic_enabled)),
            dark_mode=bool(record.get("dark_mode", defaults.dark_mode)),
            sound_enabled=bool(record.get("sound_enabled", defaults.sound_enabled)),
        )


@dataclass(frozen=True)
class GameStatistics:
    """Cumulative player statistics."""
    games_played: int = 0
    games_won: int = 0
    current_streak: int = 0
    max_streak: int = 0
    total_score: int = 0
    average_score: float = 0.0
    win_percentage: float = 0.0
    average_guesses: float = 0.0
    guess_distribution: Dict[int, int] = field(default_factory=dict)  # attempts -> wins

    def to_record(self) -> Dict[str, Any]:
        return {
            "schema_version": SCHEMA_VERSION,
            "games_played": self.games_played,
            "games_won": self.games_won,
            "current_streak": self.current_streak,
            "max_streak": self.max_streak,
            "total_score": self.total_score,
            "average_score": self.average_score,
            "win_percentage": self.win_percentage,
            "average_guesses": self.average_guesses,
            # BSON documents need string keys
            "guess_distribution": {str(k): v for k, v in self.guess_distribution.items()},
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "GameStatistics":
        _check_schema(record, "statistics")
        return cls(
            games_played=int(record.get("games_played", 0)),
            games_won=int(record.get("games_won", 0)),
            current_streak=int(record.get("current_streak", 0)),
            max_streak=int(record.get("max_streak", 0)),
            total_score=int(record.get("total_score", 0)),
            average_score=float(record.get("average_score", 0.0)),
            win_percentage=float(record.get("win_percentage", 0.0)),
            average_guesses=float(record.get("average_guesses", 0.0)),
            guess_distribution={
                int(k): int(v) for k, v in record.get("guess_distribution", {}).items()
            },
        )


@dataclass(frozen=True)
class GameHistoryEntry:
    """A finished game, kept for detailed tracking."""
    target_word: str
    word_length: int
    difficulty: Difficulty
    guesses: List[str]
    won: bool
    score: int
    attempts_used: int
    hints_used: int
    start_time: float
    end_time: float

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    def to_record(self) -> Dict[str, Any]:
        return {
            "schema_version": SCHEMA_VERSION,
            "target_word": self.target_word,
            "word_length": self.word_length,
            "difficulty": self.difficulty.value,
            "guesses": list(self.guesses),
            "won": self.won,
            "score": self.score,
            "attempts_used": self.attempts_used,
            "hints_used": self.hints_used,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "duration": self.duration,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "GameHistoryEntry":
        _check_schema(record, "history")
        return cls(
            target_word=record["target_word"],
            word_length=int(record["word_length"]),
            difficulty=Difficulty(record["difficulty"]),
            guesses=list(record.get("guesses", [])),
            won=bool(record["won"]),
            score=int(record["score"]),
            attempts_used=int(record["attempts_used"]),
            hints_used=int(record.get("hints_used", 0)),
            start_time=record["start_time"],
            end_time=record["end_time"],
        )


@dataclass(frozen=True)
class GameSummary:
    """Shareable summary of a finished game."""
    attempts: int
    won: bool
    score: int
    target_word: str
    guess_words: List[str]
    share_text: str
