"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import (
    ActionResult, Difficulty, GameError, GameState, GameStateView, GameStatus,
    Guess, HintResult, LetterOutcome
)
from .progress import GameHistoryEntry, GameSettings, GameStatistics, GameSummary

__all__ = [
    'ActionResult', 'Difficulty', 'GameError', 'GameState', 'GameStateView', 'GameStatus',
    'Guess', 'HintResult', 'LetterOutcome',
    'GameHistoryEntry', 'GameSettings', 'GameStatistics', 'GameSummary'
]
