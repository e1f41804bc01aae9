"""
Statistics Accumulator

Folds a finished game into the player's cumulative statistics, and renders
text summaries of statistics and games.
"""

from typing import Dict

from ..models.game import GameState, GameStatus, LetterOutcome
from ..models.progress import GameStatistics, GameSummary


def _average_guesses(distribution: Dict[int, int]) -> float:
    """Mean attempts over won games, from the attempts -> wins distribution."""
    wins = sum(distribution.values())
    if wins == 0:
        return 0.0
    return sum(attempts * count for attempts, count in distribution.items()) / wins


def update_statistics(stats: GameStatistics, finished_game: GameState, won: bool) -> GameStatistics:
    """
    Return new statistics with *finished_game* folded in.

    Args:
        stats: Statistics before this game
        finished_game: The completed game
        won: Whether the game was won

    Returns:
        GameStatistics: A new value; *stats* is left untouched
    """
    games_played = stats.games_played + 1
    games_won = stats.games_won + (1 if won else 0)

    current_streak = stats.current_streak + 1 if won else 0
    max_streak = max(stats.max_streak, current_streak)

    total_score = stats.total_score + finished_game.score

    distribution = dict(stats.guess_distribution)
    if won:
        attempts_used = len(finished_game.guesses)
        distribution[attempts_used] = distribution.get(attempts_used, 0) + 1

    return GameStatistics(
        games_played=games_played,
        games_won=games_won,
        current_streak=current_streak,
        max_streak=max_streak,
        total_score=total_score,
        average_score=total_score / games_played,
        win_percentage=games_won / games_played * 100,
        average_guesses=_average_guesses(distribution),
        guess_distribution=distribution,
    )


def statistics_summary(stats: GameStatistics) -> str:
    """Generate a plain-text statistics summary."""
    lines = [
        "Game Statistics",
        f"Games Played: {stats.games_played}",
        f"Games Won: {stats.games_won}",
        f"Win Percentage: {stats.win_percentage:.1f}%",
        f"Current Streak: {stats.current_streak}",
        f"Max Streak: {stats.max_streak}",
        f"Average Score: {stats.average_score:.1f}",
    ]
    if stats.average_guesses > 0:
        lines.append(f"Average Guesses: {stats.average_guesses:.1f}")
    return "\n".join(lines)


def game_summary(state: GameState) -> GameSummary:
    """Build the shareable summary of a finished game."""
    attempts = len(state.guesses)
    won = state.status == GameStatus.WON
    result = f"{attempts}/{state.max_attempts}" if won else f"X/{state.max_attempts}"

    lines = [
        f"Word Game - {state.difficulty.label}",
        f"Word Length: {state.word_length}",
        f"Result: {result}",
        f"Score: {state.score}",
    ]
    if state.hints_used > 0:
        lines.append(f"Hints used: {state.hints_used}")
    lines.append("")
    lines.extend(
        "".join(_TILES[outcome] for outcome in guess.outcomes)
        for guess in state.guesses
    )

    return GameSummary(
        attempts=attempts,
        won=won,
        score=state.score,
        target_word=state.target_word,
        guess_words=[guess.word for guess in state.guesses],
        share_text="\n".join(lines),
    )


_TILES = {
    LetterOutcome.CORRECT: "\U0001F7E9",
    LetterOutcome.PRESENT: "\U0001F7E8",
    LetterOutcome.ABSENT: "\u2B1B",
    LetterOutcome.EMPTY: "\u2B1C",
}
