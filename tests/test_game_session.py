"""Tests for the single-game state machine."""
import pytest

from conftest import FixedWordProvider, play, type_word
from word_game.models.game import (
    Difficulty, GameError, GameState, GameStatus, LetterOutcome
)
from word_game.services.game_session import GameSession, SessionEvent
from word_game.services.match_engine import create_guess


@pytest.fixture
def events():
    return []


def listen(session, events):
    return session.subscribe(lambda event, payload: events.append((event, payload)))


class TestPlaying:
    def test_win_in_two_guesses(self, make_session, events):
        session = make_session("CRANE")
        listen(session, events)

        first = play(session, "trace")
        assert first.success
        assert not first.game_completed
        assert first.guess.outcomes == (
            LetterOutcome.ABSENT, LetterOutcome.CORRECT, LetterOutcome.CORRECT,
            LetterOutcome.PRESENT, LetterOutcome.CORRECT,
        )
        assert session.state.score == 15
        assert session.state.attempts_left == 4

        second = play(session, "crane")
        assert second.success
        assert second.game_completed
        assert session.state.status == GameStatus.WON
        assert session.state.score == 17
        assert session.state.end_time is not None

        assert [event for event, _ in events] == [
            SessionEvent.GUESS_ACCEPTED, SessionEvent.GUESS_ACCEPTED, SessionEvent.GAME_WON,
        ]

    def test_keyboard_keeps_best_outcome(self, make_session):
        session = make_session("CRANE")
        play(session, "trace")
        assert session.keyboard_state["C"] == LetterOutcome.PRESENT
        assert session.keyboard_state["T"] == LetterOutcome.ABSENT
        play(session, "crane")
        assert session.keyboard_state["C"] == LetterOutcome.CORRECT

    def test_running_out_of_attempts_loses(self, make_session, events):
        session = make_session("CRANE", Difficulty.HARD)
        listen(session, events)
        assert session.state.max_attempts == 3

        assert not play(session, "trace").game_completed
        assert not play(session, "slate").game_completed
        result = play(session, "plant")

        assert result.success
        assert result.game_completed
        assert session.state.status == GameStatus.LOST
        assert events[-1][0] == SessionEvent.GAME_LOST

    def test_submitted_guess_clears_buffer(self, make_session):
        session = make_session("CRANE")
        play(session, "slate")
        assert session.state.current_guess == ""
        assert [g.word for g in session.state.guesses] == ["SLATE"]


class TestInvalidGuesses:
    def test_short_guess_is_rejected(self, make_session, events):
        session = make_session("CRANE")
        listen(session, events)
        type_word(session, "cra")

        result = session.submit_guess()

        assert not result.success
        assert result.error == GameError.INVALID_LENGTH
        assert session.state.guesses == []
        assert session.state.current_guess == "CRA"
        assert session.state.score == 0
        assert events[0][0] == SessionEvent.INVALID_GUESS

    def test_unknown_word_is_rejected(self, make_session):
        session = make_session("CRANE")
        type_word(session, "abcde")

        result = session.submit_guess()

        assert result.error == GameError.NOT_A_WORD
        assert session.state.guesses == []
        assert session.state.current_guess == "ABCDE"
        assert session.state.attempts_left == 5

    def test_no_game_started(self):
        session = GameSession(FixedWordProvider("CRANE"))
        assert session.state is None
        assert session.submit_guess().error == GameError.NO_ACTIVE_GAME
        assert session.request_hint().error == GameError.NO_ACTIVE_GAME
        assert session.add_letter("A") is False
        assert session.available_hint_letters() == []
        assert session.summary() is None

    def test_finished_game_rejects_actions(self, make_session):
        session = make_session("CRANE")
        play(session, "crane")

        assert session.add_letter("A") is False
        assert session.delete_letter() is False
        assert session.set_guess("slate") is False
        assert session.submit_guess().error == GameError.GAME_OVER
        assert session.request_hint().error == GameError.GAME_OVER
        assert len(session.state.guesses) == 1


class TestBuffer:
    def test_letters_are_uppercased(self, make_session):
        session = make_session("CRANE")
        assert session.add_letter("c")
        assert session.add_letter("R")
        assert session.state.current_guess == "CR"

    def test_buffer_is_capped_at_word_length(self, make_session):
        session = make_session("CRANE")
        type_word(session, "crane")
        assert session.add_letter("S") is False
        assert session.state.current_guess == "CRANE"

    def test_non_letters_are_ignored(self, make_session):
        session = make_session("CRANE")
        assert session.add_letter("1") is False
        assert session.add_letter("ab") is False
        assert session.add_letter("") is False
        assert session.state.current_guess == ""

    def test_letter_expanding_when_uppercased_is_ignored(self, make_session):
        session = make_session("CRANE")
        type_word(session, "cran")

        assert session.add_letter("ﬆ") is False
        assert session.state.current_guess == "CRAN"
        assert session.set_guess("craﬆe") is False
        assert session.set_guess("cranﬆ") is False
        assert session.state.current_guess == "CRAN"

    def test_buffer_never_exceeds_word_length(self, make_session):
        session = make_session("CAT")
        for letter in "abcﬆﬀde":
            session.add_letter(letter)
            assert len(session.state.current_guess) <= session.state.word_length
        assert session.state.current_guess == "ABC"

    def test_delete_letter(self, make_session):
        session = make_session("CRANE")
        assert session.delete_letter() is False
        type_word(session, "cr")
        assert session.delete_letter() is True
        assert session.state.current_guess == "C"

    def test_set_guess(self, make_session):
        session = make_session("CRANE")
        assert session.set_guess("slate")
        assert session.state.current_guess == "SLATE"
        assert session.set_guess("slates") is False
        assert session.set_guess("sl4te") is False
        assert session.state.current_guess == "SLATE"
        assert session.set_guess("")
        assert session.state.current_guess == ""


class TestHints:
    def test_hint_costs_score(self, make_session, events):
        session = make_session("CRANE")
        listen(session, events)

        result = session.request_hint()

        assert result.success
        assert result.hint.letter in "CRANE"
        assert "CRANE"[result.hint.position] == result.hint.letter
        assert session.state.hints_used == 1
        # 5 attempts * 3 - 0.5, floored
        assert session.state.score == 14
        assert events[0][0] == SessionEvent.HINT_USED

    def test_hint_skips_guessed_letters(self, make_session):
        session = make_session("CRANE")
        play(session, "slate")
        assert session.available_hint_letters() == ["C", "R", "N"]
        for _ in range(10):
            assert session.request_hint().hint.letter in ("C", "R", "N")

    def test_hints_run_out(self, make_session):
        session = make_session("CRANE")
        play(session, "nacre")

        result = session.request_hint()

        assert result.error == GameError.NO_HINTS_AVAILABLE
        assert session.state.hints_used == 0


class TestLifecycle:
    def test_restart_resets_state(self, make_session):
        session = make_session("CRANE")
        play(session, "trace")
        session.request_hint()

        result = session.restart(Difficulty.EASY, 5)

        assert result.success
        state = session.state
        assert state.guesses == []
        assert state.hints_used == 0
        assert state.score == 0
        assert state.max_attempts == 7
        assert session.keyboard_state == {}

    def test_restart_without_words_keeps_current_game(self, make_session):
        session = make_session("CRANE")
        play(session, "trace")

        result = session.restart(Difficulty.MEDIUM, 7)

        assert result.error == GameError.NO_WORDS_OF_LENGTH
        assert session.state.target_word == "CRANE"
        assert len(session.state.guesses) == 1

    def test_restart_emits_game_started(self, events):
        session = GameSession(FixedWordProvider("CAT"))
        listen(session, events)
        session.restart(Difficulty.HARD, 3)
        event, payload = events[0]
        assert event == SessionEvent.GAME_STARTED
        assert payload == {"difficulty": Difficulty.HARD, "word_length": 3}

    def test_resume_restores_keyboard(self):
        state = GameState(
            target_word="CRANE", word_length=5, difficulty=Difficulty.MEDIUM,
            guesses=[create_guess("TRACE", "CRANE")], score=15,
        )
        session = GameSession(FixedWordProvider("CRANE"))
        session.resume(state)

        assert session.keyboard_state["T"] == LetterOutcome.ABSENT
        assert play(session, "crane").game_completed
        assert session.state.score == 17

    def test_unsubscribe(self, make_session, events):
        session = make_session("CRANE")
        unsubscribe = listen(session, events)
        unsubscribe()
        play(session, "crane")
        assert events == []


class TestSummary:
    def test_no_summary_while_playing(self, make_session):
        assert make_session("CRANE").summary() is None

    def test_won_summary(self, make_session):
        session = make_session("CRANE")
        play(session, "trace")
        play(session, "crane")

        summary = session.summary()

        assert summary.won
        assert summary.attempts == 2
        assert summary.score == 17
        assert summary.guess_words == ["TRACE", "CRANE"]
        lines = summary.share_text.split("\n")
        assert lines[0] == "Word Game - Medium"
        assert "Result: 2/5" in lines
        assert lines[-1] == "\U0001F7E9" * 5
        assert lines[-2] == "⬛\U0001F7E9\U0001F7E9\U0001F7E8\U0001F7E9"

    def test_lost_summary_mentions_hints(self, make_session):
        session = make_session("CRANE", Difficulty.HARD)
        session.request_hint()
        for word in ("trace", "slate", "plant"):
            play(session, word)

        text = session.summary().share_text

        assert "Result: X/3" in text
        assert "Hints used: 1" in text
        assert not session.summary().won
