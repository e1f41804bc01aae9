"""
Game Logger Module for the Word Game Server

Structured JSON logging of HTTP requests, responses and errors, plus the
events each game session publishes (guesses, hints, wins and losses).
"""

import logging
import json
from collections import Counter
from datetime import datetime
from typing import Any, Callable, Dict, Optional
from pathlib import Path

from ..config import Config
from .helpers import get_user_identity

# Session events worth a line in the log; GAME_STARTED is covered by new_game
_LOGGED_SESSION_EVENTS = ('guess_accepted', 'invalid_guess', 'hint_used', 'game_won', 'game_lost')


class GameLogger:
    """
    Centralized logging system for the word game server.

    Every entry is a JSON object with ``timestamp``, ``event_type``,
    ``action``, ``user`` and ``details``, written to a daily log file.
    Warnings and errors are echoed to the console.
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.level = logging.getLevelName(level.upper()) if isinstance(level, str) else level
        if not isinstance(self.level, int):
            self.level = logging.INFO

        self.logger = self._setup_logger()

    @property
    def log_file(self) -> Path:
        return self.log_dir / f"game_log_{datetime.now().strftime('%Y-%m-%d')}.log"

    def _setup_logger(self) -> logging.Logger:
        """Attach the file and console handlers to the ``word_game`` logger."""
        logger = logging.getLogger('word_game')
        logger.setLevel(self.level)

        # Prevent duplicate handlers
        if logger.handlers:
            logger.handlers.clear()

        file_handler = logging.FileHandler(self.log_file, encoding='utf-8')
        file_handler.setLevel(self.level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        return logger

    def _write(self, level: int, event_type: str, action: str,
               user_info: Dict[str, Any], details: Dict[str, Any]) -> None:
        entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'user': user_info,
            'details': details
        }
        self.logger.log(level, json.dumps(entry, ensure_ascii=False, default=str))

    @staticmethod
    def _request_details(request, game_id: Optional[str]) -> Dict[str, Any]:
        return {
            'game_id': game_id,
            'endpoint': request.endpoint,
            'method': request.method
        }

    # ------------------------------------------------------------------
    # HTTP layer
    # ------------------------------------------------------------------

    def log_user_action(self, request, action: str, game_id: Optional[str] = None, **kwargs):
        """
        Log an incoming request.

        Args:
            request: Flask request object
            action: Endpoint action, e.g. 'new_game' or 'submit_guess'
            game_id: Game identifier if applicable
            **kwargs: Additional details to log
        """
        details = {**self._request_details(request, game_id), 'url': request.url, **kwargs}
        self._write(logging.INFO, 'USER_ACTION', action, get_user_identity(request), details)

    def log_server_response(self, request, action: str, success: bool,
                            response_data: Dict[str, Any], game_id: Optional[str] = None, **kwargs):
        """Log the response to a request; failures are logged at ERROR."""
        details = {
            **self._request_details(request, game_id),
            'success': success,
            'response_data': self._sanitize_response_data(response_data),
            **kwargs
        }
        event_type = 'SERVER_RESPONSE_SUCCESS' if success else 'SERVER_RESPONSE_ERROR'
        level = logging.INFO if success else logging.ERROR
        self._write(level, event_type, action, get_user_identity(request), details)

    def log_error(self, request, error: Exception, action: str, game_id: Optional[str] = None):
        """Log an unexpected exception raised while handling a request."""
        details = {
            **self._request_details(request, game_id),
            'error_type': type(error).__name__,
            'error_message': str(error)
        }
        self._write(logging.ERROR, 'ERROR', action, get_user_identity(request), details)

    def _sanitize_response_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Shrink game states to a summary and keep hidden answers and hints out of logs."""
        if not isinstance(data, dict):
            return {'data_type': type(data).__name__}

        sanitized = dict(data)

        state = sanitized.get('state')
        if isinstance(state, dict):
            sanitized['state'] = {
                'status': state.get('status'),
                'attempts_left': state.get('attempts_left'),
                'max_attempts': state.get('max_attempts'),
                'guesses_count': len(state.get('guesses', [])),
                'hints_used': state.get('hints_used'),
                'score': state.get('score'),
                'answer_revealed': state.get('answer') is not None
            }

        if 'hint' in sanitized:
            sanitized['hint'] = 'revealed'
        if isinstance(sanitized.get('summary'), dict):
            sanitized['summary'] = {'attempts': sanitized['summary'].get('attempts'),
                                    'won': sanitized['summary'].get('won')}

        return sanitized

    # ------------------------------------------------------------------
    # Game sessions
    # ------------------------------------------------------------------

    def log_game_event(self, game_id: Optional[str], event: str,
                       user_ip: Optional[str] = None, **kwargs):
        """
        Log a game event such as 'game_won', 'hint_used' or 'game_deleted'.

        Args:
            game_id: Game identifier
            event: Event name
            user_ip: Client address when the event comes from a request
            **kwargs: Additional game details
        """
        user_info = {'user_ip': user_ip or 'local', 'session_id': game_id}
        self._write(logging.INFO, 'GAME_EVENT', event, user_info, {'game_id': game_id, **kwargs})

    def session_listener(self, game_id: str) -> Callable[[Any, Dict[str, Any]], None]:
        """
        Build a GameSession listener that logs the session's events under *game_id*.

        Target words are only logged once the game is over.
        """
        def listener(event, payload: Dict[str, Any]) -> None:
            name = event.value
            if name not in _LOGGED_SESSION_EVENTS:
                return

            details: Dict[str, Any] = {}
            if 'guess' in payload:
                guess = payload['guess']
                details['word'] = guess.word
                details['outcomes'] = [outcome.value for outcome in guess.outcomes]
                details['attempts_left'] = payload.get('attempts_left')
            elif 'error' in payload:
                details['error'] = payload['error'].value
                details['guess_length'] = len(payload.get('word', ''))
            elif 'state' in payload:
                state = payload['state']
                details.update(
                    target_word=state.target_word,
                    rounds_used=len(state.guesses),
                    score=state.score,
                    hints_used=state.hints_used
                )
            self.log_game_event(game_id, name, **details)

        return listener

    def get_log_stats(self) -> Dict[str, Any]:
        """Count today's entries by event type and game event (useful for monitoring)."""
        log_file = self.log_file
        if not log_file.exists():
            return {'error': 'No log file found for today'}

        event_types: Counter = Counter()
        game_events: Counter = Counter()
        unparsed = 0
        try:
            with open(log_file, 'r', encoding='utf-8') as f:
                for line in f:
                    # Lines look like "<asctime> | <level> | <json>"
                    payload = line.split(' | ', 2)[-1].strip()
                    if not payload:
                        continue
                    try:
                        entry = json.loads(payload)
                    except json.JSONDecodeError:
                        unparsed += 1
                        continue
                    if not isinstance(entry, dict):
                        unparsed += 1
                        continue
                    event_types[entry.get('event_type')] += 1
                    if entry.get('event_type') == 'GAME_EVENT':
                        game_events[entry.get('action')] += 1
        except OSError as e:
            return {'error': f'Failed to get stats: {str(e)}'}

        return {
            'log_file': str(log_file),
            'file_size_mb': round(log_file.stat().st_size / (1024 * 1024), 2),
            'total_entries': sum(event_types.values()) + unparsed,
            'user_actions': event_types['USER_ACTION'],
            'server_responses': event_types['SERVER_RESPONSE_SUCCESS'] + event_types['SERVER_RESPONSE_ERROR'],
            'errors': event_types['ERROR'] + event_types['SERVER_RESPONSE_ERROR'],
            'game_events': dict(game_events),
            'plain_messages': unparsed
        }


# Global logger instance
game_logger = GameLogger(Config.LOG_DIR, Config.LOG_LEVEL)
