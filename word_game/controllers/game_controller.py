"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from dataclasses import asdict
from typing import Any, Dict

from flask import Blueprint, request, jsonify

from ..config.game_settings import is_valid_word_length
from ..models.game import ActionResult, Difficulty
from ..utils.decorators import require_game_service
from ..utils.game_logger import game_logger

game_bp = Blueprint('game', __name__)


def _not_found(action: str, game_id: str):
    error_response = {
        'success': False,
        'error': 'Game not found'
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), 404


def _server_error(action: str, error: Exception, game_id: str = None):
    game_logger.log_error(request, error, action, game_id)
    error_response = {
        'success': False,
        'error': str(error)
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), 500


def _failure(action: str, result: ActionResult, game_id: str = None, **kwargs):
    error_response = {
        'success': False,
        'error': result.error.message,
        'error_code': result.error.value
    }
    game_logger.log_server_response(
        request, action, False, error_response, game_id,
        validation_error=result.error.value, **kwargs
    )
    return jsonify(error_response), 400


def _game_parameters(data: Dict[str, Any]):
    """Read optional difficulty / word_length from a request body."""
    difficulty = Difficulty.from_string(data['difficulty']) if data.get('difficulty') else None
    word_length = data.get('word_length')
    if word_length is not None:
        word_length = int(word_length)
        if not is_valid_word_length(word_length):
            raise ValueError(f"Unsupported word length: {word_length}")
    return difficulty, word_length


@game_bp.route('/new_game', methods=['POST'])
@require_game_service
def new_game(game_service):
    """Create a new game session."""
    try:
        data = request.get_json(silent=True) or {}
        try:
            difficulty, word_length = _game_parameters(data)
        except ValueError as e:
            return jsonify({'success': False, 'error': str(e)}), 400

        game_logger.log_user_action(
            request, 'new_game',
            difficulty=data.get('difficulty'), word_length=word_length
        )

        game_id, error = game_service.create_new_game(difficulty, word_length)
        if game_id is None:
            return _failure('new_game', ActionResult.failure(error))

        state = game_service.get_game_state(game_id)
        response_data = {
            'success': True,
            'game_id': game_id,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'new_game', True, response_data, game_id,
            word_length=state.word_length, max_attempts=state.max_attempts
        )
        return jsonify(response_data)

    except Exception as e:
        return _server_error('new_game', e)


@game_bp.route('/resume', methods=['POST'])
@require_game_service
def resume_game(game_service):
    """Resume the saved in-progress game."""
    try:
        game_logger.log_user_action(request, 'resume_game')

        game_id = game_service.resume_game()
        if game_id is None:
            error_response = {
                'success': False,
                'error': 'No saved game to resume'
            }
            game_logger.log_server_response(request, 'resume_game', False, error_response)
            return jsonify(error_response), 404

        response_data = {
            'success': True,
            'game_id': game_id,
            'state': asdict(game_service.get_game_state(game_id))
        }
        game_logger.log_server_response(request, 'resume_game', True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        return _server_error('resume_game', e)


@game_bp.route('/game/<game_id>/state', methods=['GET'])
@require_game_service
def get_state(game_service, game_id):
    """Get current game state."""
    try:
        game_logger.log_user_action(request, 'get_state', game_id)

        state = game_service.get_game_state(game_id)
        if state is None:
            return _not_found('get_state', game_id)

        response_data = {
            'success': True,
            'state': asdict(state)
        }
        game_logger.log_server_response(
            request, 'get_state', True, response_data, game_id,
            attempts_left=state.attempts_left, game_over=state.game_over
        )
        return jsonify(response_data)

    except Exception as e:
        return _server_error('get_state', e, game_id)


@game_bp.route('/game/<game_id>/letter', methods=['POST', 'DELETE'])
@require_game_service
def edit_letter(game_service, game_id):
    """Type a letter into, or delete the last letter from, the current guess."""
    action = 'add_letter' if request.method == 'POST' else 'delete_letter'
    try:
        if request.method == 'POST':
            data = request.get_json(silent=True) or {}
            letter = str(data.get('letter', ''))
            game_logger.log_user_action(request, action, game_id)
            changed = game_service.add_letter(game_id, letter)
        else:
            game_logger.log_user_action(request, action, game_id)
            changed = game_service.delete_letter(game_id)

        if changed is None:
            return _not_found(action, game_id)

        # Ignored keystrokes are not errors; the client just sees no change
        return jsonify({
            'success': True,
            'changed': changed,
            'state': asdict(game_service.get_game_state(game_id))
        })

    except Exception as e:
        return _server_error(action, e, game_id)


@game_bp.route('/game/<game_id>/guess', methods=['POST'])
@require_game_service
def make_guess(game_service, game_id):
    """Submit the current guess, or the guess given in the body."""
    try:
        data = request.get_json(silent=True) or {}
        guess = data.get('guess')

        game_logger.log_user_action(
            request, 'submit_guess', game_id,
            guess_length=len(guess) if guess else None
        )

        result = game_service.submit_guess(game_id, guess)
        if result is None:
            return _not_found('submit_guess', game_id)
        if not result.success:
            return _failure('submit_guess', result, game_id)

        state = game_service.get_game_state(game_id)
        response_data = {
            'success': True,
            'state': asdict(state)
        }

        if result.game_completed:
            response_data['summary'] = asdict(game_service.get_session(game_id).summary())

        game_logger.log_server_response(
            request, 'submit_guess', True, response_data, game_id,
            round=len(state.guesses), game_over=state.game_over
        )
        return jsonify(response_data)

    except Exception as e:
        return _server_error('submit_guess', e, game_id)


@game_bp.route('/game/<game_id>/hint', methods=['POST'])
@require_game_service
def get_hint(game_service, game_id):
    """Reveal a letter of the target word at a score penalty."""
    try:
        game_logger.log_user_action(request, 'get_hint', game_id)

        result = game_service.request_hint(game_id)
        if result is None:
            return _not_found('get_hint', game_id)
        if not result.success:
            return _failure('get_hint', result, game_id)

        response_data = {
            'success': True,
            'hint': asdict(result.hint),
            'state': asdict(game_service.get_game_state(game_id))
        }
        game_logger.log_server_response(request, 'get_hint', True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        return _server_error('get_hint', e, game_id)


@game_bp.route('/game/<game_id>/restart', methods=['POST'])
@require_game_service
def restart_game(game_service, game_id):
    """Start a fresh word in an existing session."""
    try:
        data = request.get_json(silent=True) or {}
        try:
            difficulty, word_length = _game_parameters(data)
        except ValueError as e:
            return jsonify({'success': False, 'error': str(e)}), 400

        game_logger.log_user_action(request, 'restart_game', game_id)

        result = game_service.restart_game(game_id, difficulty, word_length)
        if result is None:
            return _not_found('restart_game', game_id)
        if not result.success:
            return _failure('restart_game', result, game_id)

        response_data = {
            'success': True,
            'state': asdict(game_service.get_game_state(game_id))
        }
        game_logger.log_server_response(request, 'restart_game', True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        return _server_error('restart_game', e, game_id)


@game_bp.route('/game/<game_id>', methods=['DELETE'])
@require_game_service
def delete_game(game_service, game_id):
    """Delete a game session."""
    try:
        game_logger.log_user_action(request, 'delete_game', game_id)

        success = game_service.delete_game(game_id)
        response_data = {
            'success': success
        }
        game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)

        if success:
            game_logger.log_game_event(game_id, 'game_deleted', request.remote_addr)
            return jsonify(response_data)
        return jsonify(response_data), 404

    except Exception as e:
        return _server_error('delete_game', e, game_id)


@game_bp.route('/health', methods=['GET'])
@require_game_service
def health_check(game_service):
    """Health check endpoint."""
    try:
        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'active_games': len(game_service.sessions),
            'log_stats': game_logger.get_log_stats(),
            'store': type(game_service.store).__name__
        }
        game_logger.log_server_response(request, 'health_check', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
