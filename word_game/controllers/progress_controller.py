"""
Progress Controller

Handles settings, statistics and game history endpoints.
"""

from dataclasses import asdict

from flask import Blueprint, request, jsonify

from ..config.game_settings import is_valid_word_length
from ..models.game import Difficulty
from ..models.progress import GameSettings
from ..services.statistics import statistics_summary
from ..utils.decorators import require_game_service
from ..utils.game_logger import game_logger
from ..utils.helpers import format_duration

progress_bp = Blueprint('progress', __name__)


def _settings_payload(settings: GameSettings) -> dict:
    payload = asdict(settings)
    payload['difficulty'] = settings.difficulty.value
    return payload


@progress_bp.route('/settings', methods=['GET'])
@require_game_service
def get_settings(game_service):
    """Return the stored settings, or the defaults."""
    game_logger.log_user_action(request, 'get_settings')
    settings = game_service.get_settings()
    return jsonify({'success': True, 'settings': _settings_payload(settings)})


@progress_bp.route('/settings', methods=['PUT'])
@require_game_service
def update_settings(game_service):
    """Update some or all settings."""
    try:
        data = request.get_json(silent=True) or {}
        game_logger.log_user_action(request, 'update_settings', changed=sorted(data.keys()))

        current = game_service.get_settings()
        word_length = int(data.get('word_length', current.word_length))
        if not is_valid_word_length(word_length):
            error_response = {
                'success': False,
                'error': f'Unsupported word length: {word_length}'
            }
            game_logger.log_server_response(request, 'update_settings', False, error_response)
            return jsonify(error_response), 400

        settings = GameSettings(
            difficulty=Difficulty.from_string(data['difficulty']) if 'difficulty' in data else current.difficulty,
            word_length=word_length,
            haptic_enabled=bool(data.get('haptic_enabled', current.haptic_enabled)),
            dark_mode=bool(data.get('dark_mode', current.dark_mode)),
            sound_enabled=bool(data.get('sound_enabled', current.sound_enabled))
        )

        success, error = game_service.update_settings(settings)
        if not success:
            error_response = {'success': False, 'error': error}
            game_logger.log_server_response(request, 'update_settings', False, error_response)
            return jsonify(error_response), 500

        response_data = {'success': True, 'settings': _settings_payload(settings)}
        game_logger.log_server_response(request, 'update_settings', True, response_data)
        return jsonify(response_data)

    except (TypeError, ValueError) as e:
        game_logger.log_error(request, e, 'update_settings')
        return jsonify({'success': False, 'error': str(e)}), 400


@progress_bp.route('/settings', methods=['DELETE'])
@require_game_service
def reset_settings(game_service):
    """Restore the default settings."""
    game_logger.log_user_action(request, 'reset_settings')
    success, error = game_service.reset_settings()
    response_data = {'success': success}
    if success:
        response_data['settings'] = _settings_payload(game_service.get_settings())
    else:
        response_data['error'] = error
    game_logger.log_server_response(request, 'reset_settings', success, response_data)
    return jsonify(response_data), 200 if success else 500


@progress_bp.route('/words/analysis', methods=['GET'])
@require_game_service
def word_analysis(game_service):
    """Word list statistics and frequency analysis."""
    try:
        game_logger.log_user_action(request, 'word_analysis')
        analysis = game_service.get_word_analysis()
        response_data = {'success': True, **analysis}
        game_logger.log_server_response(request, 'word_analysis', True, response_data)
        return jsonify(response_data)

    except (OSError, ValueError) as e:
        game_logger.log_error(request, e, 'word_analysis')
        return jsonify({'success': False, 'error': str(e)}), 500


@progress_bp.route('/statistics', methods=['GET'])
@require_game_service
def get_statistics(game_service):
    """Return cumulative statistics with a text summary."""
    game_logger.log_user_action(request, 'get_statistics')
    stats = game_service.get_statistics()
    return jsonify({
        'success': True,
        'statistics': stats.to_record(),
        'summary': statistics_summary(stats)
    })


@progress_bp.route('/statistics', methods=['DELETE'])
@require_game_service
def reset_statistics(game_service):
    """Reset statistics and game history."""
    game_logger.log_user_action(request, 'reset_statistics')
    success, error = game_service.reset_statistics()
    response_data = {'success': success}
    if not success:
        response_data['error'] = error
    game_logger.log_server_response(request, 'reset_statistics', success, response_data)
    return jsonify(response_data), 200 if success else 500


@progress_bp.route('/history', methods=['GET'])
@require_game_service
def get_history(game_service):
    """List finished games, most recent first, optionally by difficulty."""
    difficulty_name = request.args.get('difficulty')
    game_logger.log_user_action(request, 'get_history', difficulty=difficulty_name)

    difficulty = Difficulty.from_string(difficulty_name) if difficulty_name else None
    history = []
    for entry in game_service.get_history(difficulty):
        record = entry.to_record()
        record['duration_text'] = format_duration(entry.start_time, entry.end_time)
        history.append(record)

    return jsonify({'success': True, 'history': history})
