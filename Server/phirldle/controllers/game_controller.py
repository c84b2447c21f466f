"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from dataclasses import asdict
from ..config.game_settings import get_word_statistics
from ..services.game_service import get_game_service
from ..utils.decorators import require_session
from ..utils.game_logger import game_logger
from ..utils.helpers import extract_key

game_bp = Blueprint('game', __name__)


@game_bp.route('/new_game', methods=['POST'])
def new_game():
    """Create a new game session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        game_logger.log_user_action(request, 'new_game')

        session_id = game_service.create_session()
        snapshot = game_service.get_snapshot(session_id)

        response_data = {
            'success': True,
            'session_id': session_id,
            'state': asdict(snapshot)
        }

        game_logger.log_server_response(
            request, 'new_game', True, response_data, session_id,
            word_length=snapshot.word_length, total_words=snapshot.total_words
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'new_game')

        error_response = {
            'success': False,
            'error': str(e)
        }

        game_logger.log_server_response(request, 'new_game', False, error_response)
        return jsonify(error_response), 500


@game_bp.route('/game/<session_id>/state', methods=['GET'])
@require_session
def get_state(session_id, game_service=None):
    """Get current game state."""
    try:
        game_logger.log_user_action(request, 'get_state', session_id)

        snapshot = game_service.get_snapshot(session_id)
        response_data = {
            'success': True,
            'state': asdict(snapshot)
        }

        game_logger.log_server_response(
            request, 'get_state', True, response_data, session_id,
            words_found=snapshot.words_found, game_over=snapshot.game_over
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_state', session_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_state', False, error_response, session_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<session_id>/key', methods=['POST'])
@require_session
def press_key(session_id, game_service=None):
    """Forward one key press (a letter, ENTER or BACKSPACE) to the session."""
    try:
        key = extract_key(request.get_json(silent=True))
        if not isinstance(key, str) or not key:
            error_response = {
                'success': False,
                'error': 'Key is required'
            }
            game_logger.log_server_response(request, 'key_press', False, error_response, session_id)
            return jsonify(error_response), 400

        game_logger.log_user_action(request, 'key_press', session_id, key=key)

        snapshot = game_service.press_key(session_id, key)
        if snapshot is None:
            error_response = {
                'success': False,
                'error': 'Session not found'
            }
            game_logger.log_server_response(request, 'key_press', False, error_response, session_id)
            return jsonify(error_response), 404

        response_data = {
            'success': True,
            'state': asdict(snapshot)
        }

        game_logger.log_server_response(
            request, 'key_press', True, response_data, session_id,
            key=key, message=snapshot.message, game_over=snapshot.game_over
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'key_press', session_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'key_press', False, error_response, session_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<session_id>/restart', methods=['POST'])
@require_session
def restart_game(session_id, game_service=None):
    """Start the word list over in an existing session."""
    try:
        game_logger.log_user_action(request, 'restart_game', session_id)

        snapshot = game_service.restart_session(session_id)
        response_data = {
            'success': True,
            'state': asdict(snapshot)
        }

        game_logger.log_server_response(request, 'restart_game', True, response_data, session_id)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'restart_game', session_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'restart_game', False, error_response, session_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<session_id>', methods=['DELETE'])
def delete_game(session_id):
    """Delete a game session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        game_logger.log_user_action(request, 'delete_game', session_id)

        success = game_service.delete_session(session_id)
        response_data = {
            'success': success
        }

        game_logger.log_server_response(request, 'delete_game', success, response_data, session_id)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'delete_game', session_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'delete_game', False, error_response, session_id)
        return jsonify(error_response), 500


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'active_sessions': len(game_service.sessions) if game_service else 0,
            'word_stats': get_word_statistics(),
            'log_stats': game_logger.get_log_stats()
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
