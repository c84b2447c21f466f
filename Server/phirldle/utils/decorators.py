"""
Session Decorators

Contains decorators that resolve the game service and session for HTTP
routes and WebSocket events.
"""

from functools import wraps
from flask import jsonify
from flask_socketio import emit


def require_session(f):
    """
    Decorator for HTTP routes taking a ``session_id`` URL parameter.

    Responds 500 when the game service is unavailable and 404 when the
    session does not exist; otherwise passes ``game_service`` to the route.
    """
    @wraps(f)
    def decorated_function(session_id, *args, **kwargs):
        from ..services.game_service import get_game_service

        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        if game_service.get_state(session_id) is None:
            return jsonify({
                'success': False,
                'error': 'Session not found'
            }), 404

        kwargs['game_service'] = game_service
        return f(session_id, *args, **kwargs)

    return decorated_function


def websocket_session_required(f):
    """Decorator for WebSocket events whose payload names a ``session_id``."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.game_service import get_game_service

        game_service = get_game_service()
        if not game_service:
            emit('error', {'error': 'Game service unavailable'})
            return

        if not args or not isinstance(args[0], dict) or 'session_id' not in args[0]:
            emit('error', {'error': 'Session ID is required'})
            return

        session_id = args[0]['session_id']
        if game_service.get_state(session_id) is None:
            emit('error', {'error': 'Session not found'})
            return

        kwargs['game_service'] = game_service
        kwargs['session_id'] = session_id
        return f(*args, **kwargs)

    return decorated_function
