"""
WebSocket Event Handlers

Handles the real-time channel to the board and keyboard: key presses come
in, state snapshots go out, including the ones produced when a delayed
round transition fires.
"""

from dataclasses import asdict
from flask import request
from flask_socketio import emit, join_room, leave_room
from ..services.game_service import get_game_service
from ..utils.decorators import websocket_session_required
from ..utils.game_logger import game_logger
from ..utils.helpers import extract_key


def game_room(session_id):
    return f"game_{session_id}"


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    def broadcast_game_state_update(session_id, snapshot):
        """Push a session snapshot to every client watching that session."""
        socketio.emit('game_state_update', {
            'success': True,
            'state': asdict(snapshot)
        }, room=game_room(session_id))

    game_service = get_game_service()
    if game_service:
        game_service.add_listener(broadcast_game_state_update, name='socketio_broadcast')

    @socketio.on('connect')
    def handle_connect():
        """Handle WebSocket connection."""
        pass

    @socketio.on('join_game')
    @websocket_session_required
    def handle_join_game(data, game_service=None, session_id=None):
        """Join a session room and receive its current state."""
        join_room(game_room(session_id))
        game_logger.log_user_action(request, 'join_game', session_id)

        emit('game_state_update', {
            'success': True,
            'state': asdict(game_service.get_snapshot(session_id))
        })

    @socketio.on('leave_game')
    @websocket_session_required
    def handle_leave_game(data, game_service=None, session_id=None):
        """Leave a session room."""
        leave_room(game_room(session_id))
        game_logger.log_user_action(request, 'leave_game', session_id)

    @socketio.on('key_press')
    @websocket_session_required
    def handle_key_press(data, game_service=None, session_id=None):
        """Apply one key press and broadcast the new state."""
        key = extract_key(data)
        if not isinstance(key, str) or not key:
            emit('error', {'error': 'Key is required'})
            return

        try:
            game_logger.log_user_action(request, 'key_press', session_id, key=key)
            snapshot = game_service.press_key(session_id, key)
            if snapshot is None:
                emit('error', {'error': 'Session not found'})
                return
            broadcast_game_state_update(session_id, snapshot)
        except Exception as e:
            game_logger.log_error(request, e, 'key_press', session_id)
            emit('error', {'error': str(e)})

    @socketio.on('restart_game')
    @websocket_session_required
    def handle_restart_game(data, game_service=None, session_id=None):
        """Restart the session and broadcast the new state."""
        try:
            game_logger.log_user_action(request, 'restart_game', session_id)
            snapshot = game_service.restart_session(session_id)
            if snapshot is None:
                emit('error', {'error': 'Session not found'})
                return
            broadcast_game_state_update(session_id, snapshot)
        except Exception as e:
            game_logger.log_error(request, e, 'restart_game', session_id)
            emit('error', {'error': str(e)})
