"""
PHIRLDLE Game Server Application Package

A multi-word Wordle-style game: a pure guess evaluator, a round/lives
session state machine, and the Flask + Socket.IO layer that serves them to
the board and on-screen keyboard.
"""

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config, validate_word_list_integrity


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.

    The game service must be initialized first so the WebSocket layer can
    subscribe to its delayed state changes.

    Args:
        config_class: Configuration class to use

    Returns:
        Tuple of the Flask application and its SocketIO instance
    """
    validate_word_list_integrity()

    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app)
    socketio = SocketIO(app, cors_allowed_origins="*", logger=False, engineio_logger=False)

    # Register blueprints
    from .controllers.game_controller import game_bp

    app.register_blueprint(game_bp, url_prefix='/api')

    # Register WebSocket handlers
    from .websocket.handlers import register_websocket_handlers
    register_websocket_handlers(socketio)

    # Store socketio instance for use in other modules
    app.socketio = socketio

    return app, socketio
