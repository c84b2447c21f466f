"""
PHIRLDLE Game Server - Main Entry Point

This is the main entry point for the PHIRLDLE game server.
It initializes the game service and starts the Flask-SocketIO application.
"""

import threading
import time
from phirldle import create_app
from phirldle.config import Config
from phirldle.services.game_service import (
    get_game_service, initialize_game_service, rules_from_config
)
from phirldle.utils.game_logger import game_logger


def session_cleanup_worker(interval_seconds):
    """
    Background worker that periodically drops sessions nobody has touched
    for SESSION_TTL_SECONDS.
    """
    print("Session cleanup worker started")
    while True:
        try:
            game_service = get_game_service()
            if game_service:
                expired = game_service.cleanup_expired_sessions()
                if expired:
                    game_logger.logger.info(f"Session cleanup: Removed {len(expired)} idle sessions")
        except Exception as e:
            game_logger.logger.error(f"Error in session cleanup worker: {e}")

        time.sleep(interval_seconds)


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        game_service = initialize_game_service(
            rules_from_config(Config), session_ttl=Config.SESSION_TTL_SECONDS
        )
        if game_service:
            print("✓ Game service initialized successfully")
        else:
            print("✗ Failed to initialize game service")

        print("Creating Flask application...")
        app, socketio = create_app(Config)
        print("✓ Flask application created successfully")

        cleanup_thread = threading.Thread(
            target=session_cleanup_worker, args=(Config.SESSION_CLEANUP_INTERVAL_SECONDS,), daemon=True
        )
        cleanup_thread.start()
        print(f"✓ Session cleanup worker started - checking every {Config.SESSION_CLEANUP_INTERVAL_SECONDS:g} seconds")

        game_logger.logger.info("PHIRLDLE Server Starting")

        print(f"\nStarting PHIRLDLE Game Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print("=" * 50)

        socketio.run(app, host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("PHIRLDLE Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
