"""
Game Logger Module for the PHIRLDLE Server

Every entry is one JSON document describing a player action, a server
response, a game event (round started, word solved, session won or lost)
or an error. Entries go to a dated file; warnings and errors are echoed to
the console.
"""

import logging
import json
from collections import Counter
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path
from ..config.app_config import Config
from .helpers import get_user_identity

# Entry types, as written in the "event_type" field
USER_ACTION = 'USER_ACTION'
RESPONSE_SUCCESS = 'SERVER_RESPONSE_SUCCESS'
RESPONSE_ERROR = 'SERVER_RESPONSE_ERROR'
GAME_EVENT = 'GAME_EVENT'
ERROR = 'ERROR'

_STATS_KEYS = {
    USER_ACTION: 'user_actions',
    RESPONSE_SUCCESS: 'server_responses',
    RESPONSE_ERROR: 'server_responses',
    GAME_EVENT: 'game_events',
    ERROR: 'errors',
}


class GameLogger:
    """
    Structured JSON logging for the PHIRLDLE server.

    The log file is chosen once, when the logger is built; ``log_file``
    always names the file the handler is writing to.
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.level = logging.getLevelName(level.upper()) if isinstance(level, str) else level
        if not isinstance(self.level, int):
            self.level = logging.INFO

        self.log_file = self.log_dir / f"game_log_{datetime.now().strftime('%Y-%m-%d')}.log"
        self.logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        logger = logging.getLogger('phirldle_game')
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
               user_info: Dict[str, Optional[str]], details: Dict[str, Any]) -> None:
        entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'user': user_info,
            'details': details
        }
        self.logger.log(level, json.dumps(entry, ensure_ascii=False, default=str))

    def log_user_action(self, request, action: str, session_id: Optional[str] = None, **kwargs):
        """
        Record a player request.

        Args:
            request: Flask request (or Socket.IO request context)
            action: e.g. 'new_game', 'key_press', 'join_game'
            session_id: Session the action targets, if any
            **kwargs: Extra fields stored under "details"
        """
        details = {
            'session_id': session_id,
            'endpoint': getattr(request, 'endpoint', None),
            'method': getattr(request, 'method', None),
            'url': getattr(request, 'url', None),
            **kwargs
        }
        self._write(logging.INFO, USER_ACTION, action, get_user_identity(request), details)

    def log_server_response(self, request, action: str, success: bool,
                            response_data: Dict[str, Any],
                            session_id: Optional[str] = None, **kwargs):
        """Record what was sent back; failed responses are logged at ERROR."""
        details = {
            'session_id': session_id,
            'success': success,
            'response': self._summarize(response_data),
            **kwargs
        }
        if success:
            self._write(logging.INFO, RESPONSE_SUCCESS, action, get_user_identity(request), details)
        else:
            self._write(logging.ERROR, RESPONSE_ERROR, action, get_user_identity(request), details)

    def log_game_event(self, session_id: Optional[str], event: str, user_ip: str, **kwargs):
        """
        Record a game event. ``user_ip`` is 'server' for transitions the
        server drives itself (new sessions, delayed round starts).
        """
        user_info = {'user_ip': user_ip, 'session_id': session_id}
        self._write(logging.INFO, GAME_EVENT, event, user_info, {'session_id': session_id, **kwargs})

    def log_error(self, request, error: Exception, action: str, session_id: Optional[str] = None):
        details = {
            'session_id': session_id,
            'error_type': type(error).__name__,
            'error_message': str(error)
        }
        self._write(logging.ERROR, ERROR, action, get_user_identity(request), details)

    def _summarize(self, data) -> Dict[str, Any]:
        """Keeps logged responses small: a snapshot is reduced to its counters."""
        if not isinstance(data, dict):
            return {'data_type': type(data).__name__}

        summary = dict(data)
        state = summary.get('state')
        if isinstance(state, dict):
            summary['state'] = {
                'word_length': state.get('word_length'),
                'words_found': state.get('words_found'),
                'lives_remaining': state.get('lives_remaining'),
                'guesses_count': len(state.get('guesses', [])),
                'game_over': state.get('game_over'),
                'won': state.get('won'),
                'transitioning': state.get('transitioning')
            }
        return summary

    def get_log_stats(self) -> Dict[str, Any]:
        """Counts the entries of the current log file by type (used by /api/health)."""
        if not self.log_file.exists():
            return {'error': f'Log file {self.log_file} does not exist'}

        counts = Counter()
        try:
            with open(self.log_file, 'r', encoding='utf-8') as f:
                for line in f:
                    parts = line.rstrip('\n').split(' | ', 2)
                    if len(parts) != 3:
                        continue
                    counts['total_entries'] += 1
                    try:
                        entry = json.loads(parts[2])
                    except ValueError:
                        continue  # plain-text line, e.g. the startup banner
                    event_type = entry.get('event_type') if isinstance(entry, dict) else None
                    if event_type in _STATS_KEYS:
                        counts[_STATS_KEYS[event_type]] += 1
            size = self.log_file.stat().st_size
        except OSError as e:
            return {'error': f'Failed to get stats: {str(e)}'}

        stats = {'log_file': str(self.log_file), 'file_size_mb': round(size / (1024 * 1024), 2)}
        for key in ['total_entries', 'user_actions', 'server_responses', 'game_events', 'errors']:
            stats[key] = counts[key]
        return stats


# Global logger instance
game_logger = GameLogger(Config.LOG_DIR, Config.LOG_LEVEL)
