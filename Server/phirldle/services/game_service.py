"""
Game Service

Owns every live PHIRLDLE session, runs key presses through the session
state machine and schedules the delayed round transitions.
"""

import random
import threading
import time
import uuid
from typing import Callable, Dict, List, Optional, Sequence
from ..config.game_settings import WORD_LIST
from ..models.game import GameRules, PendingTransition, SessionSnapshot, SessionState, Transition
from ..utils.game_logger import game_logger
from .evaluator import evaluate_guess_letters, keyboard_status
from . import session_controller

StateListener = Callable[[str, SessionSnapshot], None]


def schedule_timer(delay: float, callback: Callable[[], None]) -> threading.Timer:
    """Default scheduler: runs ``callback`` once on a daemon timer thread."""
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


def rules_from_config(config_class) -> GameRules:
    """Builds the game rules, taking the transition delays from app configuration."""
    return GameRules(
        win_delay=config_class.WIN_DELAY_SECONDS,
        round_loss_delay=config_class.ROUND_LOSS_DELAY_SECONDS
    )


class GameService:
    """
    Session manager for single-player PHIRLDLE games.

    This class handles:
    - Session management with unique session IDs
    - Applying key presses and restarts through the session state machine
    - Scheduling and cancelling the delayed round transitions
    - Building read-only snapshots that never expose the secret word
    - Expiring sessions nobody has touched for ``session_ttl`` seconds
    """

    def __init__(self,
                 rules: Optional[GameRules] = None,
                 scheduler: Callable = schedule_timer,
                 word_list: Sequence[str] = WORD_LIST,
                 rng: Optional[random.Random] = None,
                 session_ttl: Optional[float] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.sessions: Dict[str, SessionState] = {}  # Store active sessions by session_id
        self.rules = rules or GameRules()
        self.word_list = tuple(word_list)
        self._rng = rng or random.Random()
        self._scheduler = scheduler
        self._timers: Dict[str, object] = {}
        self._listeners: Dict[str, StateListener] = {}
        self.session_ttl = session_ttl  # None keeps sessions until deleted
        self._clock = clock
        self._last_active: Dict[str, float] = {}
        self._lock = threading.RLock()

    def add_listener(self, listener: StateListener, name: Optional[str] = None) -> None:
        """
        Registers a callback invoked whenever a delayed transition changes a
        session. Registering again under the same name replaces the old one.
        """
        self._listeners[name or str(id(listener))] = listener

    def copy_listeners_from(self, other: "GameService") -> None:
        self._listeners.update(other._listeners)

    def create_session(self) -> str:
        """
        Creates a new session and starts its first round.

        Returns:
            str: Unique session ID
        """
        session_id = str(uuid.uuid4())
        transition = session_controller.start_new_game(self.word_list, self.rules, self._rng)

        with self._lock:
            self.sessions[session_id] = transition.state
            self._touch(session_id)

        game_logger.log_game_event(
            session_id, 'session_created', 'server',
            total_words=len(transition.state.words)
        )
        self._log_events(session_id, transition)
        return session_id

    def get_state(self, session_id: str) -> Optional[SessionState]:
        """Returns the raw session state, or None if the session does not exist."""
        with self._lock:
            return self.sessions.get(session_id)

    def get_snapshot(self, session_id: str) -> Optional[SessionSnapshot]:
        """
        Returns the rendering snapshot for a session (without revealing the secret).

        Args:
            session_id: Unique session identifier

        Returns:
            SessionSnapshot or None if session not found
        """
        with self._lock:
            state = self.sessions.get(session_id)
            if state is None:
                return None
            self._touch(session_id)
            return self._to_snapshot(session_id, state)

    def press_key(self, session_id: str, key) -> Optional[SessionSnapshot]:
        """
        Applies one key press ("ENTER", "BACKSPACE" or a letter) to a session.

        Returns:
            Updated SessionSnapshot or None if session not found
        """
        with self._lock:
            state = self.sessions.get(session_id)
            if state is None:
                return None

            transition = session_controller.handle_key_press(state, key, self.rules)
            self._commit(session_id, transition)
            self._touch(session_id)
            snapshot = self._to_snapshot(session_id, transition.state)

        self._log_events(session_id, transition)
        return snapshot

    def restart_session(self, session_id: str) -> Optional[SessionSnapshot]:
        """Starts a fresh game in an existing session, cancelling any pending transition."""
        with self._lock:
            state = self.sessions.get(session_id)
            if state is None:
                return None

            self._cancel_timer(session_id)
            transition = session_controller.start_new_game(
                self.word_list, self.rules, self._rng, previous=state
            )
            self._commit(session_id, transition)
            self._touch(session_id)
            snapshot = self._to_snapshot(session_id, transition.state)

        game_logger.log_game_event(session_id, 'session_restarted', 'server')
        self._log_events(session_id, transition)
        return snapshot

    def delete_session(self, session_id: str) -> bool:
        """
        Removes a session from memory.

        Returns:
            bool: True if session was deleted, False if not found
        """
        with self._lock:
            if session_id not in self.sessions:
                return False
            self._forget(session_id)

        game_logger.log_game_event(session_id, 'session_deleted', 'server')
        return True

    def cleanup_expired_sessions(self) -> List[str]:
        """
        Removes sessions idle for longer than ``session_ttl``.

        Returns:
            List[str]: IDs of the sessions that were removed
        """
        if self.session_ttl is None:
            return []

        now = self._clock()
        with self._lock:
            expired = [
                session_id for session_id, last_active in self._last_active.items()
                if now - last_active > self.session_ttl
            ]
            for session_id in expired:
                self._forget(session_id)

        for session_id in expired:
            game_logger.log_game_event(
                session_id, 'session_expired', 'server', idle_limit_seconds=self.session_ttl
            )
        return expired

    def _touch(self, session_id: str) -> None:
        self._last_active[session_id] = self._clock()

    def _forget(self, session_id: str) -> None:
        self._cancel_timer(session_id)
        self.sessions.pop(session_id, None)
        self._last_active.pop(session_id, None)

    def _commit(self, session_id: str, transition: Transition) -> None:
        self.sessions[session_id] = transition.state
        if transition.pending is not None:
            self._schedule(session_id, transition.pending)

    def _schedule(self, session_id: str, pending: PendingTransition) -> None:
        self._cancel_timer(session_id)
        self._timers[session_id] = self._scheduler(
            pending.delay, lambda: self._run_pending(session_id, pending.token)
        )

    def _cancel_timer(self, session_id: str) -> None:
        timer = self._timers.pop(session_id, None)
        if timer is not None:
            timer.cancel()

    def _run_pending(self, session_id: str, token: str) -> None:
        """Timer callback: advances the session if its pending token is still current."""
        with self._lock:
            state = self.sessions.get(session_id)
            if state is None:
                return

            transition = session_controller.resume_after_delay(state, token)
            if transition.state is state:
                return

            self._timers.pop(session_id, None)
            self._commit(session_id, transition)
            snapshot = self._to_snapshot(session_id, transition.state)

        self._log_events(session_id, transition)
        for listener in list(self._listeners.values()):
            try:
                listener(session_id, snapshot)
            except Exception as e:
                game_logger.logger.error(f"State listener failed for session {session_id}: {e}")

    def _to_snapshot(self, session_id: str, state: SessionState) -> SessionSnapshot:
        secret = state.secret_word or ""
        lives_remaining = state.lives_remaining(self.rules.spent_marker)

        return SessionSnapshot(
            session_id=session_id,
            word_length=len(secret),
            max_attempts=self.rules.max_attempts,
            guesses=list(state.guesses),
            guess_results=[evaluate_guess_letters(guess, secret) for guess in state.guesses],
            letter_status=keyboard_status(state.guesses, secret),
            current_guess=state.current_guess,
            winning_words=list(state.winning_words),
            words_found=len(state.winning_words),
            total_words=len(state.words),
            lives=list(state.lives),
            lives_remaining=lives_remaining,
            message=state.message,
            game_over=state.game_over,
            won=state.won,
            transitioning=state.transitioning,
            low_on_lives=SessionSnapshot.low_lives(lives_remaining)
        )

    def _log_events(self, session_id: str, transition: Transition) -> None:
        state = transition.state
        for event in transition.events:
            game_logger.log_game_event(
                session_id, event, 'server',
                round=len(state.winning_words),
                guesses_used=len(state.guesses),
                lives_remaining=state.lives_remaining(self.rules.spent_marker)
            )


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(rules: Optional[GameRules] = None,
                            scheduler: Callable = schedule_timer,
                            session_ttl: Optional[float] = None) -> GameService:
    """
    Initialize the global game service instance.

    Listeners registered on a previous instance (the WebSocket broadcaster)
    stay subscribed.
    """
    global _game_service
    service = GameService(rules=rules, scheduler=scheduler, session_ttl=session_ttl)
    if _game_service is not None:
        service.copy_listeners_from(_game_service)
    _game_service = service
    return _game_service
