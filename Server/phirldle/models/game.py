"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..config.game_settings import (
    MAX_ATTEMPTS, INITIAL_LIVES, GHOST_EMOJI, LOW_LIVES_THRESHOLD
)


class LetterStatus(Enum):
    """Per-letter verdict of a guess. UNUSED only appears on the keyboard."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"
    UNUSED = "unused"


@dataclass(frozen=True)
class GameRules:
    """Rules a session is played under."""
    max_attempts: int = MAX_ATTEMPTS
    initial_lives: Tuple[str, ...] = INITIAL_LIVES
    spent_marker: str = GHOST_EMOJI
    win_delay: float = 2.0
    round_loss_delay: float = 3.0


@dataclass(frozen=True)
class SessionState:
    """
    Immutable snapshot of one PHIRLDLE session.

    Every transition in ``services.session_controller`` returns a new
    instance. ``secret_word`` is None before the first round starts and
    ``pending_token`` identifies the delayed continuation that is allowed
    to advance the session while ``transitioning`` is set.
    """
    words: Tuple[str, ...]
    lives: Tuple[str, ...]
    winning_words: Tuple[str, ...] = ()
    secret_word: Optional[str] = None
    guesses: Tuple[str, ...] = ()
    current_guess: str = ""
    message: str = ""
    game_over: bool = False
    won: bool = False
    transitioning: bool = False
    pending_token: Optional[str] = None
    version: int = 0

    def lives_remaining(self, spent_marker: str = GHOST_EMOJI) -> int:
        return sum(1 for life in self.lives if life != spent_marker)


@dataclass(frozen=True)
class PendingTransition:
    """A delayed continuation that must run ``resume_after_delay`` once."""
    delay: float
    token: str
    reason: str  # "word_solved" or "round_lost"


@dataclass(frozen=True)
class Transition:
    """Result of applying one event to a session."""
    state: SessionState
    pending: Optional[PendingTransition] = None
    events: Tuple[str, ...] = ()


@dataclass
class SessionSnapshot:
    """Read-only view of a session handed to the rendering layer."""
    session_id: str
    word_length: int
    max_attempts: int
    guesses: List[str]
    guess_results: List[List[Tuple[str, str]]]  # Letter status as string for JSON serialization
    letter_status: Dict[str, str]
    current_guess: str
    winning_words: List[str]
    words_found: int
    total_words: int
    lives: List[str]
    lives_remaining: int
    message: str
    game_over: bool
    won: bool
    transitioning: bool
    low_on_lives: bool = field(default=False)

    @staticmethod
    def low_lives(lives_remaining: int) -> bool:
        return lives_remaining <= LOW_LIVES_THRESHOLD
