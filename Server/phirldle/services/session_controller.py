"""
Session Controller

The round/lives state machine of a PHIRLDLE session. Every function takes a
``SessionState`` and returns a ``Transition`` holding the next state, the
delayed continuation to schedule (if any) and the game events it produced.
Nothing here touches timers, locks or I/O; ``GameService`` does that.
"""

import random
import uuid
from dataclasses import replace
from typing import Iterable, Optional, Sequence
from ..config.game_settings import (
    WORD_LIST,
    MESSAGE_SESSION_WON, MESSAGE_CORRECT_GUESS, MESSAGE_SESSION_LOST,
    MESSAGE_ROUND_LOST, MESSAGE_INVALID_LENGTH
)
from ..models.game import GameRules, PendingTransition, SessionState, Transition

KEY_ENTER = "ENTER"
KEY_BACKSPACE = "BACKSPACE"

DEFAULT_RULES = GameRules()


def _update(state: SessionState, **changes) -> SessionState:
    """Returns a copy of ``state`` with ``changes`` applied and the version bumped."""
    return replace(state, version=state.version + 1, **changes)


def shuffle_words(words: Iterable[str], rng: Optional[random.Random] = None) -> tuple:
    """Returns a shuffled copy of ``words``; ``random.shuffle`` is a Fisher-Yates shuffle."""
    shuffled = list(words)
    (rng or random).shuffle(shuffled)
    return tuple(shuffled)


def start_new_game(words: Sequence[str] = WORD_LIST,
                   rules: GameRules = DEFAULT_RULES,
                   rng: Optional[random.Random] = None,
                   previous: Optional[SessionState] = None) -> Transition:
    """
    Starts (or restarts) a session: shuffles the word list, revives every
    life and begins round 0.

    Args:
        words: Candidate secret words
        rules: Attempt limit, lives and delays to play under
        rng: Random source for the shuffle
        previous: State being restarted, so versions keep increasing

    Returns:
        Transition into the first round
    """
    state = SessionState(
        words=shuffle_words(words, rng),
        lives=tuple(rules.initial_lives),
        version=previous.version + 1 if previous is not None else 0
    )
    return start_new_round(state)


def start_new_round(state: SessionState,
                    words: Optional[Sequence[str]] = None,
                    winning_words: Optional[Sequence[str]] = None) -> Transition:
    """
    Moves to the next unresolved word, or ends the session as won when every
    word has been resolved.
    """
    words = tuple(words) if words is not None else state.words
    winning_words = tuple(winning_words) if winning_words is not None else state.winning_words

    if len(winning_words) == len(words):
        next_state = _update(
            state,
            words=words,
            winning_words=winning_words,
            message=MESSAGE_SESSION_WON,
            game_over=True,
            won=True,
            transitioning=False,
            pending_token=None
        )
        return Transition(next_state, events=("session_won",))

    next_state = _update(
        state,
        words=words,
        winning_words=winning_words,
        secret_word=words[len(winning_words)],
        guesses=(),
        current_guess="",
        message="",
        transitioning=False,
        pending_token=None
    )
    return Transition(next_state, events=("round_started",))


def accepts_input(state: SessionState) -> bool:
    """Key presses are only processed during an active, settled round."""
    return not state.game_over and bool(state.secret_word) and not state.transitioning


def handle_key_press(state: SessionState, key, rules: GameRules = DEFAULT_RULES) -> Transition:
    """
    Applies one key press.

    ENTER submits the current guess when it is complete, BACKSPACE removes
    the last letter and a single letter is appended while there is room.
    Anything else, and any key while the session is over or between
    rounds, leaves the state untouched.
    """
    if not accepts_input(state) or not isinstance(key, str):
        return Transition(state)

    key = key.strip().upper()

    if key == KEY_ENTER:
        if len(state.current_guess) != len(state.secret_word):
            return _reject_length(state)
        return submit_guess(state, rules)

    if key == KEY_BACKSPACE:
        if not state.current_guess:
            return Transition(state)
        return Transition(_update(state, current_guess=state.current_guess[:-1]))

    if len(key) == 1 and key.isalpha() and len(state.current_guess) < len(state.secret_word):
        return Transition(_update(state, current_guess=state.current_guess + key))

    return Transition(state)


def _reject_length(state: SessionState) -> Transition:
    message = MESSAGE_INVALID_LENGTH.format(length=len(state.secret_word))
    return Transition(_update(state, message=message), events=("invalid_guess_length",))


def submit_guess(state: SessionState, rules: GameRules = DEFAULT_RULES) -> Transition:
    """
    Records the current guess and resolves it against the secret word.

    A correct guess resolves the word and schedules the next round. A wrong
    guess spends one life; the session is lost when none remain, and the
    round is lost (word revealed and counted as resolved) once the attempt
    limit is reached.
    """
    if not accepts_input(state):
        return Transition(state)
    if len(state.current_guess) != len(state.secret_word):
        return _reject_length(state)

    guess = state.current_guess
    guesses = state.guesses + (guess,)

    if guess == state.secret_word:
        token = uuid.uuid4().hex
        next_state = _update(
            state,
            guesses=guesses,
            current_guess="",
            winning_words=state.winning_words + (state.secret_word,),
            message=MESSAGE_CORRECT_GUESS,
            transitioning=True,
            pending_token=token
        )
        pending = PendingTransition(delay=rules.win_delay, token=token, reason="word_solved")
        return Transition(next_state, pending=pending, events=("word_solved",))

    lives = spend_life(state.lives, rules.spent_marker)

    if all(life == rules.spent_marker for life in lives):
        next_state = _update(
            state,
            guesses=guesses,
            current_guess="",
            lives=lives,
            message=MESSAGE_SESSION_LOST,
            game_over=True,
            won=False
        )
        return Transition(next_state, events=("wrong_guess", "session_lost"))

    if len(guesses) >= rules.max_attempts:
        token = uuid.uuid4().hex
        next_state = _update(
            state,
            guesses=guesses,
            current_guess="",
            lives=lives,
            winning_words=state.winning_words + (state.secret_word,),
            message=MESSAGE_ROUND_LOST.format(word=state.secret_word),
            transitioning=True,
            pending_token=token
        )
        pending = PendingTransition(delay=rules.round_loss_delay, token=token, reason="round_lost")
        return Transition(next_state, pending=pending, events=("wrong_guess", "round_lost"))

    next_state = _update(state, guesses=guesses, current_guess="", lives=lives)
    return Transition(next_state, events=("wrong_guess",))


def spend_life(lives: Sequence[str], spent_marker: str) -> tuple:
    """Turns the first alive marker into ``spent_marker``."""
    lives = list(lives)
    for index, life in enumerate(lives):
        if life != spent_marker:
            lives[index] = spent_marker
            break
    return tuple(lives)


def resume_after_delay(state: SessionState, token: str) -> Transition:
    """
    Runs a delayed continuation. Stale tokens (the session was restarted or
    already advanced) leave the state untouched.
    """
    if not state.transitioning or state.pending_token != token:
        return Transition(state)
    return start_new_round(state)
