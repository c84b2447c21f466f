from dataclasses import asdict

import pytest

from phirldle.config.game_settings import WORD_LIST, INITIAL_LIVES, GHOST_EMOJI
from phirldle.models.game import GameRules
from phirldle.services.game_service import (
    GameService, get_game_service, initialize_game_service, rules_from_config
)
from phirldle.config import TestingConfig

from conftest import wrong_word


def type_guess(service, session_id, word):
    for letter in word:
        service.press_key(session_id, letter)
    return service.press_key(session_id, "ENTER")


@pytest.fixture
def service(scheduler):
    return GameService(GameRules(win_delay=2.0, round_loss_delay=3.0), scheduler=scheduler)


@pytest.fixture
def session_id(service):
    return service.create_session()


def secret_of(service, session_id):
    return service.get_state(session_id).secret_word


def test_new_session_snapshot(service, session_id):
    snapshot = service.get_snapshot(session_id)

    assert snapshot.session_id == session_id
    assert snapshot.word_length == len(secret_of(service, session_id))
    assert snapshot.total_words == len(WORD_LIST)
    assert snapshot.words_found == 0
    assert snapshot.lives == list(INITIAL_LIVES)
    assert snapshot.lives_remaining == len(INITIAL_LIVES)
    assert snapshot.max_attempts == 6
    assert not snapshot.low_on_lives
    assert not snapshot.game_over


def test_snapshot_never_contains_secret(service, session_id):
    secret = secret_of(service, session_id)
    data = asdict(service.get_snapshot(session_id))

    assert "secret_word" not in data
    assert secret not in str(data)


def test_unknown_session_returns_none(service):
    assert service.get_snapshot("missing") is None
    assert service.press_key("missing", "A") is None
    assert service.restart_session("missing") is None
    assert service.delete_session("missing") is False


def test_guess_results_and_keyboard_are_evaluated(service, session_id):
    secret = secret_of(service, session_id)
    guess = wrong_word(secret)

    snapshot = type_guess(service, session_id, guess)

    assert snapshot.guesses == [guess]
    assert snapshot.guess_results == [[(letter, "absent") for letter in guess]]
    assert snapshot.letter_status[guess[0]] == "absent"
    assert snapshot.lives[0] == GHOST_EMOJI
    assert snapshot.lives_remaining == len(INITIAL_LIVES) - 1


def test_correct_guess_schedules_next_round(service, session_id, scheduler):
    state = service.get_state(session_id)
    snapshot = type_guess(service, session_id, state.secret_word)

    assert snapshot.transitioning
    assert snapshot.words_found == 1
    assert [timer.delay for timer in scheduler.pending] == [2.0]

    scheduler.fire_all()

    after = service.get_state(session_id)
    assert after.secret_word == state.words[1]
    assert not after.transitioning


def test_listeners_receive_delayed_transitions(service, session_id, scheduler):
    received = []
    service.add_listener(lambda sid, snapshot: received.append((sid, snapshot)))

    type_guess(service, session_id, secret_of(service, session_id))
    assert received == []

    scheduler.fire_all()

    assert len(received) == 1
    sid, snapshot = received[0]
    assert sid == session_id
    assert snapshot.message == ""
    assert snapshot.guesses == []


def test_failing_listener_does_not_block_transition(service, session_id, scheduler):
    def broken(sid, snapshot):
        raise RuntimeError("socket gone")

    service.add_listener(broken)
    words = service.get_state(session_id).words
    type_guess(service, session_id, words[0])
    scheduler.fire_all()

    after = service.get_state(session_id)
    assert after.secret_word == words[1]
    assert not after.transitioning


def test_round_loss_uses_round_loss_delay(service, session_id, scheduler):
    secret = secret_of(service, session_id)
    for _ in range(6):
        snapshot = type_guess(service, session_id, wrong_word(secret))

    assert snapshot.message == f"You silly frog! The word was {secret}"
    assert [timer.delay for timer in scheduler.pending] == [3.0]


def test_round_loss_on_last_word_wins_session_when_timer_fires(scheduler):
    service = GameService(GameRules(win_delay=2.0, round_loss_delay=3.0),
                          scheduler=scheduler, word_list=("ALL",))
    session_id = service.create_session()

    for _ in range(6):
        snapshot = type_guess(service, session_id, wrong_word("ALL"))

    assert snapshot.message == "You silly frog! The word was ALL"
    assert not snapshot.game_over
    assert [timer.delay for timer in scheduler.pending] == [3.0]

    scheduler.fire_all()

    snapshot = service.get_snapshot(session_id)
    assert snapshot.game_over
    assert snapshot.won
    assert snapshot.message == "Congratulations! You've found all the words!"
    assert snapshot.winning_words == ["ALL"]
    assert scheduler.pending == []

    before = service.get_state(session_id)
    service.press_key(session_id, "A")
    assert service.get_state(session_id) is before


def test_restart_cancels_pending_transition(service, session_id, scheduler):
    type_guess(service, session_id, secret_of(service, session_id))
    timer = scheduler.pending[0]

    snapshot = service.restart_session(session_id)

    assert timer.cancelled
    assert snapshot.words_found == 0
    assert not snapshot.transitioning

    # A timer that already started running is stopped by the stale token
    before = service.get_state(session_id)
    timer.callback()
    assert service.get_state(session_id) is before


def test_delete_session_cancels_timer(service, session_id, scheduler):
    type_guess(service, session_id, secret_of(service, session_id))
    timer = scheduler.pending[0]

    assert service.delete_session(session_id) is True
    assert timer.cancelled
    assert service.get_snapshot(session_id) is None

    timer.callback()
    assert service.get_state(session_id) is None


def test_low_on_lives_flag():
    rules = GameRules(initial_lives=tuple("abcde"), spent_marker="x")
    service = GameService(rules, scheduler=lambda delay, callback: None)
    session_id = service.create_session()

    snapshot = type_guess(service, session_id, wrong_word(secret_of(service, session_id)))

    assert snapshot.lives_remaining == 4
    assert snapshot.low_on_lives


def test_rules_from_config_reads_delays():
    rules = rules_from_config(TestingConfig)

    assert rules.win_delay == TestingConfig.WIN_DELAY_SECONDS
    assert rules.round_loss_delay == TestingConfig.ROUND_LOSS_DELAY_SECONDS
    assert rules.max_attempts == 6


def test_listener_registered_twice_under_one_name_runs_once(service, session_id, scheduler):
    received = []
    service.add_listener(lambda sid, snapshot: received.append(sid), name="broadcast")
    service.add_listener(lambda sid, snapshot: received.append(sid), name="broadcast")

    type_guess(service, session_id, secret_of(service, session_id))
    scheduler.fire_all()

    assert received == [session_id]


def test_reinitialized_service_keeps_listeners(scheduler):
    received = []
    first = initialize_game_service(scheduler=scheduler)
    first.add_listener(lambda sid, snapshot: received.append(sid), name="broadcast")

    second = initialize_game_service(scheduler=scheduler)
    session_id = second.create_session()
    type_guess(second, session_id, secret_of(second, session_id))
    scheduler.fire_all()

    assert get_game_service() is second
    assert received == [session_id]


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_idle_sessions_expire(scheduler):
    clock = FakeClock()
    service = GameService(scheduler=scheduler, session_ttl=60, clock=clock)
    idle = service.create_session()
    active = service.create_session()

    clock.now = 50
    service.press_key(active, "A")
    clock.now = 100

    assert service.cleanup_expired_sessions() == [idle]
    assert service.get_state(idle) is None
    assert service.get_state(active) is not None
    assert service.delete_session(idle) is False


def test_expiring_session_cancels_its_timer(scheduler):
    clock = FakeClock()
    service = GameService(scheduler=scheduler, session_ttl=60, clock=clock)
    session_id = service.create_session()
    type_guess(service, session_id, secret_of(service, session_id))
    timer = scheduler.pending[0]

    clock.now = 61
    service.cleanup_expired_sessions()

    assert timer.cancelled
    timer.callback()
    assert service.get_state(session_id) is None


def test_sessions_never_expire_without_ttl(service, session_id):
    assert service.cleanup_expired_sessions() == []
    assert service.get_state(session_id) is not None
