import os
import tempfile

# Keep test logs out of the working tree; must run before phirldle is imported
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="phirldle-logs-"))

import pytest

from phirldle import create_app
from phirldle.config import TestingConfig
from phirldle.models.game import GameRules
from phirldle.services.game_service import initialize_game_service


class FakeTimer:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Records scheduled continuations so tests decide when they fire."""

    def __init__(self):
        self.timers = []

    def __call__(self, delay, callback):
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self):
        return [timer for timer in self.timers if not timer.cancelled]

    def fire_all(self):
        due, self.timers = self.pending, []
        for timer in due:
            timer.callback()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def game_service(scheduler):
    return initialize_game_service(GameRules(win_delay=2.0, round_loss_delay=3.0), scheduler=scheduler)


@pytest.fixture
def app(game_service):
    app, _ = create_app(TestingConfig)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def socket_client(app):
    return app.socketio.test_client(app)


def wrong_word(secret):
    """A guess of the right length that can never equal ``secret``."""
    return "Z" * len(secret) if set(secret) != {"Z"} else "Q" * len(secret)
