import importlib
import logging
import os
from datetime import datetime

game_logger_module = importlib.import_module('phirldle.utils.game_logger')
from phirldle.utils.game_logger import game_logger


class NextYear(datetime):
    @classmethod
    def now(cls, tz=None):
        return cls(2099, 1, 1, 0, 0, 1)


def file_handler():
    return next(h for h in game_logger.logger.handlers if isinstance(h, logging.FileHandler))


def test_log_file_is_the_handler_file():
    assert os.path.abspath(game_logger.log_file) == file_handler().baseFilename


def test_stats_follow_handler_file_after_date_change(monkeypatch):
    log_file = game_logger.log_file
    monkeypatch.setattr(game_logger_module, 'datetime', NextYear)

    game_logger.log_game_event('abc', 'round_started', 'server')
    stats = game_logger.get_log_stats()

    assert 'error' not in stats
    assert stats['log_file'] == str(log_file)
    assert stats['game_events'] >= 1


def test_stats_count_entries_by_type():
    before = game_logger.get_log_stats()

    game_logger.log_game_event('abc', 'word_solved', 'server')
    game_logger.logger.info("plain text line")

    after = game_logger.get_log_stats()
    assert after['game_events'] == before['game_events'] + 1
    assert after['total_entries'] == before['total_entries'] + 2
    assert after['errors'] == before['errors']
