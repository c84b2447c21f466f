"""
Services Package

Contains all business logic and service classes.
"""

from .evaluator import evaluate_guess, evaluate_guess_letters, keyboard_status
from .game_service import GameService, get_game_service, initialize_game_service

__all__ = [
    'evaluate_guess', 'evaluate_guess_letters', 'keyboard_status',
    'GameService', 'get_game_service', 'initialize_game_service'
]
