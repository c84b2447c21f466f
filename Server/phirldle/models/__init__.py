"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import (
    GameRules, LetterStatus, PendingTransition, SessionSnapshot, SessionState, Transition
)

__all__ = [
    'GameRules', 'LetterStatus', 'PendingTransition',
    'SessionSnapshot', 'SessionState', 'Transition'
]
