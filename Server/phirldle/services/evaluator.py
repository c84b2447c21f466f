"""
Guess Evaluator

Pure functions that classify the letters of a guess against a secret word
and aggregate those classifications for the on-screen keyboard.
"""

import string
from collections import Counter
from typing import Dict, Iterable, List, Optional, Tuple
from ..models.game import LetterStatus

# Higher wins when several guesses disagree about one key
_STATUS_PRIORITY = {
    LetterStatus.UNUSED: 0,
    LetterStatus.ABSENT: 1,
    LetterStatus.PRESENT: 2,
    LetterStatus.CORRECT: 3,
}


def evaluate_guess(guess: str, secret: str) -> List[LetterStatus]:
    """
    Implements the Wordle letter evaluation algorithm.

    Exact position matches are resolved first and consume their letter, so a
    letter repeated in the guess is credited at most as many times as it
    occurs in the secret. Both strings must have the same length.

    Args:
        guess: The submitted word
        secret: The word being guessed

    Returns:
        List[LetterStatus]: One status per position of ``guess``
    """
    result: List[Optional[LetterStatus]] = [None] * len(guess)
    remaining = Counter()

    # First pass: Mark all exact position matches
    for i, (guess_letter, secret_letter) in enumerate(zip(guess, secret)):
        if guess_letter == secret_letter:
            result[i] = LetterStatus.CORRECT
        else:
            remaining[secret_letter] += 1

    # Second pass: Mark present letters and misses
    for i, letter in enumerate(guess):
        if result[i] is not None:
            continue
        if remaining[letter] > 0:
            result[i] = LetterStatus.PRESENT
            remaining[letter] -= 1
        else:
            result[i] = LetterStatus.ABSENT

    return result  # type: ignore[return-value]


def evaluate_guess_letters(guess: str, secret: str) -> List[Tuple[str, str]]:
    """Pairs each letter of ``guess`` with its status value for serialization."""
    return [(letter, status.value) for letter, status in zip(guess, evaluate_guess(guess, secret))]


def keyboard_status(guesses: Iterable[str], secret: str) -> Dict[str, str]:
    """
    Builds the keyboard colouring for a round.

    Every letter starts UNUSED and can only move up in priority
    (ABSENT < PRESENT < CORRECT) as guesses are evaluated.
    """
    letter_status = {letter: LetterStatus.UNUSED for letter in string.ascii_uppercase}

    for guess in guesses:
        for letter, new_status in zip(guess, evaluate_guess(guess, secret)):
            current_status = letter_status.get(letter, LetterStatus.UNUSED)
            if _STATUS_PRIORITY[new_status] > _STATUS_PRIORITY[current_status]:
                letter_status[letter] = new_status

    return {letter: status.value for letter, status in letter_status.items()}
