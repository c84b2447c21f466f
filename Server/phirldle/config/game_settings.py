"""
Game Configuration Constants Module

This module defines the game rules for a PHIRLDLE session: the fixed word
list, the per-round attempt limit, the session-wide lives pool and the
messages shown to the player.
"""

from typing import Dict, List, Final, Tuple

# Core Game Configuration Constants
MAX_ATTEMPTS: Final[int] = 6
"""
Maximum number of guesses allowed for a single secret word.
Type: Final[int] - Immutable to prevent accidental modification
"""

MIN_WORD_LENGTH: Final[int] = 3
MAX_WORD_LENGTH: Final[int] = 7

# Words are played in a shuffled order, one per round
WORD_LIST: Final[Tuple[str, ...]] = (
    "FALL",
    "ARBOR",
    "TOWN",
    "FEST",
    "ALL",
    "CHEER",
    "FOR",
    "PLOTSIE",
    "THE",
    "BEST",
)

# One marker per permitted wrong guess across the whole session
INITIAL_LIVES: Final[Tuple[str, ...]] = (
    '🐱', '🧙', '🦊', '🥳', '👨‍🎤', '🤓', '🐸', '🤠', '🌝', '😘',
    '🐙', '👸', '🐹', '🐥', '👽', '🥸', '🦹', '🦄', '🦚', '🐳',
)
GHOST_EMOJI: Final[str] = '👻'

# The board turns red once this many lives or fewer remain
LOW_LIVES_THRESHOLD: Final[int] = 4

# Player-facing messages
MESSAGE_SESSION_WON: Final[str] = "Congratulations! You've found all the words!"
MESSAGE_CORRECT_GUESS: Final[str] = "Correct! You beautiful goose!"
MESSAGE_SESSION_LOST: Final[str] = "You tragic monkey! You've lost! Tell Alma immediately!"
MESSAGE_ROUND_LOST: Final[str] = "You silly frog! The word was {word}"
MESSAGE_INVALID_LENGTH: Final[str] = "The word must be {length} letters long."


def validate_word_list_integrity(word_list=WORD_LIST) -> bool:
    """
    Validates the integrity and consistency of the word database.

    This function performs validation to ensure:
    1. Length validation: every word is between MIN_WORD_LENGTH and MAX_WORD_LENGTH
    2. Character validation: Only alphabetic characters allowed
    3. Uniqueness validation: No duplicate entries
    4. Format validation: Consistent uppercase formatting

    Returns:
        bool: True if word list passes all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if not word_list:
        raise ValueError("Word list cannot be empty")

    for index, word in enumerate(word_list):
        if not MIN_WORD_LENGTH <= len(word) <= MAX_WORD_LENGTH:
            raise ValueError(
                f"Word at index {index} '{word}' must be between "
                f"{MIN_WORD_LENGTH} and {MAX_WORD_LENGTH} characters long"
            )

        if not word.isalpha():
            raise ValueError(f"Word at index {index} '{word}' contains non-alphabetic characters")

        if not word.isupper():
            raise ValueError(f"Word at index {index} '{word}' is not in uppercase format")

    if len(word_list) != len(set(word_list)):
        duplicates = sorted({word for word in word_list if word_list.count(word) > 1})
        raise ValueError(f"Duplicate words found in word list: {duplicates}")

    return True


def get_word_statistics(word_list=WORD_LIST) -> dict:
    """
    Analyzes the word list and returns statistical information.

    Returns:
        dict: total_words, length_distribution, avg_vowel_count,
        letter_frequency and most_common_letters
    """
    if not word_list:
        return {"error": "Word list is empty"}

    vowels = set('AEIOU')
    total_vowels = sum(len([char for char in word if char in vowels]) for word in word_list)

    length_distribution: Dict[int, int] = {}
    letter_frequency: Dict[str, int] = {}
    for word in word_list:
        length_distribution[len(word)] = length_distribution.get(len(word), 0) + 1
        for char in word:
            letter_frequency[char] = letter_frequency.get(char, 0) + 1

    most_common: List[Tuple[str, int]] = sorted(
        letter_frequency.items(), key=lambda x: x[1], reverse=True
    )[:5]

    return {
        "total_words": len(word_list),
        "length_distribution": length_distribution,
        "avg_vowel_count": round(total_vowels / len(word_list), 2),
        "letter_frequency": letter_frequency,
        "most_common_letters": most_common
    }


if __name__ == "__main__":

    try:
        validate_word_list_integrity()
        print(" Word list validation passed")

        stats = get_word_statistics()
        print(f" Game statistics: {stats}")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
