import random
import string
from collections import Counter

import pytest

from phirldle.models.game import LetterStatus
from phirldle.services.evaluator import evaluate_guess, evaluate_guess_letters, keyboard_status

C, P, A = LetterStatus.CORRECT, LetterStatus.PRESENT, LetterStatus.ABSENT


def test_apple_against_apply():
    assert evaluate_guess("APPLE", "APPLY") == [C, C, C, C, A]


@pytest.mark.parametrize("guess, secret, expected", [
    ("ALLEE", "LEVEL", [A, P, P, C, P]),
    ("SPEED", "ABIDE", [A, A, P, A, P]),
    ("LLAMA", "HELLO", [P, P, A, A, A]),
    ("EERIE", "THREE", [P, A, C, A, C]),
    ("OOO", "FOR", [A, C, A]),
])
def test_duplicate_letters_follow_two_pass_rule(guess, secret, expected):
    assert evaluate_guess(guess, secret) == expected


def test_exact_match_is_all_correct():
    for word in ["ALL", "FALL", "CHEER", "PLOTSIE"]:
        assert evaluate_guess(word, word) == [C] * len(word)


def test_no_shared_letters_is_all_absent():
    assert evaluate_guess("TOWN", "FALL") == [A, A, A, A]


def test_classification_invariants_hold_for_random_words():
    rng = random.Random(1234)
    alphabet = "ABLE"
    for _ in range(300):
        length = rng.randint(3, 7)
        guess = "".join(rng.choice(alphabet) for _ in range(length))
        secret = "".join(rng.choice(alphabet) for _ in range(length))

        result = evaluate_guess(guess, secret)

        assert len(result) == len(guess)
        exact = sum(1 for g, s in zip(guess, secret) if g == s)
        assert result.count(C) == exact

        secret_counts = Counter(secret)
        credited = Counter(letter for letter, status in zip(guess, result) if status != A)
        for letter, count in credited.items():
            assert count <= secret_counts[letter]


def test_evaluate_guess_letters_pairs_letters_with_values():
    assert evaluate_guess_letters("FOR", "FUR") == [("F", "correct"), ("O", "absent"), ("R", "correct")]


def test_keyboard_keeps_best_status_across_guesses():
    status = keyboard_status(["FEST", "BETS"], "BEST")

    assert status["F"] == "absent"
    assert status["E"] == "correct"
    assert status["S"] == "correct"
    assert status["T"] == "correct"
    assert status["B"] == "correct"
    assert status["Z"] == "unused"
    assert set(status) == set(string.ascii_uppercase)


def test_keyboard_present_is_not_downgraded_by_later_absent():
    # The second O finds no O left in the secret and is absent
    status = keyboard_status(["XXOO"], "TOWN")

    assert status["O"] == "present"
    assert status["X"] == "absent"


def test_keyboard_for_empty_round_is_all_unused():
    assert set(keyboard_status([], "ALL").values()) == {"unused"}
