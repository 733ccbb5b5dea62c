"""
Testing pure game logic.
"""

import itertools

import pytest

from busdle.engine import evaluate, is_win, normalize_bus_id
from busdle.errors import InvalidLength

def test_evaluate_all_exact():
    target = ["10", "5", "N5"]
    assert evaluate(target, list(target)) == ["exact", "exact", "exact"]

def test_evaluate_nothing_matches():
    assert evaluate(["1", "2", "3"], ["4", "5", "6"]) == ["absent", "absent", "absent"]

def test_evaluate_duplicates_exact_first():
    # The first A is exact; the second guessed A takes the last A, B takes B
    assert evaluate(["A", "B", "A"], ["A", "A", "B"]) == ["exact", "displaced", "displaced"]

def test_evaluate_bus_numbers_scenario():
    assert evaluate(["5", "10", "5"], ["10", "5", "5"]) == ["displaced", "displaced", "exact"]

def test_evaluate_exact_match_beats_earlier_displaced():
    # Only one 7 in the target and it's claimed by the exact match at index 2
    assert evaluate(["1", "2", "7"], ["7", "3", "7"]) == ["absent", "absent", "exact"]

def test_evaluate_guess_repeats_more_than_target():
    # Two 9s guessed, one in the target: first unclaimed one wins, left to right
    assert evaluate(["9", "1", "2"], ["1", "9", "9"]) == ["displaced", "displaced", "absent"]

def test_evaluate_derangement_is_all_displaced():
    target = ["1", "2", "3", "4"]
    guess = ["2", "3", "4", "1"]
    assert evaluate(target, guess) == ["displaced"] * 4

def test_evaluate_rejects_length_mismatch():
    with pytest.raises(InvalidLength):
        evaluate(["1", "2", "3"], ["1", "2"])
    # still a ValueError for callers that only catch that
    with pytest.raises(ValueError):
        evaluate(["1"], ["1", "2"])

def test_evaluate_length_and_exact_bound():
    target = ["A", "B", "A", "C"]
    for guess in itertools.product(["A", "B", "C", "D"], repeat=4):
        verdict = evaluate(target, list(guess))
        assert len(verdict) == len(target)
        same_spot = sum(1 for t, g in zip(target, guess) if t == g)
        assert verdict.count("exact") <= same_spot

def test_evaluate_is_pure():
    target, guess = ["5", "10", "5"], ["10", "5", "5"]
    assert evaluate(target, guess) == evaluate(target, guess)
    assert target == ["5", "10", "5"]
    assert guess == ["10", "5", "5"]

def test_is_win_true_and_false():
    assert is_win(["exact", "exact"]) is True
    assert is_win(["exact", "displaced"]) is False
    assert is_win([]) is False

def test_normalize_bus_id():
    assert normalize_bus_id(" n 5!") == "N5"
    assert normalize_bus_id("10") == "10"
    assert normalize_bus_id("--") == ""
    assert normalize_bus_id(None) == ""
