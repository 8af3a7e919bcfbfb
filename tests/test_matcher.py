import random
from itertools import product

import pytest

import game.matcher as matcher
from game.errors import CountMismatch, OutOfRangeSymbol
from game.matcher import match, score, validate_hint
from game.secret_code import Code


def test_match_scenarios():
    assert match([6, 3, 2, 1], [1, 2, 3, 6]) == (0, 4)
    assert match([1, 2, 3, 6], [1, 2, 3, 6]) == (4, 0)
    assert match([1, 1, 2, 2], [1, 1, 1, 1]) == (2, 0)
    assert match([6, 2, 1, 3], [1, 2, 3, 6]) == (1, 3)
    assert match([4, 4, 5, 5], [1, 2, 3, 6]) == (0, 0)


def test_match_duplicates_count_once():
    # One solution 1 left after the exact match, so only one white
    assert match([1, 1, 1, 2], [2, 1, 3, 1]) == (1, 2)
    assert match([2, 2, 2, 2], [2, 3, 3, 3]) == (1, 0)
    assert match([3, 3, 1, 1], [1, 1, 3, 3]) == (0, 4)


def test_match_accepts_codes_and_leaves_inputs_alone():
    guess = [1, 1, 2, 2]
    solution = Code([1, 1, 1, 1])
    assert match(Code(guess), solution) == (2, 0)
    assert guess == [1, 1, 2, 2]
    assert solution == [1, 1, 1, 1]


def test_match_agrees_with_classical_scoring():
    rng = random.Random(1234)
    codes = list(product(range(1, 7), repeat=4))
    for _ in range(2000):
        g, s = rng.choice(codes), rng.choice(codes)
        assert match(g, s) == score(g, s)


def test_match_properties_sampled():
    rng = random.Random(99)
    codes = list(product(range(1, 7), repeat=4))
    for _ in range(2000):
        g, s = rng.choice(codes), rng.choice(codes)
        black, white = match(g, s)
        assert 0 <= black <= 4
        assert 0 <= white <= 4
        assert black + white <= 4
        assert match(s, g) == (black, white)
        assert match(g, g) == (4, 0)


def test_match_runs_same_operations_for_every_input(monkeypatch):
    calls = {"select": 0, "equals": 0}
    real_select, real_equals = matcher.select, matcher.equals

    def counting_select(*args):
        calls["select"] += 1
        return real_select(*args)

    def counting_equals(*args):
        calls["equals"] += 1
        return real_equals(*args)

    monkeypatch.setattr(matcher, "select", counting_select)
    monkeypatch.setattr(matcher, "equals", counting_equals)

    for guess, solution in [
        ([1, 2, 3, 6], [1, 2, 3, 6]),
        ([6, 3, 2, 1], [1, 2, 3, 6]),
        ([4, 4, 5, 5], [1, 2, 3, 6]),
        ([1, 1, 2, 2], [1, 1, 1, 1]),
    ]:
        calls["select"] = calls["equals"] = 0
        match(guess, solution)
        # 2 selects per position, 2 per (i, j) pair
        assert calls == {"select": 2 * 4 + 2 * 16, "equals": 4 + 16}


def test_validate_hint_accepts_correct_counts():
    assert validate_hint([6, 3, 2, 1], [1, 2, 3, 6], 0, 4) == (0, 4)


def test_validate_hint_rejects_wrong_counts():
    with pytest.raises(CountMismatch) as excinfo:
        validate_hint([6, 3, 2, 1], [1, 2, 3, 6], 1, 3)
    assert excinfo.value.claimed == (1, 3)
    assert excinfo.value.computed == (0, 4)


@pytest.mark.parametrize(
    "guess, solution",
    [
        ([0, 1, 2, 3], [1, 2, 3, 6]),
        ([1, 2, 3, 6], [1, 2, 3, 7]),
    ],
)
def test_validate_hint_checks_range_before_matching(monkeypatch, guess, solution):
    def fail(*args):
        raise AssertionError("match must not run on invalid codes")

    monkeypatch.setattr(matcher, "match", fail)
    with pytest.raises(OutOfRangeSymbol):
        validate_hint(guess, solution, 0, 0)


@pytest.mark.parametrize(
    "guess, solution",
    [
        ([1, 2, 3, 4, 5], [1, 2, 3, 4]),
        ([1, 2, 3, 4], [1, 2, 3, 4, 5]),
        ([1, 2, 3], [1, 2, 3, 4]),
        ([1, 2, 3, 4], [1, 2, 3]),
    ],
)
def test_codes_of_wrong_length_are_rejected(guess, solution):
    with pytest.raises(ValueError):
        match(guess, solution)
    with pytest.raises(ValueError):
        validate_hint(guess, solution, 4, 0)
