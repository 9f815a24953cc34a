"""Tests for core.payout: stake parsing, odd resolution and possible-win math."""

import pytest

from masterleague.core.errors import InvalidAmount, InvalidBetType, InvalidOdds
from masterleague.core.payout import (
    compute_possible_win,
    parse_odd,
    parse_stake,
    resolve_odd,
)
from masterleague.core.records import Game


def _game(home=2.0, draw=3.0, away=4.0):
    return Game(
        name="A vs B", home_team="A", away_team="B",
        home_odd=home, draw_odd=draw, away_odd=away,
    )


# ---------------------------------------------------------------------------
# parse_stake
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("raw, expected", [
    (1000000,        1000000.0),
    (1000000.0,      1000000.0),
    ("1000000",      1000000.0),
    ("  750000 ",    750000.0),
    ("1.000.000",    1000000.0),   # pt-BR thousands grouping
    ("5.000.000",    5000000.0),
    ("500000.0",     500000.0),
])
def test_parse_stake_accepts(raw, expected):
    assert parse_stake(raw) == expected


@pytest.mark.parametrize("raw", [
    "abc",
    "1,5",
    1000000.5,
    "1000000.25",
    True,
    float("nan"),
    float("inf"),
    "inf",
    [1000000],
    10 ** 400,
])
def test_parse_stake_rejects(raw):
    with pytest.raises(InvalidAmount):
        parse_stake(raw)


# ---------------------------------------------------------------------------
# parse_odd
# ---------------------------------------------------------------------------

def test_parse_odd_accepts_positive():
    assert parse_odd("2.5", "home_odd") == 2.5
    assert parse_odd(1.01, "draw_odd") == 1.01


@pytest.mark.parametrize("raw", [0, -1.5, "0", "x", float("nan"), 10 ** 400])
def test_parse_odd_rejects(raw):
    with pytest.raises(InvalidOdds):
        parse_odd(raw, "away_odd")


# ---------------------------------------------------------------------------
# resolve_odd
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("bet_type, expected", [
    ("home", 2.0),
    ("draw", 3.0),
    ("away", 4.0),
])
def test_resolve_odd(bet_type, expected):
    assert resolve_odd(_game(), bet_type) == expected


def test_resolve_odd_unknown_type():
    with pytest.raises(InvalidBetType):
        resolve_odd(_game(), "over")


# ---------------------------------------------------------------------------
# compute_possible_win
# ---------------------------------------------------------------------------

def test_possible_win_is_exact_product():
    assert compute_possible_win(1000000, 2.0) == 2000000.0


@pytest.mark.parametrize("amount, odd", [
    (500000, 1.37),
    (1234567, 2.71),
    (5000000, 1.05),
    (999999, 3.333),
])
def test_possible_win_not_rounded(amount, odd):
    # Must equal the raw float product, not a currency-rounded value
    assert compute_possible_win(amount, odd) == amount * odd

