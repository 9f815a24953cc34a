"""Payout mathematics: the single source of truth for stake and odd arithmetic.

Every function here is **pure**: no I/O, no logging, no side effects.
Import from this module; never recompute a payout locally in a service or
route handler.

Design decisions
----------------
* Odds are **decimal** multipliers (``2.0`` pays twice the stake, stake
  included).  ``possible_win = amount * odd`` with no rounding; currency
  formatting belongs to presentation code and is never persisted.
* Stakes arrive from forms as strings formatted the pt-BR way
  (``"1.000.000"``), so :func:`parse_stake` accepts dot thousands grouping
  in addition to plain numerals.  A stake must be integer-valued.
"""

from __future__ import annotations

import math
import re
from typing import Any, Final

from masterleague.core.errors import InvalidAmount, InvalidBetType, InvalidOdds
from masterleague.core.records import BET_AWAY, BET_DRAW, BET_HOME, Game

#: pt-BR thousands grouping, e.g. ``1.000.000``.
_GROUPED_THOUSANDS: Final = re.compile(r"^\d{1,3}(\.\d{3})+$")

_ODD_FIELDS: Final[dict] = {
    BET_HOME: "home_odd",
    BET_DRAW: "draw_odd",
    BET_AWAY: "away_odd",
}


def _to_float(raw: Any) -> float:
    """Coerce ``raw`` to a finite float or raise ``ValueError``."""
    if isinstance(raw, bool):
        raise ValueError("booleans are not numbers here")
    if isinstance(raw, str):
        text = raw.strip()
        if _GROUPED_THOUSANDS.match(text):
            text = text.replace(".", "")
        value = float(text)
    else:
        try:
            value = float(raw)
        except OverflowError:
            raise ValueError("number too large for a float")
    if not math.isfinite(value):
        raise ValueError(f"{raw!r} is not finite")
    return value


def parse_stake(raw: Any) -> float:
    """Parse a stake into an integer-valued float.

    Examples::

        parse_stake(1000000)      → 1000000.0
        parse_stake("1.000.000")  → 1000000.0
        parse_stake("750000.0")   → 750000.0

    Raises:
        InvalidAmount: If ``raw`` is not numeric, not finite, or has a
            fractional part.
    """
    try:
        value = _to_float(raw)
    except (TypeError, ValueError):
        raise InvalidAmount(f"Bet amount {raw!r} is not a valid number")
    if value != math.floor(value):
        raise InvalidAmount(f"Bet amount {raw!r} must be a whole number")
    return value


def parse_odd(raw: Any, field_name: str) -> float:
    """Parse a decimal odd; it must be a finite number strictly above zero.

    Raises:
        InvalidOdds: On a non-numeric or non-positive value.
    """
    try:
        value = _to_float(raw)
    except (TypeError, ValueError):
        raise InvalidOdds(f"{field_name} {raw!r} is not a valid number")
    if value <= 0:
        raise InvalidOdds(f"{field_name} must be greater than 0 (got {value})")
    return value


def resolve_odd(game: Game, bet_type: str) -> float:
    """Return the game's odd for the chosen outcome.

    ``home`` → ``home_odd``, ``draw`` → ``draw_odd``, ``away`` → ``away_odd``.

    Raises:
        InvalidBetType: If ``bet_type`` is not one of the three outcomes.
    """
    attr = _ODD_FIELDS.get(bet_type)
    if attr is None:
        raise InvalidBetType(bet_type)
    return getattr(game, attr)


def compute_possible_win(amount: float, odd: float) -> float:
    """Total payout of a winning bet: ``amount * odd``, unrounded."""
    return amount * odd
