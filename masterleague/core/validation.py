"""Input rules for placing bets and adding games.

Both validators are pure: they read from the catalog but never write.
Bet rules are checked in a fixed order and the first failure wins:

1. every field present and non-blank        → ``MissingField``
2. amount is an integer-valued number       → ``InvalidAmount``
3. amount within the configured stake range → ``AmountOutOfRange``
4. game id resolves in the catalog          → ``GameNotFound``
5. bet type is home / draw / away           → ``InvalidBetType``
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

from masterleague.core.errors import (
    AmountOutOfRange,
    GameNotFound,
    InvalidBetType,
    MissingField,
)
from masterleague.core.league_config import LeagueConfig
from masterleague.core.payout import parse_odd, parse_stake
from masterleague.core.records import BET_TYPES, Game


class GameLookup(Protocol):
    def get_game(self, game_id: str) -> Optional[Game]: ...


@dataclass(frozen=True)
class ValidatedBet:
    """Cleaned bet input, ready for the ledger."""

    player_name: str
    game: Game
    bet_type: str
    amount: float


@dataclass(frozen=True)
class ValidatedGame:
    name: str
    home_team: str
    away_team: str
    home_odd: float
    draw_odd: float
    away_odd: float


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _require(**fields: Any) -> None:
    for name, value in fields.items():
        if _is_blank(value):
            raise MissingField(name)


def validate_bet(
    player_name: Any,
    game_id: Any,
    bet_type: Any,
    amount: Any,
    catalog: GameLookup,
    config: Optional[LeagueConfig] = None,
) -> ValidatedBet:
    """Check a bet placement request against the five rules above.

    Returns:
        The cleaned input together with the resolved :class:`Game`.

    Raises:
        ValidationError: The subclass for the first rule that fails.
    """
    cfg = config or LeagueConfig()

    _require(
        player_name=player_name,
        game_id=game_id,
        bet_type=bet_type,
        amount=amount,
    )

    stake = parse_stake(amount)
    if not cfg.min_stake <= stake <= cfg.max_stake:
        raise AmountOutOfRange(stake, cfg.min_stake, cfg.max_stake)

    game = catalog.get_game(str(game_id).strip())
    if game is None:
        raise GameNotFound(str(game_id))

    kind = str(bet_type).strip()
    if kind not in BET_TYPES:
        raise InvalidBetType(str(bet_type))

    return ValidatedBet(
        player_name=str(player_name).strip(),
        game=game,
        bet_type=kind,
        amount=stake,
    )


def validate_game(
    name: Any,
    home_team: Any,
    away_team: Any,
    home_odd: Any,
    draw_odd: Any,
    away_odd: Any,
) -> ValidatedGame:
    """Check the fields of a new game; every odd must be above zero.

    Raises:
        MissingField: A text field or odd is empty.
        InvalidOdds: An odd is not a positive finite number.
    """
    _require(
        name=name,
        home_team=home_team,
        away_team=away_team,
        home_odd=home_odd,
        draw_odd=draw_odd,
        away_odd=away_odd,
    )
    return ValidatedGame(
        name=str(name).strip(),
        home_team=str(home_team).strip(),
        away_team=str(away_team).strip(),
        home_odd=parse_odd(home_odd, "home_odd"),
        draw_odd=parse_odd(draw_odd, "draw_odd"),
        away_odd=parse_odd(away_odd, "away_odd"),
    )
