"""Error taxonomy for the betting core.

Services raise these; the API layer translates them to HTTP responses.
Every error carries a user-facing message and a stable ``code`` (the class
name) so clients can branch without parsing text.
"""

from __future__ import annotations


class BettingError(Exception):
    """Base class for every recoverable bookkeeping error."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def code(self) -> str:
        return type(self).__name__


class ValidationError(BettingError):
    """Input rejected before anything is stored."""


class MissingField(ValidationError):
    def __init__(self, field: str):
        super().__init__(f"Missing required field: {field}")
        self.field = field


class InvalidAmount(ValidationError):
    pass


class AmountOutOfRange(ValidationError):
    def __init__(self, amount: float, min_stake: float, max_stake: float):
        super().__init__(
            f"Bet amount must be between {min_stake:,.0f} and {max_stake:,.0f} "
            f"(got {amount:,.0f})"
        )
        self.amount = amount


class GameNotFound(ValidationError):
    def __init__(self, game_id: str):
        super().__init__(f"Game not found: {game_id}")
        self.game_id = game_id


class InvalidBetType(ValidationError):
    def __init__(self, bet_type: str):
        super().__init__(
            f"Invalid bet type {bet_type!r}: must be one of home, draw, away"
        )
        self.bet_type = bet_type


class InvalidOdds(ValidationError):
    pass


class DuplicateGame(ValidationError):
    def __init__(self, name: str):
        super().__init__(f"A game named {name!r} already exists")
        self.name = name


class NotFound(BettingError):
    """Lookup of a stored record by id found nothing."""


class UnknownGame(NotFound):
    def __init__(self, game_id: str):
        super().__init__(f"Game not found: {game_id}")
        self.game_id = game_id


class BetNotFound(NotFound):
    def __init__(self, bet_id: str):
        super().__init__(f"Bet not found: {bet_id}")
        self.bet_id = bet_id


class InvalidTransition(BettingError):
    def __init__(self, current: str, requested: str):
        super().__init__(
            f"Cannot change bet status from {current!r} to {requested!r}"
        )
        self.current = current
        self.requested = requested
