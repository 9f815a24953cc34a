"""Data-transfer objects shared by the catalog, ledger and storage backends.

:class:`Game` and :class:`Bet` are plain dataclasses.  Storage backends
return copies, so mutating a returned record never changes stored state;
the only sanctioned mutation is a status change through
:class:`~masterleague.services.settlement.SettlementService`.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Final, Tuple

#: Outcome keys a bet may be placed on.
BET_HOME: Final[str] = "home"
BET_DRAW: Final[str] = "draw"
BET_AWAY: Final[str] = "away"
BET_TYPES: Final[Tuple[str, ...]] = (BET_HOME, BET_DRAW, BET_AWAY)

#: Bet lifecycle states.  ``Pendente`` is the only non-terminal one.
STATUS_PENDING: Final[str] = "Pendente"
STATUS_WON: Final[str] = "Ganhou"
STATUS_LOST: Final[str] = "Perdeu"
BET_STATUSES: Final[Tuple[str, ...]] = (STATUS_PENDING, STATUS_WON, STATUS_LOST)


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Game:
    """A listed game with three priced outcomes."""

    name: str
    home_team: str
    away_team: str
    home_odd: float
    draw_odd: float
    away_odd: float
    id: str = field(default_factory=new_id)
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Bet:
    """A wager on one outcome of one game.

    ``game_name``, ``odd`` and ``possible_win`` are snapshots taken at
    placement; they stay valid after the game is removed from the catalog.
    """

    player_name: str
    game_id: str
    game_name: str
    bet_type: str
    amount: float
    odd: float
    possible_win: float
    status: str = STATUS_PENDING
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_settled(self) -> bool:
        return self.status != STATUS_PENDING
