"""
Pydantic request/response schemas for the MasterLeague API.

Wire format is camelCase (``homeOdd``, ``playerName``) to match the web
client; Python attributes stay snake_case.  Bet placement fields are kept
loose on purpose so the domain validator decides which rule failed first.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

_CAMEL = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "from_attributes": True,
}


# ---------------------------------------------------------------------------
# Admin login
# ---------------------------------------------------------------------------

class LoginRequest(BaseModel):
    password: str = ""


class LoginResponse(BaseModel):
    success: bool
    message: str


# ---------------------------------------------------------------------------
# Games
# ---------------------------------------------------------------------------

class GameCreate(BaseModel):
    """Payload for POST /api/games."""

    name: Optional[str] = None
    home_team: Optional[str] = None
    away_team: Optional[str] = None
    home_odd: Optional[Any] = Field(None, description="Decimal odd for a home win")
    away_odd: Optional[Any] = Field(None, description="Decimal odd for an away win")
    draw_odd: Optional[Any] = Field(None, description="Decimal odd for a draw")

    model_config = {
        **_CAMEL,
        "json_schema_extra": {
            "example": {
                "name": "A vs B",
                "homeTeam": "A",
                "awayTeam": "B",
                "homeOdd": 2.0,
                "drawOdd": 3.0,
                "awayOdd": 4.0,
            }
        },
    }


class GameResponse(BaseModel):
    id: str
    name: str
    home_team: str
    away_team: str
    home_odd: float
    away_odd: float
    draw_odd: float
    is_active: bool
    created_at: datetime

    model_config = _CAMEL


class DeleteResponse(BaseModel):
    success: bool
    message: str


# ---------------------------------------------------------------------------
# Bets
# ---------------------------------------------------------------------------

class BetCreate(BaseModel):
    """
    Payload for POST /api/bets.

    gameName, odd and possibleWin are accepted for client compatibility
    but ignored: the server resolves them from the catalog.
    """

    player_name: Optional[str] = None
    game_id: Optional[str] = None
    game_name: Optional[str] = None
    bet_type: Optional[str] = None
    amount: Optional[Any] = None
    odd: Optional[Any] = None
    possible_win: Optional[Any] = None

    model_config = {
        **_CAMEL,
        "json_schema_extra": {
            "example": {
                "playerName": "Maria",
                "gameId": "3f1c0c1e-7a0e-4a53-9d38-2c1f0b8f9a11",
                "betType": "home",
                "amount": 1000000,
            }
        },
    }


class BetResponse(BaseModel):
    id: str
    player_name: str
    game_id: str
    game_name: str
    bet_type: str
    amount: float
    odd: float
    possible_win: float
    status: str
    created_at: datetime

    model_config = _CAMEL


class StatusUpdate(BaseModel):
    """Payload for PATCH /api/bets/{bet_id}/status."""

    status: Literal["Pendente", "Ganhou", "Perdeu"]


class BetSummaryResponse(BaseModel):
    total_bets: int
    pending: int
    won: int
    lost: int
    total_staked: float
    pending_exposure: float
    total_paid_out: float
    house_result: float

    model_config = _CAMEL
