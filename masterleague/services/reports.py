"""
Ledger reports: CSV export and summary totals.

All public functions take a list of Bet records and return plain data
(DataFrame, str, dict) so they can be called from FastAPI endpoints or
scripts without importing any web-layer code.
"""

import logging
from datetime import date
from typing import Dict, List

import pandas as pd

from masterleague.core.records import (
    BET_AWAY,
    BET_DRAW,
    BET_HOME,
    STATUS_LOST,
    STATUS_PENDING,
    STATUS_WON,
    Bet,
)

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["Jogador", "Jogo", "Tipo", "Valor", "Odd", "Ganho", "Status", "Data"]

BET_TYPE_LABELS = {BET_HOME: "Casa", BET_DRAW: "Empate", BET_AWAY: "Fora"}

_DATE_FORMAT = "%d/%m/%Y %H:%M:%S"


def bets_to_frame(bets: List[Bet]) -> pd.DataFrame:
    """One row per bet, columns in export order."""
    rows = [
        {
            "Jogador": b.player_name,
            "Jogo": b.game_name,
            "Tipo": BET_TYPE_LABELS.get(b.bet_type, b.bet_type),
            "Valor": b.amount,
            "Odd": b.odd,
            "Ganho": b.possible_win,
            "Status": b.status,
            "Data": b.created_at.strftime(_DATE_FORMAT),
        }
        for b in bets
    ]
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def export_bets_csv(bets: List[Bet]) -> str:
    """CSV text for the admin report; the header row is always present."""
    csv = bets_to_frame(bets).to_csv(index=False)
    logger.info("Exported %d bet(s) to CSV", len(bets))
    return csv


def report_filename(today: date) -> str:
    return f"relatorio_apostas_masterleague_{today.isoformat()}.csv"


def summarize_bets(bets: List[Bet]) -> Dict:
    """
    Ledger totals for the admin panel:
      - bet counts per status
      - total staked, pending exposure (possible wins still open)
      - total paid out on won bets
      - house result: lost stakes minus net winnings paid
    """
    won = [b for b in bets if b.status == STATUS_WON]
    lost = [b for b in bets if b.status == STATUS_LOST]
    pending = [b for b in bets if b.status == STATUS_PENDING]

    net_paid = sum(b.possible_win - b.amount for b in won)
    lost_stakes = sum(b.amount for b in lost)

    return {
        "total_bets": len(bets),
        "pending": len(pending),
        "won": len(won),
        "lost": len(lost),
        "total_staked": sum(b.amount for b in bets),
        "pending_exposure": sum(b.possible_win for b in pending),
        "total_paid_out": sum(b.possible_win for b in won),
        "house_result": lost_stakes - net_paid,
    }
