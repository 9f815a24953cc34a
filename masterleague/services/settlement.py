"""Admin settlement of pending bets."""

import logging

from masterleague.core.errors import BetNotFound, InvalidTransition
from masterleague.core.records import STATUS_PENDING, STATUS_WON, Bet
from masterleague.core.settlement import check_transition
from masterleague.storage import BaseStorage

logger = logging.getLogger(__name__)


class SettlementService:
    """Moves bets from ``Pendente`` to ``Ganhou`` or ``Perdeu``."""

    def __init__(self, storage: BaseStorage):
        self.storage = storage

    def update_status(self, bet_id: str, new_status: str) -> Bet:
        """
        Settle a pending bet.  This is the only mutation allowed on a bet.

        Raises:
            BetNotFound: Unknown bet id.
            InvalidTransition: The bet is already settled, or new_status
                is not a terminal status.
        """
        bet = self.storage.get_bet(bet_id)
        if bet is None:
            raise BetNotFound(bet_id)

        check_transition(bet.status, new_status)

        # Another writer may have settled the bet since we read it
        if not self.storage.compare_and_set_status(bet_id, STATUS_PENDING, new_status):
            current = self.storage.get_bet(bet_id)
            if current is None:
                raise BetNotFound(bet_id)
            raise InvalidTransition(current.status, new_status)

        bet.status = new_status
        logger.info(
            "Bet %s settled: %s | %s on %s, payout %.2f",
            bet.id, new_status, bet.player_name, bet.game_name,
            bet.possible_win if new_status == STATUS_WON else 0.0,
        )
        return bet
