"""
Bet ledger: placement and listing of bets.

place_bet() is the only way a bet enters storage.  The odd and the
possible win are resolved from the catalog at placement time and frozen
on the bet; later catalog changes never recompute them.
"""

import logging
from datetime import datetime
from typing import Any, Callable, List, Optional

from masterleague.core.errors import ValidationError
from masterleague.core.league_config import LeagueConfig
from masterleague.core.payout import compute_possible_win, resolve_odd
from masterleague.core.records import STATUS_PENDING, Bet
from masterleague.core.validation import validate_bet
from masterleague.services.catalog import GameCatalog
from masterleague.storage import BaseStorage

logger = logging.getLogger(__name__)


class BetLedger:
    """Owns every ``Bet`` record in the backing storage."""

    def __init__(
        self,
        storage: BaseStorage,
        catalog: GameCatalog,
        config: Optional[LeagueConfig] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.storage = storage
        self.catalog = catalog
        self.config = config or LeagueConfig()
        self._clock = clock

    def place_bet(self, player_name: Any, game_id: Any, bet_type: Any, amount: Any) -> Bet:
        """
        Validate and record a new pending bet.

        Process:
        1. Run the bet validator (first failing rule wins)
        2. Resolve the odd for the chosen outcome
        3. possible_win = amount * odd
        4. Store the bet with status "Pendente"

        Raises:
            ValidationError: The specific rule that failed; nothing is stored.
        """
        try:
            checked = validate_bet(
                player_name, game_id, bet_type, amount, self.catalog, self.config
            )
        except ValidationError as exc:
            logger.warning("Bet rejected (%s): %s", exc.code, exc.message)
            raise

        odd = resolve_odd(checked.game, checked.bet_type)
        bet = Bet(
            player_name=checked.player_name,
            game_id=checked.game.id,
            game_name=checked.game.name,
            bet_type=checked.bet_type,
            amount=checked.amount,
            odd=odd,
            possible_win=self.compute_possible_win(checked.amount, odd),
            status=STATUS_PENDING,
            created_at=self._clock(),
        )
        stored = self.storage.add_bet(bet)

        logger.info(
            "Placed bet %s: %s on %s (%s) %.0f @ %.2f -> %.2f",
            stored.id, stored.player_name, stored.game_name, stored.bet_type,
            stored.amount, stored.odd, stored.possible_win,
        )
        return stored

    @staticmethod
    def compute_possible_win(amount: float, odd: float) -> float:
        return compute_possible_win(amount, odd)

    def get_bet(self, bet_id: str) -> Optional[Bet]:
        return self.storage.get_bet(bet_id)

    def list_bets(self) -> List[Bet]:
        """All bets, most recent first."""
        return self.storage.list_bets()
