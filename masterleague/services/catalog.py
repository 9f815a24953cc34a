"""
Game catalog: the admin-managed list of games and their odds.

Games are created and removed by the administrator and are otherwise
immutable.  Removing a game never touches bets already placed on it;
those keep their own snapshot of the name and odd.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from masterleague.core.errors import DuplicateGame
from masterleague.core.league_config import LeagueConfig
from masterleague.core.records import Game
from masterleague.core.validation import validate_game
from masterleague.storage import BaseStorage

logger = logging.getLogger(__name__)


class GameCatalog:
    """Owns every ``Game`` record in the backing storage."""

    def __init__(
        self,
        storage: BaseStorage,
        config: Optional[LeagueConfig] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.storage = storage
        self.config = config or LeagueConfig()
        self._clock = clock

    def add_game(self, name, home_team, away_team, home_odd, draw_odd, away_odd) -> Game:
        """Validate and store a new game.

        Raises:
            MissingField: A text field or odd is empty.
            InvalidOdds: An odd is not a positive number.
            DuplicateGame: Duplicate checking is enabled and the name is taken.
        """
        fields = validate_game(name, home_team, away_team, home_odd, draw_odd, away_odd)

        if self.config.reject_duplicate_games:
            wanted = fields.name.casefold()
            if any(g.name.casefold() == wanted for g in self.storage.list_games()):
                raise DuplicateGame(fields.name)

        game = Game(
            name=fields.name,
            home_team=fields.home_team,
            away_team=fields.away_team,
            home_odd=fields.home_odd,
            draw_odd=fields.draw_odd,
            away_odd=fields.away_odd,
            created_at=self._clock(),
        )
        stored = self.storage.add_game(game)
        logger.info(
            "Game added: %s (%s) | odds %.2f / %.2f / %.2f",
            stored.name, stored.id, stored.home_odd, stored.draw_odd, stored.away_odd,
        )
        return stored

    def remove_game(self, game_id: str) -> bool:
        """Delete a game.  Returns False (no error) when the id is unknown."""
        removed = self.storage.delete_game(game_id)
        if removed:
            logger.info("Game removed: %s", game_id)
        else:
            logger.info("Game removal skipped, unknown id: %s", game_id)
        return removed

    def get_game(self, game_id: str) -> Optional[Game]:
        return self.storage.get_game(game_id)

    def list_games(self, active_only: bool = True) -> List[Game]:
        """Games in insertion order, optionally only the active ones."""
        games = self.storage.list_games()
        if active_only:
            games = [g for g in games if g.is_active]
        return games
