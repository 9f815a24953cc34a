"""Storage backends for games and bets.

The catalog, ledger and settlement services accept a :class:`BaseStorage`
at construction time rather than talking to a database directly.  This
enables:

* **Demo deployments**: :class:`MemoryStorage` keeps everything in two
  lock-guarded dicts and needs no database.
* **Persistent deployments**: :class:`SqlStorage` writes through SQLAlchemy
  to the ``games`` / ``bets`` tables in :mod:`masterleague.models`.
* **Unit testing**: services are exercised against ``MemoryStorage``
  without any I/O.

Both backends return copies of stored records, and both implement the
status change as a compare-and-set so two concurrent settlements of the
same bet cannot both succeed.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import replace
from typing import Dict, Iterator, List, Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.orm import Session

from masterleague.core.records import Bet, Game
from masterleague.models import BetRow, GameRow, init_db, make_engine, make_session_factory

logger = logging.getLogger(__name__)


class BaseStorage(ABC):
    """Contract every storage backend satisfies."""

    # Games -------------------------------------------------------------

    @abstractmethod
    def add_game(self, game: Game) -> Game: ...

    @abstractmethod
    def get_game(self, game_id: str) -> Optional[Game]: ...

    @abstractmethod
    def list_games(self) -> List[Game]:
        """All games in insertion order."""

    @abstractmethod
    def delete_game(self, game_id: str) -> bool:
        """Remove a game; True when a row was actually removed."""

    # Bets --------------------------------------------------------------

    @abstractmethod
    def add_bet(self, bet: Bet) -> Bet: ...

    @abstractmethod
    def get_bet(self, bet_id: str) -> Optional[Bet]: ...

    @abstractmethod
    def list_bets(self) -> List[Bet]:
        """All bets, newest ``created_at`` first."""

    @abstractmethod
    def compare_and_set_status(self, bet_id: str, expected: str, new: str) -> bool:
        """Set ``status = new`` only if it currently equals ``expected``."""


# ---------------------------------------------------------------------------
# In-memory backend
# ---------------------------------------------------------------------------

class MemoryStorage(BaseStorage):
    """Process-local storage.  Nothing survives a restart."""

    def __init__(self):
        self._games: Dict[str, Game] = {}
        self._bets: Dict[str, Bet] = {}
        self._games_lock = threading.Lock()
        self._bets_lock = threading.Lock()

    def add_game(self, game: Game) -> Game:
        with self._games_lock:
            self._games[game.id] = replace(game)
        return replace(game)

    def get_game(self, game_id: str) -> Optional[Game]:
        with self._games_lock:
            game = self._games.get(game_id)
            return replace(game) if game else None

    def list_games(self) -> List[Game]:
        with self._games_lock:
            return [replace(g) for g in self._games.values()]

    def delete_game(self, game_id: str) -> bool:
        with self._games_lock:
            return self._games.pop(game_id, None) is not None

    def add_bet(self, bet: Bet) -> Bet:
        with self._bets_lock:
            self._bets[bet.id] = replace(bet)
        return replace(bet)

    def get_bet(self, bet_id: str) -> Optional[Bet]:
        with self._bets_lock:
            bet = self._bets.get(bet_id)
            return replace(bet) if bet else None

    def list_bets(self) -> List[Bet]:
        with self._bets_lock:
            newest_inserted_first = [replace(b) for b in reversed(self._bets.values())]
        # sorted() is stable, so equal timestamps keep newest-insertion-first
        return sorted(newest_inserted_first, key=lambda b: b.created_at, reverse=True)

    def compare_and_set_status(self, bet_id: str, expected: str, new: str) -> bool:
        with self._bets_lock:
            bet = self._bets.get(bet_id)
            if bet is None or bet.status != expected:
                return False
            bet.status = new
            return True


# ---------------------------------------------------------------------------
# SQLAlchemy backend
# ---------------------------------------------------------------------------

def _game_from_row(row: GameRow) -> Game:
    return Game(
        id=row.id,
        name=row.name,
        home_team=row.home_team,
        away_team=row.away_team,
        home_odd=row.home_odd,
        draw_odd=row.draw_odd,
        away_odd=row.away_odd,
        is_active=row.is_active,
        created_at=row.created_at,
    )


def _bet_from_row(row: BetRow) -> Bet:
    return Bet(
        id=row.id,
        player_name=row.player_name,
        game_id=row.game_id,
        game_name=row.game_name,
        bet_type=row.bet_type,
        amount=row.amount,
        odd=row.odd,
        possible_win=row.possible_win,
        status=row.status,
        created_at=row.created_at,
    )


class SqlStorage(BaseStorage):
    """Relational storage through a SQLAlchemy session factory."""

    def __init__(self, session_factory):
        self._session_factory = session_factory

    @classmethod
    def from_url(cls, database_url: str) -> "SqlStorage":
        engine = make_engine(database_url)
        init_db(engine)
        return cls(make_session_factory(engine))

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def add_game(self, game: Game) -> Game:
        with self._session() as db:
            db.add(GameRow(
                id=game.id,
                name=game.name,
                home_team=game.home_team,
                away_team=game.away_team,
                home_odd=game.home_odd,
                draw_odd=game.draw_odd,
                away_odd=game.away_odd,
                is_active=game.is_active,
                created_at=game.created_at,
            ))
        return replace(game)

    def get_game(self, game_id: str) -> Optional[Game]:
        with self._session() as db:
            row = db.get(GameRow, game_id)
            return _game_from_row(row) if row else None

    def list_games(self) -> List[Game]:
        with self._session() as db:
            rows = db.query(GameRow).order_by(GameRow.created_at.asc()).all()
            return [_game_from_row(r) for r in rows]

    def delete_game(self, game_id: str) -> bool:
        with self._session() as db:
            deleted = db.query(GameRow).filter(GameRow.id == game_id).delete()
        return deleted > 0

    def add_bet(self, bet: Bet) -> Bet:
        with self._session() as db:
            next_seq = (
                select(func.coalesce(func.max(BetRow.seq), 0) + 1)
                .correlate(None)
                .scalar_subquery()
            )
            db.execute(insert(BetRow).values(
                id=bet.id,
                player_name=bet.player_name,
                game_id=bet.game_id,
                game_name=bet.game_name,
                bet_type=bet.bet_type,
                amount=bet.amount,
                odd=bet.odd,
                possible_win=bet.possible_win,
                status=bet.status,
                created_at=bet.created_at,
                seq=next_seq,
            ))
        return replace(bet)

    def get_bet(self, bet_id: str) -> Optional[Bet]:
        with self._session() as db:
            row = db.get(BetRow, bet_id)
            return _bet_from_row(row) if row else None

    def list_bets(self) -> List[Bet]:
        with self._session() as db:
            rows = db.query(BetRow).order_by(BetRow.created_at.desc(), BetRow.seq.desc()).all()
            return [_bet_from_row(r) for r in rows]

    def compare_and_set_status(self, bet_id: str, expected: str, new: str) -> bool:
        with self._session() as db:
            result = db.execute(
                update(BetRow)
                .where(BetRow.id == bet_id, BetRow.status == expected)
                .values(status=new)
            )
            updated = result.rowcount
        return updated == 1


def build_storage(database_url: Optional[str] = None) -> BaseStorage:
    """``SqlStorage`` when a database URL is configured, else ``MemoryStorage``."""
    if database_url:
        logger.info("Using SQL storage")
        return SqlStorage.from_url(database_url)
    logger.info("Using in-memory storage (data is lost on restart)")
    return MemoryStorage()
