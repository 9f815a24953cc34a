"""
Database models for the MasterLeague betting admin
SQLAlchemy ORM; PostgreSQL in production, SQLite for local runs and tests
"""

from sqlalchemy import (
    create_engine,
    Column,
    String,
    Float,
    DateTime,
    Boolean,
    Integer,
    Text,
)
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from datetime import datetime
import logging

logger = logging.getLogger(__name__)

Base = declarative_base()


def make_engine(database_url: str):
    """Create an engine; in-memory SQLite shares one connection across threads."""
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,
        )
    # pool_pre_ping=True keeps long-lived connections to the database alive
    return create_engine(database_url, pool_pre_ping=True, echo=False)


def make_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


class GameRow(Base):
    """A listed game with home/draw/away decimal odds"""

    __tablename__ = "games"

    id = Column(String(36), primary_key=True)
    name = Column(Text, nullable=False, index=True)
    home_team = Column(Text, nullable=False)
    away_team = Column(Text, nullable=False)
    home_odd = Column(Float, nullable=False)
    draw_odd = Column(Float, nullable=False)
    away_odd = Column(Float, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)


class BetRow(Base):
    """A placed bet; odd and possible_win are snapshots taken at placement"""

    __tablename__ = "bets"

    id = Column(String(36), primary_key=True)
    player_name = Column(Text, nullable=False)

    # No FK: bets outlive the game they were placed on
    game_id = Column(String(36), nullable=False, index=True)
    game_name = Column(Text, nullable=False)

    bet_type = Column(String(8), nullable=False)  # "home", "draw", "away"
    amount = Column(Float, nullable=False)
    odd = Column(Float, nullable=False)
    possible_win = Column(Float, nullable=False)

    status = Column(String(16), nullable=False, default="Pendente", index=True)

    # Insertion counter; breaks created_at ties in newest-first listings
    seq = Column(Integer, nullable=False, default=0, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)


def init_db(engine):
    """Initialize database tables"""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")
