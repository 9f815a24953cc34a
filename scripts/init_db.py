#!/usr/bin/env python3
"""
Database initialization script
Creates the games/bets tables and optionally seeds sample games
"""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Load .env file
from dotenv import load_dotenv
load_dotenv()

from masterleague.models import Base, make_engine, make_session_factory
from masterleague.services.catalog import GameCatalog
from masterleague.storage import SqlStorage
import logging
from sqlalchemy import text, inspect

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SAMPLE_GAMES = [
    ("Flamengo vs Palmeiras", "Flamengo", "Palmeiras", 2.10, 3.20, 3.40),
    ("Benfica vs Porto", "Benfica", "Porto", 2.45, 3.10, 2.90),
]


def init_database(engine, drop_existing: bool = False):
    """
    Initialize database tables

    Args:
        drop_existing: If True, drops all tables first (DANGER: data loss!)
    """
    logger.info("Initializing MasterLeague database...")

    if drop_existing:
        logger.warning("Dropping all existing tables!")
        response = input("Are you sure? This will delete all data. Type 'yes' to confirm: ")
        if response.lower() != 'yes':
            logger.info("Aborted.")
            return False

        Base.metadata.drop_all(bind=engine)
        logger.info("Existing tables dropped")

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully")

    inspector = inspect(engine)
    logger.info(f"Tables: {', '.join(inspector.get_table_names())}")
    return True


def seed_sample_games(engine):
    """Add sample games for development"""
    logger.info("Seeding sample games...")
    catalog = GameCatalog(SqlStorage(make_session_factory(engine)))
    for name, home, away, home_odd, draw_odd, away_odd in SAMPLE_GAMES:
        catalog.add_game(name, home, away, home_odd, draw_odd, away_odd)
    logger.info(f"Seeded {len(SAMPLE_GAMES)} games")


def check_connection(engine):
    """Test database connection"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection successful")
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Initialize MasterLeague database")
    parser.add_argument("--drop", action="store_true", help="Drop existing tables (DANGER!)")
    parser.add_argument("--seed", action="store_true", help="Seed sample games")
    parser.add_argument("--check", action="store_true", help="Only check connection")

    args = parser.parse_args()

    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        logger.error("DATABASE_URL is not set")
        sys.exit(1)

    engine = make_engine(database_url)

    if args.check:
        sys.exit(0 if check_connection(engine) else 1)

    if not check_connection(engine):
        logger.error("Cannot initialize database - connection failed")
        sys.exit(1)

    if init_database(engine, drop_existing=args.drop) and args.seed:
        seed_sample_games(engine)

    logger.info("Database initialization complete!")
