"""League-level configuration: every tunable constant in one place.

:class:`LeagueConfig` is a frozen dataclass carrying the stake bounds and
runtime switches used by the catalog and ledger.  Nowhere else in the
codebase should the stake limits be hard-coded.

Typical usage::

    from masterleague.core.league_config import LeagueConfig

    cfg = LeagueConfig.from_env()
    ledger = BetLedger(storage, catalog, config=cfg)

    # Override a single value for a test or a special event:
    from dataclasses import replace
    promo_cfg = replace(cfg, max_stake=10_000_000)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Final, Tuple

from dotenv import load_dotenv

#: Smallest accepted stake, in currency units.
DEFAULT_MIN_STAKE: Final[float] = 500_000

#: Largest accepted stake, in currency units.
DEFAULT_MAX_STAKE: Final[float] = 5_000_000

#: Currency shown in reports and error messages.
DEFAULT_CURRENCY: Final[str] = "EUR"

DEFAULT_CORS_ORIGINS: Final[Tuple[str, ...]] = (
    "http://localhost:3000",
    "http://localhost:5000",
)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class LeagueConfig:
    """Immutable settings bundle for one deployment.

    Attributes:
        min_stake: Inclusive lower stake bound.
        max_stake: Inclusive upper stake bound.
        currency: ISO code used when labelling amounts.
        reject_duplicate_games: When True, the catalog refuses a second game
            with the same (case-insensitive) name.  Off by default.
        cors_origins: Origins allowed by the API's CORS middleware.
    """

    min_stake: float = DEFAULT_MIN_STAKE
    max_stake: float = DEFAULT_MAX_STAKE
    currency: str = DEFAULT_CURRENCY
    reject_duplicate_games: bool = False
    cors_origins: Tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)

    def __post_init__(self) -> None:
        if self.min_stake <= 0:
            raise ValueError(f"min_stake must be positive, got {self.min_stake}")
        if self.max_stake < self.min_stake:
            raise ValueError(
                f"max_stake ({self.max_stake}) must be >= min_stake ({self.min_stake})"
            )

    @classmethod
    def from_env(cls) -> "LeagueConfig":
        """Build a config from ``MIN_STAKE``, ``MAX_STAKE``, etc."""
        load_dotenv()
        origins_raw = os.getenv("CORS_ORIGINS")
        origins = (
            tuple(o.strip() for o in origins_raw.split(",") if o.strip())
            if origins_raw
            else DEFAULT_CORS_ORIGINS
        )
        return cls(
            min_stake=float(os.getenv("MIN_STAKE", str(DEFAULT_MIN_STAKE))),
            max_stake=float(os.getenv("MAX_STAKE", str(DEFAULT_MAX_STAKE))),
            currency=os.getenv("CURRENCY", DEFAULT_CURRENCY),
            reject_duplicate_games=_env_bool("REJECT_DUPLICATE_GAMES"),
            cors_origins=origins,
        )
