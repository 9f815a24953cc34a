"""
FastAPI application for the MasterLeague betting admin
REST surface over the game catalog, bet ledger and settlement
"""

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional
import logging
import os

from dotenv import load_dotenv

from masterleague.auth import check_admin_password
from masterleague.core.errors import (
    BetNotFound,
    InvalidTransition,
    NotFound,
    UnknownGame,
    ValidationError,
)
from masterleague.core.league_config import LeagueConfig
from masterleague.schemas import (
    BetCreate,
    BetResponse,
    BetSummaryResponse,
    DeleteResponse,
    GameCreate,
    GameResponse,
    LoginRequest,
    LoginResponse,
    StatusUpdate,
)
from masterleague.services.catalog import GameCatalog
from masterleague.services.ledger import BetLedger
from masterleague.services.reports import export_bets_csv, report_filename, summarize_bets
from masterleague.services.settlement import SettlementService
from masterleague.storage import BaseStorage, build_storage

load_dotenv()

# Logging setup
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

APP_NAME = "MasterLeague Betting Admin"
APP_VERSION = "1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info(
        "Starting %s (%s, stakes %.0f-%.0f)",
        APP_NAME,
        type(app.state.storage).__name__,
        app.state.config.min_stake,
        app.state.config.max_stake,
    )
    yield
    logger.info("Shutting down %s", APP_NAME)


# ============================================================================
# DEPENDENCIES
# ============================================================================

def get_catalog(request: Request) -> GameCatalog:
    return request.app.state.catalog


def get_ledger(request: Request) -> BetLedger:
    return request.app.state.ledger


def get_settlement(request: Request) -> SettlementService:
    return request.app.state.settlement


# ============================================================================
# ERROR HANDLERS
# ============================================================================

def _error(status_code: int, exc) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
    )


async def validation_error_handler(request: Request, exc: ValidationError):
    return _error(400, exc)


async def invalid_transition_handler(request: Request, exc: InvalidTransition):
    return _error(400, exc)


async def not_found_handler(request: Request, exc: NotFound):
    return _error(404, exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Router-level errors (unknown path, wrong method) in the same body shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "code": "NotFound" if exc.status_code == 404 else "HTTPError"},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors (400), not 422."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=400,
        content={
            "detail": f"{location}: {message}" if location else message,
            "code": "InvalidRequest",
        },
    )


async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all exception handler"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "code": type(exc).__name__}
    )


# ============================================================================
# PUBLIC ENDPOINTS
# ============================================================================

async def root():
    """Health check"""
    return {
        "app": APP_NAME,
        "version": APP_VERSION,
        "status": "operational",
        "timestamp": datetime.utcnow().isoformat(),
    }


async def health_check(request: Request):
    """Health check endpoint"""
    health = {"status": "healthy", "storage": type(request.app.state.storage).__name__}
    try:
        request.app.state.storage.list_games()
    except Exception as e:
        logger.error(f"Health check storage error: {e}")
        health["status"] = "degraded"
        health["storage_error"] = str(e)
    return health


async def admin_login(payload: LoginRequest):
    """Check the admin password."""
    if check_admin_password(payload.password):
        logger.info("Admin login succeeded")
        return LoginResponse(success=True, message="Login successful")
    logger.warning("Admin login failed")
    return JSONResponse(
        status_code=401,
        content=LoginResponse(success=False, message="Invalid password").model_dump(),
    )


# ============================================================================
# GAMES
# ============================================================================

async def list_games(catalog: GameCatalog = Depends(get_catalog)):
    """Active games in the order they were added."""
    return [GameResponse.model_validate(g) for g in catalog.list_games(active_only=True)]


async def get_game(game_id: str, catalog: GameCatalog = Depends(get_catalog)):
    game = catalog.get_game(game_id)
    if game is None:
        raise UnknownGame(game_id)
    return GameResponse.model_validate(game)


async def create_game(payload: GameCreate, catalog: GameCatalog = Depends(get_catalog)):
    game = catalog.add_game(
        payload.name,
        payload.home_team,
        payload.away_team,
        payload.home_odd,
        payload.draw_odd,
        payload.away_odd,
    )
    return GameResponse.model_validate(game)


async def delete_game(game_id: str, catalog: GameCatalog = Depends(get_catalog)):
    if not catalog.remove_game(game_id):
        raise UnknownGame(game_id)
    return DeleteResponse(success=True, message="Game deleted")


# ============================================================================
# BETS
# ============================================================================

async def list_bets(ledger: BetLedger = Depends(get_ledger)):
    """All bets, most recent first."""
    return [BetResponse.model_validate(b) for b in ledger.list_bets()]


async def bets_summary(ledger: BetLedger = Depends(get_ledger)):
    return BetSummaryResponse(**summarize_bets(ledger.list_bets()))


async def export_bets(ledger: BetLedger = Depends(get_ledger)):
    """Download the ledger as CSV."""
    csv = export_bets_csv(ledger.list_bets())
    filename = report_filename(datetime.utcnow().date())
    return Response(
        content=csv,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


async def get_bet(bet_id: str, ledger: BetLedger = Depends(get_ledger)):
    bet = ledger.get_bet(bet_id)
    if bet is None:
        raise BetNotFound(bet_id)
    return BetResponse.model_validate(bet)


async def place_bet(payload: BetCreate, ledger: BetLedger = Depends(get_ledger)):
    bet = ledger.place_bet(
        payload.player_name,
        payload.game_id,
        payload.bet_type,
        payload.amount,
    )
    return BetResponse.model_validate(bet)


async def update_bet_status(
    bet_id: str,
    payload: StatusUpdate,
    settlement: SettlementService = Depends(get_settlement),
):
    """Settle a pending bet as Ganhou or Perdeu."""
    bet = settlement.update_status(bet_id, payload.status)
    return BetResponse.model_validate(bet)


# ============================================================================
# APP FACTORY
# ============================================================================

def create_app(
    storage: Optional[BaseStorage] = None,
    config: Optional[LeagueConfig] = None,
) -> FastAPI:
    """Build the app with its own storage and services; no module globals."""
    config = config or LeagueConfig.from_env()
    storage = storage or build_storage(os.getenv("DATABASE_URL"))

    app = FastAPI(
        title=APP_NAME,
        description="Fixed-odds betting administration: games, bets, settlement",
        version=APP_VERSION,
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.storage = storage
    app.state.catalog = GameCatalog(storage, config=config)
    app.state.ledger = BetLedger(storage, app.state.catalog, config=config)
    app.state.settlement = SettlementService(storage)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(InvalidTransition, invalid_transition_handler)
    app.add_exception_handler(NotFound, not_found_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.add_api_route("/", root, methods=["GET"])
    app.add_api_route("/health", health_check, methods=["GET"])
    app.add_api_route("/api/admin/login", admin_login, methods=["POST"], response_model=LoginResponse)

    app.add_api_route("/api/games", list_games, methods=["GET"], response_model=List[GameResponse])
    app.add_api_route("/api/games", create_game, methods=["POST"], response_model=GameResponse)
    app.add_api_route("/api/games/{game_id}", get_game, methods=["GET"], response_model=GameResponse)
    app.add_api_route("/api/games/{game_id}", delete_game, methods=["DELETE"], response_model=DeleteResponse)

    # Static /api/bets/* paths must be registered before /api/bets/{bet_id}
    app.add_api_route("/api/bets", list_bets, methods=["GET"], response_model=List[BetResponse])
    app.add_api_route("/api/bets", place_bet, methods=["POST"], response_model=BetResponse)
    app.add_api_route("/api/bets/summary", bets_summary, methods=["GET"], response_model=BetSummaryResponse)
    app.add_api_route("/api/bets/export.csv", export_bets, methods=["GET"])
    app.add_api_route("/api/bets/{bet_id}", get_bet, methods=["GET"], response_model=BetResponse)
    app.add_api_route("/api/bets/{bet_id}/status", update_bet_status, methods=["PATCH"], response_model=BetResponse)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
