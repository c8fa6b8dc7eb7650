"""
FastAPI main application
Huntboard - Scoring server for a live multi-team scavenger hunt

Modular architecture with separated API routers in huntboard/api/:
- health.py: Health check and system status
- teams.py: Team listing, personal points, player swaps
- challenges.py: Challenge listing, validation, disabling
- session_state.py: Suspense mode and game pause
- leaderboard.py: Ranking data
- admin.py: Reset

All routers reach the single Competition instance through
huntboard.api.deps.get_competition (stored on app.state).
"""
from contextlib import asynccontextmanager
from functools import partial
from typing import Optional
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from huntboard.config import VERSION, load_config
from huntboard.core.competition import Competition
from huntboard.models import Settings
from huntboard.seed_loader import load_seed
from huntboard.services.persistence import load_snapshot

# Import all API routers
from huntboard.api import health, admin, teams, challenges, session_state, leaderboard


# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_competition(settings: Settings) -> Competition:
    """Restore the last snapshot if usable, otherwise start from the seed"""
    seed_loader = partial(load_seed, settings.teams_path, settings.challenges_path)
    restored = load_snapshot(settings.snapshot_path)
    return Competition(seed_loader, settings=settings, initial=restored)


def create_app(settings: Optional[Settings] = None, competition: Optional[Competition] = None) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        settings: Settings to use (default: load_config())
        competition: Pre-built Competition, mainly for tests
    """
    settings = settings or (competition.settings if competition else load_config())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown events"""
        try:
            app.state.competition = competition or build_competition(settings)
            snapshot = app.state.competition.snapshot()
            logger.info(
                f"✅ Server started with {len(snapshot.teams)} teams and "
                f"{len(snapshot.challenges)} challenges"
            )
        except Exception as e:
            logger.error(f"❌ Failed to load competition data: {e}")
            raise

        yield

        # Shutdown
        logger.info("🛑 Server shutting down")

    app = FastAPI(
        title="Huntboard - Scoring Server",
        description="Teams, challenges, personal points, suspense and pause for a scavenger hunt",
        version=VERSION,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ==================== INCLUDE ROUTERS ====================

    # Health check (GET /)
    app.include_router(health.router)

    # Teams (GET /api/teams, POST /api/addPersonalPoints, /api/swapPlayers)
    app.include_router(teams.router)

    # Challenges (GET /api/challenges, POST /api/validate, /api/toggleDisabled)
    app.include_router(challenges.router)

    # Session (GET /api/state, POST /api/setSuspense, /api/setPause, /api/cancelPause)
    app.include_router(session_state.router)

    # Leaderboard (GET /api/leaderboard)
    app.include_router(leaderboard.router)

    # Admin (GET|POST /api/reset)
    app.include_router(admin.router)

    return app


# ==================== RUN SERVER ====================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host="0.0.0.0", port=3000)
