"""FastAPI server for mindforge progress tracking."""

import logging
import os
import re
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from core.achievements import get_achievements
from core.config import DOMAINS, DEFAULT_STORAGE, MIN_DIFFICULTY
from core.games import get_all_games, get_games_by_domain
from core.interfaces import Storage
from core.progress import ProgressStore

from server.file_storage import FileStorage

logger = logging.getLogger(__name__)

USER_ID_PATTERN = re.compile(r'^[A-Za-z0-9_.-]{1,64}$')


# Pydantic models for API
class GameResultRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    game_id: str = Field(alias='gameId', min_length=1)
    game_name: str = Field(alias='gameName', min_length=1)
    domain: str
    score: float
    accuracy: float
    difficulty: int = MIN_DIFFICULTY
    completed_at: Optional[str] = Field(default=None, alias='completedAt')
    correct_answers: int = Field(default=0, alias='correctAnswers')
    total_rounds: int = Field(default=1, alias='totalRounds')

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class GameResultResponse(BaseModel):
    result: dict
    unlocked_achievements: list[str]
    stats: dict


class StatsResponse(BaseModel):
    stats: dict
    overall_score: int
    unlocked_count: int


class TodayResponse(BaseModel):
    date: Optional[str]
    games: list[dict]
    completed: int
    total: int


# Global state (in production, use proper DI)
storage: Storage = None
user_stores: dict[str, ProgressStore] = {}


def create_storage() -> Storage:
    """Pick the storage backend from MINDFORGE_STORAGE (file or postgres)."""
    storage_type = os.environ.get('MINDFORGE_STORAGE', DEFAULT_STORAGE)
    if storage_type == 'postgres':
        from server.postgres_storage import PostgresStorage
        logger.info("Using PostgreSQL storage")
        return PostgresStorage()
    logger.info("Using file storage")
    return FileStorage()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize storage on startup."""
    global storage
    if storage is None:
        storage = create_storage()
    yield
    user_stores.clear()
    if hasattr(storage, 'close'):
        storage.close()


app = FastAPI(title="Mindforge API", description="Cognitive training progress API", lifespan=lifespan)


def get_store(user_id: str = "default") -> ProgressStore:
    """Get or load the progress store for a user."""
    if not USER_ID_PATTERN.match(user_id):
        raise HTTPException(status_code=400, detail="Invalid user_id")
    if user_id not in user_stores:
        store = ProgressStore(storage=storage, user_id=user_id)
        store.load()
        user_stores[user_id] = store
    return user_stores[user_id]


@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "service": "mindforge"}


@app.get("/api/games")
async def list_games(domain: Optional[str] = None):
    """List the game catalog, optionally for one domain."""
    if domain is None:
        return {"games": get_all_games()}
    if domain not in DOMAINS:
        raise HTTPException(status_code=400, detail=f"Unknown domain: {domain}")
    return {"games": get_games_by_domain(domain)}


@app.post("/api/games/results", response_model=GameResultResponse, status_code=201)
async def save_game_result(request: GameResultRequest, user_id: str = "default"):
    """Record a completed game for a user."""
    if request.domain not in DOMAINS:
        raise HTTPException(status_code=400, detail=f"Unknown domain: {request.domain}")

    store = get_store(user_id)
    stored, unlocked = store.record_game_result(request.to_payload())
    if stored is None:
        raise HTTPException(status_code=400, detail="Result could not be recorded")
    store.mark_today_game_complete(stored.game_id, stored)

    return GameResultResponse(
        result=stored.to_dict(),
        unlocked_achievements=unlocked,
        stats=store.stats.to_dict()
    )


@app.get("/api/games/results")
async def get_game_results(user_id: str = "default", limit: int = 50):
    """Get a user's results, newest first."""
    store = get_store(user_id)
    results = store.get_recent_activity(max(0, limit))
    return {"results": [r.to_dict() for r in results]}


@app.get("/api/user/stats", response_model=StatsResponse)
async def get_user_stats(user_id: str = "default"):
    """Get a user's aggregate stats."""
    store = get_store(user_id)
    return StatsResponse(
        stats=store.stats.to_dict(),
        overall_score=store.get_overall_score(),
        unlocked_count=len(store.unlocked_achievements)
    )


@app.get("/api/today", response_model=TodayResponse)
async def get_today(user_id: str = "default"):
    """Get today's training plan, generating it on the first request of the day."""
    store = get_store(user_id)
    games = store.generate_today_games()
    completed, total = store.today_progress()
    return TodayResponse(
        date=store.today_date,
        games=[g.to_dict() for g in games],
        completed=completed,
        total=total
    )


@app.get("/api/achievements")
async def list_achievements(user_id: str = "default"):
    """Achievement catalog with the user's unlock state."""
    store = get_store(user_id)
    unlocked = {u.achievement_id: u.unlocked_at for u in store.get_unlocked_achievements()}
    achievements = []
    for achievement in get_achievements():
        entry = achievement.to_dict()
        entry['unlocked'] = achievement.id in unlocked
        entry['unlockedAt'] = unlocked.get(achievement.id)
        achievements.append(entry)
    return {"achievements": achievements, "unlocked_count": len(unlocked)}


@app.post("/api/progress/reset")
async def reset_progress(user_id: str = "default"):
    """Clear all of a user's progress."""
    store = get_store(user_id)
    store.reset_progress()
    return {"success": True}


def create_app():
    """Factory function for creating the app (useful for testing)."""
    return app
