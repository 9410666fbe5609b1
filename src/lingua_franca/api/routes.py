"""REST API routes for progress and configuration."""

import structlog
from fastapi import APIRouter

from lingua_franca.config import get_settings, load_topics
from lingua_franca.gamification.xp import RatingTier
from lingua_franca.models.vocabulary import DifficultyLevel, Register
from lingua_franca.storage.progress import ProgressStore

logger = structlog.get_logger()
router = APIRouter(prefix="/api")


@router.get("/progress")
async def get_progress() -> dict:
    """Current gamification stats, without reconciling the streak."""
    settings = get_settings()
    progress = ProgressStore(settings.progress_path).load()
    return progress.stats()


@router.get("/options")
async def get_options() -> dict:
    """Selectable levels, topics, registers and rating tiers."""
    return {
        "levels": [level.value for level in DifficultyLevel],
        "topics": load_topics(),
        "registers": [register.value for register in Register],
        "rating_tiers": {tier.name.lower(): int(tier) for tier in RatingTier},
    }


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}
