"""Health check endpoint."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from src.dependencies import AppSettings, Tracker

router = APIRouter(tags=["system"])


@router.get("/health")
def health_check(settings: AppSettings, tracker: Tracker) -> dict:
    """Liveness check. Returns 200 if the API process is up."""
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.environment,
        "cycles_recorded": tracker.cycle_count,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
