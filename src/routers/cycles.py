"""Cycle log endpoints: record cycles, list them, predict, and flag irregularities."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter

from src.dependencies import Tracker
from src.models.base import ErrorDetail
from src.models.cycles import (
    CycleCreate,
    CycleCreated,
    CycleLog,
    CycleRead,
    ForecastRead,
    IrregularCycleRead,
)
from src.tracker.notifications import CollectingNotifier

router = APIRouter(prefix="/cycles", tags=["cycles"])
logger = logging.getLogger("cyclelog.routers.cycles")


@router.get("", response_model=CycleLog)
def list_cycles(tracker: Tracker) -> Any:
    return {
        "cycles": [c.to_dict() for c in tracker.list_cycles()],
        "average_cycle_length": tracker.average_cycle_length,
    }


@router.post("", response_model=CycleCreated, status_code=201)
def create_cycle(tracker: Tracker, body: CycleCreate) -> Any:
    """Record a cycle and return any health reminders for its symptoms."""
    notifier = CollectingNotifier()
    cycle = tracker.add_cycle(
        body.start_date, body.end_date, body.symptoms, notifier=notifier
    )
    return {
        "cycle": cycle.to_dict(),
        "advisories": [a.to_dict() for a in notifier.drain()],
        "average_cycle_length": tracker.average_cycle_length,
    }


@router.get("/latest", response_model=CycleRead, responses={404: {"model": ErrorDetail}})
def latest_cycle(tracker: Tracker) -> Any:
    # NoDataError is mapped to 404 by the app-level handler
    return tracker.latest_cycle().to_dict()


@router.get("/predictions", response_model=ForecastRead)
def predict_future_periods(tracker: Tracker) -> Any:
    """Predict upcoming periods.

    Returns ``no_data: true`` when nothing is recorded and ``out_of_range: true``
    when predictions would run past 31-12-9999.
    """
    return tracker.predict_future_periods().to_dict()


@router.get("/irregularities", response_model=list[IrregularCycleRead])
def check_irregular_cycles(tracker: Tracker) -> Any:
    flagged = tracker.check_irregular_cycles()
    if flagged:
        logger.info("%d irregular cycle pair(s) reported", len(flagged))
    return [item.to_dict() for item in flagged]
