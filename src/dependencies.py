"""Shared FastAPI dependencies injected into route handlers."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends

from src.config import Settings, get_settings
from src.tracker.config_loader import load_tracker_config
from src.tracker.cycle_tracker import CycleTracker, make_rng_factory

logger = logging.getLogger("cyclelog.dependencies")


def build_tracker(settings: Settings) -> CycleTracker:
    """Create a tracker wired to the configured YAML file and random seed.

    Without ``tracker_config_path`` the tracker follows the process-wide
    config, including later ``reload_tracker_config()`` calls.
    """
    config = (
        load_tracker_config(Path(settings.tracker_config_path))
        if settings.tracker_config_path
        else None
    )
    tracker = CycleTracker(
        config=config,
        rng_factory=make_rng_factory(settings.prediction_seed),
    )
    logger.info(
        "Creating cycle tracker (seed=%s, order_by_start_date=%s, config=%s)",
        settings.prediction_seed,
        tracker.config.order_by_start_date,
        settings.tracker_config_path or "bundled, reloadable",
    )
    return tracker


@lru_cache
def get_tracker() -> CycleTracker:
    """Return the process-wide tracker.

    State lives only as long as the process; there is one tracker per API
    instance.
    """
    return build_tracker(get_settings())


# Annotated shortcuts for route signatures
Tracker = Annotated[CycleTracker, Depends(get_tracker)]
AppSettings = Annotated[Settings, Depends(get_settings)]
