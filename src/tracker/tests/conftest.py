"""Shared fixtures and helpers for cycle tracker tests."""

from __future__ import annotations

from datetime import date

import pytest

from src.tracker.config_loader import TrackerConfig, load_tracker_config
from src.tracker.cycle_tracker import Cycle, CycleTracker
from src.tracker.dates import add_days
from src.tracker.notifications import CollectingNotifier

TEST_START = date(2024, 1, 1)


class ScriptedRandom:
    """Stand-in random source that returns predetermined randint values."""

    def __init__(self, values: list[int]) -> None:
        self._values = list(values)

    def randint(self, a: int, b: int) -> int:
        value = self._values.pop(0)
        assert a <= value <= b, f"scripted value {value} outside [{a}, {b}]"
        return value


def scripted(*values: int):
    """rng_factory that hands out a fresh ScriptedRandom on every call."""
    return lambda: ScriptedRandom(list(values))


def add_cycle_of_length(
    tracker: CycleTracker, start: date, length: int = 28, symptoms: list[str] | None = None
) -> Cycle:
    """Record a cycle whose start→end span is ``length`` days."""
    return tracker.add_cycle(start, add_days(start, length), symptoms)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def tracker_config() -> TrackerConfig:
    """Load the bundled tracker config."""
    return load_tracker_config()


@pytest.fixture
def notifier() -> CollectingNotifier:
    return CollectingNotifier()


@pytest.fixture
def tracker(tracker_config: TrackerConfig, notifier: CollectingNotifier) -> CycleTracker:
    """Tracker with a collecting notifier and predicted lengths fixed at 28, 30."""
    return CycleTracker(
        config=tracker_config,
        notifier=notifier,
        rng_factory=scripted(28, 30),
    )
