"""Notification port used by the tracker to surface health reminders.

The tracker never prints.  It hands advisories to a ``Notifier``; the console
prints them, the API collects them into the response, and the default just
logs them.
"""

from __future__ import annotations

import logging
from typing import Protocol

from src.tracker.advisories import HealthAdvisory

logger = logging.getLogger("cyclelog.tracker.notifications")


class Notifier(Protocol):
    def notify_advisories(self, advisories: list[HealthAdvisory]) -> None: ...


class LoggingNotifier:
    """Write each advisory to the application log."""

    def notify_advisories(self, advisories: list[HealthAdvisory]) -> None:
        for advisory in advisories:
            logger.info("Health reminder for %s: %s", advisory.symptom, advisory.tip)


class CollectingNotifier:
    """Keep advisories in memory until the caller drains them."""

    def __init__(self) -> None:
        self.advisories: list[HealthAdvisory] = []

    def notify_advisories(self, advisories: list[HealthAdvisory]) -> None:
        self.advisories.extend(advisories)

    def drain(self) -> list[HealthAdvisory]:
        """Return everything collected so far and reset."""
        drained, self.advisories = self.advisories, []
        return drained
