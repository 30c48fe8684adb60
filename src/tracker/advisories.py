"""Symptom-based health reminders.

Each recognised symptom tag maps to one short tip.  Matching is exact and
case-sensitive; tags outside the table are skipped without error.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

DEFAULT_ADVISORIES: dict[str, str] = {
    "cramps": "Try heat therapy or light exercise to relieve cramps.",
    "headache": "Stay hydrated and consider a small dose of over-the-counter pain relief.",
    "moodswings": (
        "Engage in activities you enjoy or practice mindfulness to help stabilize your mood."
    ),
    "nausea": "Ginger tea may help soothe nausea.",
}


@dataclass(frozen=True)
class HealthAdvisory:
    """A tip issued for one logged symptom."""

    symptom: str
    tip: str

    def to_dict(self) -> dict:
        return {"symptom": self.symptom, "tip": self.tip}


def advisory_for(symptom: str, table: Mapping[str, str] | None = None) -> str | None:
    """Return the tip for ``symptom``, or None if the tag is not recognised."""
    return (DEFAULT_ADVISORIES if table is None else table).get(symptom)


def advisories_for(
    symptoms: Iterable[str], table: Mapping[str, str] | None = None
) -> list[HealthAdvisory]:
    """Look up tips for each symptom, keeping input order.

    Args:
        symptoms: Symptom tags in the order they were logged.
        table:    Tag → tip mapping.  Defaults to ``DEFAULT_ADVISORIES``.

    Returns:
        One HealthAdvisory per recognised tag.  A tag logged twice yields
        two advisories.
    """
    advisories = []
    for symptom in symptoms:
        tip = advisory_for(symptom, table)
        if tip is not None:
            advisories.append(HealthAdvisory(symptom=symptom, tip=tip))
    return advisories
