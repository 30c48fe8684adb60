"""Cycle tracking core for Cyclelog.

Records menstrual cycles in memory, keeps a running average cycle length,
flags irregular cycles, and predicts upcoming periods with their ovulation
dates and fertile windows.  No I/O happens here: the console and the HTTP
API are thin layers over these modules.

Modules:
    cycle_tracker  — CycleTracker and its record types
    dates          — dd-mm-yyyy parsing and whole-day arithmetic
    fertility      — Ovulation / fertile window derivation
    advisories     — Symptom → health reminder lookup
    notifications  — Notifier port for health reminders
    config_loader  — tracker_config.yaml loading and validation
"""

from src.tracker.advisories import HealthAdvisory, advisories_for, advisory_for
from src.tracker.cycle_tracker import (
    Cycle,
    CycleTracker,
    ForecastResult,
    IrregularCycle,
    PredictedPeriod,
    make_rng_factory,
    next_average_cycle_length,
    validate_cycle_dates,
)
from src.tracker.errors import (
    DateRangeError,
    InvalidCycleError,
    MalformedDateError,
    NoDataError,
    TrackerError,
)
from src.tracker.fertility import FertilityWindow, calculate_ovulation_and_fertility

__all__ = [
    "Cycle",
    "CycleTracker",
    "DateRangeError",
    "FertilityWindow",
    "ForecastResult",
    "HealthAdvisory",
    "InvalidCycleError",
    "IrregularCycle",
    "MalformedDateError",
    "NoDataError",
    "PredictedPeriod",
    "TrackerError",
    "advisories_for",
    "advisory_for",
    "calculate_ovulation_and_fertility",
    "make_rng_factory",
    "next_average_cycle_length",
    "validate_cycle_dates",
]
