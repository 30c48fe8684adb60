"""Ovulation and fertile window estimation.

Calendar method: ovulation is placed a fixed luteal phase (14 days) before the
next period starts.  The fertile window runs from 2 days before ovulation to
1 day after it, four calendar days in total.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from src.tracker.dates import add_days, format_date


@dataclass(frozen=True)
class FertilityWindow:
    """Estimated ovulation and fertile window for one upcoming period.

    Attributes:
        ovulation_date: Estimated ovulation day.
        fertile_start:  First day of the fertile window.
        fertile_end:    Last day of the fertile window (inclusive).
    """

    ovulation_date: date
    fertile_start: date
    fertile_end: date

    def to_dict(self) -> dict:
        return {
            "ovulation_date": format_date(self.ovulation_date),
            "fertile_start": format_date(self.fertile_start),
            "fertile_end": format_date(self.fertile_end),
        }


def calculate_ovulation_and_fertility(
    next_period_start: date,
    luteal_phase_days: int = 14,
    days_before_ovulation: int = 2,
    window_span_days: int = 3,
) -> FertilityWindow:
    """Derive ovulation and the fertile window from a next-period start date.

    Args:
        next_period_start:     Predicted (or hypothetical) first day of the
                               next period.
        luteal_phase_days:     Days between ovulation and the next period.
        days_before_ovulation: How early the fertile window opens.
        window_span_days:      Days from window start to window end.

    Returns:
        FertilityWindow for that period.
    """
    ovulation = add_days(next_period_start, -luteal_phase_days)
    fertile_start = add_days(ovulation, -days_before_ovulation)
    fertile_end = add_days(fertile_start, window_span_days)
    return FertilityWindow(
        ovulation_date=ovulation,
        fertile_start=fertile_start,
        fertile_end=fertile_end,
    )
