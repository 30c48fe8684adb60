"""Menstrual cycle log and prediction engine.

Keeps an append-only log of recorded cycles and a running average cycle
length, and answers three questions about them:

- Which consecutive cycles were irregular?
- When are the next periods likely to start?
- When are the matching ovulation dates and fertile windows?

The running average is exponentially smoothed rather than a true mean:
every new cycle moves the estimate halfway toward its own length.
"""

from __future__ import annotations

import logging
import random
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import date

from src.tracker.advisories import HealthAdvisory, advisories_for
from src.tracker.config_loader import TrackerConfig, get_tracker_config
from src.tracker.dates import add_days, coerce_date, days_between, format_date
from src.tracker.errors import DateRangeError, InvalidCycleError, NoDataError
from src.tracker.fertility import FertilityWindow, calculate_ovulation_and_fertility
from src.tracker.notifications import LoggingNotifier, Notifier

logger = logging.getLogger("cyclelog.tracker.cycle_tracker")

NO_DATA_MESSAGE = "No period data available to predict future periods."
OUT_OF_RANGE_MESSAGE = "Predicted dates run past 31-12-9999, the last supported date."

RngFactory = Callable[[], random.Random]


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Cycle:
    """A single recorded menstrual cycle.

    Attributes:
        start_date: First day of the period.
        end_date:   Last day of the period.
        symptoms:   Symptom tags in the order they were logged.
    """

    start_date: date
    end_date: date
    symptoms: tuple[str, ...] = ()

    @property
    def length(self) -> int:
        return days_between(self.start_date, self.end_date)

    def to_dict(self) -> dict:
        return {
            "start_date": format_date(self.start_date),
            "end_date": format_date(self.end_date),
            "symptoms": list(self.symptoms),
            "length_days": self.length,
        }


@dataclass(frozen=True)
class PredictedPeriod:
    """One predicted upcoming period with its fertility estimate.

    Attributes:
        index:        1-based position in the prediction chain.
        cycle_length: Cycle length drawn for this prediction.
        start_date:   Predicted first day of the period.
        fertility:    Ovulation date and fertile window derived from start_date.
    """

    index: int
    cycle_length: int
    start_date: date
    fertility: FertilityWindow

    def as_tuple(self) -> tuple[date, date, date, date]:
        """(predicted start, ovulation, fertile start, fertile end)."""
        return (
            self.start_date,
            self.fertility.ovulation_date,
            self.fertility.fertile_start,
            self.fertility.fertile_end,
        )

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "cycle_length": self.cycle_length,
            "predicted_start": format_date(self.start_date),
            **self.fertility.to_dict(),
        }


@dataclass
class ForecastResult:
    """Outcome of a prediction request.

    ``no_data`` is True (and ``predictions`` empty) when nothing has been
    recorded yet.  ``out_of_range`` is True when the chain ran past the last
    representable date; ``predictions`` then holds only the periods that fit.
    """

    predictions: list[PredictedPeriod] = field(default_factory=list)
    anchor_date: date | None = None
    no_data: bool = False
    out_of_range: bool = False
    message: str = ""

    def to_dict(self) -> dict:
        return {
            "no_data": self.no_data,
            "out_of_range": self.out_of_range,
            "message": self.message,
            "anchor_date": format_date(self.anchor_date) if self.anchor_date else None,
            "predictions": [p.to_dict() for p in self.predictions],
        }


@dataclass(frozen=True)
class IrregularCycle:
    """A pair of consecutive cycles whose start dates are unusually far apart.

    Attributes:
        previous_start:       Start date of the earlier cycle of the pair.
        current_start:        Start date of the later cycle of the pair.
        gap_days:             Days between the two start dates.
        average_cycle_length: Running average at the time of the check.
        deviation_days:       gap_days - average_cycle_length.
    """

    previous_start: date
    current_start: date
    gap_days: int
    average_cycle_length: int
    deviation_days: int

    def as_tuple(self) -> tuple[date, date]:
        return (self.previous_start, self.current_start)

    def to_dict(self) -> dict:
        return {
            "previous_start": format_date(self.previous_start),
            "current_start": format_date(self.current_start),
            "gap_days": self.gap_days,
            "average_cycle_length": self.average_cycle_length,
            "deviation_days": self.deviation_days,
        }


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def next_average_cycle_length(average: int, cycle_length: int) -> int:
    """Fold a new cycle length into the running average.

    Returns ``floor((average + cycle_length) / 2)``.
    """
    return (average + cycle_length) // 2


def validate_cycle_dates(start_date: date, end_date: date) -> None:
    """Reject a cycle that ends before it starts.

    Raises:
        InvalidCycleError: If ``start_date`` is after ``end_date``.
    """
    if start_date > end_date:
        raise InvalidCycleError(
            f"Start date {format_date(start_date)} is after end date {format_date(end_date)}"
        )


def make_rng_factory(seed: int | None = None) -> RngFactory:
    """Build the random source factory used for predicted cycle lengths.

    With a seed every call gets an identically seeded generator, so repeated
    predictions in a session agree.  Without one each call is independently
    random.
    """
    if seed is None:
        return random.Random
    return lambda: random.Random(seed)


# ---------------------------------------------------------------------------
# Tracker
# ---------------------------------------------------------------------------


class CycleTracker:
    """Record cycles, flag irregular ones, and predict upcoming periods.

    Usage::

        tracker = CycleTracker()
        tracker.add_cycle("01-01-2024", "05-01-2024", ["cramps"])
        tracker.add_cycle("29-01-2024", "02-02-2024")
        for period in tracker.predict_future_periods().predictions:
            print(period.start_date, period.fertility.ovulation_date)
        tracker.check_irregular_cycles()

    One lock guards the cycle list and the running average, so a single
    instance can be shared between request threads.
    """

    def __init__(
        self,
        config: TrackerConfig | None = None,
        notifier: Notifier | None = None,
        rng_factory: RngFactory | None = None,
    ) -> None:
        self._config = config
        self._notifier = notifier or LoggingNotifier()
        self._rng_factory = rng_factory or make_rng_factory()
        self._cycles: list[Cycle] = []
        self._average_cycle_length = self.config.initial_average_cycle_length
        self._lock = threading.Lock()

    @property
    def config(self) -> TrackerConfig:
        """The injected config, or else the current process-wide config.

        A tracker built without a config follows ``reload_tracker_config()``.
        """
        return self._config or get_tracker_config()

    @property
    def average_cycle_length(self) -> int:
        with self._lock:
            return self._average_cycle_length

    @property
    def cycle_count(self) -> int:
        with self._lock:
            return len(self._cycles)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_cycle(
        self,
        start_date: date | str,
        end_date: date | str,
        symptoms: Iterable[str] | None = None,
        notifier: Notifier | None = None,
    ) -> Cycle:
        """Record a cycle and update the running average.

        Args:
            start_date: First day of the period (date or dd-mm-yyyy string).
            end_date:   Last day of the period (date or dd-mm-yyyy string).
            symptoms:   Symptom tags in logged order.  Blank tags are dropped.
            notifier:   Receives health reminders for this call instead of the
                        tracker's default notifier.

        Returns:
            The stored Cycle.

        Raises:
            MalformedDateError: If a date string is not valid dd-mm-yyyy.
                                Nothing is stored in that case.
        """
        start = coerce_date(start_date)
        end = coerce_date(end_date)
        tags = tuple(s.strip() for s in (symptoms or ()) if s and s.strip())

        cycle = Cycle(start_date=start, end_date=end, symptoms=tags)
        if cycle.length < 0:
            logger.warning(
                "Cycle %s → %s ends before it starts; its negative length skews the average",
                format_date(start),
                format_date(end),
            )

        with self._lock:
            self._cycles.append(cycle)
            previous = self._average_cycle_length
            self._average_cycle_length = next_average_cycle_length(previous, cycle.length)
            current = self._average_cycle_length

        logger.info(
            "Recorded cycle %s → %s (%d days); average cycle length %d → %d",
            format_date(start),
            format_date(end),
            cycle.length,
            previous,
            current,
        )

        if tags:
            advisories = advisories_for(tags, self.config.advisories)
            if advisories:
                (notifier or self._notifier).notify_advisories(advisories)

        return cycle

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_cycles(self) -> tuple[Cycle, ...]:
        """Snapshot of recorded cycles in entry order."""
        with self._lock:
            return tuple(self._cycles)

    def latest_cycle(self) -> Cycle:
        """Return the most recently added cycle.

        Raises:
            NoDataError: If no cycles have been recorded.
        """
        with self._lock:
            if not self._cycles:
                raise NoDataError("No cycles have been recorded")
            return self._cycles[-1]

    def check_irregular_cycles(self) -> list[IrregularCycle]:
        """Flag consecutive cycles whose start-date gap strays from the average.

        A pair is irregular when ``|gap - average| > irregularity_threshold_days``,
        using the average as it stands now.  Fewer than two cycles yields an
        empty list.
        """
        with self._lock:
            cycles = self._ordered_cycles()
            average = self._average_cycle_length

        if len(cycles) < 2:
            return []

        threshold = self.config.irregularity_threshold_days
        flagged: list[IrregularCycle] = []
        for previous, current in zip(cycles, cycles[1:]):
            gap = days_between(previous.start_date, current.start_date)
            deviation = gap - average
            if abs(deviation) > threshold:
                logger.info(
                    "Irregular cycle from %s to %s: gap %d days vs average %d",
                    format_date(previous.start_date),
                    format_date(current.start_date),
                    gap,
                    average,
                )
                flagged.append(
                    IrregularCycle(
                        previous_start=previous.start_date,
                        current_start=current.start_date,
                        gap_days=gap,
                        average_cycle_length=average,
                        deviation_days=deviation,
                    )
                )
        return flagged

    def predict_future_periods(self) -> ForecastResult:
        """Predict the next periods with their ovulation and fertile windows.

        The chain starts at the end date of the anchor cycle (the last one
        added, or the latest-starting one when ``order_by_start_date`` is
        set).  Each prediction adds a cycle length drawn uniformly from the
        configured range to the previous predicted start.

        Returns:
            ForecastResult; ``no_data`` is set when nothing is recorded and
            ``out_of_range`` when the chain runs past 31-12-9999.
        """
        try:
            anchor_cycle = self._anchor_cycle()
        except NoDataError:
            logger.info("Prediction requested with no recorded cycles")
            return ForecastResult(no_data=True, message=NO_DATA_MESSAGE)

        pc = self.config.prediction
        fc = self.config.fertility
        rng = self._rng_factory()

        anchor = anchor_cycle.end_date
        predictions: list[PredictedPeriod] = []
        for index in range(1, pc.count + 1):
            length = rng.randint(pc.min_cycle_length, pc.max_cycle_length)
            try:
                predicted_start = add_days(anchor, length)
                fertility = calculate_ovulation_and_fertility(
                    predicted_start,
                    luteal_phase_days=fc.luteal_phase_days,
                    days_before_ovulation=fc.days_before_ovulation,
                    window_span_days=fc.window_span_days,
                )
            except DateRangeError as exc:
                logger.info("Stopped predicting at period %d: %s", index, exc)
                return ForecastResult(
                    predictions=predictions,
                    anchor_date=anchor_cycle.end_date,
                    out_of_range=True,
                    message=(
                        f"{OUT_OF_RANGE_MESSAGE} Showing {len(predictions)} "
                        f"of {pc.count} predicted period(s)."
                    ),
                )
            predictions.append(
                PredictedPeriod(
                    index=index,
                    cycle_length=length,
                    start_date=predicted_start,
                    fertility=fertility,
                )
            )
            anchor = predicted_start

        logger.debug(
            "Predicted %d period(s) from anchor %s",
            len(predictions),
            format_date(anchor_cycle.end_date),
        )
        return ForecastResult(
            predictions=predictions,
            anchor_date=anchor_cycle.end_date,
            message=f"Predicted {len(predictions)} upcoming period(s)",
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ordered_cycles(self) -> list[Cycle]:
        # Caller holds the lock. sorted() is stable, so equal start dates keep entry order.
        if self.config.order_by_start_date:
            return sorted(self._cycles, key=lambda c: c.start_date)
        return list(self._cycles)

    def _anchor_cycle(self) -> Cycle:
        if not self.config.order_by_start_date:
            return self.latest_cycle()
        with self._lock:
            if not self._cycles:
                raise NoDataError("No cycles have been recorded")
            return self._ordered_cycles()[-1]
