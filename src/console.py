"""Interactive console for the cycle log.

Run with the ``cyclelog`` script (or ``python -m src.console``).  The menu
reads dates as dd-mm-yyyy and keeps everything in memory; quitting discards
the log.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from typing import TextIO

from src.config import get_settings
from src.dependencies import build_tracker
from src.tracker.advisories import HealthAdvisory
from src.tracker.cycle_tracker import (
    Cycle,
    CycleTracker,
    ForecastResult,
    IrregularCycle,
    validate_cycle_dates,
)
from src.tracker.dates import format_date, parse_date
from src.tracker.errors import TrackerError

logger = logging.getLogger("cyclelog.console")

MENU = (
    "\n1. Add Period Cycle\n"
    "2. Predict Future Periods\n"
    "3. Display Cycle Log\n"
    "4. Check Irregular Cycles\n"
    "5. Exit"
)

_RULE = "-" * 73
_SYMPTOM_WIDTH = 43


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def render_cycle_log(cycles: Iterable[Cycle]) -> str:
    """Render recorded cycles as a fixed-width table."""
    lines = [
        _RULE,
        f"| {'Start Date':>10} | {'End Date':>10} | {'Symptoms':<{_SYMPTOM_WIDTH}} |",
        _RULE,
    ]
    for cycle in cycles:
        symptoms = ", ".join(cycle.symptoms) if cycle.symptoms else "None"
        if len(symptoms) > _SYMPTOM_WIDTH:
            symptoms = symptoms[: _SYMPTOM_WIDTH - 3] + "..."
        lines.append(
            f"| {format_date(cycle.start_date):>10} | {format_date(cycle.end_date):>10} "
            f"| {symptoms:<{_SYMPTOM_WIDTH}} |"
        )
    lines.append(_RULE)
    return "\n".join(lines)


def render_forecast(result: ForecastResult) -> str:
    if result.no_data:
        return result.message
    lines = ["", "----- Predicted Future Periods -----"]
    for period in result.predictions:
        window = period.fertility
        lines.append(f"Predicted Period {period.index}: {format_date(period.start_date)}")
        lines.append(f"Ovulation Date: {format_date(window.ovulation_date)}")
        lines.append(
            f"Fertile Window: {format_date(window.fertile_start)} to "
            f"{format_date(window.fertile_end)}"
        )
    if result.out_of_range:
        lines.append(result.message)
    return "\n".join(lines)


def render_irregularities(flagged: list[IrregularCycle]) -> str:
    if not flagged:
        return "No irregular cycles detected."
    lines = []
    for item in flagged:
        lines.append(
            f"Warning: Cycle from {format_date(item.previous_start)} "
            f"to {format_date(item.current_start)} is irregular."
        )
        lines.append(
            "Consider tracking your symptoms or consulting a healthcare professional."
        )
    return "\n".join(lines)


class ConsoleNotifier:
    """Print health reminders as they are issued."""

    def __init__(self, out: TextIO) -> None:
        self._out = out

    def notify_advisories(self, advisories: list[HealthAdvisory]) -> None:
        print("----- Health Reminders -----", file=self._out)
        for advisory in advisories:
            print(f"Tip: {advisory.tip}", file=self._out)


# ---------------------------------------------------------------------------
# Menu loop
# ---------------------------------------------------------------------------


class CycleConsole:
    """Menu-driven front end over a CycleTracker.

    Input and output streams are injectable so the loop can be driven from
    tests.
    """

    def __init__(
        self,
        tracker: CycleTracker | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self._in = stdin or sys.stdin
        self._out = stdout or sys.stdout
        self._notifier = ConsoleNotifier(self._out)
        self.tracker = tracker or CycleTracker(notifier=self._notifier)

    def _print(self, text: str = "") -> None:
        print(text, file=self._out)

    def _prompt(self, text: str) -> str | None:
        """Show a prompt and read one line; None at end of input."""
        self._out.write(text)
        self._out.flush()
        line = self._in.readline()
        if not line:
            return None
        return line.strip()

    def run(self) -> None:
        while True:
            self._print(MENU)
            choice = self._prompt("Enter your choice: ")
            if choice is None or choice == "5":
                break
            if choice == "1":
                self.add_cycle()
            elif choice == "2":
                self._print(render_forecast(self.tracker.predict_future_periods()))
            elif choice == "3":
                self._print(render_cycle_log(self.tracker.list_cycles()))
            elif choice == "4":
                self._print(render_irregularities(self.tracker.check_irregular_cycles()))
            else:
                self._print(f"Unknown option {choice!r}; choose 1-5.")

    def add_cycle(self) -> None:
        """Collect one cycle from the user and record it.

        Invalid input prints an error and records nothing.
        """
        start_text = self._prompt("Enter start date (dd-mm-yyyy): ")
        end_text = self._prompt("Enter end date (dd-mm-yyyy): ")
        count_text = self._prompt("Enter the number of symptoms experienced (0 if none): ")
        if start_text is None or end_text is None or count_text is None:
            return

        try:
            start = parse_date(start_text)
            end = parse_date(end_text)
            validate_cycle_dates(start, end)
        except TrackerError as exc:
            self._print(f"Error: {exc}")
            return

        try:
            count = int(count_text)
        except ValueError:
            self._print(f"Error: number of symptoms must be a whole number, got {count_text!r}")
            return

        symptoms: list[str] = []
        if count > 0:
            line = self._prompt("Enter symptoms (separated by spaces): ") or ""
            symptoms = line.split()
            if len(symptoms) < count:
                self._print(f"Error: expected {count} symptom(s), got {len(symptoms)}")
                return
            symptoms = symptoms[:count]

        self.tracker.add_cycle(start, end, symptoms, notifier=self._notifier)


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.WARNING,
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
    logger.debug("Starting interactive session")
    CycleConsole(build_tracker(settings)).run()


if __name__ == "__main__":
    main()
