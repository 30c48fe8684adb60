"""Tests for ovulation / fertile window derivation, symptom advisories, and
the notifier implementations."""

from __future__ import annotations

import logging
from datetime import date

import pytest

from src.tracker.advisories import (
    DEFAULT_ADVISORIES,
    HealthAdvisory,
    advisories_for,
    advisory_for,
)
from src.tracker.dates import days_between, parse_date
from src.tracker.fertility import FertilityWindow, calculate_ovulation_and_fertility
from src.tracker.notifications import CollectingNotifier, LoggingNotifier


class TestOvulationAndFertility:
    def test_reference_dates(self) -> None:
        window = calculate_ovulation_and_fertility(parse_date("15-03-2024"))
        assert window == FertilityWindow(
            ovulation_date=parse_date("01-03-2024"),
            fertile_start=parse_date("28-02-2024"),
            fertile_end=parse_date("02-03-2024"),
        )

    def test_fertile_end_is_day_after_ovulation(self) -> None:
        window = calculate_ovulation_and_fertility(date(2024, 7, 20))
        assert days_between(window.ovulation_date, window.fertile_end) == 1
        assert days_between(window.fertile_start, window.ovulation_date) == 2

    def test_window_spans_four_calendar_days(self) -> None:
        window = calculate_ovulation_and_fertility(date(2024, 7, 20))
        assert days_between(window.fertile_start, window.fertile_end) + 1 == 4

    def test_crosses_year_boundary(self) -> None:
        window = calculate_ovulation_and_fertility(date(2024, 1, 10))
        assert window.ovulation_date == date(2023, 12, 27)
        assert window.fertile_start == date(2023, 12, 25)
        assert window.fertile_end == date(2023, 12, 28)

    def test_custom_offsets(self) -> None:
        window = calculate_ovulation_and_fertility(
            date(2024, 5, 31),
            luteal_phase_days=12,
            days_before_ovulation=5,
            window_span_days=6,
        )
        assert window.ovulation_date == date(2024, 5, 19)
        assert window.fertile_start == date(2024, 5, 14)
        assert window.fertile_end == date(2024, 5, 20)

    def test_to_dict(self) -> None:
        window = calculate_ovulation_and_fertility(parse_date("15-03-2024"))
        assert window.to_dict() == {
            "ovulation_date": "01-03-2024",
            "fertile_start": "28-02-2024",
            "fertile_end": "02-03-2024",
        }


class TestAdvisories:
    @pytest.mark.parametrize("symptom", ["cramps", "headache", "moodswings", "nausea"])
    def test_known_symptoms_have_tips(self, symptom: str) -> None:
        assert advisory_for(symptom) == DEFAULT_ADVISORIES[symptom]

    @pytest.mark.parametrize("symptom", ["unknown", "Cramps", "cramps ", "", "fatigue"])
    def test_unrecognised_symptoms_have_none(self, symptom: str) -> None:
        assert advisory_for(symptom) is None

    def test_cramps_and_unknown_yield_one(self) -> None:
        result = advisories_for(["cramps", "unknown"])
        assert result == [HealthAdvisory("cramps", DEFAULT_ADVISORIES["cramps"])]

    def test_order_and_repeats_preserved(self) -> None:
        result = advisories_for(["nausea", "cramps", "nausea"])
        assert [a.symptom for a in result] == ["nausea", "cramps", "nausea"]

    def test_empty_input(self) -> None:
        assert advisories_for([]) == []

    def test_custom_table(self) -> None:
        table = {"bloating": "Cut back on salty food."}
        assert advisories_for(["bloating", "cramps"], table) == [
            HealthAdvisory("bloating", "Cut back on salty food.")
        ]


class TestNotifiers:
    def test_logging_notifier_logs_each_tip(self, caplog: pytest.LogCaptureFixture) -> None:
        advisories = advisories_for(["cramps", "nausea"])
        with caplog.at_level(logging.INFO, logger="cyclelog.tracker.notifications"):
            LoggingNotifier().notify_advisories(advisories)
        assert "Health reminder for cramps" in caplog.text
        assert "Ginger tea" in caplog.text

    def test_collecting_notifier_drains(self) -> None:
        notifier = CollectingNotifier()
        notifier.notify_advisories(advisories_for(["cramps"]))
        notifier.notify_advisories(advisories_for(["headache"]))
        assert [a.symptom for a in notifier.drain()] == ["cramps", "headache"]
        assert notifier.drain() == []
