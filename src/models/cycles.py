"""Request and response schemas for the cycle log endpoints.

Dates travel as ``dd-mm-yyyy`` strings in both directions.
"""

from __future__ import annotations

from pydantic import Field, field_validator, model_validator

from src.models.base import CyclelogBase
from src.tracker.cycle_tracker import validate_cycle_dates
from src.tracker.dates import parse_date


class CycleCreate(CyclelogBase):
    start_date: str = Field(examples=["01-03-2024"])
    end_date: str = Field(examples=["05-03-2024"])
    symptoms: list[str] = Field(default_factory=list, examples=[["cramps", "headache"]])

    @field_validator("start_date", "end_date")
    @classmethod
    def _check_date(cls, value: str) -> str:
        # MalformedDateError is a ValueError, so pydantic reports it as a 422
        parse_date(value)
        return value

    @model_validator(mode="after")
    def _check_order(self) -> "CycleCreate":
        validate_cycle_dates(parse_date(self.start_date), parse_date(self.end_date))
        return self


class CycleRead(CyclelogBase):
    start_date: str
    end_date: str
    symptoms: list[str]
    length_days: int


class AdvisoryRead(CyclelogBase):
    symptom: str
    tip: str


class CycleCreated(CyclelogBase):
    cycle: CycleRead
    advisories: list[AdvisoryRead]
    average_cycle_length: int


class CycleLog(CyclelogBase):
    cycles: list[CycleRead]
    average_cycle_length: int


class PredictionRead(CyclelogBase):
    index: int
    cycle_length: int
    predicted_start: str
    ovulation_date: str
    fertile_start: str
    fertile_end: str


class ForecastRead(CyclelogBase):
    no_data: bool
    out_of_range: bool = False
    message: str
    anchor_date: str | None = None
    predictions: list[PredictionRead]


class IrregularCycleRead(CyclelogBase):
    previous_start: str
    current_start: str
    gap_days: int
    average_cycle_length: int
    deviation_days: int
