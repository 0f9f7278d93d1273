"""
Series data models.

Contains DTOs for the seasonal trend chart.
"""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class SeriesPoint:
    """One point of an aggregated trend line."""

    date: date
    value: float


@dataclass(frozen=True)
class Milestone:
    """Policy event marked on the seasonal chart."""

    year: int
    label: str

    @property
    def date(self) -> date:
        return date(self.year, 1, 1)
