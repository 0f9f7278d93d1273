"""
Record data models.

Contains the observation row and the immutable store holding all rows.
"""

import math
from dataclasses import dataclass
from datetime import date
from typing import Iterator, List, Optional, Sequence, Tuple


def is_present(value: Optional[float]) -> bool:
    """True when a cell holds a real, finite reading (zero included)."""
    return value is not None and math.isfinite(value)


@dataclass(frozen=True)
class Record:
    """One state's observations for one month."""

    state: str
    year: int
    month: int
    date: date  # First day of the month
    ndvi: Optional[float] = None  # unitless
    lst_day: Optional[float] = None  # °F
    lst_night: Optional[float] = None  # °F
    et: Optional[float] = None  # mm/day

    def value(self, field: str) -> Optional[float]:
        """
        Get a variable reading by Record attribute name.

        Raises:
            AttributeError: If the field is not a Record attribute
        """
        return getattr(self, field)


class RecordStore:
    """
    Flat table of records, loaded once and never mutated.

    Iterable, so it can be passed anywhere a sequence of records is expected.
    """

    def __init__(self, records: Sequence[Record]):
        self._records: Tuple[Record, ...] = tuple(records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> Tuple[Record, ...]:
        return self._records

    def states(self) -> List[str]:
        """Sorted distinct state names."""
        return sorted({r.state for r in self._records})

    def years(self) -> List[int]:
        """Sorted distinct years."""
        return sorted({r.year for r in self._records})

    def date_extent(self) -> Optional[Tuple[date, date]]:
        """Earliest and latest record dates, or None for an empty store."""
        if not self._records:
            return None
        dates = [r.date for r in self._records]
        return min(dates), max(dates)

    def __repr__(self) -> str:
        return f"RecordStore(records={len(self._records)})"
