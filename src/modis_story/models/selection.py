"""
Selection data model.

The shared view state (variable, year, month, state) passed explicitly into
every map and seasonal chart computation.
"""

from dataclasses import dataclass, replace
from typing import Optional

from ..core import constants
from .variable import VariableConfig, get_variable


@dataclass(frozen=True)
class Selection:
    """What the reader is currently looking at."""

    variable: str = constants.DEFAULT_VARIABLE
    year: int = constants.DEFAULT_YEAR
    month: int = constants.DEFAULT_MONTH
    state: Optional[str] = None  # None => U.S. average

    def __post_init__(self):
        get_variable(self.variable)
        if not 1 <= self.month <= 12:
            raise ValueError(f"Invalid month: {self.month} (must be 1-12)")

    @property
    def config(self) -> VariableConfig:
        return get_variable(self.variable)

    def with_variable(self, variable: str) -> "Selection":
        return replace(self, variable=variable)

    def with_period(self, year: int, month: int) -> "Selection":
        return replace(self, year=year, month=month)

    def with_state(self, state: Optional[str]) -> "Selection":
        return replace(self, state=state)
