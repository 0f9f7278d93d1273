"""
Variable data models.

Contains the tracked variable definitions, colour ramps and derived statistics.
"""

from bisect import bisect_left
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from ..core import constants


class RampCategory(Enum):
    """Colour ramp family used to paint a variable on the map."""

    GREENS = "greens"
    BLUES = "blues"
    TEMPERATURE = "temperature"

    @property
    def colors(self) -> Tuple[str, ...]:
        """Six colours, ascending low -> high."""
        return _RAMPS[self]


_RAMPS = {
    RampCategory.GREENS: constants.GREENS_RAMP,
    RampCategory.BLUES: constants.BLUES_RAMP,
    RampCategory.TEMPERATURE: constants.TEMPERATURE_RAMP,
}


@dataclass(frozen=True)
class VariableConfig:
    """Static description of one tracked variable."""

    key: str
    field: str  # Record attribute
    column: str  # Dataset column
    label: str
    legend_label: str
    ramp: RampCategory


VARIABLES: Dict[str, VariableConfig] = {
    "ndvi": VariableConfig(
        key="ndvi",
        field="ndvi",
        column="NDVI",
        label="NDVI (Vegetation Greenness)",
        legend_label="NDVI (unitless)",
        ramp=RampCategory.GREENS,
    ),
    "lst_day": VariableConfig(
        key="lst_day",
        field="lst_day",
        column="LST_Day",
        label="Land Surface Temp – Day (°F)",
        legend_label="Land Surface Temperature – Day (°F)",
        ramp=RampCategory.TEMPERATURE,
    ),
    "lst_night": VariableConfig(
        key="lst_night",
        field="lst_night",
        column="LST_Night",
        label="Land Surface Temp – Night (°F)",
        legend_label="Land Surface Temperature – Night (°F)",
        ramp=RampCategory.TEMPERATURE,
    ),
    "et": VariableConfig(
        key="et",
        field="et",
        column="ET",
        label="Evapotranspiration (mm/day)",
        legend_label="Evapotranspiration (mm/day)",
        ramp=RampCategory.BLUES,
    ),
}


def get_variable(key: str) -> VariableConfig:
    """
    Look up a variable by key.

    Raises:
        ValueError: If the key is not one of the tracked variables
    """
    try:
        return VARIABLES[key]
    except KeyError:
        raise ValueError(
            f"Unknown variable: {key!r}. Available: {', '.join(VARIABLES)}"
        )


@dataclass(frozen=True)
class VariableStats:
    """Global extrema, bin edges and colours for one variable."""

    min: float
    max: float
    thresholds: Tuple[float, ...]
    colors: Tuple[str, ...]

    def __post_init__(self):
        if len(self.colors) != len(self.thresholds) + 1:
            raise ValueError(
                f"Expected {len(self.thresholds) + 1} colors for "
                f"{len(self.thresholds)} thresholds, got {len(self.colors)}"
            )

    def bin_index(self, value: float) -> int:
        """
        Bin a value: v <= t[0] -> 0, t[i-1] < v <= t[i] -> i, v > t[-1] -> last.
        """
        return bisect_left(self.thresholds, value)

    def classify(self, value: float) -> str:
        """Colour for a value."""
        return self.colors[self.bin_index(value)]


@dataclass(frozen=True)
class LegendBin:
    """One swatch of the map legend."""

    color: str
    lower: float
    upper: float
    label: str
