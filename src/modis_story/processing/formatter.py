"""
Formatting module.

Turns statistics and series into the labels the map and chart display.
"""

import logging
from typing import List, Optional, Tuple

from ..core import DateUtils
from ..models import LegendBin, SeriesPoint, VariableConfig, VariableStats


class ValueFormatter:
    """Format legend bins, tooltips and chart titles."""

    def __init__(
        self,
        legend_decimals: int = 1,
        tooltip_decimals: int = 3,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize value formatter.

        Args:
            legend_decimals: Decimals shown on legend bounds
            tooltip_decimals: Decimals shown in point tooltips
            logger: Logger instance
        """
        self.legend_decimals = legend_decimals
        self.tooltip_decimals = tooltip_decimals
        self.logger = logger or logging.getLogger(__name__)

    def format_value(self, value: float, decimals: Optional[int] = None) -> str:
        """Fixed-point value, legend precision by default."""
        if decimals is None:
            decimals = self.legend_decimals
        return f"{value:.{decimals}f}"

    def format_range(self, lower: float, upper: float) -> str:
        """Legend bin label, e.g. '0.1–0.3'."""
        return f"{self.format_value(lower)}–{self.format_value(upper)}"

    def build_legend(self, stats: Optional[VariableStats]) -> List[LegendBin]:
        """
        Build one legend bin per colour.

        Bins are [min, t0], (t0, t1], ..., (t4, max].

        Args:
            stats: Variable statistics, or None when the variable has no data

        Returns:
            Legend bins low -> high, empty when there are no statistics
        """
        if stats is None:
            return []

        stops = [stats.min, *stats.thresholds, stats.max]
        return [
            LegendBin(
                color=color,
                lower=stops[i],
                upper=stops[i + 1],
                label=self.format_range(stops[i], stops[i + 1]),
            )
            for i, color in enumerate(stats.colors)
        ]

    def format_tooltip(self, point: SeriesPoint) -> str:
        """Tooltip for a chart point, e.g. 'Mar 2020<br>0.412'."""
        month = DateUtils.format_month(point.date)
        return f"{month}<br>{self.format_value(point.value, self.tooltip_decimals)}"

    @staticmethod
    def seasonal_title(state: Optional[str]) -> str:
        """Chart heading for a state or the national average."""
        if state:
            return f"{state}: Seasonal Pattern"
        return "U.S. Average Seasonal Pattern"

    @staticmethod
    def seasonal_subtitle(
        variable: VariableConfig,
        state: Optional[str],
        years: Tuple[int, int]
    ) -> str:
        """Chart sub-heading naming the variable, scope and year span."""
        scope = state if state else "all states"
        first, last = years
        return (
            f"{variable.label} averaged across {scope} ({first}–{last}). "
            "Paris Agreement milestones are shown as red dotted lines."
        )
