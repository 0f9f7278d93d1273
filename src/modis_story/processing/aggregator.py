"""
Data aggregation module.

Groups records by state or by date and reduces each group to a mean value.
"""

import logging
import statistics
from collections import defaultdict
from typing import Callable, Dict, Hashable, Iterable, List, Optional, Tuple

from ..models import Record, Selection, SeriesPoint, is_present


class DataAggregator:
    """Mean-reduce record groups for the map and the seasonal chart."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize data aggregator.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def _group_means(
        records: Iterable[Record],
        variable_field: str,
        key: Callable[[Record], Hashable]
    ) -> Dict[Hashable, float]:
        """
        Group records by key and average the field, skipping missing values.

        Groups without a single present value are left out entirely.
        """
        groups: Dict[Hashable, List[float]] = defaultdict(list)
        for record in records:
            value = record.value(variable_field)
            if is_present(value):
                groups[key(record)].append(value)

        return {k: statistics.mean(values) for k, values in groups.items()}

    def series_for_state(
        self,
        records: Iterable[Record],
        variable_field: str,
        state: Optional[str] = None
    ) -> List[SeriesPoint]:
        """
        Build the monthly trend line for a state or the national average.

        Args:
            records: All records in the store
            variable_field: Record attribute of the variable (e.g. 'ndvi')
            state: State name, or None to average across all states

        Returns:
            Series points sorted ascending by date, one per date with data
        """
        if state is not None:
            records = [r for r in records if r.state == state]

        means = self._group_means(records, variable_field, key=lambda r: r.date)
        series = [SeriesPoint(date=d, value=v) for d, v in sorted(means.items())]

        self.logger.debug(
            f"Series for {state or 'U.S. average'} ({variable_field}): {len(series)} points"
        )
        return series

    def value_by_state(
        self,
        records: Iterable[Record],
        variable_field: str,
        year: int,
        month: int
    ) -> Dict[str, float]:
        """
        Average a variable per state for one month.

        Args:
            records: All records in the store
            variable_field: Record attribute of the variable (e.g. 'ndvi')
            year: Year to filter to
            month: Month to filter to (1-12)

        Returns:
            Dictionary mapping state name to mean value. States without any
            reading that month are absent; real zero readings map to 0.0.
        """
        matching = [r for r in records if r.year == year and r.month == month]
        values = self._group_means(matching, variable_field, key=lambda r: r.state)

        if not values:
            self.logger.warning(f"No {variable_field} values for {year}-{month:02d}")
        else:
            self.logger.debug(f"{variable_field} {year}-{month:02d}: {len(values)} states")

        return values

    def series_for_selection(
        self,
        records: Iterable[Record],
        selection: Selection
    ) -> List[SeriesPoint]:
        """Trend line for the selection's variable and state."""
        return self.series_for_state(records, selection.config.field, selection.state)

    def values_for_selection(
        self,
        records: Iterable[Record],
        selection: Selection
    ) -> Dict[str, float]:
        """Per-state means for the selection's variable, year and month."""
        return self.value_by_state(
            records, selection.config.field, selection.year, selection.month
        )

    @staticmethod
    def value_extent(series: List[SeriesPoint]) -> Optional[Tuple[float, float]]:
        """Smallest and largest series value, or None for an empty series."""
        if not series:
            return None
        values = [p.value for p in series]
        return min(values), max(values)
