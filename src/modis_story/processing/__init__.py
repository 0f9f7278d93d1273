"""
Data processing module for the MODIS state data story.

Provides statistics, aggregation, validation and formatting of records.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from ..models import Record, Selection, SeriesPoint, VariableConfig, VariableStats
from .aggregator import DataAggregator
from .formatter import ValueFormatter
from .statistics import StatisticsEngine, interior_thresholds, nice_extent, tick_step
from .validator import RecordValidator


class DataProcessor:
    """
    Unified data processor combining statistics, aggregation, validation
    and formatting.

    This class provides a convenient interface to all processing operations.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize data processor.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.statistics = StatisticsEngine(logger)
        self.aggregator = DataAggregator(logger)
        self.validator = RecordValidator(logger)
        self.formatter = ValueFormatter(logger=logger)

    def compute_stats(
        self,
        records: Iterable[Record],
        variable: VariableConfig
    ) -> Optional[VariableStats]:
        """
        Get (cached) statistics for a variable.

        Args:
            records: All records in the store
            variable: Variable to summarise

        Returns:
            VariableStats, or None when the variable has no data
        """
        return self.statistics.get_stats(records, variable)

    def series_for_state(
        self,
        records: Iterable[Record],
        variable_field: str,
        state: Optional[str] = None
    ) -> List[SeriesPoint]:
        """
        Build the date-sorted trend line for a state or the national average.
        """
        return self.aggregator.series_for_state(records, variable_field, state)

    def value_by_state(
        self,
        records: Iterable[Record],
        variable_field: str,
        year: int,
        month: int
    ) -> Dict[str, float]:
        """
        Average a variable per state for one month.
        """
        return self.aggregator.value_by_state(records, variable_field, year, month)

    def series_for_selection(
        self,
        records: Iterable[Record],
        selection: Selection
    ) -> List[SeriesPoint]:
        return self.aggregator.series_for_selection(records, selection)

    def values_for_selection(
        self,
        records: Iterable[Record],
        selection: Selection
    ) -> Dict[str, float]:
        return self.aggregator.values_for_selection(records, selection)

    def validate_records(self, records: Iterable[Record]) -> Tuple[bool, List[str]]:
        """
        Validate the loaded record table.

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        return self.validator.validate_records(records)


__all__ = [
    "StatisticsEngine",
    "DataAggregator",
    "RecordValidator",
    "ValueFormatter",
    "DataProcessor",
    "interior_thresholds",
    "nice_extent",
    "tick_step",
]
