"""
Data validation module.

Validates loaded records for coverage and consistency.
"""

import logging
from collections import Counter
from typing import Iterable, List, Optional, Tuple

from ..core import constants
from ..models import Record, VARIABLES, is_present


class RecordValidator:
    """Validate the loaded record table."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize record validator.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_records(self, records: Iterable[Record]) -> Tuple[bool, List[str]]:
        """
        Check the one-row-per-state-per-month rule and value ranges.

        Args:
            records: Loaded records

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        records = list(records)
        errors = []

        keys = Counter((r.state, r.year, r.month) for r in records)
        for (state, year, month), count in sorted(keys.items()):
            if count > 1:
                errors.append(f"Duplicate rows for {state} {year}-{month:02d}: {count}")

        for r in records:
            if not 1 <= r.month <= 12:
                errors.append(f"Invalid month for {r.state}: {r.month} (must be 1-12)")
                continue

            if not constants.MIN_YEAR <= r.year <= constants.MAX_YEAR:
                errors.append(
                    f"Year out of coverage for {r.state}: {r.year} "
                    f"(expected {constants.MIN_YEAR}-{constants.MAX_YEAR})"
                )

            if (r.date.year, r.date.month, r.date.day) != (r.year, r.month, 1):
                errors.append(
                    f"Date {r.date.isoformat()} does not match {r.year}-{r.month:02d} for {r.state}"
                )

        is_valid = len(errors) == 0
        return is_valid, errors

    def check_variable_coverage(self, records: Iterable[Record]) -> List[str]:
        """
        List the variables that have no present value at all.

        Args:
            records: Loaded records

        Returns:
            Keys of variables without data
        """
        records = list(records)
        empty = [
            key for key, config in VARIABLES.items()
            if not any(is_present(r.value(config.field)) for r in records)
        ]

        if empty:
            self.logger.warning(f"No data for variables: {', '.join(empty)}")

        return empty
