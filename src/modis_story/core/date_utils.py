"""
Date and timezone utilities.

Centralizes all date/time operations with proper timezone handling.
"""

import logging
from datetime import date, datetime
from typing import Optional
import pytz
from pytz.tzinfo import BaseTzInfo


class DateUtils:
    """Utilities for date and timezone handling."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize date utilities.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def parse_timezone(timezone_str: str) -> BaseTzInfo:
        """
        Parse timezone string to pytz timezone object.

        Args:
            timezone_str: Timezone string (e.g., 'America/Chicago', 'UTC')

        Returns:
            pytz timezone object

        Raises:
            ValueError: If timezone is invalid
        """
        try:
            return pytz.timezone(timezone_str)
        except pytz.exceptions.UnknownTimeZoneError:
            raise ValueError(f"Invalid timezone: {timezone_str}")

    @staticmethod
    def month_start(year: int, month: int) -> date:
        """
        Get the first day of a month.

        Raises:
            ValueError: If month is outside 1-12
        """
        return date(year, month, 1)

    def parse_record_date(
        self,
        value: str,
        timezone_str: str = "UTC"
    ) -> date:
        """
        Parse a dataset date cell to the first day of its month.

        Accepts plain dates ('2020-03-01') and ISO timestamps
        ('2020-03-01T00:00:00Z', '2020-03-01T05:00:00+00:00'). Aware
        timestamps are converted to the processing timezone before the
        calendar date is taken.

        Args:
            value: Raw date cell
            timezone_str: Processing timezone

        Returns:
            First day of the month the value falls in

        Raises:
            ValueError: If the value cannot be parsed
        """
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"

        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is not None:
            tz = self.parse_timezone(timezone_str)
            local = parsed.astimezone(tz)
            self.logger.debug(f"Date {value} -> {local.isoformat()} in {timezone_str}")
            parsed = local

        return parsed.date().replace(day=1)

    @staticmethod
    def format_month(day: date) -> str:
        """Format a month as e.g. 'Mar 2020'."""
        return day.strftime("%b %Y")
