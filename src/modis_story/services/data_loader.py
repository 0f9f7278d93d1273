"""
Data loading service.

Loads the MODIS record table and the U.S. state boundaries once at start-up.
"""

import csv
import io
import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, TYPE_CHECKING

import requests  # type: ignore

from ..core import DateUtils, constants
from ..models import Record, RecordStore, VARIABLES
from .topology import TopologyDecoder, features_by_name

if TYPE_CHECKING:
    from ..api import HttpClient


class DataLoadError(RuntimeError):
    """The tabular or boundary input could not be fetched or parsed."""


@dataclass(frozen=True)
class LoadedData:
    """Both start-up inputs, available only once both arrived."""

    store: RecordStore
    states_geo: Dict[str, Dict[str, Any]]  # state name -> GeoJSON feature


def _is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


class DataLoader:
    """Fetch and parse the record table and boundary topology."""

    def __init__(
        self,
        http_client: Optional["HttpClient"] = None,
        timezone: str = "UTC",
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize data loader.

        Args:
            http_client: HTTP client for remote inputs (required for URLs)
            timezone: Processing timezone for timestamped date cells
            logger: Logger instance
        """
        self.http_client = http_client
        self.timezone = timezone
        self.logger = logger or logging.getLogger(__name__)
        self.date_utils = DateUtils(logger)

    def _read_text(self, location: str) -> str:
        if _is_url(location):
            if self.http_client is None:
                raise DataLoadError(f"No HTTP client configured to fetch {location}")
            return self.http_client.get_text(location)
        return Path(location).read_text(encoding="utf-8")

    def _read_json(self, location: str) -> Any:
        if _is_url(location):
            if self.http_client is None:
                raise DataLoadError(f"No HTTP client configured to fetch {location}")
            return self.http_client.get_json(location)
        with open(location, "r", encoding="utf-8") as f:
            return json.load(f)

    @staticmethod
    def parse_optional_float(cell: Optional[str]) -> Optional[float]:
        """
        Parse a numeric cell; empty cells are missing (None), never zero.

        Raises:
            ValueError: If a non-empty cell is not a number
        """
        if cell is None:
            return None
        text = cell.strip()
        if text == "":
            return None
        value = float(text)
        # Non-finite readings are treated as missing
        return value if math.isfinite(value) else None

    def parse_row(self, row: Dict[str, str], line_number: int) -> Record:
        """
        Parse one CSV row into a Record.

        Raises:
            DataLoadError: If the row is malformed
        """
        try:
            state = (row.get(constants.COLUMN_STATE) or "").strip()
            if not state:
                raise ValueError("empty state name")

            year = int(row[constants.COLUMN_YEAR])
            month = int(row[constants.COLUMN_MONTH])
            if not 1 <= month <= 12:
                raise ValueError(f"month {month} outside 1-12")

            date_cell = (row.get(constants.COLUMN_DATE) or "").strip()
            if date_cell:
                day = self.date_utils.parse_record_date(date_cell, self.timezone)
            else:
                day = DateUtils.month_start(year, month)

            values = {
                config.field: self.parse_optional_float(row.get(config.column))
                for config in VARIABLES.values()
            }
        except (KeyError, TypeError, ValueError) as e:
            raise DataLoadError(f"Malformed record on line {line_number}: {e}") from e

        return Record(state=state, year=year, month=month, date=day, **values)

    def parse_records(self, text: str) -> List[Record]:
        """
        Parse the tabular dataset.

        Args:
            text: CSV content with a header row

        Returns:
            List of records in file order

        Raises:
            DataLoadError: If required columns are missing or a row is malformed
        """
        reader = csv.DictReader(io.StringIO(text))
        try:
            header = reader.fieldnames or []
        except csv.Error as e:
            raise DataLoadError(f"Unreadable dataset header: {e}") from e

        missing = [c for c in constants.REQUIRED_COLUMNS if c not in header]
        if missing:
            raise DataLoadError(f"Dataset is missing required columns: {', '.join(missing)}")

        absent_variables = [c.column for c in VARIABLES.values() if c.column not in header]
        if absent_variables:
            self.logger.warning(
                f"Dataset has no column for: {', '.join(absent_variables)}; treating as missing"
            )

        # Header is line 1
        records = []
        line_number = 1
        try:
            for line_number, row in enumerate(reader, start=2):
                records.append(self.parse_row(row, line_number))
        except csv.Error as e:
            raise DataLoadError(f"Malformed CSV after line {line_number}: {e}") from e
        return records

    def load_records(self, location: str) -> RecordStore:
        """
        Load the record table from a file path or http(s) URL.

        Raises:
            DataLoadError: On fetch or parse failure
        """
        self.logger.info(f"Loading records from {location}")
        try:
            text = self._read_text(location)
        except (OSError, UnicodeDecodeError, requests.exceptions.RequestException) as e:
            raise DataLoadError(f"Failed to read records from {location}: {e}") from e

        records = self.parse_records(text)
        store = RecordStore(records)
        self.logger.info(f"Loaded {len(store)} records for {len(store.states())} states")
        return store

    def load_boundaries(
        self,
        location: str,
        object_name: str = constants.BOUNDARIES_OBJECT
    ) -> Dict[str, Dict[str, Any]]:
        """
        Load state boundaries from a TopoJSON file path or URL.

        Returns:
            Dictionary mapping state name to GeoJSON feature

        Raises:
            DataLoadError: On fetch, decode or topology failure
        """
        self.logger.info(f"Loading boundaries from {location}")
        try:
            topology = self._read_json(location)
            features = TopologyDecoder(topology, self.logger).features(object_name)
        except (OSError, requests.exceptions.RequestException) as e:
            raise DataLoadError(f"Failed to read boundaries from {location}: {e}") from e
        except (KeyError, TypeError, ValueError, IndexError) as e:
            raise DataLoadError(f"Malformed boundary topology at {location}: {e}") from e

        states = features_by_name(features)
        if not states:
            raise DataLoadError(f"No named state features in {location}")

        self.logger.info(f"Loaded {len(states)} state boundaries")
        return states

    def load_all(
        self,
        records_location: str,
        boundaries_location: str,
        object_name: str = constants.BOUNDARIES_OBJECT
    ) -> LoadedData:
        """
        Load both inputs; nothing is returned unless both succeed.

        Raises:
            DataLoadError: If either input fails
        """
        store = self.load_records(records_location)
        states_geo = self.load_boundaries(boundaries_location, object_name)
        return LoadedData(store=store, states_geo=states_geo)
