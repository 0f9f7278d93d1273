"""
Main entry point for the MODIS state data story.

Loads the inputs once, then serves map and seasonal chart views per selection.
"""

import json
import sys
from typing import Any, Dict, Optional

from .core import Config, setup_logger, LoggerContext
from .api import HttpClient
from .models import Selection
from .processing import DataProcessor
from .services import DataLoader, DataLoadError, LoadedData, ViewBuilder, MapView, SeasonalView


class DataStoryApp:
    """Main application for the MODIS state data story."""

    def __init__(self, config_file: Optional[str] = None, quiet: bool = False):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
            quiet: Only echo warnings and errors to the console
        """
        self.config = Config(config_file)

        self.logger = setup_logger(
            log_file=self.config.log_file,
            log_level=self.config.log_level,
            console_level="WARNING" if quiet else self.config.log_console_level
        )
        self.logger.info("=" * 60)
        self.logger.info("MODIS State Data Story")
        self.logger.info("=" * 60)
        self.logger.info(f"Configuration: {self.config}")

        # Set in initialize()
        self.http_client: Optional[HttpClient] = None
        self.processor: Optional[DataProcessor] = None
        self.data: Optional[LoadedData] = None
        self.views: Optional[ViewBuilder] = None

    def initialize(self) -> None:
        """
        Load both inputs and precompute statistics.

        Raises:
            DataLoadError: If either input fails; nothing is rendered then
        """
        self.logger.info("Initializing components...")

        self.http_client = HttpClient(
            timeout=self.config.api_timeout,
            max_retries=self.config.api_max_retries,
            verify_ssl=self.config.api_verify_ssl,
            logger=self.logger
        )
        loader = DataLoader(
            http_client=self.http_client,
            timezone=self.config.timezone,
            logger=self.logger
        )
        self.processor = DataProcessor(logger=self.logger)

        boundaries = self.config.boundaries_path or self.config.boundaries_url

        try:
            with LoggerContext(self.logger, "data load"):
                self.data = loader.load_all(
                    self.config.records_path,
                    boundaries,
                    self.config.boundaries_object
                )
        finally:
            self.http_client.close()

        store = self.data.store

        is_valid, errors = self.processor.validate_records(store)
        if not is_valid:
            for error in errors:
                self.logger.warning(error)
            self.logger.warning(f"Dataset has {len(errors)} validation issues")
        self.processor.validator.check_variable_coverage(store)

        with LoggerContext(self.logger, "variable statistics"):
            self.processor.statistics.compute_all(store)

        unmatched = sorted(set(store.states()) - set(self.data.states_geo))
        if unmatched:
            self.logger.warning(f"States without boundaries: {', '.join(unmatched)}")

        self.views = ViewBuilder(
            store=store,
            state_names=list(self.data.states_geo),
            processor=self.processor,
            logger=self.logger
        )
        self.logger.info("All components initialized successfully")

    def default_selection(self) -> Selection:
        """Selection the story opens with."""
        return Selection(
            variable=self.config.default_variable,
            year=self.config.default_year,
            month=self.config.default_month,
        )

    def _require_views(self) -> ViewBuilder:
        if self.views is None:
            raise RuntimeError("Data not loaded. Call initialize() first.")
        return self.views

    def map_view(self, selection: Selection) -> MapView:
        return self._require_views().map_view(selection)

    def seasonal_view(self, selection: Selection) -> SeasonalView:
        return self._require_views().seasonal_view(selection)

    def run(self, selection: Optional[Selection] = None) -> Dict[str, Any]:
        """
        Load the data and build both views for a selection.

        Args:
            selection: What to show. If None, uses the configured defaults.

        Returns:
            Dictionary with "map" and "seasonal" view models
        """
        try:
            self.initialize()

            if selection is None:
                selection = self.default_selection()
            self.logger.info(f"Building views for {selection}")

            return {
                "map": self.map_view(selection).to_dict(),
                "seasonal": self.seasonal_view(selection).to_dict(),
            }

        except DataLoadError as e:
            self.logger.error(f"Start-up aborted, data could not be loaded: {e}")
            raise

        except Exception as e:
            self.logger.error(f"Application error: {e}", exc_info=True)
            raise


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="MODIS State Data Story"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--variable",
        type=str,
        default=None,
        help="Variable key (ndvi, lst_day, lst_night, et). Default: from config"
    )
    parser.add_argument(
        "--year",
        type=int,
        default=None,
        help="Map year. Default: from config"
    )
    parser.add_argument(
        "--month",
        type=int,
        default=None,
        help="Map month (1-12). Default: from config"
    )
    parser.add_argument(
        "--state",
        type=str,
        default=None,
        help="State for the seasonal chart. Default: U.S. average"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only log warnings and errors to the console"
    )

    args = parser.parse_args()

    try:
        app = DataStoryApp(config_file=args.config, quiet=args.quiet)
        defaults = app.default_selection()
        selection = Selection(
            variable=args.variable or defaults.variable,
            year=args.year if args.year is not None else defaults.year,
            month=args.month if args.month is not None else defaults.month,
            state=args.state,
        )
    except (FileNotFoundError, ValueError) as e:
        print(f"Invalid configuration or selection: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        views = app.run(selection)
    except Exception as e:
        print(f"Application failed: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(views, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
