"""
View coordination service.

Builds the map and seasonal chart view models for a selection.
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..core import constants
from ..models import LegendBin, Milestone, RecordStore, Selection, SeriesPoint, VariableStats
from ..processing import DataProcessor, nice_extent

PARIS_MILESTONES = tuple(Milestone(year, label) for year, label in constants.PARIS_MILESTONES)


@dataclass
class MapView:
    """Choropleth state for one variable and month."""

    variable: str
    year: int
    month: int
    legend_label: str
    fills: Dict[str, str]  # state name -> colour
    values: Dict[str, float]  # state name -> mean value
    legend: List[LegendBin] = field(default_factory=list)
    selected_state: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SeasonalView:
    """Trend chart for one variable and state (or the national average)."""

    variable: str
    state: Optional[str]
    title: str
    subtitle: str
    series: List[SeriesPoint]
    y_extent: Optional[Tuple[float, float]]
    tooltips: List[str]
    milestones: List[Milestone]

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["series"] = [
            {"date": p.date.isoformat(), "value": p.value} for p in self.series
        ]
        return data


class ViewBuilder:
    """Coordinate the map and the seasonal chart over one record store."""

    def __init__(
        self,
        store: RecordStore,
        state_names: Optional[List[str]] = None,
        processor: Optional[DataProcessor] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize view builder.

        Args:
            store: Loaded record store
            state_names: States drawn on the map (boundary names); defaults
                         to the states present in the store
            processor: Shared data processor (statistics cache lives here)
            logger: Logger instance
        """
        self.store = store
        self.state_names = sorted(state_names) if state_names is not None else store.states()
        self.logger = logger or logging.getLogger(__name__)
        self.processor = processor or DataProcessor(logger)

    def stats_for(self, selection: Selection) -> Optional[VariableStats]:
        return self.processor.compute_stats(self.store, selection.config)

    def map_view(self, selection: Selection) -> MapView:
        """
        Build the choropleth for the selection's variable, year and month.

        States without a value, or every state when the variable has no
        statistics, get the no-data colour.
        """
        config = selection.config
        stats = self.stats_for(selection)
        values = self.processor.values_for_selection(self.store, selection)

        fills = {}
        for name in self.state_names:
            value = values.get(name)
            if stats is None or value is None:
                fills[name] = constants.NO_DATA_COLOR
            else:
                fills[name] = stats.classify(value)

        if stats is None:
            self.logger.warning(f"No statistics for {config.key}; map drawn without legend")

        return MapView(
            variable=config.key,
            year=selection.year,
            month=selection.month,
            legend_label=config.legend_label,
            fills=fills,
            values=values,
            legend=self.processor.formatter.build_legend(stats),
            selected_state=selection.state,
        )

    def _year_span(self) -> Tuple[int, int]:
        years = self.store.years()
        if not years:
            return constants.MIN_YEAR, constants.MAX_YEAR
        return years[0], years[-1]

    def seasonal_view(self, selection: Selection) -> SeasonalView:
        """
        Build the trend chart for the selection's variable and state.

        An empty series is a valid (blank) chart.
        """
        config = selection.config
        formatter = self.processor.formatter
        series = self.processor.series_for_selection(self.store, selection)

        extent = self.processor.aggregator.value_extent(series)
        y_extent = nice_extent(*extent) if extent else None

        return SeasonalView(
            variable=config.key,
            state=selection.state,
            title=formatter.seasonal_title(selection.state),
            subtitle=formatter.seasonal_subtitle(config, selection.state, self._year_span()),
            series=series,
            y_extent=y_extent,
            tooltips=[formatter.format_tooltip(p) for p in series],
            milestones=list(PARIS_MILESTONES),
        )
