"""
Services for the MODIS state data story.

Services load the inputs and turn engine output into view models.
"""

from .data_loader import DataLoader, DataLoadError, LoadedData
from .topology import TopologyDecoder, features_by_name
from .views import ViewBuilder, MapView, SeasonalView, PARIS_MILESTONES

__all__ = [
    "DataLoader",
    "DataLoadError",
    "LoadedData",
    "TopologyDecoder",
    "features_by_name",
    "ViewBuilder",
    "MapView",
    "SeasonalView",
    "PARIS_MILESTONES",
]
