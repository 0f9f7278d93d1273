"""
MODIS State Data Story

This package computes the statistics, colour bins and aggregated series behind
a slide-based story of U.S. state vegetation, land-surface temperature and
evapotranspiration from 2014 to 2024.
"""

__version__ = "0.1.0"
__description__ = "Map and seasonal chart data for U.S. state MODIS indicators"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "DataStoryApp":
        from .main import DataStoryApp
        return DataStoryApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "DataStoryApp",
]
