"""
Data models for the MODIS state data story.

Contains DTOs for records, variables, selection and chart series.
"""

from .record import Record, RecordStore, is_present
from .variable import (
    RampCategory,
    VariableConfig,
    VariableStats,
    LegendBin,
    VARIABLES,
    get_variable,
)
from .selection import Selection
from .series import SeriesPoint, Milestone

__all__ = [
    "Record",
    "RecordStore",
    "is_present",
    "RampCategory",
    "VariableConfig",
    "VariableStats",
    "LegendBin",
    "VARIABLES",
    "get_variable",
    "Selection",
    "SeriesPoint",
    "Milestone",
]
