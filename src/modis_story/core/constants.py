"""
Application-wide constants for the MODIS state data story.

Colour ramps, dataset column names and story defaults live here.
Values specific to one algorithm are defined in their respective modules.
"""

# Dataset coverage
MIN_YEAR = 2014
MAX_YEAR = 2024

# Number of colour bins on the map (and therefore 5 interior thresholds)
BIN_COUNT = 6
THRESHOLD_COUNT = BIN_COUNT - 1

# Colour ramps, ascending low -> high
GREENS_RAMP = ("#c7e9c0", "#a1d99b", "#74c476", "#41ab5d", "#238b45", "#005a32")
BLUES_RAMP = ("#c6dbef", "#9ecae1", "#6baed6", "#4292c6", "#2171b5", "#084594")
# blue -> light blue -> yellow -> orange -> red
TEMPERATURE_RAMP = ("#1d4ed8", "#2563eb", "#38bdf8", "#facc15", "#fb923c", "#ef4444")

# Fill for states without a value for the current selection
NO_DATA_COLOR = "#020617"

# Tabular input columns
COLUMN_STATE = "NAME"
COLUMN_YEAR = "year"
COLUMN_MONTH = "month"
COLUMN_DATE = "date"
REQUIRED_COLUMNS = (COLUMN_STATE, COLUMN_YEAR, COLUMN_MONTH)

# Boundary data
DEFAULT_BOUNDARIES_URL = "https://cdn.jsdelivr.net/npm/us-atlas@3/states-10m.json"
BOUNDARIES_OBJECT = "states"

# Story defaults
DEFAULT_VARIABLE = "ndvi"
DEFAULT_YEAR = MIN_YEAR
DEFAULT_MONTH = 1

# Paris Agreement milestones drawn on the seasonal chart
PARIS_MILESTONES = (
    (2015, "Paris adopted (2015)"),
    (2016, "In force (2016)"),
    (2017, "Withdrawal announced (2017)"),
    (2020, "Withdrawal effective (2020)"),
    (2021, "U.S. rejoins (2021)"),
)

# Seasonal chart y-axis tick count
SEASONAL_Y_TICKS = 6
