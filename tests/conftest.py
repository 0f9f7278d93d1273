"""
Pytest configuration and shared fixtures for all tests.
"""

import sys
from datetime import date
from pathlib import Path

import pytest

# Add the project root to sys.path so we can import from src
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from src.modis_story.models import Record, RecordStore  # noqa: E402


def make_record(state, year, month, **values):
    """Record for the first day of a month with the given variable values."""
    return Record(state=state, year=year, month=month, date=date(year, month, 1), **values)


@pytest.fixture(scope="session")
def fixtures_dir():
    """Get the fixtures directory path."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def sample_csv_path(fixtures_dir):
    """Path to the sample MODIS table."""
    return fixtures_dir / "modis_sample.csv"


@pytest.fixture(scope="session")
def topology_path(fixtures_dir):
    """Path to the sample state boundary topology."""
    return fixtures_dir / "us_states_topo.json"


@pytest.fixture
def sample_store():
    """Store mirroring tests/fixtures/modis_sample.csv."""
    return RecordStore([
        make_record("California", 2020, 1, ndvi=0.42, lst_day=60.1, lst_night=38.5, et=1.2),
        make_record("California", 2020, 2, ndvi=0.48, lst_day=63.4, lst_night=40.2, et=1.6),
        make_record("California", 2020, 3, ndvi=0.55, lst_day=67.0, lst_night=43.1, et=None),
        make_record("Nevada", 2020, 1, ndvi=0.12, lst_day=48.0, lst_night=22.3, et=0.0),
        make_record("Nevada", 2020, 2, ndvi=None, lst_day=51.2, lst_night=25.0, et=0.0),
        make_record("New York", 2020, 1, ndvi=0.31, lst_day=30.2, lst_night=15.1, et=0.4),
        make_record("New York", 2020, 2, ndvi=0.29, lst_day=32.5, lst_night=16.8, et=0.5),
        make_record("New York", 2020, 3, ndvi=0.35, lst_day=41.0, lst_night=24.4, et=0.9),
    ])


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test loading fixture files end to end"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test (no external dependencies)"
    )
