"""
Tests for data models.
"""

from datetime import date

import pytest

from conftest import make_record
from src.modis_story.models import (
    Milestone,
    RampCategory,
    RecordStore,
    Selection,
    VARIABLES,
    VariableStats,
    get_variable,
    is_present,
)


class TestRecord:
    """Test cases for Record and RecordStore."""

    def test_missing_is_not_zero(self):
        assert is_present(0.0)
        assert not is_present(None)
        assert not is_present(float("nan"))

    def test_value_by_field(self):
        record = make_record("Utah", 2019, 5, ndvi=0.3, et=0.0)
        assert record.value("ndvi") == 0.3
        assert record.value("et") == 0.0
        assert record.value("lst_day") is None

    def test_store_is_read_only(self, sample_store):
        assert isinstance(sample_store.records, tuple)
        assert len(sample_store) == 8
        assert list(sample_store)[0].state == "California"

    def test_store_summaries(self, sample_store):
        assert sample_store.states() == ["California", "Nevada", "New York"]
        assert sample_store.years() == [2020]
        assert sample_store.date_extent() == (date(2020, 1, 1), date(2020, 3, 1))
        assert RecordStore([]).date_extent() is None


class TestVariables:
    """Test cases for variable definitions."""

    def test_four_variables(self):
        assert set(VARIABLES) == {"ndvi", "lst_day", "lst_night", "et"}

    def test_ramps(self):
        assert VARIABLES["ndvi"].ramp is RampCategory.GREENS
        assert VARIABLES["et"].ramp is RampCategory.BLUES
        assert VARIABLES["lst_day"].ramp is RampCategory.TEMPERATURE
        for category in RampCategory:
            assert len(category.colors) == 6

    def test_unknown_variable(self):
        with pytest.raises(ValueError):
            get_variable("rainfall")

    def test_stats_color_count_enforced(self):
        with pytest.raises(ValueError):
            VariableStats(min=0.0, max=1.0, thresholds=(0.2, 0.4), colors=("#000",))


class TestSelection:
    """Test cases for the Selection value object."""

    def test_defaults(self):
        selection = Selection()
        assert (selection.variable, selection.year, selection.month, selection.state) == (
            "ndvi", 2014, 1, None
        )

    def test_invalid_month(self):
        with pytest.raises(ValueError):
            Selection(month=13)

    def test_invalid_variable(self):
        with pytest.raises(ValueError):
            Selection(variable="greenness")

    def test_updates_return_new_selection(self):
        selection = Selection()
        changed = selection.with_variable("et").with_period(2021, 7).with_state("Ohio")

        assert selection == Selection()
        assert changed == Selection(variable="et", year=2021, month=7, state="Ohio")
        assert changed.config is VARIABLES["et"]
        assert changed.with_state(None).state is None

    def test_invalid_update_rejected(self):
        with pytest.raises(ValueError):
            Selection().with_period(2020, 0)


def test_milestone_date():
    assert Milestone(2016, "In force (2016)").date == date(2016, 1, 1)
