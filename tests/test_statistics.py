"""
Tests for the statistics engine.

Tests threshold generation, colour ramps, classification and caching.
"""

import math

import pytest

from conftest import make_record
from src.modis_story.core import constants
from src.modis_story.models import VARIABLES, RampCategory, VariableStats
from src.modis_story.processing import StatisticsEngine, interior_thresholds, nice_extent


class TestInteriorThresholds:
    """Test cases for nice interior cut points."""

    @pytest.mark.parametrize("lo,hi", [
        (0.1, 0.9),
        (0.0, 1.0),
        (0.12, 0.55),
        (-3.7, 112.4),
        (32.5, 105.25),
        (-10.0, -2.0),
        (0.0001, 0.00023),
        (1_000_000.0, 1_000_400.0),
        (0.0, 0.05),
    ])
    def test_five_strictly_ascending_interior(self, lo, hi):
        """Exactly five thresholds, strictly ascending and inside (lo, hi)."""
        thresholds = interior_thresholds(lo, hi)

        assert len(thresholds) == 5
        assert all(a < b for a, b in zip(thresholds, thresholds[1:]))
        assert all(lo < t < hi for t in thresholds)

    def test_round_numbers(self):
        """Cut points for [0.1, 0.9] fall on tenths."""
        thresholds = interior_thresholds(0.1, 0.9)
        assert thresholds == pytest.approx([0.3, 0.4, 0.5, 0.6, 0.7])

    def test_negative_range(self):
        """Negative ranges are binned on whole numbers."""
        assert interior_thresholds(-10.0, -2.0) == pytest.approx([-8, -7, -6, -5, -4])

    def test_empty_range_rejected(self):
        """A range without width has no interior."""
        with pytest.raises(ValueError):
            interior_thresholds(1.0, 1.0)

    @pytest.mark.parametrize("lo,hi", [
        (0.3, 0.1 + 0.2),
        (1_000_000.0, math.nextafter(1_000_000.0, math.inf)),
        (-0.7, math.nextafter(-0.7, 0.0)),
    ])
    def test_ulp_wide_range_widened(self, lo, hi):
        """Ranges too narrow for five floats still get five ascending cut points."""
        thresholds = interior_thresholds(lo, hi)

        assert len(thresholds) == 5
        assert all(a < b for a, b in zip(thresholds, thresholds[1:]))
        assert thresholds[0] <= lo and thresholds[-1] >= hi


class TestNiceExtent:
    """Test cases for the seasonal chart y-extent."""

    def test_widens_to_nice_bounds(self):
        lo, hi = nice_extent(0.283, 0.45)
        assert lo <= 0.283 and hi >= 0.45
        assert (lo, hi) == pytest.approx((0.28, 0.46))

    def test_already_nice(self):
        assert nice_extent(0.0, 1.0) == pytest.approx((0.0, 1.0))

    def test_single_value(self):
        assert nice_extent(4.2, 4.2) == (4.2, 4.2)


class TestStatisticsEngine:
    """Test cases for StatisticsEngine."""

    @pytest.fixture
    def engine(self):
        """Create engine instance."""
        return StatisticsEngine()

    def test_global_stats_example(self, engine):
        """Values 0.1, 0.5, 0.9 give min 0.1, max 0.9 and interior thresholds."""
        records = [
            make_record("A", 2020, 1, ndvi=0.1),
            make_record("B", 2020, 1, ndvi=0.5),
            make_record("C", 2020, 1, ndvi=0.9),
        ]

        stats = engine.compute_stats(records, VARIABLES["ndvi"])

        assert stats.min == 0.1
        assert stats.max == 0.9
        assert len(stats.thresholds) == 5
        assert all(0.1 < t < 0.9 for t in stats.thresholds)
        assert list(stats.thresholds) == sorted(stats.thresholds)

    def test_every_variable_has_five_thresholds_six_colors(self, engine, sample_store):
        for config in VARIABLES.values():
            stats = engine.compute_stats(sample_store, config)
            assert len(stats.thresholds) == 5
            assert len(stats.colors) == 6
            assert all(stats.min < t < stats.max for t in stats.thresholds)

    def test_missing_values_ignored(self, engine, sample_store):
        """ET has a missing cell and real zeros; zeros count, missing does not."""
        stats = engine.compute_stats(sample_store, VARIABLES["et"])
        assert stats.min == 0.0
        assert stats.max == 1.6

    def test_non_finite_values_ignored(self, engine):
        records = [
            make_record("A", 2020, 1, ndvi=float("nan")),
            make_record("B", 2020, 1, ndvi=0.2),
            make_record("C", 2020, 1, ndvi=0.6),
            make_record("D", 2020, 1, ndvi=float("inf")),
        ]
        stats = engine.compute_stats(records, VARIABLES["ndvi"])
        assert (stats.min, stats.max) == (0.2, 0.6)

    def test_no_data_returns_none(self, engine):
        """All-missing variable reports no statistics instead of NaN bins."""
        records = [make_record("A", 2020, 1, ndvi=0.3), make_record("B", 2020, 1)]
        assert engine.compute_stats(records, VARIABLES["et"]) is None

    def test_no_records(self, engine):
        assert engine.compute_stats([], VARIABLES["ndvi"]) is None

    def test_single_value_still_binned(self, engine):
        records = [make_record("A", 2020, 1, et=2.0), make_record("B", 2020, 2, et=2.0)]

        stats = engine.compute_stats(records, VARIABLES["et"])

        assert stats.min == stats.max == 2.0
        assert len(stats.thresholds) == 5
        assert list(stats.thresholds) == sorted(set(stats.thresholds))
        assert stats.thresholds[0] < 2.0 < stats.thresholds[-1]

    def test_near_equal_values_binned(self, engine):
        """Readings a rounding error apart still produce usable bins."""
        records = [make_record("A", 2020, 1, ndvi=0.3), make_record("B", 2020, 2, ndvi=0.1 + 0.2)]

        stats = engine.compute_stats(records, VARIABLES["ndvi"])

        assert stats.min == 0.3
        assert stats.max == 0.1 + 0.2
        assert len(stats.thresholds) == 5
        assert list(stats.thresholds) == sorted(set(stats.thresholds))

    def test_single_zero_value(self, engine):
        stats = engine.compute_stats([make_record("A", 2020, 1, et=0.0)], VARIABLES["et"])
        assert len(stats.thresholds) == 5

    def test_ramp_colors_by_category(self, engine, sample_store):
        assert engine.compute_stats(sample_store, VARIABLES["ndvi"]).colors == constants.GREENS_RAMP
        assert engine.compute_stats(sample_store, VARIABLES["et"]).colors == constants.BLUES_RAMP
        assert engine.compute_stats(sample_store, VARIABLES["lst_day"]).colors == constants.TEMPERATURE_RAMP
        assert engine.compute_stats(sample_store, VARIABLES["lst_night"]).colors == constants.TEMPERATURE_RAMP

    def test_cache_reused(self, engine, sample_store):
        first = engine.get_stats(sample_store, VARIABLES["ndvi"])
        # Different records, same key: the cached result is returned
        second = engine.get_stats([], VARIABLES["ndvi"])
        assert second is first

        engine.clear_cache()
        assert engine.get_stats([], VARIABLES["ndvi"]) is None

    def test_compute_all(self, engine, sample_store):
        all_stats = engine.compute_all(sample_store)
        assert set(all_stats) == set(VARIABLES)
        assert all(s is not None for s in all_stats.values())


class TestClassification:
    """Test cases for threshold classification."""

    @pytest.fixture
    def stats(self):
        return VariableStats(
            min=0.1,
            max=0.9,
            thresholds=(0.3, 0.4, 0.5, 0.6, 0.7),
            colors=RampCategory.GREENS.colors,
        )

    def test_boundaries_fall_in_lower_bin(self, stats):
        assert stats.bin_index(0.1) == 0
        assert stats.bin_index(0.3) == 0
        assert stats.bin_index(0.30001) == 1
        assert stats.bin_index(0.7) == 4
        assert stats.bin_index(0.71) == 5
        assert stats.bin_index(0.9) == 5

    def test_out_of_range_values(self, stats):
        assert stats.classify(-5.0) == stats.colors[0]
        assert stats.classify(50.0) == stats.colors[5]

    def test_monotonic(self, stats):
        values = [0.1 + i * 0.8 / 200 for i in range(201)]
        bins = [stats.bin_index(v) for v in values]
        assert bins == sorted(bins)
        assert bins[0] == 0 and bins[-1] == 5

    def test_monotonic_on_computed_stats(self, sample_store):
        stats = StatisticsEngine().compute_stats(sample_store, VARIABLES["lst_day"])
        values = sorted(r.lst_day for r in sample_store)
        bins = [stats.bin_index(v) for v in values]
        assert bins == sorted(bins)
        assert not any(math.isnan(t) for t in stats.thresholds)
