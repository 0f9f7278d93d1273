"""
Variable statistics module.

Computes global extrema, "nice" map thresholds and colour ramps per variable.
"""

import logging
import math
from typing import Dict, Iterable, List, Optional, Tuple

from ..core import constants
from ..models import Record, VariableConfig, VariableStats, VARIABLES, is_present

# Mantissas of human-friendly steps, largest first
NICE_MANTISSAS = (5.0, 2.5, 2.0, 1.0)

# Decades searched below the range's own magnitude before giving up
MAX_STEP_DECADES = 40

# Candidate multiples examined per cut point before a step is considered too fine
MAX_CANDIDATES_PER_CUT = 20

# d3-style tick increment error bounds
_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def _multiple(k: int, mantissa: float, power: int) -> float:
    """k * mantissa * 10**power, rounded to the digits the step actually has."""
    digits = max(0, -power) + (1 if mantissa == 2.5 else 0)
    if power >= 0:
        raw = k * mantissa * 10 ** power
    else:
        raw = k * mantissa / 10 ** -power
    return round(raw, digits)


def _padding(value: float) -> float:
    """Half-width used to widen a range that has no room for cut points."""
    return abs(value) * 0.1 or 1.0


def interior_thresholds(
    lo: float,
    hi: float,
    count: int = constants.THRESHOLD_COUNT
) -> List[float]:
    """
    Generate `count` ascending round-number cut points strictly inside (lo, hi).

    Walks steps of 5, 2.5, 2 and 1 x 10^k from coarse to fine and keeps the
    first (largest) step with at least `count` interior multiples, taking the
    `count` most central ones. Falls back to even spacing if no nice step
    resolves the range.

    A range only a few ulps wide has fewer than `count` floats inside it. It is
    widened the same way as a single-valued range, so the cut points stay
    strictly ascending but lie outside (lo, hi).

    Args:
        lo: Lower bound of the range
        hi: Upper bound of the range (must exceed lo)
        count: Number of cut points

    Returns:
        Strictly ascending list of `count` thresholds

    Raises:
        ValueError: If hi <= lo
    """
    if not hi > lo:
        raise ValueError(f"Empty range: [{lo}, {hi}]")

    span = hi - lo
    top_power = math.floor(math.log10(span)) + 1
    resolution = math.ulp(max(abs(lo), abs(hi)))

    for power in range(top_power, top_power - MAX_STEP_DECADES, -1):
        for mantissa in NICE_MANTISSAS:
            step = mantissa * 10.0 ** power
            k_start = math.floor(lo / step)
            k_stop = math.ceil(hi / step)
            # Finer steps cannot add distinct floats past these points
            if step < resolution or k_stop - k_start > MAX_CANDIDATES_PER_CUT * count:
                return _even_thresholds(lo, hi, count)
            ticks = [
                _multiple(k, mantissa, power) for k in range(k_start, k_stop + 1)
            ]
            ticks = sorted({t for t in ticks if lo < t < hi})
            if len(ticks) >= count:
                offset = (len(ticks) - count) // 2
                return ticks[offset:offset + count]

    return _even_thresholds(lo, hi, count)


def _even_thresholds(lo: float, hi: float, count: int) -> List[float]:
    """Evenly spaced cut points, widening ranges too narrow to hold them."""
    span = hi - lo
    ticks = [lo + span * (i + 1) / (count + 1) for i in range(count)]
    if all(lo < t < hi for t in ticks) and len(set(ticks)) == count:
        return ticks

    pad = _padding(max(abs(lo), abs(hi)))
    return interior_thresholds(lo - pad, hi + pad, count)


def tick_step(lo: float, hi: float, count: int) -> float:
    """
    Nice tick spacing for roughly `count` ticks over [lo, hi].

    Same rounding as d3's tickIncrement: 1, 2, 5 or 10 x 10^k.
    """
    step = (hi - lo) / max(1, count)
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1
    return factor * 10.0 ** power


def nice_extent(
    lo: float,
    hi: float,
    count: int = constants.SEASONAL_Y_TICKS
) -> Tuple[float, float]:
    """
    Widen [lo, hi] outwards to nice tick boundaries.

    Args:
        lo: Smallest value
        hi: Largest value
        count: Approximate number of ticks

    Returns:
        Tuple of (nice_lo, nice_hi) containing the input extent
    """
    if hi < lo:
        lo, hi = hi, lo
    if hi == lo:
        return lo, hi

    prev_step = None
    for _ in range(10):
        step = tick_step(lo, hi, count)
        if step == prev_step:
            break
        lo = math.floor(lo / step) * step
        hi = math.ceil(hi / step) * step
        prev_step = step

    digits = max(0, -math.floor(math.log10(prev_step)))
    return round(lo, digits), round(hi, digits)


class StatisticsEngine:
    """Compute and cache per-variable map statistics."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize statistics engine.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self._cache: Dict[str, Optional[VariableStats]] = {}

    def compute_stats(
        self,
        records: Iterable[Record],
        variable: VariableConfig
    ) -> Optional[VariableStats]:
        """
        Compute statistics for one variable.

        Args:
            records: All records in the store
            variable: Variable to summarise

        Returns:
            VariableStats, or None when every value of the variable is missing
        """
        values = [r.value(variable.field) for r in records]
        values = [v for v in values if is_present(v)]

        if not values:
            self.logger.warning(f"No valid values for {variable.key}; no statistics")
            return None

        v_min = min(values)
        v_max = max(values)

        if v_max > v_min:
            thresholds = interior_thresholds(v_min, v_max)
        else:
            # Single distinct value: pad so the bins still exist
            pad = _padding(v_min)
            thresholds = interior_thresholds(v_min - pad, v_max + pad)
            self.logger.debug(f"{variable.key} has a single value {v_min}; padded range by {pad}")

        stats = VariableStats(
            min=v_min,
            max=v_max,
            thresholds=tuple(thresholds),
            colors=variable.ramp.colors,
        )
        self.logger.debug(
            f"{variable.key}: min={v_min:.3f}, max={v_max:.3f}, thresholds={list(stats.thresholds)}"
        )
        return stats

    def get_stats(
        self,
        records: Iterable[Record],
        variable: VariableConfig
    ) -> Optional[VariableStats]:
        """
        Get statistics for a variable, computing them on first use.

        The cache assumes the records never change after load; call
        clear_cache() if a different store is passed in.
        """
        if variable.key not in self._cache:
            self._cache[variable.key] = self.compute_stats(records, variable)
        return self._cache[variable.key]

    def compute_all(
        self,
        records: Iterable[Record]
    ) -> Dict[str, Optional[VariableStats]]:
        """
        Compute (and cache) statistics for every tracked variable.

        Returns:
            Dictionary mapping variable key to stats (None = no data)
        """
        records = list(records)
        return {key: self.get_stats(records, config) for key, config in VARIABLES.items()}

    def clear_cache(self) -> None:
        """Forget cached statistics."""
        self._cache.clear()
