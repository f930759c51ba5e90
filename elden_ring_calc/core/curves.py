"""
Elden Ring AR Calculator - Stat Scaling Curves
===============================================
CalcCorrectGraph interpolation and the per-curve saturation memo.

Every scaling lookup in the calculator goes through a curve: five stage
boundaries, five growth values at those boundaries, and an exponent per
stage that bends the line between them.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from .config import get_curve_cache_max_level

logger = logging.getLogger(__name__)


# =============================================================================
# CURVE DEFINITION
# =============================================================================

@dataclass(frozen=True)
class CurveDefinition:
    """A CalcCorrectGraph row: 5 stage levels, 5 growth values, 4+ exponents."""
    id: int
    stage_max_val: Tuple[float, float, float, float, float]
    stage_max_grow_val: Tuple[float, float, float, float, float]
    adj_pt_max_grow_val: Tuple[float, ...]

    def __post_init__(self):
        if len(self.stage_max_val) != 5 or len(self.stage_max_grow_val) != 5:
            raise ValueError(f"Curve {self.id}: stage arrays must have 5 entries")
        if len(self.adj_pt_max_grow_val) < 4:
            raise ValueError(f"Curve {self.id}: need at least 4 adjustment exponents")

    @classmethod
    def from_dict(cls, data: Mapping) -> "CurveDefinition":
        return cls(
            id=int(data["id"]),
            stage_max_val=tuple(float(v) for v in data["stageMaxVal"]),
            stage_max_grow_val=tuple(float(v) for v in data["stageMaxGrowVal"]),
            adj_pt_max_grow_val=tuple(float(v) for v in data["adjPt_maxGrowVal"]),
        )


# =============================================================================
# INTERPOLATION
# =============================================================================

def calculate_curve_value(curve: CurveDefinition, stat_level: int) -> float:
    """
    Evaluate a curve at a stat level.

    Formula:
        segment = stage containing stat_level
        ratio   = (stat - minStat) / (maxStat - minStat)
        growth  = ratio ^ adj              if adj > 0   (ease-in)
                = 1 - (1 - ratio) ^ |adj|  if adj < 0   (ease-out)
                = 0                        if adj == 0
        value   = minGrow + (maxGrow - minGrow) × growth

    Stage boundaries return the growth value exactly; there is no
    extrapolation past the last stage.

    Args:
        curve: Curve definition
        stat_level: Integer stat level (>= 0)

    Returns:
        Raw curve value in percent units (typically 0-100, can exceed 100)
    """
    stage_max_val = curve.stage_max_val
    stage_max_grow_val = curve.stage_max_grow_val

    segment = 0
    for i in range(4):
        if stat_level > stage_max_val[i]:
            segment = i + 1
    segment = min(segment, 4)

    if segment == 0:
        min_stat, min_grow = 0.0, 0.0
        adj_pt = curve.adj_pt_max_grow_val[0]
    else:
        min_stat = stage_max_val[segment - 1]
        min_grow = stage_max_grow_val[segment - 1]
        adj_pt = curve.adj_pt_max_grow_val[segment - 1]
    max_stat = stage_max_val[segment]
    max_grow = stage_max_grow_val[segment]

    if stat_level <= min_stat:
        return min_grow
    if stat_level >= max_stat:
        return max_grow

    ratio = (stat_level - min_stat) / (max_stat - min_stat)

    if adj_pt > 0:
        growth = ratio ** adj_pt
    elif adj_pt < 0:
        growth = 1 - (1 - ratio) ** abs(adj_pt)
    else:
        # Flat until the next boundary, then a jump
        growth = 0.0

    return min_grow + (max_grow - min_grow) * growth


# =============================================================================
# CURVE TABLE (definitions + memo)
# =============================================================================

class CurveTable:
    """
    Curve definitions plus a lazily filled saturation memo.

    The memo is a dense list per curve indexed by stat level. Entries are
    written once and never change for a given (curve_id, level), so sharing a
    table between callers can only duplicate work, never return a stale value.

    Args:
        curves: Curve definitions keyed by id
        max_cached_level: Highest level stored in the memo. Defaults to
            config.get_curve_cache_max_level(). Levels above it are computed
            on every call.
    """

    def __init__(self, curves: Mapping[int, CurveDefinition],
                 max_cached_level: Optional[int] = None):
        self._curves: Dict[int, CurveDefinition] = dict(curves)
        if max_cached_level is None:
            max_cached_level = get_curve_cache_max_level()
        self.max_cached_level = max_cached_level
        self._memo: Dict[int, List[Optional[float]]] = {}
        self._missing_reported: Set[int] = set()

    @classmethod
    def from_dict(cls, data: Mapping, max_cached_level: Optional[int] = None) -> "CurveTable":
        """Build from the bundle's {curveId: {stageMaxVal, ...}} mapping."""
        curves = {}
        for key, raw in data.items():
            curve = CurveDefinition.from_dict({"id": key, **raw})
            curves[curve.id] = curve
        return cls(curves, max_cached_level=max_cached_level)

    def __contains__(self, curve_id: int) -> bool:
        return curve_id in self._curves

    def __len__(self) -> int:
        return len(self._curves)

    def get(self, curve_id: int) -> Optional[CurveDefinition]:
        return self._curves.get(curve_id)

    def value(self, curve_id: int, stat_level: int) -> float:
        """Raw curve value (percent units); 0 for an unknown curve."""
        return self.saturation(curve_id, stat_level) * 100

    def saturation(self, curve_id: int, stat_level: int) -> float:
        """
        Curve value divided by 100.

        Not clamped: authored curves can exceed 100%. An unknown curve id
        degrades this one term to 0 instead of failing the calculation.
        """
        cacheable = 0 <= stat_level <= self.max_cached_level
        levels = self._memo.get(curve_id)
        if cacheable and levels is not None:
            cached = levels[stat_level]
            if cached is not None:
                return cached

        curve = self._curves.get(curve_id)
        if curve is None:
            if curve_id not in self._missing_reported:
                self._missing_reported.add(curve_id)
                logger.warning("Unknown curve id %s; scaling term treated as 0", curve_id)
            return 0.0

        result = calculate_curve_value(curve, stat_level) / 100

        if cacheable:
            if levels is None:
                levels = [None] * (self.max_cached_level + 1)
                self._memo[curve_id] = levels
            levels[stat_level] = result
        return result

    def cached_levels(self, curve_id: int) -> int:
        """Number of memoized levels for a curve."""
        levels = self._memo.get(curve_id)
        if levels is None:
            return 0
        return sum(1 for v in levels if v is not None)

    def clear(self) -> None:
        """Drop the memo (definitions are kept)."""
        self._memo.clear()

    def curve_series(self, curve_id: int, levels: Iterable[int]) -> List[Tuple[int, float]]:
        """(level, raw value) pairs for charting a curve."""
        return [(level, self.value(curve_id, level)) for level in levels]


def build_curve_table(definitions: Sequence[CurveDefinition],
                      max_cached_level: Optional[int] = None) -> CurveTable:
    """Convenience constructor from a list of definitions."""
    return CurveTable({c.id: c for c in definitions}, max_cached_level=max_cached_level)
