"""Runtime configuration for the calculator.

Tunables with sensible defaults, each overridable through an environment
variable. Game constants do not belong here; see constants.py.
"""
import os
from typing import Optional


def _get_int_env(name: str, default: int, minval: Optional[int] = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if minval is not None and value < minval:
        return default
    return value


# ---------------- Curve memo ----------------
# Highest stat level kept in the per-curve memo. Effective stats top out at
# 148, so the default leaves a little headroom.
DEFAULT_CURVE_CACHE_MAX_LEVEL = 150

ENV_CURVE_CACHE_LEVELS = "ER_CALC_CURVE_CACHE_LEVELS"


def get_curve_cache_max_level() -> int:
    """Return the highest stat level the curve memo stores.

    Order of precedence:
    1. ER_CALC_CURVE_CACHE_LEVELS (if a valid integer >= 0)
    2. DEFAULT_CURVE_CACHE_MAX_LEVEL
    """
    return _get_int_env(ENV_CURVE_CACHE_LEVELS, DEFAULT_CURVE_CACHE_MAX_LEVEL, minval=0)
