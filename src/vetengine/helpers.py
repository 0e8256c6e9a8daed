# src/vetengine/helpers.py
import math


def finite_or_zero(x) -> float:
    """
    float(x), or 0.0 for None, non-numeric text, NaN and infinities.
    """
    try:
        v = float(x)
    except (TypeError, ValueError):
        return 0.0
    return v if math.isfinite(v) else 0.0
