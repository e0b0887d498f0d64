# qslp/generic.py
# Small numeric helpers shared by the engine modules.
import math


def round_whole(x: float) -> int:
    """
    Round to the nearest whole currency unit, halves away from zero.
    (Python's round() would send 0.5 to 0 and 2.5 to 2.)
    """
    if x < 0:
        return -int(math.floor(-x + 0.5))
    return int(math.floor(x + 0.5))


def non_negative(x) -> float:
    return max(0.0, float(x or 0.0))
