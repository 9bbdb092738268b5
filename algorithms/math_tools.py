import math
from typing import Iterable, Optional
import numpy as np


class MathTools:
    """Provides essential mathematical utilities for workout calculations."""

    EPLEY_DIVISOR: float = 30.0

    @staticmethod
    def clamp(value: float, min_value: float, max_value: float) -> float:
        """Bound ``value`` to ``min_value``..``max_value``, both ends included."""
        if min_value > max_value:
            raise ValueError("min_value must not exceed max_value")
        return max(min_value, min(value, max_value))

    @classmethod
    def epley_1rm(cls, weight: float, reps: int) -> float:
        """Return the estimated one-rep max using the Epley formula."""
        if reps < 0:
            raise ValueError("reps must be non-negative")
        if reps == 0:
            return 0.0
        if reps == 1:
            return float(weight)
        return weight * (1 + reps / cls.EPLEY_DIVISOR)

    @staticmethod
    def volume(sets: list[tuple[int, float]]) -> float:
        """Tonnage of ``(reps, weight)`` pairs."""
        vol = 0.0
        for reps, weight in sets:
            vol += reps * weight
        return vol

    @staticmethod
    def round_to_nearest(value: float, increment: float) -> float:
        """Round ``value`` half-up to the nearest multiple of ``increment``."""
        if increment <= 0:
            raise ValueError("increment must be positive")
        return math.floor(value / increment + 0.5) * increment

    @staticmethod
    def mean(values: Iterable[float]) -> Optional[float]:
        """Arithmetic mean, or ``None`` for an empty sequence."""
        data = [float(v) for v in values]
        if not data:
            return None
        return float(np.mean(data))

    @staticmethod
    def percent_change(current: float, previous: float) -> float:
        """Relative change from ``previous`` to ``current`` in percent."""
        if previous == 0:
            raise ValueError("previous must not be zero")
        return (current - previous) / previous * 100.0
