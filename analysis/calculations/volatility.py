"""
Volatility calculation utilities.
Pure functions for sample standard deviation and annualized volatility.
"""

import numpy as np
import math
from typing import Sequence


def sample_std(values: Sequence[float]) -> float:
    """
    Bessel-corrected standard deviation.

    Divisor is n - 1, clamped to 1 so a single observation gives 0
    instead of NaN.

    Args:
        values: Observations

    Returns:
        Sample standard deviation (0 for fewer than two values)
    """
    n = len(values)
    if n == 0:
        return 0.0

    arr = np.asarray(values, dtype=float)
    mean = arr.sum() / n
    variance = float(((arr - mean) ** 2).sum()) / max(1, n - 1)

    return math.sqrt(variance)


def annualized_volatility(returns: Sequence[float], freq: int = 252) -> float:
    """
    Annualized volatility of periodic returns.

    Formula: σ = std(returns, ddof=1) × √freq

    Args:
        returns: Periodic fractional returns
        freq: Annualization factor (252 for daily to annual)

    Returns:
        Annualized volatility as decimal (0.25 = 25%), 0 for an empty series
    """
    if len(returns) == 0:
        return 0.0

    return sample_std(returns) * math.sqrt(freq)
