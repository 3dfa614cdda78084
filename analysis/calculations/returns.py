"""
Returns calculation utilities.
Pure functions for compounding periodic returns into growth-of-1 curves
and geometric annualization.
"""

import math
import numpy as np
from typing import Sequence


def cumulative_curve(returns: Sequence[float]) -> np.ndarray:
    """
    Compound periodic returns into a cumulative growth curve.

    Formula: v_i = (1 + r_1) × (1 + r_2) × ... × (1 + r_i), with v_0 = 1 implicit

    Args:
        returns: Periodic fractional returns in chronological order

    Returns:
        Numpy array of cumulative values (same length as returns)

    Example:
        returns = [0.10, -0.10]:
        - v_1 = 1.10
        - v_2 = 1.10 × 0.90 = 0.99

        Returns of -100% or worse take the curve to zero or below; the
        curve is not clamped.
    """
    if len(returns) == 0:
        return np.array([], dtype=float)

    growth = 1.0 + np.asarray(returns, dtype=float)

    # accumulate multiplies strictly left to right
    return np.cumprod(growth)


def terminal_nav(returns: Sequence[float]) -> float:
    """
    Final value of one unit compounded through every period.

    Args:
        returns: Periodic fractional returns

    Returns:
        Terminal NAV (1.0 for an empty series)
    """
    if len(returns) == 0:
        return 1.0

    return float(cumulative_curve(returns)[-1])


def annualized_return(returns: Sequence[float], freq: int = 252) -> float:
    """
    Geometric annualized return (CAGR) of a periodic return series.

    Formula: NAV^(freq / n) - 1

    Args:
        returns: Periodic fractional returns
        freq: Periods per year (252 for daily data)

    Returns:
        Annualized return as decimal (0 for an empty series, NaN when the
        curve ends below zero and no real root exists, inf when the result
        overflows)
    """
    n = len(returns)
    if n == 0:
        return 0.0

    nav = terminal_nav(returns)

    if nav < 0:
        return math.nan

    # large NAVs overflow to inf instead of raising
    with np.errstate(over='ignore'):
        growth = np.power(nav, freq / n)

    return float(growth) - 1
