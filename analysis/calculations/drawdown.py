"""
Drawdown calculation utilities.
Pure functions for peak-to-trough analysis of a compounded return series.
"""

import numpy as np
from typing import Sequence

from analysis.calculations.returns import cumulative_curve


def drawdown_series(returns: Sequence[float]) -> np.ndarray:
    """
    Drawdown at every step of the cumulative curve.

    The curve restarts from 1.0 and the running peak starts at 1.0, so a
    loss on the very first period already counts as a drawdown.

    Formula: dd_i = NAV_i / max(1, NAV_1..NAV_i) - 1

    Args:
        returns: Periodic fractional returns in chronological order

    Returns:
        Numpy array of drawdowns (all <= 0)
    """
    if len(returns) == 0:
        return np.array([], dtype=float)

    nav = cumulative_curve(returns)

    # Track running maximum (peak), seeded with the initial unit of capital
    running_max = np.maximum.accumulate(np.maximum(nav, 1.0))

    return (nav / running_max) - 1


def max_drawdown(returns: Sequence[float]) -> float:
    """
    Largest peak-to-trough decline of the compounded curve.

    Args:
        returns: Periodic fractional returns in chronological order

    Returns:
        Most negative drawdown as decimal (0 for an empty or never-falling series)
    """
    if len(returns) == 0:
        return 0.0

    worst = float(np.min(drawdown_series(returns)))

    return min(worst, 0.0)
