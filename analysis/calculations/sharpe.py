"""
Sharpe ratio utilities.
Pure functions for excess returns and the annualized Sharpe ratio.
"""

import numpy as np
import math
from typing import Optional, Sequence

from analysis.calculations.volatility import sample_std


def excess_returns(
    returns: Sequence[float],
    risk_free_rate: float = 0.0,
    freq: int = 252
) -> np.ndarray:
    """
    Per-period returns in excess of the de-annualized risk-free rate.

    Formula: r_i - rf / freq

    Args:
        returns: Periodic fractional returns
        risk_free_rate: Annual risk-free rate as decimal
        freq: Periods per year

    Returns:
        Numpy array of excess returns
    """
    return np.asarray(returns, dtype=float) - risk_free_rate / freq


def sharpe_ratio(
    returns: Sequence[float],
    risk_free_rate: float = 0.0,
    freq: int = 252
) -> Optional[float]:
    """
    Annualized Sharpe ratio.

    Formula: (mean(excess) × freq) / (std(excess, ddof=1) × √freq)

    Args:
        returns: Periodic fractional returns
        risk_free_rate: Annual risk-free rate as decimal
        freq: Periods per year

    Returns:
        Sharpe ratio, or None when the annualized excess volatility is
        exactly zero (flat or single-observation series) or there is no data
    """
    n = len(returns)
    if n == 0:
        return None

    excess = excess_returns(returns, risk_free_rate, freq)
    excess_vol = sample_std(excess) * math.sqrt(freq)

    if excess_vol == 0:
        return None

    excess_mean = float(excess.sum()) / n

    return (excess_mean * freq) / excess_vol
