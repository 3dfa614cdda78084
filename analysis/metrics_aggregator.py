"""
Metrics aggregator - composes the risk/return calculations into MetricsResult rows.
Pure functions over return series; no IO.
"""

import pandas as pd
from typing import List, Sequence

from analysis.calculations.drawdown import max_drawdown
from analysis.calculations.returns import annualized_return
from analysis.calculations.sharpe import sharpe_ratio
from analysis.calculations.volatility import annualized_volatility
from analysis.models import MetricsResult, ReturnSeries

METRICS_COLUMNS = ['factor', 'ann_return', 'ann_vol', 'sharpe', 'maxdd']


def compute_metrics(
    label: str,
    returns: Sequence[float],
    risk_free_rate: float = 0.0,
    freq: int = 252
) -> MetricsResult:
    """
    Compute annualized return, volatility, Sharpe ratio and max drawdown.

    An empty series still produces a row (0, 0, None, 0) so the table
    can show a factor with no data in the selected range.

    Args:
        label: Factor label for the row
        returns: Daily fractional returns
        risk_free_rate: Annual risk-free rate as decimal
        freq: Periods per year

    Returns:
        MetricsResult for the series
    """
    if len(returns) == 0:
        return MetricsResult(
            label=label,
            annualized_return=0.0,
            annualized_volatility=0.0,
            sharpe_ratio=None,
            max_drawdown=0.0
        )

    return MetricsResult(
        label=label,
        annualized_return=annualized_return(returns, freq=freq),
        annualized_volatility=annualized_volatility(returns, freq=freq),
        sharpe_ratio=sharpe_ratio(returns, risk_free_rate=risk_free_rate, freq=freq),
        max_drawdown=max_drawdown(returns)
    )


def compute_metrics_table(
    series_list: Sequence[ReturnSeries],
    risk_free_rate: float = 0.0,
    freq: int = 252
) -> List[MetricsResult]:
    """One MetricsResult per series, in input order."""
    return [
        compute_metrics(s.label, s.returns, risk_free_rate=risk_free_rate, freq=freq)
        for s in series_list
    ]


def metrics_frame(results: Sequence[MetricsResult]) -> pd.DataFrame:
    """
    Tabulate metrics rows.

    Args:
        results: Metrics rows

    Returns:
        DataFrame with columns factor, ann_return, ann_vol, sharpe, maxdd
    """
    if not results:
        return pd.DataFrame(columns=METRICS_COLUMNS)

    return pd.DataFrame([r.to_dict() for r in results], columns=METRICS_COLUMNS)
