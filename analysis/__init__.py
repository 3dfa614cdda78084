"""
Analysis Engine Module

Pure calculations behind the factor dashboard:
- Date range clipping and cumulative growth curves
- Annualized return, volatility, Sharpe ratio, maximum drawdown
- Peak/trough event alignment and forward-return summaries
- Rank heatmap encoding
"""

__version__ = "0.1.0"
