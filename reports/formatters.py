"""
Display formatters for dashboard tables, hover text and CLI output.
Deterministic string formatting for percentages, ratios and date windows.
"""

import math
import numbers
from typing import Any, Optional

NOT_AVAILABLE = "-"


class FormatterError(Exception):
    """Raised when formatter input validation fails."""
    pass


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return math.isnan(value)
    return False


def format_percentage(
    value: Optional[float],
    decimal_places: int = 2,
    missing: str = NOT_AVAILABLE
) -> str:
    """
    Format decimal as percentage with specified precision.

    Args:
        value: Decimal value (0.0845 = 8.45%)
        decimal_places: Number of decimal places (default: 2)
        missing: Text for None/NaN values

    Returns:
        Formatted percentage string (e.g., "8.45%")

    Raises:
        FormatterError: If value is not numeric
    """
    if _is_missing(value):
        return missing

    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise FormatterError(f"Percentage value must be numeric, got {type(value)}")

    pct = value * 100

    return f"{pct:.{decimal_places}f}%"


def format_ratio(
    value: Optional[float],
    decimal_places: int = 2,
    missing: str = NOT_AVAILABLE
) -> str:
    """
    Format a plain ratio such as a Sharpe ratio.

    Args:
        value: Ratio value
        decimal_places: Number of decimal places (default: 2)
        missing: Text for None/NaN values

    Returns:
        Formatted ratio string (e.g., "1.23")
    """
    if _is_missing(value):
        return missing

    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise FormatterError(f"Ratio value must be numeric, got {type(value)}")

    return f"{value:.{decimal_places}f}"


def format_horizon_label(kind: str, horizon: int) -> str:
    """
    Format a forward-return series label.

    Args:
        kind: "peak" or "trough"
        horizon: Months after the event

    Returns:
        Label such as "Trough +6M"
    """
    if not isinstance(horizon, int) or horizon <= 0:
        raise FormatterError(f"Horizon must be positive integer, got {horizon}")

    return f"{kind.capitalize()} +{horizon}M"
