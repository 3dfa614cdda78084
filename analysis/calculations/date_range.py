"""
Date range utilities.
Pure functions for parsing observation dates and clipping a return series
to a closed calendar interval.
"""

from datetime import date, datetime, timezone
from typing import Any, Optional

from dateutil import parser as date_parser

from analysis.models import ReturnSeries

# Supplies the date parts a partial string leaves out
PARSE_DEFAULT = datetime(1900, 1, 1)


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse a date-like value into a naive datetime.

    Accepts date/datetime objects and any string dateutil understands.
    Missing parts of a partial date ("2020", "2020-06") default to the
    first month and day rather than the current date.
    Timezone-aware values are converted to UTC so every result compares
    with every other.

    Args:
        value: Date string, date or datetime

    Returns:
        Naive datetime, or None if the value is not a valid calendar date
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        try:
            parsed = date_parser.parse(value.strip(), default=PARSE_DEFAULT)
        except (ValueError, OverflowError):
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)

    return parsed


def filter_by_date_range(series: ReturnSeries, start: Any, end: Any) -> ReturnSeries:
    """
    Keep only observations dated within [start, end], inclusive on both ends.

    Observations whose date cannot be parsed are dropped. If either bound
    cannot be parsed the series is returned unchanged, so a malformed range
    still renders the full history instead of nothing.

    Args:
        series: Return series to clip
        start: Inclusive lower bound
        end: Inclusive upper bound

    Returns:
        New ReturnSeries (or the original one when a bound is invalid)
    """
    start_dt = parse_date(start)
    end_dt = parse_date(end)
    if start_dt is None or end_dt is None:
        return series

    kept_dates = []
    kept_returns = []
    for raw_date, ret in zip(series.dates, series.returns):
        obs = parse_date(raw_date)
        if obs is None:
            continue
        if start_dt <= obs <= end_dt:
            kept_dates.append(raw_date)
            kept_returns.append(ret)

    return ReturnSeries(
        label=series.label,
        dates=tuple(kept_dates),
        returns=tuple(kept_returns)
    )
