"""
Core validators for canonical dashboard values.
Pure functions - no IO, network, or side effects.
"""

from typing import List

from analysis.calculations.date_range import parse_date
from analysis.models import RankMatrix, ReturnSeries


class ValidationError(ValueError):
    """Raised when data validation fails."""
    pass


def validate_return_series(series: ReturnSeries) -> None:
    """
    Validate a canonical return series.

    Args:
        series: ReturnSeries to check

    Raises:
        ValidationError: If lengths differ or parseable dates are not strictly ascending
    """
    if len(series.dates) != len(series.returns):
        raise ValidationError(
            f"dates and returns must have same length, got {len(series.dates)} and {len(series.returns)}"
        )

    previous = None
    for raw_date in series.dates:
        current = parse_date(raw_date)
        if current is None:
            continue
        if previous is not None and current <= previous:
            raise ValidationError(f"dates must be strictly ascending, {raw_date} is out of order")
        previous = current


def rank_matrix_issues(matrix: RankMatrix) -> List[str]:
    """
    Describe every invariant violation in a rank matrix.

    Checks one label row and one value row per month, equal row lengths,
    and (when categories are declared) that every label belongs to them.

    Returns:
        List of human-readable issues (empty when valid)
    """
    issues = []

    if len(matrix.ranked_labels) != len(matrix.months):
        issues.append(
            f"{len(matrix.ranked_labels)} label rows for {len(matrix.months)} months"
        )
    if len(matrix.ranked_values) != len(matrix.months):
        issues.append(
            f"{len(matrix.ranked_values)} value rows for {len(matrix.months)} months"
        )

    universe = set(matrix.categories)
    for idx, month in enumerate(matrix.months):
        labels = matrix.ranked_labels[idx] if idx < len(matrix.ranked_labels) else ()
        values = matrix.ranked_values[idx] if idx < len(matrix.ranked_values) else ()
        if len(labels) != len(values):
            issues.append(f"{month}: {len(labels)} labels vs {len(values)} values")
        if universe:
            unknown = sorted(set(labels) - universe)
            if unknown:
                issues.append(f"{month}: labels outside categories {unknown}")

    return issues


def validate_rank_matrix(matrix: RankMatrix) -> None:
    """
    Validate a canonical rank matrix.

    Raises:
        ValidationError: If any invariant is violated
    """
    issues = rank_matrix_issues(matrix)
    if issues:
        raise ValidationError(f"Invalid rank matrix: {'; '.join(issues)}")
