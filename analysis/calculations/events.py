"""
Event alignment utilities.
Pure functions that pin dated peak/trough events onto a benchmark's
cumulative curve for overlay plotting.
"""

from bisect import bisect_left
from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple

from analysis.calculations.date_range import parse_date
from analysis.calculations.returns import cumulative_curve
from analysis.models import (
    Event,
    EventKind,
    EventMarkers,
    MarkerPoint,
    ReferenceLine,
    ReturnSeries,
)


def _parsed_observations(dates: Sequence[Any]) -> Tuple[List[datetime], List[int]]:
    """Parse observation dates once, skipping the ones that fail."""
    parsed = []
    positions = []
    for idx, raw_date in enumerate(dates):
        obs = parse_date(raw_date)
        if obs is None:
            continue
        parsed.append(obs)
        positions.append(idx)
    return parsed, positions


def _first_on_or_after(
    parsed: List[datetime],
    positions: List[int],
    target: datetime
) -> Optional[int]:
    # parsed is ascending, so bisect gives the first obs >= target
    found = bisect_left(parsed, target)
    if found >= len(parsed):
        return None
    return positions[found]


def align_event(dates: Sequence[Any], event_date: Any) -> Optional[int]:
    """
    Find the first observation on or after an event date.

    An event on a non-trading day is attributed to the next available
    observation (forward fill).

    Args:
        dates: Observation dates in ascending order
        event_date: Date of the event

    Returns:
        Index into dates, or None when the event falls after the last
        observation or its date cannot be parsed

    Example:
        dates = ["2020-03-13", "2020-03-16", "2020-03-20"], event "2020-03-15"
        -> 1 (2020-03-16 is the first date >= the event)
    """
    target = parse_date(event_date)
    if target is None:
        return None

    parsed, positions = _parsed_observations(dates)
    return _first_on_or_after(parsed, positions, target)


def benchmark_curve(series: ReturnSeries) -> Tuple[List[str], List[float]]:
    """Dates and cumulative values of the benchmark overlay line."""
    return list(series.dates), cumulative_curve(series.returns).tolist()


def build_event_markers(benchmark: ReturnSeries, events: Sequence[Event]) -> EventMarkers:
    """
    Place events on the benchmark's cumulative curve.

    Each event with a parseable date gets a vertical reference line at its
    own date. Events that align to an observation also get a marker at
    (aligned date, cumulative value), partitioned by kind. Events after the
    last observation have no alignment target and get no marker.

    Args:
        benchmark: Benchmark return series
        events: Peak/trough events in any order

    Returns:
        EventMarkers with peaks, troughs and reference lines
    """
    curve = cumulative_curve(benchmark.returns)
    parsed, positions = _parsed_observations(benchmark.dates)

    peaks = []
    troughs = []
    reference_lines = []

    for event in events:
        target = parse_date(event.date)
        if target is None:
            continue

        reference_lines.append(ReferenceLine(kind=event.kind, date=event.date))

        idx = _first_on_or_after(parsed, positions, target)
        if idx is None:
            continue

        point = MarkerPoint(
            date=benchmark.dates[idx],
            value=float(curve[idx]),
            event_date=event.date
        )
        if event.kind == EventKind.PEAK:
            peaks.append(point)
        else:
            troughs.append(point)

    return EventMarkers(
        peaks=tuple(peaks),
        troughs=tuple(troughs),
        reference_lines=tuple(reference_lines)
    )
