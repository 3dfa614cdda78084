"""
Forward-return aggregation utilities.
Reads the pre-built global-wave summaries (average return in the 6 and 12
months after each peak/trough) and shapes them for bar charts and tables.
Forward windows themselves are computed upstream, not here.
"""

import math
import numbers
from typing import Any, Dict, List, Mapping, Optional, Sequence

from analysis.models import Event, EventKind, ForwardReturnStats, ForwardReturnSummary

HORIZONS = (6, 12)


def safe_number(value: Any) -> Optional[float]:
    """Return value as float, or None for missing, non-numeric or NaN."""
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, numbers.Real):
        return None
    if math.isnan(value):
        return None
    return float(value)


def _check_horizon(horizon: int) -> None:
    if horizon not in HORIZONS:
        raise ValueError(f"Unsupported horizon: {horizon} (expected one of {HORIZONS})")


def horizon_averages(
    summaries: Mapping[str, ForwardReturnSummary],
    labels: Sequence[str],
    horizon: int = 6
) -> Dict[str, Any]:
    """
    Grouped-bar payload of average forward returns per factor.

    Args:
        summaries: Global-wave summaries keyed by factor label
        labels: Factors to include, in display order
        horizon: 6 or 12 months

    Returns:
        Dictionary with x labels and trough/peak averages (None where the
        factor has no summary or the average is missing)

    Raises:
        ValueError: If horizon is not 6 or 12
    """
    _check_horizon(horizon)

    trough = []
    peak = []
    for label in labels:
        summary = summaries.get(label)
        if summary is None:
            trough.append(None)
            peak.append(None)
            continue
        trough.append(safe_number(summary.trough.average(horizon)))
        peak.append(safe_number(summary.peak.average(horizon)))

    return {
        'horizon': horizon,
        'x': list(labels),
        'trough': trough,
        'peak': peak,
    }


def summary_rows(
    summaries: Mapping[str, ForwardReturnSummary],
    labels: Sequence[str]
) -> List[Dict[str, Any]]:
    """
    One summary-table row per factor.

    Factors without a loaded summary still get a row with empty values.
    """
    rows = []
    for label in labels:
        summary = summaries.get(label)
        trough = summary.trough if summary else ForwardReturnStats()
        peak = summary.peak if summary else ForwardReturnStats()
        rows.append({
            'factor': label,
            'trough_6m': safe_number(trough.avg_6m),
            'trough_12m': safe_number(trough.avg_12m),
            'peak_6m': safe_number(peak.avg_6m),
            'peak_12m': safe_number(peak.avg_12m),
            'trough_events': trough.event_count,
            'peak_events': peak.event_count,
        })
    return rows


def event_pool(
    summaries: Mapping[str, ForwardReturnSummary],
    labels: Optional[Sequence[str]] = None
) -> List[Event]:
    """
    Events to overlay on the benchmark chart.

    Every summary is built from the same global wave, so the event list of
    the first summary that has any is used.

    Args:
        summaries: Global-wave summaries keyed by factor label
        labels: Lookup order (defaults to the mapping's order)

    Returns:
        List of events (empty if no summary carries events)
    """
    order = list(labels) if labels is not None else list(summaries.keys())
    for label in order:
        summary = summaries.get(label)
        if summary is not None and summary.events:
            return list(summary.events)
    return []


def _mean(values: List[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def summarize_event_returns(label: str, events: Sequence[Event]) -> ForwardReturnSummary:
    """
    Re-aggregate per-event forward returns into a summary.

    Averages only the non-missing r6m/r12m values of each kind, mirroring the
    counts the upstream summary reports (n_events, n_6m, n_12m). Useful to
    cross-check a pre-built summary against its own event list.

    Args:
        label: Factor label
        events: Events carrying their own 6m/12m forward returns

    Returns:
        ForwardReturnSummary built from the events
    """
    by_kind = {}
    for kind in (EventKind.TROUGH, EventKind.PEAK):
        kind_events = [e for e in events if e.kind == kind]
        r6 = [v for v in (safe_number(e.return_6m) for e in kind_events) if v is not None]
        r12 = [v for v in (safe_number(e.return_12m) for e in kind_events) if v is not None]
        by_kind[kind] = ForwardReturnStats(
            event_count=len(kind_events),
            count_6m=len(r6),
            count_12m=len(r12),
            avg_6m=_mean(r6),
            avg_12m=_mean(r12)
        )

    return ForwardReturnSummary(
        label=label,
        trough=by_kind[EventKind.TROUGH],
        peak=by_kind[EventKind.PEAK],
        events=tuple(events)
    )
