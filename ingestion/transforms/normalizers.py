"""
Normalizers for transforming dashboard JSON artifacts to canonical value types.
Pure functions - no IO, network, or side effects.
Minimal normalization - missing fields default, malformed entries are dropped.
"""

import logging
import math
import numbers
from typing import Any, Dict, List, Mapping, Optional, Tuple

from analysis.models import (
    Event,
    EventKind,
    ForwardReturnStats,
    ForwardReturnSummary,
    HoldingsSnapshot,
    RankMatrix,
    ReturnSeries,
)

logger = logging.getLogger(__name__)


def _as_dict(raw: Any) -> Dict[str, Any]:
    return raw if isinstance(raw, dict) else {}


def _as_list(raw: Any) -> List[Any]:
    return list(raw) if isinstance(raw, (list, tuple)) else []


def _optional_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        return None if math.isnan(value) else float(value)
    return None


def _int_or_zero(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return int(value)


def _pick_label(raw: Dict[str, Any], fallback_label: str) -> str:
    # 'factor' is the preferred key, 'name' the older one
    for key in ('factor', 'name'):
        value = raw.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return fallback_label


def normalize_return_series(raw: Any, fallback_label: str) -> ReturnSeries:
    """
    Transform a returns artifact to a ReturnSeries.

    Minimal normalization:
    - Label from 'factor', then 'name', then the caller's identifier
    - Missing 'dates'/'ret' arrays default to empty
    - Length mismatch truncates to the shorter array
    - Observations with a non-numeric return or non-string date are dropped

    Args:
        raw: Parsed JSON artifact ({factor?, name?, dates, ret})
        fallback_label: Identifier used when the artifact has no label

    Returns:
        ReturnSeries (possibly empty)
    """
    data = _as_dict(raw)
    label = _pick_label(data, fallback_label)
    dates = _as_list(data.get('dates'))
    rets = _as_list(data.get('ret'))

    if len(dates) != len(rets):
        logger.warning(
            f"Returns artifact {label}: {len(dates)} dates vs {len(rets)} returns, "
            f"truncating to {min(len(dates), len(rets))}"
        )

    kept_dates = []
    kept_returns = []
    dropped = 0
    for raw_date, raw_ret in zip(dates, rets):
        ret = _optional_float(raw_ret)
        if not isinstance(raw_date, str) or ret is None:
            dropped += 1
            continue
        kept_dates.append(raw_date)
        kept_returns.append(ret)

    if dropped:
        logger.warning(f"Returns artifact {label}: dropped {dropped} malformed observations")

    return ReturnSeries(label=label, dates=tuple(kept_dates), returns=tuple(kept_returns))


def _normalize_stats(raw: Any) -> ForwardReturnStats:
    data = _as_dict(raw)
    return ForwardReturnStats(
        event_count=_int_or_zero(data.get('n_events')),
        count_6m=_int_or_zero(data.get('n_6m')),
        count_12m=_int_or_zero(data.get('n_12m')),
        avg_6m=_optional_float(data.get('avg_6m')),
        avg_12m=_optional_float(data.get('avg_12m'))
    )


def normalize_event(raw: Any) -> Optional[Event]:
    """
    Transform one event entry; None if its type or date is unusable.

    Args:
        raw: {type: "peak"|"trough", date, r_6m, r_12m}

    Returns:
        Event or None
    """
    data = _as_dict(raw)
    date_str = data.get('date')
    if not isinstance(date_str, str) or not date_str:
        return None

    try:
        kind = EventKind(data.get('type'))
    except ValueError:
        return None

    return Event(
        kind=kind,
        date=date_str,
        return_6m=_optional_float(data.get('r_6m')),
        return_12m=_optional_float(data.get('r_12m'))
    )


def normalize_global_wave(raw: Any, fallback_label: str) -> ForwardReturnSummary:
    """
    Transform a global-wave artifact to a ForwardReturnSummary.

    Args:
        raw: {factor, summary: {trough, peak}, events?}
        fallback_label: Identifier used when the artifact has no label

    Returns:
        ForwardReturnSummary; missing sections become empty stats
    """
    data = _as_dict(raw)
    summary = _as_dict(data.get('summary'))

    events = []
    skipped = 0
    for raw_event in _as_list(data.get('events')):
        event = normalize_event(raw_event)
        if event is None:
            skipped += 1
            continue
        events.append(event)

    label = _pick_label(data, fallback_label)
    if skipped:
        logger.warning(f"Global wave artifact {label}: skipped {skipped} unusable events")

    return ForwardReturnSummary(
        label=label,
        trough=_normalize_stats(summary.get('trough')),
        peak=_normalize_stats(summary.get('peak')),
        events=tuple(events)
    )


def _label_row(raw: Any) -> Tuple[str, ...]:
    return tuple(v if isinstance(v, str) else "" for v in _as_list(raw))


def _value_row(raw: Any) -> Tuple[Optional[float], ...]:
    return tuple(_optional_float(v) for v in _as_list(raw))


def normalize_rank_matrix(raw: Any) -> RankMatrix:
    """
    Transform a heatmap artifact to a RankMatrix.

    Args:
        raw: {months, factors?, ranked_factors, ranked_returns}

    Returns:
        RankMatrix; categories empty when the artifact does not declare them
    """
    data = _as_dict(raw)
    months = tuple(str(m) for m in _as_list(data.get('months')))
    categories = tuple(c for c in _as_list(data.get('factors')) if isinstance(c, str))

    return RankMatrix(
        months=months,
        categories=categories,
        ranked_labels=tuple(_label_row(row) for row in _as_list(data.get('ranked_factors'))),
        ranked_values=tuple(_value_row(row) for row in _as_list(data.get('ranked_returns')))
    )


def normalize_manifest(raw: Any) -> List[str]:
    """
    Factor names from a manifest artifact.

    Keeps non-blank strings only, sorted alphabetically.
    """
    names = [
        name for name in _as_list(_as_dict(raw).get('factors'))
        if isinstance(name, str) and name.strip()
    ]
    return sorted(names)


def normalize_holdings(raw: Any, fallback_label: str) -> HoldingsSnapshot:
    """
    Transform a holdings artifact to a HoldingsSnapshot.

    Args:
        raw: {factor, asof, months, holdings: {month: [ticker, ...]}}
        fallback_label: Identifier used when the artifact has no label

    Returns:
        HoldingsSnapshot
    """
    data = _as_dict(raw)
    as_of = data.get('asof')
    holdings: Mapping[str, Any] = _as_dict(data.get('holdings'))

    return HoldingsSnapshot(
        label=_pick_label(data, fallback_label),
        as_of=as_of if isinstance(as_of, str) else None,
        months=tuple(str(m) for m in _as_list(data.get('months'))),
        holdings={
            str(month): tuple(str(t) for t in _as_list(tickers))
            for month, tickers in holdings.items()
        }
    )


def holdings_for_month(snapshot: HoldingsSnapshot, month: Optional[str] = None) -> Tuple[str, ...]:
    """
    Constituents for a month, defaulting to the latest month listed.

    Returns an empty tuple when the month is unknown.
    """
    if month is None:
        if not snapshot.months:
            return ()
        month = snapshot.months[-1]
    return tuple(snapshot.holdings.get(month, ()))
