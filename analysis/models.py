"""
Value types shared by the analytics engine.
Frozen dataclasses - built once from artifacts, never mutated.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


class EventKind(str, Enum):
    """Structural turning point type."""
    PEAK = "peak"
    TROUGH = "trough"


@dataclass(frozen=True)
class ReturnSeries:
    """Daily fractional returns for one factor, aligned with ISO date strings."""
    label: str
    dates: Tuple[str, ...] = ()
    returns: Tuple[float, ...] = ()

    def __len__(self) -> int:
        return len(self.returns)

    @property
    def is_empty(self) -> bool:
        return len(self.returns) == 0


@dataclass(frozen=True)
class MetricsResult:
    """Risk/return summary for one series."""
    label: str
    annualized_return: float
    annualized_volatility: float
    sharpe_ratio: Optional[float]
    max_drawdown: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'factor': self.label,
            'ann_return': self.annualized_return,
            'ann_vol': self.annualized_volatility,
            'sharpe': self.sharpe_ratio,
            'maxdd': self.max_drawdown,
        }


@dataclass(frozen=True)
class Event:
    kind: EventKind
    date: str
    return_6m: Optional[float] = None
    return_12m: Optional[float] = None


@dataclass(frozen=True)
class ForwardReturnStats:
    """Pre-aggregated forward returns for one event kind."""
    event_count: int = 0
    count_6m: int = 0
    count_12m: int = 0
    avg_6m: Optional[float] = None
    avg_12m: Optional[float] = None

    def average(self, horizon: int) -> Optional[float]:
        """Average forward return for a 6 or 12 month horizon."""
        if horizon == 6:
            return self.avg_6m
        if horizon == 12:
            return self.avg_12m
        raise ValueError(f"Unsupported horizon: {horizon} (expected 6 or 12)")


@dataclass(frozen=True)
class ForwardReturnSummary:
    label: str
    trough: ForwardReturnStats = field(default_factory=ForwardReturnStats)
    peak: ForwardReturnStats = field(default_factory=ForwardReturnStats)
    events: Tuple[Event, ...] = ()

    def stats(self, kind: EventKind) -> ForwardReturnStats:
        return self.peak if kind == EventKind.PEAK else self.trough


@dataclass(frozen=True)
class RankMatrix:
    """
    Month-by-rank grid of category labels.

    ranked_labels and ranked_values are indexed [month_index][rank], best first.
    An empty categories tuple means the universe is inferred from the labels.
    """
    months: Tuple[str, ...] = ()
    categories: Tuple[str, ...] = ()
    ranked_labels: Tuple[Tuple[str, ...], ...] = ()
    ranked_values: Tuple[Tuple[Optional[float], ...], ...] = ()


@dataclass(frozen=True)
class MarkerPoint:
    """Event plotted on the benchmark curve at its aligned observation."""
    date: str
    value: float
    event_date: str


@dataclass(frozen=True)
class ReferenceLine:
    kind: EventKind
    date: str


@dataclass(frozen=True)
class EventMarkers:
    peaks: Tuple[MarkerPoint, ...] = ()
    troughs: Tuple[MarkerPoint, ...] = ()
    reference_lines: Tuple[ReferenceLine, ...] = ()


@dataclass(frozen=True)
class RankHeatmap:
    """Integer-coded heatmap ready for a continuous heatmap renderer."""
    months: Tuple[str, ...]
    ranks: Tuple[int, ...]
    categories: Tuple[str, ...]
    z: Tuple[Tuple[int, ...], ...]
    text: Tuple[Tuple[str, ...], ...]
    colorscale: Tuple[Tuple[float, str], ...]
    zmin: int
    zmax: int
    reverse_y: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            'months': list(self.months),
            'ranks': list(self.ranks),
            'categories': list(self.categories),
            'z': [list(row) for row in self.z],
            'text': [list(row) for row in self.text],
            'colorscale': [[stop, color] for stop, color in self.colorscale],
            'zmin': self.zmin,
            'zmax': self.zmax,
            'reverse_y': self.reverse_y,
        }


@dataclass(frozen=True)
class HoldingsSnapshot:
    """Monthly constituent lists for one factor portfolio."""
    label: str
    as_of: Optional[str] = None
    months: Tuple[str, ...] = ()
    holdings: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
