"""
Tests for forward-return aggregation utilities.
Pre-built summaries shaped for bar charts and tables, plus re-aggregation.
"""

import math
import pytest

from analysis.calculations.forward_returns import (
    safe_number,
    horizon_averages,
    summary_rows,
    event_pool,
    summarize_event_returns
)
from analysis.models import Event, EventKind, ForwardReturnStats, ForwardReturnSummary


@pytest.fixture
def summaries():
    events = (
        Event(kind=EventKind.TROUGH, date='2009-03-09', return_6m=0.40, return_12m=0.65),
        Event(kind=EventKind.PEAK, date='2007-10-09', return_6m=-0.12, return_12m=None),
    )
    return {
        'Top300': ForwardReturnSummary(
            label='Top300',
            trough=ForwardReturnStats(event_count=4, count_6m=4, count_12m=3, avg_6m=0.12, avg_12m=0.21),
            peak=ForwardReturnStats(event_count=3, count_6m=3, count_12m=2, avg_6m=-0.05, avg_12m=None),
            events=events
        ),
        'PE_low': ForwardReturnSummary(
            label='PE_low',
            trough=ForwardReturnStats(event_count=4, avg_6m=float('nan'), avg_12m=0.30),
            peak=ForwardReturnStats(event_count=3, avg_6m=-0.02, avg_12m=0.01)
        ),
    }


class TestSafeNumber:
    """Tests for safe_number function."""

    def test_safe_number_values(self):
        assert safe_number(0.5) == 0.5
        assert safe_number(3) == 3.0

    def test_safe_number_missing(self):
        assert safe_number(None) is None
        assert safe_number(float('nan')) is None
        assert safe_number('0.5') is None
        assert safe_number(True) is None


class TestHorizonAverages:
    """Tests for horizon_averages function."""

    def test_horizon_six_months(self, summaries):
        result = horizon_averages(summaries, ['Top300', 'PE_low'], horizon=6)

        assert result['horizon'] == 6
        assert result['x'] == ['Top300', 'PE_low']
        assert result['trough'] == [0.12, None]  # NaN becomes None
        assert result['peak'] == [-0.05, -0.02]

    def test_horizon_twelve_months(self, summaries):
        result = horizon_averages(summaries, ['Top300', 'PE_low'], horizon=12)

        assert result['trough'] == [0.21, 0.30]
        assert result['peak'] == [None, 0.01]

    def test_missing_factor_gives_none(self, summaries):
        result = horizon_averages(summaries, ['Momentum_01'], horizon=6)

        assert result['trough'] == [None]
        assert result['peak'] == [None]

    def test_invalid_horizon(self, summaries):
        with pytest.raises(ValueError, match="Unsupported horizon"):
            horizon_averages(summaries, ['Top300'], horizon=3)


class TestSummaryRows:
    """Tests for summary_rows function."""

    def test_summary_rows(self, summaries):
        rows = summary_rows(summaries, ['Top300', 'Low_beta'])

        assert rows[0] == {
            'factor': 'Top300',
            'trough_6m': 0.12,
            'trough_12m': 0.21,
            'peak_6m': -0.05,
            'peak_12m': None,
            'trough_events': 4,
            'peak_events': 3,
        }
        assert rows[1]['factor'] == 'Low_beta'
        assert rows[1]['trough_6m'] is None
        assert rows[1]['peak_events'] == 0


class TestEventPool:
    """Tests for event_pool function."""

    def test_event_pool_first_with_events(self, summaries):
        events = event_pool(summaries, ['PE_low', 'Top300'])

        assert [e.date for e in events] == ['2009-03-09', '2007-10-09']

    def test_event_pool_default_order(self, summaries):
        assert len(event_pool(summaries)) == 2

    def test_event_pool_empty(self):
        assert event_pool({}) == []


class TestSummarizeEventReturns:
    """Tests for summarize_event_returns function."""

    def test_summarize_event_returns(self):
        events = [
            Event(kind=EventKind.TROUGH, date='2002-10-09', return_6m=0.20, return_12m=0.30),
            Event(kind=EventKind.TROUGH, date='2009-03-09', return_6m=0.40, return_12m=None),
            Event(kind=EventKind.PEAK, date='2007-10-09', return_6m=-0.10, return_12m=-0.30),
            Event(kind=EventKind.PEAK, date='2024-07-11', return_6m=None, return_12m=None),
        ]

        summary = summarize_event_returns('Top300', events)

        assert summary.label == 'Top300'
        assert summary.trough.event_count == 2
        assert summary.trough.count_6m == 2
        assert summary.trough.count_12m == 1
        assert summary.trough.avg_6m == pytest.approx(0.30)
        assert summary.trough.avg_12m == pytest.approx(0.30)

        assert summary.peak.event_count == 2
        assert summary.peak.count_6m == 1
        assert summary.peak.avg_6m == pytest.approx(-0.10)
        assert summary.peak.avg_12m == pytest.approx(-0.30)
        assert len(summary.events) == 4

    def test_summarize_no_events(self):
        summary = summarize_event_returns('Top300', [])

        assert summary.trough.event_count == 0
        assert summary.trough.avg_6m is None
        assert summary.peak.avg_12m is None

    def test_summarize_ignores_nan(self):
        events = [Event(kind=EventKind.PEAK, date='2020-02-19', return_6m=math.nan)]

        summary = summarize_event_returns('Top300', events)

        assert summary.peak.count_6m == 0
        assert summary.peak.avg_6m is None
