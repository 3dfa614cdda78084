"""
Orchestrated dashboard job - JSON artifacts to a chart-ready dashboard payload.
Reads artifacts, calls pure functions, persists the payload atomically.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from analysis.calculations.date_range import filter_by_date_range
from analysis.calculations.events import benchmark_curve, build_event_markers
from analysis.calculations.forward_returns import event_pool, horizon_averages, summary_rows
from analysis.calculations.heatmap import encode_rank_heatmap
from analysis.calculations.returns import cumulative_curve
from analysis.dashboard_config import DashboardConfig, resolve_selection
from analysis.metrics_aggregator import compute_metrics_table
from analysis.models import (
    EventKind,
    ForwardReturnSummary,
    RankMatrix,
    ReturnSeries,
)
from ingestion.artifact_reader import (
    ArtifactError,
    artifact_id,
    read_global_wave,
    read_manifest,
    read_rank_matrix,
    read_return_series,
)
from ingestion.transforms.validators import (
    ValidationError,
    rank_matrix_issues,
    validate_return_series,
)
from reports.atomic_writer import AtomicWriteError, write_json_atomic
from reports.formatters import format_horizon_label

logger = logging.getLogger(__name__)


class DashboardJobError(Exception):
    """Raised when the dashboard payload cannot be assembled."""
    pass


def _selected(keys: Sequence[str], loaded: Mapping[str, Any]) -> List[str]:
    return [key for key in keys if key in loaded]


def _performance_view(
    config: DashboardConfig,
    return_series: Mapping[str, ReturnSeries]
) -> Dict[str, Any]:
    clipped = {
        key: filter_by_date_range(return_series[key], config.start, config.end)
        for key in _selected(config.selected, return_series)
    }

    curves = []
    for key, series in clipped.items():
        if series.is_empty:
            continue
        curves.append({
            'factor': key,
            'dates': list(series.dates),
            'cumulative': cumulative_curve(series.returns).tolist(),
        })

    # metrics rows are keyed by the caller's identifier, one per selected factor
    keyed = [
        ReturnSeries(label=key, dates=series.dates, returns=series.returns)
        for key, series in clipped.items()
    ]
    metrics = compute_metrics_table(
        keyed,
        risk_free_rate=config.risk_free_rate,
        freq=config.periods_per_year
    )

    return {
        'series': curves,
        'metrics': [m.to_dict() for m in metrics],
    }


def _global_wave_view(
    config: DashboardConfig,
    global_wave: Mapping[str, ForwardReturnSummary]
) -> Dict[str, Any]:
    labels = _selected(config.global_wave_selected, global_wave)
    horizon = config.global_wave_horizon
    return {
        'bar': horizon_averages(global_wave, labels, horizon),
        'bar_labels': {
            'trough': format_horizon_label(EventKind.TROUGH.value, horizon),
            'peak': format_horizon_label(EventKind.PEAK.value, horizon),
        },
        'table': summary_rows(global_wave, labels),
    }


def _benchmark_view(
    config: DashboardConfig,
    benchmark: Optional[ReturnSeries],
    global_wave: Mapping[str, ForwardReturnSummary]
) -> Optional[Dict[str, Any]]:
    if benchmark is None or benchmark.is_empty:
        return None

    dates, curve = benchmark_curve(benchmark)
    markers = build_event_markers(
        benchmark,
        event_pool(global_wave, _selected(config.global_wave_selected, global_wave))
    )

    def points(marker_points):
        return [
            {'date': p.date, 'value': p.value, 'event_date': p.event_date}
            for p in marker_points
        ]

    return {
        'label': benchmark.label,
        'dates': dates,
        'cumulative': curve,
        'peaks': points(markers.peaks),
        'troughs': points(markers.troughs),
        'reference_lines': [
            {'kind': line.kind.value, 'date': line.date}
            for line in markers.reference_lines
        ],
    }


def build_dashboard_payload(
    config: DashboardConfig,
    return_series: Mapping[str, ReturnSeries],
    global_wave: Mapping[str, ForwardReturnSummary],
    rank_matrix: Optional[RankMatrix] = None,
    benchmark: Optional[ReturnSeries] = None
) -> Dict[str, Any]:
    """
    Compose every dashboard view from already-loaded values.

    Args:
        config: Date range, risk-free rate, horizon, palette and the factor
            selections; only selected factors appear in the performance and
            global-wave views
        return_series: Unfiltered return series keyed by factor identifier
        global_wave: Global-wave summaries keyed by factor identifier
        rank_matrix: Monthly ranking (None hides the heatmap)
        benchmark: Unfiltered benchmark series for the event overlay

    Returns:
        JSON-serialisable dashboard payload
    """
    heatmap = None
    if rank_matrix is not None and rank_matrix.months:
        heatmap = encode_rank_heatmap(rank_matrix, config.palette).to_dict()

    return {
        'generated_at': datetime.now().isoformat(),
        'settings': {
            'start': config.start,
            'end': config.end,
            'risk_free_rate': config.risk_free_rate,
            'periods_per_year': config.periods_per_year,
            'global_wave_horizon': config.global_wave_horizon,
            'selected': list(config.selected),
            'global_wave_selected': list(config.global_wave_selected),
            'benchmark': benchmark.label if benchmark is not None else None,
        },
        'performance': _performance_view(config, return_series),
        'global_wave': _global_wave_view(config, global_wave),
        'benchmark': _benchmark_view(config, benchmark, global_wave),
        'heatmap': heatmap,
    }


def _load_returns(path: Path) -> ReturnSeries:
    key = artifact_id(path)
    try:
        series = read_return_series(path)
    except ArtifactError as e:
        logger.error(f"Returns artifact unavailable, using empty series for {key}: {e}")
        return ReturnSeries(label=key)

    try:
        validate_return_series(series)
    except ValidationError as e:
        logger.warning(f"Returns artifact {key}: {e}")
    return series


def _load_global_wave(path: Path) -> Optional[ForwardReturnSummary]:
    try:
        return read_global_wave(path)
    except ArtifactError as e:
        logger.error(f"Global wave artifact unavailable: {e}")
        return None


def _load_rank_matrix(path: Optional[Path]) -> Optional[RankMatrix]:
    if path is None:
        return None
    try:
        matrix = read_rank_matrix(path)
    except ArtifactError as e:
        logger.error(f"Heatmap artifact unavailable: {e}")
        return None

    for issue in rank_matrix_issues(matrix):
        logger.warning(f"Heatmap artifact: {issue}")
    return matrix


def run_dashboard_job(
    config: DashboardConfig,
    returns_paths: Sequence[Path],
    global_wave_paths: Sequence[Path],
    output_path: Path,
    heatmap_path: Optional[Path] = None,
    benchmark_path: Optional[Path] = None,
    manifest_path: Optional[Path] = None
) -> Dict[str, Any]:
    """
    Build the dashboard payload from artifact files and save it as JSON.

    Missing or unreadable artifacts degrade to the dashboard's "no data"
    state instead of failing the job.

    Args:
        config: Dashboard configuration
        returns_paths: Return series artifacts, one per selected factor
        global_wave_paths: Global-wave artifacts, one per selected factor
        output_path: Path to save the payload
        heatmap_path: Ranking heatmap artifact (optional)
        benchmark_path: Benchmark returns artifact; defaults to the configured
            benchmark among returns_paths
        manifest_path: Factor manifest used to resolve the benchmark (optional)

    Returns:
        Dictionary with job results and summary
    """
    start_time = datetime.now()
    output_path = Path(output_path)

    try:
        if not returns_paths and not global_wave_paths and heatmap_path is None:
            raise DashboardJobError("No artifacts given: nothing to build")

        return_series = {artifact_id(p): _load_returns(Path(p)) for p in returns_paths}

        global_wave = {}
        for p in global_wave_paths:
            summary = _load_global_wave(Path(p))
            if summary is not None:
                global_wave[artifact_id(p)] = summary

        rank_matrix = _load_rank_matrix(Path(heatmap_path) if heatmap_path else None)

        available = list(return_series.keys())
        if manifest_path is not None:
            try:
                available = read_manifest(manifest_path) or available
            except ArtifactError as e:
                logger.error(f"Manifest unavailable, using returns artifacts: {e}")
        config = resolve_selection(config, available)

        if benchmark_path is not None:
            benchmark = _load_returns(Path(benchmark_path))
        else:
            benchmark = return_series.get(config.benchmark)

        payload = build_dashboard_payload(
            config=config,
            return_series=return_series,
            global_wave=global_wave,
            rank_matrix=rank_matrix,
            benchmark=benchmark
        )

        write_result = write_json_atomic(payload, output_path)
        logger.info(f"Dashboard payload written to {output_path} ({write_result['bytes_written']} bytes)")

        return {
            'status': 'completed',
            'output_path': str(output_path),
            'factors': len(return_series),
            'global_wave_factors': len(global_wave),
            'heatmap_months': len(rank_matrix.months) if rank_matrix else 0,
            'benchmark': benchmark.label if benchmark is not None else None,
            'bytes_written': write_result['bytes_written'],
            'duration_seconds': (datetime.now() - start_time).total_seconds()
        }

    except (AtomicWriteError, DashboardJobError) as e:
        logger.error(f"Dashboard job failed: {e}")
        return {
            'status': 'failed',
            'error_message': str(e),
            'output_path': None,
            'duration_seconds': (datetime.now() - start_time).total_seconds()
        }
