#!/usr/bin/env python3
"""
Main CLI for the factor dashboard analytics.
Usage:
  python cli.py metrics RETURNS_JSON [RETURNS_JSON ...] [options]
  python cli.py dashboard --returns ... --global-wave ... --output PATH [options]
  python cli.py holdings HOLDINGS_JSON [--month YYYY-MM]
"""

import sys
import logging
import argparse
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from analysis.calculations.date_range import filter_by_date_range
from analysis.dashboard_config import ConfigError, load_dashboard_config
from analysis.dashboard_job import run_dashboard_job
from analysis.metrics_aggregator import compute_metrics_table, metrics_frame
from ingestion.artifact_reader import ArtifactError, read_holdings, read_return_series
from ingestion.transforms.normalizers import holdings_for_month
from reports.formatters import format_percentage, format_ratio


def setup_logging(verbose: bool = False) -> None:
    """Console logging for CLI runs."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(message)s", datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Factor dashboard analytics',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python cli.py metrics data/returns/Top300.json data/returns/PE_low.json --rf 0.01
  python cli.py dashboard --returns data/returns/*.json --global-wave data/global_wave/*.json \\
      --heatmap data/heatmap/heatmap_12m.json --output build/dashboard.json
  python cli.py holdings data/holdings/PE_low.json --month 2024-06
        """
    )
    parser.add_argument('--config', help='Dashboard config YAML (default: config/dashboard.yml)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    sub = parser.add_subparsers(dest='command', required=True)

    metrics = sub.add_parser('metrics', help='Print the risk/return table')
    metrics.add_argument('returns', nargs='+', help='Returns JSON artifacts')
    metrics.add_argument('--start', help='Start date (YYYY-MM-DD, default from config)')
    metrics.add_argument('--end', help='End date (YYYY-MM-DD, default from config)')
    metrics.add_argument('--rf', type=float, help='Annual risk-free rate (e.g. 0.01)')
    metrics.add_argument('--freq', type=int, help='Periods per year (default from config)')

    dashboard = sub.add_parser('dashboard', help='Build the dashboard payload JSON')
    dashboard.add_argument('--returns', nargs='*', default=[], help='Returns JSON artifacts')
    dashboard.add_argument('--global-wave', nargs='*', default=[], help='Global wave JSON artifacts')
    dashboard.add_argument('--heatmap', help='Ranking heatmap JSON artifact')
    dashboard.add_argument('--benchmark', help='Benchmark returns JSON artifact')
    dashboard.add_argument('--manifest', help='Factor manifest JSON artifact')
    dashboard.add_argument('--output', required=True, help='Output payload path')

    holdings = sub.add_parser('holdings', help='Print holdings for a month')
    holdings.add_argument('holdings', help='Holdings JSON artifact')
    holdings.add_argument('--month', help='Month key (default: latest)')

    return parser


def run_metrics(args, config) -> int:
    start = args.start or config.start
    end = args.end or config.end
    rf = config.risk_free_rate if args.rf is None else args.rf
    freq = args.freq or config.periods_per_year

    series_list = []
    for path in args.returns:
        try:
            series = read_return_series(path)
        except ArtifactError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 1
        series_list.append(filter_by_date_range(series, start, end))

    frame = metrics_frame(compute_metrics_table(series_list, risk_free_rate=rf, freq=freq))

    print(f"Range: {start} to {end} | rf: {rf} | periods/year: {freq}")
    print()
    display = frame.copy()
    for column in ('ann_return', 'ann_vol', 'maxdd'):
        display[column] = display[column].map(format_percentage)
    display['sharpe'] = display['sharpe'].map(format_ratio)
    print(display.to_string(index=False))
    return 0


def run_dashboard(args, config) -> int:
    result = run_dashboard_job(
        config=config,
        returns_paths=[Path(p) for p in args.returns],
        global_wave_paths=[Path(p) for p in args.global_wave],
        output_path=Path(args.output),
        heatmap_path=Path(args.heatmap) if args.heatmap else None,
        benchmark_path=Path(args.benchmark) if args.benchmark else None,
        manifest_path=Path(args.manifest) if args.manifest else None
    )

    if result['status'] != 'completed':
        print(f"ERROR: Dashboard build failed: {result['error_message']}", file=sys.stderr)
        return 1

    print(f"Dashboard written: {result['output_path']} ({result['bytes_written']} bytes)")
    print(f"Factors: {result['factors']} | Global wave: {result['global_wave_factors']} | "
          f"Heatmap months: {result['heatmap_months']} | Benchmark: {result['benchmark'] or '-'}")
    print(f"Duration: {result['duration_seconds']:.2f}s")
    return 0


def run_holdings(args) -> int:
    try:
        snapshot = read_holdings(args.holdings)
    except ArtifactError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    month = args.month or (snapshot.months[-1] if snapshot.months else None)
    tickers = holdings_for_month(snapshot, month)

    print(f"{snapshot.label} | asof: {snapshot.as_of or '-'} | month: {month or '-'} | holdings: {len(tickers)}")
    if tickers:
        print(" ".join(tickers))
    return 0


def main(argv=None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    if args.command == 'holdings':
        return run_holdings(args)

    try:
        config = load_dashboard_config(args.config)
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.command == 'metrics':
        return run_metrics(args, config)
    return run_dashboard(args, config)


if __name__ == '__main__':
    sys.exit(main())
