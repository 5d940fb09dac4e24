#!/usr/bin/env python3
"""Command-line interface for the seasonality analytics."""

from __future__ import annotations

import argparse
import csv
import logging
import sys
from datetime import date

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "date",
    "volatility_level",
    "volume",
    "performance",
    "price_change_percent",
    "liquidity",
]


def parse_date(date_str: str) -> date:
    """Parse date string to date."""
    return date.fromisoformat(date_str)


def configure_logging(level: str) -> None:
    """Route package logging to stderr at the given level."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def cmd_gen_synth(args: argparse.Namespace) -> int:
    """Generate a synthetic series and print it as CSV."""
    from seasonality.commands.gen_synth import load_gen_synth_config
    from seasonality.data.synth import generate_series
    from seasonality.exceptions import ConfigError

    try:
        config = load_gen_synth_config(args.config)
    except ConfigError as e:
        print(f"Configuration error: {e}")
        return 1

    points = generate_series(
        config.date_range.start, config.date_range.end, seed=config.random_seed
    )
    logger.info("Generated %d points for dataset %s", len(points), config.dataset_id)

    writer = csv.writer(sys.stdout, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for p in points:
        writer.writerow(
            [
                p.date.isoformat(),
                p.volatility_level.value,
                f"{p.volume:.0f}",
                p.performance.value,
                f"{p.price_change_percent:.4f}",
                f"{p.liquidity:.0f}",
            ]
        )
    return 0


def _build_analysis_config(args: argparse.Namespace):
    """Build an AnalysisConfig from a YAML file or from command-line flags."""
    from seasonality.commands.analyze import load_analysis_config, parse_analysis_params
    from seasonality.exceptions import ConfigError

    if args.config:
        return load_analysis_config(args.config)

    raw: dict = {"unit": args.unit, "year": args.year}
    if args.csv:
        raw["source"] = {"type": "csv", "params": {"file_path": args.csv}}
    else:
        raw["source"] = {"type": "synth", "params": {"random_seed": args.seed}}
    if args.start or args.end:
        if not args.csv and not (args.start and args.end):
            raise ConfigError("Synthetic series need both --start and --end")
        # An open end on a CSV filter reaches the edge of the file
        raw["date_range"] = {
            "start": args.start or date.min,
            "end": args.end or date.max,
        }
    return parse_analysis_params(raw)


def cmd_analyze(args: argparse.Namespace) -> int:
    """Load a series and print its roll-ups, patterns and anomalies."""
    from seasonality.analysis import (aggregate_series, assess_day,
                                      detect_anomalies,
                                      detect_seasonal_patterns,
                                      summarize_series)
    from seasonality.commands.analyze import validate_analysis_config
    from seasonality.data.sources import resolve_series_source
    from seasonality.exceptions import (ConfigError, DataSourceError,
                                        DataValidationError)
    from seasonality.series import format_volume, validate_series
    from seasonality.types import DateRange

    try:
        config = _build_analysis_config(args)
    except ConfigError as e:
        print(f"Configuration error: {e}")
        return 1

    if args.config:
        logging.getLogger().setLevel(config.log_level)

    for warning in validate_analysis_config(config):
        print(f"⚠️  {warning}")

    date_range = config.date_range or DateRange(start=date.min, end=date.max)

    try:
        source = resolve_series_source(config.source_type, config.source_params)
        points = list(source.fetch_points(date_range))
        validate_series(points)
    except (DataSourceError, DataValidationError) as e:
        print(f"Failed to load series: {e}")
        return 1

    summary = summarize_series(points)
    if summary is None:
        print("No data loaded. Check the source and date range.")
        return 1

    year = config.year if config.year is not None else summary.end_date.year

    print("=" * 60)
    print("SEASONALITY ANALYSIS")
    print("=" * 60)
    print(f"Source:        {config.source_type}")
    print(f"Period:        {summary.start_date} to {summary.end_date}")
    print(f"Trading Days:  {summary.trading_days}")
    print(f"Avg Volume:    {format_volume(summary.mean_volume)}")
    print(f"Total Volume:  {format_volume(summary.total_volume)}")
    print(f"Avg Change:    {summary.mean_price_change_percent:+.2f}%")
    print(f"Avg Liquidity: {summary.mean_liquidity:.1f}")
    print(f"Risk Score:    {summary.risk_score:.1f}")
    print(f"Recent Trend:  {summary.recent_trend.value}")

    latest = assess_day(points[-1], summary.mean_volume)
    print(f"\nLATEST DAY ({latest.date})")
    print(f"   Volume Trend: {latest.volume_trend}")
    print(f"   Liquidity:    {latest.liquidity_grade}")
    print(f"   Risk:         {latest.risk_grade.value}")
    print(f"   Signal:       {latest.trading_signal}")

    periods = aggregate_series(points, year, config.unit)
    print(f"\n📅 {config.unit.value.upper()}LY ROLL-UP ({year})")
    print(
        f"   {'Period':<10} {'Days':>5} {'Volume':>9} {'Change':>8} "
        f"{'Liq':>6} {'Volatility':<10} {'Performance':<11}"
    )
    for p in periods:
        print(
            f"   {p.period_id:<10} {p.sample_count:>5} {format_volume(p.total_volume):>9} "
            f"{p.mean_price_change_percent:>+7.2f}% {p.mean_liquidity:>6.1f} "
            f"{p.dominant_volatility.value:<10} {p.dominant_performance.value:<11}"
        )
    if not periods:
        print(f"   No data for {year}")

    patterns = detect_seasonal_patterns(points, config.thresholds)
    print("\n🔁 SEASONAL PATTERNS")
    for pattern in patterns:
        print(
            f"   {pattern.kind.value:<9} {pattern.calendar_label:<10} "
            f"{pattern.strength:>5.1f}  {pattern.narrative} (n={pattern.sample_count})"
        )
    if not patterns:
        print("   None detected")

    anomalies = detect_anomalies(points, config.thresholds)
    print("\n⚠️  ANOMALIES")
    for anomaly in anomalies:
        print(
            f"   {anomaly.date} {anomaly.kind.value:<16} {anomaly.severity.value:<6} "
            f"{anomaly.narrative}"
        )
    if not anomalies:
        print("   None detected")

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Market seasonality analytics CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level", default="WARNING", help="Logging level (default: WARNING)"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Gen-synth command
    synth_parser = subparsers.add_parser(
        "gen-synth", help="Generate a synthetic daily series as CSV"
    )
    synth_parser.add_argument("config", help="Path to YAML configuration file")

    # Analyze command
    analyze_parser = subparsers.add_parser(
        "analyze", help="Analyze a daily series for seasonality and anomalies"
    )
    analyze_parser.add_argument(
        "-c", "--config", help="Path to YAML configuration file"
    )
    analyze_parser.add_argument("--csv", help="Read the series from a CSV file")
    analyze_parser.add_argument(
        "--start", help="Start date (YYYY-MM-DD)", type=parse_date
    )
    analyze_parser.add_argument("--end", help="End date (YYYY-MM-DD)", type=parse_date)
    analyze_parser.add_argument("--seed", type=int, help="Random seed for synthetic data")
    analyze_parser.add_argument("--year", type=int, help="Year to roll up")
    analyze_parser.add_argument(
        "-u",
        "--unit",
        default="month",
        choices=["week", "month"],
        help="Roll-up unit (default: month)",
    )

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "gen-synth":
        return cmd_gen_synth(args)
    elif args.command == "analyze":
        return cmd_analyze(args)

    return 0


if __name__ == "__main__":
    sys.exit(main())
