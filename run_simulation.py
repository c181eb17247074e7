#!/usr/bin/env python3
"""
Taxi rank boarding simulation CLI entry point

Usage:
    # Single run over a feed file
    python run_simulation.py --feed data/taxiData.txt

    # With a scenario file and CSV/chart output
    python run_simulation.py --feed data/taxiData.txt --scenario config/scenario_base.yaml --output output --chart

    # Parameter sweep
    python run_simulation.py --feed data/taxiData.txt --sweep config/scenario_sweep.csv --output output

    # Synthetic feed over 200 ticks
    python run_simulation.py --generate 200 --seed 42
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from taxirank.analysis.charts import ChartGenerator
from taxirank.analysis.statistics import StatisticsCalculator
from taxirank.errors import TaxiRankError
from taxirank.io.exporter import ResultExporter
from taxirank.io.feed_generator import generate_feed
from taxirank.io.loader import DataLoader, FeedReader
from taxirank.io.report import ReportRenderer
from taxirank.models.passenger import Passenger
from taxirank.simulation.engine import SimulationConfig, SimulationEngine


def run_single_simulation(
    config: SimulationConfig,
    feed: List[Passenger],
    output_dir: Optional[str] = None,
    generate_chart: bool = False,
    scenario_name: str = "",
    print_table: bool = True,
) -> Dict:
    """
    Run a single simulation.

    Args:
        config: Simulation configuration
        feed: Passengers sorted by arrival tick
        output_dir: Output directory (no files written if omitted)
        generate_chart: Whether to generate the queue chart
        scenario_name: Name for this scenario
        print_table: Whether to stream the tick table to stdout

    Returns:
        Dictionary with results summary
    """
    renderer = ReportRenderer()

    if print_table:
        if scenario_name:
            print(f"\n=== {scenario_name} ===")
        print(renderer.header())
        engine = SimulationEngine(config, on_tick=lambda s: print(renderer.row(s)))
    else:
        engine = SimulationEngine(config)

    result = engine.run(feed)

    if print_table:
        print()
    footer = renderer.footer(result)
    print(footer, file=sys.stdout if result.completed else sys.stderr)

    overall = StatisticsCalculator(result).calculate_overall_stats()

    files = {}
    if output_dir:
        prefix = f"{scenario_name}_" if scenario_name else ""
        exporter = ResultExporter(output_dir)
        files = exporter.export_all(result, prefix=prefix)

        if generate_chart:
            chart_path = str(Path(output_dir) / f"{prefix}queue_chart.png")
            ChartGenerator().generate_queue_chart(result, chart_path)
            files['chart'] = chart_path

        print("\nOutput files:")
        for file_type, file_path in files.items():
            print(f"  {file_type}: {file_path}")

    return {
        'scenario_name': scenario_name,
        'outcome': overall.outcome.value,
        'ticks_run': overall.ticks_run,
        'dispatched': overall.dispatched,
        'dropped': overall.dropped,
        'boarded': overall.boarded,
        'files': files,
    }


def run_sweep(
    sweep_csv: str,
    feed: List[Passenger],
    output_dir: str,
    base_config: SimulationConfig,
) -> List[Dict]:
    """
    Run parameter sweep simulations.

    Args:
        sweep_csv: Path to sweep CSV file
        feed: Passengers sorted by arrival tick
        output_dir: Output directory
        base_config: Configuration the sweep rows override

    Returns:
        List of result summaries
    """
    sweep_rows = DataLoader.load_scenario_sweep_csv(sweep_csv)

    if not sweep_rows:
        print("No scenarios in sweep file")
        return []

    print(f"\nRunning {len(sweep_rows)} scenarios")

    results = []
    for i, row in enumerate(sweep_rows):
        scenario_name = row.get('scenario_name') or f'scenario_{i}'
        config = DataLoader.config_from_sweep_row(base_config, row)

        results.append(run_single_simulation(
            config=config,
            feed=feed,
            output_dir=output_dir,
            scenario_name=scenario_name,
            print_table=False,
        ))

    exporter = ResultExporter(output_dir)
    comparison_path = exporter.export_scenario_comparison(results)
    print(f"Comparison CSV: {comparison_path}")

    chart_path = str(Path(output_dir) / "comparison_chart.png")
    ChartGenerator().generate_comparison_chart(results, chart_path)
    print(f"Comparison chart: {chart_path}")

    return results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Taxi rank boarding simulation CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Input
    parser.add_argument(
        "--feed", "-d",
        type=str,
        help="Path to the passenger feed file",
    )
    parser.add_argument(
        "--generate", "-g",
        type=int,
        metavar="TICKS",
        help="Generate a synthetic feed over this many ticks instead of reading one",
    )
    parser.add_argument(
        "--scenario", "-s",
        type=str,
        help="Path to a scenario YAML file",
    )
    parser.add_argument(
        "--sweep",
        type=str,
        help="Path to a parameter sweep CSV file",
    )

    # Output
    parser.add_argument(
        "--output", "-o",
        type=str,
        help="Output directory for CSV/report files",
    )
    parser.add_argument(
        "--chart", "-c",
        action="store_true",
        help="Generate the queue chart (requires --output)",
    )

    # Options
    parser.add_argument(
        "--sort",
        action="store_true",
        help="Sort the feed by arrival tick before running",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for --generate",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.feed and args.generate is None:
        parser.error("specify --feed or --generate")
    if args.sweep and not args.output:
        parser.error("--sweep requires --output")
    if args.chart and not args.output:
        parser.error("--chart requires --output")

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(level)

    try:
        if args.scenario:
            config = DataLoader.load_scenario_yaml(args.scenario)
        else:
            config = SimulationConfig()
        if args.seed is not None:
            config.random_seed = args.seed

        if args.feed:
            feed = FeedReader.load_feed(args.feed)
        else:
            feed = generate_feed(args.generate, random_seed=config.random_seed)

        if args.sort:
            feed = FeedReader.sorted_feed(feed)
        elif not FeedReader.is_sorted(feed):
            logging.getLogger(__name__).warning(
                "Feed is not sorted by arrival tick; dispatch stalls at the first out-of-order passenger"
            )

        if args.sweep:
            run_sweep(args.sweep, feed, args.output, config)
        else:
            run_single_simulation(
                config=config,
                feed=feed,
                output_dir=args.output,
                generate_chart=args.chart,
            )
    except TaxiRankError as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
