"""Result export utilities."""

import csv
from pathlib import Path
from typing import Dict, List

from ..analysis.statistics import StatisticsCalculator
from ..simulation.engine import SimulationResult
from .report import ReportRenderer


class ResultExporter:
    """Exports simulation results to various formats."""

    def __init__(self, output_dir: str):
        """
        Initialize exporter.

        Args:
            output_dir: Directory for output files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export_ticks(
        self,
        result: SimulationResult,
        filename: str = "ticks.csv",
    ) -> str:
        """
        Export the per-tick route state to CSV, one row per tick per route.

        Args:
            result: Simulation result
            filename: Output filename

        Returns:
            Path to output file
        """
        output_path = self.output_dir / filename

        with open(output_path, 'w', encoding='utf-8', newline='') as f:
            writer = csv.writer(f)
            writer.writerow([
                'tick', 'arrivals', 'route', 'queue_length', 'queue',
                'capacity_remaining', 'onboard', 'status', 'boarding',
            ])

            for snapshot in result.snapshots:
                for route in snapshot.routes:
                    writer.writerow([
                        snapshot.tick,
                        snapshot.arrivals_label,
                        route.route.value,
                        route.queue_length,
                        route.queue_label,
                        route.capacity_remaining,
                        route.onboard_count,
                        route.status.value,
                        route.boarding_passenger.label if route.boarding_passenger else "",
                    ])

        return str(output_path)

    def export_route_summary(
        self,
        result: SimulationResult,
        filename: str = "route_summary.csv",
    ) -> str:
        """
        Export per-route statistics to CSV.

        Args:
            result: Simulation result
            filename: Output filename

        Returns:
            Path to output file
        """
        output_path = self.output_dir / filename
        route_stats = StatisticsCalculator(result).calculate_route_stats()

        with open(output_path, 'w', encoding='utf-8', newline='') as f:
            writer = csv.writer(f)
            writer.writerow([
                'route', 'boarded', 'departures', 'mean_queue', 'max_queue',
                'ticks_waiting', 'ticks_board', 'ticks_departed', 'final_status',
            ])

            for stat in route_stats.values():
                writer.writerow([
                    stat.route.value,
                    stat.boarded,
                    stat.departures,
                    f"{stat.mean_queue_length:.2f}",
                    stat.max_queue_length,
                    stat.ticks_waiting,
                    stat.ticks_board,
                    stat.ticks_departed,
                    stat.final_status.value,
                ])

        return str(output_path)

    def export_report(
        self,
        result: SimulationResult,
        filename: str = "report.txt",
    ) -> str:
        """
        Write the rendered text table.

        Args:
            result: Simulation result
            filename: Output filename

        Returns:
            Path to output file
        """
        output_path = self.output_dir / filename
        with open(output_path, 'w', encoding='utf-8') as f:
            ReportRenderer().write(result, f)
        return str(output_path)

    def export_scenario_comparison(
        self,
        results: List[Dict],
        filename: str = "scenario_comparison.csv",
    ) -> str:
        """
        Export scenario comparison results.

        Args:
            results: List of {scenario_name, outcome, ticks_run, boarded} dictionaries
            filename: Output filename

        Returns:
            Path to output file
        """
        output_path = self.output_dir / filename
        headers = ['scenario_name', 'outcome', 'ticks_run', 'dispatched', 'dropped', 'boarded']

        with open(output_path, 'w', encoding='utf-8', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(headers)
            for r in results:
                writer.writerow([r.get(key, '') for key in headers])

        return str(output_path)

    def export_all(
        self,
        result: SimulationResult,
        prefix: str = "",
    ) -> Dict[str, str]:
        """
        Export all result files.

        Args:
            result: Simulation result
            prefix: Optional filename prefix

        Returns:
            Dictionary of {type: filepath}
        """
        files = {}

        files['ticks'] = self.export_ticks(result, f"{prefix}ticks.csv")
        files['summary'] = self.export_route_summary(result, f"{prefix}route_summary.csv")
        files['report'] = self.export_report(result, f"{prefix}report.txt")

        return files
