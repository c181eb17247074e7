"""Chart generation for simulation results."""

from typing import Dict, List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from ..models.passenger import RouteTag
from ..simulation.engine import SimulationResult
from .statistics import StatisticsCalculator


ROUTE_TITLES = {
    RouteTag.SHORT: "Short route",
    RouteTag.LONG: "Long route",
    RouteTag.CITY: "City route",
}


class ChartGenerator:
    """Generate static charts from simulation results."""

    def generate_queue_chart(
        self,
        result: SimulationResult,
        output_path: str,
    ) -> str:
        """
        Generate queue length and onboard count chart, one panel per route.

        Args:
            result: Simulation result
            output_path: Path for output image

        Returns:
            Path to output image
        """
        calc = StatisticsCalculator(result)
        df = calc.to_frame()

        fig, axes = plt.subplots(len(ROUTE_TITLES), 1, figsize=(12, 9), sharex=True)

        for ax, (route, title) in zip(axes, ROUTE_TITLES.items()):
            route_df = df[df['route'] == route.value]

            if not route_df.empty:
                ticks = route_df['tick']
                ax.fill_between(ticks, route_df['queue_length'], step='post', alpha=0.3)
                ax.step(ticks, route_df['queue_length'], where='post', linewidth=1, label='queue')
                ax.step(ticks, route_df['onboard'], where='post', linewidth=1, label='onboard')
                ax.set_ylabel('passengers')
                ax.legend(loc='upper right')
                ax.grid(True, alpha=0.3)
            else:
                ax.text(0.5, 0.5, 'no data', ha='center', va='center', transform=ax.transAxes)
            ax.set_title(title)

        axes[-1].set_xlabel('tick')
        plt.suptitle('Queue length and onboard passengers per route', fontsize=14, fontweight='bold')
        plt.tight_layout()
        plt.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

        return output_path

    def generate_comparison_chart(
        self,
        comparison_data: List[Dict],
        output_path: str,
    ) -> str:
        """
        Generate scenario comparison chart.

        Args:
            comparison_data: List of {scenario_name, ticks_run, boarded} dictionaries
            output_path: Path for output image

        Returns:
            Path to output image
        """
        names = [d.get('scenario_name', '') for d in comparison_data]
        ticks = [d.get('ticks_run', 0) for d in comparison_data]
        boarded = [d.get('boarded', 0) for d in comparison_data]

        fig, (ax_ticks, ax_boarded) = plt.subplots(1, 2, figsize=(12, 5))

        ax_ticks.bar(names, ticks, color='steelblue')
        ax_ticks.set_title('Ticks run')
        ax_ticks.tick_params(axis='x', rotation=45)

        ax_boarded.bar(names, boarded, color='seagreen')
        ax_boarded.set_title('Passengers boarded')
        ax_boarded.tick_params(axis='x', rotation=45)

        plt.tight_layout()
        plt.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

        return output_path
