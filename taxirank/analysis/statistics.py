"""Statistics calculation for simulation results."""

from dataclasses import dataclass
from typing import Dict

import numpy as np
import pandas as pd

from ..models.passenger import RouteTag
from ..models.route import RouteStatus
from ..simulation.engine import Outcome, SimulationResult


FRAME_COLUMNS = [
    'tick', 'route', 'queue_length', 'capacity_remaining', 'onboard',
    'status', 'boarding', 'arrivals',
]


@dataclass
class RouteStats:
    """Statistics for a single route."""

    route: RouteTag
    boarded: int
    departures: int
    mean_queue_length: float
    max_queue_length: int
    ticks_waiting: int
    ticks_board: int
    ticks_departed: int
    final_status: RouteStatus
    final_onboard: int

    @property
    def stranded(self) -> bool:
        """Vehicle ended partly filled and will never depart on its own."""
        return self.final_onboard > 0 and self.final_status != RouteStatus.DEPARTED


@dataclass
class OverallStats:
    """Overall simulation statistics."""

    ticks_run: int
    outcome: Outcome
    final_tick: int
    feed_size: int
    dispatched: int
    dropped: int
    boarded: int
    departures: int


class StatisticsCalculator:
    """Calculate statistics from simulation results."""

    def __init__(self, result: SimulationResult):
        """
        Initialize calculator.

        Args:
            result: Simulation result to analyze
        """
        self.result = result
        self._frame = None

    def to_frame(self) -> pd.DataFrame:
        """
        Flatten snapshots into a DataFrame, one row per tick per route.

        Returns:
            DataFrame with FRAME_COLUMNS
        """
        if self._frame is not None:
            return self._frame

        rows = []
        for snapshot in self.result.snapshots:
            for route in snapshot.routes:
                rows.append({
                    'tick': snapshot.tick,
                    'route': route.route.value,
                    'queue_length': route.queue_length,
                    'capacity_remaining': route.capacity_remaining,
                    'onboard': route.onboard_count,
                    'status': route.status.value,
                    'boarding': route.boarding_passenger is not None,
                    'arrivals': sum(1 for p in snapshot.arrivals if p.route == route.route),
                })

        self._frame = pd.DataFrame(rows, columns=FRAME_COLUMNS)
        return self._frame

    def calculate_route_stats(self) -> Dict[RouteTag, RouteStats]:
        """
        Calculate statistics for each route.

        Returns:
            Dictionary of route to RouteStats, in advance order
        """
        df = self.to_frame()
        stats = {}

        for tag in self.result.config.route_order:
            route_df = df[df['route'] == tag.value]
            if route_df.empty:
                continue

            queue = route_df['queue_length'].to_numpy()
            status_counts = route_df['status'].value_counts()
            departed = route_df['status'] == RouteStatus.DEPARTED.value
            last = route_df.iloc[-1]

            # Onboard rises by one per seated passenger; drops are departure resets
            onboard = route_df['onboard'].to_numpy()
            gains = np.diff(np.concatenate(([0], onboard)))
            boarded = int(gains[gains > 0].sum())

            stats[tag] = RouteStats(
                route=tag,
                boarded=boarded,
                departures=int(departed.sum()),
                mean_queue_length=float(np.mean(queue)),
                max_queue_length=int(np.max(queue)),
                ticks_waiting=int(status_counts.get(RouteStatus.WAITING.value, 0)),
                ticks_board=int(status_counts.get(RouteStatus.BOARD.value, 0)),
                ticks_departed=int(status_counts.get(RouteStatus.DEPARTED.value, 0)),
                final_status=RouteStatus(last['status']),
                final_onboard=int(last['onboard']),
            )

        return stats

    def calculate_overall_stats(self) -> OverallStats:
        """
        Calculate overall simulation statistics.

        Returns:
            OverallStats object
        """
        route_stats = self.calculate_route_stats()

        return OverallStats(
            ticks_run=self.result.ticks_run,
            outcome=self.result.outcome,
            final_tick=self.result.final_tick,
            feed_size=self.result.feed_size,
            dispatched=self.result.dispatched_count,
            dropped=self.result.dropped_count,
            boarded=sum(s.boarded for s in route_stats.values()),
            departures=sum(s.departures for s in route_stats.values()),
        )

    def get_time_series_queue(self, route: RouteTag) -> pd.Series:
        """
        Queue length per tick for one route.

        Args:
            route: Route to extract

        Returns:
            Series indexed by tick
        """
        df = self.to_frame()
        route_df = df[df['route'] == route.value]
        return route_df.set_index('tick')['queue_length']
