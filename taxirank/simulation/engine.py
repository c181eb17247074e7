"""Main simulation engine."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import simpy

from ..models.passenger import Passenger, RouteTag
from ..models.route import DEFAULT_CAPACITY, RouteSnapshot
from .dispatcher import ArrivalDispatcher, DispatchResult
from .state import DEFAULT_ROUTE_ORDER, SimulationState


logger = logging.getLogger(__name__)

DEFAULT_MAX_TICKS = 1000


class Outcome(Enum):
    """How a run ended."""
    COMPLETED = "completed"  # feed, queues and boarding all exhausted
    SAFETY_BOUND = "safety_bound"  # tick ceiling reached first


@dataclass
class SimulationConfig:
    """Configuration for the simulation."""

    # Vehicle
    capacity: int = DEFAULT_CAPACITY

    # Safety bound on the number of ticks run
    max_ticks: int = DEFAULT_MAX_TICKS

    # Order routes are advanced in each tick
    route_order: Tuple[RouteTag, ...] = DEFAULT_ROUTE_ORDER

    # Random seed (synthetic feed only)
    random_seed: Optional[int] = None


@dataclass(frozen=True)
class TickSnapshot:
    """Observable state at the end of one tick."""

    tick: int
    arrivals: Tuple[Passenger, ...]
    dropped: Tuple[Passenger, ...]
    routes: Tuple[RouteSnapshot, ...]

    @property
    def arrivals_label(self) -> str:
        return "".join(p.label for p in self.arrivals)

    def route(self, tag: RouteTag) -> RouteSnapshot:
        """Snapshot for a single route."""
        for snapshot in self.routes:
            if snapshot.route == tag:
                return snapshot
        raise KeyError(tag)


@dataclass
class SimulationResult:
    """Results from a simulation run."""

    config: SimulationConfig
    snapshots: List[TickSnapshot]
    outcome: Outcome
    final_tick: int
    dispatched_count: int
    dropped_count: int
    feed_size: int = 0

    @property
    def completed(self) -> bool:
        return self.outcome == Outcome.COMPLETED

    @property
    def ticks_run(self) -> int:
        return len(self.snapshots)

    @property
    def final_routes(self) -> Dict[RouteTag, RouteSnapshot]:
        """Route snapshots from the last tick."""
        if not self.snapshots:
            return {}
        return {snapshot.route: snapshot for snapshot in self.snapshots[-1].routes}


class SimulationEngine:
    """
    Tick-driven clock for the taxi rank.

    Each tick: dispatch arrivals, advance every route, record a snapshot,
    then check for completion and the tick ceiling. Ticks are driven by a
    SimPy process that waits one time unit between iterations, so
    `env.now` is always the current tick.
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        on_tick: Optional[Callable[[TickSnapshot], None]] = None,
    ):
        """
        Initialize simulation engine.

        Args:
            config: Simulation configuration (defaults if omitted)
            on_tick: Optional callback receiving each TickSnapshot as it is taken
        """
        self.config = config or SimulationConfig()
        self.on_tick = on_tick
        self.dispatcher = ArrivalDispatcher()

        # Will be initialized on run
        self.env: Optional[simpy.Environment] = None
        self.snapshots: List[TickSnapshot] = []
        self.outcome: Optional[Outcome] = None

    def _take_snapshot(self, state: SimulationState, dispatch: DispatchResult) -> TickSnapshot:
        return TickSnapshot(
            tick=state.tick,
            arrivals=dispatch.arrivals,
            dropped=dispatch.dropped,
            routes=tuple(route.snapshot() for route in state.routes.values()),
        )

    def _clock(self, state: SimulationState):
        """
        SimPy process running one iteration per tick until the run ends.

        Args:
            state: Simulation state to drive

        Yields:
            SimPy timeout events, one per tick
        """
        while True:
            tick = int(self.env.now)
            state.tick = tick

            dispatch = self.dispatcher.dispatch(state, tick)

            for route in state.routes.values():
                route.advance(tick)

            snapshot = self._take_snapshot(state, dispatch)
            self.snapshots.append(snapshot)
            if self.on_tick is not None:
                self.on_tick(snapshot)

            if state.work_exhausted:
                self.outcome = Outcome.COMPLETED
                logger.info("Simulation ended at tick %d, no more passengers to process", tick)
                return

            if tick + 1 >= self.config.max_ticks:
                self.outcome = Outcome.SAFETY_BOUND
                logger.warning(
                    "Simulation terminated after %d ticks without running out of work",
                    self.config.max_ticks,
                )
                return

            yield self.env.timeout(1)

    def run(self, feed: Sequence[Passenger]) -> SimulationResult:
        """
        Run the simulation over a feed.

        Args:
            feed: Passengers sorted ascending by arrival tick

        Returns:
            SimulationResult with every tick snapshot and the outcome

        Raises:
            ConfigError: If the configured route order is not a permutation of the routes
        """
        self.env = simpy.Environment()
        self.snapshots = []
        self.outcome = None

        state = SimulationState.create(
            feed,
            capacity=self.config.capacity,
            route_order=self.config.route_order,
        )

        clock = self.env.process(self._clock(state))
        self.env.run(until=clock)

        return SimulationResult(
            config=self.config,
            snapshots=self.snapshots,
            outcome=self.outcome,
            final_tick=state.tick,
            dispatched_count=state.dispatched_count,
            dropped_count=state.dropped_count,
            feed_size=len(state.feed),
        )
