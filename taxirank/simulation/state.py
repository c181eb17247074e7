"""Mutable simulation state owned by the clock."""

from dataclasses import dataclass
from typing import Dict, Iterable, Sequence, Tuple

from ..errors import ConfigError
from ..models.passenger import Passenger, RouteTag
from ..models.route import DEFAULT_CAPACITY, RouteState


DEFAULT_ROUTE_ORDER: Tuple[RouteTag, ...] = (RouteTag.SHORT, RouteTag.LONG, RouteTag.CITY)


@dataclass
class SimulationState:
    """
    Everything the clock mutates during a run.

    The feed must be sorted ascending by arrival tick; the dispatcher only
    looks at the passenger under the cursor and stops at the first one
    arriving later than the current tick.
    """

    feed: Tuple[Passenger, ...]
    routes: Dict[RouteTag, RouteState]
    cursor: int = 0
    tick: int = 0

    # Running totals
    dispatched_count: int = 0
    dropped_count: int = 0

    @classmethod
    def create(
        cls,
        feed: Sequence[Passenger],
        capacity: int = DEFAULT_CAPACITY,
        route_order: Iterable[RouteTag] = DEFAULT_ROUTE_ORDER,
    ) -> "SimulationState":
        """
        Build a fresh state with one empty route per tag.

        Args:
            feed: Passengers sorted by arrival tick
            capacity: Vehicle capacity for every route
            route_order: Order in which routes are advanced each tick

        Returns:
            New SimulationState at tick 0

        Raises:
            ConfigError: If route_order does not list every route exactly once
        """
        route_order = tuple(route_order)
        if len(route_order) != len(RouteTag) or set(route_order) != set(RouteTag):
            raise ConfigError(f"route_order must list every route exactly once, got {route_order!r}")

        routes = {tag: RouteState(route=tag, capacity=capacity) for tag in route_order}
        return cls(feed=tuple(feed), routes=routes)

    @property
    def feed_exhausted(self) -> bool:
        return self.cursor >= len(self.feed)

    @property
    def work_exhausted(self) -> bool:
        """All passengers dispatched, every queue empty and nobody boarding."""
        return self.feed_exhausted and all(route.is_idle for route in self.routes.values())
