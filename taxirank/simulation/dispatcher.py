"""Arrival dispatch from the passenger feed into route queues."""

import logging
from dataclasses import dataclass
from typing import List, Tuple

from ..models.passenger import Passenger
from .state import SimulationState


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchResult:
    """Passengers pulled from the feed during one tick."""

    arrivals: Tuple[Passenger, ...]  # every passenger pulled, in feed order
    dropped: Tuple[Passenger, ...]  # subset whose route tag was unknown

    @property
    def label(self) -> str:
        """Arrivals as `T(d)T(d)...` for the report."""
        return "".join(p.label for p in self.arrivals)


class ArrivalDispatcher:
    """
    Moves passengers arriving at the current tick into their route queues.

    Passengers with an unknown route tag are dropped: they never reach a
    queue but still count as processed, so the cursor moves past them.
    """

    def dispatch(self, state: SimulationState, tick: int) -> DispatchResult:
        """
        Dispatch every passenger whose arrival tick equals `tick`.

        Args:
            state: Simulation state holding the feed, cursor and routes
            tick: Current simulation tick

        Returns:
            DispatchResult describing this tick's arrivals
        """
        arrivals: List[Passenger] = []
        dropped: List[Passenger] = []

        while not state.feed_exhausted:
            passenger = state.feed[state.cursor]
            if passenger.arrival_tick != tick:
                break

            arrivals.append(passenger)
            route = state.routes.get(passenger.route) if passenger.route else None
            if route is None:
                logger.debug("Tick %d: dropping %r, unknown route", tick, passenger)
                dropped.append(passenger)
                state.dropped_count += 1
            else:
                route.queue.enqueue(passenger)
                state.dispatched_count += 1

            state.cursor += 1

        return DispatchResult(arrivals=tuple(arrivals), dropped=tuple(dropped))
