"""Per-route queue and vehicle state machine."""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Iterator, List, Optional, Tuple

from .passenger import Passenger, RouteTag


DEFAULT_CAPACITY = 5


class RouteStatus(Enum):
    """Status of the vehicle currently loading on a route."""
    WAITING = "Waiting"
    BOARD = "Board"
    DEPARTED = "Departed"


class RouteQueue:
    """FIFO of passengers waiting to board, in arrival order."""

    def __init__(self):
        self._passengers: Deque[Passenger] = deque()

    def enqueue(self, passenger: Passenger):
        self._passengers.append(passenger)

    def dequeue(self) -> Passenger:
        return self._passengers.popleft()

    def __len__(self) -> int:
        return len(self._passengers)

    def __iter__(self) -> Iterator[Passenger]:
        return iter(self._passengers)

    def __bool__(self) -> bool:
        return bool(self._passengers)


@dataclass(frozen=True)
class RouteSnapshot:
    """Immutable view of one route at the end of a tick."""

    route: RouteTag
    queue: Tuple[Passenger, ...]
    capacity_remaining: int
    onboard_count: int
    status: RouteStatus
    boarding_passenger: Optional[Passenger]
    boarding_timer_remaining: int

    @property
    def queue_length(self) -> int:
        return len(self.queue)

    @property
    def queue_label(self) -> str:
        """Queue contents as `T(d)T(d)...`, or `0` when empty."""
        if not self.queue:
            return "0"
        return "".join(p.label for p in self.queue)


@dataclass
class RouteState:
    """
    Vehicle and queue state for one route.

    Each tick the clock calls the three sub-steps in order:
    reset_on_departure, advance_boarding, start_next_boarding.
    `advance` runs all three. Departure is triggered only by the vehicle
    filling up; a route whose queue runs dry keeps its partly filled
    vehicle indefinitely.
    """

    route: RouteTag
    capacity: int = DEFAULT_CAPACITY
    queue: RouteQueue = field(default_factory=RouteQueue)
    capacity_remaining: int = field(init=False)
    boarding_passenger: Optional[Passenger] = None
    boarding_timer_remaining: int = 0
    status: RouteStatus = RouteStatus.WAITING
    onboard: List[Passenger] = field(default_factory=list)

    # Lifetime count of full vehicles sent off
    departures: int = 0

    def __post_init__(self):
        """Start with an empty vehicle."""
        self.capacity_remaining = self.capacity

    @property
    def onboard_count(self) -> int:
        return len(self.onboard)

    @property
    def is_boarding(self) -> bool:
        return self.boarding_passenger is not None

    @property
    def is_idle(self) -> bool:
        """True when nothing is queued and nobody is boarding."""
        return not self.queue and not self.is_boarding

    def reset_on_departure(self):
        """Bring a vehicle that departed last tick back to an empty Waiting vehicle."""
        if self.status == RouteStatus.DEPARTED:
            self.onboard.clear()
            self.capacity_remaining = self.capacity
            self.status = RouteStatus.WAITING

    def advance_boarding(self):
        """Count down the current boarder and seat them once the timer runs out."""
        if self.boarding_passenger is None:
            return

        self.boarding_timer_remaining -= 1
        if self.boarding_timer_remaining > 0:
            return

        self.onboard.append(self.boarding_passenger)
        self.capacity_remaining -= 1
        self.status = RouteStatus.BOARD
        self.boarding_passenger = None
        self.boarding_timer_remaining = 0

        # Full vehicle leaves the same tick it fills
        if self.capacity_remaining <= 0:
            self.status = RouteStatus.DEPARTED
            self.departures += 1

    def start_next_boarding(self):
        """
        Move the head of the queue into the boarding slot.

        The timer is not decremented in the tick the passenger is dequeued,
        so a passenger with duration d is seated d ticks later (a duration
        of 0 behaves like 1).
        """
        if self.boarding_passenger is not None:
            return
        if not self.queue or self.capacity_remaining <= 0:
            return
        if self.status == RouteStatus.DEPARTED:
            return

        passenger = self.queue.dequeue()
        self.boarding_passenger = passenger
        self.boarding_timer_remaining = passenger.boarding_duration

    def advance(self, tick: int):
        """
        Run one tick of the state machine.

        Args:
            tick: Current simulation tick (not used by the transitions
                themselves, kept for callers that trace by tick)
        """
        self.reset_on_departure()
        self.advance_boarding()
        self.start_next_boarding()

    def snapshot(self) -> RouteSnapshot:
        """Capture the current state as an immutable RouteSnapshot."""
        return RouteSnapshot(
            route=self.route,
            queue=tuple(self.queue),
            capacity_remaining=self.capacity_remaining,
            onboard_count=self.onboard_count,
            status=self.status,
            boarding_passenger=self.boarding_passenger,
            boarding_timer_remaining=self.boarding_timer_remaining,
        )
