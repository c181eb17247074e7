"""Models package."""

from .passenger import Passenger, RouteTag
from .route import DEFAULT_CAPACITY, RouteQueue, RouteSnapshot, RouteState, RouteStatus

__all__ = [
    "Passenger",
    "RouteTag",
    "DEFAULT_CAPACITY",
    "RouteQueue",
    "RouteSnapshot",
    "RouteState",
    "RouteStatus",
]
