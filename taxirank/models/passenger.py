"""Passenger and route tag models."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RouteTag(Enum):
    """Route a passenger wants to travel on."""
    SHORT = "S"  # Short-distance route
    LONG = "L"  # Long-distance route
    CITY = "C"  # City route

    @classmethod
    def from_char(cls, char: str) -> Optional["RouteTag"]:
        """
        Look up a route by its single-character tag.

        Args:
            char: Raw tag as it appears in the feed

        Returns:
            Matching RouteTag, or None if the tag is not recognised
        """
        for tag in cls:
            if tag.value == char:
                return tag
        return None


@dataclass(frozen=True)
class Passenger:
    """
    A single passenger record from the arrival feed.

    The raw route tag is kept as read so that unroutable passengers can
    still travel through the feed and be dropped at dispatch time.
    """

    arrival_tick: int
    route_tag: str
    boarding_duration: int

    @property
    def route(self) -> Optional[RouteTag]:
        """Resolved route, or None for an unknown tag."""
        return RouteTag.from_char(self.route_tag)

    @property
    def label(self) -> str:
        """Compact `T(d)` form used in reports."""
        return f"{self.route_tag}({self.boarding_duration})"

    def __repr__(self) -> str:
        return (
            f"Passenger(tick={self.arrival_tick}, route={self.route_tag}, "
            f"duration={self.boarding_duration})"
        )
