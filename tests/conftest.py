"""
Shared pytest fixtures for taxirank tests.
"""

from pathlib import Path
from typing import List, Tuple

import pytest

from taxirank.models.passenger import Passenger


def make_feed(records: List[Tuple[int, str, int]]) -> List[Passenger]:
    """Build passengers from (arrival_tick, route_tag, boarding_duration) triples."""
    return [
        Passenger(arrival_tick=tick, route_tag=tag, boarding_duration=duration)
        for tick, tag, duration in records
    ]


@pytest.fixture
def five_short_passengers() -> List[Passenger]:
    """Five one-tick boarders for the Short route, all arriving at tick 0."""
    return make_feed([(0, "S", 1)] * 5)


@pytest.fixture
def sample_feed_path() -> Path:
    """Path to the bundled example feed."""
    return Path(__file__).parent.parent / "data" / "taxiData.txt"


@pytest.fixture
def feed_file(tmp_path) -> Path:
    """A small feed file written to a temporary directory."""
    path = tmp_path / "feed.txt"
    path.write_text("0, S, 1\n0, L, 2\n1, C, 1\n", encoding="utf-8")
    return path
