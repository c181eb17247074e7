"""Synthetic passenger feed generation."""

from pathlib import Path
from typing import Dict, List, Optional, Union

import numpy as np

from ..models.passenger import Passenger, RouteTag


DEFAULT_ROUTE_WEIGHTS: Dict[str, float] = {
    RouteTag.SHORT.value: 0.4,
    RouteTag.LONG.value: 0.3,
    RouteTag.CITY.value: 0.3,
}


def generate_feed(
    n_ticks: int,
    arrival_rate: float = 1.0,
    route_weights: Optional[Dict[str, float]] = None,
    duration_mean: float = 2.0,
    random_seed: Optional[int] = None,
) -> List[Passenger]:
    """
    Generate a random passenger feed.

    Arrivals per tick are Poisson distributed. Each passenger picks a route
    from `route_weights` (tags outside S/L/C are allowed and will be dropped
    at dispatch) and a boarding duration of 1 + Poisson(duration_mean - 1).

    Args:
        n_ticks: Number of ticks over which passengers arrive
        arrival_rate: Mean arrivals per tick
        route_weights: Relative weight per route tag
        duration_mean: Mean boarding duration in ticks (>= 1)
        random_seed: Random seed for reproducibility

    Returns:
        Passengers sorted by arrival tick
    """
    if n_ticks < 0:
        raise ValueError("n_ticks must be non-negative")
    if arrival_rate < 0:
        raise ValueError("arrival_rate must be non-negative")
    if duration_mean < 1:
        raise ValueError("duration_mean must be at least 1")

    weights = route_weights or DEFAULT_ROUTE_WEIGHTS
    tags = list(weights.keys())
    probs = np.array([weights[t] for t in tags], dtype=float)
    if (probs < 0).any() or probs.sum() <= 0:
        raise ValueError("route_weights must be non-negative with a positive total")
    probs = probs / probs.sum()

    rng = np.random.default_rng(random_seed)
    counts = rng.poisson(arrival_rate, size=n_ticks)

    passengers = []
    for tick, count in enumerate(counts):
        if count == 0:
            continue
        routes = rng.choice(len(tags), size=count, p=probs)
        durations = 1 + rng.poisson(duration_mean - 1, size=count)
        for route_idx, duration in zip(routes, durations):
            passengers.append(Passenger(
                arrival_tick=tick,
                route_tag=tags[route_idx],
                boarding_duration=int(duration),
            ))

    return passengers


def generate_feed_content(passengers: List[Passenger]) -> str:
    """
    Render passengers in the feed file format.

    Args:
        passengers: Passengers to write

    Returns:
        Feed content, one `tick, tag, duration` line per passenger
    """
    return "".join(
        f"{p.arrival_tick}, {p.route_tag}, {p.boarding_duration}\n" for p in passengers
    )


def write_feed(passengers: List[Passenger], file_path: Union[str, Path]) -> str:
    """Write passengers to a feed file and return its path."""
    with open(file_path, 'w', encoding='utf-8') as f:
        f.write(generate_feed_content(passengers))
    return str(file_path)
