"""Simulation package."""

from .dispatcher import ArrivalDispatcher, DispatchResult
from .engine import Outcome, SimulationConfig, SimulationEngine, SimulationResult, TickSnapshot
from .state import SimulationState

__all__ = [
    "ArrivalDispatcher",
    "DispatchResult",
    "Outcome",
    "SimulationConfig",
    "SimulationEngine",
    "SimulationResult",
    "SimulationState",
    "TickSnapshot",
]
