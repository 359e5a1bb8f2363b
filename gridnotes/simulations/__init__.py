"""
Simulation rules: a moving cursor, falling rain and the Game of Life.

Each rule is seeded once when it becomes active and then stepped once per
tick, always producing a new grid.
"""

from .base import Simulation, SimulationKind
from .life import LifeSimulation
from .markers import marker_count, put_markers, reseed_markers
from .mover import MoverSimulation
from .rain import RainSimulation


def create_simulation(kind: SimulationKind, rain_limit_factor: int = 2,
                      life_seed_ratio: float = 0.5) -> Simulation:
    """Factory for the rule implementing ``kind``."""
    if kind is SimulationKind.MOVER:
        return MoverSimulation()
    if kind is SimulationKind.RAIN:
        return RainSimulation(limit_factor=rain_limit_factor)
    if kind is SimulationKind.LIFE:
        return LifeSimulation(seed_ratio=life_seed_ratio)
    raise ValueError(f"Unsupported simulation kind: {kind!r}")


__all__ = [
    'Simulation',
    'SimulationKind',
    'MoverSimulation',
    'RainSimulation',
    'LifeSimulation',
    'create_simulation',
    'marker_count',
    'put_markers',
    'reseed_markers',
]
