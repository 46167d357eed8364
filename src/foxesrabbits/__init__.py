"""
Fox/rabbit gridworld ecosystem.
Pure-Python stepping engine over a numpy-backed grid, discrete days,
explicitly threaded generator state.
"""
from foxesrabbits.cells import EMPTY, Cell, Empty, Fox, Rabbit
from foxesrabbits.config import FoxConfig, RabbitConfig, SimulationConfig, build_config, load_config
from foxesrabbits.energy import Energy
from foxesrabbits.engine import generate_grid, step
from foxesrabbits.grid import Dimensions, EnergyStat, Grid, Populations, Position
from foxesrabbits.seed import Seed

__all__ = [
    "EMPTY",
    "Cell",
    "Dimensions",
    "Empty",
    "Energy",
    "EnergyStat",
    "Fox",
    "FoxConfig",
    "Grid",
    "Populations",
    "Position",
    "Rabbit",
    "RabbitConfig",
    "Seed",
    "SimulationConfig",
    "build_config",
    "generate_grid",
    "load_config",
    "step",
]
