"""
Stepping engine: one call to ``step`` is one simulated day.

Pure with respect to its inputs: the grid passed in is never touched and the
generator state comes in and goes out as a ``Seed`` value. Inside a step:

- the incoming grid is the snapshot; a copy of it is the grid in progress
- positions are visited once each in row-major order (y outer, x inner)
- the snapshot decides whose turn it is; the turn itself reads and writes
  the grid in progress, so an agent acting later in the day sees births,
  moves and kills made earlier the same day
- an animal moved or born into a later position was Empty in the snapshot
  and gets no second turn; a snapshot animal that is gone from the grid in
  progress (a rabbit eaten earlier the same day) is skipped

Every uniform choice among N >= 1 candidates is exactly one draw; an empty
candidate set never draws.
"""
from __future__ import annotations

import logging
from typing import Tuple

import numpy as np

from foxesrabbits.cells import EMPTY, Fox, Rabbit
from foxesrabbits.config import FoxConfig, RabbitConfig
from foxesrabbits.energy import Energy, add, can_support, from_int, is_positive, subtract
from foxesrabbits.grid import Dimensions, Grid, Position
from foxesrabbits.seed import Seed, choose, weighted

logger = logging.getLogger(__name__)

INITIAL_ENERGY = 5

# relative weights of the initial population draw
SPAWN_WEIGHTS = (("fox", 1), ("rabbit", 2), ("empty", 3))


def generate_grid(
    dimensions: Dimensions, seed: Seed, initial_energy: int = INITIAL_ENERGY
) -> Tuple[Grid, Seed]:
    """One independent weighted draw per position: fox 1, rabbit 2, empty 3."""
    rng = seed.generator()
    grid = Grid.empty(dimensions)
    energy = from_int(initial_energy)
    for position in grid.positions():
        kind = weighted(SPAWN_WEIGHTS, rng)
        if kind == "fox":
            grid.set(position, Fox(energy))
        elif kind == "rabbit":
            grid.set(position, Rabbit(energy))
    logger.debug("Generated %s with populations %s", grid.dimensions, grid.populations())
    return grid, Seed.of(rng)


def step(
    grid: Grid, fox_config: FoxConfig, rabbit_config: RabbitConfig, seed: Seed
) -> Tuple[Grid, Seed]:
    rng = seed.generator()
    snapshot = grid
    current = grid.copy()
    for position, cell in snapshot.items():
        if isinstance(cell, Fox):
            occupant = current.get(position)
            if isinstance(occupant, Fox):
                fox_turn(current, position, occupant.energy, fox_config, rng)
        elif isinstance(cell, Rabbit):
            occupant = current.get(position)
            if isinstance(occupant, Rabbit):
                rabbit_turn(current, position, occupant.energy, rabbit_config, rng)
    return current, Seed.of(rng)


def fox_turn(
    grid: Grid, position: Position, energy: Energy, config: FoxConfig, rng: np.random.Generator
) -> None:
    energy = subtract(config.cost_of_living, energy)
    if not is_positive(energy):
        grid.set(position, EMPTY)
        return

    rabbits = grid.nearby_rabbits(position)
    if rabbits:
        prey = choose(rabbits, rng)
        grid.set(prey, EMPTY)
        grid.set(position, Fox(add(energy, config.rabbit_nutrition)))
        return

    empties = grid.nearby_empties(position)
    if not empties:
        grid.set(position, Fox(energy))
        return

    if can_support(energy, [config.birth_cost, config.cost_of_living]):
        cub = choose(empties, rng)
        grid.set(position, Fox(subtract(config.birth_cost, energy)))
        grid.set(cub, Fox(config.birth_cost))
        return

    grid.move(position, choose(empties, rng), Fox(energy))


def rabbit_turn(
    grid: Grid, position: Position, energy: Energy, config: RabbitConfig, rng: np.random.Generator
) -> None:
    energy = subtract(config.cost_of_living, energy)
    if not is_positive(energy):
        grid.set(position, EMPTY)
        return

    if not grid.is_safe(position):
        shelters = grid.nearby_safe_empties(position)
        if shelters:
            grid.move(position, choose(shelters, rng), Rabbit(energy))
        else:
            grid.set(position, Rabbit(energy))
        return

    if can_support(energy, [config.birth_cost, config.cost_of_living]):
        nests = grid.nearby_safe_empties(position)
        if nests:
            kit = choose(nests, rng)
            grid.set(position, Rabbit(subtract(config.birth_cost, energy)))
            grid.set(kit, Rabbit(config.birth_cost))
            return

    grid.set(position, Rabbit(add(energy, config.grass_nutrition)))
