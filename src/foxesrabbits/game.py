"""
Game loop around the stepping engine.

``GameState`` owns the grid, the generator state, both species configs, the
day counter and the energy history. Each tick hands grid + configs + seed to
``engine.step`` and keeps the new grid and seed; the old grid is dropped.
The game ends as soon as either species is gone.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from foxesrabbits import engine
from foxesrabbits.config import FoxConfig, RabbitConfig, SimulationConfig, Speed
from foxesrabbits.grid import EnergyStat, Grid, Populations
from foxesrabbits.seed import Seed

logger = logging.getLogger(__name__)


class Status(enum.Enum):
    PLAYING = "playing"
    PAUSED = "paused"
    ENDED = "ended"


@dataclass
class GameState:
    grid: Grid
    seed: Seed
    fox_config: FoxConfig
    rabbit_config: RabbitConfig
    initial_energy: int = engine.INITIAL_ENERGY
    days_elapsed: int = 0
    energy_history: List[EnergyStat] = field(default_factory=list)
    speed: Speed = Speed.NORMAL
    status: Status = Status.PLAYING

    @property
    def populations(self) -> Populations:
        return self.grid.populations()


def is_extinct(populations: Populations) -> bool:
    return populations.foxes == 0 or populations.rabbits == 0


def new_game(config: SimulationConfig) -> GameState:
    grid, seed = engine.generate_grid(config.dimensions, Seed.from_int(config.seed), config.initial_energy)
    state = GameState(
        grid=grid,
        seed=seed,
        fox_config=config.fox,
        rabbit_config=config.rabbit,
        initial_energy=config.initial_energy,
        speed=Speed.parse(config.speed),
    )
    _start(state)
    return state


def _start(state: GameState) -> None:
    state.days_elapsed = 0
    state.energy_history = [state.grid.energy_stats()]
    populations = state.populations
    if is_extinct(populations):
        logger.info("Generated grid already has an extinct species: %s", populations)
        state.status = Status.ENDED
    else:
        state.status = Status.PLAYING


def advance(state: GameState) -> Populations:
    """One tick. Does nothing unless the game is playing."""
    if state.status is not Status.PLAYING:
        return state.populations
    state.grid, state.seed = engine.step(state.grid, state.fox_config, state.rabbit_config, state.seed)
    state.days_elapsed += 1
    state.energy_history.append(state.grid.energy_stats())
    populations = state.populations
    if is_extinct(populations):
        state.status = Status.ENDED
        survivor = "foxes" if populations.foxes else "rabbits" if populations.rabbits else "nobody"
        logger.info("Extinction on day %d: %s left standing", state.days_elapsed, survivor)
    return populations


def reset(state: GameState) -> None:
    """New random grid from the current seed; configs and speed are kept."""
    state.grid, state.seed = engine.generate_grid(state.grid.dimensions, state.seed, state.initial_energy)
    _start(state)
    logger.info("Reset: %s", state.populations)


def toggle_pause(state: GameState) -> None:
    if state.status is Status.PLAYING:
        state.status = Status.PAUSED
    elif state.status is Status.PAUSED:
        state.status = Status.PLAYING


def set_speed(state: GameState, speed: Speed) -> None:
    state.speed = speed


def set_fox_config(state: GameState, config: FoxConfig) -> None:
    state.fox_config = config


def set_rabbit_config(state: GameState, config: RabbitConfig) -> None:
    state.rabbit_config = config


def _log_progress(state: GameState) -> None:
    populations = state.populations
    stats = state.energy_history[-1]
    logger.info(
        "day=%04d foxes=%3d rabbits=%3d fox_energy=%4d rabbit_energy=%4d",
        state.days_elapsed, populations.foxes, populations.rabbits,
        stats.foxes.value, stats.rabbits.value,
    )


def run_simulation(
    config: Optional[SimulationConfig] = None,
    days: int = 200,
    log_every: int = 10,
    renderer=None,
) -> GameState:
    """
    Runs until ``days`` ticks have been taken or a species dies out. Without a
    renderer this is a tight headless loop; with one, the renderer paces the
    ticks and may pause, reset or quit.
    """
    cfg = config or SimulationConfig()
    state = new_game(cfg)
    _log_progress(state)
    while state.days_elapsed < days:
        if renderer is not None:
            if not renderer.update(state):
                break
            if state.status is Status.PLAYING:
                advance(state)
            continue
        if state.status is not Status.PLAYING:
            break
        advance(state)
        if log_every > 0 and (state.days_elapsed % log_every == 0 or state.status is Status.ENDED):
            _log_progress(state)
    if renderer is not None:
        renderer.close()
    _log_progress(state)
    return state
