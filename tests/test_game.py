import logging

import pytest

from foxesrabbits import game
from foxesrabbits.cells import Fox, Rabbit
from foxesrabbits.config import FoxConfig, RabbitConfig, SimulationConfig, build_config
from foxesrabbits.energy import Energy
from foxesrabbits.game import GameState, Speed, Status
from foxesrabbits.grid import Dimensions, Grid, Populations, Position
from foxesrabbits.seed import Seed


def _state(placed, rows=3, columns=3, seed=0):
    grid = Grid.empty(Dimensions(rows, columns))
    for (x, y), cell in placed.items():
        grid.set(Position(x, y), cell)
    state = GameState(grid=grid, seed=Seed.from_int(seed), fox_config=FoxConfig(), rabbit_config=RabbitConfig())
    state.energy_history.append(grid.energy_stats())
    return state


class FakeRenderer:
    def __init__(self, frames):
        self.frames = frames
        self.updates = 0
        self.closed = False

    def update(self, state):
        self.updates += 1
        return self.updates <= self.frames

    def close(self):
        self.closed = True


def test_new_game():
    state = game.new_game(SimulationConfig(rows=8, columns=9, seed=3, speed="fast"))
    assert state.grid.dimensions == Dimensions(8, 9)
    assert state.days_elapsed == 0
    assert state.speed is Speed.FAST
    assert len(state.energy_history) == 1
    assert state.energy_history[0] == state.grid.energy_stats()
    assert state.status in (Status.PLAYING, Status.ENDED)


def test_new_game_is_reproducible():
    a = game.new_game(SimulationConfig(seed=12))
    b = game.new_game(SimulationConfig(seed=12))
    assert a.grid == b.grid
    assert a.seed == b.seed


def test_new_game_rejects_unknown_speed():
    with pytest.raises(ValueError):
        game.new_game(SimulationConfig(speed="warp"))


def test_advance_records_a_day():
    state = _state({(0, 0): Fox(Energy(5)), (2, 2): Rabbit(Energy(5))})
    populations = game.advance(state)
    assert state.days_elapsed == 1
    assert len(state.energy_history) == 2
    assert state.energy_history[-1] == state.grid.energy_stats()
    assert populations == state.populations


def test_extinction_ends_the_game(caplog):
    state = _state({(0, 0): Fox(Energy(1)), (2, 2): Rabbit(Energy(5))})
    with caplog.at_level(logging.INFO, logger="foxesrabbits.game"):
        populations = game.advance(state)
    assert populations == Populations(foxes=0, rabbits=1)
    assert state.status is Status.ENDED
    assert "Extinction on day 1" in caplog.text

    grid = state.grid
    game.advance(state)
    assert state.days_elapsed == 1
    assert state.grid is grid


def test_pause_blocks_ticks():
    state = _state({(0, 0): Fox(Energy(5)), (2, 2): Rabbit(Energy(5))})
    game.toggle_pause(state)
    assert state.status is Status.PAUSED
    game.advance(state)
    assert state.days_elapsed == 0
    game.toggle_pause(state)
    assert state.status is Status.PLAYING
    game.advance(state)
    assert state.days_elapsed == 1


def test_toggle_pause_does_not_revive_an_ended_game():
    state = _state({(0, 0): Fox(Energy(5))})
    state.status = Status.ENDED
    game.toggle_pause(state)
    assert state.status is Status.ENDED


def test_configs_are_swapped_between_ticks():
    state = _state({(1, 1): Rabbit(Energy(5)), (0, 2): Fox(Energy(50))}, rows=3, columns=3)
    game.set_rabbit_config(state, RabbitConfig(cost_of_living=Energy(10)))
    game.set_fox_config(state, FoxConfig(cost_of_living=Energy(2)))
    game.advance(state)
    # the rabbit starved under its new cost of living
    assert state.populations.rabbits == 0
    assert state.energy_history[-1].foxes.value >= 48
    game.set_speed(state, Speed.SLOW)
    assert state.speed.interval == 1.0


def test_reset_keeps_configs_and_clears_history():
    state = game.new_game(build_config(None, {"seed": 4, "fox.birth_cost": 6}))
    for _ in range(3):
        game.advance(state)
    old_seed = state.seed
    game.reset(state)
    assert state.days_elapsed == 0
    assert len(state.energy_history) == 1
    assert state.fox_config.birth_cost == Energy(6)
    assert state.seed != old_seed
    assert {c.energy for c in state.grid.cells() if isinstance(c, (Fox, Rabbit))} <= {Energy(5)}


@pytest.mark.parametrize("foxes, rabbits, extinct", [(0, 3, True), (2, 0, True), (0, 0, True), (1, 1, False)])
def test_is_extinct(foxes, rabbits, extinct):
    assert game.is_extinct(Populations(foxes, rabbits)) is extinct


def test_speed():
    assert Speed.parse("fast") is Speed.FAST
    assert Speed.FAST.fps == pytest.approx(10.0)
    assert Speed.NORMAL.interval == 0.5


def test_run_simulation_headless(caplog):
    with caplog.at_level(logging.INFO, logger="foxesrabbits.game"):
        state = game.run_simulation(SimulationConfig(seed=2), days=15, log_every=5)
    assert state.days_elapsed <= 15
    assert len(state.energy_history) == state.days_elapsed + 1
    if state.status is Status.PLAYING:
        assert state.days_elapsed == 15
    assert "day=0000" in caplog.text


def test_run_simulation_stops_on_extinction():
    cfg = build_config(None, {"fox.cost_of_living": 100})
    state = game.run_simulation(cfg, days=50)
    assert state.status is Status.ENDED
    assert state.days_elapsed <= 1
    assert state.populations.foxes == 0


def test_run_simulation_lets_the_renderer_quit():
    renderer = FakeRenderer(frames=3)
    state = game.run_simulation(SimulationConfig(seed=2), days=100, renderer=renderer)
    assert renderer.closed
    assert renderer.updates == 4
    assert state.days_elapsed <= 3
