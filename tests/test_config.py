import json

import pytest

from foxesrabbits.config import FoxConfig, RabbitConfig, SimulationConfig, Speed, build_config, load_config
from foxesrabbits.energy import Energy
from foxesrabbits.grid import Dimensions


def _write(tmp_path, data):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_defaults():
    cfg = SimulationConfig()
    assert cfg.dimensions == Dimensions(10, 10)
    assert cfg.initial_energy == 5
    assert cfg.fox == FoxConfig(Energy(1), Energy(3), Energy(5))
    assert cfg.rabbit == RabbitConfig(Energy(1), Energy(3), Energy(3))


def test_species_from_dict():
    fox = FoxConfig.from_dict({"cost_of_living": 2, "rabbit_nutrition": 7})
    assert fox == FoxConfig(cost_of_living=Energy(2), birth_cost=Energy(3), rabbit_nutrition=Energy(7))
    with pytest.raises(ValueError):
        RabbitConfig.from_dict({"rabbit_nutrition": 3})
    with pytest.raises(ValueError):
        RabbitConfig.from_dict({"grass_nutrition": "lots"})


def test_load_config(tmp_path):
    path = _write(tmp_path, {"rows": 6, "columns": 8, "seed": 3, "speed": "FAST", "rabbit": {"grass_nutrition": 2}})
    cfg = load_config(path)
    assert cfg.dimensions == Dimensions(6, 8)
    assert cfg.seed == 3
    assert cfg.speed == "fast"
    assert cfg.rabbit.grass_nutrition == Energy(2)
    assert cfg.rabbit.birth_cost == Energy(3)


@pytest.mark.parametrize(
    "data",
    [
        {"width": 10},
        {"fox": {"grass_nutrition": 1}},
        {"rows": 0},
        {"rows": 2.5},
        {"initial_energy": -1},
        {"fox": 3},
        ["rows", 10],
        {"speed": "warp"},
        {"speed": 3},
    ],
)
def test_load_config_rejects_bad_input(tmp_path, data):
    with pytest.raises(ValueError):
        load_config(_write(tmp_path, data))


def test_build_config_file_then_overrides(tmp_path):
    path = _write(tmp_path, {"rows": 6, "fox": {"birth_cost": 4}})
    cfg = build_config(path, {"rows": 12, "fox.rabbit_nutrition": 9, "seed": 5})
    assert cfg.rows == 12
    assert cfg.seed == 5
    assert cfg.fox == FoxConfig(cost_of_living=Energy(1), birth_cost=Energy(4), rabbit_nutrition=Energy(9))


def test_build_config_missing_file_uses_defaults(tmp_path):
    cfg = build_config(tmp_path / "nope.json")
    assert cfg.to_dict() == SimulationConfig().to_dict()


@pytest.mark.parametrize("overrides", [{"height": 3}, {"wolf.cost_of_living": 1}, {"fox.speed": 2}])
def test_build_config_rejects_unknown_overrides(overrides):
    with pytest.raises(ValueError):
        build_config(None, overrides)


@pytest.mark.parametrize("speed", ["warp", "", "medium"])
def test_unknown_speed_is_rejected(speed):
    with pytest.raises(ValueError, match="Unknown speed"):
        build_config(None, {"speed": speed})


def test_speed_names_are_case_insensitive():
    assert build_config(None, {"speed": "Slow"}).speed == "slow"
    assert Speed.parse(build_config(None, {"speed": "FAST"}).speed) is Speed.FAST


def test_to_dict_roundtrips_through_a_file(tmp_path):
    cfg = build_config(None, {"columns": 7, "rabbit.birth_cost": 6})
    assert load_config(_write(tmp_path, cfg.to_dict())).to_dict() == cfg.to_dict()
