"""
Configuration for a fox/rabbit run.

Species configs are immutable and swapped wholesale between ticks.
``SimulationConfig`` holds everything needed to start a game; it can be
seeded from a JSON file and then patched with overrides, e.g.

    {
        "rows": 10,
        "columns": 10,
        "seed": 7,
        "fox": {"cost_of_living": 1, "birth_cost": 3, "rabbit_nutrition": 5},
        "rabbit": {"grass_nutrition": 2}
    }
"""
from __future__ import annotations

import enum
import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, Mapping, Optional

from foxesrabbits.energy import Energy, from_int
from foxesrabbits.grid import Dimensions


class Speed(enum.Enum):
    SLOW = 1.0
    NORMAL = 0.5
    FAST = 0.1

    @property
    def interval(self) -> float:
        """Seconds between ticks."""
        return self.value

    @property
    def fps(self) -> float:
        return 1.0 / self.value

    @classmethod
    def parse(cls, name: str) -> Speed:
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown speed {name!r}, expected one of {[s.name.lower() for s in cls]}") from None


@dataclass(frozen=True)
class FoxConfig:
    cost_of_living: Energy = Energy(1)
    birth_cost: Energy = Energy(3)
    rabbit_nutrition: Energy = Energy(5)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> FoxConfig:
        return _species_from_dict(cls, data)


@dataclass(frozen=True)
class RabbitConfig:
    cost_of_living: Energy = Energy(1)
    birth_cost: Energy = Energy(3)
    grass_nutrition: Energy = Energy(3)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> RabbitConfig:
        return _species_from_dict(cls, data)


def _species_from_dict(cls, data: Mapping[str, object]):
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} field(s): {sorted(unknown)}")
    values = {}
    for name, value in data.items():
        values[name] = value if isinstance(value, Energy) else from_int(_as_int(f"{cls.__name__}.{name}", value))
    return cls(**values)


def _as_int(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or int(value) != value:
        raise ValueError(f"Invalid integer for {name}: {value!r}")
    return int(value)


def species_to_dict(config) -> Dict[str, int]:
    return {f.name: getattr(config, f.name).value for f in fields(config)}


@dataclass
class SimulationConfig:
    rows: int = 10
    columns: int = 10
    initial_energy: int = 5
    seed: int = 1
    speed: str = "normal"
    fox: FoxConfig = field(default_factory=FoxConfig)
    rabbit: RabbitConfig = field(default_factory=RabbitConfig)

    @property
    def dimensions(self) -> Dimensions:
        return Dimensions(self.rows, self.columns)

    def to_dict(self) -> Dict[str, object]:
        return {
            "rows": self.rows,
            "columns": self.columns,
            "initial_energy": self.initial_energy,
            "seed": self.seed,
            "speed": self.speed,
            "fox": species_to_dict(self.fox),
            "rabbit": species_to_dict(self.rabbit),
        }


_SPECIES_FIELDS = {"fox": FoxConfig, "rabbit": RabbitConfig}


def _apply(cfg: SimulationConfig, name: str, value: object) -> None:
    if name in _SPECIES_FIELDS:
        if not isinstance(value, Mapping):
            raise ValueError(f"Expected a mapping for {name}: {value!r}")
        current = species_to_dict(getattr(cfg, name))
        current.update(value)
        setattr(cfg, name, _SPECIES_FIELDS[name].from_dict(current))
        return
    if name == "speed":
        if not isinstance(value, str):
            raise ValueError(f"Invalid speed: {value!r}")
        cfg.speed = value.lower()
        return
    setattr(cfg, name, _as_int(name, value))


def _validate(cfg: SimulationConfig) -> SimulationConfig:
    if cfg.rows <= 0 or cfg.columns <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {cfg.rows}x{cfg.columns}")
    if cfg.initial_energy <= 0:
        raise ValueError(f"initial_energy must be positive, got {cfg.initial_energy}")
    Speed.parse(cfg.speed)
    return cfg


def load_config(path: str | Path) -> SimulationConfig:
    with open(Path(path), "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must hold a JSON object")
    cfg = SimulationConfig()
    known = {f.name for f in fields(SimulationConfig)}
    for name, value in data.items():
        if name not in known:
            raise ValueError(f"Unknown SimulationConfig field: {name}")
        _apply(cfg, name, value)
    return _validate(cfg)


def build_config(
    path: Optional[str | Path] = None, overrides: Optional[Mapping[str, object]] = None
) -> SimulationConfig:
    """
    Config file first (if given and present), then overrides. Overrides take
    top-level names ("rows") or dotted species names ("fox.birth_cost").
    """
    if path is not None and Path(path).exists():
        cfg = load_config(path)
    else:
        cfg = SimulationConfig()
    if overrides:
        known = {f.name for f in fields(SimulationConfig)}
        for key, value in overrides.items():
            if "." in key:
                species, _, attr = key.partition(".")
                if species not in _SPECIES_FIELDS:
                    raise ValueError(f"Unknown SimulationConfig field: {key}")
                _apply(cfg, species, {attr: value})
            elif key in known:
                _apply(cfg, key, value)
            else:
                raise ValueError(f"Unknown SimulationConfig field: {key}")
    return _validate(cfg)
