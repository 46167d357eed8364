from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from foxesrabbits.energy import Energy


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Fox:
    energy: Energy


@dataclass(frozen=True)
class Rabbit:
    energy: Energy


Cell = Union[Empty, Fox, Rabbit]

EMPTY = Empty()
