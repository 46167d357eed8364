"""
Explicit pseudo-random generator state.

A ``Seed`` is a plain, comparable snapshot of a numpy PCG64 bit generator. It
goes into every call that needs randomness and a successor ``Seed`` comes back
out, so the same grid + configs + seed always reproduce the same result.
There is no module-level generator anywhere in the package.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple, TypeVar

import numpy as np

T = TypeVar("T")


@dataclass(frozen=True)
class Seed:
    state: int
    inc: int
    has_uint32: int = 0
    uinteger: int = 0

    @classmethod
    def from_int(cls, value: int) -> Seed:
        return cls.of(np.random.Generator(np.random.PCG64(value)))

    @classmethod
    def of(cls, rng: np.random.Generator) -> Seed:
        raw = rng.bit_generator.state
        return cls(
            state=int(raw["state"]["state"]),
            inc=int(raw["state"]["inc"]),
            has_uint32=int(raw["has_uint32"]),
            uinteger=int(raw["uinteger"]),
        )

    def generator(self) -> np.random.Generator:
        bit_generator = np.random.PCG64()
        bit_generator.state = {
            "bit_generator": "PCG64",
            "state": {"state": self.state, "inc": self.inc},
            "has_uint32": self.has_uint32,
            "uinteger": self.uinteger,
        }
        return np.random.Generator(bit_generator)


def choose(candidates: Sequence[T], rng: np.random.Generator) -> T:
    """
    Uniform pick among a non-empty sequence, always exactly one draw, even for
    a single candidate. ``rng.random()`` is used rather than
    ``rng.integers(n)`` because numpy skips the draw entirely when n == 1.
    """
    if not candidates:
        raise ValueError("choose() needs at least one candidate")
    index = min(int(rng.random() * len(candidates)), len(candidates) - 1)
    return candidates[index]


def weighted(table: Sequence[Tuple[T, int]], rng: np.random.Generator) -> T:
    """One draw over ``(value, weight)`` pairs with integer relative weights."""
    total_weight = sum(weight for _, weight in table)
    if total_weight <= 0:
        raise ValueError("weighted() needs a positive total weight")
    roll = int(rng.integers(total_weight))
    for value, weight in table:
        if roll < weight:
            return value
        roll -= weight
    # unreachable: roll < total_weight
    return table[-1][0]
