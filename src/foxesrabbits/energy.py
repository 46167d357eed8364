"""
Energy is the life resource of every fox and rabbit.

Plain signed integer arithmetic: nothing clamps, so a value may dip to zero
or below right after the cost of living is paid. Whoever holds the value
decides what that means (starvation).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True, order=True)
class Energy:
    value: int = 0

    def __add__(self, other: Energy) -> Energy:
        return Energy(self.value + other.value)

    def __sub__(self, other: Energy) -> Energy:
        return Energy(self.value - other.value)

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"Energy({self.value})"


ZERO = Energy(0)


def from_int(value: int) -> Energy:
    return Energy(int(value))


def to_int(energy: Energy) -> int:
    return energy.value


def add(a: Energy, b: Energy) -> Energy:
    return a + b


def subtract(cost: Energy, value: Energy) -> Energy:
    """Returns ``value - cost`` (cost first, so it reads as "subtract cost from")."""
    return value - cost


def total(energies: Iterable[Energy]) -> Energy:
    result = ZERO
    for energy in energies:
        result = result + energy
    return result


def is_positive(energy: Energy) -> bool:
    return energy.value > 0


def is_greater_than(a: Energy, b: Energy) -> bool:
    """True when ``b`` exceeds ``a``."""
    return b.value > a.value


def can_support(energy: Energy, costs: Iterable[Energy]) -> bool:
    """True when ``energy`` strictly exceeds the sum of ``costs``."""
    return is_greater_than(total(costs), energy)
