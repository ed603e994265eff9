from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Amount:
    """A resolved ingredient quantity."""

    value: float

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class InvalidAmount:
    """An amount token that could not be resolved to a number."""

    token: str

    @property
    def ok(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"Invalid amount: {self.token}"


@dataclass(frozen=True)
class UnitConversion:
    unit: str       # metric unit written back, e.g. "ml"
    factor: float   # multiply the imperial amount by this


@dataclass(frozen=True)
class ConvertedQuantity:
    unit: str
    amount: float
