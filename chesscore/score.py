"""Classification of engine values into centipawn, mate and tablebase scores."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Union

from .types import VALUE_INFINITE, VALUE_MATE, VALUE_TB, VALUE_TB_WIN_IN_MAX_PLY


@dataclass(frozen=True)
class Mate:
    """Forced mate; positive plies when the side to move mates, negative when mated."""

    plies: int


@dataclass(frozen=True)
class Tablebase:
    """Tablebase result; plies is signed like Mate, win tells which side wins."""

    plies: int
    win: bool


@dataclass(frozen=True)
class InternalUnits:
    """An ordinary evaluation, converted to the caller's units."""

    value: int


Score = Union[Mate, Tablebase, InternalUnits]


def to_score(value: int, to_cp: Callable[[int], int]) -> Score:
    """Classify an engine value; to_cp converts ordinary values to centipawns."""
    if not -VALUE_INFINITE < value < VALUE_INFINITE:
        raise ValueError(f"value out of range: {value!r}")

    magnitude = abs(value)
    if magnitude < VALUE_TB_WIN_IN_MAX_PLY:
        return InternalUnits(to_cp(value))
    if magnitude <= VALUE_TB:
        distance = VALUE_TB - magnitude
        return Tablebase(distance, True) if value > 0 else Tablebase(-distance, False)
    distance = VALUE_MATE - magnitude
    return Mate(distance if value > 0 else -distance)