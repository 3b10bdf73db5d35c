"""Data structures shared by the search: stack entries, root moves, limits and reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from .score import Score
from .types import SQ_NONE, VALUE_INFINITE, VALUE_ZERO, Color, Move


class NodeType(IntEnum):
    """Kind of node being searched."""

    NON_PV = 0
    PV = 1
    ROOT = 2


@dataclass
class Stack:
    """Per-ply search information."""

    pv: list[Move] | None = None
    continuation_history: Any = None
    ply: int = 0
    current_move: Move = field(default_factory=Move.none)
    excluded_move: Move = field(default_factory=Move.none)
    killers: list[Move] = field(default_factory=lambda: [Move.none(), Move.none()])
    static_eval: int = VALUE_ZERO
    stat_score: int = 0
    move_count: int = 0
    in_check: bool = False
    tt_pv: bool = False
    tt_hit: bool = False
    cutoff_cnt: int = 0


class RootMove:
    """A move at the root with its scores and principal variation.

    Root moves sort in descending order of score, then of previous score.
    """

    def __init__(self, move: Move) -> None:
        self.pv: list[Move] = [move]
        self.effort = 0
        self.score = -VALUE_INFINITE
        self.previous_score = -VALUE_INFINITE
        self.average_score = -VALUE_INFINITE
        self.uci_score = -VALUE_INFINITE
        self.score_lowerbound = False
        self.score_upperbound = False
        self.sel_depth = 0
        self.tb_rank = 0
        self.tb_score = VALUE_ZERO

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Move):
            return self.pv[0] == other
        if isinstance(other, RootMove):
            return self.pv[0] == other.pv[0]
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __lt__(self, other: RootMove) -> bool:
        if not isinstance(other, RootMove):
            return NotImplemented
        if other.score != self.score:
            return other.score < self.score
        return other.previous_score < self.previous_score

    def __repr__(self) -> str:
        return f"RootMove(pv={self.pv!r}, score={self.score})"


@dataclass
class Limits:
    """What the caller asked of the search."""

    searchmoves: list[str] = field(default_factory=list)
    time: list[int] = field(default_factory=lambda: [0, 0])
    inc: list[int] = field(default_factory=lambda: [0, 0])
    npmsec: int = 0
    movetime: int = 0
    start_time: int = 0
    movestogo: int = 0
    depth: int = 0
    mate: int = 0
    perft: int = 0
    infinite: int = 0
    nodes: int = 0
    ponder_mode: bool = False
    cap_sq: int = SQ_NONE

    def use_time_management(self) -> bool:
        """Whether a clock time was given for either side."""
        return bool(self.time[Color.WHITE] or self.time[Color.BLACK])


@dataclass
class InfoShort:
    """Minimal progress report."""

    depth: int
    score: Score


@dataclass
class InfoFull(InfoShort):
    """Full report of one principal variation."""

    sel_depth: int = 0
    multi_pv: int = 1
    wdl: str = ""
    bound: str = ""
    time_ms: int = 0
    nodes: int = 0
    nps: int = 0
    tb_hits: int = 0
    pv: str = ""
    hashfull: int = 0


@dataclass
class InfoIteration:
    """Report of the root move currently being searched."""

    depth: int
    currmove: str
    currmovenumber: int