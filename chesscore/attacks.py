"""Bitboards, attack tables, Zobrist keys and the repetition cuckoo tables."""

from __future__ import annotations

from collections.abc import Iterator
from functools import lru_cache

from .types import (
    PIECE_NB,
    PIECES,
    Color,
    Move,
    PieceType,
    file_of,
    make_square,
    rank_of,
    type_of,
)

_MASK64 = (1 << 64) - 1


def popcount(bb: int) -> int:
    return bb.bit_count()


def lsb(bb: int) -> int:
    """Index of the lowest set bit."""
    if not bb:
        raise ValueError("empty bitboard has no least significant square")
    return (bb & -bb).bit_length() - 1


def more_than_one(bb: int) -> bool:
    return bool(bb & (bb - 1))


def iter_squares(bb: int) -> Iterator[int]:
    """Squares of a bitboard, lowest first."""
    while bb:
        low = bb & -bb
        yield low.bit_length() - 1
        bb ^= low


def square_bb(square: int) -> int:
    return 1 << square


_KNIGHT_DELTAS = ((1, 2), (2, 1), (2, -1), (1, -2), (-1, -2), (-2, -1), (-2, 1), (-1, 2))
_KING_DELTAS = ((1, 0), (1, 1), (0, 1), (-1, 1), (-1, 0), (-1, -1), (0, -1), (1, -1))
_ROOK_DIRS = ((1, 0), (-1, 0), (0, 1), (0, -1))
_BISHOP_DIRS = ((1, 1), (1, -1), (-1, 1), (-1, -1))


def _step_attacks(square: int, deltas) -> int:
    f, r = file_of(square), rank_of(square)
    bb = 0
    for df, dr in deltas:
        nf, nr = f + df, r + dr
        if 0 <= nf < 8 and 0 <= nr < 8:
            bb |= 1 << make_square(nf, nr)
    return bb


def _slide(square: int, dirs, occupied: int) -> int:
    bb = 0
    for df, dr in dirs:
        f, r = file_of(square) + df, rank_of(square) + dr
        while 0 <= f < 8 and 0 <= r < 8:
            bit = 1 << make_square(f, r)
            bb |= bit
            if occupied & bit:
                break
            f, r = f + df, r + dr
    return bb


_KNIGHT_ATTACKS = tuple(_step_attacks(s, _KNIGHT_DELTAS) for s in range(64))
_KING_ATTACKS = tuple(_step_attacks(s, _KING_DELTAS) for s in range(64))
_PAWN_ATTACKS = (
    tuple(_step_attacks(s, ((-1, 1), (1, 1))) for s in range(64)),
    tuple(_step_attacks(s, ((-1, -1), (1, -1))) for s in range(64)),
)


def pawn_attacks(color: Color, square: int) -> int:
    """Squares attacked by a pawn of the given colour on the given square."""
    return _PAWN_ATTACKS[int(color)][square]


def attacks(piece_type: PieceType, square: int, occupied: int = 0) -> int:
    """Squares attacked by a non-pawn piece; sliders stop at occupied squares."""
    if piece_type == PieceType.KNIGHT:
        return _KNIGHT_ATTACKS[square]
    if piece_type == PieceType.KING:
        return _KING_ATTACKS[square]
    if piece_type == PieceType.BISHOP:
        return _slide(square, _BISHOP_DIRS, occupied)
    if piece_type == PieceType.ROOK:
        return _slide(square, _ROOK_DIRS, occupied)
    if piece_type == PieceType.QUEEN:
        return _slide(square, _BISHOP_DIRS, occupied) | _slide(square, _ROOK_DIRS, occupied)
    raise ValueError(f"no attack table for piece type {piece_type!r}")


def _build_lines():
    line = [[0] * 64 for _ in range(64)]
    betw = [[0] * 64 for _ in range(64)]
    for s1 in range(64):
        for pt in (PieceType.BISHOP, PieceType.ROOK):
            reach = attacks(pt, s1)
            for s2 in iter_squares(reach):
                line[s1][s2] = (reach & attacks(pt, s2)) | square_bb(s1) | square_bb(s2)
                betw[s1][s2] = attacks(pt, s1, square_bb(s2)) & attacks(pt, s2, square_bb(s1))
        for s2 in range(64):
            betw[s1][s2] |= square_bb(s2)
    return tuple(map(tuple, line)), tuple(map(tuple, betw))


_LINE, _BETWEEN = _build_lines()


def between(s1: int, s2: int) -> int:
    """Squares from s1 (excluded) to s2 (included) along a line; just s2 if not aligned."""
    return _BETWEEN[s1][s2]


def aligned(s1: int, s2: int, s3: int) -> bool:
    """Whether s3 lies on the line through s1 and s2."""
    return bool(_LINE[s1][s2] & square_bb(s3))


class Prng:
    """Xorshift64* pseudo-random generator."""

    def __init__(self, seed: int) -> None:
        if not seed & _MASK64:
            raise ValueError("seed must be non-zero")
        self._state = seed & _MASK64

    def rand(self) -> int:
        """Next 64-bit value."""
        s = self._state
        s ^= s >> 12
        s ^= (s << 25) & _MASK64
        s ^= s >> 27
        self._state = s
        return (s * 2685821657736338717) & _MASK64


_CUCKOO_SIZE = 8192


def _h1(key: int) -> int:
    return key & 0x1FFF


def _h2(key: int) -> int:
    return (key >> 16) & 0x1FFF


class ZobristKeys:
    """Hash keys for positions, plus cuckoo tables of reversible moves."""

    def __init__(self, seed: int = 1070372) -> None:
        rng = Prng(seed)
        psq = [[0] * 64 for _ in range(PIECE_NB)]
        for pc in PIECES:
            for s in range(64):
                psq[pc][s] = rng.rand()
        self.psq = tuple(map(tuple, psq))
        self.enpassant = tuple(rng.rand() for _ in range(8))
        self.castling = tuple(rng.rand() for _ in range(16))
        self.side = rng.rand()
        self.no_pawns = rng.rand()

        self.cuckoo = [0] * _CUCKOO_SIZE
        self.cuckoo_move = [Move.none()] * _CUCKOO_SIZE
        for pc in PIECES:
            pt = type_of(pc)
            if pt == PieceType.PAWN:
                continue
            for s1 in range(64):
                reach = attacks(pt, s1)
                for s2 in iter_squares(reach & ~((2 << s1) - 1)):
                    self._insert(Move(s1, s2), self.psq[pc][s1] ^ self.psq[pc][s2] ^ self.side)

    def _insert(self, move: Move, key: int) -> None:
        i = _h1(key)
        while True:
            self.cuckoo[i], key = key, self.cuckoo[i]
            self.cuckoo_move[i], move = move, self.cuckoo_move[i]
            if not move:
                return
            i = _h2(key) if i == _h1(key) else _h1(key)

    def cuckoo_lookup(self, key: int) -> Move | None:
        """The reversible move whose hash difference is key, if any."""
        for j in (_h1(key), _h2(key)):
            if self.cuckoo[j] == key:
                move = self.cuckoo_move[j]
                return move if move else None
        return None


@lru_cache(maxsize=None)
def zobrist() -> ZobristKeys:
    """The shared key set used by every position."""
    return ZobristKeys()