"""Basic chess types: colours, pieces, squares, moves and value constants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Color(IntEnum):
    """Side of the board."""

    WHITE = 0
    BLACK = 1

    def __invert__(self) -> Color:
        return Color(int(self) ^ 1)


class PieceType(IntEnum):
    """Kind of piece, independent of colour."""

    NO_PIECE_TYPE = 0
    ALL_PIECES = 0
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveType(IntEnum):
    """Special kind of a move, as stored in its two top bits."""

    NORMAL = 0
    PROMOTION = 1 << 14
    EN_PASSANT = 2 << 14
    CASTLING = 3 << 14


# Pieces are small integers: colour in bit 3, piece type in the low bits.
NO_PIECE = 0
W_PAWN, W_KNIGHT, W_BISHOP, W_ROOK, W_QUEEN, W_KING = range(1, 7)
B_PAWN, B_KNIGHT, B_BISHOP, B_ROOK, B_QUEEN, B_KING = range(9, 15)
PIECES = (
    W_PAWN, W_KNIGHT, W_BISHOP, W_ROOK, W_QUEEN, W_KING,
    B_PAWN, B_KNIGHT, B_BISHOP, B_ROOK, B_QUEEN, B_KING,
)
PIECE_NB = 16
PIECE_CHARS = " PNBRQK  pnbrqk"

SQUARE_NB = 64
SQ_A1, SQ_B1, SQ_C1, SQ_D1, SQ_E1, SQ_F1, SQ_G1, SQ_H1 = range(8)
SQ_A8 = 56
SQ_H8 = 63
SQ_NONE = 64

NORTH = 8
SOUTH = -8
EAST = 1
WEST = -1

FILE_NAMES = "abcdefgh"
RANK_NAMES = "12345678"

# Evaluation scale
MAX_PLY = 246
MAX_MOVES = 256
VALUE_ZERO = 0
VALUE_DRAW = 0
VALUE_NONE = 32002
VALUE_INFINITE = 32001
VALUE_MATE = 32000
VALUE_MATE_IN_MAX_PLY = VALUE_MATE - MAX_PLY
VALUE_MATED_IN_MAX_PLY = -VALUE_MATE_IN_MAX_PLY
VALUE_TB = VALUE_MATE_IN_MAX_PLY - 1
VALUE_TB_WIN_IN_MAX_PLY = VALUE_TB - MAX_PLY
VALUE_TB_LOSS_IN_MAX_PLY = -VALUE_TB_WIN_IN_MAX_PLY

PAWN_VALUE = 208
KNIGHT_VALUE = 781
BISHOP_VALUE = 825
ROOK_VALUE = 1276
QUEEN_VALUE = 2538

_TYPE_VALUES = {
    PieceType.NO_PIECE_TYPE: VALUE_ZERO,
    PieceType.PAWN: PAWN_VALUE,
    PieceType.KNIGHT: KNIGHT_VALUE,
    PieceType.BISHOP: BISHOP_VALUE,
    PieceType.ROOK: ROOK_VALUE,
    PieceType.QUEEN: QUEEN_VALUE,
    PieceType.KING: VALUE_ZERO,
}


def _check_square(square: int) -> int:
    if not 0 <= square < SQUARE_NB:
        raise ValueError(f"square out of range: {square!r}")
    return square


def make_square(file: int, rank: int) -> int:
    """Square index of the given file and rank (both 0..7)."""
    if not (0 <= file < 8 and 0 <= rank < 8):
        raise ValueError(f"file/rank out of range: {file!r}, {rank!r}")
    return (rank << 3) + file


def file_of(square: int) -> int:
    return square & 7


def rank_of(square: int) -> int:
    return square >> 3


def relative_rank(color: Color, square: int) -> int:
    """Rank of the square as seen from the given side."""
    return rank_of(square) ^ (7 * int(color))


def relative_square(color: Color, square: int) -> int:
    """Square mirrored vertically for Black, unchanged for White."""
    return square ^ (56 * int(color))


def square_name(square: int) -> str:
    """Algebraic name of a square, such as 'e4'."""
    _check_square(square)
    return FILE_NAMES[file_of(square)] + RANK_NAMES[rank_of(square)]


def parse_square(name: str) -> int:
    """Square index of an algebraic name such as 'e4'."""
    if len(name) != 2 or name[0] not in FILE_NAMES or name[1] not in RANK_NAMES:
        raise ValueError(f"invalid square name: {name!r}")
    return make_square(FILE_NAMES.index(name[0]), RANK_NAMES.index(name[1]))


def make_piece(color: Color, piece_type: PieceType) -> int:
    return (int(color) << 3) + int(piece_type)


def color_of(piece: int) -> Color:
    if piece not in PIECES:
        raise ValueError(f"not a piece: {piece!r}")
    return Color(piece >> 3)


def type_of(piece: int) -> PieceType:
    if not 0 <= piece < PIECE_NB or piece & 7 > PieceType.KING:
        raise ValueError(f"not a piece: {piece!r}")
    return PieceType(piece & 7)


def piece_value(piece: int) -> int:
    """Material value of a piece; kings and empty squares are worth zero."""
    return _TYPE_VALUES[type_of(piece)]


@dataclass(frozen=True)
class Move:
    """A move from one square to another, with its kind and promotion piece."""

    from_sq: int
    to_sq: int
    move_type: MoveType = MoveType.NORMAL
    promotion_type: PieceType = PieceType.KNIGHT

    def __post_init__(self) -> None:
        _check_square(self.from_sq)
        _check_square(self.to_sq)
        if not PieceType.KNIGHT <= self.promotion_type <= PieceType.QUEEN:
            raise ValueError(f"invalid promotion type: {self.promotion_type!r}")
        object.__setattr__(self, "move_type", MoveType(self.move_type))
        object.__setattr__(self, "promotion_type", PieceType(self.promotion_type))

    @staticmethod
    def none() -> Move:
        """The empty move."""
        return Move(SQ_A1, SQ_A1)

    @staticmethod
    def null() -> Move:
        """The null move, which only passes the turn."""
        return Move(SQ_B1, SQ_B1)

    def is_ok(self) -> bool:
        return self != Move.none() and self != Move.null()

    def from_to(self) -> int:
        """Index combining origin and destination, in 0..4095."""
        return (self.from_sq << 6) | self.to_sq

    def __bool__(self) -> bool:
        return self != Move.none()