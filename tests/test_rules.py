import pytest

from chesscore.position import Position
from chesscore.rules import gives_check, has_game_cycle, legal, see_ge
from chesscore.types import (
    PAWN_VALUE,
    QUEEN_VALUE,
    Move,
    MoveType,
    PieceType,
    parse_square,
)


def mv(a, b, kind=MoveType.NORMAL, promo=PieceType.KNIGHT):
    return Move(parse_square(a), parse_square(b), kind, promo)


def test_simple_pawn_push_is_legal():
    pos = Position()
    assert legal(pos, mv("e2", "e4")) is True


def test_pinned_bishop_cannot_leave_file():
    pos = Position("4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1")
    assert legal(pos, mv("e2", "d3")) is False


def test_king_cannot_step_into_attack():
    pos = Position("4k3/8/8/8/8/8/3r4/4K3 w - - 0 1")
    assert legal(pos, mv("e1", "d1")) is False
    assert legal(pos, mv("e1", "f1")) is True
    assert legal(pos, mv("e1", "d2")) is True


def test_castling_through_attacked_square():
    attacked = Position("4kr2/8/8/8/8/8/8/4K2R w K - 0 1")
    free = Position("4k3/8/8/8/8/8/8/4K2R w K - 0 1")
    castle = mv("e1", "h1", MoveType.CASTLING)
    assert legal(attacked, castle) is False
    assert legal(free, castle) is True


def test_en_passant_exposing_king_is_illegal():
    pos = Position("8/8/8/K2pP2r/8/8/8/7k w - d6 0 1")
    assert legal(pos, mv("e5", "d6", MoveType.EN_PASSANT)) is False


def test_en_passant_without_exposure_is_legal():
    pos = Position("7r/8/8/K2pP3/8/8/8/7k w - d6 0 1")
    assert legal(pos, mv("e5", "d6", MoveType.EN_PASSANT)) is True


def test_direct_check():
    pos = Position("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
    assert gives_check(pos, mv("a1", "a8")) is True
    assert gives_check(pos, mv("a1", "a2")) is False


def test_discovered_check():
    pos = Position("4k3/8/8/8/8/8/4N3/4R1K1 w - - 0 1")
    assert gives_check(pos, mv("e2", "c3")) is True


def test_promotion_check_depends_on_piece():
    pos = Position("7k/P7/8/8/8/8/8/K7 w - - 0 1")
    assert gives_check(pos, mv("a7", "a8", MoveType.PROMOTION, PieceType.QUEEN)) is True
    assert gives_check(pos, mv("a7", "a8", MoveType.PROMOTION, PieceType.KNIGHT)) is False


def test_castling_gives_check_with_rook():
    pos = Position("5k2/8/8/8/8/8/8/4K2R w K - 0 1")
    assert gives_check(pos, mv("e1", "h1", MoveType.CASTLING)) is True


def test_en_passant_discovered_check_through_captured_pawn():
    pos = Position("8/8/8/RPp4k/8/8/8/K7 w - c6 0 1")
    assert pos.ep_square == parse_square("c6")
    assert gives_check(pos, mv("b5", "c6", MoveType.EN_PASSANT)) is True


@pytest.mark.parametrize(
    "fen, moves",
    [
        ("4k3/8/8/8/8/8/8/R3K3 w - - 0 1", [("a1", "a8"), ("a1", "a2"), ("e1", "d1")]),
        ("4k3/8/8/8/8/8/4N3/4R1K1 w - - 0 1", [("e2", "c3"), ("e1", "f1"), ("g1", "h1")]),
    ],
)
def test_gives_check_matches_checkers_after_move(fen, moves):
    for a, b in moves:
        pos = Position(fen)
        move = mv(a, b)
        expected = gives_check(pos, move)
        pos.do_move(move)
        assert bool(pos.checkers) == expected


def test_see_undefended_pawn_capture():
    pos = Position("4k3/8/8/3p4/4P3/8/8/4K3 w - - 0 1")
    move = mv("e4", "d5")
    assert see_ge(pos, move, 0) is True
    assert see_ge(pos, move, PAWN_VALUE) is True
    assert see_ge(pos, move, PAWN_VALUE + 1) is False


def test_see_queen_takes_defended_pawn():
    pos = Position("4k3/2p5/3p4/8/8/8/3Q4/4K3 w - - 0 1")
    move = mv("d2", "d6")
    assert see_ge(pos, move, 0) is False
    assert see_ge(pos, move, PAWN_VALUE - QUEEN_VALUE) is True


def test_see_special_moves_use_zero_value():
    pos = Position("4k3/8/8/8/8/8/8/4K2R w K - 0 1")
    castle = mv("e1", "h1", MoveType.CASTLING)
    assert see_ge(pos, castle, 0) is True
    assert see_ge(pos, castle, 1) is False


def test_game_cycle_after_knight_shuffle():
    pos = Position()
    for a, b in (("g1", "f3"), ("g8", "f6"), ("f3", "g1")):
        pos.do_move(mv(a, b))
    assert has_game_cycle(pos, 4) is True
    assert has_game_cycle(pos, 1) is False


def test_no_game_cycle_in_start_position():
    pos = Position()
    assert has_game_cycle(pos, 10) is False


def test_none_move_is_rejected():
    pos = Position()
    with pytest.raises(ValueError):
        legal(pos, Move.none())
    with pytest.raises(ValueError):
        gives_check(pos, Move.null())