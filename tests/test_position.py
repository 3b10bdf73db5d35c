import pytest

from chesscore.attacks import popcount, square_bb, zobrist
from chesscore.position import START_FEN, CastlingRights, Position
from chesscore.types import (
    B_PAWN,
    NO_PIECE,
    QUEEN_VALUE,
    W_KING,
    W_QUEEN,
    W_ROOK,
    Color,
    Move,
    MoveType,
    PieceType,
    parse_square,
    rank_of,
)

EP_FEN = "rnbqkbnr/ppp1p1pp/8/3pPp2/8/8/PPPP1PPP/RNBQKBNR w KQkq f6 0 3"
CASTLE_FEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"


def mv(text, move_type=MoveType.NORMAL, promotion=PieceType.KNIGHT):
    return Move(parse_square(text[:2]), parse_square(text[2:4]), move_type, promotion)


def assert_consistent(pos):
    fresh = Position(pos.fen(), pos.chess960)
    assert pos.key() == fresh.key()
    assert pos.material_key == fresh.material_key
    assert pos.pawn_key == fresh.pawn_key
    assert pos.checkers == fresh.checkers
    assert pos.non_pawn_material() == fresh.non_pawn_material()


def test_start_fen_round_trip():
    assert Position().fen() == START_FEN


def test_start_position_pieces():
    pos = Position()
    assert pos.piece_on(parse_square("e1")) == W_KING
    assert pos.count(PieceType.PAWN, Color.WHITE) == pos.count(PieceType.PAWN, Color.BLACK)
    assert pos.count(PieceType.ALL_PIECES) == popcount(pos.pieces())
    assert pos.empty(parse_square("e4"))


def test_pieces_filters_by_color():
    pos = Position()
    white = pos.pieces(color=Color.WHITE)
    black = pos.pieces(color=Color.BLACK)
    assert white & black == 0
    assert white | black == pos.pieces()
    assert pos.pieces(PieceType.ROOK, PieceType.QUEEN, color=Color.WHITE) & ~white == 0


def test_do_undo_restores_position():
    pos = Position()
    fen0, key0 = pos.fen(), pos.key()
    moves = [mv("e2e4"), mv("d7d5"), mv("e4d5"), mv("d8d5")]
    for m in moves:
        pos.do_move(m)
        assert_consistent(pos)
    for m in reversed(moves):
        pos.undo_move(m)
    assert pos.fen() == fen0
    assert pos.key() == key0


def test_undo_without_move_raises():
    with pytest.raises(ValueError):
        Position().undo_move(mv("e2e4"))


def test_castling_move():
    pos = Position(CASTLE_FEN)
    m = mv("e1h1", MoveType.CASTLING)
    pos.do_move(m)
    assert pos.piece_on(parse_square("g1")) == W_KING
    assert pos.piece_on(parse_square("f1")) == W_ROOK
    assert not pos.can_castle(CastlingRights.WHITE_CASTLING)
    assert pos.can_castle(CastlingRights.BLACK_OO)
    assert_consistent(pos)
    pos.undo_move(m)
    assert pos.fen() == CASTLE_FEN


def test_castling_rook_square_and_impeded():
    pos = Position(CASTLE_FEN)
    assert pos.castling_rook_square(CastlingRights.WHITE_OOO) == parse_square("a1")
    assert not pos.castling_impeded(CastlingRights.BLACK_OO)
    assert Position().castling_impeded(CastlingRights.WHITE_OO)
    with pytest.raises(ValueError):
        pos.castling_impeded(CastlingRights.WHITE_CASTLING)


def test_en_passant_kept_and_captured():
    pos = Position(EP_FEN)
    assert pos.ep_square == parse_square("f6")
    assert pos.fen() == EP_FEN
    m = mv("e5f6", MoveType.EN_PASSANT)
    assert pos.capture(m)
    pos.do_move(m)
    assert pos.piece_on(parse_square("f5")) == NO_PIECE
    assert pos.captured_piece == B_PAWN
    assert_consistent(pos)
    pos.undo_move(m)
    assert pos.fen() == EP_FEN


def test_invalid_en_passant_is_dropped():
    pos = Position("4k3/8/8/8/8/8/8/4K3 w - e6 0 1")
    assert pos.fen().split()[3] == "-"


def test_promotion():
    fen = "8/P6k/8/8/8/8/8/K7 w - - 0 1"
    pos = Position(fen)
    m = mv("a7a8", MoveType.PROMOTION, PieceType.QUEEN)
    assert pos.capture_stage(m)
    pos.do_move(m)
    assert pos.piece_on(parse_square("a8")) == W_QUEEN
    assert pos.non_pawn_material(Color.WHITE) == QUEEN_VALUE
    assert_consistent(pos)
    pos.undo_move(m)
    assert pos.fen() == fen


def test_capture_and_capture_stage():
    pos = Position()
    assert not pos.capture(mv("e2e4"))
    assert not pos.capture_stage(mv("g1f3"))


def test_null_move():
    pos = Position()
    key0 = pos.key()
    pos.do_null_move()
    assert pos.side_to_move == Color.BLACK
    assert pos.key() == key0 ^ zobrist().side
    pos.undo_null_move()
    assert pos.key() == key0
    assert pos.side_to_move == Color.WHITE


def test_null_move_in_check_raises():
    pos = Position("4k3/8/8/8/8/8/8/4K2r w - - 0 1")
    with pytest.raises(ValueError):
        pos.do_null_move()


def test_repetition_detection():
    pos = Position()
    seq = [mv("g1f3"), mv("g8f6"), mv("f3g1")]
    for m in seq:
        pos.do_move(m)
    assert not pos.has_repeated()
    pos.do_move(mv("f6g8"))
    assert pos.state.repetition == 4
    assert pos.has_repeated()
    assert pos.key() == Position().key()


def test_key_after_matches_quiet_move():
    pos = Position()
    m = mv("g1f3")
    expected = pos.key_after(m)
    pos.do_move(m)
    assert pos.key() == expected


def test_rule50_perturbs_key():
    base = "4k3/8/8/8/8/8/8/4K3 w - - {} 1"
    assert Position(base.format(0)).key() == Position(base.format(5)).key()
    assert Position(base.format(0)).key() != Position(base.format(20)).key()


def test_checkers_and_attackers():
    pos = Position("4k3/8/8/8/8/8/8/4K2r w - - 0 1")
    h1 = parse_square("h1")
    assert pos.checkers == square_bb(h1)
    assert pos.attackers_to(pos.king_square(Color.WHITE)) == square_bb(h1)


def test_pins():
    pos = Position("4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1")
    assert pos.state.blockers_for_king[Color.WHITE] == square_bb(parse_square("e2"))
    assert pos.state.pinners[Color.BLACK] == square_bb(parse_square("e7"))


def test_attacks_by_pawns():
    bb = Position().attacks_by(PieceType.PAWN, Color.WHITE)
    squares = [s for s in range(64) if bb & square_bb(s)]
    assert len(squares) == 8
    assert all(rank_of(s) == 2 for s in squares)


def test_set_endgame():
    pos = Position().set_endgame("KBPKN", Color.WHITE)
    assert pos.fen() == "8/kn6/8/8/8/8/KBP5/8 w - - 0 10"
    other = Position("k7/n7/8/8/8/8/8/KBP5 w - - 0 1")
    assert pos.material_key == other.material_key


def test_set_endgame_invalid():
    with pytest.raises(ValueError):
        Position().set_endgame("QKK", Color.WHITE)


def test_chess960_castling_letters():
    pos = Position(START_FEN, chess960=True)
    assert pos.fen() == "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w HAha - 0 1"
    assert Position(pos.fen(), chess960=True).key() == pos.key()


def test_missing_king_raises():
    with pytest.raises(ValueError):
        Position("8/8/8/8/8/8/8/4K3 w - - 0 1")


def test_castling_without_rook_raises():
    with pytest.raises(ValueError):
        Position("4k3/8/8/8/8/8/8/4K3 w K - 0 1")


def test_render_contains_fen():
    text = Position().render()
    assert f"Fen: {START_FEN}" in text
    assert f"Key: {Position().key():016X}" in text