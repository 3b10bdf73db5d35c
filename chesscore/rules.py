"""Move legality, check detection, static exchange evaluation and cycle detection."""

from __future__ import annotations

from .attacks import aligned, attacks, between, more_than_one, pawn_attacks, square_bb, zobrist
from .position import Position
from .types import (
    BISHOP_VALUE,
    EAST,
    KNIGHT_VALUE,
    NORTH,
    PAWN_VALUE,
    QUEEN_VALUE,
    ROOK_VALUE,
    SOUTH,
    SQ_C1,
    SQ_D1,
    SQ_F1,
    SQ_G1,
    VALUE_ZERO,
    WEST,
    Color,
    Move,
    MoveType,
    PieceType,
    color_of,
    file_of,
    make_square,
    piece_value,
    rank_of,
    relative_square,
    type_of,
)

_P, _N, _B, _R, _Q, _K = (
    PieceType.PAWN,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.ROOK,
    PieceType.QUEEN,
    PieceType.KING,
)


def _require_ok(move: Move) -> None:
    if not move.is_ok():
        raise ValueError(f"not a real move: {move!r}")


def _pawn_push(color: Color) -> int:
    return NORTH if color == Color.WHITE else SOUTH


def legal(pos: Position, move: Move) -> bool:
    """Whether a pseudo-legal move leaves the mover's king safe."""
    _require_ok(move)
    us = pos.side_to_move
    them = ~us
    from_sq, to_sq = move.from_sq, move.to_sq
    ksq = pos.king_square(us)

    if move.move_type == MoveType.EN_PASSANT:
        capsq = to_sq - _pawn_push(us)
        occupied = (pos.pieces() ^ square_bb(from_sq) ^ square_bb(capsq)) | square_bb(to_sq)
        return not (
            attacks(_R, ksq, occupied) & pos.pieces(_Q, _R, color=them)
        ) and not (attacks(_B, ksq, occupied) & pos.pieces(_Q, _B, color=them))

    if move.move_type == MoveType.CASTLING:
        king_side = to_sq > from_sq
        kto = relative_square(us, SQ_G1 if king_side else SQ_C1)
        step = WEST if kto > from_sq else EAST
        s = kto
        while s != from_sq:
            if pos.attackers_to(s) & pos.pieces(color=them):
                return False
            s += step
        return not pos.chess960 or not (
            pos.state.blockers_for_king[us] & square_bb(move.to_sq)
        )

    if type_of(pos.piece_on(from_sq)) == _K:
        return not (
            pos.attackers_to(to_sq, pos.pieces() ^ square_bb(from_sq)) & pos.pieces(color=them)
        )

    return not (pos.state.blockers_for_king[us] & square_bb(from_sq)) or aligned(
        from_sq, to_sq, ksq
    )


def gives_check(pos: Position, move: Move) -> bool:
    """Whether a pseudo-legal move checks the opponent's king."""
    _require_ok(move)
    us = pos.side_to_move
    them = ~us
    from_sq, to_sq = move.from_sq, move.to_sq
    st = pos.state
    their_king = pos.king_square(them)

    if st.check_squares[type_of(pos.piece_on(from_sq))] & square_bb(to_sq):
        return True

    if st.blockers_for_king[them] & square_bb(from_sq):
        return not aligned(from_sq, to_sq, their_king) or move.move_type == MoveType.CASTLING

    if move.move_type == MoveType.NORMAL:
        return False

    if move.move_type == MoveType.PROMOTION:
        occupied = pos.pieces() ^ square_bb(from_sq)
        return bool(attacks(move.promotion_type, to_sq, occupied) & square_bb(their_king))

    if move.move_type == MoveType.EN_PASSANT:
        capsq = make_square(file_of(to_sq), rank_of(from_sq))
        b = (pos.pieces() ^ square_bb(from_sq) ^ square_bb(capsq)) | square_bb(to_sq)
        return bool(
            (attacks(_R, their_king, b) & pos.pieces(_Q, _R, color=us))
            | (attacks(_B, their_king, b) & pos.pieces(_Q, _B, color=us))
        )

    rto = relative_square(us, SQ_F1 if to_sq > from_sq else SQ_D1)
    return bool(st.check_squares[_R] & square_bb(rto))


def see_ge(pos: Position, move: Move, threshold: int = 0) -> bool:
    """Whether the static exchange value of a move is at least threshold."""
    _require_ok(move)
    if move.move_type != MoveType.NORMAL:
        return VALUE_ZERO >= threshold

    from_sq, to_sq = move.from_sq, move.to_sq

    swap = piece_value(pos.piece_on(to_sq)) - threshold
    if swap < 0:
        return False

    swap = piece_value(pos.piece_on(from_sq)) - swap
    if swap <= 0:
        return True

    occupied = pos.pieces() ^ square_bb(from_sq) ^ square_bb(to_sq)
    stm = pos.side_to_move
    attackers = pos.attackers_to(to_sq, occupied)
    res = 1
    st = pos.state

    while True:
        stm = ~stm
        attackers &= occupied

        stm_attackers = attackers & pos.pieces(color=stm)
        if not stm_attackers:
            break

        if st.pinners[~stm] & occupied:
            stm_attackers &= ~st.blockers_for_king[stm]
            if not stm_attackers:
                break

        res ^= 1

        bb = stm_attackers & pos.pieces(_P)
        if bb:
            swap = PAWN_VALUE - swap
            if swap < res:
                break
            occupied ^= bb & -bb
            attackers |= attacks(_B, to_sq, occupied) & pos.pieces(_B, _Q)
            continue

        bb = stm_attackers & pos.pieces(_N)
        if bb:
            swap = KNIGHT_VALUE - swap
            if swap < res:
                break
            occupied ^= bb & -bb
            continue

        bb = stm_attackers & pos.pieces(_B)
        if bb:
            swap = BISHOP_VALUE - swap
            if swap < res:
                break
            occupied ^= bb & -bb
            attackers |= attacks(_B, to_sq, occupied) & pos.pieces(_B, _Q)
            continue

        bb = stm_attackers & pos.pieces(_R)
        if bb:
            swap = ROOK_VALUE - swap
            if swap < res:
                break
            occupied ^= bb & -bb
            attackers |= attacks(_R, to_sq, occupied) & pos.pieces(_R, _Q)
            continue

        bb = stm_attackers & pos.pieces(_Q)
        if bb:
            swap = QUEEN_VALUE - swap
            if swap < res:
                break
            occupied ^= bb & -bb
            attackers |= (attacks(_B, to_sq, occupied) & pos.pieces(_B, _Q)) | (
                attacks(_R, to_sq, occupied) & pos.pieces(_R, _Q)
            )
            continue

        # Only the king is left: capturing is fine unless the opponent still attacks.
        return bool(res ^ 1) if attackers & ~pos.pieces(color=stm) else bool(res)

    return bool(res)


def has_game_cycle(pos: Position, ply: int) -> bool:
    """Whether the side to move can repeat a position, or an earlier one could reach this one."""
    st = pos.state
    end = min(st.rule50, st.plies_from_null)
    if end < 3:
        return False

    zk = zobrist()
    original_key = st.key
    stp = st.previous

    for i in range(3, end + 1, 2):
        stp = stp.previous.previous
        move = zk.cuckoo_lookup(original_key ^ stp.key)
        if move is None:
            continue
        s1, s2 = move.from_sq, move.to_sq
        if (between(s1, s2) ^ square_bb(s2)) & pos.pieces():
            continue
        if ply > i:
            return True
        mover = pos.piece_on(s2 if pos.empty(s1) else s1)
        if color_of(mover) != pos.side_to_move:
            continue
        if stp.repetition:
            return True
    return False


__all__ = ["legal", "gives_check", "see_ge", "has_game_cycle", "more_than_one", "pawn_attacks"]