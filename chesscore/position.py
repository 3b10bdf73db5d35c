"""Board representation: pieces, side to move, castling, hash keys and move making."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag

from .attacks import (
    attacks,
    between,
    iter_squares,
    lsb,
    more_than_one,
    pawn_attacks,
    square_bb,
    zobrist,
)
from .types import (
    EAST,
    NO_PIECE,
    NORTH,
    PIECE_CHARS,
    PIECE_NB,
    PIECES,
    SOUTH,
    SQ_A1,
    SQ_A8,
    SQ_C1,
    SQ_D1,
    SQ_F1,
    SQ_G1,
    SQ_H1,
    SQ_NONE,
    SQUARE_NB,
    Color,
    Move,
    MoveType,
    PieceType,
    color_of,
    file_of,
    make_piece,
    make_square,
    piece_value,
    relative_rank,
    relative_square,
    square_name,
    type_of,
)

START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_MASK64 = (1 << 64) - 1


class CastlingRights(IntFlag):
    """Castling rights as a set of flags."""

    NO_CASTLING = 0
    WHITE_OO = 1
    WHITE_OOO = 2
    BLACK_OO = 4
    BLACK_OOO = 8
    KING_SIDE = WHITE_OO | BLACK_OO
    QUEEN_SIDE = WHITE_OOO | BLACK_OOO
    WHITE_CASTLING = WHITE_OO | WHITE_OOO
    BLACK_CASTLING = BLACK_OO | BLACK_OOO
    ANY_CASTLING = WHITE_CASTLING | BLACK_CASTLING


_SINGLE_RIGHTS = (
    CastlingRights.WHITE_OO,
    CastlingRights.WHITE_OOO,
    CastlingRights.BLACK_OO,
    CastlingRights.BLACK_OOO,
)


def _side_rights(color: Color) -> int:
    return int(CastlingRights.WHITE_CASTLING if color == Color.WHITE else CastlingRights.BLACK_CASTLING)


def _pawn_push(color: Color) -> int:
    return NORTH if color == Color.WHITE else SOUTH


def _make_key(seed: int) -> int:
    return (seed * 6364136223846793005 + 1442695040888963407) & _MASK64


def _leading_int(text: str) -> int:
    """Integer at the start of text, or 0 when there is none."""
    end = 1 if text[:1] in ("+", "-") else 0
    while end < len(text) and text[end].isascii() and text[end].isdigit():
        end += 1
    try:
        return int(text[:end])
    except ValueError:
        return 0


@dataclass
class StateInfo:
    """Data needed to restore a position when a move is taken back."""

    material_key: int = 0
    pawn_key: int = 0
    non_pawn_material: list[int] = field(default_factory=lambda: [0, 0])
    castling_rights: int = 0
    rule50: int = 0
    plies_from_null: int = 0
    ep_square: int = SQ_NONE

    key: int = 0
    checkers: int = 0
    previous: StateInfo | None = None
    blockers_for_king: list[int] = field(default_factory=lambda: [0, 0])
    pinners: list[int] = field(default_factory=lambda: [0, 0])
    check_squares: list[int] = field(default_factory=lambda: [0] * 7)
    captured_piece: int = NO_PIECE
    repetition: int = 0

    def _child(self) -> StateInfo:
        """New state carrying over the fields that survive a move."""
        return StateInfo(
            material_key=self.material_key,
            pawn_key=self.pawn_key,
            non_pawn_material=list(self.non_pawn_material),
            castling_rights=self.castling_rights,
            rule50=self.rule50,
            plies_from_null=self.plies_from_null,
            ep_square=self.ep_square,
            previous=self,
        )


class Position:
    """A chess position with incremental hash keys and move history."""

    def __init__(self, fen: str = START_FEN, chess960: bool = False) -> None:
        self.set(fen, chess960)

    # ------------------------------------------------------------------ FEN

    def set(self, fen: str, chess960: bool = False) -> Position:
        """Set up the position described by a FEN (or Shredder-/X-FEN) string."""
        fields = fen.split()
        if not fields:
            raise ValueError("empty FEN string")

        self._board = [NO_PIECE] * SQUARE_NB
        self._by_type = [0] * 7
        self._by_color = [0, 0]
        self._piece_count = [0] * PIECE_NB
        self._castling_rights_mask = [0] * SQUARE_NB
        self._castling_rook_square = [SQ_NONE] * 16
        self._castling_path = [0] * 16
        self.state = StateInfo()
        self.game_ply = 0
        self.chess960 = chess960

        sq = SQ_A8
        for ch in fields[0]:
            if ch in "0123456789":
                sq += int(ch) * EAST
            elif ch == "/":
                sq += 2 * SOUTH
            elif ch != " " and ch in PIECE_CHARS:
                if not 0 <= sq < SQUARE_NB:
                    raise ValueError(f"piece placement runs off the board: {fields[0]!r}")
                self._put_piece(PIECE_CHARS.index(ch), sq)
                sq += 1

        for c in Color:
            if self.count(PieceType.KING, c) != 1:
                raise ValueError(f"{c.name.lower()} must have exactly one king")

        side = fields[1] if len(fields) > 1 else ""
        self.side_to_move = Color.WHITE if side[:1] == "w" else Color.BLACK

        for token in fields[2] if len(fields) > 2 else "-":
            c = Color.BLACK if token.islower() else Color.WHITE
            rook = make_piece(c, PieceType.ROOK)
            upper = token.upper()
            if upper == "K":
                candidates = range(relative_square(c, SQ_H1), relative_square(c, SQ_A1) - 1, -1)
            elif upper == "Q":
                candidates = range(relative_square(c, SQ_A1), relative_square(c, SQ_H1) + 1)
            elif "A" <= upper <= "H":
                rank = 0 if c == Color.WHITE else 7
                self._set_castling_right(c, make_square(ord(upper) - ord("A"), rank))
                continue
            else:
                continue
            rsq = next((s for s in candidates if self._board[s] == rook), None)
            if rsq is None:
                raise ValueError(f"no rook for castling right {token!r}")
            self._set_castling_right(c, rsq)

        st = self.state
        ep = fields[3] if len(fields) > 3 else "-"
        us, them = self.side_to_move, ~self.side_to_move
        if len(ep) >= 2 and "a" <= ep[0] <= "h" and ep[1] == ("6" if us == Color.WHITE else "3"):
            epsq = make_square(ord(ep[0]) - ord("a"), ord(ep[1]) - ord("1"))
            valid = (
                pawn_attacks(them, epsq) & self.pieces(PieceType.PAWN, color=us)
                and self.pieces(PieceType.PAWN, color=them) & square_bb(epsq + _pawn_push(them))
                and not self.pieces() & (square_bb(epsq) | square_bb(epsq + _pawn_push(us)))
            )
            if valid:
                st.ep_square = epsq

        st.rule50 = _leading_int(fields[4]) if len(fields) > 4 else 0
        fullmove = _leading_int(fields[5]) if len(fields) > 5 else 0
        self.game_ply = max(2 * (fullmove - 1), 0) + (self.side_to_move == Color.BLACK)

        self._set_state()
        return self

    def set_endgame(self, code: str, color: Color) -> Position:
        """Set up a position holding the material of an endgame code such as 'KBPKN'.

        ``color`` is the colour given to the strong side.
        """
        if not code.startswith("K"):
            raise ValueError(f"endgame code must start with 'K': {code!r}")
        second_king = code.find("K", 1)
        if second_king < 0:
            raise ValueError(f"endgame code needs two kings: {code!r}")
        v = code.find("v")
        strong_end = second_king if v < 0 else min(v, second_king)
        sides = [code[second_king:], code[:strong_end]]
        if not all(0 < len(s) < 8 for s in sides):
            raise ValueError(f"invalid endgame code: {code!r}")
        sides[int(color)] = sides[int(color)].lower()
        fen = (
            f"8/{sides[0]}{8 - len(sides[0])}/8/8/8/8/"
            f"{sides[1]}{8 - len(sides[1])}/8 w - - 0 10"
        )
        return self.set(fen, False)

    def fen(self) -> str:
        """FEN of the position; Shredder-FEN castling letters in Chess960."""
        rows = []
        for r in range(7, -1, -1):
            row = ""
            empty = 0
            for f in range(8):
                pc = self._board[make_square(f, r)]
                if pc == NO_PIECE:
                    empty += 1
                    continue
                if empty:
                    row += str(empty)
                    empty = 0
                row += PIECE_CHARS[pc]
            if empty:
                row += str(empty)
            rows.append(row)

        castling = ""
        for cr, letter, base in (
            (CastlingRights.WHITE_OO, "K", "A"),
            (CastlingRights.WHITE_OOO, "Q", "A"),
            (CastlingRights.BLACK_OO, "k", "a"),
            (CastlingRights.BLACK_OOO, "q", "a"),
        ):
            if self.can_castle(cr):
                if self.chess960:
                    castling += chr(ord(base) + file_of(self.castling_rook_square(cr)))
                else:
                    castling += letter
        castling = castling or "-"

        ep = "-" if self.ep_square == SQ_NONE else square_name(self.ep_square)
        side = "w" if self.side_to_move == Color.WHITE else "b"
        fullmove = 1 + (self.game_ply - (self.side_to_move == Color.BLACK)) // 2
        return f"{'/'.join(rows)} {side} {castling} {ep} {self.state.rule50} {fullmove}"

    def render(self) -> str:
        """ASCII diagram of the board followed by FEN, key and checkers."""
        border = " +---+---+---+---+---+---+---+---+\n"
        lines = ["\n", border]
        for r in range(7, -1, -1):
            cells = "".join(f" | {PIECE_CHARS[self._board[make_square(f, r)]]}" for f in range(8))
            lines.append(f"{cells} | {r + 1}\n")
            lines.append(border)
        lines.append("   a   b   c   d   e   f   g   h\n")
        lines.append(f"\nFen: {self.fen()}\nKey: {self.key():016X}\nCheckers: ")
        lines.extend(f"{square_name(s)} " for s in iter_squares(self.checkers))
        return "".join(lines)

    def __str__(self) -> str:
        return self.render()

    # ------------------------------------------------------ board queries

    def piece_on(self, square: int) -> int:
        if not 0 <= square < SQUARE_NB:
            raise ValueError(f"square out of range: {square!r}")
        return self._board[square]

    def empty(self, square: int) -> bool:
        return self.piece_on(square) == NO_PIECE

    def pieces(self, *args: PieceType, color: Color | None = None) -> int:
        """Bitboard of pieces of any of the given types, optionally of one colour."""
        if args:
            bb = 0
            for pt in args:
                bb |= self._by_type[pt]
        else:
            bb = self._by_type[PieceType.ALL_PIECES]
        if color is not None:
            bb &= self._by_color[color]
        return bb

    def count(self, piece_type: PieceType, color: Color | None = None) -> int:
        """Number of pieces of a type; ALL_PIECES counts every piece."""
        if color is None:
            return sum(self._piece_count[make_piece(c, piece_type)] for c in Color)
        return self._piece_count[make_piece(color, piece_type)]

    def king_square(self, color: Color) -> int:
        return lsb(self.pieces(PieceType.KING, color=color))

    @property
    def checkers(self) -> int:
        return self.state.checkers

    @property
    def ep_square(self) -> int:
        return self.state.ep_square

    @property
    def rule50(self) -> int:
        return self.state.rule50

    @property
    def captured_piece(self) -> int:
        return self.state.captured_piece

    # ------------------------------------------------------------- castling

    def can_castle(self, rights: int) -> bool:
        return bool(self.state.castling_rights & rights)

    @staticmethod
    def _check_single_right(rights: int) -> int:
        if rights not in _SINGLE_RIGHTS:
            raise ValueError(f"expected a single castling right, got {rights!r}")
        return int(rights)

    def castling_impeded(self, rights: int) -> bool:
        """Whether pieces stand between king and rook for this castling right."""
        return bool(self.pieces() & self._castling_path[self._check_single_right(rights)])

    def castling_rook_square(self, rights: int) -> int:
        return self._castling_rook_square[self._check_single_right(rights)]

    # -------------------------------------------------------------- attacks

    def attackers_to(self, square: int, occupied: int | None = None) -> int:
        """Bitboard of all pieces attacking a square, given the occupancy."""
        if occupied is None:
            occupied = self.pieces()
        P, N, B, R, Q, K = (
            PieceType.PAWN,
            PieceType.KNIGHT,
            PieceType.BISHOP,
            PieceType.ROOK,
            PieceType.QUEEN,
            PieceType.KING,
        )
        return (
            (pawn_attacks(Color.BLACK, square) & self.pieces(P, color=Color.WHITE))
            | (pawn_attacks(Color.WHITE, square) & self.pieces(P, color=Color.BLACK))
            | (attacks(N, square) & self.pieces(N))
            | (attacks(R, square, occupied) & self.pieces(R, Q))
            | (attacks(B, square, occupied) & self.pieces(B, Q))
            | (attacks(K, square) & self.pieces(K))
        )

    def attacks_by(self, piece_type: PieceType, color: Color) -> int:
        """Squares attacked by all pieces of one type and colour."""
        threats = 0
        for s in iter_squares(self.pieces(piece_type, color=color)):
            if piece_type == PieceType.PAWN:
                threats |= pawn_attacks(color, s)
            else:
                threats |= attacks(piece_type, s, self.pieces())
        return threats

    # ------------------------------------------------------- move properties

    def capture(self, move: Move) -> bool:
        return (
            not self.empty(move.to_sq) and move.move_type != MoveType.CASTLING
        ) or move.move_type == MoveType.EN_PASSANT

    def capture_stage(self, move: Move) -> bool:
        """Capture or queen promotion, as generated in the capture stage."""
        return self.capture(move) or (
            move.move_type == MoveType.PROMOTION and move.promotion_type == PieceType.QUEEN
        )

    def moved_piece(self, move: Move) -> int:
        return self.piece_on(move.from_sq)

    # --------------------------------------------------------- making moves

    def do_move(self, move: Move, gives_check: bool | None = None) -> None:
        """Make a legal move. gives_check=False skips computing the checkers."""
        if not move.is_ok():
            raise ValueError(f"cannot make move {move!r}")
        zk = zobrist()
        k = self.state.key ^ zk.side

        st = self.state._child()
        self.state = st
        self.game_ply += 1
        st.rule50 += 1
        st.plies_from_null += 1

        us = self.side_to_move
        them = ~us
        from_sq, to_sq = move.from_sq, move.to_sq
        pc = self._board[from_sq]
        if move.move_type == MoveType.EN_PASSANT:
            captured = make_piece(them, PieceType.PAWN)
        else:
            captured = self._board[to_sq]

        if move.move_type == MoveType.CASTLING:
            to_sq, rfrom, rto = self._do_castling(us, from_sq, to_sq, True)
            k ^= zk.psq[captured][rfrom] ^ zk.psq[captured][rto]
            captured = NO_PIECE

        if captured:
            capsq = to_sq
            if type_of(captured) == PieceType.PAWN:
                if move.move_type == MoveType.EN_PASSANT:
                    capsq -= _pawn_push(us)
                st.pawn_key ^= zk.psq[captured][capsq]
            else:
                st.non_pawn_material[them] -= piece_value(captured)

            self._remove_piece(capsq)
            k ^= zk.psq[captured][capsq]
            st.material_key ^= zk.psq[captured][self._piece_count[captured]]
            st.rule50 = 0

        k ^= zk.psq[pc][from_sq] ^ zk.psq[pc][to_sq]

        if st.ep_square != SQ_NONE:
            k ^= zk.enpassant[file_of(st.ep_square)]
            st.ep_square = SQ_NONE

        changed = self._castling_rights_mask[from_sq] | self._castling_rights_mask[to_sq]
        if st.castling_rights and changed:
            k ^= zk.castling[st.castling_rights]
            st.castling_rights &= ~changed
            k ^= zk.castling[st.castling_rights]

        if move.move_type != MoveType.CASTLING:
            self._move_piece(from_sq, to_sq)

        if type_of(pc) == PieceType.PAWN:
            if (to_sq ^ from_sq) == 16 and (
                pawn_attacks(us, to_sq - _pawn_push(us)) & self.pieces(PieceType.PAWN, color=them)
            ):
                st.ep_square = to_sq - _pawn_push(us)
                k ^= zk.enpassant[file_of(st.ep_square)]
            elif move.move_type == MoveType.PROMOTION:
                promotion = make_piece(us, move.promotion_type)
                self._remove_piece(to_sq)
                self._put_piece(promotion, to_sq)
                k ^= zk.psq[pc][to_sq] ^ zk.psq[promotion][to_sq]
                st.pawn_key ^= zk.psq[pc][to_sq]
                st.material_key ^= (
                    zk.psq[promotion][self._piece_count[promotion] - 1]
                    ^ zk.psq[pc][self._piece_count[pc]]
                )
                st.non_pawn_material[us] += piece_value(promotion)

            st.pawn_key ^= zk.psq[pc][from_sq] ^ zk.psq[pc][to_sq]
            st.rule50 = 0

        st.captured_piece = captured
        st.key = k

        if gives_check is None or gives_check:
            st.checkers = self.attackers_to(self.king_square(them)) & self.pieces(color=us)
        else:
            st.checkers = 0

        self.side_to_move = them
        self._set_check_info()

        st.repetition = 0
        end = min(st.rule50, st.plies_from_null)
        if end >= 4:
            stp = st.previous.previous
            for i in range(4, end + 1, 2):
                stp = stp.previous.previous
                if stp.key == st.key:
                    st.repetition = -i if stp.repetition else i
                    break

    def undo_move(self, move: Move) -> None:
        """Take back a move made with do_move, restoring the previous state."""
        if self.state.previous is None:
            raise ValueError("no move to undo")
        self.side_to_move = ~self.side_to_move
        us = self.side_to_move
        from_sq, to_sq = move.from_sq, move.to_sq

        if move.move_type == MoveType.PROMOTION:
            self._remove_piece(to_sq)
            self._put_piece(make_piece(us, PieceType.PAWN), to_sq)

        if move.move_type == MoveType.CASTLING:
            self._do_castling(us, from_sq, to_sq, False)
        else:
            self._move_piece(to_sq, from_sq)
            captured = self.state.captured_piece
            if captured:
                capsq = to_sq
                if move.move_type == MoveType.EN_PASSANT:
                    capsq -= _pawn_push(us)
                self._put_piece(captured, capsq)

        self.state = self.state.previous
        self.game_ply -= 1

    def do_null_move(self) -> None:
        """Pass the turn without moving a piece."""
        old = self.state
        if old.checkers:
            raise ValueError("cannot pass while in check")
        zk = zobrist()
        st = StateInfo(
            material_key=old.material_key,
            pawn_key=old.pawn_key,
            non_pawn_material=list(old.non_pawn_material),
            castling_rights=old.castling_rights,
            rule50=old.rule50,
            plies_from_null=old.plies_from_null,
            ep_square=old.ep_square,
            key=old.key,
            checkers=old.checkers,
            previous=old,
            blockers_for_king=list(old.blockers_for_king),
            pinners=list(old.pinners),
            check_squares=list(old.check_squares),
            captured_piece=old.captured_piece,
            repetition=old.repetition,
        )
        self.state = st

        if st.ep_square != SQ_NONE:
            st.key ^= zk.enpassant[file_of(st.ep_square)]
            st.ep_square = SQ_NONE

        st.key ^= zk.side
        st.rule50 += 1
        st.plies_from_null = 0
        self.side_to_move = ~self.side_to_move
        self._set_check_info()
        st.repetition = 0

    def undo_null_move(self) -> None:
        if self.state.previous is None:
            raise ValueError("no null move to undo")
        self.state = self.state.previous
        self.side_to_move = ~self.side_to_move

    # ------------------------------------------------------------ hash keys

    def _adjust_key50(self, k: int, after_move: bool) -> int:
        limit = 14 - int(after_move)
        rule50 = self.state.rule50
        return k if rule50 < limit else k ^ _make_key((rule50 - limit) // 8)

    def key(self) -> int:
        """Position hash, perturbed as the fifty-move counter grows."""
        return self._adjust_key50(self.state.key, False)

    def key_after(self, move: Move) -> int:
        """Hash after a plain move; castling, en passant and promotion are not handled."""
        zk = zobrist()
        pc = self._board[move.from_sq]
        captured = self._board[move.to_sq]
        k = self.state.key ^ zk.side
        if captured:
            k ^= zk.psq[captured][move.to_sq]
        k ^= zk.psq[pc][move.to_sq] ^ zk.psq[pc][move.from_sq]
        if captured or type_of(pc) == PieceType.PAWN:
            return k
        return self._adjust_key50(k, True)

    @property
    def material_key(self) -> int:
        return self.state.material_key

    @property
    def pawn_key(self) -> int:
        return self.state.pawn_key

    # ------------------------------------------------------------ the rest

    def has_repeated(self) -> bool:
        """Whether a position has repeated since the last capture or pawn move."""
        stc = self.state
        end = min(self.state.rule50, self.state.plies_from_null)
        for _ in range(max(0, end - 3)):
            if stc.repetition:
                return True
            stc = stc.previous
        return False

    def non_pawn_material(self, color: Color | None = None) -> int:
        if color is None:
            return sum(self.state.non_pawn_material)
        return self.state.non_pawn_material[color]

    def flip(self) -> None:
        """Mirror the position, swapping the colours of all pieces."""
        parts = self.fen().split(" ")
        placement = "/".join(reversed(parts[0].split("/"))).swapcase()
        side = "b" if parts[1] == "w" else "w"
        castling = parts[2].swapcase()
        ep = parts[3]
        if ep != "-":
            ep = ep[0] + ("6" if ep[1] == "3" else "3")
        self.set(" ".join([placement, side, castling, ep, *parts[4:]]), self.chess960)

    # ------------------------------------------------------------- helpers

    def _put_piece(self, pc: int, s: int) -> None:
        bit = square_bb(s)
        self._board[s] = pc
        self._by_type[PieceType.ALL_PIECES] |= bit
        self._by_type[type_of(pc)] |= bit
        self._by_color[color_of(pc)] |= bit
        self._piece_count[pc] += 1
        self._piece_count[make_piece(color_of(pc), PieceType.ALL_PIECES)] += 1

    def _remove_piece(self, s: int) -> None:
        pc = self._board[s]
        bit = square_bb(s)
        self._by_type[PieceType.ALL_PIECES] ^= bit
        self._by_type[type_of(pc)] ^= bit
        self._by_color[color_of(pc)] ^= bit
        self._board[s] = NO_PIECE
        self._piece_count[pc] -= 1
        self._piece_count[make_piece(color_of(pc), PieceType.ALL_PIECES)] -= 1

    def _move_piece(self, from_sq: int, to_sq: int) -> None:
        pc = self._board[from_sq]
        bits = square_bb(from_sq) | square_bb(to_sq)
        self._by_type[PieceType.ALL_PIECES] ^= bits
        self._by_type[type_of(pc)] ^= bits
        self._by_color[color_of(pc)] ^= bits
        self._board[from_sq] = NO_PIECE
        self._board[to_sq] = pc

    def _do_castling(self, us: Color, from_sq: int, to_sq: int, do: bool) -> tuple[int, int, int]:
        """Move king and rook for castling; returns king target, rook origin and target."""
        king_side = to_sq > from_sq
        rfrom = to_sq
        rto = relative_square(us, SQ_F1 if king_side else SQ_D1)
        kto = relative_square(us, SQ_G1 if king_side else SQ_C1)
        self._remove_piece(from_sq if do else kto)
        self._remove_piece(rfrom if do else rto)
        self._put_piece(make_piece(us, PieceType.KING), kto if do else from_sq)
        self._put_piece(make_piece(us, PieceType.ROOK), rto if do else rfrom)
        return kto, rfrom, rto

    def _set_castling_right(self, c: Color, rfrom: int) -> None:
        kfrom = self.king_square(c)
        side = CastlingRights.KING_SIDE if kfrom < rfrom else CastlingRights.QUEEN_SIDE
        cr = _side_rights(c) & int(side)

        self.state.castling_rights |= cr
        self._castling_rights_mask[kfrom] |= cr
        self._castling_rights_mask[rfrom] |= cr
        self._castling_rook_square[cr] = rfrom

        king_side = bool(cr & CastlingRights.KING_SIDE)
        kto = relative_square(c, SQ_G1 if king_side else SQ_C1)
        rto = relative_square(c, SQ_F1 if king_side else SQ_D1)
        self._castling_path[cr] = (between(rfrom, rto) | between(kfrom, kto)) & ~(
            square_bb(kfrom) | square_bb(rfrom)
        )

    def _update_slider_blockers(self, c: Color) -> None:
        st = self.state
        ksq = self.king_square(c)
        st.blockers_for_king[c] = 0
        st.pinners[~c] = 0

        snipers = (
            (attacks(PieceType.ROOK, ksq) & self.pieces(PieceType.QUEEN, PieceType.ROOK))
            | (attacks(PieceType.BISHOP, ksq) & self.pieces(PieceType.QUEEN, PieceType.BISHOP))
        ) & self.pieces(color=~c)
        occupancy = self.pieces() ^ snipers

        for sniper in iter_squares(snipers):
            b = between(ksq, sniper) & occupancy
            if b and not more_than_one(b):
                st.blockers_for_king[c] |= b
                if b & self.pieces(color=c):
                    st.pinners[~c] |= square_bb(sniper)

    def _set_check_info(self) -> None:
        self._update_slider_blockers(Color.WHITE)
        self._update_slider_blockers(Color.BLACK)
        st = self.state
        ksq = self.king_square(~self.side_to_move)
        occupied = self.pieces()
        st.check_squares[PieceType.PAWN] = pawn_attacks(~self.side_to_move, ksq)
        st.check_squares[PieceType.KNIGHT] = attacks(PieceType.KNIGHT, ksq)
        st.check_squares[PieceType.BISHOP] = attacks(PieceType.BISHOP, ksq, occupied)
        st.check_squares[PieceType.ROOK] = attacks(PieceType.ROOK, ksq, occupied)
        st.check_squares[PieceType.QUEEN] = (
            st.check_squares[PieceType.BISHOP] | st.check_squares[PieceType.ROOK]
        )
        st.check_squares[PieceType.KING] = 0

    def _set_state(self) -> None:
        zk = zobrist()
        st = self.state
        st.key = st.material_key = 0
        st.pawn_key = zk.no_pawns
        st.non_pawn_material = [0, 0]
        us = self.side_to_move
        st.checkers = self.attackers_to(self.king_square(us)) & self.pieces(color=~us)

        self._set_check_info()

        for s in iter_squares(self.pieces()):
            pc = self._board[s]
            st.key ^= zk.psq[pc][s]
            pt = type_of(pc)
            if pt == PieceType.PAWN:
                st.pawn_key ^= zk.psq[pc][s]
            elif pt != PieceType.KING:
                st.non_pawn_material[color_of(pc)] += piece_value(pc)

        if st.ep_square != SQ_NONE:
            st.key ^= zk.enpassant[file_of(st.ep_square)]
        if self.side_to_move == Color.BLACK:
            st.key ^= zk.side
        st.key ^= zk.castling[st.castling_rights]

        for pc in PIECES:
            for cnt in range(self._piece_count[pc]):
                st.material_key ^= zk.psq[pc][cnt]


__all__ = ["START_FEN", "CastlingRights", "StateInfo", "Position", "relative_rank", "SQ_A1"]