# chesscore

A chess position library: bitboards, FEN input and output (including
Chess960 / Shredder-FEN castling letters), incremental Zobrist hashing,
making and taking back moves, legality and check tests for moves you
supply, static exchange evaluation, repetition and game-cycle detection,
and the plain data types a search works with.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `chesscore.types` – `Color`, `PieceType`, `MoveType` and the frozen `Move`
  dataclass (`Move.none()`, `Move.null()`, `is_ok()`, `from_to()`), square
  helpers (`make_square`, `file_of`, `rank_of`, `relative_rank`,
  `relative_square`, `square_name`, `parse_square`), piece helpers
  (`make_piece`, `color_of`, `type_of`, `piece_value`) and value constants.
- `chesscore.attacks` – bitboard helpers (`popcount`, `lsb`, `more_than_one`,
  `iter_squares`, `square_bb`), attack tables (`attacks`, `pawn_attacks`,
  `between`, `aligned`), the `Prng` xorshift generator and `ZobristKeys`;
  `zobrist()` returns the shared key set, including the cuckoo tables of
  reversible moves (`cuckoo_lookup`).
- `chesscore.position` – `Position`, `StateInfo`, `CastlingRights` and
  `START_FEN`.
- `chesscore.rules` – `legal`, `gives_check`, `see_ge` and `has_game_cycle`,
  each taking a `Position` and (except `has_game_cycle`) a `Move`.
- `chesscore.score` – `to_score(value, to_cp)`, which classifies an internal
  value as `Mate`, `Tablebase` or `InternalUnits`; `to_cp` is a callable that
  converts ordinary values. Values outside the open infinite range raise
  `ValueError`.
- `chesscore.search` – `NodeType`, `Stack`, `RootMove` (sorts by descending
  score, then previous score; compares equal to its first PV move), `Limits`
  (`use_time_management()`), and the report records `InfoShort`, `InfoFull`
  and `InfoIteration`.

## Example

```python
from chesscore.position import Position
from chesscore.types import Move, parse_square
from chesscore import rules

pos = Position()  # starts from START_FEN
pos.set("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1", False)

move = Move(parse_square("e2"), parse_square("e4"))
if rules.legal(pos, move):
    pos.do_move(move, rules.gives_check(pos, move))

print(pos.fen())
print(pos.render())
print(hex(pos.key()))

pos.undo_move(move)
```

`Position.set` raises `ValueError` for an empty FEN, a placement that runs
off the board, a side without exactly one king, or a castling letter with no
matching rook. `Position.do_null_move()` passes the turn (not allowed in
check) and `undo_null_move()` reverts it. `Position.flip()` mirrors the
position with colours swapped, and `Position.set_endgame("KBPKN", color)`
builds a position from an endgame code, which is handy for obtaining its
`material_key`. `has_repeated()` reports a repetition since the last capture
or pawn move.

## What this package does not do

- It has no move generator: `legal` and `gives_check` expect pseudo-legal
  moves supplied by the caller.
- It has no evaluation, search algorithm, transposition table or time
  management; `chesscore.search` holds only the data types.
- It has no tablebase probing and no UCI command or other program to run.