"""Rules layer: everything the engine needs to know about legality and termination.

python-chess does the real work; these helpers give the engine and the
web layer one place to ask about legal moves, game status and the
canonical position key.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

import chess

from .errors import IllegalMoveError


@dataclass(frozen=True)
class MoveInfo:
    uci: str
    from_square: str
    to_square: str
    promotion: Optional[str] = None
    captured: Optional[str] = None


@dataclass(frozen=True)
class GameStatus:
    over: bool
    checkmate: bool
    stalemate: bool
    draw_kind: Optional[str] = None

    @property
    def is_draw(self) -> bool:
        return self.draw_kind is not None


def captured_piece_type(board: chess.Board, move: chess.Move) -> Optional[chess.PieceType]:
    if board.is_en_passant(move):
        return chess.PAWN
    victim = board.piece_at(move.to_square)
    if victim is None or victim.color == board.turn:
        # Chess960 castling is encoded as king-takes-own-rook
        return None
    return victim.piece_type


def describe_move(board: chess.Board, move: chess.Move) -> MoveInfo:
    captured = captured_piece_type(board, move)
    return MoveInfo(
        uci=move.uci(),
        from_square=chess.square_name(move.from_square),
        to_square=chess.square_name(move.to_square),
        promotion=chess.piece_symbol(move.promotion) if move.promotion else None,
        captured=chess.piece_symbol(captured) if captured else None,
    )


def legal_moves(board: chess.Board, square: Optional[Union[str, chess.Square]] = None) -> List[MoveInfo]:
    """Legal moves for the side to move, optionally only those leaving ``square``."""
    if isinstance(square, str):
        square = chess.parse_square(square)
    moves = board.legal_moves
    if square is not None:
        moves = (m for m in moves if m.from_square == square)
    return [describe_move(board, m) for m in moves]


def parse_move(board: chess.Board, move: Union[str, chess.Move]) -> chess.Move:
    if isinstance(move, chess.Move):
        parsed = move
    else:
        try:
            parsed = chess.Move.from_uci(move)
        except ValueError as exc:
            raise IllegalMoveError(f"Illegal move: {move}") from exc
    if parsed not in board.legal_moves:
        raise IllegalMoveError(f"Illegal move: {parsed.uci()}")
    return parsed


def apply_move(board: chess.Board, move: Union[str, chess.Move]) -> chess.Board:
    """Return a new board with ``move`` played. ``board`` is left untouched."""
    parsed = parse_move(board, move)
    after = board.copy()
    after.push(parsed)
    return after


def undo(board: chess.Board) -> chess.Board:
    if not board.move_stack:
        raise IllegalMoveError("No move to undo")
    before = board.copy()
    before.pop()
    return before


def draw_kind(board: chess.Board) -> Optional[str]:
    if board.is_stalemate():
        return "stalemate"
    if board.is_insufficient_material():
        return "insufficient"
    if board.is_fifty_moves():
        return "fifty-move"
    if board.is_repetition(3):
        return "repetition"
    return None


def status(board: chess.Board) -> GameStatus:
    if board.is_checkmate():
        return GameStatus(over=True, checkmate=True, stalemate=False)
    kind = draw_kind(board)
    return GameStatus(
        over=kind is not None,
        checkmate=False,
        stalemate=kind == "stalemate",
        draw_kind=kind,
    )


def is_terminal(board: chess.Board) -> bool:
    return status(board).over


def turn_of(board: chess.Board) -> str:
    return "white" if board.turn == chess.WHITE else "black"


def board_squares(board: chess.Board) -> List[List[Optional[chess.Piece]]]:
    """8x8 grid, row 0 is rank 8 and column 0 is the a-file."""
    return [
        [board.piece_at(chess.square(file, rank)) for file in range(8)]
        for rank in range(7, -1, -1)
    ]


def position_key(board: chess.Board) -> str:
    """Board, turn, castling and en passant fields of the FEN; move counters dropped."""
    return " ".join(board.fen().split(" ")[:4])
