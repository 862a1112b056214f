from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Dict, List, Optional, Union

import chess

from . import rules
from .difficulty import Difficulty
from .errors import IllegalMoveError
from .evaluator import Evaluator

if TYPE_CHECKING:
    from .ai import AIPlayer

logger = logging.getLogger(__name__)

COLORS = ("white", "black")


@dataclass(frozen=True)
class GameResult:
    winner: Optional[str]
    reason: str


class Game:
    """Wraps python-chess Board and exposes a clean interface for the web/API.

    This class owns the mutable game state: it applies and takes back moves,
    handles draw offers and resignations, and reports how the game ended.
    """

    def __init__(self, starting_fen: Optional[str] = None, player_color: str = "white") -> None:
        self.reset(starting_fen, player_color)

    def reset(self, starting_fen: Optional[str] = None, player_color: str = "white") -> None:
        player_color = player_color.lower()
        if player_color not in COLORS:
            raise ValueError(f"Unknown color: {player_color!r}")
        self.player_color = player_color
        self.board = chess.Board(fen=starting_fen) if starting_fen else chess.Board()
        self.last_move_was_capture: bool = False
        self._agreed: Optional[GameResult] = None

    def get_full_fen(self) -> str:
        return self.board.fen()

    def get_turn_color(self) -> str:
        return rules.turn_of(self.board)

    def get_legal_moves(self) -> List[str]:
        return [move.uci() for move in self.board.legal_moves]

    @property
    def result(self) -> Optional[GameResult]:
        if self._agreed is not None:
            return self._agreed
        state = rules.status(self.board)
        if state.checkmate:
            loser = rules.turn_of(self.board)
            return GameResult(winner="black" if loser == "white" else "white", reason="checkmate")
        if state.draw_kind is not None:
            return GameResult(winner=None, reason=state.draw_kind)
        return None

    def is_game_over(self) -> bool:
        return self.result is not None

    def is_player_turn(self) -> bool:
        return self.get_turn_color() == self.player_color

    def push_uci(self, uci: str) -> None:
        if self.is_game_over():
            raise IllegalMoveError("Game is over")
        try:
            move = rules.parse_move(self.board, uci)
        except IllegalMoveError:
            move = self._auto_queen(uci)
            if move is None:
                raise
        self.last_move_was_capture = self.board.is_capture(move)
        self.board.push(move)

    def push_player_uci(self, uci: str) -> None:
        """Play a move for the human side; refused while the opponent is to move."""
        if not self.is_game_over() and not self.is_player_turn():
            raise IllegalMoveError(f"Not your turn: {self.get_turn_color()} to move")
        self.push_uci(uci)

    def undo(self) -> None:
        self.board = rules.undo(self.board)
        self._agreed = None
        self.last_move_was_capture = bool(self.board.move_stack) and self._was_capture(self.board)

    def offer_draw(self, ai: "AIPlayer", difficulty: Union[str, Difficulty]) -> bool:
        if self.is_game_over():
            return False
        accepted = ai.should_accept_draw(self.board, difficulty)
        if accepted:
            self._agreed = GameResult(winner=None, reason="agreement")
        logger.info("Draw offer %s at %s", "accepted" if accepted else "declined", self.board.fen())
        return accepted

    def resign(self, color: str) -> GameResult:
        color = color.lower()
        if color not in COLORS:
            raise ValueError(f"Unknown color: {color!r}")
        if self.is_game_over():
            raise IllegalMoveError("Game is over")
        self._agreed = GameResult(winner="black" if color == "white" else "white", reason="resignation")
        return self._agreed

    def snapshot(self) -> Dict[str, object]:
        last_uci: Optional[str] = None
        if self.board.move_stack:
            last_uci = self.board.move_stack[-1].uci()

        in_check = self.board.is_check()
        check_square: Optional[str] = None
        if in_check:
            king_sq = self.board.king(self.board.turn)
            if king_sq is not None:
                check_square = chess.SQUARE_NAMES[king_sq]

        result = self.result
        return {
            "fen": self.get_full_fen(),
            "turn": self.get_turn_color(),
            "player_color": self.player_color,
            "legal_moves": [] if result else self.get_legal_moves(),
            "game_over": result is not None,
            "result": asdict(result) if result else None,
            "last_move": last_uci,
            "in_check": in_check,
            "check_square": check_square,
            "last_move_capture": self.last_move_was_capture,
            "evaluation": Evaluator.evaluate(self.board),
        }

    def _auto_queen(self, uci: str) -> Optional[chess.Move]:
        # Accept e7e8 for a promotion the client sent without a suffix
        if len(uci) != 4:
            return None
        try:
            from_sq = chess.parse_square(uci[:2])
            to_sq = chess.parse_square(uci[2:])
        except ValueError:
            return None
        piece = self.board.piece_at(from_sq)
        if piece is None or piece.piece_type != chess.PAWN:
            return None
        promo_move = chess.Move(from_sq, to_sq, promotion=chess.QUEEN)
        return promo_move if promo_move in self.board.legal_moves else None

    @staticmethod
    def _was_capture(board: chess.Board) -> bool:
        previous = board.copy()
        move = previous.pop()
        return previous.is_capture(move)
