from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

import chess

from .evaluator import Evaluator, SEARCH_BOUND
from .rules import captured_piece_type, is_terminal


@dataclass
class SearchResult:
    best_move: Optional[chess.Move]
    score: int
    nodes: int


def order_moves(board: chess.Board) -> List[chess.Move]:
    """Captures first, most valuable victim first.

    The sort is stable, so moves of equal rank keep the order python-chess
    generates them in.
    """
    def move_key(m: chess.Move) -> int:
        victim = captured_piece_type(board, m)
        return Evaluator.MATERIAL_VALUES[victim] if victim else 0

    return sorted(board.legal_moves, key=move_key, reverse=True)


class SearchEngine:
    """Fixed-depth minimax with alpha-beta pruning.

    The board passed in is mutated with push/pop while searching and is always
    restored before a call returns.
    """

    def __init__(self, evaluate: Callable[[chess.Board], int] = Evaluator.evaluate) -> None:
        self.evaluate = evaluate
        self.nodes = 0

    def search(
        self,
        board: chess.Board,
        depth: int,
        alpha: int,
        beta: int,
        maximizing: bool,
    ) -> int:
        self.nodes += 1
        if depth <= 0 or is_terminal(board):
            return self.evaluate(board)

        if maximizing:
            value = -SEARCH_BOUND
            for move in order_moves(board):
                board.push(move)
                try:
                    score = self.search(board, depth - 1, alpha, beta, maximizing=False)
                finally:
                    board.pop()
                value = max(value, score)
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
            return value
        else:
            value = SEARCH_BOUND
            for move in order_moves(board):
                board.push(move)
                try:
                    score = self.search(board, depth - 1, alpha, beta, maximizing=True)
                finally:
                    board.pop()
                value = min(value, score)
                beta = min(beta, value)
                if beta <= alpha:
                    break
            return value

    def search_root(self, board: chess.Board, depth: int) -> SearchResult:
        """Best move for the side to move; White maximizes, Black minimizes.

        Ties go to the first move in search order that reached the best score.
        """
        self.nodes = 0
        maximizing = board.turn == chess.WHITE
        best_score = -SEARCH_BOUND if maximizing else SEARCH_BOUND
        best_move: Optional[chess.Move] = None
        alpha, beta = -SEARCH_BOUND, SEARCH_BOUND

        for move in order_moves(board):
            board.push(move)
            try:
                score = self.search(board, depth - 1, alpha, beta, maximizing=not maximizing)
            finally:
                board.pop()
            if maximizing:
                if score > best_score:
                    best_score, best_move = score, move
                alpha = max(alpha, score)
            else:
                if score < best_score:
                    best_score, best_move = score, move
                beta = min(beta, score)
            if beta <= alpha:
                break

        if best_move is None:
            best_score = self.evaluate(board)

        return SearchResult(best_move=best_move, score=best_score, nodes=self.nodes)
