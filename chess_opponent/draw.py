from __future__ import annotations

import random
from typing import Callable, Optional, Union

import chess

from .difficulty import Difficulty, profile_for
from .evaluator import Evaluator
from .rules import is_terminal

# Centipawn imbalance at which the base willingness to draw reaches zero
DRAW_SCALE_CP = 1000


def base_probability(evaluation: int) -> float:
    return max(0.0, 1.0 - abs(evaluation) / DRAW_SCALE_CP)


def acceptance_probability(
    board: chess.Board,
    difficulty: Union[str, Difficulty],
    evaluate: Callable[[chess.Board], int] = Evaluator.evaluate,
) -> float:
    """Chance of accepting a draw offer in this position, 0.0 for finished games."""
    if is_terminal(board):
        return 0.0
    probability = base_probability(evaluate(board)) + profile_for(difficulty).draw_adjustment
    return min(1.0, max(0.0, probability))


def should_accept_draw(
    board: chess.Board,
    difficulty: Union[str, Difficulty],
    rng: Optional[random.Random] = None,
    evaluate: Callable[[chess.Board], int] = Evaluator.evaluate,
) -> bool:
    if is_terminal(board):
        return False
    rng = rng or random.Random()
    return rng.random() < acceptance_probability(board, difficulty, evaluate)
