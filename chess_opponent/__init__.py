"""Chess opponent package: evaluation, opening book, search and difficulty policy.

Modules:
- rules: Legality, game status and position keys atop python-chess
- evaluator: Tapered material and piece-square evaluation
- book: Read-only opening book keyed by position
- search: Fixed-depth minimax with alpha-beta pruning
- difficulty: Depth, pacing and randomness per difficulty level
- draw: Draw-offer acceptance heuristic
- ai: Move selection tying the pieces together
- game: Game session for interactive callers
"""

from .ai import AIPlayer, EngineConfig
from .book import OpeningBook
from .difficulty import Difficulty
from .errors import EngineError, IllegalMoveError, StaleMoveError
from .evaluator import MATE_UPPER, Evaluator, evaluate
from .game import Game, GameResult
from .search import SearchEngine

__all__ = [
    "AIPlayer",
    "EngineConfig",
    "OpeningBook",
    "Difficulty",
    "EngineError",
    "IllegalMoveError",
    "StaleMoveError",
    "MATE_UPPER",
    "Evaluator",
    "evaluate",
    "Game",
    "GameResult",
    "SearchEngine",
]
