from __future__ import annotations

import logging
import random
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional, Union

import chess

from .book import DEFAULT_BOOK, OpeningBook
from .difficulty import Difficulty, DifficultyProfile, profile_for
from .draw import should_accept_draw
from .errors import StaleMoveError
from .evaluator import Evaluator
from .rules import is_terminal
from .search import SearchEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    use_book: bool = True
    simulate_thinking: bool = True


class AIPlayer:
    """Computer opponent: opening book, fixed-depth alpha-beta search, difficulty policy.

    Every random decision goes through ``rng`` so a seeded or scripted source
    makes the player fully reproducible.
    """

    def __init__(
        self,
        book: Optional[OpeningBook] = None,
        rng: Optional[random.Random] = None,
        config: Optional[EngineConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.book = DEFAULT_BOOK if book is None else book
        self.rng = rng or random.Random()
        self.config = config or EngineConfig()
        self.sleep = sleep
        self._executor: Optional[ThreadPoolExecutor] = None

    def evaluate(self, board: chess.Board) -> int:
        return Evaluator.evaluate(board)

    def select_move(self, board: chess.Board, difficulty: Union[str, Difficulty]) -> str:
        """Return a UCI move for the side to move, or "" if there is nothing to play."""
        profile = profile_for(difficulty)

        # Work on a copy so the caller never sees the search push and pop moves
        search_board = board.copy()
        legal = list(search_board.legal_moves)
        if not legal or is_terminal(search_board):
            return ""

        book_move = self._book_move(search_board, profile)
        if book_move is not None:
            logger.debug("Book move %s for %s", book_move, search_board.fen())
            return self._checked(board, book_move)

        if self.config.simulate_thinking and profile.think_delay_s > 0:
            self.sleep(profile.think_delay_s)

        result = SearchEngine(self.evaluate).search_root(search_board, profile.depth)
        best_move = result.best_move
        logger.debug(
            "Search depth=%d best=%s score=%d nodes=%d",
            profile.depth,
            best_move.uci() if best_move else None,
            result.score,
            result.nodes,
        )

        if profile.random_move_probability > 0 and self.rng.random() < profile.random_move_probability:
            best_move = self.rng.choice(legal)
            logger.debug("Random override to %s", best_move.uci())

        if best_move is None:
            best_move = self.rng.choice(legal)

        return self._checked(board, best_move.uci())

    def select_move_async(self, board: chess.Board, difficulty: Union[str, Difficulty]) -> "Future[str]":
        """Run ``select_move`` on a worker thread against a snapshot of ``board``."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="ai-player")
        return self._executor.submit(self.select_move, board.copy(), difficulty)

    def should_accept_draw(self, board: chess.Board, difficulty: Union[str, Difficulty]) -> bool:
        return should_accept_draw(board, difficulty, rng=self.rng, evaluate=self.evaluate)

    def shutdown(self, wait: bool = True) -> None:
        """Stop the background worker. With ``wait=False`` a running search is left to
        finish on its own and its result is dropped; the next call starts a new worker.
        """
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None

    def _book_move(self, board: chess.Board, profile: DifficultyProfile) -> Optional[str]:
        if not self.config.use_book:
            return None
        candidates = self.book.candidates(board)
        if not candidates:
            return None
        if profile.book_probability < 1.0 and self.rng.random() >= profile.book_probability:
            return None
        return self.rng.choice(candidates)

    def _checked(self, board: chess.Board, uci: str) -> str:
        if chess.Move.from_uci(uci) not in board.legal_moves:
            logger.error("Selected move %s is not legal in %s", uci, board.fen())
            raise StaleMoveError(f"Selected move {uci} is not legal in {board.fen()}")
        return uci
