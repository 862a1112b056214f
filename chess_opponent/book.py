from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

import chess

from .rules import position_key

# (moves leading to the position, candidate replies)
BookLine = Tuple[Sequence[str], Sequence[str]]

DEFAULT_LINES: Tuple[BookLine, ...] = (
    ((), ("e2e4", "d2d4", "g1f3", "c2c4")),
    (("e2e4",), ("e7e5", "c7c5", "e7e6", "c7c6")),
    (("d2d4",), ("d7d5", "g8f6", "e7e6")),
    (("g1f3",), ("d7d5", "g8f6", "c7c5")),
    (("c2c4",), ("e7e5", "g8f6", "c7c5")),
    (("e2e4", "e7e5"), ("g1f3", "f1c4", "b1c3")),
    (("e2e4", "c7c5"), ("g1f3", "b1c3", "c2c3")),
    (("e2e4", "e7e6"), ("d2d4",)),
    (("e2e4", "c7c6"), ("d2d4", "b1c3")),
    (("d2d4", "d7d5"), ("c2c4", "g1f3", "c1f4")),
    (("d2d4", "g8f6"), ("c2c4", "g1f3")),
    (("e2e4", "e7e5", "g1f3"), ("b8c6", "g8f6", "d7d6")),
    (("e2e4", "e7e5", "g1f3", "b8c6"), ("f1b5", "f1c4", "d2d4")),
    (("e2e4", "c7c5", "g1f3"), ("d7d6", "b8c6", "e7e6")),
    (("d2d4", "d7d5", "c2c4"), ("e7e6", "c7c6", "d5c4")),
    (("d2d4", "g8f6", "c2c4"), ("e7e6", "g7g6", "c7c5")),
)


class OpeningBook:
    """Read-only table from canonical position keys to candidate moves.

    Entries are hints only: ``candidates`` drops anything that is not legal
    in the position actually on the board.
    """

    def __init__(self, entries: Optional[Mapping[str, Iterable[str]]] = None) -> None:
        frozen = {key: tuple(moves) for key, moves in (entries or {}).items()}
        self._entries: Mapping[str, Tuple[str, ...]] = MappingProxyType(frozen)

    @classmethod
    def from_lines(cls, lines: Iterable[BookLine]) -> "OpeningBook":
        entries = {}
        for moves, replies in lines:
            board = chess.Board()
            for uci in moves:
                board.push_uci(uci)
            known = entries.setdefault(position_key(board), [])
            for uci in replies:
                if uci not in known:
                    known.append(uci)
        return cls(entries)

    @classmethod
    def default(cls) -> "OpeningBook":
        return cls.from_lines(DEFAULT_LINES)

    @property
    def entries(self) -> Mapping[str, Tuple[str, ...]]:
        return self._entries

    def lookup(self, key: str) -> List[str]:
        return list(self._entries.get(key, ()))

    def candidates(self, board: chess.Board) -> List[str]:
        legal = {move.uci() for move in board.legal_moves}
        return [uci for uci in self.lookup(position_key(board)) if uci in legal]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


DEFAULT_BOOK = OpeningBook.default()
