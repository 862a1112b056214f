from __future__ import annotations

from typing import Dict, Sequence, Tuple

import chess

from . import rules

MATE_UPPER = 100000
# Search windows open one past the mate sentinel so a forced mate still beats the initial bound
SEARCH_BOUND = MATE_UPPER + 1

# Non-king pieces on the board at the start of a game
PHASE_PIECES = 30

PieceSquareTable = Tuple[int, ...]


class Evaluator:
    """Static evaluation for chess positions.

    Positive scores favor White, negative scores favor Black. Units are centipawns.
    Each piece type has a middlegame and an endgame piece-square table; the two are
    blended by the game phase, which falls from 1 towards 0 as pieces come off.
    """

    MATERIAL_VALUES: Dict[chess.PieceType, int] = {
        chess.PAWN: 100,
        chess.KNIGHT: 320,
        chess.BISHOP: 330,
        chess.ROOK: 500,
        chess.QUEEN: 900,
        chess.KING: 0,
    }

    # Tables are written rank 8 first, from White's point of view
    PST_PAWN_MG: PieceSquareTable = (
        0, 0, 0, 0, 0, 0, 0, 0,
        50, 50, 50, 50, 50, 50, 50, 50,
        10, 10, 20, 30, 30, 20, 10, 10,
        5, 5, 10, 25, 25, 10, 5, 5,
        0, 0, 0, 20, 20, 0, 0, 0,
        5, -5, -10, 0, 0, -10, -5, 5,
        5, 10, 10, -20, -20, 10, 10, 5,
        0, 0, 0, 0, 0, 0, 0, 0,
    )

    PST_PAWN_EG: PieceSquareTable = (
        0, 0, 0, 0, 0, 0, 0, 0,
        80, 80, 80, 80, 80, 80, 80, 80,
        50, 50, 50, 50, 50, 50, 50, 50,
        30, 30, 30, 30, 30, 30, 30, 30,
        20, 20, 20, 20, 20, 20, 20, 20,
        10, 10, 10, 10, 10, 10, 10, 10,
        0, 0, 0, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 0, 0, 0, 0,
    )

    PST_KNIGHT_MG: PieceSquareTable = (
        -50, -40, -30, -30, -30, -30, -40, -50,
        -40, -20, 0, 0, 0, 0, -20, -40,
        -30, 0, 10, 15, 15, 10, 0, -30,
        -30, 5, 15, 20, 20, 15, 5, -30,
        -30, 0, 15, 20, 20, 15, 0, -30,
        -30, 5, 10, 15, 15, 10, 5, -30,
        -40, -20, 0, 5, 5, 0, -20, -40,
        -50, -40, -30, -30, -30, -30, -40, -50,
    )

    PST_KNIGHT_EG: PieceSquareTable = (
        -50, -40, -30, -30, -30, -30, -40, -50,
        -40, -20, -10, -5, -5, -10, -20, -40,
        -30, -10, 10, 15, 15, 10, -10, -30,
        -30, -5, 15, 20, 20, 15, -5, -30,
        -30, -5, 15, 20, 20, 15, -5, -30,
        -30, -10, 10, 15, 15, 10, -10, -30,
        -40, -20, -10, -5, -5, -10, -20, -40,
        -50, -40, -30, -30, -30, -30, -40, -50,
    )

    PST_BISHOP_MG: PieceSquareTable = (
        -20, -10, -10, -10, -10, -10, -10, -20,
        -10, 0, 0, 0, 0, 0, 0, -10,
        -10, 0, 5, 10, 10, 5, 0, -10,
        -10, 5, 5, 10, 10, 5, 5, -10,
        -10, 0, 10, 10, 10, 10, 0, -10,
        -10, 10, 10, 10, 10, 10, 10, -10,
        -10, 5, 0, 0, 0, 0, 5, -10,
        -20, -10, -10, -10, -10, -10, -10, -20,
    )

    PST_BISHOP_EG: PieceSquareTable = (
        -20, -10, -10, -10, -10, -10, -10, -20,
        -10, 0, 0, 0, 0, 0, 0, -10,
        -10, 0, 10, 10, 10, 10, 0, -10,
        -10, 0, 10, 15, 15, 10, 0, -10,
        -10, 0, 10, 15, 15, 10, 0, -10,
        -10, 0, 10, 10, 10, 10, 0, -10,
        -10, 0, 0, 0, 0, 0, 0, -10,
        -20, -10, -10, -10, -10, -10, -10, -20,
    )

    PST_ROOK_MG: PieceSquareTable = (
        0, 0, 0, 0, 0, 0, 0, 0,
        5, 10, 10, 10, 10, 10, 10, 5,
        -5, 0, 0, 0, 0, 0, 0, -5,
        -5, 0, 0, 0, 0, 0, 0, -5,
        -5, 0, 0, 0, 0, 0, 0, -5,
        -5, 0, 0, 0, 0, 0, 0, -5,
        -5, 0, 0, 0, 0, 0, 0, -5,
        0, 0, 0, 5, 5, 0, 0, 0,
    )

    PST_ROOK_EG: PieceSquareTable = (
        5, 5, 5, 5, 5, 5, 5, 5,
        15, 15, 15, 15, 15, 15, 15, 15,
        0, 0, 5, 5, 5, 5, 0, 0,
        0, 0, 5, 5, 5, 5, 0, 0,
        0, 0, 5, 5, 5, 5, 0, 0,
        0, 0, 5, 5, 5, 5, 0, 0,
        0, 0, 0, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 0, 0, 0, 0,
    )

    PST_QUEEN_MG: PieceSquareTable = (
        -20, -10, -10, -5, -5, -10, -10, -20,
        -10, 0, 0, 0, 0, 0, 0, -10,
        -10, 0, 5, 5, 5, 5, 0, -10,
        -5, 0, 5, 5, 5, 5, 0, -5,
        0, 0, 5, 5, 5, 5, 0, -5,
        -10, 5, 5, 5, 5, 5, 0, -10,
        -10, 0, 5, 0, 0, 0, 0, -10,
        -20, -10, -10, -5, -5, -10, -10, -20,
    )

    PST_QUEEN_EG: PieceSquareTable = (
        -20, -10, -10, -5, -5, -10, -10, -20,
        -10, 0, 5, 5, 5, 5, 0, -10,
        -10, 5, 10, 15, 15, 10, 5, -10,
        -5, 5, 15, 20, 20, 15, 5, -5,
        -5, 5, 15, 20, 20, 15, 5, -5,
        -10, 5, 10, 15, 15, 10, 5, -10,
        -10, 0, 5, 5, 5, 5, 0, -10,
        -20, -10, -10, -5, -5, -10, -10, -20,
    )

    PST_KING_MG: PieceSquareTable = (
        -30, -40, -40, -50, -50, -40, -40, -30,
        -30, -40, -40, -50, -50, -40, -40, -30,
        -30, -40, -40, -50, -50, -40, -40, -30,
        -30, -40, -40, -50, -50, -40, -40, -30,
        -20, -30, -30, -40, -40, -30, -30, -20,
        -10, -20, -20, -20, -20, -20, -20, -10,
        20, 20, 0, 0, 0, 0, 20, 20,
        20, 30, 10, 0, 0, 10, 30, 20,
    )

    PST_KING_EG: PieceSquareTable = (
        -50, -40, -30, -20, -20, -30, -40, -50,
        -30, -20, -10, 0, 0, -10, -20, -30,
        -30, -10, 20, 30, 30, 20, -10, -30,
        -30, -10, 30, 40, 40, 30, -10, -30,
        -30, -10, 30, 40, 40, 30, -10, -30,
        -30, -10, 20, 30, 30, 20, -10, -30,
        -30, -30, 0, 0, 0, 0, -30, -30,
        -50, -30, -30, -30, -30, -30, -30, -50,
    )

    @classmethod
    def evaluate(cls, board: chess.Board) -> int:
        state = rules.status(board)
        if state.checkmate:
            return -MATE_UPPER if board.turn == chess.WHITE else MATE_UPPER
        if state.over:
            return 0

        mg_score = 0
        eg_score = 0
        for square, piece in board.piece_map().items():
            mg_table, eg_table = cls._pst_for(piece.piece_type)
            material = cls.MATERIAL_VALUES[piece.piece_type]
            if piece.color == chess.WHITE:
                idx = chess.square_mirror(square)
                mg_score += material + mg_table[idx]
                eg_score += material + eg_table[idx]
            else:
                mg_score -= material + mg_table[square]
                eg_score -= material + eg_table[square]

        phase = cls.game_phase(board)
        # round() is symmetric around zero, so mirrored positions score as exact negatives
        return round(phase * mg_score + (1 - phase) * eg_score)

    @classmethod
    def game_phase(cls, board: chess.Board) -> float:
        """1.0 with every non-king piece on the board, 0.0 with bare kings."""
        pieces = chess.popcount(board.occupied & ~board.kings)
        return min(pieces, PHASE_PIECES) / PHASE_PIECES

    @classmethod
    def _pst_for(cls, piece_type: chess.PieceType) -> Tuple[Sequence[int], Sequence[int]]:
        if piece_type == chess.PAWN:
            return cls.PST_PAWN_MG, cls.PST_PAWN_EG
        if piece_type == chess.KNIGHT:
            return cls.PST_KNIGHT_MG, cls.PST_KNIGHT_EG
        if piece_type == chess.BISHOP:
            return cls.PST_BISHOP_MG, cls.PST_BISHOP_EG
        if piece_type == chess.ROOK:
            return cls.PST_ROOK_MG, cls.PST_ROOK_EG
        if piece_type == chess.QUEEN:
            return cls.PST_QUEEN_MG, cls.PST_QUEEN_EG
        return cls.PST_KING_MG, cls.PST_KING_EG


def evaluate(board: chess.Board) -> int:
    return Evaluator.evaluate(board)
