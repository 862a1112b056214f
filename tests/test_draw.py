from __future__ import annotations

import random

import chess
import pytest

from chess_opponent.difficulty import DIFFICULTY_PROFILES, Difficulty, profile_for
from chess_opponent.draw import DRAW_SCALE_CP, acceptance_probability, base_probability, should_accept_draw

QUEEN_UP = "rnb1kbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
ROOK_UP = "1nbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQk - 0 1"


class FixedRandom:
    def __init__(self, value: float) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


def test_base_probability_scale():
    assert base_probability(0) == 1.0
    assert base_probability(DRAW_SCALE_CP // 2) == pytest.approx(0.5)
    assert base_probability(-DRAW_SCALE_CP // 2) == pytest.approx(0.5)
    assert base_probability(5 * DRAW_SCALE_CP) == 0.0


def test_balanced_position_at_medium_uses_base_probability():
    board = chess.Board()
    assert acceptance_probability(board, Difficulty.MEDIUM) == base_probability(0) == 1.0
    rng = random.Random(7)
    assert all(should_accept_draw(board, Difficulty.MEDIUM, rng) for _ in range(200))


def test_queen_down_hard_opponent_refuses():
    board = chess.Board(QUEEN_UP)
    assert acceptance_probability(board, Difficulty.HARD) == 0.0
    rng = random.Random(99)
    assert not any(should_accept_draw(board, "hard", rng) for _ in range(500))


def test_difficulty_adjustments_are_clamped():
    board = chess.Board(QUEEN_UP)
    medium = acceptance_probability(board, Difficulty.MEDIUM)
    assert 0.0 < medium < 0.2
    assert acceptance_probability(board, Difficulty.EASY) == pytest.approx(medium + 0.2)
    assert acceptance_probability(chess.Board(), Difficulty.EASY) == 1.0


@pytest.mark.parametrize("fen", [chess.STARTING_FEN, ROOK_UP, QUEEN_UP])
def test_easier_opponents_are_more_willing(fen):
    board = chess.Board(fen)
    easy, medium, hard = (acceptance_probability(board, d) for d in Difficulty)
    assert easy >= medium >= hard


def test_acceptance_rate_matches_probability():
    board = chess.Board(ROOK_UP)
    expected = acceptance_probability(board, Difficulty.MEDIUM)
    assert expected == pytest.approx(0.5)
    rng = random.Random(2024)
    trials = 4000
    accepted = sum(should_accept_draw(board, Difficulty.MEDIUM, rng) for _ in range(trials))
    assert abs(accepted / trials - expected) < 0.05


def test_roll_is_compared_strictly():
    board = chess.Board(ROOK_UP)
    assert should_accept_draw(board, Difficulty.MEDIUM, FixedRandom(0.49))
    assert not should_accept_draw(board, Difficulty.MEDIUM, FixedRandom(0.5))


def test_finished_game_refuses_draw():
    board = chess.Board("rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3")
    assert acceptance_probability(board, Difficulty.EASY) == 0.0
    assert not should_accept_draw(board, Difficulty.EASY, FixedRandom(0.0))


def test_profile_table_is_complete():
    assert set(DIFFICULTY_PROFILES) == set(Difficulty)
    assert profile_for("EASY").depth == 2
    assert profile_for(" medium ").depth == 3
    assert profile_for(Difficulty.HARD).depth == 4
    with pytest.raises(ValueError):
        profile_for("impossible")
