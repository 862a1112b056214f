from __future__ import annotations

import chess
import pytest

from chess_opponent import AIPlayer, Difficulty, EngineConfig, Game, GameResult, IllegalMoveError


def fools_mate() -> Game:
    game = Game()
    for uci in ("f2f3", "e7e5", "g2g4", "d8h4"):
        game.push_uci(uci)
    return game


def test_push_and_snapshot():
    game = Game()
    game.push_uci("e2e4")
    snap = game.snapshot()
    assert snap["turn"] == "black"
    assert snap["last_move"] == "e2e4"
    assert snap["game_over"] is False
    assert snap["result"] is None
    assert "e7e5" in snap["legal_moves"]
    assert isinstance(snap["evaluation"], int)


def test_illegal_move_raises():
    game = Game()
    with pytest.raises(IllegalMoveError):
        game.push_uci("e2e5")
    with pytest.raises(ValueError):
        game.push_uci("nonsense")
    assert game.get_full_fen() == chess.STARTING_FEN


def test_promotion_without_suffix_becomes_queen():
    game = Game("8/P6k/8/8/8/8/8/K7 w - - 0 1")
    game.push_uci("a7a8")
    assert game.board.piece_at(chess.A8) == chess.Piece(chess.QUEEN, chess.WHITE)


def test_capture_flag_tracks_last_move():
    game = Game()
    for uci in ("e2e4", "d7d5", "e4d5"):
        game.push_uci(uci)
    assert game.snapshot()["last_move_capture"] is True
    game.undo()
    assert game.last_move_was_capture is False
    game.push_uci("e4d5")
    game.push_uci("d8d5")
    game.undo()
    assert game.last_move_was_capture is True


def test_undo_takes_back_one_ply():
    game = Game()
    game.push_uci("e2e4")
    game.undo()
    assert game.get_full_fen() == chess.STARTING_FEN
    with pytest.raises(IllegalMoveError):
        game.undo()


def test_checkmate_result():
    game = fools_mate()
    assert game.result == GameResult(winner="black", reason="checkmate")
    snap = game.snapshot()
    assert snap["game_over"] is True
    assert snap["legal_moves"] == []
    assert snap["in_check"] is True
    assert snap["check_square"] == "e1"
    assert snap["result"] == {"winner": "black", "reason": "checkmate"}
    with pytest.raises(IllegalMoveError):
        game.push_uci("e1f2")


def test_draw_reasons():
    assert Game("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1").result == GameResult(None, "stalemate")
    assert Game("8/8/8/4k3/8/8/8/4K3 w - - 0 1").result == GameResult(None, "insufficient")


def test_resignation():
    game = Game()
    assert game.resign("White") == GameResult(winner="black", reason="resignation")
    assert game.is_game_over()
    with pytest.raises(IllegalMoveError):
        game.push_uci("e2e4")
    with pytest.raises(ValueError):
        Game().resign("purple")


def test_accepted_draw_offer_ends_game(scripted_rng):
    game = Game()
    ai = AIPlayer(rng=scripted_rng([0.0]), config=EngineConfig(simulate_thinking=False))
    assert game.offer_draw(ai, Difficulty.MEDIUM) is True
    assert game.result == GameResult(winner=None, reason="agreement")
    assert game.snapshot()["game_over"] is True


def test_declined_draw_offer_keeps_playing(scripted_rng):
    game = Game()
    ai = AIPlayer(rng=scripted_rng([0.9]), config=EngineConfig(simulate_thinking=False))
    assert game.offer_draw(ai, Difficulty.HARD) is False
    assert game.result is None


def test_draw_offer_after_game_over(scripted_rng):
    game = fools_mate()
    ai = AIPlayer(rng=scripted_rng([0.0]), config=EngineConfig(simulate_thinking=False))
    assert game.offer_draw(ai, Difficulty.EASY) is False
    assert game.result.reason == "checkmate"


def test_reset():
    game = fools_mate()
    game.reset()
    assert game.get_full_fen() == chess.STARTING_FEN
    assert not game.is_game_over()


def test_player_moves_only_on_their_turn():
    game = Game(player_color="black")
    assert game.snapshot()["player_color"] == "black"
    assert not game.is_player_turn()
    with pytest.raises(IllegalMoveError, match="Not your turn"):
        game.push_player_uci("e2e4")
    game.push_uci("e2e4")
    game.push_player_uci("e7e5")
    assert game.get_turn_color() == "white"
    with pytest.raises(ValueError):
        Game(player_color="green")
