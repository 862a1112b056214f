from __future__ import annotations

from concurrent.futures import TimeoutError as FutureTimeout
import logging
import random
from typing import Any, Mapping, Optional

from flask import Flask, jsonify, request
import chess
import sys
from pathlib import Path

# Ensure project root is importable when running this file directly
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from chess_opponent import AIPlayer, Difficulty, EngineConfig, Evaluator, Game
from chess_opponent.errors import EngineError, IllegalMoveError

logger = logging.getLogger(__name__)

DEFAULTS = {
    "SIMULATE_THINKING": True,
    "MOVE_TIMEOUT_S": 30.0,
    "USE_BOOK": True,
    "RANDOM_SEED": None,
}


def create_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_mapping(DEFAULTS)
    # CHESS_SIMULATE_THINKING=false, CHESS_MOVE_TIMEOUT_S=5, ...
    app.config.from_prefixed_env("CHESS")
    if config:
        app.config.from_mapping(config)

    seed = app.config["RANDOM_SEED"]
    game = Game()
    ai = AIPlayer(
        rng=random.Random(seed) if seed is not None else None,
        config=EngineConfig(
            use_book=bool(app.config["USE_BOOK"]),
            simulate_thinking=bool(app.config["SIMULATE_THINKING"]),
        ),
    )
    app.extensions["chess_game"] = game
    app.extensions["chess_ai"] = ai

    def reply_as_ai(difficulty: Difficulty, take_back: bool = False) -> Optional[str]:
        future = ai.select_move_async(game.board, difficulty)
        try:
            ai_move_uci = future.result(timeout=float(app.config["MOVE_TIMEOUT_S"]))
        except FutureTimeout:
            # Drop the stuck worker so the next request is not queued behind it
            future.cancel()
            ai.shutdown(wait=False)
            if take_back:
                game.undo()
            raise
        if ai_move_uci:
            game.push_uci(ai_move_uci)
            logger.info("AI (%s) played %s", difficulty.value, ai_move_uci)
        return ai_move_uci or None

    @app.errorhandler(ValueError)
    @app.errorhandler(IllegalMoveError)
    def bad_request(exc: ValueError):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(FutureTimeout)
    def engine_timeout(exc: FutureTimeout):
        logger.warning("Engine did not answer within %ss", app.config["MOVE_TIMEOUT_S"])
        return jsonify({"error": "Engine timed out"}), 503

    @app.errorhandler(EngineError)
    def engine_failure(exc: EngineError):
        logger.exception("Engine failure")
        return jsonify({"error": str(exc)}), 500

    @app.get("/api/state")
    def api_state():
        return jsonify(game.snapshot())

    @app.post("/api/new")
    def api_new():
        data = request.get_json(silent=True) or {}
        fen = data.get("fen")
        color = (data.get("color") or "white").lower()
        difficulty = Difficulty.parse(data.get("difficulty", "medium"))

        if fen:
            try:
                chess.Board(fen)
            except ValueError as exc:
                raise ValueError(f"Invalid FEN: {exc}") from exc
        game.reset(fen, color)

        ai_move_uci = None
        pre_fen: Optional[str] = None
        # If the AI has the move (player chose black from the start), it plays immediately
        if not game.is_game_over() and not game.is_player_turn():
            # Capture starting position to allow frontend to animate the first AI move
            pre_fen = game.get_full_fen()
            ai_move_uci = reply_as_ai(difficulty)

        snap = game.snapshot()
        snap["ai_move"] = ai_move_uci
        if pre_fen is not None:
            snap["pre_fen"] = pre_fen
        return jsonify(snap)

    @app.post("/api/move")
    def api_move():
        payload = request.get_json(silent=True) or {}
        uci = payload.get("move")
        difficulty = Difficulty.parse(payload.get("difficulty", "medium"))
        if not uci:
            return jsonify({"error": "Missing move"}), 400

        game.push_player_uci(uci)

        ai_move_uci = None
        if not game.is_game_over():
            ai_move_uci = reply_as_ai(difficulty, take_back=True)

        snap = game.snapshot()
        snap["ai_move"] = ai_move_uci
        return jsonify(snap)

    @app.post("/api/ai-move")
    def api_ai_move():
        data = request.get_json(silent=True) or {}
        difficulty = Difficulty.parse(data.get("difficulty", "medium"))
        if game.is_game_over() or game.is_player_turn():
            return jsonify({"error": "Not the engine's turn"}), 409
        ai_move_uci = reply_as_ai(difficulty)
        snap = game.snapshot()
        snap["ai_move"] = ai_move_uci
        return jsonify(snap)

    @app.post("/api/undo")
    def api_undo():
        game.undo()
        return jsonify(game.snapshot())

    @app.post("/api/evaluate")
    def api_evaluate():
        data = request.get_json(silent=True) or {}
        fen = data.get("fen")
        board = chess.Board(fen) if fen else game.board
        return jsonify({
            "fen": board.fen(),
            "evaluation": Evaluator.evaluate(board),
            "phase": Evaluator.game_phase(board),
        })

    @app.post("/api/draw")
    def api_draw():
        data = request.get_json(silent=True) or {}
        difficulty = Difficulty.parse(data.get("difficulty", "medium"))
        accepted = game.offer_draw(ai, difficulty)
        snap = game.snapshot()
        snap["draw_accepted"] = accepted
        return jsonify(snap)

    @app.post("/api/resign")
    def api_resign():
        data = request.get_json(silent=True) or {}
        game.resign(data.get("color") or game.player_color)
        return jsonify(game.snapshot())

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_app().run(host="0.0.0.0", port=5000, debug=True)
