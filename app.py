# app.py
import logging
import os

from flask import Flask, jsonify, request
from flask_cors import CORS
from dotenv import load_dotenv

from game_logic import MODES, Board, decide

load_dotenv()

logger = logging.getLogger(__name__)

HOST = os.getenv("TTT_HOST", "127.0.0.1")
PORT = int(os.getenv("TTT_PORT", "3000"))
DEBUG = os.getenv("TTT_DEBUG", "false").lower() in ("1", "true", "yes")
LOG_LEVEL = os.getenv("TTT_LOG_LEVEL", "INFO").upper()

# Strategy used when the request does not name one ('hard' or 'heuristic')
DEFAULT_AI_MODE = os.getenv("TTT_AI_MODE", "hard")
if DEFAULT_AI_MODE not in MODES:
    raise ValueError(f"TTT_AI_MODE must be one of {MODES}, got {DEFAULT_AI_MODE!r}")

_origins = os.getenv("TTT_CORS_ORIGINS", "*")
CORS_ORIGINS = "*" if _origins.strip() == "*" else [o.strip() for o in _origins.split(",") if o.strip()]

app = Flask(__name__)
CORS(app, origins=CORS_ORIGINS, methods=["GET", "PUT"], allow_headers="*")


@app.route("/")
def root():
    return "Welcome to tic-tac-toe"


@app.route("/calculate-move", methods=["PUT"])
def calculate_move():
    """
    Play the computer's move.
    Body: {"board": ["x", "", "o", ...], "status": "...", "mode": "hard|heuristic"}
    The incoming status is ignored and always recomputed.
    Returns: {"board": [...], "status": "InProgress|Draw|XWins|OWins"}
    """
    body = request.get_json(silent=True)
    try:
        board, mode = parse_request(body)
    except ValueError as e:
        logger.info("rejected request: %s", e)
        return jsonify({"error": str(e)}), 400

    new_board, status = decide(board, mode=mode)
    return jsonify({"board": new_board.to_list(), "status": status.value})


def parse_request(body):
    """Validate a request body, returning (Board, mode). Raises ValueError."""
    if not isinstance(body, dict):
        raise ValueError("body must be a JSON object")
    cells = body.get("board")
    if cells is None:
        raise ValueError("missing board")
    if not isinstance(cells, list):
        raise ValueError("board must be a list")
    if len(cells) != 9:
        raise ValueError("board must have exactly 9 cells")
    board = Board.from_list(cells)

    mode = body.get("mode", DEFAULT_AI_MODE)
    if mode not in MODES:
        raise ValueError(f"mode must be one of {', '.join(MODES)}")
    return board, mode


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("Running the server on http://%s:%d/", HOST, PORT)
    app.run(host=HOST, port=PORT, debug=DEBUG)
