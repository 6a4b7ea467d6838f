from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, request

from game import (
    TILE_KIND_COUNT,
    Board,
    Move,
    Square,
    board_phase,
    do_move,
    find_move,
    random_board,
    shortest_move_between,
)

DEFAULT_COLS = int(os.getenv("SHISEN_COLS", "8"))
DEFAULT_ROWS = int(os.getenv("SHISEN_ROWS", "7"))
# Generation is quadratic in the tile count per move; keep requested boards small.
MAX_SIDE = int(os.getenv("SHISEN_MAX_SIDE", "20"))

if os.getenv("SHISEN_DEBUG", "0").lower() in ("1", "true", "yes", "on"):
    logging.basicConfig(level=logging.DEBUG)

logger = logging.getLogger(__name__)

app = Flask(__name__)


class BadPayload(ValueError):
    pass


def board_to_json(b: Board) -> Dict[str, Any]:
    """Interior rows only; null marks an empty square."""
    cells: List[List[Optional[int]]] = []
    for r in range(1, b.nrow - 1):
        cells.append([b[Square(c, r)].kind for c in range(1, b.ncol - 1)])
    return {"cols": b.ncol_inner, "rows": b.nrow_inner, "cells": cells}


def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise BadPayload("JSON object required")
    return body


def _int(v: Any) -> int:
    # JSON true/false would otherwise pass as 1/0
    if isinstance(v, bool):
        raise ValueError(f"not an integer: {v!r}")
    return int(v)


def _kind(v: Any) -> Optional[int]:
    if v is None:
        return None
    kind = _int(v)
    if not 0 <= kind < TILE_KIND_COUNT:
        raise ValueError(f"tile kind out of range: {kind}")
    return kind


def json_to_board(obj: Any) -> Board:
    if not isinstance(obj, dict):
        raise BadPayload("board required")
    try:
        cells = obj["cells"]
        if len(cells) > MAX_SIDE or any(len(row) > MAX_SIDE for row in cells):
            raise ValueError(f"board larger than {MAX_SIDE}x{MAX_SIDE}")
        board = Board.from_rows([[_kind(v) for v in row] for row in cells])
        cols = _int(obj.get("cols", board.ncol_inner))
        rows = _int(obj.get("rows", board.nrow_inner))
    except (KeyError, TypeError, ValueError) as e:
        raise BadPayload(f"bad board: {e}") from e
    if (cols, rows) != (board.ncol_inner, board.nrow_inner):
        raise BadPayload("bad board: size does not match cells")
    return board


def json_to_square(obj: Any, board: Board) -> Square:
    try:
        c, r = obj
        sq = Square(_int(c), _int(r))
    except (TypeError, ValueError) as e:
        raise BadPayload(f"bad square: {obj!r}") from e
    if not (0 <= sq.c < board.ncol and 0 <= sq.r < board.nrow):
        raise BadPayload(f"square outside board: {list(sq)}")
    return sq


def move_to_json(mv: Optional[Move]) -> Optional[Dict[str, Any]]:
    if mv is None:
        return None
    return {
        "src": list(mv.src),
        "dst": list(mv.dst),
        "path": [list(sq) for sq in mv.path],
        "distance": mv.path_distance(),
    }


def _status_json(board: Board) -> Dict[str, Any]:
    return {"status": board_phase(board).value, "tiles": board.tile_count()}


@app.errorhandler(BadPayload)
def _bad_payload(e: BadPayload) -> Any:
    logger.warning("rejected payload: %s", e)
    return jsonify({"ok": False, "error": str(e)}), 400


# ---------- Core Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = _body()
    try:
        cols = _int(body.get("cols", DEFAULT_COLS))
        rows = _int(body.get("rows", DEFAULT_ROWS))
        seed = body.get("seed", None)
        seed = _int(seed) if seed is not None else None
        if cols > MAX_SIDE or rows > MAX_SIDE:
            raise ValueError(f"board larger than {MAX_SIDE}x{MAX_SIDE}")
        board = random_board(cols, rows, seed=seed)
    except (TypeError, ValueError) as e:
        raise BadPayload(f"bad size: {e}") from e
    logger.info("new %dx%d board (seed=%s)", cols, rows, seed)
    return jsonify({"ok": True, "board": board_to_json(board), **_status_json(board)})


@app.post("/api/move")
def api_move() -> Any:
    body = _body()
    board = json_to_board(body.get("board"))
    src = json_to_square(body.get("src"), board)
    dst = json_to_square(body.get("dst"), board)
    mv = shortest_move_between(board, src, dst)
    if mv is None:
        return jsonify({"ok": False, "error": "No connection", **_status_json(board)}), 400
    do_move(board, mv)
    return jsonify({"ok": True, "move": move_to_json(mv), "board": board_to_json(board), **_status_json(board)})


@app.post("/api/hint")
def api_hint() -> Any:
    body = _body()
    board = json_to_board(body.get("board"))
    return jsonify({"ok": True, "move": move_to_json(find_move(board))})


@app.post("/api/status")
def api_status() -> Any:
    body = _body()
    board = json_to_board(body.get("board"))
    return jsonify({"ok": True, **_status_json(board)})


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=int(os.getenv("PORT", "5000")), debug=False)
