from __future__ import annotations

import logging
import random
from typing import List, Optional

from .board import TILE_KIND_COUNT, Board, Tile
from .moves import Move, do_move, random_move

logger = logging.getLogger(__name__)


def tile_multiset(n_inner: int, rng: random.Random, kind_count: int = TILE_KIND_COUNT) -> List[int]:
    """
    Tile kinds for an interior of n_inner squares, every kind as evenly as possible.
    Each kind appears 2q times; the remaining r squares get r/2 randomly chosen
    kinds, twice each.
    """
    q, r = divmod(n_inner, 2 * kind_count)
    kinds = list(range(kind_count))
    tiles: List[int] = []
    for _ in range(2 * q):
        tiles.extend(kinds)
    rng.shuffle(kinds)
    for _ in range(2):
        tiles.extend(kinds[:r // 2])
    return tiles


def shuffle_tiles(board: Board, rng: random.Random) -> None:
    """Shuffles the tiles among the occupied squares. The result is not necessarily solvable."""
    squares = [sq for sq, _ in board.enumerate_tiles()]
    tiles = [cell for _, cell in board.enumerate_tiles()]
    rng.shuffle(tiles)
    for sq, tile in zip(squares, tiles):
        board[sq] = tile


def shuffle_solvable(board: Board, rng: Optional[random.Random] = None) -> List[Move]:
    """
    Shuffles the tiles in place, keeping the occupied squares, so that the board
    can be cleared completely.

    Works on a copy: shuffle the remaining tiles, write that arrangement back to
    board, then play random moves on the copy until none is left. Repeat until
    the copy is empty. Each layer written back is exactly the set of tiles that
    the following random play removed, so replaying those moves clears board.

    Returns the moves played on the copy, in order. They form a solution of the
    shuffled board.
    """
    rng = rng or random  # type: ignore[assignment]
    work = board.copy()
    played: List[Move] = []
    layer = 0
    while not work.is_empty():
        shuffle_tiles(work, rng)
        for sq, tile in work.enumerate_tiles():
            board[sq] = tile
        removed = 0
        while True:
            mv = random_move(work, rng)
            if mv is None:
                break
            do_move(work, mv)
            played.append(mv)
            removed += 2
        layer += 1
        logger.debug('layer %d: removed %d tiles, %d left', layer, removed, work.tile_count())
    return played


def random_board(
    ncol_inner: int,
    nrow_inner: int,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Board:
    """Creates a random board that is guaranteed to have a solution.

    rng takes precedence over seed; with neither, the process-wide random source is used.
    """
    if rng is None:
        rng = random.Random(seed) if seed is not None else random  # type: ignore[assignment]
    board = Board.empty(ncol_inner, nrow_inner)
    squares = list(board.squares_inner())
    tiles = tile_multiset(len(squares), rng)
    for sq, kind in zip(squares, tiles):
        board[sq] = Tile(kind)
    shuffle_solvable(board, rng)
    logger.debug('dealt %dx%d board (%d tiles)', ncol_inner, nrow_inner, len(tiles))
    return board
