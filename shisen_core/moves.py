from __future__ import annotations

import itertools
import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .board import EMPTY, Board, Square
from .geometry import between, chebyshev, range_intersection


@dataclass(frozen=True)
class Move:
    """A removable pair and the connecting line: src, up to two corners, dst."""
    path: Tuple[Square, ...]

    @classmethod
    def new_vhv(cls, src: Square, dst: Square, r: int) -> 'Move':
        """Vertical-horizontal-vertical path turning on row r."""
        if src.c == dst.c:
            raise ValueError(f'vertical-horizontal-vertical path needs distinct columns: {src}, {dst}')
        path: List[Square] = [src]
        if src.r != r:
            path.append(Square(src.c, r))
        if dst.r != r:
            path.append(Square(dst.c, r))
        path.append(dst)
        return cls(tuple(path))

    @classmethod
    def new_hvh(cls, src: Square, dst: Square, c: int) -> 'Move':
        """Horizontal-vertical-horizontal path turning on column c."""
        if src.r == dst.r:
            raise ValueError(f'horizontal-vertical-horizontal path needs distinct rows: {src}, {dst}')
        path: List[Square] = [src]
        if src.c != c:
            path.append(Square(c, src.r))
        if dst.c != c:
            path.append(Square(c, dst.r))
        path.append(dst)
        return cls(tuple(path))

    @property
    def src(self) -> Square:
        return self.path[0]

    @property
    def dst(self) -> Square:
        return self.path[-1]

    def path_distance(self) -> int:
        return sum(chebyshev(a, b) for a, b in zip(self.path, self.path[1:]))


def _free_rows(board: Board, sq: Square) -> Tuple[int, int]:
    """Rows reachable from sq along its column without crossing another tile."""
    lo = 0
    for r in range(sq.r - 1, -1, -1):
        if board[Square(sq.c, r)].is_tile():
            lo = r + 1
            break
    hi = board.nrow - 1
    for r in range(sq.r + 1, board.nrow):
        if board[Square(sq.c, r)].is_tile():
            hi = r - 1
            break
    return lo, hi


def _free_cols(board: Board, sq: Square) -> Tuple[int, int]:
    """Columns reachable from sq along its row without crossing another tile."""
    lo = 0
    for c in range(sq.c - 1, -1, -1):
        if board[Square(c, sq.r)].is_tile():
            lo = c + 1
            break
    hi = board.ncol - 1
    for c in range(sq.c + 1, board.ncol):
        if board[Square(c, sq.r)].is_tile():
            hi = c - 1
            break
    return lo, hi


def moves_between_vhv(board: Board, src: Square, dst: Square) -> Iterator[Move]:
    """Every vertical-horizontal-vertical connection, by ascending bend row."""
    if src.c == dst.c:
        return
    lo, hi = range_intersection(*_free_rows(board, src), *_free_rows(board, dst))
    cols = between(src.c, dst.c)
    for r in range(lo, hi + 1):
        if all(board[Square(c, r)].is_empty() for c in cols):
            yield Move.new_vhv(src, dst, r)


def moves_between_hvh(board: Board, src: Square, dst: Square) -> Iterator[Move]:
    """Every horizontal-vertical-horizontal connection, by ascending bend column."""
    if src.r == dst.r:
        return
    lo, hi = range_intersection(*_free_cols(board, src), *_free_cols(board, dst))
    rows = between(src.r, dst.r)
    for c in range(lo, hi + 1):
        if all(board[Square(c, r)].is_empty() for r in rows):
            yield Move.new_hvh(src, dst, c)


def moves_between(board: Board, src: Square, dst: Square) -> Iterator[Move]:
    """
    Enumerates every legal connection between two squares.
    A connection bends at most twice, so it is either vertical-horizontal-vertical
    or horizontal-vertical-horizontal; a straight line is a degenerate case of both.
    """
    src = Square.new(*src)
    dst = Square.new(*dst)
    if src == dst or not board[src].is_same_tile(board[dst]):
        return
    yield from moves_between_vhv(board, src, dst)
    yield from moves_between_hvh(board, src, dst)


def find_move_between(board: Board, src: Square, dst: Square) -> Optional[Move]:
    return next(moves_between(board, src, dst), None)


def shortest_move_between(board: Board, src: Square, dst: Square) -> Optional[Move]:
    """Legal connection with the smallest path distance; the first one found wins ties."""
    return min(moves_between(board, src, dst), key=lambda mv: mv.path_distance(), default=None)


def _tile_pairs(board: Board) -> List[Tuple[Square, Square]]:
    # Pairs involving an empty square never connect, so only tile squares are paired.
    return list(itertools.combinations([sq for sq, _ in board.enumerate_tiles()], 2))


def find_move(board: Board) -> Optional[Move]:
    """Returns the first legal move in board order, or None. Exhaustive search."""
    for src, dst in _tile_pairs(board):
        mv = find_move_between(board, src, dst)
        if mv is not None:
            return mv
    return None


def random_move(board: Board, rng: Optional[random.Random] = None) -> Optional[Move]:
    """Like find_move, but pairs are tried in a uniformly shuffled order."""
    pairs = _tile_pairs(board)
    (rng or random).shuffle(pairs)
    for src, dst in pairs:
        mv = find_move_between(board, src, dst)
        if mv is not None:
            return mv
    return None


def count_moves(board: Board) -> int:
    """Number of tile pairs that can currently be removed."""
    return sum(1 for src, dst in _tile_pairs(board) if find_move_between(board, src, dst) is not None)


def do_move(board: Board, mv: Move) -> None:
    """Removes the pair. mv must have been computed against the current board."""
    board[mv.src] = EMPTY
    board[mv.dst] = EMPTY


def is_stuck(board: Board) -> bool:
    return not board.is_empty() and find_move(board) is None
