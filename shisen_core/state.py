from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .board import Board, Square
from .deal import random_board
from .moves import Move, do_move, find_move, is_stuck, shortest_move_between

DEFAULT_COLS = 8
DEFAULT_ROWS = 7


class Phase(str, Enum):
    PLAYING = 'playing'
    CLEARED = 'cleared'
    STUCK = 'stuck'


def board_phase(board: Board) -> Phase:
    if board.is_empty():
        return Phase.CLEARED
    if is_stuck(board):
        return Phase.STUCK
    return Phase.PLAYING


def format_duration(seconds: float) -> str:
    """Formats elapsed seconds as MM:SS."""
    minutes, secs = divmod(int(seconds), 60)
    return f'{minutes:02}:{secs:02}'


@dataclass
class GameState:
    """A single game in progress: the board plus the player's selection and clock."""
    board: Board
    phase: Phase = Phase.PLAYING
    selected: Optional[Square] = None
    last_move: Optional[Move] = None
    started: float = field(default_factory=time.monotonic)
    finished: Optional[float] = None
    rng: Optional[random.Random] = None

    def elapsed(self) -> float:
        end = self.finished if self.finished is not None else time.monotonic()
        return end - self.started

    def select(self, sq: Square) -> Optional[Move]:
        """
        Handles one pick. The first pick selects a tile; the second removes the
        pair along the shortest connection if there is one. The selection is
        cleared after the second pick either way. Returns the applied move.
        """
        if self.phase is not Phase.PLAYING:
            return None
        c, r = sq
        if not (0 <= c < self.board.ncol and 0 <= r < self.board.nrow):
            return None
        sq = Square(c, r)
        if self.selected is None:
            if self.board[sq].is_tile():
                self.selected = sq
            return None
        mv = shortest_move_between(self.board, self.selected, sq)
        self.selected = None
        if mv is None:
            return None
        do_move(self.board, mv)
        self.last_move = mv
        self.phase = board_phase(self.board)
        if self.phase is not Phase.PLAYING:
            self.finished = time.monotonic()
        return mv

    def hint(self) -> Optional[Move]:
        if self.phase is not Phase.PLAYING:
            return None
        return find_move(self.board)

    def restart(self) -> None:
        self.board = random_board(self.board.ncol_inner, self.board.nrow_inner, rng=self.rng)
        self.phase = board_phase(self.board)
        self.selected = None
        self.last_move = None
        self.started = time.monotonic()
        self.finished = None if self.phase is Phase.PLAYING else self.started


def new_game(
    ncol_inner: int = DEFAULT_COLS,
    nrow_inner: int = DEFAULT_ROWS,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Deals a fresh solvable board and starts the clock."""
    if rng is None and seed is not None:
        rng = random.Random(seed)
    board = random_board(ncol_inner, nrow_inner, rng=rng)
    state = GameState(board=board, rng=rng)
    state.phase = board_phase(board)
    if state.phase is not Phase.PLAYING:
        state.finished = state.started
    return state
