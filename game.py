from __future__ import annotations

# Facade module that re-exports the Shisen-sho core.
# The Flask app, the tools and the tests import from here.
# Single-responsibility modules live under shisen_core/*.

from shisen_core.board import (  # noqa: F401
    EMPTY,
    TILE_KIND_COUNT,
    Board,
    Cell,
    Square,
    Tile,
)
from shisen_core.geometry import between, chebyshev, range_intersection  # noqa: F401
from shisen_core.moves import (  # noqa: F401
    Move,
    count_moves,
    do_move,
    find_move,
    find_move_between,
    is_stuck,
    moves_between,
    moves_between_hvh,
    moves_between_vhv,
    random_move,
    shortest_move_between,
)
from shisen_core.deal import (  # noqa: F401
    random_board,
    shuffle_solvable,
    shuffle_tiles,
    tile_multiset,
)
from shisen_core.state import (  # noqa: F401
    DEFAULT_COLS,
    DEFAULT_ROWS,
    GameState,
    Phase,
    board_phase,
    format_duration,
    new_game,
)


def empty_board(ncol_inner: int, nrow_inner: int) -> Board:
    return Board.empty(ncol_inner, nrow_inner)


if __name__ == '__main__':
    from shisen_core.cli import main
    main()
