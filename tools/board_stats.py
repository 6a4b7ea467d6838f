from __future__ import annotations

import argparse
import os
import sys
import time
from typing import List, Tuple

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from game import do_move, find_move, random_board  # type: ignore


def parse_size(text: str) -> Tuple[int, int]:
    cols, rows = text.lower().split('x')
    return int(cols), int(rows)


def play_out(cols: int, rows: int, seed: int) -> Tuple[bool, int]:
    """Deals one board and plays first-found moves. Returns (cleared, moves played).

    Exact while every kind appears at most twice (interiors under 2 * TILE_KIND_COUNT
    squares): removals only free squares, so first-found play cannot strand a pair.
    Larger boards repeat kinds and first-found play may pick the wrong partner.
    """
    board = random_board(cols, rows, seed=seed)
    played = 0
    while True:
        mv = find_move(board)
        if mv is None:
            break
        do_move(board, mv)
        played += 1
    return board.is_empty(), played


def process(args: argparse.Namespace) -> int:
    sizes: List[Tuple[int, int]] = [parse_size(s) for s in args.sizes]
    failures = 0
    for cols, rows in sizes:
        start_time = time.time()
        cleared = 0
        for i in range(args.count):
            seed = args.seed + i
            ok, played = play_out(cols, rows, seed)
            if ok:
                cleared += 1
            else:
                failures += 1
                print(f'{cols}x{rows} seed={seed}: stuck after {played} moves')
        took = time.time() - start_time
        print(f'{cols}x{rows}: {cleared}/{args.count} cleared in {took:.2f}s')
    return 1 if failures else 0


def main() -> None:
    ap = argparse.ArgumentParser(description='Deal random boards and check each one plays out to empty')
    ap.add_argument('sizes', nargs='*', default=['4x4', '8x7', '5x4'], help='Interior sizes as COLSxROWS')
    ap.add_argument('--count', type=int, default=20, help='Boards per size')
    ap.add_argument('--seed', type=int, default=0, help='First seed; boards use seed, seed+1, ...')
    args = ap.parse_args()
    sys.exit(process(args))


if __name__ == '__main__':
    main()
