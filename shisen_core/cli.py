from __future__ import annotations

import argparse
import logging
import os
from typing import Optional

from .board import Square
from .moves import Move, do_move, find_move
from .state import DEFAULT_COLS, DEFAULT_ROWS, GameState, Phase, format_duration, new_game


def parse_square(text: str) -> Optional[Square]:
    """Parses 'c,r' or 'c r' into a Square; None when it cannot be parsed."""
    sep = ',' if ',' in text else ' '
    parts = [t for t in text.strip().split(sep) if t != '']
    if len(parts) != 2:
        return None
    try:
        return Square(int(parts[0]), int(parts[1]))
    except ValueError:
        return None


def _describe(mv: Move) -> str:
    return ' -> '.join(f'({sq.c},{sq.r})' for sq in mv.path)


def autoplay(state: GameState, show_paths: bool = False) -> int:
    """Plays first-found moves until the board is cleared or stuck. Returns the move count."""
    played = 0
    while True:
        mv = find_move(state.board)
        if mv is None:
            break
        do_move(state.board, mv)
        played += 1
        if show_paths:
            print(f'move {played}: {_describe(mv)}')
    return played


def _play(state: GameState, show_paths: bool) -> None:
    while True:
        if not _play_round(state, show_paths):
            return
        if state.phase is Phase.CLEARED:
            print(f'CLEAR! {format_duration(state.elapsed())}')
        else:
            print(f'STUCK... {format_duration(state.elapsed())}')
        if input('Restart? [y/N] ').strip().lower() not in ('y', 'yes', 'restart'):
            return
        state.restart()


def _play_round(state: GameState, show_paths: bool) -> bool:
    """Reads picks until the board is cleared or stuck. False when the player quits."""
    print(state.board.pretty())
    print("Enter two squares as 'c,r c,r', or 'hint', 'restart', 'quit'.")
    while state.phase is Phase.PLAYING:
        text = input('> ').strip()
        if text in ('q', 'quit', 'exit'):
            return False
        if text == 'hint':
            mv = state.hint()
            print('Hint:', _describe(mv) if mv is not None else 'none')
            continue
        if text == 'restart':
            state.restart()
            print(state.board.pretty())
            continue
        picks = text.split()
        if len(picks) != 2:
            print('Could not parse. Try again.')
            continue
        src, dst = parse_square(picks[0]), parse_square(picks[1])
        if src is None or dst is None:
            print('Could not parse. Try again.')
            continue
        state.select(src)
        if state.selected is None:
            print('No tile there.')
            continue
        mv = state.select(dst)
        if mv is None:
            print('Those tiles cannot be connected.')
            continue
        if show_paths:
            print('Path:', _describe(mv))
        print(state.board.pretty())
    return True


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(description='Shisen-sho tile matching in the terminal')
    parser.add_argument('--cols', type=int, default=DEFAULT_COLS, help='Interior columns')
    parser.add_argument('--rows', type=int, default=DEFAULT_ROWS, help='Interior rows')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the deal')
    parser.add_argument('--autoplay', action='store_true', help='Play first-found moves to the end')
    parser.add_argument('--show-paths', action='store_true', help='Print the connecting path of each move')
    args = parser.parse_args(argv)

    if os.getenv('SHISEN_DEBUG', '0').lower() in ('1', 'true', 'yes', 'on'):
        logging.basicConfig(level=logging.DEBUG)

    try:
        state = new_game(args.cols, args.rows, seed=args.seed)
    except ValueError as e:
        parser.error(str(e))

    if not args.autoplay:
        _play(state, args.show_paths)
        return

    print('Initial board:')
    print(state.board.pretty())
    played = autoplay(state, show_paths=args.show_paths)
    print(state.board.pretty())
    if state.board.is_empty():
        print(f'Cleared in {played} moves.')
    else:
        print(f'Stuck after {played} moves, {state.board.tile_count()} tiles left.')


if __name__ == '__main__':
    main()
