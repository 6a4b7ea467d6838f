"""
Shisen-sho core Python package.

Pure game logic with no I/O; the Flask app and the terminal CLI sit on top.
Modules:
- board.py: Board, Cell, Square
- moves.py: Move and the two-bend connection search
- deal.py: solvable random boards
- state.py: GameState (selection, phase, clock)
"""
