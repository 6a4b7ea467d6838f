import itertools
import random
import unittest

from game import (
    Board,
    Move,
    Square,
    count_moves,
    do_move,
    find_move,
    find_move_between,
    is_stuck,
    moves_between,
    random_move,
    shortest_move_between,
)


def segment_squares(a, b):
    """Squares strictly between two points of a straight segment."""
    if a.c == b.c:
        step = 1 if b.r > a.r else -1
        return [Square(a.c, r) for r in range(a.r + step, b.r, step)]
    step = 1 if b.c > a.c else -1
    return [Square(c, a.r) for c in range(a.c + step, b.c, step)]


def path_is_clear(board, mv):
    """Every square the line touches, besides the two tiles, must be empty."""
    touched = set(mv.path[1:-1])
    for a, b in zip(mv.path, mv.path[1:]):
        touched.update(segment_squares(a, b))
    return all(board[sq].is_empty() for sq in touched)


def brute_force_paths(board, src, dst):
    """All clear two-bend candidates, built directly from every bend row/column."""
    found = set()
    if src.c != dst.c:
        for r in range(board.nrow):
            mv = Move.new_vhv(src, dst, r)
            if path_is_clear(board, mv):
                found.add(mv.path)
    if src.r != dst.r:
        for c in range(board.ncol):
            mv = Move.new_hvh(src, dst, c)
            if path_is_clear(board, mv):
                found.add(mv.path)
    return found


class TestMoveShape(unittest.TestCase):
    def test_given_bend_row_when_building_vhv_then_degenerate_segments_collapse(self):
        src, dst = Square(1, 1), Square(3, 2)
        self.assertEqual(Move.new_vhv(src, dst, 0).path, (src, Square(1, 0), Square(3, 0), dst))
        self.assertEqual(Move.new_vhv(src, dst, 1).path, (src, Square(3, 1), dst))
        self.assertEqual(Move.new_vhv(src, dst, 2).path, (src, Square(1, 2), dst))

    def test_given_bend_column_when_building_hvh_then_path_mirrors_vhv(self):
        src, dst = Square(1, 1), Square(2, 3)
        mv = Move.new_hvh(src, dst, 0)
        self.assertEqual(mv.path, (src, Square(0, 1), Square(0, 3), dst))
        self.assertEqual(mv.src, src)
        self.assertEqual(mv.dst, dst)
        self.assertEqual(mv.path_distance(), 1 + 2 + 2)

    def test_given_axis_equal_pair_when_building_then_value_error(self):
        with self.assertRaises(ValueError):
            Move.new_vhv(Square(1, 1), Square(1, 3), 0)
        with self.assertRaises(ValueError):
            Move.new_hvh(Square(1, 1), Square(3, 1), 0)


class TestConnectRule(unittest.TestCase):
    def test_given_adjacent_pair_when_searching_then_straight_move(self):
        board = Board.from_rows([
            [0, 0],
            ['.', '.'],
        ])
        mv = shortest_move_between(board, Square(1, 1), Square(2, 1))
        self.assertIsNotNone(mv)
        self.assertEqual(mv.path, (Square(1, 1), Square(2, 1)))
        self.assertEqual(mv.path_distance(), 1)
        self.assertEqual(count_moves(board), 1)
        self.assertEqual(find_move(board).path, (Square(1, 1), Square(2, 1)))

    def test_given_blocker_between_pair_when_searching_then_routes_around(self):
        board = Board.from_rows([
            [0, 1, 0],
            ['.', '.', '.'],
        ])
        src, dst = Square(1, 1), Square(3, 1)
        paths = [mv.path for mv in moves_between(board, src, dst)]
        self.assertNotIn((src, dst), paths)
        # Border row on top, empty interior row and border row below
        self.assertEqual(paths, [
            (src, Square(1, 0), Square(3, 0), dst),
            (src, Square(1, 2), Square(3, 2), dst),
            (src, Square(1, 3), Square(3, 3), dst),
        ])
        mv = find_move_between(board, src, dst)
        self.assertEqual(mv.path, (src, Square(1, 0), Square(3, 0), dst))

    def test_given_full_rows_when_searching_then_only_border_row_connects(self):
        board = Board.from_rows([
            [0, 1, 0],
            [2, 3, 4],
        ])
        src, dst = Square(1, 1), Square(3, 1)
        moves = list(moves_between(board, src, dst))
        self.assertEqual(len(moves), 1)
        self.assertEqual(moves[0].path, (src, Square(1, 0), Square(3, 0), dst))
        self.assertEqual(shortest_move_between(board, src, dst).path, moves[0].path)

    def test_given_mismatched_or_same_square_when_searching_then_none(self):
        board = Board.from_rows([
            [0, 1],
            ['.', 0],
        ])
        squares = list(board.squares())
        for a, b in itertools.product(squares, squares):
            ca, cb = board[a], board[b]
            if a == b or not ca.is_same_tile(cb):
                self.assertIsNone(find_move_between(board, a, b), (a, b))
                self.assertIsNone(shortest_move_between(board, a, b), (a, b))
        self.assertIsNotNone(find_move_between(board, Square(1, 1), Square(2, 2)))

    def test_given_bent_pair_when_searching_then_both_shapes_enumerated(self):
        board = Board.from_rows([
            [0, '.'],
            ['.', 0],
        ])
        src, dst = Square(1, 1), Square(2, 2)
        paths = [mv.path for mv in moves_between(board, src, dst)]
        # Both one-bend corners are legal
        self.assertIn((src, Square(2, 1), dst), paths)
        self.assertIn((src, Square(1, 2), dst), paths)
        self.assertEqual(shortest_move_between(board, src, dst).path_distance(), 2)

    def test_given_three_tiles_of_kind_when_searching_then_path_stops_at_tiles(self):
        board = Board.from_rows([
            [0, '.', '.', '.'],
            [0, '.', '.', 0],
        ])
        # (1,1) and (1,2) share a column; the straight line is the only short path
        mv = shortest_move_between(board, Square(1, 1), Square(1, 2))
        self.assertEqual(mv.path, (Square(1, 1), Square(1, 2)))
        # (1,1) to (4,2) cannot pass through (1,2)
        for mv in moves_between(board, Square(1, 1), Square(4, 2)):
            self.assertNotIn(Square(1, 2), mv.path)
            self.assertTrue(path_is_clear(board, mv))


class TestShortestAgainstBruteForce(unittest.TestCase):
    def _boards(self):
        yield Board.from_rows([
            [0, 1, '.', 0],
            ['.', 2, '.', '.'],
            [3, '.', 2, 1],
            ['.', 3, '.', '.'],
        ])
        yield Board.from_rows([
            [4, '.', '.', 5, '.', 4],
            ['.', 6, 6, '.', 5, '.'],
            [7, '.', '.', '.', '.', 7],
        ])
        rng = random.Random(11)
        for _ in range(5):
            rows = [[rng.choice([0, 1, 2, None, None]) for _ in range(6)] for _ in range(4)]
            yield Board.from_rows(rows)

    def test_given_hand_built_boards_when_comparing_with_brute_force_then_same_paths_and_minimum(self):
        for board in self._boards():
            tiles = [sq for sq, _ in board.enumerate_tiles()]
            for src, dst in itertools.combinations(tiles, 2):
                found = [mv.path for mv in moves_between(board, src, dst)]
                if not board[src].is_same_tile(board[dst]):
                    self.assertEqual(found, [])
                    continue
                self.assertEqual(set(found), brute_force_paths(board, src, dst))
                best = shortest_move_between(board, src, dst)
                if not found:
                    self.assertIsNone(best)
                    continue
                self.assertLessEqual(
                    best.path_distance(),
                    min(mv.path_distance() for mv in moves_between(board, src, dst)),
                )

    def test_given_returned_moves_when_checking_shape_then_orthogonal_with_two_bends_max(self):
        for board in self._boards():
            tiles = [sq for sq, _ in board.enumerate_tiles()]
            for src, dst in itertools.combinations(tiles, 2):
                for mv in moves_between(board, src, dst):
                    self.assertTrue(2 <= len(mv.path) <= 4)
                    self.assertEqual((mv.src, mv.dst), (src, dst))
                    for a, b in zip(mv.path, mv.path[1:]):
                        self.assertEqual((a.c != b.c) + (a.r != b.r), 1)
                    self.assertTrue(path_is_clear(board, mv))


class TestBoardSearch(unittest.TestCase):
    def test_given_valid_move_when_applied_then_two_fewer_tiles_and_rest_unchanged(self):
        board = Board.from_rows([
            [0, 1, 0],
            [2, 1, 2],
        ])
        before = board.copy()
        mv = find_move(board)
        self.assertIsNotNone(mv)
        do_move(board, mv)
        self.assertEqual(board.tile_count(), before.tile_count() - 2)
        for sq in board.squares():
            if sq in (mv.src, mv.dst):
                self.assertTrue(board[sq].is_empty())
            else:
                self.assertEqual(board[sq], before[sq])

    def test_given_single_mismatched_pair_when_checking_then_stuck(self):
        board = Board.from_rows([
            [0, 1],
            ['.', '.'],
        ])
        self.assertFalse(board.is_empty())
        self.assertIsNone(find_move(board))
        self.assertTrue(is_stuck(board))

    def test_given_crossed_pairs_when_checking_then_stuck(self):
        board = Board.from_rows([
            [0, 1],
            [1, 0],
        ])
        self.assertEqual(count_moves(board), 0)
        self.assertTrue(is_stuck(board))

    def test_given_empty_board_when_checking_then_not_stuck(self):
        board = Board.empty(4, 4)
        self.assertIsNone(find_move(board))
        self.assertFalse(is_stuck(board))
        self.assertFalse(is_stuck(Board.empty(0, 0)))

    def test_given_seeded_rng_when_random_move_then_legal_and_deterministic(self):
        board = Board.from_rows([
            [0, 1, 2, 3],
            ['.', '.', '.', '.'],
            [3, 2, 1, 0],
        ])
        legal = {
            (src, dst)
            for src, dst in itertools.combinations([sq for sq, _ in board.enumerate_tiles()], 2)
            if find_move_between(board, src, dst) is not None
        }
        mv1 = random_move(board, random.Random(5))
        mv2 = random_move(board, random.Random(5))
        self.assertEqual(mv1, mv2)
        self.assertIn((mv1.src, mv1.dst), legal)
        self.assertIsNone(random_move(Board.from_rows([[0, 1], ['.', '.']]), random.Random(5)))


if __name__ == '__main__':
    unittest.main()
