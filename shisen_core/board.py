from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple, Union

# Number of distinct tile kinds in a standard mahjong set (no flowers/seasons).
TILE_KIND_COUNT = 34


class Square(NamedTuple):
    """A grid position. Column first, as on screen: (c, r)."""
    c: int
    r: int

    @classmethod
    def new(cls, c: int, r: int) -> 'Square':
        return cls(int(c), int(r))


@dataclass(frozen=True)
class Cell:
    """Content of a square: empty when kind is None, otherwise a tile of that kind."""
    kind: Optional[int] = None

    def is_empty(self) -> bool:
        return self.kind is None

    def is_tile(self) -> bool:
        return self.kind is not None

    def is_same_tile(self, other: 'Cell') -> bool:
        return self.kind is not None and self.kind == other.kind


EMPTY = Cell()


def Tile(kind: int) -> Cell:
    return Cell(int(kind))


RowSpec = Sequence[Union[int, str, None]]


@dataclass
class Board:
    """Grid of cells. The outer ring is a border that never holds a tile."""
    ncol: int
    nrow: int
    cells: List[Cell]  # row-major, length == ncol * nrow

    @classmethod
    def empty(cls, ncol_inner: int, nrow_inner: int) -> 'Board':
        """Returns an all-empty board.

        ncol_inner and nrow_inner exclude the border; at least one of them must
        be even so that the interior can be filled with pairs.
        """
        if ncol_inner < 0 or nrow_inner < 0:
            raise ValueError(f'negative board size: {ncol_inner}x{nrow_inner}')
        if ncol_inner % 2 != 0 and nrow_inner % 2 != 0:
            raise ValueError(f'one inner dimension must be even: {ncol_inner}x{nrow_inner}')
        ncol = ncol_inner + 2
        nrow = nrow_inner + 2
        return cls(ncol=ncol, nrow=nrow, cells=[EMPTY] * (ncol * nrow))

    @classmethod
    def from_rows(cls, rows: Sequence[RowSpec]) -> 'Board':
        """Builds a board from interior rows; '.' or None is empty, anything else a tile kind."""
        nrow_inner = len(rows)
        ncol_inner = len(rows[0]) if rows else 0
        board = cls.empty(ncol_inner, nrow_inner)
        for r, row in enumerate(rows, start=1):
            if len(row) != ncol_inner:
                raise ValueError('rows must all have the same length')
            for c, val in enumerate(row, start=1):
                if val is None or val == '.':
                    continue
                board[Square(c, r)] = Tile(int(val))
        return board

    @property
    def ncol_inner(self) -> int:
        return self.ncol - 2

    @property
    def nrow_inner(self) -> int:
        return self.nrow - 2

    def index(self, c: int, r: int) -> int:
        """Calculates the 1D index for a given column and row."""
        if not (0 <= c < self.ncol and 0 <= r < self.nrow):
            raise IndexError(f'square ({c}, {r}) outside {self.ncol}x{self.nrow} board')
        return r * self.ncol + c

    def __getitem__(self, sq: Tuple[int, int]) -> Cell:
        return self.cells[self.index(sq[0], sq[1])]

    def __setitem__(self, sq: Tuple[int, int], cell: Cell) -> None:
        self.cells[self.index(sq[0], sq[1])] = cell

    def copy(self) -> 'Board':
        return Board(ncol=self.ncol, nrow=self.nrow, cells=list(self.cells))

    def squares(self) -> Iterator[Square]:
        """Iterates over every square, border included, row by row."""
        for r in range(self.nrow):
            for c in range(self.ncol):
                yield Square(c, r)

    def squares_inner(self) -> Iterator[Square]:
        """Iterates over the interior squares in the same order as squares()."""
        for sq in self.squares():
            if 0 < sq.c < self.ncol - 1 and 0 < sq.r < self.nrow - 1:
                yield sq

    def enumerate_tiles(self) -> Iterator[Tuple[Square, Cell]]:
        for sq in self.squares_inner():
            cell = self[sq]
            if cell.is_tile():
                yield sq, cell

    def iter_tiles(self) -> Iterator[Cell]:
        for _, cell in self.enumerate_tiles():
            yield cell

    def tile_count(self) -> int:
        return sum(1 for _ in self.enumerate_tiles())

    def is_empty(self) -> bool:
        return all(self[sq].is_empty() for sq in self.squares_inner())

    def pretty(self, selected: Optional[Square] = None) -> str:
        """Generates a human-readable dump of the whole grid with column/row labels."""
        lines: List[str] = ['    ' + ''.join(f'{c:>3}' for c in range(self.ncol))]
        for r in range(self.nrow):
            row: List[str] = []
            for c in range(self.ncol):
                cell = self[Square(c, r)]
                text = '.' if cell.is_empty() else str(cell.kind)
                if selected == (c, r):
                    text = '*' + text
                row.append(f'{text:>3}')
            lines.append(f'{r:>3} ' + ''.join(row))
        return '\n'.join(lines)
