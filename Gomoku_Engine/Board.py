"""Board state container: a square grid of cells plus the last-move marker."""

from enum import Enum
from typing import NamedTuple

from .Move import Move
from .Player import Player

# Line axes as (d_row, d_col): horizontal, vertical, diagonal, anti-diagonal.
DIRECTIONS = ((0, 1), (1, 0), (1, 1), (1, -1))


class Cell(Enum):
    EMPTY = "empty"


EMPTY = Cell.EMPTY


class Stone(NamedTuple):
    player: Player
    marked: bool = False


class Board:
    def __init__(self, size=15):
        if size < 1:
            raise ValueError(f"board size must be positive, got {size}")
        # cells[row][col] holds None (empty) or the owning Player
        self.size = size
        self.cells = [[None] * size for _ in range(size)]
        self.stone_count = 0
        self.last_move = None

    def is_in_bounds(self, row, col):
        return 0 <= row < self.size and 0 <= col < self.size

    def is_empty(self, row, col):
        return self.is_in_bounds(row, col) and self.cells[row][col] is None

    def is_full(self):
        return self.stone_count >= self.size * self.size

    def cell(self, row, col):
        """Return EMPTY, Stone(player, marked), or None when out of bounds."""
        if not self.is_in_bounds(row, col):
            return None
        owner = self.cells[row][col]
        if owner is None:
            return EMPTY
        last = self.last_move
        marked = last is not None and last.row == row and last.col == col
        return Stone(owner, marked)

    def place(self, move: Move) -> bool:
        """Place a stone; return False (board untouched) if out of bounds or occupied."""
        if not self.is_empty(move.row, move.col):
            return False
        self.cells[move.row][move.col] = move.player
        self.stone_count += 1
        self.last_move = move
        return True

    def clear(self, row, col):
        if not self.is_in_bounds(row, col) or self.cells[row][col] is None:
            return
        self.cells[row][col] = None
        self.stone_count -= 1
        last = self.last_move
        if last is not None and last.row == row and last.col == col:
            self.last_move = None

    def stones(self):
        """Yield (row, col, player) for every occupied cell in row-major order."""
        for r, row in enumerate(self.cells):
            for c, owner in enumerate(row):
                if owner is not None:
                    yield r, c, owner

    def count_direction(self, row, col, d_row, d_col, player):
        """Count contiguous `player` stones from (row, col) (exclusive) along (d_row, d_col)."""
        count = 0
        r, c = row + d_row, col + d_col
        size = self.size
        cells = self.cells
        while 0 <= r < size and 0 <= c < size and cells[r][c] is player:
            count += 1
            r += d_row
            c += d_col
        return count

    def copy(self):
        new_board = Board.__new__(Board)
        new_board.size = self.size
        new_board.cells = [row[:] for row in self.cells]
        new_board.stone_count = self.stone_count
        new_board.last_move = self.last_move
        return new_board

    __copy__ = copy

    def __deepcopy__(self, memo):
        return self.copy()

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and self.cells == other.cells

    __hash__ = None

    def __str__(self):
        width = len(str(self.size - 1))
        header = " " * (width + 1) + "".join(f"{c:^3}" for c in range(self.size))
        lines = [header]
        last = self.last_move
        for r, row in enumerate(self.cells):
            parts = []
            for c, owner in enumerate(row):
                symbol = "." if owner is None else owner.symbol
                if last is not None and (last.row, last.col) == (r, c):
                    parts.append(f"[{symbol}]")
                else:
                    parts.append(f" {symbol} ")
            lines.append(f"{r:>{width}} " + "".join(parts))
        return "\n".join(lines)

    def __repr__(self):
        return f"Board(size={self.size}, stones={self.stone_count})"
