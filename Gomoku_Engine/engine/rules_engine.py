"""Placement validation and five-in-a-row / draw detection from the last move."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..Board import DIRECTIONS, Board
from ..Move import Move
from ..Player import Player

WIN_LENGTH = 5


@dataclass(frozen=True)
class WinResult:
    winner: Player
    line: tuple[Move, ...]


class ResolutionKind(Enum):
    ONGOING = "ongoing"
    DRAW = "draw"
    WIN = "win"


@dataclass(frozen=True)
class GameResolution:
    kind: ResolutionKind
    win: Optional[WinResult] = None

    @classmethod
    def ongoing(cls) -> "GameResolution":
        return cls(ResolutionKind.ONGOING)

    @classmethod
    def draw(cls) -> "GameResolution":
        return cls(ResolutionKind.DRAW)

    @classmethod
    def won(cls, result: WinResult) -> "GameResolution":
        return cls(ResolutionKind.WIN, result)

    @property
    def is_win(self) -> bool:
        return self.kind is ResolutionKind.WIN

    @property
    def is_terminal(self) -> bool:
        return self.kind is not ResolutionKind.ONGOING

    @property
    def winner(self) -> Optional[Player]:
        return self.win.winner if self.win is not None else None


@contextmanager
def simulate(board: Board, move: Move):
    """Temporarily place `move`; yields whether it was placed, then restores the board."""
    previous_last = board.last_move
    placed = board.place(move)
    try:
        yield placed
    finally:
        if placed:
            board.clear(move.row, move.col)
            board.last_move = previous_last


def validate_placement(board: Board, move: Move) -> bool:
    """True iff the target cell is in bounds and empty. Turn order is not checked."""
    return board.is_empty(move.row, move.col)


def contiguous_line(board: Board, move: Move, d_row: int, d_col: int) -> list[Move]:
    """Maximal run of move.player stones through `move` along one axis, negative end first."""
    player = move.player
    backward = board.count_direction(move.row, move.col, -d_row, -d_col, player)
    forward = board.count_direction(move.row, move.col, d_row, d_col, player)
    return [
        Move(player, move.row + step * d_row, move.col + step * d_col)
        for step in range(-backward, forward + 1)
    ]


def check_win(board: Board, last_move: Move) -> Optional[WinResult]:
    if board.cells[last_move.row][last_move.col] is not last_move.player:
        return None
    for d_row, d_col in DIRECTIONS:
        line = contiguous_line(board, last_move, d_row, d_col)
        if len(line) >= WIN_LENGTH:
            # Overlines still win; only the first five cells are recorded.
            return WinResult(last_move.player, tuple(line[:WIN_LENGTH]))
    return None


def is_win_after_move(board: Board, last_move: Move) -> bool:
    """Assumes the stone is already placed."""
    if board.cells[last_move.row][last_move.col] is not last_move.player:
        return False
    player = last_move.player
    for d_row, d_col in DIRECTIONS:
        total = (
            1
            + board.count_direction(last_move.row, last_move.col, d_row, d_col, player)
            + board.count_direction(last_move.row, last_move.col, -d_row, -d_col, player)
        )
        if total >= WIN_LENGTH:
            return True
    return False


def evaluate_board_after_move(board: Board, last_move: Move) -> GameResolution:
    """Classify the position reached by `last_move` (already on the board)."""
    if not board.is_in_bounds(last_move.row, last_move.col):
        return GameResolution.draw() if board.is_full() else GameResolution.ongoing()
    result = check_win(board, last_move)
    if result is not None:
        return GameResolution.won(result)
    if board.is_full():
        return GameResolution.draw()
    return GameResolution.ongoing()
