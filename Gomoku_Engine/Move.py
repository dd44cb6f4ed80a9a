"""Immutable stone placement."""

from typing import NamedTuple

from .Player import Player


class Move(NamedTuple):
    player: Player
    row: int
    col: int

    @property
    def position(self):
        return self.row, self.col

    def with_player(self, player: Player) -> "Move":
        return Move(player, self.row, self.col)

    def __str__(self):
        return f"{self.player.symbol}({self.row}, {self.col})"
