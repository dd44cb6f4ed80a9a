"""Stone owner: black or white."""

from enum import Enum


class Player(Enum):
    BLACK = "black"
    WHITE = "white"

    @property
    def opponent(self):
        return Player.WHITE if self is Player.BLACK else Player.BLACK

    @property
    def symbol(self):
        return "X" if self is Player.BLACK else "O"

    @classmethod
    def from_name(cls, name):
        """Parse 'black'/'white' (any case); raise ValueError otherwise."""
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown player: {name!r} (expected 'black' or 'white')") from exc

    def __str__(self):
        return self.value.capitalize()
