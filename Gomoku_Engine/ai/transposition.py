"""Zobrist hashing and transposition table helpers."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..Player import Player

MASK64 = 0xFFFFFFFFFFFFFFFF
GOLDEN_GAMMA = 0x9E3779B97F4A7C15
ZOBRIST_SEED = 0x9E3779B97F4A7C15
FNV_OFFSET_BASIS = 1469598103934665603


def splitmix64(seed=ZOBRIST_SEED):
    """Yield an endless deterministic stream of 64-bit values."""
    state = seed & MASK64
    while True:
        state = (state + GOLDEN_GAMMA) & MASK64
        x = state
        x = ((x ^ (x >> 30)) * 0xBF58476D1CE4E5B9) & MASK64
        x = ((x ^ (x >> 27)) * 0x94D049BB133111EB) & MASK64
        yield x ^ (x >> 31)


def zobrist_init(size=15, seed=ZOBRIST_SEED):
    """Two keys per cell, [black, white], indexed by row * size + col."""
    rng = splitmix64(seed)
    return [[next(rng), next(rng)] for _ in range(size * size)]


def hash_board(board, table):
    """Compute the Zobrist hash of every occupied cell, starting from the FNV basis."""
    h = FNV_OFFSET_BASIS
    size = board.size
    for row, cells_row in enumerate(board.cells):
        base = row * size
        for col, owner in enumerate(cells_row):
            if owner is None:
                continue
            h ^= table[base + col][0 if owner is Player.BLACK else 1]
    return h


class Bound(Enum):
    EXACT = "exact"
    LOWER = "lower"
    UPPER = "upper"


@dataclass(frozen=True)
class TTEntry:
    value: int
    depth: int
    bound: Bound
    best_move: Optional[tuple[int, int]] = None


def classify_bound(value, alpha_orig, beta):
    if value <= alpha_orig:
        return Bound.UPPER
    if value >= beta:
        return Bound.LOWER
    return Bound.EXACT


def probe(ttable, key, depth, alpha, beta):
    """Return a stored value usable as a cutoff at this depth/window, else None."""
    entry = ttable.get(key)
    if entry is None or entry.depth < depth:
        return None
    if entry.bound is Bound.EXACT:
        return entry.value
    if entry.bound is Bound.LOWER and entry.value > beta:
        return entry.value
    if entry.bound is Bound.UPPER and entry.value < alpha:
        return entry.value
    return None


def store(ttable, key, entry):
    ttable[key] = entry
