"""Tiered AI move selection: tactics first, then the difficulty's own strategy."""

import logging
import random
from enum import Enum

from . import heuristic
from . import move_selector
from . import search_minimax
from . import search_negamax
from . import tactics
from ..Move import Move

LOGGER = logging.getLogger(__name__)


class Difficulty(Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"
    SUPER_HARD = "Super Hard"

    @classmethod
    def from_label(cls, label):
        """Accept 'Super Hard', 'super_hard', 'SUPER-HARD', ... ; raise ValueError otherwise."""
        if isinstance(label, cls):
            return label
        wanted = "".join(ch for ch in str(label).lower() if ch.isalnum())
        for member in cls:
            if wanted in (member.name.lower().replace("_", ""), member.value.lower().replace(" ", "")):
                return member
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown difficulty: {label!r} (expected one of {choices})")

    def __str__(self):
        return self.value


def best_heuristic_move(board, player, candidates, weights=None, rng=None):
    """Greedy one-ply pick: maximise line heuristic (self minus opponent) after placing."""
    work = board.copy()
    best_score = None
    best = None
    for row, col in candidates:
        move = Move(player, row, col)
        if not work.place(move):
            continue
        try:
            score = heuristic.evaluate_line_heuristic(work, player, weights)
        finally:
            work.clear(row, col)
        if best_score is None or score > best_score:
            best_score = score
            best = move
    if best is not None:
        return best
    row, col = (rng or random).choice(candidates)
    return Move(player, row, col)


def next_move(board, player, difficulty=Difficulty.MEDIUM, *, rng=None, time_limit_ms=search_negamax.DEFAULT_TIME_LIMIT_MS, patterns=None):
    """
    Choose a Move for `player` on a snapshot of `board`; the board is never mutated.
    Returns None only when there is no empty cell to play.
    """
    rng = rng or random
    difficulty = Difficulty.from_label(difficulty)
    patterns = patterns or {}
    line_weights = patterns.get("line_weights")
    pattern_weights = patterns.get("pattern_weights")

    candidates = move_selector.generate_candidates(board)
    if not candidates:
        return None

    work = board.copy()
    forced = tactics.tactical_move(work, player, candidates)
    if forced is not None:
        LOGGER.debug("%s plays tactical move %s", player, forced)
        return forced

    if difficulty is Difficulty.EASY:
        row, col = rng.choice(candidates)
        return Move(player, row, col)
    if difficulty is Difficulty.MEDIUM:
        return best_heuristic_move(work, player, candidates, line_weights, rng)
    if difficulty is Difficulty.HARD:
        move = search_minimax.choose_move(work, player, candidates, weights=line_weights)
        if move is None:
            move = best_heuristic_move(work, player, candidates, line_weights, rng)
        return move
    return search_negamax.choose_move(
        work,
        player,
        candidates,
        time_limit_ms=time_limit_ms,
        weights=pattern_weights,
        rng=rng,
    )
