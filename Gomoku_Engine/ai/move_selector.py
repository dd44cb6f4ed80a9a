"""Candidate move generation (neighborhood of existing stones) and move ordering."""

from . import heuristic
from ..Move import Move
from ..engine import rules_engine
from ..utils import timer

CENTER_BIAS_SCALE = 50.0
DEFAULT_RADIUS = 2
EARLY_GAME_RADIUS = 1


def generate_candidates(board, radius=None):
    """
    Empty cells within a square neighborhood of any stone, in row-major order.
    - If board empty: return center only.
    - Radius 2, narrowed to 1 while the board holds at most one stone.
    """
    if board.stone_count == 0:
        center = board.size // 2
        return [(center, center)]

    if radius is None:
        radius = EARLY_GAME_RADIUS if board.stone_count <= 1 else DEFAULT_RADIUS

    size = board.size
    cells = board.cells
    near = set()
    for row, col, _ in board.stones():
        for d_row in range(-radius, radius + 1):
            r = row + d_row
            if r < 0 or r >= size:
                continue
            for d_col in range(-radius, radius + 1):
                c = col + d_col
                if c < 0 or c >= size or cells[r][c] is not None:
                    continue
                near.add((r, c))
    return sorted(near)


def center_bias(board, row, col):
    """Small bonus that prefers cells near the middle of the board."""
    center = (board.size - 1) / 2.0
    d_row = row - center
    d_col = col - center
    return int(CENTER_BIAS_SCALE / (1.0 + d_row * d_row + d_col * d_col))


def static_heuristic(board, player, row, col, weights=None, base=None):
    """
    Offense minus defense after `player` plays (row, col).
    `base` is (pattern_score for player, pattern_score for opponent) on the
    current board; computed when not supplied.
    """
    opponent = player.opponent
    if not board.is_empty(row, col):
        return -(10 ** 9) // 4
    if base is None:
        base = (
            heuristic.pattern_score(board, player, weights),
            heuristic.pattern_score(board, opponent, weights),
        )
    with rules_engine.simulate(board, Move(player, row, col)):
        offense = heuristic.update_pattern_score(board, row, col, player, base[0], weights)
        defense = heuristic.update_pattern_score(board, row, col, opponent, base[1], weights)
    return offense - defense


def order_candidates(board, player, candidates, weights=None, deadline=None):
    """
    Sort candidates by static heuristic plus center bias, best first.
    If `deadline` passes while scoring, the unscored tail keeps its input order
    after every scored candidate.
    """
    base = (
        heuristic.pattern_score(board, player, weights),
        heuristic.pattern_score(board, player.opponent, weights),
    )
    scored = []
    rest = []
    for idx, (row, col) in enumerate(candidates):
        if timer.expired(deadline):
            rest = list(candidates[idx:])
            break
        key = static_heuristic(board, player, row, col, weights, base) + center_bias(board, row, col)
        scored.append((key, idx, (row, col)))
    scored.sort(key=lambda item: (-item[0], item[1]))
    return [pos for _, _, pos in scored] + rest
