"""Line-pattern evaluation for Gomoku (fives, open/closed fours, threes, twos).

Two weight tables live here:

- ``DEFAULT_LINE_WEIGHTS`` drives the medium and hard tiers.
- ``DEFAULT_PATTERN_WEIGHTS`` drives the super-hard search and additionally
  rewards broken fours (``XX_XX``).

Both evaluators score every stone on a line independently in each of the four
directions, so a run of n stones is counted n times. Self and opponent terms are
inflated alike, so differences stay comparable and the tuned weights expect it.
Only a run of exactly five scores ``five``; a longer run matches no entry.
"""

from pathlib import Path

import yaml

from ..Board import DIRECTIONS

DEFAULT_LINE_WEIGHTS = {
    "five": 100000,
    "open_four": 10000,
    "closed_four": 2000,
    "open_three": 500,
    "closed_three": 120,
    "open_two": 50,
}

DEFAULT_PATTERN_WEIGHTS = {
    "five": 1_000_000,
    "open_four": 100_000,
    "closed_four": 20_000,
    "broken_four": 30_000,
    "open_three": 5_000,
    "closed_three": 1_000,
    "open_two": 300,
    "closed_two": 80,
}

# Broken-four window: mine, mine, empty, mine, mine
_BROKEN_FOUR = (1, 1, 0, 1, 1)
_OUT = -2


def load_patterns(path="config/patterns.yaml"):
    """Load both weight tables from YAML; missing file or keys keep the defaults."""
    path = Path(path)
    if not path.is_absolute() and not path.exists():
        # Allow running from the repo root (e.g. `python -m Gomoku_Engine.main`).
        candidate = Path(__file__).resolve().parents[1] / path
        if candidate.exists():
            path = candidate

    line_weights = dict(DEFAULT_LINE_WEIGHTS)
    pattern_weights = dict(DEFAULT_PATTERN_WEIGHTS)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        return {"line_weights": line_weights, "pattern_weights": pattern_weights}

    for name, score in (data.get("line_weights") or {}).items():
        if name in line_weights:
            line_weights[name] = int(score)
    for name, score in (data.get("pattern_weights") or {}).items():
        if name in pattern_weights:
            pattern_weights[name] = int(score)
    return {"line_weights": line_weights, "pattern_weights": pattern_weights}


def _run_and_open_ends(cells, size, row, col, d_row, d_col, player):
    """Length of the contiguous run through (row, col) and how many of its ends are empty."""
    count = 1
    open_ends = 0
    r, c = row + d_row, col + d_col
    while 0 <= r < size and 0 <= c < size and cells[r][c] is player:
        count += 1
        r += d_row
        c += d_col
    if 0 <= r < size and 0 <= c < size and cells[r][c] is None:
        open_ends += 1
    r, c = row - d_row, col - d_col
    while 0 <= r < size and 0 <= c < size and cells[r][c] is player:
        count += 1
        r -= d_row
        c -= d_col
    if 0 <= r < size and 0 <= c < size and cells[r][c] is None:
        open_ends += 1
    return count, open_ends


def line_score(board, player, weights=None):
    """Medium/hard evaluator: per stone, per direction lookup in the line table."""
    w = weights or DEFAULT_LINE_WEIGHTS
    size = board.size
    cells = board.cells
    score = 0
    for row in range(size):
        for col in range(size):
            if cells[row][col] is not player:
                continue
            for d_row, d_col in DIRECTIONS:
                count, open_ends = _run_and_open_ends(cells, size, row, col, d_row, d_col, player)
                if count == 5:
                    score += w["five"]
                elif count == 4:
                    if open_ends == 2:
                        score += w["open_four"]
                    elif open_ends == 1:
                        score += w["closed_four"]
                elif count == 3:
                    if open_ends == 2:
                        score += w["open_three"]
                    elif open_ends == 1:
                        score += w["closed_three"]
                elif count == 2 and open_ends == 2:
                    score += w["open_two"]
    return score


def evaluate_line_heuristic(board, player, weights=None):
    """Own line score minus the opponent's."""
    return line_score(board, player, weights) - line_score(board, player.opponent, weights)


def has_broken_four(board, player, row, col, d_row, d_col):
    """True if a 5-cell window within offsets -2..+3 of (row, col) reads XX_XX for `player`."""
    size = board.size
    cells = board.cells
    window = []
    for offset in range(-2, 4):
        r = row + offset * d_row
        c = col + offset * d_col
        if not (0 <= r < size and 0 <= c < size):
            window.append(_OUT)
            continue
        owner = cells[r][c]
        if owner is None:
            window.append(0)
        elif owner is player:
            window.append(1)
        else:
            window.append(-1)
    for start in range(len(window) - 4):
        if tuple(window[start:start + 5]) == _BROKEN_FOUR:
            return True
    return False


def _pattern_value(board, row, col, d_row, d_col, player, w):
    """Contribution of one `player` stone along one direction."""
    count, open_ends = _run_and_open_ends(board.cells, board.size, row, col, d_row, d_col, player)
    if count == 5:
        return w["five"]
    if count == 4 and open_ends == 2:
        return w["open_four"]
    if count == 4 and open_ends == 1:
        return w["closed_four"]
    if has_broken_four(board, player, row, col, d_row, d_col):
        return w["broken_four"]
    if count == 3 and open_ends == 2:
        return w["open_three"]
    if count == 3 and open_ends == 1:
        return w["closed_three"]
    if count == 2 and open_ends == 2:
        return w["open_two"]
    if count == 2 and open_ends == 1:
        return w["closed_two"]
    return 0


def pattern_score(board, player, weights=None):
    """Super-hard evaluator: line table with broken fours and closed twos."""
    w = weights or DEFAULT_PATTERN_WEIGHTS
    size = board.size
    cells = board.cells
    score = 0
    for row in range(size):
        for col in range(size):
            if cells[row][col] is not player:
                continue
            for d_row, d_col in DIRECTIONS:
                score += _pattern_value(board, row, col, d_row, d_col, player, w)
    return score


def pattern_score_through(board, player, row, col, weights=None):
    """
    Part of pattern_score that depends on cell (row, col): for each direction,
    the contributions along that direction of `player` stones on the line
    through (row, col) in that direction.
    """
    w = weights or DEFAULT_PATTERN_WEIGHTS
    size = board.size
    cells = board.cells
    score = 0
    for d_row, d_col in DIRECTIONS:
        r, c = row, col
        while 0 <= r - d_row < size and 0 <= c - d_col < size:
            r -= d_row
            c -= d_col
        while 0 <= r < size and 0 <= c < size:
            if cells[r][c] is player:
                score += _pattern_value(board, r, c, d_row, d_col, player, w)
            r += d_row
            c += d_col
    return score


def update_pattern_score(board, row, col, player, prev_score, weights=None):
    """
    Incrementally update pattern_score(board, player) after a stone (either
    colour) was placed at (row, col). The board must already contain it.
    """
    after = pattern_score_through(board, player, row, col, weights)
    owner = board.cells[row][col]
    board.cells[row][col] = None
    try:
        before = pattern_score_through(board, player, row, col, weights)
    finally:
        board.cells[row][col] = owner
    return prev_score + after - before


def evaluate_static(board, player, weights=None):
    """Super-hard leaf evaluation from `player`'s point of view."""
    return pattern_score(board, player, weights) - pattern_score(board, player.opponent, weights)
