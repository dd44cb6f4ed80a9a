"""Fixed-depth minimax with alpha-beta pruning (hard difficulty)."""

from . import heuristic
from . import move_selector
from ..Move import Move
from ..engine import rules_engine

INF = 10 ** 9
WIN_SCORE = 100000
DEFAULT_DEPTH = 2


class MinimaxSearcher:
    """Maximizing side is always `player`; leaves use the line heuristic."""

    def __init__(self, player, depth=DEFAULT_DEPTH, weights=None):
        self.player = player
        self.depth = depth
        self.weights = weights or heuristic.DEFAULT_LINE_WEIGHTS
        self.node_counter = 0

    def choose_move(self, board, candidates):
        """Return the best root Move, or None when no candidate was scored."""
        work = board.copy()
        best_score = -INF
        best = None
        for row, col in candidates:
            move = Move(self.player, row, col)
            with rules_engine.simulate(work, move) as placed:
                if not placed:
                    continue
                score = self._minimax(work, self.player.opponent, self.depth - 1, best_score, INF // 4)
            if score > best_score:
                best_score = score
                best = move
        return best

    def _evaluate(self, board):
        return heuristic.evaluate_line_heuristic(board, self.player, self.weights)

    def _minimax(self, board, current, depth, alpha, beta):
        self.node_counter += 1
        if depth == 0:
            return self._evaluate(board)

        candidates = move_selector.generate_candidates(board)
        if board.is_full() or not candidates:
            return 0

        maximizing = current is self.player
        best = -INF if maximizing else INF
        for row, col in candidates:
            move = Move(current, row, col)
            with rules_engine.simulate(board, move):
                if rules_engine.is_win_after_move(board, move):
                    return WIN_SCORE if maximizing else -WIN_SCORE
                score = self._minimax(board, current.opponent, depth - 1, alpha, beta)

            if maximizing:
                best = max(best, score)
                alpha = max(alpha, score)
            else:
                best = min(best, score)
                beta = min(beta, score)
            if beta <= alpha:
                break
        return best


def choose_move(board, player, candidates, depth=DEFAULT_DEPTH, weights=None):
    """Public entry point; see MinimaxSearcher."""
    return MinimaxSearcher(player, depth=depth, weights=weights).choose_move(board, candidates)
