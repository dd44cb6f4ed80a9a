"""Negamax with alpha-beta, iterative deepening, and a Zobrist-keyed transposition table.

The search runs on a private copy of the caller's board and backtracks with
place/clear, so sibling branches never observe each other's stones. Time is
checked at the top of every node, before every child, and before every root
move; a root move whose subtree finished after the deadline is discarded, so
the returned move always comes from fully searched root moves (or from the
static ordering when not even one completed).
"""

import logging
import random
import time

from . import heuristic
from . import move_selector
from . import transposition
from ..Move import Move
from ..engine import rules_engine
from ..utils import timer

LOGGER = logging.getLogger(__name__)

INF = 10 ** 9
WIN_SCORE = 100000
DEFAULT_TIME_LIMIT_MS = 400
MIN_DEPTH = 2
MAX_DEPTH = 6


class NegamaxSearcher:
    """Encapsulates the state of one top-level super-hard search."""

    def __init__(self, player, time_limit_ms=DEFAULT_TIME_LIMIT_MS, min_depth=MIN_DEPTH, max_depth=MAX_DEPTH, weights=None, rng=None):
        self.player = player
        self.time_limit_ms = time_limit_ms
        self.min_depth = min_depth
        self.max_depth = max_depth
        self.weights = weights or heuristic.DEFAULT_PATTERN_WEIGHTS
        self.rng = rng or random

        # Internal state, rebuilt on every choose_move call
        self.ttable = {}
        self.zobrist_table = None
        self.deadline = None
        self.node_counter = 0
        self.stats = {}

    def choose_move(self, board, candidates, deadline=None):
        """
        Return the best Move for self.player among `candidates` before the deadline.
        Returns None only when `candidates` is empty.
        """
        if not candidates:
            return None

        start_time = time.time()
        self.deadline = deadline if deadline is not None else timer.deadline_after_ms(self.time_limit_ms)
        self.ttable = {}
        self.zobrist_table = transposition.zobrist_init(board.size)
        self.node_counter = 0

        work = board.copy()
        ordered = move_selector.order_candidates(work, self.player, list(candidates), self.weights, deadline=self.deadline)
        root_static = {}

        best = ordered[0] if ordered else None
        best_score = None
        completed_depth = 0
        for depth in range(self.min_depth, self.max_depth + 1):
            local_best, local_score, finished = self._search_root(work, ordered, depth)
            if local_best is not None:
                best, best_score = local_best, local_score
            if not finished:
                break
            completed_depth = depth
            if best is not None:
                ordered = self._reorder_root(work, ordered, best, root_static)

        if best is None:
            # Last resort; unreachable while candidates is non-empty.
            best = self.rng.choice(list(candidates))

        self.stats = {
            "player": self.player.value,
            "completed_depth": completed_depth,
            "nodes": self.node_counter,
            "time": time.time() - start_time,
            "best": best,
            "score": best_score,
            "tt_size": len(self.ttable),
        }
        LOGGER.debug("negamax search finished: %s", self.stats)
        return Move(self.player, best[0], best[1])

    def _search_root(self, board, ordered, depth):
        """One iteration; returns (best_pos, best_score, finished)."""
        best_score = -INF
        local_best = None
        for row, col in ordered:
            if timer.expired(self.deadline):
                return local_best, best_score, False
            move = Move(self.player, row, col)
            with rules_engine.simulate(board, move):
                if rules_engine.is_win_after_move(board, move):
                    score = WIN_SCORE
                else:
                    score = -self._negamax(board, self.player.opponent, depth - 1, -INF, -best_score)
            if timer.expired(self.deadline):
                # Subtree was cut short; its score is not trustworthy.
                return local_best, best_score, False
            if score > best_score:
                best_score = score
                local_best = (row, col)
        return local_best, best_score, True

    def _reorder_root(self, board, ordered, best, root_static):
        """Previous best first, remaining moves by static heuristic, best first."""
        base = (
            heuristic.pattern_score(board, self.player, self.weights),
            heuristic.pattern_score(board, self.player.opponent, self.weights),
        )
        for pos in ordered:
            if pos not in root_static:
                root_static[pos] = move_selector.static_heuristic(board, self.player, pos[0], pos[1], self.weights, base)
        rest = [pos for pos in ordered if pos != best]
        rest.sort(key=lambda pos: root_static[pos], reverse=True)
        return [best] + rest

    def _evaluate(self, board, current):
        return heuristic.evaluate_static(board, current, self.weights)

    def _negamax(self, board, current, depth, alpha, beta):
        """Score of `board` from the point of view of `current`, the side to move."""
        self.node_counter += 1
        if depth == 0 or timer.expired(self.deadline):
            return self._evaluate(board, current)

        key = transposition.hash_board(board, self.zobrist_table)
        cached = transposition.probe(self.ttable, key, depth, alpha, beta)
        if cached is not None:
            return cached

        candidates = move_selector.generate_candidates(board)
        if board.is_full() or not candidates:
            return 0
        candidates = move_selector.order_candidates(board, current, candidates, self.weights, deadline=self.deadline)

        alpha_orig = alpha
        best_value = -INF
        best_move = None
        explored_any = False
        for row, col in candidates:
            if timer.expired(self.deadline):
                break
            move = Move(current, row, col)
            with rules_engine.simulate(board, move):
                if rules_engine.is_win_after_move(board, move):
                    # Completing five ends the game in favour of the mover.
                    return WIN_SCORE
                score = -self._negamax(board, current.opponent, depth - 1, -beta, -alpha)
            explored_any = True
            if score > best_value:
                best_value = score
                best_move = (row, col)
            if best_value > alpha:
                alpha = best_value
            if alpha >= beta:
                break

        if not explored_any:
            return self._evaluate(board, current)
        if timer.expired(self.deadline):
            # Partial node: usable by the caller, but not worth caching.
            return best_value

        transposition.store(
            self.ttable,
            key,
            transposition.TTEntry(
                value=best_value,
                depth=depth,
                bound=transposition.classify_bound(best_value, alpha_orig, beta),
                best_move=best_move,
            ),
        )
        return best_value

    def principal_variation(self, board, first, max_length=None):
        """Follow TT best moves from the position after `first`; for logging and tests."""
        max_length = max_length or self.max_depth
        work = board.copy()
        line = [Move(self.player, first[0], first[1])]
        work.place(line[0])
        current = self.player.opponent
        while len(line) < max_length and self.zobrist_table is not None:
            entry = self.ttable.get(transposition.hash_board(work, self.zobrist_table))
            if entry is None or entry.best_move is None:
                break
            move = Move(current, entry.best_move[0], entry.best_move[1])
            if not work.place(move):
                break
            line.append(move)
            current = current.opponent
        return line


def choose_move(board, player, candidates, time_limit_ms=DEFAULT_TIME_LIMIT_MS, deadline=None, weights=None, rng=None):
    """Public entry point; see NegamaxSearcher."""
    searcher = NegamaxSearcher(player, time_limit_ms=time_limit_ms, weights=weights, rng=rng)
    return searcher.choose_move(board, candidates, deadline=deadline)
