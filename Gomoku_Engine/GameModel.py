"""Game state owner: turn handling, undo/redo, and the cancellable AI move task."""

import concurrent.futures
import logging
import threading

from .Board import Board
from .Move import Move
from .Player import Player
from .ai import move_generator
from .ai.move_generator import Difficulty
from .engine import rules_engine

LOGGER = logging.getLogger(__name__)

DEFAULT_AI_DELAY = 0.25


class GameModel:
    """
    Holds the authoritative board. Every placement, human, AI, or redo, goes
    through the same validate / place / evaluate path.

    AI moves run on a single worker thread against a board snapshot. Each
    scheduled task carries a generation number; reset, undo, a human placement
    or a newer AI task bumps the generation, and a result whose generation is
    stale is discarded on delivery.

    `listener` may define any of on_game_start(), on_stone_placed(move),
    on_win(result, ai_won) and on_draw(); they are called after the state change.
    """

    def __init__(self, board_size=15, starting_player=Player.BLACK, *, ai_delay=DEFAULT_AI_DELAY, ai_time_limit_ms=400, listener=None, logger=None, rng=None, patterns=None):
        self.ai_delay = ai_delay
        self.ai_time_limit_ms = ai_time_limit_ms
        self.listener = listener
        self.logger = logger or LOGGER.info
        self.rng = rng
        self.patterns = patterns

        self.is_single_player = False
        self.ai_player = Player.WHITE
        self.difficulty = Difficulty.MEDIUM

        self._lock = threading.RLock()
        self._executor = None
        self._generation = 0
        self._ai_future = None
        self._ai_cancel = None

        self._reset_state(board_size, starting_player)
        self._notify("on_game_start")

    # ----- observable state -----

    @property
    def board(self):
        return self._board

    @property
    def current_player(self):
        return self._current_player

    @property
    def is_game_over(self):
        return self._is_game_over

    @property
    def winner(self):
        return self._winner

    @property
    def winning_line(self):
        return self._winning_line

    @property
    def can_undo(self):
        return bool(self._moves)

    @property
    def can_redo(self):
        return bool(self._redo_stack)

    @property
    def ai_pending(self):
        with self._lock:
            return self._ai_future is not None

    def history(self):
        return tuple(self._moves)

    # ----- commands -----

    def place_stone(self, row, col):
        """Human placement for the player to move; False leaves state unchanged."""
        with self._lock:
            if self._is_game_over:
                return False
            move = Move(self._current_player, row, col)
            if not rules_engine.validate_placement(self._board, move):
                return False
            self._cancel_ai()
            self._apply(move, clear_redo=True)
            self._maybe_trigger_ai()
            return True

    def undo(self):
        with self._lock:
            if not self._moves:
                return False
            self._cancel_ai()
            last = self._pop_move()
            # Against the AI, take back its reply together with the human move before it.
            if self.is_single_player and last.player is self.ai_player and self._moves:
                if self._moves[-1].player is not self.ai_player:
                    self._pop_move()
            self.logger(f"Undo: {self._current_player} to move")
            self._maybe_trigger_ai()
            return True

    def redo(self):
        with self._lock:
            if not self._redo_stack or self._is_game_over:
                return False
            self._cancel_ai()
            if not self._redo_one():
                return False
            if (
                self.is_single_player
                and not self._is_game_over
                and self._current_player is self.ai_player
                and self._redo_stack
                and self._redo_stack[-1].player is self.ai_player
            ):
                self._redo_one()
            self._maybe_trigger_ai()
            return True

    def reset(self, board_size=None, starting_player=None):
        with self._lock:
            self._cancel_ai()
            self._reset_state(self._board.size if board_size is None else board_size, starting_player or Player.BLACK)
            self.logger(f"New game: {self._board.size}x{self._board.size}, {self._current_player} to move")
            self._notify("on_game_start")
            self._maybe_trigger_ai()

    def configure_single_player(self, enabled, ai_player=Player.WHITE, difficulty=Difficulty.MEDIUM):
        with self._lock:
            self.is_single_player = bool(enabled)
            self.ai_player = Player.from_name(ai_player)
            self.difficulty = Difficulty.from_label(difficulty)
            if not self.is_single_player:
                self._cancel_ai()
            self._maybe_trigger_ai()

    def wait_for_ai(self, timeout=None):
        """Block until the pending AI move (if any) has been delivered; False on timeout."""
        with self._lock:
            future = self._ai_future
        if future is None:
            return True
        try:
            future.result(timeout=timeout)
        except concurrent.futures.TimeoutError:
            return False
        except concurrent.futures.CancelledError:
            pass
        return True

    def close(self, wait=True):
        with self._lock:
            self._cancel_ai()
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait, cancel_futures=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # ----- internals -----

    def _reset_state(self, board_size, starting_player):
        self._board = Board(size=board_size)
        self._current_player = Player.from_name(starting_player)
        self._is_game_over = False
        self._winner = None
        self._winning_line = ()
        self._moves = []
        self._redo_stack = []

    def _apply(self, move, clear_redo):
        """Place a validated move and resolve the game state."""
        self._board.place(move)
        self._moves.append(move)
        if clear_redo:
            self._redo_stack.clear()
        self.logger(f"Move {len(self._moves)}: {move.player.symbol} ({move.row}, {move.col})")
        self._notify("on_stone_placed", move)

        resolution = rules_engine.evaluate_board_after_move(self._board, move)
        if resolution.is_win:
            result = resolution.win
            self._is_game_over = True
            self._winner = result.winner
            self._winning_line = result.line
            self.logger(f"Winner: {result.winner}")
            ai_won = self.is_single_player and result.winner is self.ai_player
            self._notify("on_win", result, ai_won)
        elif resolution.is_terminal:
            self._is_game_over = True
            self._winner = None
            self._winning_line = ()
            self.logger("Result: Draw (board full)")
            self._notify("on_draw")
        else:
            self._current_player = move.player.opponent

    def _pop_move(self):
        last = self._moves.pop()
        self._board.clear(last.row, last.col)
        self._board.last_move = self._moves[-1] if self._moves else None
        self._redo_stack.append(last)
        self._is_game_over = False
        self._winner = None
        self._winning_line = ()
        self._current_player = last.player
        return last

    def _redo_one(self):
        undone = self._redo_stack.pop()
        move = Move(self._current_player, undone.row, undone.col)
        if not rules_engine.validate_placement(self._board, move):
            self._redo_stack.append(undone)
            return False
        self._apply(move, clear_redo=False)
        return True

    def _maybe_trigger_ai(self):
        if not self.is_single_player or self._is_game_over or self._current_player is not self.ai_player:
            return
        self._cancel_ai()
        generation = self._generation
        cancel_event = threading.Event()
        snapshot = self._board.copy()
        if self._executor is None:
            self._executor = concurrent.futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix="gomoku-ai")
        self._ai_cancel = cancel_event
        self._ai_future = self._executor.submit(
            self._run_ai, generation, cancel_event, snapshot, self._current_player, self.difficulty
        )

    def _cancel_ai(self):
        self._generation += 1
        if self._ai_cancel is not None:
            self._ai_cancel.set()
        if self._ai_future is not None:
            self._ai_future.cancel()
        self._ai_cancel = None
        self._ai_future = None

    def _run_ai(self, generation, cancel_event, snapshot, player, difficulty):
        """Worker-thread body: delay, compute on the snapshot, deliver if still current."""
        if cancel_event.wait(self.ai_delay):
            return None
        try:
            move = move_generator.next_move(
                snapshot,
                player,
                difficulty,
                rng=self.rng,
                time_limit_ms=self.ai_time_limit_ms,
                patterns=self.patterns,
            )
        except Exception:
            LOGGER.exception("AI move computation failed")
            move = None
        try:
            self._deliver(generation, cancel_event, move)
        except Exception:
            LOGGER.exception("Delivering AI move failed")
        return move

    def _deliver(self, generation, cancel_event, move):
        with self._lock:
            if generation != self._generation or cancel_event.is_set():
                LOGGER.debug("Discarding stale AI result %s (generation %d)", move, generation)
                return False
            self._ai_future = None
            self._ai_cancel = None
            if move is None or self._is_game_over or move.player is not self._current_player:
                return False
            if not rules_engine.validate_placement(self._board, move):
                LOGGER.warning("AI proposed an illegal move %s", move)
                return False
            self._apply(move, clear_redo=True)
            return True

    def _notify(self, name, *args):
        callback = getattr(self.listener, name, None)
        if callable(callback):
            callback(*args)
