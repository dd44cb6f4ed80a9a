"""Immediate tactical probes shared by every difficulty: win now, or block the opponent's win."""

from ..Move import Move
from ..engine import rules_engine


def find_immediate_win(board, player, candidates):
    """Return the first candidate Move that completes five for `player`, else None."""
    for row, col in candidates:
        move = Move(player, row, col)
        with rules_engine.simulate(board, move) as placed:
            if placed and rules_engine.is_win_after_move(board, move):
                return move
    return None


def find_immediate_block(board, player, candidates):
    """Return a Move for `player` onto a cell where the opponent would win next turn."""
    threat = find_immediate_win(board, player.opponent, candidates)
    if threat is None:
        return None
    return threat.with_player(player)


def tactical_move(board, player, candidates):
    """Win if possible, otherwise block; None when neither applies."""
    win = find_immediate_win(board, player, candidates)
    if win is not None:
        return win
    return find_immediate_block(board, player, candidates)
