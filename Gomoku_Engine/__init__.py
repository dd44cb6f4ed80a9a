"""Gomoku_Engine package exports."""

from .Player import Player
from .Move import Move
from .Board import Board, Stone, EMPTY
from .GameModel import GameModel
from .ai.move_generator import Difficulty, next_move
from .engine.rules_engine import (
    GameResolution,
    ResolutionKind,
    WinResult,
    evaluate_board_after_move,
    validate_placement,
)

__all__ = [
    "Player",
    "Move",
    "Board",
    "Stone",
    "EMPTY",
    "GameModel",
    "Difficulty",
    "next_move",
    "GameResolution",
    "ResolutionKind",
    "WinResult",
    "evaluate_board_after_move",
    "validate_placement",
]
