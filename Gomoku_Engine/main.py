"""Terminal front-end. Load settings, wire a GameModel, and read moves from stdin."""

import yaml
from pathlib import Path

from .GameModel import GameModel
from .Player import Player
from .ai import heuristic
from .ai.move_generator import Difficulty
from .utils.cli import parse_args
from .utils.logger import configure_logging, log_event


PROJECT_DIR = Path(__file__).resolve().parent

DEFAULT_SETTINGS = {
    "board_size": 15,
    "mode": "human-vs-ai",
    "difficulty": "Medium",
    "ai_time_limit_ms": 400,
    "ai_delay_seconds": 0.25,
    "log_level": "INFO",
}

HELP_TEXT = "Commands: 'row col' to play, 'undo', 'redo', 'new', 'help', 'quit'"


def resolve_project_path(path):
    """Resolve a repo-relative path when invoked from outside `Gomoku_Engine/`."""
    p = Path(path)
    if p.is_absolute() or p.exists():
        return p
    candidate = PROJECT_DIR / p
    return candidate if candidate.exists() else p


def load_settings(path):
    """Defaults overlaid with the YAML file; a missing file yields the defaults."""
    path = resolve_project_path(path)
    settings = dict(DEFAULT_SETTINGS)
    try:
        with open(path, "r", encoding="utf-8") as f:
            settings.update(yaml.safe_load(f) or {})
    except FileNotFoundError:
        pass
    return settings


def merge_args(settings, args):
    """Apply CLI overrides on top of file settings."""
    merged = dict(settings)
    if args.board_size:
        merged["board_size"] = args.board_size
    if args.mode:
        merged["mode"] = args.mode
    if args.difficulty:
        merged["difficulty"] = args.difficulty
    if args.time_limit_ms:
        merged["ai_time_limit_ms"] = args.time_limit_ms
    if args.log_level:
        merged["log_level"] = args.log_level
    return merged


def parse_command(raw):
    """
    Parse one input line.
    Returns ("move", row, col), ("undo",), ("redo",), ("new",), ("help",), ("quit",),
    or ("invalid", reason).
    """
    text = raw.strip().lower()
    if text in ("undo", "redo", "new", "help", "quit"):
        return (text,)
    if text in ("q", "exit"):
        return ("quit",)
    parts = text.replace(",", " ").split()
    if len(parts) != 2:
        return ("invalid", "expected two integers 'row col' or a command")
    try:
        row, col = int(parts[0]), int(parts[1])
    except ValueError:
        return ("invalid", "expected two integers 'row col' or a command")
    return ("move", row, col)


def build_model(settings, logger=log_event):
    model = GameModel(
        board_size=int(settings["board_size"]),
        ai_delay=float(settings["ai_delay_seconds"]),
        ai_time_limit_ms=int(settings["ai_time_limit_ms"]),
        logger=logger,
        patterns=heuristic.load_patterns(),
    )
    mode = settings["mode"]
    if mode == "human-vs-ai":
        model.configure_single_player(True, Player.WHITE, Difficulty.from_label(settings["difficulty"]))
    elif mode == "ai-vs-human":
        model.configure_single_player(True, Player.BLACK, Difficulty.from_label(settings["difficulty"]))
    elif mode != "human-vs-human":
        raise ValueError(f"Unsupported mode: {mode}")
    return model


def _status(model):
    if model.is_game_over:
        if model.winner is None:
            return "Draw (board full). Type 'new', 'undo' or 'quit'."
        return f"{model.winner} wins! Type 'new', 'undo' or 'quit'."
    return f"{model.current_player} ({model.current_player.symbol}) to move"


def run(model, read_line=input, write=print):
    """Interactive loop; returns the winner (or None for draw/quit)."""
    write(HELP_TEXT)
    while True:
        model.wait_for_ai()
        write(str(model.board))
        write(_status(model))
        try:
            raw = read_line("> ")
        except EOFError:
            return model.winner
        command = parse_command(raw)
        kind = command[0]
        if kind == "quit":
            return model.winner
        if kind == "help":
            write(HELP_TEXT)
        elif kind == "invalid":
            write(f"Invalid input: {command[1]}")
        elif kind == "undo":
            if not model.undo():
                write("Nothing to undo")
        elif kind == "redo":
            if not model.redo():
                write("Nothing to redo")
        elif kind == "new":
            model.reset()
        elif kind == "move":
            if model.is_single_player and model.current_player is model.ai_player:
                write("Waiting for the AI")
            elif not model.place_stone(command[1], command[2]):
                write("Illegal move")


def main(argv=None):
    args = parse_args(argv)
    settings = merge_args(load_settings(args.settings), args)
    configure_logging(settings["log_level"])

    with build_model(settings) as model:
        winner = run(model)
    outcome = {Player.BLACK: "Black wins", Player.WHITE: "White wins"}
    print(outcome.get(winner, "No winner"))


if __name__ == "__main__":
    main()
