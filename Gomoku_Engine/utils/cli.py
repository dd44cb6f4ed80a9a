"""CLI options for board size, play mode, AI difficulty, and config paths."""

MODES = ("human-vs-ai", "ai-vs-human", "human-vs-human")
DIFFICULTIES = ("easy", "medium", "hard", "super-hard")


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(description="Gomoku (five in a row) against a tiered AI")
    parser.add_argument("--board-size", type=int, help="Board size (9, 12 or 15 are typical)")
    parser.add_argument(
        "--mode",
        choices=MODES,
        default=None,
        help="Play mode: who plays black/white (default from settings)",
    )
    parser.add_argument(
        "--difficulty",
        choices=DIFFICULTIES,
        default=None,
        help="AI difficulty (default from settings)",
    )
    parser.add_argument("--time-limit-ms", type=int, default=None, help="Super-hard search budget per move in milliseconds")
    parser.add_argument("--settings", default="config/settings.yaml", help="Path to settings YAML")
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ...)")
    return parser


def parse_args(argv=None):
    return build_parser().parse_args(argv)
