"""Pattern tables, per-stone double counting, broken fours, and incremental updates."""

from Gomoku_Engine.Board import Board
from Gomoku_Engine.Move import Move
from Gomoku_Engine.Player import Player
from Gomoku_Engine.ai import heuristic


def _board_with(black=(), white=(), size=15):
    b = Board(size=size)
    for row, col in black:
        b.place(Move(Player.BLACK, row, col))
    for row, col in white:
        b.place(Move(Player.WHITE, row, col))
    return b


def test_open_two_counted_once_per_stone():
    b = _board_with(black=[(7, 7), (7, 8)])
    assert heuristic.line_score(b, Player.BLACK) == 2 * 50
    assert heuristic.line_score(b, Player.WHITE) == 0


def test_open_and_closed_three_line_weights():
    b = _board_with(black=[(7, 6), (7, 7), (7, 8)])
    assert heuristic.line_score(b, Player.BLACK) == 3 * 500

    b.place(Move(Player.WHITE, 7, 5))
    assert heuristic.line_score(b, Player.BLACK) == 3 * 120


def test_closed_two_scores_nothing_in_line_table_but_counts_in_pattern_table():
    b = _board_with(black=[(0, 0), (0, 1)])  # edge closes the left end
    assert heuristic.line_score(b, Player.BLACK) == 0
    assert heuristic.pattern_score(b, Player.BLACK) == 2 * 80


def test_line_heuristic_is_self_minus_opponent():
    b = _board_with(black=[(7, 6), (7, 7), (7, 8)], white=[(3, 3), (3, 4)])
    assert heuristic.evaluate_line_heuristic(b, Player.BLACK) == 1500 - 100
    assert heuristic.evaluate_line_heuristic(b, Player.WHITE) == 100 - 1500


def test_pattern_table_open_three():
    b = _board_with(black=[(7, 6), (7, 7), (7, 8)])
    assert heuristic.pattern_score(b, Player.BLACK) == 3 * 5000


def test_broken_four_detection_window():
    # X X _ X X on row 7, columns 3..7
    b = _board_with(black=[(7, 3), (7, 4), (7, 6), (7, 7)])
    assert heuristic.has_broken_four(b, Player.BLACK, 7, 4, 0, 1)
    # The window spans offsets -2..+3, so only (7, 4) sees the whole shape.
    assert not heuristic.has_broken_four(b, Player.BLACK, 7, 3, 0, 1)
    assert not heuristic.has_broken_four(b, Player.BLACK, 7, 6, 0, 1)
    assert heuristic.pattern_score(b, Player.BLACK) == 30000 + 3 * 300


def test_broken_four_ignores_out_of_bounds_windows():
    b = _board_with(black=[(0, 0), (0, 1), (0, 3), (0, 4)])
    assert heuristic.has_broken_four(b, Player.BLACK, 0, 1, 0, 1)
    b2 = _board_with(black=[(0, 0), (0, 1), (0, 3)])
    assert not heuristic.has_broken_four(b2, Player.BLACK, 0, 1, 0, 1)


def test_five_scores_in_both_tables():
    b = _board_with(black=[(7, c) for c in range(5)])
    assert heuristic.line_score(b, Player.BLACK) == 5 * 100000
    assert heuristic.pattern_score(b, Player.BLACK) == 5 * 1_000_000


def test_overline_matches_no_table_entry():
    b = _board_with(black=[(7, c) for c in range(6)])
    assert heuristic.line_score(b, Player.BLACK) == 0
    assert heuristic.pattern_score(b, Player.BLACK) == 0


def test_incremental_matches_full():
    b = Board(size=9)
    base_black = heuristic.pattern_score(b, Player.BLACK)
    base_white = heuristic.pattern_score(b, Player.WHITE)
    moves = [
        Move(Player.BLACK, 4, 4),
        Move(Player.WHITE, 4, 5),
        Move(Player.BLACK, 3, 3),
        Move(Player.WHITE, 5, 5),
        Move(Player.BLACK, 2, 2),
        Move(Player.WHITE, 1, 1),
        Move(Player.BLACK, 4, 2),
        Move(Player.BLACK, 4, 1),
        Move(Player.BLACK, 4, 0),
    ]
    for mv in moves:
        b.place(mv)
        base_black = heuristic.update_pattern_score(b, mv.row, mv.col, Player.BLACK, base_black)
        base_white = heuristic.update_pattern_score(b, mv.row, mv.col, Player.WHITE, base_white)
        assert base_black == heuristic.pattern_score(b, Player.BLACK)
        assert base_white == heuristic.pattern_score(b, Player.WHITE)


def test_load_patterns_defaults_when_missing(tmp_path):
    loaded = heuristic.load_patterns(tmp_path / "nope.yaml")
    assert loaded["line_weights"] == heuristic.DEFAULT_LINE_WEIGHTS
    assert loaded["pattern_weights"] == heuristic.DEFAULT_PATTERN_WEIGHTS


def test_load_patterns_overrides_known_keys(tmp_path):
    path = tmp_path / "patterns.yaml"
    path.write_text(
        "line_weights:\n  open_two: 7\n  bogus: 1\npattern_weights:\n  broken_four: 12345\n",
        encoding="utf-8",
    )
    loaded = heuristic.load_patterns(path)
    assert loaded["line_weights"]["open_two"] == 7
    assert "bogus" not in loaded["line_weights"]
    assert loaded["line_weights"]["five"] == 100000
    assert loaded["pattern_weights"]["broken_four"] == 12345


def test_shipped_patterns_file_matches_defaults():
    loaded = heuristic.load_patterns()
    assert loaded["line_weights"] == heuristic.DEFAULT_LINE_WEIGHTS
    assert loaded["pattern_weights"] == heuristic.DEFAULT_PATTERN_WEIGHTS
