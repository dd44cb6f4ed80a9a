"""Candidate generation radius rules and super-hard move ordering."""

from Gomoku_Engine.Board import Board
from Gomoku_Engine.Move import Move
from Gomoku_Engine.Player import Player
from Gomoku_Engine.ai import heuristic, move_selector


def test_empty_board_offers_center_only():
    assert move_selector.generate_candidates(Board(size=15)) == [(7, 7)]
    assert move_selector.generate_candidates(Board(size=9)) == [(4, 4)]
    assert move_selector.generate_candidates(Board(size=12)) == [(6, 6)]


def test_single_stone_uses_radius_one():
    b = Board(size=15)
    b.place(Move(Player.BLACK, 7, 7))
    cands = move_selector.generate_candidates(b)
    assert len(cands) == 8
    assert cands == sorted(cands)
    assert all(max(abs(r - 7), abs(c - 7)) == 1 for r, c in cands)


def test_two_stones_use_radius_two():
    b = Board(size=15)
    b.place(Move(Player.BLACK, 7, 7))
    b.place(Move(Player.WHITE, 7, 8))
    cands = move_selector.generate_candidates(b)
    # rows 5..9 x cols 5..10, minus the two stones
    assert len(cands) == 5 * 6 - 2
    assert (5, 10) in cands
    assert (7, 7) not in cands


def test_candidates_clip_to_board_edges():
    b = Board(size=15)
    b.place(Move(Player.BLACK, 0, 0))
    assert move_selector.generate_candidates(b) == [(0, 1), (1, 0), (1, 1)]


def test_full_board_has_no_candidates():
    b = Board(size=2)
    for r in range(2):
        for c in range(2):
            b.place(Move(Player.BLACK if (r + c) % 2 else Player.WHITE, r, c))
    assert move_selector.generate_candidates(b) == []


def test_center_bias_prefers_middle():
    b = Board(size=15)
    assert move_selector.center_bias(b, 7, 7) == 50
    assert move_selector.center_bias(b, 7, 8) == 25
    assert move_selector.center_bias(b, 0, 0) == 0


def test_static_heuristic_matches_full_evaluation_and_restores_board():
    b = Board(size=9)
    for mv in [Move(Player.BLACK, 4, 4), Move(Player.WHITE, 4, 5), Move(Player.BLACK, 3, 3)]:
        b.place(mv)
    before = b.copy()

    value = move_selector.static_heuristic(b, Player.WHITE, 2, 2)
    assert b == before

    after = b.copy()
    after.place(Move(Player.WHITE, 2, 2))
    expected = heuristic.pattern_score(after, Player.WHITE) - heuristic.pattern_score(after, Player.BLACK)
    assert value == expected


def test_order_candidates_puts_five_first_with_center_tiebreak():
    b = Board(size=15)
    for c in range(3, 7):
        b.place(Move(Player.BLACK, 7, c))
    b.place(Move(Player.WHITE, 0, 14))
    cands = move_selector.generate_candidates(b)
    ordered = move_selector.order_candidates(b, Player.BLACK, cands)
    # (7, 2) and (7, 7) both complete five; the center bias breaks the tie.
    assert ordered[:2] == [(7, 7), (7, 2)]
    assert sorted(ordered) == sorted(cands)


def test_order_candidates_with_expired_deadline_keeps_input_order():
    b = Board(size=15)
    b.place(Move(Player.BLACK, 7, 7))
    cands = move_selector.generate_candidates(b)
    assert move_selector.order_candidates(b, Player.WHITE, cands, deadline=0) == cands
