#!/usr/bin/env python
"""
Tests for the Outline Four board geometry, game state and rules engine.

Covers the precomputed tables, legal move generation (free first move,
standard moves, escape moves), move application, win and draw detection.
"""
import random
import unittest

from outline_ai.core.constants import Player, GameResult, NUM_SQUARES
from outline_ai.core.geometry import (
    FULL_BOARD_MASK, OUTLINE_MASKS, LINE_MASKS, WIN_MASKS,
    ROW_MASKS, COLUMN_MASKS, DIAGONAL_MASKS, ANTI_DIAGONAL_MASKS,
    square_to_coords, coords_to_square, mask_to_squares, squares_to_mask,
    popcount, outline
)
from outline_ai.core.state import GameState
from outline_ai.core import rules


def make_state(blue=(), pink=(), last_move=None, next_player=Player.BLUE):
    """Build a position directly from stone lists (for rule tests)."""
    played = list(blue) + list(pink)
    accumulator = 0
    for square in played:
        accumulator |= OUTLINE_MASKS[square]
    return GameState(
        next_player=next_player,
        bitboards=[squares_to_mask(blue), squares_to_mask(pink)],
        last_move=last_move,
        outline_accumulator=accumulator,
    )


def full_board_draw_state() -> GameState:
    """Full board coloured so that no line holds more than two in a row."""
    blue, pink = [], []
    for square in range(NUM_SQUARES):
        row, col = square_to_coords(square)
        (blue if (row + 2 * col) % 4 < 2 else pink).append(square)
    return make_state(blue, pink, last_move=48, next_player=Player.PINK)


class TestGeometry(unittest.TestCase):
    """Test case for board geometry and precomputed tables."""

    def test_coordinates(self):
        self.assertEqual(square_to_coords(0), (0, 0))
        self.assertEqual(square_to_coords(6), (0, 6))
        self.assertEqual(square_to_coords(10), (1, 3))
        self.assertEqual(square_to_coords(48), (6, 6))

        for square in range(NUM_SQUARES):
            self.assertEqual(coords_to_square(*square_to_coords(square)), square)

    def test_coordinates_out_of_range(self):
        with self.assertRaises(ValueError):
            square_to_coords(49)
        with self.assertRaises(ValueError):
            coords_to_square(7, 0)

    def test_outline_sizes(self):
        sizes = [popcount(mask) for mask in OUTLINE_MASKS]

        for corner in (0, 6, 42, 48):
            self.assertEqual(sizes[corner], 4)
        for edge in (3, 21, 27, 45):
            self.assertEqual(sizes[edge], 6)
        self.assertEqual(sizes[24], 9)

        self.assertEqual(sizes.count(4), 4)
        self.assertEqual(sizes.count(6), 20)
        self.assertEqual(sizes.count(9), 25)

    def test_outline_contents(self):
        self.assertEqual(mask_to_squares(outline(0)), [0, 1, 7, 8])
        self.assertEqual(mask_to_squares(outline(48)), [40, 41, 47, 48])
        self.assertEqual(mask_to_squares(outline(24)), [16, 17, 18, 23, 24, 25, 30, 31, 32])

        for square in range(NUM_SQUARES):
            self.assertTrue(outline(square) >> square & 1)
            for neighbour in mask_to_squares(outline(square)):
                self.assertTrue(outline(neighbour) >> square & 1)

    def test_line_tables(self):
        self.assertEqual(len(ROW_MASKS), 7)
        self.assertEqual(len(COLUMN_MASKS), 7)
        self.assertEqual(len(DIAGONAL_MASKS), 7)
        self.assertEqual(len(ANTI_DIAGONAL_MASKS), 7)
        self.assertEqual(len(LINE_MASKS), 28)

        self.assertEqual(mask_to_squares(ROW_MASKS[0]), list(range(7)))
        self.assertEqual(mask_to_squares(COLUMN_MASKS[0]), [0, 7, 14, 21, 28, 35, 42])
        self.assertIn(squares_to_mask([0, 8, 16, 24, 32, 40, 48]), DIAGONAL_MASKS)
        self.assertIn(squares_to_mask([6, 12, 18, 24, 30, 36, 42]), ANTI_DIAGONAL_MASKS)
        self.assertIn(squares_to_mask([3, 11, 19, 27]), DIAGONAL_MASKS)
        self.assertIn(squares_to_mask([3, 9, 15, 21]), ANTI_DIAGONAL_MASKS)

        # 28 windows per rows and columns, 16 per diagonal direction
        self.assertEqual(len(WIN_MASKS), 88)
        self.assertTrue(all(popcount(window) == 4 for window in WIN_MASKS))

    def test_mask_helpers(self):
        self.assertEqual(mask_to_squares(0), [])
        self.assertEqual(mask_to_squares(squares_to_mask([5, 1, 48])), [1, 5, 48])
        self.assertEqual(popcount(FULL_BOARD_MASK), 49)


class TestGameState(unittest.TestCase):
    """Test case for the game state data."""

    def test_clone_is_independent(self):
        state = make_state(blue=[24], pink=[25], last_move=25)
        copy = state.clone()
        self.assertEqual(state, copy)

        copy.bitboards[0] |= 1
        copy.outline_accumulator = 0
        self.assertNotEqual(state, copy)
        self.assertEqual(state.get_bitboard(Player.BLUE), 1 << 24)

    def test_invalid_player_is_fatal(self):
        state = GameState()
        with self.assertRaises(ValueError):
            state.get_bitboard(0)
        with self.assertRaises(ValueError):
            rules.has_won(state, "BLUE")

    def test_to_array(self):
        state = make_state(blue=[0, 10], pink=[48], last_move=48)
        board = state.to_array()

        self.assertEqual(board.shape, (7, 7))
        self.assertEqual(board[0, 0], 1)
        self.assertEqual(board[1, 3], 1)
        self.assertEqual(board[6, 6], 2)
        self.assertEqual(int(board.sum()), 4)


class TestLegalMoves(unittest.TestCase):
    """Test case for legal move generation and move application."""

    def test_first_move_is_free(self):
        state = rules.new_game()
        self.assertEqual(popcount(rules.legal_move_mask(state)), 49)
        self.assertEqual(rules.available_moves(state), list(range(49)))

    def test_centre_opening(self):
        state = rules.new_game(Player.BLUE)
        self.assertTrue(rules.apply_move(state, 24))

        self.assertEqual(state.next_player, Player.PINK)
        self.assertEqual(state.last_move, 24)
        self.assertEqual(state.get_bitboard(Player.BLUE), 1 << 24)
        self.assertEqual(state.outline_accumulator, outline(24))
        self.assertEqual(rules.legal_move_mask(state), outline(24) & ~(1 << 24))
        self.assertEqual(rules.available_moves(state), [16, 17, 18, 23, 25, 30, 31, 32])

    def test_invalid_squares_leave_state_untouched(self):
        state = rules.new_game()
        rules.apply_move(state, 24)
        snapshot = state.clone()

        for square in (-1, 49, 100, None, "3", 3.5, True):
            self.assertFalse(rules.apply_move(state, square))
            self.assertEqual(state, snapshot)

    def test_non_adjacent_move_rejected(self):
        state = rules.new_game()
        rules.apply_move(state, 24)
        snapshot = state.clone()

        self.assertFalse(rules.apply_move(state, 0))
        self.assertFalse(rules.apply_move(state, 24))  # occupied
        self.assertEqual(state, snapshot)

    def test_standard_moves_take_priority(self):
        state = rules.new_game(Player.BLUE)
        for square in (8, 1, 7):
            self.assertTrue(rules.apply_move(state, square))

        # Only 0, 14 and 15 touch the last move; the escape set is not used
        self.assertEqual(rules.available_moves(state), [0, 14, 15])

    def test_escape_rule(self):
        state = rules.new_game(Player.BLUE)
        for square in (8, 1, 7, 0):
            self.assertTrue(rules.apply_move(state, square))

        # The outline of corner 0 is {0, 1, 7, 8}, all occupied
        self.assertEqual(outline(0) & ~state.combined, 0)

        expected = state.outline_accumulator & ~state.combined
        self.assertEqual(rules.legal_move_mask(state), expected)
        self.assertEqual(rules.available_moves(state), [2, 9, 14, 15, 16])
        self.assertEqual(state.next_player, Player.BLUE)

        self.assertTrue(rules.apply_move(state, 16))
        self.assertFalse(rules.apply_move(state, 40))

    def test_escape_rule_on_constructed_island(self):
        state = make_state(blue=[0, 8], pink=[1, 7], last_move=0, next_player=Player.PINK)
        legal = rules.legal_move_mask(state)
        self.assertEqual(legal, state.outline_accumulator & ~state.combined)
        self.assertEqual(mask_to_squares(legal), [2, 9, 14, 15, 16])

    def test_random_games_keep_invariants(self):
        rng = random.Random(1234)
        for _ in range(20):
            state = rules.new_game(Player.PINK)
            moves = 0
            while not rules.is_terminal(state):
                previous_reach = state.outline_accumulator
                self.assertTrue(rules.perform_random_move(state, rng))
                moves += 1

                # Disjoint occupancy
                self.assertEqual(state.get_bitboard(Player.BLUE) & state.get_bitboard(Player.PINK), 0)
                # Turn alternation
                self.assertEqual(state.next_player == Player.PINK, moves % 2 == 0)
                # Monotonic reach covering every stone
                self.assertEqual(state.outline_accumulator & previous_reach, previous_reach)
                self.assertEqual(state.combined & ~state.outline_accumulator, 0)
                self.assertEqual(state.move_count, moves)

    def test_random_move_without_moves(self):
        state = full_board_draw_state()
        snapshot = state.clone()
        self.assertFalse(rules.perform_random_move(state, random.Random(0)))
        self.assertEqual(state, snapshot)


class TestWinDetection(unittest.TestCase):
    """Test case for four-in-a-line wins and draws."""

    LINES = {
        "row": [0, 1, 2, 3],
        "column": [3, 10, 17, 24],
        "diagonal": [0, 8, 16, 24],
        "anti-diagonal": [6, 12, 18, 24],
        "short diagonal": [21, 29, 37, 45],
    }

    def test_four_in_a_line_wins(self):
        for name, squares in self.LINES.items():
            with self.subTest(line=name, player="blue"):
                state = make_state(blue=squares, pink=[40, 41], last_move=squares[-1])
                self.assertTrue(rules.has_won(state, Player.BLUE))
                self.assertFalse(rules.has_won(state, Player.PINK))
                self.assertEqual(rules.winner(state), Player.BLUE)
                self.assertTrue(rules.is_terminal(state))
                self.assertFalse(rules.is_draw(state))

            with self.subTest(line=name, player="pink"):
                state = make_state(blue=[40, 41], pink=squares, last_move=squares[-1])
                self.assertTrue(rules.has_won(state, Player.PINK))
                self.assertFalse(rules.has_won(state, Player.BLUE))

    def test_non_consecutive_stones_do_not_win(self):
        for squares in ([0, 1, 2, 4], [0, 2, 4, 6], [0, 7, 14, 28], [0, 8, 16, 32]):
            with self.subTest(squares=squares):
                state = make_state(blue=squares, last_move=squares[-1])
                self.assertFalse(rules.has_won(state, Player.BLUE))
                self.assertIsNone(rules.winner(state))

    def test_win_through_play(self):
        state = rules.new_game(Player.BLUE)
        # Blue builds 16-17-18-19 on row 2, pink answers on row 3
        for square in (16, 23, 17, 24, 18, 25):
            self.assertTrue(rules.apply_move(state, square))
        self.assertFalse(rules.is_terminal(state))
        self.assertEqual(rules.game_result(state), GameResult.IN_PROGRESS)

        self.assertTrue(rules.apply_move(state, 19))
        self.assertTrue(rules.has_won(state, Player.BLUE))
        self.assertEqual(rules.game_result(state), GameResult.WINNER)

    def test_full_board_draw(self):
        state = full_board_draw_state()

        self.assertEqual(state.combined, FULL_BOARD_MASK)
        self.assertEqual(rules.available_moves(state), [])
        self.assertFalse(rules.has_won(state, Player.BLUE))
        self.assertFalse(rules.has_won(state, Player.PINK))
        self.assertTrue(rules.is_draw(state))
        self.assertTrue(rules.is_terminal(state))
        self.assertEqual(rules.game_result(state), GameResult.DRAW)
        self.assertFalse(rules.apply_move(state, 0))

    def test_draw_through_play(self):
        # Every move touches the previous one; the stones end up in the same
        # pattern as full_board_draw_state()
        moves = [
            6, 5, 13, 20, 19, 27, 34, 33, 41, 48, 47, 46, 39, 40, 32, 25, 26, 18, 11, 12, 4,
            3, 2, 10, 9, 16, 17, 23, 24, 31, 30, 38, 45, 44, 37,
            36, 43, 42, 35, 29, 28, 21, 22, 14, 15, 8, 7, 1, 0,
        ]
        self.assertEqual(sorted(moves), list(range(NUM_SQUARES)))

        state = rules.new_game(Player.BLUE)
        for square in moves:
            self.assertFalse(rules.is_terminal(state))
            self.assertTrue(rules.apply_move(state, square), f"move {square} rejected")

        self.assertEqual(rules.available_moves(state), [])
        self.assertFalse(rules.has_won(state, Player.BLUE))
        self.assertFalse(rules.has_won(state, Player.PINK))
        self.assertTrue(rules.is_draw(state))
        self.assertEqual(rules.game_result(state), GameResult.DRAW)
        self.assertEqual(state.outline_accumulator, FULL_BOARD_MASK)
        self.assertEqual(state.bitboards, full_board_draw_state().bitboards)


if __name__ == "__main__":
    unittest.main()
