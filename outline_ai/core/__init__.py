"""
Outline Four Core Package

This package contains the core game logic for Outline Four, including:
- Board geometry and precomputed bitboard tables
- Game state representation
- Game rules (legal moves, move application, win and draw detection)
- Game flow management
- Terminal rendering

All core components can be imported directly from this package.
"""

# Constants
from outline_ai.core.constants import (
    Player, GameResult,
    BOARD_SIZE, NUM_SQUARES, WIN_LENGTH, NO_MOVE
)

# Geometry
from outline_ai.core.geometry import (
    FULL_BOARD_MASK, OUTLINE_MASKS, LINE_MASKS, WIN_MASKS,
    ROW_MASKS, COLUMN_MASKS, DIAGONAL_MASKS, ANTI_DIAGONAL_MASKS,
    square_to_coords, coords_to_square, outline,
    mask_to_squares, squares_to_mask, popcount
)

# Game state
from outline_ai.core.state import GameState

# Rules
from outline_ai.core.rules import (
    new_game, legal_move_mask, is_legal_move, apply_move, available_moves,
    perform_random_move, has_won, winner, is_draw, is_terminal, game_result
)

# Game flow
from outline_ai.core.game import Game, simulate_random_game

__all__ = [
    # Constants
    'Player', 'GameResult',
    'BOARD_SIZE', 'NUM_SQUARES', 'WIN_LENGTH', 'NO_MOVE',

    # Geometry
    'FULL_BOARD_MASK', 'OUTLINE_MASKS', 'LINE_MASKS', 'WIN_MASKS',
    'ROW_MASKS', 'COLUMN_MASKS', 'DIAGONAL_MASKS', 'ANTI_DIAGONAL_MASKS',
    'square_to_coords', 'coords_to_square', 'outline',
    'mask_to_squares', 'squares_to_mask', 'popcount',

    # State
    'GameState',

    # Rules
    'new_game', 'legal_move_mask', 'is_legal_move', 'apply_move', 'available_moves',
    'perform_random_move', 'has_won', 'winner', 'is_draw', 'is_terminal', 'game_result',

    # Game
    'Game', 'simulate_random_game',
]
