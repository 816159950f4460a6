"""
Outline AI - rules engine and MCTS player for the board game Outline Four.

This package provides a bitboard implementation of the Outline Four rules,
along with a Monte Carlo Tree Search agent that plays it.
"""

__version__ = "0.1.0"
__author__ = "Outline AI Team"

# Make key components available at package level
from outline_ai.core.constants import Player, GameResult, NO_MOVE
from outline_ai.core.state import GameState
from outline_ai.core.game import Game
from outline_ai.core.rules import (
    new_game, apply_move, available_moves, has_won, is_draw, is_terminal
)
from outline_ai.mcts.search import find_best_move

# Version info as a tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split('.')))
