"""
Constants for the Outline Four game.

This module defines the board dimensions, the player tags, the win length
and a few defaults shared by the rules engine and the search.
"""
from enum import Enum
from typing import Dict, Final


class Player(Enum):
    """Enum representing the two players. The value doubles as a bitboard index."""
    BLUE = 0
    PINK = 1

    @property
    def opponent(self) -> 'Player':
        """The other player."""
        return Player.PINK if self is Player.BLUE else Player.BLUE


class GameResult(Enum):
    """Enum representing possible game results."""
    IN_PROGRESS = "in_progress"
    WINNER = "winner"  # Game has a winner
    DRAW = "draw"  # No legal move left and nobody has four in a line


# Board dimensions
BOARD_SIZE: Final[int] = 7
NUM_SQUARES: Final[int] = BOARD_SIZE * BOARD_SIZE

# Number of consecutive stones along a line needed to win
WIN_LENGTH: Final[int] = 4

# Returned by the search when the root position has no legal move
NO_MOVE: Final[int] = -1

# Display names for players (for pretty printing)
PLAYER_DISPLAY_NAMES: Final[Dict[Player, str]] = {
    Player.BLUE: "Blue",
    Player.PINK: "Pink",
}

# Rich styles used when rendering stones
PLAYER_STYLES: Final[Dict[Player, str]] = {
    Player.BLUE: "bold white on blue",
    Player.PINK: "bold white on magenta",
}

# AI and simulation settings
DEFAULT_MCTS_ITERATIONS: Final[int] = 1000
DEFAULT_MCTS_EXPLORATION: Final[float] = 1.4142135623730951  # UCT exploration parameter (sqrt(2))
