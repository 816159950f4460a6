"""
Terminal rendering of Outline Four positions.

The board is drawn top row first with square 48 in the top-left corner and
square 0 in the bottom-right corner, each cell showing its square number and
coloured by the player occupying it.
"""
from typing import Optional

from rich.console import Console
from rich.text import Text

from outline_ai.core.constants import Player, BOARD_SIZE, PLAYER_STYLES
from outline_ai.core.geometry import coords_to_square
from outline_ai.core.state import GameState


def render_board(state: GameState, highlight: int = 0) -> Text:
    """
    Render a position as rich Text.

    Args:
        state: Game state to draw
        highlight: Bitboard of empty squares to emphasise (e.g. legal moves)

    Returns:
        Styled Text, one line per board row
    """
    board = state.to_array()
    text = Text()
    for row in range(BOARD_SIZE - 1, -1, -1):
        for col in range(BOARD_SIZE - 1, -1, -1):
            square = coords_to_square(row, col)
            cell = board[row, col]
            if cell:
                style = PLAYER_STYLES[Player(int(cell) - 1)]
            elif highlight >> square & 1:
                style = "bold green"
            else:
                style = "dim"
            if square == state.last_move:
                style += " underline"
            text.append(f"{square:>2}", style=style)
            text.append(" ")
        text.append("\n")
    return text


def render_bitboard(bitboard: int) -> str:
    """Plain 0/1 grid of a bitboard in board orientation (for debugging)."""
    lines = []
    for row in range(BOARD_SIZE - 1, -1, -1):
        cells = []
        for col in range(BOARD_SIZE - 1, -1, -1):
            cells.append(str(bitboard >> coords_to_square(row, col) & 1))
        lines.append(" ".join(cells))
    return "\n".join(lines)


def print_board(state: GameState, console: Optional[Console] = None, highlight: int = 0) -> None:
    """Print a position to the terminal."""
    (console or Console()).print(render_board(state, highlight))
