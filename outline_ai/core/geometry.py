"""
Board geometry and precomputed bitboard tables.

Squares are numbered 0-48. Row ``square // 7`` counts from the bottom and
column ``square % 7`` counts from the right, so square 0 is the bottom-right
corner and square 48 the top-left corner. A set of squares is stored as an
int whose bit ``n`` stands for square ``n``.

All tables below are built once at import time and never modified, so they
can be shared freely between threads and searches.
"""
from typing import Iterable, List, Tuple

from outline_ai.core.constants import BOARD_SIZE, NUM_SQUARES, WIN_LENGTH


FULL_BOARD_MASK = (1 << NUM_SQUARES) - 1


def on_board(row: int, col: int) -> bool:
    """Check whether a (row, col) pair lies on the board."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def square_to_coords(square: int) -> Tuple[int, int]:
    """
    Convert a square index to its (row, col) pair.

    Args:
        square: Square index in [0, 48]

    Returns:
        Tuple of (row, col), row 0 at the bottom and col 0 on the right
    """
    if not 0 <= square < NUM_SQUARES:
        raise ValueError(f"Square {square} is outside the board")
    return divmod(square, BOARD_SIZE)


def coords_to_square(row: int, col: int) -> int:
    """
    Convert a (row, col) pair to a square index.

    Args:
        row: Row index, 0 at the bottom
        col: Column index, 0 on the right

    Returns:
        Square index in [0, 48]
    """
    if not on_board(row, col):
        raise ValueError(f"Coordinates ({row}, {col}) are outside the board")
    return row * BOARD_SIZE + col


def square_mask(square: int) -> int:
    """Bitboard with only ``square`` set."""
    return 1 << square


def squares_to_mask(squares: Iterable[int]) -> int:
    """Build a bitboard from square indices."""
    mask = 0
    for square in squares:
        mask |= 1 << square
    return mask


def mask_to_squares(mask: int) -> List[int]:
    """
    Decompose a bitboard into its square indices.

    Runs in O(k) for k set bits by repeatedly isolating the lowest set bit.

    Returns:
        Square indices in ascending order
    """
    squares = []
    while mask:
        low = mask & -mask
        squares.append(low.bit_length() - 1)
        mask ^= low
    return squares


def popcount(mask: int) -> int:
    """Number of squares in a bitboard."""
    return bin(mask).count("1")


def _build_outline_masks() -> List[int]:
    # 3x3 Moore block around each square, clipped to the board, centre included
    masks = []
    for square in range(NUM_SQUARES):
        row, col = square_to_coords(square)
        mask = 0
        for d_row in (-1, 0, 1):
            for d_col in (-1, 0, 1):
                if on_board(row + d_row, col + d_col):
                    mask |= square_mask(coords_to_square(row + d_row, col + d_col))
        masks.append(mask)
    return masks


def _walk(row: int, col: int, d_row: int, d_col: int) -> List[int]:
    """Squares from (row, col) stepping by (d_row, d_col) until the edge."""
    squares = []
    while on_board(row, col):
        squares.append(coords_to_square(row, col))
        row += d_row
        col += d_col
    return squares


def _build_lines() -> Tuple[List[List[int]], List[List[int]], List[List[int]], List[List[int]]]:
    rows = [_walk(row, 0, 0, 1) for row in range(BOARD_SIZE)]
    columns = [_walk(0, col, 1, 0) for col in range(BOARD_SIZE)]

    # Diagonals step up and to the left, anti-diagonals up and to the right.
    # Each direction has 13 lines; only those long enough to hold a win are kept.
    diagonal_starts = [(0, col) for col in range(BOARD_SIZE - 1, -1, -1)]
    diagonal_starts += [(row, 0) for row in range(1, BOARD_SIZE)]
    anti_diagonal_starts = [(0, col) for col in range(BOARD_SIZE)]
    anti_diagonal_starts += [(row, BOARD_SIZE - 1) for row in range(1, BOARD_SIZE)]

    diagonals = [_walk(row, col, 1, 1) for row, col in diagonal_starts]
    anti_diagonals = [_walk(row, col, 1, -1) for row, col in anti_diagonal_starts]

    diagonals = [line for line in diagonals if len(line) >= WIN_LENGTH]
    anti_diagonals = [line for line in anti_diagonals if len(line) >= WIN_LENGTH]
    return rows, columns, diagonals, anti_diagonals


def _build_win_masks(lines: List[List[int]]) -> List[int]:
    windows = []
    for line in lines:
        for start in range(len(line) - WIN_LENGTH + 1):
            windows.append(squares_to_mask(line[start:start + WIN_LENGTH]))
    return windows


OUTLINE_MASKS: Tuple[int, ...] = tuple(_build_outline_masks())

_ROWS, _COLUMNS, _DIAGONALS, _ANTI_DIAGONALS = _build_lines()

ROW_MASKS: Tuple[int, ...] = tuple(squares_to_mask(line) for line in _ROWS)
COLUMN_MASKS: Tuple[int, ...] = tuple(squares_to_mask(line) for line in _COLUMNS)
DIAGONAL_MASKS: Tuple[int, ...] = tuple(squares_to_mask(line) for line in _DIAGONALS)
ANTI_DIAGONAL_MASKS: Tuple[int, ...] = tuple(squares_to_mask(line) for line in _ANTI_DIAGONALS)
LINE_MASKS: Tuple[int, ...] = ROW_MASKS + COLUMN_MASKS + DIAGONAL_MASKS + ANTI_DIAGONAL_MASKS

# Every run of WIN_LENGTH consecutive squares along any line
WIN_MASKS: Tuple[int, ...] = tuple(_build_win_masks(_ROWS + _COLUMNS + _DIAGONALS + _ANTI_DIAGONALS))


def outline(square: int) -> int:
    """Outline (clipped Moore neighbourhood, square included) of ``square``."""
    return OUTLINE_MASKS[square]
