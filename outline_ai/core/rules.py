"""
Rules engine for Outline Four.

This module implements the game rules as stateless functions over a
:class:`GameState` passed by the caller, backed by the read-only tables in
:mod:`outline_ai.core.geometry`:

- Legal moves: the first move is free; afterwards a move must land on an empty
  square of the last move's outline. When that outline is full (an island),
  any empty square inside the outline accumulator may be played instead.
- Applying moves, picking random moves for playouts.
- Win detection (four consecutive stones along a row, column or diagonal)
  and draw detection.

Rule violations are normal control flow and are reported as booleans, never
raised.
"""
import logging
import random
from typing import List, Optional

from outline_ai.core.constants import Player, GameResult, NUM_SQUARES
from outline_ai.core.geometry import (
    FULL_BOARD_MASK, OUTLINE_MASKS, WIN_MASKS, mask_to_squares
)
from outline_ai.core.state import GameState

logger = logging.getLogger(__name__)


def new_game(starting_player: Player = Player.BLUE) -> GameState:
    """
    Create an empty game state.

    Args:
        starting_player: Player who makes the first move

    Returns:
        Empty GameState
    """
    if not isinstance(starting_player, Player):
        raise ValueError(f"Unknown player: {starting_player!r}")
    return GameState(next_player=starting_player)


def legal_move_mask(state: GameState) -> int:
    """
    Compute the bitboard of squares the next player may play.

    Args:
        state: Current game state

    Returns:
        Bitboard where each set bit is a legal square
    """
    combined = state.combined

    # First move of the game may go anywhere
    if combined == 0:
        return FULL_BOARD_MASK

    standard_moves = OUTLINE_MASKS[state.last_move] & ~combined
    if standard_moves:
        return standard_moves

    # Island: the last move's outline is full, escape to any touched square
    return state.outline_accumulator & ~combined


def is_legal_move(state: GameState, square: int) -> bool:
    """Check whether ``square`` can be played in ``state``."""
    if not isinstance(square, int) or isinstance(square, bool):
        return False
    if not 0 <= square < NUM_SQUARES:
        return False
    return bool(legal_move_mask(state) >> square & 1)


def apply_move(state: GameState, square: int) -> bool:
    """
    Apply a move for the next player.

    On success the player's stone is placed, the square's outline is added to
    the outline accumulator, the last move is recorded and the turn passes.
    On failure the state is left untouched.

    Args:
        state: Game state to modify
        square: Square to play

    Returns:
        True if the move was applied, False if it was out of range or illegal
    """
    if not is_legal_move(state, square):
        logger.debug("Rejected move %r for %s", square, state.next_player.name)
        return False

    player = state.next_player
    state.set_bitboard(player, state.get_bitboard(player) | (1 << square))
    state.outline_accumulator |= OUTLINE_MASKS[square]
    state.last_move = square
    state.next_player = player.opponent
    return True


def available_moves(state: GameState) -> List[int]:
    """
    Get all legal moves for the next player.

    Returns:
        Legal square indices in ascending order
    """
    return mask_to_squares(legal_move_mask(state))


def perform_random_move(state: GameState, rng: Optional[random.Random] = None) -> bool:
    """
    Apply a uniformly random legal move.

    This is the playout policy used by the search.

    Args:
        state: Game state to modify
        rng: Random generator (the ``random`` module when None)

    Returns:
        True if a move was applied, False if no legal move exists
    """
    moves = available_moves(state)
    if not moves:
        return False
    square = (rng or random).choice(moves)
    applied = apply_move(state, square)
    assert applied, f"Generated move {square} was rejected"
    return True


def has_won(state: GameState, player: Player) -> bool:
    """
    Check whether a player has four consecutive stones along a line.

    Args:
        state: Game state to check
        player: Player to check

    Returns:
        True if the player owns every square of some winning window
    """
    bitboard = state.get_bitboard(player)
    for window in WIN_MASKS:
        if bitboard & window == window:
            return True
    return False


def winner(state: GameState) -> Optional[Player]:
    """Get the player with four in a line, or None."""
    for player in Player:
        if has_won(state, player):
            return player
    return None


def is_draw(state: GameState) -> bool:
    """The game is drawn when no legal move remains and nobody has won."""
    return legal_move_mask(state) == 0 and winner(state) is None


def is_terminal(state: GameState) -> bool:
    """Check whether the game is over (won or drawn)."""
    return winner(state) is not None or legal_move_mask(state) == 0


def game_result(state: GameState) -> GameResult:
    """Classify the state as in progress, won or drawn."""
    if winner(state) is not None:
        return GameResult.WINNER
    if legal_move_mask(state) == 0:
        return GameResult.DRAW
    return GameResult.IN_PROGRESS
