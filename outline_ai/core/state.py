"""
Game state for Outline Four.

The GameState is plain data: the two players' bitboards, whose turn it is,
the last move and the outline accumulator. All rule logic lives in
:mod:`outline_ai.core.rules`, which is the only code that mutates a state.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from outline_ai.core.constants import Player, BOARD_SIZE, NUM_SQUARES


@dataclass
class GameState:
    """
    Complete representation of an Outline Four position.

    Attributes:
        next_player: Player who makes the next move
        bitboards: One 49-bit int per player, indexed by ``Player.value``
        last_move: Square of the most recently applied move, None before the first move
        outline_accumulator: Union of the outlines of every square played so far
    """
    next_player: Player = Player.BLUE
    bitboards: List[int] = field(default_factory=lambda: [0, 0])
    last_move: Optional[int] = None
    outline_accumulator: int = 0

    def get_bitboard(self, player: Player) -> int:
        """
        Get the bitboard of a player's stones.

        Args:
            player: Player.BLUE or Player.PINK

        Returns:
            Bitboard of the player's occupied squares

        Raises:
            ValueError: If ``player`` is not a Player
        """
        if not isinstance(player, Player):
            raise ValueError(f"Unknown player: {player!r}")
        return self.bitboards[player.value]

    def set_bitboard(self, player: Player, bitboard: int) -> None:
        if not isinstance(player, Player):
            raise ValueError(f"Unknown player: {player!r}")
        self.bitboards[player.value] = bitboard

    @property
    def combined(self) -> int:
        """Bitboard of every occupied square."""
        return self.bitboards[0] | self.bitboards[1]

    @property
    def is_empty(self) -> bool:
        return self.combined == 0

    @property
    def move_count(self) -> int:
        """Number of stones on the board."""
        return bin(self.combined).count("1")

    def clone(self) -> 'GameState':
        """
        Create an independent copy of the state.

        Returns:
            Copy of the game state sharing no mutable data with this one
        """
        return GameState(
            next_player=self.next_player,
            bitboards=list(self.bitboards),
            last_move=self.last_move,
            outline_accumulator=self.outline_accumulator,
        )

    def to_array(self) -> np.ndarray:
        """
        Get the board as a 7x7 array indexed ``[row, col]``.

        Cells hold 0 for empty, 1 for BLUE and 2 for PINK. Row 0 is the bottom
        row and column 0 the rightmost column.

        Returns:
            numpy array of shape (7, 7) and dtype int8
        """
        board = np.zeros(NUM_SQUARES, dtype=np.int8)
        for player in Player:
            bits = self.bitboards[player.value]
            occupied = [(bits >> square) & 1 for square in range(NUM_SQUARES)]
            board[np.array(occupied, dtype=bool)] = player.value + 1
        return board.reshape(BOARD_SIZE, BOARD_SIZE)

    def __str__(self) -> str:
        return (f"GameState(next={self.next_player.name}, "
                f"stones={self.move_count}, "
                f"last_move={self.last_move})")
