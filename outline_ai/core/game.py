"""
Game flow management for Outline Four.

This module defines the Game class, which wraps a GameState with turn
management, agent callbacks and a move history, plus helpers for setting up
and simulating games.
"""
from __future__ import annotations
from typing import Callable, Dict, List, Optional, Tuple
import logging
import random

from outline_ai.core.constants import Player, GameResult
from outline_ai.core.state import GameState
from outline_ai.core import rules

logger = logging.getLogger(__name__)

MoveCallback = Callable[[GameState], int]


class Game:
    """
    Manager for Outline Four game flow.

    Human moves are submitted with :meth:`play`; players with a registered
    agent callback are advanced with :meth:`step`.
    """
    def __init__(
        self,
        starting_player: Player = Player.BLUE,
        random_seed: Optional[int] = None
    ):
        """
        Initialize a new game.

        Args:
            starting_player: Player who moves first
            random_seed: Random seed for reproducibility
        """
        self.starting_player = starting_player
        self.rng = random.Random(random_seed)

        self.state = rules.new_game(starting_player)
        self.history: List[Tuple[Player, int]] = []
        self.agent_callbacks: Dict[Player, MoveCallback] = {}

    def reset(self) -> GameState:
        """
        Reset the game to an empty board.

        Returns:
            New game state
        """
        self.state = rules.new_game(self.starting_player)
        self.history = []
        return self.state

    def register_agent(self, player: Player, agent_callback: MoveCallback) -> None:
        """
        Register an AI agent for a player.

        The callback receives a copy of the game state and returns a square.

        Args:
            player: Player controlled by the agent
            agent_callback: Function that selects a square given the game state
        """
        self.agent_callbacks[player] = agent_callback

    @property
    def game_over(self) -> bool:
        return rules.is_terminal(self.state)

    @property
    def result(self) -> GameResult:
        return rules.game_result(self.state)

    @property
    def winner(self) -> Optional[Player]:
        return rules.winner(self.state)

    @property
    def current_player(self) -> Player:
        return self.state.next_player

    def play(self, square: int) -> bool:
        """
        Play a move for the current player.

        Args:
            square: Square to play

        Returns:
            True if the move was applied, False if it was illegal or the game is over
        """
        if self.game_over:
            return False

        player = self.state.next_player
        if not rules.apply_move(self.state, square):
            return False

        self.history.append((player, square))
        logger.debug("%s played %d", player.name, square)
        return True

    def step(self, square: Optional[int] = None) -> Tuple[GameState, bool]:
        """
        Advance the game by one move.

        If a square is provided it is played. Otherwise the agent registered
        for the current player chooses the move.

        Args:
            square: Optional square to play

        Returns:
            Tuple of (game state, whether the game is over)
        """
        if self.game_over:
            return self.state, True

        player = self.state.next_player

        if square is None and player in self.agent_callbacks:
            square = self.agent_callbacks[player](self.state.clone())

        if square is None:
            raise ValueError(f"No move provided and no agent registered for {player.name}")

        if not self.play(square):
            raise ValueError(f"Illegal move {square} for {player.name}")

        return self.state, self.game_over

    def run_game(self, max_moves: Optional[int] = None) -> GameState:
        """
        Run the game until it ends or ``max_moves`` moves have been played.

        This method requires both players to have agent callbacks registered.

        Args:
            max_moves: Optional cap on the number of moves

        Returns:
            Final game state
        """
        for player in Player:
            if player not in self.agent_callbacks:
                raise ValueError(f"No agent callback registered for {player.name}")

        while not self.game_over:
            if max_moves is not None and len(self.history) >= max_moves:
                break
            self.step()

        return self.state

    def __str__(self) -> str:
        return (f"Game(moves={len(self.history)}, "
                f"next={self.state.next_player.name}, "
                f"result={self.result.name})")


def simulate_random_game(
    starting_player: Player = Player.BLUE,
    random_seed: Optional[int] = None
) -> Game:
    """
    Play a full game with random moves for both players.

    Args:
        starting_player: Player who moves first
        random_seed: Random seed for reproducibility

    Returns:
        The finished Game
    """
    game = Game(starting_player=starting_player, random_seed=random_seed)

    for player in Player:
        game.register_agent(player, lambda state: game.rng.choice(rules.available_moves(state)))

    game.run_game()
    return game
