"""
Monte Carlo Tree Search Agent for Outline Four.

This module provides the MCTSAgent class, a ready-to-use AI player that uses
Monte Carlo Tree Search to select moves, a RandomAgent baseline, and a
factory for agents of different strengths.
"""
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging
import random

from outline_ai.core.constants import NO_MOVE, DEFAULT_MCTS_ITERATIONS, DEFAULT_MCTS_EXPLORATION
from outline_ai.core.state import GameState
from outline_ai.core import rules
from outline_ai.mcts.config import MCTSConfig
from outline_ai.mcts.node import SearchTree
from outline_ai.mcts.search import (
    mcts_search, get_action_statistics, get_principal_variation
)

logger = logging.getLogger(__name__)


class MCTSAgent:
    """
    Monte Carlo Tree Search agent for playing Outline Four.

    This agent uses MCTS to select moves. It keeps the statistics and the
    tree of its most recent search for inspection.
    """

    def __init__(
        self,
        config: Optional[MCTSConfig] = None,
        name: str = "MCTS Agent",
        verbose: bool = False,
        seed: Optional[int] = None
    ):
        """
        Initialize an MCTS agent.

        Args:
            config: MCTS configuration parameters
            name: Name of the agent
            verbose: Whether to log a summary of every search at INFO level
            seed: Random seed for reproducible searches
        """
        self.config = config or MCTSConfig()
        self.name = name
        self.verbose = verbose
        self.rng = random.Random(seed)

        # Statistics from the most recent search
        self.last_stats: Dict[str, Any] = {}

        # History of all moves and their statistics
        self.move_history: List[Tuple[int, Dict[str, Any]]] = []

        # Tree of the last search
        self.last_tree: Optional[SearchTree] = None

    def select_move(self, state: GameState) -> int:
        """
        Select a move using Monte Carlo Tree Search.

        Args:
            state: Current game state (left unchanged)

        Returns:
            Selected square, or NO_MOVE if no legal move exists
        """
        # A finished game has no move, even if empty squares remain
        if rules.is_terminal(state):
            self.last_stats = {"iterations": 0, "forced_move": False}
            self.last_tree = None
            return NO_MOVE

        moves = rules.available_moves(state)

        # If there's only one legal move, no need to search
        if len(moves) == 1:
            move = moves[0]
            self.last_stats = {"iterations": 0, "forced_move": True}
            self.last_tree = None
            return move

        move, stats, tree = mcts_search(state, self.config, self.rng)

        self.last_stats = stats
        self.last_tree = tree
        self.move_history.append((move, stats))

        if self.verbose:
            self._log_search_info(move, stats)

        return move

    def _log_search_info(self, move: int, stats: Dict[str, Any]) -> None:
        logger.info("%s selected square %d", self.name, move)
        logger.info(
            "Iterations: %d, time: %.3fs (%.1f it/s), nodes: %d, max depth: %d",
            stats["iterations"], stats["time_elapsed"], stats["iterations_per_second"],
            stats["node_count"], stats["max_depth"]
        )

        # Top moves by visit count
        ranked = sorted(stats["move_visits"].items(), key=lambda x: x[1], reverse=True)
        for rank, (square, visits) in enumerate(ranked[:5], start=1):
            value = stats["move_values"].get(square, 0.0)
            logger.info("%d. square %d - %d visits, %.3f value", rank, square, visits, value)

    def get_move_callback(self) -> Callable[[GameState], int]:
        """
        Get a callback function for selecting moves.

        This is useful for registering the agent with a Game object.
        """
        return self.select_move

    def get_last_statistics(self) -> Dict[str, Any]:
        return self.last_stats

    def get_principal_variation(self) -> List[Tuple[int, float]]:
        """
        Get the principal variation (most visited path) from the last search.

        Returns:
            List of (square, value) pairs
        """
        if self.last_tree is None:
            return []
        return get_principal_variation(self.last_tree)

    def get_action_statistics(self) -> Dict[int, Dict[str, float]]:
        """
        Get statistics for all root moves from the last search.

        Returns:
            Dictionary mapping squares to statistics
        """
        if self.last_tree is None:
            return {}
        return get_action_statistics(self.last_tree)

    def reset_statistics(self) -> None:
        """Reset all statistics."""
        self.last_stats = {}
        self.move_history = []
        self.last_tree = None

    def __str__(self) -> str:
        if self.config.iterations is None:
            return f"{self.name} (MCTS, {self.config.time_limit}s)"
        return f"{self.name} (MCTS, {self.config.iterations} iterations)"


class RandomAgent:
    """Baseline agent that plays a uniformly random legal move."""

    def __init__(self, name: str = "Random Agent", seed: Optional[int] = None):
        self.name = name
        self.rng = random.Random(seed)

    def select_move(self, state: GameState) -> int:
        if rules.is_terminal(state):
            return NO_MOVE
        return self.rng.choice(rules.available_moves(state))

    def get_move_callback(self) -> Callable[[GameState], int]:
        return self.select_move

    def __str__(self) -> str:
        return f"{self.name} (random)"


class MCTSAgentFactory:
    """
    Factory for creating MCTS agents with different configurations.
    """

    @staticmethod
    def create_fast(seed: Optional[int] = None) -> MCTSAgent:
        return MCTSAgent(config=MCTSConfig.fast(), name="Fast MCTS", seed=seed)

    @staticmethod
    def create_standard(seed: Optional[int] = None) -> MCTSAgent:
        return MCTSAgent(config=MCTSConfig.default(), name="Standard MCTS", seed=seed)

    @staticmethod
    def create_strong(seed: Optional[int] = None) -> MCTSAgent:
        return MCTSAgent(config=MCTSConfig.deep(), name="Strong MCTS", seed=seed)

    @staticmethod
    def create_custom(
        iterations: Optional[int] = DEFAULT_MCTS_ITERATIONS,
        time_limit: Optional[float] = None,
        exploration_weight: float = DEFAULT_MCTS_EXPLORATION,
        name: str = "Custom MCTS",
        seed: Optional[int] = None
    ) -> MCTSAgent:
        """
        Create a custom MCTS agent.

        Args:
            iterations: Number of MCTS iterations
            time_limit: Optional time limit in seconds
            exploration_weight: UCT exploration parameter
            name: Name of the agent
            seed: Random seed

        Returns:
            MCTSAgent
        """
        config = MCTSConfig(
            iterations=iterations,
            time_limit=time_limit,
            exploration_weight=exploration_weight
        )
        return MCTSAgent(config=config, name=name, seed=seed)
