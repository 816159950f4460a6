"""
Configuration for Monte Carlo Tree Search (MCTS).

This module defines the configuration parameters for the MCTS algorithm:
the search budget, the UCT exploration constant and the playout rewards.
"""
from dataclasses import dataclass, fields
from typing import Optional

from outline_ai.core.constants import DEFAULT_MCTS_ITERATIONS, DEFAULT_MCTS_EXPLORATION


@dataclass
class MCTSConfig:
    """
    Configuration parameters for Monte Carlo Tree Search.

    The budget is an iteration cap, a wall-clock limit, or both (whichever
    runs out first stops the search).
    """
    # Search budget
    iterations: Optional[int] = DEFAULT_MCTS_ITERATIONS
    """Maximum number of MCTS iterations per move decision (None = no cap)"""

    time_limit: Optional[float] = None
    """Optional time limit in seconds (None = no limit)"""

    # Selection
    exploration_weight: float = DEFAULT_MCTS_EXPLORATION
    """UCT exploration parameter (default is sqrt(2))"""

    # Playout rewards, from the point of view of the player who moved into a node
    win_reward: float = 1.0
    loss_reward: float = -1.0
    draw_reward: float = 0.0

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.iterations is None and self.time_limit is None:
            raise ValueError("at least one of iterations or time_limit must be set")

        if self.iterations is not None and self.iterations <= 0:
            raise ValueError("iterations must be positive or None")

        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError("time_limit must be positive or None")

        if self.exploration_weight < 0:
            raise ValueError("exploration_weight must be non-negative")

        if not self.loss_reward <= self.draw_reward <= self.win_reward:
            raise ValueError("rewards must satisfy loss_reward <= draw_reward <= win_reward")

        if self.loss_reward == self.win_reward:
            raise ValueError("win_reward and loss_reward must differ")

    @classmethod
    def default(cls) -> 'MCTSConfig':
        """
        Get the default configuration.

        Returns:
            Default MCTSConfig object
        """
        return cls()

    @classmethod
    def fast(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for speed (fewer iterations).

        Returns:
            Fast MCTSConfig object
        """
        return cls(iterations=200)

    @classmethod
    def deep(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for deep search.

        Returns:
            Deep MCTSConfig object
        """
        return cls(
            iterations=5000,
            exploration_weight=1.2  # Slightly less exploration
        )

    @classmethod
    def timed(cls, seconds: float) -> 'MCTSConfig':
        """Configuration bounded only by wall-clock time."""
        return cls(iterations=None, time_limit=seconds)

    @classmethod
    def from_dict(cls, config_dict: dict) -> 'MCTSConfig':
        """
        Create a configuration from a dictionary.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            MCTSConfig object
        """
        # Filter out any keys that aren't valid parameters
        valid_params = {k: v for k, v in config_dict.items()
                        if k in cls.__dataclass_fields__}
        return cls(**valid_params)

    def to_dict(self) -> dict:
        """
        Convert the configuration to a dictionary.

        Returns:
            Dictionary of configuration parameters
        """
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def __str__(self) -> str:
        params = ", ".join(f"{name}={value}" for name, value in self.to_dict().items())
        return f"MCTSConfig({params})"
