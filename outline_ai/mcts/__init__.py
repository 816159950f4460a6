"""
Monte Carlo Tree Search (MCTS) implementation for Outline Four.

This package provides a complete MCTS agent that plays Outline Four without
any training. The MCTS algorithm works by:

1. Selection: Starting from the root node, select child nodes using UCT until
   reaching a node without children.
2. Expansion: If that node has already been simulated once, create one child
   per legal move and pick one at random.
3. Simulation: From the chosen node, perform a random playout to the end of the game.
4. Backpropagation: Update the statistics of all nodes in the path with the result.

The move played is the root child with the most visits.
"""

from outline_ai.mcts.node import MCTSNode, SearchTree
from outline_ai.mcts.agent import MCTSAgent, RandomAgent, MCTSAgentFactory
from outline_ai.mcts.search import (
    mcts_search,
    find_best_move,
    select_node,
    expand_node,
    simulate_game,
    backpropagate
)
from outline_ai.mcts.config import MCTSConfig
from outline_ai.core.constants import DEFAULT_MCTS_ITERATIONS, DEFAULT_MCTS_EXPLORATION

# Default configuration
DEFAULT_CONFIG = MCTSConfig(
    iterations=DEFAULT_MCTS_ITERATIONS,            # Number of MCTS iterations per move
    exploration_weight=DEFAULT_MCTS_EXPLORATION,  # UCT exploration parameter (sqrt(2))
    time_limit=None,          # Optional time limit in seconds (None = no limit)
)

__all__ = [
    'MCTSAgent',
    'RandomAgent',
    'MCTSAgentFactory',
    'MCTSNode',
    'SearchTree',
    'MCTSConfig',
    'mcts_search',
    'find_best_move',
    'select_node',
    'expand_node',
    'simulate_game',
    'backpropagate',
    'DEFAULT_CONFIG'
]
