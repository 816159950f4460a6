"""
Monte Carlo Tree Search (MCTS) algorithm for Outline Four.

This module implements the core MCTS algorithm with the four standard phases:
1. Selection: Descend from the root by UCT until a node without children
2. Expansion: Expand the node if it has already been simulated once
3. Simulation: Play random moves on a copy of the state until the game ends
4. Backpropagation: Update statistics from the simulated node up to the root

The search never mutates the state it is given; every node and every playout
works on its own copy.
"""
from __future__ import annotations
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple
import logging
import random
import time

from outline_ai.core.constants import Player, NO_MOVE
from outline_ai.core.state import GameState
from outline_ai.core import rules
from outline_ai.mcts.config import MCTSConfig
from outline_ai.mcts.node import SearchTree

logger = logging.getLogger(__name__)


def mcts_search(
    state: GameState,
    config: Optional[MCTSConfig] = None,
    rng: Optional[random.Random] = None
) -> Tuple[int, Dict[str, Any], SearchTree]:
    """
    Run Monte Carlo Tree Search to find the best move.

    This function runs the full MCTS algorithm:
    1. Create a root node from a copy of the current state
    2. Repeatedly run selection, expansion, simulation, and backpropagation
       until the iteration cap or the time limit is reached
    3. Return the move of the most visited root child

    The root is expanded before the first iteration, so every iteration
    passes through exactly one root child.

    Args:
        state: Current game state (left unchanged)
        config: MCTS configuration parameters
        rng: Random generator for expansion and playouts

    Returns:
        Tuple of (best square or NO_MOVE, search statistics, search tree)
    """
    # Use default config if none provided
    if config is None:
        config = MCTSConfig()
    if rng is None:
        rng = random.Random()

    tree = SearchTree(state, config=config, rng=rng)

    stats: Dict[str, Any] = {
        "iterations": 0,
        "max_depth": 0,
        "total_simulation_steps": 0,
        "time_elapsed": 0.0,
        "node_count": 1,
        "stopped_by": None,
        "move_visits": {},
        "move_values": {},
    }

    # Nothing to search: the game is over or no move exists
    if tree.root.is_terminal():
        stats["stopped_by"] = "terminal"
        logger.debug("Root position is terminal, no move available")
        return NO_MOVE, stats, tree

    tree.expand(0)

    start_time = time.perf_counter()

    # Main MCTS loop; the budget is only checked between iterations
    while True:
        if config.iterations is not None and stats["iterations"] >= config.iterations:
            stats["stopped_by"] = "iterations"
            break
        if config.time_limit is not None and time.perf_counter() - start_time >= config.time_limit:
            stats["stopped_by"] = "time_limit"
            break

        # 1. Selection
        leaf = select_node(tree)

        # 2. Expansion
        target = expand_node(tree, leaf)

        # 3. Simulation
        winner, simulation_steps = simulate_game(tree.node(target).state, rng)

        # 4. Backpropagation
        backpropagate(tree, target, outcome_rewards(winner, config))

        stats["iterations"] += 1
        stats["total_simulation_steps"] += simulation_steps
        stats["max_depth"] = max(stats["max_depth"], tree.depth(target))

    best_move = tree.best_move()

    for child in tree.children_of(0):
        stats["move_visits"][child.move] = child.visits
        stats["move_values"][child.move] = child.average_value

    stats["node_count"] = len(tree)
    stats["time_elapsed"] = time.perf_counter() - start_time
    stats["iterations_per_second"] = stats["iterations"] / max(0.001, stats["time_elapsed"])
    stats["average_simulation_steps"] = stats["total_simulation_steps"] / max(1, stats["iterations"])

    logger.debug(
        "MCTS chose %d after %d iterations in %.3fs (%d nodes, stopped by %s)",
        best_move, stats["iterations"], stats["time_elapsed"],
        stats["node_count"], stats["stopped_by"]
    )

    return best_move, stats, tree


def find_best_move(
    state: GameState,
    iterations: Optional[int] = None,
    time_limit: Optional[float] = None,
    config: Optional[MCTSConfig] = None,
    rng: Optional[random.Random] = None
) -> int:
    """
    Choose a move for the player to move in ``state``.

    The budget is given either through ``iterations``/``time_limit`` or a
    full ``config``; explicit budget arguments override the config's.

    Args:
        state: Current game state (left unchanged)
        iterations: Maximum number of iterations
        time_limit: Maximum search time in seconds
        config: MCTS configuration parameters
        rng: Random generator

    Returns:
        Square index, or NO_MOVE when no legal move exists
    """
    if config is None:
        if iterations is None and time_limit is None:
            config = MCTSConfig()
        else:
            config = MCTSConfig(iterations=iterations, time_limit=time_limit)
    elif iterations is not None or time_limit is not None:
        budget = {}
        if iterations is not None:
            budget["iterations"] = iterations
        if time_limit is not None:
            budget["time_limit"] = time_limit
        config = replace(config, **budget)

    move, _, _ = mcts_search(state, config, rng)
    return move


def select_node(tree: SearchTree) -> int:
    """
    Select a node for expansion or simulation.

    Starting at the root, repeatedly move to the child with the highest UCT
    score until reaching a node without children.

    Args:
        tree: Search tree

    Returns:
        Arena index of the selected node
    """
    index = 0
    while tree.node(index).has_children():
        index = tree.select_child(index)
    return index


def expand_node(tree: SearchTree, index: int) -> int:
    """
    Expand a node if it has been simulated and is not terminal.

    A node is only expanded after its own first playout. When it is expanded
    one of the new children is picked at random for simulation; otherwise the
    node itself is simulated.

    Args:
        tree: Search tree
        index: Arena index of the selected node

    Returns:
        Arena index of the node to simulate from
    """
    node = tree.node(index)
    if node.is_simulated() and not node.is_terminal():
        tree.expand(index)
        return tree.random_child(index)
    return index


def simulate_game(
    state: GameState,
    rng: Optional[random.Random] = None
) -> Tuple[Optional[Player], int]:
    """
    Run a random playout from a position to the end of the game.

    Args:
        state: Position to start from (left unchanged)
        rng: Random generator

    Returns:
        Tuple of (winning player or None for a draw, number of moves played)
    """
    # Clone the state to avoid modifying the tree
    playout = state.clone()
    winner = rules.winner(playout)

    steps = 0
    while winner is None:
        mover = playout.next_player
        if not rules.perform_random_move(playout, rng):
            break  # Draw: no legal move and nobody has won
        steps += 1

        # Only the player who just moved can have completed a line
        if rules.has_won(playout, mover):
            winner = mover

    return winner, steps


def outcome_rewards(winner: Optional[Player], config: MCTSConfig) -> Dict[Player, float]:
    """
    Convert a playout outcome into a reward for each player.

    Args:
        winner: Winning player, or None for a draw
        config: MCTS configuration parameters

    Returns:
        Dictionary mapping each player to its reward
    """
    if winner is None:
        return {player: config.draw_reward for player in Player}
    return {
        winner: config.win_reward,
        winner.opponent: config.loss_reward,
    }


def backpropagate(tree: SearchTree, index: int, rewards: Dict[Player, float]) -> None:
    """
    Update statistics from a node up to the root.

    Args:
        tree: Search tree
        index: Arena index of the simulated node
        rewards: Reward per player from the playout
    """
    for node in tree.path_to_root(index):
        node.update(rewards)


def count_nodes(tree: SearchTree, index: int = 0) -> int:
    """
    Count the nodes in the subtree rooted at ``index``.

    Args:
        tree: Search tree
        index: Arena index of the subtree root

    Returns:
        Total number of nodes
    """
    count = 0
    pending = [index]
    while pending:
        node = tree.node(pending.pop())
        count += 1
        pending.extend(node.children)
    return count


def get_principal_variation(tree: SearchTree, max_depth: int = 10) -> List[Tuple[int, float]]:
    """
    Get the principal variation (most visited path) from the root.

    This is useful for analysis and debugging.

    Args:
        tree: Search tree
        max_depth: Maximum depth to explore

    Returns:
        List of (square, average value) pairs along the principal variation
    """
    result = []
    index = 0

    while tree.node(index).has_children() and len(result) < max_depth:
        best = tree.best_child(index)
        result.append((best.move, best.average_value))
        index = best.index

    return result


def get_action_statistics(tree: SearchTree) -> Dict[int, Dict[str, float]]:
    """
    Get statistics for all moves from the root.

    Args:
        tree: Search tree

    Returns:
        Dictionary mapping squares to their statistics
    """
    root = tree.root
    result = {}

    for child in tree.children_of(0):
        result[child.move] = {
            "visits": child.visits,
            "reward": child.total_reward,
            "value": child.average_value,
            "exploration": tree.ucb_score(root, child) if child.visits > 0 else float('inf')
        }

    return result
