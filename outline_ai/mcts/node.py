"""
Monte Carlo Tree Search tree for Outline Four.

This module defines the MCTSNode class, which holds a position and its
simulation statistics, and the SearchTree class, which owns every node in a
flat list (a node arena). Parent and child links are indices into that list,
so a node never holds a reference to another node.
"""
from __future__ import annotations
from typing import Dict, Iterator, List, Optional
import math
import random

from outline_ai.core.constants import Player, NO_MOVE
from outline_ai.core.state import GameState
from outline_ai.core import rules
from outline_ai.mcts.config import MCTSConfig


class MCTSNode:
    """
    A node in the Monte Carlo Tree Search.

    Each node owns its own copy of a game state and tracks statistics about
    simulations that pass through it. Rewards are stored from the point of
    view of ``player``, the player who made the move leading to this node.
    """

    def __init__(
        self,
        index: int,
        state: GameState,
        parent: Optional[int] = None,
        move: Optional[int] = None,
    ):
        """
        Initialize an MCTS node.

        Args:
            index: Position of this node in the tree's arena
            state: The game state this node represents (owned by the node)
            parent: Arena index of the parent node (None for root)
            move: The square that led to this state (None for root)
        """
        self.index = index
        self.state = state
        self.parent = parent
        self.move = move

        # The player who moved into this position
        self.player = state.next_player.opponent

        # Node statistics
        self.visits = 0
        self.total_reward = 0.0
        self.children: List[int] = []

        self._terminal: Optional[bool] = None

    def is_terminal(self) -> bool:
        """
        Check if this node represents a finished game.

        Returns:
            True if the game is won or drawn, False otherwise
        """
        if self._terminal is None:
            self._terminal = rules.is_terminal(self.state)
        return self._terminal

    def is_simulated(self) -> bool:
        """A node may only be expanded after its own first playout."""
        return self.visits > 0

    def has_children(self) -> bool:
        return bool(self.children)

    @property
    def average_value(self) -> float:
        return self.total_reward / self.visits if self.visits else 0.0

    def update(self, rewards: Dict[Player, float]) -> None:
        """
        Update the node statistics with a simulation result.

        Args:
            rewards: Mapping of each player to the reward it earned in the playout
        """
        self.visits += 1
        self.total_reward += rewards[self.player]

    def __str__(self) -> str:
        return (f"MCTSNode(move={self.move}, "
                f"player={self.player.name}, "
                f"visits={self.visits}, "
                f"reward={self.total_reward:.2f}, "
                f"children={len(self.children)})")


class SearchTree:
    """
    Arena of MCTS nodes rooted at a copy of a game state.

    The tree is built and traversed by :mod:`outline_ai.mcts.search`.
    """

    def __init__(
        self,
        state: GameState,
        config: Optional[MCTSConfig] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Create a tree holding only the root.

        Args:
            state: Root position; the tree keeps its own copy
            config: MCTS configuration parameters
            rng: Random generator for expansion choices
        """
        self.config = config or MCTSConfig()
        self.rng = rng or random.Random()
        self.nodes: List[MCTSNode] = [MCTSNode(0, state.clone())]

    @property
    def root(self) -> MCTSNode:
        return self.nodes[0]

    def __len__(self) -> int:
        return len(self.nodes)

    def node(self, index: int) -> MCTSNode:
        return self.nodes[index]

    def children_of(self, index: int) -> List[MCTSNode]:
        return [self.nodes[child] for child in self.nodes[index].children]

    def parent_of(self, index: int) -> Optional[MCTSNode]:
        parent = self.nodes[index].parent
        return None if parent is None else self.nodes[parent]

    def add_child(self, parent_index: int, move: int) -> int:
        """
        Create a child by cloning the parent's state and applying ``move``.

        Args:
            parent_index: Arena index of the parent
            move: Legal square in the parent's position

        Returns:
            Arena index of the new child
        """
        parent = self.nodes[parent_index]
        state = parent.state.clone()
        applied = rules.apply_move(state, move)
        assert applied, f"Expansion generated illegal move {move}"

        child = MCTSNode(len(self.nodes), state, parent=parent_index, move=move)
        self.nodes.append(child)
        parent.children.append(child.index)
        return child.index

    def expand(self, index: int) -> List[int]:
        """
        Add one child per legal move of a node.

        Args:
            index: Arena index of the node to expand

        Returns:
            Arena indices of the new children, in ascending move order
        """
        node = self.nodes[index]
        assert not node.children, f"Node {index} is already expanded"

        moves = rules.available_moves(node.state)
        assert moves or node.is_terminal(), \
            f"Non-terminal node {index} has no legal moves"

        return [self.add_child(index, move) for move in moves]

    def ucb_score(self, parent: MCTSNode, child: MCTSNode) -> float:
        """
        Calculate the UCT score of a child node.

        UCT = average_reward + exploration_weight * sqrt(ln(parent_visits) / child_visits)

        Args:
            parent: Parent node
            child: Child node to score

        Returns:
            UCT score (infinite for unvisited children)
        """
        # Every child is tried once before any is revisited
        if child.visits == 0:
            return math.inf

        exploitation = child.total_reward / child.visits
        exploration = math.sqrt(math.log(parent.visits) / child.visits)
        return exploitation + self.config.exploration_weight * exploration

    def select_child(self, index: int) -> int:
        """
        Select the child with the highest UCT score.

        Args:
            index: Arena index of a node with children

        Returns:
            Arena index of the selected child
        """
        parent = self.nodes[index]
        if not parent.children:
            raise ValueError("Cannot select child from node with no children")
        return max(parent.children, key=lambda child: self.ucb_score(parent, self.nodes[child]))

    def random_child(self, index: int) -> int:
        return self.rng.choice(self.nodes[index].children)

    def best_child(self, index: int = 0) -> Optional[MCTSNode]:
        """
        Get the most visited child of a node.

        This is more robust than the highest average reward. Ties go to the
        earlier child, i.e. the lower square.
        """
        children = self.children_of(index)
        if not children:
            return None
        return max(children, key=lambda child: child.visits)

    def best_move(self) -> int:
        """
        Get the square leading to the root's most visited child.

        Returns:
            Square index, or NO_MOVE if the root has no children
        """
        best = self.best_child(0)
        return NO_MOVE if best is None else best.move

    def path_to_root(self, index: int) -> Iterator[MCTSNode]:
        """Yield a node and each of its ancestors up to the root."""
        current: Optional[int] = index
        while current is not None:
            node = self.nodes[current]
            yield node
            current = node.parent

    def depth(self, index: int) -> int:
        return sum(1 for _ in self.path_to_root(index)) - 1
