"""
Agent-versus-agent matches for Outline Four.

Plays a series of games between two agents, alternating who moves first,
and reports wins, losses, draws and game lengths.

Example usage:
    outline-arena --games 50 --agent-a mcts --agent-b random --iterations 300
"""
import argparse
import logging
import time
from collections import defaultdict
from typing import Any, Dict, Optional

from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from outline_ai.core.constants import Player
from outline_ai.core.game import Game
from outline_ai.logging_setup import setup_logging
from outline_ai.mcts.agent import MCTSAgent, RandomAgent
from outline_ai.mcts.config import MCTSConfig

logger = logging.getLogger(__name__)


def create_agent(kind: str, name: str, config: Optional[MCTSConfig] = None, seed: Optional[int] = None):
    """Create an agent by kind ("mcts" or "random")."""
    if kind == "mcts":
        return MCTSAgent(config=config, name=name, seed=seed)
    if kind == "random":
        return RandomAgent(name=name, seed=seed)
    raise ValueError(f"Unknown agent type: {kind}")


def play_match(
    agent_a,
    agent_b,
    num_games: int = 10,
    show_progress: bool = True
) -> Dict[str, Any]:
    """
    Play a series of games between two agents.

    Agent A plays BLUE in even-numbered games and PINK in odd-numbered
    games; BLUE always moves first. Randomness comes only from the agents, so
    seeding the agents makes a match reproducible.

    Args:
        agent_a: First agent (anything with ``select_move(state)``)
        agent_b: Second agent
        num_games: Number of games to play
        show_progress: Whether to show a progress bar

    Returns:
        Dictionary of match statistics
    """
    results = defaultdict(int)
    total_moves = 0
    start_time = time.time()

    for game_index in tqdm(range(num_games), desc="Games", disable=not show_progress):
        game = Game(starting_player=Player.BLUE)

        seats = {Player.BLUE: agent_a, Player.PINK: agent_b}
        if game_index % 2 == 1:
            seats = {Player.BLUE: agent_b, Player.PINK: agent_a}
        for player, agent in seats.items():
            game.register_agent(player, agent.select_move)

        game.run_game()
        total_moves += len(game.history)

        if game.winner is None:
            results["draws"] += 1
        elif seats[game.winner] is agent_a:
            results["a_wins"] += 1
        else:
            results["b_wins"] += 1
        logger.debug("Game %d finished: %s", game_index, game)

    elapsed = time.time() - start_time
    return {
        "games": num_games,
        "a_wins": results["a_wins"],
        "b_wins": results["b_wins"],
        "draws": results["draws"],
        "a_win_rate": results["a_wins"] / max(1, num_games),
        "average_moves": total_moves / max(1, num_games),
        "elapsed_time": elapsed,
    }


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Play Outline Four agents against each other")
    parser.add_argument("--games", type=int, default=10, help="Number of games")
    parser.add_argument("--agent-a", type=str, default="mcts", choices=["mcts", "random"])
    parser.add_argument("--agent-b", type=str, default="random", choices=["mcts", "random"])
    parser.add_argument("--iterations", type=int, default=300,
                        help="MCTS iterations per move")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--log-level", type=str, default="WARNING")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    config = MCTSConfig(iterations=args.iterations)
    seed_b = None if args.seed is None else args.seed + 1
    agent_a = create_agent(args.agent_a, f"A ({args.agent_a})", config, args.seed)
    agent_b = create_agent(args.agent_b, f"B ({args.agent_b})", config, seed_b)

    stats = play_match(agent_a, agent_b, num_games=args.games)

    table = Table(title="Match Summary")
    table.add_column("Statistic")
    table.add_column("Value", justify="right")
    table.add_row("Games", str(stats["games"]))
    table.add_row(f"{agent_a.name} wins", str(stats["a_wins"]))
    table.add_row(f"{agent_b.name} wins", str(stats["b_wins"]))
    table.add_row("Draws", str(stats["draws"]))
    table.add_row("Average moves", f"{stats['average_moves']:.1f}")
    table.add_row("Duration", f"{stats['elapsed_time']:.2f}s")
    Console().print(table)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
