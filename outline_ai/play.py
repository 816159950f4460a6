"""
Interactive Outline Four game for playing against the MCTS agent.

Example usage:
    # Play blue against a 2000-iteration agent
    outline-play --human blue --iterations 2000

    # Let the agent think for one second per move
    outline-play --human pink --time-limit 1.0

    # Watch two agents play each other
    outline-play --human none --seed 7
"""
import argparse
import logging
from typing import Optional

from rich.console import Console
from rich.prompt import Prompt

from outline_ai.core.constants import Player, GameResult, NO_MOVE, PLAYER_DISPLAY_NAMES
from outline_ai.core.display import render_board
from outline_ai.core.game import Game
from outline_ai.core import rules
from outline_ai.logging_setup import setup_logging
from outline_ai.mcts.agent import MCTSAgent
from outline_ai.mcts.config import MCTSConfig

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command-line arguments for game configuration."""
    parser = argparse.ArgumentParser(description="Play Outline Four against an MCTS agent")

    parser.add_argument("--human", type=str, default="blue",
                        choices=["blue", "pink", "none"],
                        help="Colour played by the human (none = agent vs agent)")
    parser.add_argument("--first", type=str, default="blue",
                        choices=["blue", "pink"],
                        help="Colour that moves first")

    # Agent configuration
    parser.add_argument("--iterations", type=int, default=None,
                        help="MCTS iterations per move")
    parser.add_argument("--time-limit", type=float, default=None,
                        help="MCTS thinking time per move in seconds")
    parser.add_argument("--exploration", type=float, default=None,
                        help="UCT exploration weight")

    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        help="Logging level (DEBUG, INFO, WARNING, ...)")

    return parser.parse_args(argv)


def build_config(args) -> MCTSConfig:
    """Build the agent configuration from the command line."""
    params = {}
    if args.iterations is not None or args.time_limit is not None:
        params["iterations"] = args.iterations
        params["time_limit"] = args.time_limit
    if args.exploration is not None:
        params["exploration_weight"] = args.exploration
    return MCTSConfig(**params)


def get_human_move(console: Console, game: Game) -> Optional[int]:
    """
    Ask the human for a square until a legal one is entered.

    Returns:
        The square played, or None if the human quit
    """
    while True:
        answer = Prompt.ask(
            f"{PLAYER_DISPLAY_NAMES[game.current_player]} to move, square (q to quit)",
            console=console
        ).strip().lower()

        if answer in ("q", "quit", "exit"):
            return None

        try:
            square = int(answer)
        except ValueError:
            console.print("[red]Invalid input. Please enter a square number.[/red]")
            continue

        if game.play(square):
            return square

        legal = rules.available_moves(game.state)
        console.print(f"[red]Square {square} cannot be played. Legal squares: {legal}[/red]")


def announce_result(console: Console, game: Game) -> None:
    if game.result == GameResult.WINNER:
        console.print(f"[bold]{PLAYER_DISPLAY_NAMES[game.winner]} wins![/bold]")
    else:
        console.print("[bold]Draw: no legal move left.[/bold]")


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    console = Console()
    humans = set() if args.human == "none" else {Player[args.human.upper()]}

    game = Game(starting_player=Player[args.first.upper()], random_seed=args.seed)
    config = build_config(args)
    agents = {
        player: MCTSAgent(config=config, name=f"MCTS {PLAYER_DISPLAY_NAMES[player]}",
                          verbose=True, seed=None if args.seed is None else args.seed + player.value)
        for player in Player if player not in humans
    }
    logger.info("Starting game with %s", config)

    while not game.game_over:
        console.print(render_board(game.state, highlight=rules.legal_move_mask(game.state)))
        player = game.current_player

        if player in humans:
            if get_human_move(console, game) is None:
                console.print("Game abandoned.")
                return 1
            continue

        with console.status(f"{agents[player].name} is thinking..."):
            move = agents[player].select_move(game.state)

        if move == NO_MOVE:
            break
        game.play(move)
        console.print(f"{agents[player].name} plays [bold]{move}[/bold]")

    console.print(render_board(game.state))
    announce_result(console, game)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
