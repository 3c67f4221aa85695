"""
Command-line front end for Minefield.

Usage:
    minefield play [--rows R] [--cols C] [--mines M]
    minefield demo [--games N] [--delay S] [--seed X]
"""
import argparse
import logging
import sys
import time
from typing import Callable, Iterable, List, Optional, TextIO, Union

from .game.config import (
    DEFAULT_COLS,
    DEFAULT_HAZARDS,
    DEFAULT_ROWS,
    BoardConfig,
    GameConfig,
)
from .game.environment import MinefieldEnv
from .game.events import Intent, MarkIntent, RevealIntent, StartGame
from .game.session import GameSession
from .terminal import TerminalView

HELP_TEXT = (
    "Commands: r ROW COL (reveal), m ROW COL (mark), "
    "n (new game), q (quit)"
)


def parse_command(line: str) -> Optional[Union[Intent, str]]:
    """
    Parse one line of player input.

    Returns:
        An intent, "new", "quit", or None if the line is not understood.
    """
    parts = line.split()
    if not parts:
        return None
    verb = parts[0].lower()
    if verb in ("q", "quit"):
        return "quit"
    if verb in ("n", "new"):
        return "new"
    if verb in ("r", "m") and len(parts) == 3:
        try:
            row, col = int(parts[1]), int(parts[2])
        except ValueError:
            return None
        return RevealIntent(row, col) if verb == "r" else MarkIntent(row, col)
    return None


def play(
    rows: int,
    cols: int,
    mines: int,
    lines: Iterable[str],
    out: TextIO = sys.stdout,
    session: Optional[GameSession] = None,
) -> GameSession:
    """
    Run an interactive game reading commands from ``lines``.

    Args:
        rows: Requested rows (clamped).
        cols: Requested columns (clamped).
        mines: Requested hazard count (clamped).
        lines: Source of player commands, e.g. ``sys.stdin``.
        out: Where the board is printed.
        session: Session to drive (default: a new one).

    Returns:
        The session, in whatever phase play stopped.
    """
    session = session or GameSession()
    view = TerminalView(session)
    start = StartGame(rows, cols, mines)
    session.dispatch(start)

    print(view.render(), file=out)
    print(HELP_TEXT, file=out)
    for line in lines:
        command = parse_command(line)
        if command == "quit":
            break
        if command == "new":
            session.dispatch(start)
        elif command is None:
            print(HELP_TEXT, file=out)
            continue
        else:
            session.dispatch(command)
        print(view.render(), file=out)

    view.close()
    return session


def demo(
    games: int = 5,
    delay: float = 0.3,
    seed: Optional[int] = None,
    config: Optional[BoardConfig] = None,
    echo: Callable[[str], None] = print,
) -> int:
    """
    Let a random player reveal masked hidden cells until each game ends.

    Returns:
        Number of games won.
    """
    env = MinefieldEnv(config=config, render_mode="ansi")
    env.action_space.seed(seed)
    wins = 0

    for game in range(games):
        env.reset(seed=None if seed is None else seed + game)
        done = False
        step = 0
        while not done:
            action = env.action_space.sample(mask=env.get_action_mask())
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            echo(f"=== Game {game + 1}/{games} | Step {step} ===")
            echo(env.render())
            if delay:
                time.sleep(delay)

        if info["phase"] == "WON":
            wins += 1
            echo("*** WIN! ***")
        else:
            echo("*** LOST (hit mine) ***")

    echo(f"=== Final: {wins}/{games} wins ===")
    return wins


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minefield - clear the board without hitting a mine"
    )
    parser.add_argument(
        "--log-level", default="WARNING", help="Logging level (e.g. DEBUG)"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument("--rows", default=DEFAULT_ROWS, help="Board rows")
    play_parser.add_argument("--cols", default=DEFAULT_COLS, help="Board columns")
    play_parser.add_argument(
        "--mines", default=DEFAULT_HAZARDS, help="Number of mines"
    )

    demo_parser = subparsers.add_parser("demo", help="Watch a random player")
    demo_parser.add_argument("--games", type=int, default=5, help="Games to play")
    demo_parser.add_argument(
        "--delay", type=float, default=0.3, help="Delay between moves"
    )
    demo_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    demo_parser.add_argument("--rows", type=int, default=DEFAULT_ROWS)
    demo_parser.add_argument("--cols", type=int, default=DEFAULT_COLS)
    demo_parser.add_argument("--mines", type=int, default=DEFAULT_HAZARDS)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "play":
        play(args.rows, args.cols, args.mines, sys.stdin)
    elif args.command == "demo":
        config = GameConfig.from_raw(args.rows, args.cols, args.mines)
        demo(args.games, args.delay, args.seed, config)
    else:
        parser.print_help()
