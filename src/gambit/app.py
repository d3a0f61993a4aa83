"""Command-line entry point: watch the engine play itself."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from gambit.core.board import Board
from gambit.core.notation import board_from_fen
from gambit.engine.config import EngineConfig
from gambit.engine.minimax import MinimaxEngine
from gambit.game.controller import Game
from gambit.game.player import ComputerPlayer

_LOGGER = logging.getLogger(__name__)


class _ConsoleReporter:
    """Prints each new status line and counts the turns handed out."""

    def __init__(self, max_plies: int | None) -> None:
        self._last_status = ""
        self._max_plies = max_plies
        self.turns = 0

    def on_game_event(self, game: Game) -> None:
        status = game.status
        if status == self._last_status:
            return
        self._last_status = status
        print(status, flush=True)
        if status.endswith("'s turn."):
            self.turns += 1
            # The first turn status comes before any move has been played.
            if self._max_plies is not None and self.turns > self._max_plies:
                game.end("Move limit reached.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gambit",
        description="Play the minimax engine against itself.",
    )
    parser.add_argument("--fen", help="start from this position instead of the standard one")
    parser.add_argument("--preset", default="light", help="engine preset (default, light, strong)")
    parser.add_argument("--config", help="TOML file with an [engine] table")
    parser.add_argument("--depth", type=int, help="override the search depth")
    parser.add_argument("--max-plies", type=int, default=80, help="stop after this many plies")
    parser.add_argument("--log-level", default="WARNING", help="logging level, e.g. INFO or DEBUG")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run a computer-vs-computer game and print the result."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = (
            EngineConfig.from_toml(args.config)
            if args.config
            else EngineConfig.preset(args.preset)
        )
        if args.depth is not None:
            config = replace(config, depth=args.depth)
        board = board_from_fen(args.fen) if args.fen else Board.initial()
    except (OSError, ValueError) as exc:
        _LOGGER.error("Invalid setup: %s", exc)
        return 2

    reporter = _ConsoleReporter(args.max_plies)
    with Game(
        board,
        ComputerPlayer(MinimaxEngine(config), "White engine"),
        ComputerPlayer(MinimaxEngine(config), "Black engine"),
    ) as game:
        game.add_listener(reporter)
        game.begin()
        game.wait()
        print(repr(game.board_snapshot()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
