"""Command-line tools for running the rules engine headless."""

from __future__ import annotations

import argparse
import json
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grid-snake",
        description="Grid Snake rules engine tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play a scripted game and print the final state.",
    )
    sim_p.add_argument(
        "--moves", type=str, default="",
        help="Comma-separated directions, e.g. 'r,r,u,left,ArrowDown'.",
    )
    sim_p.add_argument(
        "--ticks-per-move", type=int, default=1,
        help="Ticks advanced after each direction request.",
    )
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )

    # --- init-config ---
    init_p = sub.add_parser(
        "init-config", help="Write the default config to a JSON file.",
    )
    init_p.add_argument("path", help="Destination file.")

    return parser


def _run_simulate(args: argparse.Namespace) -> int:
    from grid_snake.config import GameConfig
    from grid_snake.controls import parse_direction
    from grid_snake.engine import GameEngine

    config = GameConfig.load(args.config) if args.config else GameConfig()
    engine = GameEngine(config=config, seed=args.seed)

    for token in filter(None, (m.strip() for m in args.moves.split(","))):
        direction = parse_direction(token)
        if direction is None:
            logger.error("Unknown move '%s'.", token)
            return 2
        engine.request_direction_change(direction)
        for _ in range(args.ticks_per_move):
            engine.advance_tick()
        if engine.state.is_game_over:
            break

    print(json.dumps(engine.get_state(), indent=2))  # noqa: T201
    return 0


def _run_init_config(args: argparse.Namespace) -> int:
    from grid_snake.config import GameConfig

    GameConfig().save(args.path)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``grid-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "init-config": _run_init_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
