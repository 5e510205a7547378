"""Command-line entry point for Smooth Snake."""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger(__name__)

# CLI flag -> GameConfig field.
_CONFIG_FLAGS = {
    "dimension": "dimension",
    "seed": "seed",
    "speed": "squares_per_second",
    "speed_up": "speed_up",
    "super_food_probability": "super_food_probability",
}


def _add_config_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override it).",
    )
    parser.add_argument("--dimension", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--speed", type=float, default=None,
        help="Starting speed in cells per second.",
    )
    parser.add_argument("--speed-up", type=float, default=None)
    parser.add_argument(
        "--super-food-probability", type=float, default=None,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smooth-snake",
        description="Smooth Snake headless simulation and config tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Run a headless game and print a summary.",
    )
    _add_config_flags(sim_p)
    sim_p.add_argument("--max-frames", type=int, default=100_000)
    sim_p.add_argument(
        "--frame-ms", type=float, default=1000 / 60,
        help="Synthetic time between frames, in milliseconds.",
    )
    sim_p.add_argument(
        "--manual", action="store_true",
        help="Leave autoplay off; the snake runs straight into a wall.",
    )

    # --- config ---
    cfg_p = sub.add_parser("config", help="Write a config JSON file.")
    cfg_p.add_argument("output", help="Path for the config file.")
    _add_config_flags(cfg_p)

    return parser


def _resolve_config(args: argparse.Namespace):
    from smooth_snake.config import GameConfig

    config = GameConfig.load(args.config) if args.config else GameConfig()
    overrides = {
        field: getattr(args, flag)
        for flag, field in _CONFIG_FLAGS.items()
        if getattr(args, flag, None) is not None
    }
    if overrides:
        config = config.with_overrides(**overrides)
    return config


def _run_simulate(args: argparse.Namespace) -> int:
    from smooth_snake.simulate import run_simulation

    result = run_simulation(
        _resolve_config(args),
        autoplay=not args.manual,
        frame_ms=args.frame_ms,
        max_frames=args.max_frames,
    )
    print(result.summary())  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    config = _resolve_config(args)
    config.save(args.output)
    print(f"Wrote config to {args.output}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``smooth-snake`` CLI."""
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
        "config": _run_config,
    }
    try:
        return handlers[args.command](args)
    except (ValueError, OSError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
