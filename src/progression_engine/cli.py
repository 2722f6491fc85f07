"""Command-line preview of progression strategies.

Usage:
    python -m progression_engine.cli preview config.json --seed 100 --weeks 8
    python -m progression_engine.cli defaults linear
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from progression_engine.exceptions import MalformedInputError
from progression_engine.models.enums import STRATEGY_KINDS_BY_KEY
from progression_engine.models.strategy_config import DEFAULT_CONFIGS, STRATEGY_CATALOG
from progression_engine.projector import project, projection_frame
from progression_engine.serialization import config_to_json_string
from progression_engine.settings import (
    LOG_LEVEL,
    PREVIEW_SEED_WEIGHT,
    PREVIEW_WEEKS,
    WEIGHT_GRANULARITY,
)
from progression_engine.validation import ConfigError, validate_config

logger = logging.getLogger(__name__)


def _load_config(path: str) -> dict:
    """Load a strategy config from a JSON file."""
    with open(path) as f:
        return json.load(f)


def preview(args: argparse.Namespace) -> int:
    """Validate a config file and print its projected weeks."""
    try:
        raw = _load_config(args.config)
    except FileNotFoundError:
        logger.error("Config not found at %s", args.config)
        return 2
    except json.JSONDecodeError as exc:
        logger.error("Config at %s is not valid JSON: %s", args.config, exc)
        return 2

    try:
        result = validate_config(raw)
    except MalformedInputError as exc:
        logger.error("Malformed config: %s", exc)
        return 2

    if isinstance(result, list):
        _print_errors(result)
        return 1

    try:
        projection = project(result, args.seed, args.weeks, granularity=args.granularity)
    except ValueError as exc:
        logger.error("Cannot project: %s", exc)
        return 2
    logger.info(
        "Projecting %d weeks from %.1f at %.2f granularity",
        len(projection),
        args.seed,
        args.granularity,
    )
    frame = projection_frame(projection)
    if frame.empty:
        print("(empty projection)")
    else:
        print(frame.to_string(index=False))
    return 0


def defaults(args: argparse.Namespace) -> int:
    """Print the starter configuration for a strategy type."""
    kind = STRATEGY_KINDS_BY_KEY[args.type]
    print(config_to_json_string(DEFAULT_CONFIGS[kind]))
    return 0


def catalog(args: argparse.Namespace) -> int:
    """List the available strategies."""
    for info in STRATEGY_CATALOG:
        print(f"{info.label:<22} {info.description}")
    return 0


def _print_errors(errors: list[ConfigError]) -> None:
    print("Invalid progression config:", file=sys.stderr)
    for error in errors:
        print(f"  {error.path}: {error.reason}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Progression strategy preview")
    sub = parser.add_subparsers(dest="command", required=True)

    p_preview = sub.add_parser("preview", help="Project a strategy config forward")
    p_preview.add_argument("config", help="Path to a strategy config JSON file")
    p_preview.add_argument("--seed", type=float, default=PREVIEW_SEED_WEIGHT, help="Starting weight")
    p_preview.add_argument("--weeks", type=int, default=PREVIEW_WEEKS, help="Weeks to project")
    p_preview.add_argument(
        "--granularity",
        type=float,
        default=WEIGHT_GRANULARITY,
        help="Plate increment to round weights to",
    )
    p_preview.set_defaults(func=preview)

    p_defaults = sub.add_parser("defaults", help="Print a starter config")
    p_defaults.add_argument("type", choices=sorted(STRATEGY_KINDS_BY_KEY))
    p_defaults.set_defaults(func=defaults)

    p_catalog = sub.add_parser("catalog", help="List strategies")
    p_catalog.set_defaults(func=catalog)
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
