"""
Command-line entry point.

    python -m endless_runner --preset frantic --assets ./assets
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from .app import run
from .config import CONFIGS


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="endless-runner", description="Side-scrolling endless runner")
    parser.add_argument("--preset", choices=sorted(CONFIGS), default="default",
                        help="Named configuration preset")
    parser.add_argument("--assets", default=None,
                        help="Sprite directory (placeholder sprites if omitted)")
    parser.add_argument("--seed", type=int, default=None, help="Obstacle spawn seed")
    parser.add_argument("--debug", action="store_true", help="Draw collision boxes")
    parser.add_argument("--verbose", action="store_true", help="Debug-level logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    config = CONFIGS[args.preset]
    if args.debug:
        config = replace(config, debug=True)

    logging.getLogger(__name__).info("Starting with preset '%s'", args.preset)
    return run(config, asset_dir=args.assets, seed=args.seed)


if __name__ == "__main__":
    sys.exit(main())
