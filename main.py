import sys
import json
import logging
import argparse

from gridpath.adapter import ALGORITHMS, run_algorithm
from gridpath.config import DEFAULT_ALGORITHM, LOG_FORMAT
from gridpath.grid import GridError, load_world

logger = logging.getLogger("gridpath")


def build_parser():
    ap = argparse.ArgumentParser(
        description="Grid pathfinding: query a world file or open the interactive demo."
    )
    ap.add_argument('--world', default=None, help='JSON world file (default: packaged default map)')
    ap.add_argument('--start', type=int, nargs=2, metavar=('X', 'Y'), help='Start cell')
    ap.add_argument('--goal', type=int, nargs=2, metavar=('X', 'Y'), help='Goal cell')
    ap.add_argument('--algorithm', default=DEFAULT_ALGORITHM, choices=sorted(ALGORITHMS))
    ap.add_argument('--verbose', action='store_true', help='Enable debug logging')
    return ap


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if (args.start is None) != (args.goal is None):
        parser.error("--start and --goal must be given together")
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO, format=LOG_FORMAT
    )
    try:
        grid, start, goal = load_world(args.world)
    except GridError as e:
        logger.error("%s", e)
        return 2

    if args.start is None or args.goal is None:
        # Interactive mode; imported here so headless queries never load pygame
        from gridpath.demo import Demo, GridEditor

        Demo(GridEditor.from_grid(grid, start, goal)).run()
        return 0

    result = run_algorithm(args.algorithm, grid, tuple(args.start), tuple(args.goal))
    print(json.dumps(result.to_dict()))
    return 0 if result.found else 1


if __name__ == "__main__":
    sys.exit(main())
