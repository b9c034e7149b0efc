import argparse
import logging
import sys

from fibregs.config import MODES, RunConfig
from fibregs.driver import DriverError, load_driver
from fibregs.sequence import SequenceError, check_count, check_seed, register_mask

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="fibregs",
        description="Print the Fibonacci sequence from 8-bit style registers.",
    )
    parser.add_argument("source", nargs="?",
                        help="C driver file whose main() selects the generator")
    parser.add_argument("--mode", choices=MODES, help="Generator to run (default: iterative)")
    parser.add_argument("--count", type=int, help="Number of values for the iterative generator")
    parser.add_argument("--seed", type=int, nargs=2, metavar=("A", "B"),
                        help="Starting pair for the recursive generator")
    parser.add_argument("--limit", type=int, help="Recursive generator stops after a value above this")
    width = parser.add_mutually_exclusive_group()
    width.add_argument("--width", type=int, help="Register width in bits (default: 8)")
    width.add_argument("--unbounded", action="store_true", help="Use unbounded integers")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    return parser


def config_from_args(parser, args):
    """Combine driver file defaults with command line overrides."""
    config = load_driver(args.source) if args.source else RunConfig()

    changes = {}
    if args.mode is not None:
        changes["mode"] = args.mode
    if args.count is not None:
        if args.count < 0:
            parser.error(f"--count must be non-negative, got {args.count}")
        changes["count"] = args.count
    if args.limit is not None:
        changes["limit"] = args.limit
    if args.unbounded:
        changes["width"] = None
    elif args.width is not None:
        changes["width"] = args.width
    if args.seed is not None:
        changes["seed"] = tuple(args.seed)
    config = config.replace(**changes)

    try:
        register_mask(config.width)
        check_seed(config.seed, config.width)
        check_count(config.count)
    except SequenceError as exc:
        parser.error(str(exc))
    return config


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = config_from_args(parser, args)
        logger.info("Running %s generator", config.mode)
        produced = 0
        for line in config.lines():
            print(line)
            produced += 1
    except (DriverError, SequenceError) as exc:
        logger.error("%s", exc)
        return 1
    logger.info("Produced %d values", produced)
    return 0


if __name__ == '__main__':
    sys.exit(main())
