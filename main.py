from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from network import network_to_script, random_layered_network
from shell import Interpreter
from utils import setup_logger

logger = logging.getLogger(__name__)


def get_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Exact inference over boolean Bayes networks",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Scripts / shell
    parser.add_argument(
        "files",
        nargs="*",
        help="Script files executed in order before the interactive shell starts.",
    )
    parser.add_argument(
        "--batch",
        action="store_true",
        help="Exit after running the script files instead of reading stdin.",
    )
    parser.add_argument(
        "--quiet-prompt",
        action="store_true",
        help="Do not print the '> ' prompt when reading stdin.",
    )

    # Random network generation
    parser.add_argument(
        "--generate",
        action="store_true",
        help="Print a random layered network as a script and exit.",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=9,
        help="Number of layers of the generated network.",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=8,
        help="Maximum layer width of the generated network (at least 4 nodes per layer).",
    )
    parser.add_argument(
        "--edges",
        type=int,
        default=200,
        help="Number of arc insertions attempted for the generated network.",
    )
    parser.add_argument(
        "--probability",
        type=float,
        default=0.5,
        help="Probability of every generated node. Negative draws each uniformly.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for --generate.",
    )

    # Logging
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for the network and shell loggers.",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional file to copy log records to.",
    )

    args = parser.parse_args(argv)
    return args


def main(argv: Optional[list[str]] = None) -> int:
    args = get_args(argv)
    setup_logger(args.log_level, args.log_file)

    if args.generate:
        bn = random_layered_network(
            depth=args.depth,
            width=args.width,
            edges=args.edges,
            probability=None if args.probability < 0 else args.probability,
            seed=args.seed,
        )
        sys.stdout.write(network_to_script(bn))
        return 0

    shell = Interpreter()

    for path in args.files:
        logger.debug(f"Running script {path}")
        try:
            keep_going = shell.run_file(path)
        except FileNotFoundError:
            shell.error(f"File \"{path}\" not found.")
            return 1
        if not keep_going:
            return 0

    if args.batch:
        return 0

    prompt = None if args.quiet_prompt else "> "
    if shell.run(sys.stdin, prompt=prompt):
        # end of input without `quit`
        shell.out.write("\n")
    print("Bye!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
