"""
modgraph CLI

Entry point: argument parsing and dispatch only.
All command logic lives in cli.handlers.
"""

import argparse
import sys

from cli.wiring import build_parser, dispatch_command
from modgraph import __version__


def _build_parser() -> argparse.ArgumentParser:
    return build_parser(version=__version__)


def main(argv=None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    return dispatch_command(parser, args)


if __name__ == "__main__":
    sys.exit(main())
