#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved

"""
Zone planner tool

Compute the subnet layout of a cluster VPC from the install configuration
and a snapshot of the region metadata
"""

import argparse
import logging
import sys

from . import cli
from .common.errors import PlanningError

logger = logging.getLogger(__name__)


def _main(argv):
    running_cli = cli.CLI()

    parser = argparse.ArgumentParser(prog='zoneplan', description=__doc__)
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')

    running_cli.build_parser(parser)

    args = parser.parse_args(argv)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG if args.verbose else logging.INFO)
    root.addHandler(logging.StreamHandler(sys.stderr))

    try:
        rv = running_cli(args)
    except PlanningError as e:
        logger.error(str(e))
        return 1

    if rv is None:
        return 0
    elif isinstance(rv, int):
        return rv
    return 0


def main():
    sys.exit(_main(sys.argv[1:]))


if __name__ == "__main__":
    main()
