#!/usr/bin/env python3

"""
Generate a random square cost matrix.
"""

from __future__ import annotations

import sys
import argparse
import random
from typing import TextIO


def write_cost_matrix(f: TextIO, cost: list[list[int]]) -> None:
    """Write a cost matrix: size on the first line, then one row per line."""

    print(len(cost), file=f)
    for row in cost:
        print(*row, file=f)


def make_random_matrix(
        n: int,
        max_cost: int,
        rng: random.Random
        ) -> list[list[int]]:
    """Generate a square matrix with random costs in range 0 .. max_cost."""
    return [[rng.randint(0, max_cost) for _u in range(n)] for _v in range(n)]


def main() -> int:
    """Main program."""

    parser = argparse.ArgumentParser()
    parser.description = "Generate a random square cost matrix."

    parser.add_argument("--seed",
                        action="store",
                        type=int,
                        help="random seed")
    parser.add_argument("--maxcost",
                        action="store",
                        type=int,
                        default=1000000,
                        help="maximum cost")
    parser.add_argument("n",
                        action="store",
                        type=int,
                        help="number of rows and columns")

    args = parser.parse_args()

    if args.n < 0:
        print("ERROR: Matrix size must be >= 0", file=sys.stderr)
        return 1

    if args.maxcost < 0:
        print("ERROR: Maximum cost must be >= 0", file=sys.stderr)
        return 1

    if args.seed is None:
        rng = random.Random()
    else:
        rng = random.Random(args.seed)

    cost = make_random_matrix(args.n, args.maxcost, rng)
    write_cost_matrix(sys.stdout, cost)

    return 0


if __name__ == "__main__":
    sys.exit(main())
