#!/usr/bin/env python3

"""
Generate a cost matrix that belongs to a class of difficult instances
described by Machol and Wien.

Reference: R. E. Machol, M. Wien, "A hard assignment problem",
           Operations Research 24 (1976), pp. 190-192.

Output to stdout: matrix size on the first line, followed by one row
per line.

Input parameter:    N
Cost of row I, column J (1 <= I, J <= N): I * J

Every row and every column is a multiple of the first one, so a large
number of assignments have nearly the same cost.
"""

import sys
import argparse


def main():
    """Main program."""

    parser = argparse.ArgumentParser()
    parser.description = "Generate a difficult cost matrix"

    parser.add_argument("n",
                        action="store",
                        type=int,
                        help="number of rows and columns")
    args = parser.parse_args()

    if args.n < 1:
        print("ERROR: N must be at least 1", file=sys.stderr)
        sys.exit(1)

    n = args.n

    print(n)

    for i in range(1, n + 1):
        print(*(i * j for j in range(1, n + 1)))


if __name__ == "__main__":
    main()
