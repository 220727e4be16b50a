#!/usr/bin/env python3

"""
Calculate minimum cost assignment of square cost matrices.
"""

from __future__ import annotations

import sys
import argparse
import os
import os.path
import re
from typing import Optional, TextIO

from hungarian_method import (minimum_cost_assignment,
                              assignment_cost,
                              adjust_weights_for_maximum_weight_assignment)


def parse_int(s: str) -> int:
    """Convert a string to integer value.

    Only plain decimal integers with an optional minus sign are accepted.
    Python-specific forms such as "1_000" or "+5" are rejected.
    """
    if not re.fullmatch(r"-?[0-9]+", s):
        raise ValueError(f"Expecting integer but got {s!r}")
    return int(s)


def read_cost_matrix(f: TextIO) -> list[list[int]]:
    """Read a square cost matrix.

    The input consists of the matrix size "n", followed by n*n integers
    in row-major order. Numbers are separated by whitespace.
    """

    words = f.read().split()

    if not words:
        raise ValueError("Missing matrix size")

    num_vertex = parse_int(words[0])
    if num_vertex < 0:
        raise ValueError(f"Invalid matrix size {num_vertex}")

    num_cost = num_vertex * num_vertex
    if len(words) - 1 < num_cost:
        raise ValueError(f"Expecting {num_cost} costs"
                         f" but got only {len(words) - 1}")
    if len(words) - 1 > num_cost:
        raise ValueError(f"Unexpected data {words[1 + num_cost]!r}"
                         " after cost matrix")

    costs = [parse_int(s) for s in words[1:]]
    return [costs[v*num_vertex:(v+1)*num_vertex] for v in range(num_vertex)]


def read_cost_matrix_file(filename: str) -> list[list[int]]:
    """Read a cost matrix from file or stdin."""
    if filename:
        with open(filename, "r", encoding="ascii") as f:
            try:
                return read_cost_matrix(f)
            except ValueError as exc:
                raise ValueError(f"{exc} in {filename!r}") from None
    else:
        try:
            return read_cost_matrix(sys.stdin)
        except ValueError as exc:
            raise ValueError(f"{exc} in (stdin)") from None


def read_solution(f: TextIO) -> list[int]:
    """Read a solution: either a single cost, or a list of assigned
    columns."""
    return [parse_int(s) for s in f.read().split()]


def read_solution_file(filename: str) -> list[int]:
    """Read a solution from file."""
    with open(filename, "r", encoding="ascii") as f:
        try:
            return read_solution(f)
        except ValueError as exc:
            raise ValueError(f"{exc} in {filename!r}") from None


def write_solution(
        f: TextIO,
        cost: int,
        mate: list[int],
        match: bool
        ) -> None:
    """Write the assigned columns, or the total cost."""
    if match:
        print(*mate, file=f)
    else:
        print(cost, file=f)


def write_solution_file(
        filename: str,
        cost: int,
        mate: list[int],
        match: bool
        ) -> None:
    """Write a solution to file or stdout."""
    if filename:
        with open(filename, "x", encoding="ascii") as f:
            write_solution(f, cost, mate, match)
    else:
        write_solution(sys.stdout, cost, mate, match)


def solve(
        cost_matrix: list[list[int]],
        maximize: bool
        ) -> tuple[int, list[int]]:
    """Calculate an optimal assignment and its total cost."""

    if maximize:
        cost_adj = adjust_weights_for_maximum_weight_assignment(cost_matrix)
        mate = minimum_cost_assignment(cost_adj)
    else:
        mate = minimum_cost_assignment(cost_matrix)

    cost = assignment_cost(cost_matrix, mate)
    return (cost, mate)


def generate_solution(
        input_filename: str,
        output_filename: str,
        match: bool,
        maximize: bool
        ) -> None:
    """Calculate assignment of one instance."""

    cost_matrix = read_cost_matrix_file(input_filename)
    (cost, mate) = solve(cost_matrix, maximize)
    write_solution_file(output_filename, cost, mate, match)


def run_generate(
        filenames: list[str],
        outdir: Optional[str],
        match: bool,
        maximize: bool
        ) -> int:
    """Calculate assignment(s) and write output to disk or stdout."""

    if len(filenames) == 0:
        # Read from stdin; write to stdout.
        generate_solution("", "", match, maximize)

    elif not outdir:
        # Read from file, write to stdout.
        assert len(filenames) == 1
        generate_solution(filenames[0], "", match, maximize)

    else:
        # Read from file, write to file.
        for filename in filenames:
            output_filename = os.path.join(
                outdir,
                os.path.splitext(os.path.basename(filename))[0] + ".out")
            print(f"Processing {filename!r} -> {output_filename!r} ...",
                  end=" ")
            sys.stdout.flush()

            generate_solution(filename, output_filename, match, maximize)

            print(" OK")
            sys.stdout.flush()

    return 0


def verify_solution(filename: str, match: bool, maximize: bool) -> bool:
    """Verify assignment of one instance.

    The reference output file contains the total cost,
    or the assigned columns if "match" is set.
    """

    print("Verifying", repr(filename), "...", end=" ")
    sys.stdout.flush()

    solution_filename = os.path.splitext(filename)[0] + ".out"

    cost_matrix = read_cost_matrix_file(filename)
    gold_solution = read_solution_file(solution_filename)

    if match:
        try:
            gold_cost = assignment_cost(cost_matrix, gold_solution)
        except ValueError as exc:
            raise ValueError(f"{exc} in {solution_filename!r}") from None
    else:
        if len(gold_solution) != 1:
            raise ValueError(
                f"Expecting a single cost in {solution_filename!r}")
        gold_cost = gold_solution[0]

    (cost, _mate) = solve(cost_matrix, maximize)

    if cost != gold_cost:
        print(f"FAILED (got cost {cost}, expected {gold_cost})")
        return False

    print("OK")
    return True


def run_verify(filenames: list[str], match: bool, maximize: bool) -> int:
    """Verify assignment(s)."""

    num_passed = 0
    failed_tests: list[str] = []

    for filename in filenames:
        if verify_solution(filename, match, maximize):
            num_passed += 1
        else:
            failed_tests.append(filename)
        sys.stdout.flush()

    print("done.")
    print(num_passed, "tests passed")
    if failed_tests:
        print(len(failed_tests), "tests failed:")
        for filename in failed_tests:
            print("   ", filename, "FAILED")
    else:
        print("All tests passed")
    sys.stdout.flush()

    return 1 if failed_tests else 0


def main() -> int:
    """Main program."""

    parser = argparse.ArgumentParser()
    parser.description = (
        "Calculate minimum cost assignment of square cost matrices.")

    parser.add_argument("-m", "--match",
                        action="store_true",
                        help="output the assigned column of each row"
                             " instead of the total cost")
    parser.add_argument("--maximize",
                        action="store_true",
                        help="calculate maximum weight assignment")
    parser.add_argument("--verify",
                        action="store_true",
                        help="verify existing output file(s)")
    parser.add_argument("--outdir",
                        action="store",
                        type=str,
                        help="directory to write output")
    parser.add_argument("input",
                        nargs="*",
                        help="input file(s); leave empty to read from stdin")

    args = parser.parse_args()

    if (not args.input) and os.isatty(sys.stdin.fileno()):
        print("ERROR: Expecting input from stdin but stdin is a terminal",
              file=sys.stderr)
        print(file=sys.stderr)
        parser.print_help(sys.stderr)
        return 1

    if (not args.input) and args.verify:
        print("ERROR: Can not verify when reading from stdin",
              file=sys.stderr)
        return 1

    if len(args.input) > 1 and (not args.verify) and (not args.outdir):
        print("ERROR: Need --outdir or --verify to process multiple inputs",
              file=sys.stderr)
        return 1

    try:
        if args.verify:
            return run_verify(args.input, args.match, args.maximize)
        else:
            return run_generate(args.input, args.outdir, args.match,
                                args.maximize)
    except (OSError, ValueError) as exc:
        print("ERROR:", exc, file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
