"""
Algorithm for finding a minimum cost assignment in a square cost matrix.
"""

from __future__ import annotations

import math
from typing import NamedTuple


class AssignmentError(Exception):
    """Raised when a computed assignment fails verification."""


class AssignmentSolution(NamedTuple):
    """Represents the solution of an assignment problem.

    "mate[v]" is the column assigned to row "v".

    "cost" is the total cost of the assignment, summed over matched entries
    of the cost matrix. "dual_cost" is the same value obtained from the
    dual variables. Both are always equal for an optimal assignment.

    "row_dual_2x" and "col_dual_2x" are 2 times the dual variables
    (potentials) of the rows and columns.
    """
    mate: list[int]
    cost: int
    dual_cost: int
    row_dual_2x: list[int]
    col_dual_2x: list[int]


def minimum_cost_assignment(cost: list[list[int]]) -> list[int]:
    """Compute a minimum-cost assignment of rows to columns in the square
    cost matrix "cost".

    The cost matrix is specified as a list of rows, each row a list of
    integers. All rows must have the same length as the number of rows.
    Costs may be any integers, including negative values.

    Every row is assigned to exactly one column and every column is
    assigned to exactly one row. Among all such assignments, the result
    has minimum total cost. If there are multiple optimal assignments,
    any one of them may be returned.

    This function takes time O(n**3), where "n" is the number of rows.
    This function uses O(n**2) memory.

    Parameters:
        cost: Square cost matrix as a list of lists of integers.
            "cost[v][u]" is the cost of assigning row "v" to column "u".

    Returns:
        List "mate" of column indices, where "mate[v]" is the column
        assigned to row "v".

    Raises:
        ValueError: If the input does not satisfy the constraints.
        TypeError: If the input contains invalid data types.
    """
    return solve_assignment(cost).mate


def solve_assignment(cost: list[list[int]]) -> AssignmentSolution:
    """Compute a minimum-cost assignment and return it together with
    its cost and the dual variables that certify its optimality.

    See "minimum_cost_assignment()" for a description of the input.

    This function takes time O(n**3), where "n" is the number of rows.

    Returns:
        AssignmentSolution tuple.

    Raises:
        ValueError: If the input does not satisfy the constraints.
        TypeError: If the input contains invalid data types.
    """

    # Check that the input meets all constraints.
    _check_input_types(cost)
    _check_input_matrix(cost)

    # Initialize the assignment algorithm.
    ctx = _AssignmentContext(cost)

    # Each stage extends the assignment by one row.
    #
    # This loop runs through exactly "n" iterations.
    # Each iteration takes time O(n**2).
    for _stage in range(ctx.num_vertex):
        ctx.run_stage()

    # Verify that the assignment is optimal.
    # Verification is a redundant step; if the assignment algorithm is
    # correct, verification will always pass.
    _verify_optimum(ctx)

    # Undo the doubling of the costs.
    # Since all input costs are integers, both sums are even.
    cost_2x = sum(ctx.cost_2x[v][ctx.row_mate[v]]
                  for v in range(ctx.num_vertex))
    dual_cost_2x = sum(ctx.row_dual_2x) + sum(ctx.col_dual_2x)

    return AssignmentSolution(
        mate=ctx.row_mate.copy(),
        cost=cost_2x // 2,
        dual_cost=dual_cost_2x // 2,
        row_dual_2x=ctx.row_dual_2x.copy(),
        col_dual_2x=ctx.col_dual_2x.copy())


def assignment_cost(cost: list[list[int]], mate: list[int]) -> int:
    """Verify that "mate" is a valid assignment and calculate its cost.

    Parameters:
        cost: Square cost matrix as a list of lists of integers.
        mate: List of column indices, one per row.

    Returns:
        Total cost of the assignment.

    Raises:
        ValueError: If "mate" is not a permutation of the columns.
    """

    num_vertex = len(cost)

    if len(mate) != num_vertex:
        raise ValueError(
            f"Expecting {num_vertex} assigned columns but got {len(mate)}")

    columns_used: set[int] = set()
    for (v, u) in enumerate(mate):
        if (not isinstance(u, int)) or (u < 0) or (u >= num_vertex):
            raise ValueError(f"Invalid column index {u!r} for row {v}")
        if u in columns_used:
            raise ValueError(f"Assignment uses column {u} twice")
        columns_used.add(u)

    return sum(cost[v][u] for (v, u) in enumerate(mate))


def adjust_weights_for_maximum_weight_assignment(
        weights: list[list[int]]
        ) -> list[list[int]]:
    """Transform a weight matrix such that the minimum-cost assignment
    of the transformed matrix is a maximum-weight assignment of the
    original matrix.

    Each weight "w" is replaced by "max_weight - w", where "max_weight" is
    the largest weight in the matrix. Every assignment contains exactly one
    entry from each row, therefore this shifts the total cost of every
    assignment by the same amount and reverses their order.

    This function takes time O(n**2).

    Parameters:
        weights: Square weight matrix as a list of lists of integers.

    Returns:
        Square cost matrix with non-negative entries.

    Raises:
        ValueError: If the input does not satisfy the constraints.
        TypeError: If the input contains invalid data types.
    """

    _check_input_types(weights)
    _check_input_matrix(weights)

    # Don't worry about empty matrices.
    if not weights:
        return []

    max_weight = max(max(row) for row in weights)
    return [[max_weight - w for w in row] for row in weights]


def _check_input_types(cost: list[list[int]]) -> None:
    """Check that the input consists of valid data types.

    This function takes time O(n**2).

    Raises:
        TypeError: If the input contains invalid data types.
    """

    if not isinstance(cost, list):
        raise TypeError('"cost" must be a list of rows')

    for row in cost:
        if not isinstance(row, list):
            raise TypeError("Each row must be specified as a list")

        for c in row:
            if isinstance(c, bool) or (not isinstance(c, int)):
                raise TypeError("Costs must be integers")


def _check_input_matrix(cost: list[list[int]]) -> None:
    """Check that the input is a square matrix.

    Raises:
        ValueError: If the input does not satisfy the constraints.
    """

    num_vertex = len(cost)
    for (v, row) in enumerate(cost):
        if len(row) != num_vertex:
            raise ValueError(
                f"Cost matrix must be square but row {v} has {len(row)}"
                f" entries instead of {num_vertex}")


class _AssignmentContext:
    """Holds all data used by the assignment algorithm.

    It contains a partial solution of the assignment problem and several
    auxiliary data structures.
    """

    def __init__(self, cost: list[list[int]]) -> None:
        """Set up the initial state of the assignment algorithm.

        This function takes time O(n**2).
        """

        # Rows are indexed by integers in range 0 .. n-1.
        # Columns are indexed by integers in range 0 .. n-1.
        num_vertex = len(cost)
        self.num_vertex = num_vertex

        # "cost_2x[v][u]" is 2 times the cost of assigning row "v"
        # to column "u".
        #
        # Multiplication by 2 ensures that each dual update moves the
        # dual variables by an integer amount, since the update is half
        # the least slack.
        #
        # These data remain unchanged while the algorithm runs.
        self.cost_2x: list[list[int]] = [[2 * c for c in row] for row in cost]

        # Each row is either unassigned or assigned to one column.
        #
        # If row "v" is assigned to column "u",
        # "row_mate[v] == u" and "col_mate[u] == v".
        #
        # If row "v" is unassigned, "row_mate[v] == -1".
        # If column "u" is unassigned, "col_mate[u] == -1".
        #
        # Initially nothing is assigned.
        self.row_mate: list[int] = num_vertex * [-1]
        self.col_mate: list[int] = num_vertex * [-1]

        # Every row and every column has a variable in the dual LPP.
        #
        # "row_dual_2x[v]" is 2 times the dual variable of row "v".
        # "col_dual_2x[u]" is 2 times the dual variable of column "u".
        #
        # Row duals start at 0. Column duals start at the minimum cost
        # in the column, which makes the least-cost entry of every
        # column tight.
        self.row_dual_2x: list[int] = num_vertex * [0]
        self.col_dual_2x: list[int] = [
            min(self.cost_2x[v][u] for v in range(num_vertex))
            for u in range(num_vertex)]

        # The following data are only valid during a stage.

        # "row_label[v]" is True if row "v" is part of the alternating tree.
        # "col_label[u]" is True if column "u" is part of the alternating tree.
        self.row_label: list[bool] = num_vertex * [False]
        self.col_label: list[bool] = num_vertex * [False]

        # For each unlabeled column "u",
        # "col_slack_2x[u]" is the least slack of any edge between a labeled
        # row and column "u", and "col_neighbor[u]" is the labeled row that
        # attains it, or -1 if no labeled row has been scanned yet.
        self.col_slack_2x: list[int|float] = num_vertex * [math.inf]
        self.col_neighbor: list[int] = num_vertex * [-1]

        # For each labeled row "v" that is not the root of the tree,
        # "row_parent[v]" is the labeled row through which "v" was reached.
        # "row_parent[v] == -1" if "v" is a root of the alternating tree.
        self.row_parent: list[int] = num_vertex * [-1]

    def edge_slack_2x(self, v: int, u: int) -> int:
        """Return 2 times the slack of the edge between row "v" and
        column "u"."""
        return self.cost_2x[v][u] - self.row_dual_2x[v] - self.col_dual_2x[u]

    def reset_stage(self) -> None:
        """Reset data which are only valid during a stage.

        This function takes time O(n).
        """
        for x in range(self.num_vertex):
            self.row_label[x] = False
            self.col_label[x] = False
            self.col_slack_2x[x] = math.inf
            self.col_neighbor[x] = -1
            self.row_parent[x] = -1

    def update_slack(self, v: int) -> None:
        """Update least-slack tracking with the edges of newly labeled
        row "v".

        This function takes time O(n).
        """

        for u in range(self.num_vertex):
            if not self.col_label[u]:
                slack = self.edge_slack_2x(v, u)
                assert slack >= 0
                if slack < self.col_slack_2x[u]:
                    self.col_slack_2x[u] = slack
                    self.col_neighbor[u] = v

    def assign_label_row(self, v: int, parent: int) -> None:
        """Add row "v" to the alternating tree and scan its edges.

        "parent" is the labeled row through which "v" was reached,
        or -1 if "v" is unassigned and becomes a root of the tree.
        """
        assert not self.row_label[v]
        self.row_label[v] = True
        self.row_parent[v] = parent
        self.update_slack(v)

    def calc_dual_delta(self) -> int:
        """Calculate the next delta step in the dual LPP problem.

        Returns 2 times the delta value, which is the least slack of any
        edge between a labeled row and an unlabeled column.

        This function takes time O(n).
        """

        delta_2x = min(
            (self.col_slack_2x[u]
             for u in range(self.num_vertex)
             if not self.col_label[u]),
            default=None)

        # An augmenting path always exists before all columns are
        # labeled, so at least one unlabeled column must remain.
        assert delta_2x is not None

        # Every stage starts from at least one unassigned row,
        # so the least slack is finite.
        assert not isinstance(delta_2x, float)

        return delta_2x

    def apply_delta_step(self, delta: int) -> None:
        """Apply a delta step to the dual LPP variables.

        Labeled rows gain "delta", unlabeled rows lose "delta".
        Labeled columns lose "delta", unlabeled columns gain "delta".

        The slack of edges between labeled rows and unlabeled columns
        decreases by 2 times "delta". The slack of edges between unlabeled
        rows and labeled columns increases by 2 times "delta". All other
        edge slacks remain unchanged.

        This function takes time O(n).
        """
        for x in range(self.num_vertex):
            if self.row_label[x]:
                self.row_dual_2x[x] += delta
            else:
                self.row_dual_2x[x] -= delta
            if self.col_label[x]:
                self.col_dual_2x[x] -= delta
            else:
                self.col_dual_2x[x] += delta

    def search_augmenting_path(self) -> int:
        """Grow the alternating tree until an unassigned column can be
        reached through a tight edge.

        Each pass through the loop either finds an unassigned column or
        adds at least one column and one row to the tree.

        This function takes time O(n**2).

        Returns:
            Index of an unassigned column which is adjacent to a labeled
            row through a tight edge.
        """

        num_vertex = self.num_vertex

        while True:

            # Calculate the delta step.
            # Since all costs are even, all slacks are even
            # and the delta is an integer.
            delta_2x = self.calc_dual_delta()
            assert delta_2x % 2 == 0
            delta = delta_2x // 2

            if delta > 0:
                self.apply_delta_step(delta)

            # Find columns which became reachable through a tight edge.
            tight_columns: list[int] = []
            for u in range(num_vertex):
                if not self.col_label[u]:
                    self.col_slack_2x[u] -= delta_2x
                    if self.col_slack_2x[u] == 0:
                        if self.col_mate[u] == -1:
                            # Found an augmenting path.
                            return u
                        tight_columns.append(u)

            # Extend the alternating tree through each tight column
            # and the row assigned to it.
            for u in tight_columns:
                self.col_label[u] = True
                self.assign_label_row(self.col_mate[u], self.col_neighbor[u])

    def augment_matching(self, v: int, u: int) -> None:
        """Augment the assignment through the alternating path that ends
        with the edge between row "v" and unassigned column "u".

        This function takes time O(n).
        """

        # The augmenting path looks like this:
        #
        #   (root) ---- [ ] ==== ( ) ---- [ ] ==== ( ) ---- [u]
        #
        # Walk back from column "u" to the root of the tree. Every row
        # on the path gets assigned to the column on its right, thereby
        # giving up the column on its left to its parent row.
        while True:
            prev_u = self.row_mate[v]
            self.row_mate[v] = u
            self.col_mate[u] = v
            if self.row_parent[v] == -1:
                break
            (v, u) = (self.row_parent[v], prev_u)

        # The root of the path was unassigned.
        assert prev_u == -1

    def run_stage(self) -> None:
        """Run one stage of the assignment algorithm.

        The stage finds a least-cost augmenting path and uses it to
        extend the assignment by one row.

        This function takes time O(n**2).
        """

        num_vertex = self.num_vertex

        # Remove all labels and reset least-slack tracking.
        self.reset_stage()

        # All unassigned rows become roots of the alternating tree.
        for v in range(num_vertex):
            if self.row_mate[v] == -1:
                self.assign_label_row(v, -1)

        # Find an unassigned column, then augment.
        u = self.search_augmenting_path()
        self.augment_matching(self.col_neighbor[u], u)


def _verify_optimum(ctx: _AssignmentContext) -> None:
    """Verify that the optimum solution has been found.

    This function takes time O(n**2).

    Raises:
        AssignmentError: If the solution is not optimal.
    """

    num_vertex = ctx.num_vertex
    cost_2x = ctx.cost_2x
    row_mate = ctx.row_mate
    col_mate = ctx.col_mate
    row_dual_2x = ctx.row_dual_2x
    col_dual_2x = ctx.col_dual_2x

    # Check that the assignment is a bijection between rows and columns.
    if len(row_mate) != num_vertex or len(col_mate) != num_vertex:
        raise AssignmentError("Assignment has wrong size")

    for v in range(num_vertex):
        u = row_mate[v]
        if (u < 0) or (u >= num_vertex):
            raise AssignmentError(f"Row {v} is not assigned")
        if col_mate[u] != v:
            raise AssignmentError(
                f"Row {v} assigned to column {u}"
                f" but column {u} assigned to row {col_mate[u]}")

    # Check that all edges have non-negative slack,
    # and that all assigned edges have zero slack.
    for v in range(num_vertex):
        for u in range(num_vertex):
            slack = cost_2x[v][u] - row_dual_2x[v] - col_dual_2x[u]
            if slack < 0:
                raise AssignmentError(
                    f"Negative slack on edge ({v}, {u})")
            if (row_mate[v] == u) and (slack != 0):
                raise AssignmentError(
                    f"Non-zero slack on assigned edge ({v}, {u})")

    # Check that the primal and dual objectives are equal.
    primal_2x = sum(cost_2x[v][row_mate[v]] for v in range(num_vertex))
    dual_2x = sum(row_dual_2x) + sum(col_dual_2x)
    if primal_2x != dual_2x:
        raise AssignmentError(
            f"Assignment cost {primal_2x / 2} differs from"
            f" dual objective {dual_2x / 2}")

    # Optimum solution confirmed.
