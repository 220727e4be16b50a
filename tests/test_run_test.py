"""Unit tests for the solver test harness."""

import io
import shlex
import sys
import unittest
from unittest.mock import patch

import run_test
from run_test import CostMatrix, CostSolver, MatchSolver, RunStatus


def python_command(output):
    """Return a command that prints "output" and exits."""
    return (shlex.quote(sys.executable)
            + " -c " + shlex.quote(f"print({output!r})"))


class TestCompareSolvers(unittest.TestCase):
    """Test cross-checking of solvers without a reference answer."""

    def _run(self, solvers, matrix):
        with patch.object(sys, "stdout", new_callable=io.StringIO):
            results = run_test.test_matrix(
                solvers, matrix, "matrix", gold_cost=None, num_run=1)
        return [result.status for result in results]

    def test_cost_solvers_agree(self):
        solvers = [CostSolver("a", python_command("15"), None),
                   CostSolver("b", python_command("15"), None)]
        self.assertEqual(
            self._run(solvers, CostMatrix([[15]])),
            [RunStatus.OK, RunStatus.OK])

    def test_cost_solvers_disagree(self):
        solvers = [CostSolver("a", python_command("15"), None),
                   CostSolver("b", python_command("99"), None)]
        self.assertEqual(
            self._run(solvers, CostMatrix([[1]])),
            [RunStatus.OK, RunStatus.WRONG_ANSWER])

    def test_match_solver_takes_precedence(self):
        """cost solver claims a cost below the proven assignment"""
        solvers = [CostSolver("a", python_command("0"), None),
                   MatchSolver("b", python_command("0"), None)]
        self.assertEqual(
            self._run(solvers, CostMatrix([[1]])),
            [RunStatus.WRONG_ANSWER, RunStatus.OK])

    def test_failed_solver_ignored(self):
        solvers = [CostSolver("a", python_command("oops"), None),
                   CostSolver("b", python_command("7"), None)]
        self.assertEqual(
            self._run(solvers, CostMatrix([[7]])),
            [RunStatus.FAILED, RunStatus.OK])


if __name__ == "__main__":
    unittest.main()
