"""Tests for the ILP branch-and-bound solver."""

import math

import numpy as np
import pytest

from openbb.branching.variable import MostFractionalBranching
from openbb.core.selection import BestFirstList, BreadthFirstList, DepthFirstList
from openbb.core.tree import BBConfig, BBStatus
from openbb.ilp.bruteforce import BruteForceILPMinimizer, IntegerDomain
from openbb.ilp.constraints import Bound, BoxConstraints, LinearConstraints
from openbb.ilp.node import ILPNode
from openbb.ilp.problem import ILPProblem
from openbb.ilp.relaxation import LPResult
from openbb.solver.ilp_branch_and_bound import ILPBranchAndBound


def two_variable_problem() -> ILPProblem:
    """min -x - y s.t. 7x + y <= 15, -x + y <= 1, x, y integer."""
    return ILPProblem(
        c=[-1, -1],
        less=LinearConstraints.less_than([[7, 1], [-1, 1]], [15, 1]),
        integers=[1, 2],
        epsilon=1e-8,
    )


def pure_ilp(c, A, b) -> ILPProblem:
    """Pure integer problem with less-than constraints only."""
    return ILPProblem(
        c=c,
        less=LinearConstraints.less_than(A, b),
        integers=range(1, len(c) + 1),
        epsilon=1e-8,
    )


def random_problem(rng, n, mixed=False) -> ILPProblem:
    """Random bounded problem over the box [0, 4]^n; x = 0 is always feasible."""
    m = int(rng.integers(1, 4))
    return ILPProblem(
        c=rng.integers(-5, 6, size=n),
        less=LinearConstraints.less_than(
            rng.integers(-3, 4, size=(m, n)),
            rng.integers(0, 11, size=m),
        ),
        bounds=BoxConstraints(n, [Bound(j, 0.0, 4.0) for j in range(1, n + 1)]),
        integers=[1] if mixed else range(1, n + 1),
    )


def box_domains(problem: ILPProblem):
    return [IntegerDomain.range(j, 0, 4) for j in problem.integers]


GOMORY_CASES = [
    ([-4, 1], [[7, -2], [0, 1], [2, -2]], [14, 3, 3], -7),
    ([-5, 2], [[-1, 2], [3, 2], [-1, -3]], [5, 19, -9], -21),
    ([2, 15, 18], [[-1, 2, -6], [0, 1, 2], [2, 0, 10], [-1, 1, 0]], [-10, 6, 19, -2], 26),
    ([-7, -9], [[-1, 3], [7, 1]], [6, 35], -55),
    ([-3, -4], [[3, -1], [3, 11]], [12, 66], -31),
    ([-1, -27], [[-1, 1], [24, 4]], [1, 25], -27),
]


class TestILPSolution:
    """Tests for ILPSolution."""

    def test_optimal_solution(self):
        """Test the accessors of a solved problem."""
        solution = ILPBranchAndBound().solve(two_variable_problem())

        assert solution.is_optimal() is True
        assert solution.is_feasible() is True
        assert solution.total_time >= 0.0
        assert solution.nodes_explored == solution.stats.nodes_processed


class TestILPBranchAndBound:
    """Tests for ILPBranchAndBound."""

    def test_pure_ilp(self):
        """Test a small pure integer problem."""
        solution = ILPBranchAndBound().solve(two_variable_problem())

        assert solution.minimum() == pytest.approx(-3.0)
        np.testing.assert_allclose(solution.minimizer(), [2, 1], atol=1e-9)
        assert solution.status == BBStatus.OPTIMAL

    def test_pure_ilp_tree(self):
        """Test the depth-first tree of the small pure integer problem."""
        solution = ILPBranchAndBound().solve(two_variable_problem())

        # root, then the ceil child (incumbent), then the tied floor child
        assert solution.nodes_explored == 3
        assert solution.stats.nodes_branched == 1
        assert solution.stats.nodes_candidate == 1
        assert solution.stats.nodes_pruned_bound == 1
        assert solution.incumbent.id == 3

    def test_ties_kept(self):
        """Test that keeping ties changes the reported minimizer, not the minimum."""
        solver = ILPBranchAndBound(config=BBConfig(prune_ties=False))

        solution = solver.solve(two_variable_problem())

        assert solution.minimum() == pytest.approx(-3.0)
        np.testing.assert_allclose(solution.minimizer(), [1, 2], atol=1e-9)

    def test_continuous_problem(self):
        """Test that a problem without integer variables is solved as an LP."""
        problem = ILPProblem(
            c=[1.0, 1.0, -1.0],
            greater=LinearConstraints.greater_than([[2, -1, 0], [1, 2, -1]], [2, 1]),
            less=LinearConstraints.less_than([[1, 1, 1], [-1, -1, 1]], [4, 10]),
        )

        solution = ILPBranchAndBound().solve(problem)

        assert solution.minimum() == pytest.approx(0.25, abs=1e-9)
        np.testing.assert_allclose(solution.minimizer(), [1.375, 0.75, 1.875], atol=1e-9)
        assert solution.nodes_explored == 1
        assert solution.stats.nodes_branched == 0

    def test_infeasible_root(self):
        """Test conflicting inequalities."""
        problem = ILPProblem(
            c=[1.0, 1.0],
            greater=LinearConstraints.greater_than([[1, 1]], [5]),
            less=LinearConstraints.less_than([[1, 1]], [2]),
            integers=[1, 2],
        )

        solution = ILPBranchAndBound().solve(problem)

        assert solution.incumbent is None
        assert solution.status == BBStatus.INFEASIBLE
        assert solution.minimum() == math.inf
        assert solution.minimizer() is None
        assert solution.is_feasible() is False
        assert solution.stats.nodes_pruned_infeasible == 1

    def test_infeasible_after_branching(self):
        """Test a feasible relaxation with no integer point."""
        problem = ILPProblem(
            c=[1.0],
            bounds=BoxConstraints(1, [Bound(1, 0.2, 0.8)]),
            integers=[1],
        )

        solution = ILPBranchAndBound().solve(problem)

        assert solution.status == BBStatus.INFEASIBLE
        assert solution.nodes_explored == 3
        assert solution.stats.nodes_pruned_infeasible == 2

    def test_integral_relaxation_accepted(self):
        """Test that a near-integral relaxation is accepted without branching."""
        x = 3.0000000001
        problem = ILPProblem(c=[1.0], integers=[1], epsilon=1e-8)
        solver = ILPBranchAndBound(solver=lambda p: LPResult.optimal(x, [x]))

        solution = solver.solve(problem)

        assert solution.minimum() == pytest.approx(x)
        assert solution.stats.nodes_branched == 0

    def test_fractional_relaxation_branched(self):
        """Test that the same value under a tighter epsilon is branched."""
        x = 3.0000000001
        problem = ILPProblem(c=[1.0], integers=[1], epsilon=1e-12)
        solver = ILPBranchAndBound(
            solver=lambda p: LPResult.optimal(x, [x]),
            config=BBConfig(max_nodes=1),
        )

        solution = solver.solve(problem)

        assert solution.stats.nodes_branched == 1
        assert solution.status == BBStatus.NODE_LIMIT

    def test_mixed_integer(self):
        """Test a problem with one integer and one continuous variable."""
        problem = ILPProblem(
            c=[-1, -1],
            less=LinearConstraints.less_than([[2, 2]], [7]),
            bounds=BoxConstraints(2, [Bound(1, 0.0, 2.5)]),
            integers=[1],
        )

        solution = ILPBranchAndBound().solve(problem)
        x = solution.minimizer()

        assert solution.minimum() == pytest.approx(-3.5)
        assert x[0] == pytest.approx(round(x[0]), abs=1e-8)
        assert problem.is_feasible(x, epsilon=1e-6)

    @pytest.mark.parametrize("c, A, b, expected", GOMORY_CASES)
    def test_known_optima(self, c, A, b, expected):
        """Test pure integer problems with known optima."""
        problem = pure_ilp(c, A, b)

        solution = ILPBranchAndBound().solve(problem)

        assert solution.minimum() == pytest.approx(expected, abs=1e-6)
        assert problem.is_feasible(solution.minimizer(), epsilon=1e-6)

    @pytest.mark.parametrize("factory", [DepthFirstList, BestFirstList, BreadthFirstList])
    def test_active_list_orders_agree(self, factory):
        """Test that every node ordering reaches the same minimum."""
        solver = ILPBranchAndBound(active_list_factory=factory)

        for c, A, b, expected in GOMORY_CASES:
            assert solver.solve(pure_ilp(c, A, b)).minimum() == pytest.approx(expected, abs=1e-6)

    def test_most_fractional_branching(self):
        """Test solving with another branching strategy."""
        solver = ILPBranchAndBound(branching=MostFractionalBranching())

        for c, A, b, expected in GOMORY_CASES:
            assert solver.solve(pure_ilp(c, A, b)).minimum() == pytest.approx(expected, abs=1e-6)

    def test_fresh_active_list_per_solve(self):
        """Test that each solve gets its own active list."""
        created = []

        def factory():
            created.append(DepthFirstList())
            return created[-1]

        solver = ILPBranchAndBound(active_list_factory=factory)
        solver.solve(two_variable_problem())
        solver.solve(two_variable_problem())

        assert len(created) == 2
        assert created[0] is not created[1]
        assert solver.engine.active_list is created[1]

    def test_deterministic(self):
        """Test that repeated solves build the same tree."""
        first = ILPBranchAndBound().solve(two_variable_problem())
        second = ILPBranchAndBound().solve(two_variable_problem())

        np.testing.assert_array_equal(first.minimizer(), second.minimizer())
        assert first.nodes_explored == second.nodes_explored
        assert first.incumbent.id == second.incumbent.id

    def test_node_limit(self):
        """Test stopping the search on its node budget."""
        solver = ILPBranchAndBound(config=BBConfig(max_nodes=1))

        solution = solver.solve(two_variable_problem())

        assert solution.status == BBStatus.NODE_LIMIT
        assert solution.incumbent is None
        assert solution.is_optimal() is False

    def test_verbose(self, capsys):
        """Test that the solver reports progress when asked."""
        ILPBranchAndBound(config=BBConfig(verbose=True, log_frequency=1)).solve(
            two_variable_problem()
        )

        assert "Search finished: OPTIMAL" in capsys.readouterr().out


class TestAgainstBruteForce:
    """Compare branch-and-bound with exhaustive enumeration."""

    @pytest.mark.parametrize("seed", range(12))
    def test_pure_integer(self, seed):
        """Test that branch-and-bound finds the enumerated optimum."""
        rng = np.random.default_rng(seed)
        problem = random_problem(rng, n=int(rng.integers(2, 4)))

        expected = BruteForceILPMinimizer().solve(problem, box_domains(problem))
        solution = ILPBranchAndBound().solve(problem)

        assert solution.minimum() == pytest.approx(expected.minimum(), abs=1e-6)
        assert problem.is_feasible(solution.minimizer(), epsilon=1e-6)

    @pytest.mark.parametrize("seed", range(6))
    def test_mixed_integer(self, seed):
        """Test a random mixed problem with one integer variable."""
        rng = np.random.default_rng(100 + seed)
        problem = random_problem(rng, n=2, mixed=True)

        expected = BruteForceILPMinimizer().solve(problem, box_domains(problem))
        solution = ILPBranchAndBound().solve(problem)

        assert solution.minimum() == pytest.approx(expected.minimum(), abs=1e-6)

    @pytest.mark.parametrize("seed", range(4))
    def test_node_values_are_lower_bounds(self, seed):
        """Test that no integer point below a node beats the node's value."""
        rng = np.random.default_rng(200 + seed)
        problem = random_problem(rng, n=2)
        brute_force = BruteForceILPMinimizer()
        gaps = []

        def check(node: ILPNode, engine):
            if node.is_infeasible:
                return
            best = brute_force.solve(node.problem, box_domains(node.problem)).minimum()
            gaps.append(best - node.value())

        ILPBranchAndBound(config=BBConfig(node_callback=check)).solve(problem)

        assert gaps
        assert min(gaps) >= -1e-6

    @pytest.mark.parametrize("seed", range(4))
    def test_upper_bound_never_increases(self, seed):
        """Test the upper bound after every processed node."""
        rng = np.random.default_rng(300 + seed)
        problem = random_problem(rng, n=3)
        bounds = []

        config = BBConfig(node_callback=lambda node, engine: bounds.append(engine.upper_bound))
        ILPBranchAndBound(config=config).solve(problem)

        assert all(a >= b for a, b in zip(bounds, bounds[1:]))
        assert bounds[-1] < math.inf
