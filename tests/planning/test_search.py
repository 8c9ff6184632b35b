"""
Tests for plan().

The core claims:
    - Breadth-first returns a shortest plan, never longer than the bound
    - The empty plan is returned when the goal already holds, even at bound 0
    - Failure is a falsy PlanNotFound with a reason, never a partial plan
    - A* returns plans of the same length as breadth-first
    - Every returned plan passes simulate()
"""

import pytest

from folplan.core.expr import expr
from folplan.core.state import SearchState
from folplan.core.plan import Plan, PlanNotFound
from folplan.planning.action import Action
from folplan.planning.problem import PlanningProblem, simulate
from folplan.planning.search import plan, expand, heuristic, depth_first


# ── Helpers ──────────────────────────────────────────────────────────────────

def grid_problem(goal="C2"):
    """
    A0 - A1 - A2
    |         |
    B0        B2
    |         |
    C0 - C1 - C2     the shortest route from A0 to C2 is 4 moves either way
    """
    links = [("A0", "A1"), ("A1", "A2"), ("A0", "B0"), ("B0", "C0"),
             ("C0", "C1"), ("C1", "C2"), ("A2", "B2"), ("B2", "C2")]
    facts = [expr("At", "A0")]
    for a, b in links:
        facts += [expr("Link", a, b), expr("Link", b, a)]
    move = Action(
        name="Move",
        parameters=("a", "b"),
        precond_pos=(expr("At", "a"), expr("Link", "a", "b")),
        effect_add=(expr("At", "b"),),
        effect_rem=(expr("At", "a"),),
    )
    return PlanningProblem(facts, [move], expr("At", goal))


# ── Breadth-first ───────────────────────────────────────────────────────────

class TestBreadthFirst:
    def test_shortest_plan(self):
        result = plan(grid_problem(), bound=10)
        assert isinstance(result, Plan)
        assert len(result) == 4

    def test_plan_simulates(self):
        p = grid_problem()
        ok, report = simulate(p, plan(p).actions)
        assert ok, report

    def test_deterministic(self):
        assert plan(grid_problem()).names == plan(grid_problem()).names

    def test_bound_too_small(self):
        result = plan(grid_problem(), bound=3)
        assert isinstance(result, PlanNotFound)
        assert not result
        assert result.reason == "no plan found within bound 3"
        assert result.bound == 3

    def test_bound_exactly_enough(self):
        assert len(plan(grid_problem(), bound=4)) == 4

    def test_goal_holds_initially(self):
        result = plan(grid_problem(goal="A0"), bound=0)
        assert result
        assert len(result) == 0
        assert result.final_state == grid_problem().initial_state

    def test_bound_zero_without_goal(self):
        result = plan(grid_problem(), bound=0)
        assert not result
        assert "bound 0" in result.reason

    def test_negative_bound(self):
        with pytest.raises(ValueError):
            plan(grid_problem(), bound=-1)

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            plan(grid_problem(), strategy="sideways")


# ── Limits ──────────────────────────────────────────────────────────────────

class TestLimits:
    def test_goal_unreachable(self):
        result = plan(grid_problem(goal="Z9"), bound=10)
        assert not result
        assert result.reason == "goal unreachable"
        assert result.nodes_expanded == 0

    def test_node_limit(self):
        result = plan(grid_problem(), bound=10, max_nodes=2)
        assert not result
        assert result.reason == "node limit 2 exceeded"
        assert result.nodes_expanded == 2

    def test_bound_exhausted_on_last_allowed_node(self):
        result = plan(grid_problem(), bound=0, max_nodes=1)
        assert not result
        assert result.reason == "no plan found within bound 0"
        assert result.nodes_expanded == 1

    def test_time_limit(self):
        result = plan(grid_problem(), bound=10, max_seconds=-1)
        assert not result
        assert result.reason == "time limit exceeded"

    def test_callable_goal_skips_reachability_check(self):
        p = grid_problem()
        p2 = PlanningProblem(
            list(p.initial_state), p.actions, lambda s: expr("At", "B2") in s)
        assert len(plan(p2)) == 3


# ── Strategies ──────────────────────────────────────────────────────────────

class TestStrategies:
    def test_astar_matches_breadth_first(self):
        assert len(plan(grid_problem(), strategy="astar")) == len(plan(grid_problem()))

    def test_astar_expands_fewer_nodes(self):
        bfs = plan(grid_problem())
        astar = plan(grid_problem(), strategy="astar")
        assert astar.nodes_expanded <= bfs.nodes_expanded

    def test_depth_first_respects_bound(self):
        result = plan(grid_problem(), bound=6, strategy="depth_first")
        assert result
        assert len(result) <= 6
        ok, _ = simulate(grid_problem(), result.actions)
        assert ok

    def test_callable_strategy(self):
        assert len(plan(grid_problem(), strategy=depth_first)) >= 4

    def test_heuristic_is_admissible_on_route(self):
        p = grid_problem()
        result = plan(p)
        h = heuristic(p)
        for i, state in enumerate(result.states):
            assert h(state) <= len(result) - i


# ── Expansion and resumption ────────────────────────────────────────────────

class TestExpandAndResume:
    def test_expand(self):
        p = grid_problem()
        names = sorted(str(a) for a, _ in expand(p, p.initial_state))
        assert names == ["Move(A0, A1)", "Move(A0, B0)"]

    def test_resume_from_search(self, tmp_path):
        p = grid_problem()
        path = str(tmp_path / "search.json")
        first = plan(p, max_nodes=3, save_path=path)
        assert not first
        resumed = plan(p, search=SearchState.load(path))
        assert len(resumed) == 4

    def test_verbose_output(self, capsys):
        plan(grid_problem(), bound=1, verbose=True)
        assert "--- Step 1" in capsys.readouterr().out
