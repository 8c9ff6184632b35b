"""
End-to-end tests on the Romania map.

The core claims:
    - With Fly(Sibiu, Bucharest) available, bound 1 gives the one-step plan
    - With only Drive, breadth-first finds the two-step route through
      Fagaras, and nothing shorter, even on the notebook's transitive KB
    - Drive follows Connected facts in the state, never derived ones
    - bound 0 is a PlanNotFound, not an error
    - The knowledge base answers the notebook's queries
"""

from folplan.core.expr import Constant, expr
from folplan.core.plan import PlanNotFound
from folplan.planning.problem import PlanningProblem, simulate
from folplan.planning.search import plan
from folplan.domains.romania import (
    ROADS, ROMANIA_KB, make_romania_problem, make_romania_roads_problem, drive, fly,
)


class TestKnowledgeBase:
    def test_direct_road(self):
        kb = make_romania_problem().kb
        assert kb.ask(expr("Connected", "Pitesti", "Rimnicu")) == {}

    def test_symmetric_road(self):
        kb = make_romania_problem().kb
        assert kb.ask(expr("Connected", "Rimnicu", "Pitesti")) == {}

    def test_transitive_road(self):
        kb = make_romania_problem().kb
        assert kb.ask(expr("Connected", "Sibiu", "Craiova")) == {}

    def test_where_am_i(self):
        kb = make_romania_problem().kb
        assert kb.ask(expr("At", "x")) == {"x": Constant("Sibiu")}

    def test_roads_variant_has_no_transitivity(self):
        kb = make_romania_roads_problem().kb
        assert kb.ask(expr("Connected", "Sibiu", "Bucharest")) is None
        assert kb.ask(expr("Connected", "Fagaras", "Sibiu")) == {}


class TestFly:
    def test_bound_one_flies(self):
        result = plan(make_romania_problem(), bound=1)
        assert result.names == ["Fly(Sibiu, Bucharest)"]

    def test_bound_zero_fails(self):
        result = plan(make_romania_problem(), bound=0)
        assert isinstance(result, PlanNotFound)
        assert result.reason == "no plan found within bound 0"

    def test_plan_reaches_goal(self):
        p = make_romania_problem()
        result = plan(p, bound=1)
        assert expr("At", "Bucharest") in result.final_state
        assert expr("At", "Sibiu") not in result.final_state
        assert p.goal_test(result.final_state)

    def test_fly_is_ground(self):
        assert fly().is_ground


class TestDrive:
    def test_two_hops_through_fagaras(self):
        result = plan(make_romania_roads_problem(), bound=5)
        assert result.names == ["Drive(Sibiu, Fagaras)", "Drive(Fagaras, Bucharest)"]

    def test_no_one_hop_route(self):
        result = plan(make_romania_roads_problem(), bound=1)
        assert not result

    def test_simulates(self):
        p = make_romania_roads_problem()
        ok, report = simulate(p, plan(p, bound=5).actions)
        assert ok, report

    def test_astar_agrees(self):
        assert len(plan(make_romania_roads_problem(), strategy="astar")) == 2

    def test_other_start(self):
        result = plan(make_romania_roads_problem(start="Craiova"), bound=5)
        assert len(result) == 2
        assert result.names[-1] == "Drive(Pitesti, Bucharest)"

    def test_drive_schema(self):
        assert str(drive()) == "Drive(x, y)"
        assert drive().precond_pos[1] == expr("Connected", "x", "y")
        assert len(ROADS) == 7

    def test_notebook_kb_without_fly_takes_two_hops(self):
        # transitivity makes Connected(Sibiu, Bucharest) derivable, but Drive
        # only follows the Connected facts present in the state
        p = PlanningProblem(ROMANIA_KB, [drive()], expr("At", "Bucharest"))
        assert p.kb.ask(expr("Connected", "Sibiu", "Bucharest")) == {}
        result = plan(p, bound=3)
        assert len(result) >= 2
        assert result.names == ["Drive(Sibiu, Fagaras)", "Drive(Fagaras, Bucharest)"]

    def test_derived_road_is_not_drivable(self):
        p = PlanningProblem(ROMANIA_KB, [drive()], expr("At", "Bucharest"))
        assert not drive()("Sibiu", "Bucharest").is_applicable(p.initial_state)
        assert not plan(p, bound=1)

    def test_asserted_roads_are_one_way_in_notebook_kb(self):
        p = PlanningProblem(ROMANIA_KB, [drive()], expr("At", "Rimnicu"))
        # only Connected(Rimnicu, Sibiu) is asserted, so the way round is long
        assert not plan(p, bound=3)
        assert plan(p, bound=4).names == [
            "Drive(Sibiu, Fagaras)", "Drive(Fagaras, Bucharest)",
            "Drive(Bucharest, Pitesti)", "Drive(Pitesti, Rimnicu)",
        ]
