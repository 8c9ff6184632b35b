"""
Domain: Romania.

The road map from the planning notebook, small enough to check by hand:

    Bucharest - Pitesti - Rimnicu - Sibiu - Fagaras - Bucharest
                Pitesti - Craiova - Rimnicu

romania        -- the notebook's knowledge base (roads, symmetry and
                  transitivity rules), a direct Fly(Sibiu, Bucharest) and
                  a Drive(x, y) schema. The one-step Fly plan is shortest.
romania_roads  -- Drive only, with every road asserted in both directions.
                  The shortest route is Sibiu -> Fagaras -> Bucharest.

Drive reads its destination off the Connected facts in the state, so it
follows asserted roads only. The rules widen what the knowledge base
answers, not where a car can go.
"""

from ..core.expr import expr
from ..core.kb import implies
from ..planning.action import Action
from ..planning.problem import PlanningProblem


ROADS = [
    ("Bucharest", "Pitesti"),
    ("Pitesti",   "Rimnicu"),
    ("Rimnicu",   "Sibiu"),
    ("Sibiu",     "Fagaras"),
    ("Fagaras",   "Bucharest"),
    ("Pitesti",   "Craiova"),
    ("Craiova",   "Rimnicu"),
]

SYMMETRY = implies(expr("Connected", "x", "y"), expr("Connected", "y", "x"))
TRANSITIVITY = implies(
    [expr("Connected", "x", "y"), expr("Connected", "y", "z")],
    expr("Connected", "x", "z"),
)


def road_facts(both_ways=False) -> list:
    facts = [expr("Connected", a, b) for a, b in ROADS]
    if both_ways:
        facts += [expr("Connected", b, a) for a, b in ROADS]
    return facts


ROMANIA_KB = road_facts() + [SYMMETRY, TRANSITIVITY, expr("At", "Sibiu")]


def fly(origin="Sibiu", destination="Bucharest") -> Action:
    return Action(
        name="Fly",
        parameters=(origin, destination),
        precond_pos=(expr("At", origin),),
        effect_add=(expr("At", destination),),
        effect_rem=(expr("At", origin),),
    )


def drive() -> Action:
    """Drive(x, y): from x to any y with Connected(x, y) in the state."""
    return Action(
        name="Drive",
        parameters=("x", "y"),
        precond_pos=(expr("At", "x"), expr("Connected", "x", "y")),
        effect_add=(expr("At", "y"),),
        effect_rem=(expr("At", "x"),),
    )


def make_romania_problem() -> PlanningProblem:
    return PlanningProblem(
        initial_clauses=ROMANIA_KB,
        actions=[fly("Sibiu", "Bucharest"), drive()],
        goal_test=expr("At", "Bucharest"),
        name="romania",
    )


def make_romania_roads_problem(start="Sibiu", destination="Bucharest") -> PlanningProblem:
    return PlanningProblem(
        initial_clauses=road_facts(both_ways=True) + [expr("At", start)],
        actions=[drive()],
        goal_test=expr("At", destination),
        name="romania_roads",
    )
