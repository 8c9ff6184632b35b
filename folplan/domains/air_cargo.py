"""
Domain: Air cargo.

Two planes, two pieces of cargo, two airports. Each cargo has to end up
at the other airport. Object types are ordinary facts in the state, so
the type preconditions do the work of binding every parameter.
"""

from ..core.expr import expr
from ..planning.action import Action
from ..planning.problem import PlanningProblem


def air_cargo_actions() -> list:
    load = Action(
        name="Load",
        parameters=("c", "p", "a"),
        precond_pos=(expr("At", "c", "a"), expr("At", "p", "a"),
                     expr("Cargo", "c"), expr("Plane", "p"), expr("Airport", "a")),
        effect_add=(expr("In", "c", "p"),),
        effect_rem=(expr("At", "c", "a"),),
    )
    unload = Action(
        name="Unload",
        parameters=("c", "p", "a"),
        precond_pos=(expr("In", "c", "p"), expr("At", "p", "a"),
                     expr("Cargo", "c"), expr("Plane", "p"), expr("Airport", "a")),
        effect_add=(expr("At", "c", "a"),),
        effect_rem=(expr("In", "c", "p"),),
    )
    fly = Action(
        name="Fly",
        parameters=("p", "f", "to"),
        precond_pos=(expr("At", "p", "f"), expr("Plane", "p"),
                     expr("Airport", "f"), expr("Airport", "to")),
        effect_add=(expr("At", "p", "to"),),
        effect_rem=(expr("At", "p", "f"),),
    )
    return [load, unload, fly]


def make_air_cargo_problem() -> PlanningProblem:
    """
    Init:  C1 and P1 at SFO, C2 and P2 at JFK.
    Goal:  At(C1, JFK) & At(C2, SFO).  Shortest plan: 6 actions.
    """
    return PlanningProblem(
        initial_clauses=[
            expr("At", "C1", "SFO"), expr("At", "C2", "JFK"),
            expr("At", "P1", "SFO"), expr("At", "P2", "JFK"),
            expr("Cargo", "C1"), expr("Cargo", "C2"),
            expr("Plane", "P1"), expr("Plane", "P2"),
            expr("Airport", "SFO"), expr("Airport", "JFK"),
        ],
        actions=air_cargo_actions(),
        goal_test=[expr("At", "C1", "JFK"), expr("At", "C2", "SFO")],
        name="air_cargo",
    )
