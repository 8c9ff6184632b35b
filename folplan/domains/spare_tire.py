"""
Domain: Spare tire.

Swap a flat tire for the spare. PutOn refuses while the flat is still on
the axle (a negative precondition); LeaveOvernight has no preconditions
and strips every tire from every place.
"""

from ..core.expr import expr
from ..planning.action import Action
from ..planning.problem import PlanningProblem


TIRES = ("Flat", "Spare")
PLACES = ("Axle", "Trunk", "Ground")


def spare_tire_actions() -> list:
    remove = Action(
        name="Remove",
        parameters=("obj", "loc"),
        precond_pos=(expr("At", "obj", "loc"),),
        effect_add=(expr("At", "obj", "Ground"),),
        effect_rem=(expr("At", "obj", "loc"),),
    )
    put_on = Action(
        name="PutOn",
        parameters=("t", "Axle"),
        precond_pos=(expr("Tire", "t"), expr("At", "t", "Ground")),
        precond_neg=(expr("At", "Flat", "Axle"),),
        effect_add=(expr("At", "t", "Axle"),),
        effect_rem=(expr("At", "t", "Ground"),),
    )
    leave_overnight = Action(
        name="LeaveOvernight",
        effect_rem=tuple(expr("At", t, p) for t in TIRES for p in PLACES),
    )
    return [remove, put_on, leave_overnight]


def make_spare_tire_problem() -> PlanningProblem:
    """Goal: At(Spare, Axle) & At(Flat, Ground).  Shortest plan: 3 actions."""
    return PlanningProblem(
        initial_clauses=[
            expr("Tire", "Flat"), expr("Tire", "Spare"),
            expr("At", "Flat", "Axle"), expr("At", "Spare", "Trunk"),
        ],
        actions=spare_tire_actions(),
        goal_test=[expr("At", "Spare", "Axle"), expr("At", "Flat", "Ground")],
        name="spare_tire",
    )
