"""
Domain: Have cake and eat it too.

Bake is only possible when the cake is gone, a negative precondition.
"""

from ..core.expr import expr
from ..planning.action import Action
from ..planning.problem import PlanningProblem


def cake_actions() -> list:
    eat = Action(
        name="Eat",
        parameters=("Cake",),
        precond_pos=(expr("Have", "Cake"),),
        effect_add=(expr("Eaten", "Cake"),),
        effect_rem=(expr("Have", "Cake"),),
    )
    bake = Action(
        name="Bake",
        parameters=("Cake",),
        precond_neg=(expr("Have", "Cake"),),
        effect_add=(expr("Have", "Cake"),),
    )
    return [eat, bake]


def make_have_cake_problem() -> PlanningProblem:
    """Goal: Have(Cake) & Eaten(Cake).  Plan: Eat(Cake), Bake(Cake)."""
    return PlanningProblem(
        initial_clauses=[expr("Have", "Cake")],
        actions=cake_actions(),
        goal_test=[expr("Have", "Cake"), expr("Eaten", "Cake")],
        name="have_cake",
    )
