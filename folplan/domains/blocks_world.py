"""
Domain: Blocks world (three-block tower).

C sits on A; build the tower A on B on C. A block may not be moved onto
itself: Move asks the knowledge base for Different(b, y), which is
stated once per pair and completed by a symmetry rule.
"""

from itertools import combinations

from ..core.expr import expr
from ..core.kb import implies
from ..planning.action import Action
from ..planning.problem import PlanningProblem


BLOCKS = ("A", "B", "C")


def blocks_world_actions() -> list:
    move = Action(
        name="Move",
        parameters=("b", "x", "y"),
        precond_pos=(expr("On", "b", "x"), expr("Clear", "b"), expr("Clear", "y"),
                     expr("Block", "b"), expr("Block", "y")),
        effect_add=(expr("On", "b", "y"), expr("Clear", "x")),
        effect_rem=(expr("On", "b", "x"), expr("Clear", "y")),
        static=(expr("Different", "b", "y"),),
    )
    move_to_table = Action(
        name="MoveToTable",
        parameters=("b", "x"),
        precond_pos=(expr("On", "b", "x"), expr("Clear", "b"), expr("Block", "b"),
                     expr("Block", "x")),
        effect_add=(expr("On", "b", "Table"), expr("Clear", "x")),
        effect_rem=(expr("On", "b", "x"),),
    )
    return [move, move_to_table]


def make_three_block_tower_problem() -> PlanningProblem:
    """Goal: On(A, B) & On(B, C).  Shortest plan: 3 actions."""
    different = [expr("Different", a, b) for a, b in combinations(BLOCKS, 2)]
    return PlanningProblem(
        initial_clauses=[
            expr("On", "A", "Table"), expr("On", "B", "Table"), expr("On", "C", "A"),
            expr("Block", "A"), expr("Block", "B"), expr("Block", "C"),
            expr("Clear", "B"), expr("Clear", "C"),
        ] + different + [
            implies(expr("Different", "x", "y"), expr("Different", "y", "x")),
        ],
        actions=blocks_world_actions(),
        goal_test=[expr("On", "A", "B"), expr("On", "B", "C")],
        name="three_block_tower",
    )
