from .action import Action, ground, is_applicable, apply, groundings
from .problem import PlanningProblem, PDDL, simulate
from .graph import PlanningGraph, h_max
from .search import plan, expand, heuristic, STRATEGIES

__all__ = [
    "Action", "ground", "is_applicable", "apply", "groundings",
    "PlanningProblem", "PDDL", "simulate",
    "PlanningGraph", "h_max",
    "plan", "expand", "heuristic", "STRATEGIES",
]
