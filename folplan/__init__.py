"""
folplan: a first-order knowledge base with forward chaining, and a
STRIPS planner that searches over the states it describes.

Usage:
    python -m folplan --problem romania
    python -m folplan --problem romania_roads
    python -m folplan --problem three_block_tower --strategy astar
    python -m folplan --problem romania --ask Connected Sibiu y
    python -m folplan --problem llm       (needs ANTHROPIC_API_KEY)
"""

from .core.errors import (
    FolplanError, ExpressionError, OccursCheckViolation,
    UnsafeRuleError, SchemaError, UngroundedActionError,
)
from .core.expr import Variable, Constant, Operator, atom, expr
from .core.unification import unify, apply_substitution, compose_substitutions
from .core.kb import Clause, KnowledgeBase, fact, implies, tell, retract, ask
from .core.state import SearchState
from .core.plan import Plan, PlanNotFound, print_plan
from .planning.action import Action, ground, is_applicable, apply
from .planning.problem import PlanningProblem, PDDL, simulate
from .planning.graph import PlanningGraph
from .planning.search import plan

__all__ = [
    "FolplanError", "ExpressionError", "OccursCheckViolation",
    "UnsafeRuleError", "SchemaError", "UngroundedActionError",
    "Variable", "Constant", "Operator", "atom", "expr",
    "unify", "apply_substitution", "compose_substitutions",
    "Clause", "KnowledgeBase", "fact", "implies", "tell", "retract", "ask",
    "SearchState",
    "Plan", "PlanNotFound", "print_plan",
    "Action", "ground", "is_applicable", "apply",
    "PlanningProblem", "PDDL", "simulate",
    "PlanningGraph",
    "plan",
]
