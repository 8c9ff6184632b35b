from .errors import (
    FolplanError, ExpressionError, OccursCheckViolation,
    UnsafeRuleError, SchemaError, UngroundedActionError,
)
from .expr import (
    Variable, Constant, Operator, Expression, atom, expr,
    is_variable, is_constant, is_compound, variables_of, constants_of, is_ground,
)
from .unification import (
    occurs_in, apply_substitution, unify, unify_all, check_acyclic,
    compose_substitutions, restrict, standardize_apart,
)
from .kb import Clause, KnowledgeBase, fact, implies, satisfy, tell, retract, ask
from .bridge import state_from_clauses, kb_from_state, state_from_kb, holds
from .state import Node, SearchState
from .engine import search_step, run_search
from .plan import Plan, PlanNotFound, found_goal, extract_plan, print_plan

__all__ = [
    "FolplanError", "ExpressionError", "OccursCheckViolation",
    "UnsafeRuleError", "SchemaError", "UngroundedActionError",
    "Variable", "Constant", "Operator", "Expression", "atom", "expr",
    "is_variable", "is_constant", "is_compound", "variables_of", "constants_of", "is_ground",
    "occurs_in", "apply_substitution", "unify", "unify_all", "check_acyclic",
    "compose_substitutions", "restrict", "standardize_apart",
    "Clause", "KnowledgeBase", "fact", "implies", "satisfy", "tell", "retract", "ask",
    "state_from_clauses", "kb_from_state", "state_from_kb", "holds",
    "Node", "SearchState",
    "search_step", "run_search",
    "Plan", "PlanNotFound", "found_goal", "extract_plan", "print_plan",
]
