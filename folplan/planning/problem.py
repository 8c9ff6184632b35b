"""
Planning problems.

A PlanningProblem bundles everything a planner needs:

    initial_clauses  facts and rules. The ground facts become the initial
                     state; all of it becomes the background knowledge base
                     that answers the actions' static conditions.
    actions          the action library (schemas, may contain variables).
    goal_test        a callable State -> bool, or goal expressions. Goal
                     expressions are asked of a knowledge base seeded with
                     the node's state plus the problem's rules.

PDDL is an alias, matching the name the notebooks use.
"""

from typing import Callable, Optional

from ..core.expr import Operator, atom
from ..core.kb import KnowledgeBase, as_clause
from ..core.bridge import state_from_clauses, rules_of, holds
from ..core.errors import SchemaError, UngroundedActionError
from .action import Action, groundings, index_facts


class PlanningProblem:

    def __init__(self, initial_clauses, actions, goal_test, name: str = ""):
        clauses = [as_clause(c) for c in initial_clauses]
        self.name = name
        self.kb = KnowledgeBase(clauses)
        self.rules = rules_of(clauses)
        self.initial_state = state_from_clauses(clauses)
        self.actions = tuple(actions)

        by_name = {}
        for a in self.actions:
            if not isinstance(a, Action):
                raise SchemaError(f"not an action: {a!r}")
            by_name.setdefault(a.name, []).append(a)
        self._by_name = by_name

        if callable(goal_test):
            self.goals: Optional[tuple] = None
            self._goal_fn: Callable = goal_test
        else:
            if isinstance(goal_test, Operator):
                goal_test = (goal_test,)
            self.goals = tuple(goal_test)
            for g in self.goals:
                if not isinstance(g, Operator):
                    raise SchemaError(f"goal {g!r} is not an operator expression")
            self._goal_fn = self._holds_goals

    def _holds_goals(self, state) -> bool:
        return holds(state, self.goals, self.rules)

    def goal_test(self, state) -> bool:
        return bool(self._goal_fn(frozenset(state)))

    def actions_named(self, name: str) -> list:
        return list(self._by_name.get(name, []))

    def static_holds(self, action: Action) -> bool:
        """Are a ground action's static conditions entailed by the problem KB?"""
        if not action.static:
            return True
        return self.kb.ask(action.static) is not None

    def is_executable(self, action: Action, state) -> bool:
        return self.static_holds(action) and action.is_applicable(state)

    def applicable_actions(self, state) -> list:
        """Every ground action that can fire in state, in action-library order."""
        index = index_facts(state)
        result = []
        for schema in self.actions:
            for grounded in groundings(schema, state, self.kb, index):
                if grounded.is_applicable(state):
                    result.append(grounded)
        return result

    def successors(self, state) -> list:
        """(action, next_state) for every applicable ground action."""
        return [(a, a.apply(state)) for a in self.applicable_actions(state)]

    def __repr__(self):
        label = f" {self.name!r}" if self.name else ""
        return (f"PlanningProblem{label}({len(self.initial_state)} facts, "
                f"{len(self.rules)} rules, {len(self.actions)} actions)")


PDDL = PlanningProblem


def resolve_step(problem: PlanningProblem, step) -> Action:
    """
    Turn a plan step into a ground action. A step is a ground Action, or
    a dict {"name": str, "args": [str, ...]} as produced by outside planners.
    """
    if isinstance(step, Action):
        return step
    name = step.get("name")
    args = tuple(atom(a) if isinstance(a, str) else a for a in step.get("args", []))
    schemas = problem.actions_named(name)
    if not schemas:
        raise SchemaError(f"unknown action '{name}'")
    errors = []
    for schema in schemas:
        try:
            return schema(*args)
        except (SchemaError, UngroundedActionError) as e:
            errors.append(str(e))
    raise SchemaError("; ".join(errors))


def simulate(problem: PlanningProblem, steps) -> tuple:
    """
    Replay a plan from the initial state under STRIPS semantics.
    Returns (ok, report). The report names the first failure, or the success.
    """
    state = problem.initial_state
    if not steps and problem.goal_test(state):
        return True, "goal already holds in initial state"

    for idx, step in enumerate(steps):
        try:
            action = resolve_step(problem, step)
        except SchemaError as e:
            return False, f"step {idx+1}: {e}"
        if not problem.static_holds(action):
            return False, f"step {idx+1}: static conditions not entailed for {action}"
        if not action.is_applicable(state):
            missing = [str(p) for p in action.precond_pos if p not in state]
            present = [str(n) for n in action.precond_neg if n in state]
            reasons = []
            if missing:
                reasons.append("missing " + ", ".join(missing))
            if present:
                reasons.append("forbidden " + ", ".join(present))
            return False, f"step {idx+1}: preconditions not satisfied for {action}: " + "; ".join(reasons)
        state = action.apply(state)

    if problem.goal_test(state):
        return True, "goal satisfied after executing plan"
    return False, "plan finished but goal not satisfied"
