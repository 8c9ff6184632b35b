"""
The KB-state bridge.

A KnowledgeBase is the reasoning side: rules, inference, answers with
bindings. A State is the acting side: a frozen set of ground facts that
actions add to and delete from, under the closed-world assumption.

These functions connect them:
  state_from_clauses  -- the ground facts of a clause list, as a State
  rules_of            -- the implications of a clause list
  kb_from_state       -- seed a fresh knowledge base with a state (+ rules)
  state_from_kb       -- asserted facts, or everything entailed
  holds               -- does a conjunction of goals follow from a state?
"""

from .expr import Operator, is_ground
from .kb import KnowledgeBase, as_clause


def sorted_facts(facts) -> list:
    """Facts in a stable order. frozenset iteration order varies between runs."""
    return sorted(facts, key=str)


def state_from_clauses(clauses) -> frozenset:
    return frozenset(
        c.consequent for c in (as_clause(x) for x in clauses) if c.is_fact
    )


def rules_of(clauses) -> tuple:
    return tuple(c for c in (as_clause(x) for x in clauses) if c.is_rule)


def kb_from_state(state, rules=()) -> KnowledgeBase:
    """
    A knowledge base whose facts are exactly the state's facts.

    The rules come first so that retracting a fact never disturbs them;
    facts follow in sorted order so that answers are reproducible.
    """
    return KnowledgeBase(list(rules) + sorted_facts(state))


def state_from_kb(kb: KnowledgeBase, entailed: bool = False) -> frozenset:
    """
    The asserted ground facts of kb, or with entailed=True, every fact the
    rules derive from them as well.
    """
    if entailed:
        return frozenset(kb.closure())
    return frozenset(kb.facts)


def holds(state, goals, rules=()) -> bool:
    """
    True iff the conjunction of goals is entailed by state together with
    rules. Goals may contain variables; they are read existentially.
    """
    if isinstance(goals, Operator):
        goals = (goals,)
    goals = tuple(goals)
    if not goals:
        return True
    derivable = {r.consequent.key for r in rules}
    if all(is_ground(g) and g.key not in derivable for g in goals):
        # no rule concludes any goal: plain set containment
        return all(g in state for g in goals)
    return kb_from_state(state, rules).ask(goals) is not None
