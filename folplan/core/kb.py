"""
Knowledge base: facts and Horn rules, queried by forward chaining.

A Clause is  antecedent_1 & ... & antecedent_n ==> consequent.
A fact is a clause with no antecedents.

    Connected(Sibiu, Fagaras)                       fact
    Connected(x, y) ==> Connected(y, x)             rule
    Connected(x, y) & Connected(y, z) ==> Connected(x, z)

ask() runs the data-driven fixed point: every round fires every rule
against the facts known so far, adds the new consequents, and retries
the query. It stops as soon as the query matches, or when a round adds
nothing.

Termination: tell() only accepts safe clauses. Every consequent variable
must appear in an antecedent, and a rule consequent may not build new
function terms. So every derived fact is made of symbols already in the
knowledge base, and there are finitely many of those.
"""

from dataclasses import dataclass
from typing import Optional

from .expr import Operator, is_ground, variables_of, expr_to_data, expr_from_data
from .errors import ExpressionError, UnsafeRuleError
from .unification import unify, apply_substitution, restrict, standardize_apart


@dataclass(frozen=True)
class Clause:
    consequent: Operator
    antecedents: tuple = ()

    def __post_init__(self):
        if not isinstance(self.antecedents, tuple):
            object.__setattr__(self, "antecedents", tuple(self.antecedents))
        for part in (self.consequent,) + self.antecedents:
            if not isinstance(part, Operator):
                raise ExpressionError(f"clause parts must be operators, got {part!r}")

    @property
    def is_fact(self) -> bool:
        return not self.antecedents

    @property
    def is_rule(self) -> bool:
        return bool(self.antecedents)

    def variables(self) -> set:
        names = variables_of(self.consequent)
        for a in self.antecedents:
            names |= variables_of(a)
        return names

    def __str__(self):
        if self.is_fact:
            return str(self.consequent)
        body = " & ".join(str(a) for a in self.antecedents)
        return f"{body} ==> {self.consequent}"


def fact(e: Operator) -> Clause:
    return Clause(consequent=e)


def implies(antecedents, consequent: Operator) -> Clause:
    """implies([A, B], C) is  A & B ==> C.  A single antecedent may be passed bare."""
    if isinstance(antecedents, Operator):
        antecedents = (antecedents,)
    return Clause(consequent=consequent, antecedents=tuple(antecedents))


def as_clause(item) -> Clause:
    if isinstance(item, Clause):
        return item
    if isinstance(item, Operator):
        return fact(item)
    raise ExpressionError(f"not a clause or expression: {item!r}")


def check_safe(clause: Clause) -> Clause:
    """Raise UnsafeRuleError for clauses that could derive unseen terms."""
    bound = set()
    for a in clause.antecedents:
        bound |= variables_of(a)
    free = variables_of(clause.consequent) - bound
    if free:
        if clause.is_fact:
            raise UnsafeRuleError(f"facts must be ground: {clause}")
        raise UnsafeRuleError(
            f"consequent variables {sorted(free)} appear in no antecedent: {clause}")
    for arg in clause.consequent.args:
        if isinstance(arg, Operator) and not is_ground(arg):
            raise UnsafeRuleError(f"rule consequent builds a new term {arg}: {clause}")
    return clause


def _as_goals(query) -> tuple:
    if isinstance(query, Operator):
        return (query,)
    goals = tuple(query)
    for g in goals:
        if not isinstance(g, Operator):
            raise ExpressionError(f"query parts must be operators, got {g!r}")
    return goals


def satisfy(goals, index: dict, sub=None):
    """
    Yield every substitution that unifies each goal, left to right,
    with some fact in index. index maps (symbol, arity) -> list of facts.
    """
    if sub is None:
        sub = {}
    if not goals:
        yield sub
        return
    first = apply_substitution(sub, goals[0])
    for candidate in index.get(first.key, ()):
        theta = unify(first, candidate, sub, check=False)
        if theta is not None:
            yield from satisfy(goals[1:], index, theta)


class KnowledgeBase:
    """
    An ordered list of clauses with tell / retract / ask.

    Insertion order is kept so that inference traces and answers are
    deterministic. The full fixed point is cached by closure() and thrown
    away by every tell or retract.
    """

    def __init__(self, clauses=()):
        self._clauses = []
        self._closure = None
        for c in clauses:
            self.tell(c)

    # ── mutation ───────────────────────────────────────────────────────────

    def tell(self, clause) -> None:
        clause = check_safe(as_clause(clause))
        self._clauses.append(clause)
        self._closure = None

    def retract(self, clause) -> bool:
        """Remove the first clause equal to clause. Returns whether one was found."""
        clause = as_clause(clause)
        for i, existing in enumerate(self._clauses):
            if existing == clause:
                del self._clauses[i]
                self._closure = None
                return True
        return False

    # ── inspection ─────────────────────────────────────────────────────────

    @property
    def clauses(self) -> tuple:
        return tuple(self._clauses)

    @property
    def facts(self) -> tuple:
        return tuple(c.consequent for c in self._clauses if c.is_fact)

    @property
    def rules(self) -> tuple:
        return tuple(c for c in self._clauses if c.is_rule)

    def __len__(self):
        return len(self._clauses)

    def __iter__(self):
        return iter(self._clauses)

    def __contains__(self, clause):
        return as_clause(clause) in self._clauses

    def __repr__(self):
        return f"KnowledgeBase({len(self.facts)} facts, {len(self.rules)} rules)"

    # ── inference ──────────────────────────────────────────────────────────

    def _rounds(self):
        """
        Forward chaining, one round at a time.

        Yields (index, added) after the asserted facts and after every
        round that derives something. The index holds every fact known so
        far, in derivation order. Stops at the fixed point.
        """
        index = {}
        known = set()
        order = []

        def add(f):
            known.add(f)
            order.append(f)
            index.setdefault(f.key, []).append(f)

        added = []
        for f in self.facts:
            if f not in known:
                add(f)
                added.append(f)
        yield index, added

        rules = [standardize_apart(r, f"_{i}") for i, r in enumerate(self.rules)]
        while True:
            new = []
            seen_now = set()
            for rule in rules:
                for theta in satisfy(rule.antecedents, index):
                    derived = apply_substitution(theta, rule.consequent)
                    if derived not in known and derived not in seen_now:
                        seen_now.add(derived)
                        new.append(derived)
            if not new:
                self._closure = tuple(order)
                return
            for f in new:
                add(f)
            yield index, new

    def closure(self) -> tuple:
        """Every fact entailed by the knowledge base, in derivation order."""
        if self._closure is None:
            for _ in self._rounds():
                pass
        return self._closure

    def _could_match(self, goals) -> bool:
        keys = {c.consequent.key for c in self._clauses}
        return all(g.key in keys for g in goals)

    def ask(self, query) -> Optional[dict]:
        """
        A substitution that makes query true, or None.

        query is an expression or a sequence of expressions (a conjunction).
        The answer binds only the query's own variables, so a ground query
        that holds answers {}.
        """
        goals = _as_goals(query)
        names = set()
        for g in goals:
            names |= variables_of(g)

        if not self._could_match(goals):
            return None

        # A conjunction is answered over the full closure so that its answer
        # does not depend on how far chaining had got when it first matched.
        if self._closure is not None or len(goals) > 1:
            for theta in satisfy(goals, _index(self.closure())):
                return restrict(theta, names)
            return None

        for index, _ in self._rounds():
            for theta in satisfy(goals, index):
                return restrict(theta, names)
        return None

    def ask_all(self, query) -> list:
        """Every distinct answer to query over the full closure."""
        goals = _as_goals(query)
        names = set()
        for g in goals:
            names |= variables_of(g)
        if not self._could_match(goals):
            return []

        answers = []
        seen = set()
        for theta in satisfy(goals, _index(self.closure())):
            answer = restrict(theta, names)
            key = frozenset(answer.items())
            if key not in seen:
                seen.add(key)
                answers.append(answer)
        return answers

    # ── persistence ────────────────────────────────────────────────────────

    def to_dict(self):
        return {
            "clauses": [
                {"consequent": expr_to_data(c.consequent),
                 "antecedents": [expr_to_data(a) for a in c.antecedents]}
                for c in self._clauses
            ],
        }

    @classmethod
    def from_dict(cls, d):
        return cls(
            Clause(
                consequent=expr_from_data(c["consequent"]),
                antecedents=tuple(expr_from_data(a) for a in c.get("antecedents", [])),
            )
            for c in d["clauses"]
        )


def _index(facts) -> dict:
    index = {}
    for f in facts:
        index.setdefault(f.key, []).append(f)
    return index


# Module-level API, for callers that prefer functions over methods.

def tell(kb: KnowledgeBase, clause) -> None:
    kb.tell(clause)


def retract(kb: KnowledgeBase, clause) -> bool:
    return kb.retract(clause)


def ask(kb: KnowledgeBase, query) -> Optional[dict]:
    return kb.ask(query)
