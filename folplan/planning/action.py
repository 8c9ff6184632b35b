"""
STRIPS action schemas.

An Action carries two precondition sets and two effect sets:

    Drive(x, y)
        precond_pos: At(x)
        precond_neg: -
        effect_add:  At(y)
        effect_rem:  At(x)
        static:      Connected(x, y)

static holds background conditions that no action ever changes. They
are not looked up in the state: the problem's knowledge base answers
them, with inference, and they are how variables such as y above get
their candidate values.

A schema may contain variables; ground() or calling the schema with
arguments produces a ground instance. Only ground actions can be tested
for applicability or applied to a state.
"""

from dataclasses import dataclass, InitVar

from ..core.expr import (
    Variable, Constant, Operator, atom, is_ground, variables_of,
    expr_to_data, expr_from_data,
)
from ..core.errors import SchemaError, UngroundedActionError
from ..core.unification import unify, apply_substitution, check_acyclic, compose_substitutions
from ..core.kb import satisfy
from ..core.bridge import sorted_facts


def _unique(items) -> tuple:
    return tuple(dict.fromkeys(items))


@dataclass(frozen=True)
class Action:
    name: str
    parameters: tuple = ()
    precond_pos: tuple = ()
    precond_neg: tuple = ()
    effect_add: tuple = ()
    effect_rem: tuple = ()
    static: tuple = ()
    strict: InitVar[bool] = True

    def __post_init__(self, strict):
        if not self.name:
            raise SchemaError("action name must be non-empty")
        params = tuple(atom(p) if isinstance(p, str) else p for p in self.parameters)
        object.__setattr__(self, "parameters", params)
        for field_name in ("precond_pos", "precond_neg", "effect_add", "effect_rem", "static"):
            object.__setattr__(self, field_name, _unique(getattr(self, field_name)))

        for p in params:
            if not isinstance(p, (Variable, Constant)):
                raise SchemaError(f"{self.name}: parameter {p!r} must be a variable or constant")
        names = [p.name for p in params if isinstance(p, Variable)]
        if len(names) != len(set(names)):
            raise SchemaError(f"{self.name}: repeated parameter in {names}")

        arities = {}
        for e in self.expressions():
            if not isinstance(e, Operator):
                raise SchemaError(f"{self.name}: {e!r} is not an operator expression")
            if arities.setdefault(e.symbol, e.arity) != e.arity:
                raise SchemaError(
                    f"{self.name}: {e.symbol} used with arity {arities[e.symbol]} and {e.arity}")
            unknown = variables_of(e) - set(names)
            if unknown:
                raise SchemaError(
                    f"{self.name}: variables {sorted(unknown)} in {e} are not parameters")

        if strict:
            clash = set(self.precond_pos) & set(self.precond_neg)
            if clash:
                raise SchemaError(
                    f"{self.name}: contradictory preconditions {sorted(str(c) for c in clash)}")

    def expressions(self):
        return (self.precond_pos + self.precond_neg + self.effect_add
                + self.effect_rem + self.static)

    @property
    def signature(self) -> Operator:
        return Operator(self.name, self.parameters)

    @property
    def is_ground(self) -> bool:
        return all(is_ground(p) for p in self.parameters)

    def __str__(self):
        return str(self.signature)

    def __repr__(self):
        return f"Action({self})"

    # ── instantiation ──────────────────────────────────────────────────────

    def substitute(self, sub: dict) -> "Action":
        """Rewrite every field under sub. The result may still have variables."""
        def rw(exprs):
            return tuple(apply_substitution(sub, e) for e in exprs)
        return Action(
            name=self.name,
            parameters=rw(self.parameters),
            precond_pos=rw(self.precond_pos),
            precond_neg=rw(self.precond_neg),
            effect_add=rw(self.effect_add),
            effect_rem=rw(self.effect_rem),
            static=rw(self.static),
            strict=False,
        )

    def ground(self, sub: dict) -> "Action":
        """
        The ground instance of this schema under sub.

        A contradiction that only appears after grounding (At(x) required
        and At(y) forbidden, with x = y) is not an error: the instance is
        simply never applicable.
        """
        check_acyclic(sub)
        grounded = self.substitute(sub)
        if not grounded.is_ground:
            free = set()
            for p in grounded.parameters:
                free |= variables_of(p)
            raise UngroundedActionError(
                f"{self.name}: parameters {sorted(free)} left unbound by {_show(sub)}")
        return grounded

    def __call__(self, *args) -> "Action":
        """Bind parameters positionally: drive("Sibiu", "Fagaras")."""
        args = tuple(atom(a) if isinstance(a, str) else a for a in args)
        if len(args) != len(self.parameters):
            raise SchemaError(
                f"{self.name} takes {len(self.parameters)} arguments, got {len(args)}")
        sub = unify(self.signature, Operator(self.name, args))
        if sub is None:
            raise SchemaError(f"{Operator(self.name, args)} does not match {self}")
        return self.ground(sub)

    # ── STRIPS semantics ───────────────────────────────────────────────────

    def _require_ground(self):
        if not self.is_ground:
            raise UngroundedActionError(f"{self} must be ground before it is executed")

    def is_applicable(self, state) -> bool:
        """Every positive precondition present, every negative one absent."""
        self._require_ground()
        return (all(p in state for p in self.precond_pos)
                and not any(n in state for n in self.precond_neg))

    def apply(self, state) -> frozenset:
        """
        (state - effect_rem) | effect_add, both computed from the same
        pre-state. A fact both added and removed ends up present.
        """
        self._require_ground()
        return (frozenset(state) - frozenset(self.effect_rem)) | frozenset(self.effect_add)

    # ── serialization ──────────────────────────────────────────────────────

    def to_dict(self):
        d = {"name": self.name}
        for field_name in ("parameters", "precond_pos", "precond_neg",
                           "effect_add", "effect_rem", "static"):
            d[field_name] = [expr_to_data(e) for e in getattr(self, field_name)]
        return d

    @classmethod
    def from_dict(cls, d):
        fields = {
            k: tuple(expr_from_data(e) for e in d.get(k, []))
            for k in ("parameters", "precond_pos", "precond_neg",
                      "effect_add", "effect_rem", "static")
        }
        return cls(name=d["name"], strict=False, **fields)


def _show(sub: dict) -> str:
    return "{" + ", ".join(f"{k}: {v}" for k, v in sorted(sub.items())) + "}"


def ground(action: Action, sub: dict) -> Action:
    return action.ground(sub)


def is_applicable(action: Action, state) -> bool:
    return action.is_applicable(state)


def apply(action: Action, state) -> frozenset:
    return action.apply(state)


def index_facts(state) -> dict:
    """(symbol, arity) -> facts, each list in a stable order."""
    index = {}
    for f in sorted_facts(state):
        index.setdefault(f.key, []).append(f)
    return index


def groundings(action: Action, state, kb=None, index=None):
    """
    Yield the ground instances of action that its preconditions allow in state.

    Parameters are bound by unifying the positive preconditions, in the
    order declared, with facts of state; then every answer the knowledge
    base gives for the static conditions extends the binding. A binding
    that still leaves a parameter free is skipped. Applicability (negative
    preconditions) is left to the caller.
    """
    if index is None:
        index = index_facts(state)
    seen = set()
    for theta in satisfy(action.precond_pos, index):
        extensions = [{}]
        if action.static:
            if kb is None:
                continue
            wanted = tuple(apply_substitution(theta, s) for s in action.static)
            extensions = kb.ask_all(wanted)
        for extra in extensions:
            sub = compose_substitutions(extra, theta)
            params = tuple(apply_substitution(sub, p) for p in action.parameters)
            if not all(is_ground(p) for p in params) or params in seen:
                continue
            seen.add(params)
            yield action.ground(sub)
