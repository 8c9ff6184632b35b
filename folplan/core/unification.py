"""
Robinson unification algorithm with occurs check.

This is the logical foundation that everything else builds on.
Given two expressions, find a substitution that makes them identical --
or report that no such substitution exists.

Substitutions are plain dicts from variable name to expression:
    {"x": Constant("Sibiu"), "y": Variable("z")}

Unification failure is an ordinary answer (None), never an exception.
Cycles are different: a substitution like {"x": f(x)} is a logic error,
and the operations that accept a caller-built substitution reject it with
OccursCheckViolation.
"""

from .expr import Variable, Operator, variables_of
from .errors import OccursCheckViolation


def occurs_in(var: Variable, term, sub=None) -> bool:
    """Does var occur anywhere in term, under the bindings in sub?"""
    if sub is None:
        sub = {}
    term = apply_substitution(sub, term)
    if isinstance(term, Variable):
        return term.name == var.name
    if isinstance(term, Operator):
        return any(occurs_in(var, arg, sub) for arg in term.args)
    return False


def apply_substitution(sub: dict, term):
    """Apply a substitution dict to an expression. Follows chains."""
    if isinstance(term, Variable):
        if term.name in sub:
            return apply_substitution(sub, sub[term.name])
        return term
    if isinstance(term, Operator):
        if not term.args:
            return term
        return Operator(term.symbol, tuple(apply_substitution(sub, a) for a in term.args))
    return term  # constant


def unify(t1, t2, sub=None, check=True):
    """
    Unify two expressions under substitution sub.

    Returns the extended substitution dict, or None if unification fails.
    The input substitution is never mutated. A cyclic sub raises
    OccursCheckViolation; check=False skips that test for substitutions
    that unify itself built.
    """
    if sub is None:
        sub = {}
    elif check and sub:
        check_acyclic(sub)

    t1 = apply_substitution(sub, t1)
    t2 = apply_substitution(sub, t2)

    if t1 == t2:
        return sub

    if isinstance(t1, Variable):
        return _bind(t1, t2, sub)

    if isinstance(t2, Variable):
        return _bind(t2, t1, sub)

    if isinstance(t1, Operator) and isinstance(t2, Operator):
        if t1.symbol != t2.symbol or len(t1.args) != len(t2.args):
            return None  # different symbol or arity
        for a1, a2 in zip(t1.args, t2.args):
            sub = unify(a1, a2, sub, check=False)
            if sub is None:
                return None
        return sub

    return None  # two different constants, or constant vs operator


def _bind(var: Variable, term, sub: dict):
    if occurs_in(var, term, sub):
        return None  # occurs check: x unify f(x) is unsound
    sub = dict(sub)
    sub[var.name] = term
    return sub


def unify_all(pairs, sub=None):
    """Unify a sequence of (left, right) pairs, threading the substitution."""
    if sub is None:
        sub = {}
    check_acyclic(sub)
    for left, right in pairs:
        sub = unify(left, right, sub, check=False)
        if sub is None:
            return None
    return sub


def check_acyclic(sub: dict) -> dict:
    """
    Raise OccursCheckViolation if any variable in sub maps, directly or
    through a chain of bindings, to an expression containing itself.
    Returns sub unchanged so callers can chain it.
    """
    def reaches(name, term, seen):
        for other in variables_of(term):
            if other == name:
                return True
            if other in sub and other not in seen:
                seen.add(other)
                if reaches(name, sub[other], seen):
                    return True
        return False

    for name, term in sub.items():
        if reaches(name, term, set()):
            raise OccursCheckViolation(
                f"cyclic binding: {name} -> {term}")
    return sub


def compose_substitutions(outer: dict, inner: dict) -> dict:
    """
    Compose two substitutions: (outer . inner)(t) == outer(inner(t)).

    Bindings of inner are rewritten by outer; bindings of outer for
    variables inner leaves alone are kept. Raises OccursCheckViolation
    if the result is cyclic.
    """
    check_acyclic(outer)
    check_acyclic(inner)
    result = {}
    for name, term in inner.items():
        result[name] = apply_substitution(outer, term)
    for name, term in outer.items():
        if name not in result:
            result[name] = term
    # drop identity bindings x -> x left over after rewriting
    result = {n: t for n, t in result.items()
              if not (isinstance(t, Variable) and t.name == n)}
    return check_acyclic(result)


def restrict(sub: dict, names) -> dict:
    """Project sub onto the given variable names, with chains resolved."""
    return {
        name: apply_substitution(sub, Variable(name))
        for name in names
        if name in sub
    }


def standardize_apart(clause, suffix: str):
    """
    Rename all variables in a clause by appending suffix.
    Prevents variable capture when a rule is matched against facts that
    happen to share its variable names.
    """
    var_map = {}

    def rename(term):
        if isinstance(term, Variable):
            if term.name not in var_map:
                var_map[term.name] = Variable(term.name + suffix)
            return var_map[term.name]
        if isinstance(term, Operator):
            return Operator(term.symbol, tuple(rename(a) for a in term.args))
        return term

    return type(clause)(
        consequent=rename(clause.consequent),
        antecedents=tuple(rename(a) for a in clause.antecedents),
    )
