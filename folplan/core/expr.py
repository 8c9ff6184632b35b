"""
Expressions: the atoms of the whole system.

Everything else (knowledge base, actions, planner) is built from three
immutable node types:

    Variable("x")                     -> x          lowercase-leading name
    Constant("Sibiu")                 -> Sibiu      anything else
    Operator("At", (Constant(..),))   -> At(Sibiu)  symbol + ordered args

Whether a name is a variable is decided once, by the constructor, from
the first character. Building Variable("Sibiu") or Constant("x") is an
error rather than a silent reclassification.

expr() is the convenient way in:

    expr("Connected", "Pitesti", "Rimnicu")  -> Connected(Pitesti, Rimnicu)
    expr("Drive", "x", "y")                  -> Drive(x, y)
"""

from dataclasses import dataclass
from typing import Union

from .errors import ExpressionError


def _is_variable_name(name: str) -> bool:
    return len(name) > 0 and name[0].islower()


@dataclass(frozen=True)
class Variable:
    name: str

    def __post_init__(self):
        if not _is_variable_name(self.name):
            raise ExpressionError(
                f"variable names start with a lowercase letter, got {self.name!r}")

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"Variable({self.name!r})"


@dataclass(frozen=True)
class Constant:
    name: str

    def __post_init__(self):
        if not self.name:
            raise ExpressionError("constant name must be non-empty")
        if _is_variable_name(self.name):
            raise ExpressionError(
                f"constant names must not start with a lowercase letter, got {self.name!r}")

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"Constant({self.name!r})"


@dataclass(frozen=True)
class Operator:
    """A predicate or function symbol applied to an ordered tuple of arguments."""
    symbol: str
    args: tuple = ()

    def __post_init__(self):
        if not self.symbol:
            raise ExpressionError("operator symbol must be non-empty")
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args))
        for arg in self.args:
            if not isinstance(arg, (Variable, Constant, Operator)):
                raise ExpressionError(
                    f"argument of {self.symbol} is not an expression: {arg!r}")

    @property
    def arity(self) -> int:
        return len(self.args)

    @property
    def key(self) -> tuple:
        """(symbol, arity): the index key for facts and rules."""
        return (self.symbol, len(self.args))

    def __str__(self):
        if not self.args:
            return self.symbol
        return f"{self.symbol}({', '.join(str(a) for a in self.args)})"

    def __repr__(self):
        return f"Operator({str(self)!r})"


Expression = Union[Variable, Constant, Operator]


def atom(name: str) -> Expression:
    """A Variable or Constant, chosen by the naming convention."""
    if _is_variable_name(name):
        return Variable(name)
    return Constant(name)


def expr(symbol: str, *args) -> Operator:
    """Build an Operator; raw strings become atoms, expressions pass through."""
    return Operator(symbol, tuple(
        atom(a) if isinstance(a, str) else a for a in args
    ))


def is_variable(e) -> bool:
    return isinstance(e, Variable)


def is_constant(e) -> bool:
    return isinstance(e, Constant)


def is_compound(e) -> bool:
    return isinstance(e, Operator)


def variables_of(e) -> set:
    """Names of every variable occurring in e."""
    if isinstance(e, Variable):
        return {e.name}
    if isinstance(e, Operator):
        names = set()
        for arg in e.args:
            names |= variables_of(arg)
        return names
    return set()


def constants_of(e) -> set:
    if isinstance(e, Constant):
        return {e}
    if isinstance(e, Operator):
        found = set()
        for arg in e.args:
            found |= constants_of(arg)
        return found
    return set()


def is_ground(e) -> bool:
    if isinstance(e, Variable):
        return False
    if isinstance(e, Operator):
        return all(is_ground(arg) for arg in e.args)
    return True


def expr_to_data(e):
    """JSON-friendly encoding: {"var": n}, {"const": n} or {"op": s, "args": [...]}."""
    if isinstance(e, Variable):
        return {"var": e.name}
    if isinstance(e, Constant):
        return {"const": e.name}
    return {"op": e.symbol, "args": [expr_to_data(a) for a in e.args]}


def expr_from_data(data) -> Expression:
    if "var" in data:
        return Variable(data["var"])
    if "const" in data:
        return Constant(data["const"])
    return Operator(data["op"], tuple(expr_from_data(a) for a in data.get("args", [])))
