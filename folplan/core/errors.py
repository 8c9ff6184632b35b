"""
Exception hierarchy.

Unification failure is not an exception: unify() and ask() return None.
Failing to find a plan is not an exception either: plan() returns a
PlanNotFound result. What remains here are the errors a caller made
while building expressions, clauses, or action schemas.
"""


class FolplanError(Exception):
    """Base class for every error raised by folplan."""


class ExpressionError(FolplanError, ValueError):
    """An expression violates the variable/constant naming convention."""


class OccursCheckViolation(FolplanError, ValueError):
    """A substitution would bind a variable to a term containing itself."""


class UnsafeRuleError(FolplanError, ValueError):
    """
    A clause whose consequent could invent terms the knowledge base has
    never seen: a consequent variable missing from every antecedent, or a
    non-ground function term in the consequent. Such rules break the
    finite fixed point that forward chaining relies on.
    """


class SchemaError(FolplanError, ValueError):
    """A malformed action schema, or bad arguments when instantiating one."""


class UngroundedActionError(FolplanError, ValueError):
    """An action still has free variables where a ground action is required."""
