"""
Unit tests for expressions.

The core claims:
    - The naming convention decides Variable vs Constant, and the
      constructors refuse the wrong kind of name
    - Operators are immutable, hashable, and compare structurally
    - expr() turns raw strings into atoms and passes expressions through
    - to-data -> from-data is an identity
"""

import pytest

from folplan.core.expr import (
    Variable, Constant, Operator, atom, expr,
    is_variable, is_constant, is_compound, variables_of, constants_of, is_ground,
    expr_to_data, expr_from_data,
)
from folplan.core.errors import ExpressionError, FolplanError


# ── Atoms ───────────────────────────────────────────────────────────────────

class TestAtoms:
    def test_lowercase_is_variable(self):
        assert atom("x") == Variable("x")
        assert is_variable(atom("city"))

    def test_uppercase_is_constant(self):
        assert atom("Sibiu") == Constant("Sibiu")
        assert is_constant(atom("C1"))

    def test_variable_rejects_constant_name(self):
        with pytest.raises(ExpressionError):
            Variable("Sibiu")

    def test_constant_rejects_variable_name(self):
        with pytest.raises(ExpressionError):
            Constant("x")

    def test_empty_names_rejected(self):
        with pytest.raises(ExpressionError):
            Variable("")
        with pytest.raises(ExpressionError):
            Constant("")

    def test_expression_error_is_value_error(self):
        with pytest.raises(ValueError):
            Variable("X")
        assert issubclass(ExpressionError, FolplanError)


# ── Operators ───────────────────────────────────────────────────────────────

class TestOperator:
    def test_expr_builds_operator(self):
        e = expr("Connected", "Pitesti", "Rimnicu")
        assert e == Operator("Connected", (Constant("Pitesti"), Constant("Rimnicu")))
        assert str(e) == "Connected(Pitesti, Rimnicu)"

    def test_expr_passes_expressions_through(self):
        inner = expr("f", "x")
        e = expr("P", inner, "A")
        assert e.args[0] is inner

    def test_list_args_become_tuple(self):
        e = Operator("P", [Constant("A")])
        assert isinstance(e.args, tuple)
        assert hash(e) == hash(expr("P", "A"))

    def test_structural_equality(self):
        assert expr("At", "x") == expr("At", "x")
        assert expr("At", "x") != expr("At", "y")
        assert expr("At", "x") != expr("At", "x", "y")

    def test_key_is_symbol_and_arity(self):
        assert expr("Connected", "x", "y").key == ("Connected", 2)
        assert expr("Connected", "x", "y").arity == 2

    def test_zero_arity_prints_bare(self):
        assert str(Operator("Raining")) == "Raining"

    def test_non_expression_argument_rejected(self):
        with pytest.raises(ExpressionError):
            Operator("P", (42,))

    def test_empty_symbol_rejected(self):
        with pytest.raises(ExpressionError):
            Operator("", ())

    def test_immutable(self):
        e = expr("At", "Sibiu")
        with pytest.raises(AttributeError):
            e.symbol = "Near"


# ── Queries ─────────────────────────────────────────────────────────────────

class TestQueries:
    def test_variables_of(self):
        assert variables_of(expr("Connected", "x", expr("f", "y", "A"))) == {"x", "y"}
        assert variables_of(Constant("A")) == set()

    def test_constants_of(self):
        assert constants_of(expr("P", "x", "A", expr("f", "B"))) == {Constant("A"), Constant("B")}

    def test_is_ground(self):
        assert is_ground(expr("At", "Sibiu"))
        assert not is_ground(expr("At", "x"))
        assert not is_ground(expr("P", expr("f", "x")))

    def test_is_compound(self):
        assert is_compound(expr("At", "Sibiu"))
        assert not is_compound(Constant("Sibiu"))


# ── Serialization ───────────────────────────────────────────────────────────

class TestData:
    @pytest.mark.parametrize("e", [
        Variable("x"),
        Constant("Sibiu"),
        expr("Connected", "x", "Sibiu"),
        expr("P", expr("f", "x", expr("g", "A"))),
        Operator("Raining"),
    ])
    def test_round_trip(self, e):
        assert expr_from_data(expr_to_data(e)) == e

    def test_shape(self):
        assert expr_to_data(expr("At", "x")) == {"op": "At", "args": [{"var": "x"}]}
