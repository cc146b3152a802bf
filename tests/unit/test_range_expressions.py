"""
Tests for sort key range expressions (core/expressions.py)

Covers every supported operator, the empty filter, and the lenient/strict
handling of unknown operators.
"""

import logging

import pytest

from datapoint_api.core.expressions import (
    EMPTY_RANGE_EXPRESSION,
    RANGE_TEMPLATES,
    RangeExpressionBuilder,
    build_range_expression,
)
from datapoint_api.exceptions import UnsupportedFilterOperatorError, ValidationError
from datapoint_api.models import RangeFilter


class TestRangeExpressionBuilder:
    """Test translation of range filters into key condition parts."""

    @pytest.mark.parametrize("operator,template", [
        ("gt", "#SK > :SK"),
        ("eq", "#SK = :SK"),
        ("le", "#SK <= :SK"),
        ("lt", "#SK < :SK"),
        ("ge", "#SK >= :SK"),
        ("beginsWith", "begins_with(#SK, :SK)"),
    ])
    def test_single_operand_operators(self, operator, template):
        """Test each single-operand operator binds its value to :SK."""
        expression = build_range_expression(RangeFilter.from_wire({operator: "2024-01-01"}))

        assert expression.names == {"#SK": "SK"}
        assert expression.expression == template
        assert expression.values == {":SK": "2024-01-01"}

    def test_between_keeps_caller_order(self):
        """Test between binds lower and upper bounds in the order given."""
        expression = build_range_expression(RangeFilter.from_wire({"between": ["2024-01-01", "2024-01-31"]}))

        assert expression.names == {"#SK": "SK"}
        assert expression.expression == "#SK BETWEEN :SK0 AND :SK1"
        assert expression.values == {":SK0": "2024-01-01", ":SK1": "2024-01-31"}

    def test_between_bounds_are_not_reordered(self):
        """Test inverted bounds are passed through unchanged."""
        expression = build_range_expression(RangeFilter.from_wire({"between": ["b", "a"]}))

        assert expression.values == {":SK0": "b", ":SK1": "a"}

    def test_no_filter_gives_empty_expression(self):
        """Test a missing filter yields no predicate."""
        expression = build_range_expression(None)

        assert expression is EMPTY_RANGE_EXPRESSION
        assert expression.is_empty
        assert expression.names == {}
        assert expression.values == {}

    def test_every_template_is_covered(self):
        """Test the template table holds exactly the seven wire operators."""
        assert set(RANGE_TEMPLATES) == {"gt", "eq", "le", "lt", "ge", "between", "beginsWith"}

    def test_unknown_operator_ignored_in_lenient_mode(self, caplog):
        """Test an unknown operator produces an empty predicate and a warning."""
        builder = RangeExpressionBuilder(strict=False)

        with caplog.at_level(logging.WARNING, logger="datapoint_api"):
            expression = builder.build(RangeFilter.from_wire({"contains": "x"}))

        assert expression.is_empty
        assert "contains" in caplog.text

    def test_unknown_operator_raises_in_strict_mode(self):
        """Test an unknown operator raises in strict mode."""
        builder = RangeExpressionBuilder(strict=True)

        with pytest.raises(UnsupportedFilterOperatorError) as exc_info:
            builder.build(RangeFilter.from_wire({"contains": "x"}))

        assert exc_info.value.operator == "contains"
        assert "between" in exc_info.value.supported
        assert isinstance(exc_info.value, ValidationError)

    def test_custom_sort_key_attribute(self):
        """Test the placeholder maps to the configured sort key attribute."""
        builder = RangeExpressionBuilder(sort_key="timestamp")

        expression = builder.build(RangeFilter.from_wire({"gt": 5}))

        assert expression.names == {"#SK": "timestamp"}


class TestRangeFilterFromWire:
    """Test parsing of the wire shape of a range filter."""

    def test_none_and_empty_mean_no_filter(self):
        """Test None and {} both mean no filter."""
        assert RangeFilter.from_wire(None) is None
        assert RangeFilter.from_wire({}) is None

    def test_existing_filter_passes_through(self):
        """Test an already-built filter is returned as is."""
        range_filter = RangeFilter(operator="gt", operands=("a",))

        assert RangeFilter.from_wire(range_filter) is range_filter

    def test_multiple_operators_rejected(self):
        """Test a filter naming two operators is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            RangeFilter.from_wire({"gt": "a", "lt": "z"})

        assert exc_info.value.errors == {"filter": ["gt", "lt"]}

    def test_non_mapping_rejected(self):
        """Test a filter that is not an object is rejected."""
        with pytest.raises(ValidationError):
            RangeFilter.from_wire(["gt", "a"])

    @pytest.mark.parametrize("bounds", ["2024-01-01", ["2024-01-01"], ["a", "b", "c"]])
    def test_between_requires_two_bounds(self, bounds):
        """Test between rejects anything but a two-element sequence."""
        with pytest.raises(ValidationError):
            RangeFilter.from_wire({"between": bounds})

    def test_single_operand_filter(self):
        """Test a single-operand filter keeps the raw operator key."""
        range_filter = RangeFilter.from_wire({"beginsWith": "2024-01"})

        assert range_filter.operator == "beginsWith"
        assert range_filter.operands == ("2024-01",)
        assert not range_filter.is_between
