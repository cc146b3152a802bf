"""
Sort Key Range Expressions

Translates a RangeFilter into the three pieces a DynamoDB key condition
needs: attribute name placeholders, the expression template, and value
placeholders. The result is plain data, independent of boto3, and is joined
with the partition key condition by the read API.

    >>> build_range_expression(RangeFilter.from_wire({"between": ["a", "b"]}))
    RangeExpression(names={'#SK': 'SK'}, expression='#SK BETWEEN :SK0 AND :SK1',
                    values={':SK0': 'a', ':SK1': 'b'})
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..exceptions import UnsupportedFilterOperatorError
from ..models import RangeFilter, RangeOperator

logger = logging.getLogger(__name__)

SORT_KEY_NAME = "#SK"
SORT_KEY_VALUE = ":SK"
SORT_KEY_LOWER = ":SK0"
SORT_KEY_UPPER = ":SK1"

RANGE_TEMPLATES: Dict[str, str] = {
    RangeOperator.GREATER_THAN.value: f"{SORT_KEY_NAME} > {SORT_KEY_VALUE}",
    RangeOperator.EQUAL.value: f"{SORT_KEY_NAME} = {SORT_KEY_VALUE}",
    RangeOperator.LESS_OR_EQUAL.value: f"{SORT_KEY_NAME} <= {SORT_KEY_VALUE}",
    RangeOperator.LESS_THAN.value: f"{SORT_KEY_NAME} < {SORT_KEY_VALUE}",
    RangeOperator.GREATER_OR_EQUAL.value: f"{SORT_KEY_NAME} >= {SORT_KEY_VALUE}",
    RangeOperator.BETWEEN.value: f"{SORT_KEY_NAME} BETWEEN {SORT_KEY_LOWER} AND {SORT_KEY_UPPER}",
    RangeOperator.BEGINS_WITH.value: f"begins_with({SORT_KEY_NAME}, {SORT_KEY_VALUE})",
}


@dataclass(frozen=True)
class RangeExpression:
    """A sort key predicate split into DynamoDB expression parts."""

    names: Dict[str, str] = field(default_factory=dict)
    expression: str = ""
    values: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.expression


EMPTY_RANGE_EXPRESSION = RangeExpression()


class RangeExpressionBuilder:
    """
    Builds sort key predicates from range filters.

    In lenient mode an unknown operator produces an empty predicate, so the
    query returns the whole partition; in strict mode it raises
    UnsupportedFilterOperatorError.
    """

    def __init__(self, sort_key: str = "SK", strict: bool = False):
        self.sort_key = sort_key
        self.strict = strict

    def build(self, range_filter: Optional[RangeFilter]) -> RangeExpression:
        """
        Build the predicate for ``range_filter``.

        Args:
            range_filter: Filter to translate, or None for no predicate

        Returns:
            RangeExpression, empty when there is nothing to apply

        Raises:
            UnsupportedFilterOperatorError: Unknown operator in strict mode
        """
        if range_filter is None:
            return EMPTY_RANGE_EXPRESSION

        template = RANGE_TEMPLATES.get(range_filter.operator)
        if template is None:
            if self.strict:
                raise UnsupportedFilterOperatorError(range_filter.operator, list(RANGE_TEMPLATES))
            logger.warning(f"Ignoring range filter with unsupported operator '{range_filter.operator}'")
            return EMPTY_RANGE_EXPRESSION

        if range_filter.is_between:
            lower, upper = range_filter.operands
            values = {SORT_KEY_LOWER: lower, SORT_KEY_UPPER: upper}
        else:
            values = {SORT_KEY_VALUE: range_filter.operands[0]}

        return RangeExpression(
            names={SORT_KEY_NAME: self.sort_key},
            expression=template,
            values=values,
        )


def build_range_expression(range_filter: Optional[RangeFilter], strict: bool = False) -> RangeExpression:
    """Build a sort key predicate over ``SK``; see RangeExpressionBuilder."""
    return RangeExpressionBuilder(strict=strict).build(range_filter)
