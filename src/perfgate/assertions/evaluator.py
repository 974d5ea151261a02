"""Generic threshold evaluation shared by every audit shape."""

from __future__ import annotations

import logging
from typing import Sequence

from perfgate.assertions.aggregation import aggregate
from perfgate.assertions.base import AssertionResult, AssertionType
from perfgate.assertions.operators import OPERATORS, VALUE_GETTERS, is_finite_number
from perfgate.config import AggregationMethod, AssertionOptions
from perfgate.reports import AuditResult

logger = logging.getLogger(__name__)


def _audit_ran_violation(measured: list[int]) -> AssertionResult:
    return AssertionResult(
        name=AssertionType.AUDIT_RAN,
        operator=OPERATORS[AssertionType.AUDIT_RAN].symbol,
        expected=1,
        actual=0,
        values=measured,
    )


def get_assertion_result(
    audit_results: Sequence[AuditResult],
    aggregation_method: AggregationMethod,
    assertion_type: AssertionType,
    expected_value: float,
) -> list[AssertionResult]:
    """Compare the aggregate of *audit_results* against *expected_value*.

    Returns an empty list when the assertion passes and a single violation
    otherwise. When the value could not be measured (no report measured it,
    or any report failed to in ``pessimistic`` mode) the violation is an
    ``auditRan`` one and the comparison is skipped.
    """
    values = [VALUE_GETTERS[assertion_type](result) for result in audit_results]
    filtered_values = [value for value in values if is_finite_number(value)]

    pessimistic = aggregation_method == AggregationMethod.PESSIMISTIC
    if (not filtered_values and not pessimistic) or (
        len(filtered_values) != len(values) and pessimistic
    ):
        logger.debug(
            f"{assertion_type.value} could not be measured in "
            f"{len(values) - len(filtered_values)}/{len(values)} report(s)"
        )
        return [_audit_ran_violation([int(is_finite_number(v)) for v in values])]

    op = OPERATORS[assertion_type]
    actual_value = aggregate(filtered_values, aggregation_method, assertion_type)
    if op.passes(actual_value, expected_value):
        return []

    return [
        AssertionResult(
            name=assertion_type,
            operator=op.symbol,
            expected=expected_value,
            actual=actual_value,
            values=filtered_values,
        )
    ]


def get_assertion_results(
    possible_audit_results: Sequence[AuditResult | None],
    options: AssertionOptions,
) -> list[AssertionResult]:
    """Evaluate every threshold configured in *options* for one audit.

    ``maxLength`` and ``maxNumericValue`` are checked independently. A
    ``minScore`` of 1 is implied unless one of them was configured or an
    explicit ``minScore`` is given.
    """
    if any(result is None for result in possible_audit_results):
        return [
            _audit_ran_violation(
                [0 if result is None else 1 for result in possible_audit_results]
            )
        ]

    audit_results = [r for r in possible_audit_results if r is not None]
    aggregation_method = options.aggregation_method or AggregationMethod.OPTIMISTIC

    results: list[AssertionResult] = []
    had_manual_assertion = False

    if options.max_length is not None:
        had_manual_assertion = True
        results.extend(
            get_assertion_result(
                audit_results,
                aggregation_method,
                AssertionType.MAX_LENGTH,
                options.max_length,
            )
        )

    if options.max_numeric_value is not None:
        had_manual_assertion = True
        results.extend(
            get_assertion_result(
                audit_results,
                aggregation_method,
                AssertionType.MAX_NUMERIC_VALUE,
                options.max_numeric_value,
            )
        )

    min_score = options.min_score
    if min_score is None and not had_manual_assertion:
        min_score = 1
    if min_score is not None:
        results.extend(
            get_assertion_result(
                audit_results, aggregation_method, AssertionType.MIN_SCORE, min_score
            )
        )

    return results
