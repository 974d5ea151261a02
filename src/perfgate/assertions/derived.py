"""Assertions on audits that need pseudo-audit values before comparison.

Budgets, category scores and resource summaries don't carry a single value
per report that the generic evaluator can read, so each builds one
pseudo-audit per report (or per budget row) and feeds it through
:func:`get_assertion_result` / :func:`get_assertion_results`.
"""

from __future__ import annotations

import dataclasses
import logging
import re
from typing import Any, Sequence

from perfgate.assertions.base import AssertionResult, AssertionType
from perfgate.assertions.evaluator import get_assertion_result, get_assertion_results
from perfgate.config import AggregationMethod, AssertionOptions
from perfgate.reports import AuditResult, Report

logger = logging.getLogger(__name__)

BUDGET_AUDIT_ID = "performance-budget"
CATEGORIES_AUDIT_ID = "categories"
RESOURCE_SUMMARY_AUDIT_ID = "resource-summary"

_RESOURCE_SUMMARY_METRICS = {"size": "size", "count": "requestCount"}
_DIGITS = re.compile(r"\d+")


def _with_property(
    results: list[AssertionResult], audit_property: str
) -> list[AssertionResult]:
    return [dataclasses.replace(r, audit_property=audit_property) for r in results]


def _budget_row_results(
    key: str, actual: float, expected: float
) -> list[AssertionResult]:
    pseudo_audit = AuditResult(score=0, numeric_value=actual)
    results = get_assertion_result(
        [pseudo_audit],
        AggregationMethod.PESSIMISTIC,
        AssertionType.MAX_NUMERIC_VALUE,
        expected,
    )
    return _with_property(results, key)


def get_budget_assertion_results(
    audit_results: Sequence[AuditResult | None],
) -> list[AssertionResult]:
    """Re-express every over-budget row as a ``maxNumericValue`` violation.

    Budgets are already checked when the report is collected, so each
    over-budget row becomes a single-report pseudo-audit. Only the first
    violation per ``<resourceType>.<size|count>`` key is kept.
    """
    results: list[AssertionResult] = []
    seen_keys: set[str] = set()

    for audit_result in audit_results:
        if audit_result is None or audit_result.details is None:
            continue
        for row in audit_result.details.items or []:
            resource_type = row.get("resourceType")
            size_key = f"{resource_type}.size"
            count_key = f"{resource_type}.count"

            size_over_budget = row.get("sizeOverBudget")
            if size_over_budget and size_key not in seen_keys:
                actual = row.get("size")
                results.extend(
                    _budget_row_results(size_key, actual, actual - size_over_budget)
                )
                seen_keys.add(size_key)

            count_over_budget = row.get("countOverBudget")
            if count_over_budget and count_key not in seen_keys:
                match = _DIGITS.search(str(count_over_budget))
                if not match:
                    continue
                actual = row.get("requestCount")
                results.extend(
                    _budget_row_results(count_key, actual, actual - int(match.group()))
                )
                seen_keys.add(count_key)

    logger.debug(f"Found {len(results)} over-budget row(s)")
    return results


def get_category_assertion_results(
    audit_property: list[str],
    options: AssertionOptions,
    reports: Sequence[Report],
) -> list[AssertionResult]:
    if len(audit_property) != 1:
        raise ValueError(f'Invalid category assertion "{".".join(audit_property)}"')

    category_id = audit_property[0]
    pseudo_audits: list[AuditResult | None] = []
    for report in reports:
        category = report.categories.get(category_id)
        pseudo_audits.append(
            None if category is None else AuditResult(score=category.score)
        )

    return _with_property(get_assertion_results(pseudo_audits, options), category_id)


def _resource_summary_item(
    audit_result: AuditResult | None, resource_type: str
) -> dict[str, Any] | None:
    if audit_result is None or audit_result.details is None:
        return None
    for item in audit_result.details.items or []:
        if item.get("resourceType") == resource_type:
            return item
    return None


def get_resource_summary_assertion_results(
    audit_property: list[str],
    audit_results: Sequence[AuditResult | None],
    options: AssertionOptions,
) -> list[AssertionResult]:
    if len(audit_property) != 2 or audit_property[1] not in _RESOURCE_SUMMARY_METRICS:
        raise ValueError(
            f'Invalid resource-summary assertion "{".".join(audit_property)}"'
        )

    resource_type, metric = audit_property
    item_key = _RESOURCE_SUMMARY_METRICS[metric]

    pseudo_audits: list[AuditResult | None] = []
    for audit_result in audit_results:
        item = _resource_summary_item(audit_result, resource_type)
        if item is None:
            pseudo_audits.append(None)
            continue
        pseudo_audits.append(
            audit_result.model_copy(update={"numeric_value": item.get(item_key)})
        )

    return _with_property(
        get_assertion_results(pseudo_audits, options), f"{resource_type}.{metric}"
    )


def get_assertion_results_for_audit(
    audit_id: str,
    audit_property: list[str] | None,
    audit_results: Sequence[AuditResult | None],
    options: AssertionOptions,
    reports: Sequence[Report],
) -> list[AssertionResult]:
    """Dispatch one audit's assertion to its deriver or the generic evaluator."""
    if audit_id == BUDGET_AUDIT_ID:
        return get_budget_assertion_results(audit_results)
    if audit_id == CATEGORIES_AUDIT_ID and audit_property:
        return get_category_assertion_results(audit_property, options, reports)
    if audit_id == RESOURCE_SUMMARY_AUDIT_ID and audit_property:
        return get_resource_summary_assertion_results(
            audit_property, audit_results, options
        )
    return get_assertion_results(audit_results, options)
