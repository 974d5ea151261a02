"""Assertion system for evaluating performance audit reports."""

from perfgate.assertions.base import AssertionResult, AssertionType
from perfgate.assertions.derived import get_assertion_results_for_audit
from perfgate.assertions.evaluator import get_assertion_result, get_assertion_results

__all__ = [
    "AssertionResult",
    "AssertionType",
    "get_assertion_result",
    "get_assertion_results",
    "get_assertion_results_for_audit",
]
