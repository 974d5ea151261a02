"""Value getters and comparison operators for each assertion type."""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from typing import Any, Callable

from perfgate.assertions.base import AssertionType
from perfgate.reports import AuditResult


def _audit_ran(result: AuditResult | None) -> float | None:
    return 0 if result is None else 1


def _min_score(result: AuditResult) -> float | None:
    if is_finite_number(result.score):
        return result.score
    if result.score_display_mode == "notApplicable":
        return 1
    if result.score_display_mode == "informative":
        return 0
    return None


def _max_length(result: AuditResult) -> float | None:
    if result.details is None or result.details.items is None:
        return None
    return len(result.details.items)


def _max_numeric_value(result: AuditResult) -> float | None:
    return result.numeric_value


VALUE_GETTERS: dict[AssertionType, Callable[[Any], float | None]] = {
    AssertionType.AUDIT_RAN: _audit_ran,
    AssertionType.MIN_SCORE: _min_score,
    AssertionType.MAX_LENGTH: _max_length,
    AssertionType.MAX_NUMERIC_VALUE: _max_numeric_value,
}


@dataclass(frozen=True)
class Operator:
    symbol: str
    passes: Callable[[float, float], bool]


OPERATORS: dict[AssertionType, Operator] = {
    AssertionType.AUDIT_RAN: Operator("==", operator.eq),
    AssertionType.MIN_SCORE: Operator(">=", operator.ge),
    AssertionType.MAX_LENGTH: Operator("<=", operator.le),
    AssertionType.MAX_NUMERIC_VALUE: Operator("<=", operator.le),
}


def is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
