"""Base data structures for the assertion system."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class AssertionType(str, Enum):
    AUDIT_RAN = "auditRan"
    MIN_SCORE = "minScore"
    MAX_LENGTH = "maxLength"
    MAX_NUMERIC_VALUE = "maxNumericValue"


_OUTPUT_KEYS = {
    "audit_id": "auditId",
    "audit_property": "auditProperty",
    "audit_title": "auditTitle",
    "audit_documentation_link": "auditDocumentationLink",
}


@dataclass(frozen=True)
class AssertionResult:
    """A failed assertion (violation) for one audit on one URL.

    Attributes:
        name: Which comparison failed; ``auditRan`` when the audit could not
            be measured at all.
        operator: Comparison symbol, e.g. ``<=``.
        expected: Threshold the aggregate was compared against.
        actual: Aggregated value across the considered reports.
        values: Per-report values that fed the aggregate. For ``auditRan``
            one 1/0 entry per report marking whether it was measured.
        url: URL the reports belong to. Set by the orchestrator.
        level: Failure severity. Set by the orchestrator.
        audit_id: Audit the assertion was declared on.
        audit_property: Dotted sub-property for derived audits, e.g.
            ``script.size``.
        audit_title: Human readable audit title, when known.
        audit_documentation_link: First documentation link found in the
            audit description.
    """

    name: AssertionType
    operator: str
    expected: float
    actual: float
    values: list[float] = field(default_factory=list)
    url: str | None = None
    level: str | None = None
    audit_id: str | None = None
    audit_property: str | None = None
    audit_title: str | None = None
    audit_documentation_link: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase output record, omitting unset optional fields."""
        out: dict[str, Any] = {
            "name": self.name.value,
            "operator": self.operator,
            "expected": self.expected,
            "actual": self.actual,
            "values": list(self.values),
        }
        if self.url is not None:
            out["url"] = self.url
        if self.level is not None:
            out["level"] = getattr(self.level, "value", self.level)
        for attr, key in _OUTPUT_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                out[key] = value
        return out
