from __future__ import annotations

from pathlib import Path
from typing import Sequence

from junitparser import Failure, JUnitXml, Skipped, TestCase, TestSuite

from perfgate.assertions.base import AssertionResult


def describe_violation(result: AssertionResult) -> str:
    """One-line summary, e.g. ``expected <= 1500, got 1800``."""
    return f"expected {result.operator} {result.expected}, got {result.actual}"


def _case_name(result: AssertionResult) -> str:
    audit = result.audit_id or ""
    if result.audit_property:
        audit = f"{audit}.{result.audit_property}"
    return f"{audit} ({result.name.value})"


def write_junit(path: Path, results: Sequence[AssertionResult]) -> Path:
    """Write junit.xml with one suite per URL and one case per violation.

    ``error`` violations become failures; ``warn`` violations are recorded as
    skipped cases so they show up without failing the build.
    """
    xml = JUnitXml()
    suites: dict[str, TestSuite] = {}

    for result in results:
        url = result.url or ""
        suite = suites.get(url)
        if suite is None:
            suite = TestSuite(url or "unknown")
            suites[url] = suite

        case = TestCase(_case_name(result))
        case.classname = result.audit_id or ""
        message = describe_violation(result)
        if result.level == "warn":
            case.result = [Skipped(message)]
        else:
            case.result = [Failure(message)]
        suite.add_testcase(case)

    for suite in suites.values():
        xml.append(suite)

    path.parent.mkdir(parents=True, exist_ok=True)
    xml.write(str(path), pretty=True)
    return path
