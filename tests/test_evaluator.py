"""Tests for the generic assertion evaluator and per-audit assembly."""

from perfgate.assertions.base import AssertionType
from perfgate.assertions.evaluator import get_assertion_result, get_assertion_results
from perfgate.config import AggregationMethod, AssertionOptions
from perfgate.reports import AuditResult


def _fcp(*values):
    return [AuditResult(numericValue=v) for v in values]


# --- get_assertion_result ---


def test_optimistic_passes_when_best_run_meets_threshold():
    results = get_assertion_result(
        _fcp(1200, 1800),
        AggregationMethod.OPTIMISTIC,
        AssertionType.MAX_NUMERIC_VALUE,
        1500,
    )
    assert results == []


def test_pessimistic_fails_on_worst_run():
    results = get_assertion_result(
        _fcp(1200, 1800),
        AggregationMethod.PESSIMISTIC,
        AssertionType.MAX_NUMERIC_VALUE,
        1500,
    )
    assert len(results) == 1
    result = results[0]
    assert result.name == AssertionType.MAX_NUMERIC_VALUE
    assert result.actual == 1800
    assert result.expected == 1500
    assert result.operator == "<="
    assert result.values == [1200, 1800]


def test_median_uses_average_of_middle_values():
    results = get_assertion_result(
        _fcp(1000, 1600, 2000, 1400),
        AggregationMethod.MEDIAN,
        AssertionType.MAX_NUMERIC_VALUE,
        1400,
    )
    assert len(results) == 1
    assert results[0].actual == 1500


def test_no_measured_values_reports_audit_ran():
    results = get_assertion_result(
        [AuditResult(), AuditResult()],
        AggregationMethod.OPTIMISTIC,
        AssertionType.MAX_NUMERIC_VALUE,
        1500,
    )
    assert len(results) == 1
    result = results[0]
    assert result.name == AssertionType.AUDIT_RAN
    assert result.actual == 0
    assert result.expected == 1
    assert result.operator == "=="
    assert result.values == [0, 0]


def test_optimistic_tolerates_partially_measured_runs():
    results = get_assertion_result(
        [AuditResult(numericValue=1200), AuditResult()],
        AggregationMethod.OPTIMISTIC,
        AssertionType.MAX_NUMERIC_VALUE,
        1500,
    )
    assert results == []


def test_pessimistic_flags_any_unmeasured_run():
    results = get_assertion_result(
        [AuditResult(numericValue=1200), AuditResult()],
        AggregationMethod.PESSIMISTIC,
        AssertionType.MAX_NUMERIC_VALUE,
        1500,
    )
    assert len(results) == 1
    assert results[0].name == AssertionType.AUDIT_RAN
    assert results[0].values == [1, 0]


def test_pessimistic_with_no_measured_runs_reports_audit_ran():
    results = get_assertion_result(
        [AuditResult()],
        AggregationMethod.PESSIMISTIC,
        AssertionType.MIN_SCORE,
        1,
    )
    assert [r.name for r in results] == [AssertionType.AUDIT_RAN]


def test_unmeasured_values_are_dropped_from_violation_values():
    results = get_assertion_result(
        [AuditResult(score=0.5), AuditResult(), AuditResult(score=0.7)],
        AggregationMethod.OPTIMISTIC,
        AssertionType.MIN_SCORE,
        0.9,
    )
    assert len(results) == 1
    assert results[0].actual == 0.7
    assert results[0].values == [0.5, 0.7]


# --- get_assertion_results ---


def test_implicit_min_score_of_one():
    results = get_assertion_results([AuditResult(score=0.5)], AssertionOptions())
    assert len(results) == 1
    assert results[0].name == AssertionType.MIN_SCORE
    assert results[0].expected == 1
    assert results[0].actual == 0.5
    assert results[0].operator == ">="


def test_implicit_min_score_passes_for_perfect_audit():
    assert get_assertion_results([AuditResult(score=1)], AssertionOptions()) == []


def test_not_applicable_audit_passes_implicit_min_score():
    audits = [AuditResult(scoreDisplayMode="notApplicable")]
    assert get_assertion_results(audits, AssertionOptions()) == []


def test_informative_audit_fails_implicit_min_score():
    audits = [AuditResult(scoreDisplayMode="informative")]
    results = get_assertion_results(audits, AssertionOptions())
    assert len(results) == 1
    assert results[0].actual == 0


def test_manual_assertion_suppresses_implicit_min_score():
    audits = [AuditResult(score=0, numericValue=1000)]
    options = AssertionOptions(maxNumericValue=1500)
    assert get_assertion_results(audits, options) == []


def test_max_length_and_max_numeric_value_both_fire():
    audits = [AuditResult(score=0, numericValue=2000, details={"items": [{}, {}, {}]})]
    options = AssertionOptions(maxLength=2, maxNumericValue=1000)
    results = get_assertion_results(audits, options)
    assert [r.name for r in results] == [
        AssertionType.MAX_LENGTH,
        AssertionType.MAX_NUMERIC_VALUE,
    ]
    assert results[0].actual == 3
    assert results[1].actual == 2000


def test_explicit_min_score_alongside_manual_assertion():
    audits = [AuditResult(score=0.4, numericValue=2000)]
    options = AssertionOptions(minScore=0.5, maxNumericValue=1000)
    results = get_assertion_results(audits, options)
    assert [r.name for r in results] == [
        AssertionType.MAX_NUMERIC_VALUE,
        AssertionType.MIN_SCORE,
    ]
    assert results[1].expected == 0.5


def test_aggregation_method_defaults_to_optimistic():
    audits = _fcp(1200, 1800)
    assert get_assertion_results(audits, AssertionOptions(maxNumericValue=1500)) == []

    options = AssertionOptions(maxNumericValue=1500, aggregationMethod="pessimistic")
    results = get_assertion_results(audits, options)
    assert results[0].actual == 1800


def test_missing_audit_in_any_report_reports_audit_ran():
    results = get_assertion_results([AuditResult(score=1), None], AssertionOptions())
    assert len(results) == 1
    assert results[0].name == AssertionType.AUDIT_RAN
    assert results[0].values == [1, 0]
    assert results[0].operator == "=="
