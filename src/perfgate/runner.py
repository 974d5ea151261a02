"""Resolve assert configs against report batches and collect violations."""

from __future__ import annotations

import dataclasses
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Sequence

from perfgate.assertions.base import AssertionResult
from perfgate.assertions.derived import get_assertion_results_for_audit
from perfgate.config import (
    AggregationMethod,
    AssertConfig,
    AssertionLevel,
    AssertionValue,
    normalize_assertion,
)
from perfgate.markdown import split_markdown_link
from perfgate.presets import get_preset
from perfgate.reports import AuditResult, Report, coerce_reports
from perfgate.representative_runs import compute_representative_runs
from perfgate.utils import deep_merge, group_by, kebab_case

logger = logging.getLogger(__name__)

PresetLookup = Callable[[str], dict[str, Any]]

DOCUMENTATION_HOSTS = (
    "web.dev",
    "developers.google.com/web",
    "developer.chrome.com/docs/lighthouse",
)


@dataclass
class AuditToAssert:
    assertion_key: str
    audit_id: str
    audit_property: list[str] | None = None
    audit_title: str | None = None
    audit_documentation_link: str | None = None


@dataclass
class ResolvedAssertions:
    """A config resolved against the reports of a single URL."""

    assertions: dict[str, AssertionValue]
    audits_to_assert: list[AuditToAssert]
    median_reports: list[Report]
    aggregation_method: AggregationMethod | None
    reports: list[Report] = field(default_factory=list)
    url: str = ""


def _apply_preset(config: AssertConfig, preset_lookup: PresetLookup) -> AssertConfig:
    if not config.preset:
        return config
    overrides = config.dump()
    overrides.pop("preset")
    merged = deep_merge(preset_lookup(config.preset), overrides)
    return AssertConfig.model_validate(merged)


def _normalize_assertion_keys(
    assertions: dict[str, AssertionValue],
) -> dict[str, AssertionValue]:
    normalized: dict[str, AssertionValue] = {}
    for key, value in assertions.items():
        normalized.setdefault(kebab_case(key), value)
    return normalized


def _documentation_link(audit: AuditResult | None) -> str | None:
    if audit is None or not audit.description:
        return None
    for segment in split_markdown_link(audit.description):
        href = segment.link_href or ""
        if segment.is_link and any(host in href for host in DOCUMENTATION_HOSTS):
            return href
    return None


def _audit_to_assert(assertion_key: str, reports: Sequence[Report]) -> AuditToAssert:
    audit_id, *audit_property = assertion_key.split(".")
    instances = [a for a in (r.audit(audit_id) for r in reports) if a is not None]

    # A failing instance makes the most useful example
    audit = next((a for a in instances if a.score != 1), None)
    if audit is None and instances:
        audit = instances[0]

    return AuditToAssert(
        assertion_key=assertion_key,
        audit_id=audit_id,
        audit_property=audit_property or None,
        audit_title=audit.title if audit else None,
        audit_documentation_link=_documentation_link(audit),
    )


def resolve_assertion_options_and_reports(
    config: AssertConfig,
    unfiltered_reports: Sequence[Report],
    preset_lookup: PresetLookup = get_preset,
) -> ResolvedAssertions:
    """Merge the preset, filter reports by URL and list the audits to assert.

    Raises ValueError if the filtered reports span more than one URL.
    """
    config = _apply_preset(config, preset_lookup)

    url_pattern = config.matching_url_pattern
    if url_pattern:
        regex = re.compile(url_pattern)
        reports = [r for r in unfiltered_reports if regex.search(r.final_url)]
    else:
        reports = list(unfiltered_reports)

    unique_urls = {r.final_url for r in reports}
    if len(unique_urls) > 1:
        raise ValueError("Can only assert one URL at a time!")

    median_reports = compute_representative_runs([[(r, r) for r in reports]])

    assertions = _normalize_assertion_keys(config.assertions or {})
    audits_to_assert = [_audit_to_assert(key, reports) for key in assertions]
    logger.debug(
        f"Resolved {len(audits_to_assert)} audit(s) to assert "
        f"against {len(reports)} report(s)"
    )

    return ResolvedAssertions(
        assertions=assertions,
        audits_to_assert=audits_to_assert,
        median_reports=median_reports,
        aggregation_method=config.aggregation_method,
        reports=reports,
        url=reports[0].final_url if reports else "",
    )


def get_all_filtered_assertion_results(
    config: AssertConfig,
    unfiltered_reports: Sequence[Report],
    preset_lookup: PresetLookup = get_preset,
) -> list[AssertionResult]:
    """Evaluate one (non-matrix) config against the reports of one URL."""
    resolved = resolve_assertion_options_and_reports(
        config, unfiltered_reports, preset_lookup
    )

    if not resolved.reports:
        return []

    results: list[AssertionResult] = []
    for audit in resolved.audits_to_assert:
        level, assertion_options = normalize_assertion(
            resolved.assertions.get(audit.assertion_key)
        )
        if level == AssertionLevel.OFF:
            continue

        options = assertion_options
        if options.aggregation_method is None:
            options = options.model_copy(
                update={"aggregation_method": resolved.aggregation_method}
            )

        reports_for_audit = (
            resolved.median_reports
            if options.aggregation_method == AggregationMethod.MEDIAN_RUN
            else resolved.reports
        )
        audit_results = [r.audit(audit.audit_id) for r in reports_for_audit]

        for result in get_assertion_results_for_audit(
            audit.audit_id,
            audit.audit_property,
            audit_results,
            options,
            reports_for_audit,
        ):
            results.append(
                dataclasses.replace(
                    result,
                    audit_id=audit.audit_id,
                    level=level.value,
                    url=resolved.url,
                    audit_title=audit.audit_title,
                    audit_documentation_link=audit.audit_documentation_link,
                )
            )

    logger.debug(f"{resolved.url}: {len(results)} violation(s)")
    return results


def _matrix_entries(config: AssertConfig) -> list[AssertConfig]:
    if config.assert_matrix is None:
        return [config]
    if (
        config.assertions is not None
        or config.preset is not None
        or config.budgets_file is not None
        or config.aggregation_method is not None
    ):
        raise ValueError("Cannot use assertMatrix with other options")
    return config.assert_matrix


def evaluate(
    config: AssertConfig | dict[str, Any],
    reports: Iterable[Report | dict[str, Any]],
    preset_lookup: PresetLookup = get_preset,
) -> list[AssertionResult]:
    """Assert every URL's reports against *config* and return all violations.

    Reports are grouped by ``finalUrl``; each group is evaluated against each
    ``assertMatrix`` entry (or the config itself) independently.
    """
    if not isinstance(config, AssertConfig):
        config = AssertConfig.model_validate(config)
    report_list = coerce_reports(reports)

    entries = _matrix_entries(config)
    groups = group_by(report_list, lambda r: r.final_url)
    logger.debug(
        f"Evaluating {len(report_list)} report(s) across {len(groups)} URL(s) "
        f"and {len(entries)} config(s)"
    )

    results: list[AssertionResult] = []
    for group in groups:
        for entry in entries:
            results.extend(
                get_all_filtered_assertion_results(entry, group, preset_lookup)
            )
    return results

