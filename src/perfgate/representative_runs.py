"""Pick the run closest to the median of a URL's runs."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from perfgate.reports import Report

_MEDIAN_METRICS = ("first-contentful-paint", "interactive")


def _metric_value(report: Report, audit_id: str) -> float:
    audit = report.audit(audit_id)
    if audit is None or audit.numeric_value is None:
        return 0.0
    return audit.numeric_value


def compute_representative_runs(
    runs_by_url: Sequence[Sequence[tuple[Report, Report]]],
) -> list[Report]:
    """Return one representative report per URL group.

    Each run is a pair of reports; the second element is measured and the
    first is returned. Runs are ranked by squared distance from the group's
    median first-contentful-paint and time-to-interactive. Empty groups are
    skipped.
    """
    representative_runs: list[Report] = []
    for runs in runs_by_url:
        if not runs:
            continue

        medians = {
            audit_id: float(np.median([_metric_value(r[1], audit_id) for r in runs]))
            for audit_id in _MEDIAN_METRICS
        }

        def distance(run: tuple[Report, Report]) -> float:
            return sum(
                (medians[audit_id] - _metric_value(run[1], audit_id)) ** 2
                for audit_id in _MEDIAN_METRICS
            )

        representative_runs.append(min(runs, key=distance)[0])
    return representative_runs
