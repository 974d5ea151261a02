from __future__ import annotations

import numpy as np

from perfgate.assertions.base import AssertionType
from perfgate.config import AggregationMethod


def aggregate(
    values: list[float],
    aggregation_method: AggregationMethod,
    assertion_type: AssertionType,
) -> float:
    """Collapse finite per-report *values* into one representative value.

    ``optimistic`` picks the friendliest value for the assertion's direction
    and ``pessimistic`` the least friendly. ``max*`` assertions prefer small
    values, ``min*`` assertions prefer large ones. ``median-run`` reports
    are reduced upstream to a single run, so any pick returns that run's
    value.
    """
    if not values:
        raise ValueError("Cannot aggregate an empty list of values")

    if aggregation_method == AggregationMethod.MEDIAN:
        return float(np.median(values))

    use_min = (
        aggregation_method == AggregationMethod.OPTIMISTIC
        and assertion_type.value.startswith("max")
    ) or (
        aggregation_method == AggregationMethod.PESSIMISTIC
        and assertion_type.value.startswith("min")
    )
    return min(values) if use_min else max(values)
