# Copyright 2019-present Kensho Technologies, LLC.
from typing import Optional

from ..typedefs import Number
from .failures import CostAnalysisFailure, make_budget_exceeded_failure


def check_budget(total_cost: Number, maximum_cost: Number) -> Optional[CostAnalysisFailure]:
    """Return the failure to report if the total cost exceeds the maximum cost, or None.

    Reaching the maximum cost exactly is allowed. This is only meant to be called once per
    analysis, after the whole query was costed, so that the reported cost is the full total.

    Args:
        total_cost: the accumulated cost of the query
        maximum_cost: the configured budget

    Returns:
        CostAnalysisFailure of kind BUDGET_EXCEEDED if total_cost > maximum_cost, None otherwise
    """
    if total_cost > maximum_cost:
        return make_budget_exceeded_failure(maximum_cost, total_cost)
    return None
