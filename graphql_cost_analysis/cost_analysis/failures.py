# Copyright 2019-present Kensho Technologies, LLC.
from dataclasses import dataclass, field
from enum import Enum, unique
from typing import Any, Dict, Optional

from graphql.language.ast import Node

from ..typedefs import Number
from .config import MAX_COMPLEXITY, MIN_COMPLEXITY


@unique
class CostAnalysisFailureKind(Enum):
    """The kinds of violations the cost analysis can detect."""

    # A cost annotation in the schema specifies a complexity outside the allowed range.
    INVALID_COMPLEXITY = "INVALID_COMPLEXITY"

    # The total cost of the query exceeds the configured maximum cost.
    BUDGET_EXCEEDED = "BUDGET_EXCEEDED"


@dataclass(frozen=True)
class CostAnalysisFailure:
    """A single violation detected while estimating the cost of a query."""

    kind: CostAnalysisFailureKind

    # Human-readable description of the violation.
    message: str

    # The AST node the violation was detected at, or None if it concerns the whole document.
    node: Optional[Node] = None

    # Machine-readable details, surfaced as the "extensions" of the corresponding GraphQLError.
    extensions: Dict[str, Any] = field(default_factory=dict)


def get_invalid_complexity_message() -> str:
    """Return the message describing a cost annotation with an out-of-range complexity."""
    return "The complexity argument must be between {} and {}".format(
        MIN_COMPLEXITY, MAX_COMPLEXITY
    )


def get_budget_exceeded_message(maximum_cost: Number, total_cost: Number) -> str:
    """Return the message describing a query whose total cost exceeds the maximum cost."""
    return "The query exceeds the maximum cost of {}. Actual cost is {}".format(
        maximum_cost, total_cost
    )


def make_invalid_complexity_failure(node: Node, complexity: Any) -> CostAnalysisFailure:
    """Return the failure for a cost annotation with an out-of-range complexity at the node."""
    return CostAnalysisFailure(
        kind=CostAnalysisFailureKind.INVALID_COMPLEXITY,
        message=get_invalid_complexity_message(),
        node=node,
        extensions={
            "cost": {
                "complexity": complexity,
                "minimumComplexity": MIN_COMPLEXITY,
                "maximumComplexity": MAX_COMPLEXITY,
            }
        },
    )


def make_budget_exceeded_failure(maximum_cost: Number, total_cost: Number) -> CostAnalysisFailure:
    """Return the failure for a query whose total cost exceeds the maximum cost."""
    return CostAnalysisFailure(
        kind=CostAnalysisFailureKind.BUDGET_EXCEEDED,
        message=get_budget_exceeded_message(maximum_cost, total_cost),
        extensions={
            "cost": {
                "requestedQueryCost": total_cost,
                "maximumAvailable": maximum_cost,
            }
        },
    )
