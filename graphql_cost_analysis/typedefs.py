# Copyright 2020-present Kensho Technologies, LLC.
from typing import TYPE_CHECKING, Any, Dict, Mapping, Protocol, Union

from graphql import GraphQLInterfaceType, GraphQLObjectType


if TYPE_CHECKING:
    from .cost_analysis.config import CostRule  # noqa  # pylint: disable=unused-import
    from .cost_analysis.failures import CostAnalysisFailure  # noqa  # pylint: disable=unused-import


# Costs may be configured as ints or floats, e.g. a fractional default cost.
Number = Union[int, float]

# The types whose fields may be selected and costed.
FieldContainerType = Union[GraphQLInterfaceType, GraphQLObjectType]

# A single cost map entry, either already built or in the dict form accepted from configuration:
# {"complexity": 3, "multiplier": "limit", "useMultipliers": True}
CostMapEntryType = Union["CostRule", Mapping[str, Any]]

# Dict of GraphQL type name -> (Dict of field name on that type -> cost map entry)
CostMapType = Mapping[str, Mapping[str, CostMapEntryType]]

# The normalized cost map, after every entry was built into a CostRule.
NormalizedCostMapType = Dict[str, Dict[str, "CostRule"]]


class FailureReporter(Protocol):
    """A callable accepting each cost analysis failure as soon as it is detected."""

    def __call__(self, failure: "CostAnalysisFailure") -> None:
        """Report the given failure."""
        ...
