# Copyright 2017-present Kensho Technologies, LLC.
class GraphQLCostAnalysisError(Exception):
    """Generic error when estimating the cost of a GraphQL query."""


class GraphQLParsingError(GraphQLCostAnalysisError):
    """Exception raised when the provided GraphQL string could not be parsed."""


class GraphQLInvalidCostConfigurationError(GraphQLCostAnalysisError):
    """Exception raised when the cost analysis configuration is invalid.

    For example:
    - the maximum cost may be missing, negative or not a number;
    - the default cost may be negative;
    - a cost map entry may contain unexpected keys or values of the wrong type.
    """


class GraphQLInvalidCostMapError(GraphQLCostAnalysisError):
    """Exception raised when the cost map does not agree with the schema.

    This could be due to the cost map naming a type that the schema does not define,
    a type without fields, or a field that is not defined on the named type.
    """


class GraphQLQueryCostError(GraphQLCostAnalysisError):
    """Exception raised when the cost analysis of a query reported one or more failures."""

    def __init__(self, failures):
        """Create the error from the non-empty sequence of reported CostAnalysisFailure objects."""
        if not failures:
            raise AssertionError("Expected at least one failure, but received none.")
        self.failures = tuple(failures)
        super(GraphQLQueryCostError, self).__init__(
            "; ".join(failure.message for failure in self.failures)
        )
