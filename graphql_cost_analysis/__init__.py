# Copyright 2017-present Kensho Technologies, LLC.
"""Commonly-used functions and data types from this package."""
from typing import List

from graphql import GraphQLError, GraphQLSchema, specified_rules, validate

from .ast_manipulation import safe_parse_graphql
from .cost_analysis.budget import check_budget  # noqa
from .cost_analysis.config import (  # noqa
    MAX_COMPLEXITY,
    MIN_COMPLEXITY,
    CostAnalysisConfig,
    CostRule,
    validate_cost_map,
)
from .cost_analysis.failures import CostAnalysisFailure, CostAnalysisFailureKind  # noqa
from .cost_analysis.resolver import CostRuleSource, resolve_cost_rule  # noqa
from .cost_analysis.state import CostAnalysisResult
from .cost_analysis.traversal import analyze_query_cost
from .cost_analysis.validation_rule import CostAnalysisRule, cost_analysis_rule  # noqa
from .exceptions import (  # noqa
    GraphQLCostAnalysisError,
    GraphQLInvalidCostConfigurationError,
    GraphQLInvalidCostMapError,
    GraphQLParsingError,
    GraphQLQueryCostError,
)


__package_name__ = "graphql-cost-analysis"
__version__ = "1.0.0"


def get_query_cost(
    schema: GraphQLSchema, graphql_query: str, config: CostAnalysisConfig
) -> CostAnalysisResult:
    """Estimate the cost of the GraphQL query, raising an error if any constraint is violated.

    Args:
        schema: GraphQL schema object the query is meant for. The query is assumed to be valid
                against it.
        graphql_query: str, GraphQL query whose cost to estimate
        config: cost analysis configuration

    Returns:
        CostAnalysisResult object, containing:
            - cost: number, the estimated cost of the query
            - multipliers: tuple of ints, the multipliers that applied to the last costed field
            - failures: empty tuple

    Raises:
        - GraphQLParsingError if the query could not be parsed
        - GraphQLQueryCostError if the query exceeds the maximum cost, or if a cost annotation
          it uses has an invalid complexity
    """
    document_ast = safe_parse_graphql(graphql_query)
    result = analyze_query_cost(schema, document_ast, config)
    if result.failures:
        raise GraphQLQueryCostError(result.failures)
    return result


def validate_query_cost(
    schema: GraphQLSchema, graphql_query: str, config: CostAnalysisConfig
) -> List[GraphQLError]:
    """Validate the GraphQL query against the schema, including its cost.

    Args:
        schema: GraphQL schema object the query is meant for
        graphql_query: str, GraphQL query to validate
        config: cost analysis configuration

    Returns:
        list of GraphQLErrors from the standard validation rules and the cost analysis rule,
        empty if the query is valid and within budget

    Raises:
        GraphQLParsingError if the query could not be parsed
    """
    document_ast = safe_parse_graphql(graphql_query)
    rules = list(specified_rules)
    rules.append(cost_analysis_rule(config))
    return validate(schema, document_ast, rules)
