# Copyright 2017-present Kensho Technologies, LLC.
from typing import Any

from graphql import GraphQLSchema, build_schema

from ..ast_manipulation import safe_parse_graphql
from ..cost_analysis.config import CostAnalysisConfig
from ..cost_analysis.state import CostAnalysisResult
from ..cost_analysis.traversal import analyze_query_cost


# Complexities used by the cost annotations of the test schema.
CUSTOM_COST = 8
FIRST_COMPLEXITY = 2
SECOND_COMPLEXITY = 5
THIRD_COMPLEXITY = 6
TYPE_COST_COMPLEXITY = 3
OVERRIDE_TYPE_COST_COMPLEXITY = 2
CUSTOM_COST_WITH_RESOLVER_COMPLEXITY = 4
CREATE_THING_COMPLEXITY = 5

COST_DIRECTIVE_TEXT = """
directive @cost(
    complexity: Int
    multiplier: String
    useMultipliers: Boolean
) on OBJECT | INTERFACE | FIELD_DEFINITION
"""

SCHEMA_TEXT = (
    COST_DIRECTIVE_TEXT
    + """
schema {
    query: Query
    mutation: Mutation
}

interface BasicInterface {
    string: String
    int: Int
}

type Query {
    defaultCost: Int
    costWithoutMultipliers: Int @cost(useMultipliers: false, complexity: %(custom_cost)d)
    customCost: Int @cost(useMultipliers: false, complexity: %(custom_cost)d)
    badComplexityArgument: Int @cost(complexity: 12)
    customCostWithResolver(limit: Int): Int @cost(
        multiplier: "limit", useMultipliers: true, complexity: %(custom_cost_with_resolver)d
    )

    first(limit: Int): First @cost(
        multiplier: "limit", useMultipliers: true, complexity: %(first)d
    )

    overrideTypeCost: TypeCost @cost(complexity: %(override_type_cost)d)
    getCostByType: TypeCost
    badTypeCost: BadTypeCost

    basic: BasicInterface
    search(limit: Int): [SearchResult] @cost(complexity: 1, multiplier: "limit")
}

type Mutation {
    createThing(count: Int!): TypeCost @cost(complexity: %(create_thing)d, multiplier: "count")
}

type First implements BasicInterface {
    string: String
    int: Int
    second(limit: Int): Second @cost(
        multiplier: "limit", useMultipliers: true, complexity: %(second)d
    )
}

type Second implements BasicInterface {
    string: String
    int: Int
    badNested: Int @cost(complexity: 0)
    third(limit: Int): String @cost(
        multiplier: "limit", useMultipliers: true, complexity: %(third)d
    )
}

type TypeCost @cost(complexity: %(type_cost)d) {
    string: String
    int: Int
}

type BadTypeCost @cost(complexity: 11) {
    string: String
}

union SearchResult = First | Second
"""
    % {
        "custom_cost": CUSTOM_COST,
        "custom_cost_with_resolver": CUSTOM_COST_WITH_RESOLVER_COMPLEXITY,
        "first": FIRST_COMPLEXITY,
        "second": SECOND_COMPLEXITY,
        "third": THIRD_COMPLEXITY,
        "type_cost": TYPE_COST_COMPLEXITY,
        "override_type_cost": OVERRIDE_TYPE_COST_COMPLEXITY,
        "create_thing": CREATE_THING_COMPLEXITY,
    }
)


def get_schema() -> GraphQLSchema:
    """Get a schema object for testing."""
    return build_schema(SCHEMA_TEXT)


def get_query_cost_result(graphql_query: str, **config_kwargs: Any) -> CostAnalysisResult:
    """Analyze the query against the test schema, with a config built from the keyword args.

    If no maximum_cost is given, a budget large enough for every test query is used.
    """
    config_kwargs.setdefault("maximum_cost", 100000)
    config = CostAnalysisConfig(**config_kwargs)
    return analyze_query_cost(get_schema(), safe_parse_graphql(graphql_query), config)
