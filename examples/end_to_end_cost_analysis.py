# Copyright 2019-present Kensho Technologies, LLC.
from graphql import build_schema

from graphql_cost_analysis import CostAnalysisConfig, GraphQLQueryCostError, get_query_cost

# Declare the cost directive, and annotate the schema with it.
schema = build_schema('''
    directive @cost(
        complexity: Int, multiplier: String, useMultipliers: Boolean
    ) on OBJECT | FIELD_DEFINITION

    type Query {
        users(limit: Int): [User] @cost(complexity: 2, multiplier: "limit")
    }

    type User {
        name: String
        friends(limit: Int): [User] @cost(complexity: 3, multiplier: "limit")
    }
''')

# Allow at most 1000 units of cost per query.
config = CostAnalysisConfig(maximum_cost=1000)

# Each of the 10 users costs 2, and each of their 20 friends costs 3: 10 * 2 + 10 * 20 * 3 = 620.
graphql_query = '''
{
    users(limit: 10) {
        name
        friends(limit: 20) {
            name
        }
    }
}
'''

try:
    print(get_query_cost(schema, graphql_query, config).cost)
except GraphQLQueryCostError as e:
    print(e)
