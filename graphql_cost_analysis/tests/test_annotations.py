# Copyright 2019-present Kensho Technologies, LLC.
import unittest

from graphql import GraphQLField, GraphQLInt, GraphQLObjectType, GraphQLSchema, build_schema

from ..cost_analysis.annotations import (
    build_cost_rule_from_annotation,
    get_cost_directive,
    get_field_cost_annotation,
    get_type_cost_annotation,
)
from ..cost_analysis.config import CostRule
from .test_helpers import COST_DIRECTIVE_TEXT, get_schema


class CostAnnotationTests(unittest.TestCase):
    def test_field_annotation(self) -> None:
        schema = get_schema()
        query_type = schema.query_type

        self.assertEqual(
            {"multiplier": "limit", "useMultipliers": True, "complexity": 2},
            get_field_cost_annotation(schema, query_type.fields["first"]),
        )
        self.assertIsNone(get_field_cost_annotation(schema, query_type.fields["defaultCost"]))

    def test_type_annotation(self) -> None:
        schema = get_schema()

        self.assertEqual(
            {"complexity": 3}, get_type_cost_annotation(schema, schema.get_type("TypeCost"))
        )
        self.assertIsNone(get_type_cost_annotation(schema, schema.get_type("First")))
        self.assertIsNone(get_type_cost_annotation(schema, schema.get_type("String")))

    def test_type_annotation_on_type_extension(self) -> None:
        schema_text = (
            COST_DIRECTIVE_TEXT
            + """
            type Query {
                plain: Plain
            }

            type Plain {
                int: Int
            }

            extend type Plain @cost(complexity: 4)
            """
        )
        schema = build_schema(schema_text)
        self.assertEqual(
            {"complexity": 4}, get_type_cost_annotation(schema, schema.get_type("Plain"))
        )

    def test_schema_without_cost_directive(self) -> None:
        schema = build_schema(
            """
            type Query {
                int: Int
            }
            """
        )
        self.assertIsNone(get_cost_directive(schema))
        self.assertIsNone(get_field_cost_annotation(schema, schema.query_type.fields["int"]))
        self.assertIsNone(get_type_cost_annotation(schema, schema.query_type))

    def test_schema_not_built_from_sdl(self) -> None:
        query_type = GraphQLObjectType("Query", fields={"int": GraphQLField(GraphQLInt)})
        schema = GraphQLSchema(query_type, directives=[get_cost_directive(get_schema())])

        self.assertIsNotNone(get_cost_directive(schema))
        self.assertIsNone(get_field_cost_annotation(schema, query_type.fields["int"]))
        self.assertIsNone(get_type_cost_annotation(schema, query_type))

    def test_build_cost_rule_from_annotation(self) -> None:
        self.assertEqual(CostRule(complexity=1), build_cost_rule_from_annotation({}, 1))
        self.assertEqual(
            CostRule(complexity=12, use_multipliers=False, multiplier="limit"),
            build_cost_rule_from_annotation(
                {"complexity": 12, "useMultipliers": False, "multiplier": "limit"}, 1
            ),
        )
        self.assertEqual(
            CostRule(complexity=2), build_cost_rule_from_annotation({"useMultipliers": None}, 2)
        )
