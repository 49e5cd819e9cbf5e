# Copyright 2019-present Kensho Technologies, LLC.
import unittest

from ..ast_manipulation import (
    get_human_friendly_ast_field_name,
    get_operation_definitions,
    safe_parse_graphql,
)
from ..exceptions import GraphQLParsingError


DOCUMENT_TEXT = """
query A {
    first(limit: 1) {
        ... on First {
            string
        }
        ...FirstFields
    }
}

fragment FirstFields on First {
    int
}

mutation B {
    createThing(count: 1) {
        string
    }
}
"""


class AstManipulationTests(unittest.TestCase):
    def test_safe_parse_graphql(self) -> None:
        safe_parse_graphql(DOCUMENT_TEXT)

        with self.assertRaises(GraphQLParsingError):
            safe_parse_graphql("{ first(limit: 1) ")

    def test_get_operation_definitions(self) -> None:
        document_ast = safe_parse_graphql(DOCUMENT_TEXT)

        self.assertEqual(
            ["A", "B"],
            [definition.name.value for definition in get_operation_definitions(document_ast)],
        )
        self.assertEqual(
            ["B"],
            [definition.name.value for definition in get_operation_definitions(document_ast, "B")],
        )
        self.assertEqual([], get_operation_definitions(document_ast, "FirstFields"))

        with self.assertRaises(AssertionError):
            get_operation_definitions(DOCUMENT_TEXT)

    def test_get_human_friendly_ast_field_name(self) -> None:
        document_ast = safe_parse_graphql(DOCUMENT_TEXT)
        query_definition = document_ast.definitions[0]
        first_field = query_definition.selection_set.selections[0]
        inline_fragment, fragment_spread = first_field.selection_set.selections

        self.assertEqual(
            "query operation definition", get_human_friendly_ast_field_name(query_definition)
        )
        self.assertEqual("first", get_human_friendly_ast_field_name(first_field))
        self.assertEqual(
            "type coercion to First", get_human_friendly_ast_field_name(inline_fragment)
        )
        self.assertEqual(
            "spread of fragment FirstFields", get_human_friendly_ast_field_name(fragment_spread)
        )
