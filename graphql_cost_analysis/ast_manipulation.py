# Copyright 2019-present Kensho Technologies, LLC.
from graphql.error import GraphQLSyntaxError
from graphql.language.ast import (
    DocumentNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    OperationDefinitionNode,
)
from graphql.language.parser import parse

from .exceptions import GraphQLParsingError


def get_ast_field_name(ast):
    """Return the field name for the given AST node."""
    return ast.name.value


def get_human_friendly_ast_field_name(ast):
    """Return a human-friendly name for the AST node, suitable for error and log messages."""
    if isinstance(ast, InlineFragmentNode):
        if ast.type_condition is None:
            return "inline fragment"
        return "type coercion to {}".format(ast.type_condition.name.value)
    elif isinstance(ast, FragmentSpreadNode):
        return "spread of fragment {}".format(ast.name.value)
    elif isinstance(ast, OperationDefinitionNode):
        return "{} operation definition".format(ast.operation.value)

    return get_ast_field_name(ast)


def safe_parse_graphql(graphql_string: str) -> DocumentNode:
    """Return an AST representation of the given GraphQL input, reraising GraphQL library errors."""
    try:
        ast = parse(graphql_string)
    except GraphQLSyntaxError as e:
        raise GraphQLParsingError(e) from e

    return ast


def get_operation_definitions(document_ast, operation_name=None):
    """Return the operation definitions in the document, optionally only the one with that name.

    Args:
        document_ast: DocumentNode, the parsed query document
        operation_name: optional str, if given, only the operation with this name is returned

    Returns:
        list of OperationDefinitionNode objects, in document order. Fragment definitions are
        never included. The list is empty if no operation matches the given name.
    """
    if not isinstance(document_ast, DocumentNode):
        raise AssertionError(
            'Received an unexpected value for "document_ast": {}'.format(document_ast)
        )

    operation_definitions = [
        definition
        for definition in document_ast.definitions
        if isinstance(definition, OperationDefinitionNode)
    ]
    if operation_name is None:
        return operation_definitions

    return [
        definition
        for definition in operation_definitions
        if definition.name is not None and definition.name.value == operation_name
    ]
