# Copyright 2019-present Kensho Technologies, LLC.
"""Reading cost annotations from the schema.

Cost annotations are @cost directives attached to field and type definitions in the schema SDL:

    directive @cost(
        complexity: Int, multiplier: String, useMultipliers: Boolean
    ) on OBJECT | FIELD_DEFINITION

    type Query {
        users(limit: Int): [User] @cost(complexity: 2, multiplier: "limit")
    }

The directive itself is declared by the schema owner. If the schema does not declare it,
no field or type is considered annotated.
"""
from typing import Any, Dict, Iterable, Optional

from graphql import GraphQLDirective, GraphQLField, GraphQLNamedType, GraphQLSchema
from graphql.execution.values import get_directive_values
from graphql.language.ast import Node

from ..typedefs import Number
from .config import CostRule


COST_DIRECTIVE_NAME = "cost"

# Names of the cost directive's arguments, as declared in the SDL.
COMPLEXITY_ARGUMENT = "complexity"
MULTIPLIER_ARGUMENT = "multiplier"
USE_MULTIPLIERS_ARGUMENT = "useMultipliers"


def get_cost_directive(schema: GraphQLSchema) -> Optional[GraphQLDirective]:
    """Return the cost directive declared by the schema, or None if it declares none."""
    return schema.get_directive(COST_DIRECTIVE_NAME)


def _get_cost_directive_values(
    schema: GraphQLSchema, ast_nodes: Iterable[Optional[Node]]
) -> Optional[Dict[str, Any]]:
    """Return the cost directive arguments of the first AST node carrying the directive, if any."""
    cost_directive = get_cost_directive(schema)
    if cost_directive is None:
        return None

    for ast_node in ast_nodes:
        if ast_node is None:
            # Schemas that were not built from SDL do not have AST nodes to read from.
            continue
        directive_values = get_directive_values(cost_directive, ast_node)
        if directive_values is not None:
            return directive_values
    return None


def get_field_cost_annotation(
    schema: GraphQLSchema, field_definition: GraphQLField
) -> Optional[Dict[str, Any]]:
    """Return the arguments of the cost directive on the field definition, or None."""
    return _get_cost_directive_values(schema, [field_definition.ast_node])


def get_type_cost_annotation(
    schema: GraphQLSchema, named_type: GraphQLNamedType
) -> Optional[Dict[str, Any]]:
    """Return the arguments of the cost directive on the type definition or extensions, or None."""
    ast_nodes = [named_type.ast_node]
    ast_nodes.extend(named_type.extension_ast_nodes or ())
    return _get_cost_directive_values(schema, ast_nodes)


def get_annotated_complexity(annotation: Dict[str, Any]) -> Optional[Any]:
    """Return the complexity explicitly authored in the cost annotation, or None if absent."""
    return annotation.get(COMPLEXITY_ARGUMENT)


def build_cost_rule_from_annotation(
    annotation: Dict[str, Any], default_complexity: Number
) -> CostRule:
    """Build the CostRule described by the arguments of a cost annotation.

    The authored complexity is taken as-is: checking that it is in the allowed range is
    the responsibility of the caller.
    """
    complexity = get_annotated_complexity(annotation)
    if complexity is None:
        complexity = default_complexity

    use_multipliers = annotation.get(USE_MULTIPLIERS_ARGUMENT)
    if use_multipliers is None:
        use_multipliers = True

    return CostRule(
        complexity=complexity,
        use_multipliers=use_multipliers,
        multiplier=annotation.get(MULTIPLIER_ARGUMENT),
    )
