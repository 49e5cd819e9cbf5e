# Copyright 2019-present Kensho Technologies, LLC.
from dataclasses import dataclass
from enum import Enum, unique
from numbers import Integral
from typing import Any, Dict, Optional

from funcy import get_in
from graphql import GraphQLField, GraphQLSchema, get_named_type

from ..typedefs import FieldContainerType
from .annotations import (
    build_cost_rule_from_annotation,
    get_annotated_complexity,
    get_field_cost_annotation,
    get_type_cost_annotation,
)
from .config import MAX_COMPLEXITY, MIN_COMPLEXITY, CostAnalysisConfig, CostRule


@unique
class CostRuleSource(Enum):
    """Where the cost rule of a field came from, in order of decreasing precedence."""

    COST_MAP = "COST_MAP"
    FIELD_ANNOTATION = "FIELD_ANNOTATION"
    TYPE_ANNOTATION = "TYPE_ANNOTATION"
    DEFAULT = "DEFAULT"


@dataclass(frozen=True)
class ResolvedCostRule:
    """The cost rule that applies to a field, together with its provenance."""

    rule: CostRule
    source: CostRuleSource

    # The complexity exactly as authored in a cost annotation, None if there was no annotation
    # or the annotation did not specify a complexity.
    authored_complexity: Optional[Any] = None

    @property
    def has_valid_complexity(self) -> bool:
        """Return True unless the rule comes from an annotation with an out-of-range complexity."""
        if self.authored_complexity is None:
            return True
        return (
            isinstance(self.authored_complexity, Integral)
            and MIN_COMPLEXITY <= self.authored_complexity <= MAX_COMPLEXITY
        )


def _make_resolved_annotation_rule(
    annotation: Dict[str, Any], source: CostRuleSource, config: CostAnalysisConfig
) -> ResolvedCostRule:
    """Return the ResolvedCostRule for the given cost annotation arguments."""
    return ResolvedCostRule(
        rule=build_cost_rule_from_annotation(annotation, config.default_complexity),
        source=source,
        authored_complexity=get_annotated_complexity(annotation),
    )


def resolve_cost_rule(
    schema: GraphQLSchema,
    declaring_type: FieldContainerType,
    field_name: str,
    field_definition: GraphQLField,
    config: CostAnalysisConfig,
) -> ResolvedCostRule:
    """Determine the cost rule that applies to a field selected on the given type.

    The first applicable source wins:
        1. the cost map entry for (declaring_type.name, field_name);
        2. the cost annotation on the field definition;
        3. the cost annotation on the named type the field returns;
        4. the default rule, whose complexity is the configured default cost.

    Args:
        schema: GraphQL schema object, used to look up the cost annotation directive
        declaring_type: the object or interface type the field is selected on
        field_name: name of the selected field
        field_definition: the definition of field_name on declaring_type
        config: cost analysis configuration

    Returns:
        ResolvedCostRule for the field. If the rule came from an annotation whose complexity is
        out of the allowed range, its has_valid_complexity property is False.
    """
    cost_map_rule = get_in(config.cost_map, [declaring_type.name, field_name])
    if cost_map_rule is not None:
        return ResolvedCostRule(rule=cost_map_rule, source=CostRuleSource.COST_MAP)

    field_annotation = get_field_cost_annotation(schema, field_definition)
    if field_annotation is not None:
        return _make_resolved_annotation_rule(
            field_annotation, CostRuleSource.FIELD_ANNOTATION, config
        )

    type_annotation = get_type_cost_annotation(schema, get_named_type(field_definition.type))
    if type_annotation is not None:
        return _make_resolved_annotation_rule(
            type_annotation, CostRuleSource.TYPE_ANNOTATION, config
        )

    return ResolvedCostRule(
        rule=CostRule(complexity=config.default_cost), source=CostRuleSource.DEFAULT
    )


def get_multiplier_value(rule: CostRule, argument_values: Dict[str, Any]) -> Optional[int]:
    """Return the integer value of the rule's multiplier argument, or None if there is none.

    A multiplier argument that was not provided, or whose value is not an integer (or a string
    spelling one), is treated as if the rule did not declare a multiplier. Negative values are
    returned as-is; clamping them is up to the caller.

    Args:
        rule: the cost rule of the field
        argument_values: dict of argument name -> resolved value, for the field's arguments

    Returns:
        int value of the multiplier argument, or None
    """
    if rule.multiplier is None:
        return None

    value = argument_values.get(rule.multiplier)
    if isinstance(value, bool):
        return None
    elif isinstance(value, Integral):
        return int(value)
    elif isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    else:
        return None
