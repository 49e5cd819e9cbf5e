# Copyright 2019-present Kensho Technologies, LLC.
from dataclasses import dataclass
import logging
from typing import Any, Dict, List, Optional, Set

from graphql import (
    GraphQLError,
    GraphQLField,
    GraphQLInterfaceType,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLSchema,
    get_named_type,
)
from graphql.execution.values import get_argument_values
from graphql.language.ast import (
    DocumentNode,
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    OperationDefinitionNode,
    OperationType,
    SelectionSetNode,
)

from ..ast_manipulation import (
    get_ast_field_name,
    get_human_friendly_ast_field_name,
    get_operation_definitions,
)
from ..typedefs import FailureReporter
from .budget import check_budget
from .config import CostAnalysisConfig
from .failures import CostAnalysisFailure, make_invalid_complexity_failure
from .resolver import get_multiplier_value, resolve_cost_rule
from .state import CostAnalysisResult, CostAnalysisState


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _TraversalContext:
    """The read-only inputs shared by every step of a single cost analysis."""

    schema: GraphQLSchema
    config: CostAnalysisConfig
    fragments: Dict[str, FragmentDefinitionNode]
    report_failure: FailureReporter


def _get_root_type(
    schema: GraphQLSchema, operation: OperationType
) -> Optional[GraphQLObjectType]:
    """Return the schema's root type for the given kind of operation, if the schema has one."""
    root_types = {
        OperationType.QUERY: schema.query_type,
        OperationType.MUTATION: schema.mutation_type,
        OperationType.SUBSCRIPTION: schema.subscription_type,
    }
    return root_types[operation]


def _get_field_definitions(parent_type: GraphQLNamedType) -> Dict[str, GraphQLField]:
    """Return the fields selectable on the type, empty for types without fields (e.g. unions)."""
    if isinstance(parent_type, (GraphQLObjectType, GraphQLInterfaceType)):
        return parent_type.fields
    return {}


def _get_argument_values(
    field_definition: GraphQLField, field_ast: FieldNode, variables: Dict[str, Any]
) -> Dict[str, Any]:
    """Return the field's argument values with variables substituted, empty if they are invalid."""
    try:
        return get_argument_values(field_definition, field_ast, variables)
    except GraphQLError as e:
        logger.debug(
            "Ignoring the arguments of field %s, since they could not be resolved: %s",
            get_human_friendly_ast_field_name(field_ast),
            e,
        )
        return {}


def _analyze_selection_set(
    context: _TraversalContext,
    state: CostAnalysisState,
    selection_set: Optional[SelectionSetNode],
    parent_type: GraphQLNamedType,
    expanding_fragment_names: Set[str],
) -> None:
    """Cost every selection in the selection set, selected on the given parent type."""
    if selection_set is None:
        return

    for selection in selection_set.selections:
        if isinstance(selection, FieldNode):
            _analyze_field(context, state, selection, parent_type, expanding_fragment_names)
        elif isinstance(selection, InlineFragmentNode):
            fragment_type = parent_type
            if selection.type_condition is not None:
                fragment_type = context.schema.get_type(selection.type_condition.name.value)
            if fragment_type is None:
                logger.debug(
                    "Skipping %s, since its type is not defined in the schema.",
                    get_human_friendly_ast_field_name(selection),
                )
                continue
            _analyze_selection_set(
                context, state, selection.selection_set, fragment_type, expanding_fragment_names
            )
        elif isinstance(selection, FragmentSpreadNode):
            _analyze_fragment_spread(context, state, selection, expanding_fragment_names)
        else:
            raise AssertionError(
                "Unexpected selection {} of type {} encountered.".format(
                    selection, type(selection).__name__
                )
            )


def _analyze_fragment_spread(
    context: _TraversalContext,
    state: CostAnalysisState,
    fragment_spread: FragmentSpreadNode,
    expanding_fragment_names: Set[str],
) -> None:
    """Cost the selections of the spread fragment as if they were written in place of the spread."""
    fragment_name = fragment_spread.name.value
    if fragment_name in expanding_fragment_names:
        # Fragment cycles are rejected by the standard validation rules.
        logger.debug("Skipping cyclic spread of fragment %s.", fragment_name)
        return

    fragment = context.fragments.get(fragment_name)
    if fragment is None:
        logger.debug("Skipping spread of unknown fragment %s.", fragment_name)
        return

    fragment_type = context.schema.get_type(fragment.type_condition.name.value)
    if fragment_type is None:
        logger.debug(
            "Skipping spread of fragment %s, since its type is not defined in the schema.",
            fragment_name,
        )
        return

    expanding_fragment_names.add(fragment_name)
    try:
        _analyze_selection_set(
            context, state, fragment.selection_set, fragment_type, expanding_fragment_names
        )
    finally:
        expanding_fragment_names.remove(fragment_name)


def _analyze_field(
    context: _TraversalContext,
    state: CostAnalysisState,
    field_ast: FieldNode,
    parent_type: GraphQLNamedType,
    expanding_fragment_names: Set[str],
) -> None:
    """Add the cost of the field to the state, then cost the field's selections."""
    field_name = get_ast_field_name(field_ast)
    field_definition = _get_field_definitions(parent_type).get(field_name)
    if field_definition is None:
        # Meta fields like __typename, and fields unknown to the schema, cost nothing.
        return

    child_type = get_named_type(field_definition.type)
    resolved_rule = resolve_cost_rule(
        context.schema, parent_type, field_name, field_definition, context.config
    )

    if not resolved_rule.has_valid_complexity:
        context.report_failure(
            make_invalid_complexity_failure(field_ast, resolved_rule.authored_complexity)
        )
        state.record_field(None)
        _analyze_selection_set(
            context, state, field_ast.selection_set, child_type, expanding_fragment_names
        )
        return

    rule = resolved_rule.rule
    own_multiplier = None
    if rule.use_multipliers:
        argument_values = _get_argument_values(
            field_definition, field_ast, context.config.variables
        )
        own_multiplier = get_multiplier_value(rule, argument_values)
        if own_multiplier is not None:
            # Negative multipliers would make the cost go down, so they cancel the cost instead.
            own_multiplier = max(own_multiplier, 0)
            state.add_cost(rule.complexity * state.path_factor * own_multiplier)
        else:
            state.add_cost(rule.complexity * state.path_factor)
    else:
        state.add_cost(rule.complexity)
    state.record_field(own_multiplier, use_multipliers=rule.use_multipliers)

    if own_multiplier is None:
        _analyze_selection_set(
            context, state, field_ast.selection_set, child_type, expanding_fragment_names
        )
    else:
        with state.push_multiplier(own_multiplier):
            _analyze_selection_set(
                context, state, field_ast.selection_set, child_type, expanding_fragment_names
            )


def _analyze_operation(
    context: _TraversalContext, state: CostAnalysisState, operation: OperationDefinitionNode
) -> None:
    """Cost the fields selected by the operation. The operation itself costs nothing."""
    root_type = _get_root_type(context.schema, operation.operation)
    if root_type is None:
        logger.debug(
            "Skipping %s, since the schema has no root type for it.",
            get_human_friendly_ast_field_name(operation),
        )
        return

    if state.multipliers:
        raise AssertionError(
            "Expected no multipliers to be in effect at the start of {}, but found: {}".format(
                get_human_friendly_ast_field_name(operation), state.multipliers
            )
        )
    cost_before_operation = state.cost
    _analyze_selection_set(context, state, operation.selection_set, root_type, set())
    logger.debug(
        "Estimated cost %s for %s.",
        state.cost - cost_before_operation,
        get_human_friendly_ast_field_name(operation),
    )


def analyze_query_cost(
    schema: GraphQLSchema,
    document_ast: DocumentNode,
    config: CostAnalysisConfig,
    report_failure: Optional[FailureReporter] = None,
) -> CostAnalysisResult:
    """Estimate the cost of executing the query, and report violations of the cost constraints.

    Every field selected by the query costs its complexity, times the multipliers of the fields
    enclosing it, times its own multiplier. Once all operations in the document are costed, the
    total is checked against the configured maximum cost.

    Args:
        schema: GraphQL schema object the query was validated against
        document_ast: DocumentNode, the parsed query
        config: cost analysis configuration
        report_failure: optional callable, called with each CostAnalysisFailure when it is
                        detected. Analysis continues after every failure.

    Returns:
        CostAnalysisResult with the total cost, the multipliers that applied to the last costed
        field, and all failures that were reported
    """
    if config is None:
        raise AssertionError("Expected a CostAnalysisConfig, but received None.")

    failures: List[CostAnalysisFailure] = []

    def _report(failure: CostAnalysisFailure) -> None:
        failures.append(failure)
        if report_failure is not None:
            report_failure(failure)

    fragments = {
        definition.name.value: definition
        for definition in document_ast.definitions
        if isinstance(definition, FragmentDefinitionNode)
    }
    context = _TraversalContext(
        schema=schema, config=config, fragments=fragments, report_failure=_report
    )
    state = CostAnalysisState(start_cost=config.start_cost)

    for operation in get_operation_definitions(document_ast, config.operation_name):
        _analyze_operation(context, state, operation)

    if state.multipliers:
        raise AssertionError(
            "Expected no multipliers to be in effect after the analysis, but found: {}".format(
                state.multipliers
            )
        )

    budget_failure = check_budget(state.cost, config.maximum_cost)
    if budget_failure is not None:
        _report(budget_failure)

    return CostAnalysisResult(
        cost=state.cost,
        multipliers=tuple(state.recorded_multipliers),
        failures=tuple(failures),
    )
