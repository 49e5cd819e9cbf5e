# Copyright 2019-present Kensho Technologies, LLC.
import logging
from typing import Any, Optional, Tuple, Type

from graphql import GraphQLError
from graphql.language import DocumentNode
from graphql.validation import ValidationContext, ValidationRule

from ..exceptions import GraphQLInvalidCostMapError
from ..typedefs import Number
from .config import CostAnalysisConfig, validate_cost_map
from .failures import CostAnalysisFailure
from .traversal import analyze_query_cost


logger = logging.getLogger(__name__)


def convert_failure_to_graphql_error(failure: CostAnalysisFailure) -> GraphQLError:
    """Return the GraphQLError describing the cost analysis failure."""
    nodes = None if failure.node is None else [failure.node]
    return GraphQLError(
        failure.message,
        nodes,
        extensions=dict(failure.extensions, code=failure.kind.value),
    )


class CostAnalysisRule(ValidationRule):
    """Validation rule reporting queries that are too expensive to execute.

    Use cost_analysis_rule() to get a rule class that can be passed to graphql.validate(),
    or instantiate this class directly with an explicit configuration.
    """

    # Set on the subclasses created by cost_analysis_rule().
    config: Optional[CostAnalysisConfig] = None

    def __init__(
        self, context: ValidationContext, config: Optional[CostAnalysisConfig] = None
    ) -> None:
        """Create the rule for the given validation context.

        Args:
            context: the validation context of the document being validated
            config: cost analysis configuration; if omitted, the class attribute is used
        """
        super(CostAnalysisRule, self).__init__(context)
        if config is not None:
            self.config = config
        if self.config is None:
            raise AssertionError(
                "CostAnalysisRule requires a CostAnalysisConfig. Use cost_analysis_rule() to "
                "create a rule class with a configuration."
            )

        # The outcome of the most recent analysis, exposed for introspection.
        self.cost: Number = self.config.start_cost
        self.multipliers: Tuple[int, ...] = ()

    def _report_failure(self, failure: CostAnalysisFailure) -> None:
        """Report the cost analysis failure to the validation context."""
        self.report_error(convert_failure_to_graphql_error(failure))

    def enter_document(self, node: DocumentNode, *_args: Any) -> None:
        """Estimate the cost of the whole document."""
        try:
            validate_cost_map(self.context.schema, self.config.cost_map)
        except GraphQLInvalidCostMapError as e:
            self.report_error(GraphQLError(str(e), original_error=e))
            return

        result = analyze_query_cost(
            self.context.schema, node, self.config, report_failure=self._report_failure
        )
        self.cost = result.cost
        self.multipliers = result.multipliers
        logger.debug(
            "Estimated query cost %s, maximum cost %s.", self.cost, self.config.maximum_cost
        )


def cost_analysis_rule(config: CostAnalysisConfig) -> Type[CostAnalysisRule]:
    """Return a validation rule class that estimates query costs with the given configuration.

    Example:
        rule = cost_analysis_rule(CostAnalysisConfig(maximum_cost=1000))
        errors = graphql.validate(schema, document_ast, [*specified_rules, rule])

    Args:
        config: cost analysis configuration

    Returns:
        subclass of CostAnalysisRule bound to the configuration
    """
    return type("ConfiguredCostAnalysisRule", (CostAnalysisRule,), {"config": config})
