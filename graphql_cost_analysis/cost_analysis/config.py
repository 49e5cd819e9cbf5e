# Copyright 2019-present Kensho Technologies, LLC.
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, Mapping, Optional

from graphql import GraphQLInterfaceType, GraphQLObjectType, GraphQLSchema

from ..exceptions import GraphQLInvalidCostConfigurationError, GraphQLInvalidCostMapError
from ..typedefs import CostMapEntryType, CostMapType, NormalizedCostMapType, Number


# Complexity values authored in the schema via the cost annotation must fall in this range.
# Complexities supplied through the cost map are trusted and not range checked.
MIN_COMPLEXITY = 1
MAX_COMPLEXITY = 10

# Keys accepted in the dict form of a cost map entry. Both the camelCase spelling used by the
# cost annotation's arguments and the snake_case spelling of the CostRule fields are accepted.
_COMPLEXITY_KEY = "complexity"
_MULTIPLIER_KEY = "multiplier"
_USE_MULTIPLIERS_KEYS = ("useMultipliers", "use_multipliers")
_ALLOWED_COST_MAP_ENTRY_KEYS = frozenset((_COMPLEXITY_KEY, _MULTIPLIER_KEY) + _USE_MULTIPLIERS_KEYS)


def _is_number(value: Any) -> bool:
    """Return True if the value is a real number, and not a bool in disguise."""
    return isinstance(value, Real) and not isinstance(value, bool)


@dataclass(frozen=True)
class CostRule:
    """The cost specification of a single field."""

    # The cost of a single instance of the field, before any multipliers are applied.
    complexity: Number

    # Whether the multipliers of the field's ancestors and of the field itself apply to it.
    use_multipliers: bool = True

    # The name of an argument of the field whose integer value scales the cost of the field
    # and of everything selected within it. None if the field does not scale its cost.
    multiplier: Optional[str] = None

    @classmethod
    def from_dict(cls, entry: Mapping[str, Any], default_complexity: Number) -> "CostRule":
        """Build a CostRule from its dict form, as used in cost maps and cost annotations.

        Args:
            entry: mapping with optional keys "complexity", "multiplier" and either
                   "useMultipliers" or "use_multipliers"
            default_complexity: the complexity to use if the entry does not specify one

        Returns:
            CostRule built from the entry

        Raises:
            GraphQLInvalidCostConfigurationError if the entry has unexpected keys, or if any of
            its values are of the wrong type
        """
        unexpected_keys = set(entry.keys()) - _ALLOWED_COST_MAP_ENTRY_KEYS
        if unexpected_keys:
            raise GraphQLInvalidCostConfigurationError(
                "Unexpected keys {} in cost entry {}. Allowed keys are: {}".format(
                    sorted(unexpected_keys), entry, sorted(_ALLOWED_COST_MAP_ENTRY_KEYS)
                )
            )

        complexity = entry.get(_COMPLEXITY_KEY)
        if complexity is None:
            complexity = default_complexity

        use_multipliers = True
        for key in _USE_MULTIPLIERS_KEYS:
            if entry.get(key) is not None:
                use_multipliers = entry[key]

        rule = cls(
            complexity=complexity,
            use_multipliers=use_multipliers,
            multiplier=entry.get(_MULTIPLIER_KEY),
        )
        _validate_cost_rule(rule, "cost entry {}".format(entry))
        return rule


def _validate_cost_rule(rule: CostRule, description: str) -> None:
    """Raise GraphQLInvalidCostConfigurationError if any of the rule's values are invalid."""
    if not _is_number(rule.complexity) or rule.complexity < 0:
        raise GraphQLInvalidCostConfigurationError(
            "Expected the complexity in {} to be a non-negative number, but got: {}".format(
                description, rule.complexity
            )
        )
    if rule.multiplier is not None and not isinstance(rule.multiplier, str):
        raise GraphQLInvalidCostConfigurationError(
            "Expected the multiplier in {} to be the name of a field argument, "
            "but got: {}".format(description, rule.multiplier)
        )
    if not isinstance(rule.use_multipliers, bool):
        raise GraphQLInvalidCostConfigurationError(
            "Expected useMultipliers in {} to be a bool, but got: {}".format(
                description, rule.use_multipliers
            )
        )


def _normalize_cost_map_entry(
    type_name: str, field_name: str, entry: CostMapEntryType, default_complexity: Number
) -> CostRule:
    """Return the CostRule described by the cost map entry for the given type and field."""
    if isinstance(entry, CostRule):
        _validate_cost_rule(entry, "the cost map entry for {}.{}".format(type_name, field_name))
        return entry
    elif isinstance(entry, Mapping):
        return CostRule.from_dict(entry, default_complexity)
    else:
        raise GraphQLInvalidCostConfigurationError(
            "Expected the cost map entry for {}.{} to be a CostRule or a dict, but got: "
            "{}".format(type_name, field_name, entry)
        )


@dataclass
class CostAnalysisConfig:
    """Configuration for estimating the cost of a query."""

    # The budget: queries whose total cost exceeds this value are reported.
    maximum_cost: Number

    # Cost of fields for which no cost map entry and no cost annotation applies.
    default_cost: Number = 0

    # Dict of GraphQL type name -> (Dict of field name -> CostRule or its dict form).
    # Entries here take precedence over any cost annotations in the schema. After construction,
    # every entry is a CostRule.
    cost_map: CostMapType = field(default_factory=dict)

    # Complexity of cost annotations and cost map entries that do not specify one.
    default_complexity: Number = 1

    # The value the running cost total starts from.
    start_cost: Number = 0

    # Dict of variable name -> value, used to resolve variables in field arguments.
    variables: Dict[str, Any] = field(default_factory=dict)

    # If set, only the operation with this name is analyzed. Otherwise, all operations are.
    operation_name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate fields, and build every cost map entry into a CostRule."""
        if not _is_number(self.maximum_cost) or self.maximum_cost <= 0:
            raise GraphQLInvalidCostConfigurationError(
                "Expected maximum_cost to be a positive number, but got: {}".format(
                    self.maximum_cost
                )
            )
        for name in ("default_cost", "default_complexity", "start_cost"):
            value = getattr(self, name)
            if not _is_number(value) or value < 0:
                raise GraphQLInvalidCostConfigurationError(
                    "Expected {} to be a non-negative number, but got: {}".format(name, value)
                )
        if self.variables is None:
            self.variables = {}
        if self.cost_map is None:
            self.cost_map = {}
        if not isinstance(self.cost_map, Mapping):
            raise GraphQLInvalidCostConfigurationError(
                "Expected cost_map to be a dict of type name -> dict of field name -> cost "
                "entry, but got: {}".format(self.cost_map)
            )

        normalized_cost_map: NormalizedCostMapType = {}
        for type_name, field_entries in self.cost_map.items():
            if not isinstance(field_entries, Mapping):
                raise GraphQLInvalidCostConfigurationError(
                    "Expected the cost map entries for type {} to be a dict of field name -> "
                    "cost entry, but got: {}".format(type_name, field_entries)
                )
            normalized_cost_map[type_name] = {
                field_name: _normalize_cost_map_entry(
                    type_name, field_name, entry, self.default_complexity
                )
                for field_name, entry in field_entries.items()
            }
        self.cost_map = normalized_cost_map


def validate_cost_map(schema: GraphQLSchema, cost_map: CostMapType) -> None:
    """Ensure that every type and field named in the cost map exists in the schema.

    Args:
        schema: GraphQL schema object the cost map is meant for
        cost_map: dict of GraphQL type name -> dict of field name -> cost map entry

    Raises:
        GraphQLInvalidCostMapError if the cost map names a type that is not defined by the schema,
        a type that does not have fields, or a field that is not defined by the named type
    """
    for type_name, field_entries in cost_map.items():
        graphql_type = schema.get_type(type_name)
        if graphql_type is None:
            raise GraphQLInvalidCostMapError(
                "The query cost could not be calculated because the cost map specifies a type "
                "{} that is not defined by the schema.".format(type_name)
            )
        if not isinstance(graphql_type, (GraphQLObjectType, GraphQLInterfaceType)):
            raise GraphQLInvalidCostMapError(
                "The query cost could not be calculated because the cost map specifies a type "
                "{} that is defined by the schema, but is not an object or interface "
                "type.".format(type_name)
            )

        for field_name in field_entries:
            if field_name not in graphql_type.fields:
                raise GraphQLInvalidCostMapError(
                    "The query cost could not be calculated because the cost map contains a "
                    "field {} not defined by the {} type.".format(field_name, type_name)
                )
