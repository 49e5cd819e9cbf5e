# Copyright 2019-present Kensho Technologies, LLC.
from contextlib import contextmanager
from dataclasses import dataclass
from functools import reduce
from operator import mul
from typing import Iterator, List, Optional, Tuple

from ..typedefs import Number
from .failures import CostAnalysisFailure


class CostAnalysisState(object):
    def __init__(self, start_cost: Number = 0) -> None:
        """Create the accumulator for a single cost analysis.

        Args:
            start_cost: the value the running cost total starts from
        """
        # Running cost total, only ever increased.
        self.cost: Number = start_cost

        # Multiplier values in effect along the path from the operation root to the current field.
        self.multipliers: List[int] = []

        # The multipliers that applied to the most recently costed field: the path's multipliers,
        # followed by the field's own multiplier if it has one. Empty for fields that ignore
        # multipliers.
        self.recorded_multipliers: List[int] = []

    @property
    def path_factor(self) -> int:
        """Return the product of the multipliers in effect, 1 if there are none."""
        return reduce(mul, self.multipliers, 1)

    def add_cost(self, amount: Number) -> None:
        """Add the cost of a single field to the running total."""
        if amount < 0:
            raise AssertionError(
                "Attempted to add a negative amount {} to the running cost total {}. This is a "
                "bug.".format(amount, self.cost)
            )
        self.cost += amount

    def record_field(self, own_multiplier: Optional[int], use_multipliers: bool = True) -> None:
        """Record the multipliers that applied to the field that was just costed."""
        if not use_multipliers:
            self.recorded_multipliers = []
            return
        self.recorded_multipliers = list(self.multipliers)
        if own_multiplier is not None:
            self.recorded_multipliers.append(own_multiplier)

    @contextmanager
    def push_multiplier(self, multiplier: int) -> Iterator[None]:
        """Keep the multiplier in effect while the body of the with-statement runs."""
        if multiplier < 0:
            raise AssertionError(
                "Attempted to push a negative multiplier {} onto {}. This is a bug.".format(
                    multiplier, self.multipliers
                )
            )
        depth = len(self.multipliers)
        self.multipliers.append(multiplier)
        try:
            yield
        finally:
            self.multipliers.pop()
            if len(self.multipliers) != depth:
                raise AssertionError(
                    "Multipliers were not restored to depth {} after leaving a scope: "
                    "{}".format(depth, self.multipliers)
                )


@dataclass(frozen=True)
class CostAnalysisResult:
    """The outcome of estimating the cost of a query."""

    # The total cost of the query.
    cost: Number

    # The multipliers that applied to the last field that was costed, see CostAnalysisState.
    multipliers: Tuple[int, ...]

    # Every failure reported during the analysis, in the order they were detected.
    failures: Tuple[CostAnalysisFailure, ...]
