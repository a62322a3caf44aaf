from __future__ import annotations

from typing import FrozenSet

from .models import Control, Parameters


def distinct_parameter_sets(control: Control) -> FrozenSet[Parameters]:
    """Unique whitespace-normalized parameter sets across the populated baselines."""

    return frozenset(params.flatten() for params in control.parameters.values() if params is not None)


def has_distinct_parameters(control: Control) -> bool:
    """True when the baselines' parameter text differs after whitespace normalization."""

    return len(distinct_parameter_sets(control)) > 1
