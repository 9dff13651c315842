"""
quantor.core.optimizer
======================

Cost-minimizing prefix selection ("approach").

For every axis of a quantity the prefix rewrites of the axis unit are tried
and the one whose transformed values score the lowest cost is kept. The
default cost measures how far each value is from a target magnitude::

    cost(v) = MANTISSA_WEIGHT * |m_t - m_v| + |e_t - e_v|

with ``e``/``m`` the base-10 exponent and mantissa of the target ``t`` and the
value ``v``. An array costs as much as its worst element.
"""
from __future__ import annotations

import logging
import math
from functools import partial
from typing import TYPE_CHECKING, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, TypeVar

from quantor.coords.axis import Axis
from quantor.core.prefix_search import Transform, potential_transformations
from quantor.core.unit import Unit
from quantor.core.utils import base10_split
from quantor.errors import InvalidArgumentError

if TYPE_CHECKING:
    from quantor.core.quantity import Quantity
    from quantor.units.registry import UnitsRegistry

logger = logging.getLogger(__name__)

#: weight of the mantissa distance relative to one decade
MANTISSA_WEIGHT = 0.1

#: cost-function key applying to every axis without its own entry
DEFAULT_AXIS = None

CostFunction = Callable[[Sequence[float]], float]
Q = TypeVar("Q", bound="Quantity")


def cost_for_value(value: float, target: float) -> float:
    m_t, e_t = base10_split(target)
    m_v, e_v = base10_split(value)
    return MANTISSA_WEIGHT * abs(m_t - m_v) + abs(e_t - e_v)


def cost_for_array(values: Sequence[float], target: float) -> float:
    """
    Worst-case cost of ``values`` against ``target``; ``nan`` for no values.

    >>> cost_for_array([1.0, 10.0], 1)
    1.0
    """
    if not values:
        return math.nan
    worst = -math.inf
    for v in values:
        c = cost_for_value(v, target)
        if math.isnan(c):
            return math.nan
        worst = max(worst, c)
    return worst


def _as_target(t: float) -> float:
    if isinstance(t, bool):
        raise InvalidArgumentError("Target must be a number, got bool")
    try:
        return float(t)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"Target must be a number, got {t!r}") from e


def cost_functions_for_targets(targets: Sequence[float], dimension: int) -> Dict[Optional[int], CostFunction]:
    """
    Build cost functions from target magnitudes.

    One target applies to every axis; otherwise there must be exactly one per
    axis.
    """
    if len(targets) == 1:
        return {DEFAULT_AXIS: partial(cost_for_array, target=_as_target(targets[0]))}
    if len(targets) != dimension:
        raise InvalidArgumentError(
            f"Expected 1 or {dimension} target(s) for a {dimension}D coordinate system, got {len(targets)}"
        )
    return {i: partial(cost_for_array, target=_as_target(t)) for i, t in enumerate(targets)}


def _validate_keys(cost_functions: Mapping[Optional[int], CostFunction], dimension: int) -> None:
    for key in cost_functions:
        if key is DEFAULT_AXIS:
            continue
        if isinstance(key, bool) or not isinstance(key, int) or not 0 <= key < dimension:
            raise InvalidArgumentError(
                f"Cost function key {key!r} is not an axis of a {dimension}D coordinate system"
            )


def best_transformation(
    unit: Unit,
    values: Sequence[float],
    cost_function: CostFunction,
    registry: Optional["UnitsRegistry"] = None,
) -> Tuple[Unit, Transform, float]:
    """
    Pick the prefix rewrite of ``unit`` with the strictly lowest cost.

    Candidates are visited in enumeration order starting with ``unit`` itself,
    so ties keep the earlier candidate and a ``nan`` cost never wins.
    """
    best: Optional[Tuple[Unit, Transform, float]] = None
    for cand, fn in potential_transformations(unit, registry).items():
        cost = cost_function([fn(v) for v in values])
        if best is None:
            best = (cand, fn, cost)
        elif cost < best[2] or (math.isnan(best[2]) and not math.isnan(cost)):
            best = (cand, fn, cost)
    assert best is not None  # the unit itself is always a candidate
    return best


def approach_with(
    quantity: Q,
    cost_functions: Mapping[Optional[int], CostFunction],
    registry: Optional["UnitsRegistry"] = None,
) -> Q:
    """
    Rewrite ``quantity`` with the best prefix per axis under ``cost_functions``.

    ``cost_functions`` maps axis indices (or `DEFAULT_AXIS`) to functions
    scoring the values of that axis.
    """
    coords = quantity.coords
    dim = coords.dimension
    _validate_keys(cost_functions, dim)

    new_axes: List[Axis] = []
    transforms: List[Transform] = []
    for i in range(dim):
        cost_function = cost_functions.get(i, cost_functions.get(DEFAULT_AXIS))
        if cost_function is None:
            raise InvalidArgumentError(f"No cost function for axis {i} and no default given")
        axis = coords.axis(i)
        unit, fn, cost = best_transformation(axis.unit, quantity.axis_values(i), cost_function, registry)
        logger.debug("Axis %d: %r -> %r (cost %g)", i, axis.unit.symbol, unit.symbol, cost)
        new_axes.append(Axis(i, unit, axis.name))
        transforms.append(fn)

    return quantity.map_axes(transforms, coords.with_axes(new_axes))


def approach(quantity: Q, *targets: float, registry: Optional["UnitsRegistry"] = None) -> Q:
    """Rewrite ``quantity`` so its values get as close as possible to ``targets``."""
    return approach_with(
        quantity,
        cost_functions_for_targets(targets, quantity.coords.dimension),
        registry,
    )


__all__ = [
    "MANTISSA_WEIGHT",
    "DEFAULT_AXIS",
    "CostFunction",
    "cost_for_value",
    "cost_for_array",
    "cost_functions_for_targets",
    "best_transformation",
    "approach_with",
    "approach",
]
