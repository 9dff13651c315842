"""
quantor.coords.transform
========================

Transforming coordinate tuples between coordinate systems.

Two systems that differ only in their axes (same type, same structural
parameters) are related by a per-position unit conversion; any unit pair of
equal dimension works, affine units included. All other pairs go through
Cartesian SI coordinates:

    origin units -> origin SI -> Cartesian (m) -> target SI -> target units
"""
from __future__ import annotations

import dataclasses
import logging
from typing import Sequence, Tuple

from quantor.coords.base import CoordinateSystem
from quantor.core.dimensions import LENGTH
from quantor.core.unit import Unit
from quantor.core.utils import format_dim
from quantor.errors import InvalidArgumentError

logger = logging.getLogger(__name__)


def _same_geometry(origin: CoordinateSystem, target: CoordinateSystem) -> bool:
    if type(origin) is not type(target) or origin.dimension != target.dimension:
        return False
    return dataclasses.replace(origin, axes=target.axes) == target


def _check_dim(unit: Unit, expected, where: str) -> None:
    if unit.dim != expected:
        raise InvalidArgumentError(
            f"Cannot convert {where}: unit {unit.symbol!r} has dimension "
            f"{format_dim(unit.dim)}, expected {format_dim(expected)}"
        )


def _geometric_dim(coords: CoordinateSystem, index: int):
    # Cartesian axes accept any unit but only lengths have a geometry
    return coords.native_dim(index) if coords.strict_axes else LENGTH


def transform(
    values: Sequence[float],
    origin: CoordinateSystem,
    target: CoordinateSystem,
) -> Tuple[float, ...]:
    """
    Express the point ``values`` (given in ``origin``) in ``target``.

    Raises
    ------
    InvalidArgumentError
        If ``values`` does not match the dimension of ``origin``, or if the
        systems or their units are incompatible.
    """
    values = tuple(float(v) for v in values)
    if len(values) != origin.dimension:
        raise InvalidArgumentError(
            f"Expected {origin.dimension} coordinate(s) for {type(origin).__name__}, got {len(values)}"
        )

    if _same_geometry(origin, target):
        logger.debug("Unit-only transform in %s", type(origin).__name__)
        out = []
        for i, v in enumerate(values):
            src, dst = origin.unit(i), target.unit(i)
            if src == dst:
                out.append(v)
                continue
            _check_dim(dst, src.dim, f"position {i} from {src.symbol!r}")
            out.append(dst.from_base_abs(src.to_base_abs(v)))
        return tuple(out)

    if origin.cartesian_dimension != target.cartesian_dimension:
        raise InvalidArgumentError(
            f"Cannot transform {origin.cartesian_dimension}D {type(origin).__name__} "
            f"into {target.cartesian_dimension}D {type(target).__name__}"
        )

    logger.debug("Geometric transform %s -> %s", type(origin).__name__, type(target).__name__)
    si = []
    for i, v in enumerate(values):
        u = origin.unit(i)
        _check_dim(u, _geometric_dim(origin, i), f"position {i} of {type(origin).__name__}")
        si.append(u.to_base_abs(v))

    native = target.from_cartesian(origin.to_cartesian(si))

    out = []
    for i, v in enumerate(native):
        u = target.unit(i)
        _check_dim(u, _geometric_dim(target, i), f"position {i} of {type(target).__name__}")
        out.append(u.from_base_abs(v))
    return tuple(out)


__all__ = ["transform"]
