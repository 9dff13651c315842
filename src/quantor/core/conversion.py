"""
quantor.core.conversion
=======================

Order-preserving conversion of quantity payloads between coordinate systems.

=====================  =========================================
payload                conversion
=====================  =========================================
scalar                 one 1D transform
samples (order 0)      one 1D transform per sample
point (order 1)        one N-D transform
points (order 1 rows)  one N-D transform per row
matrix (order 2)       unsupported
=====================  =========================================
"""
from __future__ import annotations

import logging
from typing import Sequence, Tuple

from quantor.coords.base import CoordinateSystem
from quantor.coords.transform import transform
from quantor.errors import InvalidArgumentError, UnsupportedOperationError

logger = logging.getLogger(__name__)


def _require_1d(coords: CoordinateSystem, role: str) -> None:
    if coords.dimension != 1:
        raise InvalidArgumentError(
            f"{role} coordinate system must be 1D for scalar data, got {coords.dimension}D"
        )


def convert_scalar(value: float, origin: CoordinateSystem, target: CoordinateSystem) -> float:
    _require_1d(target, "Target")
    return transform((value,), origin, target)[0]


def convert_samples(
    values: Sequence[float], origin: CoordinateSystem, target: CoordinateSystem
) -> Tuple[float, ...]:
    """Independent 1D samples, each transformed with the same origin/target pair."""
    _require_1d(target, "Target")
    return tuple(transform((v,), origin, target)[0] for v in values)


def convert_point(
    values: Sequence[float], origin: CoordinateSystem, target: CoordinateSystem
) -> Tuple[float, ...]:
    return transform(values, origin, target)


def convert_rows(
    rows: Sequence[Sequence[float]], origin: CoordinateSystem, target: CoordinateSystem
) -> Tuple[Tuple[float, ...], ...]:
    """Rows of N-D points, one transform per row."""
    logger.debug("Converting %d point(s)", len(rows))
    return tuple(transform(row, origin, target) for row in rows)


def convert_matrix(
    rows: Sequence[Sequence[float]], origin: CoordinateSystem, target: CoordinateSystem
) -> Tuple[Tuple[float, ...], ...]:
    raise UnsupportedOperationError(
        "Converting an order-2 matrix between coordinate systems is not supported"
    )


__all__ = [
    "convert_scalar",
    "convert_samples",
    "convert_point",
    "convert_rows",
    "convert_matrix",
]
