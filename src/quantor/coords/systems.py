"""
quantor.coords.systems
======================

Concrete coordinate systems and the symbol-based factory.

===============  ==========================  ==================
system           positions                   native units
===============  ==========================  ==================
Cartesian (N)    x1 .. xN                    m (any unit)
Polar            r, φ                        m, rad
Cylindrical      r, φ, z                     m, rad, m
Spherical        r, θ (polar), φ (azimuth)   m, rad, rad
Toroidal (R0)    r, θ (poloidal), φ          m, rad, rad
===============  ==========================  ==================
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence, Tuple, Type

from quantor.coords.axis import Axis
from quantor.coords.base import CoordinateSystem
from quantor.errors import InvalidArgumentError


@dataclass(frozen=True)
class CartesianCoordinates(CoordinateSystem):
    """
    N-dimensional Cartesian coordinates.

    Axes may carry any unit (a 1D Cartesian system is how plain quantities
    such as ``1024 kg`` are described); only geometric transforms require
    lengths.
    """

    symbols = ("cart", "cartesian")
    strict_axes = False

    dimension: int = 1  # type: ignore[assignment]
    axes: Tuple[Axis, ...] = field(default=())

    def __post_init__(self) -> None:
        if isinstance(self.dimension, bool) or not isinstance(self.dimension, int) or self.dimension < 1:
            raise InvalidArgumentError(f"Cartesian dimension must be a positive int, got {self.dimension!r}")
        self._normalize_axes()

    @property
    def native_units(self) -> Tuple[str, ...]:  # type: ignore[override]
        return ("m",) * self.dimension

    def to_cartesian(self, values: Sequence[float]) -> Tuple[float, ...]:
        return tuple(values)

    def from_cartesian(self, values: Sequence[float]) -> Tuple[float, ...]:
        return tuple(values)


@dataclass(frozen=True)
class PolarCoordinates(CoordinateSystem):
    symbols = ("polar", "pol")
    native_units = ("m", "rad")

    axes: Tuple[Axis, ...] = field(default=())

    def __post_init__(self) -> None:
        self._normalize_axes()

    def to_cartesian(self, values: Sequence[float]) -> Tuple[float, ...]:
        r, phi = values
        return (r * math.cos(phi), r * math.sin(phi))

    def from_cartesian(self, values: Sequence[float]) -> Tuple[float, ...]:
        x, y = values
        return (math.hypot(x, y), math.atan2(y, x))


@dataclass(frozen=True)
class CylindricalCoordinates(CoordinateSystem):
    symbols = ("cylindrical", "cyl")
    native_units = ("m", "rad", "m")

    axes: Tuple[Axis, ...] = field(default=())

    def __post_init__(self) -> None:
        self._normalize_axes()

    def to_cartesian(self, values: Sequence[float]) -> Tuple[float, ...]:
        r, phi, z = values
        return (r * math.cos(phi), r * math.sin(phi), z)

    def from_cartesian(self, values: Sequence[float]) -> Tuple[float, ...]:
        x, y, z = values
        return (math.hypot(x, y), math.atan2(y, x), z)


@dataclass(frozen=True)
class SphericalCoordinates(CoordinateSystem):
    symbols = ("spherical", "sph")
    native_units = ("m", "rad", "rad")

    axes: Tuple[Axis, ...] = field(default=())

    def __post_init__(self) -> None:
        self._normalize_axes()

    def to_cartesian(self, values: Sequence[float]) -> Tuple[float, ...]:
        r, theta, phi = values
        return (
            r * math.sin(theta) * math.cos(phi),
            r * math.sin(theta) * math.sin(phi),
            r * math.cos(theta),
        )

    def from_cartesian(self, values: Sequence[float]) -> Tuple[float, ...]:
        x, y, z = values
        r = math.sqrt(x * x + y * y + z * z)
        theta = math.acos(max(-1.0, min(1.0, z / r))) if r else 0.0
        return (r, theta, math.atan2(y, x))


@dataclass(frozen=True)
class ToroidalCoordinates(CoordinateSystem):
    """
    Simple toroidal coordinates around a torus of major radius ``major_radius`` (in m).

    ``r`` is the distance from the magnetic axis, ``θ`` the poloidal and ``φ``
    the toroidal angle.
    """

    symbols = ("toroidal", "tor")
    native_units = ("m", "rad", "rad")

    major_radius: float = 1.0
    axes: Tuple[Axis, ...] = field(default=())

    def __post_init__(self) -> None:
        if not (isinstance(self.major_radius, (int, float)) and math.isfinite(self.major_radius) and self.major_radius > 0):
            raise InvalidArgumentError(f"major_radius must be a positive, finite number, got {self.major_radius!r}")
        object.__setattr__(self, "major_radius", float(self.major_radius))
        self._normalize_axes()

    def to_cartesian(self, values: Sequence[float]) -> Tuple[float, ...]:
        r, theta, phi = values
        big_r = self.major_radius + r * math.cos(theta)
        return (big_r * math.cos(phi), big_r * math.sin(phi), r * math.sin(theta))

    def from_cartesian(self, values: Sequence[float]) -> Tuple[float, ...]:
        x, y, z = values
        d = math.hypot(x, y) - self.major_radius
        return (math.hypot(d, z), math.atan2(z, d), math.atan2(y, x))


COORDINATE_SYSTEMS: Tuple[Type[CoordinateSystem], ...] = (
    CartesianCoordinates,
    PolarCoordinates,
    CylindricalCoordinates,
    SphericalCoordinates,
    ToroidalCoordinates,
)


def coordinate_system(symbol: str, *args, **kwargs) -> CoordinateSystem:
    """
    Create a coordinate system from one of its symbols.

    Positional `Axis` arguments are collected into ``axes``; everything else is
    passed on to the constructor.

    >>> coordinate_system("cart", 4).dimension
    4
    """
    key = symbol.strip().lower()
    for cls in COORDINATE_SYSTEMS:
        if key in cls.symbols:
            break
    else:
        raise InvalidArgumentError(f"Unknown coordinate system symbol: {symbol!r}")

    axes = tuple(a for a in args if isinstance(a, Axis))
    params = tuple(a for a in args if not isinstance(a, Axis))
    if axes:
        if "axes" in kwargs:
            raise InvalidArgumentError("Axes given both positionally and as 'axes='")
        kwargs["axes"] = axes
    try:
        return cls(*params, **kwargs)
    except TypeError as e:
        raise InvalidArgumentError(f"Invalid parameters for {cls.__name__}: {e}") from e


__all__ = [
    "CartesianCoordinates",
    "PolarCoordinates",
    "CylindricalCoordinates",
    "SphericalCoordinates",
    "ToroidalCoordinates",
    "COORDINATE_SYSTEMS",
    "coordinate_system",
]
