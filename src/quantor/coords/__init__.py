"""
quantor.coords
==============

Coordinate systems: axes with units, Cartesian and curvilinear systems, and
`transform` between them.
"""
from quantor.coords.axis import Axis, axes_with_units
from quantor.coords.base import CoordinateSystem
from quantor.coords.systems import (
    COORDINATE_SYSTEMS,
    CartesianCoordinates,
    CylindricalCoordinates,
    PolarCoordinates,
    SphericalCoordinates,
    ToroidalCoordinates,
    coordinate_system,
)
from quantor.coords.transform import transform

__all__ = [
    "Axis",
    "axes_with_units",
    "CoordinateSystem",
    "COORDINATE_SYSTEMS",
    "CartesianCoordinates",
    "PolarCoordinates",
    "CylindricalCoordinates",
    "SphericalCoordinates",
    "ToroidalCoordinates",
    "coordinate_system",
    "transform",
]
