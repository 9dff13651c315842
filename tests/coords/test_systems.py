import dataclasses
import math

import pytest

from quantor.coords import (
    COORDINATE_SYSTEMS,
    Axis,
    CartesianCoordinates,
    CylindricalCoordinates,
    PolarCoordinates,
    SphericalCoordinates,
    ToroidalCoordinates,
    coordinate_system,
)
from quantor.errors import InvalidArgumentError
from tests.utils import _unit


# ---------------------------------------------------------------------------
# Shape and axes
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("coords, dimension", [
    (CartesianCoordinates(), 1),
    (CartesianCoordinates(4), 4),
    (PolarCoordinates(), 2),
    (CylindricalCoordinates(), 3),
    (SphericalCoordinates(), 3),
    (ToroidalCoordinates(), 3),
])
def test_dimension(coords, dimension):
    assert coords.dimension == dimension
    assert coords.cartesian_dimension == dimension


def test_native_units_when_no_axes():
    assert [u.symbol for u in CylindricalCoordinates().units] == ["m", "rad", "m"]


def test_explicit_axis_beats_default_axis():
    c = CartesianCoordinates(3, (Axis(None, "mm"), Axis(1, "s")))
    assert c.unit(1).symbol == "s"
    assert c.axis(1) == Axis(1, "s")
    assert c.unit(0).symbol == "mm"


def test_default_axis_is_materialized_at_position():
    c = CartesianCoordinates(3, (Axis(None, "mm"),))
    assert c.axis(2) == Axis(2, "mm")
    assert [u.symbol for u in c.units] == ["mm", "mm", "mm"]


def test_axes_are_sorted_and_tuple():
    c = PolarCoordinates([Axis(1, "deg"), Axis(0, "km")])
    assert c.axes == (Axis(0, "km"), Axis(1, "deg"))


def test_single_axis_is_accepted():
    c = PolarCoordinates(Axis(0, "km"))
    assert c.unit(0).symbol == "km"


@pytest.mark.parametrize("axes", [
    (Axis(0, "m"), Axis(0, "mm")),
    (Axis(None, "m"), Axis(None, "mm")),
    (Axis(2, "m"),),
    ("m",),
])
def test_invalid_axes_raise(axes):
    with pytest.raises(InvalidArgumentError):
        PolarCoordinates(axes)


def test_curvilinear_axes_keep_native_dimensions():
    with pytest.raises(InvalidArgumentError):
        PolarCoordinates((Axis(0, "s"),))
    with pytest.raises(InvalidArgumentError):
        PolarCoordinates((Axis(1, "m"),))


def test_cartesian_axes_take_any_unit():
    c = CartesianCoordinates(2, (Axis(0, "kg"), Axis(1, "°C")))
    assert c.unit(1).symbol == "°C"


@pytest.mark.parametrize("dimension", [0, -1, 1.5, True])
def test_cartesian_dimension_must_be_positive_int(dimension):
    with pytest.raises(InvalidArgumentError):
        CartesianCoordinates(dimension)


@pytest.mark.parametrize("radius", [0, -1.0, math.inf, "1"])
def test_toroidal_major_radius_must_be_positive(radius):
    with pytest.raises(InvalidArgumentError):
        ToroidalCoordinates(radius)


def test_axis_index_out_of_range():
    with pytest.raises(InvalidArgumentError):
        PolarCoordinates().axis(2)


def test_with_axes_keeps_structural_parameters():
    t = ToroidalCoordinates(3.0)
    t2 = t.with_axes([Axis(0, "km")])
    assert t2.major_radius == 3.0
    assert t2.unit(0) == _unit("km")
    assert t.axes == ()


def test_systems_are_frozen_values():
    c = CartesianCoordinates(2)
    assert c == CartesianCoordinates(2)
    assert hash(c) == hash(CartesianCoordinates(2))
    with pytest.raises(dataclasses.FrozenInstanceError):
        c.dimension = 3


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("coords, native", [
    (PolarCoordinates(), (2.0, 0.75)),
    (CylindricalCoordinates(), (2.0, -2.5, 1.0)),
    (SphericalCoordinates(), (2.0, 0.5, 2.0)),
    (ToroidalCoordinates(3.0), (0.5, 1.0, -0.5)),
])
def test_cartesian_round_trip(coords, native):
    assert coords.from_cartesian(coords.to_cartesian(native)) == pytest.approx(native)


def test_spherical_origin():
    assert SphericalCoordinates().from_cartesian((0.0, 0.0, 0.0)) == (0.0, 0.0, 0.0)


def test_toroidal_to_cartesian():
    x, y, z = ToroidalCoordinates(2.0).to_cartesian((1.0, 0.0, math.pi / 2))
    assert (x, y, z) == pytest.approx((0.0, 3.0, 0.0), abs=1e-12)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("symbol, cls", [
    ("cart", CartesianCoordinates),
    ("Cartesian", CartesianCoordinates),
    ("pol", PolarCoordinates),
    ("cyl", CylindricalCoordinates),
    ("sph", SphericalCoordinates),
    (" tor ", ToroidalCoordinates),
])
def test_coordinate_system_by_symbol(symbol, cls):
    assert type(coordinate_system(symbol)) is cls


def test_every_system_has_symbols():
    for cls in COORDINATE_SYSTEMS:
        assert cls.symbols


def test_factory_passes_parameters_and_axes():
    c = coordinate_system("cart", 3, Axis(None, "mm"))
    assert c == CartesianCoordinates(3, (Axis(None, "mm"),))
    t = coordinate_system("tor", 2.0, Axis(0, "km"))
    assert t.major_radius == 2.0 and t.unit(0).symbol == "km"


def test_factory_errors():
    with pytest.raises(InvalidArgumentError):
        coordinate_system("hyperbolic")
    with pytest.raises(InvalidArgumentError):
        coordinate_system("polar", 1, 2, 3)
    with pytest.raises(InvalidArgumentError):
        coordinate_system("cart", Axis(None, "m"), axes=(Axis(None, "m"),))
