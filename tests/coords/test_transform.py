import math

import pytest

from quantor.coords import (
    Axis,
    CartesianCoordinates,
    CylindricalCoordinates,
    PolarCoordinates,
    SphericalCoordinates,
    ToroidalCoordinates,
    axes_with_units,
    transform,
)
from quantor.errors import InvalidArgumentError


def cart(*units, dimension=None):
    return CartesianCoordinates(dimension or len(units), axes_with_units(*units))


def test_cartesian_millimetres_to_cylindrical():
    out = transform((1, 1, 1), cart("mm", dimension=3), CylindricalCoordinates())
    assert out == pytest.approx((0.001414213562373095, 0.7853981633974483, 0.001))


def test_target_axis_units_are_applied():
    target = CylindricalCoordinates((Axis(0, "mm"), Axis(1, "deg"), Axis(2, "mm")))
    out = transform((1, 1, 1), cart("mm", dimension=3), target)
    assert out == pytest.approx((math.sqrt(2), 45.0, 1.0))


def test_unit_only_transform_between_same_systems():
    assert transform((1.0, 2.0), cart("km", "s"), cart("m", "ms")) == pytest.approx((1000.0, 2000.0))


def test_unit_only_transform_handles_affine_units():
    assert transform((20.0,), cart("°C"), cart("K")) == pytest.approx((293.15,))
    assert transform((212.0,), cart("°F"), cart("°C")) == pytest.approx((100.0,))


def test_unit_only_transform_in_curvilinear_system():
    origin = PolarCoordinates((Axis(1, "deg"),))
    out = transform((2.0, 180.0), origin, PolarCoordinates())
    assert out == pytest.approx((2.0, math.pi))


def test_identical_systems_return_values_unchanged():
    c = SphericalCoordinates()
    assert transform((1.0, 2.0, 3.0), c, c) == (1.0, 2.0, 3.0)


def test_different_major_radius_goes_through_cartesian():
    out = transform((0.5, 0.0, 0.0), ToroidalCoordinates(1.0), ToroidalCoordinates(2.0))
    assert out == pytest.approx((0.5, math.pi, 0.0))


@pytest.mark.parametrize("origin, target, values", [
    (cart("m", dimension=3), SphericalCoordinates(), (1.0, -2.0, 0.5)),
    (PolarCoordinates(), cart("km", dimension=2), (3.0, -1.0)),
    (CylindricalCoordinates(), ToroidalCoordinates(5.0), (2.0, 0.3, -1.0)),
])
def test_round_trips(origin, target, values):
    there = transform(values, origin, target)
    back = transform(there, target, origin)
    assert back == pytest.approx(values)


def test_wrong_number_of_values_raises():
    with pytest.raises(InvalidArgumentError):
        transform((1.0,), PolarCoordinates(), cart("m", "m"))


def test_dimension_mismatch_raises():
    with pytest.raises(InvalidArgumentError):
        transform((1.0, 2.0), cart("m", "m"), CylindricalCoordinates())


def test_incompatible_unit_raises():
    with pytest.raises(InvalidArgumentError):
        transform((1.0,), cart("m"), cart("s"))


def test_non_length_cartesian_units_have_no_geometry():
    with pytest.raises(InvalidArgumentError):
        transform((1.0, 2.0), cart("kg", "kg"), PolarCoordinates())
