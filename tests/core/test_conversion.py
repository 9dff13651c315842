import pytest

from quantor.coords import CartesianCoordinates, CylindricalCoordinates, PolarCoordinates, axes_with_units
from quantor.core import conversion
from quantor.errors import InvalidArgumentError, UnsupportedOperationError


def cart(unit, dimension=1):
    return CartesianCoordinates(dimension, axes_with_units(unit))


def test_convert_scalar():
    assert conversion.convert_scalar(2.0, cart("km"), cart("m")) == pytest.approx(2000.0)


def test_convert_scalar_requires_1d_target():
    with pytest.raises(InvalidArgumentError):
        conversion.convert_scalar(2.0, cart("m"), PolarCoordinates())


def test_convert_samples_is_element_wise():
    out = conversion.convert_samples((1.0, 2.0, 3.0), cart("mm"), cart("μm"))
    assert out == pytest.approx((1e3, 2e3, 3e3))
    assert conversion.convert_samples((), cart("mm"), cart("m")) == ()


def test_convert_point():
    out = conversion.convert_point((0.0, 2.0), cart("m", 2), PolarCoordinates())
    assert out == pytest.approx((2.0, 1.5707963267948966))


def test_convert_rows_one_transform_per_row():
    rows = ((1.0, 0.0, 5.0), (0.0, 1.0, 6.0))
    out = conversion.convert_rows(rows, cart("m", 3), CylindricalCoordinates())
    assert out[0] == pytest.approx((1.0, 0.0, 5.0))
    assert out[1] == pytest.approx((1.0, 1.5707963267948966, 6.0))


def test_convert_rows_rejects_wrong_width():
    with pytest.raises(InvalidArgumentError):
        conversion.convert_rows(((1.0, 2.0),), cart("m", 3), CylindricalCoordinates())


def test_convert_matrix_is_unsupported():
    with pytest.raises(UnsupportedOperationError):
        conversion.convert_matrix(((1.0,),), cart("m"), cart("mm"))
