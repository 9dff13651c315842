"""
quantor.core.quantity
=====================

Physical quantities: numeric data tied to a coordinate system.

This module provides three immutable variants:

- `ScalarQuantity`: one number on a 1D coordinate system (order 0).
- `SequenceQuantity`: a tuple of numbers. On a 1D system these are independent
  samples (order 0); on an N-D system they are a single N-D point (order 1).
- `MatrixQuantity`: a tuple of equally long rows. On a 1D system the rows form
  one matrix (order 2); on an N-D system each row is an N-D point (order 1).

The tensor order is resolved once at construction and stored in ``order``.
Every operation (`to`, `apply`, `approach`, `approach_with`) returns a new
quantity.
"""
from __future__ import annotations

import dataclasses
import numbers
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping, Optional, Sequence, Tuple, TypeVar

from quantor.coords.axis import Axis, axes_with_units
from quantor.coords.base import CoordinateSystem
from quantor.coords.systems import CartesianCoordinates
from quantor.core import conversion, optimizer
from quantor.core.unit import Unit
from quantor.errors import InvalidArgumentError, InvalidQuantityError

if TYPE_CHECKING:
    from quantor.units.registry import UnitsRegistry

Q = TypeVar("Q", bound="Quantity")
Row = Tuple[float, ...]


# ---------------------------------------------------------------------------
# Input validation helpers
# ---------------------------------------------------------------------------
def _as_float(v: Any, what: str = "value") -> float:
    if v is None:
        raise InvalidQuantityError(f"{what} must not be None")
    if isinstance(v, bool) or not isinstance(v, numbers.Real):
        raise InvalidQuantityError(f"{what} must be a real number, got {type(v).__name__}")
    return float(v)


def _as_row(values: Any, what: str) -> Row:
    if values is None:
        raise InvalidQuantityError(f"{what} must not be None")
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise InvalidQuantityError(f"{what} must be a sequence of numbers, got {type(values).__name__}")
    return tuple(_as_float(v, f"element of {what}") for v in values)


def _check_common(name: Any, coords: Any, error: type = InvalidQuantityError) -> None:
    if name is None:
        raise error("name must not be None")
    if not isinstance(name, str):
        raise error(f"name must be a str, got {type(name).__name__}")
    if coords is None:
        raise error("coords must not be None")
    if not isinstance(coords, CoordinateSystem):
        raise error(f"coords must be a CoordinateSystem, got {type(coords).__name__}")


def _cartesian(units: Sequence["Unit | str"], registry: Optional["UnitsRegistry"]) -> CartesianCoordinates:
    if not units:
        raise InvalidArgumentError("At least one unit is required")
    return CartesianCoordinates(len(units), axes_with_units(*units, registry=registry))


def _first_usable(quantities: Iterable[Optional[Q]], skip_empty: bool = False) -> list[Q]:
    usable = [q for q in quantities if q is not None and not (skip_empty and not q.value)]
    if not usable:
        raise InvalidArgumentError("No quantity to merge")
    return usable


# ---------------------------------------------------------------------------
# Quantity interface
# ---------------------------------------------------------------------------
class Quantity(ABC):
    """
    Common interface of all quantity variants.

    Attributes
    ----------
    name : str
        Free-form description; may be empty.
    value
        The numeric payload (a float, a tuple of floats or a tuple of rows).
    coords : CoordinateSystem
        The coordinate system the values are expressed in.
    order : int
        Tensor order of the payload (0, 1 or 2).
    """

    __slots__ = ()

    name: str
    value: Any
    coords: CoordinateSystem
    order: int

    def axis(self, index: int) -> Axis:
        """The axis of ``coords`` at ``index``."""
        return self.coords.axis(index)

    @abstractmethod
    def axis_values(self, index: int) -> Tuple[float, ...]:
        """All values described by the axis at ``index``."""

    @abstractmethod
    def map_axes(self: Q, functions: Sequence[Callable[[float], float]], coords: CoordinateSystem) -> Q:
        """New quantity on ``coords`` with ``functions[i]`` applied to the values of axis ``i``."""

    @abstractmethod
    def to(self: Q, name: str, coords: CoordinateSystem) -> Q:
        """Express this quantity in ``coords`` under a new ``name``."""

    @abstractmethod
    def _map(self, function: Callable[[float], float]) -> Any:
        ...

    def apply(self: Q, function: Callable[[float], float], name: Optional[str] = None) -> Q:
        """Apply ``function`` to every element; coordinates are kept."""
        if not callable(function):
            raise InvalidArgumentError("function must be callable")
        return dataclasses.replace(
            self,
            name=self.name if name is None else name,
            value=self._map(function),
        )

    def approach(self: Q, *targets: float, registry: Optional["UnitsRegistry"] = None) -> Q:
        """
        Choose per-axis unit prefixes bringing the values closest to ``targets``.

        Give one target for all axes or one per axis.

        >>> ScalarQuantity.of(1024, "kg").approach(1).axis(0).unit.symbol
        'Mg'
        """
        return optimizer.approach(self, *targets, registry=registry)

    def approach_with(
        self: Q,
        cost_functions: Mapping[Optional[int], optimizer.CostFunction],
        registry: Optional["UnitsRegistry"] = None,
    ) -> Q:
        """Choose per-axis unit prefixes minimizing ``cost_functions`` (keyed by axis, ``None`` = default)."""
        if cost_functions is None:
            raise InvalidArgumentError("cost_functions must not be None")
        return optimizer.approach_with(self, cost_functions, registry)

    def _check_axis(self, index: int) -> None:
        self.coords.axis(index)


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class ScalarQuantity(Quantity):
    name: str
    value: float
    coords: CoordinateSystem
    order: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _check_common(self.name, self.coords)
        object.__setattr__(self, "value", _as_float(self.value))
        if self.coords.dimension != 1:
            raise InvalidQuantityError(
                f"A scalar quantity needs a 1D coordinate system, got {self.coords.dimension}D"
            )
        object.__setattr__(self, "order", 0)

    @classmethod
    def of(
        cls,
        value: float,
        unit: "Unit | str",
        name: str = "",
        registry: Optional["UnitsRegistry"] = None,
    ) -> ScalarQuantity:
        return cls(name, value, _cartesian((unit,), registry))

    def axis_values(self, index: int) -> Tuple[float, ...]:
        self._check_axis(index)
        return (self.value,)

    def map_axes(self, functions, coords):
        return ScalarQuantity(self.name, functions[0](self.value), coords)

    def to(self, name: str, coords: CoordinateSystem) -> ScalarQuantity:
        _check_common(name, coords, InvalidArgumentError)
        return ScalarQuantity(name, conversion.convert_scalar(self.value, self.coords, coords), coords)

    def _map(self, function):
        return function(self.value)

    def __str__(self) -> str:
        return f"{self.value:.15g} {self.axis(0).unit}"


@dataclass(frozen=True, slots=True)
class SequenceQuantity(Quantity):
    name: str
    value: Row
    coords: CoordinateSystem
    order: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _check_common(self.name, self.coords)
        object.__setattr__(self, "value", _as_row(self.value, "value"))
        dim = self.coords.dimension
        if dim == 1:
            object.__setattr__(self, "order", 0)
        elif len(self.value) == dim:
            object.__setattr__(self, "order", 1)
        else:
            raise InvalidQuantityError(
                f"A sequence on a {dim}D coordinate system needs {dim} values, got {len(self.value)}"
            )

    @classmethod
    def of(
        cls,
        value: Iterable[float],
        *units: "Unit | str",
        name: str = "",
        registry: Optional["UnitsRegistry"] = None,
    ) -> SequenceQuantity:
        """Samples with one unit, or an N-D Cartesian point with one unit per axis."""
        return cls(name, value, _cartesian(units, registry))

    @classmethod
    def from_scalars(cls, *quantities: Optional[ScalarQuantity]) -> SequenceQuantity:
        """
        Merge scalars into samples.

        ``None`` entries are skipped. The first remaining quantity provides the
        name and coordinate system; the others are converted into it.
        """
        usable = _first_usable(quantities)
        ref = usable[0]
        values = [q.to(ref.name, ref.coords).value for q in usable]
        return cls(ref.name, values, ref.coords)

    def axis_values(self, index: int) -> Tuple[float, ...]:
        self._check_axis(index)
        if self.order == 0:
            return self.value
        return (self.value[index],)

    def map_axes(self, functions, coords):
        if self.order == 0:
            f = functions[0]
            return SequenceQuantity(self.name, [f(v) for v in self.value], coords)
        return SequenceQuantity(self.name, [functions[i](v) for i, v in enumerate(self.value)], coords)

    def to(self, name: str, coords: CoordinateSystem) -> SequenceQuantity:
        _check_common(name, coords, InvalidArgumentError)
        if self.order == 0:
            values = conversion.convert_samples(self.value, self.coords, coords)
        elif self.order == 1:
            values = conversion.convert_point(self.value, self.coords, coords)
        else:
            raise AssertionError(f"Unexpected order {self.order} for a sequence")
        return SequenceQuantity(name, values, coords)

    def _map(self, function):
        return tuple(function(v) for v in self.value)


@dataclass(frozen=True, slots=True)
class MatrixQuantity(Quantity):
    name: str
    value: Tuple[Row, ...]
    coords: CoordinateSystem
    order: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _check_common(self.name, self.coords)
        if self.value is None:
            raise InvalidQuantityError("value must not be None")
        if isinstance(self.value, (str, bytes)) or not isinstance(self.value, Iterable):
            raise InvalidQuantityError(f"value must be a sequence of rows, got {type(self.value).__name__}")
        rows = tuple(_as_row(r, f"row {i}") for i, r in enumerate(self.value))
        if not rows:
            raise InvalidQuantityError("A matrix needs at least one row")
        width = len(rows[0])
        for i, r in enumerate(rows):
            if len(r) != width:
                raise InvalidQuantityError(f"Row {i} has {len(r)} values, expected {width}")
        object.__setattr__(self, "value", rows)

        dim = self.coords.dimension
        if dim == 1:
            object.__setattr__(self, "order", 2)
        elif width == dim:
            object.__setattr__(self, "order", 1)
        else:
            raise InvalidQuantityError(
                f"Rows on a {dim}D coordinate system need {dim} values, got {width}"
            )

    @classmethod
    def of(
        cls,
        value: Iterable[Iterable[float]],
        *units: "Unit | str",
        name: str = "",
        registry: Optional["UnitsRegistry"] = None,
    ) -> MatrixQuantity:
        """A matrix with one unit, or N-D Cartesian points with one unit per axis."""
        return cls(name, value, _cartesian(units, registry))

    @classmethod
    def from_sequences(cls, *quantities: Optional[SequenceQuantity]) -> MatrixQuantity:
        """
        Stack sequences as rows.

        ``None`` entries and empty sequences are skipped. The first remaining
        quantity provides the name and coordinate system; the others are
        converted into it.
        """
        usable = _first_usable(quantities, skip_empty=True)
        ref = usable[0]
        rows = [q.to(ref.name, ref.coords).value for q in usable]
        return cls(ref.name, rows, ref.coords)

    def axis_values(self, index: int) -> Tuple[float, ...]:
        self._check_axis(index)
        if self.order == 2:
            return tuple(v for row in self.value for v in row)
        return tuple(row[index] for row in self.value)

    def map_axes(self, functions, coords):
        if self.order == 2:
            f = functions[0]
            rows = [[f(v) for v in row] for row in self.value]
        else:
            rows = [[functions[i](v) for i, v in enumerate(row)] for row in self.value]
        return MatrixQuantity(self.name, rows, coords)

    def to(self, name: str, coords: CoordinateSystem) -> MatrixQuantity:
        _check_common(name, coords, InvalidArgumentError)
        if self.order == 1:
            rows = conversion.convert_rows(self.value, self.coords, coords)
        elif self.order == 2:
            rows = conversion.convert_matrix(self.value, self.coords, coords)
        else:
            raise AssertionError(f"Unexpected order {self.order} for a matrix")
        return MatrixQuantity(name, rows, coords)

    def _map(self, function):
        return tuple(tuple(function(v) for v in row) for row in self.value)


__all__ = ["Quantity", "ScalarQuantity", "SequenceQuantity", "MatrixQuantity"]
