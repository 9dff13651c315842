"""
quantor.coords.base
===================

The `CoordinateSystem` interface.

A coordinate system is an immutable value made of its structural parameters
(dimension, radii, ...) and a tuple of axes. Each position has a unit: the one
of its own axis, else the one of the default axis, else the system's native
SI unit for that position. Coordinates are exchanged with other systems
through Cartesian SI coordinates (`to_cartesian` / `from_cartesian`).
"""
from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from typing import ClassVar, Iterable, Sequence, Tuple, TypeVar

from quantor.coords.axis import Axis, sorted_axes
from quantor.core.dimensions import Dim
from quantor.core.unit import Unit
from quantor.errors import InvalidArgumentError

C = TypeVar("C", bound="CoordinateSystem")


class CoordinateSystem(ABC):
    """Base class of all coordinate systems; concrete systems are frozen dataclasses."""

    #: identifiers accepted by `quantor.coords.coordinate_system`
    symbols: ClassVar[Tuple[str, ...]] = ()
    #: native SI unit per position
    native_units: ClassVar[Tuple[str, ...]] = ()
    #: whether axis units must keep the native dimension of their position
    strict_axes: ClassVar[bool] = True

    axes: Tuple[Axis, ...]

    # ---------------------------------------------------------------- shape
    @property
    def dimension(self) -> int:
        return len(self.native_units)

    @property
    def cartesian_dimension(self) -> int:
        """Number of Cartesian components this system maps onto."""
        return self.dimension

    # ----------------------------------------------------------------- axes
    def native_unit(self, index: int) -> Unit:
        from quantor.units.registry import DEFAULT_REGISTRY  # local import
        return DEFAULT_REGISTRY.unit(self.native_units[index])

    def native_dim(self, index: int) -> Dim:
        return self.native_unit(index).dim

    def axis(self, index: int) -> Axis:
        """The axis describing position ``index`` (explicit, default or native)."""
        self._check_index(index)
        default = None
        for a in self.axes:
            if a.index == index:
                return a
            if a.index is None:
                default = a
        if default is not None:
            return default.at(index)
        return Axis(index, self.native_unit(index))

    def unit(self, index: int) -> Unit:
        return self.axis(index).unit

    @property
    def units(self) -> Tuple[Unit, ...]:
        return tuple(self.unit(i) for i in range(self.dimension))

    def with_axes(self: C, axes: Iterable[Axis]) -> C:
        """Copy of this system with ``axes`` replacing its axes; every other parameter is kept."""
        return dataclasses.replace(self, axes=tuple(axes))

    # ------------------------------------------------------------- geometry
    @abstractmethod
    def to_cartesian(self, values: Sequence[float]) -> Tuple[float, ...]:
        """Native SI coordinates -> Cartesian coordinates in metres."""

    @abstractmethod
    def from_cartesian(self, values: Sequence[float]) -> Tuple[float, ...]:
        """Cartesian coordinates in metres -> native SI coordinates."""

    # ------------------------------------------------------------ internals
    def _check_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < self.dimension:
            raise InvalidArgumentError(
                f"Axis index {index!r} out of range for a {self.dimension}D {type(self).__name__}"
            )

    def _normalize_axes(self) -> None:
        axes = self.axes
        if isinstance(axes, Axis):
            axes = (axes,)
        axes = tuple(axes)
        for a in axes:
            if not isinstance(a, Axis):
                raise InvalidArgumentError(f"Expected Axis instances, got {type(a).__name__}")
        axes = sorted_axes(axes)

        seen = set()
        for a in axes:
            if a.index in seen:
                label = "default" if a.index is None else str(a.index)
                raise InvalidArgumentError(f"Duplicate {label} axis in {type(self).__name__}")
            seen.add(a.index)
            if a.index is not None and a.index >= self.dimension:
                raise InvalidArgumentError(
                    f"Axis index {a.index} out of range for a {self.dimension}D {type(self).__name__}"
                )
            if self.strict_axes:
                positions = range(self.dimension) if a.index is None else (a.index,)
                for i in positions:
                    if a.unit.dim != self.native_dim(i):
                        raise InvalidArgumentError(
                            f"Unit {a.unit.symbol!r} does not fit position {i} of "
                            f"{type(self).__name__} (expected unit like {self.native_units[i]!r})"
                        )
        object.__setattr__(self, "axes", axes)


__all__ = ["CoordinateSystem"]
