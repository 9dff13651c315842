"""
quantor.coords.axis
===================

Axes of a coordinate system: a unit, the position it applies to and an
optional name.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from quantor.core.unit import Unit
from quantor.errors import InvalidArgumentError


def _resolve_unit(unit: "Unit | str", registry=None) -> Unit:
    if isinstance(unit, Unit):
        return unit
    if isinstance(unit, str):
        if registry is None:
            from quantor.units.registry import DEFAULT_REGISTRY as registry  # local import
        return registry.unit(unit)
    raise InvalidArgumentError(f"Expected a Unit or unit expression, got {type(unit).__name__}")


@dataclass(frozen=True, slots=True)
class Axis:
    """
    One axis of a coordinate system.

    ``index`` is the position the axis describes. ``None`` marks the *default*
    axis, which applies to every position without an axis of its own.
    """

    index: Optional[int]
    unit: Unit
    name: str = ""

    def __post_init__(self) -> None:
        if self.index is not None:
            if isinstance(self.index, bool) or not isinstance(self.index, int) or self.index < 0:
                raise InvalidArgumentError(f"Axis index must be a non-negative int or None, got {self.index!r}")
        if self.name is None:
            raise InvalidArgumentError("Axis name must not be None")
        object.__setattr__(self, "unit", _resolve_unit(self.unit))

    @property
    def is_default(self) -> bool:
        return self.index is None

    def with_unit(self, unit: "Unit | str") -> Axis:
        return Axis(self.index, _resolve_unit(unit), self.name)

    def at(self, index: int) -> Axis:
        """This axis placed at ``index`` (used to materialize a default axis)."""
        return Axis(index, self.unit, self.name)

    def __str__(self) -> str:
        where = "*" if self.index is None else str(self.index)
        label = f" {self.name!r}" if self.name else ""
        return f"Axis[{where}]{label} in {self.unit}"


def axes_with_units(*units: "Unit | str", registry=None) -> Tuple[Axis, ...]:
    """
    Build axes from units.

    A single unit yields one default axis (it applies to every position);
    several units yield one axis per position, in order.
    """
    if not units:
        return ()
    if len(units) == 1:
        return (Axis(None, _resolve_unit(units[0], registry)),)
    return tuple(Axis(i, _resolve_unit(u, registry)) for i, u in enumerate(units))


def _axis_sort_key(axis: Axis) -> int:
    return -1 if axis.index is None else axis.index


def sorted_axes(axes) -> Tuple[Axis, ...]:
    """Default axis first, then explicit axes by position."""
    return tuple(sorted(axes, key=_axis_sort_key))


__all__ = ["Axis", "axes_with_units", "sorted_axes"]
