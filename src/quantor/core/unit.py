"""
quantor.core.unit
=================

Unit types.

- `LinearUnit` and `AffineUnit` are the *atomic* units held by a registry
  (metre, gram, degree Celsius, ...), each with a scale to SI and, for affine
  units, an offset.
- `UnitFactor` is one ``<prefix><symbol>^<exponent>`` term of a composed unit.
- `Unit` is the composed unit carried by coordinate-system axes: an ordered
  tuple of factors with a canonical symbol such as ``"kg m s^-2"``.

Conversions always go through the SI base representation, so any two units of
the same dimension convert exactly via ``from_base_abs(to_base_abs(x))``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from math import isclose, isfinite
from typing import Dict, Iterable, Protocol, Tuple, runtime_checkable

from quantor.core.dimensions import DIM_0, Dim, dim_mul, dim_pow
from quantor.core.utils import prettify_unit_symbol
from quantor.units.prefixes import IDENTITY_PREFIX, Prefix


@runtime_checkable
class UnitLike(Protocol):
    name: str
    dim: Dim

    # Is this unit linear (purely multiplicative) w.r.t. SI?
    @property
    def is_linear(self) -> bool: ...

    # Absolute conversions (apply offset if present)
    def to_base_abs(self, x: float) -> float: ...
    def from_base_abs(self, x: float) -> float: ...

    # Delta conversions (no offset)
    def to_base_delta(self, dx: float) -> float: ...
    def from_base_delta(self, dx: float) -> float: ...


@dataclass(frozen=True, slots=True)
class LinearUnit:
    """Atomic unit that converts to SI by a pure scale factor."""

    name: str
    scale_to_si: float
    dim: Dim
    _is_delta: bool = False

    def __post_init__(self) -> None:
        if len(self.dim) != 7:
            raise ValueError("dim must be a 7-tuple (L,M,T,I,Θ,N,J)")
        if not (self.scale_to_si > 0 and isfinite(self.scale_to_si)):
            raise ValueError("scale_to_si must be a positive, finite number")

    @classmethod
    def delta(cls, name: str, scale_to_si: float, dim: Dim) -> LinearUnit:
        """Factory for delta (difference) units."""
        return cls(name, scale_to_si, dim, _is_delta=True)

    @property
    def is_linear(self) -> bool:
        return True

    @property
    def is_delta(self) -> bool:
        return self._is_delta

    def to_base_abs(self, x: float) -> float:
        return x * self.scale_to_si

    def from_base_abs(self, x: float) -> float:
        return x / self.scale_to_si

    def to_base_delta(self, dx: float) -> float:
        return dx * self.scale_to_si

    def from_base_delta(self, dx: float) -> float:
        return dx / self.scale_to_si

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LinearUnit):
            return NotImplemented
        return (
            self.dim == other.dim
            and isclose(self.scale_to_si, other.scale_to_si, rel_tol=1e-12, abs_tol=0.0)
        )

    def __hash__(self) -> int:
        return hash(self.dim)


@dataclass(frozen=True, slots=True)
class AffineUnit:
    """Atomic unit with an offset against SI, e.g. °C: K = °C·1 + 273.15."""

    name: str
    scale_to_si: float
    offset: float
    dim: Dim

    def __post_init__(self) -> None:
        if len(self.dim) != 7:
            raise ValueError("dim must be a 7-tuple (L,M,T,I,Θ,N,J)")
        if not (self.scale_to_si > 0 and isfinite(self.scale_to_si)):
            raise ValueError("scale_to_si must be a positive, finite number")
        if not isfinite(self.offset):
            raise ValueError("offset must be finite")

    @property
    def is_linear(self) -> bool:
        return False

    def to_base_abs(self, x: float) -> float:
        return x * self.scale_to_si + self.offset

    def from_base_abs(self, x: float) -> float:
        return (x - self.offset) / self.scale_to_si

    def to_base_delta(self, dx: float) -> float:
        return dx * self.scale_to_si

    def from_base_delta(self, dx: float) -> float:
        return dx / self.scale_to_si


AtomicUnit = LinearUnit | AffineUnit


@dataclass(frozen=True, slots=True)
class UnitFactor:
    """
    One term of a composed unit.

    Attributes
    ----------
    symbol : str
        The (possibly prefixed) symbol as it appears in the unit, e.g. "kg".
    base : LinearUnit | AffineUnit
        The registered atomic unit the symbol resolves to, e.g. gram.
    prefix : Prefix
        The prefix in front of ``base`` ("k" for "kg"); identity if none.
    exponent : int
        Non-zero integer power of this factor.
    """

    symbol: str
    base: AtomicUnit
    prefix: Prefix = IDENTITY_PREFIX
    exponent: int = 1

    @property
    def dim(self) -> Dim:
        return dim_pow(self.base.dim, self.exponent)

    @property
    def scale_to_si(self) -> float:
        return self.prefix.scale(self.exponent) * self.base.scale_to_si ** self.exponent

    @property
    def key(self) -> Tuple[str, str, int]:
        return (self.base.name, self.prefix.symbol, self.exponent)

    def with_prefix(self, prefix: Prefix) -> UnitFactor:
        return UnitFactor(prefix.symbol + self.base.name, self.base, prefix, self.exponent)

    def with_exponent(self, exponent: int) -> UnitFactor:
        return UnitFactor(self.symbol, self.base, self.prefix, exponent)

    def __str__(self) -> str:
        return self.symbol if self.exponent == 1 else f"{self.symbol}^{self.exponent}"


def format_factors(factors: Iterable[UnitFactor]) -> str:
    """Canonical symbol of a factor sequence: ``'kg m s^-2'``."""
    return " ".join(str(f) for f in factors)


def merge_factors(*groups: Iterable[UnitFactor]) -> Tuple[UnitFactor, ...]:
    """Combine factor sequences, summing exponents of identical prefixed symbols.

    Order of first appearance is kept; factors cancelling to zero are dropped.
    """
    merged: Dict[Tuple[str, str], UnitFactor] = {}
    for group in groups:
        for f in group:
            k = (f.base.name, f.prefix.symbol)
            if k in merged:
                merged[k] = merged[k].with_exponent(merged[k].exponent + f.exponent)
            else:
                merged[k] = f
    return tuple(f for f in merged.values() if f.exponent != 0)


@dataclass(frozen=True, slots=True, eq=False)
class Unit:
    """
    A composed physical unit, e.g. ``m``, ``μm^-3`` or ``kg m s^-2``.

    Units are normally obtained from a registry (``quantor.units.unit("m/s")``).
    Two units are equal when their factors are equal, regardless of how the
    expression was spelled (``"m/s" == "m s^-1"``).
    """

    factors: Tuple[UnitFactor, ...]
    symbol: str = field(default="")

    def __post_init__(self) -> None:
        object.__setattr__(self, "factors", tuple(self.factors))
        if not self.symbol:
            object.__setattr__(self, "symbol", format_factors(self.factors))

    # --- protocol ---------------------------------------------------------
    @property
    def name(self) -> str:
        return self.symbol

    @property
    def dim(self) -> Dim:
        d = DIM_0
        for f in self.factors:
            d = dim_mul(d, f.dim)
        return d

    @property
    def scale_to_si(self) -> float:
        s = 1.0
        for f in self.factors:
            s *= f.scale_to_si
        return s

    @property
    def is_linear(self) -> bool:
        # an offset only makes sense for a lone affine factor with exponent 1
        if len(self.factors) != 1:
            return True
        f = self.factors[0]
        return f.exponent != 1 or f.base.is_linear

    def to_base_abs(self, x: float) -> float:
        if self.is_linear:
            return x * self.scale_to_si
        f = self.factors[0]
        return f.base.to_base_abs(x * f.prefix.factor)

    def from_base_abs(self, x: float) -> float:
        if self.is_linear:
            return x / self.scale_to_si
        f = self.factors[0]
        return f.base.from_base_abs(x) / f.prefix.factor

    def to_base_delta(self, dx: float) -> float:
        return dx * self.scale_to_si

    def from_base_delta(self, dx: float) -> float:
        return dx / self.scale_to_si

    # --- algebra ----------------------------------------------------------
    def __mul__(self, other: "Unit") -> "Unit":
        if not isinstance(other, Unit):
            return NotImplemented
        return Unit(merge_factors(self.factors, other.factors))

    def __truediv__(self, other: "Unit") -> "Unit":
        if not isinstance(other, Unit):
            return NotImplemented
        return Unit(merge_factors(self.factors, (f.with_exponent(-f.exponent) for f in other.factors)))

    def __rtruediv__(self, n: int | float) -> "Unit":
        if n != 1:
            raise TypeError(
                f"Invalid operation: cannot divide {n} by a Unit ({self.symbol}). "
                "Only 1/unit (reciprocal) is supported."
            )
        return self ** -1

    def __pow__(self, n: int) -> "Unit":
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"Unit exponents must be integers, got {type(n).__name__}")
        if n == 0:
            return Unit(())
        return Unit(tuple(f.with_exponent(f.exponent * n) for f in self.factors))

    # --- identity ---------------------------------------------------------
    @property
    def key(self) -> Tuple[Tuple[str, str, int], ...]:
        return tuple(f.key for f in self.factors)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Unit):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return prettify_unit_symbol(self.symbol)

    def __repr__(self) -> str:
        return f"Unit({self.symbol!r})"


DIMENSIONLESS = Unit(())

__all__ = [
    "UnitLike",
    "LinearUnit",
    "AffineUnit",
    "UnitFactor",
    "Unit",
    "DIMENSIONLESS",
    "format_factors",
    "merge_factors",
]
