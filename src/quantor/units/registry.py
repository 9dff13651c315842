"""
quantor.units.registry
======================

A structured, extensible, and testable units registry.

- Encapsulates global state in a `UnitsRegistry` class (thread-safe).
- Data-driven registration of SI base/derived units and a few common non-SI units.
- Normalization that handles ASCII fallbacks and Unicode NFC.
- Prefix resolution with anti-stacking checks and per-unit legal prefix tables
  (SI prefixes by default, SI + binary prefixes for bit and byte).
- Support for aliases (e.g., "ohm" → "Ω", "degC" → "°C").
- Composition of unit expressions into `Unit` objects and their decomposition
  back into ordered factors.

The registry is the configuration point of the library: every operation that
needs units takes an optional ``registry=`` and falls back to
`DEFAULT_REGISTRY`.
"""
from __future__ import annotations

import logging
import math
import re
import threading
import unicodedata
from typing import ClassVar, Dict, Iterable, Mapping, Optional, Tuple

from quantor.core.dimensions import (
    AMOUNT,
    CURRENT,
    DIM_0,
    LENGTH,
    LUMINOUS,
    MASS,
    TEMPERATURE,
    TIME,
    dim_div,
    dim_mul,
    dim_pow,
)
from quantor.core.unit import DIMENSIONLESS, AffineUnit, LinearUnit, Unit, UnitFactor
from quantor.errors import UnknownUnitError
from quantor.units.parser import extract_unit_expr
from quantor.units.prefixes import (
    BINARY_PREFIXES,
    IDENTITY_PREFIX,
    PREFIXES,
    SI_PREFIXES,
    Prefix,
)

logger = logging.getLogger(__name__)

AtomicUnit = LinearUnit | AffineUnit

# Ordered list of prefixes by descending symbol length for robust matching
_PREFIXES_LONGEST_FIRST: Tuple[Prefix, ...] = tuple(sorted(PREFIXES, key=lambda p: len(p.symbol), reverse=True))

# ---------------------------------------------------------------------------
# Normalization & aliases
# ---------------------------------------------------------------------------
_OHM_RE = re.compile(r"(?i)ohm")


def normalize_symbol(s: str) -> str:
    """Normalize user-provided unit symbols.

    Rules:
    - Unicode normalize to NFC.
    - Map the micro sign 'µ' (U+00B5) to Greek 'μ' (U+03BC).
    - Replace ASCII leading 'u' micro with Greek 'μ' **only** at start.
    - Map textual aliases to canonical symbols (e.g. any 'ohm' → 'Ω').
    - Strip surrounding whitespace.
    """
    if not s:
        return s

    s = s.strip()
    s = unicodedata.normalize("NFC", s)
    s = s.replace("µ", "μ")

    # Leading 'u' as ASCII micro → 'μ'
    if s.startswith("u") and len(s) > 1:
        s = "μ" + s[1:]

    # Replace all forms of 'ohm' with Ω
    s = _OHM_RE.sub("Ω", s)
    return s


# ---------------------------------------------------------------------------
# Units registry
# ---------------------------------------------------------------------------
class UnitsRegistry:
    """Thread-safe registry of atomic units with prefix resolution.

    Atomic symbols ("m", "kg", "°C") are registered directly. Prefixed symbols
    ("mm", "MeV", "KiB") are resolved on lookup into a prefix and a registered
    base, never stored, so prefixes cannot stack.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._units: Dict[str, AtomicUnit] = {}
        self._aliases: Dict[str, str] = {}
        self._non_prefixable: set[str] = set()
        self._prefix_tables: Dict[str, Tuple[Prefix, ...]] = {}
        self._version = 0

    def __contains__(self, symbol: str) -> bool:
        return self.has(symbol)

    @property
    def version(self) -> int:
        """Counter bumped on every mutation; lets callers invalidate caches."""
        return self._version

    def _touch(self) -> None:
        self._version += 1

    def set_non_prefixable(self, symbols: Iterable[str]) -> None:
        """Mark unit symbols that must not accept prefixes (e.g., 'kg', 'min')."""
        with self._lock:
            self._non_prefixable = {normalize_symbol(s) for s in symbols}
            self._touch()

    def is_non_prefixable(self, symbol: str) -> bool:
        """Query helper (symbol may be alias; we normalize only the token)."""
        return normalize_symbol(symbol) in self._non_prefixable

    def set_prefixes(self, symbol: str, prefixes: Iterable[Prefix]) -> None:
        """Replace the table of prefixes legal in front of ``symbol``."""
        with self._lock:
            self._prefix_tables[normalize_symbol(symbol)] = tuple(prefixes)
            self._touch()

    # -------------------------- public API ---------------------------------
    def register(
        self,
        unit: AtomicUnit,
        replace: bool = False,
        prefixes: Optional[Iterable[Prefix]] = None,
    ) -> None:
        """Register (or overwrite if replace is True) an atomic unit under its canonical name.

        ``prefixes`` restricts or extends the prefixes legal for this symbol;
        the default is the SI table. Use `register_alias` to add additional
        spellings without duplication.
        """
        with self._lock:
            if unit.name in getattr(UnitNamespace, "_reserved_names", ()):
                raise ValueError(
                    f"Cannot register unit '{unit.name}': "
                    "name conflicts with UnitNamespace attribute/method."
                )

            if not replace:
                if unit.name in self._units:
                    raise ValueError(
                        f"Cannot register unit '{unit.name}': "
                        "a unit with this name already exists."
                    )
                if unit.name in self._aliases:
                    raise ValueError(
                        f"Cannot register unit '{unit.name}': "
                        "an alias with this name already exists."
                    )

            self._units[unit.name] = unit
            if prefixes is not None:
                self._prefix_tables[unit.name] = tuple(prefixes)
            self._touch()

    def register_alias(self, alias: str, canonical: str, replace: bool = False) -> None:
        # 1) normalized form (e.g., 'ohm' -> 'Ω')
        norm_key = normalize_symbol(alias)

        # 2) literal, NFC/trimmed spelling (for discoverability in __dir__)
        literal_key = unicodedata.normalize("NFC", alias.strip())

        with self._lock:
            reserved = getattr(UnitNamespace, "_reserved_names", ())
            if literal_key in reserved or norm_key in reserved:
                raise ValueError(
                    f"Cannot register alias '{alias}': "
                    "name conflicts with UnitNamespace attribute/method."
                )
            if canonical not in self._units:
                raise UnknownUnitError(f"Cannot alias '{alias}' to unknown unit '{canonical}'")
            if not replace:
                for key in {literal_key, norm_key}:
                    # A key may only shadow a unit if that unit is the alias target.
                    if key in self._units and key != canonical:
                        raise ValueError(
                            f"Cannot register alias '{alias}' (which maps to '{key}'): "
                            f"a unit with the name '{key}' already exists."
                        )

            self._aliases[norm_key] = canonical
            self._aliases[literal_key] = canonical
            self._touch()

    def has(self, symbol: str) -> bool:
        try:
            self.unit(symbol)
            return True
        except ValueError:
            return False

    def get(self, symbol: str) -> AtomicUnit:
        """Lookup an atomic unit by symbol, synthesizing prefixed forms.

        Raises `UnknownUnitError` (a `ValueError`) if unknown.
        """
        sym = self._canonical(symbol)
        with self._lock:
            u = self._units.get(sym)
            if u is not None:
                return u
        prefix, base = self.resolve(sym)
        if isinstance(base, AffineUnit):
            return AffineUnit(sym, base.scale_to_si * prefix.factor, base.offset, base.dim)
        return LinearUnit(sym, base.scale_to_si * prefix.factor, base.dim, base._is_delta)

    def resolve(self, symbol: str) -> Tuple[Prefix, AtomicUnit]:
        """Split an atomic symbol into ``(prefix, registered base unit)``.

        A registered symbol that is not prefixable but spells a legal prefix
        on a prefixable base with the matching scale ("kg" = "k" + "g") is
        split, so that prefix searches start from the real base unit.
        """
        sym = self._canonical(symbol)
        with self._lock:
            direct = self._units.get(sym)
            if direct is not None:
                if sym not in self._non_prefixable:
                    return IDENTITY_PREFIX, direct
                embedded = self._split_prefixed(sym)
                if embedded is not None:
                    prefix, base = embedded
                    if base.dim == direct.dim and math.isclose(
                        prefix.factor * base.scale_to_si, direct.scale_to_si, rel_tol=1e-12
                    ):
                        return prefix, base
                return IDENTITY_PREFIX, direct

            split = self._split_prefixed(sym)
            if split is not None:
                logger.debug("Resolved '%s' as prefix '%s' on '%s'", sym, split[0].symbol, split[1].name)
                return split

        raise UnknownUnitError(f"Unknown unit symbol: {symbol}")

    def factor(self, symbol: str) -> UnitFactor:
        """Resolve an atomic symbol into a `UnitFactor` with exponent 1."""
        prefix, base = self.resolve(symbol)
        return UnitFactor(prefix.symbol + base.name, base, prefix, 1)

    def unit(self, expr: "str | Unit") -> Unit:
        """Compose a `Unit` from an expression such as ``"kg m s^-2"`` or ``"m/s"``."""
        if isinstance(expr, Unit):
            return expr
        if not expr.strip() or expr.strip() == "1":
            return DIMENSIONLESS
        return Unit(extract_unit_expr(expr, self))

    compose = unit

    def decompose(self, unit: "str | Unit") -> Tuple[UnitFactor, ...]:
        """Return the ordered ``(symbol, base, prefix, exponent)`` factors of ``unit``."""
        return self.unit(unit).factors

    def legal_prefixes(self, base: "str | AtomicUnit") -> Tuple[Prefix, ...]:
        """Prefixes that may be placed in front of the atomic symbol ``base``."""
        name = base if isinstance(base, str) else base.name
        name = self._canonical(name)
        with self._lock:
            if name not in self._units or name in self._non_prefixable:
                return ()
            return self._prefix_tables.get(name, SI_PREFIXES)

    def prefix_allowed(self, base: "str | AtomicUnit", prefix: "str | Prefix | None" = None) -> bool:
        """Whether ``prefix`` (or, when omitted, any prefix) may precede ``base``."""
        table = self.legal_prefixes(base)
        if prefix is None:
            return bool(table)
        sym = prefix if isinstance(prefix, str) else prefix.symbol
        if sym == "":
            return True
        return any(p.symbol == sym for p in table)

    def all(self) -> Mapping[str, AtomicUnit]:
        with self._lock:
            return dict(self._units)

    def as_namespace(self) -> UnitNamespace:
        return UnitNamespace(self)

    # ------------------------- internals -----------------------------------
    def _canonical(self, symbol: str) -> str:
        sym = normalize_symbol(symbol)
        return self._aliases.get(sym, self._aliases.get(symbol.strip(), sym))

    def _split_prefixed(self, sym: str) -> Optional[Tuple[Prefix, AtomicUnit]]:
        for p in _PREFIXES_LONGEST_FIRST:
            if not sym.startswith(p.symbol) or len(sym) == len(p.symbol):
                continue
            rest = sym[len(p.symbol):]
            rest = self._aliases.get(rest, rest)
            base = self._units.get(rest)
            if base is None or rest in self._non_prefixable:
                continue
            if p in self._prefix_tables.get(rest, SI_PREFIXES):
                return p, base
        return None


class UnitNamespace:
    _reserved_names: ClassVar[set[str]] = set()

    def __init__(self, reg: "UnitsRegistry") -> None:
        self._reg = reg

    def __contains__(self, spec: str) -> bool:
        return self._reg.has(spec)

    def define(self, expr: str, scale: "float|int", reference: "Unit", replace: bool = False) -> None:
        """Register ``expr`` as ``scale`` times ``reference`` (e.g. inch = 2.54 cm)."""
        if expr in getattr(UnitNamespace, "_reserved_names", ()):
            raise ValueError(
                f"Cannot define unit '{expr}': "
                "name conflicts with UnitNamespace attribute/method."
            )
        if not reference.is_linear:
            raise ValueError("Only linear reference units can be used to define new units.")

        self._reg.register(LinearUnit(expr, float(scale) * reference.scale_to_si, reference.dim), replace)

    def __call__(self, spec: str) -> Unit:
        return self._reg.unit(spec)

    def __getattr__(self, name: str) -> Unit:
        if name.startswith("__") or name == "_reg":
            raise AttributeError(name)
        try:
            return self._reg.unit(name)
        except (KeyError, ValueError) as e:
            # Unknown symbol should look like a missing attribute
            raise AttributeError(name) from e

    def __dir__(self) -> list[str]:
        """List all available unit symbols for autocomplete."""
        base_dir = set(super().__dir__())
        units = set(self._reg.all().keys())
        aliases = set(self._reg._aliases.keys())
        return sorted(base_dir | units | aliases)

UnitNamespace._reserved_names = set(dir(UnitNamespace))  # pyright: ignore[reportInvalidTypeForm] # type: set[str]


# ---------------------------------------------------------------------------
# Bootstrap a default registry
# ---------------------------------------------------------------------------

def _bootstrap_default_registry() -> UnitsRegistry:
    reg = UnitsRegistry()

    # Base SI units; "g" carries the prefixes of the mass family
    base_units = (
        LinearUnit("m",   1.0, LENGTH),       # length
        LinearUnit("kg",  1.0, MASS),         # mass
        LinearUnit("g",   1e-3, MASS),        # gram
        LinearUnit("s",   1.0, TIME),         # time
        LinearUnit("A",   1.0, CURRENT),      # electric current
        LinearUnit("K",   1.0, TEMPERATURE),  # temperature
        LinearUnit("mol", 1.0, AMOUNT),       # amount of substance
        LinearUnit("cd",  1.0, LUMINOUS),     # luminous intensity
    )

    # Named, dimensionless
    derived_named = (
        LinearUnit("rad", 1.0, DIM_0),
        LinearUnit("sr",  1.0, DIM_0),
    )

    # --- Helpful composite dimensions (readable + reuse) ---
    FORCE        = dim_mul(MASS, dim_div(LENGTH, dim_pow(TIME, 2)))              # N
    PRESSURE     = dim_div(FORCE, dim_pow(LENGTH, 2))                             # Pa
    ENERGY       = dim_mul(FORCE, LENGTH)                                         # J
    POWER        = dim_div(ENERGY, TIME)                                          # W
    CHARGE       = dim_mul(CURRENT, TIME)                                         # C
    VOLTAGE      = dim_div(POWER, CURRENT)                                        # V
    CAPACITANCE  = dim_div(CHARGE, VOLTAGE)                                       # F
    RESISTANCE   = dim_div(VOLTAGE, CURRENT)                                      # Ω
    CONDUCTANCE  = dim_div(CURRENT, VOLTAGE)                                      # S
    FLUX         = dim_mul(VOLTAGE, TIME)                                         # Wb
    FLUX_DENSITY = dim_div(FLUX, dim_pow(LENGTH, 2))                              # T (tesla)
    INDUCTANCE   = dim_div(FLUX, CURRENT)                                         # H
    LUMEN        = LUMINOUS                                                       # lm = cd·sr, sr ≡ dimensionless
    LUX          = dim_div(LUMEN, dim_pow(LENGTH, 2))                             # lx
    FREQUENCY    = dim_pow(TIME, -1)                                              # Hz, Bq
    DOSE         = dim_div(ENERGY, MASS)                                          # Gy, Sv
    CATALYTIC    = dim_div(AMOUNT, TIME)                                          # kat
    VOLUME       = dim_pow(LENGTH, 3)                                             # L

    # Derived (symbol, scale_to_si, dim)
    derived_units = (
        ("Hz", 1.0,  FREQUENCY),
        ("N",  1.0,  FORCE),
        ("Pa", 1.0,  PRESSURE),
        ("J",  1.0,  ENERGY),
        ("W",  1.0,  POWER),
        ("C",  1.0,  CHARGE),
        ("V",  1.0,  VOLTAGE),
        ("F",  1.0,  CAPACITANCE),
        ("Ω",  1.0,  RESISTANCE),
        ("S",  1.0,  CONDUCTANCE),
        ("Wb", 1.0,  FLUX),
        ("T",  1.0,  FLUX_DENSITY),
        ("H",  1.0,  INDUCTANCE),
        ("lm", 1.0,  LUMEN),
        ("lx", 1.0,  LUX),
        ("Bq", 1.0,  FREQUENCY),
        ("Gy", 1.0,  DOSE),
        ("Sv", 1.0,  DOSE),
        ("kat",1.0,  CATALYTIC),
        # accepted non-SI units that take SI prefixes
        ("L",   1e-3,            VOLUME),
        ("eV",  1.602176634e-19, ENERGY),
        ("bar", 1e5,             PRESSURE),
    )

    time_units = (
        ("min",        60.0,                             TIME),  # minute
        ("h",          60.0 * 60.0,                      TIME),  # hour
        ("d",          24.0 * 60.0 * 60.0,               TIME),  # day
        ("wk",         7.0 * 24.0 * 60.0 * 60.0,         TIME),  # week

        # Civil (Gregorian) average month/year
        ("mo",         (365.2425 / 12.0) * 24.0 * 3600.0, TIME), # month (avoid "m")
        ("yr",         365.2425 * 24.0 * 3600.0,          TIME), # year (Gregorian mean)
    )

    angle_units = (
        ("deg",    math.pi / 180.0,          DIM_0),
        ("arcmin", math.pi / (180.0 * 60.0), DIM_0),
        ("arcsec", math.pi / (180.0 * 3600.0), DIM_0),
    )

    # Register all
    for u in base_units:
        reg.register(u)
    for u in derived_named:
        reg.register(u)
    for sym, scale, dim in derived_units:
        reg.register(LinearUnit(sym, scale, dim))
    for sym, scale, dim in time_units:
        reg.register(LinearUnit(sym, scale, dim))
    for sym, scale, dim in angle_units:
        reg.register(LinearUnit(sym, scale, dim))

    # Information; bit and byte take SI and binary prefixes
    reg.register(LinearUnit("bit", 1.0, DIM_0), prefixes=SI_PREFIXES + BINARY_PREFIXES)
    reg.register(LinearUnit("B",   8.0, DIM_0), prefixes=SI_PREFIXES + BINARY_PREFIXES)

    # Temperature units
    reg.register(AffineUnit("°C", 1.0, 273.15, TEMPERATURE))
    reg.register(AffineUnit("°F", 5 / 9, 273.15 - 32 * 5 / 9, TEMPERATURE))
    reg.register(LinearUnit.delta("Δ°C", 1, TEMPERATURE))
    reg.register(LinearUnit.delta("Δ°F", 5 / 9, TEMPERATURE))

    # Common aliases
    reg.register_alias("ohm", "Ω")
    reg.register_alias("Ohm", "Ω")
    reg.register_alias("OHM", "Ω")
    reg.register_alias("l", "L")

    # Time aliases
    reg.register_alias("minute", "min")
    reg.register_alias("minutes", "min")
    reg.register_alias("hr", "h")
    reg.register_alias("hour", "h")
    reg.register_alias("hours", "h")
    reg.register_alias("day", "d")
    reg.register_alias("days", "d")
    reg.register_alias("week", "wk")
    reg.register_alias("weeks", "wk")
    reg.register_alias("month", "mo")
    reg.register_alias("months", "mo")
    reg.register_alias("year", "yr")
    reg.register_alias("years", "yr")

    # Angle aliases
    reg.register_alias("degree", "deg")
    reg.register_alias("degrees", "deg")
    reg.register_alias("°", "deg")

    # Temperature aliases
    reg.register_alias("degC", "°C")
    reg.register_alias("celsius", "°C")
    reg.register_alias("degF", "°F")
    reg.register_alias("fahrenheit", "°F")
    reg.register_alias("delta_degC", "Δ°C")
    reg.register_alias("delta_degF", "Δ°F")

    reg.set_non_prefixable([
        "kg",
        "min", "h", "d", "wk", "mo", "yr",
        "deg", "arcmin", "arcsec",
        "°C", "°F", "Δ°C", "Δ°F",
    ])

    return reg


# Public, shared default registry
DEFAULT_REGISTRY: UnitsRegistry = _bootstrap_default_registry()


# ---------------------------------------------------------------------------
# Convenience functions delegating to DEFAULT_REGISTRY
# ---------------------------------------------------------------------------

def unit(expr: "str | Unit") -> Unit:
    """Compose a `Unit` from an expression using the default registry."""
    return DEFAULT_REGISTRY.unit(expr)


def compose(expr: "str | Unit") -> Unit:
    return DEFAULT_REGISTRY.compose(expr)


def decompose(u: "str | Unit") -> Tuple[UnitFactor, ...]:
    return DEFAULT_REGISTRY.decompose(u)


def legal_prefixes(base: "str | AtomicUnit") -> Tuple[Prefix, ...]:
    return DEFAULT_REGISTRY.legal_prefixes(base)


def prefix_allowed(base: "str | AtomicUnit", prefix: "str | Prefix | None" = None) -> bool:
    return DEFAULT_REGISTRY.prefix_allowed(base, prefix)


__all__ = [
    "UnitsRegistry",
    "UnitNamespace",
    "DEFAULT_REGISTRY",
    "normalize_symbol",
    "unit",
    "compose",
    "decompose",
    "legal_prefixes",
    "prefix_allowed",
]
