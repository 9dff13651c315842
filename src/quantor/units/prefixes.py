"""
quantor.units.prefixes
======================

Unit prefix tables.

A `Prefix` scales a unit symbol by ``base ** power``. SI prefixes use base 10,
binary (IEC) prefixes base 2. Factors are derived from the integer exponent so
that composed scales like ``(μm)^-3`` stay exact powers of ten.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Tuple


@dataclass(frozen=True, slots=True)
class Prefix:
    """A unit prefix such as kilo (``k``, 10³) or kibi (``Ki``, 2¹⁰)."""

    symbol: str
    name: str
    base: int = 10
    power: int = 0

    @property
    def factor(self) -> float:
        return self.scale(1)

    def scale(self, exponent: int) -> float:
        """Return ``factor ** exponent`` computed from integers where possible."""
        p = self.power * exponent
        if p >= 0:
            return float(self.base ** p)
        return 1.0 / float(self.base ** -p)

    @property
    def is_identity(self) -> bool:
        return self.power == 0

    def __str__(self) -> str:
        return self.symbol


IDENTITY_PREFIX = Prefix("", "", 10, 0)

# Descending factor. Greek mu (U+03BC) is the canonical micro symbol.
SI_PREFIXES: Tuple[Prefix, ...] = (
    Prefix("Q",  "quetta", 10,  30),
    Prefix("R",  "ronna",  10,  27),
    Prefix("Y",  "yotta",  10,  24),
    Prefix("Z",  "zetta",  10,  21),
    Prefix("E",  "exa",    10,  18),
    Prefix("P",  "peta",   10,  15),
    Prefix("T",  "tera",   10,  12),
    Prefix("G",  "giga",   10,   9),
    Prefix("M",  "mega",   10,   6),
    Prefix("k",  "kilo",   10,   3),
    Prefix("h",  "hecto",  10,   2),
    Prefix("da", "deca",   10,   1),
    Prefix("d",  "deci",   10,  -1),
    Prefix("c",  "centi",  10,  -2),
    Prefix("m",  "milli",  10,  -3),
    Prefix("μ",  "micro",  10,  -6),
    Prefix("n",  "nano",   10,  -9),
    Prefix("p",  "pico",   10, -12),
    Prefix("f",  "femto",  10, -15),
    Prefix("a",  "atto",   10, -18),
    Prefix("z",  "zepto",  10, -21),
    Prefix("y",  "yocto",  10, -24),
    Prefix("r",  "ronto",  10, -27),
    Prefix("q",  "quecto", 10, -30),
)

BINARY_PREFIXES: Tuple[Prefix, ...] = (
    Prefix("Ki", "kibi", 2,  10),
    Prefix("Mi", "mebi", 2,  20),
    Prefix("Gi", "gibi", 2,  30),
    Prefix("Ti", "tebi", 2,  40),
    Prefix("Pi", "pebi", 2,  50),
    Prefix("Ei", "exbi", 2,  60),
    Prefix("Zi", "zebi", 2,  70),
    Prefix("Yi", "yobi", 2,  80),
    Prefix("Ri", "robi", 2,  90),
    Prefix("Qi", "quebi", 2, 100),
)

PREFIXES: Tuple[Prefix, ...] = SI_PREFIXES + BINARY_PREFIXES

PREFIXES_BY_SYMBOL: Mapping[str, Prefix] = {p.symbol: p for p in PREFIXES}


__all__ = [
    "Prefix",
    "IDENTITY_PREFIX",
    "SI_PREFIXES",
    "BINARY_PREFIXES",
    "PREFIXES",
    "PREFIXES_BY_SYMBOL",
]
