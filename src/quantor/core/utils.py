"""
quantor.core.utils
==================

Utility functions for formatting units and dimensions, and for splitting
floating-point numbers into a base-10 exponent and mantissa.

This module provides helper functions for representing dimensional exponents
and unit strings in a readable scientific format (e.g., 'kg·m/s²'), and the
number helpers the prefix optimizer builds its cost function on.
"""

from __future__ import annotations

import math
import re
from typing import List, Pattern, Tuple

from quantor.core.dimensions import Dim

_SUPERSCRIPTS = str.maketrans("0123456789-", "⁰¹²³⁴⁵⁶⁷⁸⁹⁻")


def _sup(n: int) -> str:
    return "" if n == 1 else str(n).translate(_SUPERSCRIPTS)


# match token like "cm", "s^2", "m^-3"
_TOKEN_RE: Pattern[str] = re.compile(r"(?P<sym>[^\s^]+)(?:\^(?P<exp>-?\d+))?")


def prettify_unit_symbol(symbol: str) -> str:
    """
    Pretty-print a canonical unit symbol ('kg m s^-2') using the *existing*
    symbols, middle-dots and unicode superscripts: 'kg·m·s⁻²'.
    """
    if not symbol:
        return "1"

    parts: List[str] = []
    for tok in symbol.split():
        m = _TOKEN_RE.fullmatch(tok)
        if not m:
            parts.append(tok)
            continue
        exp = m.group("exp")
        parts.append(m.group("sym") + (_sup(int(exp)) if exp is not None else ""))
    return "·".join(parts)


# ---------- Dimension → pretty unit string ----------
def format_dim(dim: Dim) -> str:
    """
    Turn a dimension tuple (L,M,T,I,Θ,N,J) into 'kg·m/s²' style.
    Conventional order: M, L, T, I, Θ, N, J.
    """
    # indices: L=0 M=1 T=2 I=3 Θ=4 N=5 J=6
    labels: List[str] = ["m", "kg", "s", "A", "K", "mol", "cd"]
    order: List[int] = [1, 0, 2, 3, 4, 5, 6]  # M, L, T, I, Θ, N, J  (fixed order)

    num: List[str] = []
    den: List[str] = []
    for i in order:
        e = dim[i]
        if e > 0:
            num.append(labels[i] + _sup(e))
        elif e < 0:
            den.append(labels[i] + _sup(-e))

    numerator = "·".join(num) if num else "1"
    denominator = "·".join(den)
    return f"{numerator}/{denominator}" if denominator else numerator


# ---------- Base-10 decomposition ----------
def base10_exponent(x: float) -> int:
    """
    Return ``floor(log10(|x|))``, the decimal exponent of ``x``.

    Zero and non-finite values have exponent 0. Values a rounding error below
    a power of ten (``0.09999999999999999``) report that power's exponent,
    since ``log10`` rounds them onto it.
    """
    ax = abs(x)
    if ax == 0.0 or not math.isfinite(ax):
        return 0
    return math.floor(math.log10(ax))


def base10_split(x: float) -> Tuple[float, int]:
    """
    Split ``|x|`` into ``(mantissa, exponent)``, the mantissa in [1, 10) up to rounding.

    >>> base10_split(1024.0)
    (1.024, 3)

    Zero gives ``(0.0, 0)``.
    """
    e = base10_exponent(x)
    ax = abs(x)
    if ax == 0.0:
        return 0.0, 0
    if e >= 0:
        return ax / 10.0 ** e, e
    if e < -300:
        return (ax * 1e300) * 10.0 ** (-e - 300), e
    return ax * 10.0 ** -e, e
