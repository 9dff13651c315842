"""
quantor.core.prefix_search
==========================

Enumerate the prefix rewrites of a unit.

For a composed unit the first factor whose symbol admits a prefix is the one
rewritten; every other factor (and every exponent) is kept. Each candidate is
paired with the exact value transform ``candidate.from_base_abs(unit.to_base_abs(v))``,
so affine units such as °C convert correctly.

Candidates come out in a fixed order: the unit itself, the unprefixed
spelling, then the legal prefixes in table order (SI prefixes by descending
factor, then binary prefixes). A rewrite that would merge with another factor
of the same base (``km m^-1`` to ``m m^-1``) is not a candidate.
"""
from __future__ import annotations

import logging
from functools import lru_cache, partial
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from quantor.core.unit import Unit, merge_factors
from quantor.units.prefixes import IDENTITY_PREFIX

if TYPE_CHECKING:
    from quantor.units.registry import UnitsRegistry

logger = logging.getLogger(__name__)

Transform = Callable[[float], float]


def _convert(origin: Unit, target: Unit, value: float) -> float:
    return target.from_base_abs(origin.to_base_abs(value))


def _identity(value: float) -> float:
    return value


@lru_cache(maxsize=1024)
def _candidates(unit: Unit, reg: "UnitsRegistry", version: int) -> Tuple[Unit, ...]:
    # `version` only keys the cache: a mutated registry gets fresh entries
    factors = reg.decompose(unit)
    for pos, f in enumerate(factors):
        table = reg.legal_prefixes(f.base)
        if table:
            break
    else:
        return (unit,)

    found = [unit]
    for prefix in (IDENTITY_PREFIX,) + tuple(table):
        if prefix.symbol == f.prefix.symbol:
            continue
        rebuilt = factors[:pos] + (f.with_prefix(prefix),) + factors[pos + 1:]
        merged = merge_factors(rebuilt)
        # the new prefix collides with another factor of the same base
        if len(merged) != len(rebuilt):
            continue
        found.append(Unit(merged))
    logger.debug("Unit %r: %d prefix candidates on factor %r", unit.symbol, len(found), f.symbol)
    return tuple(found)


def potential_transformations(
    unit: "Unit | str",
    registry: Optional["UnitsRegistry"] = None,
) -> Dict[Unit, Transform]:
    """
    Map every prefix rewrite of ``unit`` (itself included) to its value transform.

    >>> from quantor.units.registry import unit
    >>> ts = potential_transformations("km")
    >>> ts[unit("m")](1.5)
    1500.0
    """
    if registry is None:
        from quantor.units.registry import DEFAULT_REGISTRY as registry  # local import
    unit = registry.unit(unit)

    out: Dict[Unit, Transform] = {}
    for cand in _candidates(unit, registry, registry.version):
        out[cand] = _identity if cand == unit else partial(_convert, unit, cand)
    return out


def clear_cache() -> None:
    _candidates.cache_clear()


__all__ = ["potential_transformations", "clear_cache", "Transform"]
