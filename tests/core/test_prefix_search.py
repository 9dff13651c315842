import math

import pytest

from quantor.core import prefix_search
from quantor.core.dimensions import TEMPERATURE
from quantor.core.prefix_search import potential_transformations
from quantor.core.unit import AffineUnit, LinearUnit
from quantor.units.prefixes import BINARY_PREFIXES, SI_PREFIXES, Prefix
from quantor.units.registry import UnitsRegistry

pytestmark = pytest.mark.usefixtures("fresh_prefix_cache")


def _syms(units):
    return [u.symbol for u in units]


# ---------------------------------------------------------------------------
# Enumeration
# ---------------------------------------------------------------------------

def test_metre_candidates_in_table_order(reg):
    cands = list(potential_transformations("m", reg))
    assert cands[0] == reg.unit("m")
    assert _syms(cands[1:]) == [p.symbol + "m" for p in SI_PREFIXES]


def test_prefixed_unit_lists_itself_then_unprefixed(reg):
    cands = _syms(potential_transformations("km", reg))
    assert cands[:2] == ["km", "m"]
    # the prefix already in use is not repeated
    assert cands.count("km") == 1
    assert len(cands) == 1 + 1 + len(SI_PREFIXES) - 1


def test_kilogram_rewrites_the_gram(reg):
    cands = _syms(potential_transformations("kg", reg))
    assert cands[:2] == ["kg", "g"]
    assert "Mg" in cands
    assert "kkg" not in cands


def test_bytes_take_binary_prefixes(reg):
    cands = _syms(potential_transformations("B", reg))
    assert cands[1:] == [p.symbol + "B" for p in SI_PREFIXES + BINARY_PREFIXES]


@pytest.mark.parametrize("expr", ["°C", "min", "h", "deg", "1"])
def test_non_prefixable_unit_has_only_itself(reg, expr):
    ts = potential_transformations(expr, reg)
    assert list(ts) == [reg.unit(expr)]
    assert ts[reg.unit(expr)](42.0) == 42.0


@pytest.mark.regression
def test_candidates_never_cancel_against_another_factor(reg):
    cands = list(potential_transformations("km m^-1", reg))
    assert all(len(c.factors) == 2 for c in cands)
    syms = [c.symbol for c in cands]
    assert syms[:2] == ["km m^-1", "Qm m^-1"]
    assert "mm m^-1" in syms

def test_only_first_prefixable_factor_changes(reg):
    cands = _syms(potential_transformations("km s^-2", reg))
    assert cands[:3] == ["km s^-2", "m s^-2", "Qm s^-2"]
    assert all(c.endswith(" s^-2") for c in cands)


def test_leading_non_prefixable_factor_is_skipped(reg):
    cands = _syms(potential_transformations("h km^-1", reg))
    assert cands[:2] == ["h km^-1", "h m^-1"]
    assert "h mm^-1" in cands


def test_exponent_is_kept_on_the_rewritten_factor(reg):
    cands = _syms(potential_transformations("m^-3", reg))
    assert "μm^-3" in cands
    assert "dm^-3" in cands


# ---------------------------------------------------------------------------
# Transforms
# ---------------------------------------------------------------------------

def test_identity_transform_for_the_unit_itself(reg):
    ts = potential_transformations("km", reg)
    assert ts[reg.unit("km")](3.25) == 3.25


def test_linear_transforms_are_exact(reg):
    ts = potential_transformations("km", reg)
    assert ts[reg.unit("m")](1.5) == pytest.approx(1500.0)
    assert ts[reg.unit("mm")](1.0) == pytest.approx(1e6)


def test_transform_respects_exponents(reg):
    ts = potential_transformations("m^-3", reg)
    assert ts[reg.unit("μm^-3")](1e18) == pytest.approx(1.0)
    ts2 = potential_transformations("m^2", reg)
    assert ts2[reg.unit("dm^2")](3.0e-2) == pytest.approx(3.0)


def test_kilogram_to_megagram(reg):
    ts = potential_transformations("kg", reg)
    assert ts[reg.unit("Mg")](1024.0) == pytest.approx(1.024)


def test_prefixed_affine_candidates_keep_the_offset(reg):
    reg.register(AffineUnit("°X", 1.0, 100.0, TEMPERATURE))
    ts = potential_transformations("°X", reg)
    assert ts[reg.unit("k°X")](1500.0) == pytest.approx(1.5)
    assert ts[reg.unit("m°X")](1.0) == pytest.approx(1000.0)


# ---------------------------------------------------------------------------
# Registry argument and caching
# ---------------------------------------------------------------------------

def test_default_registry_is_used_when_none_given(ureg):
    ts = potential_transformations("km")
    assert ureg.unit("m") in ts


def test_accepts_unit_objects(reg):
    u = reg.unit("mm")
    assert list(potential_transformations(u, reg)) == list(potential_transformations("mm", reg))


def test_candidates_follow_registry_mutations(reg):
    before = list(potential_transformations("m", reg))
    assert len(before) == 1 + len(SI_PREFIXES)

    reg.set_prefixes("m", (Prefix("k", "kilo", 10, 3),))
    after = _syms(potential_transformations("m", reg))
    assert after == ["m", "km"]


def test_registries_do_not_share_candidates():
    a = UnitsRegistry()
    b = UnitsRegistry()
    a.register(LinearUnit("m", 1.0, (1, 0, 0, 0, 0, 0, 0)))
    b.register(LinearUnit("m", 1.0, (1, 0, 0, 0, 0, 0, 0)), prefixes=())
    assert len(potential_transformations("m", a)) == 1 + len(SI_PREFIXES)
    assert list(potential_transformations("m", b)) == [b.unit("m")]


def test_clear_cache_is_harmless(reg):
    first = list(potential_transformations("g", reg))
    prefix_search.clear_cache()
    assert list(potential_transformations("g", reg)) == first


def test_unknown_unit_raises(reg):
    with pytest.raises(ValueError):
        potential_transformations("blorp", reg)


def test_identity_transform_is_exact_for_large_values(reg):
    ts = potential_transformations("m", reg)
    assert ts[reg.unit("m")](math.pi * 1e300) == math.pi * 1e300
