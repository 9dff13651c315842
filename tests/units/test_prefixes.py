import pytest

from quantor.units.prefixes import (
    BINARY_PREFIXES,
    IDENTITY_PREFIX,
    PREFIXES_BY_SYMBOL,
    SI_PREFIXES,
)


def test_si_table_is_complete_and_descending():
    assert len(SI_PREFIXES) == 24
    factors = [p.factor for p in SI_PREFIXES]
    assert factors == sorted(factors, reverse=True)
    assert SI_PREFIXES[0].symbol == "Q"
    assert SI_PREFIXES[-1].symbol == "q"


def test_micro_is_greek_mu():
    assert "μ" in PREFIXES_BY_SYMBOL          # U+03BC
    assert "µ" not in PREFIXES_BY_SYMBOL      # U+00B5 micro sign


@pytest.mark.parametrize("symbol, factor", [
    ("k", 1e3),
    ("da", 10.0),
    ("μ", 1e-6),
    ("Ki", 1024.0),
    ("Mi", 1024.0 ** 2),
])
def test_factors(symbol, factor):
    assert PREFIXES_BY_SYMBOL[symbol].factor == factor


def test_scale_is_exact_for_negative_exponents():
    micro = PREFIXES_BY_SYMBOL["μ"]
    assert micro.scale(-3) == 1e18
    assert PREFIXES_BY_SYMBOL["d"].scale(2) == 1 / 100


def test_identity_prefix():
    assert IDENTITY_PREFIX.is_identity
    assert IDENTITY_PREFIX.factor == 1.0
    assert str(IDENTITY_PREFIX) == ""


def test_binary_prefixes_are_powers_of_two():
    assert all(p.base == 2 and p.power % 10 == 0 for p in BINARY_PREFIXES)
