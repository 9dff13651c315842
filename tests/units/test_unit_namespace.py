# pytest tests for quantor.units.registry.UnitNamespace

import pytest

import quantor.units.registry as regmod
from quantor.core.dimensions import dim_div
from quantor.core.unit import LinearUnit, Unit
from quantor.units.registry import UnitNamespace, _bootstrap_default_registry


@pytest.fixture
def u():
    # fresh namespace per test to avoid global state bleed
    return _bootstrap_default_registry().as_namespace()


@pytest.fixture()
def ns(reg):
    """A UnitNamespace over an isolated registry."""
    return UnitNamespace(reg)


# ---------------------------------------------------------------------------
# Access styles: __call__, __getattr__
# ---------------------------------------------------------------------------

def test_namespace_call_returns_unit(ns, reg):
    u1 = ns("m")
    assert isinstance(u1, Unit)
    assert u1 == reg.unit("m")


def test_namespace_getattr_returns_unit(ns, reg):
    assert ns.kg == reg.unit("kg")
    assert ns.km.scale_to_si == pytest.approx(1e3)


def test_namespace_access_styles_equivalent(ns):
    assert ns("A") == ns.A


@pytest.mark.parametrize("alias", ["ohm", "Ohm", "OHM"])
def test_namespace_getattr_aliases(ns, reg, alias):
    assert getattr(ns, alias) == reg.unit("Ω")


def test_namespace_call_compound_expression(ns, reg):
    a = ns("m/s**2")
    b = reg.unit("m") / (reg.unit("s") ** 2)
    assert a == b


def test_namespace_contains(ns):
    assert "km" in ns
    assert "blorp" not in ns


# ---------------------------------------------------------------------------
# Error behavior
# ---------------------------------------------------------------------------

def test_namespace_getattr_unknown_raises_attributeerror(ns):
    with pytest.raises(AttributeError):
        _ = ns.blorp


def test_namespace_call_unknown_raises_valueerror(ns):
    with pytest.raises(ValueError):
        _ = ns("blorp")


# ---------------------------------------------------------------------------
# __dir__
# ---------------------------------------------------------------------------

def test_namespace_dir_includes_registered_symbols(ns, reg):
    reg.register(LinearUnit("ft", 0.3048, reg.get("m").dim))
    reg.register_alias("foot", "ft")
    names = dir(ns)
    assert "m" in names
    assert "ft" in names
    assert "foot" in names


def test_namespace_dir_is_sorted_and_not_empty(ns):
    names = dir(ns)
    assert names == sorted(names)
    assert len(names) > 10


# ---------------------------------------------------------------------------
# define
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("name", ["define", "__init__", "_reserved_names"])
def test_define_rejects_namespace_attribute_names(u, name):
    with pytest.raises(ValueError, match="conflicts with UnitNamespace"):
        u.define(name, 1.0, u.m)


def test_define_nonconflicting_name_succeeds(u):
    u.define("furlong", 201.168, u.m)
    assert u("furlong").scale_to_si == pytest.approx(201.168)
    assert u.furlong == u("furlong")
    # new units take SI prefixes
    assert u.kfurlong.scale_to_si == pytest.approx(201168)


def test_define_relative_to_composed_unit(u):
    u.define("kph", 1.0, u("km/h"))
    assert u.kph.scale_to_si == pytest.approx(1000 / 3600)
    assert u.kph.dim == dim_div(u.m.dim, u.s.dim)


def test_define_rejects_affine_reference(u):
    with pytest.raises(ValueError):
        u.define("weird", 2.0, u("°C"))


def test_registry_blocks_reserved_name_on_alias():
    reg = _bootstrap_default_registry()
    with pytest.raises(ValueError, match="UnitNamespace"):
        reg.register_alias("__init__", "m")


def test_namespace_follows_patched_default_registry(monkeypatch, reg):
    monkeypatch.setattr(regmod, "DEFAULT_REGISTRY", reg, raising=True)
    from quantor.units import u
    assert u._reg is reg
