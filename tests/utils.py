# tests/utils.py
from quantor.units.registry import DEFAULT_REGISTRY as _ureg


def _symbols(quantity):
    """Axis unit symbols of a quantity, position by position."""
    return [quantity.axis(i).unit.symbol for i in range(quantity.coords.dimension)]


def _unit(expr: str):
    return _ureg.unit(expr)
