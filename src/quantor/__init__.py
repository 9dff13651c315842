"""
Quantor: physical quantities on coordinate systems, with prefix optimization.

Quantor ties numeric data (scalars, sequences and matrices) to coordinate
systems whose axes carry units, converts them between coordinate systems and
picks readable unit prefixes automatically (``approach``).
This module exposes a minimal, stable public API. The units registry is built
on first use of `quantor.units.u` or of a unit expression.
"""

import logging
from importlib import metadata as _metadata


__author__ = "Parneet Sidhu"
__license__ = "MIT"

# Try to read the installed package version first; fall back to pyproject.toml for local dev.
try:
    __version__ = _metadata.version("quantor")
except _metadata.PackageNotFoundError:
    import tomllib
    from pathlib import Path

    with open(Path(__file__).resolve().parents[2] / "pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

# Library logging: never configure handlers on behalf of the application.
logging.getLogger(__name__).addHandler(logging.NullHandler())

from quantor.core.quantity import MatrixQuantity, Quantity, ScalarQuantity, SequenceQuantity  # noqa: E402
from quantor.errors import (  # noqa: E402
    InvalidArgumentError,
    InvalidQuantityError,
    QuantityError,
    UnknownUnitError,
    UnsupportedOperationError,
)

# Public names exposed by the package. Keep this minimal and stable.
__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "Quantity",
    "ScalarQuantity",
    "SequenceQuantity",
    "MatrixQuantity",
    "QuantityError",
    "InvalidQuantityError",
    "InvalidArgumentError",
    "UnsupportedOperationError",
    "UnknownUnitError",
]

