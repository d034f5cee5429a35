# src/lattice_pricing/numerics/__init__.py
"""
Numerical building blocks (advanced API).

Top-level package `lattice_pricing` exposes the everyday pricing API.
This subpackage exposes the fixed-point substrate the lattice is computed in.
"""

from .fixed_point import (
    ONE,
    SCALE_DIGITS,
    FixedPointDomainError,
    FixedPointError,
    FixedPointOverflowError,
    FixedPointZeroDivisionError,
    div,
    exp,
    fixed,
    from_int,
    mul,
    powi,
    sqrt,
    to_decimal,
    to_float,
)

__all__ = [
    # Constants
    "ONE",
    "SCALE_DIGITS",
    # Conversions
    "fixed",
    "from_int",
    "to_float",
    "to_decimal",
    # Arithmetic
    "mul",
    "div",
    "powi",
    "sqrt",
    "exp",
    # Errors
    "FixedPointError",
    "FixedPointOverflowError",
    "FixedPointZeroDivisionError",
    "FixedPointDomainError",
]
