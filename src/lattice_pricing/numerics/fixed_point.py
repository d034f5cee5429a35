"""Signed fixed-point decimal arithmetic with 18 fractional digits.

A fixed-point value is a plain ``int`` holding ``value * 10**18``, so the real
number ``1.0`` is the integer ``ONE == 10**18``. The representable range is that
of a signed 256-bit integer.

Rounding
--------
``mul`` and ``div`` truncate toward zero. ``exp`` and ``sqrt`` truncate their
final result to 18 digits after working at a higher internal precision. All
operations are pure integer arithmetic and therefore bit-reproducible across
platforms.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, localcontext
from math import isqrt

from ..typing import FixedPoint

SCALE_DIGITS = 18
ONE: FixedPoint = 10**SCALE_DIGITS
HALF: FixedPoint = ONE // 2

MAX_FIXED: FixedPoint = 2**255 - 1
MIN_FIXED: FixedPoint = -(2**255)

# exp() input bounds: above overflows, below truncates to zero.
EXP_MAX_INPUT: FixedPoint = 133_084258667509499440
EXP_MIN_INPUT: FixedPoint = -41_446531673892822322

# Internal precision for transcendental functions (36 fractional digits).
_WIDE = 10**36
_LN2_WIDE = 693147180559945309417232121458176568
_DECIMAL_PREC = 100


# ---------------------------
# Exceptions
# ---------------------------


class FixedPointError(ArithmeticError):
    """Base class for fixed-point arithmetic failures."""


class FixedPointOverflowError(FixedPointError):
    """Raised when a result falls outside the signed 256-bit range."""


class FixedPointZeroDivisionError(FixedPointError, ZeroDivisionError):
    """Raised by :func:`div` on a zero divisor."""


class FixedPointDomainError(FixedPointError):
    """Raised when an input lies outside a function's domain (e.g. sqrt of a negative)."""


def _checked(x: int) -> FixedPoint:
    if x > MAX_FIXED or x < MIN_FIXED:
        raise FixedPointOverflowError(f"Fixed-point overflow: {x}")
    return x


def _trunc_div(num: int, den: int) -> int:
    # Python's // floors; fixed-point division truncates toward zero.
    q = abs(num) // abs(den)
    return q if (num >= 0) == (den > 0) else -q


# ---------------------------
# Conversions
# ---------------------------


def fixed(value: int | str | float | Decimal) -> FixedPoint:
    """Convert a real number into its fixed-point representation.

    Strings are parsed exactly; floats go through their shortest ``repr``.
    Digits beyond the 18th fractional place are truncated toward zero.

    Examples
    --------
    >>> fixed("0.2")
    200000000000000000
    >>> fixed(100) == 100 * ONE
    True
    """
    if isinstance(value, bool):
        raise TypeError("bool is not a fixed-point value")
    if isinstance(value, int):
        return _checked(value * ONE)
    try:
        dec = Decimal(repr(value)) if isinstance(value, float) else Decimal(value)
    except InvalidOperation as e:
        raise ValueError(f"Cannot convert {value!r} to fixed point") from e
    if not dec.is_finite():
        raise ValueError(f"Cannot convert non-finite {value!r} to fixed point")
    with localcontext() as ctx:
        ctx.prec = _DECIMAL_PREC
        return _checked(int(dec.scaleb(SCALE_DIGITS)))


def from_int(n: int) -> FixedPoint:
    """Whole number ``n`` as a fixed-point value."""
    return _checked(n * ONE)


def to_float(x: FixedPoint) -> float:
    """Fixed-point value as a float (display and diagnostics only)."""
    return x / ONE


def to_decimal(x: FixedPoint) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = _DECIMAL_PREC
        return Decimal(x).scaleb(-SCALE_DIGITS)


# ---------------------------
# Arithmetic
# ---------------------------


def mul(x: FixedPoint, y: FixedPoint) -> FixedPoint:
    """Fixed-point product, truncated toward zero."""
    return _checked(_trunc_div(x * y, ONE))


def div(x: FixedPoint, y: FixedPoint) -> FixedPoint:
    """Fixed-point quotient, truncated toward zero."""
    if y == 0:
        raise FixedPointZeroDivisionError("Fixed-point division by zero")
    return _checked(_trunc_div(x * ONE, y))


def powi(x: FixedPoint, n: int) -> FixedPoint:
    """``x**n`` for a non-negative integer exponent by repeated multiplication."""
    if n < 0:
        raise FixedPointDomainError("powi requires a non-negative exponent")
    out = ONE
    for _ in range(n):
        out = mul(out, x)
    return out


def sqrt(x: FixedPoint) -> FixedPoint:
    """Square root, rounded down."""
    if x < 0:
        raise FixedPointDomainError(f"sqrt of negative value {x}")
    return isqrt(x * ONE)


def _exp_wide(x_wide: int) -> int:
    """exp of a non-negative value at 36-digit precision.

    Range reduction ``x = k ln2 + r`` with ``0 <= r < ln2``, then a Taylor series
    for ``exp(r)`` summed until the next term truncates to zero.
    """
    k, r = divmod(x_wide, _LN2_WIDE)
    total = _WIDE
    term = _WIDE
    n = 1
    while term:
        term = term * r // (n * _WIDE)
        total += term
        n += 1
    return total << k


def exp(x: FixedPoint) -> FixedPoint:
    """Natural exponential ``e**x``."""
    if x > EXP_MAX_INPUT:
        raise FixedPointOverflowError(f"exp input too large: {x}")
    if x < EXP_MIN_INPUT:
        return 0
    if x >= 0:
        return _checked(_exp_wide(x * ONE) // ONE)
    return _WIDE * ONE // _exp_wide(-x * ONE)
