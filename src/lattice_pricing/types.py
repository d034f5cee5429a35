from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import TypeAlias

from .numerics.fixed_point import ONE, fixed, mul
from .typing import BoundaryValue, FixedPoint

RealLike: TypeAlias = int | str | float | Decimal


class OptionType(str, Enum):
    """Option contract type.

    An enumeration of plain-vanilla option types.

    Attributes
    ----------
    CALL : str
        Call option ("call").
    PUT : str
        Put option ("put").
    """

    CALL = "call"
    PUT = "put"

    @property
    def is_call(self) -> bool:
        return self is OptionType.CALL

    @classmethod
    def from_is_call(cls, is_call: bool) -> OptionType:
        return cls.CALL if is_call else cls.PUT


@dataclass(frozen=True, slots=True)
class OptionParams:
    """Inputs for one American/European option pricing call.

    All fields are fixed-point scalars (ints scaled by ``10**18``).

    Parameters
    ----------
    spot : int
        Current spot price of the underlying, typically denoted :math:`S`.
    strike : int
        Strike price of the option, typically denoted :math:`K`.
    volatility : int
        Annualized volatility, typically denoted :math:`\\sigma`.
    risk_free_rate : int
        Continuously-compounded risk-free rate, typically denoted :math:`r`.
    time_to_expiry : int
        Time to expiry in years, typically denoted :math:`T`.

    Notes
    -----
    Construction performs no validation; the pricing entry points validate
    through :func:`lattice_pricing.validation.validate_inputs` before any
    arithmetic so that the offending field is reported precisely.
    """

    spot: FixedPoint
    strike: FixedPoint
    volatility: FixedPoint
    risk_free_rate: FixedPoint
    time_to_expiry: FixedPoint

    @classmethod
    def from_real(
        cls,
        *,
        spot: RealLike,
        strike: RealLike,
        volatility: RealLike,
        risk_free_rate: RealLike,
        time_to_expiry: RealLike,
    ) -> OptionParams:
        """Build params from real numbers (``100``, ``"0.2"``, ``0.05`` ...)."""
        return cls(
            spot=fixed(spot),
            strike=fixed(strike),
            volatility=fixed(volatility),
            risk_free_rate=fixed(risk_free_rate),
            time_to_expiry=fixed(time_to_expiry),
        )

    @property
    def S(self) -> FixedPoint:
        return self.spot

    @property
    def K(self) -> FixedPoint:
        return self.strike

    @property
    def sigma(self) -> FixedPoint:
        return self.volatility

    @property
    def r(self) -> FixedPoint:
        return self.risk_free_rate

    @property
    def T(self) -> FixedPoint:
        return self.time_to_expiry


@dataclass(frozen=True, slots=True)
class LatticeConfig:
    """CRR lattice parameters derived from :class:`OptionParams` and a step count.

    Attributes
    ----------
    u : int
        Up factor, ``exp(sigma * sqrt(dt))``.
    d : int
        Down factor, ``1 / u``.
    p : int
        Risk-neutral up-probability.
    dt : int
        Time increment per step, ``T / steps``.
    steps : int
        Number of time steps (plain int, not fixed point).
    growth : int
        One-step growth factor ``exp(r * dt)``.
    discount : int
        One-step discount factor ``exp(-r * dt)``.
    """

    u: FixedPoint
    d: FixedPoint
    p: FixedPoint
    dt: FixedPoint
    steps: int
    growth: FixedPoint
    discount: FixedPoint

    @property
    def q(self) -> FixedPoint:
        """Down-move probability ``1 - p``."""
        return ONE - self.p

    @property
    def recombination_error(self) -> FixedPoint:
        """``u * d - 1``; zero up to fixed-point rounding."""
        return mul(self.u, self.d) - ONE


@dataclass(frozen=True, slots=True)
class OptionResult:
    """Price and first-order analytics for one American option."""

    price: FixedPoint
    delta: FixedPoint
    early_exercise_premium: FixedPoint


@dataclass(frozen=True, slots=True)
class InductionResult:
    """Output of one backward-induction pass.

    ``value_up``/``value_down`` are the option values at the two nodes after one
    step (used for delta). ``boundary`` has one entry per non-terminal step and
    is empty for European induction.
    """

    price: FixedPoint
    value_up: FixedPoint
    value_down: FixedPoint
    boundary: tuple[BoundaryValue, ...] = ()
    exercised_nodes: int = 0
