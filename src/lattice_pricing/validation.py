"""Input validation for the lattice pricers.

Two entry points share one set of checks:

- :func:`find_input_error` returns the first offending error *instance* (or
  ``None``) so callers can branch on the concrete error class and its
  ``field``/``value`` without a ``try`` block.
- :func:`validate_inputs` raises that same instance.

Checks run in field order (spot, strike, volatility, time to expiry, rate) and
then the step count, before any fixed-point arithmetic is attempted.
"""

from __future__ import annotations

from .config import DEFAULT_TREE_CONFIG, TreeConfig
from .exceptions import (
    InvalidProbabilityError,
    InvalidRiskFreeRateError,
    InvalidSpotPriceError,
    InvalidStepsError,
    InvalidStrikePriceError,
    InvalidTimeToExpiryError,
    InvalidVolatilityError,
    PricingError,
)
from .numerics.fixed_point import ONE
from .types import OptionParams
from .typing import FixedPoint


def find_input_error(
    params: OptionParams,
    steps: int,
    *,
    config: TreeConfig = DEFAULT_TREE_CONFIG,
) -> PricingError | None:
    if params.spot <= 0:
        return InvalidSpotPriceError(params.spot)
    if params.strike <= 0:
        return InvalidStrikePriceError(params.strike)
    if params.volatility <= 0:
        return InvalidVolatilityError(params.volatility)
    if params.time_to_expiry <= 0:
        return InvalidTimeToExpiryError(params.time_to_expiry)
    if params.risk_free_rate < 0:
        return InvalidRiskFreeRateError(params.risk_free_rate)
    if steps < 1 or steps > config.max_steps:
        return InvalidStepsError(steps, config.max_steps)
    return None


def validate_inputs(
    params: OptionParams,
    steps: int,
    *,
    config: TreeConfig = DEFAULT_TREE_CONFIG,
) -> None:
    """Raise the first :class:`PricingError` found in ``params``/``steps``."""
    err = find_input_error(params, steps, config=config)
    if err is not None:
        raise err


def check_probability(p: FixedPoint) -> None:
    """Require ``0 < p < 1`` for the risk-neutral up-probability."""
    if not 0 < p < ONE:
        raise InvalidProbabilityError(p)
