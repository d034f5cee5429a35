"""
lattice_pricing

American option pricing on a fixed-point Cox-Ross-Rubinstein lattice.

This package exposes the main user-facing functions at the top level, so you
can write, for example:

    from lattice_pricing import OptionParams, price_put

All scalars are fixed-point integers with 18 fractional digits; use
:func:`fixed` / :func:`to_float` to convert.
"""

import logging

from .config import DEFAULT_TREE_CONFIG, STEP_CEILING, TreeConfig
from .diagnostics.convergence import binom_convergence_series, convergence_table
from .exceptions import (
    InvalidParameterError,
    InvalidProbabilityError,
    InvalidRiskFreeRateError,
    InvalidSpotPriceError,
    InvalidStepsError,
    InvalidStrikePriceError,
    InvalidTimeToExpiryError,
    InvalidVolatilityError,
    PricingError,
)
from .instruments.vanilla import call_payoff, exercise_value, put_payoff
from .market.parity import european_parity_residual, payoff_parity_residual
from .models.binomial_crr import build_lattice, node_price
from .numerics.fixed_point import ONE, fixed, to_float
from .pricers.tree import (
    backward_induction,
    binom_price,
    early_exercise_boundary,
    estimate_delta,
    is_early_exercise_optimal,
    price_call,
    price_call_with_steps,
    price_european,
    price_put,
    price_put_with_steps,
)
from .types import (
    InductionResult,
    LatticeConfig,
    OptionParams,
    OptionResult,
    OptionType,
)
from .validation import check_probability, find_input_error, validate_inputs

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Types
    "OptionType",
    "OptionParams",
    "LatticeConfig",
    "OptionResult",
    "InductionResult",
    # Config
    "TreeConfig",
    "DEFAULT_TREE_CONFIG",
    "STEP_CEILING",
    # Fixed point
    "ONE",
    "fixed",
    "to_float",
    # Validation
    "find_input_error",
    "validate_inputs",
    "check_probability",
    # Lattice
    "build_lattice",
    "node_price",
    "exercise_value",
    "call_payoff",
    "put_payoff",
    # Pricers
    "backward_induction",
    "is_early_exercise_optimal",
    "estimate_delta",
    "price_call",
    "price_put",
    "price_call_with_steps",
    "price_put_with_steps",
    "price_european",
    "early_exercise_boundary",
    "binom_price",
    # Parity
    "payoff_parity_residual",
    "european_parity_residual",
    # Diagnostics
    "binom_convergence_series",
    "convergence_table",
    # Errors
    "PricingError",
    "InvalidParameterError",
    "InvalidSpotPriceError",
    "InvalidStrikePriceError",
    "InvalidVolatilityError",
    "InvalidTimeToExpiryError",
    "InvalidRiskFreeRateError",
    "InvalidStepsError",
    "InvalidProbabilityError",
]
