from __future__ import annotations

from ..config import DEFAULT_TREE_CONFIG, TreeConfig
from ..instruments.vanilla import call_payoff, put_payoff
from ..models.binomial_crr import build_lattice
from ..numerics.fixed_point import mul, powi
from ..pricers.tree import backward_induction
from ..types import LatticeConfig, OptionParams
from ..typing import FixedPoint


def payoff_parity_residual(spot: FixedPoint, strike: FixedPoint) -> FixedPoint:
    """
    Residual = (call payoff - put payoff) - (S - K) at expiry.
    Zero for every spot and strike; integer arithmetic keeps it exact.
    """
    return (call_payoff(spot, strike) - put_payoff(spot, strike)) - (spot - strike)


def forward_discounted(params: OptionParams, lattice: LatticeConfig) -> FixedPoint:
    """S - K * disc**steps (the RHS of put-call parity on the lattice)."""
    return params.S - mul(params.K, powi(lattice.discount, lattice.steps))


def european_parity_residual(
    params: OptionParams,
    steps: int,
    *,
    config: TreeConfig = DEFAULT_TREE_CONFIG,
) -> FixedPoint:
    """
    Residual = (C - P) - (S - K * disc**steps) for European lattice prices.
    Should be ~0 up to fixed-point rounding.
    """
    lattice = build_lattice(params, steps, config=config)
    call = backward_induction(params, lattice, True, american=False).price
    put = backward_induction(params, lattice, False, american=False).price
    return (call - put) - forward_discounted(params, lattice)
