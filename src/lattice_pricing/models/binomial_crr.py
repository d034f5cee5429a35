from __future__ import annotations

import logging

from ..config import DEFAULT_TREE_CONFIG, TreeConfig
from ..exceptions import InvalidProbabilityError
from ..numerics.fixed_point import ONE, div, exp, from_int, mul, sqrt, to_float
from ..types import LatticeConfig, OptionParams
from ..typing import FixedPoint
from ..validation import check_probability, validate_inputs

logger = logging.getLogger(__name__)


def build_lattice(
    params: OptionParams,
    steps: int,
    *,
    config: TreeConfig = DEFAULT_TREE_CONFIG,
) -> LatticeConfig:
    """Cox-Ross-Rubinstein lattice parameters in fixed point.

    ``dt = T / steps``, ``u = exp(sigma * sqrt(dt))``, ``d = 1 / u`` and
    ``p = (exp(r * dt) - d) / (u - d)``. With ``d = 1 / u`` an up move followed
    by a down move returns to the starting price up to rounding, so the tree
    recombines into ``steps + 1`` nodes per level.

    Raises
    ------
    PricingError
        Any input error from :func:`~lattice_pricing.validation.validate_inputs`.
    InvalidProbabilityError
        If the derived ``p`` is not strictly inside ``(0, 1)``.
    FixedPointOverflowError
        If ``sigma * sqrt(dt)`` is too large for ``exp``.
    """
    validate_inputs(params, steps, config=config)

    dt = div(params.time_to_expiry, from_int(steps))
    u = exp(mul(params.volatility, sqrt(dt)))
    d = div(ONE, u)
    if u <= d:
        raise InvalidProbabilityError(None)

    r_dt = mul(params.risk_free_rate, dt)
    growth = exp(r_dt)
    p = div(growth - d, u - d)
    check_probability(p)

    lattice = LatticeConfig(
        u=u, d=d, p=p, dt=dt, steps=steps, growth=growth, discount=exp(-r_dt)
    )
    logger.debug(
        "CRR lattice: steps=%d dt=%.6g u=%.10g d=%.10g p=%.10g",
        steps,
        to_float(dt),
        to_float(u),
        to_float(d),
        to_float(p),
    )
    return lattice


def node_price(
    spot: FixedPoint,
    u: FixedPoint,
    d: FixedPoint,
    up_moves: int,
    down_moves: int,
) -> FixedPoint:
    """Spot price at the node reached by ``up_moves`` ups and ``down_moves`` downs.

    Evaluated by repeated multiplication so integer exponents carry no
    transcendental rounding; ``node_price(S, u, d, 0, 0) == S`` exactly.
    """
    if up_moves < 0 or down_moves < 0:
        raise ValueError("Move counts must be non-negative")
    price = spot
    for _ in range(up_moves):
        price = mul(price, u)
    for _ in range(down_moves):
        price = mul(price, d)
    return price
