from __future__ import annotations

import logging

from ..config import DEFAULT_TREE_CONFIG, TreeConfig
from ..instruments.vanilla import exercise_value
from ..models.binomial_crr import build_lattice, node_price
from ..numerics.fixed_point import div, mul, to_float
from ..types import (
    InductionResult,
    LatticeConfig,
    OptionParams,
    OptionResult,
    OptionType,
)
from ..typing import BoundaryValue, FixedPoint

logger = logging.getLogger(__name__)


# ----------------------------
# Node-level helpers
# ----------------------------


def is_early_exercise_optimal(
    exercise_val: FixedPoint, continuation_val: FixedPoint
) -> bool:
    """Strictly better to exercise now; ties keep the option alive."""
    return exercise_val > continuation_val


def _boundary_update(
    current: BoundaryValue, spot: FixedPoint, is_call: bool
) -> FixedPoint:
    # Puts keep the lowest exercised spot of the step, calls the highest.
    if current is None:
        return spot
    return max(current, spot) if is_call else min(current, spot)


# ----------------------------
# Backward induction
# ----------------------------


def backward_induction(
    params: OptionParams,
    lattice: LatticeConfig,
    is_call: bool,
    *,
    american: bool = True,
) -> InductionResult:
    """Backward induction over an implicit recombining CRR lattice.

    Nodes are addressed by ``(step, j)`` where ``j`` counts down moves, so node
    ``(step, j)`` sits at ``node_price(S, u, d, step - j, j)``. Only the current
    level of option values is held; node prices are recomputed on demand.

    In American mode every non-terminal node compares the discounted
    continuation value with immediate exercise
    (:func:`is_early_exercise_optimal`) and the per-step boundary is recorded.
    European mode discounts only and returns an empty boundary.
    """
    n = lattice.steps
    S, K = params.S, params.K
    u, d, p, q = lattice.u, lattice.d, lattice.p, lattice.q
    disc = lattice.discount

    values = [
        exercise_value(node_price(S, u, d, n - j, j), K, is_call)
        for j in range(n + 1)
    ]

    boundary: list[BoundaryValue] = [None] * n
    exercised = 0
    value_up, value_down = values[0], values[1]

    for step in range(n - 1, -1, -1):
        level: list[FixedPoint] = []
        for j in range(step + 1):
            cont = mul(disc, mul(p, values[j]) + mul(q, values[j + 1]))
            if american:
                spot_j = node_price(S, u, d, step - j, j)
                ex = exercise_value(spot_j, K, is_call)
                if is_early_exercise_optimal(ex, cont):
                    level.append(ex)
                    exercised += 1
                    boundary[step] = _boundary_update(boundary[step], spot_j, is_call)
                    continue
            level.append(cont)
        values = level
        if step == 1:
            value_up, value_down = values[0], values[1]

    return InductionResult(
        price=values[0],
        value_up=value_up,
        value_down=value_down,
        boundary=tuple(boundary) if american else (),
        exercised_nodes=exercised,
    )


def estimate_delta(
    params: OptionParams,
    lattice: LatticeConfig,
    value_up: FixedPoint,
    value_down: FixedPoint,
) -> FixedPoint:
    """Finite-difference delta from the two nodes one step after the root."""
    price_up = node_price(params.spot, lattice.u, lattice.d, 1, 0)
    price_down = node_price(params.spot, lattice.u, lattice.d, 0, 1)
    return div(value_up - value_down, price_up - price_down)


# ----------------------------
# Pricing entry points
# ----------------------------


def _price_american(
    params: OptionParams, steps: int, is_call: bool, config: TreeConfig
) -> OptionResult:
    lattice = build_lattice(params, steps, config=config)
    american = backward_induction(params, lattice, is_call, american=True)
    european = backward_induction(params, lattice, is_call, american=False)
    delta = estimate_delta(params, lattice, american.value_up, american.value_down)

    result = OptionResult(
        price=american.price,
        delta=delta,
        early_exercise_premium=american.price - european.price,
    )
    logger.debug(
        "American %s: steps=%d price=%.10g delta=%.6g premium=%.6g exercised_nodes=%d",
        OptionType.from_is_call(is_call).value,
        steps,
        to_float(result.price),
        to_float(result.delta),
        to_float(result.early_exercise_premium),
        american.exercised_nodes,
    )
    return result


def price_call_with_steps(
    params: OptionParams, steps: int, *, config: TreeConfig = DEFAULT_TREE_CONFIG
) -> OptionResult:
    """American call: price, delta and early-exercise premium on a ``steps`` lattice."""
    return _price_american(params, steps, True, config)


def price_put_with_steps(
    params: OptionParams, steps: int, *, config: TreeConfig = DEFAULT_TREE_CONFIG
) -> OptionResult:
    """American put: price, delta and early-exercise premium on a ``steps`` lattice."""
    return _price_american(params, steps, False, config)


def price_call(
    params: OptionParams, *, config: TreeConfig = DEFAULT_TREE_CONFIG
) -> OptionResult:
    return price_call_with_steps(params, config.default_steps, config=config)


def price_put(
    params: OptionParams, *, config: TreeConfig = DEFAULT_TREE_CONFIG
) -> OptionResult:
    return price_put_with_steps(params, config.default_steps, config=config)


def price_european(
    params: OptionParams,
    is_call: bool,
    steps: int,
    *,
    config: TreeConfig = DEFAULT_TREE_CONFIG,
) -> FixedPoint:
    """European binomial benchmark (no early exercise)."""
    lattice = build_lattice(params, steps, config=config)
    return backward_induction(params, lattice, is_call, american=False).price


def early_exercise_boundary(
    params: OptionParams,
    is_call: bool,
    steps: int,
    *,
    config: TreeConfig = DEFAULT_TREE_CONFIG,
) -> tuple[BoundaryValue, ...]:
    """Per-step exercise boundary of the American option, ``len == steps``.

    Entry ``i`` belongs to time step ``i``. It is the lowest (put) or highest
    (call) node spot at that step where immediate exercise strictly beats
    continuation, or ``None`` if no node at that step is exercised.
    """
    lattice = build_lattice(params, steps, config=config)
    return backward_induction(params, lattice, is_call, american=True).boundary


def binom_price(
    params: OptionParams,
    kind: OptionType | str,
    steps: int | None = None,
    *,
    american: bool = True,
    config: TreeConfig = DEFAULT_TREE_CONFIG,
) -> FixedPoint:
    """
    Generic binomial pricing dispatched on ``kind`` (CALL/PUT or "call"/"put").

    ``steps=None`` uses ``config.default_steps``.
    """
    kind = OptionType(kind)
    n = config.default_steps if steps is None else steps
    lattice = build_lattice(params, n, config=config)
    return backward_induction(params, lattice, kind.is_call, american=american).price
