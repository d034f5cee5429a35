"""Vanilla (call/put) payoffs on fixed-point prices.

- :func:`call_payoff` / :func:`put_payoff` : intrinsic value at a spot
- :func:`exercise_value` : boolean-dispatched intrinsic value used by the lattice
"""

from __future__ import annotations

from ..typing import FixedPoint


def call_payoff(spot: FixedPoint, K: FixedPoint) -> FixedPoint:
    return max(spot - K, 0)


def put_payoff(spot: FixedPoint, K: FixedPoint) -> FixedPoint:
    return max(K - spot, 0)


def exercise_value(spot: FixedPoint, strike: FixedPoint, is_call: bool) -> FixedPoint:
    """Intrinsic value of a call (``is_call``) or put at ``spot``."""
    if is_call:
        return call_payoff(spot, strike)
    return put_payoff(spot, strike)
