"""Pytest helpers for the lattice_pricing library."""

from __future__ import annotations

import numpy as np
import pytest

from lattice_pricing import OptionParams


@pytest.fixture
def base_params() -> dict:
    """A small set of canonical parameters used across tests."""
    return {
        "S": "100",
        "K": "100",
        "r": "0.05",
        "sigma": "0.20",
        "T": "1.0",
    }


@pytest.fixture
def make_params(base_params):
    """Factory fixture for constructing OptionParams from real numbers.

    Any of S, K, r, sigma, T may be overridden; the rest come from ``base_params``.
    """

    def _make(**overrides) -> OptionParams:
        v = {**base_params, **overrides}
        return OptionParams.from_real(
            spot=v["S"],
            strike=v["K"],
            volatility=v["sigma"],
            risk_free_rate=v["r"],
            time_to_expiry=v["T"],
        )

    return _make


@pytest.fixture
def crr_reference():
    """Float64 CRR pricer used as an independent check of the fixed-point lattice."""

    def _price(
        *,
        S: float,
        K: float,
        r: float,
        sigma: float,
        T: float,
        steps: int,
        is_call: bool,
        american: bool = True,
    ) -> float:
        dt = T / steps
        u = np.exp(sigma * np.sqrt(dt))
        d = 1.0 / u
        p = (np.exp(r * dt) - d) / (u - d)
        disc = np.exp(-r * dt)

        def intrinsic(spots: np.ndarray) -> np.ndarray:
            return np.maximum(spots - K, 0.0) if is_call else np.maximum(K - spots, 0.0)

        j = np.arange(steps + 1)
        vals = intrinsic(S * u ** (steps - j) * d**j)
        for step in range(steps - 1, -1, -1):
            vals = disc * (p * vals[:-1] + (1.0 - p) * vals[1:])
            if american:
                j = np.arange(step + 1)
                vals = np.maximum(vals, intrinsic(S * u ** (step - j) * d**j))
        return float(vals[0])

    return _price
