from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pandas as pd

from ..config import DEFAULT_TREE_CONFIG, TreeConfig
from ..numerics.fixed_point import to_float
from ..pricers.tree import binom_price
from ..types import OptionParams, OptionType


def _steps_grid(n_steps: int | Sequence[int], config: TreeConfig) -> np.ndarray:
    # Allow convenience: pass an int to mean "max steps" and use 1..max_n.
    if isinstance(n_steps, (int, np.integer)):
        max_n = int(n_steps)
        if max_n <= 0:
            raise ValueError("n_steps must be a positive integer")
        vals = np.arange(1, max_n + 1, dtype=int)
    else:
        vals = np.asarray(list(n_steps), dtype=int)
        if vals.size == 0:
            raise ValueError("n_steps must be non-empty")
        if np.any(vals <= 0):
            raise ValueError("n_steps must be positive integers")
        # Sort + unique for stable tables
        vals = np.unique(vals)
    if vals[-1] > config.max_steps:
        raise ValueError(f"n_steps exceeds max_steps={config.max_steps}")
    return vals


def binom_convergence_series(
    params: OptionParams,
    n_steps: int | Sequence[int],
    *,
    kind: OptionType = OptionType.PUT,
    american: bool = True,
    config: TreeConfig = DEFAULT_TREE_CONFIG,
) -> dict[str, np.ndarray]:
    """Lattice price across step counts, with the change from the previous count.

    ``abs_change[0]`` is NaN (no previous count).
    """
    steps = _steps_grid(n_steps, config)
    prices = np.array(
        [
            to_float(
                binom_price(params, kind, int(n), american=american, config=config)
            )
            for n in steps
        ],
        dtype=float,
    )
    abs_change = np.full(prices.shape, np.nan)
    abs_change[1:] = np.abs(np.diff(prices))

    return {
        "n_steps": steps,
        "price": prices,
        "abs_change": abs_change,
    }


def convergence_table(
    params: OptionParams,
    n_steps: Sequence[int] = (8, 16, 32, 64),
    *,
    kind: OptionType = OptionType.PUT,
    config: TreeConfig = DEFAULT_TREE_CONFIG,
) -> pd.DataFrame:
    """American and European lattice prices plus the early-exercise premium per step count."""
    american = binom_convergence_series(
        params, n_steps, kind=kind, american=True, config=config
    )
    european = binom_convergence_series(
        params, n_steps, kind=kind, american=False, config=config
    )
    df = pd.DataFrame(
        {
            "steps": american["n_steps"],
            "american": american["price"],
            "european": european["price"],
            "abs_change": american["abs_change"],
        }
    )
    df["premium"] = df["american"] - df["european"]
    return df.set_index("steps")


def is_convergent(
    params: OptionParams,
    n_steps: Sequence[int] = (8, 16, 32),
    *,
    kind: OptionType = OptionType.PUT,
    tol: float = 0.05,
    config: TreeConfig = DEFAULT_TREE_CONFIG,
) -> bool:
    """True if successive price changes never grow by more than ``tol``."""
    changes = binom_convergence_series(params, n_steps, kind=kind, config=config)[
        "abs_change"
    ][1:]
    return bool(np.all(changes[1:] <= changes[:-1] + tol))
