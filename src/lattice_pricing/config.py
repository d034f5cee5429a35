from __future__ import annotations

from dataclasses import dataclass

# Induction cost is quadratic in steps; this is the hard resource ceiling.
STEP_CEILING = 64


@dataclass(frozen=True, slots=True)
class TreeConfig:
    default_steps: int = 32
    max_steps: int = STEP_CEILING

    def __post_init__(self) -> None:
        if not 1 <= self.max_steps <= STEP_CEILING:
            raise ValueError(f"max_steps must be in [1, {STEP_CEILING}]")
        if not 1 <= self.default_steps <= self.max_steps:
            raise ValueError("default_steps must be in [1, max_steps]")


DEFAULT_TREE_CONFIG = TreeConfig()
