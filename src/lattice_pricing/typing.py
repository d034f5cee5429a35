from __future__ import annotations

from typing import TypeAlias

# Fixed-point scalar: an int holding value * 10**18
FixedPoint: TypeAlias = int
# Early-exercise boundary entry; None where no node is exercised at that step
BoundaryValue: TypeAlias = int | None
