from __future__ import annotations

from .config import STEP_CEILING
from .typing import FixedPoint


class PricingError(ValueError):
    """Base class for every input or lattice error raised by the pricers.

    All errors are detected before (or, for :class:`InvalidProbabilityError`,
    right after) lattice construction and terminate the call; there is no
    partial result.
    """


class InvalidParameterError(PricingError):
    """Raised when an option parameter is outside its domain.

    Attributes
    ----------
    field : str
        Name of the offending :class:`~lattice_pricing.types.OptionParams` field.
    value : int
        The offending fixed-point value.
    """

    field: str = ""
    requirement: str = ""

    def __init__(self, value: FixedPoint) -> None:
        self.value = value
        super().__init__(f"{self.field} must be {self.requirement}, got {value}")

    def __reduce__(self):
        return (type(self), (self.value,))


class InvalidSpotPriceError(InvalidParameterError):
    field = "spot"
    requirement = "> 0"


class InvalidStrikePriceError(InvalidParameterError):
    field = "strike"
    requirement = "> 0"


class InvalidVolatilityError(InvalidParameterError):
    field = "volatility"
    requirement = "> 0"


class InvalidTimeToExpiryError(InvalidParameterError):
    field = "time_to_expiry"
    requirement = "> 0"


class InvalidRiskFreeRateError(InvalidParameterError):
    field = "risk_free_rate"
    requirement = ">= 0"


class InvalidStepsError(PricingError):
    """Raised when the step count is zero or above the configured maximum."""

    def __init__(self, steps: int, max_steps: int = STEP_CEILING) -> None:
        self.steps = steps
        self.max_steps = max_steps
        super().__init__(f"steps must be in [1, {max_steps}], got {steps}")

    def __reduce__(self):
        return (type(self), (self.steps, self.max_steps))


class InvalidProbabilityError(PricingError):
    """Raised when the risk-neutral probability falls outside ``(0, 1)``.

    Signals a parameter combination that is not arbitrage-free at the chosen
    step resolution (``exp(r*dt)`` outside ``[d, u]``). ``probability`` is
    ``None`` when the lattice is degenerate (``u <= d``) and ``p`` is undefined.
    """

    def __init__(self, probability: FixedPoint | None) -> None:
        self.probability = probability
        if probability is None:
            msg = "Risk-neutral probability undefined: up factor does not exceed down factor"
        else:
            msg = (
                f"Risk-neutral probability out of bounds: p={probability}. "
                "Try increasing steps or check rate/volatility."
            )
        super().__init__(msg)

    def __reduce__(self):
        return (type(self), (self.probability,))
