"""lattice_pricing.instruments

Payoffs ("what is being priced"), independent of the lattice that prices them.
"""

from .vanilla import call_payoff, exercise_value, put_payoff

__all__ = [
    "call_payoff",
    "put_payoff",
    "exercise_value",
]
