"""Price an American option on the fixed-point CRR lattice from the command line.

Run from the repository root:

    PYTHONPATH=src python scripts/price_american.py --kind put --spot 80 --steps 16
    PYTHONPATH=src python scripts/price_american.py --kind call --boundary

Prints price, delta and early-exercise premium; ``--boundary`` adds the
per-step exercise boundary and ``--table`` a convergence table over 8/16/32/64
steps.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from lattice_pricing import (
    OptionParams,
    OptionType,
    early_exercise_boundary,
    price_call_with_steps,
    price_put_with_steps,
    to_float,
)
from lattice_pricing.diagnostics.convergence import convergence_table
from lattice_pricing.numerics import FixedPointError


def main(argv: Sequence[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    ap.add_argument("--kind", choices=[k.value for k in OptionType], default="put")
    ap.add_argument("--spot", default="100")
    ap.add_argument("--strike", default="100")
    ap.add_argument("--vol", default="0.20")
    ap.add_argument("--rate", default="0.05")
    ap.add_argument("--expiry", default="1.0")
    ap.add_argument("--steps", type=int, default=32)
    ap.add_argument("--boundary", action="store_true")
    ap.add_argument("--table", action="store_true")
    args = ap.parse_args(argv)

    kind = OptionType(args.kind)
    pricer = price_call_with_steps if kind.is_call else price_put_with_steps

    try:
        params = OptionParams.from_real(
            spot=args.spot,
            strike=args.strike,
            volatility=args.vol,
            risk_free_rate=args.rate,
            time_to_expiry=args.expiry,
        )
        res = pricer(params, args.steps)
    except (ValueError, FixedPointError) as e:
        # PricingError is a ValueError; so are unparseable numbers
        print(f"error: {e}")
        return 2

    print(f"American {kind.value} ({args.steps} steps)")
    print(f"{'price':>10} {to_float(res.price):14.10f}")
    print(f"{'delta':>10} {to_float(res.delta):14.10f}")
    print(f"{'premium':>10} {to_float(res.early_exercise_premium):14.10f}")

    if args.boundary:
        print(f"\n{'step':>6} {'boundary':>14}")
        bnd = early_exercise_boundary(params, kind.is_call, args.steps)
        for i, b in enumerate(bnd):
            b_s = "-" if b is None else f"{to_float(b):14.6f}"
            print(f"{i:6d} {b_s:>14}")

    if args.table:
        print()
        print(convergence_table(params, kind=kind).to_string(float_format="%.8f"))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
