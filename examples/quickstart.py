from __future__ import annotations


def main() -> None:
    from lattice_pricing import (
        OptionParams,
        OptionType,
        binom_price,
        early_exercise_boundary,
        price_european,
        price_put_with_steps,
        to_float,
    )

    p = OptionParams.from_real(
        spot=80, strike=100, volatility="0.20", risk_free_rate="0.05", time_to_expiry=1
    )

    res = price_put_with_steps(p, 16)
    print("American put:", to_float(res.price))
    print("Delta:", to_float(res.delta))
    print("Early-exercise premium:", to_float(res.early_exercise_premium))
    print("European put:", to_float(price_european(p, False, 16)))
    print("CRR call (32 steps):", to_float(binom_price(p, OptionType.CALL)))

    bnd = early_exercise_boundary(p, False, 8)
    print("Boundary:", [None if b is None else round(to_float(b), 4) for b in bnd])


if __name__ == "__main__":
    main()
