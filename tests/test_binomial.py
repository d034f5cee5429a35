from __future__ import annotations

import logging

import pytest

from lattice_pricing import (
    ONE,
    InvalidProbabilityError,
    InvalidSpotPriceError,
    InvalidStepsError,
    OptionType,
    TreeConfig,
    backward_induction,
    binom_price,
    build_lattice,
    early_exercise_boundary,
    exercise_value,
    fixed,
    is_early_exercise_optimal,
    node_price,
    price_call,
    price_call_with_steps,
    price_european,
    price_put,
    price_put_with_steps,
    to_float,
)
from lattice_pricing.numerics import FixedPointOverflowError
from lattice_pricing.pricers.tree import _boundary_update

SPOTS = ["80", "100", "120"]
STEPS = [1, 2, 8, 16, 33, 64]


def _floats(base_params: dict, **overrides) -> dict:
    v = {**base_params, **overrides}
    return {k: float(x) for k, x in v.items()}


# ----------------------------
# Exercise value / decision rule
# ----------------------------


def test_exercise_value_examples():
    assert exercise_value(fixed(110), fixed(100), True) == fixed(10)
    assert exercise_value(fixed(90), fixed(100), True) == 0
    assert exercise_value(fixed(90), fixed(100), False) == fixed(10)
    assert exercise_value(fixed(110), fixed(100), False) == 0


def test_exercise_value_zero_at_the_money():
    assert exercise_value(fixed(100), fixed(100), True) == 0
    assert exercise_value(fixed(100), fixed(100), False) == 0


def test_ties_prefer_continuation():
    x = fixed("3.5")
    assert is_early_exercise_optimal(x, x) is False
    assert is_early_exercise_optimal(x + 1, x) is True
    assert is_early_exercise_optimal(x, x + 1) is False


def test_all_zero_lattice_never_exercises(make_params):
    # every node is out of the money: exercise == continuation == 0 everywhere
    params = make_params(S="1000")
    lattice = build_lattice(params, 8)
    res = backward_induction(params, lattice, False, american=True)

    assert res.price == 0
    assert res.exercised_nodes == 0
    assert res.boundary == (None,) * 8


# ----------------------------
# Entry points
# ----------------------------


def test_default_step_count_is_32(make_params):
    params = make_params()
    assert price_call(params) == price_call_with_steps(params, 32)
    assert price_put(params) == price_put_with_steps(params, 32)


def test_default_step_count_follows_config(make_params):
    params = make_params()
    cfg = TreeConfig(default_steps=12)
    assert price_put(params, config=cfg) == price_put_with_steps(params, 12)


@pytest.mark.parametrize("steps", [1, 64])
def test_step_bounds_succeed(make_params, steps):
    params = make_params()
    assert price_call_with_steps(params, steps).price > 0
    assert price_put_with_steps(params, steps).price > 0


@pytest.mark.parametrize("steps", [0, 65])
def test_step_bounds_fail(make_params, steps):
    with pytest.raises(InvalidStepsError):
        price_put_with_steps(make_params(), steps)
    with pytest.raises(InvalidStepsError):
        price_european(make_params(), True, steps)
    with pytest.raises(InvalidStepsError):
        early_exercise_boundary(make_params(), False, steps)


def test_invalid_inputs_propagate(make_params):
    with pytest.raises(InvalidSpotPriceError):
        price_call(make_params(S="-1"))
    with pytest.raises(InvalidProbabilityError):
        price_put_with_steps(make_params(r="1.0", sigma="0.01"), 1)


def test_volatility_too_large_for_exp_overflows(make_params):
    # passes validation, but sigma * sqrt(dt) = 150 is beyond exp's input range
    params = make_params(sigma="150")
    with pytest.raises(FixedPointOverflowError):
        price_call_with_steps(params, 1)
    with pytest.raises(FixedPointOverflowError):
        build_lattice(params, 1)


def test_binom_price_dispatch(make_params):
    params = make_params()
    put = price_put_with_steps(params, 16)
    assert binom_price(params, OptionType.PUT, 16) == put.price
    assert binom_price(params, "call", 16, american=False) == price_european(
        params, True, 16
    )
    assert binom_price(params, OptionType.CALL) == price_call(params).price
    with pytest.raises(ValueError):
        binom_price(params, "straddle", 16)


def test_pricing_is_deterministic(make_params):
    params = make_params(S="97.5")
    assert price_put_with_steps(params, 40) == price_put_with_steps(params, 40)


# ----------------------------
# No-arbitrage properties
# ----------------------------


@pytest.mark.parametrize("spot", SPOTS)
@pytest.mark.parametrize("steps", STEPS)
def test_american_dominates_european(make_params, spot, steps):
    params = make_params(S=spot)
    pairs = ((True, price_call_with_steps), (False, price_put_with_steps))
    for is_call, pricer in pairs:
        res = pricer(params, steps)
        eur = price_european(params, is_call, steps)
        assert res.price >= eur
        assert res.early_exercise_premium == res.price - eur
        assert res.early_exercise_premium >= 0


@pytest.mark.parametrize("spot", SPOTS)
def test_put_at_least_intrinsic(make_params, spot):
    params = make_params(S=spot)
    res = price_put_with_steps(params, 16)
    assert res.price >= exercise_value(params.spot, params.strike, False)


def test_deep_itm_put(make_params):
    res = price_put_with_steps(make_params(S="80"), 16)
    assert res.price >= fixed(20)
    assert res.early_exercise_premium > 0


@pytest.mark.parametrize("steps", [16, 32, 64])
def test_call_has_no_early_exercise_premium(make_params, steps):
    params = make_params()
    res = price_call_with_steps(params, steps)
    eur = price_european(params, True, steps)
    assert to_float(res.price) == pytest.approx(to_float(eur), rel=0.01)
    assert early_exercise_boundary(params, True, steps) == (None,) * steps


def test_call_example_sixteen_steps(make_params):
    params = make_params()
    res = price_call_with_steps(params, 16)
    assert to_float(res.price) == pytest.approx(
        to_float(price_european(params, True, 16)), rel=0.01
    )


def test_zero_rate_put_has_no_material_premium(make_params):
    params = make_params(r="0")
    res = price_put_with_steps(params, 32)
    eur = price_european(params, False, 32)
    assert to_float(res.price) == pytest.approx(to_float(eur), abs=1e-9)


def test_atm_put_value_in_expected_range(make_params):
    # American put, S=K=100, sigma=20%, r=5%, T=1 is about 6.08
    price = to_float(price_put(make_params()).price)
    assert 5.9 < price < 6.3


# ----------------------------
# Delta
# ----------------------------


@pytest.mark.parametrize("steps", [1, 2, 16, 32])
def test_delta_signs(make_params, steps):
    params = make_params()
    call = price_call_with_steps(params, steps)
    put = price_put_with_steps(params, steps)
    assert 0 < call.delta < ONE
    assert -ONE < put.delta < 0


def test_delta_matches_first_step_difference(make_params, base_params, crr_reference):
    params = make_params()
    lat = build_lattice(params, 16)
    S, u, d = 100.0, to_float(lat.u), to_float(lat.d)
    f = _floats(base_params)
    kw = {"K": f["K"], "r": f["r"], "sigma": f["sigma"], "steps": 15, "is_call": False}
    # values at the two step-1 nodes are 15-step prices from the shifted spots
    v_up = crr_reference(S=S * u, T=f["T"] - 1 / 16, **kw)
    v_dn = crr_reference(S=S * d, T=f["T"] - 1 / 16, **kw)
    expected = (v_up - v_dn) / (S * u - S * d)
    assert to_float(price_put_with_steps(params, 16).delta) == pytest.approx(
        expected, abs=1e-8
    )


# ----------------------------
# Cross-check against a float lattice
# ----------------------------


@pytest.mark.parametrize("spot", SPOTS)
@pytest.mark.parametrize("is_call", [True, False], ids=["call", "put"])
@pytest.mark.parametrize("american", [True, False], ids=["american", "european"])
def test_matches_float_reference(
    make_params, base_params, crr_reference, spot, is_call, american
):
    params = make_params(S=spot)
    steps = 24
    f = _floats(base_params, S=spot)
    expected = crr_reference(
        S=f["S"],
        K=f["K"],
        r=f["r"],
        sigma=f["sigma"],
        T=f["T"],
        steps=steps,
        is_call=is_call,
        american=american,
    )
    kind = OptionType.from_is_call(is_call)
    got = binom_price(params, kind, steps, american=american)
    assert to_float(got) == pytest.approx(expected, abs=1e-8)


# ----------------------------
# Convergence
# ----------------------------


@pytest.mark.parametrize("is_call", [True, False], ids=["call", "put"])
def test_price_changes_shrink_with_steps(make_params, is_call):
    params = make_params()
    pricer = price_call_with_steps if is_call else price_put_with_steps
    p8, p16, p32 = (to_float(pricer(params, n).price) for n in (8, 16, 32))
    assert abs(p32 - p16) <= abs(p16 - p8) + 0.05


# ----------------------------
# Early-exercise boundary
# ----------------------------


def test_boundary_length_example(make_params):
    bnd = early_exercise_boundary(make_params(S="80"), False, 8)
    assert len(bnd) == 8


@pytest.mark.parametrize("steps", [1, 5, 16, 64])
def test_boundary_length_equals_steps(make_params, steps):
    assert len(early_exercise_boundary(make_params(), False, steps)) == steps
    assert len(early_exercise_boundary(make_params(), True, steps)) == steps


def test_put_boundary_lies_in_the_money(make_params):
    params = make_params(S="80")
    bnd = early_exercise_boundary(params, False, 16)
    assert bnd[-1] is not None
    for b in bnd:
        if b is not None:
            assert 0 < b < params.strike


def test_put_boundary_is_lowest_exercised_spot(make_params):
    params = make_params(S="80")
    lat = build_lattice(params, 16)
    bnd = early_exercise_boundary(params, False, 16)

    # several nodes are exercised one step before expiry; the lowest one is kept
    assert bnd[-1] < node_price(params.S, lat.u, lat.d, 1, 14)
    for step, b in enumerate(bnd):
        if b is not None:
            assert b == node_price(params.S, lat.u, lat.d, 0, step)


@pytest.mark.parametrize(
    "is_call, expected",
    [(True, fixed(120)), (False, fixed(80))],
    ids=["call-highest", "put-lowest"],
)
def test_boundary_update_keeps_extreme_spot(is_call, expected):
    b = None
    for spot in (fixed(100), fixed(80), fixed(120), fixed(90)):
        b = _boundary_update(b, spot, is_call)
    assert b == expected


def test_boundary_update_starts_from_first_spot():
    assert _boundary_update(None, fixed(95), True) == fixed(95)
    assert _boundary_update(None, fixed(95), False) == fixed(95)


def test_european_induction_has_no_boundary(make_params):
    params = make_params(S="80")
    res = backward_induction(params, build_lattice(params, 8), False, american=False)
    assert res.boundary == ()
    assert res.exercised_nodes == 0


def test_pricing_logs_summary_at_debug(make_params, caplog):
    caplog.set_level(logging.DEBUG, logger="lattice_pricing")
    price_put_with_steps(make_params(), 4)
    assert "CRR lattice: steps=4" in caplog.text
    assert "American put: steps=4" in caplog.text
