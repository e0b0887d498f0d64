"""Tests for the tiered QSLP match calculation."""

from __future__ import annotations

import pytest

from qslp.calculator import compute, compute_breakdown
from qslp.schema import MatchInput


def _inp(salary=75_000, loan=500, k401=0, age=25, rule="tiered-3-5"):
    return MatchInput(
        annual_salary=salary,
        monthly_loan_payment=loan,
        current_401k_monthly_contribution=k401,
        age=age,
        employer_match_rule=rule,
    )


def test_tiered_scenario_breakdown():
    b = compute_breakdown(_inp())
    assert b.tier1_limit == pytest.approx(2250)
    assert b.annual_loan_payments == 6000
    assert b.tier1_match == pytest.approx(2250)
    assert b.excess_payments == pytest.approx(3750)
    assert b.tier2_limit == pytest.approx(3750)
    assert b.tier2_span == pytest.approx(1500)
    assert b.tier2_match == pytest.approx(750)
    assert b.raw_match == pytest.approx(3000)
    assert b.contribution_limit == 23_500
    assert b.final_match == pytest.approx(3000)


def test_tiered_scenario_result():
    r = compute(_inp())
    assert r.monthly_match == 250
    assert r.annual_match == 3000
    assert r.tier1_match == 2250
    assert r.tier2_match == 750
    assert r.contribution_usage_percent == 13  # 3000 / 23500
    assert r.remaining_capacity == pytest.approx(20_500)
    assert r.total_loan_payments_used == 3750


def test_full_to_5_over_50():
    r = compute(_inp(salary=60_000, loan=1000, age=55, rule="full-to-5"))
    b = compute_breakdown(_inp(salary=60_000, loan=1000, age=55, rule="full-to-5"))
    assert r.contribution_limit == 31_000
    assert b.tier1_limit == pytest.approx(3000)
    assert b.annual_loan_payments == 12_000
    assert r.tier1_match == 3000
    assert r.tier2_match == 0
    assert r.annual_match == 3000
    assert r.monthly_match == 250


def test_half_to_6():
    r = compute(_inp(salary=100_000, loan=1000, rule="half-to-6"))
    # min(12000, 6000) * 0.5
    assert r.annual_match == 3000
    assert r.tier2_match == 0
    assert r.total_loan_payments_used == 6000


@pytest.mark.parametrize("rule", ["full-to-5", "half-to-6", "tiered-3-5", "custom"])
def test_zero_loan_payment_means_no_match(rule):
    r = compute(_inp(loan=0, rule=rule))
    assert r.monthly_match == 0
    assert r.annual_match == 0
    assert r.tier1_match == 0
    assert r.tier2_match == 0
    assert r.contribution_usage_percent == 0
    assert r.thirty_year_projection == 0


def test_custom_and_unknown_rules_use_tiered_formula():
    base = compute(_inp(rule="tiered-3-5"))
    assert compute(_inp(rule="custom")) == base
    assert compute(_inp(rule="Something HR made up")) == base
    assert compute(_inp(rule="")) == base


def test_ui_label_accepted_as_rule():
    r = compute(_inp(salary=60_000, loan=1000, rule="100% match up to 5% of salary"))
    assert r.annual_match == 3000
    assert r.tier2_match == 0


def test_contribution_cap_clamps_match():
    # room = 23500 - 1900 * 12 = 700
    b = compute_breakdown(_inp(k401=1900))
    r = compute(_inp(k401=1900))
    assert b.remaining_room == pytest.approx(700)
    assert r.annual_match == 700
    assert r.tier1_match == 700
    assert r.tier2_match == 0
    assert r.remaining_capacity == 0
    # reported independent of the clamp
    assert r.total_loan_payments_used == 3750


def test_over_contributing_yields_zero_match():
    r = compute(_inp(k401=2500))
    assert r.annual_match == 0
    assert r.monthly_match == 0
    assert r.remaining_capacity == 0


def test_tier2_reclipped_when_cap_falls_inside_tier2():
    # room = 23500 - 1700 * 12 = 3100
    b = compute_breakdown(_inp(salary=200_000, loan=2000, k401=1700))
    # tier1 = 6000, tier2 = min(24000 - 6000, 4000) * 0.5 = 2000, raw = 8000
    assert b.raw_match == pytest.approx(8000)
    assert b.final_match == pytest.approx(3100)
    assert b.actual_tier1 == pytest.approx(3100)
    assert b.actual_tier2 == 0


def test_cap_depends_on_age():
    assert compute(_inp(age=49)).contribution_limit == 23_500
    assert compute(_inp(age=50)).contribution_limit == 31_000
    assert compute(_inp(age=70)).contribution_limit == 31_000


def test_projection_zero_at_or_after_65():
    assert compute(_inp(age=65)).thirty_year_projection == 0
    assert compute(_inp(age=70)).thirty_year_projection == 0
    assert compute(_inp(age=64)).thirty_year_projection > 0


def test_projection_uses_rounded_monthly_match():
    r = compute(_inp(age=35))
    r_ = 0.07 / 12
    expected = 250 * (((1 + r_) ** 360 - 1) / r_)
    assert r.thirty_year_projection == int(expected + 0.5)


def test_out_of_range_inputs_are_clamped_not_rejected():
    r = compute(_inp(salary=-5, loan=-100, k401=-10, age=5))
    assert r.annual_match == 0
    assert r.contribution_limit == 23_500
    assert r.remaining_capacity == pytest.approx(23_500)


def test_missing_age_uses_form_default():
    r = compute(_inp(age=None))
    assert r == compute(_inp(age=25))
    assert r.contribution_limit == 23_500
    assert r.thirty_year_projection > 0


def test_tiers_rounded_separately_stay_within_one_unit():
    # final 42.04: tier1 31.53 -> 32, tier2 10.51 -> 11, annual -> 42
    r = compute(_inp(salary=1051, loan=10_000))
    assert (r.tier1_match, r.tier2_match, r.annual_match) == (32, 11, 42)
    assert r.tier1_match + r.tier2_match <= r.annual_match + 1


def test_result_is_deterministic():
    assert compute(_inp()) == compute(_inp())


def test_monthly_rounds_half_up():
    # final 30 -> 30 / 12 = 2.5 -> 3
    r = compute(_inp(salary=1000, loan=100, rule="full-to-5"))
    assert r.annual_match == 50
    r = compute(_inp(salary=600, loan=100, rule="full-to-5"))
    assert r.annual_match == 30
    assert r.monthly_match == 3


@pytest.mark.parametrize("salary", [0, 30_000, 75_000, 250_000, 1_000_000])
@pytest.mark.parametrize("k401", [0, 500, 1900, 3000])
@pytest.mark.parametrize("age", [22, 49, 50, 64, 70])
@pytest.mark.parametrize("rule", ["full-to-5", "half-to-6", "tiered-3-5"])
def test_match_bounded_by_remaining_room(salary, k401, age, rule):
    b = compute_breakdown(_inp(salary=salary, loan=3000, k401=k401, age=age, rule=rule))
    assert b.final_match >= 0
    assert b.final_match <= max(0.0, b.contribution_limit - k401 * 12) + 1e-9
    assert b.actual_tier1 + b.actual_tier2 <= b.final_match + 1e-9
    r = compute(_inp(salary=salary, loan=3000, k401=k401, age=age, rule=rule))
    assert 0 <= r.contribution_usage_percent <= 100
    assert r.total_loan_payments_used <= 3000 * 12
    assert r.tier1_match + r.tier2_match <= r.annual_match + 1


@pytest.mark.parametrize("rule", ["full-to-5", "half-to-6", "tiered-3-5"])
def test_match_never_decreases_as_loan_payment_grows(rule):
    prev = 0.0
    for loan in range(0, 5001, 50):
        final = compute_breakdown(_inp(salary=600_000, loan=loan, k401=1000, rule=rule)).final_match
        assert final >= prev - 1e-9
        prev = final
    # cap reached: flat from here on
    assert prev == pytest.approx(23_500 - 12_000)
