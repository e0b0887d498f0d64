# qslp/calculator.py
# Tiered QSLP match: loan payments credited as if they were 401(k) deferrals.
from __future__ import annotations
import logging

from .schema import MatchInput, MatchBreakdown, MatchResult
from .generic import round_whole, non_negative
from .limits import contribution_limit, clamp_age
from .projection import thirty_year_projection
from .rules import resolve_rule, REGISTRY

logger = logging.getLogger(__name__)


def compute_breakdown(inp: MatchInput) -> MatchBreakdown:
    """
    Run the tier formula at full precision. Never raises: negative money
    amounts are treated as 0, age is clamped to the form's domain (a missing
    age takes the form default) and an unknown rule falls back to the tiered
    3%/5% schedule.
    """
    salary = non_negative(inp.annual_salary)
    loan_monthly = non_negative(inp.monthly_loan_payment)
    k401_monthly = non_negative(inp.current_401k_monthly_contribution)
    age = clamp_age(inp.age)

    cap = contribution_limit(age)
    remaining_room = cap - k401_monthly * 12

    rule = resolve_rule(inp.employer_match_rule)
    sched = REGISTRY[rule]

    tier1_limit = salary * sched.tier1_threshold
    tier2_limit = salary * sched.tier2_threshold
    annual_loan = loan_monthly * 12

    tier1 = tier2 = excess = span = 0.0
    if annual_loan > 0:
        tier1 = min(annual_loan, tier1_limit) * sched.tier1_rate

        if sched.tier2_rate > 0 and annual_loan > tier1_limit:
            excess = annual_loan - tier1_limit
            span = tier2_limit - tier1_limit
            eligible = min(excess, span)
            if eligible > 0:
                tier2 = eligible * sched.tier2_rate

    raw = tier1 + tier2
    # statutory cap wins over the formula
    final = max(0.0, min(raw, remaining_room))

    actual_t1 = min(tier1, final)
    actual_t2 = min(tier2, max(0.0, final - actual_t1))

    logger.debug("rule=%s cap=%s raw=%.2f final=%.2f", rule.value, cap, raw, final)

    return MatchBreakdown(
        contribution_limit=cap,
        remaining_room=remaining_room,
        annual_loan_payments=annual_loan,
        tier1_limit=tier1_limit,
        tier2_limit=tier2_limit,
        tier1_match=tier1,
        tier2_match=tier2,
        excess_payments=excess,
        tier2_span=span,
        raw_match=raw,
        final_match=final,
        actual_tier1=actual_t1,
        actual_tier2=actual_t2,
    )


def compute(inp: MatchInput) -> MatchResult:
    """
    Single-shot, side-effect free. Figures are rounded only here, at output.
    """
    b = compute_breakdown(inp)
    cap = b.contribution_limit
    final = b.final_match
    k401_annual = non_negative(inp.current_401k_monthly_contribution) * 12

    monthly = round_whole(final / 12)
    usage = round_whole(final / cap * 100) if final > 0 else 0

    result = MatchResult(
        monthly_match=monthly,
        annual_match=round_whole(final),
        tier1_match=round_whole(b.actual_tier1),
        tier2_match=round_whole(b.actual_tier2),
        contribution_limit=cap,
        contribution_usage_percent=usage,
        remaining_capacity=max(0.0, cap - k401_annual - final),
        # Not reduced by the cap clamp above; kept as-is (see DESIGN.md).
        total_loan_payments_used=round_whole(min(b.annual_loan_payments, b.tier2_limit)),
        # compounds the rounded monthly figure the user sees
        thirty_year_projection=thirty_year_projection(monthly, clamp_age(inp.age)),
    )
    logger.debug("Match result: %s", result)
    return result
