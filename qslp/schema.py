# qslp/schema.py
from dataclasses import dataclass


@dataclass(frozen=True)
class MatchInput:
    annual_salary: float
    monthly_loan_payment: float
    current_401k_monthly_contribution: float
    age: int
    employer_match_rule: str


@dataclass(frozen=True)
class MatchBreakdown:
    """
    Unrounded intermediate figures of one calculation.
    Useful for showing the full working on the results page.
    """
    contribution_limit: int
    remaining_room: float
    annual_loan_payments: float
    tier1_limit: float
    tier2_limit: float
    tier1_match: float
    tier2_match: float
    excess_payments: float
    tier2_span: float
    raw_match: float
    final_match: float
    actual_tier1: float
    actual_tier2: float


@dataclass(frozen=True)
class MatchResult:
    monthly_match: int
    annual_match: int
    tier1_match: int
    tier2_match: int
    contribution_limit: int
    contribution_usage_percent: int
    remaining_capacity: float
    total_loan_payments_used: int
    thirty_year_projection: int

    @property
    def contribution_usage(self) -> float:
        # fraction form for progress bars
        return self.contribution_usage_percent / 100.0
