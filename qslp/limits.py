# qslp/limits.py
# 2025 IRS elective-deferral limits and retirement horizon helpers.

BASE_LIMIT = 23_500
CATCH_UP_LIMIT = 31_000   # base + catch-up for 50+
CATCH_UP_AGE = 50
RETIREMENT_AGE = 65

MIN_AGE = 22
MAX_AGE = 70  # form sentinel for "65+"
DEFAULT_AGE = 25  # form default


def contribution_limit(age: int) -> int:
    """
    Annual cap on tax-advantaged contributions for the given age.
    """
    return CATCH_UP_LIMIT if int(age) >= CATCH_UP_AGE else BASE_LIMIT


def clamp_age(age) -> int:
    if age is None:
        return DEFAULT_AGE
    return max(MIN_AGE, min(MAX_AGE, int(age)))


def months_to_retirement(age: int, retirement_age: int = RETIREMENT_AGE) -> int:
    """
    Whole months left until retirement_age; 0 once reached.
    """
    return max(0, int(retirement_age) - int(age)) * 12
