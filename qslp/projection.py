# qslp/projection.py
from __future__ import annotations
import logging

import pandas as pd

from .generic import round_whole
from .limits import months_to_retirement

logger = logging.getLogger(__name__)

ANNUAL_RETURN = 0.07
CHART_YEARS = 30


def future_value_annuity(monthly: float, months: int, annual_return: float = ANNUAL_RETURN) -> float:
    """
    Future value of an ordinary annuity: `monthly` paid at the end of each
    month for `months` months, compounding at annual_return / 12.
    Returns 0 when there is nothing to compound.
    """
    if monthly <= 0 or months <= 0:
        return 0.0
    r = annual_return / 12.0
    if r == 0:
        return monthly * months
    return monthly * (((1.0 + r) ** months - 1.0) / r)


def thirty_year_projection(monthly_match: float, age: int,
                           annual_return: float = ANNUAL_RETURN) -> int:
    """
    Value at retirement of the monthly match, rounded to whole units.
    The horizon runs to age 65, not a literal thirty years.
    """
    months = months_to_retirement(age)
    return round_whole(future_value_annuity(monthly_match, months, annual_return))


def growth_table(monthly_match: float, years: int = CHART_YEARS,
                 annual_return: float = ANNUAL_RETURN) -> pd.DataFrame:
    """
    Year-by-year portfolio value for the results chart (year 0 .. years).
    """
    rows = []
    for yr in range(int(years) + 1):
        value = future_value_annuity(monthly_match, yr * 12, annual_return)
        rows.append({"Year": yr, "Portfolio Value": round_whole(value)})
    df = pd.DataFrame(rows)
    logger.debug("Growth table: %d rows, final value %s", len(df), df["Portfolio Value"].iloc[-1])
    return df
