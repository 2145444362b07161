"""
Asset Depreciation Calculations

Projects the current value of a depreciating asset from its original cost,
purchase date and annual depreciation rate. The evaluation instant is
always passed in so results are reproducible.
"""

import math
from dataclasses import replace
from datetime import datetime, timezone
from typing import List

from wealthtrack.calculations.models import DepreciationMethod, EntryType, FinancialEntry

SECONDS_PER_YEAR = 365.25 * 24 * 60 * 60


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def calculate_years_elapsed(purchase_date: datetime, as_of: datetime) -> float:
    """
    Fractional years between purchase and the evaluation instant.

    Naive datetimes on either side are taken as UTC.
    """
    return (_as_utc(as_of) - _as_utc(purchase_date)).total_seconds() / SECONDS_PER_YEAR


def straight_line_value(original_value: float, rate: float, years: float) -> float:
    """Original value less a fixed share of cost per year."""
    annual_depreciation = original_value * (rate / 100)
    return original_value - annual_depreciation * years


def declining_balance_value(original_value: float, rate: float, years: float) -> float:
    """Continuous declining balance: original * (1 - rate)^years."""
    factor = 1 - rate / 100
    if factor < 0 and not float(years).is_integer():
        # Rates above 100% have no real-valued fractional power
        return float("nan")
    return original_value * factor ** years


def sum_of_years_digits_value(original_value: float, rate: float, years: float) -> float:
    """
    Sum-of-the-years' digits value at a fractional age.

    Useful life N is implied by the rate (20% -> 5 years). The accumulated
    fraction (t * (N + 0.5) - 0.5 * t^2) / S equals the discrete SYD sum at
    whole years and interpolates between them.
    """
    if rate <= 0:
        return original_value

    useful_life = 100 / rate
    if years >= useful_life:
        return 0.0

    digits_sum = useful_life * (useful_life + 1) / 2
    accumulated = (years * (useful_life + 0.5) - 0.5 * years ** 2) / digits_sum
    return original_value * (1 - accumulated)


def calculate_depreciation(entry: FinancialEntry, as_of: datetime) -> float:
    """
    Calculate the current value of a depreciating asset.

    Entries not opted into depreciation tracking, or missing any of the
    inputs, keep their stored value. A purchase date at or after as_of
    returns the original value.

    Args:
        entry: Asset entry
        as_of: Evaluation instant (naive values are taken as UTC)

    Returns:
        Current value rounded to whole currency units, never negative
    """
    if (
        not entry.is_depreciating
        or not entry.original_value
        or not entry.purchase_date
        or not entry.depreciation_rate
    ):
        return entry.value

    years = calculate_years_elapsed(entry.purchase_date, as_of)
    if years <= 0:
        return entry.original_value

    method = DepreciationMethod.parse(entry.depreciation_method)
    rate = entry.depreciation_rate

    if method == DepreciationMethod.SUM_OF_YEARS_DIGITS:
        value = sum_of_years_digits_value(entry.original_value, rate, years)
    elif method == DepreciationMethod.STRAIGHT_LINE:
        value = straight_line_value(entry.original_value, rate, years)
    else:
        value = declining_balance_value(entry.original_value, rate, years)

    if not math.isfinite(value):
        return value

    # Round half up to whole currency units
    return max(0, math.floor(value + 0.5))


def refresh_depreciated_values(
    entries: List[FinancialEntry], as_of: datetime
) -> List[FinancialEntry]:
    """
    Recompute the value of every depreciating asset.

    Entries whose value is unchanged are returned as the same objects;
    changed ones are copies with the new value.
    """
    refreshed = []
    for entry in entries:
        if entry.type == EntryType.ASSET and entry.is_depreciating:
            new_value = calculate_depreciation(entry, as_of)
            if new_value != entry.value:
                entry = replace(entry, value=new_value)
        refreshed.append(entry)
    return refreshed
