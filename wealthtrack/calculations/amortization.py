"""
Loan Amortization Calculations

Generates month-by-month repayment schedules for liabilities under
simple (flat add-on), monthly-compounded and annually-compounded interest.
"""

import math
from typing import List, Optional
from datetime import date
from dateutil.relativedelta import relativedelta

from wealthtrack.calculations.models import AmortizationRow, InterestType

# A remaining balance below this after a payment is treated as paid off
FINAL_PAYMENT_TOLERANCE = 0.1

INTEREST_TYPE_LABELS = {
    InterestType.SIMPLE: "Simple Interest",
    InterestType.COMPOUND_MONTHLY: "Compound Interest (Monthly)",
    InterestType.COMPOUND_ANNUALLY: "Compound Interest (Annually)",
}


def calculate_monthly_rate(annual_rate: float, interest_type) -> float:
    """
    Convert an annual percentage rate to the periodic monthly rate.

    Args:
        annual_rate: Annual interest rate in percent (e.g., 6 for 6%)
        interest_type: Interest convention tag; unknown tags compound monthly

    Returns:
        Monthly rate as decimal
    """
    if InterestType.parse(interest_type) == InterestType.COMPOUND_ANNUALLY:
        # Effective monthly rate: (1 + r_month)^12 = 1 + r_annual
        return (1 + annual_rate / 100) ** (1 / 12) - 1
    return annual_rate / 100 / 12


def calculate_payment(principal: float, monthly_rate: float, num_months: float) -> float:
    """
    Calculate the level monthly payment for a compounding loan.

    Args:
        principal: Loan principal amount
        monthly_rate: Periodic monthly rate as decimal
        num_months: Number of payments

    Returns:
        Monthly payment amount
    """
    if monthly_rate == 0:
        return principal / num_months

    growth = (1 + monthly_rate) ** num_months
    return principal * (monthly_rate * growth) / (growth - 1)


def _simple_schedule(
    principal: float, annual_rate: float, term_years: float, num_months: float
) -> List[AmortizationRow]:
    # Flat add-on interest spread evenly over the term
    total_interest = principal * (annual_rate / 100) * term_years
    monthly_payment = (principal + total_interest) / num_months
    monthly_principal = principal / num_months
    monthly_interest = total_interest / num_months

    schedule = []
    balance = principal
    for month in range(1, math.floor(num_months) + 1):
        balance -= monthly_principal
        if balance < 0:
            balance = 0.0

        schedule.append(
            AmortizationRow(
                month=month,
                payment=monthly_payment,
                principal=monthly_principal,
                interest=monthly_interest,
                balance=balance,
            )
        )

    return schedule


def _compound_schedule(
    principal: float, monthly_rate: float, num_months: float
) -> List[AmortizationRow]:
    monthly_payment = calculate_payment(principal, monthly_rate, num_months)

    schedule = []
    balance = principal
    for month in range(1, math.floor(num_months) + 1):
        interest = balance * monthly_rate
        principal_pmt = monthly_payment - interest

        # Absorb rounding drift into the final payment
        if balance - principal_pmt < FINAL_PAYMENT_TOLERANCE:
            principal_pmt = balance
            balance = 0.0
        else:
            balance -= principal_pmt

        if balance < 0:
            balance = 0.0

        schedule.append(
            AmortizationRow(
                month=month,
                payment=principal_pmt + interest,
                principal=principal_pmt,
                interest=interest,
                balance=balance,
            )
        )

        # Stop if balance is paid off
        if balance == 0:
            break

    return schedule


def generate_amortization_schedule(
    principal: float,
    annual_rate: float,
    term_years: float,
    interest_type=InterestType.COMPOUND_MONTHLY,
) -> List[AmortizationRow]:
    """
    Generate a full amortization schedule.

    The schedule has at most term_years * 12 rows and may end early once
    the balance reaches zero. NaN inputs are not rejected; they propagate
    into the rows.

    Args:
        principal: Outstanding balance to repay
        annual_rate: Annual interest rate in percent
        term_years: Remaining term in years (may be fractional)
        interest_type: SIMPLE, COMPOUND_MONTHLY or COMPOUND_ANNUALLY;
            anything else is treated as COMPOUND_MONTHLY

    Returns:
        List of amortization rows
    """
    if not (0 < term_years < math.inf) or principal <= 0:
        return []

    num_months = term_years * 12
    interest_type = InterestType.parse(interest_type)

    if interest_type == InterestType.SIMPLE:
        return _simple_schedule(principal, annual_rate, term_years, num_months)

    monthly_rate = calculate_monthly_rate(annual_rate, interest_type)
    return _compound_schedule(principal, monthly_rate, num_months)


def calculate_total_interest(schedule: List[AmortizationRow]) -> float:
    """Calculate total interest paid over the schedule."""
    return sum(row.interest for row in schedule)


def calculate_total_payment(schedule: List[AmortizationRow]) -> float:
    """Calculate total amount paid (principal + interest) over the schedule."""
    return sum(row.payment for row in schedule)


def calculate_payment_dates(
    schedule: List[AmortizationRow], start_date: Optional[date] = None
) -> List[date]:
    """Date each row, with the first payment falling on start_date."""
    if start_date is None:
        start_date = date.today()
    return [start_date + relativedelta(months=row.month - 1) for row in schedule]


def interest_type_label(interest_type) -> str:
    """Human-readable name for an interest convention."""
    return INTEREST_TYPE_LABELS[InterestType.parse(interest_type)]
